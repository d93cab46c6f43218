"""
Solid Renderer
==============

Fast numpy-based renderer that draws entities as solid-color circles.
Used for rgb_array rendering and image observations; needs no display.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import numpy as np

from bubble_dodge.dodge_core.config_loader import GameConfig, get_config


class SolidRenderer:
    """
    Renders the play-field as solid-color circles on a flat background.

    Features:
    - Hazards blue, edibles green, avatar orange
    - Play button drawn while in the menu
    - Red tint once the game has ended
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize renderer.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config

        self._bg_color = np.array([20, 40, 70], dtype=np.uint8)
        self._hazard_color = np.array([60, 120, 255], dtype=np.uint8)
        self._inert_hazard_color = np.array([120, 150, 200], dtype=np.uint8)
        self._edible_color = np.array([60, 220, 90], dtype=np.uint8)
        self._avatar_color = np.array([255, 160, 40], dtype=np.uint8)
        self._button_color = np.array([40, 200, 60], dtype=np.uint8)

    def render(
        self,
        render_data: Dict[str, Any],
        width: int,
        height: int
    ) -> np.ndarray:
        """
        Render the game state to an RGB array.

        Args:
            render_data: Data from DodgeGame.get_render_data().
            width: Output image width.
            height: Output image height.

        Returns:
            (height, width, 3) uint8 array.
        """
        img = np.empty((height, width, 3), dtype=np.uint8)
        img[:] = self._bg_color

        scale_x = width / render_data["board_width"]
        scale_y = height / render_data["board_height"]
        scale = min(scale_x, scale_y)

        if render_data["state"] == "menu":
            self._draw_button(img, render_data["play_button"], scale_x, scale_y)
            return img

        for edible in render_data["edibles"]:
            self._draw_entity(img, edible, scale_x, scale_y, scale, self._edible_color)

        for hazard in render_data["hazards"]:
            color = self._hazard_color if hazard.get("lethal", True) else self._inert_hazard_color
            self._draw_entity(img, hazard, scale_x, scale_y, scale, color)

        # Avatar is tiny at field scale; draw it at least 2px wide
        avatar = dict(render_data["avatar"])
        avatar["radius"] = max(avatar["radius"], 2.0 / scale)
        self._draw_entity(img, avatar, scale_x, scale_y, scale, self._avatar_color)

        if render_data["state"] == "ended":
            img[:] = (img * 0.6 + np.array([100, 0, 0]) * 0.4).astype(np.uint8)

        return img

    def _draw_entity(
        self,
        img: np.ndarray,
        entity: Dict[str, Any],
        scale_x: float,
        scale_y: float,
        scale: float,
        color: np.ndarray
    ) -> None:
        cx = int(entity["x"] * scale_x)
        cy = int(entity["y"] * scale_y)
        radius = max(1, int(entity["radius"] * scale))
        self._draw_circle(img, cx, cy, radius, color)

    def _draw_circle(
        self,
        img: np.ndarray,
        cx: int,
        cy: int,
        radius: int,
        color: np.ndarray
    ) -> None:
        """Draw a filled circle, clipped to the image."""
        h, w = img.shape[:2]

        y_min = max(0, cy - radius)
        y_max = min(h, cy + radius + 1)
        x_min = max(0, cx - radius)
        x_max = min(w, cx + radius + 1)

        if y_min >= y_max or x_min >= x_max:
            return

        yy, xx = np.ogrid[y_min:y_max, x_min:x_max]
        mask = (xx - cx) ** 2 + (yy - cy) ** 2 <= radius ** 2
        img[y_min:y_max, x_min:x_max][mask] = color

    def _draw_button(self, img: np.ndarray, button, scale_x: float, scale_y: float) -> None:
        x, y, w, h = button
        x0, y0 = int(x * scale_x), int(y * scale_y)
        x1, y1 = int((x + w) * scale_x), int((y + h) * scale_y)
        img[y0:y1, x0:x1] = self._button_color

    def close(self) -> None:
        """Nothing to release."""
