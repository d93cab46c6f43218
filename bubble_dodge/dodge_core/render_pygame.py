"""
Pygame Renderer
===============

Window renderer for human play. Draws the background image, the avatar
sprite, hazards and edibles as circles, the score and the menu / game-over
frames. Missing assets fall back to a solid background, a circle avatar and
pygame's default font.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import pygame

from bubble_dodge.dodge_core.assets import AssetBundle
from bubble_dodge.dodge_core.config_loader import GameConfig, get_config

Color = Tuple[int, int, int]


class PygameRenderer:
    """
    Renders to a pygame window.

    All drawing calls take field coordinates; the renderer scales them by
    window_scale so a 1920x1080 field fits on smaller screens.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        assets: Optional[AssetBundle] = None,
        window_scale: float = 0.5
    ):
        """
        Initialize renderer and open the window.

        Args:
            config: Game configuration. Uses default if None.
            assets: Loaded assets. Everything falls back if None.
            window_scale: Window size relative to the field.
        """
        if config is None:
            config = get_config()
        if assets is None:
            assets = AssetBundle()

        self._config = config
        self._assets = assets
        self._scale = window_scale

        if not pygame.get_init():
            pygame.init()
        pygame.font.init()

        self._window_size = (
            max(1, int(config.board.width * window_scale)),
            max(1, int(config.board.height * window_scale))
        )
        self._screen = pygame.display.set_mode(self._window_size)
        pygame.display.set_caption("Bubble Dodge")

        font_size = max(8, int(config.assets.font_size * window_scale * 2))
        self._default_font = pygame.font.Font(None, font_size)
        self._large_font = pygame.font.Font(None, font_size * 3)

        self._background = None
        if assets.background is not None:
            self._background = pygame.transform.smoothscale(
                assets.background.convert(), self._window_size
            )

        self._sprite_left = None
        self._sprite_right = None
        if assets.avatar_sprite is not None:
            self._sprite_left = assets.avatar_sprite
            self._sprite_right = pygame.transform.flip(assets.avatar_sprite, True, False)

        self._bg_color = (20, 40, 70)
        self._hazard_color = (60, 120, 255)
        self._inert_hazard_color = (120, 150, 200)
        self._edible_color = (60, 220, 90)
        self._avatar_color = (255, 160, 40)
        self._button_color = (40, 200, 60)
        self._text_color = (255, 255, 255)
        self._overlay_color = (120, 0, 0)

    @property
    def scale(self) -> float:
        """Window pixels per field unit."""
        return self._scale

    @property
    def font(self) -> pygame.font.Font:
        return self._assets.font if self._assets.font is not None else self._default_font

    def clear(self) -> None:
        """Fill the window with the background image, or a solid color."""
        if self._background is not None:
            self._screen.blit(self._background, (0, 0))
        else:
            self._screen.fill(self._bg_color)

    def draw_shape(self, x: float, y: float, radius: float, color: Color) -> None:
        """Draw a filled circle centred at field position (x, y)."""
        pygame.draw.circle(
            self._screen,
            color,
            (int(x * self._scale), int(y * self._scale)),
            max(1, int(radius * self._scale))
        )

    def draw_sprite(self, x: float, y: float, radius: float, facing_right: bool) -> None:
        """
        Draw the avatar sprite centred at (x, y).

        The sprite keeps its own size; without a sprite the avatar is a circle.
        """
        sprite = self._sprite_right if facing_right else self._sprite_left
        if sprite is None:
            self.draw_shape(x, y, radius, self._avatar_color)
            return

        scaled = pygame.transform.rotozoom(sprite, 0, self._scale)
        rect = scaled.get_rect(center=(int(x * self._scale), int(y * self._scale)))
        self._screen.blit(scaled, rect)

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        color: Optional[Color] = None,
        large: bool = False,
        centered: bool = False
    ) -> None:
        """Draw text with its top-left (or centre) at field position (x, y)."""
        font = self._large_font if large else self.font
        surface = font.render(text, True, color or self._text_color)
        pos = (int(x * self._scale), int(y * self._scale))
        rect = surface.get_rect(center=pos) if centered else surface.get_rect(topleft=pos)
        self._screen.blit(surface, rect)

    def present(self) -> None:
        pygame.display.flip()

    def draw_frame(self, render_data: Dict[str, Any]) -> None:
        """Draw one complete frame from DodgeGame.get_render_data()."""
        self.clear()

        state = render_data["state"]
        if state == "menu":
            self._draw_menu(render_data)
            return

        for edible in render_data["edibles"]:
            self.draw_shape(edible["x"], edible["y"], edible["radius"], self._edible_color)

        for hazard in render_data["hazards"]:
            color = self._hazard_color if hazard["lethal"] else self._inert_hazard_color
            self.draw_shape(hazard["x"], hazard["y"], hazard["radius"], color)

        avatar = render_data["avatar"]
        self.draw_sprite(avatar["x"], avatar["y"], avatar["radius"], avatar["facing_right"])

        self.draw_text(f"Score: {render_data['score']}", 10 / self._scale, 10 / self._scale)

        if state == "ended":
            self._draw_game_over(render_data)

    def _draw_menu(self, render_data: Dict[str, Any]) -> None:
        x, y, w, h = render_data["play_button"]
        rect = pygame.Rect(
            int(x * self._scale), int(y * self._scale),
            int(w * self._scale), int(h * self._scale)
        )
        pygame.draw.rect(self._screen, self._button_color, rect)
        self.draw_text("Play", x + w / 2, y + h / 2, centered=True)

    def _draw_game_over(self, render_data: Dict[str, Any]) -> None:
        overlay = pygame.Surface(self._window_size, pygame.SRCALPHA)
        overlay.fill((*self._overlay_color, 110))
        self._screen.blit(overlay, (0, 0))

        cx = render_data["board_width"] / 2
        cy = render_data["board_height"] / 2
        self.draw_text("Game Over", cx, cy - 40 / self._scale, large=True, centered=True)
        self.draw_text(f"Score: {render_data['score']}", cx, cy + 20 / self._scale, centered=True)

    def close(self) -> None:
        pygame.display.quit()
