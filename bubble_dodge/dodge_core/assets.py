"""
Asset Loader
============

Loads the background image, avatar sprite, font and background music under
one failure policy.

Every failure is an AssetLoadFailure. With on_failure "fatal" it is logged
and raised; with "warn" (or for assets listed under assets.optional) it is
logged and the asset comes back as None so the renderer can fall back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import pygame

from bubble_dodge.dodge_core.config_loader import AssetsConfig, GameConfig, get_config

logger = logging.getLogger(__name__)


class AssetLoadFailure(Exception):
    """A required image, font or audio file could not be loaded."""

    def __init__(self, kind: str, name: str, path: Path, reason: str):
        self.kind = kind
        self.name = name
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load {kind} '{name}' from {path}: {reason}")


@dataclass
class AssetBundle:
    """Everything the renderer and audio sink need, with None for missing assets."""
    background: Optional[pygame.Surface] = None
    avatar_sprite: Optional[pygame.Surface] = None
    font: Optional[pygame.font.Font] = None
    music_path: Optional[Path] = None
    failures: List[AssetLoadFailure] = field(default_factory=list)

    @property
    def degraded(self) -> bool:
        """True if any asset failed to load."""
        return bool(self.failures)


class AssetLoader:
    """
    Loads game assets from assets.base_dir.

    Asset names (background, avatar_sprite, font, music) match the keys in
    the assets section of game_config.yaml.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize asset loader.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._assets: AssetsConfig = config.assets
        self._failures: List[AssetLoadFailure] = []

    @property
    def policy(self) -> str:
        return self._assets.on_failure

    @property
    def failures(self) -> List[AssetLoadFailure]:
        """Failures that were logged and tolerated so far."""
        return list(self._failures)

    def load_all(self) -> AssetBundle:
        """
        Load every configured asset.

        Raises:
            AssetLoadFailure: On the first failure of a required asset under
                the fatal policy.
        """
        bundle = AssetBundle(
            background=self.load_image("background", self._assets.background),
            avatar_sprite=self.load_image("avatar_sprite", self._assets.avatar_sprite),
            font=self.load_font("font", self._assets.font, self._assets.font_size),
            music_path=self.load_music("music", self._assets.music),
        )
        bundle.failures = self.failures
        return bundle

    def load_image(self, name: str, filename: Optional[str]) -> Optional[pygame.Surface]:
        """Load an image, converting it for the display when one exists."""
        if filename is None:
            return None

        path = self._assets.path_for(filename)
        if not path.exists():
            return self._fail("image", name, path, "file not found")

        try:
            image = pygame.image.load(str(path))
        except pygame.error as e:
            return self._fail("image", name, path, str(e))

        if pygame.display.get_surface() is not None:
            image = image.convert_alpha()
        return image

    def load_font(self, name: str, filename: Optional[str], size: int) -> Optional[pygame.font.Font]:
        """Load a TrueType font at the given point size."""
        if filename is None:
            return None

        path = self._assets.path_for(filename)
        if not path.exists():
            return self._fail("font", name, path, "file not found")

        try:
            if not pygame.font.get_init():
                pygame.font.init()
            return pygame.font.Font(str(path), size)
        except (pygame.error, OSError) as e:
            return self._fail("font", name, path, str(e))

    def load_music(self, name: str, filename: Optional[str]) -> Optional[Path]:
        """
        Check that a music file can be opened by the mixer.

        Returns:
            Path to hand to the audio sink, or None.
        """
        if filename is None:
            return None

        path = self._assets.path_for(filename)
        if not path.exists():
            return self._fail("audio", name, path, "file not found")

        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
            pygame.mixer.music.load(str(path))
        except pygame.error as e:
            return self._fail("audio", name, path, str(e))
        return path

    def _fail(self, kind: str, name: str, path: Path, reason: str) -> None:
        """Apply the failure policy. Returns None when the failure is tolerated."""
        failure = AssetLoadFailure(kind, name, path, reason)

        if self._assets.on_failure == "fatal" and not self._assets.is_optional(name):
            logger.error("%s", failure)
            raise failure

        logger.warning("%s (continuing without it)", failure)
        self._failures.append(failure)
        return None
