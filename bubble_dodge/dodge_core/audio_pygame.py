"""
Pygame Audio Sink
=================

Background music playback through pygame.mixer.music.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import pygame

logger = logging.getLogger(__name__)


class PygameAudio:
    """Plays one background track. Does nothing when no track was loaded."""

    def __init__(self, music_path: Optional[Path]):
        self._music_path = music_path
        self._playing = False

    @property
    def available(self) -> bool:
        return self._music_path is not None

    @property
    def playing(self) -> bool:
        return self._playing

    def play(self, loop: bool = True, volume_percent: float = 50.0) -> None:
        """
        Start the track.

        Args:
            loop: Repeat forever if True, play once otherwise.
            volume_percent: Volume in percent, clamped to [0, 100].
        """
        if self._music_path is None:
            return

        volume = max(0.0, min(100.0, volume_percent))
        pygame.mixer.music.load(str(self._music_path))
        pygame.mixer.music.set_volume(volume / 100.0)
        pygame.mixer.music.play(-1 if loop else 0)
        self._playing = True
        logger.debug("Playing %s at %.0f%% (loop=%s)", self._music_path.name, volume, loop)

    def stop(self) -> None:
        if self._playing:
            pygame.mixer.music.stop()
            self._playing = False
