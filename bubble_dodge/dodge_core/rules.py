"""
Game Rules
==========

Game states, the menu play button, and termination conditions for the
active rule profile.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from bubble_dodge.dodge_core.collision import CollisionResult
from bubble_dodge.dodge_core.config_loader import GameConfig, get_config
from bubble_dodge.dodge_core.entities import Bounds
from bubble_dodge.dodge_core.movement import MoveResult


class GameState(Enum):
    """Lifecycle of one game."""
    MENU = "menu"
    PLAYING = "playing"
    ENDED = "ended"


@dataclass
class TerminationResult:
    """Result of termination check."""
    terminated: bool
    reason: str

    @staticmethod
    def none() -> "TerminationResult":
        return TerminationResult(False, "")

    @staticmethod
    def game_over(reason: str) -> "TerminationResult":
        return TerminationResult(True, reason)


class MenuRules:
    """
    Play button hit-testing.

    Coordinates outside the field simply never match.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        x, y, w, h = config.menu.play_button
        self._button = Bounds(x, y, w, h)

    @property
    def play_button(self) -> Bounds:
        return self._button

    def is_play_press(self, x: float, y: float) -> bool:
        """True if a pointer press at (x, y) lands on the play button."""
        return self._button.contains(x, y)

    def play_button_center(self) -> tuple:
        return (
            self._button.left + self._button.width / 2,
            self._button.top + self._button.height / 2
        )


class TerminationRules:
    """
    Handles game termination conditions.

    - Hazard: a lethal hazard touched the avatar
    - Neglect: an uncollected edible left the bottom (neglect profile only)
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize termination rules.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._neglect_loss = config.rules.neglect_loss

    @property
    def neglect_loss(self) -> bool:
        """True if letting an edible escape ends the game."""
        return self._neglect_loss

    def check_termination(
        self,
        collisions: CollisionResult,
        moves: MoveResult
    ) -> TerminationResult:
        """
        Check all termination conditions.

        Args:
            collisions: This tick's collision outcome.
            moves: This tick's movement outcome.

        Returns:
            TerminationResult indicating game state.
        """
        if collisions.is_lethal:
            return TerminationResult.game_over("hazard")

        if self._neglect_loss:
            if any(not edible.collected for edible in moves.exited_edibles):
                return TerminationResult.game_over("neglect")

        return TerminationResult.none()
