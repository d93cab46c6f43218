"""
Scoring System
==============

Running score for the current game. Only ever goes up.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from bubble_dodge.dodge_core.config_loader import GameConfig, get_config


@dataclass
class ScoreEvent:
    """Record of a scoring event."""
    points: int
    edible_uid: int
    total: int

    def __repr__(self) -> str:
        return f"ScoreEvent(edible_{self.edible_uid}=+{self.points}, total={self.total})"


class ScoreTracker:
    """
    Tracks game score.

    Points can only be added. reset() is used when a new game starts.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize score tracker.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._increment = config.scoring.increment
        self._score: int = 0
        self._collections: int = 0

    @property
    def score(self) -> int:
        """Current total score."""
        return self._score

    @property
    def collections(self) -> int:
        """Number of edibles collected."""
        return self._collections

    @property
    def increment(self) -> int:
        """Points awarded per collected edible."""
        return self._increment

    def current(self) -> int:
        """Current total score."""
        return self._score

    def add_score(self, points: int) -> None:
        """
        Add points to the running total.

        Raises:
            ValueError: If points is negative.
        """
        if points < 0:
            raise ValueError(f"Score can only increase, got {points}")
        self._score += points

    def apply_collection(self, edible_uid: int) -> ScoreEvent:
        """
        Award the fixed increment for one collected edible.

        Args:
            edible_uid: Identifier of the collected edible.

        Returns:
            ScoreEvent describing the points awarded.
        """
        self.add_score(self._increment)
        self._collections += 1
        return ScoreEvent(points=self._increment, edible_uid=edible_uid, total=self._score)

    def reset(self) -> None:
        """Reset score to zero."""
        self._score = 0
        self._collections = 0
