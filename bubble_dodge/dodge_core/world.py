"""
Simulation Context
==================

All mutable state of one game, passed explicitly to every system function.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from bubble_dodge.dodge_core.config_loader import GameConfig, get_config
from bubble_dodge.dodge_core.entities import Avatar, Edible, Hazard
from bubble_dodge.dodge_core.rng import RandomSource
from bubble_dodge.dodge_core.scoring import ScoreTracker


@dataclass
class SimulationContext:
    """
    Everything the tick pipeline reads or writes.

    Owned by exactly one game; systems receive it as their first argument.
    """
    config: GameConfig
    rng: RandomSource
    avatar: Avatar
    score: ScoreTracker
    hazards: List[Hazard] = field(default_factory=list)
    edibles: List[Edible] = field(default_factory=list)
    spawn_timer: float = 0.0       # Seconds since the last hazard spawn
    tick_count: int = 0
    elapsed: float = 0.0           # Simulated seconds while playing
    _uids: Iterator[int] = field(default_factory=lambda: itertools.count(1), repr=False)

    def next_uid(self) -> int:
        """Allocate a unique entity id."""
        return next(self._uids)

    @property
    def live_edible_count(self) -> int:
        return len(self.edibles)

    @property
    def hazard_count(self) -> int:
        return len(self.hazards)


def create_context(
    config: Optional[GameConfig] = None,
    rng: Optional[RandomSource] = None,
    seed: Optional[int] = None
) -> SimulationContext:
    """
    Build a fresh context with the avatar at the field centre.

    Args:
        config: Game configuration. Uses default if None.
        rng: Shared random source. A new one seeded with `seed` if None.
        seed: Seed for the new random source (ignored when rng is given).
    """
    if config is None:
        config = get_config()
    if rng is None:
        rng = RandomSource(seed)

    center_x, center_y = config.center
    avatar = Avatar(x=center_x, y=center_y, radius=config.avatar.radius)

    return SimulationContext(
        config=config,
        rng=rng,
        avatar=avatar,
        score=ScoreTracker(config)
    )
