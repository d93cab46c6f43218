"""
RNG - Shared Random Source
==========================

One seeded pseudorandom stream shared by every spawn call, so a whole run is
reproducible from a single seed.
"""

from __future__ import annotations

import random
from typing import Optional


class RandomSource:
    """
    Uniform real-number stream backed by a single random.Random instance.

    The same object is handed by reference to everything that needs
    randomness; nothing else constructs its own generator.
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize random source.

        Args:
            seed: Random seed for reproducibility. Random if None.
        """
        self._seed = seed
        self._rng = random.Random(seed)
        self._draws: int = 0

    @property
    def seed(self) -> Optional[int]:
        """Seed this stream was last (re)seeded with."""
        return self._seed

    @property
    def draws(self) -> int:
        """Number of values drawn since the last reset."""
        return self._draws

    def uniform(self, low: float, high: float) -> float:
        """
        Draw a real uniformly from [low, high].

        Raises:
            ValueError: If high < low.
        """
        if high < low:
            raise ValueError(f"Empty range [{low}, {high}]")
        self._draws += 1
        return self._rng.uniform(low, high)

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Reseed the stream.

        Args:
            seed: New random seed. Keeps current if None.
        """
        if seed is not None:
            self._seed = seed
        self._rng = random.Random(self._seed)
        self._draws = 0

    def get_state(self) -> tuple:
        """Opaque generator state for checkpointing."""
        return self._rng.getstate()

    def set_state(self, state: tuple) -> None:
        """Restore a state captured by get_state()."""
        self._rng.setstate(state)
