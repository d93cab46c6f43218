"""
Controls
========

Backend-independent input values: held directions and discrete events.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

DIRECTION_KEYS = ("left", "right", "up", "down")


@dataclass(frozen=True)
class InputState:
    """Directional keys held during this tick."""
    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False

    @staticmethod
    def from_keys(keys: Iterable[str]) -> "InputState":
        """Build from key names, e.g. {"left", "up"}. Unknown names are ignored."""
        held = set(keys)
        return InputState(
            left="left" in held,
            right="right" in held,
            up="up" in held,
            down="down" in held
        )

    @staticmethod
    def from_array(values: Sequence) -> "InputState":
        """Build from a [left, right, up, down] sequence of truthy values."""
        if len(values) != 4:
            raise ValueError(f"Expected 4 values [left, right, up, down], got {len(values)}")
        left, right, up, down = (bool(v) for v in values)
        return InputState(left=left, right=right, up=up, down=down)

    def direction(self) -> Tuple[int, int]:
        """Unit direction per axis in {-1, 0, 1}; opposite keys cancel."""
        dx = int(self.right) - int(self.left)
        dy = int(self.down) - int(self.up)
        return dx, dy


NO_INPUT = InputState()


@dataclass(frozen=True)
class WindowClosed:
    """The window was closed."""


@dataclass(frozen=True)
class PointerPressed:
    """Primary pointer button pressed at window coordinates."""
    x: float
    y: float
