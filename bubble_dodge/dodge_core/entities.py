"""
Entities
========

Avatar, hazards and edibles, plus the axis-aligned bounds used for
collision tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned rectangle (left, top, width, height), y grows downward."""
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @staticmethod
    def around(x: float, y: float, radius: float) -> "Bounds":
        """Bounding box of a circle centred at (x, y)."""
        return Bounds(x - radius, y - radius, 2 * radius, 2 * radius)

    def intersects(self, other: "Bounds") -> bool:
        """True if the overlap is strictly positive on both axes."""
        overlap_left = max(self.left, other.left)
        overlap_right = min(self.right, other.right)
        overlap_top = max(self.top, other.top)
        overlap_bottom = min(self.bottom, other.bottom)
        return overlap_left < overlap_right and overlap_top < overlap_bottom

    def contains(self, x: float, y: float) -> bool:
        """Half-open containment: left/top edges inside, right/bottom outside."""
        return self.left <= x < self.right and self.top <= y < self.bottom


@dataclass
class Avatar:
    """The player-controlled fish."""
    x: float
    y: float
    radius: float
    facing_right: bool = False

    @property
    def position(self) -> Tuple[float, float]:
        return self.x, self.y

    @property
    def bounds(self) -> Bounds:
        return Bounds.around(self.x, self.y, self.radius)


@dataclass
class FallingEntity:
    """
    Something drifting straight down the field.

    Velocity is drawn once at creation and never changes.
    """
    uid: int
    x: float
    y: float
    vy: float
    radius: float
    vx: float = 0.0

    @property
    def position(self) -> Tuple[float, float]:
        return self.x, self.y

    @property
    def velocity(self) -> Tuple[float, float]:
        return self.vx, self.vy

    @property
    def bounds(self) -> Bounds:
        return Bounds.around(self.x, self.y, self.radius)

    def advance(self, scale: float = 1.0) -> None:
        """Apply one velocity step, scaled by the delta-time factor."""
        self.x += self.vx * scale
        self.y += self.vy * scale

    def has_exited(self, field_height: float) -> bool:
        """True once the entity is entirely below the bottom edge."""
        return self.y - self.radius > field_height


@dataclass
class Hazard(FallingEntity):
    """A bubble. Ends the game on contact when lethal."""
    lethal: bool = True


@dataclass
class Edible(FallingEntity):
    """A piece of food. Worth points when the avatar touches it."""
    collected: bool = False
