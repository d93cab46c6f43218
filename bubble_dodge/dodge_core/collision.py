"""
Collision System
================

Avatar bounds against hazard and edible bounds. Boxes are derived from each
entity's radius; this is a bounding-box test, not circle-circle.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from bubble_dodge.dodge_core.entities import Edible, Hazard
from bubble_dodge.dodge_core.scoring import ScoreEvent
from bubble_dodge.dodge_core.world import SimulationContext

logger = logging.getLogger(__name__)


@dataclass
class CollisionResult:
    """Outcome of one collision pass."""
    lethal_hazard: Optional[Hazard] = None
    collected: List[Edible] = field(default_factory=list)
    score_events: List[ScoreEvent] = field(default_factory=list)

    @property
    def is_lethal(self) -> bool:
        return self.lethal_hazard is not None

    @property
    def points(self) -> int:
        return sum(event.points for event in self.score_events)


def find_lethal_hazard(ctx: SimulationContext) -> Optional[Hazard]:
    """Return the first lethal hazard touching the avatar, if any."""
    avatar_bounds = ctx.avatar.bounds
    for hazard in ctx.hazards:
        if hazard.lethal and avatar_bounds.intersects(hazard.bounds):
            return hazard
    return None


def collect_edibles(ctx: SimulationContext) -> CollisionResult:
    """
    Collect every edible touching the avatar.

    Each one is marked collected, removed from the active collection and
    scored exactly once. The collection is rebuilt rather than mutated in
    place, so no remaining edible is skipped or visited twice.
    """
    result = CollisionResult()
    avatar_bounds = ctx.avatar.bounds
    remaining: List[Edible] = []

    for edible in ctx.edibles:
        if not edible.collected and avatar_bounds.intersects(edible.bounds):
            edible.collected = True
            result.collected.append(edible)
            result.score_events.append(ctx.score.apply_collection(edible.uid))
        else:
            remaining.append(edible)

    ctx.edibles = remaining
    return result


def resolve_collisions(ctx: SimulationContext) -> CollisionResult:
    """
    Run the hazard test, then the edible test.

    A lethal hit short-circuits: edibles are left untouched and the score
    does not change on the tick the game ends.
    """
    hazard = find_lethal_hazard(ctx)
    if hazard is not None:
        logger.debug("Avatar hit hazard %d at (%.1f, %.1f)", hazard.uid, hazard.x, hazard.y)
        return CollisionResult(lethal_hazard=hazard)

    result = collect_edibles(ctx)
    for edible in result.collected:
        logger.debug("Collected edible %d (+%d)", edible.uid, ctx.score.increment)
    return result
