"""
Spawner
=======

Creates hazards on a fixed cadence and keeps the edible count topped up.
Every random draw goes through the context's shared RandomSource.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from bubble_dodge.dodge_core.entities import Edible, Hazard
from bubble_dodge.dodge_core.world import SimulationContext

logger = logging.getLogger(__name__)


def spawn_hazard_if_due(ctx: SimulationContext, elapsed: float) -> Optional[Hazard]:
    """
    Advance the spawn timer and create one hazard if the interval has passed.

    The hazard appears just above the top edge at a random x and drifts down
    at a speed drawn once from the configured range. The timer is reset to
    zero on spawn, so at most one hazard is created per call.

    Args:
        ctx: Simulation context.
        elapsed: Seconds since the previous call.

    Returns:
        The new hazard, or None if the interval has not passed yet.
    """
    ctx.spawn_timer += elapsed
    hazard_cfg = ctx.config.hazard
    if ctx.spawn_timer < hazard_cfg.spawn_interval:
        return None

    ctx.spawn_timer = 0.0

    hazard = Hazard(
        uid=ctx.next_uid(),
        x=ctx.rng.uniform(0, ctx.config.board.width),
        y=-hazard_cfg.radius,
        vy=ctx.rng.uniform(hazard_cfg.speed_min, hazard_cfg.speed_max),
        radius=hazard_cfg.radius,
        lethal=ctx.config.rules.lethal_hazards
    )
    ctx.hazards.append(hazard)
    logger.debug("Spawned hazard %d at x=%.1f vy=%.3f", hazard.uid, hazard.x, hazard.vy)
    return hazard


def spawn_edibles_up_to_cap(ctx: SimulationContext) -> List[Edible]:
    """
    Create edibles until the live count reaches the configured cap.

    Returns:
        The edibles created by this call (possibly empty).
    """
    edible_cfg = ctx.config.edible
    created: List[Edible] = []

    while ctx.live_edible_count < edible_cfg.cap:
        edible = Edible(
            uid=ctx.next_uid(),
            x=ctx.rng.uniform(0, ctx.config.board.width),
            y=-edible_cfg.radius,
            vy=ctx.rng.uniform(edible_cfg.speed_min, edible_cfg.speed_max),
            radius=edible_cfg.radius
        )
        ctx.edibles.append(edible)
        created.append(edible)

    if created:
        logger.debug("Spawned %d edibles (live=%d)", len(created), ctx.live_edible_count)
    return created
