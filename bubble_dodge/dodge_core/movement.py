"""
Movement System
===============

Straight-line drift for hazards and edibles, input-driven movement for the
avatar, and removal of anything that has left the bottom of the field.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from bubble_dodge.dodge_core.config_loader import TimingConfig
from bubble_dodge.dodge_core.controls import InputState
from bubble_dodge.dodge_core.entities import Edible, Hazard
from bubble_dodge.dodge_core.world import SimulationContext


@dataclass
class MoveResult:
    """Entities removed this tick because they left the field."""
    exited_hazards: List[Hazard] = field(default_factory=list)
    exited_edibles: List[Edible] = field(default_factory=list)


def velocity_scale(timing: TimingConfig, dt: float) -> float:
    """
    Multiplier applied to per-tick velocities.

    In fixed-tick mode every tick applies velocities exactly once. Otherwise
    velocities are per reference tick and scaled by how many reference ticks
    dt spans.
    """
    if timing.fixed_tick:
        return 1.0
    return dt * timing.reference_tick_rate


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def move_avatar(ctx: SimulationContext, inputs: InputState, scale: float = 1.0) -> None:
    """
    Move the avatar by the held directions and clamp it inside the field.

    Holding left faces the avatar left, holding right faces it right; right
    wins when both are held.
    """
    avatar = ctx.avatar
    speed = ctx.config.avatar.speed * scale

    if inputs.left:
        avatar.facing_right = False
    if inputs.right:
        avatar.facing_right = True

    dx, dy = inputs.direction()
    board = ctx.config.board
    avatar.x = _clamp(avatar.x + dx * speed, avatar.radius, board.width - avatar.radius)
    avatar.y = _clamp(avatar.y + dy * speed, avatar.radius, board.height - avatar.radius)


def advance_falling(ctx: SimulationContext, scale: float = 1.0) -> MoveResult:
    """
    Apply one velocity step to every hazard and edible.

    Entities that end up entirely below the field are removed from the
    active collections and reported in the result.
    """
    height = ctx.config.board.height
    result = MoveResult()

    survivors: List[Hazard] = []
    for hazard in ctx.hazards:
        hazard.advance(scale)
        if hazard.has_exited(height):
            result.exited_hazards.append(hazard)
        else:
            survivors.append(hazard)
    ctx.hazards = survivors

    remaining: List[Edible] = []
    for edible in ctx.edibles:
        edible.advance(scale)
        if edible.has_exited(height):
            result.exited_edibles.append(edible)
        else:
            remaining.append(edible)
    ctx.edibles = remaining

    return result
