"""
Core Game
=========

Game state machine: owns the Menu / Playing / Ended lifecycle and sequences
the systems once per tick.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from bubble_dodge.dodge_core.collision import resolve_collisions
from bubble_dodge.dodge_core.config_loader import GameConfig, get_config
from bubble_dodge.dodge_core.controls import NO_INPUT, InputState
from bubble_dodge.dodge_core.entities import Edible, Hazard
from bubble_dodge.dodge_core.movement import advance_falling, move_avatar, velocity_scale
from bubble_dodge.dodge_core.rng import RandomSource
from bubble_dodge.dodge_core.rules import GameState, MenuRules, TerminationRules
from bubble_dodge.dodge_core.spawner import spawn_edibles_up_to_cap, spawn_hazard_if_due
from bubble_dodge.dodge_core.state_snapshot import GameSnapshot, SnapshotBuilder
from bubble_dodge.dodge_core.world import SimulationContext, create_context

logger = logging.getLogger(__name__)


@dataclass
class TickResult:
    """Result of a single simulation tick."""
    state: GameState
    spawned_hazard: Optional[Hazard] = None
    spawned_edibles: List[Edible] = field(default_factory=list)
    collected: List[Edible] = field(default_factory=list)
    exited_hazards: int = 0
    exited_edibles: int = 0
    delta_score: int = 0
    terminated: bool = False
    termination_reason: str = ""


class DodgeGame:
    """
    Main game simulation class.

    Orchestrates:
    - Spawner (hazard cadence, edible cap)
    - Movement (falling entities, avatar)
    - Collisions and scoring
    - Termination rules
    - Menu / Playing / Ended transitions

    One tick = spawn -> move -> collide -> score -> terminal check, and only
    while PLAYING.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize game.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._rng = RandomSource(seed)
        self._menu = MenuRules(config)
        self._termination = TerminationRules(config)
        self._snapshot_builder = SnapshotBuilder(config)

        self._ctx: SimulationContext = create_context(config, rng=self._rng)
        self._state = self._initial_state()
        self._termination_reason: str = ""

    def _initial_state(self) -> GameState:
        return GameState.MENU if self._config.rules.start_in_menu else GameState.PLAYING

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def context(self) -> SimulationContext:
        """Live simulation context."""
        return self._ctx

    @property
    def state(self) -> GameState:
        """Current lifecycle state."""
        return self._state

    @property
    def score(self) -> int:
        """Current score."""
        return self._ctx.score.score

    @property
    def tick_count(self) -> int:
        """Ticks simulated while playing."""
        return self._ctx.tick_count

    @property
    def is_over(self) -> bool:
        """True if game has ended."""
        return self._state is GameState.ENDED

    @property
    def termination_reason(self) -> str:
        """Reason for game end, or empty string."""
        return self._termination_reason

    @property
    def menu(self) -> MenuRules:
        return self._menu

    def reset(self, seed: Optional[int] = None) -> GameState:
        """
        Start a new game with a fresh context.

        Args:
            seed: New random seed. Keeps drawing from the current stream
                if None, so consecutive unseeded games differ.

        Returns:
            The initial state for the active profile.
        """
        if seed is not None:
            self._rng.reset(seed)
        self._ctx = create_context(self._config, rng=self._rng)
        self._state = self._initial_state()
        self._termination_reason = ""
        return self._state

    def press_pointer(self, x: float, y: float) -> bool:
        """
        Handle a primary pointer press.

        Only a press on the play button while in MENU does anything.

        Returns:
            True if the press started the game.
        """
        if self._state is not GameState.MENU:
            return False
        if not self._menu.is_play_press(x, y):
            return False

        self._state = GameState.PLAYING
        logger.info("Game started (profile=%s)", self._config.rules.profile)
        return True

    def tick(self, dt: float, inputs: InputState = NO_INPUT) -> TickResult:
        """
        Advance the simulation by one tick.

        Args:
            dt: Seconds since the previous tick.
            inputs: Directional keys currently held.

        Returns:
            TickResult for this tick. Empty outside PLAYING.
        """
        if self._state is not GameState.PLAYING:
            return TickResult(state=self._state, terminated=self.is_over,
                              termination_reason=self._termination_reason)

        ctx = self._ctx
        score_before = ctx.score.score
        scale = velocity_scale(self._config.timing, dt)

        spawned_hazard = spawn_hazard_if_due(ctx, dt)
        spawned_edibles = spawn_edibles_up_to_cap(ctx)

        move_avatar(ctx, inputs, scale)
        moves = advance_falling(ctx, scale)

        collisions = resolve_collisions(ctx)

        ctx.tick_count += 1
        ctx.elapsed += dt

        term_result = self._termination.check_termination(collisions, moves)
        if term_result.terminated:
            self._end(term_result.reason)

        return TickResult(
            state=self._state,
            spawned_hazard=spawned_hazard,
            spawned_edibles=spawned_edibles,
            collected=collisions.collected,
            exited_hazards=len(moves.exited_hazards),
            exited_edibles=len(moves.exited_edibles),
            delta_score=ctx.score.score - score_before,
            terminated=term_result.terminated,
            termination_reason=term_result.reason
        )

    def _end(self, reason: str) -> None:
        self._state = GameState.ENDED
        self._termination_reason = reason
        logger.info(
            "Game over (%s) after %d ticks, score %d",
            reason, self._ctx.tick_count, self.score
        )

    def snapshot(self, board_rgb=None) -> GameSnapshot:
        """Build current game state snapshot."""
        return self._snapshot_builder.build(self._ctx, self._state, board_rgb=board_rgb)

    def get_info(self) -> Dict[str, Any]:
        """Get additional info dict for tools and the Gymnasium wrapper."""
        return {
            "state": self._state.value,
            "score": self.score,
            "collections": self._ctx.score.collections,
            "ticks": self._ctx.tick_count,
            "elapsed": self._ctx.elapsed,
            "hazards": self._ctx.hazard_count,
            "edibles": self._ctx.live_edible_count,
            "terminated_reason": self._termination_reason,
        }

    def get_render_data(self) -> Dict[str, Any]:
        """
        Get data needed for rendering.

        Returns:
            Dict with entity positions, score and board info.
        """
        avatar = self._ctx.avatar
        return {
            "state": self._state.value,
            "board_width": self._config.board.width,
            "board_height": self._config.board.height,
            "play_button": self._config.menu.play_button,
            "avatar": {
                "x": avatar.x,
                "y": avatar.y,
                "radius": avatar.radius,
                "facing_right": avatar.facing_right,
            },
            "hazards": [
                {"uid": h.uid, "x": h.x, "y": h.y, "radius": h.radius, "lethal": h.lethal}
                for h in self._ctx.hazards
            ],
            "edibles": [
                {"uid": e.uid, "x": e.x, "y": e.y, "radius": e.radius}
                for e in self._ctx.edibles
            ],
            "score": self.score,
            "termination_reason": self._termination_reason,
        }
