"""
State Snapshot
==============

Packs game state into fixed-size numpy arrays for Gymnasium observations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence
import math

import numpy as np

from bubble_dodge.dodge_core.config_loader import GameConfig, get_config
from bubble_dodge.dodge_core.entities import FallingEntity
from bubble_dodge.dodge_core.rules import GameState
from bubble_dodge.dodge_core.world import SimulationContext

STATE_IDS = {
    GameState.MENU: 0,
    GameState.PLAYING: 1,
    GameState.ENDED: 2,
}


@dataclass
class GameSnapshot:
    """
    Game state snapshot.

    Entity arrays are fixed-size with masking for variable counts. Hazards
    are ordered nearest-first relative to the avatar.
    """
    # Core state
    state_id: int
    score: int
    ticks: int
    avatar_x: float
    avatar_y: float
    facing_right: bool

    # Board info (for normalization)
    board_width: float
    board_height: float

    # Derived features
    hazard_count: int
    edible_count: int
    nearest_hazard_distance: float
    nearest_edible_distance: float

    # Entity arrays (fixed size, padded)
    hazard_x: np.ndarray              # (MAX_HAZARDS,) float32
    hazard_y: np.ndarray              # (MAX_HAZARDS,) float32
    hazard_vy: np.ndarray             # (MAX_HAZARDS,) float32
    hazard_mask: np.ndarray           # (MAX_HAZARDS,) int8
    edible_x: np.ndarray              # (MAX_EDIBLES,) float32
    edible_y: np.ndarray              # (MAX_EDIBLES,) float32
    edible_vy: np.ndarray             # (MAX_EDIBLES,) float32
    edible_mask: np.ndarray           # (MAX_EDIBLES,) int8

    # Optional image
    board_rgb: Optional[np.ndarray] = None

    def to_obs_dict(self) -> Dict[str, np.ndarray]:
        """Convert to Gymnasium observation dictionary."""
        obs = {
            "state": np.array(self.state_id, dtype=np.int32),
            "score": np.array(self.score, dtype=np.int64),
            "ticks": np.array(self.ticks, dtype=np.int64),
            "avatar_x": np.array(self.avatar_x, dtype=np.float32),
            "avatar_y": np.array(self.avatar_y, dtype=np.float32),
            "facing_right": np.array(int(self.facing_right), dtype=np.int8),

            "board_width": np.array(self.board_width, dtype=np.float32),
            "board_height": np.array(self.board_height, dtype=np.float32),

            "hazard_count": np.array(self.hazard_count, dtype=np.int32),
            "edible_count": np.array(self.edible_count, dtype=np.int32),
            "nearest_hazard_distance": np.array(self.nearest_hazard_distance, dtype=np.float32),
            "nearest_edible_distance": np.array(self.nearest_edible_distance, dtype=np.float32),

            "hazard_x": self.hazard_x,
            "hazard_y": self.hazard_y,
            "hazard_vy": self.hazard_vy,
            "hazard_mask": self.hazard_mask,
            "edible_x": self.edible_x,
            "edible_y": self.edible_y,
            "edible_vy": self.edible_vy,
            "edible_mask": self.edible_mask,
        }

        if self.board_rgb is not None:
            obs["board_rgb"] = self.board_rgb

        return obs


class SnapshotBuilder:
    """Builds GameSnapshot instances from a simulation context."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._max_hazards = config.observation.max_hazards
        self._max_edibles = max(1, config.edible.cap)
        self._diagonal = math.hypot(config.board.width, config.board.height)

    @property
    def max_hazards(self) -> int:
        return self._max_hazards

    @property
    def max_edibles(self) -> int:
        return self._max_edibles

    def build(
        self,
        ctx: SimulationContext,
        state: GameState,
        board_rgb: Optional[np.ndarray] = None
    ) -> GameSnapshot:
        """Pack the context into a snapshot."""
        avatar = ctx.avatar
        hazards = self._sorted_by_distance(ctx.hazards, avatar.x, avatar.y)
        edibles = self._sorted_by_distance(ctx.edibles, avatar.x, avatar.y)

        hazard_x, hazard_y, hazard_vy, hazard_mask = self._pack(hazards, self._max_hazards)
        edible_x, edible_y, edible_vy, edible_mask = self._pack(edibles, self._max_edibles)

        return GameSnapshot(
            state_id=STATE_IDS[state],
            score=ctx.score.score,
            ticks=ctx.tick_count,
            avatar_x=avatar.x,
            avatar_y=avatar.y,
            facing_right=avatar.facing_right,
            board_width=float(self._config.board.width),
            board_height=float(self._config.board.height),
            hazard_count=len(ctx.hazards),
            edible_count=len(ctx.edibles),
            nearest_hazard_distance=self._nearest(hazards, avatar.x, avatar.y),
            nearest_edible_distance=self._nearest(edibles, avatar.x, avatar.y),
            hazard_x=hazard_x,
            hazard_y=hazard_y,
            hazard_vy=hazard_vy,
            hazard_mask=hazard_mask,
            edible_x=edible_x,
            edible_y=edible_y,
            edible_vy=edible_vy,
            edible_mask=edible_mask,
            board_rgb=board_rgb
        )

    @staticmethod
    def _sorted_by_distance(
        entities: Sequence[FallingEntity],
        x: float,
        y: float
    ) -> List[FallingEntity]:
        return sorted(entities, key=lambda e: (e.x - x) ** 2 + (e.y - y) ** 2)

    def _nearest(self, entities: Sequence[FallingEntity], x: float, y: float) -> float:
        """Distance to the first (nearest) entity, or the board diagonal if none."""
        if not entities:
            return self._diagonal
        first = entities[0]
        return math.hypot(first.x - x, first.y - y)

    @staticmethod
    def _pack(entities: Sequence[FallingEntity], size: int):
        xs = np.zeros(size, dtype=np.float32)
        ys = np.zeros(size, dtype=np.float32)
        vys = np.zeros(size, dtype=np.float32)
        mask = np.zeros(size, dtype=np.int8)

        count = min(len(entities), size)
        if count:
            xs[:count] = [e.x for e in entities[:count]]
            ys[:count] = [e.y for e in entities[:count]]
            vys[:count] = [e.vy for e in entities[:count]]
            mask[:count] = 1

        return xs, ys, vys, mask
