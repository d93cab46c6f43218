"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to the dodge game.
Reward is always 0.0 - agents compute their own from info.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import numpy as np

import gymnasium as gym
from gymnasium import spaces

from bubble_dodge.dodge_core.config_loader import GameConfig, load_config
from bubble_dodge.dodge_core.controls import InputState
from bubble_dodge.dodge_core.game import DodgeGame
from bubble_dodge.dodge_core.rules import GameState
from bubble_dodge.dodge_core.state_snapshot import GameSnapshot

logger = logging.getLogger(__name__)


class DodgeEnv(gym.Env):
    """
    Bubble dodge as a Gymnasium environment.

    Action Space:
        MultiBinary(4): held [left, right, up, down].

    Observation Space:
        Dict with avatar state, score and nearest-first hazard / edible arrays.

    Reward:
        Always 0.0. Agents compute their own from the info dict.

    Episodes start already PLAYING: when the profile opens on the menu,
    reset() presses the play button. One step is one tick of
    timing.tick_seconds. Episodes truncate after
    observation.max_episode_ticks.
    """

    metadata = {
        "render_modes": ["human", "rgb_array"],
        "render_fps": 60,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        profile: Optional[str] = None,
        render_mode: Optional[str] = None,
        image_obs: bool = False,
        config: Optional[GameConfig] = None,
    ):
        """
        Initialize environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            profile: Rule profile name. Uses the file's default if None.
            render_mode: "human" for window, "rgb_array" for numpy, None for headless.
            image_obs: If True, include board_rgb in observations.
            config: Pre-loaded configuration; overrides config_path/profile.
        """
        super().__init__()

        self._config = config if config is not None else load_config(config_path, profile)

        self.render_mode = render_mode
        self._image_obs = image_obs
        self._img_width = self._config.observation.image_width
        self._img_height = self._config.observation.image_height
        self._dt = self._config.timing.tick_seconds
        self._max_ticks = self._config.observation.max_episode_ticks

        self._game = DodgeGame(config=self._config)
        self._renderer = None
        self._screen_renderer = None

        self.action_space = spaces.MultiBinary(4)
        self.observation_space = self._build_observation_space()

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        board = self._config.board
        max_hazards = self._config.observation.max_hazards
        max_edibles = max(1, self._config.edible.cap)
        diagonal = float(np.hypot(board.width, board.height))

        obs_dict = {
            "state": spaces.Box(low=0, high=2, shape=(), dtype=np.int32),
            "score": spaces.Box(low=0, high=np.iinfo(np.int64).max, shape=(), dtype=np.int64),
            "ticks": spaces.Box(low=0, high=np.iinfo(np.int64).max, shape=(), dtype=np.int64),
            "avatar_x": spaces.Box(low=0, high=board.width, shape=(), dtype=np.float32),
            "avatar_y": spaces.Box(low=0, high=board.height, shape=(), dtype=np.float32),
            "facing_right": spaces.Box(low=0, high=1, shape=(), dtype=np.int8),

            "board_width": spaces.Box(low=0, high=np.inf, shape=(), dtype=np.float32),
            "board_height": spaces.Box(low=0, high=np.inf, shape=(), dtype=np.float32),

            "hazard_count": spaces.Box(low=0, high=np.iinfo(np.int32).max, shape=(), dtype=np.int32),
            "edible_count": spaces.Box(low=0, high=max_edibles, shape=(), dtype=np.int32),
            "nearest_hazard_distance": spaces.Box(low=0, high=diagonal + 1, shape=(), dtype=np.float32),
            "nearest_edible_distance": spaces.Box(low=0, high=diagonal + 1, shape=(), dtype=np.float32),

            "hazard_x": spaces.Box(low=-np.inf, high=np.inf, shape=(max_hazards,), dtype=np.float32),
            "hazard_y": spaces.Box(low=-np.inf, high=np.inf, shape=(max_hazards,), dtype=np.float32),
            "hazard_vy": spaces.Box(low=0, high=np.inf, shape=(max_hazards,), dtype=np.float32),
            "hazard_mask": spaces.MultiBinary(max_hazards),
            "edible_x": spaces.Box(low=-np.inf, high=np.inf, shape=(max_edibles,), dtype=np.float32),
            "edible_y": spaces.Box(low=-np.inf, high=np.inf, shape=(max_edibles,), dtype=np.float32),
            "edible_vy": spaces.Box(low=0, high=np.inf, shape=(max_edibles,), dtype=np.float32),
            "edible_mask": spaces.MultiBinary(max_edibles),
        }

        if self._image_obs:
            obs_dict["board_rgb"] = spaces.Box(
                low=0,
                high=255,
                shape=(self._img_height, self._img_width, 3),
                dtype=np.uint8
            )

        return spaces.Dict(obs_dict)

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment.

        Args:
            seed: Random seed for reproducibility. Without one the game keeps
                its random stream, so the new episode differs from the last.
            options: Additional options (unused).

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        self._game.reset(seed=seed)
        if self._game.state is GameState.MENU:
            self._game.press_pointer(*self._game.menu.play_button_center())

        obs = self._snapshot_to_obs(self._game.snapshot())
        info = self._game.get_info()
        info["delta_score"] = 0

        return obs, info

    def step(
        self,
        action
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Execute one tick.

        Args:
            action: [left, right, up, down] held flags.

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
            Reward is always 0.0.
        """
        inputs = InputState.from_array(np.asarray(action).reshape(-1))
        result = self._game.tick(self._dt, inputs)

        obs = self._snapshot_to_obs(self._game.snapshot())
        reward = 0.0

        terminated = self._game.is_over
        truncated = not terminated and self._game.tick_count >= self._max_ticks

        info = self._game.get_info()
        info["delta_score"] = result.delta_score
        info["collected"] = len(result.collected)

        if result.terminated:
            logger.debug("Episode terminated: %s", result.termination_reason)

        return obs, reward, terminated, truncated, info

    def _snapshot_to_obs(self, snapshot: GameSnapshot) -> Dict[str, np.ndarray]:
        """Convert snapshot to observation dict."""
        obs = snapshot.to_obs_dict()

        if self._image_obs:
            obs["board_rgb"] = self._render_to_array()

        return obs

    def _render_to_array(self) -> np.ndarray:
        """Render board to RGB array."""
        if self._renderer is None:
            from bubble_dodge.dodge_core.render_solid import SolidRenderer
            self._renderer = SolidRenderer(self._config)

        return self._renderer.render(
            self._game.get_render_data(),
            self._img_width,
            self._img_height
        )

    def render(self) -> Optional[np.ndarray]:
        """
        Render the current game state.

        Returns:
            RGB array if render_mode is "rgb_array", None otherwise.
        """
        if self.render_mode == "rgb_array":
            return self._render_to_array()

        if self.render_mode == "human":
            if self._screen_renderer is None:
                from bubble_dodge.dodge_core.render_pygame import PygameRenderer
                self._screen_renderer = PygameRenderer(self._config)
            self._screen_renderer.draw_frame(self._game.get_render_data())
            self._screen_renderer.present()

        return None

    def close(self) -> None:
        """Clean up resources."""
        if self._renderer is not None:
            self._renderer.close()
            self._renderer = None
        if self._screen_renderer is not None:
            self._screen_renderer.close()
            self._screen_renderer = None

    @property
    def game(self) -> DodgeGame:
        """Access to underlying game (for debugging/tools)."""
        return self._game

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config
