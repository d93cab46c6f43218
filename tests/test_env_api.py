"""
Tests for Gymnasium environment API and observations.
"""

from dataclasses import replace

import pytest
import numpy as np

from bubble_dodge.dodge_core.config_loader import load_config
from bubble_dodge.dodge_core.env_gym import DodgeEnv
from bubble_dodge.dodge_core.entities import Hazard
from bubble_dodge.dodge_core.game import DodgeGame
from bubble_dodge.dodge_core.render_solid import SolidRenderer
from bubble_dodge.dodge_core.state_snapshot import STATE_IDS
from bubble_dodge.dodge_core.rules import GameState


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def env():
    env = DodgeEnv()
    yield env
    env.close()


class TestDodgeEnv:
    """Test single environment API."""

    def test_reset_returns_obs_and_info(self, env):
        obs, info = env.reset(seed=42)

        assert isinstance(obs, dict)
        assert isinstance(info, dict)
        assert info["delta_score"] == 0

    def test_reset_starts_playing(self, env):
        """Classic profile opens on the menu; reset presses Play."""
        obs, info = env.reset(seed=42)

        assert info["state"] == "playing"
        assert int(obs["state"]) == STATE_IDS[GameState.PLAYING]

    def test_observation_in_space(self, env):
        obs, _ = env.reset(seed=42)
        assert env.observation_space.contains(obs)

        obs, *_ = env.step(np.array([0, 1, 0, 0]))
        assert env.observation_space.contains(obs)

    def test_observation_shapes(self, env, config):
        obs, _ = env.reset(seed=42)
        max_hazards = config.observation.max_hazards

        assert obs["hazard_x"].shape == (max_hazards,)
        assert obs["hazard_mask"].shape == (max_hazards,)
        assert obs["edible_x"].shape == (config.edible.cap,)
        assert float(obs["avatar_x"]) == config.center[0]

    def test_step_returns_five_values(self, env):
        env.reset(seed=42)

        obs, reward, terminated, truncated, info = env.step(env.action_space.sample())

        assert isinstance(obs, dict)
        assert isinstance(reward, float)
        assert isinstance(terminated, bool)
        assert isinstance(truncated, bool)
        assert "delta_score" in info
        assert "collected" in info

    def test_reward_is_always_zero(self, env):
        env.reset(seed=42)

        for _ in range(50):
            _, reward, terminated, truncated, _ = env.step(env.action_space.sample())
            assert reward == 0.0
            if terminated or truncated:
                break

    def test_action_moves_avatar(self, env, config):
        env.reset(seed=42)

        obs, *_ = env.step([0, 1, 0, 0])

        assert float(obs["avatar_x"]) == pytest.approx(config.center[0] + config.avatar.speed)
        assert int(obs["facing_right"]) == 1

    def test_bad_action_shape(self, env):
        env.reset(seed=42)

        with pytest.raises(ValueError):
            env.step([1, 0])

    def test_terminates_on_hazard(self, env):
        env.reset(seed=42)
        avatar = env.game.context.avatar
        env.game.context.hazards.append(
            Hazard(uid=999, x=avatar.x, y=avatar.y, vy=0.1, radius=20.0)
        )

        _, _, terminated, truncated, info = env.step([0, 0, 0, 0])

        assert terminated
        assert not truncated
        assert info["terminated_reason"] == "hazard"

    def test_truncation(self, config):
        short = replace(config, observation=replace(config.observation, max_episode_ticks=5))
        env = DodgeEnv(config=short)
        env.reset(seed=1)

        flags = [env.step([0, 0, 0, 0])[3] for _ in range(5)]

        assert flags == [False, False, False, False, True]
        env.close()

    def test_deterministic_with_seed(self):
        def run():
            env = DodgeEnv()
            obs, _ = env.reset(seed=123)
            for i in range(300):
                obs, *_ = env.step([i % 2, 0, 1, 0])
            env.close()
            return obs

        a, b = run(), run()
        for key in a:
            np.testing.assert_array_equal(a[key], b[key])

    def test_unseeded_reset_starts_new_episode(self, env):
        """Only an explicit seed replays an episode; reset() moves on."""
        def play(seed=None):
            env.reset(seed=seed)
            for _ in range(300):
                _, _, terminated, truncated, _ = env.step([0, 0, 0, 0])
                if terminated or truncated:
                    break
            ctx = env.game.context
            return (
                [(h.x, h.y) for h in ctx.hazards],
                [(e.x, e.y) for e in ctx.edibles],
            )

        seeded = play(seed=5)
        second = play()
        third = play()

        assert second != seeded
        assert third != seeded
        assert third != second
        assert play(seed=5) == seeded

    def test_endless_profile(self):
        env = DodgeEnv(profile="endless")
        obs, info = env.reset(seed=0)

        assert info["state"] == "playing"
        assert obs["edible_x"].shape == (7,)
        env.close()


class TestSnapshot:
    """Test observation packing."""

    def test_nearest_first_ordering(self, env):
        env.reset(seed=5)
        ctx = env.game.context
        ax, ay = ctx.avatar.position
        ctx.hazards.extend([
            Hazard(uid=1, x=ax + 500, y=ay - 400, vy=0.0, radius=20.0),
            Hazard(uid=2, x=ax + 100, y=ay - 100, vy=0.0, radius=20.0),
        ])

        obs = env.game.snapshot().to_obs_dict()

        assert obs["hazard_mask"][:2].tolist() == [1, 1]
        assert obs["hazard_mask"][2:].sum() == 0
        assert obs["hazard_x"][0] == pytest.approx(ax + 100)
        assert float(obs["nearest_hazard_distance"]) == pytest.approx(np.hypot(100, 100), rel=1e-5)

    def test_empty_field_distance_is_diagonal(self, env, config):
        env.reset(seed=5)

        obs = env.game.snapshot().to_obs_dict()

        assert int(obs["hazard_count"]) == 0
        assert float(obs["nearest_hazard_distance"]) == pytest.approx(
            np.hypot(config.board.width, config.board.height)
        )


class TestImages:
    """Test image observations and rgb_array rendering."""

    def test_image_obs(self, config):
        env = DodgeEnv(image_obs=True)
        obs, _ = env.reset(seed=0)

        img = obs["board_rgb"]
        assert img.shape == (config.observation.image_height, config.observation.image_width, 3)
        assert img.dtype == np.uint8
        env.close()

    def test_rgb_array_render(self, config):
        env = DodgeEnv(render_mode="rgb_array")
        env.reset(seed=0)

        frame = env.render()

        assert frame.shape == (config.observation.image_height, config.observation.image_width, 3)
        env.close()

    def test_headless_render_returns_none(self, env):
        env.reset(seed=0)
        assert env.render() is None

    def test_menu_frame_shows_button(self, config):
        renderer = SolidRenderer(config)
        data = DodgeGame(config=config, seed=0).get_render_data()

        img = renderer.render(data, 192, 108)

        cx, cy = 96, 51
        assert tuple(img[cy, cx]) == (40, 200, 60)
        assert tuple(img[0, 0]) == (20, 40, 70)
