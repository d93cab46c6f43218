"""
Tests for the agent scorecard and the baseline agent.
"""

import json
from dataclasses import replace

import numpy as np
import pytest

from agents.baseline_dodger.agent import DodgeAgent
from bubble_dodge.dodge_core.config_loader import load_config
from bubble_dodge.dodge_core.entities import Hazard
from bubble_dodge.dodge_core.env_gym import DodgeEnv
from bubble_dodge.evaluation.scorecard import (
    EpisodeRecord,
    ProfileReport,
    episode_seeds,
    format_scorecard,
    main,
    play_episode,
    resolve_policy,
    score_profile,
)


def idle(obs):
    return np.zeros(4, dtype=np.int8)


@pytest.fixture
def short_config():
    """Classic rules with short episodes."""
    config = load_config()
    return replace(config, observation=replace(config.observation, max_episode_ticks=200))


def _record(seed, outcome, seconds, collections, clearance=50.0):
    return EpisodeRecord(
        seed=seed,
        score=collections * 10,
        collections=collections,
        ticks=int(seconds * 240),
        survival_seconds=seconds,
        outcome=outcome,
        closest_clearance=clearance,
    )


class TestEpisodeSeeds:
    """Test seed derivation."""

    def test_repeatable(self):
        assert episode_seeds(7, 5) == episode_seeds(7, 5)

    def test_prefix_stable_and_distinct(self):
        seeds = episode_seeds(7, 20)

        assert episode_seeds(7, 5) == seeds[:5]
        assert len(set(seeds)) == 20
        assert all(isinstance(s, int) and s >= 0 for s in seeds)
        assert episode_seeds(8, 5) != seeds[:5]

    def test_count_must_be_positive(self):
        with pytest.raises(ValueError):
            episode_seeds(0, 0)


class TestResolvePolicy:
    """Test agent discovery by module path."""

    def test_baseline_factory(self):
        act = resolve_policy("agents.baseline_dodger")
        assert callable(act)

    def test_named_factory(self):
        act = resolve_policy("agents.baseline_dodger.agent:DodgeAgent")
        assert act.__self__.__class__ is DodgeAgent

    def test_plain_act_function(self, tmp_path, monkeypatch):
        (tmp_path / "still_fish.py").write_text("def act(obs):\n    return [0, 0, 0, 0]\n")
        monkeypatch.syspath_prepend(str(tmp_path))

        act = resolve_policy("still_fish")

        assert act({}) == [0, 0, 0, 0]

    def test_missing_module(self):
        with pytest.raises(ImportError):
            resolve_policy("no_such_fish_module")

    def test_module_without_entry_point(self, tmp_path, monkeypatch):
        (tmp_path / "empty_fish.py").write_text("VALUE = 1\n")
        monkeypatch.syspath_prepend(str(tmp_path))

        with pytest.raises(AttributeError):
            resolve_policy("empty_fish")


class TestPlayEpisode:
    """Test single episode records."""

    def test_survives_to_truncation(self, short_config):
        env = DodgeEnv(config=short_config)

        record = play_episode(env, idle, seed=3)
        env.close()

        assert record.outcome == "survived"
        assert record.ticks == 200
        assert record.survival_seconds == pytest.approx(200 * short_config.timing.tick_seconds)
        assert record.score == record.collections * short_config.scoring.increment

    def test_hazard_hit(self, short_config):
        env = DodgeEnv(config=short_config)

        def sit_under_bubble(obs):
            avatar = env.game.context.avatar
            env.game.context.hazards.append(
                Hazard(uid=999, x=avatar.x, y=avatar.y, vy=0.1, radius=20.0)
            )
            return [0, 0, 0, 0]

        record = play_episode(env, sit_under_bubble, seed=3)
        env.close()

        assert record.outcome == "hazard"
        assert record.ticks == 1
        assert record.closest_clearance < 0


class TestProfileReport:
    """Test aggregation."""

    def test_summary(self):
        report = ProfileReport(profile="classic", episodes=[
            _record(1, "survived", 60.0, 6, clearance=12.0),
            _record(2, "hazard", 30.0, 3, clearance=-4.0),
            _record(3, "hazard", 30.0, 0),
            _record(4, "neglect", 0.0, 0),
        ])

        summary = report.summary()

        assert summary["survival_rate"] == pytest.approx(0.25)
        assert summary["outcomes"] == {"hazard": 2, "neglect": 1, "survived": 1}
        assert summary["median_survival_seconds"] == pytest.approx(30.0)
        assert summary["collections_per_minute"] == pytest.approx(9 / 2.0)
        assert summary["closest_clearance"] == pytest.approx(-4.0)
        assert summary["best_score"] == 60

    def test_zero_length_episode_rate(self):
        assert _record(1, "neglect", 0.0, 0).collections_per_minute == 0.0

    def test_table_lists_profiles(self):
        reports = [
            ProfileReport(profile=name, episodes=[_record(1, "survived", 10.0, 1)])
            for name in ("classic", "endless")
        ]

        table = format_scorecard(reports).splitlines()

        assert len(table) == 4
        assert table[2].startswith("classic")
        assert table[3].startswith("endless")


class TestScoreProfile:
    """Test batches of episodes."""

    def test_repeatable_with_same_seeds(self):
        config = load_config(profile="neglect")
        seeds = episode_seeds(1, 3)
        act = DodgeAgent().act

        first = score_profile(act, config, seeds, max_seconds=0.5)
        second = score_profile(act, config, seeds, max_seconds=0.5)

        assert first.profile == "neglect"
        assert first.to_dict() == second.to_dict()
        assert [e.seed for e in first.episodes] == seeds
        assert all(e.ticks <= 120 for e in first.episodes)

    def test_main(self, tmp_path):
        out = tmp_path / "scorecard.json"

        code = main([
            "--profiles", "classic", "endless", "--episodes", "2",
            "--max-seconds", "0.5", "--output", str(out),
        ])

        data = json.loads(out.read_text())
        assert code == 0
        assert data["agent"] == "agents.baseline_dodger"
        assert [p["profile"] for p in data["profiles"]] == ["classic", "endless"]
        assert all(len(p["records"]) == 2 for p in data["profiles"])

    def test_main_exit_codes(self):
        assert main(["--agent", "no_such_fish_module"]) == 1
        assert main(["--profiles", "sideways", "--episodes", "1"]) == 1
        assert main(["--episodes", "0"]) == 1


class TestBaselineAgent:
    """Test the heuristic dodger."""

    def test_action_format(self):
        env = DodgeEnv()
        obs, _ = env.reset(seed=0)

        action = DodgeAgent().act(obs)

        assert action.shape == (4,)
        assert env.action_space.contains(action)
        env.close()

    def test_flees_hazard_above(self):
        env = DodgeEnv()
        obs, _ = env.reset(seed=0)
        obs = dict(obs)
        obs["hazard_mask"] = np.zeros_like(obs["hazard_mask"])
        obs["hazard_mask"][0] = 1
        obs["hazard_x"] = np.zeros_like(obs["hazard_x"])
        obs["hazard_y"] = np.zeros_like(obs["hazard_y"])
        obs["hazard_x"][0] = obs["avatar_x"] - 30
        obs["hazard_y"][0] = obs["avatar_y"] - 30

        left, right, up, down = DodgeAgent().act(obs)

        assert right and down
        assert not left and not up
        env.close()

    def test_chases_edible(self):
        env = DodgeEnv()
        obs, _ = env.reset(seed=0)
        obs = dict(obs)
        obs["edible_mask"] = np.zeros_like(obs["edible_mask"])
        obs["edible_mask"][0] = 1
        obs["edible_x"] = np.zeros_like(obs["edible_x"])
        obs["edible_y"] = np.zeros_like(obs["edible_y"])
        obs["edible_x"][0] = obs["avatar_x"] - 200
        obs["edible_y"][0] = obs["avatar_y"]

        left, right, up, down = DodgeAgent().act(obs)

        assert left
        assert not (right or up or down)
        env.close()

    def test_runs_full_episode(self, short_config):
        env = DodgeEnv(config=short_config)

        record = play_episode(env, DodgeAgent().act, seed=5)
        env.close()

        assert 0 < record.ticks <= 200
        assert record.score == record.collections * short_config.scoring.increment
