"""
Agent Scorecard
===============

Plays a dodge agent through a batch of seeded episodes per rule profile and
reports how it survives, not just what it scores:

- survival time and the share of episodes that reach the tick limit
- how episodes end (hit by a hazard, food missed, or survived)
- food collected per minute of play
- closest clearance to any hazard, a measure of how risky the play is

Episode seeds are derived from one base seed, so two runs with the same
base seed and episode count play identical games.

Usage:
    python -m bubble_dodge.evaluation.scorecard --agent agents.baseline_dodger \
        --profiles classic neglect --episodes 20
"""

from __future__ import annotations

import argparse
import importlib
import json
import logging
import sys
from collections import Counter
from dataclasses import asdict, dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional

import numpy as np

from bubble_dodge.dodge_core.config_loader import GameConfig, load_config
from bubble_dodge.dodge_core.env_gym import DodgeEnv
from bubble_dodge.dodge_core.log_setup import setup_logging

logger = logging.getLogger(__name__)

Policy = Callable[[Dict[str, np.ndarray]], Any]

OUTCOMES = ("hazard", "neglect", "survived")


@dataclass
class EpisodeRecord:
    """How one seeded episode went."""
    seed: int
    score: int
    collections: int
    ticks: int
    survival_seconds: float
    outcome: str
    closest_clearance: float

    @property
    def collections_per_minute(self) -> float:
        if self.survival_seconds <= 0:
            return 0.0
        return self.collections * 60.0 / self.survival_seconds


@dataclass
class ProfileReport:
    """Aggregated results of one profile."""
    profile: str
    episodes: List[EpisodeRecord] = field(default_factory=list)

    def _values(self, name: str) -> np.ndarray:
        return np.array([getattr(e, name) for e in self.episodes], dtype=np.float64)

    @property
    def survival_rate(self) -> float:
        return float(np.mean([e.outcome == "survived" for e in self.episodes]))

    @property
    def outcome_counts(self) -> Dict[str, int]:
        counts = Counter(e.outcome for e in self.episodes)
        return {outcome: counts.get(outcome, 0) for outcome in OUTCOMES}

    @property
    def collections_per_minute(self) -> float:
        """Pooled over all episodes, so long games weigh more."""
        minutes = self._values("survival_seconds").sum() / 60.0
        if minutes <= 0:
            return 0.0
        return float(self._values("collections").sum() / minutes)

    def summary(self) -> Dict[str, Any]:
        survival = self._values("survival_seconds")
        scores = self._values("score")
        return {
            "profile": self.profile,
            "episodes": len(self.episodes),
            "survival_rate": self.survival_rate,
            "median_survival_seconds": float(np.median(survival)),
            "p10_survival_seconds": float(np.percentile(survival, 10)),
            "mean_score": float(scores.mean()),
            "best_score": int(scores.max()),
            "collections_per_minute": self.collections_per_minute,
            "closest_clearance": float(self._values("closest_clearance").min()),
            "outcomes": self.outcome_counts,
        }

    def to_dict(self) -> Dict[str, Any]:
        data = self.summary()
        data["records"] = [asdict(e) for e in self.episodes]
        return data


def episode_seeds(base_seed: int, count: int) -> List[int]:
    """
    Derive episode seeds from one base seed.

    Args:
        base_seed: Seed of the whole batch.
        count: Number of episodes.

    Returns:
        `count` seeds, identical for identical arguments.
    """
    if count <= 0:
        raise ValueError(f"Episode count must be positive, got {count}")
    state = np.random.SeedSequence(base_seed).generate_state(count, dtype=np.uint32)
    return [int(s) for s in state]


def resolve_policy(target: str) -> Policy:
    """
    Import an agent and return its act function.

    `target` is a module path, optionally followed by `:factory`. The factory
    (default `create_agent`) is called without arguments and must return an
    object with an `act(obs)` method. Modules without the default factory
    may expose a plain `act(obs)` function instead.

    Raises:
        ImportError: If the module cannot be imported.
        AttributeError: If no factory or act function is found.
    """
    module_name, _, factory_name = target.partition(":")
    module = importlib.import_module(module_name)

    if factory_name:
        return getattr(module, factory_name)().act
    if hasattr(module, "create_agent"):
        return module.create_agent().act
    if hasattr(module, "act"):
        return module.act

    raise AttributeError(f"{module_name} defines neither create_agent() nor act()")


def play_episode(env: DodgeEnv, policy: Policy, seed: int) -> EpisodeRecord:
    """Run one episode to termination or truncation."""
    config = env.game.config
    reach = config.avatar.radius + config.hazard.radius

    obs, info = env.reset(seed=seed)
    closest = float(obs["nearest_hazard_distance"]) - reach

    terminated = truncated = False
    while not (terminated or truncated):
        obs, _, terminated, truncated, info = env.step(policy(obs))
        if int(obs["hazard_count"]) > 0:
            closest = min(closest, float(obs["nearest_hazard_distance"]) - reach)

    record = EpisodeRecord(
        seed=seed,
        score=info["score"],
        collections=info["collections"],
        ticks=info["ticks"],
        survival_seconds=info["ticks"] * config.timing.tick_seconds,
        outcome=info["terminated_reason"] if terminated else "survived",
        closest_clearance=closest,
    )
    logger.debug("Seed %d: %s after %.1fs, score %d",
                 seed, record.outcome, record.survival_seconds, record.score)
    return record


def score_profile(
    policy: Policy,
    config: GameConfig,
    seeds: List[int],
    max_seconds: Optional[float] = None
) -> ProfileReport:
    """
    Play every seed under one profile.

    Args:
        policy: Agent act function, obs -> [left, right, up, down].
        config: Configuration with the profile already applied.
        seeds: Episode seeds.
        max_seconds: Truncate episodes after this much game time.

    Returns:
        ProfileReport with one record per seed.
    """
    if max_seconds is not None:
        ticks = max(1, int(round(max_seconds / config.timing.tick_seconds)))
        config = replace(config, observation=replace(config.observation, max_episode_ticks=ticks))

    report = ProfileReport(profile=config.rules.profile)
    env = DodgeEnv(config=config)
    try:
        for seed in seeds:
            report.episodes.append(play_episode(env, policy, seed))
    finally:
        env.close()
    return report


def format_scorecard(reports: List[ProfileReport]) -> str:
    """Render reports as a fixed-width table."""
    header = (f"{'profile':<10}{'survived':>10}{'median s':>10}{'p10 s':>9}"
              f"{'score':>9}{'food/min':>10}{'clearance':>11}  outcomes")
    lines = [header, "-" * len(header)]
    for report in reports:
        s = report.summary()
        outcomes = " ".join(f"{k}={v}" for k, v in s["outcomes"].items())
        lines.append(
            f"{s['profile']:<10}{s['survival_rate']:>9.0%} {s['median_survival_seconds']:>10.1f}"
            f"{s['p10_survival_seconds']:>9.1f}{s['mean_score']:>9.1f}"
            f"{s['collections_per_minute']:>10.1f}{s['closest_clearance']:>11.1f}  {outcomes}"
        )
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Score a bubble dodge agent per rule profile")
    parser.add_argument("--agent", type=str, default="agents.baseline_dodger",
                        help="Agent module, optionally module:factory")
    parser.add_argument("--profiles", nargs="+", default=["classic"],
                        help="Rule profiles to play (classic, neglect, endless)")
    parser.add_argument("--episodes", type=int, default=10, help="Episodes per profile")
    parser.add_argument("--seed", type=int, default=0, help="Base seed for the episode seeds")
    parser.add_argument("--max-seconds", type=float, default=None,
                        help="Truncate episodes after this much game time")
    parser.add_argument("--config", type=str, default=None, help="Path to game_config.yaml")
    parser.add_argument("--output", type=str, default=None, help="Write the full report as JSON")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Logging level")

    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        policy = resolve_policy(args.agent)
    except (ImportError, AttributeError) as e:
        print(f"Error loading agent {args.agent}: {e}")
        return 1

    try:
        configs = [load_config(args.config, profile) for profile in args.profiles]
        seeds = episode_seeds(args.seed, args.episodes)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    reports = []
    for config in configs:
        print(f"Playing {len(seeds)} episodes of {config.rules.profile}...")
        reports.append(score_profile(policy, config, seeds, max_seconds=args.max_seconds))

    print()
    print(format_scorecard(reports))

    if args.output:
        data = {
            "agent": args.agent,
            "base_seed": args.seed,
            "profiles": [report.to_dict() for report in reports],
        }
        with open(args.output, "w") as f:
            json.dump(data, f, indent=2)
        print(f"\nReport saved to {args.output}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
