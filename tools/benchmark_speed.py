"""
Performance Benchmark
=====================

Measures headless tick throughput of the dodge simulation.

Usage:
    python -m tools.benchmark_speed [--steps S] [--envs N ...] [--profile P]
"""

from __future__ import annotations

import argparse
import sys
import time
from typing import List, Optional

import numpy as np
import gymnasium as gym

from bubble_dodge.dodge_core.config_loader import GameConfig, load_config
from bubble_dodge.dodge_core.controls import InputState
from bubble_dodge.dodge_core.env_gym import DodgeEnv
from bubble_dodge.dodge_core.game import DodgeGame
from bubble_dodge.dodge_core.log_setup import setup_logging


def benchmark_core_game(
    config: GameConfig,
    num_steps: int = 1000,
    seed: int = 42
) -> dict:
    """
    Benchmark raw DodgeGame ticks without Gym overhead.

    Args:
        config: Game configuration.
        num_steps: Number of ticks.
        seed: Random seed.

    Returns:
        Dict with timing results.
    """
    game = DodgeGame(config=config, seed=seed)
    rng = np.random.default_rng(seed)
    dt = config.timing.tick_seconds

    def start_game(new_seed=None) -> None:
        game.reset(seed=new_seed)
        game.press_pointer(*game.menu.play_button_center())

    start_game(seed)
    start = time.perf_counter()

    for _ in range(num_steps):
        inputs = InputState.from_array(rng.integers(0, 2, size=4))
        game.tick(dt, inputs)
        if game.is_over:
            start_game()

    elapsed = time.perf_counter() - start

    return {
        "mode": "core_game",
        "num_envs": 1,
        "num_steps": num_steps,
        "elapsed_seconds": elapsed,
        "steps_per_second": num_steps / elapsed,
        "ms_per_step": (elapsed * 1000) / num_steps
    }


def benchmark_single_env(
    config: GameConfig,
    num_steps: int = 1000,
    seed: int = 42,
    image_obs: bool = False
) -> dict:
    """
    Benchmark single environment performance.

    Args:
        config: Game configuration.
        num_steps: Number of steps to run.
        seed: Random seed.
        image_obs: Include the rendered board in observations.

    Returns:
        Dict with timing results.
    """
    env = DodgeEnv(config=config, image_obs=image_obs)

    obs, _ = env.reset(seed=seed)
    env.action_space.seed(seed)
    start = time.perf_counter()

    for _ in range(num_steps):
        obs, _, terminated, truncated, _ = env.step(env.action_space.sample())
        if terminated or truncated:
            obs, _ = env.reset()

    elapsed = time.perf_counter() - start
    env.close()

    return {
        "mode": "env_image" if image_obs else "env",
        "num_envs": 1,
        "num_steps": num_steps,
        "elapsed_seconds": elapsed,
        "steps_per_second": num_steps / elapsed,
        "ms_per_step": (elapsed * 1000) / num_steps
    }


def benchmark_vector_env(
    config: GameConfig,
    num_envs: int = 8,
    num_steps: int = 1000,
    seed: int = 42
) -> dict:
    """
    Benchmark a Gymnasium SyncVectorEnv of DodgeEnv copies.

    Args:
        config: Game configuration.
        num_envs: Number of environments.
        num_steps: Number of steps per environment.
        seed: Random seed.

    Returns:
        Dict with timing results.
    """
    vec_env = gym.vector.SyncVectorEnv(
        [lambda: DodgeEnv(config=config) for _ in range(num_envs)]
    )
    vec_env.reset(seed=seed)
    vec_env.action_space.seed(seed)
    start = time.perf_counter()

    for _ in range(num_steps):
        vec_env.step(vec_env.action_space.sample())

    elapsed = time.perf_counter() - start
    vec_env.close()

    total_steps = num_steps * num_envs
    return {
        "mode": "vector",
        "num_envs": num_envs,
        "num_steps": num_steps,
        "total_env_steps": total_steps,
        "elapsed_seconds": elapsed,
        "steps_per_second": total_steps / elapsed,
        "ms_per_batch": (elapsed * 1000) / num_steps
    }


def run_all_benchmarks(
    config: GameConfig,
    vector_env_sizes: List[int],
    steps: int = 1000
) -> list:
    """Run every benchmark and print a summary table."""
    results = []

    print("=" * 60)
    print("BUBBLE DODGE PERFORMANCE BENCHMARK")
    print(f"profile: {config.rules.profile}")
    print("=" * 60)
    print()

    print("Benchmarking DodgeGame (raw)...")
    results.append(benchmark_core_game(config, num_steps=steps))

    print("Benchmarking DodgeEnv (single)...")
    results.append(benchmark_single_env(config, num_steps=steps))

    print("Benchmarking DodgeEnv (image obs)...")
    results.append(benchmark_single_env(config, num_steps=max(1, steps // 10), image_obs=True))

    for num_envs in vector_env_sizes:
        print(f"Benchmarking SyncVectorEnv (n={num_envs})...")
        results.append(benchmark_vector_env(config, num_envs=num_envs, num_steps=steps))

    print()
    print(f"{'Mode':<20} {'Envs':>6} {'Steps/s':>12} {'ms/step':>10}")
    print("-" * 50)

    for r in results:
        ms = r.get("ms_per_step", r.get("ms_per_batch"))
        print(f"{r['mode']:<20} {r['num_envs']:>6} {r['steps_per_second']:>12.1f} {ms:>10.3f}")

    return results


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Benchmark bubble dodge tick throughput")
    parser.add_argument("--steps", type=int, default=2000, help="Steps per benchmark")
    parser.add_argument("--envs", type=int, nargs="+", default=[1, 8],
                        help="Vector env sizes to test")
    parser.add_argument("--profile", type=str, default=None, help="Rule profile")
    parser.add_argument("--quick", action="store_true", help="Quick benchmark (fewer steps)")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Logging level")

    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    config = load_config(profile=args.profile)
    steps = 200 if args.quick else args.steps

    run_all_benchmarks(config, vector_env_sizes=args.envs, steps=steps)
    return 0


if __name__ == "__main__":
    sys.exit(main())
