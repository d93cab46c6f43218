"""
Human Play Mode
================

Play bubble dodge interactively: steer the fish with the arrow keys, dodge
the bubbles and eat the food.

Controls:
    - Mouse: Click "Play" on the menu
    - Arrow keys: Move the fish
    - ESC: Quit

A finished game stays on its final frame until the window is closed or
Escape is pressed; playing again means starting the program again.

Usage:
    python -m tools.play_human [--seed SEED] [--profile PROFILE] [--fps FPS]

Exit code is 0 on a normal close and 1 when a required asset fails to load.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

import pygame

from bubble_dodge.dodge_core.assets import AssetLoadFailure, AssetLoader
from bubble_dodge.dodge_core.audio_pygame import PygameAudio
from bubble_dodge.dodge_core.config_loader import (
    FAILURE_POLICIES,
    GameConfig,
    load_config,
    with_asset_policy,
)
from bubble_dodge.dodge_core.controls import PointerPressed, WindowClosed
from bubble_dodge.dodge_core.game import DodgeGame
from bubble_dodge.dodge_core.input_pygame import PygameInput
from bubble_dodge.dodge_core.log_setup import setup_logging
from bubble_dodge.dodge_core.render_pygame import PygameRenderer
from bubble_dodge.dodge_core.rules import GameState

logger = logging.getLogger(__name__)

# Longest frame time fed to the simulation, in seconds
MAX_FRAME_SECONDS = 0.1


class HumanPlayer:
    """
    Frame loop for human play: poll events, tick while playing, draw.
    """

    def __init__(
        self,
        config: GameConfig,
        seed: Optional[int] = None,
        target_fps: int = 60,
        window_scale: float = 0.5,
        exit_on_end: bool = False
    ):
        self._config = config
        self._target_fps = target_fps
        self._exit_on_end = exit_on_end

        pygame.init()

        # Raises AssetLoadFailure before any window exists
        self._assets = AssetLoader(config).load_all()

        self._renderer = PygameRenderer(config, self._assets, window_scale=window_scale)
        self._input = PygameInput(scale=self._renderer.scale)
        self._audio = PygameAudio(self._assets.music_path)
        self._clock = pygame.time.Clock()

        self._game = DodgeGame(config=config, seed=seed)
        self._running = True
        self._announced = False

    @property
    def game(self) -> DodgeGame:
        return self._game

    @property
    def running(self) -> bool:
        return self._running

    def run(self) -> int:
        """Run the game loop. Returns final score."""
        print("=== Bubble Dodge ===")
        print("Arrow keys to swim, dodge the bubbles, eat the food")
        print("ESC to quit")
        print()

        self._audio.play(loop=True, volume_percent=self._config.assets.music_volume)
        dt = 0.0

        try:
            while self.run_frame(dt):
                dt = min(self._clock.tick(self._target_fps) / 1000.0, MAX_FRAME_SECONDS)
        finally:
            self.close()

        return self._game.score

    def run_frame(self, dt: float) -> bool:
        """
        Handle input, advance the game and draw one frame.

        Once the game has ended nothing advances it again; the final frame
        is redrawn until the player quits.

        Args:
            dt: Seconds since the previous frame.

        Returns:
            False when the loop should stop.
        """
        self._handle_events()
        if not self._running:
            return False

        if self._game.state is GameState.PLAYING:
            self._game.tick(dt, self._input.held_inputs())

        if self._game.is_over and not self._announced:
            print(f"Game Over! Score: {self._game.score}")
            self._announced = True
            if self._exit_on_end:
                self._running = False
                return False

        self._renderer.draw_frame(self._game.get_render_data())
        self._renderer.present()
        return True

    def close(self) -> None:
        """Stop the music and close the window."""
        self._audio.stop()
        self._renderer.close()
        pygame.quit()

    def _handle_events(self) -> None:
        """Process window events and the quit key."""
        for event in self._input.poll_events():
            if isinstance(event, WindowClosed):
                self._running = False
                return
            if isinstance(event, PointerPressed):
                self._game.press_pointer(event.x, event.y)

        if self._input.is_key_held("escape"):
            self._running = False


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Play bubble dodge interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--profile", type=str, default=None,
                        help="Rule profile (classic, neglect, endless)")
    parser.add_argument("--config", type=str, default=None, help="Path to game_config.yaml")
    parser.add_argument("--fps", type=int, default=60, help="Target FPS")
    parser.add_argument("--scale", type=float, default=0.5,
                        help="Window size relative to the field (default: 0.5)")
    parser.add_argument("--log-level", type=str, default="INFO", help="Logging level")
    parser.add_argument("--asset-policy", choices=FAILURE_POLICIES, default=None,
                        help="Override assets.on_failure")
    parser.add_argument("--exit-on-end", action="store_true",
                        help="Close the window as soon as the game ends")

    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    config = load_config(args.config, args.profile)
    if args.asset_policy is not None:
        config = with_asset_policy(config, args.asset_policy)

    try:
        player = HumanPlayer(
            config=config,
            seed=args.seed,
            target_fps=args.fps,
            window_scale=args.scale,
            exit_on_end=args.exit_on_end
        )
    except AssetLoadFailure as e:
        print(f"Error: {e}")
        pygame.quit()
        return 1

    score = player.run()
    print(f"\nFinal Score: {score}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
