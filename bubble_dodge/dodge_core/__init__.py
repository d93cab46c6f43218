"""
Dodge Core - The bubble dodge simulation.

This module provides the game simulation, its systems (spawning, movement,
collision, scoring) and the Gymnasium environment wrapper. The pygame front
end (render_pygame, input_pygame, audio_pygame, assets) is imported on demand
by tools/play_human.py.

Main exports:
- DodgeGame: Game state machine sequencing one tick at a time
- DodgeEnv: Gymnasium environment for scripted and learning agents
- GameConfig: Configuration loaded from game_config.yaml
- RandomSource: The single seeded random stream shared by the spawner
"""

from bubble_dodge.dodge_core.config_loader import GameConfig, load_config
from bubble_dodge.dodge_core.rng import RandomSource
from bubble_dodge.dodge_core.controls import InputState, NO_INPUT
from bubble_dodge.dodge_core.rules import GameState
from bubble_dodge.dodge_core.scoring import ScoreTracker
from bubble_dodge.dodge_core.world import SimulationContext, create_context
from bubble_dodge.dodge_core.game import DodgeGame, TickResult
from bubble_dodge.dodge_core.env_gym import DodgeEnv

__all__ = [
    "GameConfig",
    "load_config",
    "RandomSource",
    "InputState",
    "NO_INPUT",
    "GameState",
    "ScoreTracker",
    "SimulationContext",
    "create_context",
    "DodgeGame",
    "TickResult",
    "DodgeEnv",
]
