"""
Baseline Dodger Agent - Flees bubbles, chases food.

This is a simple heuristic agent that reads the nearest-first hazard and
edible arrays from the observation and holds the arrow keys that move the
fish away from danger or toward the next piece of food.

Strategy:
- Look at the nearest hazard. If it is within danger_radius and has not
  fallen past the fish yet, hold the keys pointing away from it.
- Otherwise steer toward the nearest edible.
- With nothing to chase, drift back toward the bottom centre, where the
  fish sees bubbles coming for the longest time.
"""

import numpy as np
from typing import Any, Dict, Optional


# Keys inside this distance of the target are released to avoid jitter
DEADZONE = 4.0


class DodgeAgent:
    """
    Simple baseline agent for the dodge environment.

    Actions are int8 arrays of held [left, right, up, down].
    """

    def __init__(self, danger_radius: float = 160.0, debug: bool = False):
        """
        Initialize the agent.

        Args:
            danger_radius: Hazards closer than this trigger a flee.
            debug: If True, print decisions to stdout.
        """
        self.danger_radius = danger_radius
        self.debug = debug

    def reset(self, seed: Optional[int] = None) -> None:
        """Reset agent state for a new episode. The agent is stateless."""

    def act(self, observation: Dict[str, Any]) -> np.ndarray:
        """
        Choose which arrow keys to hold this tick.

        Args:
            observation: Dict of numpy arrays from the environment.

        Returns:
            (4,) int8 array of held [left, right, up, down].
        """
        x = float(observation["avatar_x"])
        y = float(observation["avatar_y"])

        if observation["hazard_mask"][0]:
            hx = float(observation["hazard_x"][0])
            hy = float(observation["hazard_y"][0])
            threatening = hy <= y + self.danger_radius * 0.25
            if threatening and np.hypot(hx - x, hy - y) < self.danger_radius:
                if self.debug:
                    print(f"[Dodger] flee hazard at ({hx:.0f}, {hy:.0f})")
                return self._steer(x, y, 2 * x - hx, 2 * y - hy)

        if observation["edible_mask"][0]:
            tx = float(observation["edible_x"][0])
            ty = float(observation["edible_y"][0])
            if self.debug:
                print(f"[Dodger] chase edible at ({tx:.0f}, {ty:.0f})")
            return self._steer(x, y, tx, ty)

        width = float(observation["board_width"])
        height = float(observation["board_height"])
        return self._steer(x, y, width / 2, height * 0.8)

    @staticmethod
    def _steer(x: float, y: float, tx: float, ty: float) -> np.ndarray:
        """Hold the keys that move (x, y) toward (tx, ty)."""
        dx = tx - x
        dy = ty - y
        return np.array([
            dx < -DEADZONE,
            dx > DEADZONE,
            dy < -DEADZONE,
            dy > DEADZONE,
        ], dtype=np.int8)


# Convenience function to create agent (used by evaluation harness)
def create_agent(**kwargs) -> DodgeAgent:
    """Factory function to create an agent instance."""
    return DodgeAgent(**kwargs)
