"""
Baseline Dodger Agent Package

A heuristic agent that flees nearby bubbles and otherwise chases food.
Serves as a benchmark and as an example of reading observations.
"""

from .agent import DodgeAgent, create_agent

__all__ = ["DodgeAgent", "create_agent"]
