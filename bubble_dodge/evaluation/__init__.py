"""
Evaluation Package
==================

Scorecards that measure how long a dodge agent survives under each rule
profile and how it plays while it does.
"""

from bubble_dodge.evaluation.scorecard import episode_seeds, resolve_policy, score_profile

__all__ = ["episode_seeds", "resolve_policy", "score_profile"]
