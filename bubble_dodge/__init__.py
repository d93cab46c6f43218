"""
Bubble Dodge Package
====================

Steer a fish around a 1920x1080 field, dodge the falling bubbles and eat the
falling food. This package contains:

- dodge_core: the simulation (spawning, movement, collisions, scoring,
  game state machine) plus the pygame front end and the Gymnasium wrapper
- evaluation: per-profile survival scorecards for scripted agents

All gameplay constants live in game_config.yaml.
"""
