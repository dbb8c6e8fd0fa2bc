"""
Daily Snake
===========

Deterministic grid-snake engine with a daily seed. Everyone playing on the
same UTC day gets the same sequence of spawns:

- Gold food that grants temporary wall wrap
- Teleporting portal pairs
- Combo scoring for quick consecutive eats
- A small local high score ledger

All tunable parameters are in game_config.yaml.
"""
