"""
Tokenduel - Token-based turn combat engine

A deterministic, seed-replayable engine for two-actor turn-based combat.
The engine provides:
- Capped token ledgers for resources and statuses
- Actions that resolve into token effects, with d100 hit/miss rolls
- Triggers fired at turn and round boundaries
- A turn/round state machine deciding whose actions are legal
"""

__version__ = "0.1.0"
