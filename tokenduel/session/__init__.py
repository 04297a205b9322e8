"""
Session module - Drives combats between policies.

Provides:
- Duel: tick-by-tick combat driver
- DuelResult / DuelState: outcome and progress
"""

from .duel import Duel, DuelResult, DuelState, DEFAULT_MAX_TICKS

__all__ = [
    "Duel",
    "DuelResult",
    "DuelState",
    "DEFAULT_MAX_TICKS",
]
