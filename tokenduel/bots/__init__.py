"""
Bots module - Policies that choose actions for a side.

Provides:
- CombatPolicy: Interface for decision-making
- RandomPolicy / FirstLegalPolicy: Baseline opponents
- ScriptedPolicy: Replays a fixed list of chosen actions
"""

from .policy import CombatPolicy, PolicyDecision, RandomPolicy, FirstLegalPolicy, ScriptedPolicy

__all__ = [
    "CombatPolicy",
    "PolicyDecision",
    "RandomPolicy",
    "FirstLegalPolicy",
    "ScriptedPolicy",
]
