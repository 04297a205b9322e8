"""Combat errors."""

from __future__ import annotations


class CombatError(Exception):
    """Base class for combat engine errors."""


class IllegalActionError(CombatError):
    """Raised when an action that fails its legality check reaches resolution."""

    def __init__(self, action_name: str, actor_name: str):
        self.action_name = action_name
        self.actor_name = actor_name
        super().__init__(f"{actor_name} cannot perform '{action_name}'")
