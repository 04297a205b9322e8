"""
Actor - One combatant: a name, a ledger and its triggers.

Actors never reference each other. The combat state machine holds
both and hands them to actions by role (source / target).
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .tokens import TokenKind, TokenLedger
from .trigger import Trigger, TriggerCondition, TriggerRegistry


@dataclass
class Actor:
    """A combatant and everything it owns for the length of a combat."""
    name: str
    ledger: TokenLedger = field(default_factory=TokenLedger)
    triggers: TriggerRegistry = field(default_factory=TriggerRegistry)
    actions_remaining: int = 0

    def add_trigger(self, condition: TriggerCondition, trigger: Trigger) -> None:
        self.triggers.register(condition, trigger)

    def fire(self, condition: TriggerCondition) -> None:
        """Fire and prune this actor's triggers for a condition."""
        self.triggers.fire_and_prune(condition, self.ledger)

    @property
    def is_defeated(self) -> bool:
        return self.ledger.count(TokenKind.HEALTH) == 0
