"""
Triggers - Conditional reactions fired at lifecycle boundaries.

A trigger is registered on one actor under one condition. When the
combat reaches that condition for the actor, every trigger under it
runs against the actor's ledger, in registration order. Right after
the firing pass the registry drops triggers that report themselves
dead.

Damage works through a trigger: attacks only add DAMAGE tokens, and
ApplyDamageTrigger converts them into lost health at a boundary.
Anything that edits the DAMAGE count before that point (healing,
shields) intercepts the damage. BlockDamageTrigger is the built-in
interceptor: BLOCK tokens cancel DAMAGE tokens before they land.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from enum import Enum
import logging
from typing import Sequence

from .effect import Effect, apply_effects
from .tokens import TokenKind, TokenLedger

logger = logging.getLogger(__name__)


class TriggerCondition(Enum):
    """Lifecycle points a trigger can react to."""
    ROUND_START = "round_start"
    ROUND_END = "round_end"
    TURN_START = "turn_start"
    TURN_END = "turn_end"


class Trigger(ABC):
    """Base class for registry-held reactions."""

    @property
    @abstractmethod
    def description(self) -> str:
        pass

    @abstractmethod
    def execute(self, ledger: TokenLedger) -> None:
        """React to the condition by reading/mutating the ledger."""
        pass

    def is_alive(self) -> bool:
        """Whether the trigger stays registered after a firing."""
        return True

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.description!r})"


class ApplyDamageTrigger(Trigger):
    """
    Resolve pending damage once it is at least the current health.

    Smaller pending damage stays on the ledger and keeps accumulating.
    """

    @property
    def description(self) -> str:
        return "Apply damage to health"

    def execute(self, ledger: TokenLedger) -> None:
        damage = ledger.count(TokenKind.DAMAGE)
        health = ledger.count(TokenKind.HEALTH)
        if damage == 0 or damage < health:
            return
        logger.debug("Resolving %d pending damage against %d health", damage, health)
        ledger.remove(TokenKind.HEALTH, damage)
        ledger.remove(TokenKind.DAMAGE, damage)


class BlockDamageTrigger(Trigger):
    """
    Cancel pending damage against held BLOCK, one for one.

    Both counts drop by the smaller of the two, so a shield is worn
    down by what it stops. Register it ahead of ApplyDamageTrigger
    under the same condition.
    """

    @property
    def description(self) -> str:
        return "Block pending damage"

    def execute(self, ledger: TokenLedger) -> None:
        absorbed = min(ledger.count(TokenKind.BLOCK), ledger.count(TokenKind.DAMAGE))
        if absorbed == 0:
            return
        logger.debug("Blocked %d pending damage", absorbed)
        ledger.remove(TokenKind.BLOCK, absorbed)
        ledger.remove(TokenKind.DAMAGE, absorbed)


class EffectTrigger(Trigger):
    """
    Apply a fixed list of effects every time the condition fires.

    With charges set, each firing uses one charge and the trigger
    dies when none are left. charges=None keeps it forever.
    """

    def __init__(
        self,
        description: str,
        effects: Sequence[Effect],
        charges: int | None = None,
    ):
        self._description = description
        self.effects = tuple(effects)
        self.charges = charges

    @property
    def description(self) -> str:
        return self._description

    def execute(self, ledger: TokenLedger) -> None:
        if self.charges is not None and self.charges <= 0:
            return
        apply_effects(self.effects, ledger)
        if self.charges is not None:
            self.charges -= 1

    def is_alive(self) -> bool:
        return self.charges is None or self.charges > 0


class TriggerRegistry:
    """
    Per-actor triggers keyed by condition.

    Insertion order is firing order. A condition key only exists
    while it has at least one trigger.
    """

    def __init__(self):
        self._triggers: dict[TriggerCondition, list[Trigger]] = {}

    def register(self, condition: TriggerCondition, trigger: Trigger) -> None:
        self._triggers.setdefault(condition, []).append(trigger)

    def fire(self, condition: TriggerCondition, ledger: TokenLedger) -> None:
        """Run every trigger under the condition. Does not prune."""
        for trigger in list(self._triggers.get(condition, ())):
            logger.debug("Firing %s on %s", trigger, condition.value)
            trigger.execute(ledger)

    def prune(self, condition: TriggerCondition) -> None:
        """Drop dead triggers under the condition."""
        triggers = self._triggers.get(condition)
        if triggers is None:
            return
        alive = [t for t in triggers if t.is_alive()]
        if alive:
            self._triggers[condition] = alive
        else:
            del self._triggers[condition]

    def fire_and_prune(self, condition: TriggerCondition, ledger: TokenLedger) -> None:
        self.fire(condition, ledger)
        self.prune(condition)

    def triggers(self, condition: TriggerCondition) -> tuple[Trigger, ...]:
        return tuple(self._triggers.get(condition, ()))

    def conditions(self) -> list[TriggerCondition]:
        return list(self._triggers)

    def __contains__(self, condition: object) -> bool:
        return condition in self._triggers

    def __len__(self) -> int:
        return sum(len(triggers) for triggers in self._triggers.values())
