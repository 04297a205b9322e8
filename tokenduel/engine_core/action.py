"""
Action System - Named capabilities that turn into effects.

An action has:
1. A legality rule (token thresholds on the acting and/or opposing side)
2. A resolution rule producing two ordered effect lists
   (effects on the source, effects on the target)

Actions hold no reference to any actor and are safe to reuse.
Randomness is always drawn from the generator passed to perform(),
so a seeded generator replays a combat exactly.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
import logging
from random import Random
from typing import Mapping, Sequence

from .effect import Effect
from .tokens import TokenKind, TokenLedger

logger = logging.getLogger(__name__)


MISS_PENALTY = 50
ROLL_MIN = 1
ROLL_MAX = 100


class LegalityMode(Enum):
    """How source and target thresholds combine."""
    ANY_SIDE = "any"  # Either side's thresholds suffice
    ALL_SIDES = "all"  # Both sides must meet their thresholds


def thresholds_met(required: Mapping[TokenKind, int], ledger: TokenLedger) -> bool:
    """Every declared (kind, minimum) pair holds. Empty is always met."""
    return all(ledger.count(kind) >= minimum for kind, minimum in required.items())


@dataclass(frozen=True)
class DamageRange:
    """Closed integer interval for variable damage."""
    low: int
    high: int

    def __post_init__(self):
        if self.low > self.high:
            raise ValueError(f"Damage range low ({self.low}) exceeds high ({self.high})")

    def roll(self, rng: Random) -> int:
        return rng.randint(self.low, self.high)


@dataclass
class ActionOutcome:
    """
    Result of resolving an action.

    A miss is its own outcome: missed=True and no effects. A hit may
    still carry empty effect lists.
    """
    missed: bool = False
    source_effects: list[Effect] = field(default_factory=list)
    target_effects: list[Effect] = field(default_factory=list)

    # Roll details (None for deterministic actions)
    roll: int | None = None
    miss_chance: int = 0
    damage_roll: int | None = None

    @classmethod
    def miss(cls, roll: int, miss_chance: int) -> ActionOutcome:
        """Create a miss outcome."""
        return cls(missed=True, roll=roll, miss_chance=miss_chance)

    @classmethod
    def hit(
        cls,
        source_effects: Sequence[Effect],
        target_effects: Sequence[Effect],
        roll: int | None = None,
        miss_chance: int = 0,
        damage_roll: int | None = None,
    ) -> ActionOutcome:
        """Create a hit outcome carrying effect lists."""
        return cls(
            missed=False,
            source_effects=list(source_effects),
            target_effects=list(target_effects),
            roll=roll,
            miss_chance=miss_chance,
            damage_roll=damage_roll,
        )

    @property
    def effects(self) -> tuple[list[Effect], list[Effect]] | None:
        """(source effects, target effects), or None on a miss."""
        if self.missed:
            return None
        return self.source_effects, self.target_effects


@dataclass(frozen=True, eq=False)
class ActionDefinition(ABC):
    """
    Base class for actions.

    Subclasses implement perform(); legality is shared.
    """
    name: str
    required_source: Mapping[TokenKind, int] = field(default_factory=dict)
    required_target: Mapping[TokenKind, int] = field(default_factory=dict)
    legality: LegalityMode = LegalityMode.ANY_SIDE
    source_effects: tuple[Effect, ...] = ()
    target_effects: tuple[Effect, ...] = ()
    description: str = ""

    def can_perform(self, source: TokenLedger, target: TokenLedger) -> bool:
        """Check the action's token thresholds against both ledgers."""
        source_ok = thresholds_met(self.required_source, source)
        target_ok = thresholds_met(self.required_target, target)
        if self.legality == LegalityMode.ALL_SIDES:
            return source_ok and target_ok
        return source_ok or target_ok

    @abstractmethod
    def perform(self, rng: Random, source: TokenLedger, target: TokenLedger) -> ActionOutcome:
        """Resolve the action into effects. Never mutates the ledgers."""
        pass


@dataclass(frozen=True, eq=False)
class DeterministicAction(ActionDefinition):
    """An action that always produces its configured effects."""

    def perform(self, rng: Random, source: TokenLedger, target: TokenLedger) -> ActionOutcome:
        return ActionOutcome.hit(self.source_effects, self.target_effects)


@dataclass(frozen=True, eq=False)
class SingleEnemyAction(ActionDefinition):
    """
    An offensive action against the opponent, resolved with a d100 roll.

    Miss chance is MISS_PENALTY for a dodging target plus MISS_PENALTY
    for a blinded source, each skipped when the kind is ignored.
    """
    ignore: frozenset[TokenKind] = frozenset()
    damage: DamageRange | None = None

    def miss_chance(self, source: TokenLedger, target: TokenLedger) -> int:
        chance = 0
        if TokenKind.DODGE not in self.ignore and target.count(TokenKind.DODGE) > 0:
            chance += MISS_PENALTY
        if TokenKind.BLIND not in self.ignore and source.count(TokenKind.BLIND) > 0:
            chance += MISS_PENALTY
        return chance

    def perform(self, rng: Random, source: TokenLedger, target: TokenLedger) -> ActionOutcome:
        chance = self.miss_chance(source, target)
        roll = rng.randint(ROLL_MIN, ROLL_MAX)
        if roll <= chance:
            logger.debug("%s missed (roll %d <= %d)", self.name, roll, chance)
            return ActionOutcome.miss(roll, chance)

        target_effects = list(self.target_effects)
        damage_roll = None
        if self.damage is not None:
            damage_roll = self.damage.roll(rng)
            target_effects.append(Effect.add(TokenKind.DAMAGE, damage_roll))

        logger.debug("%s hit (roll %d > %d)", self.name, roll, chance)
        return ActionOutcome.hit(
            self.source_effects,
            target_effects,
            roll=roll,
            miss_chance=chance,
            damage_roll=damage_roll,
        )
