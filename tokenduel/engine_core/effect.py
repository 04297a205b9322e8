"""
Effects - Data-described token mutations.

An effect is one atomic change to a ledger: add N of a kind, or
remove N of a kind. Effects carry no ledger reference, so a single
effect value can be applied to any number of ledgers.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from .tokens import TokenKind, TokenLedger


class EffectType(Enum):
    """The two ways an effect can touch a ledger."""
    ADD_TOKEN = "add"
    REMOVE_TOKEN = "remove"


@dataclass(frozen=True)
class Effect:
    """A single token change."""
    effect_type: EffectType
    kind: TokenKind
    amount: int

    @classmethod
    def add(cls, kind: TokenKind, amount: int = 1) -> Effect:
        """Factory for an add-token effect."""
        return cls(effect_type=EffectType.ADD_TOKEN, kind=kind, amount=amount)

    @classmethod
    def remove(cls, kind: TokenKind, amount: int = 1) -> Effect:
        """Factory for a remove-token effect."""
        return cls(effect_type=EffectType.REMOVE_TOKEN, kind=kind, amount=amount)

    def describe(self) -> str:
        sign = "+" if self.effect_type == EffectType.ADD_TOKEN else "-"
        return f"{sign}{self.amount} {self.kind.label}"


def apply_effect(effect: Effect, ledger: TokenLedger) -> None:
    """Apply one effect to a ledger."""
    if effect.effect_type == EffectType.ADD_TOKEN:
        ledger.add(effect.kind, effect.amount)
    elif effect.effect_type == EffectType.REMOVE_TOKEN:
        ledger.remove(effect.kind, effect.amount)
    else:
        raise ValueError(f"Unhandled effect type: {effect.effect_type}")


def apply_effects(effects: Iterable[Effect], ledger: TokenLedger) -> None:
    """Apply effects in order."""
    for effect in effects:
        apply_effect(effect, ledger)
