"""
Pytest fixtures for tokenduel tests.
"""

import pytest

from ..config import CombatSettings
from ..engine_core.actor import Actor
from ..engine_core.combat import CombatStateMachine
from ..engine_core.tokens import TokenKind, TokenLedger
from ..engine_core.trigger import ApplyDamageTrigger, TriggerCondition


class FixedRolls:
    """
    Stand-in for random.Random that returns queued randint values.

    Lets a test pin the exact d100 roll (and damage roll) an action sees.
    """

    def __init__(self, *values: int):
        self.values = list(values)
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        if not self.values:
            raise AssertionError(f"Unexpected roll randint({a}, {b})")
        value = self.values.pop(0)
        assert a <= value <= b, f"Queued roll {value} outside [{a}, {b}]"
        self.calls.append((a, b))
        return value


def make_fighter(name: str, health: int = 10, stamina: int = 3) -> Actor:
    """An actor with health, stamina and damage resolution at turn start."""
    ledger = TokenLedger.from_counts(
        counts={TokenKind.HEALTH: health, TokenKind.STAMINA: stamina},
        capacities={
            TokenKind.HEALTH: health,
            TokenKind.DAMAGE: health,
            TokenKind.STAMINA: 3,
        },
    )
    actor = Actor(name=name, ledger=ledger)
    actor.add_trigger(TriggerCondition.TURN_START, ApplyDamageTrigger())
    return actor


@pytest.fixture
def fixed_rolls():
    """Factory for scripted generators: fixed_rolls(50, 2)."""
    return FixedRolls


@pytest.fixture
def ledger() -> TokenLedger:
    """An empty ledger with default capacities."""
    return TokenLedger()


@pytest.fixture
def hero() -> Actor:
    return make_fighter("Hero")


@pytest.fixture
def orc() -> Actor:
    return make_fighter("Orc")


@pytest.fixture
def machine(hero: Actor, orc: Actor) -> CombatStateMachine:
    """Two fighters, two actions per round, strict contract checks."""
    return CombatStateMachine(hero, orc, settings=CombatSettings(actions_per_round=2))
