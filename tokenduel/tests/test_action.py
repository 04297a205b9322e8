"""
Tests for action legality and resolution.

Tests:
- Threshold checks under both legality modes
- Deterministic resolution
- The d100 miss law for single-enemy actions
- Variable damage
"""

from random import Random

import pytest

from ..engine_core.action import (
    MISS_PENALTY,
    DamageRange,
    DeterministicAction,
    LegalityMode,
    SingleEnemyAction,
    thresholds_met,
)
from ..engine_core.effect import Effect
from ..engine_core.tokens import TokenKind, TokenLedger


def _ledger(**counts):
    return TokenLedger.from_counts(
        counts={TokenKind[name.upper()]: n for name, n in counts.items()},
        capacities={TokenKind[name.upper()]: max(n, 1) for name, n in counts.items()},
    )


def _attack(**kwargs):
    defaults = dict(
        name="Slash",
        source_effects=(Effect.remove(TokenKind.STAMINA),),
        target_effects=(Effect.add(TokenKind.DAMAGE, 2),),
    )
    defaults.update(kwargs)
    return SingleEnemyAction(**defaults)


class TestThresholds:
    """Tests for token thresholds."""

    def test_empty_requirements_always_met(self, ledger):
        assert thresholds_met({}, ledger)

    def test_threshold_counts(self):
        ledger = _ledger(stamina=2)
        assert thresholds_met({TokenKind.STAMINA: 2}, ledger)
        assert not thresholds_met({TokenKind.STAMINA: 3}, ledger)
        assert not thresholds_met({TokenKind.STAMINA: 1, TokenKind.DODGE: 1}, ledger)


class TestLegality:
    """Tests for can_perform."""

    def test_no_thresholds_is_legal(self, ledger):
        action = DeterministicAction(name="Wait")
        assert action.can_perform(ledger, TokenLedger())

    def test_any_side_one_side_suffices(self):
        """Under ANY_SIDE either side meeting its thresholds is enough."""
        action = DeterministicAction(
            name="Exploit",
            required_source={TokenKind.STAMINA: 1},
            required_target={TokenKind.WIDE_OPEN: 1},
        )
        assert action.can_perform(_ledger(stamina=1), TokenLedger())
        assert action.can_perform(TokenLedger(), _ledger(wide_open=1))
        assert not action.can_perform(TokenLedger(), TokenLedger())

    def test_one_sided_requirement_under_any_side(self):
        """An empty side is trivially met, so ANY_SIDE passes regardless."""
        action = DeterministicAction(name="Rest", required_source={TokenKind.STAMINA: 3})
        assert action.can_perform(TokenLedger(), TokenLedger())

    def test_all_sides_requires_both(self):
        action = DeterministicAction(
            name="Exploit",
            required_source={TokenKind.STAMINA: 1},
            required_target={TokenKind.WIDE_OPEN: 1},
            legality=LegalityMode.ALL_SIDES,
        )
        assert action.can_perform(_ledger(stamina=1), _ledger(wide_open=1))
        assert not action.can_perform(_ledger(stamina=1), TokenLedger())
        assert not action.can_perform(TokenLedger(), _ledger(wide_open=1))

    def test_all_sides_with_one_sided_requirement(self):
        action = DeterministicAction(
            name="Rest",
            required_source={TokenKind.STAMINA: 1},
            legality=LegalityMode.ALL_SIDES,
        )
        assert action.can_perform(_ledger(stamina=1), TokenLedger())
        assert not action.can_perform(TokenLedger(), TokenLedger())


class TestDeterministicAction:
    """Tests for deterministic resolution."""

    def test_returns_configured_effects(self, ledger, fixed_rolls):
        """No rolls are drawn and both lists come back unchanged."""
        rng = fixed_rolls()
        action = DeterministicAction(
            name="Brace",
            source_effects=(Effect.add(TokenKind.BLOCK),),
            target_effects=(Effect.remove(TokenKind.STRONG),),
        )
        outcome = action.perform(rng, ledger, TokenLedger())

        assert not outcome.missed
        assert outcome.effects == ([Effect.add(TokenKind.BLOCK)], [Effect.remove(TokenKind.STRONG)])
        assert rng.calls == []

    def test_perform_does_not_mutate(self, fixed_rolls):
        source = _ledger(stamina=3)
        action = DeterministicAction(name="Brace", source_effects=(Effect.remove(TokenKind.STAMINA),))
        action.perform(fixed_rolls(), source, TokenLedger())
        assert source.count(TokenKind.STAMINA) == 3


class TestMissChance:
    """Tests for the d100 miss law."""

    def test_no_modifiers(self, ledger):
        assert _attack().miss_chance(ledger, TokenLedger()) == 0

    def test_dodge_and_blind_stack(self):
        action = _attack()
        assert action.miss_chance(TokenLedger(), _ledger(dodge=1)) == MISS_PENALTY
        assert action.miss_chance(_ledger(blind=1), TokenLedger()) == MISS_PENALTY
        assert action.miss_chance(_ledger(blind=1), _ledger(dodge=1)) == 100

    def test_ignore_dodge(self):
        action = _attack(ignore=frozenset({TokenKind.DODGE}))
        assert action.miss_chance(_ledger(blind=1), _ledger(dodge=1)) == MISS_PENALTY

    def test_ignore_both(self):
        action = _attack(ignore=frozenset({TokenKind.DODGE, TokenKind.BLIND}))
        assert action.miss_chance(_ledger(blind=1), _ledger(dodge=1)) == 0

    @pytest.mark.parametrize(
        "roll,missed",
        [(1, True), (49, True), (50, True), (51, False), (100, False)],
    )
    def test_dodging_target_boundaries(self, fixed_rolls, roll, missed):
        """With one dodge, rolls 1..50 miss and 51..100 hit."""
        outcome = _attack().perform(fixed_rolls(roll), TokenLedger(), _ledger(dodge=1))
        assert outcome.missed is missed
        assert outcome.roll == roll
        assert outcome.miss_chance == 50

    @pytest.mark.parametrize("roll", [1, 50, 100])
    def test_dodge_and_blind_always_miss(self, fixed_rolls, roll):
        outcome = _attack().perform(fixed_rolls(roll), _ledger(blind=1), _ledger(dodge=1))
        assert outcome.missed

    @pytest.mark.parametrize("roll", [1, 50, 100])
    def test_no_modifiers_always_hit(self, fixed_rolls, roll):
        outcome = _attack().perform(fixed_rolls(roll), TokenLedger(), TokenLedger())
        assert not outcome.missed

    def test_roll_range(self, fixed_rolls):
        rng = fixed_rolls(60)
        _attack().perform(rng, TokenLedger(), TokenLedger())
        assert rng.calls == [(1, 100)]


class TestOutcome:
    """Tests for outcome shape."""

    def test_miss_has_no_effects(self, fixed_rolls):
        """A miss is distinct from a hit with empty lists."""
        outcome = _attack().perform(fixed_rolls(10), TokenLedger(), _ledger(dodge=1))
        assert outcome.missed
        assert outcome.effects is None

    def test_hit_with_empty_lists(self, fixed_rolls):
        action = SingleEnemyAction(name="Feint")
        outcome = action.perform(fixed_rolls(90), TokenLedger(), TokenLedger())
        assert not outcome.missed
        assert outcome.effects == ([], [])

    def test_hit_returns_configured_effects(self, fixed_rolls):
        outcome = _attack().perform(fixed_rolls(75), TokenLedger(), TokenLedger())
        assert outcome.source_effects == [Effect.remove(TokenKind.STAMINA)]
        assert outcome.target_effects == [Effect.add(TokenKind.DAMAGE, 2)]


class TestDamageRange:
    """Tests for variable damage."""

    def test_invalid_range(self):
        with pytest.raises(ValueError):
            DamageRange(5, 2)

    def test_damage_appended_on_hit(self, fixed_rolls):
        """The damage roll is drawn after the hit roll and appended last."""
        action = _attack(damage=DamageRange(1, 3))
        rng = fixed_rolls(80, 3)
        outcome = action.perform(rng, TokenLedger(), TokenLedger())

        assert outcome.damage_roll == 3
        assert outcome.target_effects[-1] == Effect.add(TokenKind.DAMAGE, 3)
        assert rng.calls == [(1, 100), (1, 3)]

    def test_no_damage_roll_on_miss(self, fixed_rolls):
        action = _attack(damage=DamageRange(1, 3))
        rng = fixed_rolls(20)
        outcome = action.perform(rng, TokenLedger(), _ledger(dodge=1))

        assert outcome.missed
        assert outcome.damage_roll is None
        assert rng.calls == [(1, 100)]

    def test_seeded_generator_replays(self):
        """Same seed, same outcomes."""
        action = _attack(damage=DamageRange(1, 6))
        target = _ledger(dodge=1)

        def run(seed):
            rng = Random(seed)
            return [
                (o.missed, o.roll, o.damage_roll)
                for o in (action.perform(rng, TokenLedger(), target) for _ in range(20))
            ]

        assert run(7) == run(7)

    def test_actions_compare_by_identity(self):
        """Two actions with the same fields are still distinct entries."""
        first, second = _attack(), _attack()
        assert first != second
        assert len({first, second}) == 2
