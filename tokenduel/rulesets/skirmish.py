"""
Skirmish Ruleset

The default table: a hero and an orc trading blows.
Hand-authored; other rulesets can be loaded from JSON tables.

The table defines:
- Actions (strike, heavy blow, aimed shot, riposte, sand throw, sidestep,
  raise shield, catch breath)
- Actor loadouts (health, stamina, block and damage capacity)
- Damage handling at turn start: BLOCK cancels pending DAMAGE first,
  then DAMAGE that has reached HEALTH removes both
"""

from __future__ import annotations

from ..engine_core.action import LegalityMode
from ..engine_core.tokens import TokenKind
from ..engine_core.trigger import TriggerCondition
from ..tables.schema import (
    ActionKind,
    ActionModel,
    ActionTable,
    ActorModel,
    ChangeOp,
    DamageRangeModel,
    TokenChangeModel,
    TriggerKind,
    TriggerModel,
)

MAX_HEALTH = 10
MAX_STAMINA = 3
MAX_BLOCK = 2


def create_skirmish_table(first_name: str = "Hero", second_name: str = "Orc") -> ActionTable:
    """Create the skirmish table with both actors."""
    return ActionTable(
        name="skirmish",
        actions=_define_actions(),
        actors=[_define_actor(first_name), _define_actor(second_name)],
    )


def _spend(token: TokenKind, amount: int = 1) -> TokenChangeModel:
    return TokenChangeModel(op=ChangeOp.REMOVE, token=token, amount=amount)


def _gain(token: TokenKind, amount: int = 1) -> TokenChangeModel:
    return TokenChangeModel(op=ChangeOp.ADD, token=token, amount=amount)


def _define_actions() -> list[ActionModel]:
    """Define all skirmish actions."""
    return [
        ActionModel(
            name="Strike",
            kind=ActionKind.SINGLE_ENEMY,
            description="A quick hit for 1-3 damage",
            legality=LegalityMode.ALL_SIDES,
            requires_source={TokenKind.STAMINA: 1},
            source_changes=[_spend(TokenKind.STAMINA)],
            target_changes=[_spend(TokenKind.DODGE)],
            damage=DamageRangeModel(low=1, high=3),
        ),
        ActionModel(
            name="Heavy Blow",
            kind=ActionKind.SINGLE_ENEMY,
            description="3-5 damage, leaves you wide open",
            legality=LegalityMode.ALL_SIDES,
            requires_source={TokenKind.STAMINA: 2},
            source_changes=[_spend(TokenKind.STAMINA, 2), _gain(TokenKind.WIDE_OPEN)],
            target_changes=[_spend(TokenKind.DODGE)],
            damage=DamageRangeModel(low=3, high=5),
        ),
        ActionModel(
            name="Aimed Shot",
            kind=ActionKind.SINGLE_ENEMY,
            description="1-2 damage that cannot be dodged",
            legality=LegalityMode.ALL_SIDES,
            requires_source={TokenKind.STAMINA: 1},
            source_changes=[_spend(TokenKind.STAMINA)],
            ignore=[TokenKind.DODGE],
            damage=DamageRangeModel(low=1, high=2),
        ),
        ActionModel(
            name="Riposte",
            kind=ActionKind.SINGLE_ENEMY,
            description="Punish a wide open opponent for 2-4 damage",
            legality=LegalityMode.ALL_SIDES,
            requires_source={TokenKind.STAMINA: 1},
            requires_target={TokenKind.WIDE_OPEN: 1},
            source_changes=[_spend(TokenKind.STAMINA)],
            target_changes=[_spend(TokenKind.WIDE_OPEN)],
            ignore=[TokenKind.DODGE],
            damage=DamageRangeModel(low=2, high=4),
        ),
        ActionModel(
            name="Sand Throw",
            kind=ActionKind.SINGLE_ENEMY,
            description="Blind the opponent",
            legality=LegalityMode.ALL_SIDES,
            requires_source={TokenKind.STAMINA: 1},
            source_changes=[_spend(TokenKind.STAMINA)],
            target_changes=[_gain(TokenKind.BLIND)],
        ),
        ActionModel(
            name="Sidestep",
            kind=ActionKind.DETERMINISTIC,
            description="Gain dodge",
            legality=LegalityMode.ALL_SIDES,
            requires_source={TokenKind.STAMINA: 1},
            source_changes=[_spend(TokenKind.STAMINA), _gain(TokenKind.DODGE)],
        ),
        ActionModel(
            name="Raise Shield",
            kind=ActionKind.DETERMINISTIC,
            description="Gain 2 block; each block cancels one pending damage",
            legality=LegalityMode.ALL_SIDES,
            requires_source={TokenKind.STAMINA: 1},
            source_changes=[_spend(TokenKind.STAMINA), _gain(TokenKind.BLOCK, MAX_BLOCK)],
        ),
        ActionModel(
            name="Catch Breath",
            kind=ActionKind.DETERMINISTIC,
            description="Recover 2 stamina, clear your eyes and close your guard",
            source_changes=[
                _gain(TokenKind.STAMINA, 2),
                _spend(TokenKind.BLIND),
                _spend(TokenKind.WIDE_OPEN),
            ],
        ),
    ]


def _define_actor(name: str) -> ActorModel:
    return ActorModel(
        name=name,
        capacities={
            TokenKind.HEALTH: MAX_HEALTH,
            TokenKind.DAMAGE: MAX_HEALTH,
            TokenKind.STAMINA: MAX_STAMINA,
            TokenKind.BLOCK: MAX_BLOCK,
        },
        tokens={
            TokenKind.HEALTH: MAX_HEALTH,
            TokenKind.STAMINA: MAX_STAMINA,
        },
        triggers=[
            # Block must see pending damage before it resolves
            TriggerModel(
                condition=TriggerCondition.TURN_START,
                kind=TriggerKind.BLOCK_DAMAGE,
            ),
            TriggerModel(
                condition=TriggerCondition.TURN_START,
                kind=TriggerKind.APPLY_DAMAGE,
            ),
        ],
    )
