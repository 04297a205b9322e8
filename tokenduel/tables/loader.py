"""
Table Loader - Turns table data into engine objects.

    table = load_action_table("duel.json")
    actions = build_actions(table)
    hero, orc = build_actors(table)

Shape errors and semantic errors are both surfaced once, here, as
TableValidationError. Warnings are logged.
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..engine_core.action import (
    ActionDefinition,
    DamageRange,
    DeterministicAction,
    SingleEnemyAction,
)
from ..engine_core.actor import Actor
from ..engine_core.effect import Effect
from ..engine_core.tokens import TokenLedger
from ..engine_core.trigger import (
    ApplyDamageTrigger,
    BlockDamageTrigger,
    EffectTrigger,
    Trigger,
)
from .schema import (
    ActionKind,
    ActionModel,
    ActionTable,
    ActorModel,
    ChangeOp,
    TokenChangeModel,
    TriggerKind,
    TriggerModel,
)
from .validation import TableValidationError, validate_table

logger = logging.getLogger(__name__)


def parse_action_table(data: dict[str, Any]) -> ActionTable:
    """Validate raw table data, raising TableValidationError on any error."""
    try:
        table = ActionTable.model_validate(data)
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        raise TableValidationError(errors) from e

    result = validate_table(table)
    if not result.valid:
        raise TableValidationError(result.errors)
    for warning in result.warnings:
        logger.warning("Table '%s': %s", table.name, warning)
    return table


def load_action_table(path: str | Path) -> ActionTable:
    """Read and validate a JSON table file."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise TableValidationError([f"{path.name}: not valid UTF-8 ({e})"]) from e
    except json.JSONDecodeError as e:
        raise TableValidationError([f"{path.name}: invalid JSON ({e})"]) from e
    return parse_action_table(data)


def build_effect(change: TokenChangeModel) -> Effect:
    if change.op == ChangeOp.ADD:
        return Effect.add(change.token, change.amount)
    return Effect.remove(change.token, change.amount)


def build_action(model: ActionModel) -> ActionDefinition:
    """Build an engine action from its table entry."""
    common = dict(
        name=model.name,
        required_source=dict(model.requires_source),
        required_target=dict(model.requires_target),
        legality=model.legality,
        source_effects=tuple(build_effect(c) for c in model.source_changes),
        target_effects=tuple(build_effect(c) for c in model.target_changes),
        description=model.description,
    )
    if model.kind == ActionKind.SINGLE_ENEMY:
        damage = None
        if model.damage is not None:
            damage = DamageRange(model.damage.low, model.damage.high)
        return SingleEnemyAction(ignore=frozenset(model.ignore), damage=damage, **common)
    return DeterministicAction(**common)


def build_actions(table: ActionTable) -> list[ActionDefinition]:
    return [build_action(model) for model in table.actions]


def build_trigger(model: TriggerModel) -> Trigger:
    if model.kind == TriggerKind.APPLY_DAMAGE:
        return ApplyDamageTrigger()
    if model.kind == TriggerKind.BLOCK_DAMAGE:
        return BlockDamageTrigger()
    return EffectTrigger(
        description=model.description or model.condition.value,
        effects=[build_effect(c) for c in model.changes],
        charges=model.charges,
    )


def build_actor(model: ActorModel) -> Actor:
    """Create a fresh actor with its ledger and triggers."""
    ledger = TokenLedger.from_counts(
        counts=model.tokens,
        capacities=model.capacities,
        default_capacity=model.default_capacity,
    )
    actor = Actor(name=model.name, ledger=ledger)
    for trigger_model in model.triggers:
        actor.add_trigger(trigger_model.condition, build_trigger(trigger_model))
    return actor


def build_actors(table: ActionTable) -> tuple[Actor, Actor]:
    """Build the table's two actors, in (first, second) order."""
    if len(table.actors) != 2:
        raise TableValidationError(
            [f"A combat needs exactly 2 actors, table declares {len(table.actors)}"]
        )
    first, second = table.actors
    return build_actor(first), build_actor(second)
