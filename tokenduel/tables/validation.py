"""
Table Validation - Semantic checks for action tables.

Pydantic guarantees the shape. This module checks what the shape
cannot express:
1. Action names are unique
2. A table declaring actors declares exactly two
3. Combinations that load fine but play oddly (warnings)
"""

from __future__ import annotations
from dataclasses import dataclass

from ..engine_core.action import LegalityMode
from ..engine_core.tokens import TokenKind
from .schema import ActionKind, ActionModel, ActionTable, ActorModel, TriggerKind


class TableValidationError(Exception):
    """Raised when a table cannot be loaded."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Table validation failed with {len(errors)} error(s)")


@dataclass
class ValidationResult:
    """Result of validation, with errors and warnings."""
    valid: bool
    errors: list[str]
    warnings: list[str]


def validate_table(table: ActionTable) -> ValidationResult:
    """
    Validate a parsed table.

    Returns ValidationResult with errors and warnings.
    """
    errors: list[str] = []
    warnings: list[str] = []

    seen: set[str] = set()
    for action in table.actions:
        if action.name in seen:
            errors.append(f"Duplicate action name '{action.name}'")
        seen.add(action.name)
        warnings.extend(_action_warnings(action))

    if table.actors and len(table.actors) != 2:
        errors.append(f"A combat needs exactly 2 actors, table declares {len(table.actors)}")

    deals_damage = any(action.damage for action in table.actions) or any(
        change.token == TokenKind.DAMAGE
        for action in table.actions
        for change in action.target_changes + action.source_changes
    )
    for actor in table.actors:
        errors.extend(_actor_errors(actor))
        warnings.extend(_actor_warnings(actor, deals_damage))

    if not table.actions:
        warnings.append("No actions defined - table may be incomplete")

    return ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def _action_warnings(action: ActionModel) -> list[str]:
    """Warn about actions that are legal more often than they look."""
    warnings = []
    if action.legality == LegalityMode.ANY_SIDE:
        if not action.requires_source or not action.requires_target:
            if action.requires_source or action.requires_target:
                warnings.append(
                    f"Action '{action.name}' declares thresholds on one side only "
                    "but uses 'any' legality - it is always legal"
                )
    has_effects = action.source_changes or action.target_changes or action.damage
    if not has_effects:
        warnings.append(f"Action '{action.name}' has no effects")
    if action.kind == ActionKind.SINGLE_ENEMY and action.damage and action.damage.high == 0:
        warnings.append(f"Action '{action.name}' has a damage range of 0")
    return warnings


def _actor_errors(actor: ActorModel) -> list[str]:
    errors = []
    for trigger in actor.triggers:
        if trigger.kind != TriggerKind.EFFECTS and trigger.changes:
            errors.append(
                f"Actor '{actor.name}': {trigger.kind.value} trigger does not take changes"
            )
    return errors


def _actor_warnings(actor: ActorModel, deals_damage: bool) -> list[str]:
    warnings = []
    for kind, count in actor.tokens.items():
        cap = actor.capacities.get(kind, actor.default_capacity)
        if count > cap:
            warnings.append(
                f"Actor '{actor.name}': starting {kind.value}={count} exceeds capacity {cap}"
            )

    if deals_damage:
        resolves = any(t.kind == TriggerKind.APPLY_DAMAGE for t in actor.triggers)
        if not resolves:
            warnings.append(f"Actor '{actor.name}' never resolves pending damage")
        warnings.extend(_block_order_warnings(actor))
        health_cap = actor.capacities.get(TokenKind.HEALTH, actor.default_capacity)
        damage_cap = actor.capacities.get(TokenKind.DAMAGE, actor.default_capacity)
        if damage_cap < health_cap:
            warnings.append(
                f"Actor '{actor.name}': damage capacity {damage_cap} is below "
                f"health capacity {health_cap}, so full health can never be lost"
            )
    return warnings


def _block_order_warnings(actor: ActorModel) -> list[str]:
    """Blocking only intercepts damage if it fires before resolution."""
    warnings = []
    resolved = set()
    for trigger in actor.triggers:
        if trigger.kind == TriggerKind.APPLY_DAMAGE:
            resolved.add(trigger.condition)
        elif trigger.kind == TriggerKind.BLOCK_DAMAGE and trigger.condition in resolved:
            warnings.append(
                f"Actor '{actor.name}': block_damage on {trigger.condition.value} "
                "is registered after apply_damage and fires too late"
            )
    return warnings
