"""
Table Schemas - Pydantic models for declarative action and actor tables.

These models define the in-memory shape of the configuration data
the engine consumes: which actions exist, their token thresholds,
effect templates and damage ranges, and how actors start a combat.

Example (JSON):
    {
      "name": "skirmish",
      "actions": [
        {
          "name": "Strike",
          "kind": "single_enemy",
          "legality": "all",
          "requires_source": {"stamina": 1},
          "source_changes": [{"op": "remove", "token": "stamina", "amount": 1}],
          "damage": {"low": 1, "high": 3}
        }
      ]
    }
"""

from __future__ import annotations
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, NonNegativeInt, PositiveInt, model_validator

from ..engine_core.action import LegalityMode
from ..engine_core.tokens import DEFAULT_CAPACITY, TokenKind
from ..engine_core.trigger import TriggerCondition


# =============================================================================
# Enums
# =============================================================================

class ActionKind(str, Enum):
    """Resolution family of an action."""
    DETERMINISTIC = "deterministic"
    SINGLE_ENEMY = "single_enemy"


class ChangeOp(str, Enum):
    """Token change direction."""
    ADD = "add"
    REMOVE = "remove"


class TriggerKind(str, Enum):
    """Built-in trigger implementations."""
    APPLY_DAMAGE = "apply_damage"
    BLOCK_DAMAGE = "block_damage"
    EFFECTS = "effects"


# =============================================================================
# Building blocks
# =============================================================================

class TokenChangeModel(BaseModel):
    """One effect template."""
    op: ChangeOp
    token: TokenKind
    amount: PositiveInt = 1

    model_config = {"extra": "forbid"}


class DamageRangeModel(BaseModel):
    """Closed damage interval [low, high]."""
    low: NonNegativeInt
    high: NonNegativeInt

    model_config = {"extra": "forbid"}

    @model_validator(mode="after")
    def _check_order(self) -> DamageRangeModel:
        if self.low > self.high:
            raise ValueError(f"damage low ({self.low}) exceeds high ({self.high})")
        return self


class TriggerModel(BaseModel):
    """A trigger registered on an actor at combat start."""
    condition: TriggerCondition
    kind: TriggerKind = TriggerKind.EFFECTS
    description: str = ""
    changes: list[TokenChangeModel] = Field(default_factory=list)
    charges: Optional[PositiveInt] = Field(None, description="None keeps the trigger forever")

    model_config = {"extra": "forbid"}


# =============================================================================
# Tables
# =============================================================================

class ActionModel(BaseModel):
    """Declarative description of one action."""
    name: str = Field(min_length=1)
    kind: ActionKind = ActionKind.DETERMINISTIC
    description: str = ""
    legality: LegalityMode = LegalityMode.ANY_SIDE
    requires_source: dict[TokenKind, NonNegativeInt] = Field(default_factory=dict)
    requires_target: dict[TokenKind, NonNegativeInt] = Field(default_factory=dict)
    source_changes: list[TokenChangeModel] = Field(default_factory=list)
    target_changes: list[TokenChangeModel] = Field(default_factory=list)

    # Single-enemy only
    ignore: list[TokenKind] = Field(default_factory=list)
    damage: Optional[DamageRangeModel] = None

    model_config = {"extra": "forbid"}

    @model_validator(mode="after")
    def _check_family_fields(self) -> ActionModel:
        if self.kind == ActionKind.DETERMINISTIC and (self.ignore or self.damage):
            raise ValueError(
                f"action '{self.name}': ignore/damage only apply to single_enemy actions"
            )
        return self


class ActorModel(BaseModel):
    """Starting tokens, capacities and triggers for one actor."""
    name: str = Field(min_length=1)
    default_capacity: NonNegativeInt = DEFAULT_CAPACITY
    capacities: dict[TokenKind, NonNegativeInt] = Field(default_factory=dict)
    tokens: dict[TokenKind, NonNegativeInt] = Field(default_factory=dict)
    triggers: list[TriggerModel] = Field(default_factory=list)

    model_config = {"extra": "forbid"}


class ActionTable(BaseModel):
    """A complete table: the known actions and, optionally, the two actors."""
    name: str = "custom"
    actions: list[ActionModel] = Field(default_factory=list)
    actors: list[ActorModel] = Field(default_factory=list)

    model_config = {"extra": "forbid"}

    def action_names(self) -> list[str]:
        return [action.name for action in self.actions]
