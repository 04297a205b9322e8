"""Action tables - declarative configuration data for combats."""

from .schema import (
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
from .validation import TableValidationError, ValidationResult, validate_table
from .loader import (
    build_action,
    build_actions,
    build_actor,
    build_actors,
    load_action_table,
    parse_action_table,
)

__all__ = [
    "ActionKind",
    "ActionModel",
    "ActionTable",
    "ActorModel",
    "ChangeOp",
    "DamageRangeModel",
    "TokenChangeModel",
    "TriggerKind",
    "TriggerModel",
    "TableValidationError",
    "ValidationResult",
    "validate_table",
    "build_action",
    "build_actions",
    "build_actor",
    "build_actors",
    "load_action_table",
    "parse_action_table",
]
