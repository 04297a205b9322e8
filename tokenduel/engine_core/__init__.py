"""
Engine Core - Token ledgers, effects, triggers, actions and the combat machine.

The engine:
1. Holds each actor's tokens in a capped ledger
2. Resolves actions into add/remove token effects
3. Fires triggers at turn and round boundaries
4. Sequences whose turn it is and how many actions remain
"""

from .tokens import TokenKind, TokenLedger, DEFAULT_CAPACITY
from .effect import Effect, EffectType, apply_effect, apply_effects
from .trigger import (
    TriggerCondition,
    Trigger,
    ApplyDamageTrigger,
    BlockDamageTrigger,
    EffectTrigger,
    TriggerRegistry,
)
from .action import (
    ActionDefinition,
    ActionOutcome,
    DamageRange,
    DeterministicAction,
    LegalityMode,
    SingleEnemyAction,
    thresholds_met,
)
from .actor import Actor
from .action_generator import ActionOffer, offer_actions, legal_actions, find_action
from .combat import (
    Side,
    Boundary,
    CombatState,
    Transition,
    TickResult,
    CombatStateMachine,
    next_state,
)
from .errors import CombatError, IllegalActionError

__all__ = [
    "TokenKind",
    "TokenLedger",
    "DEFAULT_CAPACITY",
    "Effect",
    "EffectType",
    "apply_effect",
    "apply_effects",
    "TriggerCondition",
    "Trigger",
    "ApplyDamageTrigger",
    "BlockDamageTrigger",
    "EffectTrigger",
    "TriggerRegistry",
    "ActionDefinition",
    "ActionOutcome",
    "DamageRange",
    "DeterministicAction",
    "LegalityMode",
    "SingleEnemyAction",
    "thresholds_met",
    "Actor",
    "ActionOffer",
    "offer_actions",
    "legal_actions",
    "find_action",
    "Side",
    "Boundary",
    "CombatState",
    "Transition",
    "TickResult",
    "CombatStateMachine",
    "next_state",
    "CombatError",
    "IllegalActionError",
]
