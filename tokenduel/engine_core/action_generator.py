"""
Action Generator - Which actions the acting side may take.

Used by:
1. Policies to enumerate possible moves
2. The display layer to enable/disable one control per action
3. The duel driver before resolving a chosen action
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from .action import ActionDefinition

if TYPE_CHECKING:
    from .actor import Actor


@dataclass(frozen=True)
class ActionOffer:
    """One known action and whether the acting side may take it now."""
    action: ActionDefinition
    legal: bool

    @property
    def name(self) -> str:
        return self.action.name


def offer_actions(
    actions: Sequence[ActionDefinition],
    source: Actor,
    target: Actor,
) -> list[ActionOffer]:
    """Offer every known action with its legality, in the given order."""
    return [
        ActionOffer(action=action, legal=action.can_perform(source.ledger, target.ledger))
        for action in actions
    ]


def legal_actions(
    actions: Sequence[ActionDefinition],
    source: Actor,
    target: Actor,
) -> list[ActionDefinition]:
    """Convenience function returning only the legal actions."""
    return [offer.action for offer in offer_actions(actions, source, target) if offer.legal]


def find_action(actions: Sequence[ActionDefinition], name: str) -> ActionDefinition | None:
    """Look up an action by its display name."""
    for action in actions:
        if action.name == name:
            return action
    return None
