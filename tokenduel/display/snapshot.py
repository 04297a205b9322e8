"""
Snapshot builders - Convert engine objects into display schemas.

Building a snapshot never changes the combat. Offers are only
included when the caller passes the offers it already computed
(CombatStateMachine.offer fires turn-start triggers).
"""

from __future__ import annotations
from typing import Sequence

from ..engine_core.action import SingleEnemyAction
from ..engine_core.action_generator import ActionOffer
from ..engine_core.actor import Actor
from ..engine_core.combat import CombatStateMachine, Side
from .schemas import (
    ActionOfferInfo,
    ActorSnapshot,
    CombatSnapshot,
    CombatStateInfo,
    SideInfo,
    TokenCountInfo,
)


def _side_info(side: Side) -> SideInfo:
    return SideInfo(side.value)


def snapshot_actor(actor: Actor) -> ActorSnapshot:
    """Snapshot one actor, tokens in TokenKind order."""
    return ActorSnapshot(
        name=actor.name,
        actions_remaining=actor.actions_remaining,
        tokens=[
            TokenCountInfo(kind=kind.value, label=kind.label, count=count)
            for kind, count in actor.ledger.items()
        ],
        is_defeated=actor.is_defeated,
    )


def snapshot_offers(machine: CombatStateMachine, offers: Sequence[ActionOffer]) -> list[ActionOfferInfo]:
    source = machine.active_actor.ledger
    target = machine.opponent.ledger
    infos = []
    for offer in offers:
        miss_chance = None
        if isinstance(offer.action, SingleEnemyAction):
            miss_chance = offer.action.miss_chance(source, target)
        infos.append(
            ActionOfferInfo(
                name=offer.name,
                legal=offer.legal,
                description=offer.action.description,
                miss_chance=miss_chance,
            )
        )
    return infos


def snapshot_combat(
    machine: CombatStateMachine,
    offers: Sequence[ActionOffer] = (),
) -> CombatSnapshot:
    """Snapshot the whole combat."""
    winner = machine.winner
    return CombatSnapshot(
        state=CombatStateInfo(
            side=_side_info(machine.state.side),
            remaining=machine.state.remaining,
            round_number=machine.round_number,
        ),
        first=snapshot_actor(machine.actor(Side.FIRST)),
        second=snapshot_actor(machine.actor(Side.SECOND)),
        offers=snapshot_offers(machine, offers),
        winner=_side_info(winner) if winner is not None else None,
    )


def format_status(snapshot: CombatSnapshot) -> str:
    """One-line status text, e.g. 'Round 2 - Hero to act (1 left)'."""
    if snapshot.winner is not None:
        winner = snapshot.first if snapshot.winner == SideInfo.FIRST else snapshot.second
        return f"Round {snapshot.state.round_number} - {winner.name} wins"
    return (
        f"Round {snapshot.state.round_number} - {snapshot.active.name} to act "
        f"({snapshot.state.remaining} left)"
    )


def format_actor(snapshot: ActorSnapshot) -> str:
    tokens = " ".join(f"{t.label}:{t.count}" for t in snapshot.tokens) or "no tokens"
    return f"{snapshot.name} [{tokens}]"
