"""Display - read-only snapshots of a combat for the rendering layer."""

from .schemas import (
    ActionOfferInfo,
    ActorSnapshot,
    CombatSnapshot,
    CombatStateInfo,
    SideInfo,
    TokenCountInfo,
)
from .snapshot import format_actor, format_status, snapshot_actor, snapshot_combat, snapshot_offers

__all__ = [
    "ActionOfferInfo",
    "ActorSnapshot",
    "CombatSnapshot",
    "CombatStateInfo",
    "SideInfo",
    "TokenCountInfo",
    "format_actor",
    "format_status",
    "snapshot_actor",
    "snapshot_combat",
    "snapshot_offers",
]
