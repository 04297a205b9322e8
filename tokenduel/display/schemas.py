"""
Display Schemas - Read-only snapshots for the rendering layer.

These models are everything a renderer needs to draw a combat:
actor names, remaining actions, ordered token counts, the current
turn and the per-action legality used to enable controls.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class SideInfo(str, Enum):
    """Side values for display."""
    FIRST = "first"
    SECOND = "second"


class TokenCountInfo(BaseModel):
    """One held token kind."""
    kind: str = Field(description="TokenKind value, e.g. 'health'")
    label: str
    count: int

    model_config = {"frozen": True}


class ActorSnapshot(BaseModel):
    """An actor as the renderer sees it."""
    name: str
    actions_remaining: int = 0
    tokens: list[TokenCountInfo] = Field(default_factory=list)
    is_defeated: bool = False

    model_config = {"frozen": True}

    def token_count(self, kind: str) -> int:
        for token in self.tokens:
            if token.kind == kind:
                return token.count
        return 0


class CombatStateInfo(BaseModel):
    """Turn(side, remaining) plus the round counter."""
    side: SideInfo
    remaining: int
    round_number: int = 1

    model_config = {"frozen": True}


class ActionOfferInfo(BaseModel):
    """One control in the action bar."""
    name: str
    legal: bool
    description: str = ""
    miss_chance: Optional[int] = Field(None, description="Only for single-enemy actions")

    model_config = {"frozen": True}


class CombatSnapshot(BaseModel):
    """Full snapshot of a combat for one frame."""
    state: CombatStateInfo
    first: ActorSnapshot
    second: ActorSnapshot
    offers: list[ActionOfferInfo] = Field(default_factory=list)
    winner: Optional[SideInfo] = None

    model_config = {"frozen": True}

    @property
    def active(self) -> ActorSnapshot:
        return self.first if self.state.side == SideInfo.FIRST else self.second

    @property
    def idle(self) -> ActorSnapshot:
        return self.second if self.state.side == SideInfo.FIRST else self.first
