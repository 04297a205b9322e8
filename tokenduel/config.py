"""
Runtime configuration.

Environment:
    TOKENDUEL_ENV                 development (default) or production
    TOKENDUEL_ACTIONS_PER_ROUND   Action slots per side per round (default 2)
    TOKENDUEL_LOG_LEVEL           Log level for the CLI (default INFO)

In development, an illegal action reaching resolution raises.
Elsewhere it is logged and the tick is rejected.

Combat settings are read when CombatSettings.from_env() is called, so
a malformed value fails there and not at import.
"""

from __future__ import annotations
from dataclasses import dataclass
import os

TOKENDUEL_LOG_LEVEL = os.getenv("TOKENDUEL_LOG_LEVEL", "INFO")


@dataclass(frozen=True)
class CombatSettings:
    """Settings for a single combat."""
    actions_per_round: int = 2
    strict_contracts: bool = True

    def __post_init__(self):
        if self.actions_per_round < 1:
            raise ValueError("actions_per_round must be >= 1")

    @classmethod
    def from_env(cls) -> CombatSettings:
        """Build settings from the TOKENDUEL_* environment variables."""
        raw = os.getenv("TOKENDUEL_ACTIONS_PER_ROUND", "2")
        try:
            actions_per_round = int(raw)
        except ValueError as e:
            raise ValueError(
                f"TOKENDUEL_ACTIONS_PER_ROUND must be an integer, got {raw!r}"
            ) from e
        return cls(
            actions_per_round=actions_per_round,
            strict_contracts=os.getenv("TOKENDUEL_ENV", "development") == "development",
        )
