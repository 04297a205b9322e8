"""
Combat Policy - Interface for choosing a side's action.

A CombatPolicy looks at a snapshot and the legal actions and picks
one, or None when it has nothing to do. The engine only requires
that a returned action is one of the legal ones.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
import random
from typing import TYPE_CHECKING

from ..engine_core.action_generator import find_action

if TYPE_CHECKING:
    from ..display.schemas import CombatSnapshot
    from ..engine_core.action import ActionDefinition


@dataclass
class PolicyDecision:
    """
    A decision made by a policy.

    Contains:
    - The action to take
    - Explanation (for UI/debugging)
    - Confidence in the decision
    """
    action: ActionDefinition
    explanation: str = ""
    confidence: float = 1.0
    evaluated_actions: int = 0


class CombatPolicy(ABC):
    """
    Abstract base class for combat policies.

    Implementations range from human input adapters to scripted
    opponents.
    """

    @abstractmethod
    def select_action(
        self,
        snapshot: CombatSnapshot,
        legal_actions: list[ActionDefinition],
    ) -> PolicyDecision | None:
        """
        Select an action from the legal actions.

        Args:
            snapshot: Current combat snapshot
            legal_actions: Legal actions for the acting side

        Returns:
            PolicyDecision, or None to pass
        """
        pass

    def get_name(self) -> str:
        """Get the policy's name/identifier."""
        return self.__class__.__name__


class RandomPolicy(CombatPolicy):
    """
    Random policy - selects actions uniformly at random.

    Used for:
    - Testing
    - Baseline opponents
    """

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    def select_action(
        self,
        snapshot: CombatSnapshot,
        legal_actions: list[ActionDefinition],
    ) -> PolicyDecision | None:
        if not legal_actions:
            return None

        action = self.rng.choice(legal_actions)
        return PolicyDecision(
            action=action,
            explanation="Selected randomly",
            confidence=1.0 / len(legal_actions),
            evaluated_actions=len(legal_actions),
        )


class FirstLegalPolicy(CombatPolicy):
    """
    First-legal policy - always selects the first legal action.

    Used for deterministic testing.
    """

    def select_action(
        self,
        snapshot: CombatSnapshot,
        legal_actions: list[ActionDefinition],
    ) -> PolicyDecision | None:
        if not legal_actions:
            return None

        return PolicyDecision(
            action=legal_actions[0],
            explanation="Selected first legal action",
            evaluated_actions=1,
        )


class ScriptedPolicy(CombatPolicy):
    """
    Plays a fixed sequence of action names, then passes.

    Stands in for the input layer: each entry is the action name a
    player clicked on that tick (None for no click).
    """

    def __init__(self, script: list[str | None]):
        self.script = list(script)
        self.position = 0

    def select_action(
        self,
        snapshot: CombatSnapshot,
        legal_actions: list[ActionDefinition],
    ) -> PolicyDecision | None:
        if self.position >= len(self.script):
            return None
        name = self.script[self.position]
        self.position += 1
        if name is None:
            return None

        action = find_action(legal_actions, name)
        if action is None:
            raise ValueError(f"Scripted action '{name}' is not legal")
        return PolicyDecision(action=action, explanation="Scripted")
