"""
Combat State Machine - Sequences turns, rounds and trigger firing.

The machine is the single point where a resolved action touches the
ledgers. One tick is:

1. start_turn(): ROUND_START (first slot of a round only), then
   TURN_START, for the acting side. Runs once per slot, before any
   legality check for that slot.
2. Legality check of the chosen action (source = active side,
   target = the other side).
3. Resolution into effects, applied to both ledgers (nothing on a miss).
4. The slot is consumed. At the resulting boundary the acting side's
   TURN_END triggers fire, plus ROUND_END on a round boundary.

State transitions (see next_state):
    Turn(side, n > 1) -> Turn(side, n - 1)                  turn boundary
    Turn(FIRST, 1)    -> Turn(SECOND, actions_per_round)    turn boundary
    Turn(SECOND, 1)   -> Turn(FIRST, actions_per_round)     round boundary
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
from random import Random
from typing import Sequence

from ..config import CombatSettings
from .action import ActionDefinition, ActionOutcome
from .action_generator import ActionOffer, offer_actions
from .actor import Actor
from .effect import apply_effects
from .errors import IllegalActionError
from .trigger import TriggerCondition

logger = logging.getLogger(__name__)


class Side(Enum):
    """The two sides of a combat. FIRST opens every round."""
    FIRST = "first"
    SECOND = "second"

    @property
    def other(self) -> Side:
        return Side.SECOND if self == Side.FIRST else Side.FIRST


class Boundary(Enum):
    """Kind of boundary crossed when an action slot is consumed."""
    TURN = "turn"
    ROUND = "round"


@dataclass(frozen=True)
class CombatState:
    """Whose turn it is and how many action slots remain in it."""
    side: Side
    remaining: int

    def __post_init__(self):
        if self.remaining < 1:
            raise ValueError(f"remaining must be >= 1, got {self.remaining}")


@dataclass(frozen=True)
class Transition:
    """One consumed action slot."""
    previous: CombatState
    current: CombatState
    boundary: Boundary

    @property
    def is_round_boundary(self) -> bool:
        return self.boundary == Boundary.ROUND

    @property
    def side_changed(self) -> bool:
        return self.previous.side != self.current.side


def next_state(state: CombatState, actions_per_round: int) -> tuple[CombatState, Boundary]:
    """Compute the state after one action slot is consumed."""
    if state.remaining > 1:
        return CombatState(state.side, state.remaining - 1), Boundary.TURN

    new_side = state.side.other
    boundary = Boundary.ROUND if new_side == Side.FIRST else Boundary.TURN
    return CombatState(new_side, actions_per_round), boundary


@dataclass
class TickResult:
    """
    Result of one tick.

    A rejected tick resolved nothing and left its slot unconsumed; the
    slot was already opened, so its turn-start triggers have run. A
    missed action still consumed its slot (transition is set).
    """
    acting_side: Side
    action_name: str | None = None
    outcome: ActionOutcome | None = None
    transition: Transition | None = None
    rejected: bool = False
    error: str | None = None

    # Human-readable changes for the display layer
    changes: list[str] = field(default_factory=list)

    @property
    def missed(self) -> bool:
        return self.outcome is not None and self.outcome.missed

    @property
    def passed(self) -> bool:
        return self.action_name is None and not self.rejected


class CombatStateMachine:
    """
    Owns both actors and the turn/round state.

    Usage:
        machine = CombatStateMachine(hero, orc)
        offers = machine.offer(actions)        # fires turn-start hooks
        result = machine.perform(chosen, rng)  # resolves and advances
    """

    def __init__(
        self,
        first: Actor,
        second: Actor,
        settings: CombatSettings | None = None,
    ):
        self.settings = settings or CombatSettings()
        self._actors = {Side.FIRST: first, Side.SECOND: second}
        self.state = CombatState(Side.FIRST, self.settings.actions_per_round)
        self.round_number = 1

        self._round_start_pending = True
        self._turn_started = False
        self._sync_action_counters()

    @property
    def actions_per_round(self) -> int:
        return self.settings.actions_per_round

    def actor(self, side: Side) -> Actor:
        return self._actors[side]

    @property
    def active_side(self) -> Side:
        return self.state.side

    @property
    def active_actor(self) -> Actor:
        return self._actors[self.state.side]

    @property
    def opponent(self) -> Actor:
        return self._actors[self.state.side.other]

    @property
    def turn_started(self) -> bool:
        return self._turn_started

    @property
    def winner(self) -> Side | None:
        """The surviving side once exactly one actor is defeated."""
        first_down = self._actors[Side.FIRST].is_defeated
        second_down = self._actors[Side.SECOND].is_defeated
        if first_down and not second_down:
            return Side.SECOND
        if second_down and not first_down:
            return Side.FIRST
        return None

    @property
    def is_over(self) -> bool:
        return any(actor.is_defeated for actor in self._actors.values())

    def start_turn(self) -> None:
        """Fire the acting side's start-of-slot triggers, once per slot."""
        if self._turn_started:
            return
        actor = self.active_actor
        if self._round_start_pending:
            logger.info("Round %d begins", self.round_number)
            actor.fire(TriggerCondition.ROUND_START)
            self._round_start_pending = False
        actor.fire(TriggerCondition.TURN_START)
        self._turn_started = True

    def offer(self, actions: Sequence[ActionDefinition]) -> list[ActionOffer]:
        """Legality of each action for the active side, after turn start."""
        self.start_turn()
        return offer_actions(actions, self.active_actor, self.opponent)

    def perform(self, action: ActionDefinition, rng: Random) -> TickResult:
        """
        Resolve an action for the active side and consume the slot.

        Opening the slot (start_turn) happens first. An illegal action
        rejected in lenient mode leaves the slot open: its turn-start
        triggers do not fire again on retry.
        """
        self.start_turn()
        side = self.active_side
        source = self.active_actor
        target = self.opponent

        if not action.can_perform(source.ledger, target.ledger):
            if self.settings.strict_contracts:
                raise IllegalActionError(action.name, source.name)
            logger.error("Rejected illegal action '%s' for %s", action.name, source.name)
            return TickResult(
                acting_side=side,
                action_name=action.name,
                rejected=True,
                error=f"{source.name} cannot perform '{action.name}'",
            )

        outcome = action.perform(rng, source.ledger, target.ledger)
        changes = []
        if outcome.missed:
            changes.append(f"{source.name}'s {action.name} missed")
        else:
            apply_effects(outcome.source_effects, source.ledger)
            apply_effects(outcome.target_effects, target.ledger)
            changes.extend(f"{source.name}: {e.describe()}" for e in outcome.source_effects)
            changes.extend(f"{target.name}: {e.describe()}" for e in outcome.target_effects)

        transition = self._consume_action()
        return TickResult(
            acting_side=side,
            action_name=action.name,
            outcome=outcome,
            transition=transition,
            changes=changes,
        )

    def pass_turn(self) -> TickResult:
        """Consume the active slot without acting."""
        self.start_turn()
        side = self.active_side
        name = self.active_actor.name
        transition = self._consume_action()
        return TickResult(acting_side=side, transition=transition, changes=[f"{name} passed"])

    def _consume_action(self) -> Transition:
        finished = self.active_actor
        previous = self.state
        current, boundary = next_state(previous, self.actions_per_round)

        finished.fire(TriggerCondition.TURN_END)
        if boundary == Boundary.ROUND:
            finished.fire(TriggerCondition.ROUND_END)
            self.round_number += 1
            self._round_start_pending = True

        self.state = current
        self._turn_started = False
        self._sync_action_counters()
        logger.debug("Transition %s -> %s (%s boundary)", previous, current, boundary.value)
        return Transition(previous=previous, current=current, boundary=boundary)

    def _sync_action_counters(self) -> None:
        self.active_actor.actions_remaining = self.state.remaining
        self.opponent.actions_remaining = 0
