"""
Duel - Drives a combat between two policies.

The loop, once per tick:
1. Open the acting side's slot (turn-start triggers fire)
2. Stop if either actor is defeated
3. Offer the legal actions to the acting side's policy
4. Perform the chosen action, or pass when the policy returns None
5. Record the tick

One generator is shared by every roll in the duel, so a seeded
generator replays the same duel.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
from random import Random
from typing import Sequence, TYPE_CHECKING

from ..display.snapshot import snapshot_combat
from ..engine_core.action import ActionDefinition
from ..engine_core.combat import CombatStateMachine, Side, TickResult

if TYPE_CHECKING:
    from ..bots.policy import CombatPolicy

logger = logging.getLogger(__name__)

DEFAULT_MAX_TICKS = 500


class DuelState(Enum):
    """State of the duel driver."""
    READY = "ready"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"  # An actor was defeated
    TICK_LIMIT = "tick_limit"  # Stopped before a result


@dataclass
class DuelResult:
    """Summary of a finished (or stopped) duel."""
    state: DuelState
    winner: Side | None = None
    winner_name: str | None = None
    ticks: int = 0
    rounds: int = 0
    log: list[str] = field(default_factory=list)


class Duel:
    """
    Runs one combat to completion.

    Usage:
        duel = Duel(machine, actions, {Side.FIRST: p1, Side.SECOND: p2}, Random(7))
        result = duel.run()
    """

    def __init__(
        self,
        machine: CombatStateMachine,
        actions: Sequence[ActionDefinition],
        policies: dict[Side, CombatPolicy],
        rng: Random,
    ):
        missing = [side for side in Side if side not in policies]
        if missing:
            raise ValueError(f"No policy for side(s): {', '.join(s.value for s in missing)}")
        self.machine = machine
        self.actions = list(actions)
        self.policies = policies
        self.rng = rng
        self.state = DuelState.READY
        self.ticks = 0
        self.log: list[str] = []

    @property
    def is_finished(self) -> bool:
        return self.state in (DuelState.FINISHED, DuelState.TICK_LIMIT)

    def step(self) -> TickResult | None:
        """Play one tick. Returns None once the duel is over."""
        if self.is_finished:
            return None
        self.state = DuelState.IN_PROGRESS

        self.machine.start_turn()
        if self.machine.is_over:
            self._finish()
            return None

        side = self.machine.active_side
        offers = self.machine.offer(self.actions)
        legal = [offer.action for offer in offers if offer.legal]
        snapshot = snapshot_combat(self.machine, offers)

        decision = self.policies[side].select_action(snapshot, legal)
        if decision is None:
            result = self.machine.pass_turn()
        else:
            result = self.machine.perform(decision.action, self.rng)

        self.ticks += 1
        self.log.extend(result.changes)
        logger.debug("Tick %d: %s", self.ticks, "; ".join(result.changes))

        if self.machine.is_over:
            self._finish()
        return result

    def run(self, max_ticks: int = DEFAULT_MAX_TICKS) -> DuelResult:
        """Play until an actor is defeated or max_ticks ticks were played."""
        while not self.is_finished:
            if self.ticks >= max_ticks:
                logger.info("Duel stopped at tick limit %d", max_ticks)
                self.state = DuelState.TICK_LIMIT
                break
            self.step()
        return self.result()

    def result(self) -> DuelResult:
        winner = self.machine.winner
        return DuelResult(
            state=self.state,
            winner=winner,
            winner_name=self.machine.actor(winner).name if winner is not None else None,
            ticks=self.ticks,
            rounds=self.machine.round_number,
            log=list(self.log),
        )

    def _finish(self) -> None:
        self.state = DuelState.FINISHED
        winner = self.machine.winner
        if winner is None:
            logger.info("Duel over after %d ticks: no survivor", self.ticks)
            self.log.append("Both combatants fell")
        else:
            name = self.machine.actor(winner).name
            logger.info("Duel over after %d ticks: %s wins", self.ticks, name)
            self.log.append(f"{name} wins")
