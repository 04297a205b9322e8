"""
Tokens - Countable markers and the per-actor ledger that holds them.

A token is a capped counter on an actor. Resources (health, stamina)
and statuses (dodge, blind, ...) are all tokens; the engine does not
distinguish them.

Ledger invariants:
- An absent kind has count 0
- A present kind always has 0 < count <= capacity(kind)
- Capacity defaults to DEFAULT_CAPACITY until set
"""

from __future__ import annotations
from enum import Enum
from typing import Iterator, Mapping


DEFAULT_CAPACITY = 1


class TokenKind(Enum):
    """Every countable marker an actor can hold."""
    # Resources
    HEALTH = "health"
    STAMINA = "stamina"

    # Statuses
    DODGE = "dodge"
    BLIND = "blind"
    BLOCK = "block"
    VULNERABLE = "vulnerable"
    DAZE = "daze"
    STUN = "stun"
    WEAK = "weak"
    STRONG = "strong"
    DAMAGE = "damage"  # Pending damage, resolved by a trigger
    UNSTABLE = "unstable"
    WIDE_OPEN = "wide_open"
    COUNTER = "counter"
    EXTRA_HEALTH = "extra_health"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


_KIND_ORDER = {kind: index for index, kind in enumerate(TokenKind)}


class TokenLedger:
    """
    Token counts and capacities for a single actor.

    All operations are total: adding past capacity caps silently,
    removing more than is held deletes the entry.
    """

    def __init__(self, default_capacity: int = DEFAULT_CAPACITY):
        self.default_capacity = default_capacity
        self._counts: dict[TokenKind, int] = {}
        self._capacities: dict[TokenKind, int] = {}

    @classmethod
    def from_counts(
        cls,
        counts: Mapping[TokenKind, int] | None = None,
        capacities: Mapping[TokenKind, int] | None = None,
        default_capacity: int = DEFAULT_CAPACITY,
    ) -> TokenLedger:
        """Build a ledger, setting capacities before adding counts."""
        ledger = cls(default_capacity=default_capacity)
        for kind, cap in (capacities or {}).items():
            ledger.set_capacity(kind, cap)
        for kind, amount in (counts or {}).items():
            ledger.add(kind, amount)
        return ledger

    def count(self, kind: TokenKind) -> int:
        return self._counts.get(kind, 0)

    def has(self, kind: TokenKind) -> bool:
        return kind in self._counts

    def capacity(self, kind: TokenKind) -> int:
        return self._capacities.get(kind, self.default_capacity)

    def set_capacity(self, kind: TokenKind, cap: int) -> None:
        """Set the capacity for a kind, clamping any stored count above it."""
        cap = max(0, cap)
        self._capacities[kind] = cap
        held = self._counts.get(kind)
        if held is None or held <= cap:
            return
        if cap == 0:
            del self._counts[kind]
        else:
            self._counts[kind] = cap

    def add(self, kind: TokenKind, amount: int) -> None:
        """Add tokens, capped at the kind's capacity."""
        if amount <= 0:
            return
        new_count = min(self.capacity(kind), self.count(kind) + amount)
        if new_count > 0:
            self._counts[kind] = new_count

    def remove(self, kind: TokenKind, amount: int) -> None:
        """Remove tokens; the entry disappears once nothing is left."""
        held = self._counts.get(kind)
        if held is None or amount <= 0:
            return
        if held > amount:
            self._counts[kind] = held - amount
        else:
            del self._counts[kind]

    def items(self) -> list[tuple[TokenKind, int]]:
        """Held (kind, count) pairs in TokenKind declaration order."""
        return sorted(self._counts.items(), key=lambda pair: _KIND_ORDER[pair[0]])

    def as_dict(self) -> dict[TokenKind, int]:
        return dict(self.items())

    def __contains__(self, kind: object) -> bool:
        return kind in self._counts

    def __iter__(self) -> Iterator[TokenKind]:
        return iter(kind for kind, _ in self.items())

    def __len__(self) -> int:
        return len(self._counts)

    def __repr__(self) -> str:
        held = ", ".join(f"{kind.value}={count}" for kind, count in self.items())
        return f"TokenLedger({held})"
