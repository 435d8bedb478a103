"""Ticket ledger for the Scotland Yard rules engine.

A ledger maps each ticket kind to a non-negative count. Ledgers are
immutable values: spending or crediting tickets returns a new ledger.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from .constants import Ticket


class TicketLedger(Mapping):
    """Immutable mapping from Ticket to count.

    Every ticket kind is present; kinds missing from the source mapping
    count as zero.
    """

    __slots__ = ("_counts",)

    def __init__(self, counts: Mapping[Ticket, int] | None = None):
        """Initialize the ledger.

        Args:
            counts: Initial ticket counts. Missing kinds default to 0.

        Raises:
            ValueError: If a key is not a Ticket, or a count is not a
                non-negative integer.
        """
        source = dict(counts or {})
        for ticket, count in source.items():
            if not isinstance(ticket, Ticket):
                raise ValueError(f"Unknown ticket kind: {ticket!r}")
            if not isinstance(count, int) or isinstance(count, bool):
                raise ValueError(f"Count for {ticket.value} must be an integer: {count!r}")
            if count < 0:
                raise ValueError(f"Negative count for {ticket.value}: {count}")
        self._counts: dict[Ticket, int] = {
            ticket: source.get(ticket, 0) for ticket in Ticket
        }

    # -------------------------------------------------------------------------
    # Mapping protocol
    # -------------------------------------------------------------------------

    def __getitem__(self, ticket: Ticket) -> int:
        return self._counts[ticket]

    def __iter__(self) -> Iterator[Ticket]:
        return iter(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def __hash__(self) -> int:
        return hash(tuple(self._counts.items()))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TicketLedger):
            return self._counts == other._counts
        return NotImplemented

    def __repr__(self) -> str:
        held = ", ".join(
            f"{ticket.value}={count}" for ticket, count in self._counts.items() if count
        )
        return f"TicketLedger({held})"

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def count(self, ticket: Ticket) -> int:
        """Return how many tickets of a kind are held."""
        return self._counts[ticket]

    def has(self, ticket: Ticket) -> bool:
        """Check if at least one ticket of a kind is held."""
        return self._counts[ticket] > 0

    def has_at_least(self, ticket: Ticket, quantity: int) -> bool:
        """Check if at least `quantity` tickets of a kind are held."""
        return self._counts[ticket] >= quantity

    def total(self) -> int:
        """Return the total number of tickets held."""
        return sum(self._counts.values())

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def use(self, tickets: Iterable[Ticket]) -> TicketLedger:
        """Spend tickets, returning the reduced ledger.

        Raises:
            ValueError: If any ticket is not held in sufficient quantity.
        """
        counts = dict(self._counts)
        for ticket in tickets:
            if counts[ticket] <= 0:
                raise ValueError(f"No {ticket.value} ticket left to use")
            counts[ticket] -= 1
        return TicketLedger(counts)

    def give(self, tickets: Iterable[Ticket]) -> TicketLedger:
        """Credit tickets, returning the enlarged ledger."""
        counts = dict(self._counts)
        for ticket in tickets:
            counts[ticket] += 1
        return TicketLedger(counts)

    def to_dict(self) -> dict[str, int]:
        """Serialize to a plain dictionary keyed by ticket value."""
        return {ticket.value: count for ticket, count in self._counts.items()}
