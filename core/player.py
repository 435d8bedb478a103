"""Player model for the Scotland Yard rules engine.

Each player is a piece standing on a board node with a ledger of tickets.
Players are immutable values: moving or spending tickets produces a new
Player, the old one is left untouched.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .board import NodeId
from .constants import Piece, Ticket, MR_X_ONLY_TICKETS
from .tickets import TicketLedger


@dataclass(frozen=True)
class Player:
    """Represents a piece in play.

    Attributes:
        piece: Identity of this player (MrX or one detective colour).
        location: Board node the piece currently stands on.
        tickets: Tickets currently held.
    """

    piece: Piece
    location: NodeId
    tickets: TicketLedger = field(default_factory=TicketLedger)

    def __post_init__(self) -> None:
        if not isinstance(self.tickets, TicketLedger):
            object.__setattr__(self, "tickets", TicketLedger(self.tickets))

    @property
    def is_mr_x(self) -> bool:
        return self.piece.is_mr_x

    @property
    def is_detective(self) -> bool:
        return self.piece.is_detective

    def has(self, ticket: Ticket) -> bool:
        """Check if the player holds at least one ticket of a kind."""
        return self.tickets.has(ticket)

    def has_at_least(self, ticket: Ticket, quantity: int) -> bool:
        """Check if the player holds at least `quantity` tickets of a kind."""
        return self.tickets.has_at_least(ticket, quantity)

    def holds_mr_x_only_tickets(self) -> bool:
        """Check if the player holds any Double or Secret ticket."""
        return any(self.tickets.has(ticket) for ticket in MR_X_ONLY_TICKETS)

    def use(self, tickets: Iterable[Ticket]) -> Player:
        """Return a copy of this player with tickets spent.

        Raises:
            ValueError: If the player does not hold the tickets.
        """
        return Player(self.piece, self.location, self.tickets.use(tickets))

    def give(self, tickets: Iterable[Ticket]) -> Player:
        """Return a copy of this player with tickets credited."""
        return Player(self.piece, self.location, self.tickets.give(tickets))

    def at(self, location: NodeId) -> Player:
        """Return a copy of this player standing on another node."""
        return Player(self.piece, location, self.tickets)

    def to_dict(self) -> dict[str, object]:
        return {
            "piece": self.piece.value,
            "location": self.location,
            "tickets": self.tickets.to_dict(),
        }
