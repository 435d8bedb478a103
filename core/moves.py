"""Move values for the Scotland Yard rules engine.

A move is either a single hop or a double hop. Both are frozen dataclasses
compared by value, so move sets deduplicate naturally. A move never refers
back to the game state it was generated from.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .board import NodeId
from .constants import Piece, Ticket


@dataclass(frozen=True)
class SingleMove:
    """One hop from `source` to `destination` paid with `ticket`."""

    mover: Piece
    source: NodeId
    ticket: Ticket
    destination: NodeId

    def __str__(self) -> str:
        return f"{self.mover.value}: {self.source} -[{self.ticket.value}]-> {self.destination}"


@dataclass(frozen=True)
class DoubleMove:
    """Two consecutive hops taken in one turn with a Double ticket."""

    mover: Piece
    source: NodeId
    ticket1: Ticket
    destination1: NodeId
    ticket2: Ticket
    destination2: NodeId

    def __str__(self) -> str:
        return (
            f"{self.mover.value}: {self.source} -[{self.ticket1.value}]-> "
            f"{self.destination1} -[{self.ticket2.value}]-> {self.destination2}"
        )


Move = Union[SingleMove, DoubleMove]


def final_destination(move: Move) -> NodeId:
    """Return the node the mover ends the turn on."""
    if isinstance(move, SingleMove):
        return move.destination
    if isinstance(move, DoubleMove):
        return move.destination2
    raise TypeError(f"Not a move: {move!r}")


def tickets_used(move: Move) -> tuple[Ticket, ...]:
    """Return every ticket spent by a move, Double ticket included."""
    if isinstance(move, SingleMove):
        return (move.ticket,)
    if isinstance(move, DoubleMove):
        return (move.ticket1, move.ticket2, Ticket.DOUBLE)
    raise TypeError(f"Not a move: {move!r}")


def hops(move: Move) -> list[tuple[Ticket, NodeId]]:
    """Return the (ticket, destination) pair of each hop in order."""
    if isinstance(move, SingleMove):
        return [(move.ticket, move.destination)]
    if isinstance(move, DoubleMove):
        return [(move.ticket1, move.destination1), (move.ticket2, move.destination2)]
    raise TypeError(f"Not a move: {move!r}")


def move_to_dict(move: Move) -> dict[str, object]:
    """Serialize a move to a plain dictionary."""
    return {
        "mover": move.mover.value,
        "source": move.source,
        "hops": [
            {"ticket": ticket.value, "destination": destination}
            for ticket, destination in hops(move)
        ],
    }
