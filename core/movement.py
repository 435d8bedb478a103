"""Move generation for the Scotland Yard rules engine.

Pure functions enumerating the legal single and double moves of a piece.
No piece may move onto a station held by a detective. Every transport
edge may be paid for with its own ticket, and a Secret ticket stands in
for any transport.
"""

from __future__ import annotations

from collections.abc import Iterable

from .board import BoardGraph, NodeId
from .constants import Ticket
from .moves import DoubleMove, SingleMove
from .player import Player


def occupied_locations(detectives: Iterable[Player]) -> frozenset[NodeId]:
    """Return the stations currently held by detectives."""
    return frozenset(detective.location for detective in detectives)


def single_moves(
    graph: BoardGraph,
    detectives: Iterable[Player],
    player: Player,
    source: NodeId,
) -> set[SingleMove]:
    """Enumerate the single hops a player can make from a station.

    Args:
        graph: The board.
        detectives: All detectives; their stations are blocked.
        player: The moving piece (its tickets decide what can be paid).
        source: Station the hop starts from.

    Returns:
        Set of legal SingleMove values (empty at a dead end or without tickets).
    """
    occupied = occupied_locations(detectives)
    has_secret = player.has(Ticket.SECRET)
    moves: set[SingleMove] = set()

    for destination in graph.adjacent_nodes(source):
        if destination in occupied:
            continue
        for transport in graph.edge_transports(source, destination):
            ticket = transport.required_ticket
            if player.has(ticket):
                moves.add(SingleMove(player.piece, source, ticket, destination))
            if has_secret:
                moves.add(SingleMove(player.piece, source, Ticket.SECRET, destination))

    return moves


def double_moves(
    graph: BoardGraph,
    detectives: Iterable[Player],
    player: Player,
    source: NodeId,
) -> set[DoubleMove]:
    """Enumerate the two-hop moves a player can make with a Double ticket.

    Each hop picks its own ticket (matching transport or Secret). When
    both hops use the same ticket kind the player must hold two of it.

    Returns:
        Set of legal DoubleMove values (empty without a Double ticket).
    """
    if not player.has(Ticket.DOUBLE):
        return set()

    detectives = list(detectives)
    moves: set[DoubleMove] = set()

    for first in single_moves(graph, detectives, player, source):
        for second in single_moves(graph, detectives, player, first.destination):
            if first.ticket == second.ticket and not player.has_at_least(first.ticket, 2):
                continue
            moves.add(
                DoubleMove(
                    player.piece,
                    source,
                    first.ticket,
                    first.destination,
                    second.ticket,
                    second.destination,
                )
            )

    return moves


def can_move(graph: BoardGraph, detectives: Iterable[Player], player: Player) -> bool:
    """Check whether a player has at least one single move from where it stands."""
    return bool(single_moves(graph, detectives, player, player.location))
