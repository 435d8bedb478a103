"""Game state for the Scotland Yard rules engine.

GameState is the single source of truth for one point in a game. It is an
immutable value: ``advance`` validates a move and returns a brand new
GameState, leaving the previous one untouched. States therefore form a
singly linked chain and may be explored concurrently by search code.
"""

from __future__ import annotations

import hashlib
import json
import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from functools import cached_property
from typing import Any, Optional

from .board import GameSetup, NodeId
from .constants import Piece
from .errors import GameConfigurationError, IllegalMoveError
from .movement import can_move, double_moves, single_moves
from .moves import Move, final_destination, hops, tickets_used
from .player import Player
from .tickets import TicketLedger
from .travel_log import LogEntry
from .victory import determine_winner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameState:
    """The complete game state at one point of play.

    Attributes:
        setup: Board and reveal schedule, shared by the whole game.
        remaining: Rotation of pieces still owed a move this round; the head
            is the piece to move. Empty or detective-headed means it is the
            detectives' turn.
        log: MrX's travel log, one entry per hop taken so far.
        mr_x: The MrX player.
        detectives: The detective players in seating order.

    Raises:
        GameConfigurationError: If any construction invariant is violated.
    """

    setup: GameSetup
    remaining: tuple[Piece, ...]
    log: tuple[LogEntry, ...]
    mr_x: Player
    detectives: tuple[Player, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "remaining", tuple(self.remaining))
        object.__setattr__(self, "log", tuple(self.log))
        object.__setattr__(self, "detectives", tuple(self.detectives))

        errors = self.validate()
        if errors:
            raise GameConfigurationError("; ".join(errors))

    @classmethod
    def create_initial_state(
        cls,
        setup: GameSetup,
        mr_x: Player,
        detectives: Iterable[Player],
    ) -> GameState:
        """Create the opening state of a game.

        The log starts empty and the rotation holds MrX followed by every
        detective, so MrX moves first.

        Args:
            setup: The board and reveal schedule.
            mr_x: MrX at his starting station with his tickets.
            detectives: The detectives at their starting stations.

        Returns:
            A new GameState ready for MrX's first move.

        Raises:
            GameConfigurationError: If the board is empty or any piece
                invariant is violated.
        """
        if setup.graph.is_empty():
            raise GameConfigurationError("Graph cannot be empty")

        detectives = tuple(detectives)
        remaining = (mr_x.piece,) + tuple(d.piece for d in detectives)
        state = cls(
            setup=setup,
            remaining=remaining,
            log=(),
            mr_x=mr_x,
            detectives=detectives,
        )
        logger.debug(
            "Created initial state with %d detectives over %d rounds",
            len(detectives),
            setup.round_count,
        )
        return state

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self) -> list[str]:
        """Validate the game state for consistency.

        Returns:
            List of validation error messages (empty if valid).
        """
        errors: list[str] = []

        if self.mr_x.is_detective:
            errors.append("MrX cannot be a detective")

        if not self.detectives:
            errors.append("There must be at least one detective")

        if any(d.is_mr_x for d in self.detectives):
            errors.append("A detective cannot be MrX")

        piece_counts = Counter(d.piece for d in self.detectives)
        duplicates = sorted(p.value for p, n in piece_counts.items() if n > 1)
        if duplicates:
            errors.append(f"Duplicate detectives: {duplicates}")

        location_counts = Counter(d.location for d in self.detectives)
        shared = sorted(loc for loc, n in location_counts.items() if n > 1)
        if shared:
            errors.append(f"Detectives cannot share a location: {shared}")

        if not self.setup.moves:
            errors.append("There must be at least one round in the reveal schedule")

        for detective in self.detectives:
            if detective.holds_mr_x_only_tickets():
                errors.append(
                    f"Detective {detective.piece.value} cannot hold double or secret tickets"
                )

        graph = self.setup.graph
        for player in (self.mr_x, *self.detectives):
            if not graph.has_node(player.location):
                errors.append(
                    f"{player.piece.value} is at unknown location {player.location}"
                )

        if len(self.log) > len(self.setup.moves):
            errors.append(
                f"Travel log has {len(self.log)} entries but only "
                f"{len(self.setup.moves)} rounds"
            )

        pieces = {self.mr_x.piece} | set(piece_counts)
        if len(set(self.remaining)) != len(self.remaining):
            errors.append("Rotation contains a piece twice")
        for index, piece in enumerate(self.remaining):
            if piece not in pieces:
                errors.append(f"Rotation contains {piece.value} which is not in play")
            elif piece.is_mr_x and index != 0:
                errors.append("MrX can only be at the head of the rotation")

        return errors

    # -------------------------------------------------------------------------
    # Player access methods
    # -------------------------------------------------------------------------

    @property
    def players(self) -> frozenset[Piece]:
        """All pieces taking part in this game."""
        return frozenset({self.mr_x.piece, *(d.piece for d in self.detectives)})

    def get_player(self, piece: Piece) -> Player:
        """Get a player by piece.

        Raises:
            ValueError: If the piece is not in play.
        """
        if piece == self.mr_x.piece:
            return self.mr_x
        for detective in self.detectives:
            if detective.piece == piece:
                return detective
        raise ValueError(f"Piece not in play: {piece.value}")

    def get_detective_location(self, piece: Piece) -> Optional[NodeId]:
        """Get a detective's station, or None if that detective is not in play."""
        for detective in self.detectives:
            if detective.piece == piece:
                return detective.location
        return None

    def get_player_tickets(self, piece: Piece) -> Optional[TicketLedger]:
        """Get a piece's tickets, or None if the piece is not in play."""
        if piece == self.mr_x.piece:
            return self.mr_x.tickets
        for detective in self.detectives:
            if detective.piece == piece:
                return detective.tickets
        return None

    # -------------------------------------------------------------------------
    # Turn management
    # -------------------------------------------------------------------------

    @property
    def current_piece(self) -> Optional[Piece]:
        """The piece at the head of the rotation, if any."""
        return self.remaining[0] if self.remaining else None

    @property
    def is_mr_x_turn(self) -> bool:
        return self.current_piece is not None and self.current_piece.is_mr_x

    @property
    def rounds_remaining(self) -> int:
        """Number of MrX rounds not yet logged."""
        return len(self.setup.moves) - len(self.log)

    # -------------------------------------------------------------------------
    # Moves and winner
    # -------------------------------------------------------------------------

    @cached_property
    def mr_x_moves(self) -> frozenset[Move]:
        """Every move MrX could make from his station, ignoring whose turn it is.

        Double moves are only offered while at least two rounds remain.
        """
        graph = self.setup.graph
        location = self.mr_x.location
        moves: set[Move] = set(single_moves(graph, self.detectives, self.mr_x, location))
        if self.rounds_remaining >= 2:
            moves |= double_moves(graph, self.detectives, self.mr_x, location)
        return frozenset(moves)

    @cached_property
    def winner(self) -> frozenset[Piece]:
        """Winning pieces; empty while the game continues."""
        return determine_winner(self)

    def is_game_over(self) -> bool:
        return bool(self.winner)

    @cached_property
    def available_moves(self) -> frozenset[Move]:
        """Legal moves for the piece(s) whose turn it is.

        On MrX's turn these are his single and double moves. On the
        detectives' turn they are the single moves of every detective still
        in the rotation. A finished game has no legal moves.
        """
        if self.winner:
            return frozenset()

        if self.is_mr_x_turn:
            return self.mr_x_moves

        graph = self.setup.graph
        moves: set[Move] = set()
        for detective in self.detectives:
            if detective.piece in self.remaining:
                moves |= single_moves(graph, self.detectives, detective, detective.location)
        return frozenset(moves)

    # -------------------------------------------------------------------------
    # Transition
    # -------------------------------------------------------------------------

    def advance(self, move: Move) -> GameState:
        """Play a move and return the resulting state.

        Args:
            move: A member of ``available_moves``.

        Returns:
            The next GameState. This state is left unchanged.

        Raises:
            IllegalMoveError: If the move is not currently legal, including
                any move once the game is over.
        """
        if self.winner:
            raise IllegalMoveError(move, "the game is over")
        if move not in self.available_moves:
            raise IllegalMoveError(move)

        if move.mover.is_mr_x:
            next_state = self._advance_mr_x(move)
        else:
            next_state = self._advance_detective(move)

        logger.debug("Advanced with %s; rotation now %s", move, [p.value for p in next_state.remaining])
        return next_state

    def _advance_mr_x(self, move: Move) -> GameState:
        mr_x = self.mr_x.use(tickets_used(move)).at(final_destination(move))
        log = self.log + self._log_entries_for(move)
        graph = self.setup.graph

        # Detectives without a legal move sit this round out
        remaining = tuple(
            d.piece for d in self.detectives if can_move(graph, self.detectives, d)
        )

        return GameState(
            setup=self.setup,
            remaining=remaining,
            log=log,
            mr_x=mr_x,
            detectives=self.detectives,
        )

    def _advance_detective(self, move: Move) -> GameState:
        spent = tickets_used(move)
        destination = final_destination(move)
        detectives = tuple(
            d.use(spent).at(destination) if d.piece == move.mover else d
            for d in self.detectives
        )
        # Detectives' tickets go to MrX
        mr_x = self.mr_x.give(spent)

        graph = self.setup.graph
        by_piece = {d.piece: d for d in detectives}
        remaining = tuple(
            piece for piece in self.remaining
            if piece != move.mover and can_move(graph, detectives, by_piece[piece])
        )
        if not remaining:
            remaining = (mr_x.piece,)

        return GameState(
            setup=self.setup,
            remaining=remaining,
            log=self.log,
            mr_x=mr_x,
            detectives=detectives,
        )

    def _log_entries_for(self, move: Move) -> tuple[LogEntry, ...]:
        """Build the travel log entries for an MrX move, one per hop."""
        entries: list[LogEntry] = []
        round_index = len(self.log)
        for ticket, destination in hops(move):
            if self.setup.is_reveal_round(round_index):
                entries.append(LogEntry.reveal(ticket, destination))
            else:
                entries.append(LogEntry.hidden(ticket))
            round_index += 1
        return tuple(entries)

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize the game state to a dictionary.

        Useful for debugging and for de-duplicating states during search.
        The board topology is not included.

        Returns:
            Dictionary representation of the game state.
        """
        return {
            "moves": list(self.setup.moves),
            "remaining": [piece.value for piece in self.remaining],
            "log": [entry.to_dict() for entry in self.log],
            "mr_x": self.mr_x.to_dict(),
            "detectives": [d.to_dict() for d in self.detectives],
        }

    def state_hash(self) -> str:
        """Compute a hash of the game state.

        Returns:
            A hex string hash of the serialized state.
        """
        state_json = json.dumps(self.to_dict(), sort_keys=True)
        return hashlib.sha256(state_json.encode()).hexdigest()

    # -------------------------------------------------------------------------
    # String representation
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        """Return a human-readable string representation."""
        turn = self.current_piece.value if self.current_piece else "none"
        lines = [
            f"GameState(round={len(self.log)}/{len(self.setup.moves)}, turn={turn})",
            f"  MrX: at {self.mr_x.location}, tickets={self.mr_x.tickets}",
            f"  Detectives ({len(self.detectives)}):",
        ]
        for d in self.detectives:
            lines.append(f"    {d.piece.value}: at {d.location}, tickets={d.tickets}")
        lines.append(f"  Log: {', '.join(str(entry) for entry in self.log) or '-'}")
        if self.winner:
            lines.append(f"  Winner: {sorted(p.value for p in self.winner)}")
        return "\n".join(lines)
