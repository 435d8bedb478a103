"""Core rules engine and data models for Scotland Yard."""

from .constants import (
    Ticket,
    Transport,
    Piece,
    DETECTIVE_PIECES,
    MIN_DETECTIVES,
    MAX_DETECTIVES,
    MR_X_ONLY_TICKETS,
    DEFAULT_MR_X_TICKETS,
    DEFAULT_DETECTIVE_TICKETS,
    STANDARD_REVEAL_ROUNDS,
    STANDARD_ROUND_COUNT,
    STANDARD_REVEAL_SCHEDULE,
    make_reveal_schedule,
)

from .errors import GameConfigurationError, IllegalMoveError, ObserverError

from .board import NodeId, EdgeId, make_edge_id, BoardGraph, GameSetup

from .tickets import TicketLedger

from .player import Player

from .moves import (
    Move,
    SingleMove,
    DoubleMove,
    final_destination,
    tickets_used,
    hops,
    move_to_dict,
)

from .travel_log import LogEntry

from .movement import single_moves, double_moves, can_move, occupied_locations

from .victory import determine_winner

from .game_state import GameState

__all__ = [
    # Constants
    "Ticket",
    "Transport",
    "Piece",
    "DETECTIVE_PIECES",
    "MIN_DETECTIVES",
    "MAX_DETECTIVES",
    "MR_X_ONLY_TICKETS",
    "DEFAULT_MR_X_TICKETS",
    "DEFAULT_DETECTIVE_TICKETS",
    "STANDARD_REVEAL_ROUNDS",
    "STANDARD_ROUND_COUNT",
    "STANDARD_REVEAL_SCHEDULE",
    "make_reveal_schedule",
    # Errors
    "GameConfigurationError",
    "IllegalMoveError",
    "ObserverError",
    # Board
    "NodeId",
    "EdgeId",
    "make_edge_id",
    "BoardGraph",
    "GameSetup",
    # Tickets and players
    "TicketLedger",
    "Player",
    # Moves
    "Move",
    "SingleMove",
    "DoubleMove",
    "final_destination",
    "tickets_used",
    "hops",
    "move_to_dict",
    # Travel log
    "LogEntry",
    # Rules
    "single_moves",
    "double_moves",
    "can_move",
    "occupied_locations",
    "determine_winner",
    # Game State
    "GameState",
]
