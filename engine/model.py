"""Observable game model for Scotland Yard.

The Model owns the current GameState and is the interface a UI, CLI or
agent plays through. Every move is delegated to ``GameState.advance`` and
registered observers are notified after each move.

Usage:
    model = Model.build(setup, mr_x, detectives)
    model.register_observer(my_observer)

    while not model.current_board.winner:
        moves = model.current_board.available_moves
        model.choose_move(select_move(moves))  # Player or agent selects
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from enum import Enum
from typing import Optional

from core.board import GameSetup, NodeId
from core.constants import Piece
from core.errors import ObserverError
from core.game_state import GameState
from core.moves import Move
from core.player import Player
from core.tickets import TicketLedger
from core.travel_log import LogEntry

from .logger import get_logger

logger = get_logger(__name__)


class Event(Enum):
    """Kinds of model change reported to observers."""

    MOVE_MADE = "move_made"
    GAME_OVER = "game_over"


class BoardView:
    """Read-only view of a game state.

    Exposes everything a player may see. MrX's true station is not
    available; use the travel log instead.
    """

    __slots__ = ("_state",)

    def __init__(self, state: GameState):
        self._state = state

    @property
    def setup(self) -> GameSetup:
        return self._state.setup

    @property
    def mr_x_travel_log(self) -> tuple[LogEntry, ...]:
        return self._state.log

    @property
    def players(self) -> frozenset[Piece]:
        return self._state.players

    @property
    def current_piece(self) -> Optional[Piece]:
        return self._state.current_piece

    @property
    def available_moves(self) -> frozenset[Move]:
        return self._state.available_moves

    @property
    def winner(self) -> frozenset[Piece]:
        return self._state.winner

    def get_detective_location(self, piece: Piece) -> Optional[NodeId]:
        """Get a detective's station; None for MrX or a piece not in play."""
        return self._state.get_detective_location(piece)

    def get_player_tickets(self, piece: Piece) -> Optional[TicketLedger]:
        """Get a piece's tickets; None for a piece not in play."""
        return self._state.get_player_tickets(piece)

    def __repr__(self) -> str:
        return f"BoardView(round={len(self._state.log)}/{len(self._state.setup.moves)})"


class Observer(ABC):
    """Receives a notification after every move made through a Model."""

    @abstractmethod
    def on_model_changed(self, board: BoardView, event: Event) -> None:
        """Called with the updated board and the kind of change."""
        pass


class Model:
    """Observable wrapper around the current game state."""

    def __init__(self, state: GameState):
        self._state = state
        self._observers: list[Observer] = []

    @classmethod
    def build(
        cls,
        setup: GameSetup,
        mr_x: Player,
        detectives: Iterable[Player],
    ) -> Model:
        """Create a model holding the opening state of a new game.

        Raises:
            GameConfigurationError: If the game cannot be built.
        """
        return cls(GameState.create_initial_state(setup, mr_x, detectives))

    @property
    def state(self) -> GameState:
        """The authoritative current state (includes MrX's location)."""
        return self._state

    @property
    def current_board(self) -> BoardView:
        return BoardView(self._state)

    # -------------------------------------------------------------------------
    # Observers
    # -------------------------------------------------------------------------

    def register_observer(self, observer: Observer) -> None:
        """Register an observer.

        Raises:
            ObserverError: If the observer is None or already registered.
        """
        if observer is None:
            raise ObserverError("Observer cannot be None")
        if observer in self._observers:
            raise ObserverError("Observer is already registered")
        self._observers.append(observer)

    def unregister_observer(self, observer: Observer) -> None:
        """Unregister an observer.

        Raises:
            ObserverError: If the observer is None or not registered.
        """
        if observer is None:
            raise ObserverError("Observer cannot be None")
        if observer not in self._observers:
            raise ObserverError("Observer is not registered")
        self._observers.remove(observer)

    @property
    def observers(self) -> tuple[Observer, ...]:
        return tuple(self._observers)

    # -------------------------------------------------------------------------
    # Play
    # -------------------------------------------------------------------------

    def choose_move(self, move: Move) -> None:
        """Play a move and notify observers.

        Raises:
            IllegalMoveError: If the move is not legal; the current state
                is kept and no observer is notified.
        """
        self._state = self._state.advance(move)

        event = Event.GAME_OVER if self._state.winner else Event.MOVE_MADE
        if event is Event.GAME_OVER:
            logger.info("Game over, winner: %s", sorted(p.value for p in self._state.winner))
        else:
            logger.debug("Move made: %s", move)

        board = self.current_board
        for observer in list(self._observers):
            observer.on_model_changed(board, event)
