"""Tests for the observable Model and its BoardView."""

import pytest

from core.board import BoardGraph, GameSetup
from core.constants import Piece, Ticket, Transport
from core.errors import IllegalMoveError, ObserverError
from core.moves import SingleMove
from core.player import Player
from engine.model import BoardView, Event, Model, Observer


class RecordingObserver(Observer):
    """Observer that records every notification."""

    def __init__(self):
        self.events = []

    def on_model_changed(self, board, event):
        self.events.append((board, event))


@pytest.fixture
def game_setup():
    graph = BoardGraph()
    graph.add_route(1, 2, Transport.TAXI)
    graph.add_route(2, 3, Transport.TAXI)
    graph.add_route(1, 3, Transport.BUS)
    graph.add_route(3, 4, Transport.UNDERGROUND)
    return GameSetup(graph, (False, False, False))


@pytest.fixture
def model(game_setup):
    """MrX at 1, Red at 4."""
    return Model.build(
        game_setup,
        Player(Piece.MRX, 1, {Ticket.TAXI: 2, Ticket.BUS: 2}),
        [Player(Piece.RED, 4, {Ticket.TAXI: 5, Ticket.UNDERGROUND: 5})],
    )


# =============================================================================
# Observer Registration Tests
# =============================================================================

class TestObserverRegistration:
    """Test registering and unregistering observers."""

    def test_register(self, model):
        observer = RecordingObserver()
        model.register_observer(observer)
        assert model.observers == (observer,)

    def test_register_none(self, model):
        with pytest.raises(ObserverError):
            model.register_observer(None)

    def test_register_twice(self, model):
        observer = RecordingObserver()
        model.register_observer(observer)
        with pytest.raises(ObserverError, match="already registered"):
            model.register_observer(observer)

    def test_unregister(self, model):
        observer = RecordingObserver()
        model.register_observer(observer)
        model.unregister_observer(observer)
        assert model.observers == ()

    def test_unregister_unknown(self, model):
        with pytest.raises(ObserverError, match="not registered"):
            model.unregister_observer(RecordingObserver())

    def test_unregister_none(self, model):
        with pytest.raises(ObserverError):
            model.unregister_observer(None)


# =============================================================================
# Play Tests
# =============================================================================

class TestChooseMove:
    """Test playing moves through the model."""

    def test_move_made_event(self, model):
        observer = RecordingObserver()
        model.register_observer(observer)

        model.choose_move(SingleMove(Piece.MRX, 1, Ticket.TAXI, 2))

        assert len(observer.events) == 1
        board, event = observer.events[0]
        assert event is Event.MOVE_MADE
        assert board.current_piece == Piece.RED
        assert len(board.mr_x_travel_log) == 1

    def test_game_over_event(self, model):
        observer = RecordingObserver()
        model.register_observer(observer)

        model.choose_move(SingleMove(Piece.MRX, 1, Ticket.BUS, 3))
        model.choose_move(SingleMove(Piece.RED, 4, Ticket.UNDERGROUND, 3))

        assert [event for _, event in observer.events] == [Event.MOVE_MADE, Event.GAME_OVER]
        assert model.current_board.winner == frozenset({Piece.RED})

    def test_every_observer_notified(self, model):
        first, second = RecordingObserver(), RecordingObserver()
        model.register_observer(first)
        model.register_observer(second)
        model.choose_move(SingleMove(Piece.MRX, 1, Ticket.TAXI, 2))
        assert len(first.events) == len(second.events) == 1

    def test_observer_may_unregister_while_notified(self, model):
        class OneShot(Observer):
            def __init__(self, owner):
                self.owner = owner
                self.calls = 0

            def on_model_changed(self, board, event):
                self.calls += 1
                self.owner.unregister_observer(self)

        one_shot = OneShot(model)
        recorder = RecordingObserver()
        model.register_observer(one_shot)
        model.register_observer(recorder)

        model.choose_move(SingleMove(Piece.MRX, 1, Ticket.TAXI, 2))

        assert one_shot.calls == 1
        assert len(recorder.events) == 1
        assert model.observers == (recorder,)

    def test_illegal_move_keeps_state(self, model):
        observer = RecordingObserver()
        model.register_observer(observer)
        before = model.state

        with pytest.raises(IllegalMoveError):
            model.choose_move(SingleMove(Piece.MRX, 1, Ticket.TAXI, 4))

        assert model.state is before
        assert observer.events == []


# =============================================================================
# BoardView Tests
# =============================================================================

class TestBoardView:
    """Test the public view of the game."""

    def test_hides_mr_x_location(self, model):
        board = model.current_board
        assert isinstance(board, BoardView)
        assert board.get_detective_location(Piece.MRX) is None
        assert not hasattr(board, "mr_x")

    def test_exposes_public_information(self, model, game_setup):
        board = model.current_board
        assert board.setup is game_setup
        assert board.players == frozenset({Piece.MRX, Piece.RED})
        assert board.current_piece == Piece.MRX
        assert board.get_detective_location(Piece.RED) == 4
        assert board.get_player_tickets(Piece.MRX).count(Ticket.BUS) == 2
        assert board.winner == frozenset()
        assert board.available_moves == model.state.available_moves

    def test_view_follows_model(self, model):
        model.choose_move(SingleMove(Piece.MRX, 1, Ticket.TAXI, 2))
        board = model.current_board
        assert board.mr_x_travel_log[0].ticket == Ticket.TAXI
        assert board.mr_x_travel_log[0].location is None
