"""Tests for the core module (constants, tickets, players, moves and board)."""

import dataclasses

import pytest

from core.constants import (
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
from core.board import BoardGraph, GameSetup, make_edge_id
from core.errors import IllegalMoveError
from core.moves import (
    SingleMove,
    DoubleMove,
    final_destination,
    tickets_used,
    hops,
    move_to_dict,
)
from core.player import Player
from core.tickets import TicketLedger
from core.travel_log import LogEntry


# =============================================================================
# Constants Tests
# =============================================================================

class TestEnums:
    """Test enum definitions."""

    def test_ticket_values(self):
        """Tickets should be taxi, bus, underground, double, secret."""
        assert [t.value for t in Ticket] == ["taxi", "bus", "underground", "double", "secret"]

    def test_special_tickets(self):
        """Only Double and Secret are special."""
        assert Ticket.DOUBLE.is_special
        assert Ticket.SECRET.is_special
        assert not Ticket.TAXI.is_special
        assert not Ticket.UNDERGROUND.is_special

    def test_transport_required_tickets(self):
        """Each transport maps to its ticket; the ferry needs a Secret ticket."""
        assert Transport.TAXI.required_ticket == Ticket.TAXI
        assert Transport.BUS.required_ticket == Ticket.BUS
        assert Transport.UNDERGROUND.required_ticket == Ticket.UNDERGROUND
        assert Transport.FERRY.required_ticket == Ticket.SECRET

    def test_piece_roles(self):
        """MrX is the only non-detective piece."""
        assert Piece.MRX.is_mr_x
        assert not Piece.MRX.is_detective
        for piece in DETECTIVE_PIECES:
            assert piece.is_detective
            assert not piece.is_mr_x
        assert len(Piece) == 6


class TestConstants:
    """Test constant values."""

    def test_detective_limits(self):
        assert MIN_DETECTIVES == 1
        assert MAX_DETECTIVES == 5
        assert DETECTIVE_PIECES[0] == Piece.RED

    def test_mr_x_only_tickets(self):
        assert set(MR_X_ONLY_TICKETS) == {Ticket.DOUBLE, Ticket.SECRET}

    def test_default_allocations(self):
        """Standard allocations: detectives get no special tickets."""
        assert DEFAULT_MR_X_TICKETS[Ticket.DOUBLE] == 2
        assert DEFAULT_MR_X_TICKETS[Ticket.SECRET] == 5
        assert DEFAULT_DETECTIVE_TICKETS[Ticket.TAXI] == 11
        assert DEFAULT_DETECTIVE_TICKETS[Ticket.BUS] == 8
        assert DEFAULT_DETECTIVE_TICKETS[Ticket.UNDERGROUND] == 4
        for ticket in MR_X_ONLY_TICKETS:
            assert DEFAULT_DETECTIVE_TICKETS[ticket] == 0

    def test_standard_schedule(self):
        """The standard game has 24 rounds with five reveals."""
        assert STANDARD_ROUND_COUNT == 24
        assert len(STANDARD_REVEAL_SCHEDULE) == 24
        assert sum(STANDARD_REVEAL_SCHEDULE) == len(STANDARD_REVEAL_ROUNDS)
        revealed = [i + 1 for i, flag in enumerate(STANDARD_REVEAL_SCHEDULE) if flag]
        assert revealed == [3, 8, 13, 18, 24]

    def test_make_reveal_schedule(self):
        assert make_reveal_schedule(4, [1, 4]) == (True, False, False, True)
        assert make_reveal_schedule(2, []) == (False, False)

    def test_make_reveal_schedule_out_of_range(self):
        with pytest.raises(ValueError, match="outside"):
            make_reveal_schedule(3, [4])
        with pytest.raises(ValueError):
            make_reveal_schedule(3, [0])


# =============================================================================
# Ticket Ledger Tests
# =============================================================================

class TestTicketLedger:
    """Test TicketLedger value semantics."""

    def test_missing_kinds_count_zero(self):
        ledger = TicketLedger({Ticket.TAXI: 2})
        assert ledger.count(Ticket.TAXI) == 2
        assert ledger[Ticket.BUS] == 0
        assert len(ledger) == len(Ticket)
        assert set(ledger) == set(Ticket)

    def test_empty_ledger(self):
        ledger = TicketLedger()
        assert ledger.total() == 0
        assert not ledger.has(Ticket.TAXI)

    def test_negative_count_rejected(self):
        with pytest.raises(ValueError, match="Negative count"):
            TicketLedger({Ticket.BUS: -1})

    @pytest.mark.parametrize("count", [1.5, "2", True, None])
    def test_non_integer_count_rejected(self, count):
        with pytest.raises(ValueError, match="must be an integer"):
            TicketLedger({Ticket.TAXI: count})

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValueError, match="Unknown ticket kind"):
            TicketLedger({"taxi": 1})

    def test_use_returns_new_ledger(self):
        """Spending tickets should not mutate the original ledger."""
        ledger = TicketLedger({Ticket.TAXI: 2, Ticket.DOUBLE: 1})
        spent = ledger.use([Ticket.TAXI, Ticket.DOUBLE])

        assert spent.count(Ticket.TAXI) == 1
        assert spent.count(Ticket.DOUBLE) == 0
        assert ledger.count(Ticket.TAXI) == 2
        assert ledger.count(Ticket.DOUBLE) == 1

    def test_use_missing_ticket(self):
        ledger = TicketLedger({Ticket.TAXI: 1})
        with pytest.raises(ValueError, match="No bus ticket left"):
            ledger.use([Ticket.BUS])

    def test_use_more_than_held(self):
        ledger = TicketLedger({Ticket.TAXI: 1})
        with pytest.raises(ValueError):
            ledger.use([Ticket.TAXI, Ticket.TAXI])

    def test_give(self):
        ledger = TicketLedger().give([Ticket.BUS, Ticket.BUS, Ticket.TAXI])
        assert ledger.count(Ticket.BUS) == 2
        assert ledger.count(Ticket.TAXI) == 1
        assert ledger.total() == 3

    def test_has_at_least(self):
        ledger = TicketLedger({Ticket.SECRET: 2})
        assert ledger.has_at_least(Ticket.SECRET, 2)
        assert not ledger.has_at_least(Ticket.SECRET, 3)

    def test_equality_and_hash(self):
        """Ledgers with the same counts are equal, zeros included or not."""
        a = TicketLedger({Ticket.TAXI: 1})
        b = TicketLedger({Ticket.TAXI: 1, Ticket.BUS: 0})
        assert a == b
        assert hash(a) == hash(b)
        assert a != TicketLedger({Ticket.TAXI: 2})

    def test_to_dict(self):
        ledger = TicketLedger({Ticket.UNDERGROUND: 3})
        assert ledger.to_dict() == {
            "taxi": 0,
            "bus": 0,
            "underground": 3,
            "double": 0,
            "secret": 0,
        }

    def test_repr_lists_held_tickets(self):
        assert repr(TicketLedger({Ticket.TAXI: 1})) == "TicketLedger(taxi=1)"


# =============================================================================
# Player Tests
# =============================================================================

class TestPlayer:
    """Test Player values."""

    def test_dict_tickets_become_ledger(self):
        player = Player(Piece.RED, 5, {Ticket.TAXI: 2})
        assert isinstance(player.tickets, TicketLedger)
        assert player.has(Ticket.TAXI)
        assert player.is_detective

    def test_player_is_frozen(self):
        player = Player(Piece.MRX, 1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            player.location = 2

    def test_use_and_at_return_copies(self):
        player = Player(Piece.MRX, 1, {Ticket.BUS: 1})
        moved = player.use([Ticket.BUS]).at(7)

        assert moved.location == 7
        assert not moved.has(Ticket.BUS)
        assert player.location == 1
        assert player.has(Ticket.BUS)

    def test_give(self):
        player = Player(Piece.MRX, 1).give([Ticket.TAXI])
        assert player.tickets.count(Ticket.TAXI) == 1

    def test_holds_mr_x_only_tickets(self):
        assert Player(Piece.MRX, 1, {Ticket.SECRET: 1}).holds_mr_x_only_tickets()
        assert not Player(Piece.RED, 1, {Ticket.TAXI: 1}).holds_mr_x_only_tickets()

    def test_players_compare_by_value(self):
        a = Player(Piece.BLUE, 3, {Ticket.TAXI: 1})
        b = Player(Piece.BLUE, 3, {Ticket.TAXI: 1})
        assert a == b
        assert hash(a) == hash(b)

    def test_to_dict(self):
        data = Player(Piece.GREEN, 9, {Ticket.BUS: 2}).to_dict()
        assert data["piece"] == "green"
        assert data["location"] == 9
        assert data["tickets"]["bus"] == 2


# =============================================================================
# Move Tests
# =============================================================================

class TestMoves:
    """Test move values and helpers."""

    def test_moves_deduplicate_in_sets(self):
        a = SingleMove(Piece.MRX, 1, Ticket.TAXI, 2)
        b = SingleMove(Piece.MRX, 1, Ticket.TAXI, 2)
        assert a == b
        assert len({a, b}) == 1

    def test_single_move_helpers(self):
        move = SingleMove(Piece.RED, 4, Ticket.BUS, 9)
        assert final_destination(move) == 9
        assert tickets_used(move) == (Ticket.BUS,)
        assert hops(move) == [(Ticket.BUS, 9)]

    def test_double_move_helpers(self):
        """A double move spends both hop tickets plus the Double ticket."""
        move = DoubleMove(Piece.MRX, 1, Ticket.TAXI, 2, Ticket.SECRET, 5)
        assert final_destination(move) == 5
        assert tickets_used(move) == (Ticket.TAXI, Ticket.SECRET, Ticket.DOUBLE)
        assert hops(move) == [(Ticket.TAXI, 2), (Ticket.SECRET, 5)]

    def test_helpers_reject_non_moves(self):
        with pytest.raises(TypeError):
            final_destination("1->2")
        with pytest.raises(TypeError):
            tickets_used(None)

    def test_move_to_dict(self):
        move = DoubleMove(Piece.MRX, 1, Ticket.TAXI, 2, Ticket.BUS, 3)
        assert move_to_dict(move) == {
            "mover": "mrx",
            "source": 1,
            "hops": [
                {"ticket": "taxi", "destination": 2},
                {"ticket": "bus", "destination": 3},
            ],
        }

    def test_str(self):
        assert str(SingleMove(Piece.MRX, 1, Ticket.TAXI, 2)) == "mrx: 1 -[taxi]-> 2"
        assert str(DoubleMove(Piece.MRX, 1, Ticket.TAXI, 2, Ticket.BUS, 3)) == (
            "mrx: 1 -[taxi]-> 2 -[bus]-> 3"
        )

    def test_illegal_move_error_message(self):
        move = SingleMove(Piece.RED, 1, Ticket.TAXI, 2)
        error = IllegalMoveError(move, "blocked")
        assert error.move == move
        assert error.reason == "blocked"
        assert "blocked" in str(error)
        assert isinstance(error, ValueError)


class TestLogEntry:
    """Test travel log entries."""

    def test_hidden_entry(self):
        entry = LogEntry.hidden(Ticket.BUS)
        assert entry.location is None
        assert not entry.is_revealed
        assert str(entry) == "bus -> ?"

    def test_revealed_entry(self):
        entry = LogEntry.reveal(Ticket.SECRET, 42)
        assert entry.is_revealed
        assert entry.to_dict() == {"ticket": "secret", "location": 42}
        assert str(entry) == "secret -> 42"


# =============================================================================
# Board Tests
# =============================================================================

class TestBoardGraph:
    """Test BoardGraph construction and queries."""

    def test_make_edge_id_is_canonical(self):
        assert make_edge_id(5, 2) == (2, 5)
        assert make_edge_id(2, 5) == (2, 5)

    def test_add_route_adds_missing_nodes(self):
        board = BoardGraph()
        board.add_route(1, 2, Transport.TAXI)
        assert board.nodes == [1, 2]
        assert board.num_edges() == 1

    def test_routes_merge_transports(self):
        """A second transport between the same pair extends the edge label."""
        board = BoardGraph()
        board.add_route(1, 2, Transport.TAXI)
        board.add_route(2, 1, Transport.BUS)

        assert board.num_edges() == 1
        assert board.edge_transports(1, 2) == frozenset({Transport.TAXI, Transport.BUS})
        assert board.edge_transports(2, 1) == board.edge_transports(1, 2)

    def test_duplicate_route_rejected(self):
        board = BoardGraph()
        board.add_route(1, 2, Transport.TAXI)
        with pytest.raises(ValueError, match="Duplicate"):
            board.add_route(2, 1, Transport.TAXI)

    def test_self_loop_rejected(self):
        board = BoardGraph()
        with pytest.raises(ValueError, match="Self-loop"):
            board.add_route(3, 3, Transport.TAXI)

    def test_adjacent_nodes(self):
        board = BoardGraph()
        board.add_route(1, 2, Transport.TAXI)
        board.add_route(1, 3, Transport.UNDERGROUND)
        assert board.adjacent_nodes(1) == frozenset({2, 3})
        assert board.adjacent_nodes(2) == frozenset({1})
        assert board.adjacent_nodes(99) == frozenset()

    def test_edge_transports_of_non_edge(self):
        board = BoardGraph()
        board.add_route(1, 2, Transport.TAXI)
        board.add_node(3)
        assert board.edge_transports(1, 3) == frozenset()

    def test_edges_use_canonical_ids(self):
        board = BoardGraph()
        board.add_route(4, 2, Transport.FERRY)
        assert list(board.edges()) == [((2, 4), frozenset({Transport.FERRY}))]

    def test_connectivity(self):
        board = BoardGraph()
        assert board.is_empty()
        assert board.is_connected()
        board.add_route(1, 2, Transport.TAXI)
        assert board.is_connected()
        board.add_node(3)
        assert not board.is_connected()

    def test_positions(self):
        board = BoardGraph()
        board.add_node(1, position=(0.5, 2.0))
        board.add_node(2)
        assert board.position(1) == (0.5, 2.0)
        assert board.position(2) is None

    def test_start_locations(self):
        board = BoardGraph()
        assert board.mr_x_start_locations == ()
        board.add_route(1, 2, Transport.TAXI)
        board.set_start_locations([1], [2])
        assert board.mr_x_start_locations == (1,)
        assert board.detective_start_locations == (2,)


class TestGameSetup:
    """Test GameSetup."""

    def test_moves_become_bool_tuple(self):
        setup = GameSetup(BoardGraph(), [0, 1, 0])
        assert setup.moves == (False, True, False)
        assert setup.round_count == 3

    def test_with_reveal_rounds(self):
        setup = GameSetup.with_reveal_rounds(BoardGraph(), 5, [2, 5])
        assert setup.moves == (False, True, False, False, True)
        assert setup.is_reveal_round(1)
        assert not setup.is_reveal_round(0)

    def test_with_reveal_rounds_out_of_range(self):
        with pytest.raises(ValueError):
            GameSetup.with_reveal_rounds(BoardGraph(), 2, [3])
