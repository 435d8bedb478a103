"""Constants and enums for the Scotland Yard rules engine."""

from enum import Enum


class Ticket(Enum):
    """Ticket kinds a piece can spend to move."""

    TAXI = "taxi"
    BUS = "bus"
    UNDERGROUND = "underground"
    DOUBLE = "double"  # Two consecutive hops in one turn
    SECRET = "secret"  # Stands in for any transport, hides the transport used

    @property
    def is_special(self) -> bool:
        """True for tickets that do not belong to a transport kind."""
        return self in (Ticket.DOUBLE, Ticket.SECRET)


class Transport(Enum):
    """Transport kinds labelling board edges."""

    TAXI = "taxi"
    BUS = "bus"
    UNDERGROUND = "underground"
    FERRY = "ferry"

    @property
    def required_ticket(self) -> Ticket:
        """The ticket needed to travel along an edge of this kind."""
        return _REQUIRED_TICKETS[self]


_REQUIRED_TICKETS = {
    Transport.TAXI: Ticket.TAXI,
    Transport.BUS: Ticket.BUS,
    Transport.UNDERGROUND: Ticket.UNDERGROUND,
    Transport.FERRY: Ticket.SECRET,
}


class Piece(Enum):
    """Piece identities: MrX plus the fixed detective roster."""

    MRX = "mrx"
    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    WHITE = "white"
    YELLOW = "yellow"

    @property
    def is_mr_x(self) -> bool:
        return self is Piece.MRX

    @property
    def is_detective(self) -> bool:
        return self is not Piece.MRX


# Detective roster in seating order
DETECTIVE_PIECES = [
    Piece.RED,
    Piece.GREEN,
    Piece.BLUE,
    Piece.WHITE,
    Piece.YELLOW,
]

MIN_DETECTIVES = 1
MAX_DETECTIVES = len(DETECTIVE_PIECES)

# Tickets that only MrX may ever hold
MR_X_ONLY_TICKETS = (Ticket.DOUBLE, Ticket.SECRET)

# Standard starting allocations
DEFAULT_MR_X_TICKETS = {
    Ticket.TAXI: 4,
    Ticket.BUS: 3,
    Ticket.UNDERGROUND: 3,
    Ticket.DOUBLE: 2,
    Ticket.SECRET: 5,
}

DEFAULT_DETECTIVE_TICKETS = {
    Ticket.TAXI: 11,
    Ticket.BUS: 8,
    Ticket.UNDERGROUND: 4,
    Ticket.DOUBLE: 0,
    Ticket.SECRET: 0,
}

# Rounds (1-indexed) on which MrX must surface in the standard game
STANDARD_REVEAL_ROUNDS = (3, 8, 13, 18, 24)
STANDARD_ROUND_COUNT = 24


def make_reveal_schedule(round_count: int, reveal_rounds: tuple[int, ...] | list[int]) -> tuple[bool, ...]:
    """Build a per-round reveal schedule.

    Args:
        round_count: Total number of MrX moves in the game.
        reveal_rounds: 1-indexed rounds on which MrX's destination is revealed.

    Returns:
        Tuple of booleans, one per round, True where the round is revealed.

    Raises:
        ValueError: If a reveal round falls outside 1..round_count.
    """
    for round_number in reveal_rounds:
        if not 1 <= round_number <= round_count:
            raise ValueError(
                f"Reveal round {round_number} outside 1..{round_count}"
            )
    revealed = set(reveal_rounds)
    return tuple(i + 1 in revealed for i in range(round_count))


STANDARD_REVEAL_SCHEDULE = make_reveal_schedule(STANDARD_ROUND_COUNT, STANDARD_REVEAL_ROUNDS)
