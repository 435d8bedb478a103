"""Configuration for starting a Scotland Yard game.

Ticket allocations and roster size used by ``engine.setup.new_game``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from core.constants import (
    DEFAULT_DETECTIVE_TICKETS,
    DEFAULT_MR_X_TICKETS,
    MAX_DETECTIVES,
    MIN_DETECTIVES,
    MR_X_ONLY_TICKETS,
)
from core.errors import GameConfigurationError
from core.tickets import TicketLedger


@dataclass(frozen=True)
class GameConfig:
    """Configuration for a new game.

    Allocations may be given as any ticket mapping; they are stored as
    immutable ledgers so the config stays hashable.

    Attributes:
        num_detectives: How many detectives take part (1-5).
        mr_x_tickets: MrX's starting tickets.
        detective_tickets: Each detective's starting tickets.
    """

    num_detectives: int = MAX_DETECTIVES
    mr_x_tickets: TicketLedger = field(
        default_factory=lambda: TicketLedger(DEFAULT_MR_X_TICKETS)
    )
    detective_tickets: TicketLedger = field(
        default_factory=lambda: TicketLedger(DEFAULT_DETECTIVE_TICKETS)
    )

    def __post_init__(self) -> None:
        if not MIN_DETECTIVES <= self.num_detectives <= MAX_DETECTIVES:
            raise GameConfigurationError(
                f"Number of detectives must be between {MIN_DETECTIVES} and "
                f"{MAX_DETECTIVES}, got {self.num_detectives}"
            )
        for name in ("mr_x_tickets", "detective_tickets"):
            tickets = getattr(self, name)
            if not isinstance(tickets, TicketLedger):
                try:
                    object.__setattr__(self, name, TicketLedger(tickets))
                except ValueError as e:
                    raise GameConfigurationError(f"Invalid {name}: {e}") from e
        for ticket in MR_X_ONLY_TICKETS:
            if self.detective_tickets.has(ticket):
                raise GameConfigurationError(
                    f"Detectives cannot start with {ticket.value} tickets"
                )

    def with_detectives(self, num_detectives: int) -> GameConfig:
        """Return a copy of this config with a different roster size."""
        return GameConfig(
            num_detectives=num_detectives,
            mr_x_tickets=self.mr_x_tickets,
            detective_tickets=self.detective_tickets,
        )


DEFAULT_GAME_CONFIG = GameConfig()
