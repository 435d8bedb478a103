"""MrX's travel log.

Each MrX hop appends one entry. On reveal rounds the entry records the
destination; on hidden rounds only the ticket is known.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .board import NodeId
from .constants import Ticket


@dataclass(frozen=True)
class LogEntry:
    """A single travel log entry.

    Attributes:
        ticket: Ticket MrX spent on the hop.
        location: Destination of the hop, or None when hidden.
    """

    ticket: Ticket
    location: Optional[NodeId] = None

    @classmethod
    def hidden(cls, ticket: Ticket) -> LogEntry:
        return cls(ticket=ticket)

    @classmethod
    def reveal(cls, ticket: Ticket, location: NodeId) -> LogEntry:
        return cls(ticket=ticket, location=location)

    @property
    def is_revealed(self) -> bool:
        return self.location is not None

    def to_dict(self) -> dict[str, object]:
        return {"ticket": self.ticket.value, "location": self.location}

    def __str__(self) -> str:
        where = self.location if self.is_revealed else "?"
        return f"{self.ticket.value} -> {where}"
