"""Data models for the digger ticket viewer.

Exposes the Ticket dataclass plus the closed classifications it carries.
Storage form for both enums is the member name ("Three", "Wip", ...);
unknown names decode to the first member rather than failing, which is
lossy by intent and reported by the repository.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TicketLevel(Enum):
    """Fibonacci-like effort scale."""
    ONE = "One"
    TWO = "Two"
    THREE = "Three"
    FIVE = "Five"
    EIGHT = "Eight"
    THIRTEEN = "Thirteen"

    @property
    def points(self) -> int:
        return _LEVEL_POINTS[self]

    @classmethod
    def parse(cls, text: str) -> "TicketLevel":
        for level in cls:
            if level.value == text:
                return level
        return cls.ONE

    def __str__(self) -> str:
        return self.value


_LEVEL_POINTS = {
    TicketLevel.ONE: 1,
    TicketLevel.TWO: 2,
    TicketLevel.THREE: 3,
    TicketLevel.FIVE: 5,
    TicketLevel.EIGHT: 8,
    TicketLevel.THIRTEEN: 13,
}


class TicketStatus(Enum):
    PENDING = "Pending"
    WIP = "Wip"
    RESOLVED = "Resolved"
    CANCELED = "Canceled"

    @classmethod
    def parse(cls, text: str) -> "TicketStatus":
        for status in cls:
            if status.value == text:
                return status
        return cls.PENDING

    def __str__(self) -> str:
        return self.value


@dataclass
class Ticket:
    """A single ticket.

    Fields:
        id: Caller-assigned string id (uniqueness is not enforced).
        level: Effort classification, defaults to One.
        title: Free-form single-line title.
        status: Workflow status, defaults to Pending.
        created_at: UTC timestamp fixed when the ticket is constructed.
        resolved_at: UTC timestamp of the last transition to Resolved.
    """
    id: str
    level: TicketLevel = TicketLevel.ONE
    title: str = ""
    status: TicketStatus = TicketStatus.PENDING
    created_at: datetime = field(default_factory=utcnow)
    resolved_at: Optional[datetime] = None

    def set_status(self, new_status: TicketStatus) -> None:
        # resolved_at is kept when moving away from Resolved
        if new_status is TicketStatus.RESOLVED:
            self.resolved_at = utcnow()
        self.status = new_status

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"Ticket(id={self.id}, title={self.title}, status={self.status})"
