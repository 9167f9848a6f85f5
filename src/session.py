"""Session engine: ticket snapshot, row cursor and view mode.

The ticket list is fetched from the repository once, when the session is
constructed. Navigation wraps around both ends; on an empty list every
operation is a no-op and the cursor stays unset.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple

from models import Ticket
from storage import TicketRepository

logger = logging.getLogger(__name__)


class Mode(Enum):
    NORMAL = "normal"
    EDIT = "edit"


@dataclass(frozen=True)
class TicketRow:
    """Display-ready string fields of one ticket."""
    id: str
    level: str
    title: str
    status: str
    created_at: str
    resolved_at: str

    @classmethod
    def from_ticket(cls, ticket: Ticket) -> "TicketRow":
        return cls(
            id=ticket.id,
            level=ticket.level.value,
            title=ticket.title,
            status=ticket.status.value,
            created_at=_format_timestamp(ticket.created_at),
            resolved_at=_format_timestamp(ticket.resolved_at),
        )


@dataclass(frozen=True)
class RenderState:
    mode: Mode
    rows: Tuple[TicketRow, ...]
    cursor: Optional[int]
    selected_index: Optional[int] = None
    selected_title: Optional[str] = None


def _format_timestamp(value: Optional[datetime]) -> str:
    return value.isoformat() if value is not None else ''


class Session:
    def __init__(self, repository: TicketRepository):
        # repository errors propagate to the caller unchanged
        self._items: List[Ticket] = repository.fetch_tickets()
        self.cursor: Optional[int] = 0 if self._items else None
        self.mode: Mode = Mode.NORMAL
        self.selected_index: Optional[int] = None

    @property
    def tickets(self) -> List[Ticket]:
        return [replace(t) for t in self._items]

    def __len__(self) -> int:
        return len(self._items)

    # -------------------- navigation --------------------
    def next_row(self) -> None:
        if not self._items or self.cursor is None:
            return
        self.cursor = 0 if self.cursor >= len(self._items) - 1 else self.cursor + 1

    def previous_row(self) -> None:
        if not self._items or self.cursor is None:
            return
        self.cursor = len(self._items) - 1 if self.cursor == 0 else self.cursor - 1

    # -------------------- mode transitions --------------------
    def enter_edit_mode(self) -> None:
        if self.cursor is None:
            return
        self.mode = Mode.EDIT
        self.selected_index = self.cursor
        logger.debug("Entered edit mode on row %d", self.cursor)

    def leave_edit_mode(self) -> None:
        if self.mode is not Mode.EDIT:
            return
        self.mode = Mode.NORMAL
        self.selected_index = None
        logger.debug("Returned to normal mode")

    # -------------------- rendering --------------------
    def render_state(self) -> RenderState:
        """Snapshot of everything a presenter needs; has no side effects."""
        rows = tuple(TicketRow.from_ticket(t) for t in self._items)
        if self.mode is Mode.EDIT and self.selected_index is not None:
            return RenderState(
                mode=Mode.EDIT,
                rows=rows,
                cursor=self.cursor,
                selected_index=self.selected_index,
                selected_title=self._items[self.selected_index].title,
            )
        return RenderState(mode=Mode.NORMAL, rows=rows, cursor=self.cursor)

    def __str__(self) -> str:
        return f'{len(self._items)} tickets, mode={self.mode.value}, cursor={self.cursor}'
