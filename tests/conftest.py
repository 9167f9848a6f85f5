"""Shared fixtures: ticket files on disk and in-memory ports."""
from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Iterable, List

import pytest

from keys import KeySource
from models import Ticket, TicketLevel, TicketStatus
from presenter import Presenter
from session import RenderState
from storage import TicketRepository

THREE_TICKETS = """\
[[ticket_data]]
id = "A"
level = "Three"
title = "Alpha"
status = "Pending"
created_at = 2024-01-01T09:00:00Z

[[ticket_data]]
id = "B"
level = "Eight"
title = "Bravo"
status = "Wip"
created_at = 2024-01-02T09:00:00Z

[[ticket_data]]
id = "C"
level = "One"
title = "Charlie"
status = "Resolved"
created_at = 2024-01-03T09:00:00Z
resolved_at = 2024-01-04T12:30:00Z
"""


class FakeRepository(TicketRepository):
    def __init__(self, tickets: Iterable[Ticket]):
        self.tickets = list(tickets)
        self.fetch_count = 0

    def fetch_tickets(self) -> List[Ticket]:
        self.fetch_count += 1
        return list(self.tickets)

    def ensure_exists(self) -> None:
        return None


class ScriptedKeys(KeySource):
    """Replays a fixed key sequence, then reports end of input."""

    def __init__(self, keys: Iterable[str]):
        self._keys = list(keys)

    def read_key(self) -> str:
        if not self._keys:
            return ""
        return self._keys.pop(0)


class RecordingPresenter(Presenter):
    def __init__(self):
        self.frames: List[RenderState] = []

    def draw(self, state: RenderState) -> None:
        self.frames.append(state)


def make_ticket(tid: str, title: str = "", status: TicketStatus = TicketStatus.PENDING) -> Ticket:
    return Ticket(
        id=tid,
        level=TicketLevel.TWO,
        title=title or f"Ticket {tid}",
        status=status,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


@pytest.fixture()
def write_store(tmp_path: Path) -> Callable[[str], Path]:
    def _write(content: str, name: str = "tickets.toml") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture()
def three_ticket_store(write_store) -> Path:
    return write_store(THREE_TICKETS)


@pytest.fixture()
def abc_tickets() -> List[Ticket]:
    return [make_ticket("A"), make_ticket("B"), make_ticket("C")]
