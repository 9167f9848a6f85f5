"""Persistence helpers for the ticket store (TOML file on disk).

The repository loads the file once per process. The first successful
fetch populates the cache and every later fetch returns a copy of it
without touching the file again; there is no refresh path.
"""
from __future__ import annotations
import logging
import threading
import tomllib
from abc import ABC, abstractmethod
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import tomli_w

from errors import (
    EmptyFileError,
    FileReadError,
    ParseError,
    SerializeError,
    StoreNotFoundError,
)
from models import Ticket, TicketLevel, TicketStatus

logger = logging.getLogger(__name__)

ROOT_KEY = 'ticket_data'
DEFAULT_SUFFIX = '.toml'
REQUIRED_FIELDS = ('id', 'level', 'title', 'status', 'created_at')

TicketEntry = Dict[str, Any]


class TicketRepository(ABC):
    """Source of the ticket list consumed by a Session."""

    @abstractmethod
    def fetch_tickets(self) -> List[Ticket]:
        ...

    @abstractmethod
    def ensure_exists(self) -> None:
        ...


class TomlTicketRepository(TicketRepository):
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._cache: Optional[List[Ticket]] = None
        self._lock = threading.Lock()

    def fetch_tickets(self) -> List[Ticket]:
        """Return the store's tickets, reading the file only on the first call.

        Raises FileReadError, EmptyFileError or ParseError on that first
        read; a failed read leaves the cache empty so a later call tries again.
        """
        with self._lock:
            if self._cache is None:
                tickets = self._load_tickets_from_file()
                self._cache = tickets
                logger.info("Loaded %d ticket(s) from %s", len(tickets), self.path)
            else:
                logger.debug("Ticket cache hit for %s", self.path)
            return [replace(t) for t in self._cache]

    def ensure_exists(self) -> None:
        if not self.path.exists():
            raise StoreNotFoundError(self.path)

    # -------------------- loading --------------------
    def _read_text(self) -> str:
        try:
            return self.path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as exc:
            raise FileReadError(self.path, exc) from exc

    def _load_tickets_from_file(self) -> List[Ticket]:
        text = self._read_text()
        if not text.strip():
            raise EmptyFileError(self.path)
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise ParseError(self.path, str(exc)) from exc
        records = data.get(ROOT_KEY)
        if not isinstance(records, list):
            raise ParseError(self.path, f"missing '{ROOT_KEY}' array")
        return [decode_ticket(raw, self.path, index) for index, raw in enumerate(records)]


# -------------------- record codec --------------------
def decode_ticket(raw: Any, path: Union[str, Path], index: int = 0) -> Ticket:
    """Build a Ticket from one store record. Timestamps are taken as stored."""
    if not isinstance(raw, Mapping):
        raise ParseError(path, f"record {index} is not a table")
    missing = [name for name in REQUIRED_FIELDS if name not in raw]
    if missing:
        raise ParseError(path, f"record {index} missing {', '.join(missing)}")
    level_name = _require_str(raw, 'level', path, index)
    level = TicketLevel.parse(level_name)
    if level.value != level_name:
        logger.warning("Unknown level %r in record %d, using %s", level_name, index, level)
    status_name = _require_str(raw, 'status', path, index)
    status = TicketStatus.parse(status_name)
    if status.value != status_name:
        logger.warning("Unknown status %r in record %d, using %s", status_name, index, status)
    resolved_raw = raw.get('resolved_at')
    return Ticket(
        id=_require_str(raw, 'id', path, index),
        level=level,
        title=_require_str(raw, 'title', path, index),
        status=status,
        created_at=_parse_timestamp(raw['created_at'], path, index),
        resolved_at=None if resolved_raw is None else _parse_timestamp(resolved_raw, path, index),
    )


def encode_ticket(ticket: Ticket) -> TicketEntry:
    entry: TicketEntry = {
        'id': ticket.id,
        'level': ticket.level.value,
        'title': ticket.title,
        'status': ticket.status.value,
        'created_at': ticket.created_at,
    }
    # TOML has no null; an unset timestamp is simply left out
    if ticket.resolved_at is not None:
        entry['resolved_at'] = ticket.resolved_at
    return entry


def _require_str(raw: Mapping[str, Any], name: str, path: Union[str, Path], index: int) -> str:
    value = raw[name]
    if not isinstance(value, str):
        raise ParseError(path, f"record {index} field '{name}' must be a string")
    return value


def _parse_timestamp(value: Any, path: Union[str, Path], index: int) -> datetime:
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        # RFC 3339 allows lower-case t/z and requires a time part
        text = value.strip().upper()
        if len(text) <= 10 or text[10] not in 'T ':
            raise ParseError(path, f"record {index} has invalid timestamp {value!r}")
        try:
            dt = datetime.fromisoformat(text)
        except ValueError as exc:
            raise ParseError(path, f"record {index} has invalid timestamp {value!r}") from exc
    else:
        raise ParseError(path, f"record {index} has invalid timestamp {value!r}")
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


# -------------------- file template --------------------
def resolve_store_path(name: Union[str, Path]) -> Path:
    """Append the default .toml suffix when the given name has none."""
    path = Path(name)
    if not path.suffix:
        path = path.with_name(path.name + DEFAULT_SUFFIX)
    return path


def default_tickets() -> List[Ticket]:
    return [Ticket(id='1', title='New ticket')]


def create_template(path: Union[str, Path]) -> bool:
    """Write a default-populated store at path unless a file is already there.

    Returns True when a file was written.
    """
    path = Path(path)
    if path.exists():
        return False
    try:
        content = tomli_w.dumps({ROOT_KEY: [encode_ticket(t) for t in default_tickets()]})
    except (TypeError, ValueError) as exc:
        raise SerializeError(path, exc) from exc
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding='utf-8')
    except OSError as exc:
        raise SerializeError(path, exc) from exc
    logger.info("Created ticket template at %s", path)
    return True
