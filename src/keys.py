"""Low-level terminal input decoding.

Reads raw bytes from stdin and turns them into key tokens: printable
characters map to themselves, arrows to UP/DOWN/LEFT/RIGHT, and a lone
escape byte to ESC. An empty string means end of input.
"""
from __future__ import annotations
import os
import select
from abc import ABC, abstractmethod
from typing import List, Optional

ESC_SEQUENCE_TIMEOUT_MS = 25

UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
ESC = "ESC"
ENTER = "ENTER"
UNKNOWN = "UNKNOWN"

_ARROWS = {b"A": UP, b"B": DOWN, b"C": RIGHT, b"D": LEFT}


class KeySource(ABC):
    @abstractmethod
    def read_key(self) -> str:
        """Block until one key is available and return its token."""


class StdinKeySource(KeySource):
    def __init__(self, fd: int):
        self.fd = fd
        self._pending: List[bytes] = []

    def _read_ready_byte(self, timeout_ms: int) -> Optional[bytes]:
        ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout_ms / 1000.0))
        if not ready:
            return None
        ch = os.read(self.fd, 1)
        return ch or None

    def _read_utf8_tail(self, first: bytes) -> bytes:
        lead = first[0]
        if lead >= 0xF0:
            extra = 3
        elif lead >= 0xE0:
            extra = 2
        elif lead >= 0xC0:
            extra = 1
        else:
            return first
        buf = first
        for _ in range(extra):
            nxt = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if nxt is None:
                break
            buf += nxt
        return buf

    def read_key(self) -> str:
        if self._pending:
            ch = self._pending.pop(0)
        else:
            ch = os.read(self.fd, 1)
            if not ch:
                return ""
        return self._decode(ch)

    def _decode(self, ch: bytes) -> str:
        if ch in {b"\r", b"\n"}:
            return ENTER
        if ch != b"\x1b":
            return self._read_utf8_tail(ch).decode("utf-8", errors="replace")

        seq = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
        if seq is None:
            return ESC
        if seq not in {b"[", b"O"}:
            self._pending.append(seq)
            return ESC
        final = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            return ESC
        if final in _ARROWS:
            return _ARROWS[final]
        # drain the rest of an unknown CSI sequence so it is not read as keys
        while not (0x40 <= final[0] <= 0x7E):
            final = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if final is None:
                break
        if final is None:
            return UNKNOWN
        return f"CSI_{final.decode('ascii', errors='replace')}"
