"""Color & style helpers.

Decisions:
- Truecolor preferred; falls back to 256-color cube if unsupported.
- Disables automatically when not a TTY unless FORCE_COLOR=1.
- Honors NO_COLOR for complete disable.
- Palette overrides come from Settings (environment or .env file).
"""
from __future__ import annotations
import os, sys
from dataclasses import dataclass
from typing import Dict, Mapping

from models import TicketStatus

_FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
_NO_COLOR = os.environ.get("NO_COLOR") is not None
_ENABLE = (_FORCE or sys.stdout.isatty()) and not _NO_COLOR
_COLORTERM = os.environ.get("COLORTERM", "").lower()
_USE_TRUECOLOR = _ENABLE and any(tok in _COLORTERM for tok in ("truecolor", "24bit"))

def _code(part: str) -> str:
    """Generate ANSI escape code for a given style part."""
    return f"\033[{part}m" if _ENABLE else ''

def _hex_to_rgb(hex_code: str) -> tuple[int,int,int]:
    """Convert a hex color code to an RGB tuple."""
    h = hex_code.lstrip('#')
    return int(h[0:2],16), int(h[2:4],16), int(h[4:6],16)

def _fg_truecolor(r: int, g: int, b: int) -> str:
    return f"\033[38;2;{r};{g};{b}m"

def _fg_256(r: int, g: int, b: int) -> str:
    """Approximate RGB to xterm 256-color cube."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    r6, g6, b6 = to_6(r), to_6(g), to_6(b)
    idx = 16 + 36 * r6 + 6 * g6 + b6
    return f"\033[38;5;{idx}m"

def _from_hex(hex_code: str) -> str:
    """Convert a hex color code to an ANSI escape sequence."""
    if not _ENABLE:
        return ''
    r, g, b = _hex_to_rgb(hex_code)
    if _USE_TRUECOLOR:
        return _fg_truecolor(r, g, b)
    return _fg_256(r, g, b)

RESET = _code('0')
BOLD = _code('1')
DIM = _code('2')
REVERSE = _code('7')

DEFAULT_HEX: Dict[str, str] = {
    'DIGGER_PRIMARY': '#3B82F6',
    'DIGGER_HIGHLIGHT': '#FACC15',
    'DIGGER_PENDING': '#E2E8F0',
    'DIGGER_WIP': '#60A5FA',
    'DIGGER_RESOLVED': '#34D399',
    'DIGGER_CANCELED': '#F87171',
}


@dataclass(frozen=True)
class Palette:
    header: str
    highlight: str
    border: str
    status: Mapping[TicketStatus, str]

    def for_status(self, status: str) -> str:
        return self.status.get(TicketStatus.parse(status), '')


def build_palette(overrides: Mapping[str, str]) -> Palette:
    hexes = {key: overrides.get(key, default) for key, default in DEFAULT_HEX.items()}
    primary = _from_hex(hexes['DIGGER_PRIMARY'])
    return Palette(
        header=primary + BOLD,
        highlight=_from_hex(hexes['DIGGER_HIGHLIGHT']) + REVERSE,
        border=DIM + primary,
        status={
            TicketStatus.PENDING: _from_hex(hexes['DIGGER_PENDING']),
            TicketStatus.WIP: _from_hex(hexes['DIGGER_WIP']),
            TicketStatus.RESOLVED: _from_hex(hexes['DIGGER_RESOLVED']),
            TicketStatus.CANCELED: _from_hex(hexes['DIGGER_CANCELED']),
        },
    )

def color(text: str, *styles: str) -> str:
    """Apply ANSI styles to a given text."""
    if not _ENABLE or not any(styles):
        return text
    return ''.join(styles) + text + RESET
