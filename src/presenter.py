"""Rendering of session state: ticket table, control guide and edit form.

Presenters are stateless. They consume a RenderState and never touch the
Session that produced it. render_lines() does the layout and returns
plain lines (ANSI-colored); AnsiPresenter writes them as a full frame.
"""
from __future__ import annotations
import shutil
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional, TextIO, Tuple

from session import Mode, RenderState, TicketRow
from theme import Palette, color

COLUMNS: Tuple[str, ...] = ("id", "level", "title", "status", "created_at", "resolved_at")
HEADER_TITLES: Dict[str, str] = {
    "id": "ID",
    "level": "Level",
    "title": "Title",
    "status": "Status",
    "created_at": "Created At",
    "resolved_at": "Resolved At",
}
PREFERRED_WIDTHS: Dict[str, int] = {
    "id": 10, "level": 10, "title": 30, "status": 10, "created_at": 25, "resolved_at": 25,
}
MIN_COL_WIDTH = 4
SEP = " | "
ELLIPSIS = "…"

LIST_TITLE = "Ticket List"
EDIT_TITLE = "Edit Screen"
GUIDE_TITLE = "Control Guide"
NORMAL_GUIDE = "(q) Exit | (k) Up | (j) Down | (l) Edit Mode"
EDIT_GUIDE = "(s) Back | (q) Exit"
EMPTY_LIST = "(no tickets)"
NO_SELECTION = "Edit Mode: No ticket selected."


class Presenter(ABC):
    @abstractmethod
    def draw(self, state: RenderState) -> None:
        ...


def fit(text: str, width: int) -> str:
    """Pad or truncate text to exactly width visible cells."""
    if len(text) > width:
        return text[:max(0, width - 1)] + ELLIPSIS if width > 0 else ''
    return text + ' ' * (width - len(text))


def compute_column_widths(term_width: int) -> Dict[str, int]:
    """Shrink the widest column until the table fits, the title takes any surplus."""
    widths = dict(PREFERRED_WIDTHS)
    sep_total = len(SEP) * (len(COLUMNS) - 1)
    target_space = max(term_width - sep_total, len(COLUMNS) * MIN_COL_WIDTH)
    while sum(widths.values()) > target_space:
        widest = max(COLUMNS, key=lambda c: widths[c])
        if widths[widest] <= MIN_COL_WIDTH:
            break
        widths[widest] -= 1
    extra = target_space - sum(widths.values())
    if extra > 0:
        widths["title"] += extra
    return widths


def _row_cells(row: TicketRow) -> List[str]:
    return [getattr(row, name) for name in COLUMNS]


def _table_lines(state: RenderState, widths: Dict[str, int], palette: Palette) -> List[str]:
    header = SEP.join(fit(HEADER_TITLES[c], widths[c]) for c in COLUMNS)
    lines = [color(header, palette.header)]
    lines.append(color(SEP.join('-' * widths[c] for c in COLUMNS), palette.border))
    if not state.rows:
        lines.append(color(EMPTY_LIST, palette.border))
        return lines
    for index, row in enumerate(state.rows):
        cells = [fit(value, widths[c]) for c, value in zip(COLUMNS, _row_cells(row))]
        if index == state.cursor:
            lines.append(color(SEP.join(cells), palette.highlight))
            continue
        status_at = COLUMNS.index("status")
        cells[status_at] = color(cells[status_at], palette.for_status(row.status))
        lines.append(SEP.join(cells))
    return lines


def render_lines(state: RenderState, term_width: int, palette: Palette) -> List[str]:
    if state.mode is Mode.EDIT:
        rule_width = max(MIN_COL_WIDTH, min(term_width, 60))
        if state.selected_title is not None:
            body = f"Selected Ticket: {state.selected_title}"
        else:
            body = NO_SELECTION
        return [
            color(EDIT_TITLE, palette.header),
            color('-' * rule_width, palette.border),
            body,
            '',
            color(GUIDE_TITLE, palette.header),
            EDIT_GUIDE,
        ]
    widths = compute_column_widths(term_width)
    lines = [color(LIST_TITLE, palette.header)]
    lines.extend(_table_lines(state, widths, palette))
    lines.extend(['', color(GUIDE_TITLE, palette.header), NORMAL_GUIDE])
    return lines


class AnsiPresenter(Presenter):
    """Writes each frame to a text stream after clearing the screen.

    Lines are joined with CRLF since the terminal is in raw mode while the
    session runs.
    """

    CLEAR = "\033[H\033[2J"

    def __init__(self, palette: Palette, stream: TextIO,
                 width_provider: Optional[Callable[[], int]] = None):
        self.palette = palette
        self.stream = stream
        self.width_provider = width_provider or (lambda: shutil.get_terminal_size((120, 30)).columns)

    def draw(self, state: RenderState) -> None:
        lines = render_lines(state, self.width_provider(), self.palette)
        self.stream.write(self.CLEAR + "\r\n".join(lines))
        self.stream.flush()
