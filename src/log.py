"""Logging setup.

The TUI owns the terminal while it runs, so log records never go to the
console: they go to DIGGER_LOG_FILE when configured and are dropped
otherwise.
"""
from __future__ import annotations
import logging
from typing import Optional

from config import Settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_MARKER = "_digger_handler"


def configure_logging(settings: Settings) -> Optional[logging.Handler]:
    """Install the configured root handler, replacing one from an earlier call.

    Returns the installed file handler, or None when logging is disabled.
    """
    level = getattr(logging, settings.log_level, logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, _MARKER, False):
            root.removeHandler(handler)
            handler.close()

    if settings.log_file is None:
        null_handler = logging.NullHandler()
        setattr(null_handler, _MARKER, True)
        root.addHandler(null_handler)
        return None

    settings.log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(settings.log_file, encoding='utf-8')
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    setattr(file_handler, _MARKER, True)
    root.setLevel(level)
    root.addHandler(file_handler)
    logging.getLogger('digger').info(
        "digger logging enabled (file=%s, level=%s)", settings.log_file, settings.log_level
    )
    return file_handler
