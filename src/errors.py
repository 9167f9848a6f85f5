"""Error taxonomy for the ticket store.

Every error raised by the repository derives from DiggerError so the
command layer can report them uniformly. None of them are retried.
"""
from __future__ import annotations
from pathlib import Path
from typing import Union


class DiggerError(Exception):
    """Base class for all digger failures."""


class FileReadError(DiggerError):
    def __init__(self, path: Union[str, Path], reason: object):
        self.path = Path(path)
        super().__init__(f"Failed to read the file: {reason}")


class ParseError(DiggerError):
    def __init__(self, path: Union[str, Path], detail: str = ""):
        self.path = Path(path)
        self.detail = detail
        message = "Failed to parse TOML data. The file may be invalid."
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class SerializeError(DiggerError):
    def __init__(self, path: Union[str, Path], reason: object):
        self.path = Path(path)
        super().__init__(f"Failed to serialize TOML data: {reason}")


class EmptyFileError(DiggerError):
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__("The file is empty or cannot be processed.")


class StoreNotFoundError(DiggerError):
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"The file at {path} was not found.")
