"""Terminal control for the interactive session.

Owns raw-mode lifecycle, alternate-screen switching and cursor visibility.
"""
from __future__ import annotations
import contextlib
import os
import termios
import tty
from typing import Iterator


class TerminalController:
    def __init__(self, stdin_fd: int, stdout_fd: int, alt_screen: bool = True) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self.alt_screen = alt_screen
        # raises termios.error when stdin is not a terminal
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        if self.alt_screen:
            os.write(self.stdout_fd, b"\x1b[?1049h")
        os.write(self.stdout_fd, b"\x1b[?25l")

    def disable_tui_mode(self) -> None:
        # Show cursor, leave the alternate buffer, then restore line discipline.
        os.write(self.stdout_fd, b"\x1b[0m\x1b[?25h")
        if self.alt_screen:
            os.write(self.stdout_fd, b"\x1b[?1049l")
        else:
            os.write(self.stdout_fd, b"\r\n")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self) -> Iterator[None]:
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
