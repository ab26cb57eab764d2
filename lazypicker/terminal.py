"""Terminal control helpers for the picker session.

Owns raw-mode lifecycle, alternate-screen switching, and cursor visibility.
Everything is written to one tty descriptor so stdout stays free for the
selected entry.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty
from collections.abc import Iterator


class TerminalController:
    """Manage terminal mode transitions for one tty file descriptor."""

    def __init__(self, fd: int) -> None:
        """Capture tty state of ``fd`` so it can be restored on exit."""
        self.fd = fd
        self._saved_tty_state = termios.tcgetattr(fd)

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        tty.setraw(self.fd, termios.TCSAFLUSH)
        os.write(self.fd, b"\x1b[?1049h\x1b[?25l")

    def disable_tui_mode(self) -> None:
        """Show the cursor, leave the alternate screen, and restore tty settings."""
        os.write(self.fd, b"\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.fd, termios.TCSAFLUSH, self._saved_tty_state)

    def size(self) -> tuple[int, int]:
        """Return ``(columns, rows)``, defaulting to 80x24 when unknown."""
        try:
            size = os.get_terminal_size(self.fd)
        except OSError:
            return 80, 24
        return max(1, size.columns), max(1, size.lines)

    def write(self, data: str) -> None:
        os.write(self.fd, data.encode("utf-8", errors="replace"))

    @contextlib.contextmanager
    def raw_mode(self) -> Iterator[TerminalController]:
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield self
        finally:
            self.disable_tui_mode()


@contextlib.contextmanager
def open_tty(path: str = "/dev/tty") -> Iterator[int]:
    """Open the controlling terminal for reading keys and drawing frames."""
    fd = os.open(path, os.O_RDWR | os.O_NOCTTY)
    try:
        yield fd
    finally:
        os.close(fd)
