"""Terminal surface for the interactive session.

Owns raw-mode lifecycle and alternate-screen switching, reports the frame
size, blocks for key events, and flushes painted canvases to stdout.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
import contextlib
import logging
import os
import shutil
import termios
import tty

from ..errors import TerminalError
from ..input import read_key
from ..input.router import RESIZE
from ..render.canvas import Canvas

logger = logging.getLogger(__name__)

POLL_TIMEOUT_MS = 120
FALLBACK_SIZE = (80, 24)

# Enter alternate screen, clear it, and hide the cursor.
_ENTER_SEQUENCE = b"\x1b[?1049h\x1b[2J\x1b[?25l"
# Show the cursor and restore the main screen buffer.
_LEAVE_SEQUENCE = b"\x1b[0m\x1b[?25h\x1b[?1049l"


def _write_all(fd: int, data: bytes) -> None:
    view = memoryview(data)
    while view:
        written = os.write(fd, view)
        view = view[written:]


class TerminalController:
    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state: list | None = None
        self._last_size: tuple[int, int] | None = None

    def enter(self) -> None:
        try:
            self._saved_tty_state = termios.tcgetattr(self.stdin_fd)
            tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
            os.write(self.stdout_fd, _ENTER_SEQUENCE)
        except (termios.error, OSError) as exc:
            raise TerminalError(f"cannot initialize terminal: {exc}") from exc
        logger.debug("entered raw mode on fd %d", self.stdin_fd)

    def leave(self) -> None:
        """Leave the alternate screen and restore the saved tty attributes.

        The attributes are restored even when writing the leave sequence
        fails; the first failure is raised afterwards.
        """
        saved = self._saved_tty_state
        if saved is None:
            return
        self._saved_tty_state = None
        error: BaseException | None = None
        try:
            os.write(self.stdout_fd, _LEAVE_SEQUENCE)
        except OSError as exc:
            error = exc
        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, saved)
        except (termios.error, OSError) as exc:
            error = error or exc
        if error is not None:
            raise TerminalError(f"cannot restore terminal: {error}") from error
        logger.debug("restored terminal on fd %d", self.stdin_fd)

    @contextlib.contextmanager
    def raw_mode(self) -> Iterator[TerminalController]:
        """Enter the alternate screen for the block and always try to leave it.

        A failed ``enter`` still restores whatever it changed before its
        error propagates.
        """
        try:
            self.enter()
        except TerminalError:
            with contextlib.suppress(TerminalError):
                self.leave()
            raise
        try:
            yield self
        finally:
            self.leave()

    def size(self) -> tuple[int, int]:
        """Return ``(rows, cols)`` of the current frame."""
        term = shutil.get_terminal_size(FALLBACK_SIZE)
        return max(1, term.lines), max(1, term.columns)

    def read_event(self) -> str:
        """Block until a key arrives or the frame size changes.

        A size change is reported as ``RESIZE``.
        """
        if self._last_size is None:
            self._last_size = self.size()
        while True:
            try:
                key = read_key(self.stdin_fd, timeout_ms=POLL_TIMEOUT_MS)
            except OSError as exc:
                raise TerminalError(f"cannot read from terminal: {exc}") from exc
            if key:
                return key
            current = self.size()
            if current != self._last_size:
                self._last_size = current
                return RESIZE

    def draw(self, paint: Callable[[Canvas], None]) -> None:
        """Paint a fresh full-frame canvas with ``paint`` and write it out."""
        rows, cols = self.size()
        self._last_size = (rows, cols)
        canvas = Canvas(cols, rows)
        paint(canvas)
        out = ["\x1b[H"]
        for row_index, row in enumerate(canvas.ansi_rows()):
            out.append(f"\x1b[{row_index + 1};1H")
            out.append(row)
        try:
            _write_all(self.stdout_fd, "".join(out).encode("utf-8", errors="replace"))
        except OSError as exc:
            raise TerminalError(f"cannot write to terminal: {exc}") from exc


__all__ = ["POLL_TIMEOUT_MS", "RESIZE", "TerminalController"]
