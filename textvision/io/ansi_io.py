"""
ANSI terminal backend.

Drives the controlling terminal directly: cbreak mode through termios,
the alternate screen, SGR mouse reporting, and 256-color SGR escapes for
output. Input bytes are decoded by InputParser.

Unix only; the pygame backend covers other platforms.
"""

import codecs
import logging
import os
import shutil
import sys
from typing import List, Optional, Sequence, Tuple

from ..config import Config
from ..core.draw import Cell
from ..core.event import Event
from ..core.geometry import Point
from ..input.parser import InputParser
from .ports import Backend, BackendCapabilities, BackendError

_IS_WINDOWS = os.name == "nt"

if not _IS_WINDOWS:
    import select
    import termios

logger = logging.getLogger(__name__)

# CGA color order -> ANSI color index
ANSI_INDEX = (0, 4, 2, 6, 1, 5, 3, 7, 8, 12, 10, 14, 9, 13, 11, 15)

ENTER_SCREEN = "\x1b[?1049h\x1b[?25l\x1b[?1000h\x1b[?1002h\x1b[?1006h"
LEAVE_SCREEN = "\x1b[?1006l\x1b[?1002l\x1b[?1000l\x1b[0m\x1b[?25h\x1b[?1049l"


class AnsiBackend(Backend):
    """
    Backend for a VT100-compatible terminal.

    Output is collected in memory between write_cells() and flush() and
    written with a single os.write().
    """

    def __init__(self, config: Config):
        """
        Initialize the backend.

        Args:
            config: Application configuration
        """
        self.config = config
        self._fd_in = -1
        self._fd_out = -1
        self._old_termios = None
        self._out: List[str] = []
        self._parser = InputParser(config.double_click_ms)
        self._decoder = codecs.getincrementaldecoder("utf-8")("replace")
        self._pending: List[Event] = []
        self._last_attr = None
        self._cursor: Optional[Point] = None

    def init(self) -> None:
        if _IS_WINDOWS:
            raise BackendError("ANSI backend requires a Unix terminal")
        self._fd_in = sys.stdin.fileno()
        self._fd_out = sys.stdout.fileno()
        if not os.isatty(self._fd_in) or not os.isatty(self._fd_out):
            raise BackendError("stdin and stdout must be a terminal")

        try:
            self._old_termios = termios.tcgetattr(self._fd_in)
            self._set_cbreak()
        except termios.error as e:
            raise BackendError(f"Cannot switch terminal to cbreak mode: {e}") from e

        self._write(ENTER_SCREEN)
        logger.info("ANSI terminal opened")

    def _set_cbreak(self) -> None:
        """Apply cbreak settings: no echo, no canonical mode, keep ISIG."""
        new = termios.tcgetattr(self._fd_in)
        new[3] &= ~(termios.ICANON | termios.ECHO | termios.IEXTEN)
        new[1] &= ~(
            termios.IXON | termios.IXOFF | termios.ICRNL | termios.INLCR | termios.IGNCR
        )
        new[6][termios.VMIN] = 1
        new[6][termios.VTIME] = 0
        termios.tcsetattr(self._fd_in, termios.TCSANOW, new)

    def cleanup(self) -> None:
        if self._old_termios is None:
            return
        self._write(LEAVE_SCREEN)
        try:
            termios.tcsetattr(self._fd_in, termios.TCSANOW, self._old_termios)
        except termios.error as e:
            raise BackendError(f"Cannot restore terminal settings: {e}") from e
        finally:
            self._old_termios = None
        logger.info("ANSI terminal restored")

    def size(self) -> Tuple[int, int]:
        columns, rows = shutil.get_terminal_size((self.config.columns, self.config.rows))
        return (columns, rows)

    # ─────────────────────────────────────────────────────────────────────────
    # Input
    # ─────────────────────────────────────────────────────────────────────────

    def poll_event(self, timeout: float) -> Optional[Event]:
        if self._pending:
            return self._pending.pop(0)

        wait = self.config.escape_timeout if self._parser.has_partial else timeout
        if not self._readable(wait):
            event = self._parser.flush_escape()
            return event

        try:
            data = os.read(self._fd_in, 1024)
        except InterruptedError:
            return None
        self._pending.extend(self._parser.feed(self._decoder.decode(data)))
        if self._pending:
            return self._pending.pop(0)
        return None

    def _readable(self, timeout: float) -> bool:
        ready, _, _ = select.select([self._fd_in], [], [], timeout)
        return bool(ready)

    # ─────────────────────────────────────────────────────────────────────────
    # Output
    # ─────────────────────────────────────────────────────────────────────────

    def write_cells(self, x: int, y: int, cells: Sequence[Cell]) -> None:
        out = self._out
        out.append(f"\x1b[{y + 1};{x + 1}H")
        for cell in cells:
            if cell.attr != self._last_attr:
                fg = ANSI_INDEX[cell.attr.fg]
                bg = ANSI_INDEX[cell.attr.bg]
                out.append(f"\x1b[38;5;{fg};48;5;{bg}m")
                self._last_attr = cell.attr
            out.append(cell.ch)

    def set_cursor(self, pos: Optional[Point]) -> None:
        self._cursor = pos

    def flush(self) -> None:
        # Output moves the hardware cursor, so the caret is placed last
        if self._cursor is None:
            self._out.append("\x1b[?25l")
        else:
            self._out.append(f"\x1b[{self._cursor.y + 1};{self._cursor.x + 1}H\x1b[?25h")
        if self._out:
            self._write("".join(self._out))
            self._out.clear()

    def bell(self) -> None:
        self._write("\a")

    def capabilities(self) -> BackendCapabilities:
        return BackendCapabilities(mouse=True, true_color=False, bell=True, name="ansi")

    def _write(self, text: str) -> None:
        data = text.encode("utf-8")
        while data:
            written = os.write(self._fd_out, data)
            data = data[written:]
