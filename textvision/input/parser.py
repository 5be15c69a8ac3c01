"""
Terminal input parser.

Decodes the character stream of an ANSI terminal in cbreak mode into
Events: escape sequences for cursor and function keys, SGR mouse reports
and plain characters. A lone ESC is ambiguous until the next byte (or a
timeout) arrives, so the parser keeps a partial sequence between feeds.
"""

import logging
import time
from typing import List, Optional

from ..core.event import (
    Event, EventType, KM_ALT, MB_LEFT, MB_MIDDLE, MB_RIGHT,
    KB_BACKSPACE, KB_DEL, KB_DOWN, KB_END, KB_ENTER, KB_ESC, KB_F1, KB_F2,
    KB_F3, KB_F4, KB_F5, KB_F6, KB_F7, KB_F8, KB_F9, KB_F10, KB_F11, KB_F12,
    KB_HOME, KB_INS, KB_LEFT, KB_PGDN, KB_PGUP, KB_RIGHT, KB_SHIFT_F12,
    KB_SHIFT_TAB, KB_TAB, KB_UP, alt_code,
)
from ..core.geometry import Point

logger = logging.getLogger(__name__)

ESC = "\x1b"
SGR_MOUSE_PREFIX = "\x1b[<"

# Several entries per key to cover xterm, rxvt, tmux and application mode
ESCAPE_SEQUENCES = {
    "\x1b[A": KB_UP, "\x1bOA": KB_UP,
    "\x1b[B": KB_DOWN, "\x1bOB": KB_DOWN,
    "\x1b[C": KB_RIGHT, "\x1bOC": KB_RIGHT,
    "\x1b[D": KB_LEFT, "\x1bOD": KB_LEFT,
    "\x1b[H": KB_HOME, "\x1bOH": KB_HOME, "\x1b[1~": KB_HOME, "\x1b[7~": KB_HOME,
    "\x1b[F": KB_END, "\x1bOF": KB_END, "\x1b[4~": KB_END, "\x1b[8~": KB_END,
    "\x1b[5~": KB_PGUP,
    "\x1b[6~": KB_PGDN,
    "\x1b[2~": KB_INS,
    "\x1b[3~": KB_DEL,
    "\x1b[Z": KB_SHIFT_TAB,
    "\x1bOP": KB_F1, "\x1b[11~": KB_F1,
    "\x1bOQ": KB_F2, "\x1b[12~": KB_F2,
    "\x1bOR": KB_F3, "\x1b[13~": KB_F3,
    "\x1bOS": KB_F4, "\x1b[14~": KB_F4,
    "\x1b[15~": KB_F5,
    "\x1b[17~": KB_F6,
    "\x1b[18~": KB_F7,
    "\x1b[19~": KB_F8,
    "\x1b[20~": KB_F9,
    "\x1b[21~": KB_F10,
    "\x1b[23~": KB_F11,
    "\x1b[24~": KB_F12,
    "\x1b[24;2~": KB_SHIFT_F12,
}

# Every proper prefix of a known sequence; used to decide whether to wait
_PREFIXES = {seq[:i] for seq in ESCAPE_SEQUENCES for i in range(1, len(seq))}
_PREFIXES.add(SGR_MOUSE_PREFIX[:2])

_SGR_BUTTONS = {0: MB_LEFT, 1: MB_MIDDLE, 2: MB_RIGHT}


class InputParser:
    """
    Incremental decoder from terminal characters to Events.

    feed() returns the events completed by the new characters; a trailing
    partial escape sequence is kept until more input arrives or
    flush_escape() is called after a timeout.
    """

    def __init__(self, double_click_ms: int = 300):
        self.double_click_ms = double_click_ms
        self._buf = ""
        self._buttons = 0
        self._last_click: Optional[tuple] = None

    @property
    def has_partial(self) -> bool:
        """Check if an incomplete escape sequence is buffered."""
        return bool(self._buf)

    def feed(self, text: str) -> List[Event]:
        """
        Decode characters.

        Args:
            text: Characters read from the terminal

        Returns:
            Completed events, in input order
        """
        self._buf += text
        events: List[Event] = []
        while self._buf:
            consumed, event = self._parse_one(self._buf)
            if consumed == 0:
                break
            self._buf = self._buf[consumed:]
            if event is not None:
                events.append(event)
        return events

    def flush_escape(self) -> Optional[Event]:
        """
        Resolve a partial sequence after the escape timeout.

        Returns:
            KB_ESC for a lone ESC, or None if nothing was pending
        """
        if not self._buf:
            return None
        rest = self._buf[1:]
        self._buf = ""
        if rest:
            logger.debug(f"Dropping incomplete escape sequence {rest!r}")
        return Event.keyboard(KB_ESC)

    # ─────────────────────────────────────────────────────────────────────────
    # Decoding
    # ─────────────────────────────────────────────────────────────────────────

    def _parse_one(self, buf: str):
        """Return (characters consumed, event or None); 0 consumed means wait."""
        ch = buf[0]
        if ch != ESC:
            return 1, self._plain_char(ch)

        if buf.startswith(SGR_MOUSE_PREFIX):
            end = next((i for i, c in enumerate(buf) if c in "Mm"), -1)
            if end < 0:
                return 0, None
            return end + 1, self._sgr_mouse(buf[len(SGR_MOUSE_PREFIX):end], buf[end])

        for length in range(min(len(buf), 8), 1, -1):
            code = ESCAPE_SEQUENCES.get(buf[:length])
            if code is not None:
                return length, Event.keyboard(code)

        if buf in _PREFIXES or buf == ESC:
            return 0, None

        # Dead end: ESC followed by a letter is Alt+letter, anything else is a lone ESC
        follower = buf[1]
        if follower.isalpha() and alt_code(follower):
            return 2, Event.keyboard(alt_code(follower), KM_ALT)
        return 1, Event.keyboard(KB_ESC)

    def _plain_char(self, ch: str) -> Optional[Event]:
        if ch in "\r\n":
            return Event.keyboard(KB_ENTER)
        if ch == "\t":
            return Event.keyboard(KB_TAB)
        if ch in "\x7f\x08":
            return Event.keyboard(KB_BACKSPACE)
        # Ctrl+A .. Ctrl+Z keep their control codes
        if ch < " ":
            return Event.keyboard(ord(ch))
        return Event.key_char(ch)

    def _sgr_mouse(self, params: str, final: str) -> Optional[Event]:
        """Decode an SGR mouse report: b;x;y with M for press and m for release."""
        try:
            code, x, y = (int(part) for part in params.split(";"))
        except ValueError:
            logger.debug(f"Malformed mouse report {params!r}")
            return None
        pos = Point(x - 1, y - 1)

        if code & 64:
            what = EventType.MOUSE_WHEEL_DOWN if code & 1 else EventType.MOUSE_WHEEL_UP
            return Event.mouse_event(what, pos, self._buttons)
        if code & 32:
            return Event.mouse_event(EventType.MOUSE_MOVE, pos, self._buttons)

        bit = _SGR_BUTTONS.get(code & 3, 0)
        if final == "m":
            self._buttons &= ~bit
            return Event.mouse_event(EventType.MOUSE_UP, pos, bit)

        self._buttons |= bit
        now = time.monotonic()
        double = (
            self._last_click is not None
            and self._last_click[1] == pos
            and (now - self._last_click[0]) * 1000 <= self.double_click_ms
        )
        self._last_click = None if double else (now, pos)
        return Event.mouse_event(EventType.MOUSE_DOWN, pos, self._buttons, double)
