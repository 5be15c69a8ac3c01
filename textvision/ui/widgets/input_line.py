"""
Single-line text input.
"""

from typing import TYPE_CHECKING

from ...core.draw import DrawBuffer
from ...core.event import (
    Event, EventType, KB_BACKSPACE, KB_DEL, KB_END, KB_HOME, KB_INS,
    KB_LEFT, KB_RIGHT,
)
from ...core.geometry import Point, Rect
from ...core.palette import CP_INPUT_LINE
from ...core.state import OF_FIRST_CLICK, OF_SELECTABLE, SF_CURSOR_INS, SF_CURSOR_VIS
from .base import View

if TYPE_CHECKING:
    from ...core.terminal import Terminal

LEFT_ARROW = "◄"
RIGHT_ARROW = "►"


class InputLine(View):
    """
    Editable text field with horizontal scrolling.

    The text is shown from column 1; columns 0 and width-1 hold arrows
    when part of the text is scrolled out of view. Color indices: 1
    passive, 2 focused, 3 selection, 4 arrows.
    """

    def __init__(self, bounds: Rect, max_len: int, value: str = ""):
        """
        Initialize the input line.

        Args:
            bounds: Field position and size (one row)
            max_len: Maximum number of characters
            value: Initial text
        """
        super().__init__(bounds, CP_INPUT_LINE)
        self.max_len = max_len
        self.options |= OF_SELECTABLE | OF_FIRST_CLICK
        self.state |= SF_CURSOR_VIS
        self.data = value[:max_len]
        self.cur_pos = len(self.data)
        self.first_pos = 0
        self._scroll_to_cursor()

    @property
    def value(self) -> str:
        return self.data

    @value.setter
    def value(self, text: str) -> None:
        self.data = text[:self.max_len]
        self.cur_pos = len(self.data)
        self.first_pos = 0
        self._scroll_to_cursor()

    @property
    def insert_mode(self) -> bool:
        return not self.get_state(SF_CURSOR_INS)

    def _visible_width(self) -> int:
        return max(1, self.bounds.width - 2)

    def _scroll_to_cursor(self) -> None:
        visible = self._visible_width()
        if self.cur_pos < self.first_pos:
            self.first_pos = self.cur_pos
        elif self.cur_pos >= self.first_pos + visible:
            self.first_pos = self.cur_pos - visible + 1
        self.cursor = Point(1 + self.cur_pos - self.first_pos, 0)

    # ─────────────────────────────────────────────────────────────────────────
    # Drawing
    # ─────────────────────────────────────────────────────────────────────────

    def draw(self, terminal: "Terminal") -> None:
        width = self.bounds.width
        attr = self.map_color(2 if self.focused else 1)
        arrow_attr = self.map_color(4)

        buf = DrawBuffer(width)
        buf.move_char(0, " ", attr, width)
        buf.move_str(1, self.data[self.first_pos:self.first_pos + self._visible_width()], attr)
        if self.first_pos > 0:
            buf.put_char(0, LEFT_ARROW, arrow_attr)
        if len(self.data) - self.first_pos > self._visible_width():
            buf.put_char(width - 1, RIGHT_ARROW, arrow_attr)
        self.write_line(terminal, 0, 0, buf)

    # ─────────────────────────────────────────────────────────────────────────
    # Editing
    # ─────────────────────────────────────────────────────────────────────────

    def handle_event(self, event: Event) -> None:
        if event.what is EventType.MOUSE_DOWN:
            local = self.make_local(event.mouse.pos)
            self.cur_pos = max(0, min(len(self.data), self.first_pos + local.x - 1))
            self._scroll_to_cursor()
            event.clear()
            return

        if not event.is_keyboard:
            return

        code = event.key_code
        if code == KB_LEFT:
            self.cur_pos = max(0, self.cur_pos - 1)
        elif code == KB_RIGHT:
            self.cur_pos = min(len(self.data), self.cur_pos + 1)
        elif code == KB_HOME:
            self.cur_pos = 0
        elif code == KB_END:
            self.cur_pos = len(self.data)
        elif code == KB_BACKSPACE:
            if self.cur_pos > 0:
                self.data = self.data[:self.cur_pos - 1] + self.data[self.cur_pos:]
                self.cur_pos -= 1
                self.first_pos = max(0, self.first_pos - 1)
        elif code == KB_DEL:
            self.data = self.data[:self.cur_pos] + self.data[self.cur_pos + 1:]
        elif code == KB_INS:
            self.set_state(SF_CURSOR_INS, not self.get_state(SF_CURSOR_INS))
        elif event.char:
            self._insert_char(event.char)
        else:
            return

        self._scroll_to_cursor()
        event.clear()

    def _insert_char(self, char: str) -> None:
        if self.insert_mode:
            if len(self.data) >= self.max_len:
                return
            self.data = self.data[:self.cur_pos] + char + self.data[self.cur_pos:]
        else:
            if self.cur_pos >= self.max_len:
                return
            self.data = self.data[:self.cur_pos] + char + self.data[self.cur_pos + 1:]
        self.cur_pos += 1
