"""
Status line.

The bottom row of the screen: key hints that also work as hot keys and
click targets. Hints whose command is disabled are grayed and inert.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, TYPE_CHECKING

from ...core import command_set
from ...core.draw import DrawBuffer, cstr_len
from ...core.event import Event, EventType
from ...core.geometry import Rect
from ...core.palette import CP_STATUS_LINE
from .base import View

if TYPE_CHECKING:
    from ...core.terminal import Terminal


@dataclass
class StatusItem:
    """
    One status line entry.

    An item with empty text is a hidden hot key.
    """
    text: str
    key_code: int
    command: int


class StatusLine(View):
    """
    Row of status items.

    Color indices: 1 normal text, 2 disabled text, 3 shortcut letter;
    4-6 the same while the pointer is pressed on an item.
    """

    def __init__(self, bounds: Rect, items: Sequence[StatusItem]):
        super().__init__(bounds, CP_STATUS_LINE)
        self.items: List[StatusItem] = list(items)
        self._selected: Optional[StatusItem] = None

    def _layout(self) -> List[Tuple[StatusItem, int, int]]:
        """Get (item, start, end) columns of the visible items."""
        spans = []
        x = 1
        for item in self.items:
            if not item.text:
                continue
            width = cstr_len(item.text) + 2
            spans.append((item, x, x + width))
            x += width
        return spans

    def item_at(self, column: int) -> Optional[StatusItem]:
        for item, start, end in self._layout():
            if start <= column < end:
                return item
        return None

    def draw(self, terminal: "Terminal") -> None:
        width = self.bounds.width
        buf = DrawBuffer(width)
        buf.move_char(0, " ", self.map_color(1), width)
        for item, start, _ in self._layout():
            offset = 3 if item is self._selected else 0
            if command_set.command_enabled(item.command):
                normal = self.map_color(1 + offset)
                shortcut = self.map_color(3 + offset)
            else:
                normal = shortcut = self.map_color(2 + offset)
            buf.put_char(start, " ", normal)
            written = buf.move_str_with_shortcut(start + 1, item.text, normal, shortcut)
            buf.put_char(start + 1 + written, " ", normal)
        self.write_line(terminal, 0, 0, buf)

    def handle_event(self, event: Event) -> None:
        if event.is_keyboard:
            for item in self.items:
                if item.key_code == event.key_code and command_set.command_enabled(item.command):
                    event.to_command(item.command)
                    return
        elif event.what is EventType.MOUSE_DOWN and self.contains(event.mouse.pos):
            self._selected = self.item_at(self.make_local(event.mouse.pos).x)
            event.clear()
        elif event.what is EventType.MOUSE_UP and self._selected is not None:
            item = self._selected
            self._selected = None
            if (
                self.contains(event.mouse.pos)
                and self.item_at(self.make_local(event.mouse.pos).x) is item
                and command_set.command_enabled(item.command)
            ):
                event.to_command(item.command)
            else:
                event.clear()
