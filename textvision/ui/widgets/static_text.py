"""
Static text and labels.
"""

import textwrap
from typing import List, Optional, TYPE_CHECKING

from ...core.draw import DrawBuffer, shortcut_char
from ...core.event import Event, EventType
from ...core.geometry import Rect
from ...core.palette import CP_LABEL, CP_STATIC_TEXT
from .base import View

if TYPE_CHECKING:
    from ...core.terminal import Terminal

# A line starting with this character is centered
CENTER_MARK = "\x03"


def wrap_text(text: str, width: int) -> List[str]:
    """
    Break text into lines no wider than width.

    Explicit newlines start a new paragraph. A paragraph starting with
    CENTER_MARK keeps the mark on each of its wrapped lines.

    Args:
        text: Text to wrap
        width: Line width in cells

    Returns:
        List of lines
    """
    if width <= 0:
        return []
    lines = []
    for paragraph in text.split("\n"):
        centered = paragraph.startswith(CENTER_MARK)
        if centered:
            paragraph = paragraph[1:]
        wrapped = textwrap.wrap(paragraph, width) or [""]
        lines.extend(CENTER_MARK + line if centered else line for line in wrapped)
    return lines


class StaticText(View):
    """Read-only wrapped text."""

    def __init__(self, bounds: Rect, text: str):
        super().__init__(bounds, CP_STATIC_TEXT)
        self.text = text

    def draw(self, terminal: "Terminal") -> None:
        width, height = self.bounds.size
        attr = self.map_color(1)
        lines = wrap_text(self.text, width)
        for y in range(height):
            buf = DrawBuffer(width)
            buf.move_char(0, " ", attr, width)
            if y < len(lines):
                line = lines[y]
                x = 0
                if line.startswith(CENTER_MARK):
                    line = line[1:]
                    x = (width - len(line)) // 2
                buf.move_str(x, line, attr)
            self.write_line(terminal, 0, y, buf)


class Label(StaticText):
    """
    Caption for a control.

    Clicking the label or pressing its Alt shortcut focuses the linked
    control. Color indices: 1 normal, 2 when the link is focused, 3
    shortcut letter.
    """

    def __init__(self, bounds: Rect, text: str, link: Optional[View] = None):
        super().__init__(bounds, text)
        self.palette = CP_LABEL
        self.link = link

    def focus_link(self) -> Optional[View]:
        return self.link

    def shortcut(self) -> str:
        return shortcut_char(self.text)

    def draw(self, terminal: "Terminal") -> None:
        width = self.bounds.width
        selected = self.link is not None and self.link.focused
        normal = self.map_color(2 if selected else 1)
        buf = DrawBuffer(width)
        buf.move_char(0, " ", normal, width)
        buf.move_str_with_shortcut(1, self.text, normal, self.map_color(3))
        self.write_line(terminal, 0, 0, buf)

    def handle_event(self, event: Event) -> None:
        # Focus has already moved to the link; the click is used up here
        if event.what is EventType.MOUSE_DOWN:
            event.clear()
