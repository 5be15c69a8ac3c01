"""
Button widget.

A command-bound push button with a drop shadow drawn in block
characters. The button is disabled while its command is disabled in the
global command set.
"""

from typing import TYPE_CHECKING

from ...core import command_set
from ...core.command import CM_COMMAND_SET_CHANGED
from ...core.draw import DrawBuffer, cstr_len, shortcut_char
from ...core.event import Event, EventType, KB_ENTER, KB_SPACE, MB_LEFT
from ...core.geometry import Rect
from ...core.palette import CP_BUTTON
from ...core.state import OF_FIRST_CLICK, OF_SELECTABLE, SF_DISABLED
from .base import View

if TYPE_CHECKING:
    from ...core.terminal import Terminal

SHADOW_BOTTOM = "▀"
SHADOW_TOP = "▄"
SHADOW_SIDE = "█"


class Button(View):
    """
    Push button.

    Color indices: 1 normal, 2 default, 3 focused, 4 disabled text; 5-7
    shortcut letter for normal, default and focused; 8 shadow.
    """

    def __init__(
        self,
        bounds: Rect,
        title: str,
        command: int,
        default: bool = False,
        broadcast: bool = False
    ):
        """
        Initialize the button.

        Args:
            bounds: Button position and size (the shadow uses the last
                column and row)
            title: Label; the letter between ~ markers is the shortcut
            command: Command fired when pressed
            default: Pressed by Enter anywhere in the dialog
            broadcast: Fire the command as a broadcast instead
        """
        super().__init__(bounds, CP_BUTTON)
        self.title = title
        self.command = command
        self.default = default
        self.broadcast = broadcast
        self.options |= OF_SELECTABLE | OF_FIRST_CLICK
        if not command_set.command_enabled(command):
            self.state |= SF_DISABLED

    def is_default_button(self) -> bool:
        return self.default

    def button_command(self) -> int:
        return self.command

    def shortcut(self) -> str:
        return shortcut_char(self.title)

    def press(self, event: Event) -> None:
        """Fire the button's command by rewriting the event."""
        if self.broadcast:
            event.to_broadcast(self.command)
        else:
            event.to_command(self.command)

    def draw(self, terminal: "Terminal") -> None:
        width, height = self.bounds.size
        if width < 2 or height < 1:
            return

        if self.get_state(SF_DISABLED):
            text_color, shortcut_color = 4, 4
        elif self.focused:
            text_color, shortcut_color = 3, 7
        elif self.default:
            text_color, shortcut_color = 2, 6
        else:
            text_color, shortcut_color = 1, 5
        text_attr = self.map_color(text_color)
        shortcut_attr = self.map_color(shortcut_color)
        shadow_attr = self.map_color(8)

        body = width - 1
        body_rows = max(1, height - 1)
        title_row = (body_rows - 1) // 2
        for y in range(body_rows):
            buf = DrawBuffer(width)
            buf.move_char(0, " ", text_attr, body)
            if y == title_row:
                start = max(0, (body - cstr_len(self.title)) // 2)
                buf.move_str_with_shortcut(start, self.title, text_attr, shortcut_attr)
            buf.put_char(body, SHADOW_TOP if y == 0 else SHADOW_SIDE, shadow_attr)
            self.write_line(terminal, 0, y, buf)

        if height > 1:
            buf = DrawBuffer(width)
            buf.put_char(0, " ", shadow_attr)
            buf.move_char(1, SHADOW_BOTTOM, shadow_attr, width - 1)
            self.write_line(terminal, 0, height - 1, buf)

    def handle_event(self, event: Event) -> None:
        if event.what is EventType.BROADCAST:
            if event.command == CM_COMMAND_SET_CHANGED:
                self.set_state(SF_DISABLED, not command_set.command_enabled(self.command))
            return

        if self.get_state(SF_DISABLED):
            return

        if event.what is EventType.MOUSE_DOWN and event.mouse.buttons & MB_LEFT:
            local = self.make_local(event.mouse.pos)
            # The shadow row and column do not react
            if local.x < self.bounds.width - 1 and local.y < max(1, self.bounds.height - 1):
                self.press(event)
        elif event.is_keyboard and event.key_code in (KB_ENTER, KB_SPACE):
            self.press(event)
