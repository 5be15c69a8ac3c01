"""
Frame widget.

The border of a window: box characters, a centered title, the close and
zoom icons, and the handles that start a move or resize.
"""

from typing import Optional, TYPE_CHECKING

from ...core.draw import DrawBuffer
from ...core.event import Event, EventType
from ...core.geometry import Rect
from ...core.palette import CP_FRAME
from ...core.state import SF_ACTIVE, WF_CLOSE, WF_GROW, WF_MOVE, WF_ZOOM
from ...core.command import CM_CLOSE, CM_ZOOM
from .base import View

if TYPE_CHECKING:
    from ...core.terminal import Terminal

# Box characters: (top-left, horizontal, top-right, vertical, bottom-left, bottom-right)
DOUBLE_BOX = ("╔", "═", "╗", "║", "╚", "╝")
SINGLE_BOX = ("┌", "─", "┐", "│", "└", "┘")

CLOSE_ICON = "[■]"
ZOOM_ICON = "[↑]"
UNZOOM_ICON = "[↕]"
GROW_HANDLE = "◢"

# Drag modes reported to the window
DRAG_MOVE = "move"
DRAG_GROW = "grow"


class Frame(View):
    """
    Window border.

    Color indices: 1 passive frame, 2 passive title, 3 active frame,
    4 active title, 5 icons.
    """

    def __init__(self, bounds: Rect, title: str = "", flags: int = WF_MOVE | WF_GROW | WF_CLOSE | WF_ZOOM):
        super().__init__(bounds, CP_FRAME)
        self.title = title
        self.flags = flags
        self.zoomed = False

        # Set on a press over a handle; the window reads and resets it
        self.drag_mode: Optional[str] = None

    @property
    def active(self) -> bool:
        return self.get_state(SF_ACTIVE)

    def _close_span(self) -> range:
        return range(2, 2 + len(CLOSE_ICON))

    def _zoom_span(self) -> range:
        start = self.bounds.width - 2 - len(ZOOM_ICON)
        return range(start, start + len(ZOOM_ICON))

    def _icons_shown(self) -> bool:
        return self.active and self.bounds.width >= 12

    def draw(self, terminal: "Terminal") -> None:
        width, height = self.bounds.size
        if width < 2 or height < 2:
            return

        active = self.active
        box = DOUBLE_BOX if active else SINGLE_BOX
        frame_attr = self.map_color(3 if active else 1)
        title_attr = self.map_color(4 if active else 2)
        icon_attr = self.map_color(5)

        # Top edge with title and icons
        buf = DrawBuffer(width)
        buf.move_char(0, box[1], frame_attr, width)
        buf.put_char(0, box[0], frame_attr)
        buf.put_char(width - 1, box[2], frame_attr)
        if self.title:
            title = f" {self.title} "
            room = width - 12
            if room > 0:
                title = title[:room]
                buf.move_str((width - len(title)) // 2, title, title_attr)
        if self._icons_shown():
            if self.flags & WF_CLOSE:
                buf.move_str(self._close_span().start, CLOSE_ICON, icon_attr)
            if self.flags & WF_ZOOM:
                buf.move_str(self._zoom_span().start, UNZOOM_ICON if self.zoomed else ZOOM_ICON, icon_attr)
        self.write_line(terminal, 0, 0, buf)

        # Sides
        side = DrawBuffer(width)
        side.put_char(0, box[3], frame_attr)
        side.move_char(1, " ", frame_attr, width - 2)
        side.put_char(width - 1, box[3], frame_attr)
        for y in range(1, height - 1):
            self.write_line(terminal, 0, y, side)

        # Bottom edge
        buf = DrawBuffer(width)
        buf.move_char(0, box[1], frame_attr, width)
        buf.put_char(0, box[4], frame_attr)
        if active and self.flags & WF_GROW:
            buf.put_char(width - 1, GROW_HANDLE, icon_attr)
        else:
            buf.put_char(width - 1, box[5], frame_attr)
        self.write_line(terminal, 0, height - 1, buf)

    def handle_event(self, event: Event) -> None:
        if not event.is_mouse:
            return

        local = self.make_local(event.mouse.pos)
        width, height = self.bounds.size
        on_close = local.y == 0 and self.flags & WF_CLOSE and local.x in self._close_span()
        on_zoom = local.y == 0 and self.flags & WF_ZOOM and local.x in self._zoom_span()

        if event.what is EventType.MOUSE_DOWN:
            if on_close or on_zoom:
                event.clear()
            elif local.y == 0:
                if event.mouse.double_click and self.flags & WF_ZOOM:
                    event.to_command(CM_ZOOM)
                elif self.flags & WF_MOVE:
                    self.drag_mode = DRAG_MOVE
            elif (local.x, local.y) == (width - 1, height - 1) and self.flags & WF_GROW:
                self.drag_mode = DRAG_GROW
        elif event.what is EventType.MOUSE_UP:
            if on_close:
                event.to_command(CM_CLOSE)
            elif on_zoom:
                event.to_command(CM_ZOOM)
