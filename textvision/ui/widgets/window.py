"""
Window - a framed, movable group.
"""

import logging
from typing import Optional, Tuple

from ...core import command_set
from ...core.command import CM_CANCEL, CM_CLOSE, CM_NEXT, CM_PREV, CM_ZOOM, WINDOW_COMMANDS
from ...core.event import Event, EventType, KB_ESC
from ...core.geometry import Point, Rect
from ...core.palette import CP_BLUE_WINDOW, Palette
from ...core.state import (
    OF_SELECTABLE, OF_TILEABLE, OF_TOP_SELECT, SF_ACTIVE, SF_CLOSED,
    SF_DRAGGING, SF_MODAL, SF_SHADOW, WF_CLOSE, WF_GROW, WF_MOVE, WF_ZOOM,
)
from .frame import DRAG_MOVE, Frame
from .group import Group

logger = logging.getLogger(__name__)

MIN_WINDOW_SIZE = (16, 6)


class Window(Group):
    """
    A framed group with a title.

    The frame is always the first child. Windows take their colors from a
    window palette (blue, cyan or gray), which is also the container
    palette of everything inside them.
    """

    def __init__(
        self,
        bounds: Rect,
        title: str = "",
        palette: Palette = CP_BLUE_WINDOW,
        flags: int = WF_MOVE | WF_GROW | WF_CLOSE | WF_ZOOM
    ):
        """
        Initialize the window.

        Args:
            bounds: Window position and size (including the frame)
            title: Title shown in the frame
            palette: Window palette
            flags: WF_* capabilities
        """
        super().__init__(bounds, palette)
        self.options |= OF_SELECTABLE | OF_TOP_SELECT | OF_TILEABLE
        self.state |= SF_SHADOW
        self.min_size: Tuple[int, int] = MIN_WINDOW_SIZE

        # Area the window may be moved and zoomed in, set by the desktop
        self.limits: Optional[Rect] = None
        self.zoom_rect = bounds

        self._drag_mode: Optional[str] = None
        self._drag_offset = Point(0, 0)

        self.frame = Frame(Rect.from_size(0, 0, bounds.width, bounds.height), title, flags)
        self.add(self.frame)
        self._pinned = 1

    @property
    def title(self) -> str:
        return self.frame.title

    @title.setter
    def title(self, value: str) -> None:
        self.frame.title = value

    @property
    def flags(self) -> int:
        return self.frame.flags

    @flags.setter
    def flags(self, value: int) -> None:
        self.frame.flags = value

    @property
    def interior(self) -> Rect:
        """Get the area inside the frame."""
        return self.bounds.grow(-1, -1)

    # ─────────────────────────────────────────────────────────────────────────
    # Focus
    # ─────────────────────────────────────────────────────────────────────────

    def on_focus_changed(self, focused: bool) -> None:
        super().on_focus_changed(focused)
        self.set_state(SF_ACTIVE, focused)
        self.frame.set_state(SF_ACTIVE, focused)
        if focused:
            commands = [CM_NEXT, CM_PREV]
            if self.flags & WF_CLOSE:
                commands.append(CM_CLOSE)
            if self.flags & WF_ZOOM:
                commands.append(CM_ZOOM)
            command_set.enable_commands(commands)
        else:
            command_set.disable_commands(WINDOW_COMMANDS)

    # ─────────────────────────────────────────────────────────────────────────
    # Events
    # ─────────────────────────────────────────────────────────────────────────

    def is_end_command(self, command: int) -> bool:
        return command != CM_CLOSE and super().is_end_command(command)

    def handle_event(self, event: Event) -> None:
        if self.get_state(SF_DRAGGING) and event.is_mouse:
            self._track_drag(event)
            return

        super().handle_event(event)

        if self.frame.drag_mode is not None:
            self._begin_drag(event, self.frame.drag_mode)
            self.frame.drag_mode = None

        if event.what is EventType.COMMAND:
            if event.command == CM_CLOSE:
                self.close()
                event.clear()
            elif event.command == CM_ZOOM and self.flags & WF_ZOOM:
                self.zoom()
                event.clear()
        elif event.is_keyboard and event.key_code == KB_ESC and self.get_state(SF_MODAL):
            self.end_modal(CM_CANCEL)
            event.clear()

    def close(self) -> None:
        """
        Close the window.

        A modal window ends its loop with CM_CANCEL. Otherwise the window
        is marked closed if it agrees; the desktop removes it.
        """
        if self.get_state(SF_MODAL):
            self.end_modal(CM_CANCEL)
        elif self.valid(CM_CLOSE):
            self.set_state(SF_CLOSED, True)
            logger.debug(f"Window '{self.title}' closed")

    def zoom(self) -> None:
        """Toggle between the desktop size and the previous bounds."""
        if self.limits is None:
            return
        if self.bounds != self.limits:
            self.zoom_rect = self.bounds
            self.set_bounds(self.limits)
            self.frame.zoomed = True
        else:
            self.set_bounds(self.zoom_rect)
            self.frame.zoomed = False

    # ─────────────────────────────────────────────────────────────────────────
    # Moving and resizing
    # ─────────────────────────────────────────────────────────────────────────

    def _begin_drag(self, event: Event, mode: str) -> None:
        self._drag_mode = mode
        corner = self.bounds.a if mode == DRAG_MOVE else self.bounds.b
        self._drag_offset = event.mouse.pos - corner
        self.set_state(SF_DRAGGING, True)
        event.clear()

    def _track_drag(self, event: Event) -> None:
        if event.what is EventType.MOUSE_UP:
            self.set_state(SF_DRAGGING, False)
            self._drag_mode = None
        elif event.what in (EventType.MOUSE_MOVE, EventType.MOUSE_AUTO):
            target = event.mouse.pos - self._drag_offset
            if self._drag_mode == DRAG_MOVE:
                self.move_within_limits(target.x, target.y)
            else:
                self.resize_to(target.x - self.bounds.a.x, target.y - self.bounds.a.y)
        event.clear()

    def move_within_limits(self, x: int, y: int) -> None:
        """Move the window, keeping it inside its limits."""
        if self.limits is not None:
            width, height = self.bounds.size
            x = max(self.limits.a.x, min(x, self.limits.b.x - width))
            y = max(self.limits.a.y, min(y, self.limits.b.y - height))
        self.move_to(x, y)

    def resize_to(self, width: int, height: int) -> None:
        """Resize the window, honoring the minimum size and limits."""
        width = max(width, self.min_size[0])
        height = max(height, self.min_size[1])
        if self.limits is not None:
            width = min(width, self.limits.b.x - self.bounds.a.x)
            height = min(height, self.limits.b.y - self.bounds.a.y)
        self.set_bounds(Rect.from_size(self.bounds.a.x, self.bounds.a.y, width, height))

    def set_bounds(self, bounds: Rect) -> None:
        super().set_bounds(bounds)
        self.frame.set_bounds(self.bounds)
