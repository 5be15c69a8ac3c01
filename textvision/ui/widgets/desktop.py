"""
Desktop - the group holding the background and all windows.
"""

import logging
import math
from typing import List, Optional, TYPE_CHECKING

from ...core.command import CM_NEXT, CM_PREV
from ...core.event import Event, EventType
from ...core.geometry import Point, Rect
from ...core.state import OF_TILEABLE, SF_CLOSED, SF_MODAL, SF_VISIBLE
from .background import DEFAULT_PATTERN, Background
from .base import View
from .group import Group
from .window import Window

if TYPE_CHECKING:
    from ...core.terminal import Terminal

logger = logging.getLogger(__name__)


class Desktop(Group):
    """
    The window manager.

    The background is always the first child; windows follow in z-order,
    the last one being on top.
    """

    def __init__(self, bounds: Rect, pattern: str = DEFAULT_PATTERN):
        """
        Initialize the desktop.

        Args:
            bounds: Screen area above the status line
            pattern: Background fill character
        """
        super().__init__(bounds)
        # Windows are cycled with CM_NEXT / CM_PREV, Tab belongs to them
        self.tab_cycles = False
        self.backdrop = Background(Rect.from_size(0, 0, bounds.width, bounds.height), pattern)
        self.add(self.backdrop)
        self._pinned = 1

    # ─────────────────────────────────────────────────────────────────────────
    # Windows
    # ─────────────────────────────────────────────────────────────────────────

    def add(self, view: View) -> View:
        """
        Add a view; windows are brought to the front and focused.

        Returns:
            The added view
        """
        super().add(view)
        if isinstance(view, Window):
            view.limits = self.bounds
            logger.debug(f"Window '{view.title}' added")
        if view.can_focus():
            self.focus_child(view)
        return view

    @property
    def windows(self) -> List[Window]:
        """Get the windows in z-order (back to front)."""
        return [child for child in self.children if isinstance(child, Window)]

    @property
    def top_window(self) -> Optional[Window]:
        """Get the front-most visible window."""
        for child in reversed(self.children):
            if isinstance(child, Window) and child.get_state(SF_VISIBLE):
                return child
        return None

    def remove_closed_windows(self, terminal: Optional["Terminal"] = None) -> int:
        """
        Remove windows marked closed.

        Args:
            terminal: If given, the area under each removed window is
                redrawn right away

        Returns:
            Number of windows removed
        """
        closed = [window for window in self.windows if window.get_state(SF_CLOSED)]
        for window in closed:
            area = window.shadow_bounds() if window.has_shadow else window.bounds
            self.remove(window)
            if terminal is not None:
                self.draw_under_rect(terminal, area, 0)
        return len(closed)

    def draw_under_rect(self, terminal: "Terminal", rect: Rect, start: int) -> None:
        """
        Redraw the children from start upwards, clipped to rect.

        Used to repair the screen area a removed view covered.
        """
        terminal.push_clip(self.bounds)
        try:
            self.draw_sub_views(terminal, start, rect)
        finally:
            terminal.pop_clip()

    def tile(self) -> None:
        """Arrange the tileable windows in a grid."""
        windows = self._tileable()
        if not windows:
            return
        columns = int(math.ceil(math.sqrt(len(windows))))
        rows = int(math.ceil(len(windows) / columns))
        width, height = self.bounds.size
        for index, window in enumerate(windows):
            column, row = index % columns, index // columns
            x1 = self.bounds.a.x + column * width // columns
            x2 = self.bounds.a.x + (column + 1) * width // columns
            y1 = self.bounds.a.y + row * height // rows
            y2 = self.bounds.a.y + (row + 1) * height // rows
            window.set_bounds(Rect.from_coords(x1, y1, x2, y2))
        logger.debug(f"Tiled {len(windows)} windows")

    def cascade(self) -> None:
        """Stack the tileable windows, each one cell below and right of the last."""
        windows = self._tileable()
        for offset, window in enumerate(windows):
            origin = self.bounds.a + Point(offset, offset)
            window.set_bounds(Rect(origin, self.bounds.b))
        logger.debug(f"Cascaded {len(windows)} windows")

    def _tileable(self) -> List[Window]:
        return [
            window for window in self.windows
            if window.options & OF_TILEABLE
            and window.get_state(SF_VISIBLE)
            and not window.get_state(SF_MODAL)
        ]

    # ─────────────────────────────────────────────────────────────────────────
    # Events
    # ─────────────────────────────────────────────────────────────────────────

    def handle_event(self, event: Event) -> None:
        top = self.top_window
        if top is not None and top.get_state(SF_MODAL) and event.what is not EventType.BROADCAST:
            top.handle_event(event)
            return

        super().handle_event(event)

        if event.what is EventType.COMMAND:
            if event.command == CM_NEXT:
                self.next_window()
                event.clear()
            elif event.command == CM_PREV:
                self.previous_window()
                event.clear()

    def _selectable_windows(self) -> List[Window]:
        return [window for window in self.windows if window.can_focus()]

    def next_window(self) -> None:
        """Send the top window to the back and focus the one below it."""
        windows = self._selectable_windows()
        if len(windows) > 1:
            self.send_to_back(windows[-1])
            self.focus_child(self._selectable_windows()[-1])

    def previous_window(self) -> None:
        """Bring the bottom window to the front."""
        windows = self._selectable_windows()
        if len(windows) > 1:
            self.focus_child(windows[0])
