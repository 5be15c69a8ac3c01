"""
Render buffer.

The Terminal owns a double-buffered cell grid on top of a Backend. Views
draw into the back buffer through a stack of clip rectangles; flush()
diffs it against the front buffer and sends only the changed runs to the
backend.

It is also where input enters the engine, so the debug dump shortcuts
(F12 for the screen, Shift+F12 for the active view) are handled here,
before any view can see them.
"""

import logging
import time
from collections import deque
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from ..config import Config, DEFAULT_CONFIG
from ..io.ports import Backend
from . import ansi_dump
from .draw import Cell, EMPTY_CELL
from .event import Event, KB_F12, KB_SHIFT_F12
from .geometry import Point, Rect
from .palette import Attr

logger = logging.getLogger(__name__)

# Never equal to a drawn cell, so a front buffer full of these repaints everything
_STALE_CELL = Cell("\0", Attr.from_byte(0xFF))


class Terminal:
    """
    Double-buffered cell grid with clipping, cursor and input queue.

    Coordinates are absolute screen cells. Writes outside the screen or
    outside the current clip are dropped silently.
    """

    def __init__(self, backend: Backend, config: Optional[Config] = None):
        """
        Initialize the terminal.

        Args:
            backend: Display backend to draw on and poll from
            config: Application configuration
        """
        self.backend = backend
        self.config = config or DEFAULT_CONFIG
        self.width = 0
        self.height = 0
        self.buffer: List[List[Cell]] = []
        self.prev_buffer: List[List[Cell]] = []

        # Effective clip rects; each entry is already intersected with the one below
        self._clip_stack: List[Rect] = []

        self.cursor: Optional[Point] = None
        self.cursor_visible = False
        self._shown_cursor: Optional[Point] = None

        self._pending: deque = deque()
        self.active_view_bounds: Optional[Rect] = None
        self._initialized = False

        self._allocate(*backend.size())

    # ─────────────────────────────────────────────────────────────────────────
    # Lifecycle
    # ─────────────────────────────────────────────────────────────────────────

    def init(self) -> None:
        """
        Open the backend.

        Raises:
            BackendError: If the display cannot be opened
        """
        self.backend.init()
        self._initialized = True
        width, height = self.backend.size()
        if (width, height) != (self.width, self.height):
            self.resize(width, height)
        self.force_full_redraw()
        logger.info(f"Terminal ready: {self.width}x{self.height} on {self.backend.capabilities().name}")

    def shutdown(self) -> None:
        """Restore the backend."""
        if self._initialized:
            self.backend.cleanup()
            self._initialized = False
            logger.info("Terminal restored")

    def size(self) -> Tuple[int, int]:
        """Get screen size in cells."""
        return (self.width, self.height)

    @property
    def screen_rect(self) -> Rect:
        return Rect.from_coords(0, 0, self.width, self.height)

    def resize(self, width: int, height: int) -> None:
        """Reallocate both buffers; the next flush repaints everything."""
        self._allocate(width, height)
        logger.debug(f"Terminal resized to {width}x{height}")

    def force_full_redraw(self) -> None:
        """Invalidate the front buffer so the next flush repaints every cell."""
        self.prev_buffer = [[_STALE_CELL] * self.width for _ in range(self.height)]
        self._shown_cursor = None

    def _allocate(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.buffer = [[EMPTY_CELL] * width for _ in range(height)]
        self.force_full_redraw()

    # ─────────────────────────────────────────────────────────────────────────
    # Clipping
    # ─────────────────────────────────────────────────────────────────────────

    def push_clip(self, rect: Rect) -> None:
        """Restrict drawing to rect, intersected with the current clip."""
        self._clip_stack.append(self.clip_rect.intersect(rect))

    def pop_clip(self) -> None:
        """
        Drop the innermost clip.

        Raises:
            IndexError: If there is no clip to pop
        """
        self._clip_stack.pop()

    @property
    def clip_rect(self) -> Rect:
        """Get the effective clip (the whole screen when no clip is active)."""
        if self._clip_stack:
            return self._clip_stack[-1]
        return self.screen_rect

    @property
    def clip_depth(self) -> int:
        return len(self._clip_stack)

    # ─────────────────────────────────────────────────────────────────────────
    # Drawing
    # ─────────────────────────────────────────────────────────────────────────

    def write_cell(self, x: int, y: int, cell: Cell) -> None:
        """Write one cell if it lies inside the screen and the clip."""
        if self.clip_rect.contains(Point(x, y)):
            self.buffer[y][x] = cell

    def write_line(self, x: int, y: int, cells: Sequence[Cell]) -> None:
        """Write a horizontal run of cells, dropping the clipped part."""
        clip = self.clip_rect
        if not clip.a.y <= y < clip.b.y:
            return
        row = self.buffer[y]
        start = max(x, clip.a.x)
        end = min(x + len(cells), clip.b.x)
        for column in range(start, end):
            row[column] = cells[column - x]

    def fill_rect(self, rect: Rect, cell: Cell) -> None:
        """Fill a rectangle (clipped) with one cell."""
        area = rect.intersect(self.clip_rect)
        for y in range(area.a.y, area.b.y):
            row = self.buffer[y]
            for x in range(area.a.x, area.b.x):
                row[x] = cell

    def read_cell(self, x: int, y: int) -> Optional[Cell]:
        """Get a cell of the back buffer, or None outside the screen."""
        if 0 <= x < self.width and 0 <= y < self.height:
            return self.buffer[y][x]
        return None

    def clear(self) -> None:
        """Blank the back buffer."""
        for row in self.buffer:
            row[:] = [EMPTY_CELL] * self.width

    def flush(self) -> int:
        """
        Send changed cells to the backend.

        Changed cells are grouped into runs sharing one attribute. The back
        buffer then becomes the front buffer.

        Returns:
            Number of cells sent
        """
        emitted = 0
        for y in range(self.height):
            row = self.buffer[y]
            prev = self.prev_buffer[y]
            x = 0
            while x < self.width:
                if row[x] == prev[x]:
                    x += 1
                    continue
                start = x
                attr = row[x].attr
                while x < self.width and row[x] != prev[x] and row[x].attr == attr:
                    x += 1
                self.backend.write_cells(start, y, row[start:x])
                emitted += x - start
            self.prev_buffer[y] = list(row)

        cursor = self.cursor if self.cursor_visible else None
        if cursor is not None and not self.screen_rect.contains(cursor):
            cursor = None
        if cursor != self._shown_cursor:
            self.backend.set_cursor(cursor)
            self._shown_cursor = cursor

        self.backend.flush()
        return emitted

    # ─────────────────────────────────────────────────────────────────────────
    # Cursor
    # ─────────────────────────────────────────────────────────────────────────

    def set_cursor(self, x: int, y: int) -> None:
        self.cursor = Point(x, y)

    def show_cursor(self) -> None:
        self.cursor_visible = True

    def hide_cursor(self) -> None:
        self.cursor_visible = False

    def bell(self) -> None:
        self.backend.bell()

    # ─────────────────────────────────────────────────────────────────────────
    # Input
    # ─────────────────────────────────────────────────────────────────────────

    def put_event(self, event: Event) -> None:
        """Queue an event to be returned before any backend input."""
        self._pending.append(event)

    def poll_event(self, timeout: float) -> Optional[Event]:
        """
        Get the next event.

        Queued events come first. Backend input is screened for the dump
        shortcuts, which are handled here and never returned.

        Args:
            timeout: Seconds to wait for backend input

        Returns:
            Event, or None on timeout or after a dump shortcut
        """
        if self._pending:
            return self._pending.popleft()

        event = self.backend.poll_event(timeout)
        if event is None or not event.is_keyboard or not self.config.dump_shortcuts:
            return event

        if event.key_code == KB_F12:
            self.dump_screen()
            self.flash()
            return None
        if event.key_code == KB_SHIFT_F12:
            self.dump_active_view()
            self.flash()
            return None
        return event

    def set_active_view_bounds(self, rect: Optional[Rect]) -> None:
        """Record the region dumped by Shift+F12."""
        self.active_view_bounds = rect

    # ─────────────────────────────────────────────────────────────────────────
    # Debug surface
    # ─────────────────────────────────────────────────────────────────────────

    def dump_screen(self, path: Optional[Union[str, Path]] = None) -> bool:
        """
        Dump the back buffer to an ANSI file.

        Returns:
            True if the file was written
        """
        target = path or self.config.screen_dump_path
        try:
            ansi_dump.dump_screen(self.buffer, target)
        except OSError as e:
            logger.warning(f"Screen dump to {target} failed: {e}")
            return False
        return True

    def dump_region(self, rect: Rect, path: Optional[Union[str, Path]] = None) -> bool:
        """
        Dump part of the back buffer to an ANSI file.

        Returns:
            True if the file was written
        """
        target = path or self.config.view_dump_path
        try:
            ansi_dump.dump_region(self.buffer, rect, target)
        except OSError as e:
            logger.warning(f"Region dump to {target} failed: {e}")
            return False
        return True

    def dump_active_view(self) -> bool:
        """Dump the active view, or the whole screen when none is recorded."""
        rect = self.active_view_bounds or self.screen_rect
        return self.dump_region(rect, self.config.view_dump_path)

    def flash(self) -> None:
        """Invert every attribute briefly as visual feedback."""
        saved = [list(row) for row in self.buffer]
        for row in self.buffer:
            row[:] = [Cell(cell.ch, cell.attr.swapped()) for cell in row]
        self.flush()
        time.sleep(self.config.flash_duration)
        self.buffer = saved
        self.flush()
