"""
Mock backend - scripted input and captured output for testing.

Usage:
    backend = MockBackend(40, 12)

    # Script the input
    backend.inject(Event.keyboard(KB_TAB))

    # Run code under test...

    # Inspect what reached the display
    assert backend.text_at(0, 0, 5) == "Hello"
"""

import logging
from collections import deque
from typing import List, Optional, Sequence, Tuple

from ..core.draw import Cell, EMPTY_CELL
from ..core.event import Event
from ..core.geometry import Point
from .ports import Backend, BackendCapabilities

logger = logging.getLogger(__name__)


class ScriptExhausted(Exception):
    """The script ran dry while the code under test kept polling."""


class MockBackend(Backend):
    """
    Mock backend for testing.

    Events are returned in injection order. When the queue is empty,
    poll_event() returns None (a timeout); after max_idle_polls consecutive
    empty polls it raises ScriptExhausted so a runaway loop fails the test
    instead of hanging it.
    """

    def __init__(self, columns: int = 80, rows: int = 25, max_idle_polls: Optional[int] = 50):
        self.columns = columns
        self.rows = rows
        self.max_idle_polls = max_idle_polls
        self.screen: List[List[Cell]] = [[EMPTY_CELL] * columns for _ in range(rows)]
        self.cursor: Optional[Point] = None
        self.writes: List[Tuple[int, int, Tuple[Cell, ...]]] = []
        self.flush_count = 0
        self.bell_count = 0
        self._queue: deque = deque()
        self._idle_polls = 0
        self._started = False
        self._polled_count = 0

    def init(self) -> None:
        self._started = True
        logger.debug("MockBackend started")

    def cleanup(self) -> None:
        self._started = False
        self._queue.clear()

    def size(self) -> Tuple[int, int]:
        return (self.columns, self.rows)

    def poll_event(self, timeout: float) -> Optional[Event]:
        """Get the next injected event, or None when the script is empty."""
        if self._queue:
            self._idle_polls = 0
            self._polled_count += 1
            return self._queue.popleft()

        self._idle_polls += 1
        if self.max_idle_polls is not None and self._idle_polls > self.max_idle_polls:
            raise ScriptExhausted(f"no event after {self._idle_polls} polls")
        return None

    def write_cells(self, x: int, y: int, cells: Sequence[Cell]) -> None:
        self.writes.append((x, y, tuple(cells)))
        row = self.screen[y]
        for offset, cell in enumerate(cells):
            row[x + offset] = cell

    def flush(self) -> None:
        self.flush_count += 1

    def set_cursor(self, pos: Optional[Point]) -> None:
        self.cursor = pos

    def bell(self) -> None:
        self.bell_count += 1

    def capabilities(self) -> BackendCapabilities:
        return BackendCapabilities(mouse=True, true_color=True, bell=True, name="mock")

    # ─────────────────────────────────────────────────────────────────────────
    # Testing helpers
    # ─────────────────────────────────────────────────────────────────────────

    def inject(self, event: Event) -> None:
        """
        Inject an event to be returned by a later poll_event().

        Args:
            event: Event to inject
        """
        self._queue.append(event)

    def inject_many(self, events: Sequence[Event]) -> None:
        """Inject multiple events."""
        for event in events:
            self.inject(event)

    @property
    def pending_count(self) -> int:
        """Number of events waiting to be polled."""
        return len(self._queue)

    def text_at(self, x: int, y: int, length: int) -> str:
        """Get the characters shown on row y starting at x."""
        return "".join(cell.ch for cell in self.screen[y][x:x + length])

    def row_text(self, y: int) -> str:
        """Get the characters shown on a whole row."""
        return self.text_at(0, y, self.columns)

    def reset_writes(self) -> None:
        """Forget the recorded writes."""
        self.writes.clear()
