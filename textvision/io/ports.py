"""
Backend abstraction - the engine's only link to a physical display.

A backend turns raw input into Events and paints runs of cells. The
engine never talks to a terminal or window directly:

- Pygame: a window with a monospace character grid
- ANSI: the controlling terminal in cbreak mode
- Mock: scripted events and captured output for tests

Backends raise BackendError when the display cannot be opened or
restored; that is the only error the engine lets reach the caller.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ..core.draw import Cell
from ..core.event import Event
from ..core.geometry import Point


class BackendError(Exception):
    """The display could not be opened, driven or restored."""


@dataclass
class BackendCapabilities:
    """What a backend can do."""
    mouse: bool = False
    true_color: bool = False
    bell: bool = False
    name: str = "unknown"


class Backend(ABC):
    """
    Abstract display backend.

    poll_event() has exactly two outcomes seen by the engine: an Event, or
    None when the timeout expires. Output is buffered between write_cells()
    and flush().
    """

    @abstractmethod
    def init(self) -> None:
        """
        Open the display.

        Raises:
            BackendError: If the display cannot be opened
        """
        pass

    @abstractmethod
    def cleanup(self) -> None:
        """Restore the display to its original state."""
        pass

    @abstractmethod
    def size(self) -> Tuple[int, int]:
        """Get display size in cells (columns, rows)."""
        pass

    @abstractmethod
    def poll_event(self, timeout: float) -> Optional[Event]:
        """
        Wait up to timeout seconds for the next input event.

        Returns:
            Event, or None if no input arrived in time
        """
        pass

    @abstractmethod
    def write_cells(self, x: int, y: int, cells: Sequence[Cell]) -> None:
        """Paint a horizontal run of cells starting at (x, y)."""
        pass

    @abstractmethod
    def flush(self) -> None:
        """Make everything written so far visible."""
        pass

    @abstractmethod
    def set_cursor(self, pos: Optional[Point]) -> None:
        """Place the caret, or hide it when pos is None."""
        pass

    def bell(self) -> None:
        """Sound the bell, if the backend has one."""
        pass

    def capabilities(self) -> BackendCapabilities:
        """Describe the backend."""
        return BackendCapabilities(name=type(self).__name__)
