"""
Focus management system.

Tracks which child of a Group is current and keeps each child's focus
flag in step with that index.
"""

from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .widgets.base import View


class FocusChain:
    """
    Focus index over a Group's children.

    The index may be None when no child can take focus. Every change of the
    index goes through this class, which updates the previous child, the
    index and the new child together: the current child is always the one
    child reporting focus, whether or not the owner is focused itself.
    """

    def __init__(self, views: List["View"]):
        """
        Initialize the focus chain.

        Args:
            views: The owner's child list (shared, not copied)
        """
        self._views = views
        self._index: Optional[int] = None

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def index(self) -> Optional[int]:
        """Get the current index, or None."""
        return self._index

    @property
    def current(self) -> Optional["View"]:
        """Get the current child, or None."""
        if self._index is not None and 0 <= self._index < len(self._views):
            return self._views[self._index]
        return None

    # ─────────────────────────────────────────────────────────────────────────
    # Moving focus
    # ─────────────────────────────────────────────────────────────────────────

    def focus_by_index(self, index: int) -> bool:
        """
        Set focus to the child at index.

        Args:
            index: Index of the child to focus

        Returns:
            True if the child can take focus and is now current
        """
        if not 0 <= index < len(self._views):
            return False
        view = self._views[index]
        if not view.can_focus():
            return False
        if index == self._index:
            return True

        previous = self.current
        self._index = index
        if previous is not None:
            previous.focused = False
        view.focused = True
        return True

    def focus_view(self, view: "View") -> bool:
        """Set focus directly to a child."""
        for index, child in enumerate(self._views):
            if child is view:
                return self.focus_by_index(index)
        return False

    def next(self) -> Optional["View"]:
        """
        Move focus to the next focusable child, wrapping around.

        Returns:
            The newly focused child, or None if no child can take focus
        """
        return self._step(1)

    def prev(self) -> Optional["View"]:
        """Move focus to the previous focusable child, wrapping around."""
        return self._step(-1)

    def _step(self, direction: int) -> Optional["View"]:
        count = len(self._views)
        if not count:
            return None
        if self._index is None:
            start = -1 if direction > 0 else count
        else:
            start = self._index
        # One full loop at most; the current child is the last candidate
        for step in range(1, count + 1):
            index = (start + step * direction) % count
            if self.focus_by_index(index):
                return self._views[index]
        return None

    def first(self) -> Optional["View"]:
        """Focus the first focusable child."""
        for index in range(len(self._views)):
            if self.focus_by_index(index):
                return self._views[index]
        return None

    def last(self) -> Optional["View"]:
        """Focus the last focusable child."""
        for index in reversed(range(len(self._views))):
            if self.focus_by_index(index):
                return self._views[index]
        return None

    def clear(self) -> None:
        """Drop focus entirely."""
        current = self.current
        self._index = None
        if current is not None:
            current.focused = False

    # ─────────────────────────────────────────────────────────────────────────
    # Keeping the index valid
    # ─────────────────────────────────────────────────────────────────────────

    def removing(self, index: int) -> None:
        """Adjust for the child at index being removed from the list."""
        if self._index is None:
            return
        if index == self._index:
            self.clear()
        elif index < self._index:
            self._index -= 1

    def reindex(self, view: Optional["View"]) -> None:
        """Re-find the current child after the list was reordered."""
        if view is None:
            return
        for index, child in enumerate(self._views):
            if child is view:
                self._index = index
                return

    def revalidate(self) -> None:
        """Move focus away from a current child that can no longer take it."""
        current = self.current
        if current is not None and not current.can_focus():
            if self.next() is None:
                self.clear()
