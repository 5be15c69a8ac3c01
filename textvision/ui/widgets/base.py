"""
Base view class.

Every node of the UI tree inherits from View. A view knows its bounds in
absolute screen cells, its state and option flags, and the two palette
tiers it resolves its colors through. It has no reference to its owner.
"""

from typing import Optional, Tuple, TYPE_CHECKING

from ...core.draw import Cell, DrawBuffer
from ...core.event import Event
from ...core.geometry import Point, Rect
from ...core.palette import Attr, Palette, resolve
from ...core.state import (
    SF_CURSOR_VIS, SF_DISABLED, SF_FOCUSED, SF_SHADOW, SF_VISIBLE,
    OF_SELECTABLE, SHADOW_SIZE,
)

if TYPE_CHECKING:
    from ...core.terminal import Terminal


class View:
    """
    Base class for all UI components.

    Provides common functionality for positioning, focus, state flags,
    color mapping, drawing, and event handling.
    """

    def __init__(self, bounds: Rect, palette: Optional[Palette] = None):
        """
        Initialize the view.

        Args:
            bounds: View position and size, relative to the owner's origin
                until the view is added to a Group
            palette: View-tier palette, or None to pass indices through
        """
        self.bounds = bounds
        self.state = SF_VISIBLE
        self.options = 0
        self.palette = palette

        # Container tier, assigned by the owning Group
        self.container_palette: Optional[Palette] = None

        # Caret position relative to the view origin
        self.cursor = Point(0, 0)

    # ─────────────────────────────────────────────────────────────────────────
    # State
    # ─────────────────────────────────────────────────────────────────────────

    def get_state(self, flag: int) -> bool:
        """Check if any of the given SF_* bits is set."""
        return bool(self.state & flag)

    def set_state(self, flag: int, enable: bool) -> None:
        """
        Set or clear SF_* bits.

        SF_FOCUSED goes through the ``focused`` property so the focus hook
        runs.
        """
        if flag & SF_FOCUSED:
            self.focused = enable
            flag &= ~SF_FOCUSED
        if enable:
            self.state |= flag
        else:
            self.state &= ~flag

    @property
    def focused(self) -> bool:
        """Check if view has focus."""
        return bool(self.state & SF_FOCUSED)

    @focused.setter
    def focused(self, value: bool) -> None:
        """Set focus state."""
        if self.focused != value:
            if value:
                self.state |= SF_FOCUSED
            else:
                self.state &= ~SF_FOCUSED
            self.on_focus_changed(value)

    def set_focus(self, value: bool) -> None:
        self.focused = value

    def on_focus_changed(self, focused: bool) -> None:
        """
        Called when focus state changes.

        Override in subclass for custom behavior.

        Args:
            focused: New focus state
        """
        pass

    def can_focus(self) -> bool:
        """Check if the view may become its owner's current child."""
        return (
            bool(self.options & OF_SELECTABLE)
            and self.get_state(SF_VISIBLE)
            and not self.get_state(SF_DISABLED)
        )

    @property
    def has_shadow(self) -> bool:
        return bool(self.state & SF_SHADOW)

    def shadow_bounds(self) -> Rect:
        """Get the bounds grown by the drop shadow."""
        dx, dy = SHADOW_SIZE
        return Rect(self.bounds.a, Point(self.bounds.b.x + dx, self.bounds.b.y + dy))

    def show(self) -> None:
        self.set_state(SF_VISIBLE, True)

    def hide(self) -> None:
        self.set_state(SF_VISIBLE, False)

    # ─────────────────────────────────────────────────────────────────────────
    # Hooks used by owners
    # ─────────────────────────────────────────────────────────────────────────

    def is_default_button(self) -> bool:
        return False

    def button_command(self) -> int:
        """Get the command a button view fires (0 for other views)."""
        return 0

    def get_end_state(self) -> int:
        return 0

    def set_end_state(self, command: int) -> None:
        """Record the command that ends a modal loop (groups only)."""
        pass

    def valid(self, command: int) -> bool:
        """
        Check if the view agrees to a command ending or closing it.

        Args:
            command: The command about to take effect

        Returns:
            True to allow it
        """
        return True

    def focus_link(self) -> Optional["View"]:
        """Get the view a click on this view should focus instead."""
        return None

    def shortcut(self) -> str:
        """Get the lowercase Alt-letter shortcut of this view, or ''."""
        return ""

    def press(self, event: Event) -> None:
        """
        Activate the view from its shortcut.

        The owner has already moved focus to the view's link target.
        """
        event.clear()

    # ─────────────────────────────────────────────────────────────────────────
    # Geometry
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def origin(self) -> Point:
        return self.bounds.a

    @property
    def size(self) -> Tuple[int, int]:
        """Get size as tuple."""
        return self.bounds.size

    def set_bounds(self, bounds: Rect) -> None:
        self.bounds = bounds

    def move_to(self, x: int, y: int) -> None:
        """Move the view so its top-left corner is at (x, y)."""
        self.set_bounds(self.bounds.move_to(x, y))

    def make_local(self, point: Point) -> Point:
        """Convert a screen position to view-relative coordinates."""
        return point - self.bounds.a

    def contains(self, point: Point) -> bool:
        return self.bounds.contains(point)

    # ─────────────────────────────────────────────────────────────────────────
    # Colors and drawing
    # ─────────────────────────────────────────────────────────────────────────

    def set_container_palette(self, palette: Optional[Palette]) -> None:
        self.container_palette = palette

    def map_color(self, index: int) -> Attr:
        """Resolve a logical color index through this view's tiers."""
        return resolve(index, self.palette, self.container_palette)

    def write_line(self, terminal: "Terminal", x: int, y: int, buf: DrawBuffer) -> None:
        """Write a prepared line at view-relative (x, y)."""
        terminal.write_line(self.bounds.a.x + x, self.bounds.a.y + y, buf.data)

    def write_str(self, terminal: "Terminal", x: int, y: int, text: str, color: int) -> None:
        """Write text at view-relative (x, y) in a logical color."""
        attr = self.map_color(color)
        terminal.write_line(
            self.bounds.a.x + x,
            self.bounds.a.y + y,
            [Cell(ch, attr) for ch in text]
        )

    def draw(self, terminal: "Terminal") -> None:
        """
        Draw the view.

        The default fills the bounds with blanks in color 1.

        Args:
            terminal: Render buffer, already clipped to the owner
        """
        terminal.fill_rect(self.bounds, Cell(" ", self.map_color(1)))

    def update_cursor(self, terminal: "Terminal") -> None:
        """Place the hardware caret if this view is focused and shows one."""
        if not (self.focused and self.get_state(SF_CURSOR_VIS)):
            return
        caret = Point(self.bounds.a.x + self.cursor.x, self.bounds.a.y + self.cursor.y)
        # A caret outside the view or the owner's clip stays hidden
        if self.bounds.contains(caret) and terminal.clip_rect.contains(caret):
            terminal.set_cursor(caret.x, caret.y)
            terminal.show_cursor()

    # ─────────────────────────────────────────────────────────────────────────
    # Events
    # ─────────────────────────────────────────────────────────────────────────

    def handle_event(self, event: Event) -> None:
        """
        Handle an event.

        Override in subclass. A view signals that it handled the event by
        clearing it or by rewriting it into a Command.

        Args:
            event: Event to handle (mutated in place)
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.bounds.a.x}, {self.bounds.a.y}, {self.bounds.width}x{self.bounds.height})"
