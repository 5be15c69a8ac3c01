"""
Group - a view that owns child views.

A Group routes events to its children, draws them back to front inside
its own bounds, and can run a private modal event loop.
"""

import logging
from typing import List, Optional, TYPE_CHECKING

from ...core.command import END_COMMANDS
from ...core.draw import Cell
from ...core.event import (
    Event, EventType, KB_SHIFT_TAB, KB_TAB, alt_letter,
)
from ...core.geometry import Point, Rect
from ...core.palette import Attr, Palette
from ...core.state import (
    OF_CENTER_X, OF_CENTER_Y, OF_TOP_SELECT, SF_DISABLED, SF_DRAGGING,
    SF_MODAL, SF_VISIBLE, SHADOW_ATTR, SHADOW_SIZE,
)
from ..focus import FocusChain
from .base import View

if TYPE_CHECKING:
    from ...core.app import Application
    from ...core.terminal import Terminal

logger = logging.getLogger(__name__)

# Mouse events that follow a press and belong to the view being dragged
_DRAG_EVENTS = (EventType.MOUSE_MOVE, EventType.MOUSE_AUTO, EventType.MOUSE_UP)


class Group(View):
    """
    Container of child views.

    Children are kept in paint order: the first child is drawn first (at
    the back), the last child is in front and wins hit-testing.
    """

    def __init__(self, bounds: Rect, palette: Optional[Palette] = None):
        """
        Initialize the group.

        Args:
            bounds: Group position and size
            palette: View-tier palette; also the container tier of children
        """
        super().__init__(bounds, palette)
        self.children: List[View] = []
        self._focus = FocusChain(self.children)
        self.end_state = 0

        # Fill attribute drawn under the children, None for no fill
        self.background: Optional[Attr] = None

        # Whether Tab / Shift+Tab cycle focus among the children
        self.tab_cycles = True

        # Children below this index stay at the back (frames, backgrounds)
        self._pinned = 0

    # ─────────────────────────────────────────────────────────────────────────
    # Children
    # ─────────────────────────────────────────────────────────────────────────

    def child_palette(self) -> Optional[Palette]:
        """Get the palette children resolve through as their container tier."""
        return self.palette if self.palette is not None else self.container_palette

    def set_container_palette(self, palette: Optional[Palette]) -> None:
        super().set_container_palette(palette)
        for child in self.children:
            child.set_container_palette(self.child_palette())

    def add(self, view: View) -> View:
        """
        Add a child in front of the existing ones.

        The view's bounds are taken relative to the group origin and become
        absolute; OF_CENTER_X / OF_CENTER_Y center it in the group. The
        first child that can take focus becomes current.

        Args:
            view: View to add

        Returns:
            The added view
        """
        bounds = view.bounds
        x = bounds.a.x
        y = bounds.a.y
        if view.options & OF_CENTER_X:
            x = (self.bounds.width - bounds.width) // 2
        if view.options & OF_CENTER_Y:
            y = (self.bounds.height - bounds.height) // 2
        view.set_bounds(bounds.move_to(self.bounds.a.x + x, self.bounds.a.y + y))
        view.set_container_palette(self.child_palette())

        self.children.append(view)
        if self._focus.current is None and view.can_focus():
            self._focus.focus_view(view)
        return view

    def remove(self, view: View) -> bool:
        """
        Remove a child.

        If it was current, focus moves to the front-most child that can
        take it.

        Returns:
            True if the view was a child
        """
        index = self.index_of(view)
        if index is None:
            return False
        self._focus.removing(index)
        del self.children[index]
        if self._focus.current is None:
            self._focus.last()
        return True

    def index_of(self, view: View) -> Optional[int]:
        for index, child in enumerate(self.children):
            if child is view:
                return index
        return None

    def bring_to_front(self, view: View) -> None:
        self._move_child(view, len(self.children) - 1)

    def send_to_back(self, view: View) -> None:
        self._move_child(view, self._pinned)

    def _move_child(self, view: View, position: int) -> None:
        index = self.index_of(view)
        if index is None or index == position:
            return
        current = self._focus.current
        del self.children[index]
        self.children.insert(position, view)
        self._focus.reindex(current)

    def child_at(self, point: Point) -> Optional[View]:
        """
        Hit-test the children front to back.

        Returns:
            The front-most visible child containing the point, or None
        """
        for child in reversed(self.children):
            if child.get_state(SF_VISIBLE) and child.contains(point):
                return child
        return None

    # ─────────────────────────────────────────────────────────────────────────
    # Focus
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def current(self) -> Optional[View]:
        """Get the focused child, or None."""
        return self._focus.current

    @property
    def focused_index(self) -> Optional[int]:
        return self._focus.index

    def focus_child(self, view: View) -> bool:
        """
        Make a child current.

        OF_TOP_SELECT children are brought to the front as well.

        Returns:
            True if the child took focus
        """
        if not self._focus.focus_view(view):
            return False
        if view.options & OF_TOP_SELECT:
            self.bring_to_front(view)
        return True

    def set_focus_to(self, index: int) -> bool:
        if not 0 <= index < len(self.children):
            return False
        return self.focus_child(self.children[index])

    def set_initial_focus(self) -> Optional[View]:
        """Focus the first child that can take focus."""
        return self._raise_current(self._focus.first())

    def clear_all_focus(self) -> None:
        self._focus.clear()

    def select_next(self) -> Optional[View]:
        return self._raise_current(self._focus.next())

    def select_previous(self) -> Optional[View]:
        return self._raise_current(self._focus.prev())

    def _raise_current(self, view: Optional[View]) -> Optional[View]:
        if view is not None and view.options & OF_TOP_SELECT:
            self.bring_to_front(view)
        return view

    def on_focus_changed(self, focused: bool) -> None:
        if focused and self._focus.current is None:
            self.set_initial_focus()

    # ─────────────────────────────────────────────────────────────────────────
    # Event routing
    # ─────────────────────────────────────────────────────────────────────────

    def handle_event(self, event: Event) -> None:
        """
        Route an event to the children.

        Tab cycles focus, mouse events go to the child under the pointer,
        keyboard and command events go to the focused child only, and
        broadcasts go to every child.
        """
        if event.is_nothing:
            return

        # A child disabled or hidden since the last event gives up focus first
        self._focus.revalidate()

        if event.is_keyboard and self.tab_cycles and event.key_code in (KB_TAB, KB_SHIFT_TAB):
            if event.key_code == KB_TAB:
                self.select_next()
            else:
                self.select_previous()
            event.clear()
            return

        if event.what is EventType.BROADCAST:
            self.broadcast(event)
            self._focus.revalidate()
        else:
            if event.is_mouse:
                self._route_mouse(event)
            else:
                current = self.current
                if current is not None:
                    current.handle_event(event)
                if event.is_keyboard:
                    self._handle_shortcut(event)

            # A child may have turned a key or click into a broadcast
            if event.what is EventType.BROADCAST:
                self.broadcast(event)

        self.end_if_modal(event)

    def _route_mouse(self, event: Event) -> None:
        current = self.current
        if current is not None and current.get_state(SF_DRAGGING) and event.what in _DRAG_EVENTS:
            current.handle_event(event)
            return

        target = self.child_at(event.mouse.pos)
        if target is None:
            return
        if event.what is EventType.MOUSE_DOWN:
            focus_target = target.focus_link() or target
            if focus_target is not self.current and focus_target.can_focus():
                self.focus_child(focus_target)
        target.handle_event(event)

    def _handle_shortcut(self, event: Event) -> None:
        """Fire the child whose Alt-letter shortcut matches the key."""
        letter = alt_letter(event.key_code)
        if not letter:
            return
        for child in self.children:
            if child.shortcut() != letter:
                continue
            if not child.get_state(SF_VISIBLE) or child.get_state(SF_DISABLED):
                continue
            target = child.focus_link() or child
            if target.can_focus():
                self.focus_child(target)
            child.press(event)
            return

    def broadcast(self, event: Event, skip: Optional[View] = None) -> None:
        """
        Deliver a broadcast to every child in order.

        Delivery stops early only if a child rewrites the event into
        something other than a broadcast.

        Args:
            event: Broadcast event
            skip: Child to leave out
        """
        for child in list(self.children):
            if child is skip:
                continue
            child.handle_event(event)
            if event.what is not EventType.BROADCAST:
                break

    # ─────────────────────────────────────────────────────────────────────────
    # Modal execution
    # ─────────────────────────────────────────────────────────────────────────

    def is_end_command(self, command: int) -> bool:
        """Check if a command ends this group's modal loop."""
        return command in END_COMMANDS

    def end_if_modal(self, event: Event) -> None:
        """End the modal loop if the event is one of its end commands."""
        if (
            event.what is EventType.COMMAND
            and self.get_state(SF_MODAL)
            and self.is_end_command(event.command)
        ):
            self.end_modal(event.command)
            event.clear()

    def end_modal(self, command: int) -> None:
        if self.get_state(SF_MODAL):
            self.set_end_state(command)

    def get_end_state(self) -> int:
        return self.end_state

    def set_end_state(self, command: int) -> None:
        self.end_state = command

    def execute(self, app: "Application") -> int:
        """
        Run a private event loop until an end state is set.

        Events come from ``app.get_event()``, which also draws the screen
        and runs idle work. Nested calls suspend the outer loop.

        Args:
            app: Application providing the event source

        Returns:
            The command that ended the loop
        """
        self.end_state = 0
        self.set_state(SF_MODAL, True)
        logger.debug(f"Modal loop started for {self!r}")
        try:
            while self.end_state == 0:
                event = app.get_event()
                if event is not None:
                    self.handle_event(event)
        finally:
            self.set_state(SF_MODAL, False)
        logger.debug(f"Modal loop for {self!r} ended with command {self.end_state}")
        return self.end_state

    # ─────────────────────────────────────────────────────────────────────────
    # Drawing
    # ─────────────────────────────────────────────────────────────────────────

    def draw(self, terminal: "Terminal") -> None:
        self._focus.revalidate()
        if self.background is not None:
            terminal.fill_rect(self.bounds, Cell(" ", self.background))
        terminal.push_clip(self.bounds)
        try:
            self.draw_sub_views(terminal)
        finally:
            terminal.pop_clip()

    def draw_sub_views(self, terminal: "Terminal", start: int = 0, clip: Optional[Rect] = None) -> None:
        """
        Draw children from index start to the front.

        Args:
            terminal: Render buffer
            start: First child to draw
            clip: Extra clip applied while drawing
        """
        if clip is not None:
            terminal.push_clip(clip)
        try:
            for child in self.children[start:]:
                if not child.get_state(SF_VISIBLE):
                    continue
                child.draw(terminal)
                if child.has_shadow:
                    self._draw_shadow(terminal, child)
        finally:
            if clip is not None:
                terminal.pop_clip()

    @staticmethod
    def _draw_shadow(terminal: "Terminal", view: View) -> None:
        """Darken the cells right of and below a view."""
        dx, dy = SHADOW_SIZE
        a, b = view.bounds.a, view.bounds.b
        strips = (
            Rect.from_coords(b.x, a.y + dy, b.x + dx, b.y + dy),
            Rect.from_coords(a.x + dx, b.y, b.x, b.y + dy),
        )
        for strip in strips:
            area = strip.intersect(terminal.clip_rect)
            for y in range(area.a.y, area.b.y):
                for x in range(area.a.x, area.b.x):
                    cell = terminal.read_cell(x, y)
                    terminal.write_cell(x, y, Cell(cell.ch, SHADOW_ATTR))

    def update_cursor(self, terminal: "Terminal") -> None:
        """Let the focused child place the caret, clipped to this group."""
        self._focus.revalidate()
        terminal.hide_cursor()
        current = self.current
        if current is None:
            return
        terminal.push_clip(self.bounds)
        try:
            current.update_cursor(terminal)
        finally:
            terminal.pop_clip()

    # ─────────────────────────────────────────────────────────────────────────
    # Validation and geometry
    # ─────────────────────────────────────────────────────────────────────────

    def valid(self, command: int) -> bool:
        return all(child.valid(command) for child in self.children)

    def set_bounds(self, bounds: Rect) -> None:
        """Move the group; children keep their position relative to it."""
        dx = bounds.a.x - self.bounds.a.x
        dy = bounds.a.y - self.bounds.a.y
        super().set_bounds(bounds)
        if dx or dy:
            for child in self.children:
                child.set_bounds(child.bounds.move_by(dx, dy))
