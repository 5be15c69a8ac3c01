"""
Main application class.

Owns the terminal, the desktop and the status line, and runs the event
loop: draw, flush, poll, dispatch, and idle work when input times out.
"""

import logging
from typing import Optional

from ..config import Config, DEFAULT_CONFIG
from ..io.factory import create_backend
from ..io.ports import Backend
from ..ui.widgets.desktop import Desktop
from ..ui.widgets.group import Group
from ..ui.widgets.status_line import StatusItem, StatusLine
from ..ui.widgets.window import Window
from . import command_set
from .command import (
    CM_CASCADE, CM_CLOSE, CM_COMMAND_SET_CHANGED, CM_NEXT, CM_QUIT, CM_TILE,
    CM_VALID, CM_ZOOM,
)
from .event import Event, EventType, KB_ALT_F3, KB_ALT_X, KB_F5, KB_F6
from .geometry import Rect
from .state import SF_SHADOW
from .terminal import Terminal

logger = logging.getLogger(__name__)


class Application:
    """
    Main application controller.

    Manages the event loop, the window stack on the desktop, and the idle
    broadcast of command-set changes.
    """

    def __init__(self, config: Optional[Config] = None, backend: Optional[Backend] = None):
        """
        Initialize the application.

        Args:
            config: Application configuration
            backend: Display backend; created from the configuration if None

        Raises:
            BackendError: If the display cannot be opened
        """
        self.config = config or DEFAULT_CONFIG
        self.running = False

        # Open the display
        self.terminal = Terminal(backend or create_backend(self.config), self.config)
        self.terminal.init()

        # Fresh command set; window commands wait for a focused window
        command_set.init_command_set()

        width, height = self.terminal.size()
        self.status_line = self.init_status_line(Rect.from_coords(0, height - 1, width, height))
        desktop_bottom = height - 1 if self.status_line is not None else height
        self.desktop = self.init_desktop(Rect.from_coords(0, 0, width, desktop_bottom))
        self.desktop.set_focus(True)

        logger.info(f"Application started on a {width}x{height} screen")

    def init_status_line(self, bounds: Rect) -> Optional[StatusLine]:
        """
        Create the status line.

        Override in subclass for custom hints; return None for none.
        """
        return StatusLine(bounds, [
            StatusItem("~Alt-X~ Exit", KB_ALT_X, CM_QUIT),
            StatusItem("~Alt-F3~ Close", KB_ALT_F3, CM_CLOSE),
            StatusItem("~F5~ Zoom", KB_F5, CM_ZOOM),
            StatusItem("~F6~ Next", KB_F6, CM_NEXT),
        ])

    def init_desktop(self, bounds: Rect) -> Desktop:
        """Create the desktop. Override in subclass for a custom one."""
        return Desktop(bounds)

    # ─────────────────────────────────────────────────────────────────────────
    # Event loop
    # ─────────────────────────────────────────────────────────────────────────

    def run(self) -> None:
        """Main application loop."""
        self.running = True
        logger.info("Entering event loop")
        while self.running:
            event = self.get_event()
            if event is not None:
                self.handle_event(event)
        logger.info("Event loop finished")

    def get_event(self) -> Optional[Event]:
        """
        Draw the screen and wait for the next event.

        Closed windows are removed first. When the poll times out the idle
        work runs and None is returned.

        Returns:
            The next event, or None
        """
        self.desktop.remove_closed_windows()
        self.draw()
        event = self.terminal.poll_event(self.config.poll_timeout)
        if event is None:
            self.idle()
        return event

    def handle_event(self, event: Event) -> None:
        """
        Dispatch an event.

        The status line sees it first (hot keys become commands), then the
        desktop, then the application's own commands.
        """
        if self.status_line is not None:
            self.status_line.handle_event(event)
        if not event.is_nothing:
            self.desktop.handle_event(event)

        if event.what is EventType.COMMAND:
            if event.command == CM_QUIT:
                self.quit()
                event.clear()
            elif event.command == CM_TILE:
                self.desktop.tile()
                event.clear()
            elif event.command == CM_CASCADE:
                self.desktop.cascade()
                event.clear()
        elif event.is_keyboard and event.key_code == KB_ALT_X:
            self.quit()
            event.clear()

    def idle(self) -> None:
        """
        Run idle work.

        If the command set changed since the last idle tick, every view is
        told with a CM_COMMAND_SET_CHANGED broadcast.
        """
        if not command_set.command_set_changed():
            return
        command_set.clear_command_set_changed()
        if self.status_line is not None:
            self.status_line.handle_event(Event.broadcast(CM_COMMAND_SET_CHANGED))
        self.desktop.handle_event(Event.broadcast(CM_COMMAND_SET_CHANGED))
        logger.debug("Broadcast command set change")

    def draw(self) -> None:
        """Redraw every view and flush the changes."""
        terminal = self.terminal
        terminal.hide_cursor()
        self.desktop.draw(terminal)
        if self.status_line is not None:
            self.status_line.draw(terminal)
        self.desktop.update_cursor(terminal)

        top = self.desktop.top_window
        terminal.set_active_view_bounds(top.bounds if top is not None else self.desktop.bounds)
        terminal.flush()

    # ─────────────────────────────────────────────────────────────────────────
    # Views
    # ─────────────────────────────────────────────────────────────────────────

    def insert_window(self, window: Window) -> Optional[Window]:
        """
        Add a window to the desktop if it agrees.

        Returns:
            The window, or None if its valid() check refused
        """
        if not window.valid(CM_VALID):
            return None
        self.desktop.add(window)
        return window

    def exec_view(self, view: Group) -> int:
        """
        Run a view modally on the desktop.

        The view is added, its modal loop runs until it sets an end state,
        and it is removed again with the screen under it repaired.

        Args:
            view: Dialog or other group to run

        Returns:
            The command that ended the modal loop
        """
        self.desktop.add(view)
        try:
            result = view.execute(self)
        finally:
            area = view.shadow_bounds() if view.get_state(SF_SHADOW) else view.bounds
            self.desktop.remove(view)
            self.desktop.draw_under_rect(self.terminal, area, 0)
            self.terminal.flush()
        logger.debug(f"Modal view returned command {result}")
        return result

    def quit(self) -> None:
        """Stop the event loop."""
        self.running = False

    def shutdown(self) -> None:
        """Restore the display."""
        self.terminal.shutdown()
        logger.info("Application shut down")

    # ─────────────────────────────────────────────────────────────────────────
    # Command set
    # ─────────────────────────────────────────────────────────────────────────

    def command_enabled(self, command: int) -> bool:
        return command_set.command_enabled(command)

    def enable_command(self, command: int) -> None:
        command_set.enable_command(command)

    def disable_command(self, command: int) -> None:
        command_set.disable_command(command)
