"""
Dialog - a gray window usually run modally.
"""

from typing import Optional

from ...core.command import CM_CANCEL, WINDOW_COMMANDS
from ...core.event import Event, KB_ENTER, KB_ESC, KB_ESC_ESC
from ...core.geometry import Rect
from ...core.palette import CP_GRAY_DIALOG
from ...core.state import OF_TILEABLE, SF_MODAL, WF_CLOSE, WF_MOVE
from .base import View
from .window import Window


class Dialog(Window):
    """
    A window with the gray dialog palette.

    Escape cancels, Enter presses the default button, and any command a
    control fires ends the dialog when it runs modally.
    """

    def __init__(self, bounds: Rect, title: str = ""):
        super().__init__(bounds, title, CP_GRAY_DIALOG, WF_MOVE | WF_CLOSE)
        self.options &= ~OF_TILEABLE

    def is_end_command(self, command: int) -> bool:
        # Window management commands are handled by the window itself
        return command not in WINDOW_COMMANDS

    def default_button(self) -> Optional[View]:
        """Get the first child marked as the default button."""
        for child in self.children:
            if child.is_default_button():
                return child
        return None

    def handle_event(self, event: Event) -> None:
        super().handle_event(event)

        if not event.is_keyboard:
            return
        if event.key_code in (KB_ESC, KB_ESC_ESC):
            event.to_command(CM_CANCEL)
            if self.get_state(SF_MODAL):
                self.end_if_modal(event)
            else:
                self.close()
                event.clear()
        elif event.key_code == KB_ENTER:
            button = self.default_button()
            if button is not None and button.can_focus():
                button.press(event)
                self.end_if_modal(event)
            else:
                event.clear()
