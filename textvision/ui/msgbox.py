"""
Message and input boxes.

Ready-made modal dialogs: a message with a row of buttons, and a prompt
with a single input line.
"""

from typing import Optional, Tuple, TYPE_CHECKING

from ..core.command import CM_CANCEL, CM_NO, CM_OK, CM_YES
from ..core.geometry import Rect
from ..core.state import OF_CENTERED
from .widgets.button import Button
from .widgets.dialog import Dialog
from .widgets.input_line import InputLine
from .widgets.static_text import Label, StaticText

if TYPE_CHECKING:
    from ..core.app import Application

# Message box kinds (low bits select the title)
MF_WARNING = 0x0000
MF_ERROR = 0x0001
MF_INFORMATION = 0x0002
MF_CONFIRMATION = 0x0003

# Buttons
MF_YES_BUTTON = 0x0100
MF_NO_BUTTON = 0x0200
MF_OK_BUTTON = 0x0400
MF_CANCEL_BUTTON = 0x0800

MF_YES_NO_CANCEL = MF_YES_BUTTON | MF_NO_BUTTON | MF_CANCEL_BUTTON
MF_OK_CANCEL = MF_OK_BUTTON | MF_CANCEL_BUTTON

TITLES = {
    MF_WARNING: "Warning",
    MF_ERROR: "Error",
    MF_INFORMATION: "Information",
    MF_CONFIRMATION: "Confirm",
}

BUTTONS = (
    (MF_YES_BUTTON, "~Y~es", CM_YES),
    (MF_NO_BUTTON, "~N~o", CM_NO),
    (MF_OK_BUTTON, "O~K~", CM_OK),
    (MF_CANCEL_BUTTON, "Cancel", CM_CANCEL),
)

BUTTON_WIDTH = 10
BUTTON_GAP = 2


def build_message_box(text: str, flags: int, bounds: Optional[Rect] = None) -> Dialog:
    """
    Build a message box dialog without running it.

    Args:
        text: Message; wraps inside the dialog
        flags: One MF_* kind plus MF_*_BUTTON bits
        bounds: Dialog bounds, or None for a centered 40x9 box

    Returns:
        The dialog; the first button is the default
    """
    centered = bounds is None
    if bounds is None:
        bounds = Rect.from_size(0, 0, 40, 9)
    width, height = bounds.size

    dialog = Dialog(bounds, TITLES.get(flags & 0x03, "Message"))
    if centered:
        dialog.options |= OF_CENTERED
    dialog.add(StaticText(Rect.from_coords(3, 2, width - 2, height - 3), text))

    specs = [(title, command) for flag, title, command in BUTTONS if flags & flag]
    total = len(specs) * (BUTTON_WIDTH + BUTTON_GAP) - BUTTON_GAP
    x = (width - total) // 2
    for index, (title, command) in enumerate(specs):
        dialog.add(Button(Rect.from_size(x, height - 4, BUTTON_WIDTH, 2), title, command, default=index == 0))
        x += BUTTON_WIDTH + BUTTON_GAP

    dialog.set_initial_focus()
    return dialog


def message_box(app: "Application", text: str, flags: int, bounds: Optional[Rect] = None) -> int:
    """
    Show a modal message box.

    Args:
        app: Running application
        text: Message
        flags: One MF_* kind plus MF_*_BUTTON bits
        bounds: Dialog bounds, or None for a centered box

    Returns:
        The command of the button pressed, or CM_CANCEL
    """
    return app.exec_view(build_message_box(text, flags, bounds))


def build_input_box(
    title: str,
    label: str,
    value: str = "",
    limit: int = 255,
    bounds: Optional[Rect] = None
) -> Tuple[Dialog, InputLine]:
    """
    Build an input box dialog without running it.

    Returns:
        The dialog and its input line
    """
    centered = bounds is None
    if bounds is None:
        bounds = Rect.from_size(0, 0, 60, 8)
    width, height = bounds.size

    dialog = Dialog(bounds, title)
    if centered:
        dialog.options |= OF_CENTERED

    input_x = 4 + len(label) if label else 3
    field = InputLine(Rect.from_coords(input_x, 2, width - 3, 3), limit, value)
    if label:
        dialog.add(Label(Rect.from_coords(2, 2, input_x, 3), label, field))
    dialog.add(field)

    middle = width // 2
    dialog.add(Button(Rect.from_coords(middle - 12, height - 4, middle - 2, height - 2), "O~K~", CM_OK, default=True))
    dialog.add(Button(Rect.from_coords(middle + 2, height - 4, middle + 12, height - 2), "Cancel", CM_CANCEL))

    dialog.set_initial_focus()
    return dialog, field


def input_box(
    app: "Application",
    title: str,
    label: str,
    value: str = "",
    limit: int = 255,
    bounds: Optional[Rect] = None
) -> Tuple[int, str]:
    """
    Prompt for a line of text.

    Args:
        app: Running application
        title: Dialog title
        label: Caption left of the field
        value: Initial text
        limit: Maximum length
        bounds: Dialog bounds, or None for a centered box

    Returns:
        (command, text); the text is the edited value even on CM_CANCEL
    """
    dialog, field = build_input_box(title, label, value, limit, bounds)
    result = app.exec_view(dialog)
    return result, field.value
