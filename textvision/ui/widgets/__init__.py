"""
Widget submodule.

Contains the view base class, groups, windows and controls.
"""

from .base import View
from .group import Group
from .frame import Frame
from .window import Window
from .dialog import Dialog
from .background import Background
from .desktop import Desktop
from .button import Button
from .static_text import StaticText, Label
from .input_line import InputLine
from .status_line import StatusItem, StatusLine

__all__ = [
    "View", "Group",
    "Frame", "Window", "Dialog", "Background", "Desktop",
    "Button", "StaticText", "Label", "InputLine",
    "StatusItem", "StatusLine",
]
