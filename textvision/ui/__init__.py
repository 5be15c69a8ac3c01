"""
UI framework module.

Contains the view tree, focus handling, message boxes, and the fonts and
color themes of the pygame window.
"""

from .colors import Theme, get_theme
from .focus import FocusChain
from .widgets.base import View
from .widgets.group import Group
from .widgets.window import Window
from .widgets.dialog import Dialog
from .widgets.desktop import Desktop

__all__ = [
    "Theme",
    "get_theme",
    "FocusChain",
    "View",
    "Group",
    "Window",
    "Dialog",
    "Desktop",
]
