"""
textvision - a text-mode windowing engine.

Views, groups, windows and dialogs drawn into a double-buffered character
grid, shown in a pygame window or an ANSI terminal.
"""

from .config import Config, DEFAULT_CONFIG
from .core.app import Application

__version__ = "0.1.0"

__all__ = ["Config", "DEFAULT_CONFIG", "Application", "__version__"]
