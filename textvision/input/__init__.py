"""
Input handling module.

Turns raw input from the display backends into Events:
- InputManager: pygame keyboard and mouse events
- InputParser: ANSI terminal byte streams
"""

from .manager import InputManager
from .parser import InputParser

__all__ = [
    "InputManager",
    "InputParser",
]
