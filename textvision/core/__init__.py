"""
Core engine module.

Contains the geometry, palette, event and command primitives, the render
buffer, and the main application loop.
"""

from .geometry import Point, Rect
from .palette import Attr, Color, Palette, resolve
from .event import Event, EventType
from .command_set import CommandSet
from .draw import Cell, DrawBuffer
from .terminal import Terminal
from .app import Application

__all__ = [
    "Point", "Rect",
    "Attr", "Color", "Palette", "resolve",
    "Event", "EventType",
    "CommandSet",
    "Cell", "DrawBuffer",
    "Terminal",
    "Application",
]
