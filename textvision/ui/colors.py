"""
RGB themes for the pygame window.

The engine only knows the 16 text-mode colors; a theme decides which RGB
value each of them is painted with.
"""

from enum import Enum
from typing import Dict, Tuple

from ..core.palette import Color, VGA_RGB

# Type aliases
RGB = Tuple[int, int, int]


class Theme(Enum):
    """Available color themes."""
    VGA = "vga"           # Classic 16-color VGA text mode
    AMBER = "amber"       # Amber monochrome monitor
    GREEN = "green"       # Green phosphor monitor


def _monochrome(bright: RGB) -> Tuple[RGB, ...]:
    """Map the 16 colors to intensities of one phosphor color by luminance."""
    shades = []
    for r, g, b in VGA_RGB:
        level = (0.299 * r + 0.587 * g + 0.114 * b) / 255.0
        shades.append(tuple(int(channel * level) for channel in bright))
    return tuple(shades)


THEMES: Dict[Theme, Tuple[RGB, ...]] = {
    Theme.VGA: VGA_RGB,
    Theme.AMBER: _monochrome((255, 176, 0)),
    Theme.GREEN: _monochrome((51, 255, 102)),
}


def get_theme(name: str) -> Tuple[RGB, ...]:
    """
    Get the RGB table of a theme by name.

    Unknown names fall back to VGA.
    """
    try:
        return THEMES[Theme(name)]
    except ValueError:
        return THEMES[Theme.VGA]


def rgb(color: Color, theme: Tuple[RGB, ...] = VGA_RGB) -> RGB:
    """Get the RGB value of a color in a theme."""
    return theme[int(color)]
