"""
Colors, attributes and palette resolution.

A view never draws with a raw color. It asks for a logical color index and
that index is mapped through three fixed tiers:

1. the view palette (Button, Label, ...),
2. the container palette (the window or dialog the view lives in),
3. the application palette, whose entries are attribute bytes.

A tier entry of 0, or an index past the end of a tier, leaves the index
unchanged. An index the application tier cannot resolve gives
``FALLBACK_ATTR``.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Sequence, Tuple

RGB = Tuple[int, int, int]


class Color(IntEnum):
    """The 16 text-mode colors, in CGA order."""
    BLACK = 0
    BLUE = 1
    GREEN = 2
    CYAN = 3
    RED = 4
    MAGENTA = 5
    BROWN = 6
    LIGHT_GRAY = 7
    DARK_GRAY = 8
    LIGHT_BLUE = 9
    LIGHT_GREEN = 10
    LIGHT_CYAN = 11
    LIGHT_RED = 12
    LIGHT_MAGENTA = 13
    YELLOW = 14
    WHITE = 15

    @property
    def rgb(self) -> RGB:
        """Get the classic VGA RGB value."""
        return VGA_RGB[self.value]


VGA_RGB = (
    (0, 0, 0), (0, 0, 170), (0, 170, 0), (0, 170, 170),
    (170, 0, 0), (170, 0, 170), (170, 85, 0), (170, 170, 170),
    (85, 85, 85), (85, 85, 255), (85, 255, 85), (85, 255, 255),
    (255, 85, 85), (255, 85, 255), (255, 255, 85), (255, 255, 255),
)


@dataclass(frozen=True)
class Attr:
    """Foreground/background color pair, serializable to one byte (0xBF)."""
    fg: Color
    bg: Color

    @classmethod
    def from_byte(cls, value: int) -> "Attr":
        """Create from an attribute byte (background high nibble)."""
        return cls(Color(value & 0x0F), Color((value >> 4) & 0x0F))

    def to_byte(self) -> int:
        """Convert to an attribute byte."""
        return int(self.fg) | (int(self.bg) << 4)

    def swapped(self) -> "Attr":
        """Return the attribute with foreground and background exchanged."""
        return Attr(self.bg, self.fg)

    def __repr__(self) -> str:
        return f"Attr(0x{self.to_byte():02X})"


# Returned when the application tier cannot resolve an index
FALLBACK_ATTR = Attr(Color.BLACK, Color.BLACK)


class Palette:
    """
    One palette tier: a 1-based table of indices into the next tier.

    Index 0 and indices past the end look up as 0 ("unmapped").
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Sequence[int]):
        self._entries = tuple(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> int:
        return self.lookup(index)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Palette):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        return f"Palette({list(self._entries)})"

    def lookup(self, index: int) -> int:
        """Get the entry for a 1-based index, or 0 if unmapped."""
        if 1 <= index <= len(self._entries):
            return self._entries[index - 1]
        return 0


# ─────────────────────────────────────────────────────────────────────────────
# Application Palettes
# ─────────────────────────────────────────────────────────────────────────────

CP_APP_COLOR = Palette([
    # 1-7: desktop, menus
    0x71, 0x70, 0x78, 0x74, 0x20, 0x28, 0x24,
    # 8-15: blue window
    0x17, 0x1F, 0x1A, 0x31, 0x31, 0x1E, 0x71, 0x1F,
    # 16-23: cyan window
    0x37, 0x3F, 0x3A, 0x13, 0x13, 0x3E, 0x21, 0x3F,
    # 24-31: gray window
    0x70, 0x7F, 0x7A, 0x13, 0x13, 0x70, 0x7F, 0x7E,
    # 32-63: gray dialog
    0x70, 0x7F, 0x7A, 0x13, 0x13, 0x70, 0x70, 0x7F,
    0x7E, 0x20, 0x2B, 0x2F, 0x78, 0x2E, 0x70, 0x30,
    0x3F, 0x3E, 0x1F, 0x2F, 0x1A, 0x20, 0x72, 0x31,
    0x31, 0x30, 0x2F, 0x3E, 0x31, 0x13, 0x38, 0x00,
])

CP_APP_MONOCHROME = Palette([
    0x70, 0x07, 0x07, 0x0F, 0x70, 0x70, 0x70,
    0x07, 0x0F, 0x07, 0x70, 0x70, 0x07, 0x70, 0x0F,
    0x07, 0x0F, 0x07, 0x70, 0x70, 0x07, 0x70, 0x0F,
    0x70, 0x7F, 0x7F, 0x70, 0x07, 0x70, 0x07, 0x0F,
    0x70, 0x7F, 0x7F, 0x70, 0x07, 0x70, 0x70, 0x7F,
    0x7F, 0x07, 0x0F, 0x0F, 0x78, 0x0F, 0x78, 0x07,
    0x0F, 0x0F, 0x0F, 0x70, 0x0F, 0x07, 0x70, 0x70,
    0x70, 0x07, 0x70, 0x0F, 0x07, 0x07, 0x08, 0x00,
])

# ─────────────────────────────────────────────────────────────────────────────
# Container Palettes
# ─────────────────────────────────────────────────────────────────────────────

CP_BLUE_WINDOW = Palette(range(8, 16))
CP_CYAN_WINDOW = Palette(range(16, 24))
CP_GRAY_WINDOW = Palette(range(24, 32))
CP_GRAY_DIALOG = Palette(range(32, 64))

# ─────────────────────────────────────────────────────────────────────────────
# View Palettes
# ─────────────────────────────────────────────────────────────────────────────

# passive frame, passive title, active frame, active title, icons
CP_FRAME = Palette([1, 1, 2, 2, 3])
CP_BACKGROUND = Palette([1])
# normal, default, focused, disabled, reserved x2, shortcut, shadow
CP_BUTTON = Palette([10, 11, 12, 13, 14, 14, 14, 15])
# normal, selected, shortcut, shortcut selected
CP_LABEL = Palette([7, 8, 9, 9])
CP_STATIC_TEXT = Palette([6])
# passive, active, selected, arrows
CP_INPUT_LINE = Palette([19, 19, 20, 21])
CP_CLUSTER = Palette([16, 17, 18, 18, 31])
CP_SCROLLBAR = Palette([4, 5, 5])
# normal, disabled, shortcut, selected, selected disabled, selected shortcut
CP_MENU_VIEW = Palette([2, 3, 4, 5, 6, 7])
CP_STATUS_LINE = Palette([2, 3, 4, 5, 6, 7])

_app_palette = CP_APP_COLOR


def app_palette() -> Palette:
    """Get the application palette currently in use."""
    return _app_palette


def set_app_palette(palette: Palette) -> None:
    """Replace the application palette (e.g. switch to monochrome)."""
    global _app_palette
    _app_palette = palette


def reset_app_palette() -> None:
    """Restore the default color application palette."""
    set_app_palette(CP_APP_COLOR)


def resolve(
    index: int,
    view_palette: Optional[Palette],
    container_palette: Optional[Palette],
    application: Optional[Palette] = None
) -> Attr:
    """
    Resolve a logical color index to an attribute.

    Args:
        index: Logical color index of the view (1-based)
        view_palette: View tier, or None to skip it
        container_palette: Container tier, or None to skip it
        application: Application tier (defaults to the current app palette)

    Returns:
        The resolved attribute; FALLBACK_ATTR when the final index is not
        in the application palette
    """
    color = index
    for tier in (view_palette, container_palette):
        if tier is not None:
            mapped = tier.lookup(color)
            if mapped:
                color = mapped

    table = application if application is not None else _app_palette
    if 1 <= color <= len(table):
        return Attr.from_byte(table.lookup(color))
    return FALLBACK_ATTR
