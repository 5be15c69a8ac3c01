"""
Desktop background.
"""

from typing import TYPE_CHECKING

from ...core.draw import Cell
from ...core.geometry import Rect
from ...core.palette import CP_BACKGROUND
from .base import View

if TYPE_CHECKING:
    from ...core.terminal import Terminal

DEFAULT_PATTERN = "░"


class Background(View):
    """Fills its bounds with a pattern character."""

    def __init__(self, bounds: Rect, pattern: str = DEFAULT_PATTERN):
        super().__init__(bounds, CP_BACKGROUND)
        self.pattern = pattern

    def draw(self, terminal: "Terminal") -> None:
        terminal.fill_rect(self.bounds, Cell(self.pattern, self.map_color(1)))
