"""
Pygame backend.

Shows the character grid in a pygame window: every cell is a filled
background rectangle with its glyph rendered in a monospace font. The
window surface persists between frames, so only the runs sent by the
terminal's diff are repainted.
"""

import logging
import pygame
from typing import Dict, Optional, Sequence, Tuple

from ..config import Config
from ..core.draw import Cell
from ..core.event import Event
from ..core.geometry import Point
from ..input.manager import InputManager
from ..ui.colors import get_theme
from ..ui.fonts import FontManager, cell_size
from .ports import Backend, BackendCapabilities, BackendError

logger = logging.getLogger(__name__)


class PygameBackend(Backend):
    """
    Backend painting into a pygame window.

    The grid size comes from the configuration; the window size is the
    grid size times the font's cell size.
    """

    def __init__(self, config: Config):
        """
        Initialize the backend.

        Args:
            config: Application configuration
        """
        self.config = config
        self.columns, self.rows = config.screen_size
        self.window: Optional[pygame.Surface] = None
        self.font: Optional[pygame.font.Font] = None
        self.cell_size: Tuple[int, int] = (8, 16)
        self.input_manager: Optional[InputManager] = None
        self.theme = get_theme(config.theme)
        self._glyphs: Dict[Tuple[str, int], pygame.Surface] = {}
        self._cursor: Optional[Point] = None
        self._caret_at: Optional[Point] = None
        self._cells = [[None] * self.columns for _ in range(self.rows)]
        self._dirty = []

    def init(self) -> None:
        try:
            pygame.init()
            self.font = FontManager().get_font(self.config.font_size, self.config.font_file)
            self.cell_size = cell_size(self.font)
            flags = pygame.FULLSCREEN if self.config.fullscreen else 0
            self.window = pygame.display.set_mode(self._pixel_size(), flags)
            pygame.display.set_caption("textvision")
        except pygame.error as e:
            raise BackendError(f"Cannot open pygame window: {e}") from e

        self.input_manager = InputManager(self.config, self.cell_size)
        logger.info(f"Using SDL video driver: {pygame.display.get_driver()}")
        logger.info(f"Window {self.columns}x{self.rows} cells, cell {self.cell_size[0]}x{self.cell_size[1]} px")

    def cleanup(self) -> None:
        self._glyphs.clear()
        pygame.quit()
        self.window = None

    def size(self) -> Tuple[int, int]:
        return (self.columns, self.rows)

    def _pixel_size(self) -> Tuple[int, int]:
        return (self.columns * self.cell_size[0], self.rows * self.cell_size[1])

    # ─────────────────────────────────────────────────────────────────────────
    # Input
    # ─────────────────────────────────────────────────────────────────────────

    def poll_event(self, timeout: float) -> Optional[Event]:
        """Wait for the next pygame event that maps to an Event."""
        deadline = pygame.time.get_ticks() + int(timeout * 1000)
        while True:
            remaining = deadline - pygame.time.get_ticks()
            if remaining <= 0:
                raw = pygame.event.poll()
                if raw.type == pygame.NOEVENT:
                    return None
            else:
                raw = pygame.event.wait(remaining)
                if raw.type == pygame.NOEVENT:
                    return None

            event = self.input_manager.process_event(raw)
            if event is not None:
                return event

    # ─────────────────────────────────────────────────────────────────────────
    # Output
    # ─────────────────────────────────────────────────────────────────────────

    def write_cells(self, x: int, y: int, cells: Sequence[Cell]) -> None:
        for offset, cell in enumerate(cells):
            self._paint_cell(x + offset, y, cell)

    def _paint_cell(self, x: int, y: int, cell: Cell) -> None:
        cell_w, cell_h = self.cell_size
        rect = pygame.Rect(x * cell_w, y * cell_h, cell_w, cell_h)
        self.window.fill(self.theme[cell.attr.bg], rect)
        if cell.ch != " ":
            self.window.blit(self._glyph(cell.ch, int(cell.attr.fg)), rect.topleft)
        self._cells[y][x] = cell
        self._dirty.append(rect)

    def _glyph(self, ch: str, fg: int) -> pygame.Surface:
        """Get a rendered glyph from the cache."""
        key = (ch, fg)
        glyph = self._glyphs.get(key)
        if glyph is None:
            glyph = self.font.render(ch, True, self.theme[fg])
            self._glyphs[key] = glyph
        return glyph

    def set_cursor(self, pos: Optional[Point]) -> None:
        self._cursor = pos

    def flush(self) -> None:
        # Repaint the cell under the previous caret before drawing the new one
        old = self._caret_at
        if old is not None and self._cells[old.y][old.x] is not None:
            self._paint_cell(old.x, old.y, self._cells[old.y][old.x])
        self._caret_at = self._cursor
        if self._cursor is not None:
            cell_w, cell_h = self.cell_size
            caret = pygame.Rect(self._cursor.x * cell_w, (self._cursor.y + 1) * cell_h - 2, cell_w, 2)
            self.window.fill(self.theme[15], caret)
            self._dirty.append(caret)
        pygame.display.update(self._dirty)
        self._dirty = []

    def bell(self) -> None:
        logger.debug("Bell")

    def capabilities(self) -> BackendCapabilities:
        return BackendCapabilities(mouse=True, true_color=True, bell=False, name="pygame")
