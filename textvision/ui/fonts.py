"""
Font management.

Provides the monospace fonts used to paint the character grid in the
pygame window. A font file can be supplied explicitly; otherwise the
first available system monospace font is used.
"""

import logging
import pygame
from pathlib import Path
from typing import Dict, Optional, Tuple

logger = logging.getLogger(__name__)

# Tried in order when no font file is given
SYSTEM_MONOSPACE = [
    "dejavusansmono",
    "liberationmono",
    "consolas",
    "menlo",
    "couriernew",
    "monospace",
]


class FontManager:
    """
    Manages fonts for the character grid.

    Fonts are cached per (file, size). Only one manager exists.
    """

    _instance: Optional["FontManager"] = None

    def __new__(cls):
        """Singleton pattern - only one font manager instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Initialize the font manager."""
        if self._initialized:
            return
        pygame.font.init()
        self._fonts: Dict[Tuple[Optional[str], int], pygame.font.Font] = {}
        self._initialized = True

    def get_font(self, size: int, font_file: Optional[str] = None) -> pygame.font.Font:
        """
        Get a monospace font at the specified size.

        Args:
            size: Font size in points
            font_file: Optional path to a TTF/OTF file

        Returns:
            Pygame font object
        """
        cache_key = (font_file, size)
        if cache_key not in self._fonts:
            self._fonts[cache_key] = self._load_font(size, font_file)
        return self._fonts[cache_key]

    def _load_font(self, size: int, font_file: Optional[str]) -> pygame.font.Font:
        """Load a font from file or system."""
        if font_file:
            path = Path(font_file)
            if path.exists():
                try:
                    font = pygame.font.Font(str(path), size)
                    logger.info(f"Loaded font: {path.name} size={size}")
                    return font
                except pygame.error as e:
                    logger.error(f"Failed to load {path}: {e}")
            else:
                logger.warning(f"Font file not found: {path}")

        available = set(pygame.font.get_fonts())
        for name in SYSTEM_MONOSPACE:
            if name in available:
                logger.info(f"Using system font {name} size={size}")
                return pygame.font.SysFont(name, size)

        # Ultimate fallback - pygame default
        logger.warning("No monospace system font found, using pygame default")
        return pygame.font.Font(None, size)


def cell_size(font: pygame.font.Font) -> Tuple[int, int]:
    """Get the pixel size of one character cell for a monospace font."""
    width, _ = font.size("M")
    return (max(1, width), max(1, font.get_linesize()))
