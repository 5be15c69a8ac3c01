"""
ANSI text dumps of the screen buffer.

Dumps are plain text files with 24-bit SGR color escapes, viewable with
``cat`` in any true-color terminal. They are a debugging aid: callers
treat a failed write as a warning, never as an error.
"""

import logging
from pathlib import Path
from typing import Sequence, Union

from .draw import Cell
from .geometry import Rect

logger = logging.getLogger(__name__)

RESET = "\x1b[0m"

PathLike = Union[str, Path]


def _sgr(cell: Cell) -> str:
    fr, fg, fb = cell.attr.fg.rgb
    br, bg, bb = cell.attr.bg.rgb
    return f"\x1b[38;2;{fr};{fg};{fb};48;2;{br};{bg};{bb}m"


def render_ansi(rows: Sequence[Sequence[Cell]]) -> str:
    """
    Render rows of cells as ANSI text.

    Color escapes are emitted only where the attribute changes; each row
    ends with a reset and a newline.
    """
    out = []
    for row in rows:
        current = None
        for cell in row:
            if cell.attr != current:
                out.append(_sgr(cell))
                current = cell.attr
            out.append(cell.ch)
        out.append(RESET)
        out.append("\n")
    return "".join(out)


def crop(rows: Sequence[Sequence[Cell]], rect: Rect) -> list:
    """Get the cells of rows inside rect (clamped to the grid)."""
    height = len(rows)
    width = len(rows[0]) if height else 0
    area = rect.intersect(Rect.from_coords(0, 0, width, height))
    return [list(rows[y][area.a.x:area.b.x]) for y in range(area.a.y, area.b.y)]


def dump_screen(rows: Sequence[Sequence[Cell]], path: PathLike) -> None:
    """Write the whole grid to an ANSI file. Raises OSError on failure."""
    Path(path).write_text(render_ansi(rows), encoding="utf-8")
    logger.info(f"Screen dumped to {path}")


def dump_region(rows: Sequence[Sequence[Cell]], rect: Rect, path: PathLike) -> None:
    """Write the cells inside rect to an ANSI file. Raises OSError on failure."""
    Path(path).write_text(render_ansi(crop(rows, rect)), encoding="utf-8")
    logger.info(f"Region {rect.a.x},{rect.a.y} {rect.width}x{rect.height} dumped to {path}")
