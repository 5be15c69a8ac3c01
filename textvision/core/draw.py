"""
Cells and line buffers.

Views compose a line of cells in a DrawBuffer and hand it to the terminal
in one call, the way text-mode widgets build a row before writing it.
"""

from dataclasses import dataclass
from typing import List

from .palette import Attr


@dataclass(frozen=True)
class Cell:
    """One character cell."""
    ch: str = " "
    attr: Attr = Attr.from_byte(0x07)


EMPTY_CELL = Cell()


def cstr_len(text: str) -> int:
    """Get the displayed length of a string with ~shortcut~ markers."""
    return len(text) - text.count("~")


def shortcut_char(text: str) -> str:
    """Get the lowercase character between the first pair of ~ markers."""
    start = text.find("~")
    if start < 0 or start + 1 >= len(text):
        return ""
    return text[start + 1].lower()


class DrawBuffer:
    """A line of cells being composed before it is written out."""

    def __init__(self, width: int):
        self.data: List[Cell] = [EMPTY_CELL] * max(0, width)

    def __len__(self) -> int:
        return len(self.data)

    def __iter__(self):
        return iter(self.data)

    def put_char(self, pos: int, ch: str, attr: Attr) -> None:
        """Set a single cell; positions outside the line are ignored."""
        if 0 <= pos < len(self.data):
            self.data[pos] = Cell(ch, attr)

    def put_attribute(self, pos: int, attr: Attr) -> None:
        """Change the attribute of a cell, keeping its character."""
        if 0 <= pos < len(self.data):
            self.data[pos] = Cell(self.data[pos].ch, attr)

    def move_char(self, pos: int, ch: str, attr: Attr, count: int) -> None:
        """Fill count cells starting at pos."""
        cell = Cell(ch, attr)
        for i in range(max(0, pos), min(pos + count, len(self.data))):
            self.data[i] = cell

    def move_str(self, pos: int, text: str, attr: Attr) -> int:
        """
        Write a string starting at pos.

        Returns:
            Number of characters written
        """
        written = 0
        for offset, ch in enumerate(text):
            index = pos + offset
            if index >= len(self.data):
                break
            if index >= 0:
                self.data[index] = Cell(ch, attr)
                written += 1
        return written

    def move_buf(self, pos: int, cells: List[Cell]) -> None:
        """Copy prepared cells starting at pos."""
        for offset, cell in enumerate(cells):
            index = pos + offset
            if 0 <= index < len(self.data):
                self.data[index] = cell

    def move_str_with_shortcut(
        self,
        pos: int,
        text: str,
        normal: Attr,
        shortcut: Attr
    ) -> int:
        """
        Write a string where each ~ toggles between normal and shortcut attrs.

        Returns:
            Number of cells written (markers excluded)
        """
        attr = normal
        index = pos
        for ch in text:
            if ch == "~":
                attr = shortcut if attr == normal else normal
                continue
            self.put_char(index, ch, attr)
            index += 1
        return index - pos
