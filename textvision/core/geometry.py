"""
Screen geometry.

Points and rectangles in character-cell coordinates. A Rect covers the
cells from its top-left corner ``a`` (inclusive) to its bottom-right
corner ``b`` (exclusive), so an 80x25 screen is ``Rect.from_coords(0, 0, 80, 25)``.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Point:
    """A cell position."""
    x: int = 0
    y: int = 0

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Rect:
    """
    Rectangle given by two corners.

    Rects are values: every operation returns a new Rect. An inverted or
    zero-area rect is empty and is a valid "nothing to draw" result.
    """
    a: Point
    b: Point

    @classmethod
    def from_coords(cls, x1: int, y1: int, x2: int, y2: int) -> "Rect":
        """Create a rect from corner coordinates."""
        return cls(Point(x1, y1), Point(x2, y2))

    @classmethod
    def from_size(cls, x: int, y: int, width: int, height: int) -> "Rect":
        """Create a rect from origin and size."""
        return cls(Point(x, y), Point(x + width, y + height))

    @property
    def width(self) -> int:
        """Get width in cells (0 for inverted rects)."""
        return max(0, self.b.x - self.a.x)

    @property
    def height(self) -> int:
        """Get height in cells (0 for inverted rects)."""
        return max(0, self.b.y - self.a.y)

    @property
    def size(self) -> Tuple[int, int]:
        """Get size as tuple."""
        return (self.width, self.height)

    def is_empty(self) -> bool:
        """Check if the rect covers no cells."""
        return self.b.x <= self.a.x or self.b.y <= self.a.y

    def contains(self, point: Point) -> bool:
        """Check if a cell lies inside the rect."""
        return (self.a.x <= point.x < self.b.x and
                self.a.y <= point.y < self.b.y)

    def move_by(self, dx: int, dy: int) -> "Rect":
        """Return the rect translated by (dx, dy)."""
        delta = Point(dx, dy)
        return Rect(self.a + delta, self.b + delta)

    def move_to(self, x: int, y: int) -> "Rect":
        """Return the rect with its origin at (x, y), same size."""
        return self.move_by(x - self.a.x, y - self.a.y)

    def grow(self, dx: int, dy: int) -> "Rect":
        """Return the rect expanded by (dx, dy) on every side (negative shrinks)."""
        return Rect(Point(self.a.x - dx, self.a.y - dy),
                    Point(self.b.x + dx, self.b.y + dy))

    def intersect(self, other: "Rect") -> "Rect":
        """
        Return the overlap of two rects.

        Disjoint rects give an empty rect whose corners never cross.
        """
        ax = max(self.a.x, other.a.x)
        ay = max(self.a.y, other.a.y)
        bx = max(ax, min(self.b.x, other.b.x))
        by = max(ay, min(self.b.y, other.b.y))
        return Rect(Point(ax, ay), Point(bx, by))

    def union(self, other: "Rect") -> "Rect":
        """Return the smallest rect covering both (empty operands are ignored)."""
        if self.is_empty():
            return other
        if other.is_empty():
            return self
        return Rect(Point(min(self.a.x, other.a.x), min(self.a.y, other.a.y)),
                    Point(max(self.b.x, other.b.x), max(self.b.y, other.b.y)))

    def intersects(self, other: "Rect") -> bool:
        """Check if two rects share at least one cell."""
        return not self.intersect(other).is_empty()
