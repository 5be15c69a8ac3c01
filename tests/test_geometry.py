from textvision.core.geometry import Point, Rect


def test_point_arithmetic():
    assert Point(3, 4) + Point(1, 2) == Point(4, 6)
    assert Point(3, 4) - Point(1, 2) == Point(2, 2)


def test_rect_size_and_contains():
    rect = Rect.from_size(2, 3, 10, 5)
    assert rect.size == (10, 5)
    assert rect.contains(Point(2, 3))
    assert rect.contains(Point(11, 7))
    # b is exclusive
    assert not rect.contains(Point(12, 3))
    assert not rect.contains(Point(2, 8))


def test_inverted_rect_is_empty_with_zero_size():
    rect = Rect.from_coords(10, 10, 5, 5)
    assert rect.is_empty()
    assert rect.size == (0, 0)
    assert not rect.contains(Point(7, 7))


def test_intersect_overlapping():
    a = Rect.from_coords(0, 0, 10, 10)
    b = Rect.from_coords(5, 5, 15, 15)
    assert a.intersect(b) == Rect.from_coords(5, 5, 10, 10)
    assert a.intersects(b)


def test_intersect_disjoint_is_empty_and_not_inverted():
    a = Rect.from_coords(0, 0, 5, 5)
    b = Rect.from_coords(10, 10, 20, 20)
    result = a.intersect(b)
    assert result.is_empty()
    assert result.b.x >= result.a.x
    assert result.b.y >= result.a.y
    assert not a.intersects(b)


def test_union_ignores_empty_operands():
    a = Rect.from_coords(1, 1, 4, 4)
    empty = Rect.from_coords(50, 50, 50, 50)
    assert a.union(empty) == a
    assert empty.union(a) == a
    assert a.union(Rect.from_coords(3, 0, 8, 2)) == Rect.from_coords(1, 0, 8, 4)


def test_grow_and_move():
    rect = Rect.from_coords(5, 5, 10, 10)
    assert rect.grow(1, 2) == Rect.from_coords(4, 3, 11, 12)
    assert rect.grow(-1, -1) == Rect.from_coords(6, 6, 9, 9)
    assert rect.move_by(2, -1) == Rect.from_coords(7, 4, 12, 9)
    assert rect.move_to(0, 0) == Rect.from_coords(0, 0, 5, 5)
