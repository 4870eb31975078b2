"""Tests for collision shapes and the separating-axis kernel."""
import math

import pytest

from citygrowth.citygen.dataclass import Point
from citygrowth.utils.collision import (CollisionShape, ShapeKind,
                                        line_to_corners)


def square(x, y, size):
    return CollisionShape.rect([Point(x, y), Point(x + size, y), Point(x + size, y + size), Point(x, y + size)])


def test_disjoint_rectangles_do_not_collide():
    assert square(0, 0, 10).collide(square(20, 0, 10)) is False


def test_rectangles_apart_on_rotated_axis_do_not_collide():
    diamond = CollisionShape.rect([Point(5, 0), Point(10, 5), Point(5, 10), Point(0, 5)])
    corner_box = square(8.5, 8.5, 3)

    assert diamond.bounds().intersects(corner_box.bounds())
    assert diamond.collide(corner_box) is False


def test_overlapping_rectangles_return_minimum_translation():
    result = square(0, 0, 10).collide(CollisionShape.rect(
        [Point(8, 2), Point(18, 2), Point(18, 12), Point(8, 12)]))

    assert isinstance(result, Point)
    assert result.x == pytest.approx(-2)
    assert result.y == pytest.approx(0)


def test_rectangle_collision_is_symmetric():
    a = square(0, 0, 10)
    b = CollisionShape.rect([Point(8, 2), Point(18, 2), Point(18, 12), Point(8, 12)])

    ab = a.collide(b)
    ba = b.collide(a)

    assert isinstance(ab, Point) and isinstance(ba, Point)
    assert ab.x == pytest.approx(-ba.x)
    assert ab.y == pytest.approx(-ba.y)


@pytest.mark.parametrize('a, b, depth', [
    (square(0, 0, 10), square(0, 0, 10), 10),
    (square(0, 0, 10), square(2, 2, 6), 8),
    (square(0, 0, 10), CollisionShape.rect([Point(0, 5), Point(5, 0), Point(10, 5), Point(5, 10)]), 10),
], ids=['coincident', 'nested', 'nested-diamond'])
def test_centred_overlaps_push_in_opposite_directions(a, b, depth):
    ab = a.collide(b)
    ba = b.collide(a)

    assert isinstance(ab, Point) and isinstance(ba, Point)
    assert ab.x == pytest.approx(-ba.x)
    assert ab.y == pytest.approx(-ba.y)
    assert math.hypot(ab.x, ab.y) == pytest.approx(depth)


def test_translation_separates_shapes():
    a_corners = [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]
    b = CollisionShape.rect([Point(3, 7), Point(13, 7), Point(13, 17), Point(3, 17)])
    mtv = CollisionShape.rect(a_corners).collide(b)

    assert mtv.x == pytest.approx(0)
    assert mtv.y == pytest.approx(-3)

    moved = CollisionShape.rect([Point(c.x + mtv.x * 1.01, c.y + mtv.y * 1.01) for c in a_corners])
    assert moved.collide(b) is False


def test_line_converts_to_rectangle():
    corners = line_to_corners(Point(0, 0), Point(10, 0), 2)

    assert [(c.x, c.y) for c in corners] == [
        pytest.approx((0, 1)), pytest.approx((0, -1)), pytest.approx((10, -1)), pytest.approx((10, 1))]


def test_line_against_rectangle_collides():
    road = CollisionShape.line(Point(0, 5), Point(20, 5), 2)

    assert isinstance(road.collide(square(8, 0, 10)), Point)
    assert road.collide(square(8, 10, 10)) is False


def test_circle_inside_rectangle_collides():
    assert CollisionShape.circle(Point(5, 5), 1).collide(square(0, 0, 10)) is True
    assert square(0, 0, 10).collide(CollisionShape.circle(Point(5, 5), 1)) is True


def test_circle_near_corner_collides():
    assert square(0, 0, 10).collide(CollisionShape.circle(Point(11, 11), 2)) is True


def test_circle_apart_does_not_collide():
    assert square(0, 0, 10).collide(CollisionShape.circle(Point(30, 30), 2)) is False


def test_circles_collide_by_distance():
    assert CollisionShape.circle(Point(0, 0), 2).collide(CollisionShape.circle(Point(3, 0), 2)) is True
    assert CollisionShape.circle(Point(0, 0), 1).collide(CollisionShape.circle(Point(3, 0), 1.5)) is False


def test_line_bounds_include_half_width():
    bounds = CollisionShape.line(Point(0, 0), Point(10, 0), 4).bounds()

    assert (bounds.x, bounds.y, bounds.width, bounds.height) == (-2, -2, 14, 4)


def test_bounds_are_cached_until_update():
    shape = CollisionShape.line(Point(0, 0), Point(10, 0), 2)
    first = shape.bounds()

    assert shape.bounds() is first

    shape.update(end=Point(20, 0))

    assert shape.revision == 1
    assert shape.bounds() is not first
    assert shape.bounds().width == 22


def test_kind_follows_payload():
    assert CollisionShape.circle(Point(0, 0), 1).kind == ShapeKind.CIRCLE
    assert CollisionShape.line(Point(0, 0), Point(1, 0), 1).kind == ShapeKind.LINE
    assert square(0, 0, 1).kind == ShapeKind.RECT


def test_circle_has_no_corners():
    with pytest.raises(TypeError):
        CollisionShape.circle(Point(0, 0), 1).corners()
