"""Tests for the geometry helpers."""
import pytest

from citygrowth.citygen.dataclass import Point
from citygrowth.utils.math_utils import MathUtils


def test_crossing_segments_intersect_at_parameter():
    point, t = MathUtils.do_line_segments_intersect(Point(0, 0), Point(10, 0), Point(2, -1), Point(2, 3))

    assert point.x == pytest.approx(2)
    assert point.y == pytest.approx(0)
    assert t == pytest.approx(0.2)


def test_intersection_is_symmetric_up_to_parameter():
    p, p2, q, q2 = Point(0, 0), Point(10, 0), Point(2, -1), Point(2, 3)

    point_a, t_a = MathUtils.do_line_segments_intersect(p, p2, q, q2)
    point_b, t_b = MathUtils.do_line_segments_intersect(q, q2, p, p2)

    assert point_a.x == pytest.approx(point_b.x)
    assert point_a.y == pytest.approx(point_b.y)
    assert t_a == pytest.approx(0.2)
    assert t_b == pytest.approx(0.25)


def test_parallel_and_collinear_segments_do_not_intersect():
    assert MathUtils.do_line_segments_intersect(Point(0, 0), Point(10, 0), Point(0, 1), Point(10, 1)) is None
    assert MathUtils.do_line_segments_intersect(Point(0, 0), Point(10, 0), Point(5, 0), Point(15, 0)) is None


def test_zero_length_segment_does_not_intersect():
    assert MathUtils.do_line_segments_intersect(Point(5, 0), Point(5, 0), Point(5, -1), Point(5, 1)) is None


def test_strict_mode_ignores_endpoint_contact():
    p, p2, q, q2 = Point(0, 0), Point(10, 0), Point(0, -5), Point(0, 5)

    assert MathUtils.do_line_segments_intersect(p, p2, q, q2) is None
    point, t = MathUtils.do_line_segments_intersect(p, p2, q, q2, strict=False)
    assert t == pytest.approx(0)
    assert point.x == pytest.approx(0)


def test_segments_apart_do_not_intersect():
    assert MathUtils.do_line_segments_intersect(Point(0, 0), Point(1, 0), Point(5, -1), Point(5, 1)) is None


def test_distance_to_line_inside_segment():
    measure = MathUtils.distance_to_line(Point(5, 3), Point(0, 0), Point(10, 0))

    assert measure.distance2 == pytest.approx(9)
    assert measure.point_on_line.x == pytest.approx(5)
    assert measure.point_on_line.y == pytest.approx(0)
    assert measure.line_proj2 == pytest.approx(25)
    assert measure.length2 == pytest.approx(100)


def test_distance_to_line_behind_start_has_negative_projection():
    measure = MathUtils.distance_to_line(Point(-2, 1), Point(0, 0), Point(10, 0))

    assert measure.line_proj2 == pytest.approx(-4)
    assert measure.distance2 == pytest.approx(1)


@pytest.mark.parametrize('a, b, expected', [
    (10, 170, 20),
    (0, 90, 90),
    (-90, 90, 0),
    (350, 10, 20),
])
def test_min_degree_difference(a, b, expected):
    assert MathUtils.min_degree_difference(a, b) == pytest.approx(expected)


def test_heading_is_clockwise_from_positive_y():
    assert MathUtils.heading(Point(0, 1)) == pytest.approx(0)
    assert MathUtils.heading(Point(1, 0)) == pytest.approx(90)
    assert MathUtils.heading(Point(-1, 0)) == pytest.approx(-90)


def test_point_from_heading_walks_along_heading():
    end = MathUtils.point_from_heading(Point(1, 1), 90, 10)

    assert end.x == pytest.approx(11)
    assert end.y == pytest.approx(1)


def test_equal_v_tolerates_tiny_differences():
    assert MathUtils.equal_v(Point(1, 1), Point(1 + 1e-6, 1))
    assert not MathUtils.equal_v(Point(1, 1), Point(1.01, 1))
