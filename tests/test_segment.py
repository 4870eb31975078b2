"""Tests for the road segment entity."""
import pytest

from citygrowth.citygen.dataclass import HIGHWAY, MetaInfo, Point
from citygrowth.citygen.road.segment import Segment

from tests.helpers import make_segment


def test_direction_is_clockwise_from_positive_y():
    assert make_segment((0, 0), (400, 0)).dir() == pytest.approx(90)
    assert make_segment((0, 0), (0, 400)).dir() == pytest.approx(0)
    assert make_segment((0, 0), (0, -10)).dir() == pytest.approx(180)


def test_using_direction_places_end():
    segment = Segment.using_direction(Point(10, 10), 90, 300)

    assert segment.end.x == pytest.approx(310)
    assert segment.end.y == pytest.approx(10)
    assert segment.length() == pytest.approx(300)


def test_moving_an_end_refreshes_cached_geometry():
    segment = make_segment((0, 0), (400, 0))
    assert segment.length() == pytest.approx(400)
    assert segment.dir() == pytest.approx(90)
    bounds = segment.bounds()

    segment.set_end(Point(0, 300))

    assert segment.revision == 1
    assert segment.length() == pytest.approx(300)
    assert segment.dir() == pytest.approx(0)
    assert segment.bounds() != bounds
    assert segment.bounds().height == pytest.approx(300 + segment.width)


def test_moving_the_start_refreshes_cached_geometry():
    segment = make_segment((0, 0), (400, 0))
    segment.length()

    segment.set_start(Point(100, 0))

    assert segment.length() == pytest.approx(300)
    assert segment.collider.props.start == Point(100, 0)


def test_free_road_travels_at_full_speed():
    segment = make_segment((0, 0), (1200, 0), highway=True)

    assert segment.road_class is HIGHWAY
    assert segment.current_speed() == pytest.approx(1200)
    assert segment.cost() == pytest.approx(1)


def test_occupancy_slows_traffic():
    segment = make_segment((0, 0), (1200, 0), highway=True)
    segment.occupancy = 7

    assert segment.current_speed() == pytest.approx(600)
    assert segment.cost() == pytest.approx(2)


def test_speed_never_drops_below_minimum_proportion():
    segment = make_segment((0, 0), (1200, 0), highway=True)
    segment.occupancy = 1000

    assert segment.current_speed() == pytest.approx(120)


def test_copy_is_unregistered_and_unlinked():
    segment = Segment(Point(0, 0), Point(10, 0), MetaInfo(highway=True, t=4))
    segment.id = 3
    segment.links_f.append(1)

    clone = segment.copy()

    assert clone.id is None
    assert clone.links_b == [] and clone.links_f == []
    assert clone.q == segment.q
    assert clone.q is not segment.q
    assert clone.road_class is segment.road_class


def test_road_class_defaults_from_metadata():
    assert Segment(Point(0, 0), Point(1, 0), MetaInfo(highway=True)).width == 16
    assert Segment(Point(0, 0), Point(1, 0)).width == 6
