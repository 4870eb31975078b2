"""Tests for local-constraint evaluation and application."""
import pytest

from citygrowth.citygen.dataclass import Point
from citygrowth.citygen.road.local_constraints import (ConstraintKind,
                                                       LocalConstraints)
from tests.helpers import accept, make_segment


@pytest.fixture
def constraints(config, road_manager):
    return LocalConstraints(config, road_manager)


def test_candidate_without_neighbours_is_accepted_unchanged(constraints, road_manager):
    accept(road_manager, (0, 0), (0, 300))
    candidate = make_segment((1000, 1000), (1000, 1300))

    decision = constraints.evaluate(candidate)
    constraints.apply(candidate, decision)

    assert decision.kind == ConstraintKind.ACCEPT
    assert decision.added_segments == 1
    assert candidate.id is not None
    assert not candidate.q.severed
    assert candidate.end == Point(1000, 1300)


def test_evaluate_does_not_mutate(constraints, road_manager):
    other = accept(road_manager, (0, -100), (0, 100))
    candidate = make_segment((-100, 0), (100, 0))

    constraints.evaluate(candidate)

    assert candidate.id is None
    assert candidate.end == Point(100, 0)
    assert (other.start, other.end) == (Point(0, -100), Point(0, 100))
    assert len(road_manager.roads) == 1


def test_end_near_road_end_snaps_to_it(constraints, road_manager):
    target = accept(road_manager, (0, 0), (0, 300))
    candidate = make_segment((300, 320), (20, 310))

    decision = constraints.evaluate(candidate)
    constraints.apply(candidate, decision)
    road_manager.add_segment(candidate)

    assert decision.kind == ConstraintKind.SNAP_ENDPOINT
    assert decision.other == target.id
    assert candidate.end == Point(0, 300)
    assert candidate.q.severed
    assert candidate.links_f == [target.id]
    assert target.links_b == [candidate.id]
    assert road_manager.check_links() == []
    assert constraints.diagnostics.snap_points == [Point(0, 300)]


def test_snap_onto_existing_link_is_rejected(constraints, road_manager):
    accept(road_manager, (0, 0), (0, 300))
    first = make_segment((300, 320), (20, 310))
    constraints.apply(first, constraints.evaluate(first))
    road_manager.add_segment(first)

    duplicate = make_segment((300, 320), (15, 305))
    decision = constraints.evaluate(duplicate)

    assert decision.kind == ConstraintKind.REJECT
    assert decision.reason == 'duplicate link'
    assert not decision.accepted


def test_crossing_splits_the_crossed_road(constraints, road_manager):
    crossed = accept(road_manager, (0, -100), (0, 100))
    candidate = make_segment((-100, 0), (100, 0))

    decision = constraints.evaluate(candidate)
    constraints.apply(candidate, decision)
    road_manager.add_segment(candidate)

    assert decision.kind == ConstraintKind.CROSSING
    assert decision.t == pytest.approx(0.5)
    assert decision.added_segments == 2
    assert candidate.end.x == pytest.approx(0)
    assert candidate.end.y == pytest.approx(0)
    assert candidate.q.severed
    assert len(road_manager.roads) == 3
    assert crossed.start == candidate.end
    assert sum(s.length() for s in road_manager.roads if s is not candidate) == pytest.approx(200)
    assert road_manager.check_links() == []
    assert len(constraints.diagnostics.crossing_points) == 1


def test_closest_crossing_wins(constraints, road_manager):
    accept(road_manager, (50, -100), (50, 100))
    near = accept(road_manager, (20, -100), (20, 100))
    candidate = make_segment((0, 0), (100, 0))

    decision = constraints.evaluate(candidate)

    assert decision.kind == ConstraintKind.CROSSING
    assert decision.other == near.id
    assert decision.t == pytest.approx(0.2)


def test_shallow_crossing_is_rejected(constraints, road_manager):
    crossed = accept(road_manager, (0, 0), (100, 0))
    candidate = make_segment((10, -5), (90, 5))

    decision = constraints.evaluate(candidate)

    assert decision.kind == ConstraintKind.REJECT
    assert decision.reason == 'crossing angle too small'
    assert crossed.end == Point(100, 0)


def test_end_near_road_interior_snaps_onto_it(constraints, road_manager):
    target = accept(road_manager, (0, 0), (200, 0))
    candidate = make_segment((100, 300), (100, 20))

    decision = constraints.evaluate(candidate)
    constraints.apply(candidate, decision)
    road_manager.add_segment(candidate)

    assert decision.kind == ConstraintKind.SNAP_INTERIOR
    assert decision.other == target.id
    assert candidate.end.x == pytest.approx(100)
    assert candidate.end.y == pytest.approx(0)
    assert candidate.q.severed
    assert len(road_manager.roads) == 3
    assert road_manager.check_links() == []
    assert len(constraints.diagnostics.radius_snap_points) == 1


def test_shallow_interior_snap_is_rejected(constraints, road_manager):
    accept(road_manager, (0, 0), (200, 0))
    candidate = make_segment((0, 30), (150, 10))

    decision = constraints.evaluate(candidate)

    assert decision.kind == ConstraintKind.REJECT
    assert decision.reason == 'snap angle too small'


def test_snap_that_would_cross_a_road_is_rejected(constraints, road_manager):
    target = accept(road_manager, (200, 0), (130, 20))
    accept(road_manager, (115, 30), (150, 30))
    candidate = make_segment((100, 300), (100, 40))

    decision = constraints.evaluate(candidate)

    assert decision.kind == ConstraintKind.REJECT
    assert decision.reason == 'snapped segment crosses a road'
    assert target.links_b == []


def test_applying_a_rejection_raises(constraints, road_manager):
    accept(road_manager, (0, 0), (100, 0))
    candidate = make_segment((10, -5), (90, 5))

    with pytest.raises(ValueError):
        constraints.apply(candidate, constraints.evaluate(candidate))
