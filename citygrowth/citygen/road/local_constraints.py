"""Local constraints: conflict resolution of a candidate against accepted roads.

A candidate is checked in two steps. ``evaluate`` inspects the accepted
segments around it and returns a ConstraintDecision without touching any
segment. ``apply`` then performs the decision on the graph: truncation,
splitting and relinking.

Rules, strongest first:

* crossing (4): the candidate properly crosses an accepted segment. The
  crossing closest to the candidate's start wins.
* endpoint snap (3): the candidate's end lies within snap distance of an
  accepted segment's end point.
* interior snap (2): the candidate's end lies within snap distance of an
  accepted segment's interior.

A later match of equal or higher rank replaces an earlier one.
"""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional

from citygrowth.citygen.dataclass import Point
from citygrowth.citygen.road.road_manager import RoadManager
from citygrowth.citygen.road.segment import Segment
from citygrowth.utils.logger import Logger
from citygrowth.utils.math_utils import MathUtils


class ConstraintKind(Enum):
    """Outcome of evaluating local constraints for one candidate."""
    ACCEPT = auto()
    CROSSING = auto()
    SNAP_ENDPOINT = auto()
    SNAP_INTERIOR = auto()
    REJECT = auto()


RULE_PRIORITY = {
    ConstraintKind.ACCEPT: 0,
    ConstraintKind.SNAP_INTERIOR: 2,
    ConstraintKind.SNAP_ENDPOINT: 3,
    ConstraintKind.CROSSING: 4,
}


@dataclass(frozen=True)
class ConstraintDecision:
    """A resolved local-constraint decision.

    point: where the candidate's end moves to
    other: handle of the accepted segment that is split or snapped to
    t: crossing parameter along the candidate
    reason: why a candidate was rejected
    """
    kind: ConstraintKind
    point: Optional[Point] = None
    other: Optional[int] = None
    t: Optional[float] = None
    reason: str = ''

    @property
    def accepted(self) -> bool:
        """Whether the candidate enters the network."""
        return self.kind != ConstraintKind.REJECT

    @property
    def severs(self) -> bool:
        """Whether the candidate gets truncated."""
        return self.kind in (ConstraintKind.CROSSING, ConstraintKind.SNAP_ENDPOINT, ConstraintKind.SNAP_INTERIOR)

    @property
    def added_segments(self) -> int:
        """Number of segments the network gains when the decision is applied."""
        if self.kind in (ConstraintKind.CROSSING, ConstraintKind.SNAP_INTERIOR):
            return 2
        return 1 if self.accepted else 0


ACCEPT = ConstraintDecision(ConstraintKind.ACCEPT)


@dataclass
class GenerationDiagnostics:
    """Junction points recorded during growth, for visualisation."""
    snap_points: List[Point] = field(default_factory=list)
    radius_snap_points: List[Point] = field(default_factory=list)
    crossing_points: List[Point] = field(default_factory=list)


class LocalConstraints:
    """Evaluates and applies local constraints against a RoadManager."""

    def __init__(self, config, road_manager: RoadManager, diagnostics: GenerationDiagnostics = None):
        """Initialize the constraint checker.

        Args:
            config: Loaded Config providing snap distance and minimum deviation.
            road_manager: Arena holding the accepted segments.
            diagnostics: Collector for junction points.
        """
        self.road_manager = road_manager
        self.diagnostics = diagnostics if diagnostics is not None else GenerationDiagnostics()
        self.snap_distance = config['citygen.road.road_snap_distance']
        self.minimum_deviation = config['citygen.road.minimum_intersection_deviation']
        self.logger = Logger.get_logger('LocalConstraints')

    def evaluate(self, segment: Segment) -> ConstraintDecision:
        """Decide what happens to a candidate, without mutating anything.

        Args:
            segment: The candidate segment.

        Returns:
            The decision to apply, possibly a rejection.
        """
        matches = [
            other for other in self.road_manager.get_nearby_segments(segment.bounds().padded(self.snap_distance))
            if other is not segment
        ]
        decision = self._select_rule(segment, matches)
        if decision.kind == ConstraintKind.ACCEPT:
            return decision
        return self._resolve(segment, decision, matches)

    def _select_rule(self, segment: Segment, matches: List[Segment]) -> ConstraintDecision:
        best = ACCEPT
        snap2 = self.snap_distance * self.snap_distance
        for other in matches:
            crossing = MathUtils.do_line_segments_intersect(segment.start, segment.end, other.start, other.end)
            if crossing is not None and (best.t is None or crossing[1] < best.t):
                best = ConstraintDecision(ConstraintKind.CROSSING, crossing[0], other.id, crossing[1])

            if RULE_PRIORITY[best.kind] <= 3 and MathUtils.length2(segment.end, other.end) <= snap2:
                best = ConstraintDecision(ConstraintKind.SNAP_ENDPOINT, other.end, other.id)

            if RULE_PRIORITY[best.kind] <= 2:
                measure = MathUtils.distance_to_line(segment.end, other.start, other.end)
                if measure.distance2 < snap2 and 0 < measure.line_proj2 < measure.length2:
                    best = ConstraintDecision(ConstraintKind.SNAP_INTERIOR, measure.point_on_line, other.id)
        return best

    def _resolve(self, segment: Segment, decision: ConstraintDecision, matches: List[Segment]) -> ConstraintDecision:
        other = self.road_manager.get(decision.other)
        if MathUtils.equal_v(segment.start, decision.point):
            return self._reject('degenerate truncation')

        if decision.kind == ConstraintKind.CROSSING:
            if MathUtils.min_degree_difference(other.dir(), segment.dir()) < self.minimum_deviation:
                return self._reject('crossing angle too small')
            return decision

        if decision.kind == ConstraintKind.SNAP_ENDPOINT:
            if self.road_manager.has_link_between(segment.start, decision.point, other):
                return self._reject('duplicate link')
        else:
            truncated_dir = MathUtils.heading(MathUtils.subtract_points(decision.point, segment.start))
            if MathUtils.min_degree_difference(other.dir(), truncated_dir) < self.minimum_deviation:
                return self._reject('snap angle too small')

        for match in matches:
            if MathUtils.do_line_segments_intersect(segment.start, decision.point, match.start, match.end):
                return self._reject('snapped segment crosses a road')
        return decision

    def _reject(self, reason: str) -> ConstraintDecision:
        self.logger.debug(f'Candidate rejected: {reason}')
        return ConstraintDecision(ConstraintKind.REJECT, reason=reason)

    def apply(self, segment: Segment, decision: ConstraintDecision) -> None:
        """Perform an accepted decision on the candidate and the graph.

        The candidate is registered with the road manager so that split and
        snap links can refer to it; it is not added to the accepted list.

        Args:
            segment: The candidate segment.
            decision: A decision returned by evaluate for this candidate.

        Raises:
            ValueError: If the decision is a rejection.
        """
        if not decision.accepted:
            raise ValueError('Cannot apply a rejected constraint decision')
        self.road_manager.register(segment)
        if decision.kind == ConstraintKind.ACCEPT:
            return

        other = self.road_manager.get(decision.other)
        segment.set_end(decision.point)
        segment.q.severed = True

        if decision.kind == ConstraintKind.CROSSING:
            self.road_manager.split(other, decision.point, segment)
            self.diagnostics.crossing_points.append(decision.point)
        elif decision.kind == ConstraintKind.SNAP_ENDPOINT:
            self.road_manager.link_to_end(segment, other)
            self.diagnostics.snap_points.append(decision.point)
        else:
            self.road_manager.split(other, decision.point, segment)
            self.diagnostics.radius_snap_points.append(decision.point)
