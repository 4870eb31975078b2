"""Road segment entity with revision-guarded derived geometry."""
from dataclasses import replace
from typing import List, Optional

from citygrowth.citygen.dataclass import (HIGHWAY, NORMAL_ROAD, Bounds,
                                          MetaInfo, Point, RoadClass)
from citygrowth.utils.collision import CollisionShape
from citygrowth.utils.math_utils import MathUtils


class Segment:
    """A road segment connecting two points.

    Neighbour links are stored as integer handles issued by the RoadManager
    arena. ``links_b`` holds the neighbours at the segment's backward end and
    ``links_f`` those at its forward end; which geometric end is "backward" is
    decided by RoadManager.start_is_backwards.

    Direction and length are memoized against ``revision``, which advances on
    every call to set_start or set_end. The bounding box is memoized by the
    collider against its own revision, which advances in the same calls.
    """

    def __init__(self, start: Point, end: Point, q: MetaInfo = None, road_class: RoadClass = None):
        """Initialize the segment.

        Args:
            start: Start point.
            end: End point.
            q: Growth metadata. Defaults to a fresh normal-road MetaInfo.
            road_class: Width, speed and capacity. Defaults from q.highway.
        """
        self.q = q if q is not None else MetaInfo()
        self.road_class = road_class or (HIGHWAY if self.q.highway else NORMAL_ROAD)
        self.id: Optional[int] = None
        self.links_b: List[int] = []
        self.links_f: List[int] = []
        self.occupancy = 0

        self._start = start
        self._end = end
        self.collider = CollisionShape.line(start, end, self.road_class.width, owner=self)
        self.revision = 0
        self._dir_cache = (-1, 0.0)
        self._length_cache = (-1, 0.0)

    @classmethod
    def using_direction(cls, start: Point, direction: float, length: float,
                        q: MetaInfo = None, road_class: RoadClass = None) -> 'Segment':
        """Create a segment from a start point, a heading in degrees and a length."""
        return cls(start, MathUtils.point_from_heading(start, direction, length), q, road_class)

    @property
    def start(self) -> Point:
        """Return the start point."""
        return self._start

    @property
    def end(self) -> Point:
        """Return the end point."""
        return self._end

    @property
    def width(self) -> float:
        """Return the road width of the segment's class."""
        return self.road_class.width

    def set_start(self, point: Point):
        """Move the start point and invalidate derived geometry."""
        self._start = point
        self.collider.update(start=point)
        self.revision += 1

    def set_end(self, point: Point):
        """Move the end point and invalidate derived geometry."""
        self._end = point
        self.collider.update(end=point)
        self.revision += 1

    def dir(self) -> float:
        """Return the heading of the segment in degrees, clockwise from +y."""
        revision, value = self._dir_cache
        if revision != self.revision:
            value = MathUtils.heading(MathUtils.subtract_points(self._end, self._start))
            self._dir_cache = (self.revision, value)
        return value

    def length(self) -> float:
        """Return the length of the segment."""
        revision, value = self._length_cache
        if revision != self.revision:
            value = MathUtils.length(self._start, self._end)
            self._length_cache = (self.revision, value)
        return value

    def bounds(self) -> Bounds:
        """Return the bounding box of the segment's collision shape."""
        return self.collider.bounds()

    def midpoint(self) -> Point:
        """Return the middle of the segment."""
        return MathUtils.interpolate_point(self._start, self._end, 0.5)

    def current_speed(self) -> float:
        """Return the travel speed under the current occupancy.

        Speed drops linearly from the class maximum once more than one user
        occupies the segment, and never below the minimum speed proportion.
        """
        road_class = self.road_class
        congestion = max(0, self.occupancy - 1) / road_class.capacity
        return max(road_class.min_speed_proportion, 1 - congestion) * road_class.max_speed

    def cost(self) -> float:
        """Return the time needed to traverse the whole segment."""
        return self.length() / self.current_speed()

    def copy(self) -> 'Segment':
        """Return an unregistered, unlinked copy with the same geometry and metadata."""
        return Segment(self._start, self._end, replace(self.q), self.road_class)

    def __repr__(self):
        """Return a short description of the segment."""
        return (f'Segment(id={self.id}, start=({self._start.x:.1f}, {self._start.y:.1f}), '
                f'end=({self._end.x:.1f}, {self._end.y:.1f}), highway={self.q.highway})')
