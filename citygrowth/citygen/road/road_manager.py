"""Road network management module.

The RoadManager is the arena that owns every segment of a generation run. It
hands out stable integer handles, keeps the accepted segments in acceptance
order together with their spatial index, and implements the graph operations
that keep neighbour links consistent: splitting, branching and end snapping.
"""
from typing import Dict, List, Optional, Tuple

from citygrowth.citygen.dataclass import Bounds, Point, SegmentEnd
from citygrowth.citygen.road.segment import Segment
from citygrowth.utils.math_utils import MathUtils
from citygrowth.utils.quadtree import QuadTree


class RoadManager:
    """Manages road segments, their handles and their spatial relationships."""

    def __init__(self, config):
        """Initialize the road manager.

        Args:
            config: Loaded Config providing the quadtree parameters.
        """
        self.roads: List[Segment] = []
        self._segments: Dict[int, Segment] = {}
        self._accepted = set()
        self._next_id = 0

        self.config = config
        bounds = Bounds(
            self.config['citygen.quadtree.bounds.x'],
            self.config['citygen.quadtree.bounds.y'],
            self.config['citygen.quadtree.bounds.width'],
            self.config['citygen.quadtree.bounds.height'],
        )
        self.road_quadtree = QuadTree[Segment](
            bounds,
            self.config['citygen.quadtree.max_objects'],
            self.config['citygen.quadtree.max_levels'],
        )

    def register(self, segment: Segment) -> int:
        """Issue a handle for a segment, once.

        Args:
            segment: The segment to register.

        Returns:
            The segment's handle.
        """
        if segment.id is None:
            segment.id = self._next_id
            self._next_id += 1
            self._segments[segment.id] = segment
        return segment.id

    def get(self, handle: int) -> Segment:
        """Look a segment up by its handle.

        Raises:
            KeyError: If no segment was registered under the handle.
        """
        try:
            return self._segments[handle]
        except KeyError:
            raise KeyError(f'Unknown segment handle {handle}') from None

    def add_segment(self, segment: Segment) -> None:
        """Accept a segment into the network and the spatial index."""
        self.register(segment)
        self.roads.append(segment)
        self._accepted.add(segment.id)
        self.road_quadtree.insert(segment.bounds(), segment)

    def is_accepted(self, segment: Segment) -> bool:
        """Check whether a segment was accepted into the network."""
        return segment.id in self._accepted

    def get_nearby_segments(self, bounds: Bounds) -> List[Segment]:
        """Get accepted segments whose indexed bounds overlap the given bounds."""
        return self.road_quadtree.retrieve(bounds)

    def start_is_backwards(self, segment: Segment) -> bool:
        """Check whether the segment's backward links sit at its start point.

        Args:
            segment: The segment to test.

        Returns:
            True if the start point is the backward end. A segment without
            any links reports False.
        """
        if segment.links_b:
            link = self.get(segment.links_b[0])
            return MathUtils.equal_v(link.start, segment.start) or MathUtils.equal_v(link.end, segment.start)
        if segment.links_f:
            link = self.get(segment.links_f[0])
            return MathUtils.equal_v(link.start, segment.end) or MathUtils.equal_v(link.end, segment.end)
        return False

    def end_containing(self, segment: Segment, other: Segment) -> Optional[SegmentEnd]:
        """Return the geometric end of segment at which other is linked, or None."""
        start_backwards = self.start_is_backwards(segment)
        if other.id in segment.links_b:
            return SegmentEnd.START if start_backwards else SegmentEnd.END
        if other.id in segment.links_f:
            return SegmentEnd.END if start_backwards else SegmentEnd.START
        return None

    def links_for_end_containing(self, segment: Segment, other: Segment) -> Optional[List[int]]:
        """Return the link list of segment that contains other, or None."""
        if other.id in segment.links_b:
            return segment.links_b
        if other.id in segment.links_f:
            return segment.links_f
        return None

    def neighbours(self, segment: Segment) -> List[Segment]:
        """Return the accepted neighbours of a segment, forward ones first."""
        return [self.get(h) for h in segment.links_f + segment.links_b if h in self._accepted]

    def split(self, segment: Segment, point: Point, producer: Segment) -> Segment:
        """Split a segment at a point and join a producing segment to the junction.

        The piece holding the original start becomes a new segment; the
        original object keeps the piece holding its end. Neighbours linked at
        the start are rewired to the new piece, and the producer and both
        pieces end up mutually linked at the split point.

        Args:
            segment: Accepted segment being split.
            point: Split point on the segment.
            producer: Registered segment whose end meets the split point.

        Returns:
            The newly accepted start piece.
        """
        start_is_backwards = self.start_is_backwards(segment)

        split_part = segment.copy()
        split_part.set_end(point)
        segment.set_start(point)
        self.add_segment(split_part)

        split_part.links_b = list(segment.links_b)
        split_part.links_f = list(segment.links_f)

        if start_is_backwards:
            first, second, fix_links = split_part, segment, split_part.links_b
        else:
            first, second, fix_links = segment, split_part, split_part.links_f

        for handle in fix_links:
            link = self.get(handle)
            for links in (link.links_b, link.links_f):
                if segment.id in links:
                    links[links.index(segment.id)] = split_part.id
                    break

        first.links_f = [producer.id, second.id]
        second.links_b = [producer.id, first.id]
        producer.links_f.extend([first.id, second.id])
        return split_part

    def attach_branch(self, branch: Segment, parent: Segment) -> None:
        """Wire a newly accepted branch onto the forward end of its parent.

        Every current forward neighbour of the parent becomes a backward
        neighbour of the branch and gains the branch at the junction end.
        """
        for handle in list(parent.links_f):
            link = self.get(handle)
            branch.links_b.append(handle)
            self.links_for_end_containing(link, parent).append(branch.id)
        parent.links_f.append(branch.id)
        branch.links_b.append(parent.id)

    def links_at_end(self, other: Segment) -> List[int]:
        """Return the link list sitting at the end point of a segment."""
        return other.links_f if self.start_is_backwards(other) else other.links_b

    def has_link_between(self, start: Point, end: Point, other: Segment) -> bool:
        """Check whether other or a segment linked at its end already joins two points."""
        candidates = [other] + [self.get(h) for h in self.links_at_end(other)]
        for link in candidates:
            if MathUtils.equal_v(link.start, start) and MathUtils.equal_v(link.end, end):
                return True
            if MathUtils.equal_v(link.start, end) and MathUtils.equal_v(link.end, start):
                return True
        return False

    def link_to_end(self, segment: Segment, other: Segment) -> None:
        """Splice a segment whose end was snapped onto the end point of other."""
        links = self.links_at_end(other)
        for handle in list(links):
            link = self.get(handle)
            self.links_for_end_containing(link, other).append(segment.id)
            segment.links_f.append(handle)
        links.append(segment.id)
        segment.links_f.append(other.id)

    def cost_to(self, segment: Segment, other: Segment, from_fraction: float = None) -> float:
        """Cost of travelling along segment to (or from) the junction with other.

        Args:
            segment: The segment being travelled.
            other: A linked neighbour marking the junction end.
            from_fraction: Position along segment where travel starts or ends.
                Without it, half of the segment is charged.

        Returns:
            The partial traversal cost.
        """
        multiplier = 0.5
        if from_fraction is not None:
            segment_end = self.end_containing(segment, other)
            if segment_end == SegmentEnd.START:
                multiplier = from_fraction
            elif segment_end == SegmentEnd.END:
                multiplier = 1 - from_fraction
        return segment.cost() * multiplier

    def discard_unaccepted(self) -> None:
        """Forget registered segments that never got accepted and unlink them."""
        pending = [h for h in self._segments if h not in self._accepted]
        if not pending:
            return
        for segment in self.roads:
            segment.links_b = [h for h in segment.links_b if h in self._accepted]
            segment.links_f = [h for h in segment.links_f if h in self._accepted]
        for handle in pending:
            del self._segments[handle]

    def check_links(self) -> List[Tuple[int, int]]:
        """Find links without a reciprocal link back.

        Returns:
            (segment handle, neighbour handle) pairs where the neighbour does
            not list the segment in either of its link sets.
        """
        broken = []
        for segment in self.roads:
            for handle in segment.links_b + segment.links_f:
                neighbour = self.get(handle)
                if segment.id not in neighbour.links_b and segment.id not in neighbour.links_f:
                    broken.append((segment.id, handle))
        return broken
