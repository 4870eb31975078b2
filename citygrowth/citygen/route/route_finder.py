"""Route finder module: uniform-cost search over the road segment graph.

Path endpoints are PathLocations, a segment plus a fractional position along
it. Travelling from segment ``current`` into neighbour ``next`` costs the half
of ``current`` up to their junction plus the half of ``next`` after it; on the
start and end segments the fraction replaces the default half.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional

from citygrowth.citygen.road.road_manager import RoadManager
from citygrowth.citygen.road.segment import Segment
from citygrowth.utils.logger import Logger
from citygrowth.utils.priority_queue import PriorityQueue


@dataclass(frozen=True)
class PathLocation:
    """A position on the road graph: a segment and a fraction along it."""
    segment: Segment
    fraction: float

    def __post_init__(self):
        """Validate the fraction.

        Raises:
            ValueError: If the fraction lies outside [0, 1].
        """
        if not 0 <= self.fraction <= 1:
            raise ValueError(f'Path fraction must lie in [0, 1], got {self.fraction}')


@dataclass(frozen=True)
class Route:
    """A path between two locations.

    segments: traversed segments from the start location's to the end location's
    cost: total travel time
    """
    segments: List[Segment]
    cost: float
    start: PathLocation
    end: PathLocation


class RouteFinder:
    """Finds cheapest routes over the segments of a RoadManager."""

    def __init__(self, road_manager: RoadManager):
        """Initialize the route finder.

        Args:
            road_manager: Arena resolving neighbour handles.
        """
        self.road_manager = road_manager
        self.logger = Logger.get_logger('RouteFinder')

    def find_path(self, start: PathLocation, end: PathLocation) -> Optional[Route]:
        """Find the cheapest route between two locations.

        Args:
            start: Where the route starts.
            end: Where the route ends.

        Returns:
            The cheapest route, or None if end cannot be reached from start.
        """
        if start.segment is end.segment:
            cost = abs(start.fraction - end.fraction) * start.segment.cost()
            return Route([start.segment], cost, start, end)

        frontier: PriorityQueue[Segment] = PriorityQueue()
        frontier.enqueue(start.segment, 0.0)
        came_from: Dict[int, Optional[int]] = {start.segment.id: None}
        cost_so_far: Dict[int, float] = {start.segment.id: 0.0}

        while not frontier.empty():
            current = frontier.dequeue()
            if current is end.segment:
                break
            for neighbour in self.road_manager.neighbours(current):
                new_cost = cost_so_far[current.id] + self.edge_cost(current, neighbour, start, end)
                if neighbour.id not in cost_so_far or new_cost < cost_so_far[neighbour.id]:
                    cost_so_far[neighbour.id] = new_cost
                    came_from[neighbour.id] = current.id
                    frontier.enqueue(neighbour, new_cost)

        if end.segment.id not in came_from:
            self.logger.warning(f'No route from segment {start.segment.id} to segment {end.segment.id}')
            return None
        return Route(self._reconstruct_path(came_from, end.segment), cost_so_far[end.segment.id], start, end)

    def edge_cost(self, current: Segment, neighbour: Segment, start: PathLocation, end: PathLocation) -> float:
        """Cost of moving from current into neighbour.

        Args:
            current: Segment being left.
            neighbour: Linked segment being entered.
            start: Query start, whose fraction applies when current is its segment.
            end: Query end, whose fraction applies when neighbour is its segment.

        Returns:
            The transition cost.
        """
        current_fraction = start.fraction if current is start.segment else None
        neighbour_fraction = end.fraction if neighbour is end.segment else None
        return (self.road_manager.cost_to(current, neighbour, current_fraction)
                + self.road_manager.cost_to(neighbour, current, neighbour_fraction))

    def _reconstruct_path(self, came_from: Dict[int, Optional[int]], goal: Segment) -> List[Segment]:
        path = []
        handle = goal.id
        while handle is not None:
            path.append(self.road_manager.get(handle))
            handle = came_from[handle]
        path.reverse()
        return path

