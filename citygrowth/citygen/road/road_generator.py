"""Road network generation module.

This module grows the road network from two root highway segments. Candidates
wait in a frontier ordered by creation time; each popped candidate is checked
against local constraints, accepted into the network, and then proposes its
own follow-on candidates from the global goals.
"""
from dataclasses import dataclass, replace
from typing import List, NamedTuple, Optional, Tuple

from citygrowth.citygen.dataclass import MetaInfo, Point, RoadClass
from citygrowth.citygen.road.local_constraints import (GenerationDiagnostics,
                                                       LocalConstraints)
from citygrowth.citygen.road.population import PerlinNoise, PopulationField
from citygrowth.citygen.road.road_manager import RoadManager
from citygrowth.citygen.road.segment import Segment
from citygrowth.utils.logger import Logger
from citygrowth.utils.priority_queue import PriorityQueue
from citygrowth.utils.quadtree import QuadTree
from citygrowth.utils.rng import Seed, make_rng, random_angle


class FrontierEntry(NamedTuple):
    """A queued candidate and the handle of the segment it branches from."""
    segment: Segment
    parent: Optional[int]


@dataclass(frozen=True)
class RoadNetwork:
    """A finished road network.

    segments: accepted segments in acceptance order
    index: spatial index holding the accepted segments
    diagnostics: junction points recorded while growing
    population: density field the network was grown on
    road_manager: arena resolving segment handles
    """
    segments: Tuple[Segment, ...]
    index: QuadTree
    diagnostics: GenerationDiagnostics
    population: PopulationField
    road_manager: RoadManager


class RoadGenerator:
    """Handles procedural road network generation."""

    def __init__(self, config, num_segments: int = None, population: PopulationField = None):
        """Initialize the road generator.

        Args:
            config: Loaded Config.
            num_segments: Segment count limit. Defaults to the configured limit.
            population: Fixed density field. By default every run builds a
                Perlin field seeded from its own generator.

        Raises:
            ValueError: If the segment count limit is negative.
        """
        self.config = config
        self._set_limit(self.config['citygen.road.segment_count_limit'] if num_segments is None else num_segments)
        self.fixed_population = population

        self.highway_length = config['citygen.road.highway_segment_length']
        self.default_length = config['citygen.road.default_segment_length']
        self.branch_angle_limit = config['citygen.road.random_branch_angle_limit']
        self.straight_angle_limit = config['citygen.road.random_straight_angle_limit']
        self.default_branch_probability = config['citygen.road.default_branch_probability']
        self.highway_branch_probability = config['citygen.road.highway_branch_probability']
        self.highway_population_threshold = config['citygen.road.highway_branch_population_threshold']
        self.normal_population_threshold = config['citygen.road.normal_branch_population_threshold']
        self.branch_delay = config['citygen.road.normal_branch_time_delay_from_highway']

        min_speed_proportion = config['citygen.traffic.min_speed_proportion']
        self.highway_class = RoadClass(
            config['citygen.road.highway_segment_width'],
            config['citygen.traffic.highway.max_speed'],
            config['citygen.traffic.highway.capacity'],
            min_speed_proportion,
        )
        self.normal_class = RoadClass(
            config['citygen.road.default_segment_width'],
            config['citygen.traffic.normal.max_speed'],
            config['citygen.traffic.normal.capacity'],
            min_speed_proportion,
        )

        self.logger = Logger.get_logger('RoadGenerator')
        self.reset(config['citygrowth.seed'])

    def _set_limit(self, limit: int):
        if limit < 0:
            raise ValueError(f'Segment count limit must not be negative, got {limit}')
        self.num_segments = limit

    def reset(self, seed: Seed) -> None:
        """Discard any in-progress run and prepare a fresh one for a seed.

        Args:
            seed: Seed of the run.
        """
        self.seed = seed
        self.rng = make_rng(seed, 'roads')
        if self.fixed_population is not None:
            self.population = self.fixed_population
        else:
            self.population = PopulationField(PerlinNoise(base=int(self.rng.integers(0, 256))))
        self.road_manager = RoadManager(self.config)
        self.diagnostics = GenerationDiagnostics()
        self.local_constraints = LocalConstraints(self.config, self.road_manager, self.diagnostics)
        self.queue: PriorityQueue[FrontierEntry] = PriorityQueue()

    def generate(self, seed: Seed = None, limit: int = None) -> RoadNetwork:
        """Grow a complete network.

        Args:
            seed: Seed of the run. Defaults to the configured seed.
            limit: New segment count limit, kept for later runs.

        Returns:
            The finished network.

        Raises:
            ValueError: If the segment count limit is negative.
        """
        if limit is not None:
            self._set_limit(limit)
        self.reset(self.config['citygrowth.seed'] if seed is None else seed)
        self.logger.info(f'Generating roads with seed {self.seed!r}, limit {self.num_segments}')
        self.generate_initial_segments()
        while not self.generate_step():
            pass
        network = self.build_network()
        self.logger.info(f'{len(network.segments)} segments generated')
        return network

    def generate_initial_segments(self) -> None:
        """Queue the two root highway segments leaving the origin in opposite directions."""
        origin = Point(0, 0)
        root = Segment(origin, Point(self.highway_length, 0), MetaInfo(highway=True), self.highway_class)
        opposite = Segment(origin, Point(-self.highway_length, 0), MetaInfo(highway=True), self.highway_class)
        self.road_manager.register(root)
        self.road_manager.register(opposite)
        root.links_b.append(opposite.id)
        opposite.links_b.append(root.id)
        self.queue.enqueue(FrontierEntry(root, None), root.q.t)
        self.queue.enqueue(FrontierEntry(opposite, None), opposite.q.t)

    def generate_step(self) -> bool:
        """Process one frontier candidate.

        Returns:
            True when generation should stop, False otherwise.
        """
        if self.queue.empty() or len(self.road_manager.roads) >= self.num_segments:
            return True

        segment, parent = self.queue.dequeue()
        decision = self.local_constraints.evaluate(segment)
        if not decision.accepted:
            return False
        if len(self.road_manager.roads) + decision.added_segments > self.num_segments:
            self.logger.debug(f'Candidate dropped, {decision.kind.name} would exceed the segment limit')
            return False

        self.local_constraints.apply(segment, decision)
        if parent is not None:
            self.road_manager.attach_branch(segment, self.road_manager.get(parent))
        self.road_manager.add_segment(segment)

        for child in self.generate_next_segments(segment):
            self.queue.enqueue(FrontierEntry(child, segment.id), child.q.t)
        return False

    def build_network(self) -> RoadNetwork:
        """Freeze the current run into a RoadNetwork snapshot."""
        self.road_manager.discard_unaccepted()
        return RoadNetwork(
            segments=tuple(self.road_manager.roads),
            index=self.road_manager.road_quadtree,
            diagnostics=self.diagnostics,
            population=self.population,
            road_manager=self.road_manager,
        )

    def create_segment(self, start: Point, direction: float, length: float, is_highway: bool, t: float = 0) -> Segment:
        """Create a new road segment with specified parameters.

        Args:
            start: Starting point of the segment.
            direction: Heading in degrees, clockwise from +y.
            length: Length of the segment.
            is_highway: Whether this is a highway segment.
            t: Creation time.

        Returns:
            A new, unregistered road segment.
        """
        road_class = self.highway_class if is_highway else self.normal_class
        return Segment.using_direction(start, direction, length, MetaInfo(highway=is_highway, t=t), road_class)

    def generate_next_segments(self, previous: Segment) -> List[Segment]:
        """Propose follow-on candidates for an accepted segment.

        Args:
            previous: The freshly accepted segment.

        Returns:
            Candidates with their creation times already set.
        """
        if previous.q.severed:
            return []

        direction = previous.dir()
        new_segments = []
        continue_straight = self._continue(previous, direction)
        straight_pop = self.population.population_at_point(continue_straight.end)

        if previous.q.highway:
            random_straight = self._continue(previous, direction + random_angle(self.rng, self.straight_angle_limit))
            random_pop = self.population.population_at_point(random_straight.end)
            if random_pop > straight_pop:
                new_segments.append(random_straight)
                road_pop = random_pop
            else:
                new_segments.append(continue_straight)
                road_pop = straight_pop
            if road_pop > self.highway_population_threshold:
                if self.rng.random() < self.highway_branch_probability:
                    new_segments.append(self._continue(previous, direction - 90 + self._branch_jitter()))
                elif self.rng.random() < self.highway_branch_probability:
                    new_segments.append(self._continue(previous, direction + 90 + self._branch_jitter()))
        elif straight_pop > self.normal_population_threshold:
            new_segments.append(continue_straight)

        if straight_pop > self.normal_population_threshold:
            if self.rng.random() < self.default_branch_probability:
                new_segments.append(self._branch(previous, direction - 90 + self._branch_jitter()))
            elif self.rng.random() < self.default_branch_probability:
                new_segments.append(self._branch(previous, direction + 90 + self._branch_jitter()))

        for new_segment in new_segments:
            new_segment.q.t += previous.q.t + 1
        return new_segments

    def _branch_jitter(self) -> float:
        return random_angle(self.rng, self.branch_angle_limit)

    def _continue(self, previous: Segment, direction: float) -> Segment:
        """Same class and length as previous; creation time relative to it."""
        q = replace(previous.q, t=0, severed=False)
        return Segment.using_direction(previous.end, direction, previous.length(), q, previous.road_class)

    def _branch(self, previous: Segment, direction: float) -> Segment:
        """Default-length normal road, delayed when leaving a highway."""
        t = self.branch_delay if previous.q.highway else 0
        return self.create_segment(previous.end, direction, self.default_length, False, t)

    @property
    def roads(self) -> List[Segment]:
        """Accepted segments of the current run."""
        return self.road_manager.roads

    def is_generation_complete(self) -> bool:
        """Check whether the current run has nothing left to do."""
        return self.queue.empty() or len(self.road_manager.roads) >= self.num_segments
