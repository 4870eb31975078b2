"""City generator module for generating cities with roads and buildings."""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple

from citygrowth.citygen.building.building import Building
from citygrowth.citygen.building.building_generator import BuildingGenerator
from citygrowth.citygen.road.population import PopulationField
from citygrowth.citygen.road.road_generator import RoadGenerator, RoadNetwork
from citygrowth.citygen.route.route_finder import (PathLocation, Route,
                                                   RouteFinder)
from citygrowth.utils.logger import Logger
from citygrowth.utils.rng import Seed, make_rng


class GenerationState(Enum):
    """Enum to track the generation state."""
    GENERATING_ROADS = auto()
    GENERATING_BUILDINGS = auto()
    COMPLETED = auto()


@dataclass(frozen=True)
class CitySnapshot:
    """A finished city. Only segment occupancy counters may change after publication."""
    seed: Seed
    network: RoadNetwork
    buildings: Tuple[Building, ...]

    @property
    def segments(self):
        """Accepted road segments."""
        return self.network.segments


class CityGenerator:
    """Runs the generation steps of a city and publishes each finished city as a snapshot.

    Work in progress is never visible through ``snapshot``: the attribute only
    changes when a run completes, by a single reference assignment.
    """

    def __init__(self, config, seed: Seed = None, num_segments: int = None, population: PopulationField = None):
        """Initialize the city generator with configuration.

        Args:
            config: Loaded Config.
            seed: Seed of the first run. Defaults to the configured seed.
            num_segments: Segment count limit. Defaults to the configured limit.
            population: Fixed density field shared by every run.
        """
        self.config = config
        self.road_generator = RoadGenerator(config, num_segments, population)
        self.generate_buildings = config['citygen.generate_buildings']
        self.segment_stride = config['citygen.building.segment_stride']
        self.count_per_segment = config['citygen.building.count_per_segment']
        self.placement_radius = config['citygen.building.placement_radius']

        Logger.configure_from(config)
        self.logger = Logger.get_logger('CityGenerator')
        self._snapshot: Optional[CitySnapshot] = None
        self.start(config['citygrowth.seed'] if seed is None else seed)

    def start(self, seed: Seed) -> None:
        """Begin a new run, leaving the published snapshot untouched until it completes.

        Args:
            seed: Seed of the run.
        """
        self.seed = seed
        self.road_generator.reset(seed)
        self.road_generator.generate_initial_segments()
        self.building_generator = BuildingGenerator(self.config, make_rng(seed, 'buildings'))
        self.network: Optional[RoadNetwork] = None
        self.current_segment_index = 0
        self.generation_state = GenerationState.GENERATING_ROADS
        self.logger.info(f'Generating city with seed {seed!r}')

    def generate(self) -> CitySnapshot:
        """Run the current generation to completion.

        Returns:
            The published snapshot.
        """
        while not self.generate_step():
            pass
        return self._snapshot

    def regenerate(self, seed: Seed) -> CitySnapshot:
        """Generate a new city and replace the published snapshot with it."""
        self.start(seed)
        return self.generate()

    def generate_step(self) -> bool:
        """Generate one step of the city.

        Returns:
            bool: True if generation is complete.
        """
        if self.generation_state == GenerationState.GENERATING_ROADS:
            if self.road_generator.generate_step():
                self.network = self.road_generator.build_network()
                self.logger.info(f'Generated {len(self.network.segments)} road segments')
                if self.generate_buildings:
                    self.generation_state = GenerationState.GENERATING_BUILDINGS
                else:
                    self._publish()
                    return True
            return False

        if self.generation_state == GenerationState.GENERATING_BUILDINGS:
            segments = self.network.segments
            if self.current_segment_index < len(segments):
                self.building_generator.place_around(
                    segments[self.current_segment_index],
                    self.count_per_segment,
                    self.placement_radius,
                    self.network.index,
                )
                self.current_segment_index += self.segment_stride
                return False
            self.logger.info(f'Generated {len(self.building_generator.building_manager)} buildings')
            self._publish()
            return True

        return True

    def is_generation_complete(self) -> bool:
        """Check if city generation is complete.

        Returns:
            bool: True if generation is complete.
        """
        return self.generation_state == GenerationState.COMPLETED

    def _publish(self):
        self.generation_state = GenerationState.COMPLETED
        self._snapshot = CitySnapshot(
            seed=self.seed,
            network=self.network,
            buildings=tuple(self.building_generator.building_manager.buildings),
        )

    @property
    def snapshot(self) -> Optional[CitySnapshot]:
        """The last published city, or None before the first run completes."""
        return self._snapshot

    def find_path(self, start: PathLocation, end: PathLocation) -> Optional[Route]:
        """Find the cheapest route on the published city.

        Raises:
            RuntimeError: If no city has been published yet.
        """
        if self._snapshot is None:
            raise RuntimeError('No city has been generated yet')
        return RouteFinder(self._snapshot.network.road_manager).find_path(start, end)
