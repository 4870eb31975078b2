"""Building generator module for placing buildings around road segments."""
from typing import Callable, Dict, List

import numpy as np

from citygrowth.citygen.building.building import Building, BuildingType
from citygrowth.citygen.building.building_manager import BuildingManager
from citygrowth.citygen.dataclass import Point
from citygrowth.citygen.road.segment import Segment
from citygrowth.utils.logger import Logger
from citygrowth.utils.math_utils import MathUtils
from citygrowth.utils.quadtree import QuadTree


class BuildingGenerator:
    """Building generator class for scattering buildings around road segments."""

    def __init__(self, config, rng: np.random.Generator):
        """Initialize the building generator.

        Args:
            config: Loaded Config with the ``citygen.building`` section.
            rng: Generator used for building types, sizes and positions.
        """
        self.config = config
        self.rng = rng
        self.building_manager = BuildingManager()

        self.loop_limit = config['citygen.building.placement_loop_limit']
        self.import_probability = config['citygen.building.import_probability']
        self.min_aspect_ratio = config['citygen.building.min_aspect_ratio']
        self.max_aspect_ratio = config['citygen.building.max_aspect_ratio']
        self.diagonals: Dict[BuildingType, float] = {
            BuildingType.IMPORT: config['citygen.building.import_diagonal'],
            BuildingType.RESIDENTIAL: config['citygen.building.residential_diagonal'],
        }

        self.logger = Logger.get_logger('BuildingGenerator')

    def by_type(self, building_type: BuildingType) -> Building:
        """Create a building of the given type with a random aspect ratio."""
        aspect_ratio = float(self.rng.uniform(self.min_aspect_ratio, self.max_aspect_ratio))
        return Building(Point(0.0, 0.0), 0.0, self.diagonals[building_type], building_type, aspect_ratio)

    def from_probability(self) -> Building:
        """Create an import building with the configured probability, a residential one otherwise."""
        if self.rng.random() < self.import_probability:
            return self.by_type(BuildingType.IMPORT)
        return self.by_type(BuildingType.RESIDENTIAL)

    def place_around(self, segment: Segment, count: int, radius: float, index: QuadTree,
                     template: Callable[[], Building] = None) -> List[Building]:
        """Scatter buildings around the midpoint of a segment.

        Each candidate is dropped at a random offset within radius and aligned
        with the segment. While it collides with anything in the index or with
        a building accepted in this batch, it is pushed out by the collision's
        translation vector, up to the placement loop limit. Candidates still
        colliding after the last attempt are discarded.

        Args:
            segment: Road segment to place buildings around.
            count: Number of candidates to try.
            radius: Largest offset from the segment midpoint.
            index: Spatial index of roads and buildings; accepted buildings are
                inserted into it right away.
            template: Factory for candidates. Defaults to from_probability.

        Returns:
            The accepted buildings.
        """
        template = template or self.from_probability
        buildings: List[Building] = []
        midpoint = segment.midpoint()

        for _ in range(count):
            offset_heading = self.rng.random() * 360
            offset_length = self.rng.random() * radius
            building = template()
            building.set_center(MathUtils.point_from_heading(midpoint, offset_heading, offset_length))
            building.set_dir(segment.dir())

            if self._settle(building, buildings, index):
                self.building_manager.add_building(building, index)
                buildings.append(building)

        self.logger.debug(f'Placed {len(buildings)} of {count} buildings around segment {segment.id}')
        return buildings

    def _settle(self, building: Building, batch: List[Building], index: QuadTree) -> bool:
        """Run the placement retry loop and report whether the building is free."""
        for attempt in range(self.loop_limit):
            collision_count = 0
            query = building.bounds()
            potential = {id(obj): obj for obj in index.retrieve(query)}
            for other in batch:
                if other.bounds().intersects(query):
                    potential.setdefault(id(other), other)

            for other in potential.values():
                if other is building:
                    continue
                result = building.collider.collide(other.collider)
                if result is False:
                    continue
                collision_count += 1
                if attempt == self.loop_limit - 1:
                    break
                if isinstance(result, Point):
                    building.set_center(MathUtils.add_points(building.center, result))

            if collision_count == 0:
                return True
        return False
