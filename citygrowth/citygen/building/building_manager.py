"""Building manager module for keeping track of accepted buildings."""
from typing import List

from citygrowth.citygen.building.building import Building
from citygrowth.utils.quadtree import QuadTree


class BuildingManager:
    """Keeps the accepted buildings of a generation run."""

    def __init__(self):
        """Initialize the building manager with no buildings."""
        self.buildings: List[Building] = []

    def add_building(self, building: Building, index: QuadTree):
        """Accept a building: freeze it, record it and insert it into the index.

        Args:
            building: Building to add.
            index: Spatial index that later placements are checked against.
        """
        building.freeze()
        self.buildings.append(building)
        index.insert(building.bounds(), building)

    def __len__(self):
        """Return the number of accepted buildings."""
        return len(self.buildings)
