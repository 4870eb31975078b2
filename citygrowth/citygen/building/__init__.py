"""Building placement around road segments."""
from citygrowth.citygen.building.building import Building, BuildingType
from citygrowth.citygen.building.building_generator import BuildingGenerator
from citygrowth.citygen.building.building_manager import BuildingManager

__all__ = ['Building', 'BuildingGenerator', 'BuildingManager', 'BuildingType']
