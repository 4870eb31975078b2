"""Road network growth."""
from citygrowth.citygen.road.local_constraints import (ConstraintDecision,
                                                       ConstraintKind,
                                                       GenerationDiagnostics,
                                                       LocalConstraints)
from citygrowth.citygen.road.population import PerlinNoise, PopulationField
from citygrowth.citygen.road.road_generator import RoadGenerator, RoadNetwork
from citygrowth.citygen.road.road_manager import RoadManager
from citygrowth.citygen.road.segment import Segment

__all__ = [
    'ConstraintDecision', 'ConstraintKind', 'GenerationDiagnostics', 'LocalConstraints',
    'PerlinNoise', 'PopulationField', 'RoadGenerator', 'RoadManager', 'RoadNetwork', 'Segment',
]
