"""CityGrowth package for procedural city generation.

This package grows road networks from a seed, places buildings along the
roads and finds routes over the resulting road graph.
"""

from citygrowth.citygen.city.city_generator import CityGenerator, CitySnapshot
from citygrowth.citygen.route.route_finder import PathLocation, Route
from citygrowth.config import Config
from citygrowth.utils.logger import Logger

__all__ = ['CityGenerator', 'CitySnapshot', 'Config', 'Logger', 'PathLocation', 'Route']
