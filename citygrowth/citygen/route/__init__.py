"""Routing over the road segment graph."""
from citygrowth.citygen.route.route_finder import (PathLocation, Route,
                                                   RouteFinder)

__all__ = ['PathLocation', 'Route', 'RouteFinder']
