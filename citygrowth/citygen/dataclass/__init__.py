"""Dataclass module for the city generation."""
from citygrowth.citygen.dataclass.dataclass import (HIGHWAY, NORMAL_ROAD,
                                                    Bounds, MetaInfo, Point,
                                                    RoadClass, SegmentEnd)

__all__ = ['Bounds', 'HIGHWAY', 'MetaInfo', 'NORMAL_ROAD', 'Point', 'RoadClass', 'SegmentEnd']
