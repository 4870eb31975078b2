"""Module for data classes defining the basic value types of city generation."""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


@dataclass
class Point:
    """A point (or vector) in a 2D plane."""
    x: float
    y: float

    def __hash__(self):
        """Return the hash value of the point."""
        return hash((self.x, self.y))


@dataclass
class MetaInfo:
    """Growth metadata for road segments.

    highway: whether the segment belongs to the highway road class
    t: creation time, used as the frontier priority
    severed: set once the segment was truncated by a local constraint
    """
    highway: bool = False
    t: float = 0.0
    severed: bool = False


@dataclass(frozen=True)
class RoadClass:
    """Per-class physical and traffic parameters of a road segment."""
    width: float
    max_speed: float
    capacity: int
    min_speed_proportion: float = 0.1


HIGHWAY = RoadClass(width=16, max_speed=1200, capacity=12)
NORMAL_ROAD = RoadClass(width=6, max_speed=800, capacity=6)


@dataclass(frozen=True, eq=True)
class Bounds:
    """An axis-aligned bounding box with an opaque owner reference.

    (x, y) is the minimum corner of the bounding box
    width: width of the bounding box
    height: height of the bounding box
    owner: object the box was produced for, ignored by equality
    """
    x: float
    y: float
    width: float
    height: float
    owner: Any = field(default=None, compare=False, repr=False)

    def __hash__(self):
        """Return the hash value of the bounds."""
        return hash((self.x, self.y, self.width, self.height))

    def intersects(self, other: 'Bounds') -> bool:
        """Checks if two Bounds objects' bounding boxes intersect (touching counts)."""
        return not (self.x + self.width < other.x or
                    self.x > other.x + other.width or
                    self.y + self.height < other.y or
                    self.y > other.y + other.height)

    def padded(self, padding: float) -> 'Bounds':
        """Return a copy of the bounds grown by padding on every side."""
        return Bounds(
            self.x - padding,
            self.y - padding,
            self.width + 2 * padding,
            self.height + 2 * padding,
            self.owner,
        )


class SegmentEnd(Enum):
    """Which end of a segment a junction sits at."""
    START = auto()
    END = auto()
