"""Building entity placed around road segments."""
import math
from enum import Enum
from typing import List

from citygrowth.citygen.dataclass import Bounds, Point
from citygrowth.utils.collision import CollisionShape
from citygrowth.utils.math_utils import MathUtils


class BuildingType(Enum):
    """Building classes."""
    RESIDENTIAL = 'residential'
    IMPORT = 'import'


class Building:
    """A rectangular building footprint.

    The four corners lie at distance ``diagonal`` from the center, at headings
    ``dir ± aspect_degree`` and ``dir + 180 ± aspect_degree``, where
    ``aspect_degree`` is the arctangent of the aspect ratio. A building can be
    moved and turned while it is being placed and is frozen once accepted.
    """

    def __init__(self, center: Point, dir: float, diagonal: float, building_type: BuildingType,
                 aspect_ratio: float = 1.0):
        """Initialize the building.

        Args:
            center: Footprint center.
            dir: Heading in degrees, clockwise from +y.
            diagonal: Distance from the center to each corner.
            building_type: Class of the building.
            aspect_ratio: Ratio between the footprint's side lengths.
        """
        self.center = center
        self.dir = dir
        self.diagonal = diagonal
        self.building_type = building_type
        self.aspect_ratio = aspect_ratio
        self.aspect_degree = math.degrees(math.atan(aspect_ratio))
        self.corners = self._generate_corners()
        self.collider = CollisionShape.rect(self.corners, owner=self)
        self.frozen = False

    def _generate_corners(self) -> List[Point]:
        headings = (
            self.aspect_degree + self.dir,
            -self.aspect_degree + self.dir,
            180 + self.aspect_degree + self.dir,
            180 - self.aspect_degree + self.dir,
        )
        return [MathUtils.point_from_heading(self.center, heading, self.diagonal) for heading in headings]

    def _check_movable(self):
        if self.frozen:
            raise RuntimeError('Cannot move an accepted building')

    def _update_corners(self):
        self.corners = self._generate_corners()
        self.collider.update(corners=tuple(self.corners))

    def set_center(self, center: Point):
        """Move the building."""
        self._check_movable()
        self.center = center
        self._update_corners()

    def set_dir(self, dir: float):
        """Turn the building to a heading in degrees."""
        self._check_movable()
        self.dir = dir
        self._update_corners()

    def freeze(self):
        """Forbid any further movement."""
        self.frozen = True

    def bounds(self) -> Bounds:
        """Return the bounding box of the footprint."""
        return self.collider.bounds()
