"""Collision shapes and the separating-axis collision kernel.

A shape is a tagged variant over three payloads: a rectangle given by four
ordered corners, a line with a width, and a circle. Lines are turned into
their equivalent rectangle before any polygon test.

``collide`` returns ``False`` when the shapes are apart, the minimum
translation vector (a ``Point`` that moves the first shape out of the second)
when a polygon pair overlaps, and ``True`` when an overlap has no defined
translation (any test involving a circle).
"""
import math
from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Any, Callable, Dict, Sequence, Tuple, Union

import numpy as np

from citygrowth.citygen.dataclass import Bounds, Point
from citygrowth.utils.math_utils import MathUtils

CollisionResult = Union[bool, Point]

_DEPTH_TOLERANCE = 1e-7


class ShapeKind(Enum):
    """Kinds of collision shapes."""
    RECT = auto()
    LINE = auto()
    CIRCLE = auto()


@dataclass(frozen=True)
class RectProps:
    """Rectangle payload: four corners in winding order."""
    corners: Tuple[Point, Point, Point, Point]


@dataclass(frozen=True)
class LineProps:
    """Line payload: a thick line from start to end."""
    start: Point
    end: Point
    width: float


@dataclass(frozen=True)
class CircleProps:
    """Circle payload."""
    center: Point
    radius: float


ShapeProps = Union[RectProps, LineProps, CircleProps]

_KIND_OF_PROPS = {
    RectProps: ShapeKind.RECT,
    LineProps: ShapeKind.LINE,
    CircleProps: ShapeKind.CIRCLE,
}


class CollisionShape:
    """A collision shape with a bounding box cached against a revision counter.

    Attributes:
        owner: The object the shape belongs to (a segment or a building).
        revision: Monotonic counter advanced by every geometry update.
    """

    def __init__(self, props: ShapeProps, owner: Any = None):
        """Initialize the shape.

        Args:
            props: Shape payload.
            owner: The object the shape belongs to.
        """
        self.owner = owner
        self.revision = 0
        self._props = props
        self._bounds = None
        self._bounds_revision = -1

    @classmethod
    def rect(cls, corners: Sequence[Point], owner: Any = None) -> 'CollisionShape':
        """Create a rectangle shape from four ordered corners."""
        return cls(RectProps(tuple(corners)), owner)

    @classmethod
    def line(cls, start: Point, end: Point, width: float, owner: Any = None) -> 'CollisionShape':
        """Create a thick line shape."""
        return cls(LineProps(start, end, width), owner)

    @classmethod
    def circle(cls, center: Point, radius: float, owner: Any = None) -> 'CollisionShape':
        """Create a circle shape."""
        return cls(CircleProps(center, radius), owner)

    @property
    def kind(self) -> ShapeKind:
        """Return the kind tag of the shape."""
        return _KIND_OF_PROPS[type(self._props)]

    @property
    def props(self) -> ShapeProps:
        """Return the current payload."""
        return self._props

    def update(self, **changes):
        """Replace payload fields and advance the revision counter.

        Args:
            **changes: Payload fields to replace, e.g. ``end=Point(1, 2)``.
        """
        self._props = replace(self._props, **changes)
        self.revision += 1

    def bounds(self) -> Bounds:
        """Return the axis-aligned bounding box, recomputed only after an update."""
        if self._bounds_revision != self.revision:
            self._bounds = self._compute_bounds()
            self._bounds_revision = self.revision
        return self._bounds

    def _compute_bounds(self) -> Bounds:
        props = self._props
        if isinstance(props, RectProps):
            xs = [c.x for c in props.corners]
            ys = [c.y for c in props.corners]
            return Bounds(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys), self.owner)
        if isinstance(props, LineProps):
            half = props.width / 2
            min_x = min(props.start.x, props.end.x)
            min_y = min(props.start.y, props.end.y)
            return Bounds(
                min_x - half,
                min_y - half,
                abs(props.end.x - props.start.x) + props.width,
                abs(props.end.y - props.start.y) + props.width,
                self.owner,
            )
        return Bounds(
            props.center.x - props.radius,
            props.center.y - props.radius,
            2 * props.radius,
            2 * props.radius,
            self.owner,
        )

    def corners(self) -> Tuple[Point, Point, Point, Point]:
        """Return the rectangle corners of a rectangle or line shape.

        Raises:
            TypeError: If the shape is a circle.
        """
        props = self._props
        if isinstance(props, RectProps):
            return props.corners
        if isinstance(props, LineProps):
            return line_to_corners(props.start, props.end, props.width)
        raise TypeError('Circle shapes have no corners')

    def collide(self, other: 'CollisionShape') -> CollisionResult:
        """Test this shape against another one.

        Args:
            other: The shape to test against.

        Returns:
            False when apart, the minimum translation vector for this shape
            when two polygons overlap, True for an overlap involving a circle.
        """
        if not self.bounds().intersects(other.bounds()):
            return False
        return _DISPATCH[(self.kind, other.kind)](self, other)


def line_to_corners(start: Point, end: Point, width: float) -> Tuple[Point, Point, Point, Point]:
    """Convert a thick line into the corners of its equivalent rectangle.

    Args:
        start: Line start.
        end: Line end.
        width: Full width of the line.

    Returns:
        Corners ordered start+h, start-h, end-h, end+h where h is the
        half-width perpendicular offset.
    """
    direction = MathUtils.subtract_points(end, start)
    perp = Point(-direction.y, direction.x)
    perp_len = MathUtils.length_v(perp)
    if perp_len == 0:
        half = Point(0.0, 0.0)
    else:
        half = MathUtils.scale_point(perp, width / 2 / perp_len)
    return (
        MathUtils.add_points(start, half),
        MathUtils.subtract_points(start, half),
        MathUtils.subtract_points(end, half),
        MathUtils.add_points(end, half),
    )


def _axis_key(unit: np.ndarray) -> float:
    """Orientation-free angle of an axis in degrees, in [0, 180)."""
    return round(math.degrees(math.atan2(unit[1], unit[0])) % 180, 6) % 180


def rect_rect_collision(corners_a: Sequence[Point], corners_b: Sequence[Point],
                        order: float = 1.0) -> CollisionResult:
    """Separating-axis test between two rectangles.

    Among axes of equal depth the one with the smallest canonical angle wins,
    so swapping the arguments picks the same axis. When both push directions
    along that axis are equally deep (the shapes share a centre on it) the
    direction follows the sign of ``order``; callers pass opposite signs for
    the two argument orders to keep the result anti-symmetric.

    Args:
        corners_a: Corners of the first rectangle, in winding order.
        corners_b: Corners of the second rectangle, in winding order.
        order: +1 or -1, direction used when the push direction is tied.

    Returns:
        False if a separating axis exists, otherwise the minimum translation
        vector that moves the first rectangle out of the second.
    """
    a = np.array([(c.x, c.y) for c in corners_a], dtype=float)
    b = np.array([(c.x, c.y) for c in corners_b], dtype=float)
    axes = (a[3] - a[0], a[3] - a[2], b[0] - b[1], b[0] - b[3])

    best = None
    best_depth = math.inf
    best_key = math.inf
    for axis in axes:
        norm = float(np.hypot(axis[0], axis[1]))
        if norm == 0:
            continue
        unit = axis / norm
        key = _axis_key(unit)
        reference = np.array([math.cos(math.radians(key)), math.sin(math.radians(key))])
        if unit @ reference < 0:
            unit = -unit

        positions_a = a @ unit
        positions_b = b @ unit
        if positions_a.max() < positions_b.min() or positions_b.max() < positions_a.min():
            return False

        # backward moves A along -unit, forward along +unit
        backward = float(positions_a.max() - positions_b.min())
        forward = float(positions_b.max() - positions_a.min())
        if abs(backward - forward) <= _DEPTH_TOLERANCE:
            direction = 1.0 if order >= 0 else -1.0
        else:
            direction = 1.0 if forward < backward else -1.0
        depth = min(backward, forward)

        if depth < best_depth - _DEPTH_TOLERANCE or (
                abs(depth - best_depth) <= _DEPTH_TOLERANCE and key < best_key):
            best = unit * (direction * depth)
            best_depth, best_key = depth, key

    if best is None:
        return False
    return Point(float(best[0]), float(best[1]))


def rect_circle_collision(corners: Sequence[Point], center: Point, radius: float) -> bool:
    """Approximate rectangle versus circle overlap test.

    Not exact for rotated rectangles that the circle deeply penetrates.

    Args:
        corners: Rectangle corners in winding order.
        center: Circle center.
        radius: Circle radius.

    Returns:
        True if the shapes overlap.
    """
    radius2 = radius * radius
    if any(MathUtils.length2(corner, center) <= radius2 for corner in corners):
        return True

    for i, edge_start in enumerate(corners):
        edge_end = corners[(i + 1) % len(corners)]
        measure = MathUtils.distance_to_line(center, edge_start, edge_end)
        if 0 < measure.line_proj2 < measure.length2 and measure.distance2 <= radius2:
            return True

    axes = (
        MathUtils.subtract_points(corners[3], corners[0]),
        MathUtils.subtract_points(corners[3], corners[2]),
    )
    projections = (
        MathUtils.project(MathUtils.subtract_points(center, corners[0]), axes[0]),
        MathUtils.project(MathUtils.subtract_points(center, corners[2]), axes[1]),
    )
    for axis, projection in zip(axes, projections):
        if projection.dot_product < 0 or MathUtils.length_v2(projection.projected) > MathUtils.length_v2(axis):
            return False
    return True


def _polygon_polygon(a: CollisionShape, b: CollisionShape) -> CollisionResult:
    corners_a, corners_b = a.corners(), b.corners()
    # order flips sign when a and b swap
    key_a = sorted((c.x, c.y) for c in corners_a)
    key_b = sorted((c.x, c.y) for c in corners_b)
    if key_a != key_b:
        order = 1.0 if key_a < key_b else -1.0
    else:
        order = 1.0 if id(a) < id(b) else -1.0
    return rect_rect_collision(corners_a, corners_b, order)


def _polygon_circle(a: CollisionShape, b: CollisionShape) -> CollisionResult:
    return rect_circle_collision(a.corners(), b.props.center, b.props.radius)


def _circle_polygon(a: CollisionShape, b: CollisionShape) -> CollisionResult:
    return rect_circle_collision(b.corners(), a.props.center, a.props.radius)


def _circle_circle(a: CollisionShape, b: CollisionShape) -> CollisionResult:
    reach = a.props.radius + b.props.radius
    return MathUtils.length2(a.props.center, b.props.center) <= reach * reach


_DISPATCH: Dict[Tuple[ShapeKind, ShapeKind], Callable[[CollisionShape, CollisionShape], CollisionResult]] = {
    (ShapeKind.RECT, ShapeKind.RECT): _polygon_polygon,
    (ShapeKind.RECT, ShapeKind.LINE): _polygon_polygon,
    (ShapeKind.RECT, ShapeKind.CIRCLE): _polygon_circle,
    (ShapeKind.LINE, ShapeKind.RECT): _polygon_polygon,
    (ShapeKind.LINE, ShapeKind.LINE): _polygon_polygon,
    (ShapeKind.LINE, ShapeKind.CIRCLE): _polygon_circle,
    (ShapeKind.CIRCLE, ShapeKind.RECT): _circle_polygon,
    (ShapeKind.CIRCLE, ShapeKind.LINE): _circle_polygon,
    (ShapeKind.CIRCLE, ShapeKind.CIRCLE): _circle_circle,
}
