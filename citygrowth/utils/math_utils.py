"""Mathematical utility functions for vector and geometric operations.

Headings are expressed in degrees measured clockwise from the +y axis, so a
heading of 0 points along +y and a heading of 90 points along +x.
"""

import math
from typing import NamedTuple, Optional, Tuple

from citygrowth.citygen.dataclass import Point

EPSILON = 1e-8


class LineDistance(NamedTuple):
    """Result of projecting a point onto the infinite line through a segment."""
    distance2: float
    point_on_line: Point
    line_proj2: float
    length2: float


class Projection(NamedTuple):
    """Result of projecting one vector onto another."""
    dot_product: float
    projected: Point


class MathUtils:
    """Collection of mathematical utility functions for geometric operations."""

    @staticmethod
    def subtract_points(p1: Point, p2: Point) -> Point:
        """Subtract p2 from p1 (vector subtraction).

        Args:
            p1: First point.
            p2: Second point to subtract.

        Returns:
            A new Point representing p1 - p2.
        """
        return Point(p1.x - p2.x, p1.y - p2.y)

    @staticmethod
    def add_points(p1: Point, p2: Point) -> Point:
        """Add two points together (vector addition).

        Args:
            p1: First point.
            p2: Second point.

        Returns:
            A new Point representing p1 + p2.
        """
        return Point(p1.x + p2.x, p1.y + p2.y)

    @staticmethod
    def scale_point(p: Point, factor: float) -> Point:
        """Multiply a vector by a scalar."""
        return Point(p.x * factor, p.y * factor)

    @staticmethod
    def cross_product(a: Point, b: Point) -> float:
        """Calculate the 2D cross product of two points.

        Args:
            a: First point.
            b: Second point.

        Returns:
            The cross product a × b.
        """
        return a.x * b.y - a.y * b.x

    @staticmethod
    def dot_product(a: Point, b: Point) -> float:
        """Calculate the dot product of two points.

        Args:
            a: First point.
            b: Second point.

        Returns:
            The dot product a · b.
        """
        return a.x * b.x + a.y * b.y

    @staticmethod
    def length(a: Point, b: Point) -> float:
        """Calculate the Euclidean distance between two points.

        Args:
            a: First point.
            b: Second point.

        Returns:
            The distance between points a and b.
        """
        return math.sqrt(MathUtils.length2(a, b))

    @staticmethod
    def length2(a: Point, b: Point) -> float:
        """Calculate the squared distance between two points."""
        return (b.x - a.x) ** 2 + (b.y - a.y) ** 2

    @staticmethod
    def length_v(a: Point) -> float:
        """Calculate the magnitude (length) of a vector.

        Args:
            a: The point (vector) to calculate magnitude for.

        Returns:
            The magnitude of the vector.
        """
        return math.sqrt(a.x * a.x + a.y * a.y)

    @staticmethod
    def length_v2(a: Point) -> float:
        """Calculate the squared magnitude of a vector."""
        return a.x * a.x + a.y * a.y

    @staticmethod
    def equal_v(a: Point, b: Point) -> bool:
        """Check whether two points coincide within a small tolerance."""
        return MathUtils.length2(a, b) <= EPSILON

    @staticmethod
    def heading(v: Point) -> float:
        """Return the heading of a vector in degrees, clockwise from +y.

        Args:
            v: The direction vector.

        Returns:
            Heading in (-180, 180]. A zero vector has heading 0.
        """
        return math.degrees(math.atan2(v.x, v.y))

    @staticmethod
    def point_from_heading(start: Point, heading: float, length: float) -> Point:
        """Walk length units from start along a heading given in degrees."""
        rad = math.radians(heading)
        return Point(start.x + length * math.sin(rad), start.y + length * math.cos(rad))

    @staticmethod
    def min_degree_difference(val1: float, val2: float) -> float:
        """Calculate the minimum difference between two undirected angles in degrees.

        Args:
            val1: First angle in degrees.
            val2: Second angle in degrees.

        Returns:
            The minimum difference between the angles (always <= 90).
        """
        bottom = abs(val1 - val2) % 180
        return min(bottom, abs(bottom - 180))

    @staticmethod
    def do_line_segments_intersect(
        p: Point, p2: Point, q: Point, q2: Point, strict: bool = True, buffer: float = 0.001
    ) -> Optional[Tuple[Point, float]]:
        """Determine if two line segments intersect and find the intersection point.

        Parallel and collinear segments never intersect.

        Args:
            p: First point of first segment.
            p2: Second point of first segment.
            q: First point of second segment.
            q2: Second point of second segment.
            strict: Exclude hits within buffer of either segment's endpoints.
            buffer: Width of the excluded band near the endpoints in strict mode.

        Returns:
            If segments intersect, returns (intersection_point, t) where t is the
            parameter along the first segment. Otherwise returns None.
        """
        r = MathUtils.subtract_points(p2, p)
        s = MathUtils.subtract_points(q2, q)
        qp = MathUtils.subtract_points(q, p)

        denominator = MathUtils.cross_product(r, s)
        if denominator == 0:
            return None
        u = MathUtils.cross_product(qp, r) / denominator
        t = MathUtils.cross_product(qp, s) / denominator

        if strict:
            hit = buffer < t < 1 - buffer and buffer < u < 1 - buffer
        else:
            hit = 0 <= t <= 1 and 0 <= u <= 1
        if not hit:
            return None
        return Point(p.x + t * r.x, p.y + t * r.y), t

    @staticmethod
    def project(v: Point, onto: Point) -> Projection:
        """Project vector v onto vector onto.

        Args:
            v: Vector being projected.
            onto: Vector defining the projection axis.

        Returns:
            The dot product of the two vectors and the projected vector.
        """
        dot = MathUtils.dot_product(v, onto)
        onto_len2 = MathUtils.length_v2(onto)
        if onto_len2 == 0:
            return Projection(dot, Point(0.0, 0.0))
        return Projection(dot, MathUtils.scale_point(onto, dot / onto_len2))

    @staticmethod
    def distance_to_line(p: Point, a: Point, b: Point) -> LineDistance:
        """Measure point p against the infinite line through a and b.

        Callers check ``0 < line_proj2 < length2`` to know whether the
        projection lands strictly inside the segment ab.

        Args:
            p: The point to measure.
            a: Start of the line segment.
            b: End of the line segment.

        Returns:
            Squared distance to the line, the projected point, the signed
            squared projection length along ab and the squared length of ab.
        """
        ap = MathUtils.subtract_points(p, a)
        ab = MathUtils.subtract_points(b, a)
        projection = MathUtils.project(ap, ab)
        point_on_line = MathUtils.add_points(a, projection.projected)
        line_proj2 = math.copysign(1, projection.dot_product) * MathUtils.length_v2(projection.projected)
        return LineDistance(
            MathUtils.length2(p, point_on_line),
            point_on_line,
            line_proj2,
            MathUtils.length_v2(ab),
        )

    @staticmethod
    def interpolate_point(start: Point, end: Point, t: float) -> Point:
        """Interpolate a point between two points.

        Args:
            start: Starting point.
            end: Ending point.
            t: Interpolation parameter (0-1).

        Returns:
            A new Point representing the interpolated position.
        """
        x = start.x + (end.x - start.x) * t
        y = start.y + (end.y - start.y) * t
        return Point(x, y)
