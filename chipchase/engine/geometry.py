# Copyright (C) 2025 Richard Owen
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""Low-level geometry primitives used by the chip evaluation.

The geometry layer provides an immutable point/vector type, an angle helper,
triangles, and the axis-aligned target rectangle. Every value compares by
exact structure so test expectations stay reproducible, while tolerance-based
comparisons are only offered explicitly (see :meth:`Angle.is_close`).
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple


@dataclass(frozen=True)
class Point:
    """Two-dimensional point that doubles as a displacement vector.

    The class mirrors the minimum the evaluation needs: addition/subtraction
    for offsets, scalar multiplication for rescaling, and helpers for length,
    normalisation and orientation. Coordinates are measured in metres with
    the origin at the centre of the field.

    Parameters
    ----------
    x : float
        Coordinate along the goal-to-goal axis.
    y : float
        Coordinate along the touch-line-to-touch-line axis.
    """

    x: float
    y: float

    def __add__(self, other: "Point") -> "Point":
        """Return the vector sum of ``self`` and ``other``."""
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        """Return the vector difference ``self - other``."""
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Point":
        """Scale the vector by ``scalar`` while preserving direction."""
        return Point(self.x * scalar, self.y * scalar)

    def length(self) -> float:
        """Return the Euclidean length of the vector.

        Returns
        -------
        float
            Scalar magnitude measured in metres.
        """
        return math.sqrt(self.x * self.x + self.y * self.y)

    def normalize(self, length: float = 1.0) -> "Point":
        """Return a vector pointing the same way as ``self`` with a new length.

        Parameters
        ----------
        length : float, default=1.0
            Desired length of the returned vector.

        Returns
        -------
        Point
            Rescaled vector; the zero vector when ``self`` has no length.
        """
        current = self.length()
        if current == 0:
            return Point(0.0, 0.0)
        return Point(self.x / current * length, self.y / current * length)

    def distance_to(self, other: "Point") -> float:
        """Return the straight-line distance between ``self`` and ``other``.

        Parameters
        ----------
        other : Point
            Point whose separation from ``self`` should be measured.

        Returns
        -------
        float
            Euclidean distance in metres between the two points.
        """
        return (other - self).length()

    def cross(self, other: "Point") -> float:
        """Return the z component of the cross product ``self x other``.

        Parameters
        ----------
        other : Point
            Right-hand operand of the cross product.

        Returns
        -------
        float
            Positive when ``other`` lies counter-clockwise of ``self``.
        """
        return self.x * other.y - self.y * other.x

    def orientation(self) -> "Angle":
        """Return the direction of the vector measured from the +x axis.

        Returns
        -------
        Angle
            Angle in the range [-pi, pi].
        """
        return Angle(math.atan2(self.y, self.x))


@dataclass(frozen=True)
class Angle:
    """Angle stored in radians.

    Parameters
    ----------
    radians : float
        Raw angle value; not normalised on construction.
    """

    radians: float

    EPSILON = 1e-15

    @classmethod
    def of_radians(cls, radians: float) -> "Angle":
        """Build an angle from a value in radians.

        Parameters
        ----------
        radians : float
            Angle expressed in radians.

        Returns
        -------
        Angle
            Angle holding ``radians`` unchanged.
        """
        return cls(radians)

    @classmethod
    def of_degrees(cls, degrees: float) -> "Angle":
        """Build an angle from a value in degrees.

        Parameters
        ----------
        degrees : float
            Angle expressed in degrees.

        Returns
        -------
        Angle
            Equivalent angle in radians.
        """
        return cls(math.radians(degrees))

    def __sub__(self, other: "Angle") -> "Angle":
        """Return the signed difference ``self - other``."""
        return Angle(self.radians - other.radians)

    def to_degrees(self) -> float:
        """Return the angle in degrees.

        Returns
        -------
        float
            Angle value converted from radians.
        """
        return math.degrees(self.radians)

    def angle_mod(self) -> "Angle":
        """Rotate the angle by whole turns until it lies in [-pi, pi].

        Returns
        -------
        Angle
            Equivalent angle in the principal range.
        """
        return Angle(math.remainder(self.radians, 2 * math.pi))

    def abs(self) -> "Angle":
        """Return the absolute value of the angle.

        Returns
        -------
        Angle
            Non-negative angle of equal magnitude.
        """
        return Angle(abs(self.radians))

    def min_diff(self, other: "Angle") -> "Angle":
        """Return the smallest rotation separating ``self`` and ``other``.

        Parameters
        ----------
        other : Angle
            Angle to compare against.

        Returns
        -------
        Angle
            Separation in the range [0, pi].
        """
        return (self - other).angle_mod().abs()

    def is_close(self, other: "Angle") -> bool:
        """Check whether two angles point the same way.

        Parameters
        ----------
        other : Angle
            Angle to compare against.

        Returns
        -------
        bool
            ``True`` when the minimal separation is within ``EPSILON``.
        """
        return self.angle_mod().min_diff(other.angle_mod()).radians <= self.EPSILON


def vertex_angle(a: Point, b: Point, c: Point) -> Angle:
    """Return the angle at ``b`` swept from ``b -> c`` to ``b -> a``.

    Parameters
    ----------
    a : Point
        End of the first ray.
    b : Point
        Vertex shared by both rays.
    c : Point
        End of the second ray.

    Returns
    -------
    Angle
        Signed, un-normalised difference of the two ray orientations.
    """
    return (a - b).orientation() - (c - b).orientation()


@dataclass(frozen=True)
class Triangle:
    """Ordered triple of points.

    Vertex order is preserved exactly as supplied so that enumeration order
    stays reproducible, although none of the geometric quantities depend on
    it. Collinear or coincident vertices are allowed; such triangles have no
    area and contain no points.

    Parameters
    ----------
    p1 : Point
        First vertex.
    p2 : Point
        Second vertex.
    p3 : Point
        Third vertex.
    """

    p1: Point
    p2: Point
    p3: Point

    def __getitem__(self, index: int) -> Point:
        """Return the vertex at ``index`` (0, 1 or 2)."""
        return self.vertices()[index]

    def __iter__(self) -> Iterator[Point]:
        """Iterate over the vertices in order."""
        return iter(self.vertices())

    def __len__(self) -> int:
        """Return the number of vertices."""
        return 3

    def vertices(self) -> Tuple[Point, Point, Point]:
        """Return the vertices as a tuple.

        Returns
        -------
        Tuple[Point, Point, Point]
            ``(p1, p2, p3)`` in construction order.
        """
        return (self.p1, self.p2, self.p3)

    def centroid(self) -> Point:
        """Return the arithmetic mean of the three vertices.

        Returns
        -------
        Point
            Centre of mass of the triangle.
        """
        return Point(
            (self.p1.x + self.p2.x + self.p3.x) / 3,
            (self.p1.y + self.p2.y + self.p3.y) / 3,
        )

    def area(self) -> float:
        """Return the unsigned area using the shoelace formula.

        Returns
        -------
        float
            Area in square metres; zero for degenerate triangles.
        """
        p1, p2, p3 = self.p1, self.p2, self.p3
        return abs(0.5 * ((p2.x - p1.x) * (p3.y - p1.y) - (p3.x - p1.x) * (p2.y - p1.y)))

    def edge_lengths(self) -> Tuple[float, float, float]:
        """Return the three edge lengths.

        Returns
        -------
        Tuple[float, float, float]
            Lengths of ``p1-p2``, ``p1-p3`` and ``p2-p3``.
        """
        return (
            (self.p2 - self.p1).length(),
            (self.p3 - self.p1).length(),
            (self.p3 - self.p2).length(),
        )

    def interior_angles(self) -> Tuple[float, float, float]:
        """Return the interior angle at each vertex in degrees.

        Returns
        -------
        Tuple[float, float, float]
            Angles at ``p1``, ``p2`` and ``p3``, each in [0, 180].
        """
        p1, p2, p3 = self.p1, self.p2, self.p3
        return (
            vertex_angle(p2, p1, p3).angle_mod().abs().to_degrees(),
            vertex_angle(p1, p2, p3).angle_mod().abs().to_degrees(),
            vertex_angle(p1, p3, p2).angle_mod().abs().to_degrees(),
        )

    def shrink(self, margin: float) -> "Triangle":
        """Pull every vertex towards the centroid by a fixed distance.

        Parameters
        ----------
        margin : float
            Distance in metres each vertex travels along its vertex-to-centroid
            direction.

        Returns
        -------
        Triangle
            Shrunk triangle. A vertex lying on the centroid has no direction
            to travel in and is kept where it is.
        """
        center = self.centroid()

        def pull(vertex: Point) -> Point:
            offset = center - vertex
            if offset.length() == 0:
                return vertex
            return vertex + offset.normalize(margin)

        return Triangle(pull(self.p1), pull(self.p2), pull(self.p3))

    def contains(self, point: Point) -> bool:
        """Check whether ``point`` lies strictly inside the triangle.

        Points on an edge or a vertex are not contained, and a degenerate
        triangle contains nothing.

        Parameters
        ----------
        point : Point
            Location to test.

        Returns
        -------
        bool
            ``True`` when all three edge cross products share a strict sign.
        """
        d1 = (self.p2 - self.p1).cross(point - self.p1)
        d2 = (self.p3 - self.p2).cross(point - self.p2)
        d3 = (self.p1 - self.p3).cross(point - self.p3)
        return (d1 > 0 and d2 > 0 and d3 > 0) or (d1 < 0 and d2 < 0 and d3 < 0)


@dataclass(frozen=True)
class TargetArea:
    """Closed axis-aligned rectangle a chip target must fall inside.

    Parameters
    ----------
    min_x : float
        Smallest permitted x coordinate.
    max_x : float
        Largest permitted x coordinate.
    min_y : float
        Smallest permitted y coordinate.
    max_y : float
        Largest permitted y coordinate.
    """

    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @classmethod
    def from_corners(cls, corners: Iterable[Point]) -> "TargetArea":
        """Build the bounding rectangle of ``corners``.

        Parameters
        ----------
        corners : Iterable[Point]
            Rectangle corners in any order and under any sign convention.

        Returns
        -------
        TargetArea
            Rectangle with normalised bounds.

        Raises
        ------
        ValueError
            If ``corners`` is empty.
        """
        points = list(corners)
        if not points:
            raise ValueError("A target area needs at least one corner")
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return cls(min(xs), max(xs), min(ys), max(ys))

    def contains(self, point: Point) -> bool:
        """Check whether ``point`` lies inside or on the rectangle.

        Parameters
        ----------
        point : Point
            Location to test.

        Returns
        -------
        bool
            ``True`` when the point is within the bounds, edges included.
        """
        return self.min_x <= point.x <= self.max_x and self.min_y <= point.y <= self.max_y

    def corners(self) -> Tuple[Point, Point, Point, Point]:
        """Return the rectangle corners counter-clockwise from the lower left.

        Returns
        -------
        Tuple[Point, Point, Point, Point]
            Corner points of the rectangle.
        """
        return (
            Point(self.min_x, self.min_y),
            Point(self.max_x, self.min_y),
            Point(self.max_x, self.max_y),
            Point(self.min_x, self.max_y),
        )
