"""
Polygon Shapes and Point Containment

Asteroid rocks and the ship hull are described as polygons. This module keeps
the vertex list immutable and provides the point-in-polygon test used for
both ship/asteroid collision and projectile hits.

**Containment**: even-odd ray casting. A horizontal ray is cast from the query
point and edge crossings are counted; an odd count means the point is inside.
This works for the irregular (possibly concave) rock outlines as well as for
convex hulls. Polygons with fewer than three vertices enclose no area and
contain nothing.
"""

import math
from dataclasses import dataclass
from typing import Iterable, Tuple

import numpy as np

from common.Vector import Vector


@dataclass(frozen=True)
class Polygon:
    """Closed polygon given by its vertices in drawing order."""
    vertices: Tuple[Vector, ...]

    @classmethod
    def from_points(cls, points: Iterable) -> "Polygon":
        """Build from Vectors or (x, y) pairs."""
        vertices = []
        for point in points:
            if isinstance(point, Vector):
                vertices.append(point)
            else:
                x, y = point
                vertices.append(Vector(float(x), float(y)))
        return cls(tuple(vertices))

    @classmethod
    def regular(cls, radius: float, count: int) -> "Polygon":
        """Regular polygon centred on the origin."""
        if count <= 0:
            return cls(())
        step = 360.0 / count
        return cls(tuple(Vector.from_angle(i * step, radius) for i in range(count)))

    def __len__(self) -> int:
        return len(self.vertices)

    def is_degenerate(self) -> bool:
        return len(self.vertices) < 3

    def translate(self, offset: Vector) -> "Polygon":
        return Polygon(tuple(vertex + offset for vertex in self.vertices))

    def rotate(self, degrees: float) -> "Polygon":
        """Rotate every vertex around the origin."""
        return Polygon(tuple(vertex.rotate(degrees) for vertex in self.vertices))

    def contains(self, point: Vector) -> bool:
        """
        Even-odd point containment test.

        Args:
            point: Query point, in the same frame as the vertices

        Returns:
            bool: True if the point lies inside the polygon
        """
        if self.is_degenerate():
            return False

        inside = False
        px, py = point.x, point.y
        previous = self.vertices[-1]
        for current in self.vertices:
            # Edge crosses the horizontal line through the point
            if (current.y > py) != (previous.y > py):
                crossing_x = (previous.x - current.x) * (py - current.y) / (previous.y - current.y) + current.x
                if px < crossing_x:
                    inside = not inside
            previous = current
        return inside

    def bounding_radius(self) -> float:
        """Largest vertex distance from the origin of the polygon frame."""
        if not self.vertices:
            return 0.0
        return max(vertex.length() for vertex in self.vertices)

    def area(self) -> float:
        """Unsigned area (shoelace formula)."""
        if self.is_degenerate():
            return 0.0
        points = self.as_array()
        x, y = points[:, 0], points[:, 1]
        return float(abs(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1))) / 2.0)

    def as_array(self) -> np.ndarray:
        """Vertices as an (n, 2) float array, for renderers and observers."""
        if not self.vertices:
            return np.zeros((0, 2), dtype=np.float64)
        return np.array([vertex.as_tuple() for vertex in self.vertices], dtype=np.float64)


def irregular_polygon(radius: float, jitters: Iterable[float]) -> Polygon:
    """
    Rock outline: one vertex per jitter factor, evenly spaced in angle,
    at distance `radius * jitter` from the origin.
    """
    jitters = list(jitters)
    count = len(jitters)
    if count == 0:
        return Polygon(())
    vertices = []
    for i, jitter in enumerate(jitters):
        angle = (math.tau / count) * i
        r = radius * jitter
        vertices.append(Vector(math.cos(angle) * r, math.sin(angle) * r))
    return Polygon(tuple(vertices))
