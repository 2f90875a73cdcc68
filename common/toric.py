"""
Toric World Coordinates

The asteroid field wraps around: anything leaving one edge comes back on the
opposite edge. WorldBounds owns the arithmetic for that: remapping arbitrary
positions into canonical coordinates and measuring the shortest displacement
between two points across the seams.
"""

import math
from dataclasses import dataclass

from common.Vector import Vector


def wrap_coordinate(value: float, bound: float) -> float:
    """
    Map `value` into [0, bound).

    Same as `value - floor(value / bound) * bound`. Float modulo can round up
    to exactly `bound` for tiny negative inputs, so that case folds back to 0.
    """
    wrapped = math.fmod(value, bound)
    if wrapped < 0:
        wrapped += bound
    if wrapped >= bound:
        return 0.0
    return wrapped


def shortest_offset(delta: float, bound: float) -> float:
    """Shortest signed offset equivalent to `delta` on a circle of length `bound`."""
    delta = wrap_coordinate(delta, bound)
    if delta > bound / 2:
        delta -= bound
    return delta


@dataclass(frozen=True)
class WorldBounds:
    """Width and height of the toric space, in pixels."""
    width: float
    height: float

    @property
    def center(self) -> Vector:
        return Vector(self.width / 2, self.height / 2)

    def remap(self, position: Vector) -> Vector:
        """
        Map any position to canonical toric coordinates.
        Idempotent, and the identity on in-bounds positions.
        """
        return Vector(
            wrap_coordinate(position.x, self.width),
            wrap_coordinate(position.y, self.height),
        )

    def contains(self, position: Vector) -> bool:
        return 0 <= position.x < self.width and 0 <= position.y < self.height

    def delta(self, origin: Vector, target: Vector) -> Vector:
        """Shortest displacement from `origin` to `target` across the seams."""
        return Vector(
            shortest_offset(target.x - origin.x, self.width),
            shortest_offset(target.y - origin.y, self.height),
        )

    def distance(self, a: Vector, b: Vector) -> float:
        return self.delta(a, b).length()
