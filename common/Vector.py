"""
2D Vector Mathematics Utility

This module provides the immutable 2D vector used for positions, velocities
and headings in the asteroid field. Every operation returns a new value, so
vectors can be shared freely between the ship, projectiles and asteroids.

**Key Operations**:
- Vector arithmetic (addition, subtraction, scalar multiplication)
- Magnitude calculation (length, length_squared for comparisons)
- Normalization for unit headings
- Rotation and angle extraction, both in degrees

**Conventions**: Screen coordinates (y grows downwards). An angle of 0 degrees
faces +x and positive angles turn clockwise on screen.
"""

import math
from dataclasses import dataclass
from typing import ClassVar, Tuple


@dataclass(frozen=True)
class Vector:
    """
    Immutable 2D vector for position, velocity and heading calculations.

    **Common Usage Patterns**:
    - Positions: Vector(400, 400)
    - Headings: Vector.from_angle(90)
    - Displacements: (target - position).normalize()
    - Distances: position.distance_to(other)
    """
    x: float
    y: float

    ZERO: ClassVar["Vector"]

    @classmethod
    def from_angle(cls, degrees: float, length: float = 1.0) -> "Vector":
        """Build a vector of given length pointing at `degrees`."""
        radians = math.radians(degrees)
        return cls(math.cos(radians) * length, math.sin(radians) * length)

    def __add__(self, other: "Vector") -> "Vector":
        """Add two vectors component-wise. Used for position + displacement."""
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector") -> "Vector":
        """Subtract vectors to get displacement from other to self."""
        return Vector(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector":
        """Scale vector by multiplying each component by scalar."""
        return Vector(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> "Vector":
        """Allow scalar * vector syntax (e.g., 2 * Vector(1,1))."""
        return self.__mul__(scalar)

    def __neg__(self) -> "Vector":
        return Vector(-self.x, -self.y)

    def translate(self, offset: "Vector") -> "Vector":
        """Move this point by `offset`."""
        return self + offset

    def length(self) -> float:
        """Calculate Euclidean magnitude of vector."""
        return math.hypot(self.x, self.y)

    def length_squared(self) -> float:
        """
        Calculate squared magnitude without sqrt.
        Useful for distance comparisons where exact value isn't needed.
        """
        return self.x ** 2 + self.y ** 2

    def normalize(self) -> "Vector":
        """
        Return unit vector (length 1) in same direction.
        Returns zero vector if original length is zero.
        """
        l = self.length()
        if l == 0:
            return Vector.ZERO
        return Vector(self.x / l, self.y / l)

    def dot(self, other: "Vector") -> float:
        """
        Calculate dot product with another vector.
        Returns: |a| * |b| * cos(angle_between_vectors)
        """
        return self.x * other.x + self.y * other.y

    def distance_to(self, other: "Vector") -> float:
        """Plain Euclidean distance, ignoring wrap-around."""
        return (self - other).length()

    def rotate(self, degrees: float) -> "Vector":
        """Rotate around the origin by `degrees` (clockwise on screen)."""
        radians = math.radians(degrees)
        cos_a = math.cos(radians)
        sin_a = math.sin(radians)
        return Vector(self.x * cos_a - self.y * sin_a,
                      self.x * sin_a + self.y * cos_a)

    def angle(self) -> float:
        """
        Angle of this vector in degrees, 0 facing +x, in [-180, 180].
        The zero vector has angle 0.
        """
        return math.degrees(math.atan2(self.y, self.x))

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def __repr__(self) -> str:
        return f"Vector({self.x}, {self.y})"


Vector.ZERO = Vector(0.0, 0.0)
