"""
Asteroids drifting through the toric field.

An asteroid keeps its outline in local coordinates (vertex offsets around its
centre). Containment queries measure the shortest toric displacement from the
centre to the query point and test it against that local outline, so a rock
straddling a world edge is hit from both sides of the seam.
"""

from typing import List, Optional

from common.Vector import Vector
from common.polygon import Polygon
from common.toric import WorldBounds
from config.game_config import GameConfig


class Asteroid:
    """
    Rock with a size tier that shrinks on every fragmentation.

    **Usage**:
    ```python
    rock = generator.asteroid(3.0, world)
    rock.update(dt)
    if rock.contains(point):
        children = rock.fragments(generator)
    ```
    """

    def __init__(self, position: Vector, velocity: Vector, size: float,
                 local_shape: Polygon, world: WorldBounds,
                 config: Optional[GameConfig] = None):
        self.config = config or GameConfig.create_default()
        self.world = world
        self.position = world.remap(position)
        self.velocity = velocity
        self.size = size
        self.local_shape = local_shape
        self._radius = local_shape.bounding_radius()

    @property
    def shape(self) -> Polygon:
        """Outline translated to the current position, for rendering."""
        return self.local_shape.translate(self.position)

    @property
    def radius(self) -> float:
        return self._radius

    def contains(self, point: Vector) -> bool:
        offset = self.world.delta(self.position, point)
        # Cheap rejection before the polygon walk
        if offset.length_squared() > self._radius ** 2:
            return False
        return self.local_shape.contains(offset)

    def can_fragment(self) -> bool:
        return self.size > self.config.asteroid.NO_FRAGMENT_SIZE_LIMIT

    def fragments(self, generator) -> List["Asteroid"]:
        """
        Children left behind when this asteroid is destroyed.

        Args:
            generator: RandomGenerator drawing fragment velocity and outline

        Returns:
            List[Asteroid]: empty at or below the no-fragment size limit,
            otherwise NUMBER_OF_FRAGMENTS rocks of size * FRAGMENT_SIZE_RATIO
        """
        if not self.can_fragment():
            return []
        asteroid_config = self.config.asteroid
        child_size = self.size * asteroid_config.FRAGMENT_SIZE_RATIO
        return [generator.fragment(self, child_size)
                for _ in range(asteroid_config.NUMBER_OF_FRAGMENTS)]

    def update(self, dt: float) -> None:
        self.position = self.world.remap(self.position + self.velocity * dt)

    def __repr__(self) -> str:
        return f"Asteroid(position={self.position}, size={self.size})"
