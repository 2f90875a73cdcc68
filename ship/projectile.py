"""
Projectiles fired by the spaceship.

A projectile lives for a fixed number of ticks rather than a fixed duration:
each update call burns one tick of life whatever the time delta.
"""

import logging

from common.Vector import Vector
from common.toric import WorldBounds

logger = logging.getLogger(__name__)


class Projectile:
    """
    Moving shot identified by an integer handle.

    The handle is issued by the owning Space and is the key used for
    membership and removal, so two projectiles with equal position and
    velocity stay distinct.
    """

    def __init__(self, handle: int, position: Vector, velocity: Vector,
                 world: WorldBounds, life_duration: int):
        self.handle = handle
        self.position = world.remap(position)
        self.velocity = velocity
        self.world = world
        self.life_duration = life_duration

    @property
    def is_alive(self) -> bool:
        return self.life_duration > 0

    def hits(self, asteroid) -> bool:
        """Whether the current position lies inside `asteroid`."""
        return asteroid.contains(self.position)

    def update(self, dt: float) -> None:
        if self.life_duration > 0:
            self.life_duration -= 1
            if self.life_duration == 0:
                logger.debug("Projectile %d expired at %s", self.handle, self.position)
        self.position = self.world.remap(self.position + self.velocity * dt)

    def __repr__(self) -> str:
        return (f"Projectile(handle={self.handle}, position={self.position}, "
                f"life_duration={self.life_duration})")
