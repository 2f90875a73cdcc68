"""
Random Generation for the Asteroid Field

All randomness in the simulation goes through one RandomGenerator instance
handed to the Space at construction: initial rock placement, rock outlines and
fragment velocities. Seeding it makes whole runs reproducible.

Backed by a numpy Generator so the RL environment can share the generator
Gymnasium seeds in `reset(seed=...)`.
"""

from typing import Optional

import numpy as np

from common.Vector import Vector
from common.polygon import Polygon, irregular_polygon
from common.toric import WorldBounds
from config.game_config import GameConfig
from asteroid.asteroid import Asteroid


class RandomGenerator:
    """
    Seedable source of random positions, headings and asteroids.

    **Usage**:
    ```python
    generator = RandomGenerator(seed=42)
    rock = generator.asteroid(3.0, world)
    child = generator.fragment(rock, 1.5)
    ```
    """

    def __init__(self, seed: Optional[int] = None, config: Optional[GameConfig] = None,
                 rng: Optional[np.random.Generator] = None):
        """
        Args:
            seed: Seed for a fresh numpy generator (ignored if `rng` is given)
            config: Game configuration (creates default if None)
            rng: Existing numpy generator to draw from
        """
        self.config = config or GameConfig.create_default()
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    @classmethod
    def from_rng(cls, rng: np.random.Generator, config: Optional[GameConfig] = None) -> "RandomGenerator":
        return cls(config=config, rng=rng)

    def position(self, world: WorldBounds) -> Vector:
        """Uniform position in [0, width) x [0, height)."""
        return world.remap(Vector(float(self.rng.uniform(0, world.width)),
                                  float(self.rng.uniform(0, world.height))))

    def heading(self) -> Vector:
        """Uniform unit direction."""
        return Vector.from_angle(float(self.rng.uniform(0.0, 360.0)))

    def speed(self, size: float, config: Optional[GameConfig] = None) -> float:
        """Drift speed; smaller rocks move faster."""
        config = config or self.config
        asteroid_config = config.asteroid
        base = float(self.rng.uniform(asteroid_config.MIN_SPEED, asteroid_config.MAX_SPEED))
        return base * config.space.INITIAL_ASTEROID_SIZE / size

    def velocity(self, size: float, config: Optional[GameConfig] = None) -> Vector:
        return self.heading() * self.speed(size, config)

    def shape(self, size: float, config: Optional[GameConfig] = None) -> Polygon:
        """Irregular rock outline of radius about size * RADIUS_PER_SIZE."""
        asteroid_config = (config or self.config).asteroid
        count = int(self.rng.integers(asteroid_config.MIN_VERTICES, asteroid_config.MAX_VERTICES + 1))
        jitters = self.rng.uniform(asteroid_config.JITTER_MIN, asteroid_config.JITTER_MAX, size=count)
        return irregular_polygon(size * asteroid_config.RADIUS_PER_SIZE, (float(j) for j in jitters))

    def asteroid(self, size: float, world: WorldBounds,
                 config: Optional[GameConfig] = None) -> Asteroid:
        """
        Random asteroid anywhere in the field.

        Args:
            size: Size tier of the new rock
            world: Toric bounds the rock lives in
            config: Rules the rock follows (this generator's config if None)
        """
        config = config or self.config
        return Asteroid(self.position(world), self.velocity(size, config), size,
                        self.shape(size, config), world, config)

    def fragment(self, parent: Asteroid, size: float) -> Asteroid:
        """Random asteroid of `size` starting at the parent's position, under the parent's rules."""
        config = parent.config
        return Asteroid(parent.position, self.velocity(size, config), size,
                        self.shape(size, config), parent.world, config)
