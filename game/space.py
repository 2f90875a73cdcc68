"""
Space - Core Game State and Rules

This module holds the complete state of a game and the rules that advance
it: the ship, the asteroid field, live projectiles and the score.

**Per-tick order** (`Space.update`):
1. Passive score and multiplier decay
2. Asteroid drift
3. Ship engines, drift and fuel
4. Projectile flight and lifetime
5. Projectile/asteroid hits, on the positions reached after all motion
6. Destroyed asteroids replaced in place by their fragments
7. Spent and expired projectiles removed
8. Ship/asteroid collision; a hit that leaves no life ends the game

**Key Features**:
- Deterministic for a given RandomGenerator seed
- Projectiles keyed by integer handles issued here
- Game over is a terminal state, not an exception
"""

import itertools
import logging
from enum import Enum
from typing import Dict, List, Optional, Set, Tuple

from common.toric import WorldBounds
from config.game_config import ConfigError, GameConfig
from asteroid.asteroid import Asteroid
from asteroid.random_generator import RandomGenerator
from ship.projectile import Projectile
from ship.spaceship import Spaceship
from game.score import Score
from game.snapshot import AsteroidSnapshot, ProjectileSnapshot, ShipSnapshot, SpaceSnapshot

logger = logging.getLogger(__name__)


class SpaceState(Enum):
    RUNNING = "running"
    GAME_OVER = "game_over"


class Space:
    """
    Central simulation that owns every entity and applies the game rules.

    **Usage**:
    ```python
    space = Space(seed=7)
    space.ship.start_main_engine()
    space.fire()
    space.update(1 / 60)
    if space.is_game_over:
        ...
    ```
    """

    def __init__(self, config: Optional[GameConfig] = None,
                 generator: Optional[RandomGenerator] = None, seed: Optional[int] = None):
        """
        Build the ship at the centre and seed the initial asteroid field.

        Args:
            config: Game configuration (creates default if None)
            generator: Random source; a fresh one seeded with `seed` if None
            seed: Seed used only when no generator is supplied

        Raises:
            ConfigError: invalid configuration, or the field is too crowded
                to place the initial asteroids away from the ship
        """
        self.config = (config or GameConfig.create_default()).validate()
        self.world = WorldBounds(self.config.space.WIDTH, self.config.space.HEIGHT)
        self.generator = generator or RandomGenerator(seed=seed, config=self.config)

        self.ship = Spaceship(self.world, self.config)
        self.scorer = Score(self.config)
        self._asteroids: List[Asteroid] = []
        self._projectiles: Dict[int, Projectile] = {}
        self._handles = itertools.count()

        self.state = SpaceState.RUNNING
        self.tick = 0
        self.elapsed = 0.0

        for _ in range(self.config.space.INITIAL_ASTEROID_COUNT):
            self._asteroids.append(self.generate_initial_asteroid())

    # === Accessors ===

    @property
    def asteroids(self) -> Tuple[Asteroid, ...]:
        return tuple(self._asteroids)

    @property
    def projectiles(self) -> Tuple[Projectile, ...]:
        return tuple(self._projectiles.values())

    def projectile(self, handle: int) -> Optional[Projectile]:
        return self._projectiles.get(handle)

    @property
    def score(self) -> float:
        return self.scorer.score

    @property
    def multiplier(self) -> int:
        return self.scorer.multiplier

    @property
    def is_game_over(self) -> bool:
        return self.state is SpaceState.GAME_OVER

    # === Setup ===

    def generate_initial_asteroid(self) -> Asteroid:
        """
        Random initial-size asteroid far enough from the ship.

        Raises:
            ConfigError: no acceptable position after MAX_SPAWN_ATTEMPTS draws
        """
        space_config = self.config.space
        for attempt in range(1, space_config.MAX_SPAWN_ATTEMPTS + 1):
            asteroid = self.generator.asteroid(space_config.INITIAL_ASTEROID_SIZE, self.world, self.config)
            distance = self.world.distance(asteroid.position, self.ship.position)
            if distance > space_config.STARTING_SECURITY_DISTANCE:
                if attempt > space_config.MAX_SPAWN_ATTEMPTS // 2:
                    logger.warning("Initial asteroid placed after %d attempts", attempt)
                return asteroid
        raise ConfigError(
            f"Could not place an asteroid farther than {space_config.STARTING_SECURITY_DISTANCE} "
            f"from the ship in {space_config.MAX_SPAWN_ATTEMPTS} attempts"
        )

    def add_asteroid(self, asteroid: Asteroid) -> None:
        """Insert an asteroid directly, e.g. for scripted scenarios."""
        self._asteroids.append(asteroid)

    def clear_asteroids(self) -> None:
        self._asteroids.clear()

    # === Player intent ===

    def fire(self) -> Optional[Projectile]:
        """Launch a projectile from the ship; ignored once the game is over."""
        if self.is_game_over:
            return None
        projectile = self.ship.fire(next(self._handles))
        self._projectiles[projectile.handle] = projectile
        return projectile

    # === Simulation ===

    def update(self, dt: float) -> None:
        """
        Advance the whole game by `dt` seconds. No-op after game over.

        Raises:
            ValueError: negative or NaN `dt`
        """
        if not dt >= 0:
            raise ValueError(f"dt must be a number >= 0, got {dt}")
        if self.is_game_over:
            return

        self.scorer.update(dt)
        for asteroid in self._asteroids:
            asteroid.update(dt)
        self.ship.update(dt)
        self._process_projectiles(dt)

        if self._check_ship_collision():
            self.state = SpaceState.GAME_OVER
            logger.info("Game over at tick %d with score %.1f", self.tick, self.scorer.score)

        self.tick += 1
        self.elapsed += dt

    def _process_projectiles(self, dt: float) -> None:
        for projectile in self._projectiles.values():
            projectile.update(dt)
        spent, destroyed = self._find_projectile_hits()
        self._fragment(destroyed)
        self._remove_projectiles(spent)

    def _find_projectile_hits(self) -> Tuple[Set[int], Set[int]]:
        """Handles of hitting projectiles and indices of hit asteroids."""
        spent: Set[int] = set()
        destroyed: Set[int] = set()
        for handle, projectile in self._projectiles.items():
            for index, asteroid in enumerate(self._asteroids):
                if projectile.hits(asteroid):
                    spent.add(handle)
                    destroyed.add(index)
        return spent, destroyed

    def _fragment(self, destroyed: Set[int]) -> None:
        if not destroyed:
            return
        remaining: List[Asteroid] = []
        for index, asteroid in enumerate(self._asteroids):
            if index in destroyed:
                fragments = asteroid.fragments(self.generator)
                logger.debug("Asteroid of size %.2f destroyed at %s, %d fragments",
                             asteroid.size, asteroid.position, len(fragments))
                remaining.extend(fragments)
                self.scorer.notify_asteroid_hit()
            else:
                remaining.append(asteroid)
        self._asteroids = remaining

    def _remove_projectiles(self, spent: Set[int]) -> None:
        dead = {handle for handle, projectile in self._projectiles.items()
                if not projectile.is_alive}
        for handle in spent | dead:
            del self._projectiles[handle]

    def _check_ship_collision(self) -> bool:
        """True when the ship is hit with no life left."""
        for asteroid in self._asteroids:
            if self.ship.collides(asteroid):
                return self.ship.life == 0
        return False

    # === Snapshots ===

    def snapshot(self) -> SpaceSnapshot:
        ship = self.ship
        return SpaceSnapshot(
            tick=self.tick,
            ship=ShipSnapshot(
                position=ship.position,
                velocity=ship.velocity,
                direction_angle=ship.direction_angle,
                main_engine_on=ship.is_main_engine_on(),
                left_engine_on=ship.is_left_engine_on(),
                right_engine_on=ship.is_right_engine_on(),
                reverse_engine_on=ship.is_reverse_engine_on(),
                fuel_percentage=ship.fuel_percentage,
                invulnerable_time=ship.invulnerable_time,
                life=ship.life,
            ),
            asteroids=tuple(
                AsteroidSnapshot(a.position, a.velocity, a.size, a.shape)
                for a in self._asteroids
            ),
            projectiles=tuple(
                ProjectileSnapshot(p.handle, p.position, p.life_duration)
                for p in self._projectiles.values()
            ),
            score=self.scorer.score,
            multiplier=self.scorer.multiplier,
            game_over=self.is_game_over,
        )
