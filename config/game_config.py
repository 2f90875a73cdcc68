"""
Game Configuration Constants

This module centralizes all simulation constants so that game balance can be
tuned in one place and tests can build variants without touching the
entities.

**Categories**:
1. **Space**: World size, initial asteroid field, spawn safety distance
2. **Ship**: Engine power, rotation, fuel tank, lives, invulnerability
3. **Projectile**: Muzzle offset and velocity, lifetime in ticks
4. **Asteroid**: Fragmentation rule, rock outline, drift speed
5. **Score**: Passive rate, hit value, multiplier streak and decay
6. **Training**: Fixed time step and episode settings for the RL environment
"""

from dataclasses import dataclass, fields, replace
from typing import Tuple


class ConfigError(ValueError):
    """Raised when configuration values cannot produce a playable space."""


@dataclass(frozen=True)
class SpaceConfig:
    """World dimensions and initial asteroid field"""
    WIDTH: float = 800.0
    HEIGHT: float = 800.0
    INITIAL_ASTEROID_COUNT: int = 10
    INITIAL_ASTEROID_SIZE: float = 3.0

    # Asteroids must not spawn on the ship: minimum toric distance, in pixels
    STARTING_SECURITY_DISTANCE: float = 80.0
    MAX_SPAWN_ATTEMPTS: int = 1000


@dataclass(frozen=True)
class ShipConfig:
    """Spaceship engines, fuel and survivability"""
    MAIN_ENGINE_POWER: float = 50.0
    REVERSE_ENGINE_POWER: float = 30.0
    ROTATION_SPEED: float = 10.0  # degrees per second of autonomy

    TANK_CAPACITY: float = 5.0
    INITIAL_FUEL: float = 5.0
    FUEL_RECHARGED_PER_SECOND: float = 0.2
    FUEL_CONSUMPTION_MAIN_ENGINE: float = 1.0
    FUEL_CONSUMPTION_LEFT_ENGINE: float = 0.3
    FUEL_CONSUMPTION_RIGHT_ENGINE: float = 0.3
    FUEL_CONSUMPTION_REVERSE_ENGINE: float = 0.5

    INITIAL_INVULNERABLE_TIME: float = 5.0
    INITIAL_LIFE: int = 3

    # When True, rotation, thrust, drift, fuel and invulnerability only
    # advance while the main engine is on.
    GATE_ON_MAIN_ENGINE: bool = False

    # Hull points tested against asteroid shapes, heading along +x
    CONTACT_POINTS: Tuple[Tuple[float, float], ...] = (
        (0.0, 0.0),
        (27.0, 0.0),
        (14.5, 1.5),
        (2.0, 3.0),
        (0.0, 18.0),
        (-13.0, 18.0),
        (-14.0, 2.0),
        (-14.0, -2.0),
        (-13.0, -18.0),
        (0.0, -18.0),
        (2.0, -3.0),
        (14.5, -1.5),
    )


@dataclass(frozen=True)
class ProjectileConfig:
    """Projectile launch and lifetime"""
    PROJECTILE_DISTANCE: float = 30.0
    PROJECTILE_VELOCITY: float = 300.0
    INITIAL_LIFE_DURATION: int = 60  # ticks, not seconds


@dataclass(frozen=True)
class AsteroidConfig:
    """Fragmentation and rock generation"""
    NO_FRAGMENT_SIZE_LIMIT: float = 2.0
    NUMBER_OF_FRAGMENTS: int = 2
    FRAGMENT_SIZE_RATIO: float = 0.5

    RADIUS_PER_SIZE: float = 15.0
    MIN_VERTICES: int = 8
    MAX_VERTICES: int = 13
    JITTER_MIN: float = 0.75
    JITTER_MAX: float = 1.2

    # Drift speed for an initial-size rock; smaller rocks scale up
    MIN_SPEED: float = 20.0
    MAX_SPEED: float = 60.0


@dataclass(frozen=True)
class ScoreConfig:
    """Scoring and hit streak multiplier"""
    INITIAL_SCORE: float = 0.0
    PASSIVE_SCORE_PER_SECOND: float = 10.0
    HIT_ASTEROID_SCORE: float = 10.0
    INITIAL_MULTIPLIER: int = 1
    HIT_ASTEROID_ADD_MULTIPLIER: int = 1
    MULTIPLIER_DECAY_STEP: int = 1
    MULTIPLIER_DECAY_TICKS: int = 180


@dataclass(frozen=True)
class TrainingConfig:
    """Headless environment settings"""
    FIXED_DT: float = 1.0 / 60.0
    MAX_EPISODE_STEPS: int = 3600
    NEAREST_ASTEROIDS: int = 5
    FIRE_COOLDOWN_STEPS: int = 10
    LIFE_LOST_PENALTY: float = 50.0
    GAME_OVER_PENALTY: float = 200.0


class GameConfig:
    """
    Central game configuration container.

    **Usage**:
    ```python
    from config.game_config import GameConfig

    config = GameConfig()
    tank = config.ship.TANK_CAPACITY
    ratio = config.asteroid.FRAGMENT_SIZE_RATIO
    ```
    """

    def __init__(self, space: SpaceConfig = None, ship: ShipConfig = None,
                 projectile: ProjectileConfig = None, asteroid: AsteroidConfig = None,
                 score: ScoreConfig = None, training: TrainingConfig = None):
        self.space = space or SpaceConfig()
        self.ship = ship or ShipConfig()
        self.projectile = projectile or ProjectileConfig()
        self.asteroid = asteroid or AsteroidConfig()
        self.score = score or ScoreConfig()
        self.training = training or TrainingConfig()

    @classmethod
    def create_default(cls) -> 'GameConfig':
        """Create default game configuration"""
        return cls()

    @classmethod
    def create_training(cls) -> 'GameConfig':
        """Create configuration for agent training: no spawn grace period"""
        return cls(
            ship=ShipConfig(INITIAL_INVULNERABLE_TIME=0.0),
            projectile=ProjectileConfig(INITIAL_LIFE_DURATION=90),
        )

    def with_overrides(self, **groups) -> 'GameConfig':
        """
        Copy of this configuration with individual fields replaced.

        Args:
            **groups: group name -> dict of field overrides, e.g.
                ``with_overrides(space={"INITIAL_ASTEROID_COUNT": 1})``
        """
        current = {
            "space": self.space,
            "ship": self.ship,
            "projectile": self.projectile,
            "asteroid": self.asteroid,
            "score": self.score,
            "training": self.training,
        }
        for name, overrides in groups.items():
            if name not in current:
                raise ConfigError(f"Unknown configuration group '{name}'")
            known = {f.name for f in fields(current[name])}
            unknown = set(overrides) - known
            if unknown:
                raise ConfigError(f"Unknown {name} settings: {sorted(unknown)}")
            current[name] = replace(current[name], **overrides)
        return GameConfig(**current)

    def validate(self) -> 'GameConfig':
        """Check value ranges; returns self so calls can be chained."""
        space = self.space
        if space.WIDTH <= 0 or space.HEIGHT <= 0:
            raise ConfigError("World WIDTH and HEIGHT must be positive")
        if space.INITIAL_ASTEROID_COUNT < 0:
            raise ConfigError("INITIAL_ASTEROID_COUNT must be >= 0")
        if space.INITIAL_ASTEROID_SIZE <= 0:
            raise ConfigError("INITIAL_ASTEROID_SIZE must be positive")
        if space.MAX_SPAWN_ATTEMPTS < 1:
            raise ConfigError("MAX_SPAWN_ATTEMPTS must be >= 1")

        ship = self.ship
        if ship.TANK_CAPACITY < 0:
            raise ConfigError("TANK_CAPACITY must be >= 0")
        if not 0 <= ship.INITIAL_FUEL <= ship.TANK_CAPACITY:
            raise ConfigError("INITIAL_FUEL must lie within [0, TANK_CAPACITY]")
        if ship.INITIAL_LIFE < 0:
            raise ConfigError("INITIAL_LIFE must be >= 0")
        if ship.INITIAL_INVULNERABLE_TIME < 0:
            raise ConfigError("INITIAL_INVULNERABLE_TIME must be >= 0")

        if self.projectile.INITIAL_LIFE_DURATION < 1:
            raise ConfigError("INITIAL_LIFE_DURATION must be >= 1 tick")

        asteroid = self.asteroid
        if not 0 < asteroid.FRAGMENT_SIZE_RATIO < 1:
            raise ConfigError("FRAGMENT_SIZE_RATIO must lie in (0, 1)")
        if asteroid.NUMBER_OF_FRAGMENTS < 0:
            raise ConfigError("NUMBER_OF_FRAGMENTS must be >= 0")
        if asteroid.NO_FRAGMENT_SIZE_LIMIT <= 0:
            raise ConfigError("NO_FRAGMENT_SIZE_LIMIT must be positive")
        if not 3 <= asteroid.MIN_VERTICES <= asteroid.MAX_VERTICES:
            raise ConfigError("Rock outlines need 3 <= MIN_VERTICES <= MAX_VERTICES")
        if not 0 < asteroid.JITTER_MIN <= asteroid.JITTER_MAX:
            raise ConfigError("Jitter range must satisfy 0 < JITTER_MIN <= JITTER_MAX")
        if not 0 <= asteroid.MIN_SPEED <= asteroid.MAX_SPEED:
            raise ConfigError("Speed range must satisfy 0 <= MIN_SPEED <= MAX_SPEED")

        score = self.score
        if score.INITIAL_MULTIPLIER < 1:
            raise ConfigError("INITIAL_MULTIPLIER must be >= 1")
        if score.MULTIPLIER_DECAY_TICKS < 1:
            raise ConfigError("MULTIPLIER_DECAY_TICKS must be >= 1")

        training = self.training
        if training.FIXED_DT <= 0:
            raise ConfigError("FIXED_DT must be positive")
        if training.MAX_EPISODE_STEPS < 1 or training.NEAREST_ASTEROIDS < 0:
            raise ConfigError("MAX_EPISODE_STEPS must be >= 1 and NEAREST_ASTEROIDS >= 0")
        if training.FIRE_COOLDOWN_STEPS < 0:
            raise ConfigError("FIRE_COOLDOWN_STEPS must be >= 0")
        return self
