"""
Observation Builder for the Asteroids Environment

Converts a SpaceSnapshot into the flat float vector fed to agents.

**Observation Structure** (9 + 6 * NEAREST_ASTEROIDS + 2 dimensions):
- Ship state (9 dims): position, velocity, heading cos/sin, fuel,
  invulnerability, lives
- Nearest asteroids (6 dims each): toric offset from the ship, velocity,
  size, presence flag; padded with zeros when fewer rocks remain
- Match state (2 dims): multiplier, live projectile count

All values are scaled to roughly [-1, 1] for stable learning; offsets use the
shortest toric displacement so a rock just across a seam reads as close.
"""

import math
from typing import List

import numpy as np

from common.toric import WorldBounds
from config.game_config import GameConfig
from game.snapshot import SpaceSnapshot

SHIP_DIMS = 9
ASTEROID_DIMS = 6
MATCH_DIMS = 2

# Normalisation scales
VELOCITY_SCALE = 200.0
MULTIPLIER_SCALE = 10.0
PROJECTILE_COUNT_SCALE = 20.0


class ObservationBuilder:
    """Builds fixed-size observation vectors from snapshots."""

    def __init__(self, world: WorldBounds, config: GameConfig):
        self.world = world
        self.config = config
        self.nearest_asteroids = config.training.NEAREST_ASTEROIDS

    @property
    def observation_dim(self) -> int:
        return SHIP_DIMS + ASTEROID_DIMS * self.nearest_asteroids + MATCH_DIMS

    def build(self, snapshot: SpaceSnapshot) -> np.ndarray:
        obs = []
        obs.extend(self._build_ship_obs(snapshot))
        obs.extend(self._build_asteroid_obs(snapshot))
        obs.extend(self._build_match_state(snapshot))

        if len(obs) != self.observation_dim:
            raise ValueError(f"Observation has {len(obs)} dims, expected {self.observation_dim}")
        return np.asarray(obs, dtype=np.float32)

    def _build_ship_obs(self, snapshot: SpaceSnapshot) -> List[float]:
        ship = snapshot.ship
        ship_config = self.config.ship
        heading = math.radians(ship.direction_angle)
        grace = ship_config.INITIAL_INVULNERABLE_TIME
        invulnerability = min(ship.invulnerable_time / grace, 1.0) if grace > 0 else 0.0
        lives = ship.life / ship_config.INITIAL_LIFE if ship_config.INITIAL_LIFE > 0 else 0.0
        return [
            ship.position.x / self.world.width * 2 - 1,
            ship.position.y / self.world.height * 2 - 1,
            ship.velocity.x / VELOCITY_SCALE,
            ship.velocity.y / VELOCITY_SCALE,
            math.cos(heading),
            math.sin(heading),
            ship.fuel_percentage,
            invulnerability,
            lives,
        ]

    def _build_asteroid_obs(self, snapshot: SpaceSnapshot) -> List[float]:
        ship_position = snapshot.ship.position
        offsets = sorted(
            ((self.world.delta(ship_position, rock.position), rock) for rock in snapshot.asteroids),
            key=lambda pair: pair[0].length_squared(),
        )

        obs = []
        for offset, rock in offsets[:self.nearest_asteroids]:
            obs.extend([
                offset.x / (self.world.width / 2),
                offset.y / (self.world.height / 2),
                rock.velocity.x / VELOCITY_SCALE,
                rock.velocity.y / VELOCITY_SCALE,
                rock.size / self.config.space.INITIAL_ASTEROID_SIZE,
                1.0,
            ])
        missing = self.nearest_asteroids - min(len(offsets), self.nearest_asteroids)
        obs.extend([0.0] * (ASTEROID_DIMS * missing))
        return obs

    def _build_match_state(self, snapshot: SpaceSnapshot) -> List[float]:
        return [
            snapshot.multiplier / MULTIPLIER_SCALE,
            len(snapshot.projectiles) / PROJECTILE_COUNT_SCALE,
        ]
