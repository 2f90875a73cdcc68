"""
Read-only views of the simulation for renderers, agents and tests.

Snapshots are plain frozen values taken between updates; holding one never
keeps a reference into the live entity collections.
"""

from dataclasses import dataclass
from typing import Tuple

from common.Vector import Vector
from common.polygon import Polygon


@dataclass(frozen=True)
class ShipSnapshot:
    position: Vector
    velocity: Vector
    direction_angle: float
    main_engine_on: bool
    left_engine_on: bool
    right_engine_on: bool
    reverse_engine_on: bool
    fuel_percentage: float
    invulnerable_time: float
    life: int


@dataclass(frozen=True)
class AsteroidSnapshot:
    position: Vector
    velocity: Vector
    size: float
    shape: Polygon


@dataclass(frozen=True)
class ProjectileSnapshot:
    handle: int
    position: Vector
    life_duration: int


@dataclass(frozen=True)
class SpaceSnapshot:
    tick: int
    ship: ShipSnapshot
    asteroids: Tuple[AsteroidSnapshot, ...]
    projectiles: Tuple[ProjectileSnapshot, ...]
    score: float
    multiplier: int
    game_over: bool
