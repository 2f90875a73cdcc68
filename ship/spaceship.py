"""
Player Spaceship

This module models the ship steered by the player (or an agent): four
independently switched engines, a fuel tank that drains while engines burn
and slowly recharges, a heading that turns with the side engines, lives and a
post-hit invulnerability window.

**Fuel autonomy**: within one tick the engines can only push for as long as
fuel lasts. With net consumption c > 0 and fuel f, thrust and rotation are
applied for min(dt, f / c) seconds; with c <= 0 the tank is not draining and
the whole tick is available.

**Responsibility**: Ship kinematics, fuel bookkeeping and hull collision
**Dependencies**: Vector/Polygon geometry, WorldBounds, GameConfig
"""

import logging
from typing import List, Optional

from common.Vector import Vector
from common.polygon import Polygon
from common.toric import WorldBounds
from config.game_config import GameConfig
from ship.projectile import Projectile

logger = logging.getLogger(__name__)


class Spaceship:
    """
    Ship state and per-tick integration.

    **Usage**:
    ```python
    ship = Spaceship(world, config)
    ship.start_main_engine()
    ship.update(1 / 60)
    projectile = ship.fire(handle=0)
    ```
    """

    def __init__(self, world: WorldBounds, config: Optional[GameConfig] = None):
        """
        Create the ship at the centre of space, facing +x, at rest.

        Args:
            world: Toric bounds used to remap the position
            config: Game configuration (creates default if None)
        """
        self.config = config or GameConfig.create_default()
        self.world = world
        self._ship = self.config.ship

        self.position = world.center
        self.velocity = Vector.ZERO
        self.direction = Vector(1.0, 0.0)

        self.fuel = self._ship.INITIAL_FUEL
        self.invulnerable_time = 0.0
        self.life = self._ship.INITIAL_LIFE
        self.set_invulnerable(self._ship.INITIAL_INVULNERABLE_TIME)

        self.hull = Polygon.from_points(self._ship.CONTACT_POINTS)

        self._main_engine_on = False
        self._left_engine_on = False
        self._right_engine_on = False
        self._reverse_engine_on = False

    # === Engines ===

    def start_main_engine(self) -> None:
        self._main_engine_on = True

    def stop_main_engine(self) -> None:
        self._main_engine_on = False

    def start_left_engine(self) -> None:
        self._left_engine_on = True

    def stop_left_engine(self) -> None:
        self._left_engine_on = False

    def start_right_engine(self) -> None:
        self._right_engine_on = True

    def stop_right_engine(self) -> None:
        self._right_engine_on = False

    def start_reverse_engine(self) -> None:
        self._reverse_engine_on = True

    def stop_reverse_engine(self) -> None:
        self._reverse_engine_on = False

    def set_engines(self, main: bool, left: bool, right: bool, reverse: bool) -> None:
        """Switch all four engines at once."""
        self._main_engine_on = bool(main)
        self._left_engine_on = bool(left)
        self._right_engine_on = bool(right)
        self._reverse_engine_on = bool(reverse)

    def is_main_engine_on(self) -> bool:
        return self._main_engine_on

    def is_left_engine_on(self) -> bool:
        return self._left_engine_on

    def is_right_engine_on(self) -> bool:
        return self._right_engine_on

    def is_reverse_engine_on(self) -> bool:
        return self._reverse_engine_on

    # === Derived state ===

    @property
    def direction_angle(self) -> float:
        """Heading in degrees, 0 facing right."""
        return self.direction.angle()

    @property
    def fuel_percentage(self) -> float:
        if self._ship.TANK_CAPACITY == 0:
            return 0.0
        return self.fuel / self._ship.TANK_CAPACITY

    @property
    def is_invulnerable(self) -> bool:
        return self.invulnerable_time > 0

    def acceleration(self) -> Vector:
        """Thrust acceleration from the main and reverse engines."""
        acceleration = Vector.ZERO
        if self._main_engine_on:
            acceleration = acceleration + self.direction * self._ship.MAIN_ENGINE_POWER
        if self._reverse_engine_on:
            acceleration = acceleration - self.direction * self._ship.REVERSE_ENGINE_POWER
        return acceleration

    def current_consumption(self) -> float:
        """Net fuel consumption per second; negative means recharging."""
        consumption = 0.0
        if self._main_engine_on:
            consumption += self._ship.FUEL_CONSUMPTION_MAIN_ENGINE
        if self._left_engine_on:
            consumption += self._ship.FUEL_CONSUMPTION_LEFT_ENGINE
        if self._right_engine_on:
            consumption += self._ship.FUEL_CONSUMPTION_RIGHT_ENGINE
        if self._reverse_engine_on:
            consumption += self._ship.FUEL_CONSUMPTION_REVERSE_ENGINE
        return consumption - self._ship.FUEL_RECHARGED_PER_SECOND

    def autonomy(self, dt: float) -> float:
        """Seconds of this tick during which the engines actually push."""
        consumption = self.current_consumption()
        if consumption <= 0:
            return dt
        return min(dt, self.fuel / consumption)

    # === Simulation ===

    def update(self, dt: float) -> None:
        """
        Advance the ship by `dt` seconds.

        Rotation and thrust use the fuel autonomy for this tick, drift uses
        the full `dt`. The position is remapped into the toric space every
        tick, engines on or not.
        """
        if self._main_engine_on or not self._ship.GATE_ON_MAIN_ENGINE:
            autonomy = self.autonomy(dt)
            self._update_direction(autonomy)
            self._update_velocity(autonomy)
            self._update_position(dt)
            self._update_fuel_level(dt)
            self._update_invulnerability(dt)
        self.position = self.world.remap(self.position)

    def _update_direction(self, autonomy: float) -> None:
        angle = autonomy * self._ship.ROTATION_SPEED
        if self._right_engine_on:
            self.direction = self.direction.rotate(angle)
        if self._left_engine_on:
            self.direction = self.direction.rotate(-angle)
        # Keep the heading unit length despite accumulated rounding
        self.direction = self.direction.normalize()

    def _update_velocity(self, autonomy: float) -> None:
        self.velocity = self.velocity + self.acceleration() * autonomy

    def _update_position(self, dt: float) -> None:
        self.position = self.position + self.velocity * dt

    def _update_fuel_level(self, dt: float) -> None:
        self.fuel -= self.current_consumption() * dt
        if self.fuel < 0:
            self.fuel = 0.0
        if self.fuel > self._ship.TANK_CAPACITY:
            self.fuel = self._ship.TANK_CAPACITY

    def _update_invulnerability(self, dt: float) -> None:
        if self.invulnerable_time > 0:
            self.invulnerable_time = max(0.0, self.invulnerable_time - dt)

    def set_invulnerable(self, duration: float) -> None:
        """Grant at least `duration` seconds of invulnerability."""
        if self.invulnerable_time < duration:
            self.invulnerable_time = duration

    # === Weapons and collisions ===

    def fire(self, handle: int) -> Projectile:
        """
        Launch a projectile ahead of the ship.

        Args:
            handle: Identifier issued by the owning Space

        Returns:
            Projectile: shot at `PROJECTILE_DISTANCE` along the heading, moving
            with the ship velocity plus the muzzle velocity
        """
        projectile_config = self.config.projectile
        position = self.position + self.direction * projectile_config.PROJECTILE_DISTANCE
        velocity = self.velocity + self.direction * projectile_config.PROJECTILE_VELOCITY
        return Projectile(handle, position, velocity, self.world,
                          projectile_config.INITIAL_LIFE_DURATION)

    def contact_points(self) -> List[Vector]:
        """Hull contact points in world coordinates (before remap)."""
        angle = self.direction_angle
        return [point.rotate(angle) + self.position for point in self.hull.vertices]

    def collides(self, asteroid) -> bool:
        """
        Test the hull against `asteroid` and apply the hit.

        An invulnerable ship never collides. On the first contact point inside
        the asteroid one life is lost (never below zero) and the grace period
        restarts.

        Returns:
            bool: True if the ship was hit
        """
        if self.is_invulnerable:
            return False
        for point in self.contact_points():
            if asteroid.contains(point):
                self._lose_life()
                self.set_invulnerable(self._ship.INITIAL_INVULNERABLE_TIME)
                logger.debug("Ship hit at %s, %d lives left", self.position, self.life)
                return True
        return False

    def _lose_life(self) -> None:
        if self.life > 0:
            self.life -= 1

    def __repr__(self) -> str:
        return (f"Spaceship(position={self.position}, angle={self.direction_angle:.1f}, "
                f"fuel={self.fuel:.2f}, life={self.life})")
