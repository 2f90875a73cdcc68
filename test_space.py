"""
Tests for the Space simulation: initial field, per-tick rules, hit resolution,
projectile bookkeeping and game over.
"""

import pytest

from asteroid.asteroid import Asteroid
from asteroid.random_generator import RandomGenerator
from common.Vector import Vector
from common.polygon import Polygon
from config.game_config import ConfigError, GameConfig
from game.space import Space, SpaceState


DT = 1 / 60


def empty_space(**overrides) -> Space:
    """Space with no initial asteroids, for scripted scenarios."""
    groups = {"space": {"INITIAL_ASTEROID_COUNT": 0}}
    groups.update(overrides)
    return Space(GameConfig().with_overrides(**groups), seed=0)


def place_rock(space: Space, position: Vector, size: float = 3.0, half: float = 20.0) -> Asteroid:
    outline = Polygon.from_points([(-half, -half), (half, -half), (half, half), (-half, half)])
    rock = Asteroid(position, Vector.ZERO, size, outline, space.world, space.config)
    space.add_asteroid(rock)
    return rock


@pytest.mark.parametrize("seed", range(20))
def test_initial_asteroids_keep_security_distance(seed):
    space = Space(seed=seed)
    config = space.config.space
    assert len(space.asteroids) == config.INITIAL_ASTEROID_COUNT
    for rock in space.asteroids:
        assert rock.size == config.INITIAL_ASTEROID_SIZE
        assert space.world.distance(rock.position, space.ship.position) > config.STARTING_SECURITY_DISTANCE


def test_crowded_field_raises_config_error():
    config = GameConfig().with_overrides(space={"STARTING_SECURITY_DISTANCE": 10000.0,
                                                "MAX_SPAWN_ATTEMPTS": 5})
    with pytest.raises(ConfigError):
        Space(config, seed=0)


def test_invalid_configuration_is_rejected():
    with pytest.raises(ConfigError):
        Space(GameConfig().with_overrides(asteroid={"FRAGMENT_SIZE_RATIO": 1.5}))
    with pytest.raises(ConfigError):
        GameConfig().with_overrides(space={"NOT_A_SETTING": 1})
    with pytest.raises(ConfigError):
        GameConfig().with_overrides(galaxy={})


def test_same_seed_gives_same_field():
    first = Space(seed=11)
    second = Space(seed=11)
    assert [r.position for r in first.asteroids] == [r.position for r in second.asteroids]
    for _ in range(30):
        first.update(DT)
        second.update(DT)
    assert first.snapshot() == second.snapshot()


def test_injected_generator_is_used():
    config = GameConfig.create_default()
    generator = RandomGenerator(seed=4, config=config)
    space = Space(config, generator=generator)
    assert space.generator is generator


def test_space_config_applies_to_rocks_from_injected_generator():
    config = GameConfig().with_overrides(asteroid={"NO_FRAGMENT_SIZE_LIMIT": 5.0})
    space = Space(config, generator=RandomGenerator(seed=1))

    rock = space.asteroids[0]
    assert rock.config is space.config
    assert not rock.can_fragment()
    assert rock.fragments(space.generator) == []


def test_fragments_follow_parent_config():
    config = GameConfig().with_overrides(asteroid={"NUMBER_OF_FRAGMENTS": 3, "FRAGMENT_SIZE_RATIO": 0.25})
    space = empty_space()
    parent = Asteroid(Vector(100.0, 100.0), Vector.ZERO, 4.0,
                      Polygon.regular(20.0, 8), space.world, config)

    children = parent.fragments(RandomGenerator(seed=2))

    assert len(children) == 3
    assert all(child.size == pytest.approx(1.0) for child in children)
    assert all(child.config is config for child in children)


def test_projectile_destroys_asteroid_into_fragments():
    space = empty_space()
    config = space.config
    rock = place_rock(space, Vector(550.0, 400.0), size=config.space.INITIAL_ASTEROID_SIZE)
    assert space.world.distance(rock.position, space.ship.position) > config.space.STARTING_SECURITY_DISTANCE

    projectile = space.fire()
    for _ in range(config.projectile.INITIAL_LIFE_DURATION):
        space.update(DT)
        if rock not in space.asteroids:
            break

    assert rock not in space.asteroids
    assert len(space.asteroids) == config.asteroid.NUMBER_OF_FRAGMENTS
    for fragment in space.asteroids:
        assert fragment.size == pytest.approx(config.space.INITIAL_ASTEROID_SIZE * config.asteroid.FRAGMENT_SIZE_RATIO)
    passive = config.score.PASSIVE_SCORE_PER_SECOND * space.elapsed
    assert space.score - passive == pytest.approx(config.score.HIT_ASTEROID_SCORE * 1)
    assert space.multiplier == 2
    assert space.projectile(projectile.handle) is None


def test_simultaneous_hits_destroy_asteroid_once():
    space = empty_space()
    place_rock(space, Vector(460.0, 400.0))
    first = space.fire()
    second = space.fire()
    assert first.handle != second.handle

    space.update(0.1)

    assert len(space.projectiles) == 0
    assert len(space.asteroids) == space.config.asteroid.NUMBER_OF_FRAGMENTS
    passive = space.config.score.PASSIVE_SCORE_PER_SECOND * 0.1
    assert space.score - passive == pytest.approx(space.config.score.HIT_ASTEROID_SCORE)
    assert space.multiplier == 2


def test_one_projectile_can_destroy_overlapping_asteroids():
    space = empty_space()
    place_rock(space, Vector(460.0, 400.0), size=1.5)
    place_rock(space, Vector(465.0, 400.0), size=1.5)
    space.fire()

    space.update(0.1)

    assert space.asteroids == ()
    assert space.projectiles == ()
    assert space.multiplier == 3


def test_fragments_replace_destroyed_asteroid_in_place():
    space = empty_space()
    before = place_rock(space, Vector(100.0, 100.0), size=1.0)
    place_rock(space, Vector(460.0, 400.0), size=3.0)
    after = place_rock(space, Vector(700.0, 700.0), size=1.0)
    space.fire()

    space.update(0.1)

    rocks = space.asteroids
    assert len(rocks) == 4
    assert rocks[0] is before
    assert rocks[-1] is after
    assert all(r.size == pytest.approx(1.5) for r in rocks[1:3])


def test_expired_projectiles_are_removed():
    space = empty_space()
    space.fire()
    space.fire()
    lifetime = space.config.projectile.INITIAL_LIFE_DURATION
    for _ in range(lifetime - 1):
        space.update(DT)
    assert len(space.projectiles) == 2
    space.update(DT)
    assert space.projectiles == ()


def test_projectile_handles_are_unique():
    space = empty_space()
    handles = [space.fire().handle for _ in range(5)]
    assert len(set(handles)) == 5
    assert {p.handle for p in space.projectiles} == set(handles)


def test_collision_with_last_life_ends_game():
    space = empty_space()
    space.ship.life = 1
    space.ship.invulnerable_time = 0.0
    place_rock(space, space.ship.position, half=40.0)

    space.update(DT)

    assert space.state is SpaceState.GAME_OVER
    assert space.is_game_over
    assert space.ship.life == 0


def test_collision_with_lives_left_keeps_running():
    space = empty_space()
    space.ship.invulnerable_time = 0.0
    place_rock(space, space.ship.position, half=40.0)

    space.update(DT)

    assert not space.is_game_over
    assert space.ship.life == space.config.ship.INITIAL_LIFE - 1
    assert space.ship.is_invulnerable


def test_invulnerable_ship_survives_overlap():
    space = empty_space()
    space.ship.life = 0
    place_rock(space, space.ship.position, half=40.0)
    for _ in range(10):
        space.update(DT)
    assert not space.is_game_over


def test_game_over_is_terminal():
    space = empty_space()
    space.ship.life = 1
    space.ship.invulnerable_time = 0.0
    place_rock(space, space.ship.position, half=40.0)
    space.update(DT)
    tick = space.tick
    score = space.score

    space.update(DT)

    assert space.tick == tick
    assert space.score == score
    assert space.fire() is None


def test_empty_tank_main_engine_keeps_ship_in_place():
    space = empty_space()
    space.ship.fuel = 0.0
    space.ship.start_main_engine()
    start = space.ship.position
    space.update(DT)
    assert space.ship.position == start


def test_everything_stays_in_bounds():
    space = Space(seed=21)
    space.ship.start_main_engine()
    space.ship.start_right_engine()
    for step in range(600):
        if step % 15 == 0:
            space.fire()
        space.update(DT)
        snapshot = space.snapshot()
        assert space.world.contains(snapshot.ship.position)
        assert all(space.world.contains(r.position) for r in snapshot.asteroids)
        assert all(space.world.contains(p.position) for p in snapshot.projectiles)
        assert 0.0 <= snapshot.ship.fuel_percentage <= 1.0
        assert snapshot.multiplier >= 1


def test_negative_dt_is_rejected():
    with pytest.raises(ValueError):
        empty_space().update(-0.1)


def test_nan_dt_is_rejected():
    space = empty_space()
    with pytest.raises(ValueError):
        space.update(float("nan"))
    assert space.ship.position == space.world.center


def test_snapshot_reports_state():
    space = empty_space()
    place_rock(space, Vector(100.0, 100.0))
    space.ship.start_left_engine()
    projectile = space.fire()

    snapshot = space.snapshot()

    assert snapshot.tick == 0
    assert snapshot.ship.left_engine_on
    assert not snapshot.ship.reverse_engine_on
    assert snapshot.ship.life == space.config.ship.INITIAL_LIFE
    assert snapshot.asteroids[0].position == Vector(100.0, 100.0)
    assert snapshot.asteroids[0].shape.contains(Vector(105.0, 95.0))
    assert snapshot.projectiles[0].handle == projectile.handle
    assert snapshot.score == 0.0
    assert snapshot.multiplier == 1
    assert not snapshot.game_over
