"""
Tests for the Gymnasium environment, its observation/reward components and
the headless runner.
"""

import numpy as np
import pytest
from gymnasium.utils.env_checker import check_env

from ai.asteroids_env import AsteroidsEnv
from ai.observation_builder import ASTEROID_DIMS, MATCH_DIMS, SHIP_DIMS, ObservationBuilder
from ai.reward_calculator import RewardCalculator
from common.toric import WorldBounds
from config.game_config import GameConfig
from game.space import Space
import main


def quiet_env() -> AsteroidsEnv:
    """Environment without asteroids, so nothing interferes with the controls."""
    return AsteroidsEnv(config=GameConfig.create_training().with_overrides(space={"INITIAL_ASTEROID_COUNT": 0}))


def test_env_passes_gymnasium_checker():
    env = AsteroidsEnv()
    check_env(env, skip_render_check=True)
    env.close()


def test_reset_returns_observation_in_space():
    env = AsteroidsEnv()
    obs, info = env.reset(seed=3)
    assert obs.dtype == np.float32
    assert env.observation_space.contains(obs)
    assert info["life"] == env.config.ship.INITIAL_LIFE
    assert info["asteroids"] == env.config.space.INITIAL_ASTEROID_COUNT


def test_reset_with_same_seed_is_reproducible():
    env = AsteroidsEnv()
    first, _ = env.reset(seed=42)
    second, _ = env.reset(seed=42)
    np.testing.assert_array_equal(first, second)


def test_step_applies_engines_and_fire():
    env = quiet_env()
    env.reset(seed=0)
    obs, reward, terminated, truncated, info = env.step(np.array([1, 0, 1, 0, 1], dtype=np.int8))

    ship = env.space.ship
    assert ship.is_main_engine_on()
    assert ship.is_right_engine_on()
    assert not ship.is_left_engine_on()
    assert len(env.space.projectiles) == 1
    assert isinstance(reward, float)
    assert not terminated and not truncated
    assert info["tick"] == 1


def test_fire_cooldown_limits_projectiles():
    env = quiet_env()
    env.reset(seed=0)
    cooldown = env.config.training.FIRE_COOLDOWN_STEPS
    for _ in range(cooldown + 2):
        env.step([0, 0, 0, 0, 1])
    assert len(env.space.projectiles) == 2


def test_episode_truncates_at_max_steps():
    env = AsteroidsEnv(max_steps=3)
    env.reset(seed=1)
    results = [env.step([0, 0, 0, 0, 0]) for _ in range(3)]
    assert [r[3] for r in results] == [False, False, True]
    assert not any(r[2] for r in results)


def test_step_before_reset_fails():
    with pytest.raises(RuntimeError):
        AsteroidsEnv().step([0, 0, 0, 0, 0])


def test_rendering_is_not_supported():
    with pytest.raises(ValueError):
        AsteroidsEnv(render_mode="human")
    with pytest.raises(ValueError):
        AsteroidsEnv(reward_mode="style_points")


def test_observation_pads_missing_asteroids():
    config = GameConfig().with_overrides(space={"INITIAL_ASTEROID_COUNT": 2})
    space = Space(config, seed=0)
    builder = ObservationBuilder(WorldBounds(config.space.WIDTH, config.space.HEIGHT), config)

    obs = builder.build(space.snapshot())

    nearest = config.training.NEAREST_ASTEROIDS
    assert obs.shape == (SHIP_DIMS + ASTEROID_DIMS * nearest + MATCH_DIMS,)
    presence = obs[SHIP_DIMS + ASTEROID_DIMS - 1:SHIP_DIMS + ASTEROID_DIMS * nearest:ASTEROID_DIMS]
    np.testing.assert_array_equal(presence, [1.0, 1.0] + [0.0] * (nearest - 2))


def test_observation_orders_asteroids_by_toric_distance():
    config = GameConfig.create_default()
    space = Space(config, seed=2)
    builder = ObservationBuilder(space.world, config)
    obs = builder.build(space.snapshot())

    offsets = obs[SHIP_DIMS:SHIP_DIMS + ASTEROID_DIMS * builder.nearest_asteroids].reshape(-1, ASTEROID_DIMS)
    distances = np.hypot(offsets[:, 0] * config.space.WIDTH / 2, offsets[:, 1] * config.space.HEIGHT / 2)
    assert np.all(np.diff(distances) >= -1e-3)


def test_rewards_track_score_and_penalties():
    config = GameConfig.create_default()
    calculator = RewardCalculator(config)
    space = Space(config.with_overrides(space={"INITIAL_ASTEROID_COUNT": 0}), seed=0)
    before = space.snapshot()
    space.update(0.5)
    after = space.snapshot()

    assert calculator.calculate_reward("score", before, after) == pytest.approx(
        config.score.PASSIVE_SCORE_PER_SECOND * 0.5)
    assert calculator.calculate_reward("survival", before, after) == pytest.approx(1.0)

    space.ship.life = 0
    dead = space.snapshot()
    assert calculator.calculate_reward("score", after, dead) == pytest.approx(
        -config.training.LIFE_LOST_PENALTY * config.ship.INITIAL_LIFE)
    with pytest.raises(ValueError):
        calculator.calculate_reward("unknown", before, after)


def test_headless_runner_plays_episodes(caplog):
    caplog.set_level("INFO")
    assert main.main(["--episodes", "2", "--steps", "30", "--policy", "random"]) == 0
    episodes = [record for record in caplog.records if "(seed" in record.getMessage()]
    assert len(episodes) == 2
    assert all(record.name == main.__name__ for record in episodes)


def test_headless_runner_reports_bad_configuration():
    assert main.main(["--episodes", "1", "--asteroids", "-1"]) == 2
