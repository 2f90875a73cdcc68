"""Asteroids Environment for Reinforcement Learning

Gymnasium-compatible wrapper around the headless Space simulation. The agent
plays the ship: each step it chooses which engines burn and whether to fire,
then the simulation advances one fixed tick.

**Architecture**:
- **Space**: game rules and state
- **ObservationBuilder**: snapshot to float vector
- **RewardCalculator**: snapshot pair to scalar reward
- **AsteroidsEnv**: Gymnasium interface and episode bookkeeping

The Space draws all of its randomness from the environment's own numpy
generator, so `reset(seed=...)` reproduces an episode exactly.
"""

import logging
from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from asteroid.random_generator import RandomGenerator
from common.toric import WorldBounds
from config.game_config import GameConfig
from game.space import Space
from ai.observation_builder import ObservationBuilder
from ai.reward_calculator import RewardCalculator

logger = logging.getLogger(__name__)

# Action indices
MAIN_ENGINE, LEFT_ENGINE, RIGHT_ENGINE, REVERSE_ENGINE, FIRE = range(5)


class AsteroidsEnv(gym.Env):
    """
    Headless Gymnasium environment for the asteroid shooter.

    **Action space**: MultiBinary(5) - main, left, right, reverse engine, fire
    **Observation space**: Box of ObservationBuilder.observation_dim floats
    **Termination**: game over; truncation after `max_steps` steps
    """

    metadata = {"render_modes": []}

    def __init__(self, render_mode=None, config: Optional[GameConfig] = None,
                 reward_mode: str = "score", max_steps: Optional[int] = None):
        """
        Args:
            render_mode: Must be None; the simulation has no presentation layer
            config: Game configuration (training defaults if None)
            reward_mode: Reward strategy name ("score" or "survival")
            max_steps: Episode length cap (TrainingConfig default if None)
        """
        super().__init__()
        if render_mode is not None:
            raise ValueError(f"Unsupported render_mode {render_mode!r}; rendering is not available")
        self.render_mode = render_mode

        self.config = (config or GameConfig.create_training()).validate()
        self.reward_calculator = RewardCalculator(self.config)
        if reward_mode not in self.reward_calculator.get_available_modes():
            raise ValueError(f"Unknown reward mode '{reward_mode}'")
        self.reward_mode = reward_mode
        self.max_steps = max_steps or self.config.training.MAX_EPISODE_STEPS

        self.space: Optional[Space] = None
        self._previous_snapshot = None
        self.steps = 0
        self._fire_cooldown = 0

        # Observation size only depends on config, not on a live Space
        world = WorldBounds(self.config.space.WIDTH, self.config.space.HEIGHT)
        self.observation_builder = ObservationBuilder(world, self.config)

        self.action_space = spaces.MultiBinary(5)
        self.observation_space = spaces.Box(
            low=-np.inf, high=np.inf,
            shape=(self.observation_builder.observation_dim,), dtype=np.float32
        )

    def reset(self, seed=None, options=None) -> Tuple[np.ndarray, Dict[str, Any]]:
        """Start a new game with a field drawn from the env's generator"""
        super().reset(seed=seed)

        generator = RandomGenerator.from_rng(self.np_random, self.config)
        self.space = Space(self.config, generator=generator)
        self.steps = 0
        self._fire_cooldown = 0
        self._previous_snapshot = self.space.snapshot()
        logger.info("Episode reset with %d asteroids", len(self.space.asteroids))

        return self.observation_builder.build(self._previous_snapshot), self._get_info()

    def step(self, action) -> Tuple[np.ndarray, float, bool, bool, Dict[str, Any]]:
        if self.space is None:
            raise RuntimeError("Call reset() before step()")

        action = np.asarray(action).astype(bool)
        self.space.ship.set_engines(
            main=action[MAIN_ENGINE],
            left=action[LEFT_ENGINE],
            right=action[RIGHT_ENGINE],
            reverse=action[REVERSE_ENGINE],
        )
        if self._fire_cooldown > 0:
            self._fire_cooldown -= 1
        elif action[FIRE]:
            self.space.fire()
            self._fire_cooldown = self.config.training.FIRE_COOLDOWN_STEPS

        self.space.update(self.config.training.FIXED_DT)
        self.steps += 1

        snapshot = self.space.snapshot()
        reward = self.reward_calculator.calculate_reward(self.reward_mode, self._previous_snapshot, snapshot)
        self._previous_snapshot = snapshot

        terminated = self.space.is_game_over
        truncated = not terminated and self.steps >= self.max_steps
        return self.observation_builder.build(snapshot), reward, terminated, truncated, self._get_info()

    def _get_info(self) -> Dict[str, Any]:
        snapshot = self._previous_snapshot
        return {
            "score": snapshot.score,
            "multiplier": snapshot.multiplier,
            "life": snapshot.ship.life,
            "asteroids": len(snapshot.asteroids),
            "tick": snapshot.tick,
        }

    def close(self):
        self.space = None
