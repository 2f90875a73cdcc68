"""
Headless runner for the asteroid shooter simulation.

Plays seeded episodes through AsteroidsEnv with a scripted policy and logs
how each one ended. There is no window: the simulation only advances state.

Policies:
- idle: never touches the controls
- random: samples the action space every step
- spinner: turns right with the main engine on and fires whenever possible
"""

import argparse
import logging
import sys

import numpy as np

from ai.asteroids_env import AsteroidsEnv, FIRE, MAIN_ENGINE, RIGHT_ENGINE
from config.game_config import ConfigError, GameConfig

logger = logging.getLogger(__name__)


def choose_action(policy: str, env: AsteroidsEnv) -> np.ndarray:
    if policy == "random":
        return env.action_space.sample()
    action = np.zeros(5, dtype=np.int8)
    if policy == "spinner":
        action[MAIN_ENGINE] = 1
        action[RIGHT_ENGINE] = 1
        action[FIRE] = 1
    return action


def run_episode(env: AsteroidsEnv, policy: str, seed: int) -> dict:
    env.action_space.seed(seed)
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    terminated = truncated = False
    while not (terminated or truncated):
        obs, reward, terminated, truncated, info = env.step(choose_action(policy, env))
        total_reward += reward
    info["reward"] = total_reward
    info["game_over"] = terminated
    return info


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Headless asteroid shooter simulation")
    parser.add_argument("--episodes", type=int, default=3, help="Number of episodes to play")
    parser.add_argument("--seed", type=int, default=0, help="Seed of the first episode")
    parser.add_argument("--steps", type=int, default=None, help="Step cap per episode")
    parser.add_argument("--policy", choices=["idle", "random", "spinner"], default="spinner",
                        help="Scripted policy driving the ship")
    parser.add_argument("--reward-mode", choices=["score", "survival"], default="score")
    parser.add_argument("--asteroids", type=int, default=None, help="Initial asteroid count")
    parser.add_argument("--verbose", action="store_true", help="Log simulation events")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    config = GameConfig.create_training()
    if args.asteroids is not None:
        config = config.with_overrides(space={"INITIAL_ASTEROID_COUNT": args.asteroids})

    env = None
    try:
        env = AsteroidsEnv(config=config, reward_mode=args.reward_mode, max_steps=args.steps)
        for episode in range(args.episodes):
            seed = args.seed + episode
            result = run_episode(env, args.policy, seed)
            logger.info(
                "Episode %d (seed %d): %s after %d ticks, score %.1f, x%d, %d lives, "
                "%d asteroids left, reward %.1f",
                episode, seed, "game over" if result["game_over"] else "survived",
                result["tick"], result["score"], result["multiplier"], result["life"],
                result["asteroids"], result["reward"],
            )
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        return 2
    finally:
        if env is not None:
            env.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
