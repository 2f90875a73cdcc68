"""
Reward Calculation for the Asteroids Environment

Rewards compare the snapshot before a step with the one after it. Each
strategy turns that pair into a scalar; the calculator selects one by name.

**Strategies**:
- "score": points gained this step, minus penalties for lives lost and for
  the game ending
- "survival": a constant bonus per surviving step with the same penalties,
  ignoring points
"""

from abc import ABC, abstractmethod
from typing import Dict, List

from config.game_config import GameConfig
from game.snapshot import SpaceSnapshot


class RewardStrategy(ABC):
    """Abstract base class for reward calculation strategies"""

    def __init__(self, config: GameConfig):
        self.LIFE_LOST_PENALTY = config.training.LIFE_LOST_PENALTY
        self.GAME_OVER_PENALTY = config.training.GAME_OVER_PENALTY

    @abstractmethod
    def calculate_reward(self, previous: SpaceSnapshot, current: SpaceSnapshot) -> float:
        """Calculate reward for the step from `previous` to `current`"""

    def _penalties(self, previous: SpaceSnapshot, current: SpaceSnapshot) -> float:
        penalty = 0.0
        lives_lost = previous.ship.life - current.ship.life
        if lives_lost > 0:
            penalty -= self.LIFE_LOST_PENALTY * lives_lost
        if current.game_over and not previous.game_over:
            penalty -= self.GAME_OVER_PENALTY
        return penalty


class ScoreRewards(RewardStrategy):
    def calculate_reward(self, previous: SpaceSnapshot, current: SpaceSnapshot) -> float:
        return (current.score - previous.score) + self._penalties(previous, current)


class SurvivalRewards(RewardStrategy):
    SURVIVAL_BONUS = 1.0

    def calculate_reward(self, previous: SpaceSnapshot, current: SpaceSnapshot) -> float:
        reward = self._penalties(previous, current)
        if not current.game_over:
            reward += self.SURVIVAL_BONUS
        return reward


class RewardCalculator:
    """Dispatches reward calculation to the strategy registered for a mode."""

    def __init__(self, config: GameConfig):
        self.strategies: Dict[str, RewardStrategy] = {
            "score": ScoreRewards(config),
            "survival": SurvivalRewards(config),
        }

    def get_available_modes(self) -> List[str]:
        return list(self.strategies)

    def calculate_reward(self, mode: str, previous: SpaceSnapshot, current: SpaceSnapshot) -> float:
        if mode not in self.strategies:
            raise ValueError(f"Unknown reward mode '{mode}', expected one of {self.get_available_modes()}")
        return float(self.strategies[mode].calculate_reward(previous, current))
