"""
Score and Hit Streak Multiplier

Points accrue passively with time survived and on every destroyed asteroid.
Consecutive hits raise a multiplier; when no asteroid is hit for
MULTIPLIER_DECAY_TICKS updates, the multiplier steps back down, never
below one.
"""

from typing import Optional

from config.game_config import GameConfig


class Score:
    """
    Accumulated points plus the streak multiplier and its decay timer.

    **Usage**:
    ```python
    score = Score(config)
    score.update(dt)             # once per tick
    score.notify_asteroid_hit()  # once per destroyed asteroid
    ```
    """

    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig.create_default()
        self._score_config = self.config.score
        self.reset()

    def reset(self) -> None:
        self.score = self._score_config.INITIAL_SCORE
        self.multiplier = self._score_config.INITIAL_MULTIPLIER
        self.decay_timer = self._score_config.MULTIPLIER_DECAY_TICKS

    def update(self, dt: float) -> None:
        """Passive points for `dt` seconds, then one tick of multiplier decay."""
        self._add_points(self._score_config.PASSIVE_SCORE_PER_SECOND * dt)
        self.decay_timer -= 1
        if self.decay_timer <= 0:
            self._add_multiplier(-self._score_config.MULTIPLIER_DECAY_STEP)
            self.decay_timer = self._score_config.MULTIPLIER_DECAY_TICKS

    def notify_asteroid_hit(self) -> None:
        self._add_points(self._score_config.HIT_ASTEROID_SCORE * self.multiplier)
        self._add_multiplier(self._score_config.HIT_ASTEROID_ADD_MULTIPLIER)
        self.decay_timer = self._score_config.MULTIPLIER_DECAY_TICKS

    def _add_points(self, points: float) -> None:
        if points > 0:
            self.score += points

    def _add_multiplier(self, step: int) -> None:
        self.multiplier += step
        if self.multiplier <= 0:
            self.multiplier = self._score_config.INITIAL_MULTIPLIER

    def __repr__(self) -> str:
        return f"Score(score={self.score:.1f}, multiplier={self.multiplier})"
