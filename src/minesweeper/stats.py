"""
Session statistics for a game object.

Accumulates results across the episodes played on one game instance.
"""
from dataclasses import asdict, dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional


class GameResult(str, Enum):
    """Terminal outcome of an episode."""

    WON = "won"
    LOST = "lost"
    DRAW = "draw"


@dataclass
class GameStats:
    """
    Cumulative statistics across episodes.

    Times are in seconds. best_time and average_time stay None until the
    first win.
    """

    games_played: int = 0
    games_won: int = 0
    games_lost: int = 0
    games_drawn: int = 0
    win_rate: float = 0.0
    best_time: Optional[float] = None
    average_time: Optional[float] = None
    current_streak: int = 0
    best_streak: int = 0

    def record(self, result: GameResult, elapsed: float) -> None:
        """
        Update the statistics with the outcome of one episode.

        Args:
            result: How the episode ended.
            elapsed: Episode duration in seconds.
        """
        self.games_played += 1

        if result == GameResult.WON:
            self.games_won += 1
            self.current_streak += 1
            self.best_streak = max(self.best_streak, self.current_streak)

            if self.best_time is None or elapsed < self.best_time:
                self.best_time = elapsed

            # Two-point running average, not a mean over all wins. Stored
            # stats depend on this recurrence.
            if self.average_time is not None:
                self.average_time = (self.average_time + elapsed) / 2
            else:
                self.average_time = elapsed
        elif result == GameResult.LOST:
            self.games_lost += 1
            self.current_streak = 0
        elif result == GameResult.DRAW:
            self.games_drawn += 1

        self.win_rate = (
            self.games_won / self.games_played * 100
            if self.games_played > 0
            else 0.0
        )

    def copy(self) -> "GameStats":
        """Return an independent copy."""
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)
