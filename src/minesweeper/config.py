"""
Game configuration for Minesweeper.

Defines difficulty tags, the per-episode board configuration and the
standard difficulty presets.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict


# ============================================================================
# Constants
# ============================================================================

class Difficulty(str, Enum):
    """Difficulty tag attached to every game configuration."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    CUSTOM = "custom"


@dataclass(frozen=True)
class GameConfig:
    """
    Configuration for a Minesweeper episode.

    Attributes:
        difficulty: Difficulty tag reported in scores and stats.
        width: Number of columns.
        height: Number of rows.
        mines: Total mines to place.
    """

    difficulty: Difficulty = Difficulty.EASY
    width: int = 9
    height: int = 9
    mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise ValueError("Board dimensions must be positive")
        if self.mines < 0:
            raise ValueError("Number of mines cannot be negative")
        # Mine placement samples until every mine finds a free cell, so a
        # full board would never terminate.
        max_mines = self.width * self.height - 1
        if self.mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return self.width * self.height

    @property
    def safe_cells(self) -> int:
        """Number of cells that must be revealed to win."""
        return self.total_cells - self.mines


def custom(width: int, height: int, mines: int) -> GameConfig:
    """Build a configuration tagged with the custom difficulty."""
    return GameConfig(Difficulty.CUSTOM, width, height, mines)


# Preset difficulty levels
BEGINNER = GameConfig(Difficulty.EASY, 9, 9, 10)
INTERMEDIATE = GameConfig(Difficulty.MEDIUM, 16, 16, 40)
EXPERT = GameConfig(Difficulty.HARD, 30, 16, 99)

DIFFICULTY_LEVELS: Dict[str, GameConfig] = {
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}
