"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from datetime import datetime, timedelta
from pathlib import Path
from typing import Iterable, List, Tuple

# Add src to path for imports, and the project root for main.py
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))
sys.path.insert(0, str(ROOT / "src"))

from minesweeper import (
    Cell,
    Difficulty,
    GameConfig,
    GameLifecycle,
    Minesweeper,
    custom,
)


# ============================================================================
# Helpers
# ============================================================================

class FakeClock:
    """Manually advanced clock for deterministic timing tests."""

    def __init__(self) -> None:
        self.now = datetime(2024, 1, 1, 12, 0, 0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


def make_game(
    width: int,
    height: int,
    mines: Iterable[Tuple[int, int]],
    **kwargs,
) -> Minesweeper:
    """Create a game with an explicit mine layout."""
    positions = list(mines)
    return Minesweeper(custom(width, height, len(positions)), mine_positions=positions, **kwargs)


def count_mines(board: List[List[Cell]]) -> int:
    """Count mine cells in a board snapshot."""
    return sum(cell.is_mine for row in board for cell in row)


def expected_neighbor_mines(board: List[List[Cell]], row: int, col: int) -> int:
    """Count mines around a cell by brute force."""
    height, width = len(board), len(board[0])
    count = 0
    for r in range(row - 1, row + 2):
        for c in range(col - 1, col + 2):
            if (r, c) == (row, col):
                continue
            if 0 <= r < height and 0 <= c < width and board[r][c].is_mine:
                count += 1
    return count


# ============================================================================
# Clock Fixtures
# ============================================================================

@pytest.fixture
def clock() -> FakeClock:
    """Create a manually advanced clock."""
    return FakeClock()


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def small_config() -> GameConfig:
    """5x5 board with 3 mines, easy difficulty."""
    return GameConfig(Difficulty.EASY, 5, 5, 3)


@pytest.fixture
def beginner_config() -> GameConfig:
    """Beginner difficulty configuration."""
    return GameConfig(Difficulty.EASY, 9, 9, 10)


# ============================================================================
# Game Fixtures
# ============================================================================

@pytest.fixture
def small_game(small_config: GameConfig) -> Minesweeper:
    """Random 5x5 game with 3 mines, not started."""
    return Minesweeper(small_config, seed=1234)


@pytest.fixture
def corner_game(clock: FakeClock) -> Minesweeper:
    """
    3x3 game with a single mine in the top-left corner, started.

    Neighbor counts:
        * 1 0
        1 1 0
        0 0 0
    """
    game = make_game(3, 3, [(0, 0)], clock=clock)
    game.start()
    return game


@pytest.fixture
def wall_game() -> Minesweeper:
    """
    5x5 game with a full row of mines across the middle, started.

    Revealing the bottom row floods rows 3 and 4 only.
    """
    game = make_game(5, 5, [(2, col) for col in range(5)])
    game.start()
    return game


@pytest.fixture
def lifecycle(small_config: GameConfig, clock: FakeClock) -> GameLifecycle:
    """Lifecycle with a fake clock."""
    return GameLifecycle(small_config, clock=clock)
