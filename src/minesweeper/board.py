"""
Board module for Minesweeper game.

Implements the grid of cells with mine placement, first-click mine
relocation and neighbor mine counts.
"""
import copy
import logging
from typing import Iterable, List, Optional, Set, Tuple

import numpy as np

from .cell import Cell

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Board Class
# ============================================================================

class Board:
    """
    Minesweeper game board.

    A row-major height x width grid of cells. The board owns its cells;
    anything handed out through snapshot() or copy() is a fresh copy.
    """

    def __init__(
        self,
        width: int,
        height: int,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        """
        Create an empty board.

        Args:
            width: Number of columns.
            height: Number of rows.
            rng: Random generator used for mine placement.
        """
        self.width = width
        self.height = height
        self.rng = rng if rng is not None else np.random.default_rng()
        self._grid: List[List[Cell]] = self._init_grid()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> List[List[Cell]]:
        """Create empty grid of cells."""
        return [[Cell() for _ in range(self.width)] for _ in range(self.height)]

    def _random_position(self) -> Position:
        row = int(self.rng.integers(self.height))
        col = int(self.rng.integers(self.width))
        return row, col

    def place_mines(self, count: int) -> None:
        """
        Place mines at uniformly random free positions.

        Positions are drawn one at a time and redrawn when already mined,
        so count must be below the number of cells.

        Args:
            count: Number of mines to place.
        """
        placed = 0
        while placed < count:
            row, col = self._random_position()
            cell = self._grid[row][col]
            if not cell.is_mine:
                cell.is_mine = True
                placed += 1
        logger.debug("Placed %d mines on %dx%d board", count, self.width, self.height)

    def set_mines(self, positions: Iterable[Position]) -> None:
        """
        Replace the mine layout with explicit positions.

        Args:
            positions: (row, col) tuples to mine.

        Raises:
            ValueError: If a position is out of bounds.
        """
        for row_cells in self._grid:
            for cell in row_cells:
                cell.is_mine = False
        for row, col in positions:
            if not self.is_valid_position(row, col):
                raise ValueError(f"Mine position ({row}, {col}) is off the board")
            self._grid[row][col].is_mine = True
        self.calculate_neighbor_mines()

    def relocate_mine(self, row: int, col: int) -> bool:
        """
        Move the mine at (row, col) away from the cell and its neighbors.

        The attempt budget is one draw per cell; when it runs out the mine
        is put back where it was.

        Returns:
            True if the mine was moved, False otherwise.
        """
        self._grid[row][col].is_mine = False

        excluded: Set[Position] = {(row, col)}
        excluded.update(self.neighbors(row, col))

        for _ in range(self.width * self.height):
            new_row, new_col = self._random_position()
            cell = self._grid[new_row][new_col]
            if not cell.is_mine and (new_row, new_col) not in excluded:
                cell.is_mine = True
                logger.debug("Relocated mine (%d, %d) -> (%d, %d)", row, col, new_row, new_col)
                return True

        self._grid[row][col].is_mine = True
        logger.debug("No free cell to relocate mine at (%d, %d)", row, col)
        return False

    def calculate_neighbor_mines(self) -> None:
        """Calculate neighbor mine counts for all non-mine cells."""
        for row in range(self.height):
            for col in range(self.width):
                cell = self._grid[row][col]
                if not cell.is_mine:
                    cell.neighbor_mines = self._count_neighbor_mines(row, col)

    def _count_neighbor_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self.neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_mine:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for in-bounds neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self.is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.height and 0 <= col < self.width

    # ========================================================================
    # Bulk Updates (Mid-level)
    # ========================================================================

    def cell(self, row: int, col: int) -> Cell:
        """Get the live cell at a valid position."""
        return self._grid[row][col]

    def reveal_all_mines(self) -> None:
        """Reveal every mine on the board."""
        for row_cells in self._grid:
            for cell in row_cells:
                if cell.is_mine:
                    cell.is_revealed = True

    def flag_all_mines(self) -> int:
        """
        Flag every mine that is not flagged yet.

        Returns:
            Number of flags added.
        """
        added = 0
        for row_cells in self._grid:
            for cell in row_cells:
                if cell.is_mine and not cell.is_flagged:
                    cell.is_flagged = True
                    added += 1
        return added

    # ========================================================================
    # Views (High-level)
    # ========================================================================

    def mine_positions(self) -> List[Position]:
        """Positions of all mines in row-major order."""
        return [
            (row, col)
            for row in range(self.height)
            for col in range(self.width)
            if self._grid[row][col].is_mine
        ]

    def snapshot(self) -> List[List[Cell]]:
        """Deep copy of the grid, row and cell level."""
        return [[cell.copy() for cell in row_cells] for row_cells in self._grid]

    def copy(self) -> "Board":
        """Independent board with the same cells and generator state."""
        board = Board(self.width, self.height, rng=copy.deepcopy(self.rng))
        board._grid = self.snapshot()
        return board

    def to_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D int8 array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with neighbor count
                9 = revealed mine
        """
        obs = np.zeros((self.height, self.width), dtype=np.int8)
        for row in range(self.height):
            for col in range(self.width):
                obs[row, col] = self._grid[row][col].to_observation()
        return obs

    def render(self) -> str:
        """Plain-text dump of the board, one line per row."""
        lines = []
        for row_cells in self._grid:
            symbols = []
            for cell in row_cells:
                if cell.is_flagged:
                    symbols.append("F")
                elif not cell.is_revealed:
                    symbols.append("?")
                elif cell.is_mine:
                    symbols.append("*")
                else:
                    symbols.append(str(cell.neighbor_mines))
            lines.append(" ".join(symbols))
        return "\n".join(lines)
