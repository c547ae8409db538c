"""
Cell module for Minesweeper game.

Represents individual cells on the game board: whether they hold a mine,
whether they are revealed or flagged, and how many mines surround them.
"""
from dataclasses import dataclass, replace


# ============================================================================
# Observation Codes
# ============================================================================

HIDDEN_CODE = -1
FLAGGED_CODE = -2
MINE_CODE = 9


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        is_mine: Whether this cell contains a mine.
        is_revealed: Whether the cell has been uncovered.
        is_flagged: Whether the player has flagged the cell.
        neighbor_mines: Count of mines in neighboring cells (0-8). Only
            meaningful for non-mine cells.
    """

    is_mine: bool = False
    is_revealed: bool = False
    is_flagged: bool = False
    neighbor_mines: int = 0

    def copy(self) -> "Cell":
        """Return an independent copy of this cell."""
        return replace(self)

    @property
    def is_hidden(self) -> bool:
        """Check if cell is neither revealed nor flagged."""
        return not self.is_revealed and not self.is_flagged

    def to_observation(self) -> int:
        """
        Convert cell to an integer observation value.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with neighbor mine count
            9: Revealed mine
        """
        if self.is_revealed:
            return MINE_CODE if self.is_mine else self.neighbor_mines
        if self.is_flagged:
            return FLAGGED_CODE
        return HIDDEN_CODE
