"""
Unit tests for Cell class.

Tests cell defaults, copying and observation conversion.
"""
import pytest
from minesweeper import Cell


# ============================================================================
# Cell Initialization Tests
# ============================================================================

class TestCellInitialization:
    """Test cell creation and default values."""

    def test_default_cell_is_not_mine(self) -> None:
        """New cell should not be a mine by default."""
        cell = Cell()
        assert cell.is_mine is False

    def test_default_cell_is_hidden(self) -> None:
        """New cell should be neither revealed nor flagged."""
        cell = Cell()
        assert cell.is_revealed is False
        assert cell.is_flagged is False
        assert cell.is_hidden is True

    def test_default_cell_has_zero_neighbor_mines(self) -> None:
        """New cell should have 0 neighbor mines by default."""
        assert Cell().neighbor_mines == 0

    def test_flagged_cell_is_not_hidden(self) -> None:
        """A flagged cell no longer counts as hidden."""
        assert Cell(is_flagged=True).is_hidden is False


# ============================================================================
# Cell Copy Tests
# ============================================================================

class TestCellCopy:
    """Test that copies are independent records."""

    def test_copy_is_equal(self) -> None:
        """Copy should carry the same values."""
        cell = Cell(is_mine=True, is_flagged=True, neighbor_mines=0)
        assert cell.copy() == cell

    def test_copy_is_independent(self) -> None:
        """Mutating a copy should not touch the original."""
        cell = Cell(neighbor_mines=2)
        duplicate = cell.copy()
        duplicate.is_revealed = True
        duplicate.neighbor_mines = 5
        assert cell.is_revealed is False
        assert cell.neighbor_mines == 2


# ============================================================================
# Cell Observation Tests
# ============================================================================

class TestCellObservation:
    """Test cell observation codes."""

    def test_hidden_cell_observation_is_negative_one(self) -> None:
        """Hidden cell should return -1."""
        assert Cell().to_observation() == -1

    def test_flagged_cell_observation_is_negative_two(self) -> None:
        """Flagged cell should return -2."""
        assert Cell(is_flagged=True).to_observation() == -2

    @pytest.mark.parametrize("count", range(0, 9))
    def test_revealed_cell_observation_matches_neighbor_count(
        self, count: int
    ) -> None:
        """Revealed cell returns its neighbor mine count."""
        cell = Cell(is_revealed=True, neighbor_mines=count)
        assert cell.to_observation() == count

    def test_revealed_mine_observation_is_nine(self) -> None:
        """Revealed mine should return 9."""
        assert Cell(is_mine=True, is_revealed=True).to_observation() == 9

    def test_revealed_flagged_mine_shows_as_mine(self) -> None:
        """A flagged mine revealed on loss shows as a mine."""
        cell = Cell(is_mine=True, is_revealed=True, is_flagged=True)
        assert cell.to_observation() == 9
