"""
Unit tests for Board class.

Tests mine placement, neighbor counts, first-click relocation,
copies and observation generation.
"""
import numpy as np
import pytest
from minesweeper import Board

from conftest import count_mines, expected_neighbor_mines


@pytest.fixture
def board() -> Board:
    """Empty 5x5 board with a seeded generator."""
    return Board(5, 5, np.random.default_rng(7))


# ============================================================================
# Mine Placement Tests
# ============================================================================

class TestMinePlacement:
    """Test random and explicit mine layouts."""

    def test_new_board_has_no_mines(self, board: Board) -> None:
        """Mines are only placed on request."""
        assert board.mine_positions() == []

    @pytest.mark.parametrize("count", [0, 1, 7, 24])
    def test_place_mines_places_exact_count(self, count: int) -> None:
        """Exactly the requested number of mines should be placed."""
        board = Board(5, 5, np.random.default_rng(count))
        board.place_mines(count)
        assert len(board.mine_positions()) == count

    def test_place_mines_respects_seed(self) -> None:
        """Same seed should give the same layout."""
        first = Board(9, 9, np.random.default_rng(42))
        second = Board(9, 9, np.random.default_rng(42))
        first.place_mines(10)
        second.place_mines(10)
        assert first.mine_positions() == second.mine_positions()

    def test_set_mines_replaces_layout(self, board: Board) -> None:
        """Explicit positions replace any existing mines."""
        board.place_mines(5)
        board.set_mines([(0, 0), (4, 4)])
        assert board.mine_positions() == [(0, 0), (4, 4)]

    def test_set_mines_off_board_raises_error(self, board: Board) -> None:
        """Positions outside the grid are rejected."""
        with pytest.raises(ValueError, match="off the board"):
            board.set_mines([(5, 0)])


# ============================================================================
# Neighbor Tests
# ============================================================================

class TestNeighbors:
    """Test neighbor enumeration and counts."""

    def test_corner_has_three_neighbors(self, board: Board) -> None:
        assert sorted(board.neighbors(0, 0)) == [(0, 1), (1, 0), (1, 1)]

    def test_edge_has_five_neighbors(self, board: Board) -> None:
        assert len(board.neighbors(0, 2)) == 5

    def test_center_has_eight_neighbors(self, board: Board) -> None:
        assert len(board.neighbors(2, 2)) == 8

    def test_neighbor_counts_match_brute_force(self) -> None:
        """Every safe cell counts the mines around it."""
        for seed in range(20):
            board = Board(8, 6, np.random.default_rng(seed))
            board.place_mines(12)
            board.calculate_neighbor_mines()
            grid = board.snapshot()
            for row in range(6):
                for col in range(8):
                    if not grid[row][col].is_mine:
                        assert grid[row][col].neighbor_mines == (
                            expected_neighbor_mines(grid, row, col)
                        )

    def test_set_mines_recomputes_counts(self, board: Board) -> None:
        """Explicit layouts come with neighbor counts."""
        board.set_mines([(0, 0)])
        assert board.cell(1, 1).neighbor_mines == 1
        assert board.cell(2, 2).neighbor_mines == 0


# ============================================================================
# Relocation Tests
# ============================================================================

class TestRelocateMine:
    """Test first-click mine relocation."""

    def test_relocation_clears_clicked_neighborhood(self, board: Board) -> None:
        """Relocated mine lands outside the clicked cell and its neighbors."""
        board.set_mines([(0, 0)])
        assert board.relocate_mine(0, 0) is True

        positions = board.mine_positions()
        assert len(positions) == 1
        assert positions[0] not in {(0, 0), (0, 1), (1, 0), (1, 1)}

    def test_relocation_keeps_other_mines(self, board: Board) -> None:
        """Other mines stay where they are."""
        board.set_mines([(0, 0), (4, 4)])
        board.relocate_mine(0, 0)
        assert (4, 4) in board.mine_positions()
        assert len(board.mine_positions()) == 2

    def test_relocation_fails_without_free_cell(self) -> None:
        """On a tiny board the mine stays put."""
        board = Board(3, 3, np.random.default_rng(0))
        board.set_mines([(1, 1)])
        assert board.relocate_mine(1, 1) is False
        assert board.mine_positions() == [(1, 1)]


# ============================================================================
# Bulk Update Tests
# ============================================================================

class TestBulkUpdates:
    """Test revealing and flagging all mines."""

    def test_reveal_all_mines(self, board: Board) -> None:
        board.set_mines([(0, 0), (3, 2)])
        board.reveal_all_mines()
        assert board.cell(0, 0).is_revealed
        assert board.cell(3, 2).is_revealed
        assert not board.cell(1, 1).is_revealed

    def test_flag_all_mines_counts_new_flags(self, board: Board) -> None:
        """Already flagged mines are not counted again."""
        board.set_mines([(0, 0), (3, 2)])
        board.cell(0, 0).is_flagged = True
        assert board.flag_all_mines() == 1
        assert board.cell(3, 2).is_flagged


# ============================================================================
# Copy Tests
# ============================================================================

class TestCopies:
    """Test that views never alias live cells."""

    def test_snapshot_is_deep(self, board: Board) -> None:
        """Mutating a snapshot should not touch the board."""
        grid = board.snapshot()
        grid[0][0].is_mine = True
        grid[1] = []
        assert board.cell(0, 0).is_mine is False
        assert count_mines(board.snapshot()) == 0
        assert len(board.snapshot()[1]) == 5

    def test_copy_is_independent(self, board: Board) -> None:
        """Copies share no cells with the original."""
        board.set_mines([(2, 2)])
        duplicate = board.copy()
        duplicate.cell(0, 0).is_revealed = True
        duplicate.set_mines([])
        assert board.cell(0, 0).is_revealed is False
        assert board.mine_positions() == [(2, 2)]


# ============================================================================
# Observation Tests
# ============================================================================

class TestObservation:
    """Test observation array and text dump."""

    def test_observation_shape_matches_board(self) -> None:
        """Observation is height x width."""
        board = Board(7, 3)
        assert board.to_observation().shape == (3, 7)

    def test_new_board_observation_all_hidden(self, board: Board) -> None:
        obs = board.to_observation()
        assert obs.dtype == np.int8
        assert np.all(obs == -1)

    def test_observation_codes(self, board: Board) -> None:
        board.set_mines([(0, 0)])
        board.cell(0, 0).is_revealed = True
        board.cell(1, 1).is_revealed = True
        board.cell(4, 4).is_flagged = True
        obs = board.to_observation()
        assert obs[0, 0] == 9
        assert obs[1, 1] == 1
        assert obs[4, 4] == -2
        assert obs[2, 2] == -1

    def test_render(self) -> None:
        """Text dump uses F, ?, * and digits."""
        board = Board(3, 2)
        board.set_mines([(0, 0)])
        board.cell(0, 0).is_revealed = True
        board.cell(0, 1).is_revealed = True
        board.cell(1, 2).is_flagged = True
        assert board.render() == "* 1 ?\n? ? F"
