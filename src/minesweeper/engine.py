"""
Minesweeper game engine.

Implements board generation, first-click protection, flood-fill reveal,
flagging and win/loss detection on top of the generic game lifecycle.
"""
import copy
import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, NamedTuple, Optional

import numpy as np

from .board import Board, Position
from .cell import Cell
from .config import BEGINNER, GameConfig
from .events import EventHandler
from .lifecycle import Clock, Game, GameLifecycle, GameState
from .stats import GameStats

logger = logging.getLogger(__name__)


# ============================================================================
# Move and Snapshot Types
# ============================================================================

class MoveAction(str, Enum):
    """Actions a player can take on a cell."""

    REVEAL = "reveal"
    FLAG = "flag"


@dataclass(frozen=True)
class Move:
    """
    A player move.

    Attributes:
        action: "reveal" or "flag" (or the matching MoveAction).
        row: Row index.
        col: Column index.
    """

    action: str
    row: int
    col: int


class Dimensions(NamedTuple):
    """Board size."""

    width: int
    height: int


@dataclass(frozen=True)
class GameData:
    """Snapshot of the externally visible state of a game."""

    board: List[List[Cell]]
    game_state: GameState
    remaining_mines: int
    revealed_cells: int
    dimensions: Dimensions
    total_mines: int


def _parse_action(action: Any) -> Optional[MoveAction]:
    try:
        return MoveAction(action)
    except ValueError:
        return None


# ============================================================================
# Minesweeper Engine
# ============================================================================

class Minesweeper(Game):
    """
    Minesweeper game.

    The board is generated as soon as the game is created, but moves are
    only accepted after start(). Illegal moves return False and leave the
    game untouched.

    Example:
        >>> game = Minesweeper(BEGINNER)
        >>> game.start()
        >>> game.make_move(Move("reveal", 0, 0))
        True
    """

    def __init__(
        self,
        config: GameConfig = BEGINNER,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
        mine_positions: Optional[Iterable[Position]] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        """
        Create a game with a freshly generated board.

        Args:
            config: Board size, mine count and difficulty.
            seed: Seed for mine placement, ignored when rng is given.
            rng: Random generator for mine placement.
            mine_positions: Explicit mine layout instead of a random one.
                Must contain exactly config.mines distinct positions.
            clock: Source of the current time (default: datetime.now).

        Raises:
            ValueError: If mine_positions does not match the config.
        """
        self.lifecycle = GameLifecycle(config, clock=clock)
        self._rng = rng if rng is not None else np.random.default_rng(seed)
        self._total_mines = config.mines
        self._revealed_cells = 0
        self._flagged_cells = 0
        self._first_click = True
        self._board = self._generate_board(mine_positions)

    def _generate_board(
        self, mine_positions: Optional[Iterable[Position]] = None
    ) -> Board:
        """Build a board for the current config and lay out its mines."""
        board = Board(self.config.width, self.config.height, self._rng)
        if mine_positions is None:
            board.place_mines(self._total_mines)
            board.calculate_neighbor_mines()
        else:
            positions = set(mine_positions)
            if len(positions) != self._total_mines:
                raise ValueError(
                    f"Expected {self._total_mines} mine positions, got {len(positions)}"
                )
            board.set_mines(positions)
        logger.debug(
            "Generated %dx%d board with %d mines",
            board.width, board.height, self._total_mines,
        )
        return board

    @property
    def config(self) -> GameConfig:
        """Current game configuration."""
        return self.lifecycle.config

    # ========================================================================
    # Lifecycle
    # ========================================================================

    def start(self) -> None:
        """Start playing; only effective from idle."""
        self.lifecycle.start()

    def pause(self) -> None:
        """Pause a game in progress."""
        self.lifecycle.pause()

    def resume(self) -> None:
        """Resume a paused game."""
        self.lifecycle.resume()

    def quit(self) -> None:
        """Abandon the current game."""
        self.lifecycle.quit()

    def reset(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        """
        Return to idle with a new random board.

        Session statistics and event subscribers are kept.

        Args:
            config: Replacement configuration; the current one if omitted.
            rng: Replacement random generator.
        """
        if config is not None:
            self.lifecycle.config = config
        if rng is not None:
            self._rng = rng

        self.lifecycle.reset_episode()
        self.lifecycle.history.clear()
        self._total_mines = self.config.mines
        self._revealed_cells = 0
        self._flagged_cells = 0
        self._first_click = True
        self._board = self._generate_board()

    # ========================================================================
    # Game Actions
    # ========================================================================

    def reveal_cell(
        self, row: int, col: int, first_click_protection: bool = False
    ) -> bool:
        """
        Reveal a cell at the given position.

        A zero cell also reveals its connected zero region and the numbered
        cells bordering it. Revealing a mine loses the game; revealing the
        last safe cell wins it.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.
            first_click_protection: On the first move, move a mine away
                from the clicked cell and its neighbors.

        Returns:
            True if the cell was revealed, False if the move was illegal.
        """
        if not self._can_reveal(row, col):
            return False

        cell = self._board.cell(row, col)
        if first_click_protection and self._first_click and cell.is_mine:
            self._board.relocate_mine(row, col)
            self._board.calculate_neighbor_mines()
        self._first_click = False

        self._open(cell)
        self.lifecycle.increment_move_count()

        if cell.is_mine:
            self._board.reveal_all_mines()
            self.lifecycle.game_lost()
            return True

        if cell.neighbor_mines == 0:
            self._flood_fill(row, col)

        self._check_win_condition()
        return True

    def _can_reveal(self, row: int, col: int) -> bool:
        """Check if a cell can be revealed."""
        if self.lifecycle.state != GameState.PLAYING:
            return False
        if not self._board.is_valid_position(row, col):
            return False
        cell = self._board.cell(row, col)
        return not cell.is_revealed and not cell.is_flagged

    def _open(self, cell: Cell) -> None:
        cell.is_revealed = True
        self._revealed_cells += 1

    def _flood_fill(self, row: int, col: int) -> None:
        """Reveal outward from a zero cell, stopping at numbers and flags."""
        pending = deque(self._board.neighbors(row, col))
        while pending:
            next_row, next_col = pending.popleft()
            if not self._can_reveal(next_row, next_col):
                continue
            cell = self._board.cell(next_row, next_col)
            self._open(cell)
            if cell.neighbor_mines == 0:
                pending.extend(self._board.neighbors(next_row, next_col))

    def _check_win_condition(self) -> None:
        """Win once every non-mine cell is revealed."""
        safe_cells = self._board.width * self._board.height - self._total_mines
        if self._revealed_cells == safe_cells:
            self._game_won()

    def _game_won(self) -> None:
        """Flag the remaining mines, then finish the episode as won."""
        self._flagged_cells += self._board.flag_all_mines()
        self.lifecycle.game_won()

    def toggle_flag(self, row: int, col: int) -> bool:
        """
        Toggle flag on a cell.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            True if flag was toggled, False otherwise.
        """
        if self.lifecycle.state != GameState.PLAYING:
            return False
        if not self._board.is_valid_position(row, col):
            return False
        cell = self._board.cell(row, col)
        if cell.is_revealed:
            return False

        cell.is_flagged = not cell.is_flagged
        self._flagged_cells += 1 if cell.is_flagged else -1
        return True

    def make_move(self, move: Move) -> bool:
        """
        Apply a reveal or flag move.

        Returns:
            Result of the underlying action, False for unknown actions.
        """
        action = _parse_action(move.action)
        if action == MoveAction.REVEAL:
            return self.reveal_cell(move.row, move.col)
        if action == MoveAction.FLAG:
            return self.toggle_flag(move.row, move.col)
        return False

    def is_valid_move(self, move: Move) -> bool:
        """Check whether make_move would accept a move, without applying it."""
        action = _parse_action(move.action)
        if action is None:
            return False
        if self.lifecycle.state != GameState.PLAYING:
            return False
        if not self._board.is_valid_position(move.row, move.col):
            return False

        cell = self._board.cell(move.row, move.col)
        if action == MoveAction.REVEAL:
            return not cell.is_revealed and not cell.is_flagged
        return not cell.is_revealed

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        return self.lifecycle.state

    @property
    def is_playing(self) -> bool:
        """Check if game is in progress."""
        return self.lifecycle.state == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self.lifecycle.state == GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self.lifecycle.state == GameState.LOST

    def get_game_state(self) -> GameState:
        """Get current game state."""
        return self.lifecycle.state

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get a copy of the cell at position, or None if invalid."""
        if not self._board.is_valid_position(row, col):
            return None
        return self._board.cell(row, col).copy()

    def get_board(self) -> List[List[Cell]]:
        """Get a deep copy of the grid."""
        return self._board.snapshot()

    def get_dimensions(self) -> Dimensions:
        """Board width and height."""
        return Dimensions(self._board.width, self._board.height)

    def get_remaining_mines(self) -> int:
        """Mines minus flags; negative when over-flagged."""
        return self._total_mines - self._flagged_cells

    def get_revealed_cells(self) -> int:
        """Number of revealed cells."""
        return self._revealed_cells

    def get_total_mines(self) -> int:
        """Number of mines on the board."""
        return self._total_mines

    def get_game_data(self) -> GameData:
        """Bundle the board copy and counters into one snapshot."""
        return GameData(
            board=self.get_board(),
            game_state=self.lifecycle.state,
            remaining_mines=self.get_remaining_mines(),
            revealed_cells=self._revealed_cells,
            dimensions=self.get_dimensions(),
            total_mines=self._total_mines,
        )

    def get_observation(self) -> np.ndarray:
        """Board as an int8 array of observation codes."""
        return self._board.to_observation()

    def is_game_active(self) -> bool:
        """Check if the game is playing or paused."""
        return self.lifecycle.is_game_active()

    def is_game_finished(self) -> bool:
        """Check if the game was won, lost or drawn."""
        return self.lifecycle.is_game_finished()

    # ========================================================================
    # Counters, Stats and Events
    # ========================================================================

    def get_move_count(self) -> int:
        """Number of reveals in this episode."""
        return self.lifecycle.move_count

    def get_score(self) -> int:
        """Current episode score."""
        return self.lifecycle.score

    def elapsed_time(self) -> float:
        """Seconds spent in the current episode."""
        return self.lifecycle.elapsed_time()

    def elapsed_time_formatted(self) -> str:
        """Elapsed time as MM:SS or HH:MM:SS."""
        return self.lifecycle.elapsed_time_formatted()

    def get_stats(self) -> GameStats:
        """Copy of the session statistics."""
        return self.lifecycle.get_stats()

    def reset_stats(self) -> None:
        """Clear the session statistics."""
        self.lifecycle.reset_stats()

    def subscribe(self, handler: EventHandler) -> None:
        """Register a handler for lifecycle events."""
        self.lifecycle.subscribe(handler)

    def unsubscribe(self, handler: EventHandler) -> None:
        """Remove a handler registered with subscribe."""
        self.lifecycle.unsubscribe(handler)

    def serialize(self) -> str:
        """JSON summary of state, config, timestamps, counters and stats."""
        return self.lifecycle.serialize()

    @staticmethod
    def deserialize(data: str) -> Dict[str, Any]:
        """Parse a string produced by serialize."""
        return GameLifecycle.deserialize(data)

    # ========================================================================
    # Copying
    # ========================================================================

    def clone(self) -> "Minesweeper":
        """
        Create an independent copy of this game.

        The copy shares no cells, counters or generator state with the
        original. Session statistics and event subscribers are not copied.
        """
        cloned = copy.copy(self)
        cloned._board = self._board.copy()
        cloned._rng = cloned._board.rng
        cloned.lifecycle = GameLifecycle(self.config, clock=self.lifecycle.clock)

        lifecycle = cloned.lifecycle
        lifecycle.state = self.lifecycle.state
        lifecycle.move_count = self.lifecycle.move_count
        lifecycle.score = self.lifecycle.score
        lifecycle.start_time = self.lifecycle.start_time
        lifecycle.end_time = self.lifecycle.end_time
        return cloned

    def __str__(self) -> str:
        return self._board.render()
