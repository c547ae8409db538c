"""
Gymnasium environment wrapper for Minesweeper.

Exposes the engine through the standard RL interface. The environment only
pulls snapshots from the engine after each call; it never mutates the board
directly.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .cell import FLAGGED_CODE, HIDDEN_CODE, MINE_CODE
from .config import BEGINNER, GameConfig
from .engine import Minesweeper, Move, MoveAction


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with neighbor mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size width * height.
        Action i reveals the cell at (i // width, i % width). The first
        reveal of every episode uses first-click protection.

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for an illegal action (already revealed or flagged)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Game configuration (default: beginner preset).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BEGINNER
        self.render_mode = render_mode
        self.game = Minesweeper(self.config, rng=self.np_random)

        self.observation_space = spaces.Box(
            low=FLAGGED_CODE,
            high=MINE_CODE,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(
            self.config.height * self.config.width
        )

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.game.reset(rng=self.np_random)
        self.game.start()

        return self.game.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to reveal (row * width + col).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        row, col = self._action_to_position(action)
        reward = self._calculate_reward(row, col)

        observation = self.game.get_observation()
        terminated = self.game.is_game_finished()
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        row = int(action) // self.config.width
        col = int(action) % self.config.width
        return row, col

    def _calculate_reward(self, row: int, col: int) -> float:
        """
        Reveal a cell and score the outcome.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            Reward value.
        """
        if not self.game.is_valid_move(Move(MoveAction.REVEAL, row, col)):
            return -0.1

        self.game.reveal_cell(row, col, first_click_protection=True)

        if self.game.is_won:
            return 10.0
        if self.game.is_lost:
            return -10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        stats = self.game.get_stats()
        return {
            "moves": self.game.get_move_count(),
            "revealed": self.game.get_revealed_cells(),
            "total_safe": self.config.safe_cells,
            "remaining_mines": self.game.get_remaining_mines(),
            "game_state": self.game.game_state.value,
            "games_played": stats.games_played,
            "win_rate": stats.win_rate,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return str(self.game)
        if self.render_mode == "human":
            print(str(self.game))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action.
        """
        if not self.game.is_playing:
            return np.zeros(self.action_space.n, dtype=bool)
        return self.game.get_observation().flatten() == HIDDEN_CODE
