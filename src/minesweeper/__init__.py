"""
Minesweeper game engine.

Provides the generic game lifecycle (state machine, timing, statistics,
events, undo history) and the Minesweeper engine built on it.
"""
from .cell import Cell
from .config import (
    Difficulty,
    GameConfig,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    DIFFICULTY_LEVELS,
    custom,
)
from .events import EventChannel, EventType, GameEvent, GameScore
from .history import GameHistory, Undoable, UndoNotSupportedError
from .stats import GameResult, GameStats
from .lifecycle import Game, GameLifecycle, GameState
from .board import Board
from .engine import Minesweeper, Move, MoveAction, Dimensions, GameData
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "Difficulty",
    "GameConfig",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "DIFFICULTY_LEVELS",
    "custom",
    "EventChannel",
    "EventType",
    "GameEvent",
    "GameScore",
    "GameHistory",
    "Undoable",
    "UndoNotSupportedError",
    "GameResult",
    "GameStats",
    "Game",
    "GameLifecycle",
    "GameState",
    "Board",
    "Minesweeper",
    "Move",
    "MoveAction",
    "Dimensions",
    "GameData",
    "MinesweeperEnv",
]
