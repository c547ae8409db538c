"""
Generic game lifecycle.

Provides the state machine, timing, move/score counters, statistics,
event notification and undo history shared by concrete games. A concrete
game implements the Game interface and owns a GameLifecycle it delegates
to explicitly.
"""
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import asdict, is_dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, Optional

from .events import EventChannel, EventHandler, EventType, GameEvent, GameScore
from .history import GameHistory
from .stats import GameResult, GameStats

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


# ============================================================================
# Constants
# ============================================================================

class GameState(str, Enum):
    """Possible states of a game episode."""

    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    WON = "won"
    LOST = "lost"
    DRAW = "draw"


ACTIVE_STATES = (GameState.PLAYING, GameState.PAUSED)
FINISHED_STATES = (GameState.WON, GameState.LOST, GameState.DRAW)


# ============================================================================
# Game Interface
# ============================================================================

class Game(ABC):
    """Interface every concrete game implements."""

    @abstractmethod
    def start(self) -> None:
        """Begin a new episode."""

    @abstractmethod
    def reset(self, config: Optional[Any] = None) -> None:
        """Return to idle with a fresh episode, optionally reconfigured."""

    @abstractmethod
    def make_move(self, move: Any) -> bool:
        """Apply a move; return False if it was illegal."""

    @abstractmethod
    def is_valid_move(self, move: Any) -> bool:
        """Check a move without applying it."""

    @abstractmethod
    def get_game_data(self) -> Any:
        """Return a snapshot of the externally visible game data."""

    @abstractmethod
    def clone(self) -> "Game":
        """Return an independent copy of the game."""


# ============================================================================
# Lifecycle
# ============================================================================

def _to_json(value: Any) -> Any:
    """json.dumps fallback for enums, datetimes and dataclasses."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if is_dataclass(value):
        return asdict(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class GameLifecycle:
    """
    Shared episode state of a game.

    Tracks the state machine (idle/playing/paused/won/lost/draw), start and
    end timestamps, move and score counters, session statistics, event
    subscribers and an undo history.
    """

    def __init__(
        self,
        config: Any,
        clock: Optional[Clock] = None,
        restore: Optional[Callable[[Any], None]] = None,
    ) -> None:
        """
        Initialize the lifecycle.

        Args:
            config: Game configuration; must expose a difficulty attribute.
            clock: Source of the current time (default: datetime.now).
            restore: Undo/redo restore hook, None if unsupported.
        """
        self.state = GameState.IDLE
        self.config = config
        self.clock: Clock = clock or datetime.now
        self.start_time: Optional[datetime] = None
        self.end_time: Optional[datetime] = None
        self.move_count = 0
        self.score = 0
        self.stats = GameStats()
        self.events = EventChannel()
        self.history: GameHistory[Any] = GameHistory(restore)

    # ========================================================================
    # Transitions
    # ========================================================================

    def start(self) -> None:
        """Move from idle to playing."""
        if self.state != GameState.IDLE:
            return
        self.state = GameState.PLAYING
        self.start_time = self.clock()
        self.end_time = None
        logger.debug("Game started")
        self._notify(EventType.GAME_STARTED, game_state=self.state)

    def pause(self) -> None:
        """Pause a game in progress."""
        if self.state != GameState.PLAYING:
            return
        self.state = GameState.PAUSED
        logger.debug("Game paused after %d moves", self.move_count)
        self._notify(EventType.GAME_PAUSED, game_state=self.state)

    def resume(self) -> None:
        """Resume a paused game."""
        if self.state != GameState.PAUSED:
            return
        self.state = GameState.PLAYING
        logger.debug("Game resumed")
        self._notify(EventType.GAME_RESUMED, game_state=self.state)

    def quit(self) -> None:
        """Abandon an active game and return to idle."""
        if self.state not in ACTIVE_STATES:
            return
        self.state = GameState.IDLE
        self.end_time = self.clock()
        logger.debug("Game quit after %d moves", self.move_count)
        self._notify(EventType.GAME_QUIT, game_state=self.state)

    def game_won(self) -> None:
        """Finish the episode as a win."""
        if not self._finish(GameState.WON, GameResult.WON):
            return
        game_score = GameScore(
            score=self.score,
            moves=self.move_count,
            time_elapsed=self.elapsed_time(),
            difficulty=self.config.difficulty,
            timestamp=self.end_time,
        )
        self._notify(EventType.GAME_WON, game_state=self.state, game_score=game_score)

    def game_lost(self) -> None:
        """Finish the episode as a loss."""
        if self._finish(GameState.LOST, GameResult.LOST):
            self._notify(EventType.GAME_LOST, game_state=self.state)

    def game_draw(self) -> None:
        """Finish the episode as a draw."""
        if self._finish(GameState.DRAW, GameResult.DRAW):
            self._notify(EventType.GAME_DRAW, game_state=self.state)

    def _finish(self, state: GameState, result: GameResult) -> bool:
        """Apply a terminal transition; only valid while playing."""
        if self.state != GameState.PLAYING:
            return False
        self.state = state
        self.end_time = self.clock()
        self.stats.record(result, self.elapsed_time())
        logger.debug("Episode finished: %s after %d moves", state.value, self.move_count)
        return True

    def reset_episode(self) -> None:
        """Return to idle and clear per-episode counters and timestamps."""
        self.state = GameState.IDLE
        self.move_count = 0
        self.score = 0
        self.start_time = None
        self.end_time = None

    # ========================================================================
    # State Queries
    # ========================================================================

    def is_game_active(self) -> bool:
        """Check if the game is playing or paused."""
        return self.state in ACTIVE_STATES

    def is_game_finished(self) -> bool:
        """Check if the episode reached a terminal state."""
        return self.state in FINISHED_STATES

    def elapsed_time(self) -> float:
        """Seconds since start, up to the end time once finished."""
        if self.start_time is None:
            return 0.0
        end_time = self.end_time or self.clock()
        return (end_time - self.start_time).total_seconds()

    def elapsed_time_formatted(self) -> str:
        """Elapsed time as MM:SS, or HH:MM:SS past the first hour."""
        elapsed = int(self.elapsed_time())
        hours, remainder = divmod(elapsed, 3600)
        minutes, seconds = divmod(remainder, 60)
        if hours > 0:
            return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
        return f"{minutes:02d}:{seconds:02d}"

    # ========================================================================
    # Counters
    # ========================================================================

    def increment_move_count(self) -> None:
        """Count one player move."""
        self.move_count += 1
        self._notify(EventType.MOVE_MADE, move_count=self.move_count)

    def update_score(self, points: int) -> None:
        """Add points to the score."""
        self.score += points
        self._notify(EventType.SCORE_UPDATED, score=self.score, points=points)

    # ========================================================================
    # Statistics and Configuration
    # ========================================================================

    def get_stats(self) -> GameStats:
        """Return a copy of the session statistics."""
        return self.stats.copy()

    def reset_stats(self) -> None:
        """Clear the session statistics."""
        self.stats = GameStats()

    def update_config(self, **changes: Any) -> None:
        """Replace configuration fields and announce the change."""
        self.config = replace(self.config, **changes)
        self._notify(EventType.CONFIG_UPDATED, config=self.config)

    # ========================================================================
    # Events
    # ========================================================================

    def subscribe(self, handler: EventHandler) -> None:
        """Register an event handler."""
        self.events.subscribe(handler)

    def unsubscribe(self, handler: EventHandler) -> None:
        """Remove an event handler."""
        self.events.unsubscribe(handler)

    def _notify(self, event_type: EventType, **payload: Any) -> None:
        self.events.emit(GameEvent(type=event_type, timestamp=self.clock(), **payload))

    # ========================================================================
    # Serialization
    # ========================================================================

    def to_dict(self) -> Dict[str, Any]:
        """Summary of the episode and session for persistence."""
        return {
            "state": self.state,
            "config": self.config,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "move_count": self.move_count,
            "score": self.score,
            "stats": self.stats,
        }

    def serialize(self) -> str:
        """Encode the episode summary as a JSON string."""
        return json.dumps(self.to_dict(), default=_to_json)

    @staticmethod
    def deserialize(data: str) -> Dict[str, Any]:
        """
        Parse a string produced by serialize.

        Returns the plain structure; rebuilding a live game from it is left
        to the caller.
        """
        return json.loads(data)
