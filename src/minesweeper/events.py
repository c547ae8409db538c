"""
Game event notification.

Lifecycle transitions and counter changes are broadcast as immutable
GameEvent records to handlers subscribed on an EventChannel.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, List, Optional

logger = logging.getLogger(__name__)


# ============================================================================
# Event Records
# ============================================================================

class EventType(str, Enum):
    """Discriminant tag of a game event."""

    GAME_STARTED = "game-started"
    GAME_PAUSED = "game-paused"
    GAME_RESUMED = "game-resumed"
    GAME_QUIT = "game-quit"
    GAME_WON = "game-won"
    GAME_LOST = "game-lost"
    GAME_DRAW = "game-draw"
    MOVE_MADE = "move-made"
    SCORE_UPDATED = "score-updated"
    CONFIG_UPDATED = "config-updated"


@dataclass(frozen=True)
class GameScore:
    """Summary of a won episode, attached to the game-won event."""

    score: int
    moves: int
    time_elapsed: float
    difficulty: Any
    timestamp: datetime


@dataclass(frozen=True)
class GameEvent:
    """
    One lifecycle transition or counter change.

    Only the payload fields relevant to the event type are set.
    """

    type: EventType
    timestamp: datetime
    game_state: Optional[Any] = None
    move_count: Optional[int] = None
    score: Optional[int] = None
    points: Optional[int] = None
    config: Optional[Any] = None
    game_score: Optional[GameScore] = None


EventHandler = Callable[[GameEvent], None]


# ============================================================================
# Event Channel
# ============================================================================

class EventChannel:
    """
    Synchronous fan-out of game events.

    Handlers run in registration order, in-line with the call that emitted
    the event. Dispatch iterates over a snapshot of the handler list, so
    subscribing or unsubscribing from inside a handler only affects later
    events.
    """

    def __init__(self) -> None:
        self._handlers: List[EventHandler] = []

    def subscribe(self, handler: EventHandler) -> None:
        """Register a handler for all subsequent events."""
        self._handlers.append(handler)

    def unsubscribe(self, handler: EventHandler) -> None:
        """Remove a handler; unknown handlers are ignored."""
        if handler in self._handlers:
            self._handlers.remove(handler)

    def emit(self, event: GameEvent) -> None:
        """Deliver an event to every registered handler."""
        logger.debug("Emitting %s to %d handler(s)", event.type.value, len(self._handlers))
        for handler in list(self._handlers):
            handler(event)

    def __len__(self) -> int:
        return len(self._handlers)
