"""Table events for observers (console, API, tests)."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable


class EventType(Enum):
    """Types of table events."""

    # Round flow
    ROUND_STARTED = auto()
    ROUND_ENDED = auto()
    GAME_ENDED = auto()

    # Betting
    BET_PLACED = auto()
    BET_REJECTED = auto()

    # Cards
    CARD_DEALT = auto()
    DECK_RESHUFFLED = auto()
    AVERAGE_RECORDED = auto()

    # Decisions
    PLAYER_HIT = auto()
    PLAYER_STICK = auto()
    DEALER_HITS = auto()
    DEALER_STANDS = auto()

    # Outcomes
    PLAYER_WINS = auto()
    PLAYER_LOSES = auto()
    PUSH = auto()
    PLAYER_ELIMINATED = auto()


@dataclass(frozen=True)
class TableEvent:
    """Immutable record of something that happened at the table."""

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.event_type.name}: {self.data}"


EventHandler = Callable[[TableEvent], None]


class EventEmitter:
    """
    Publish table events to subscribers.

    Handlers subscribe to one event type, or to every event by passing
    ``None``. Emitted events are kept in a history until cleared.
    """

    def __init__(self) -> None:
        self._handlers: dict[EventType | None, list[EventHandler]] = {}
        self._history: list[TableEvent] = []

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        self._handlers.setdefault(event_type, []).append(handler)

    def unsubscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> bool:
        """Remove a handler; returns False if it was not subscribed."""
        handlers = self._handlers.get(event_type, [])
        if handler not in handlers:
            return False
        handlers.remove(handler)
        return True

    def emit(self, event_type: EventType, **data: Any) -> TableEvent:
        """Create an event and deliver it to its subscribers."""
        event = TableEvent(event_type=event_type, data=data)
        self._history.append(event)
        for handler in self._handlers.get(event_type, []):
            handler(event)
        for handler in self._handlers.get(None, []):
            handler(event)
        return event

    @property
    def history(self) -> list[TableEvent]:
        return self._history.copy()

    def of_type(self, event_type: EventType) -> list[TableEvent]:
        return [e for e in self._history if e.event_type == event_type]

    def clear_history(self) -> None:
        self._history.clear()
