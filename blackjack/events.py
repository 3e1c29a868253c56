"""Table events for the event system."""

import threading
from collections import defaultdict, deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable

DEFAULT_HISTORY_LIMIT = 1000


class EventType(Enum):
    """Things that happen at a table."""

    # Seating and round lifecycle
    PLAYER_JOINED = auto()
    TABLE_RESET = auto()
    ROUND_STARTED = auto()
    ROUND_ENDED = auto()

    # Deck and dealing
    DECK_BUILT = auto()
    CARD_DEALT = auto()
    DEAL_FAILED = auto()

    # Hand actions and their outcomes
    PLAYER_HIT = auto()
    PLAYER_STICK = auto()
    PLAYER_BLACKJACK = auto()
    PLAYER_BUSTS = auto()


@dataclass(frozen=True)
class GameEvent:
    """
    Something that happened at a table.

    ``data`` holds plain values (names, scores, card names) so handlers
    never get hold of live engine objects.
    """

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.event_type.name}: {self.data}"


EventHandler = Callable[[GameEvent], None]


class EventEmitter:
    """
    Publishes table events to subscribers and keeps a bounded history.

    Handlers for a specific type run before catch-all handlers. The
    subscriber lists and history are guarded by a lock, but handlers are
    called on the emitting thread after it is released, so a handler may
    subscribe, unsubscribe or read the history.
    """

    def __init__(self, history_limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        self._lock = threading.Lock()
        self._by_type: defaultdict[EventType, list[EventHandler]] = defaultdict(list)
        self._catch_all: list[EventHandler] = []
        self._history: deque[GameEvent] = deque(maxlen=history_limit)

    def _handlers_for(self, event_type: EventType | None) -> list[EventHandler]:
        if event_type is None:
            return self._catch_all
        return self._by_type[event_type]

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """
        Register a handler.

        Args:
            handler: Called with each matching event
            event_type: Only deliver this type; ``None`` delivers everything
        """
        with self._lock:
            self._handlers_for(event_type).append(handler)

    def unsubscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """Remove a handler registered with the same ``event_type``. Unknown handlers are ignored."""
        with self._lock:
            handlers = self._handlers_for(event_type)
            if handler in handlers:
                handlers.remove(handler)

    def emit(self, event: GameEvent) -> None:
        """Record ``event`` and deliver it to its subscribers."""
        with self._lock:
            self._history.append(event)
            targets = [*self._by_type.get(event.event_type, ()), *self._catch_all]

        for handler in targets:
            handler(event)

    def emit_new(self, event_type: EventType, **data: Any) -> GameEvent:
        """Build an event from keyword data, emit it and return it."""
        event = GameEvent(event_type=event_type, data=data)
        self.emit(event)
        return event

    @property
    def history(self) -> list[GameEvent]:
        """Return the recorded events, oldest first."""
        with self._lock:
            return list(self._history)

    def events_of(self, event_type: EventType) -> list[GameEvent]:
        """Return the recorded events of one type, oldest first."""
        with self._lock:
            return [e for e in self._history if e.event_type == event_type]

    def clear_history(self) -> None:
        """Forget every recorded event."""
        with self._lock:
            self._history.clear()
