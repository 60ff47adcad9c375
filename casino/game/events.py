"""Round events and the emitter that fans them out."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Types of round events."""

    ROUND_STARTED = auto()
    ROUND_ENDED = auto()

    BET_PLACED = auto()

    CARD_DEALT = auto()
    SHOE_SHUFFLED = auto()

    PLAYER_HIT = auto()
    PLAYER_STAND = auto()
    PLAYER_DOUBLE = auto()
    PLAYER_SPLIT = auto()

    INSURANCE_OFFERED = auto()
    INSURANCE_TAKEN = auto()
    INSURANCE_DECLINED = auto()
    INSURANCE_WINS = auto()
    INSURANCE_LOSES = auto()

    DEALER_REVEALS = auto()
    DEALER_HITS = auto()
    DEALER_STANDS = auto()
    DEALER_BUSTS = auto()
    DEALER_BLACKJACK = auto()

    PLAYER_BLACKJACK = auto()
    PLAYER_BUSTS = auto()
    PLAYER_WINS = auto()
    PLAYER_LOSES = auto()
    PUSH = auto()

    STARTING_GIFT = auto()

    INVALID_ACTION = auto()
    INSUFFICIENT_FUNDS = auto()


@dataclass(frozen=True)
class GameEvent:
    """Something that happened during a round, with its details in ``data``."""

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.event_type.name}: {self.data}"


EventHandler = Callable[[GameEvent], None]


class EventEmitter:
    """
    Delivers events to subscribers.

    Handlers subscribe to a single event type, or to ``None`` for all of them.
    Every event is also logged at DEBUG and kept in ``history``.
    """

    def __init__(self) -> None:
        self._handlers: dict[EventType | None, list[EventHandler]] = {}
        self._history: list[GameEvent] = []

    def subscribe(self, handler: EventHandler, event_type: EventType | None = None) -> None:
        self._handlers.setdefault(event_type, []).append(handler)

    def emit(self, event_type: EventType, **data: Any) -> GameEvent:
        """Create an event, record it and pass it to its handlers."""
        event = GameEvent(event_type=event_type, data=data)
        logger.debug("%s", event)
        self._history.append(event)

        for handler in self._handlers.get(event_type, []):
            handler(event)
        for handler in self._handlers.get(None, []):
            handler(event)
        return event

    @property
    def history(self) -> list[GameEvent]:
        return self._history.copy()

    def types(self) -> list[EventType]:
        """The event types emitted so far, in order."""
        return [event.event_type for event in self._history]
