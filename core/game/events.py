"""Match events emitted by the engine."""

from dataclasses import dataclass, field
from enum import Enum, auto
from itertools import count
from typing import Any, Callable

from core.game.state import Slot


class EventType(Enum):
    """Types of match events."""

    # Match flow events
    GAME_STARTED = auto()
    GAME_ENDED = auto()
    HANDS_DEALT = auto()

    # Play events
    CARD_PLAYED = auto()
    CARDS_CAPTURED = auto()
    CARD_TO_FLOOR = auto()
    SUR = auto()
    FLOOR_AWARDED = auto()


@dataclass(frozen=True)
class GameEvent:
    """
    Immutable match event.

    `slot` names the seat the event concerns, or None for match-wide events.
    `seq` orders events within one match.
    """

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    slot: Slot | None = None
    seq: int = 0

    def __str__(self) -> str:
        who = f" [{self.slot}]" if self.slot else ""
        return f"{self.event_type.name}{who}: {self.data}"


EventHandler = Callable[[GameEvent], None]


class EventEmitter:
    """
    Synchronous publish/subscribe for one match.

    Handlers run in the engine's call stack, type-specific ones first.
    """

    def __init__(self) -> None:
        self._handlers: dict[EventType | None, list[EventHandler]] = {}
        self._event_history: list[GameEvent] = []
        self._seq = count(1)

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """
        Subscribe to events.

        Args:
            handler: Function to call when event occurs
            event_type: Specific event type to subscribe to, or None for all events
        """
        self._handlers.setdefault(event_type, []).append(handler)

    def emit(self, event: GameEvent) -> None:
        """Record an event and hand it to its subscribers."""
        self._event_history.append(event)

        for handler in self._handlers.get(event.event_type, []):
            handler(event)

        for handler in self._handlers.get(None, []):
            handler(event)

    def emit_new(
        self,
        event_type: EventType,
        slot: Slot | None = None,
        **data: Any,
    ) -> GameEvent:
        """
        Create, number and emit a new event.

        Args:
            event_type: Type of event
            slot: Seat the event concerns
            **data: Event payload (card ids, counters)

        Returns:
            The created event
        """
        event = GameEvent(event_type=event_type, data=data, slot=slot, seq=next(self._seq))
        self.emit(event)
        return event

    @property
    def history(self) -> list[GameEvent]:
        """Return the event history."""
        return self._event_history.copy()

