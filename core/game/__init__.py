"""Match engine and state management."""

from core.game.events import GameEvent, EventType
from core.game.state import RoomState, Slot, SLOTS, opponent_of
from core.game.errors import (
    GameError,
    RoomFull,
    RoomNotFound,
    NotSeated,
    MatchNotStarted,
    MatchOver,
    NotYourTurn,
    CardNotInHand,
)
from core.game.engine import ChaharBargGame, PlayResult

__all__ = [
    "GameEvent",
    "EventType",
    "RoomState",
    "Slot",
    "SLOTS",
    "opponent_of",
    "GameError",
    "RoomFull",
    "RoomNotFound",
    "NotSeated",
    "MatchNotStarted",
    "MatchOver",
    "NotYourTurn",
    "CardNotInHand",
    "ChaharBargGame",
    "PlayResult",
]
