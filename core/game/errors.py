"""Recoverable errors reported back to the offending player."""


class GameError(Exception):
    """Base class for rejected room actions. State is never changed."""

    message = "Action not allowed."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)

    @property
    def text(self) -> str:
        return str(self)


class RoomFull(GameError):
    message = "Room is full."


class RoomNotFound(GameError):
    message = "Room not found."


class NotSeated(GameError):
    message = "You are not seated in this room."


class MatchNotStarted(GameError):
    message = "Waiting for second player…"


class MatchOver(GameError):
    message = "The match is over."


class NotYourTurn(GameError):
    message = "Not your turn."


class CardNotInHand(GameError):
    message = "That card is not in your hand."
