"""Room state enumeration."""

from enum import Enum, auto
from typing import Literal

Slot = Literal["p1", "p2"]
SLOTS: tuple[Slot, Slot] = ("p1", "p2")


def opponent_of(slot: Slot) -> Slot:
    """Return the other seat."""
    return "p2" if slot == "p1" else "p1"


class RoomState(Enum):
    """
    Match state machine states.

    Flow: WAITING → ACTIVE → ENDED
    """

    # Fewer than two seats filled
    WAITING = auto()

    # Both seats filled, turns alternate
    ACTIVE = auto()

    # Deck and hands exhausted, result fixed
    ENDED = auto()

    def __str__(self) -> str:
        return self.name.title()

