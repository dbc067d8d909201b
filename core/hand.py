"""Player hands."""

from dataclasses import dataclass, field
from typing import Iterator

from core.cards import Card

HAND_SIZE = 4


@dataclass
class Hand:
    """Up to four private cards held by one player."""

    cards: list[Card] = field(default_factory=list)
    capacity: int = HAND_SIZE

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        if self.is_full:
            raise ValueError(f"Hand already holds {self.capacity} cards")
        self.cards.append(card)

    def find(self, card_id: str) -> Card | None:
        """Return the card with this id, if held."""
        for card in self.cards:
            if card.id == card_id:
                return card
        return None

    def remove(self, card_id: str) -> Card:
        """
        Take a card out of the hand.

        Raises:
            KeyError: if no card with this id is held
        """
        card = self.find(card_id)
        if card is None:
            raise KeyError(card_id)
        self.cards.remove(card)
        return card

    @property
    def is_full(self) -> bool:
        return len(self.cards) >= self.capacity

    @property
    def is_empty(self) -> bool:
        return not self.cards

    @property
    def ids(self) -> list[str]:
        """Card ids in hand order."""
        return [card.id for card in self.cards]

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)
