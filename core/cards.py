"""Card and Deck classes - immutable card representations."""

from dataclasses import dataclass
from enum import Enum, auto
from random import Random
from typing import Iterator


class Suit(Enum):
    """Card suits."""

    SPADES = auto()
    HEARTS = auto()
    CLUBS = auto()
    DIAMONDS = auto()

    def __str__(self) -> str:
        symbols = {
            Suit.CLUBS: "♣",
            Suit.DIAMONDS: "♦",
            Suit.HEARTS: "♥",
            Suit.SPADES: "♠",
        }
        return symbols[self]


class Rank(Enum):
    """Card ranks with their capture values (Ace low)."""

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    def __str__(self) -> str:
        if 2 <= self.value <= 10:
            return str(self.value)
        return {
            Rank.ACE: "A",
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
        }[self]

    @property
    def is_face(self) -> bool:
        """Check if this rank is a Jack, Queen or King."""
        return self.value > 10


_RANK_TOKENS = {str(rank): rank for rank in Rank}

_SUIT_TOKENS = {
    "C": Suit.CLUBS,
    "♣": Suit.CLUBS,
    "D": Suit.DIAMONDS,
    "♦": Suit.DIAMONDS,
    "H": Suit.HEARTS,
    "♥": Suit.HEARTS,
    "S": Suit.SPADES,
    "♠": Suit.SPADES,
}


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def id(self) -> str:
        """Wire identifier, e.g. '10♦'."""
        return str(self)

    @property
    def value(self) -> int:
        """Numeric value used by the sum capture (A=1 ... K=13)."""
        return self.rank.value

    @property
    def is_face(self) -> bool:
        return self.rank.is_face

    @classmethod
    def from_id(cls, s: str) -> "Card":
        """Create a card from an id like '7♣', '10♦', 'AS' or 'kh'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card id: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        if rank_str == "T":
            rank_str = "10"
        if rank_str not in _RANK_TOKENS:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in _SUIT_TOKENS:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(_RANK_TOKENS[rank_str], _SUIT_TOKENS[suit_str])


class Deck:
    """A standard 52-card deck, drawn from the end."""

    def __init__(
        self,
        rng: Random | None = None,
        cards: list[Card] | None = None,
    ) -> None:
        """
        Initialize a new deck.

        Args:
            rng: Random number generator for shuffling and reinsertion
            cards: Explicit order (draw end last); a full ordered deck if omitted
        """
        self._rng = rng or Random()
        self._cards: list[Card] = []
        if cards is None:
            self.reset()
        else:
            self._cards = list(cards)

    def reset(self) -> None:
        """Reset deck to all 52 cards in order."""
        self._cards = [Card(rank, suit) for suit in Suit for rank in Rank]

    def shuffle(self) -> None:
        """Shuffle the deck."""
        self._rng.shuffle(self._cards)

    def draw(self) -> Card:
        """Draw a card from the top of the deck."""
        if not self._cards:
            raise IndexError("Cannot draw from empty deck")
        return self._cards.pop()

    def insert_random(self, card: Card) -> int:
        """
        Put a card back at a uniformly random position.

        Args:
            card: The card to reinsert

        Returns:
            The index the card was inserted at
        """
        index = self._rng.randrange(len(self._cards) + 1)
        self._cards.insert(index, card)
        return index

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards)


def new_shuffled_deck(rng: Random | None = None) -> Deck:
    """Build a full deck and shuffle it."""
    deck = Deck(rng=rng)
    deck.shuffle()
    return deck
