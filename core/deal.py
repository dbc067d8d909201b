"""Dealing the opening floor and refilling hands."""

import logging

from core.cards import Card, Deck, Rank
from core.hand import Hand

logger = logging.getLogger(__name__)

FLOOR_SIZE = 4


def deal_initial_floor(deck: Deck, floor: list[Card], size: int = FLOOR_SIZE) -> None:
    """
    Lay the opening floor.

    Draws until the floor holds `size` cards or the deck runs out. A Jack is
    never laid: it goes back into the deck at a random position and drawing
    continues.
    """
    while len(floor) < size and len(deck):
        card = deck.draw()
        if card.rank == Rank.JACK:
            # All-Jack deck would never settle
            if all(c.rank == Rank.JACK for c in deck):
                deck.insert_random(card)
                break
            index = deck.insert_random(card)
            logger.debug("Jack %s returned to deck at position %d", card, index)
        else:
            floor.append(card)


def deal_hands(deck: Deck, first: Hand, second: Hand) -> bool:
    """
    Deal alternately to both hands until they are full or the deck is empty.

    The first hand always receives a card before the second, so an exhausted
    deck can leave the second hand one card short.

    Returns:
        True if at least one card was dealt
    """
    dealt = False
    while len(deck) and not (first.is_full and second.is_full):
        if not first.is_full:
            first.add_card(deck.draw())
            dealt = True
        if len(deck) and not second.is_full:
            second.add_card(deck.draw())
            dealt = True
    return dealt
