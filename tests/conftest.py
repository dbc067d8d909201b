"""Pytest fixtures for Chahar Barg tests."""

import pytest
from random import Random

from core.cards import Card, Deck
from core.hand import Hand
from core.game import ChaharBargGame


def cards(*ids: str) -> list[Card]:
    """Build cards from ids like '7♣' or '10D'."""
    return [Card.from_id(i) for i in ids]


@pytest.fixture
def make_cards():
    """Card-id helper: make_cards("7♣", "10♦")."""
    return cards


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def deck(rng):
    """A shuffled deck."""
    d = Deck(rng=rng)
    d.shuffle()
    return d


@pytest.fixture
def empty_hand():
    """An empty player hand."""
    return Hand()


@pytest.fixture
def game(rng):
    """A freshly dealt match, not yet started."""
    return ChaharBargGame(rng=rng)


@pytest.fixture
def make_game():
    """
    Factory for a match laid out by hand.

    Floor, hands and remaining deck are given as card ids; the deck list is
    in draw order reversed (last id is drawn first).
    """

    def _make(floor=(), p1=(), p2=(), deck=(), started=True):
        game = ChaharBargGame(deck=Deck(cards=[]))
        game.deck = Deck(rng=Random(7), cards=cards(*deck))
        game.floor.extend(cards(*floor))
        for card in cards(*p1):
            game.hand("p1").add_card(card)
        for card in cards(*p2):
            game.hand("p2").add_card(card)
        if started:
            game.start()
        return game

    return _make

