"""Tests for Hand."""

import pytest

from core.cards import Card, Rank, Suit
from core.hand import HAND_SIZE, Hand


class TestHand:
    """Tests for the Hand class."""

    def test_empty_hand(self, empty_hand):
        """Test empty hand properties."""
        assert len(empty_hand) == 0
        assert empty_hand.is_empty
        assert not empty_hand.is_full
        assert empty_hand.capacity == HAND_SIZE

    def test_add_card(self, empty_hand):
        """Test adding cards to hand."""
        empty_hand.add_card(Card(Rank.TEN, Suit.SPADES))
        assert len(empty_hand) == 1
        assert empty_hand.ids == ["10♠"]

    def test_full_hand_rejects_card(self, make_cards):
        hand = Hand(cards=make_cards("A♠", "2♠", "3♠", "4♠"))
        assert hand.is_full
        with pytest.raises(ValueError):
            hand.add_card(Card(Rank.FIVE, Suit.SPADES))

    def test_find_and_remove(self, make_cards):
        hand = Hand(cards=make_cards("A♠", "10♦", "K♣"))
        assert hand.find("10♦") == Card(Rank.TEN, Suit.DIAMONDS)
        assert hand.find("9♦") is None

        removed = hand.remove("10♦")
        assert removed == Card(Rank.TEN, Suit.DIAMONDS)
        assert hand.ids == ["A♠", "K♣"]

    def test_remove_missing_raises(self, make_cards):
        hand = Hand(cards=make_cards("A♠"))
        with pytest.raises(KeyError):
            hand.remove("2♠")
        assert hand.ids == ["A♠"]

    def test_iterates_in_hand_order(self, make_cards):
        hand = Hand(cards=make_cards("Q♥", "2♣"))
        assert list(hand) == [Card(Rank.QUEEN, Suit.HEARTS), Card(Rank.TWO, Suit.CLUBS)]
