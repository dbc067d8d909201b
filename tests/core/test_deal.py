"""Tests for the opening floor and hand dealing."""

from random import Random

from hypothesis import given, settings
from hypothesis import strategies as st

from core.cards import Card, Deck, Rank, new_shuffled_deck
from core.deal import FLOOR_SIZE, deal_hands, deal_initial_floor
from core.hand import Hand


def c(card_id):
    return Card.from_id(card_id)


class TestInitialFloor:
    """Tests for deal_initial_floor."""

    def test_lays_four_cards(self, deck):
        floor = []
        deal_initial_floor(deck, floor)
        assert len(floor) == FLOOR_SIZE
        assert len(deck) == 52 - FLOOR_SIZE

    def test_jack_goes_back_into_deck(self):
        # Draw order: J♠ first, then 2♣ 3♣ 4♣ 5♣
        deck = Deck(rng=Random(1), cards=[c("5♣"), c("4♣"), c("3♣"), c("2♣"), c("J♠")])
        floor = []
        deal_initial_floor(deck, floor)

        assert [card.id for card in floor] == ["2♣", "3♣", "4♣", "5♣"]
        assert list(deck) == [c("J♠")]

    def test_stops_when_deck_runs_out(self):
        deck = Deck(cards=[c("2♣"), c("3♦")])
        floor = []
        deal_initial_floor(deck, floor)
        assert len(floor) == 2
        assert len(deck) == 0

    def test_only_jacks_left_does_not_loop(self):
        deck = Deck(rng=Random(1), cards=[c("J♠"), c("J♦")])
        floor = []
        deal_initial_floor(deck, floor)
        assert floor == []
        assert len(deck) == 2

    @settings(max_examples=100)
    @given(seed=st.integers(min_value=0, max_value=2**32 - 1))
    def test_opening_floor_never_has_jacks(self, seed):
        deck = new_shuffled_deck(Random(seed))
        floor = []
        deal_initial_floor(deck, floor)

        assert len(floor) == FLOOR_SIZE
        assert all(card.rank != Rank.JACK for card in floor)
        assert len(set(floor) | set(deck)) == 52


class TestDealHands:
    """Tests for deal_hands."""

    def test_fills_both_hands(self, deck):
        p1, p2 = Hand(), Hand()
        assert deal_hands(deck, p1, p2)
        assert len(p1) == 4
        assert len(p2) == 4
        assert len(deck) == 44

    def test_alternates_starting_with_first(self):
        deck = Deck(cards=[c("8♣"), c("7♣"), c("6♣"), c("5♣"), c("4♣"), c("3♣"), c("2♣"), c("A♣")])
        p1, p2 = Hand(), Hand()
        deal_hands(deck, p1, p2)
        assert p1.ids == ["A♣", "3♣", "5♣", "7♣"]
        assert p2.ids == ["2♣", "4♣", "6♣", "8♣"]

    def test_uneven_when_deck_runs_out(self):
        deck = Deck(cards=[c("3♣"), c("2♣"), c("A♣")])
        p1, p2 = Hand(), Hand()
        assert deal_hands(deck, p1, p2)
        assert len(p1) == 2
        assert len(p2) == 1
        assert len(deck) == 0

    def test_empty_deck_deals_nothing(self):
        p1, p2 = Hand(), Hand()
        assert not deal_hands(Deck(cards=[]), p1, p2)
        assert p1.is_empty and p2.is_empty

    def test_respects_capacity(self, deck):
        p1, p2 = Hand(capacity=2), Hand(capacity=2)
        deal_hands(deck, p1, p2)
        assert len(p1) == 2
        assert len(p2) == 2
        assert len(deck) == 48
