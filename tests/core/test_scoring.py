"""Tests for scoring."""

import pytest
from dataclasses import FrozenInstanceError

from core.cards import Card
from core.scoring import CLUBS_MAJORITY_POINTS, FinalResult, ScoreBreakdown, finalize, score_pile


def pile(*card_ids):
    return [Card.from_id(i) for i in card_ids]


class TestScorePile:
    """Tests for score_pile."""

    def test_full_breakdown(self):
        breakdown = score_pile(pile("10♦", "2♣", "A♠", "A♥", "J♦"), surs=1)

        assert breakdown.ten_diamonds_bonus == 3
        assert breakdown.two_clubs_bonus == 2
        assert breakdown.ace_count == 2
        assert breakdown.jack_count == 1
        assert breakdown.sur_points == 5
        assert breakdown.clubs_bonus == 0
        assert breakdown.total == 13

    def test_empty_pile(self):
        breakdown = score_pile([], surs=0)
        assert breakdown == ScoreBreakdown()
        assert breakdown.total == 0

    def test_other_tens_and_twos_score_nothing(self):
        breakdown = score_pile(pile("10♣", "10♠", "2♦", "2♥"), surs=0)
        assert breakdown.total == 0

    def test_counts_clubs(self):
        breakdown = score_pile(pile("2♣", "K♣", "5♥"), surs=0)
        assert breakdown.clubs_captured == 2
        # Counting clubs alone earns nothing
        assert breakdown.total == 2

    def test_sur_points_scale(self):
        assert score_pile([], surs=3).sur_points == 15

    def test_to_dict_includes_total(self):
        data = score_pile(pile("A♠"), surs=0).to_dict()
        assert data["ace_count"] == 1
        assert data["total"] == 1


class TestFinalize:
    """Tests for finalize."""

    def test_clubs_majority_bonus(self):
        result = finalize(pile("3♣", "4♣"), 0, pile("5♣"), 0)

        assert result.p1.clubs_bonus == CLUBS_MAJORITY_POINTS
        assert result.p2.clubs_bonus == 0
        assert result.p1.total == 7
        assert result.winner == "p1"

    def test_clubs_tie_gives_no_bonus(self):
        result = finalize(pile("3♣", "A♠"), 0, pile("5♣", "A♥"), 0)

        assert result.p1.clubs_bonus == 0
        assert result.p2.clubs_bonus == 0
        assert result.winner == "draw"

    def test_second_player_wins(self):
        result = finalize(pile("A♠"), 0, pile("10♦"), 1)
        assert result.p2.total == 8
        assert result.winner == "p2"

    def test_result_is_immutable(self):
        result = finalize([], 0, [], 0)
        assert isinstance(result, FinalResult)
        with pytest.raises(FrozenInstanceError):
            result.winner = "p1"  # type: ignore[misc]

    def test_to_dict(self):
        data = finalize(pile("2♣"), 0, [], 0).to_dict()
        assert data["winner"] == "p1"
        assert data["p1"]["two_clubs_bonus"] == 2
        assert data["p1"]["clubs_captured"] == 1
        assert data["p1"]["total"] == 9
        assert data["p2"]["total"] == 0
