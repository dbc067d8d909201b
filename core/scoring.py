"""Scoring a finished match."""

from dataclasses import asdict, dataclass, replace
from typing import Any, Iterable, Literal

from core.cards import Card, Rank, Suit

TEN_DIAMONDS = Card(Rank.TEN, Suit.DIAMONDS)
TWO_CLUBS = Card(Rank.TWO, Suit.CLUBS)

TEN_DIAMONDS_POINTS = 3
TWO_CLUBS_POINTS = 2
SUR_POINTS = 5
CLUBS_MAJORITY_POINTS = 7

Winner = Literal["p1", "p2", "draw"]


@dataclass(frozen=True)
class ScoreBreakdown:
    """Points earned by one captured pile."""

    ten_diamonds_bonus: int = 0
    two_clubs_bonus: int = 0
    ace_count: int = 0
    jack_count: int = 0
    sur_points: int = 0
    clubs_captured: int = 0
    clubs_bonus: int = 0

    @property
    def total(self) -> int:
        return (
            self.ten_diamonds_bonus
            + self.two_clubs_bonus
            + self.ace_count
            + self.jack_count
            + self.sur_points
            + self.clubs_bonus
        )

    def to_dict(self) -> dict[str, int]:
        data = asdict(self)
        data["total"] = self.total
        return data


def count_clubs(pile: Iterable[Card]) -> int:
    """Count club-suited cards in a pile."""
    return sum(1 for card in pile if card.suit == Suit.CLUBS)


def score_pile(pile: Iterable[Card], surs: int) -> ScoreBreakdown:
    """
    Score one player's captured pile.

    The clubs-majority bonus depends on both players and is left at zero
    here; see `finalize`.

    Args:
        pile: Captured cards
        surs: Number of sweeps the player made

    Returns:
        The point breakdown
    """
    cards = list(pile)
    return ScoreBreakdown(
        ten_diamonds_bonus=TEN_DIAMONDS_POINTS if TEN_DIAMONDS in cards else 0,
        two_clubs_bonus=TWO_CLUBS_POINTS if TWO_CLUBS in cards else 0,
        ace_count=sum(1 for c in cards if c.rank == Rank.ACE),
        jack_count=sum(1 for c in cards if c.rank == Rank.JACK),
        sur_points=surs * SUR_POINTS,
        clubs_captured=count_clubs(cards),
    )


@dataclass(frozen=True)
class FinalResult:
    """Immutable outcome of a match."""

    winner: Winner
    p1: ScoreBreakdown
    p2: ScoreBreakdown

    def to_dict(self) -> dict[str, Any]:
        return {
            "winner": self.winner,
            "p1": self.p1.to_dict(),
            "p2": self.p2.to_dict(),
        }


def finalize(
    pile_p1: Iterable[Card],
    surs_p1: int,
    pile_p2: Iterable[Card],
    surs_p2: int,
) -> FinalResult:
    """Score both piles, apply the clubs-majority bonus and pick the winner."""
    p1 = score_pile(pile_p1, surs_p1)
    p2 = score_pile(pile_p2, surs_p2)

    if p1.clubs_captured > p2.clubs_captured:
        p1 = replace(p1, clubs_bonus=CLUBS_MAJORITY_POINTS)
    elif p2.clubs_captured > p1.clubs_captured:
        p2 = replace(p2, clubs_bonus=CLUBS_MAJORITY_POINTS)

    winner: Winner = "draw"
    if p1.total > p2.total:
        winner = "p1"
    elif p2.total > p1.total:
        winner = "p2"

    return FinalResult(winner=winner, p1=p1, p2=p2)
