"""Core Chahar Barg engine - 100% transport-agnostic."""

from core.cards import Card, Deck, Rank, Suit, new_shuffled_deck
from core.hand import Hand
from core.capture import resolve_capture, find_subset_sum
from core.scoring import ScoreBreakdown, FinalResult, score_pile, finalize

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "new_shuffled_deck",
    "Hand",
    "resolve_capture",
    "find_subset_sum",
    "ScoreBreakdown",
    "FinalResult",
    "score_pile",
    "finalize",
]
