"""Capture resolution: which floor cards a played card takes."""

from typing import Sequence

from core.cards import Card, Rank

# A numeric card captures floor cards summing to this minus its own value.
CAPTURE_SUM = 11


def find_subset_sum(floor: Sequence[Card], target: int) -> list[Card]:
    """
    Find the first subset of numeric floor cards summing to target.

    Face cards are never eligible. Cards are explored in floor order,
    depth-first, trying to include each card before trying without it,
    and the first exact match wins.

    Args:
        floor: Cards currently on the floor
        target: Sum to reach

    Returns:
        The matching cards in floor order, or an empty list if none exists
    """
    numeric = [card for card in floor if not card.is_face]
    result: list[Card] = []

    def search(index: int, current_sum: int, chosen: list[Card]) -> bool:
        nonlocal result
        if current_sum == target:
            result = chosen
            return True
        if current_sum > target or index == len(numeric):
            return False

        card = numeric[index]
        if search(index + 1, current_sum + card.value, chosen + [card]):
            return True
        return search(index + 1, current_sum, chosen)

    search(0, 0, [])
    return result


def resolve_capture(played: Card, floor: Sequence[Card]) -> list[Card]:
    """
    Decide which floor cards a played card captures.

    Args:
        played: The card being played
        floor: Cards currently on the floor

    Returns:
        Captured cards (empty when the play captures nothing)
    """
    if played.rank == Rank.JACK:
        return [c for c in floor if c.rank not in (Rank.QUEEN, Rank.KING)]

    if played.rank == Rank.KING:
        return [c for c in floor if c.rank == Rank.KING]

    if played.rank == Rank.QUEEN:
        return [c for c in floor if c.rank == Rank.QUEEN]

    return find_subset_sum(floor, CAPTURE_SUM - played.value)


def is_sur(played: Card, captured: Sequence[Card], floor_after: Sequence[Card]) -> bool:
    """A capture that clears the floor is a sur, unless a Jack made it."""
    return bool(captured) and not floor_after and played.rank != Rank.JACK
