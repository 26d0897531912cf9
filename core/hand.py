"""Hand evaluation for Jacks or Better."""

from collections import Counter
from enum import Enum
from typing import Sequence

from core.cards import Card, Rank
from core.errors import InvalidHandSize

HAND_SIZE = 5

ROYAL_RANKS = frozenset({Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING, Rank.ACE})

# A-2-3-4-5 as sorted rank positions (ace sits at 12)
WHEEL_POSITIONS = [0, 1, 2, 3, 12]


class HandCategory(str, Enum):
    """Hand categories, best first. Values are the display names."""

    ROYAL_FLUSH = "Royal Flush"
    STRAIGHT_FLUSH = "Straight Flush"
    FOUR_OF_A_KIND = "Four of a Kind"
    FULL_HOUSE = "Full House"
    FLUSH = "Flush"
    STRAIGHT = "Straight"
    THREE_OF_A_KIND = "Three of a Kind"
    TWO_PAIR = "Two Pair"
    JACKS_OR_BETTER = "Jacks or Better"
    NO_WIN = "No Win"

    def __str__(self) -> str:
        return self.value

    @property
    def is_winning(self) -> bool:
        """Check if this category pays anything."""
        return self is not HandCategory.NO_WIN


def rank_counts(cards: Sequence[Card]) -> Counter:
    """Count how many cards of each rank are present."""
    return Counter(card.rank for card in cards)


def is_flush(cards: Sequence[Card]) -> bool:
    """All cards share one suit."""
    return len({card.suit for card in cards}) == 1


def is_straight(cards: Sequence[Card]) -> bool:
    """
    Check for five strictly consecutive ranks.

    Both 10-J-Q-K-A and the wheel A-2-3-4-5 count. No other run wraps
    around the ace.
    """
    positions = sorted(card.rank.position for card in cards)
    if positions == WHEEL_POSITIONS:
        return True
    return all(b - a == 1 for a, b in zip(positions, positions[1:]))


def is_royal(cards: Sequence[Card]) -> bool:
    """The ranks present are exactly 10, J, Q, K and A."""
    return {card.rank for card in cards} == ROYAL_RANKS


def classify(cards: Sequence[Card]) -> HandCategory:
    """
    Classify a five-card hand.

    Checks run in payout order and the first match wins.

    Args:
        cards: Exactly five cards, in any order

    Returns:
        The hand's category (HandCategory.NO_WIN when nothing pays)

    Raises:
        InvalidHandSize: If the hand does not hold exactly five cards
    """
    if len(cards) != HAND_SIZE:
        raise InvalidHandSize(len(cards), HAND_SIZE)

    counts = rank_counts(cards)
    flush = is_flush(cards)
    straight = is_straight(cards)
    pairs = [rank for rank, n in counts.items() if n == 2]
    multiples = set(counts.values())

    if flush and is_royal(cards):
        return HandCategory.ROYAL_FLUSH
    if flush and straight:
        return HandCategory.STRAIGHT_FLUSH
    if 4 in multiples:
        return HandCategory.FOUR_OF_A_KIND
    if 3 in multiples and 2 in multiples:
        return HandCategory.FULL_HOUSE
    if flush:
        return HandCategory.FLUSH
    if straight:
        return HandCategory.STRAIGHT
    if 3 in multiples:
        return HandCategory.THREE_OF_A_KIND
    if len(pairs) == 2:
        return HandCategory.TWO_PAIR
    if len(pairs) == 1 and pairs[0].is_jack_or_better:
        return HandCategory.JACKS_OR_BETTER
    return HandCategory.NO_WIN
