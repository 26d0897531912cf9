"""Fixed Jacks or Better pay table."""

from types import MappingProxyType
from typing import Mapping

from core.errors import InvalidBet
from core.hand import HandCategory

MIN_BET = 1
MAX_BET = 5

# Royal Flush at max bet pays this instead of 250 x 5
ROYAL_FLUSH_JACKPOT = 4000

PER_COIN: Mapping[HandCategory, int] = MappingProxyType({
    HandCategory.ROYAL_FLUSH: 250,
    HandCategory.STRAIGHT_FLUSH: 50,
    HandCategory.FOUR_OF_A_KIND: 25,
    HandCategory.FULL_HOUSE: 9,
    HandCategory.FLUSH: 6,
    HandCategory.STRAIGHT: 4,
    HandCategory.THREE_OF_A_KIND: 3,
    HandCategory.TWO_PAIR: 2,
    HandCategory.JACKS_OR_BETTER: 1,
    HandCategory.NO_WIN: 0,
})


def _build_row(category: HandCategory) -> tuple[int, ...]:
    row = [PER_COIN[category] * bet for bet in range(MIN_BET, MAX_BET + 1)]
    if category is HandCategory.ROYAL_FLUSH:
        row[-1] = ROYAL_FLUSH_JACKPOT
    return tuple(row)


# Payout per category at bet levels 1..5
PAY_TABLE: Mapping[HandCategory, tuple[int, ...]] = MappingProxyType(
    {category: _build_row(category) for category in HandCategory}
)


def validate_bet(bet: int) -> int:
    """Return `bet` unchanged if it is an int in 1..5, else raise InvalidBet."""
    if isinstance(bet, bool) or not isinstance(bet, int):
        raise InvalidBet(f"Bet must be an integer, got {bet!r}")
    if not MIN_BET <= bet <= MAX_BET:
        raise InvalidBet(f"Bet must be between {MIN_BET} and {MAX_BET}, got {bet}")
    return bet


def payout(category: HandCategory, bet: int) -> int:
    """
    Return the credits paid for a hand category at the given bet.

    Args:
        category: Classified hand
        bet: Coins wagered (1-5)

    Returns:
        Non-negative credit payout

    Raises:
        InvalidBet: If bet is outside 1..5
    """
    validate_bet(bet)
    return PAY_TABLE[HandCategory(category)][bet - 1]


def pay_table_rows() -> list[tuple[HandCategory, tuple[int, ...]]]:
    """Return the paying rows in display order (best hand first, No Win omitted)."""
    return [
        (category, PAY_TABLE[category])
        for category in HandCategory
        if category.is_winning
    ]
