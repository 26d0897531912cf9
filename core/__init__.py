"""Core video poker engine - 100% UI-agnostic."""

from core.cards import Card, Deck, Rank, Suit, fresh_deck, shuffle
from core.errors import IllegalTransition, InvalidBet, InvalidHandSize
from core.hand import HandCategory, classify
from core.paytable import PAY_TABLE, payout

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "fresh_deck",
    "shuffle",
    "IllegalTransition",
    "InvalidBet",
    "InvalidHandSize",
    "HandCategory",
    "classify",
    "PAY_TABLE",
    "payout",
]
