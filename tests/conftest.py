"""Pytest fixtures for video poker tests."""

import pytest
from random import Random

from core.cards import Card, Deck, cards_from_string
from core.game import VideoPokerGame


class StackedRandom(Random):
    """Random whose shuffle puts chosen cards on top, in the given order."""

    def __init__(self, top: list[Card]) -> None:
        super().__init__(0)
        self.top = list(top)

    def shuffle(self, x) -> None:
        rest = [c for c in x if c not in self.top]
        x[:] = self.top + rest


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def deck(rng):
    """A shuffled deck."""
    return Deck(rng=rng)


@pytest.fixture
def game(rng):
    """A new game instance."""
    return VideoPokerGame(starting_credits=100, rng=rng)


@pytest.fixture
def stacked_game():
    """Factory for a game whose next deal yields `deal`, then `draw` as replacements."""

    def make(deal: str, draw: str = "", credits: int = 100) -> VideoPokerGame:
        top = cards_from_string(deal) + cards_from_string(draw)
        return VideoPokerGame(starting_credits=credits, rng=StackedRandom(top))

    return make
