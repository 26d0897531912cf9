"""Card and Deck classes - immutable card representations."""

from dataclasses import dataclass
from enum import Enum, auto
from random import Random
from typing import Iterable, Iterator


class Suit(Enum):
    """Card suits. Unordered; only compared for equality."""

    SPADES = auto()
    HEARTS = auto()
    DIAMONDS = auto()
    CLUBS = auto()

    def __str__(self) -> str:
        symbols = {
            Suit.SPADES: "♠",
            Suit.HEARTS: "♥",
            Suit.DIAMONDS: "♦",
            Suit.CLUBS: "♣",
        }
        return symbols[self]


class Rank(Enum):
    """Card ranks, ordered two through ace (ace always high)."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self) -> str:
        if self.value <= 10:
            return str(self.value)
        return {
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
            Rank.ACE: "A",
        }[self]

    @property
    def position(self) -> int:
        """Return the 0-based position in the 13-rank sequence (2 -> 0, A -> 12)."""
        return self.value - 2

    @property
    def is_jack_or_better(self) -> bool:
        """Check if a pair of this rank qualifies for Jacks or Better."""
        return self.value >= Rank.JACK.value


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def resource_name(self) -> str:
        """Return the card-art resource name, e.g. 'ten_of_spades'."""
        return f"{self.rank.name.lower()}_of_{self.suit.name.lower()}"

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like '2♣', 'AS', 'Kh', '10D' or 'TD'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        rank_map = {
            "2": Rank.TWO,
            "3": Rank.THREE,
            "4": Rank.FOUR,
            "5": Rank.FIVE,
            "6": Rank.SIX,
            "7": Rank.SEVEN,
            "8": Rank.EIGHT,
            "9": Rank.NINE,
            "10": Rank.TEN,
            "T": Rank.TEN,
            "J": Rank.JACK,
            "Q": Rank.QUEEN,
            "K": Rank.KING,
            "A": Rank.ACE,
        }

        suit_map = {
            "S": Suit.SPADES,
            "♠": Suit.SPADES,
            "H": Suit.HEARTS,
            "♥": Suit.HEARTS,
            "D": Suit.DIAMONDS,
            "♦": Suit.DIAMONDS,
            "C": Suit.CLUBS,
            "♣": Suit.CLUBS,
        }

        if rank_str not in rank_map:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in suit_map:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(rank_map[rank_str], suit_map[suit_str])


def cards_from_string(s: str) -> list[Card]:
    """Parse a space-separated list of cards, e.g. '10S JS QS KS AS'."""
    return [Card.from_string(part) for part in s.split()]


def fresh_deck() -> list[Card]:
    """Return all 52 cards in a fixed order (suit-major, rank-minor)."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


def shuffle(cards: Iterable[Card], rng: Random | None = None) -> list[Card]:
    """
    Return a new list holding the same cards in uniformly random order.

    The input is never mutated.

    Args:
        cards: Cards to shuffle
        rng: Random number generator (pass a seeded one for reproducible order)
    """
    shuffled = list(cards)
    (rng or Random()).shuffle(shuffled)
    return shuffled


class Deck:
    """A standard 52-card deck dealt from the top, without replacement."""

    def __init__(self, rng: Random | None = None) -> None:
        """Initialize a freshly shuffled deck."""
        self._rng = rng or Random()
        self._cards: list[Card] = []
        self.reset()

    def reset(self) -> None:
        """Restore all 52 cards and shuffle them."""
        self._cards = shuffle(fresh_deck(), self._rng)

    def draw(self) -> Card:
        """Draw the next undealt card."""
        if not self._cards:
            raise IndexError("Cannot draw from empty deck")
        return self._cards.pop(0)

    def deal(self, count: int) -> list[Card]:
        """Draw the next `count` undealt cards."""
        if count > len(self._cards):
            raise IndexError(
                f"Cannot deal {count} cards, only {len(self._cards)} remaining"
            )
        return [self.draw() for _ in range(count)]

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards)
