"""Precondition errors raised by the video poker engine."""


class VideoPokerError(Exception):
    """Base class for engine errors."""


class InvalidHandSize(VideoPokerError, ValueError):
    """A hand was evaluated with a card count other than five."""

    def __init__(self, size: int, expected: int = 5) -> None:
        super().__init__(f"Hand must contain exactly {expected} cards, got {size}")
        self.size = size
        self.expected = expected


class InvalidBet(VideoPokerError, ValueError):
    """A bet is outside the allowed range or exceeds available credits."""


class IllegalTransition(VideoPokerError, RuntimeError):
    """An action was requested in a state that does not allow it."""

    def __init__(self, action: str, state: str) -> None:
        super().__init__(f"Cannot {action} while {state}")
        self.action = action
        self.state = state
