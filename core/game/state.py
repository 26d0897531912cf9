"""Game state enumeration."""

from enum import Enum


class GameState(Enum):
    """
    Round state machine states.

    Flow: READY → DEALT → SETTLED → READY (or GAME_OVER, until reset)
    """

    # Waiting for a deal; bet may be changed
    READY = "ready"

    # Five cards dealt, holds may be toggled
    DEALT = "dealt"

    # Draw finished and paid out (transient)
    SETTLED = "settled"

    # Out of credits; only reset is accepted
    GAME_OVER = "gameover"

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


# Valid state transitions
VALID_TRANSITIONS: dict[GameState, list[GameState]] = {
    GameState.READY: [GameState.DEALT, GameState.GAME_OVER],
    GameState.DEALT: [GameState.DEALT, GameState.SETTLED],
    GameState.SETTLED: [GameState.READY, GameState.GAME_OVER],
    GameState.GAME_OVER: [GameState.READY],
}


def is_valid_transition(from_state: GameState, to_state: GameState) -> bool:
    """
    Check if a state transition is valid.

    Args:
        from_state: Current state
        to_state: Desired state

    Returns:
        True if the transition is allowed
    """
    return to_state in VALID_TRANSITIONS.get(from_state, [])
