"""Game engine and state management."""

from core.game.events import GameEvent, EventType
from core.game.state import GameState
from core.game.engine import PlayerAction, Snapshot, VideoPokerGame

__all__ = [
    "GameEvent",
    "EventType",
    "GameState",
    "PlayerAction",
    "Snapshot",
    "VideoPokerGame",
]
