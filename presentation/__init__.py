"""UI-facing adapter for the video poker engine."""

from presentation.engine_adapter import EngineAdapter, TableSnapshot, UICardInfo

__all__ = [
    "EngineAdapter",
    "TableSnapshot",
    "UICardInfo",
]
