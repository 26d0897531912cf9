"""Configuration management with environment variable support."""

import os
from dataclasses import dataclass, field


def _env_bool(name: str, default: str = "false") -> bool:
    """Read a boolean environment variable ('true'/'false')."""
    return os.getenv(name, default).lower() == "true"


@dataclass(frozen=True)
class GameConfig:
    """Session configuration."""

    starting_credits: int = field(
        default_factory=lambda: int(os.getenv("VP_STARTING_CREDITS", "100"))
    )

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.starting_credits < 1:
            raise ValueError("starting_credits must be at least 1")


@dataclass(frozen=True)
class DisplayConfig:
    """Presentation adapter configuration."""

    reveal_delay_ms: int = field(
        default_factory=lambda: int(os.getenv("VP_REVEAL_DELAY_MS", "250"))
    )
    muted: bool = field(default_factory=lambda: _env_bool("VP_MUTED"))

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.reveal_delay_ms < 0:
            raise ValueError("reveal_delay_ms must not be negative")

    @property
    def reveal_delay(self) -> float:
        """Reveal delay in seconds."""
        return self.reveal_delay_ms / 1000


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: _env_bool("DEBUG"))

    game: GameConfig = field(default_factory=GameConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Global configuration instance
config = AppConfig()
