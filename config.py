"""Configuration management with environment variable support."""

import logging
import os
from dataclasses import dataclass, field


def _parse_pack_count() -> int:
    """Parse BLACKJACK_PACKS environment variable."""
    raw = os.getenv("BLACKJACK_PACKS", "1")
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"BLACKJACK_PACKS must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class GameConfig:
    """Table configuration."""

    pack_count: int = field(default_factory=_parse_pack_count)

    def __post_init__(self) -> None:
        """Validate game settings."""
        if self.pack_count < 1:
            raise ValueError("pack_count must be at least 1")


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str = field(
        default_factory=lambda: os.getenv("BLACKJACK_LOG_LEVEL", "WARNING").upper()
    )
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    def __post_init__(self) -> None:
        """Validate the log level name."""
        if not isinstance(logging.getLevelName(self.level), int):
            raise ValueError(f"Unknown log level: {self.level}")

    @property
    def numeric_level(self) -> int:
        """Return the logging module level for ``level``."""
        return logging.getLevelName(self.level)


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    game: GameConfig = field(default_factory=GameConfig)
    log: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(pack_count: int | None = None, log_level: str | None = None) -> AppConfig:
    """
    Build the configuration from the current environment.

    Args:
        pack_count: Overrides BLACKJACK_PACKS when given
        log_level: Overrides BLACKJACK_LOG_LEVEL when given

    Raises:
        ValueError: A setting holds an invalid value
    """
    game = GameConfig(pack_count=pack_count) if pack_count is not None else GameConfig()
    log = LoggingConfig(level=log_level.upper()) if log_level else LoggingConfig()
    return AppConfig(game=game, log=log)
