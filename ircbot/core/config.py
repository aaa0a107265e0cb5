"""Process settings via pydantic-settings."""

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Runtime topology: {"plugins": [...], "connections": [...]}
BotConfig = Mapping[str, Any]

PLUGINS_KEY = "plugins"
CONNECTIONS_KEY = "connections"


def config_list(config: BotConfig, key: str) -> Sequence[Any]:
    """Return the list stored under *key*, or an empty list."""
    value = config.get(key)
    return value if isinstance(value, list) else []


class BotSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="IRCBOT_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Logging
    log_level: str = "INFO"
    log_dir: Path | None = None
    log_max_bytes: int = 10_485_760
    log_backup_count: int = 5
    # Third-party loggers capped at WARNING
    quiet_loggers: list[str] = ["asyncio"]

    # Reference client
    encoding: str = "utf-8"

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level: {v}")
        return level
