"""Configuration management with validation."""

import logging
import os
from dataclasses import dataclass


@dataclass(frozen=True)
class TelegramConfig:
    token: str
    api_host: str = "https://api.telegram.org"
    timeout: int = 35
    user_agent: str = "tgbot client"
    log_level: str = "INFO"

    def __post_init__(self):
        if not self.token:
            raise ValueError("Bot token is required")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level: {self.log_level}")

    @property
    def api_url(self) -> str:
        return f"{self.api_host.rstrip('/')}/bot{self.token}"

    @classmethod
    def from_env(cls) -> "TelegramConfig":
        token = os.environ.get("BOT_TOKEN", "")
        if not token:
            raise ValueError("BOT_TOKEN environment variable is required")
        return cls(
            token=token,
            api_host=os.environ.get("TELEGRAM_API_HOST", "https://api.telegram.org"),
            timeout=int(os.environ.get("TELEGRAM_TIMEOUT", "35")),
            user_agent=os.environ.get("TELEGRAM_USER_AGENT", "tgbot client"),
            log_level=os.environ.get("LOG_LEVEL", "INFO"),
        )


def configure_logging(config: TelegramConfig) -> logging.Logger:
    """Apply the configured level to the package logger."""
    logger = logging.getLogger("tgbot")
    logger.setLevel(config.log_level.upper())
    return logger
