"""Process configuration read from environment variables."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


class Settings(BaseModel):
    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    tick_interval: float = Field(default=1.0, gt=0)
    max_move: float = Field(default=5.0, gt=0)
    strict_tickers: bool = True
    shutdown_timeout: float = Field(default=5.0, gt=0)
    send_timeout: float = Field(default=0.5, gt=0)
    static_dir: str | None = None
    log_level: LogLevel = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the environment. Unset variables keep their defaults."""
        raw = {
            "host": os.getenv("HOST"),
            "port": os.getenv("PORT"),
            "tick_interval": os.getenv("STOCKWATCH_TICK_INTERVAL"),
            "max_move": os.getenv("STOCKWATCH_MAX_MOVE"),
            "strict_tickers": os.getenv("STOCKWATCH_STRICT_TICKERS"),
            "shutdown_timeout": os.getenv("STOCKWATCH_SHUTDOWN_TIMEOUT"),
            "send_timeout": os.getenv("STOCKWATCH_SEND_TIMEOUT"),
            "static_dir": os.getenv("STOCKWATCH_STATIC_DIR"),
            "log_level": os.getenv("LOG_LEVEL", "").strip().upper() or None,
        }
        return cls.model_validate({k: v.strip() for k, v in raw.items() if v and v.strip()})


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
