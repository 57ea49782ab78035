"""Application configuration from environment variables, plus per-parse options."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from pydantic_settings import BaseSettings


class ErrorMode(str, enum.Enum):
    """What the parser does when an element handler fails."""

    STRICT = "strict"  # raise
    WARN = "warn"  # log a warning and continue
    IGNORE = "ignore"  # continue silently


class Settings(BaseSettings):
    vectorscene_env: str = "development"
    vectorscene_log_level: str = "info"
    vectorscene_error_mode: ErrorMode = ErrorMode.STRICT

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()


@dataclass(frozen=True)
class ParseConfig:
    error_mode: ErrorMode = ErrorMode.STRICT
    # Unknown elements raise UnsupportedElement instead of being skipped (strict mode only)
    strict_elements: bool = False

    @classmethod
    def from_settings(cls, s: Settings | None = None) -> ParseConfig:
        return cls(error_mode=(s or settings).vectorscene_error_mode)
