"""catalogspine configuration.

Application settings loaded from environment variables with CATALOGSPINE_ prefix.

Example:
    >>> from catalogspine.core.config import get_settings
    >>> settings = get_settings(log_level="DEBUG")
    >>> settings.log_level
    'DEBUG'
    >>> settings.noninterruptable_remainder
    10
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Loads from environment variables with CATALOGSPINE_ prefix.

    Example:
        >>> from catalogspine.core.config import Settings
        >>> s = Settings(max_pages=3)
        >>> s.max_pages
        3
        >>> s.max_retries
        3
    """

    model_config = SettingsConfigDict(
        env_prefix="CATALOGSPINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    # Checkpoints
    checkpoint_dir: Path = Field(
        default=Path("./checkpoints"), description="Directory for JSON checkpoint files"
    )

    # Ingestion
    noninterruptable_remainder: int = Field(
        default=10,
        ge=0,
        description="Entries left on a bounded page below which interrupts are refused",
    )
    max_pages: int = Field(default=50, ge=1, description="Pages fetched per load")

    # HTTP
    request_timeout: float = Field(default=30.0, ge=1.0)
    max_retries: int = Field(default=3, ge=0)
    user_agent: str = Field(default="catalogspine/0.1")


def get_settings(**overrides: Any) -> Settings:
    """Get settings with optional overrides.

    Example:
        >>> from catalogspine.core.config import get_settings
        >>> s = get_settings(request_timeout=5.0)
        >>> s.request_timeout
        5.0
    """
    return Settings(**overrides)
