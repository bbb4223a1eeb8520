"""Settings for funcache.

Every value has a default and can be overridden with a ``FUNCACHE_``-prefixed
environment variable or a ``.env`` file:

    FUNCACHE_LOG_LEVEL=DEBUG
    FUNCACHE_DEFAULT_STORE=lru
    FUNCACHE_LRU_MAX_SIZE=4096
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")

StoreKind = Literal["mutex", "copy_on_write", "lru", "null"]


class FuncacheSettings(BaseSettings):
    """Settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FUNCACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Logging ===
    log_level: str = Field(
        default="INFO",
        description="Level for the stderr sink added by configure_logging()",
    )

    # === Stores ===
    default_store: StoreKind = Field(
        default="mutex",
        description="Store used by new_default_cache()",
    )
    lru_max_size: int = Field(
        default=1024,
        description="Capacity of the LRU store when default_store is 'lru'",
        ge=1,
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        level = str(v).strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v!r}")
        return level


@lru_cache()
def get_settings() -> FuncacheSettings:
    """Get cached settings singleton."""
    return FuncacheSettings()
