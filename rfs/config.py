"""Random File Server configuration — Pydantic BaseSettings loaded from .env."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, read from RFS_* environment variables."""

    app_name: str = "Random File Server"
    debug: bool = False
    log_level: str = "INFO"

    # Network
    host: str = "0.0.0.0"
    port: int = 8000
    api_prefix: str = "/_rfs"

    # File set
    files_dir: str = "files"  # Relative to the working directory
    cache_ttl_secs: int = 300
    non_repeat: bool = False

    # Listing page (disabled unless set)
    listing_path: str | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RFS_",
        extra="ignore",
    )

    @property
    def listing_enabled(self) -> bool:
        return self.listing_path is not None

    @property
    def files_path(self) -> Path:
        return Path(self.files_dir).resolve()

    @property
    def files_segment(self) -> str:
        """URL segment that explicit file paths start with."""
        return Path(self.files_dir).name or "files"

    @field_validator("port", mode="before")
    @classmethod
    def _parse_port(cls, value: object) -> int:
        try:
            port = int(str(value).strip())
        except ValueError:
            return 8000
        return port if 0 <= port <= 65535 else 8000

    @field_validator("cache_ttl_secs", mode="before")
    @classmethod
    def _parse_ttl(cls, value: object) -> int:
        try:
            ttl = int(str(value).strip())
        except ValueError:
            return 300
        return ttl if ttl >= 0 else 300

    @field_validator("non_repeat", mode="before")
    @classmethod
    def _parse_non_repeat(cls, value: object) -> bool:
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() == "true"

    @field_validator("listing_path", mode="before")
    @classmethod
    def _blank_listing_is_unset(cls, value: object) -> str | None:
        if value is None:
            return None
        value = str(value).strip()
        return value or None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
