"""arcbrowse configuration: Pydantic BaseSettings loaded from .env."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    app_name: str = "arcbrowse"
    debug: bool = False
    log_level: str = "INFO"

    # Network
    host: str = "0.0.0.0"
    port: int = 60000
    cors_origins: list[str] = []

    # Browsed tree
    root_dir: str = "."
    confine_to_root: bool = True  # reject paths that normalize outside root_dir

    # Host tools (shell-style, may carry a prefix such as an interpreter)
    classifier_command: str = "file"
    archive_command: str = "7z"

    # Archive extraction
    scratch_prefix: str = "arcbrowse-extract"
    cleanup_scratch: bool = True

    # Streaming
    stream_chunk_size: int = 64 * 1024  # 64 KB

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        env_prefix="ARCBROWSE_",
        extra="ignore",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, value: list[str] | str) -> list[str]:
        if isinstance(value, str) and not value.startswith("["):
            return [o.strip() for o in value.split(",") if o.strip()]
        if isinstance(value, list):
            return value
        return []

    @model_validator(mode="after")
    def _resolve_root(self) -> "Settings":
        """Make the browsed root absolute."""
        if not Path(self.root_dir).is_absolute():
            self.root_dir = str(Path(self.root_dir).resolve())
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
