"""Application configuration builder.

Values come from environment variables (``PORT``, ``PUBLIC_URL`` and friends);
tests construct :class:`AppConfig` directly with keyword overrides.
"""

from __future__ import annotations

from pathlib import Path
from typing import cast

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """Pydantic settings container for the snapshot service."""

    model_config = SettingsConfigDict(env_prefix="", extra="ignore")

    port: int = Field(default=3000, ge=1, le=65535)
    public_url: str | None = Field(
        default=None,
        description="Base used for absolute URLs in JSON responses.",
    )
    snapshots_dir: Path = Field(default=Path("snapshots"))
    youtube_snapshots_dir: Path = Field(default=Path("youtube-snapshots"))
    ffmpeg_bin: str = Field(default="ffmpeg", min_length=1)
    ytdlp_bin: str = Field(default="yt-dlp", min_length=1)
    retention_keep: int = Field(default=100, ge=0)
    retention_interval_seconds: float = Field(default=60 * 60, ge=1.0)
    retention_enabled: bool = True
    capture_timeout_seconds: float = Field(
        default=120.0,
        ge=0.0,
        description="Deadline for a single external tool call; 0 disables it.",
    )
    thumbnail_timeout_seconds: float = Field(default=10.0, gt=0.0)
    ytdlp_socket_timeout_seconds: int = Field(default=30, ge=1)
    cors_root_domain: str = Field(default="yayproject.com", min_length=1)
    log_level: str = "INFO"

    @model_validator(mode="after")
    def _fill_public_url(self) -> "AppConfig":
        if not self.public_url:
            self.public_url = f"http://localhost:{self.port}"
        self.public_url = self.public_url.rstrip("/")
        return self

    @property
    def base_url(self) -> str:
        # filled by _fill_public_url
        return cast(str, self.public_url)

    @property
    def tool_timeout(self) -> float | None:
        return self.capture_timeout_seconds or None


def ensure_storage(config: AppConfig) -> None:
    config.snapshots_dir.mkdir(parents=True, exist_ok=True)
    config.youtube_snapshots_dir.mkdir(parents=True, exist_ok=True)


def load_config(**overrides: object) -> AppConfig:
    """Load configuration from environment and create storage directories."""
    config = AppConfig(**overrides)
    ensure_storage(config)
    return config


__all__ = ["AppConfig", "ensure_storage", "load_config"]
