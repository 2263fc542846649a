"""Configuration for the video metadata service."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration sourced from environment variables."""

    temp_dir: Path = Field(
        default=Path("/tmp/video-metadata"),
        description="Directory that receives the short-lived video files handed to ffprobe",
    )
    ffprobe_binary: str = Field(default="ffprobe", description="FFprobe executable path")
    probe_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Upper bound for a single ffprobe invocation",
    )
    keep_temp_files: bool = Field(
        default=False,
        description="Leave temp files on disk after probing (debugging aid)",
    )
    max_upload_bytes: int = Field(
        default=512 * 1024 * 1024,
        gt=0,
        description="Largest request body accepted by the metadata endpoint",
    )

    log_level: str = Field(default="INFO", description="Application log level")

    model_config = SettingsConfigDict(env_prefix="VIDEO_METADATA_", env_file=None, extra="ignore")


settings = Settings()
