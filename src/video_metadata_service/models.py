"""Pydantic models for metadata results."""

from __future__ import annotations

from pydantic import BaseModel, Field


class VideoMetadata(BaseModel):
    """Summary of a probed video."""

    file_size: int = Field(alias="fileSize", ge=0)
    duration: float = Field(default=0.0, description="Duration in milliseconds")
    format: str = Field(default="unknown", description="MIME subtype, e.g. mp4")
    width: int = 0
    height: int = 0

    model_config = {"populate_by_name": True}


class MetadataError(BaseModel):
    """Failure result returned in place of :class:`VideoMetadata`."""

    error: str
