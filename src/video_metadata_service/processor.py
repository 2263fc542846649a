"""Turns raw video bytes into a flat metadata record."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import structlog

from .config import settings
from .ffprobe.mime import extension_for_mime_type
from .ffprobe.probe import MetadataKey, MetadataRetriever
from .ffprobe.runner import ProbeExecutionError
from .models import MetadataError, VideoMetadata
from .temp_files import create_temp_file, remove_temp_file

logger = structlog.get_logger(__name__)


def _to_float(value: Optional[str]) -> float:
    try:
        return float(value) if value is not None else 0.0
    except ValueError:
        return 0.0


def _to_int(value: Optional[str]) -> int:
    try:
        return int(value) if value is not None else 0
    except ValueError:
        return 0


def _subtype(mime_type: str) -> str:
    return mime_type.split("/", 1)[-1]


class VideoProcessor:
    """Probes in-memory videos by staging them in a temp directory."""

    def __init__(
        self,
        temp_dir: Optional[Path] = None,
        *,
        ffprobe_binary: Optional[str] = None,
        probe_timeout: Optional[float] = None,
        keep_temp_files: Optional[bool] = None,
    ) -> None:
        self.temp_dir = temp_dir if temp_dir is not None else settings.temp_dir
        self.ffprobe_binary = ffprobe_binary or settings.ffprobe_binary
        self.probe_timeout = probe_timeout if probe_timeout is not None else settings.probe_timeout_seconds
        self.keep_temp_files = settings.keep_temp_files if keep_temp_files is None else keep_temp_files

    def process_video(self, video_data: bytes, mime_type: Optional[str] = None) -> dict[str, Any]:
        """Return ``fileSize``/``duration``/``format``/``width``/``height`` or an ``error`` entry.

        ``mime_type`` only picks the temp file extension; the reported
        format always comes from FFprobe.
        """

        extension = extension_for_mime_type(mime_type) if mime_type else "tmp"
        temp_file = create_temp_file(video_data, extension, self.temp_dir)
        if temp_file is None:
            return MetadataError(error="Failed to create temp file").model_dump()

        try:
            return self._describe(temp_file)
        finally:
            if not self.keep_temp_files:
                remove_temp_file(temp_file)

    def _describe(self, temp_file: Path) -> dict[str, Any]:
        file_size = temp_file.stat().st_size

        try:
            with MetadataRetriever(self.ffprobe_binary, timeout=self.probe_timeout) as retriever:
                retriever.set_data_source(temp_file)
                found_mime = retriever.extract_metadata(MetadataKey.MIMETYPE) or "unknown"
                duration_ms = _to_float(retriever.extract_metadata(MetadataKey.DURATION))
                width = _to_int(retriever.extract_metadata(MetadataKey.VIDEO_WIDTH))
                height = _to_int(retriever.extract_metadata(MetadataKey.VIDEO_HEIGHT))
        except ProbeExecutionError as exc:
            logger.warning("Metadata retrieval failed", path=str(temp_file), error=str(exc))
            return MetadataError(error=f"Failed to retrieve metadata: {exc}").model_dump()
        except Exception as exc:
            logger.exception("Unexpected FFprobe metadata layout", path=str(temp_file))
            return MetadataError(error=f"Failed to retrieve metadata: {exc}").model_dump()

        result = VideoMetadata(
            file_size=file_size,
            duration=duration_ms,
            format=_subtype(found_mime),
            width=width,
            height=height,
        )
        logger.info("Video metadata extracted", size=file_size, format=result.format)
        return result.model_dump(by_alias=True)
