"""FFprobe integration helpers."""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any, Optional

import structlog

from .mime import mime_type_for
from .runner import ProbeExecutionError, execute_probe

logger = structlog.get_logger(__name__)


def probe_streams(ffprobe_binary: str, media_path: Path, *, timeout: Optional[float] = None) -> dict[str, Any]:
    """Return structured metadata for the supplied media file."""

    command = [
        ffprobe_binary,
        "-v",
        "error",
        "-show_format",
        "-show_streams",
        "-print_format",
        "json",
        str(media_path),
    ]
    completed = execute_probe(command, timeout=timeout)
    try:
        metadata = json.loads(completed.stdout or "{}")
    except json.JSONDecodeError as exc:
        raise ProbeExecutionError(command, f"FFprobe returned invalid JSON: {exc}") from exc
    if not isinstance(metadata, dict):
        raise ProbeExecutionError(command, f"FFprobe returned {type(metadata).__name__} instead of an object")
    return metadata


class MetadataKey(str, Enum):
    """Metadata fields exposed by :class:`MetadataRetriever`."""

    MIMETYPE = "mimetype"
    DURATION = "duration"
    VIDEO_WIDTH = "video_width"
    VIDEO_HEIGHT = "video_height"


def _first_video_stream(metadata: dict[str, Any]) -> dict[str, Any]:
    for stream in metadata.get("streams", []):
        if stream.get("codec_type") == "video":
            return stream
    return {}


def _duration_ms(metadata: dict[str, Any]) -> Optional[str]:
    seconds = metadata.get("format", {}).get("duration") or _first_video_stream(metadata).get("duration")
    if seconds is None:
        return None
    try:
        return str(round(float(seconds) * 1000))
    except (TypeError, ValueError, OverflowError):
        return None


class MetadataRetriever:
    """Reads container-level attributes of a media file through FFprobe.

    Values come back string-encoded, or ``None`` when FFprobe does not
    report them. Use as a context manager so :meth:`release` always runs.
    """

    def __init__(self, ffprobe_binary: str = "ffprobe", *, timeout: Optional[float] = None) -> None:
        self._ffprobe_binary = ffprobe_binary
        self._timeout = timeout
        self._metadata: Optional[dict[str, Any]] = None

    def __enter__(self) -> "MetadataRetriever":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    def set_data_source(self, path: Path) -> None:
        self._metadata = probe_streams(self._ffprobe_binary, path, timeout=self._timeout)
        logger.debug("Probed media file", path=str(path), format=self._metadata.get("format", {}).get("format_name"))

    def extract_metadata(self, key: MetadataKey | str) -> Optional[str]:
        if self._metadata is None:
            raise ProbeExecutionError([self._ffprobe_binary], "No data source set")

        key = MetadataKey(key)
        if key is MetadataKey.MIMETYPE:
            return mime_type_for(self._metadata)
        if key is MetadataKey.DURATION:
            return _duration_ms(self._metadata)

        video = _first_video_stream(self._metadata)
        if key is MetadataKey.VIDEO_WIDTH:
            value = video.get("width")
        else:
            value = video.get("height")
        return None if value is None else str(value)

    def release(self) -> None:
        self._metadata = None
