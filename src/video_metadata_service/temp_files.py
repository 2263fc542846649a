"""Helpers for the short-lived files handed to FFprobe."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Optional

import structlog

logger = structlog.get_logger(__name__)


def create_temp_file(video_data: bytes, extension: str, directory: Path) -> Optional[Path]:
    """Write ``video_data`` to a new ``vid*.<extension>`` file, or return None on I/O failure."""

    path: Optional[Path] = None
    try:
        directory.mkdir(parents=True, exist_ok=True)
        fd, name = tempfile.mkstemp(prefix="vid", suffix=f".{extension}", dir=directory)
        path = Path(name)
        with os.fdopen(fd, "wb") as handle:
            handle.write(video_data)
        return path
    except OSError as exc:
        logger.warning("Temp file creation failed", directory=str(directory), error=str(exc))
        if path is not None:
            remove_temp_file(path)
        return None


def remove_temp_file(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError:
        logger.debug("Temporary file cleanup failed", path=str(path))
