from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from video_metadata_service.main import create_app
from video_metadata_service.processor import VideoProcessor


MP4_METADATA: dict[str, Any] = {
    "streams": [
        {"index": 0, "codec_type": "video", "codec_name": "h264", "width": 1920, "height": 1080, "duration": "5.000000"},
        {"index": 1, "codec_type": "audio", "codec_name": "aac", "channels": 2},
    ],
    "format": {
        "format_name": "mov,mp4,m4a,3gp,3g2,mj2",
        "duration": "5.000000",
        "tags": {"major_brand": "isom"},
    },
}


@pytest.fixture()
def fake_probe(monkeypatch: pytest.MonkeyPatch) -> dict[str, Any]:
    """Replace the FFprobe call; tests tweak ``metadata``/``error`` and read ``calls``."""

    state: dict[str, Any] = {"metadata": MP4_METADATA, "error": None, "calls": []}

    def probe_streams(ffprobe_binary: str, media_path: Path, *, timeout: float | None = None) -> dict[str, Any]:
        state["calls"].append({"path": media_path, "content": media_path.read_bytes(), "timeout": timeout})
        if state["error"] is not None:
            raise state["error"]
        return state["metadata"]

    monkeypatch.setattr("video_metadata_service.ffprobe.probe.probe_streams", probe_streams)
    return state


@pytest.fixture()
def movies_dir(tmp_path: Path) -> Path:
    return tmp_path / "movies"


@pytest.fixture()
def processor(movies_dir: Path) -> VideoProcessor:
    return VideoProcessor(movies_dir, ffprobe_binary="ffprobe", probe_timeout=5.0, keep_temp_files=False)


@pytest.fixture()
def api_client(processor: VideoProcessor) -> TestClient:
    app = create_app(processor=processor)
    with TestClient(app) as client:
        yield client
