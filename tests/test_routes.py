from __future__ import annotations

from typing import Any, Iterator

import pytest
from fastapi.testclient import TestClient

from video_metadata_service.config import settings
from video_metadata_service.ffprobe.runner import ProbeExecutionError


def test_healthcheck(api_client: TestClient) -> None:
    response = api_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_extract_metadata(api_client: TestClient, fake_probe: dict[str, Any]) -> None:
    response = api_client.post(
        "/metadata",
        content=b"\x00\x00\x00\x18ftypisom",
        headers={"Content-Type": "application/octet-stream"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["fileSize"] == 12
    assert body["format"] == "mp4"
    assert body["duration"] == 5000.0
    assert (body["width"], body["height"]) == (1920, 1080)
    assert fake_probe["calls"][0]["path"].suffix == ".tmp"


def test_video_content_type_is_used_as_hint(api_client: TestClient, fake_probe: dict[str, Any]) -> None:
    response = api_client.post("/metadata", content=b"webm", headers={"Content-Type": "video/webm"})

    assert response.status_code == 200
    assert fake_probe["calls"][0]["path"].suffix == ".webm"


def test_probe_failure_is_reported_in_body(api_client: TestClient, fake_probe: dict[str, Any]) -> None:
    fake_probe["error"] = ProbeExecutionError(["ffprobe"], "Invalid data found when processing input")

    response = api_client.post("/metadata", content=b"garbage")

    assert response.status_code == 200
    assert response.json() == {"error": "Failed to retrieve metadata: Invalid data found when processing input"}


def test_oversized_upload_rejected(
    api_client: TestClient, fake_probe: dict[str, Any], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(settings, "max_upload_bytes", 4)

    response = api_client.post("/metadata", content=b"too large")

    assert response.status_code == 413
    assert fake_probe["calls"] == []


def test_root_lists_fields(api_client: TestClient) -> None:
    response = api_client.get("/")

    assert response.status_code == 200
    assert "fileSize" in response.json()["fields"]


def test_declared_oversized_upload_rejected_before_reading(
    api_client: TestClient, fake_probe: dict[str, Any], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(settings, "max_upload_bytes", 1024)

    response = api_client.post(
        "/metadata",
        content=b"small",
        headers={"Content-Length": str(10 * 1024 * 1024 * 1024)},
    )

    assert response.status_code == 413
    assert fake_probe["calls"] == []


def test_streamed_upload_stops_at_limit(
    api_client: TestClient, fake_probe: dict[str, Any], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(settings, "max_upload_bytes", 8)

    def chunks() -> Iterator[bytes]:
        for _ in range(4):
            yield b"12345"

    response = api_client.post("/metadata", content=chunks())

    assert response.status_code == 413
    assert fake_probe["calls"] == []


def test_content_type_hint_is_case_insensitive(api_client: TestClient, fake_probe: dict[str, Any]) -> None:
    response = api_client.post("/metadata", content=b"mov", headers={"Content-Type": "Video/QuickTime"})

    assert response.status_code == 200
    assert fake_probe["calls"][0]["path"].suffix == ".mov"
