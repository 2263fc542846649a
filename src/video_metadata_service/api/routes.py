"""HTTP API routes for the video metadata service."""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from fastapi.concurrency import run_in_threadpool

from ..config import settings
from ..processor import VideoProcessor


router = APIRouter()


def get_processor(request: Request) -> VideoProcessor:
    processor = getattr(request.app.state, "processor", None)
    if processor is None:
        raise RuntimeError("Video processor not configured")
    return processor


def _too_large() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        detail="Video exceeds maximum upload size",
    )


async def _read_limited_body(request: Request, limit: int) -> bytes:
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > limit:
        raise _too_large()

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > limit:
            raise _too_large()
    return bytes(body)


@router.get("/health", tags=["health"])
async def healthcheck() -> dict[str, bool]:
    """Liveness probe endpoint."""

    return {"ok": True}


@router.post("/metadata", tags=["metadata"])
async def extract_metadata(
    request: Request,
    content_type: Optional[str] = Header(default=None),
    processor: VideoProcessor = Depends(get_processor),
) -> dict[str, Any]:
    """Report size, duration, format and dimensions of the video sent as the request body."""

    video_data = await _read_limited_body(request, settings.max_upload_bytes)

    normalized_type = content_type.strip().lower() if content_type else ""
    mime_hint = normalized_type if normalized_type.startswith("video/") else None
    return await run_in_threadpool(processor.process_video, video_data, mime_hint)
