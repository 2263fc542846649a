"""FastAPI application entry point for the video metadata service."""

from __future__ import annotations

import logging
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import router as api_router
from .config import settings
from .processor import VideoProcessor


def configure_logging() -> None:
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=log_level)
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


logger = structlog.get_logger(__name__)


def create_app(processor: Optional[VideoProcessor] = None) -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="Video Metadata Service",
        description="Reports size, duration, format and dimensions of uploaded videos via FFprobe",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.processor = processor or VideoProcessor()
    logger.info("Video processor ready", temp_dir=str(app.state.processor.temp_dir))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    @app.get("/", tags=["meta"])
    async def root() -> dict[str, str | list[str]]:
        return {
            "service": "video-metadata-service",
            "version": "0.1.0",
            "fields": ["fileSize", "duration", "format", "width", "height"],
        }

    return app


app = create_app()
