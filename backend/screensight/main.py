"""FastAPI app factory."""

from __future__ import annotations

import asyncio
import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from screensight.config import settings
from screensight.errors import (
    ApiError,
    DecodeError,
    FetchError,
    InvalidResponse,
    RateLimited,
    TooLarge,
    Unconfigured,
    UnsupportedFormat,
    VisionError,
)
from screensight.models.responses import ErrorResponse

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.screensight_log_level.upper(), logging.DEBUG),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: list[tuple[type[VisionError], int]] = [
    (TooLarge, 413),
    (UnsupportedFormat, 415),
    (DecodeError, 422),
    (InvalidResponse, 422),
    (RateLimited, 429),
    (ApiError, 502),
    (FetchError, 502),
    (Unconfigured, 503),
]


def status_for(error: VisionError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 500


def error_response(error: VisionError) -> JSONResponse:
    status = status_for(error)
    body = ErrorResponse(
        error=str(error),
        kind=error.kind,
        detail=None if error.details is None else str(error.details),
    )
    headers = {}
    if isinstance(error, RateLimited):
        headers["Retry-After"] = str(max(1, -(-error.wait_ms // 1000)))
    if status >= 500:
        logger.error("Request failed with %s: %s", error.kind, error)
    return JSONResponse(status_code=status, content=body.model_dump(), headers=headers)


def create_app() -> FastAPI:
    app = FastAPI(
        title="ScreenSight",
        description="Screenshot-to-design engine: UI screenshots to styled object graphs",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(VisionError)
    async def _vision_error_handler(request: Request, exc: VisionError) -> JSONResponse:
        return error_response(exc)

    @app.exception_handler(asyncio.TimeoutError)
    async def _timeout_handler(request: Request, exc: asyncio.TimeoutError) -> JSONResponse:
        body = ErrorResponse(error="Conversion timed out", kind="timeout")
        return JSONResponse(status_code=504, content=body.model_dump())

    from screensight.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
