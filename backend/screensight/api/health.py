"""Health check + rate-limit status."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from screensight.dependencies import get_vision_client
from screensight.engine import get_registry
from screensight.models.responses import HealthResponse, RateLimitResponse
from screensight.vision.client import VisionClient

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(client: VisionClient = Depends(get_vision_client)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        vision_available=client.is_available(),
        renderers_registered=get_registry().count,
    )


@router.get("/rate-limit", response_model=RateLimitResponse)
async def rate_limit(client: VisionClient = Depends(get_vision_client)) -> RateLimitResponse:
    return RateLimitResponse(**client.rate_limit_status())
