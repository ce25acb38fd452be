"""FastAPI dependency injection / composition root.

One RateLimiter per process, handed explicitly to every VisionClient.
"""

from __future__ import annotations

from functools import lru_cache

from screensight.config import settings
from screensight.imaging.preprocessor import ImagePreprocessor
from screensight.pipeline.orchestrator import ConversionPipeline
from screensight.vision.client import VisionClient
from screensight.vision.rate_limiter import RateLimiter


def get_settings():
    return settings


@lru_cache
def get_rate_limiter() -> RateLimiter:
    return RateLimiter(
        max_per_minute=settings.rate_limit_per_minute,
        max_per_hour=settings.rate_limit_per_hour,
    )


def get_vision_client() -> VisionClient:
    return VisionClient(get_rate_limiter(), settings)


def get_preprocessor() -> ImagePreprocessor:
    return ImagePreprocessor(settings)


def get_pipeline() -> ConversionPipeline:
    return ConversionPipeline(get_vision_client(), get_preprocessor(), settings=settings)
