"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from screensight.models.results import ConversionResult


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    vision_available: bool = False
    renderers_registered: int = 0


class RateLimitResponse(BaseModel):
    can_proceed: bool
    wait_time_ms: int


class BatchItemResponse(BaseModel):
    index: int
    result: ConversionResult | None = None
    error: str | None = None
    error_kind: str | None = None


class BatchConvertResponse(BaseModel):
    total: int
    successful: int
    failed: int
    results: list[BatchItemResponse] = Field(default_factory=list)
    categories: dict[str, list[int]] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    error: str
    kind: str
    detail: str | None = None
