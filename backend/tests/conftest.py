"""Shared test fixtures."""

from __future__ import annotations

import io
from types import SimpleNamespace

import pytest
from PIL import Image

from screensight.config import Settings
from screensight.models.elements import BoundingBox, DetectedElement, ElementType
from screensight.models.image import ImageBlob
from screensight.vision.rate_limiter import RateLimiter


MODEL_JSON = """{
  "elements": [
    {"id": "card-1", "type": "panel", "boundingBox": {"x": 0, "y": 0, "width": 600, "height": 400},
     "confidence": 0.95, "styles": {"border": "1px solid #e5e7eb"}},
    {"id": "btn-1", "type": "btn", "boundingBox": {"x": 20, "y": 300, "width": 120, "height": 40},
     "confidence": 0.9, "text": "Save", "styles": {"borderRadius": "6px"}},
    {"id": "noise", "type": "icon", "boundingBox": {"x": 5, "y": 5, "width": 2, "height": 2},
     "confidence": 0.9}
  ],
  "colors": ["#2563eb", "#64748b", "#f8fafc", "#0f172a"],
  "typography": {"fonts": ["Roboto"], "sizes": [14, 18]},
  "layout": {"type": "grid", "direction": "row", "gap": 8},
  "dimensions": {"width": 800, "height": 600}
}"""


def encode_image(
    width: int = 4,
    height: int = 4,
    color: tuple[int, int, int, int] = (255, 0, 0, 255),
    fmt: str = "PNG",
) -> bytes:
    mode = "RGBA" if fmt in ("PNG", "WEBP", "GIF") else "RGB"
    img = Image.new(mode, (width, height), color if mode == "RGBA" else color[:3])
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


def make_element(
    id: str,
    x: float = 0,
    y: float = 0,
    width: float = 100,
    height: float = 40,
    type: ElementType = ElementType.CONTAINER,
    confidence: float = 1.0,
    text: str | None = None,
    color: str | None = None,
    styles: dict | None = None,
    children: list[DetectedElement] | None = None,
) -> DetectedElement:
    return DetectedElement(
        id=id,
        type=type,
        bounding_box=BoundingBox(x=x, y=y, width=width, height=height),
        confidence=confidence,
        text=text,
        color=color,
        styles=styles or {},
        children=children or [],
    )


class FakeClock:
    """Monotonic clock the test moves by hand (seconds)."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeChatModel:
    """Stands in for ChatAnthropic: returns canned text or raises."""

    def __init__(self, text: str = MODEL_JSON, error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.calls: list[list] = []

    async def ainvoke(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(
            content=self.text,
            usage_metadata={"input_tokens": 1200, "output_tokens": 300, "total_tokens": 1500},
        )


class FakeFactory:
    def __init__(self, model: FakeChatModel) -> None:
        self.model = model
        self.requested: list[tuple[str, int]] = []

    def __call__(self, model_id: str, max_tokens: int) -> FakeChatModel:
        self.requested.append((model_id, max_tokens))
        return self.model


class StatusError(Exception):
    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


async def no_sleep(seconds: float) -> None:
    return None


@pytest.fixture
def offline_settings() -> Settings:
    return Settings(_env_file=None, anthropic_api_key="")


@pytest.fixture
def online_settings() -> Settings:
    return Settings(_env_file=None, anthropic_api_key="sk-test")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def limiter(clock: FakeClock) -> RateLimiter:
    return RateLimiter(max_per_minute=5, max_per_hour=50, clock=clock)


@pytest.fixture
def png_bytes() -> bytes:
    return encode_image(4, 4)


@pytest.fixture
def transparent_pixel() -> ImageBlob:
    return ImageBlob(data=encode_image(1, 1, (0, 0, 0, 0)), mime_type="image/png", width=1, height=1)
