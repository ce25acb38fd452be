"""End-to-end pipeline tests with a fake chat model."""

from __future__ import annotations

import asyncio
import base64

import pytest

from screensight.errors import ApiError, DecodeError, Unconfigured
from screensight.imaging.preprocessor import ImagePreprocessor
from screensight.models.elements import AnalysisResult, ElementType
from screensight.models.graph import DesignDocument
from screensight.models.options import AnalysisOptions, ConversionOptions, PreprocessingOptions
from screensight.models.results import ConversionResult, ImageSummary
from screensight.pipeline.batch import BatchItem
from screensight.pipeline.orchestrator import CATEGORIES, ConversionPipeline, categorize
from screensight.vision.client import VisionClient
from tests.conftest import (
    FakeChatModel,
    FakeFactory,
    StatusError,
    encode_image,
    make_element,
    no_sleep,
)


def _pipeline(settings, limiter, model: FakeChatModel | None = None) -> ConversionPipeline:
    factory = FakeFactory(model or FakeChatModel())
    client = VisionClient(limiter, settings, llm_factory=factory)
    return ConversionPipeline(client, ImagePreprocessor(settings), settings=settings, sleep=no_sleep)


class SlowModel(FakeChatModel):
    async def ainvoke(self, messages):
        await asyncio.sleep(1)
        return await super().ainvoke(messages)


@pytest.mark.asyncio
async def test_convert_with_model(online_settings, limiter, png_bytes):
    pipeline = _pipeline(online_settings, limiter)
    result = await pipeline.convert(png_bytes)

    (card,) = result.elements
    assert card.id == "card-1"
    assert card.type == ElementType.CARD
    assert [c.id for c in card.children] == ["btn-1"]
    assert card.children[0].styles["zIndex"] == 0
    assert card.styles["zIndex"] == 1

    assert len(result.design.object_graph) == 1
    assert result.design.background == "#0f172a"
    assert result.design.layout.type == "grid"
    assert {m.component_ref.name for m in result.components} == {"card", "button"}
    assert result.metadata.mock is False
    assert result.metadata.tokens_used == 1500
    assert (result.image.width, result.image.height) == (4, 4)


@pytest.mark.asyncio
async def test_offline_degrades_to_mock(offline_settings, limiter, png_bytes):
    result = await _pipeline(offline_settings, limiter).convert(png_bytes)
    assert result.metadata.mock is True
    assert sorted(e.type.value for e in result.elements) == ["button", "input"]
    assert result.detected_types() >= {"button", "input"}


@pytest.mark.asyncio
async def test_strict_offline_raises(offline_settings, limiter, png_bytes):
    options = ConversionOptions(analysis=AnalysisOptions(strict=True))
    with pytest.raises(Unconfigured):
        await _pipeline(offline_settings, limiter).convert(png_bytes, options)


@pytest.mark.asyncio
async def test_api_errors_retried_then_mocked(online_settings, limiter, png_bytes):
    model = FakeChatModel(error=StatusError("upstream down", 500))
    result = await _pipeline(online_settings, limiter, model).convert(png_bytes)
    assert len(model.calls) == 3
    assert result.metadata.mock is True


@pytest.mark.asyncio
async def test_api_errors_strict(online_settings, limiter, png_bytes):
    model = FakeChatModel(error=StatusError("upstream down", 500))
    options = ConversionOptions(analysis=AnalysisOptions(strict=True), retry_attempts=2)
    with pytest.raises(ApiError):
        await _pipeline(online_settings, limiter, model).convert(png_bytes, options)
    assert len(model.calls) == 2


@pytest.mark.asyncio
async def test_map_components_off(online_settings, limiter, png_bytes):
    options = ConversionOptions(map_components=False)
    result = await _pipeline(online_settings, limiter).convert(png_bytes, options)
    assert result.components == []


@pytest.mark.asyncio
async def test_auto_crop_applied(offline_settings, limiter):
    from io import BytesIO

    from PIL import Image

    img = Image.new("RGBA", (100, 100), (0, 0, 0, 0))
    img.paste((255, 0, 0, 255), (40, 40, 60, 60))
    buf = BytesIO()
    img.save(buf, format="PNG")

    options = ConversionOptions(
        preprocessing=PreprocessingOptions(format="image/png"), auto_crop=True, crop_padding=5
    )
    result = await _pipeline(offline_settings, limiter).convert(buf.getvalue(), options)
    assert (result.image.width, result.image.height) == (30, 30)


@pytest.mark.asyncio
async def test_timeout(online_settings, limiter, png_bytes):
    options = ConversionOptions(timeout_s=0.05)
    with pytest.raises(asyncio.TimeoutError):
        await _pipeline(online_settings, limiter, SlowModel()).convert(png_bytes, options)


@pytest.mark.asyncio
async def test_batch_convert_partial_failure(offline_settings, limiter):
    good = base64.b64encode(encode_image(8, 8)).decode()
    sources = [good, "data:image/png;base64,!!!!", good]
    result = await _pipeline(offline_settings, limiter).batch_convert(sources, batch_size=2)
    assert (result.successful, result.failed) == (2, 1)
    assert isinstance(result.results[1].error, DecodeError)

    categories = categorize(result.results)
    assert categories["forms"] == [0, 2]
    assert categories["other"] == [1]


def test_categorize_empty_buckets():
    categories = categorize([BatchItem(index=0, error=RuntimeError("x"))])
    assert list(categories) == CATEGORIES
    assert categories["other"] == [0]
    assert all(categories[name] == [] for name in CATEGORIES if name != "other")


def _result_with(raw_types, element_types=()):
    return ConversionResult(
        design=DesignDocument(),
        analysis=AnalysisResult(elements=[{"type": t} for t in raw_types]),
        elements=[make_element(f"e{i}", type=t) for i, t in enumerate(element_types)],
        image=ImageSummary(mime_type="image/png", width=1, height=1, size_bytes=1),
    )


def test_categorize_uses_raw_model_types():
    results = [
        BatchItem(index=0, value=_result_with(["table"], [ElementType.CONTAINER])),
        BatchItem(index=1, value=_result_with(["Cart"], [ElementType.CONTAINER])),
        BatchItem(index=2, value=_result_with(["chart", "card"], [ElementType.CARD])),
        BatchItem(index=3, value=_result_with(["menu"])),
        BatchItem(index=4, value=_result_with(["text"], [ElementType.TEXT])),
    ]
    categories = categorize(results)
    assert categories["dashboard"] == [0]
    assert categories["ecommerce"] == [1]
    assert categories["cards"] == [2]
    assert categories["navigation"] == [3]
    assert categories["other"] == [4]


def test_detected_types_include_nested_raw_types():
    result = _result_with([])
    result = result.model_copy(
        update={"analysis": AnalysisResult(elements=[{"type": "div", "children": [{"type": "product"}]}])}
    )
    assert {"div", "product"} <= result.detected_types()
