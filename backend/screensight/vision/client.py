"""LangChain ChatAnthropic wrapper for screenshot analysis."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

from screensight.config import Settings, settings as default_settings
from screensight.errors import ApiError, RateLimited, Unconfigured, VisionError
from screensight.models.elements import AnalysisMetadata, AnalysisResponse
from screensight.models.image import ImageBlob
from screensight.models.options import AnalysisOptions
from screensight.vision.mock import MOCK_MODEL_NAME, mock_analysis
from screensight.vision.model_router import get_model_for_task
from screensight.vision.parsing import normalize_analysis, parse_model_response
from screensight.vision.prompts import (
    COLOR_EXTRACTION_PROMPT,
    UI_ANALYSIS_SYSTEM_PROMPT,
    get_element_extraction_prompt,
)
from screensight.vision.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

# (model_id, max_tokens) -> object with an async ``ainvoke(messages)``
ChatModelFactory = Callable[[str, int], Any]


def _response_text(response: Any) -> str:
    content = getattr(response, "content", response)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = [
            block.get("text", "") if isinstance(block, dict) else str(block)
            for block in content
            if not isinstance(block, dict) or block.get("type", "text") == "text"
        ]
        if parts:
            return "".join(parts)
    raise ApiError("Unexpected response format from vision model")


def _tokens_used(response: Any) -> int:
    usage = getattr(response, "usage_metadata", None) or {}
    total = usage.get("total_tokens")
    if total is None:
        total = usage.get("input_tokens", 0) + usage.get("output_tokens", 0)
    return int(total)


class VisionClient:
    """Rate-limited calls to the vision model.

    The limiter is shared: the composition root builds one and hands it to
    every client instance.
    """

    def __init__(
        self,
        rate_limiter: RateLimiter,
        settings: Settings | None = None,
        llm_factory: ChatModelFactory | None = None,
    ) -> None:
        self._limiter = rate_limiter
        self._settings = settings or default_settings
        self._llm_factory = llm_factory or self._default_llm_factory

    def _default_llm_factory(self, model_id: str, max_tokens: int) -> Any:
        from langchain_anthropic import ChatAnthropic

        return ChatAnthropic(
            model=model_id,
            api_key=self._settings.anthropic_api_key,
            max_tokens=max_tokens,
        )

    def is_available(self) -> bool:
        return bool(self._settings.anthropic_api_key)

    def rate_limit_status(self) -> dict[str, int | bool]:
        return self._limiter.status()

    async def _invoke(self, image: ImageBlob, prompt: str, model_id: str, max_tokens: int) -> tuple[str, int]:
        if not self.is_available():
            raise Unconfigured("API key not configured. Set ANTHROPIC_API_KEY in the environment or .env")

        if not self._limiter.try_acquire():
            wait_ms = self._limiter.wait_time_ms()
            raise RateLimited(
                f"Rate limit exceeded. Please wait {-(-wait_ms // 1000)} seconds.",
                wait_ms=wait_ms,
            )

        from langchain_core.messages import HumanMessage, SystemMessage

        messages = [
            SystemMessage(content=UI_ANALYSIS_SYSTEM_PROMPT),
            HumanMessage(
                content=[
                    {
                        "type": "image",
                        "source": {
                            "type": "base64",
                            "media_type": image.mime_type,
                            "data": image.base64,
                        },
                    },
                    {"type": "text", "text": prompt},
                ]
            ),
        ]

        try:
            llm = self._llm_factory(model_id, max_tokens)
            response = await llm.ainvoke(messages)
        except VisionError:
            raise
        except Exception as e:
            status = getattr(e, "status_code", None) or getattr(e, "status", None)
            if status == 429:
                raise RateLimited("Vision API rate limit exceeded", details=str(e)) from e
            raise ApiError(f"Failed to analyze screenshot: {e}", details=str(e)) from e

        return _response_text(response), _tokens_used(response)

    async def analyze_image(
        self, image: ImageBlob, options: AnalysisOptions | None = None
    ) -> AnalysisResponse:
        """Analyze a screenshot.

        Raises Unconfigured, RateLimited, ApiError or InvalidResponse. Outside
        strict mode, Unconfigured and ApiError degrade to the mock analysis.
        """
        opts = options or AnalysisOptions()
        model_id = opts.model or get_model_for_task("analyze", self._settings)
        prompt = get_element_extraction_prompt(
            detect_text=opts.extract_text,
            extract_colors=opts.extract_colors,
            detect_components=opts.detect_components,
        )

        start = time.perf_counter()
        try:
            raw, tokens = await self._invoke(
                image, prompt, model_id, opts.max_tokens or self._settings.vision_max_tokens
            )
        except (Unconfigured, ApiError) as e:
            if opts.strict:
                raise
            logger.warning("Vision model unavailable (%s); using mock analysis", e)
            return self.fallback_response()

        analysis = normalize_analysis(parse_model_response(raw), image.width, image.height)
        elapsed = (time.perf_counter() - start) * 1000
        logger.info(
            "Analyzed %dx%d image with %s: %d elements, %d tokens, %.0fms",
            image.width, image.height, model_id, len(analysis.elements), tokens, elapsed,
        )
        return AnalysisResponse(
            analysis=analysis,
            raw_response=raw,
            metadata=AnalysisMetadata(
                model=model_id,
                tokens_used=tokens,
                processing_time_ms=round(elapsed, 1),
            ),
        )

    async def extract_colors(self, image: ImageBlob, strict: bool = False) -> list[str]:
        """Palette only, on the cheap model tier."""
        model_id = get_model_for_task("colors", self._settings)
        try:
            raw, _ = await self._invoke(image, COLOR_EXTRACTION_PROMPT, model_id, 1024)
        except (Unconfigured, ApiError) as e:
            if strict:
                raise
            logger.warning("Vision model unavailable (%s); using mock palette", e)
            return mock_analysis().color_palette
        return normalize_analysis(parse_model_response(raw), image.width, image.height).color_palette

    def fallback_response(self) -> AnalysisResponse:
        return AnalysisResponse(
            analysis=mock_analysis(),
            raw_response="",
            metadata=AnalysisMetadata(model=MOCK_MODEL_NAME, mock=True),
        )
