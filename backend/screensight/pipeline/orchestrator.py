"""ConversionPipeline: screenshot in, object graph and component bindings out.

Stages:
  preprocess → auto-crop (optional) → analyze (retry/backoff) → normalize →
  classify → flatten → build hierarchy → z-indices → generate design →
  bind catalog components
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Sequence

from screensight.catalog.mapper import TokenMapper
from screensight.config import Settings, settings as default_settings
from screensight.engine.converter import DesignConverter
from screensight.engine.hierarchy import assign_z_indices, build_hierarchy, flatten
from screensight.engine.normalizer import ElementNormalizer
from screensight.errors import ApiError, Unconfigured
from screensight.imaging.preprocessor import ImagePreprocessor
from screensight.models.elements import AnalysisResponse
from screensight.models.image import ImageBlob
from screensight.models.options import ConversionOptions
from screensight.models.results import ConversionResult, ImageSummary
from screensight.pipeline.batch import BatchItem, BatchResult, batch_import
from screensight.pipeline.retry import Sleep, retry_with_backoff
from screensight.vision.client import VisionClient

logger = logging.getLogger(__name__)

# First match wins, checked in this order
_CATEGORY_RULES: list[tuple[str, set[str]]] = [
    ("forms", {"form", "input", "textarea", "select"}),
    ("navigation", {"nav", "navigation", "menu", "sidebar"}),
    ("cards", {"card"}),
    ("ecommerce", {"product", "cart"}),
    ("dashboard", {"chart", "table"}),
]
CATEGORIES = [name for name, _ in _CATEGORY_RULES] + ["other"]


def categorize(results: Sequence[BatchItem[ConversionResult]]) -> dict[str, list[int]]:
    """Group batch item indices by the kind of screen they depict."""
    categories: dict[str, list[int]] = {name: [] for name in CATEGORIES}
    for item in results:
        if item.value is None:
            categories["other"].append(item.index)
            continue
        present = item.value.detected_types()
        for name, markers in _CATEGORY_RULES:
            if present & markers:
                categories[name].append(item.index)
                break
        else:
            categories["other"].append(item.index)
    return categories


class ConversionPipeline:
    def __init__(
        self,
        client: VisionClient,
        preprocessor: ImagePreprocessor,
        normalizer: ElementNormalizer | None = None,
        mapper: TokenMapper | None = None,
        settings: Settings | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._client = client
        self._preprocessor = preprocessor
        self._normalizer = normalizer or ElementNormalizer()
        self._mapper = mapper or TokenMapper()
        self._settings = settings or default_settings
        self._sleep = sleep

    async def analyze(self, image: ImageBlob, options: ConversionOptions) -> AnalysisResponse:
        """Model call with retry; degrades to the mock analysis unless strict."""
        strict = options.analysis.model_copy(update={"strict": True})
        attempts = options.retry_attempts or self._settings.retry_attempts
        base_delay_ms = (
            options.retry_base_delay_ms
            if options.retry_base_delay_ms is not None
            else self._settings.retry_base_delay_ms
        )
        try:
            return await retry_with_backoff(
                lambda: self._client.analyze_image(image, strict),
                attempts=attempts,
                base_delay_ms=base_delay_ms,
                sleep=self._sleep,
            )
        except (Unconfigured, ApiError) as e:
            if options.analysis.strict:
                raise
            logger.warning("Vision model unavailable (%s); using mock analysis", e)
            return self._client.fallback_response()

    async def _convert(self, source: bytes | str, options: ConversionOptions) -> ConversionResult:
        start = time.perf_counter()

        blob = await self._preprocessor.process(source, options.preprocessing)
        if options.auto_crop:
            loop = asyncio.get_running_loop()
            blob = await loop.run_in_executor(
                None, self._preprocessor.auto_crop, blob, options.crop_padding
            )
        logger.debug("Preprocessed in %.1fms", (time.perf_counter() - start) * 1000)

        response = await self.analyze(blob, options)
        analysis = response.analysis

        elements = self._normalizer.normalize(analysis.elements)
        elements = self._normalizer.classify_tree(elements)
        tree = assign_z_indices(build_hierarchy(flatten(elements)))

        design = DesignConverter(options.converter).generate_design(tree, analysis)

        components = []
        if options.map_components:
            components = [m for m in self._mapper.map_elements(flatten(tree)) if m is not None]

        elapsed = (time.perf_counter() - start) * 1000
        logger.info(
            "Converted %dx%d screenshot: %d elements, %d nodes, %d components in %.0fms%s",
            blob.width, blob.height, len(elements), len(design.object_graph),
            len(components), elapsed, " (mock)" if response.metadata.mock else "",
        )
        return ConversionResult(
            design=design,
            analysis=analysis,
            elements=tree,
            components=components,
            image=ImageSummary(
                mime_type=blob.mime_type,
                width=blob.width,
                height=blob.height,
                size_bytes=blob.size_bytes,
            ),
            metadata=response.metadata,
            processing_time_ms=round(elapsed, 1),
        )

    async def convert(
        self, source: bytes | str, options: ConversionOptions | None = None
    ) -> ConversionResult:
        """Raises VisionError subclasses, or TimeoutError past ``options.timeout_s``."""
        opts = options or ConversionOptions()
        if opts.timeout_s is None:
            return await self._convert(source, opts)
        return await asyncio.wait_for(self._convert(source, opts), timeout=opts.timeout_s)

    async def batch_convert(
        self,
        sources: Sequence[bytes | str],
        options: ConversionOptions | None = None,
        batch_size: int | None = None,
    ) -> BatchResult[ConversionResult]:
        return await batch_import(
            sources,
            lambda source: self.convert(source, options),
            batch_size or self._settings.batch_size,
        )
