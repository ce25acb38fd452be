"""Output of one screenshot conversion."""

from __future__ import annotations

from pydantic import BaseModel, Field

from screensight.models.elements import AnalysisMetadata, AnalysisResult, DetectedElement
from screensight.models.graph import DesignDocument
from screensight.models.mapping import MappingResult


class ImageSummary(BaseModel):
    mime_type: str
    width: int
    height: int
    size_bytes: int


class ConversionResult(BaseModel):
    design: DesignDocument
    analysis: AnalysisResult
    # Containment tree after classification and z-index assignment
    elements: list[DetectedElement] = Field(default_factory=list)
    # Only elements with a catalog binding
    components: list[MappingResult] = Field(default_factory=list)
    image: ImageSummary
    metadata: AnalysisMetadata = Field(default_factory=AnalysisMetadata)
    processing_time_ms: float = 0.0

    def detected_types(self) -> set[str]:
        """Detected element types plus the raw types the model reported.

        Raw types keep labels such as ``table`` or ``cart`` that have no ElementType.
        """
        names = {e.type.value for e in _walk(self.elements)}
        names.update(_raw_types(self.analysis.elements))
        return names


def _raw_types(raw_elements: list) -> set[str]:
    types: set[str] = set()
    for raw in raw_elements:
        if not isinstance(raw, dict):
            continue
        if isinstance(raw.get("type"), str):
            types.add(raw["type"].strip().lower())
        if isinstance(raw.get("children"), list):
            types.update(_raw_types(raw["children"]))
    return types


def _walk(elements: list[DetectedElement]):
    for element in elements:
        yield element
        yield from _walk(element.children)
