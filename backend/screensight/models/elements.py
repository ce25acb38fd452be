"""Detected UI element model and the analysis payload returned by the vision model."""

from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ElementType(str, enum.Enum):
    BUTTON = "button"
    INPUT = "input"
    TEXTAREA = "textarea"
    SELECT = "select"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    CARD = "card"
    MODAL = "modal"
    NAV = "nav"
    HEADER = "header"
    FOOTER = "footer"
    SIDEBAR = "sidebar"
    TEXT = "text"
    IMAGE = "image"
    ICON = "icon"
    DIVIDER = "divider"
    CONTAINER = "container"


class BoundingBox(BaseModel):
    """Axis-aligned rectangle in image coordinates."""

    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def aspect_ratio(self) -> float:
        if self.height <= 0:
            return 0.0
        return self.width / self.height

    def contains(self, other: BoundingBox) -> bool:
        """True when all four edges of ``other`` lie within this box."""
        return (
            other.x >= self.x
            and other.y >= self.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )


class DetectedElement(BaseModel):
    """A typed, validated UI element. Never mutated; use ``model_copy``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    type: ElementType = ElementType.CONTAINER
    bounding_box: BoundingBox = Field(default_factory=BoundingBox, alias="boundingBox")
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)
    text: str | None = None
    color: str | None = None
    styles: dict[str, Any] = Field(default_factory=dict)
    children: list[DetectedElement] = Field(default_factory=list)


class Typography(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    families: list[str] = Field(default_factory=list, alias="fonts")
    sizes: list[float] = Field(default_factory=list)


class LayoutInfo(BaseModel):
    type: str = "flex"
    direction: str | None = None
    gap: float | None = None


class Dimensions(BaseModel):
    width: float = 0.0
    height: float = 0.0


class AnalysisResult(BaseModel):
    """Normalized model output. ``elements`` stay raw until ElementNormalizer runs."""

    model_config = ConfigDict(populate_by_name=True)

    elements: list[dict[str, Any]] = Field(default_factory=list)
    # Ordered; index 0 is the dominant color
    color_palette: list[str] = Field(default_factory=list, alias="colors")
    typography: Typography = Field(default_factory=Typography)
    layout: LayoutInfo = Field(default_factory=LayoutInfo)
    dimensions: Dimensions = Field(default_factory=Dimensions)


class AnalysisMetadata(BaseModel):
    model: str = ""
    tokens_used: int = 0
    processing_time_ms: float = 0.0
    mock: bool = False


class AnalysisResponse(BaseModel):
    analysis: AnalysisResult
    raw_response: str = ""
    metadata: AnalysisMetadata = Field(default_factory=AnalysisMetadata)
