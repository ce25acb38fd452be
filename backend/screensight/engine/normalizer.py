"""Raw model detections → typed, filtered DetectedElements, plus heuristic reclassification."""

from __future__ import annotations

import logging
import math
import uuid
from typing import Any

from screensight.config import settings
from screensight.models.elements import BoundingBox, DetectedElement, ElementType

logger = logging.getLogger(__name__)

# Used when the model omits a confidence score
DEFAULT_CONFIDENCE = 0.8
# Above this the detected type is trusted as-is
TRUSTED_CONFIDENCE = 0.8

TYPE_ALIASES: dict[str, ElementType] = {
    "btn": ElementType.BUTTON,
    "text-input": ElementType.INPUT,
    "text-field": ElementType.INPUT,
    "dropdown": ElementType.SELECT,
    "check-box": ElementType.CHECKBOX,
    "radio-button": ElementType.RADIO,
    "panel": ElementType.CARD,
    "dialog": ElementType.MODAL,
    "navigation": ElementType.NAV,
    "heading": ElementType.TEXT,
    "paragraph": ElementType.TEXT,
    "label": ElementType.TEXT,
    "img": ElementType.IMAGE,
    "separator": ElementType.DIVIDER,
    "div": ElementType.CONTAINER,
    "section": ElementType.CONTAINER,
}


def normalize_type(value: Any) -> ElementType:
    """Alias table first, then the enum itself; anything else is a container."""
    if isinstance(value, ElementType):
        return value
    if not isinstance(value, str):
        return ElementType.CONTAINER
    key = value.strip().lower()
    if key in TYPE_ALIASES:
        return TYPE_ALIASES[key]
    try:
        return ElementType(key)
    except ValueError:
        return ElementType.CONTAINER


def _coord(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return max(0.0, number)


def _confidence(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value):
        return DEFAULT_CONFIDENCE
    return min(1.0, max(0.0, float(value)))


def normalize_box(raw: Any) -> BoundingBox:
    if not isinstance(raw, dict):
        raw = {}
    return BoundingBox(
        x=_coord(raw.get("x")),
        y=_coord(raw.get("y")),
        width=_coord(raw.get("width")),
        height=_coord(raw.get("height")),
    )


class ElementNormalizer:
    def __init__(
        self,
        confidence_threshold: float | None = None,
        min_size: float | None = None,
    ) -> None:
        self.confidence_threshold = (
            settings.confidence_threshold if confidence_threshold is None else confidence_threshold
        )
        self.min_size = settings.min_element_size if min_size is None else min_size

    def _is_valid_box(self, box: BoundingBox) -> bool:
        if box.width <= 0 or box.height <= 0:
            return False
        # Smaller than this is almost always detection noise
        return box.width >= self.min_size and box.height >= self.min_size

    def normalize_element(self, raw: dict[str, Any], seen_ids: set[str] | None = None) -> DetectedElement | None:
        """One raw detection → DetectedElement, or None if it is filtered out."""
        seen = seen_ids if seen_ids is not None else set()

        confidence = _confidence(raw.get("confidence"))
        if confidence < self.confidence_threshold:
            return None

        box = normalize_box(raw.get("boundingBox", raw.get("bounding_box", raw.get("bounds"))))
        if not self._is_valid_box(box):
            return None

        element_id = str(raw.get("id") or "") or f"el-{uuid.uuid4().hex[:10]}"
        if element_id in seen:
            suffix = 2
            while f"{element_id}-{suffix}" in seen:
                suffix += 1
            element_id = f"{element_id}-{suffix}"
        seen.add(element_id)

        text = raw.get("text")
        color = raw.get("color")
        styles = raw.get("styles", raw.get("properties"))
        raw_children = raw.get("children")

        children: list[DetectedElement] = []
        if isinstance(raw_children, list):
            for child in raw_children:
                if isinstance(child, dict):
                    normalized = self.normalize_element(child, seen)
                    if normalized is not None:
                        children.append(normalized)

        return DetectedElement(
            id=element_id,
            type=normalize_type(raw.get("type")),
            bounding_box=box,
            confidence=confidence,
            text=str(text) if isinstance(text, (str, int, float)) and not isinstance(text, bool) else None,
            color=color if isinstance(color, str) and color else None,
            styles=dict(styles) if isinstance(styles, dict) else {},
            children=children,
        )

    def normalize(self, raw_elements: list[dict[str, Any]]) -> list[DetectedElement]:
        seen: set[str] = set()
        result = []
        for raw in raw_elements:
            element = self.normalize_element(raw, seen)
            if element is not None:
                result.append(element)
        dropped = len(raw_elements) - len(result)
        if dropped:
            logger.debug("Dropped %d of %d top-level detections", dropped, len(raw_elements))
        return result

    def classify_element(self, element: DetectedElement) -> DetectedElement:
        """Reclassify low-confidence detections from shape, text and styles.

        Returns a new element when the type changes; children are untouched.
        """
        if element.confidence > TRUSTED_CONFIDENCE:
            return element

        box = element.bounding_box
        text = element.text
        styles = element.styles
        ratio = box.aspect_ratio
        bordered = bool(styles.get("border"))
        shadowed = bool(styles.get("shadow") or styles.get("boxShadow"))

        if text and len(text) < 30 and 1.5 < ratio < 5 and box.height < 60:
            new_type = ElementType.BUTTON
        elif ratio > 3 and 25 < box.height < 50 and bordered:
            new_type = ElementType.INPUT
        elif 0.5 < ratio < 2 and box.width > 200 and box.height > 150 and (bordered or shadowed):
            new_type = ElementType.CARD
        elif text and not styles.get("interactive"):
            new_type = ElementType.TEXT
        else:
            return element

        if new_type == element.type:
            return element
        logger.debug("Reclassified %s: %s -> %s", element.id, element.type.value, new_type.value)
        return element.model_copy(update={"type": new_type})

    def classify_tree(self, elements: list[DetectedElement]) -> list[DetectedElement]:
        result = []
        for element in elements:
            classified = self.classify_element(element)
            if element.children:
                classified = classified.model_copy(
                    update={"children": self.classify_tree(element.children)}
                )
            result.append(classified)
        return result
