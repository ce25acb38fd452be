"""Bind generic detected elements to catalog components.

Unmappable elements yield None; callers skip them rather than render them.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from screensight.catalog import tokens as catalog_tokens
from screensight.catalog.components import get_component
from screensight.models.elements import DetectedElement
from screensight.models.mapping import CatalogComponent, MappingResult
from screensight.utils.css import parse_hex_color, parse_int

logger = logging.getLogger(__name__)

TYPE_TO_COMPONENT: dict[str, str] = {
    "button": "button",
    "submit-button": "button",
    "primary-button": "button",
    "secondary-button": "button",
    "input": "input",
    "text-input": "input",
    "email-input": "input",
    "password-input": "input",
    "textbox": "input",
    "textarea": "textarea",
    "select": "select",
    "card": "card",
    "container": "card",
    "alert": "alert",
    "notification": "alert",
    "message": "alert",
    "modal": "modal",
    "header": "header",
    "nav": "nav",
    "navigation": "nav",
    "navbar": "nav",
    "menu": "nav",
    "sidebar": "sidenav",
    "form": "form",
    "label": "label",
    "checkbox": "checkbox",
    "radio": "radio",
    "table": "table",
    "data-table": "table",
    "banner": "banner",
    "footer": "footer",
    "accordion": "accordion",
    "breadcrumb": "breadcrumb",
}


def quantize(value: float, candidates: Sequence[float]) -> float:
    """Closest candidate to ``value``; the earlier candidate wins a tie."""
    if not candidates:
        raise ValueError("quantize() needs at least one candidate")
    best = candidates[0]
    for candidate in candidates[1:]:
        if abs(candidate - value) < abs(best - value):
            best = candidate
    return best


def nearest_color(color: str) -> str:
    """Closest catalog color by RGB distance; unparseable input is returned as-is."""
    rgb = parse_hex_color(color)
    if rgb is None:
        return color
    best, best_dist = color, None
    for candidate in catalog_tokens.all_colors():
        crgb = parse_hex_color(candidate)
        dist = sum((a - b) ** 2 for a, b in zip(rgb, crgb))
        if best_dist is None or dist < best_dist:
            best, best_dist = candidate, dist
    return best


def _contains(text: str | None, keyword: str) -> bool:
    return bool(text) and keyword in text.lower()


class TokenMapper:
    def map_component_name(self, element_type: str) -> str | None:
        return TYPE_TO_COMPONENT.get(element_type.lower())

    def determine_variant(self, component_name: str, element: DetectedElement) -> str | None:
        props = element.styles
        text = element.text

        if component_name == "button":
            if props.get("variant") == "secondary" or _contains(text, "cancel"):
                return "secondary"
            if props.get("variant") == "outline":
                return "outline"
            if props.get("size") in ("large", "big"):
                return "big"
            return "primary"

        if component_name == "alert":
            for severity in ("success", "warning", "error"):
                if props.get("type") == severity or _contains(text, severity):
                    return severity
            return "info"

        if component_name == "card":
            if props.get("layout") == "flag":
                return "flag"
            if props.get("headerFirst"):
                return "headerFirst"
            return "default"

        if component_name == "header":
            return "extended" if props.get("extended") else "basic"

        if component_name == "footer":
            if props.get("size") == "large":
                return "big"
            if props.get("size") == "small":
                return "slim"
            return "medium"

        return None

    def apply_tokens(self, styles: dict[str, Any]) -> dict[str, Any]:
        """Snap declared style values onto catalog tokens. Unknown keys are dropped."""
        snapped: dict[str, Any] = {}

        if styles.get("backgroundColor"):
            snapped["backgroundColor"] = nearest_color(styles["backgroundColor"])
        text_color = styles.get("color") or styles.get("textColor")
        if text_color:
            snapped["color"] = nearest_color(text_color)

        for key in ("padding", "margin"):
            value = parse_int(styles.get(key))
            if value is not None:
                snapped[key] = quantize(value, catalog_tokens.SPACING)

        radius = parse_int(styles.get("borderRadius"))
        if radius is not None:
            if radius >= catalog_tokens.PILL_THRESHOLD:
                snapped["borderRadius"] = catalog_tokens.BORDER_RADIUS["pill"]
            else:
                numeric = [v for k, v in catalog_tokens.BORDER_RADIUS.items() if k != "pill"]
                snapped["borderRadius"] = quantize(radius, numeric)

        font_size = parse_int(styles.get("fontSize"))
        if font_size is not None:
            snapped["fontSize"] = quantize(font_size, catalog_tokens.FONT_SIZE)

        weight = styles.get("fontWeight")
        if isinstance(weight, str) and weight.lower() in catalog_tokens.FONT_WEIGHT:
            snapped["fontWeight"] = catalog_tokens.FONT_WEIGHT[weight.lower()]
        else:
            numeric_weight = parse_int(weight)
            if numeric_weight is not None:
                snapped["fontWeight"] = quantize(numeric_weight, list(catalog_tokens.FONT_WEIGHT.values()))

        return snapped

    def synthesize_a11y(self, component: CatalogComponent, element: DetectedElement) -> dict[str, str]:
        """Component defaults, plus the element text as label when no default label exists."""
        attrs: dict[str, str] = {}
        if component.a11y.role:
            attrs["role"] = component.a11y.role
        if component.a11y.aria_label:
            attrs["aria-label"] = component.a11y.aria_label
        if component.a11y.aria_required:
            attrs["aria-required"] = "true"
        if element.text and "aria-label" not in attrs:
            attrs["aria-label"] = element.text
        return attrs

    def map_element_to_component(self, element: DetectedElement) -> MappingResult | None:
        name = self.map_component_name(element.type.value)
        if name is None:
            return None
        component = get_component(name)
        if component is None:
            logger.warning("Alias %s points at missing catalog component", name)
            return None

        props: dict[str, Any] = dict(element.styles)
        if element.text:
            props["children"] = element.text

        return MappingResult(
            element_id=element.id,
            component_ref=component,
            variant=self.determine_variant(name, element),
            props=props,
            styles=self.apply_tokens(element.styles),
            a11y_attributes=self.synthesize_a11y(component, element),
        )

    def map_elements(self, elements: Sequence[DetectedElement]) -> list[MappingResult | None]:
        return [self.map_element_to_component(element) for element in elements]

    @staticmethod
    def class_name(component: CatalogComponent, variant: str | None = None) -> str:
        if variant and component.variants:
            return component.variants.get(variant, component.class_name)
        return component.class_name
