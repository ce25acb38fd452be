"""DetectedElement tree → object graph, layout descriptor and style sheet.

Colors resolve through four tiers, first hit wins:
  1. the element's own color
  2. the analysis palette by role (primary 0, secondary 1, text last, background min(2, last))
  3. the theme's design token for the role (when the design system is on)
  4. FALLBACK_COLORS
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass, field
from typing import Any, Literal

from screensight.engine import tokens
from screensight.engine.hierarchy import flatten
from screensight.engine.registry import get_registry, renderer
from screensight.errors import ConversionError, VisionError
from screensight.models.elements import AnalysisResult, DetectedElement, ElementType
from screensight.models.graph import (
    DesignDocument,
    DesignMetadata,
    GroupNode,
    LayoutDescriptor,
    LayoutEntry,
    ObjectGraphNode,
    RectangleNode,
    TextNode,
)
from screensight.models.options import ConverterOptions
from screensight.utils.css import parse_int

logger = logging.getLogger(__name__)

ColorRole = Literal["primary", "secondary", "text", "background"]

DEFAULT_FONT_FAMILY = "Inter, sans-serif"
DEFAULT_BACKGROUND = "#f9fafb"
BORDER_COLOR = "#e5e7eb"
INPUT_BORDER_COLOR = "#d1d5db"
PLACEHOLDER_COLOR = "#6b7280"
IMAGE_PLACEHOLDER_COLOR = "#f3f4f6"
INPUT_TEXT_INSET = 12


@dataclass
class ConversionContext:
    options: ConverterOptions = field(default_factory=ConverterOptions)
    analysis: AnalysisResult | None = None
    # Paint-order counter shared by every node in one conversion
    z: int = 0

    def next_z(self) -> int:
        value = self.z
        self.z += 1
        return value

    @property
    def use_tokens(self) -> bool:
        return self.options.use_design_system and self.options.fidelity != "exact"

    def geometry(self, element: DetectedElement) -> dict[str, float]:
        box = element.bounding_box
        sx, sy = self.options.scale_x, self.options.scale_y
        return {
            "left": box.x * sx,
            "top": box.y * sy,
            "width": box.width * sx,
            "height": box.height * sy,
        }

    def color(self, element: DetectedElement, role: ColorRole) -> str:
        if element.color:
            return element.color

        palette = self.analysis.color_palette if self.analysis else []
        if palette:
            last = len(palette) - 1
            index = {"primary": 0, "secondary": 1, "text": last, "background": min(2, last)}[role]
            return palette[min(index, last)] or palette[0]

        if self.use_tokens:
            return tokens.get_theme(self.options.theme)[role]

        return tokens.FALLBACK_COLORS[role]

    def font_size(self, element: DetectedElement, default: str) -> int:
        parsed = parse_int(element.styles.get("fontSize"))
        return parsed if parsed is not None else tokens.FONT_SIZE[default]

    def border_radius(self, element: DetectedElement, default: str) -> int:
        parsed = parse_int(element.styles.get("borderRadius"))
        return parsed if parsed is not None else tokens.BORDER_RADIUS[default]

    def font_family(self) -> str:
        families = self.analysis.typography.families if self.analysis else []
        return ", ".join(families) if families else DEFAULT_FONT_FAMILY


def _font_weight(value: Any) -> int | str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int) or isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _line_height(value: Any) -> float | str | None:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _text_styles(element: DetectedElement) -> dict[str, Any]:
    """Declared text styles of the right shape; anything else is dropped."""
    styles = element.styles
    align = styles.get("textAlign")
    return {
        "font_weight": _font_weight(styles.get("fontWeight")),
        "text_align": align if isinstance(align, str) else None,
        "line_height": _line_height(styles.get("lineHeight")),
    }


# ── Renderers ──


@renderer(ElementType.BUTTON, description="Filled rect with a centered label")
def render_button(element: DetectedElement, ctx: ConversionContext) -> ObjectGraphNode:
    geo = ctx.geometry(element)
    group_z = ctx.next_z() if element.text else None
    radius = ctx.border_radius(element, "md")
    background = RectangleNode(
        id=f"{element.id}-bg" if element.text else element.id,
        z_index=ctx.next_z(),
        fill=ctx.color(element, "primary"),
        rx=radius,
        ry=radius,
        shadow=tokens.SHADOWS["md"],
        **geo,
    )
    if not element.text:
        return background

    label = TextNode(
        id=f"{element.id}-label",
        z_index=ctx.next_z(),
        left=geo["left"] + geo["width"] / 2,
        top=geo["top"] + geo["height"] / 2,
        width=geo["width"],
        height=geo["height"],
        origin_x="center",
        origin_y="center",
        text=element.text,
        font_size=ctx.font_size(element, "base"),
        font_family=DEFAULT_FONT_FAMILY,
        font_weight=600,
        fill="#ffffff",
        text_align="center",
    )
    return GroupNode(id=element.id, z_index=group_z, children=[background, label], **geo)


@renderer(ElementType.INPUT, ElementType.TEXTAREA, description="Outlined rect with placeholder text")
def render_input(element: DetectedElement, ctx: ConversionContext) -> ObjectGraphNode:
    geo = ctx.geometry(element)
    group_z = ctx.next_z() if element.text else None
    radius = ctx.border_radius(element, "sm")
    background = RectangleNode(
        id=f"{element.id}-bg" if element.text else element.id,
        z_index=ctx.next_z(),
        fill="#ffffff",
        stroke=INPUT_BORDER_COLOR,
        stroke_width=1,
        rx=radius,
        ry=radius,
        **geo,
    )
    if not element.text:
        return background

    placeholder = TextNode(
        id=f"{element.id}-placeholder",
        z_index=ctx.next_z(),
        left=geo["left"] + INPUT_TEXT_INSET,
        top=geo["top"] + geo["height"] / 2,
        width=max(0.0, geo["width"] - 2 * INPUT_TEXT_INSET),
        height=geo["height"],
        origin_y="center",
        text=element.text,
        font_size=ctx.font_size(element, "base"),
        font_family=DEFAULT_FONT_FAMILY,
        fill=PLACEHOLDER_COLOR,
    )
    return GroupNode(id=element.id, z_index=group_z, children=[background, placeholder], **geo)


@renderer(ElementType.TEXT, description="Text node with resolved color and font")
def render_text(element: DetectedElement, ctx: ConversionContext) -> ObjectGraphNode:
    return TextNode(
        id=element.id,
        z_index=ctx.next_z(),
        text=element.text or "Text",
        font_size=ctx.font_size(element, "base"),
        font_family=ctx.font_family(),
        fill=ctx.color(element, "text"),
        **_text_styles(element),
        **ctx.geometry(element),
    )


@renderer(ElementType.CARD, ElementType.CONTAINER, description="Background rect + converted children")
def render_container(element: DetectedElement, ctx: ConversionContext) -> ObjectGraphNode:
    geo = ctx.geometry(element)
    group_z = ctx.next_z() if element.children else None
    radius = ctx.border_radius(element, "lg")
    background = RectangleNode(
        id=f"{element.id}-bg" if element.children else element.id,
        z_index=ctx.next_z(),
        fill=ctx.color(element, "background"),
        stroke=BORDER_COLOR,
        stroke_width=1,
        rx=radius,
        ry=radius,
        shadow=tokens.SHADOWS["lg"] if element.type == ElementType.CARD else None,
        **geo,
    )
    if not element.children:
        return background

    children = [render_element(child, ctx) for child in element.children]
    return GroupNode(id=element.id, z_index=group_z, children=[background, *children], **geo)


@renderer(ElementType.IMAGE, description="Placeholder rect")
def render_image(element: DetectedElement, ctx: ConversionContext) -> ObjectGraphNode:
    radius = ctx.border_radius(element, "md")
    return RectangleNode(
        id=element.id,
        z_index=ctx.next_z(),
        fill=IMAGE_PLACEHOLDER_COLOR,
        stroke=BORDER_COLOR,
        stroke_width=1,
        rx=radius,
        ry=radius,
        **ctx.geometry(element),
    )


@renderer(ElementType.DIVIDER, description="1px horizontal line centered in the box")
def render_divider(element: DetectedElement, ctx: ConversionContext) -> ObjectGraphNode:
    geo = ctx.geometry(element)
    return RectangleNode(
        id=element.id,
        z_index=ctx.next_z(),
        left=geo["left"],
        top=geo["top"] + geo["height"] / 2,
        width=geo["width"],
        height=1,
        fill=BORDER_COLOR,
    )


@renderer(default=True, description="Plain background-colored rect")
def render_generic(element: DetectedElement, ctx: ConversionContext) -> ObjectGraphNode:
    return RectangleNode(
        id=element.id,
        z_index=ctx.next_z(),
        fill=ctx.color(element, "background"),
        stroke=BORDER_COLOR,
        stroke_width=1,
        **ctx.geometry(element),
    )


def render_element(element: DetectedElement, ctx: ConversionContext) -> ObjectGraphNode:
    return get_registry().get(element.type).fn(element, ctx)


# ── Converter ──


class DesignConverter:
    """Stateless apart from its options; every call builds a fresh graph."""

    def __init__(self, options: ConverterOptions | None = None) -> None:
        self.options = options or ConverterOptions()

    def convert(
        self, elements: list[DetectedElement], analysis: AnalysisResult | None = None
    ) -> list[ObjectGraphNode]:
        ctx = ConversionContext(options=self.options, analysis=analysis)
        try:
            return [render_element(element, ctx) for element in elements]
        except VisionError:
            raise
        except Exception as e:
            raise ConversionError(f"Failed to convert elements to object graph: {e}") from e

    def resolve_color(
        self, element: DetectedElement, role: ColorRole, analysis: AnalysisResult | None = None
    ) -> str:
        return ConversionContext(options=self.options, analysis=analysis).color(element, role)

    def infer_styles(self, element: DetectedElement) -> dict[str, Any]:
        """Type-derived CSS, overridden by whatever the element declares."""
        styles: dict[str, Any] = {
            "width": element.bounding_box.width,
            "height": element.bounding_box.height,
        }
        if element.type == ElementType.BUTTON:
            styles["cursor"] = "pointer"
            styles["padding"] = "12px 24px"
        elif element.type in (ElementType.INPUT, ElementType.TEXTAREA):
            styles["border"] = f"1px solid {INPUT_BORDER_COLOR}"
            styles["padding"] = "8px 12px"
        elif element.type == ElementType.CARD:
            styles["boxShadow"] = tokens.SHADOWS["lg"]
        return {**styles, **element.styles}

    def build_layout(
        self, elements: list[DetectedElement], analysis: AnalysisResult | None = None
    ) -> LayoutDescriptor:
        layout = analysis.layout if analysis else None
        return LayoutDescriptor(
            type=layout.type if layout and layout.type else "flex",
            direction=layout.direction if layout and layout.direction else "column",
            gap=layout.gap if layout and layout.gap is not None else tokens.SPACING["md"],
            elements=[
                LayoutEntry(id=e.id, type=e.type.value, position=e.bounding_box) for e in elements
            ],
        )

    def generate_design(
        self, elements: list[DetectedElement], analysis: AnalysisResult | None = None
    ) -> DesignDocument:
        start = time.perf_counter()
        graph = self.convert(elements, analysis)
        palette = analysis.color_palette if analysis else []
        document = DesignDocument(
            object_graph=graph,
            background=palette[-1] if palette and palette[-1] else DEFAULT_BACKGROUND,
            layout=self.build_layout(elements, analysis),
            style_sheet={e.id: self.infer_styles(e) for e in flatten(elements)},
            metadata=DesignMetadata(timestamp=time.time(), element_count=len(graph)),
        )
        logger.debug(
            "Generated design: %d nodes from %d elements in %.1fms",
            len(graph), len(elements), (time.perf_counter() - start) * 1000,
        )
        return document
