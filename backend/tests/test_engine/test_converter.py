"""Tests for DesignConverter: color tiers, renderers, layout, and the design document."""

from __future__ import annotations

import pytest

from screensight.engine.converter import (
    BORDER_COLOR,
    DEFAULT_BACKGROUND,
    DEFAULT_FONT_FAMILY,
    ConversionContext,
    DesignConverter,
)
from screensight.engine.tokens import FALLBACK_COLORS, THEMES
from screensight.models.elements import (
    AnalysisResult,
    LayoutInfo,
    Typography,
)
from screensight.models.elements import ElementType as T
from screensight.models.graph import GroupNode, RectangleNode, TextNode
from screensight.models.options import ConverterOptions
from tests.conftest import make_element

PALETTE = ["#111111", "#222222", "#333333", "#444444"]


@pytest.fixture
def analysis() -> AnalysisResult:
    return AnalysisResult(
        color_palette=PALETTE,
        typography=Typography(families=["Roboto", "sans-serif"]),
        layout=LayoutInfo(type="grid", direction="row", gap=8),
    )


def _no_tokens() -> DesignConverter:
    return DesignConverter(ConverterOptions(use_design_system=False))


# ── Color resolution ──


@pytest.mark.parametrize("role", ["primary", "secondary", "text", "background"])
def test_fallback_constant_when_nothing_else_applies(role):
    element = make_element("e")
    assert _no_tokens().resolve_color(element, role) == FALLBACK_COLORS[role]


def test_fallback_background_is_white():
    (node,) = _no_tokens().convert([make_element("e", type=T.CONTAINER)])
    assert node.fill == "#ffffff"


def test_element_color_wins(analysis):
    element = make_element("e", color="#abcdef")
    assert DesignConverter().resolve_color(element, "primary", analysis) == "#abcdef"


@pytest.mark.parametrize(
    "role, expected",
    [("primary", "#111111"), ("secondary", "#222222"), ("background", "#333333"), ("text", "#444444")],
)
def test_palette_by_role(analysis, role, expected):
    assert DesignConverter().resolve_color(make_element("e"), role, analysis) == expected


def test_short_palette_clamps_indices():
    short = AnalysisResult(color_palette=["#aaaaaa"])
    converter = DesignConverter()
    for role in ("primary", "secondary", "text", "background"):
        assert converter.resolve_color(make_element("e"), role, short) == "#aaaaaa"


def test_theme_tokens_when_palette_empty():
    converter = DesignConverter(ConverterOptions(theme="ocean"))
    assert converter.resolve_color(make_element("e"), "primary") == THEMES["ocean"]["primary"]


def test_unknown_theme_uses_default():
    converter = DesignConverter(ConverterOptions(theme="nope"))
    assert converter.resolve_color(make_element("e"), "text") == THEMES["modern"]["text"]


def test_exact_fidelity_skips_tokens():
    converter = DesignConverter(ConverterOptions(theme="ocean", fidelity="exact"))
    assert converter.resolve_color(make_element("e"), "primary") == FALLBACK_COLORS["primary"]


# ── Renderers ──


def test_button_with_text_is_group(analysis):
    button = make_element("b", x=10, y=20, width=120, height=40, type=T.BUTTON, text="Save")
    (node,) = DesignConverter().convert([button], analysis)
    assert isinstance(node, GroupNode)
    background, label = node.children
    assert isinstance(background, RectangleNode)
    assert background.fill == "#111111"
    assert background.rx == 8
    assert isinstance(label, TextNode)
    assert label.text == "Save"
    assert label.fill == "#ffffff"
    assert (label.left, label.top) == (70, 40)
    assert node.z_index < background.z_index < label.z_index


def test_button_without_text_is_single_rect():
    (node,) = DesignConverter().convert([make_element("b", type=T.BUTTON)])
    assert isinstance(node, RectangleNode)
    assert node.id == "b"


def test_input_placeholder_inset():
    element = make_element("i", x=0, y=0, width=200, height=40, type=T.INPUT, text="Email")
    (node,) = DesignConverter().convert([element])
    background, placeholder = node.children
    assert background.stroke_width == 1
    assert background.rx == 4
    assert placeholder.left == 12
    assert placeholder.width == 176


def test_text_uses_analysis_font_and_styles(analysis):
    element = make_element(
        "t", type=T.TEXT, text="Hello", styles={"fontSize": "20px", "fontWeight": 700}
    )
    (node,) = DesignConverter().convert([element], analysis)
    assert isinstance(node, TextNode)
    assert node.font_family == "Roboto, sans-serif"
    assert node.font_size == 20
    assert node.font_weight == 700
    assert node.fill == "#444444"


def test_text_defaults():
    (node,) = DesignConverter().convert([make_element("t", type=T.TEXT)])
    assert node.text == "Text"
    assert node.font_family == DEFAULT_FONT_FAMILY
    assert node.font_size == 16


def test_card_with_children_groups_and_recurses():
    child = make_element("c", x=10, y=10, width=50, height=20, type=T.TEXT, text="Hi")
    card = make_element("card", width=300, height=200, type=T.CARD, children=[child])
    (node,) = DesignConverter().convert([card])
    assert isinstance(node, GroupNode)
    background, inner = node.children
    assert background.shadow is not None
    assert background.stroke == BORDER_COLOR
    assert inner.id == "c"
    assert node.z_index < background.z_index < inner.z_index


def test_container_has_no_shadow():
    (node,) = DesignConverter().convert([make_element("box", type=T.CONTAINER)])
    assert isinstance(node, RectangleNode)
    assert node.shadow is None
    assert node.rx == 12


def test_divider_is_thin_line():
    element = make_element("d", x=0, y=100, width=300, height=10, type=T.DIVIDER)
    (node,) = DesignConverter().convert([element])
    assert node.height == 1
    assert node.top == 105


def test_unregistered_type_uses_default_renderer():
    (node,) = _no_tokens().convert([make_element("n", type=T.NAV)])
    assert isinstance(node, RectangleNode)
    assert node.fill == FALLBACK_COLORS["background"]


def test_scale_applies_to_geometry():
    converter = DesignConverter(ConverterOptions(scale_x=2.0, scale_y=0.5))
    (node,) = converter.convert([make_element("e", x=10, y=10, width=100, height=40, type=T.IMAGE)])
    assert (node.left, node.top, node.width, node.height) == (20, 5, 200, 20)


def test_z_indices_strictly_increase_across_siblings():
    elements = [make_element(str(i), type=T.BUTTON, text="x") for i in range(3)]
    graph = DesignConverter().convert(elements)
    zs = []
    for node in graph:
        zs.append(node.z_index)
        zs.extend(child.z_index for child in node.children)
    assert zs == sorted(zs)
    assert len(set(zs)) == len(zs)


def test_context_counter_is_per_conversion():
    converter = DesignConverter()
    first = converter.convert([make_element("a")])
    second = converter.convert([make_element("a")])
    assert first[0].z_index == second[0].z_index == 0
    assert ConversionContext().next_z() == 0


# ── Layout and document ──


def test_layout_from_analysis(analysis):
    elements = [make_element("a"), make_element("b", type=T.BUTTON)]
    layout = DesignConverter().build_layout(elements, analysis)
    assert (layout.type, layout.direction, layout.gap) == ("grid", "row", 8)
    assert [(e.id, e.type) for e in layout.elements] == [("a", "container"), ("b", "button")]


def test_layout_defaults():
    layout = DesignConverter().build_layout([])
    assert (layout.type, layout.direction, layout.gap) == ("flex", "column", 16)


def test_infer_styles_merges_declared():
    converter = DesignConverter()
    styles = converter.infer_styles(
        make_element("b", width=80, height=30, type=T.BUTTON, styles={"padding": "4px"})
    )
    assert styles["cursor"] == "pointer"
    assert styles["padding"] == "4px"
    assert styles["width"] == 80


def test_generate_design(analysis):
    child = make_element("c", x=5, y=5, width=20, height=20, type=T.TEXT, text="Hi")
    elements = [make_element("card", width=300, height=200, type=T.CARD, children=[child])]
    document = DesignConverter().generate_design(elements, analysis)
    assert document.background == "#444444"
    assert document.metadata.element_count == 1
    assert document.metadata.timestamp > 0
    assert set(document.style_sheet) == {"card", "c"}
    assert document.layout.type == "grid"


def test_generate_design_default_background():
    document = DesignConverter().generate_design([])
    assert document.background == DEFAULT_BACKGROUND
    assert document.object_graph == []


def test_malformed_text_styles_are_dropped():
    button = make_element("b", type=T.BUTTON, text="Save")
    text = make_element(
        "t",
        type=T.TEXT,
        text="Caption",
        styles={
            "textAlign": ["left"],
            "fontWeight": 550.5,
            "lineHeight": {"value": 1.5},
            "fontSize": float("inf"),
        },
    )
    graph = DesignConverter().convert([button, text])
    assert [node.id for node in graph] == ["b", "t"]
    caption = graph[1]
    assert (caption.text_align, caption.font_weight, caption.line_height) == (None, None, None)
    assert caption.font_size == 16


def test_well_formed_text_styles_are_kept():
    text = make_element(
        "t",
        type=T.TEXT,
        text="Caption",
        styles={"textAlign": "center", "fontWeight": 700.0, "lineHeight": 1.5},
    )
    (node,) = DesignConverter().convert([text])
    assert (node.text_align, node.font_weight, node.line_height) == ("center", 700, 1.5)


def test_boolean_text_styles_are_dropped():
    text = make_element("t", type=T.TEXT, styles={"fontWeight": True, "lineHeight": False})
    (node,) = DesignConverter().convert([text])
    assert node.font_weight is None
    assert node.line_height is None
