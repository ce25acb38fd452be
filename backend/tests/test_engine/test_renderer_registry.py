"""Tests for the renderer registry and its decorator."""

from __future__ import annotations

import pytest

import screensight.engine  # noqa: F401  registers the built-in renderers
from screensight.engine.registry import RendererRegistry, RendererSpec, get_registry
from screensight.models.elements import ElementType


def _spec(name: str) -> RendererSpec:
    return RendererSpec(name=name, fn=lambda element, ctx: None)


def test_builtin_renderers_registered():
    registry = get_registry()
    registered = set(registry.registered_types())
    assert {
        ElementType.BUTTON,
        ElementType.INPUT,
        ElementType.TEXTAREA,
        ElementType.TEXT,
        ElementType.CARD,
        ElementType.CONTAINER,
        ElementType.IMAGE,
        ElementType.DIVIDER,
    } <= registered
    assert registry.count == len(registered)


def test_missing_type_routes_to_default():
    registry = get_registry()
    assert registry.get(ElementType.SIDEBAR).name == "render_generic"
    assert registry.get(ElementType.BUTTON).name == "render_button"


def test_duplicate_registration_rejected():
    registry = RendererRegistry()
    registry.register(ElementType.BUTTON, _spec("a"))
    with pytest.raises(ValueError, match="Duplicate"):
        registry.register(ElementType.BUTTON, _spec("b"))


def test_single_default():
    registry = RendererRegistry()
    registry.set_default(_spec("a"))
    with pytest.raises(ValueError):
        registry.set_default(_spec("b"))


def test_no_default_raises_lookup_error():
    with pytest.raises(LookupError):
        RendererRegistry().get(ElementType.ICON)
