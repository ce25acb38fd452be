"""Renderer registry: one drawing function per element type, registered via decorator.

Usage:
    @renderer(ElementType.BUTTON, description="Filled rect + centered label")
    def render_button(element: DetectedElement, ctx: ConversionContext) -> ObjectGraphNode:
        ...

Types with no registered renderer route to the single default renderer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from screensight.models.elements import ElementType

if TYPE_CHECKING:
    from screensight.engine.converter import ConversionContext
    from screensight.models.elements import DetectedElement
    from screensight.models.graph import ObjectGraphNode

logger = logging.getLogger(__name__)

RenderFn = Callable[["DetectedElement", "ConversionContext"], "ObjectGraphNode"]


@dataclass
class RendererSpec:
    name: str
    fn: RenderFn
    description: str = ""


class RendererRegistry:
    """Element type → renderer lookup table."""

    def __init__(self) -> None:
        self._renderers: dict[ElementType, RendererSpec] = {}
        self._default: RendererSpec | None = None

    def register(self, element_type: ElementType, spec: RendererSpec) -> None:
        if element_type in self._renderers:
            raise ValueError(f"Duplicate renderer for type: {element_type.value}")
        self._renderers[element_type] = spec
        logger.debug("Registered renderer %s for %s", spec.name, element_type.value)

    def set_default(self, spec: RendererSpec) -> None:
        if self._default is not None:
            raise ValueError(f"Default renderer already set: {self._default.name}")
        self._default = spec

    def get(self, element_type: ElementType) -> RendererSpec:
        spec = self._renderers.get(element_type, self._default)
        if spec is None:
            raise LookupError("No default renderer registered")
        return spec

    def registered_types(self) -> list[ElementType]:
        return sorted(self._renderers, key=lambda t: t.value)

    @property
    def count(self) -> int:
        return len(self._renderers)


# Module-level singleton
_registry = RendererRegistry()


def get_registry() -> RendererRegistry:
    return _registry


def renderer(*element_types: ElementType, default: bool = False, description: str = ""):
    """Decorator to register a renderer for one or more element types."""

    def decorator(fn: RenderFn) -> RenderFn:
        spec = RendererSpec(name=fn.__name__, fn=fn, description=description)
        for element_type in element_types:
            _registry.register(element_type, spec)
        if default:
            _registry.set_default(spec)
        return fn

    return decorator
