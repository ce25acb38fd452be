"""ScreenSight element engine: normalization, hierarchy and object-graph conversion."""

from screensight.engine.registry import renderer, get_registry
from screensight.engine.normalizer import ElementNormalizer, normalize_type
from screensight.engine.hierarchy import (
    assign_z_indices,
    build_hierarchy,
    element_statistics,
    filter_by_type,
    flatten,
)
from screensight.engine.converter import ConversionContext, DesignConverter

__all__ = [
    "renderer",
    "get_registry",
    "ElementNormalizer",
    "normalize_type",
    "assign_z_indices",
    "build_hierarchy",
    "element_statistics",
    "filter_by_type",
    "flatten",
    "ConversionContext",
    "DesignConverter",
]
