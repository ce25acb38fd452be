"""Containment hierarchy over detected elements, plus tree helpers.

All functions are pure: input elements are never modified and every
returned tree is built from new nodes.
"""

from __future__ import annotations

from collections import Counter

from screensight.models.elements import DetectedElement, ElementType


def build_hierarchy(elements: list[DetectedElement]) -> list[DetectedElement]:
    """Group a flat element list by bounding-box containment.

    Largest-first: each unassigned element adopts every other unassigned
    element its box contains. Adopted children are not scanned again as
    parents, so a single pass yields at most one level of nesting.
    """
    ordered = sorted(elements, key=lambda e: e.bounding_box.area, reverse=True)
    visited: set[str] = set()
    roots: list[DetectedElement] = []

    for element in ordered:
        if element.id in visited:
            continue
        visited.add(element.id)

        children = [
            other
            for other in ordered
            if other.id not in visited and element.bounding_box.contains(other.bounding_box)
        ]
        visited.update(child.id for child in children)

        roots.append(
            element.model_copy(
                update={"children": [child.model_copy(deep=True) for child in children]},
                deep=True,
            )
        )

    return roots


def assign_z_indices(elements: list[DetectedElement], start: int = 0) -> list[DetectedElement]:
    """Post-order z-index numbering (children before their parent) into ``styles["zIndex"]``."""
    counter = start

    def visit(element: DetectedElement) -> DetectedElement:
        nonlocal counter
        children = [visit(child) for child in element.children]
        styles = {**element.styles, "zIndex": counter}
        counter += 1
        return element.model_copy(update={"children": children, "styles": styles})

    return [visit(element) for element in elements]


def flatten(elements: list[DetectedElement]) -> list[DetectedElement]:
    """Pre-order list of every element in the forest, each with its children stripped."""
    result: list[DetectedElement] = []

    def visit(element: DetectedElement) -> None:
        result.append(element.model_copy(update={"children": []}))
        for child in element.children:
            visit(child)

    for element in elements:
        visit(element)
    return result


def filter_by_type(elements: list[DetectedElement], element_type: ElementType) -> list[DetectedElement]:
    result: list[DetectedElement] = []

    def visit(element: DetectedElement) -> None:
        if element.type == element_type:
            result.append(element)
        for child in element.children:
            visit(child)

    for element in elements:
        visit(element)
    return result


def element_statistics(elements: list[DetectedElement]) -> dict[str, int]:
    counts: Counter[str] = Counter()

    def visit(element: DetectedElement) -> None:
        counts[element.type.value] += 1
        for child in element.children:
            visit(child)

    for element in elements:
        visit(element)
    return dict(counts)
