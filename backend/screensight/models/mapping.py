"""Component catalog entries and element → component binding results."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class A11yDefaults(BaseModel):
    role: str | None = None
    aria_label: str | None = None
    aria_required: bool = False


class CatalogComponent(BaseModel):
    name: str
    import_name: str
    class_name: str
    category: str = "components"
    props: list[str] = Field(default_factory=list)
    variants: dict[str, str] = Field(default_factory=dict)
    a11y: A11yDefaults = Field(default_factory=A11yDefaults)
    description: str = ""


class MappingResult(BaseModel):
    """``component_ref`` is None only for elements with no catalog binding."""

    element_id: str = ""
    component_ref: CatalogComponent | None = None
    variant: str | None = None
    props: dict[str, Any] = Field(default_factory=dict)
    styles: dict[str, Any] = Field(default_factory=dict)
    a11y_attributes: dict[str, str] = Field(default_factory=dict)
