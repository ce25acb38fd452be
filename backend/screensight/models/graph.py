"""Object graph: drawable nodes handed to downstream code generators."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field

from screensight.models.elements import BoundingBox


class _NodeBase(BaseModel):
    id: str
    left: float
    top: float
    width: float
    height: float
    # Strictly increasing in back-to-front paint order
    z_index: int = 0
    origin_x: str = "left"
    origin_y: str = "top"


class RectangleNode(_NodeBase):
    kind: Literal["rectangle"] = "rectangle"
    fill: str
    stroke: str | None = None
    stroke_width: float = 0.0
    rx: float = 0.0
    ry: float = 0.0
    shadow: str | None = None


class TextNode(_NodeBase):
    kind: Literal["text"] = "text"
    text: str
    font_size: int
    font_family: str
    fill: str
    font_weight: int | str | None = None
    text_align: str | None = None
    line_height: float | str | None = None


class GroupNode(_NodeBase):
    kind: Literal["group"] = "group"
    children: list[ObjectGraphNode] = Field(default_factory=list)


ObjectGraphNode = Annotated[
    Union[RectangleNode, TextNode, GroupNode],
    Field(discriminator="kind"),
]

GroupNode.model_rebuild()


class LayoutEntry(BaseModel):
    id: str
    type: str
    position: BoundingBox


class LayoutDescriptor(BaseModel):
    type: str = "flex"
    direction: str = "column"
    gap: float = 16
    elements: list[LayoutEntry] = Field(default_factory=list)


class DesignMetadata(BaseModel):
    source: str = "screenshot-to-code"
    timestamp: float = 0.0
    element_count: int = 0


class DesignDocument(BaseModel):
    """Complete output of ``DesignConverter.generate_design``."""

    object_graph: list[ObjectGraphNode] = Field(default_factory=list)
    background: str = "#f9fafb"
    layout: LayoutDescriptor = Field(default_factory=LayoutDescriptor)
    style_sheet: dict[str, dict[str, Any]] = Field(default_factory=dict)
    metadata: DesignMetadata = Field(default_factory=DesignMetadata)
