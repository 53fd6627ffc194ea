"""
Canvas document schema and the component palette it draws from.

The browser editor owns rendering, pan/zoom and connection drawing; the backend
only stores the flat node/edge document and knows which prefabricated
components exist so generated sites can be placed onto a fresh canvas.
"""
import logging
from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

logger = logging.getLogger(__name__)

Category = Literal["Layout", "Content", "Interactive"]

CATEGORIES: list[str] = ["Layout", "Content", "Interactive"]

# Vertical stacking used when a generated site is placed on an empty canvas.
LAYOUT_ORIGIN_X = 250.0
LAYOUT_ORIGIN_Y = 50.0
LAYOUT_ROW_HEIGHT = 120.0

FALLBACK_COMPONENT = "text"


class PaletteItem(BaseModel):
    id: str
    name: str
    category: Category
    description: str


COMPONENT_PALETTE: list[PaletteItem] = [
    # Layout
    PaletteItem(id="header", name="Header", category="Layout", description="Page header section"),
    PaletteItem(id="navbar", name="Navigation", category="Layout", description="Navigation menu"),
    PaletteItem(id="footer", name="Footer", category="Layout", description="Page footer section"),
    # Content
    PaletteItem(id="hero", name="Hero Section", category="Content", description="Main hero banner"),
    PaletteItem(id="text", name="Text Block", category="Content", description="Rich text content"),
    PaletteItem(id="image", name="Image", category="Content", description="Image component"),
    # Interactive
    PaletteItem(id="button", name="Button", category="Interactive", description="Clickable button"),
    PaletteItem(id="form", name="Form", category="Interactive", description="Input form"),
    PaletteItem(id="card", name="Card", category="Interactive", description="Content card"),
]

_PALETTE_BY_ID = {item.id: item for item in COMPONENT_PALETTE}


def get_palette_item(component_id: str) -> PaletteItem | None:
    return _PALETTE_BY_ID.get((component_id or "").strip().lower())


def search_components(term: str | None = None) -> list[PaletteItem]:
    """Case-insensitive substring match on name or category, palette order kept."""
    needle = (term or "").strip().lower()
    if not needle:
        return list(COMPONENT_PALETTE)
    return [
        item
        for item in COMPONENT_PALETTE
        if needle in item.name.lower() or needle in item.category.lower()
    ]


class NodePosition(BaseModel):
    x: float = 0.0
    y: float = 0.0


class NodeData(BaseModel):
    component: str | None = None
    label: str | None = None
    props: dict[str, Any] = Field(default_factory=dict)


class CanvasNode(BaseModel):
    id: str = Field(min_length=1)
    type: str = "default"
    position: NodePosition = Field(default_factory=NodePosition)
    data: NodeData = Field(default_factory=NodeData)


class CanvasEdge(BaseModel):
    id: str = Field(min_length=1)
    source: str = Field(min_length=1)
    target: str = Field(min_length=1)


class Canvas(BaseModel):
    nodes: list[CanvasNode] = Field(default_factory=list)
    edges: list[CanvasEdge] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_node_ids(self) -> "Canvas":
        seen: set[str] = set()
        for node in self.nodes:
            if node.id in seen:
                raise ValueError(f"duplicate node id: {node.id}")
            seen.add(node.id)
        return self


def empty_canvas() -> dict[str, Any]:
    return {"nodes": [], "edges": []}


class CanvasSection(BaseModel):
    """One section of a page to be placed on the canvas."""
    component: str
    label: str | None = None
    props: dict[str, Any] = Field(default_factory=dict)


def layout_sections(sections: list[CanvasSection]) -> Canvas:
    """
    Stack sections top to bottom and chain them with edges in page order.
    Sections naming a component outside the palette become text blocks.
    """
    nodes: list[CanvasNode] = []
    edges: list[CanvasEdge] = []
    for index, section in enumerate(sections):
        item = get_palette_item(section.component)
        if item is None:
            logger.warning(
                "Unknown component %r placed as %s block", section.component, FALLBACK_COMPONENT
            )
            item = _PALETTE_BY_ID[FALLBACK_COMPONENT]

        node = CanvasNode(
            id=f"{item.id}-{index + 1}",
            position=NodePosition(
                x=LAYOUT_ORIGIN_X, y=LAYOUT_ORIGIN_Y + index * LAYOUT_ROW_HEIGHT
            ),
            data=NodeData(
                component=item.id,
                label=section.label or item.name,
                props=dict(section.props),
            ),
        )
        if nodes:
            previous = nodes[-1]
            edges.append(
                CanvasEdge(id=f"e-{previous.id}-{node.id}", source=previous.id, target=node.id)
            )
        nodes.append(node)
    return Canvas(nodes=nodes, edges=edges)
