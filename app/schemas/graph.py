"""
Graph schemas.

Nodes and edges of the dataspace visualization, the detail panel of a
selected node, and the requests of the local editing layer (drag and
manual connect).
"""

from typing import Any, List, Literal, Optional
from pydantic import BaseModel, Field

NodeKind = Literal["provider", "consumer", "asset", "policy", "contract"]


class Position(BaseModel):
    x: float
    y: float


class GraphNode(BaseModel):
    """
    A node of the visualization.

    `id` is namespaced by kind (`asset-<id>`, `policy-<id>`,
    `contract-<id>`), except for the two anchors `provider` and `consumer`.
    """

    id: str
    kind: NodeKind
    label: str
    position: Position
    data: dict = Field(default_factory=dict)
    """Source entity of the node, verbatim."""


class EdgeStyle(BaseModel):
    stroke: str
    stroke_width: Optional[int] = None


class GraphEdge(BaseModel):
    id: str
    source: str
    target: str
    label: Optional[str] = None
    type: str = "smoothstep"
    style: Optional[EdgeStyle] = None
    animated: bool = False


class Graph(BaseModel):
    nodes: List[GraphNode] = Field(default_factory=list)
    edges: List[GraphEdge] = Field(default_factory=list)


class DetailField(BaseModel):
    label: str
    value: Optional[Any] = None


class NodeDetails(BaseModel):
    """Content of the detail panel of a selected node."""

    title: str
    description: Optional[str] = None
    fields: List[DetailField] = Field(default_factory=list)


class LegendEntry(BaseModel):
    color: str
    label: str


class VisualizationResponse(BaseModel):
    graph: Graph
    selected_node: Optional[str] = None
    details: Optional[NodeDetails] = None
    legend: List[LegendEntry] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    """Messages of the collections that failed to load."""


class NodeMove(BaseModel):
    x: float
    y: float


class EdgeConnect(BaseModel):
    source: str
    target: str
