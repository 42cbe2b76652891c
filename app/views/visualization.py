"""
Visualization page.

Fetches the four collections the graph is derived from, builds the graph
and lays the operator's local edits over it: dragged node positions and
manually connected edges. Those edits live only in this view; they are
never written back to a connector and are dropped on reload.
"""

import asyncio
import logging
from typing import Dict, List, Optional

from app.db.cache import ASSETS, CONTRACT_DEFINITIONS, CONTRACT_NEGOTIATIONS, POLICIES
from app.schemas.graph import Graph, GraphEdge, GraphNode, NodeDetails, Position, VisualizationResponse
from app.services.graph_service import LEGEND, build_graph, node_details
from app.views.base import BaseView

logger = logging.getLogger(__name__)


class VisualizationView(BaseView):
    """
    Visualization page state: selected node and local graph edits.

    Example:
        >>> view = VisualizationView(client, cache, settings)
        >>> details = await view.select_node("provider")
        >>> details.title
        'Provider Connector'
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.selected_node_id: Optional[str] = None
        self.positions: Dict[str, Position] = {}
        self.user_edges: List[GraphEdge] = []

    async def _graph(self) -> tuple:
        loaded = await asyncio.gather(
            self._load(ASSETS, self.client.get_assets),
            self._load(POLICIES, self.client.get_policies),
            self._load(CONTRACT_DEFINITIONS, self.client.get_contract_definitions),
            self._load(CONTRACT_NEGOTIATIONS, self.client.get_contract_negotiations),
        )
        (assets, _), (policies, _), (contracts, _), (negotiations, _) = loaded
        errors = [error for _, error in loaded if error]

        graph = build_graph(assets, policies, contracts, negotiations)
        node_ids = {node.id for node in graph.nodes}

        for node in graph.nodes:
            if node.id in self.positions:
                node.position = self.positions[node.id]
        graph.edges.extend(
            edge for edge in self.user_edges
            if edge.source in node_ids and edge.target in node_ids
        )
        return graph, errors

    @staticmethod
    def _find(graph: Graph, node_id: str) -> GraphNode:
        for node in graph.nodes:
            if node.id == node_id:
                return node
        raise ValueError(f"Node not found: {node_id}")

    async def render(self) -> VisualizationResponse:
        graph, errors = await self._graph()

        details = None
        if self.selected_node_id is not None:
            try:
                details = node_details(self._find(graph, self.selected_node_id))
            except ValueError:
                # the selected entity disappeared after a refetch
                self.selected_node_id = None

        return VisualizationResponse(
            graph=graph,
            selected_node=self.selected_node_id,
            details=details,
            legend=LEGEND,
            errors=errors,
        )

    async def select_node(self, node_id: str) -> NodeDetails:
        graph, _ = await self._graph()
        node = self._find(graph, node_id)
        self.selected_node_id = node_id
        return node_details(node)

    def close_details(self) -> None:
        self.selected_node_id = None

    async def move_node(self, node_id: str, x: float, y: float) -> GraphNode:
        graph, _ = await self._graph()
        node = self._find(graph, node_id)
        self.positions[node_id] = Position(x=x, y=y)
        node.position = self.positions[node_id]
        return node

    async def connect(self, source: str, target: str) -> GraphEdge:
        """
        Adds a manual edge between two nodes of the current graph.

        Connecting the same pair twice returns the existing edge.

        Raises:
            ValueError: If either node is not part of the graph.
        """

        graph, _ = await self._graph()
        self._find(graph, source)
        self._find(graph, target)

        edge_id = f"user-edge-{source}-{target}"
        for edge in self.user_edges:
            if edge.id == edge_id:
                return edge
        edge = GraphEdge(id=edge_id, source=source, target=target)
        self.user_edges.append(edge)
        return edge
