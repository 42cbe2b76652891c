"""
Graph service.

Derives the dataspace graph shown by the visualization page from the four
collections the console caches (assets, policies, contract definitions and
contract negotiations). The graph is recomputed from scratch on every
call; no edge state is carried over between calls.

Layout:
    - `provider` and `consumer` anchors at fixed coordinates.
    - One row per kind (assets, policies, contracts), each node at
      `ROW_X + index * ROW_SPACING` on its row.

Edges:
    - provider -> asset, labeled "hosts", for every asset.
    - access policy -> contract and contract policy -> contract for every
      contract definition.
    - provider -> consumer, animated, for every finalized negotiation.
"""

from typing import Iterable, Optional

from app.models.negotiation import is_finalized
from app.schemas.graph import (
    DetailField,
    EdgeStyle,
    Graph,
    GraphEdge,
    GraphNode,
    LegendEntry,
    NodeDetails,
    Position,
)
from app.util.edc_helpers import as_text

PROVIDER_NODE = "provider"
CONSUMER_NODE = "consumer"

PROVIDER_POSITION = Position(x=100, y=100)
CONSUMER_POSITION = Position(x=600, y=100)

ROW_X = 50
ROW_SPACING = 120
ROWS = {"asset": 250, "policy": 400, "contract": 550}

HOSTS_STYLE = EdgeStyle(stroke="#0066CC")
ACCESS_POLICY_STYLE = EdgeStyle(stroke="#059669")
CONTRACT_POLICY_STYLE = EdgeStyle(stroke="#7C3AED")
AGREEMENT_STYLE = EdgeStyle(stroke="#DC2626", stroke_width=3)

LEGEND = [
    LegendEntry(color="blue", label="Provider-Asset relationship"),
    LegendEntry(color="green", label="Policy-Contract relationship"),
    LegendEntry(color="red", label="Active data transfer"),
    LegendEntry(color="purple", label="Contract policy"),
]


def node_id(kind: str, source_id: str) -> str:
    """Namespaces a source id by its kind, keeping ids unique across collections."""

    return f"{kind}-{source_id}"


def _documents(collection) -> list:
    if not isinstance(collection, list):
        return []
    return [item for item in collection if isinstance(item, dict)]


def _mapping(value) -> dict:
    return value if isinstance(value, dict) else {}


def _row_position(kind: str, index: int) -> Position:
    return Position(x=ROW_X + index * ROW_SPACING, y=ROWS[kind])


def build_graph(
    assets: Optional[Iterable[dict]],
    policies: Optional[Iterable[dict]],
    contracts: Optional[Iterable[dict]],
    negotiations: Optional[Iterable[dict]],
) -> Graph:
    """
    Builds the visualization graph from the current collections.

    Collections that are missing (not loaded yet, or not a list) count as empty.

    Args:
        assets: Asset documents of the provider.
        policies: Policy definition documents of the provider.
        contracts: Contract definition documents of the provider.
        negotiations: Contract negotiation documents of the consumer.

    Returns:
        Graph: Nodes and edges of the visualization.
    """

    assets = _documents(assets)
    policies = _documents(policies)
    contracts = _documents(contracts)
    negotiations = _documents(negotiations)

    nodes = [
        GraphNode(
            id=PROVIDER_NODE,
            kind="provider",
            label="Data Provider",
            position=PROVIDER_POSITION,
            data={"connectorId": "provider-connector"},
        ),
        GraphNode(
            id=CONSUMER_NODE,
            kind="consumer",
            label="Data Consumer",
            position=CONSUMER_POSITION,
            data={"connectorId": "consumer-connector"},
        ),
    ]
    edges = []

    for index, asset in enumerate(assets):
        asset_id = as_text(asset.get("@id"))
        nodes.append(GraphNode(
            id=node_id("asset", asset_id),
            kind="asset",
            label=as_text(_mapping(asset.get("properties")).get("name")) or asset_id or "",
            position=_row_position("asset", index),
            data=asset,
        ))
        edges.append(GraphEdge(
            id=f"provider-asset-{asset_id}",
            source=PROVIDER_NODE,
            target=node_id("asset", asset_id),
            label="hosts",
            style=HOSTS_STYLE,
        ))

    for index, policy in enumerate(policies):
        policy_id = as_text(policy.get("@id"))
        nodes.append(GraphNode(
            id=node_id("policy", policy_id),
            kind="policy",
            label=policy_id or "",
            position=_row_position("policy", index),
            data=policy,
        ))

    for index, contract in enumerate(contracts):
        contract_id = as_text(contract.get("@id"))
        target = node_id("contract", contract_id)
        nodes.append(GraphNode(
            id=target,
            kind="contract",
            label=contract_id or "",
            position=_row_position("contract", index),
            data=contract,
        ))
        edges.append(GraphEdge(
            id=f"policy-contract-{contract_id}-access",
            source=node_id("policy", as_text(contract.get("accessPolicyId"))),
            target=target,
            label="access policy",
            style=ACCESS_POLICY_STYLE,
        ))
        edges.append(GraphEdge(
            id=f"policy-contract-{contract_id}-contract",
            source=node_id("policy", as_text(contract.get("contractPolicyId"))),
            target=target,
            label="contract policy",
            style=CONTRACT_POLICY_STYLE,
        ))

    for negotiation in filter(is_finalized, negotiations):
        edges.append(GraphEdge(
            id=f"negotiation-{as_text(negotiation.get('@id'))}",
            source=PROVIDER_NODE,
            target=CONSUMER_NODE,
            label="active agreement",
            style=AGREEMENT_STYLE,
            animated=True,
        ))

    return Graph(nodes=nodes, edges=edges)


def node_details(node: GraphNode) -> NodeDetails:
    """
    Content of the detail panel of a node.

    Args:
        node (GraphNode): Selected node, with its source entity in `data`.

    Returns:
        NodeDetails: Title, description and fields depending on the node kind.
    """

    data = node.data or {}

    if node.kind == "provider":
        return NodeDetails(
            title="Provider Connector",
            description="Hosts and manages data assets available for sharing in the dataspace.",
        )
    if node.kind == "consumer":
        return NodeDetails(
            title="Consumer Connector",
            description="Discovers and accesses data from providers through contract negotiations.",
        )
    if node.kind == "asset":
        properties = _mapping(data.get("properties"))
        return NodeDetails(
            title="Asset Details",
            fields=[
                DetailField(label="Name", value=properties.get("name")),
                DetailField(label="Content Type", value=properties.get("contenttype")),
                DetailField(label="Base URL", value=_mapping(data.get("dataAddress")).get("baseUrl")),
            ],
        )
    if node.kind == "policy":
        return NodeDetails(
            title="Policy Details",
            description="Access control policy defining permissions and constraints.",
        )
    if node.kind == "contract":
        return NodeDetails(
            title="Contract Definition",
            fields=[
                DetailField(label="Access Policy", value=data.get("accessPolicyId")),
                DetailField(label="Contract Policy", value=data.get("contractPolicyId")),
            ],
        )
    return NodeDetails(title="No details available")
