from app.services.graph_service import build_graph, node_details


def test_empty_collections_give_the_two_anchors():
    graph = build_graph([], [], [], [])

    assert [node.id for node in graph.nodes] == ["provider", "consumer"]
    assert graph.edges == []
    assert (graph.nodes[0].position.x, graph.nodes[0].position.y) == (100, 100)
    assert (graph.nodes[1].position.x, graph.nodes[1].position.y) == (600, 100)


def test_missing_collections_count_as_empty():
    graph = build_graph(None, {"error": "not a list"}, "oops", None)

    assert len(graph.nodes) == 2
    assert graph.edges == []


def test_edge_counts():
    assets = [{"@id": f"a{i}"} for i in range(3)]
    policies = [{"@id": "p1"}, {"@id": "p2"}]
    contracts = [
        {"@id": "c1", "accessPolicyId": "p1", "contractPolicyId": "p2"},
        {"@id": "c2", "accessPolicyId": "p2", "contractPolicyId": "p2"},
    ]
    negotiations = [{"@id": "n1", "state": "FINALIZED"}, {"@id": "n2", "state": "AGREED"}]

    graph = build_graph(assets, policies, contracts, negotiations)

    hosts = [e for e in graph.edges if e.source == "provider" and e.target.startswith("asset-")]
    policy_edges = [e for e in graph.edges if e.id.startswith("policy-contract-")]
    agreements = [e for e in graph.edges if e.id.startswith("negotiation-")]
    assert len(hosts) == 3
    assert len(policy_edges) == 4
    assert len(agreements) == 1
    assert len(graph.edges) == 3 + 4 + 1


def test_node_ids_are_unique_across_kinds():
    graph = build_graph([{"@id": "x"}], [{"@id": "x"}], [{"@id": "x"}], [])

    ids = [node.id for node in graph.nodes]
    assert ids == ["provider", "consumer", "asset-x", "policy-x", "contract-x"]
    assert len(set(ids)) == len(ids)


def test_row_layout():
    graph = build_graph([{"@id": "a0"}, {"@id": "a1"}], [{"@id": "p0"}], [{"@id": "c0"}], [])
    positions = {node.id: (node.position.x, node.position.y) for node in graph.nodes}

    assert positions["asset-a0"] == (50, 250)
    assert positions["asset-a1"] == (170, 250)
    assert positions["policy-p0"] == (50, 400)
    assert positions["contract-c0"] == (50, 550)


def test_edge_styles():
    graph = build_graph(
        [{"@id": "a"}],
        [],
        [{"@id": "c", "accessPolicyId": "p1", "contractPolicyId": "p2"}],
        [{"@id": "n", "state": "FINALIZED"}],
    )
    edges = {edge.id: edge for edge in graph.edges}

    assert edges["provider-asset-a"].label == "hosts"
    assert edges["provider-asset-a"].type == "smoothstep"
    assert edges["policy-contract-c-access"].source == "policy-p1"
    assert edges["policy-contract-c-contract"].source == "policy-p2"
    agreement = edges["negotiation-n"]
    assert agreement.animated
    assert agreement.style.stroke == "#DC2626"
    assert agreement.style.stroke_width == 3
    assert (agreement.source, agreement.target) == ("provider", "consumer")


def test_node_details_per_kind():
    graph = build_graph([], [{"@id": "p"}], [{"@id": "c", "accessPolicyId": "p", "contractPolicyId": "p"}], [])
    nodes = {node.id: node for node in graph.nodes}

    assert node_details(nodes["provider"]).title == "Provider Connector"
    assert node_details(nodes["consumer"]).title == "Consumer Connector"
    assert node_details(nodes["policy-p"]).title == "Policy Details"
    contract = node_details(nodes["contract-c"])
    assert [(f.label, f.value) for f in contract.fields] == [("Access Policy", "p"), ("Contract Policy", "p")]


def test_unexpected_literals_become_labels():
    graph = build_graph(
        [{"@id": "a", "properties": {"name": 42}}, {"@id": "b", "properties": "gone", "dataAddress": []}],
        [{"@id": {"@id": "p"}}],
        [],
        [],
    )
    nodes = {node.id: node for node in graph.nodes}

    assert nodes["asset-a"].label == "42"
    assert nodes["asset-b"].label == "b"
    assert nodes["policy-p"].label == "p"
    assert [f.value for f in node_details(nodes["asset-b"]).fields] == [None, None, None]
