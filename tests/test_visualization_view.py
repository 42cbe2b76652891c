import pytest

from app.db.cache import POLICIES

ASSETS = [
    {"@id": "asset-1", "properties": {"name": "Orders"}, "dataAddress": {"baseUrl": "https://example.com/orders"}},
    {"@id": "asset-2", "properties": {}},
]
POLICIES_LIST = [{"@id": "p1", "policy": {}}, {"@id": "p2", "policy": {}}]
CONTRACTS = [{"@id": "c1", "accessPolicyId": "p1", "contractPolicyId": "p2", "assetsSelector": []}]
NEGOTIATIONS = [{"@id": "n1", "state": "FINALIZED"}, {"@id": "n2", "state": "REQUESTED"}]


@pytest.fixture
def view(session, connector):
    connector.on("POST", connector.provider("/assets/request"), json=ASSETS)
    connector.on("POST", connector.provider("/policydefinitions/request"), json=POLICIES_LIST)
    connector.on("POST", connector.provider("/contractdefinitions/request"), json=CONTRACTS)
    connector.on("POST", connector.consumer("/contractnegotiations/request"), json=NEGOTIATIONS)
    return session.visualization


@pytest.mark.anyio
async def test_render_graph(view):
    page = await view.render()

    assert len(page.graph.nodes) == 7
    assert len(page.graph.edges) == 5
    assert page.errors == []
    assert len(page.legend) == 4
    labels = {node.id: node.label for node in page.graph.nodes}
    assert labels["asset-asset-1"] == "Orders"
    assert labels["asset-asset-2"] == "asset-2"


@pytest.mark.anyio
async def test_select_node_details(view):
    details = await view.select_node("asset-asset-1")

    assert details.title == "Asset Details"
    assert [(f.label, f.value) for f in details.fields] == [
        ("Name", "Orders"),
        ("Content Type", None),
        ("Base URL", "https://example.com/orders"),
    ]

    page = await view.render()
    assert page.selected_node == "asset-asset-1"
    assert page.details.title == "Asset Details"

    view.close_details()
    page = await view.render()
    assert page.details is None


@pytest.mark.anyio
async def test_select_unknown_node(view):
    with pytest.raises(ValueError):
        await view.select_node("asset-missing")


@pytest.mark.anyio
async def test_selection_dropped_when_node_disappears(view, session, connector):
    await view.select_node("policy-p1")
    connector.on("POST", connector.provider("/policydefinitions/request"), json=[])
    session.cache.invalidate(POLICIES)

    page = await view.render()

    assert page.selected_node is None
    assert page.details is None


@pytest.mark.anyio
async def test_moved_node_keeps_position(view):
    await view.move_node("contract-c1", 300, 320)

    page = await view.render()

    [node] = [n for n in page.graph.nodes if n.id == "contract-c1"]
    assert (node.position.x, node.position.y) == (300, 320)


@pytest.mark.anyio
async def test_manual_connect(view):
    first = await view.connect("asset-asset-2", "contract-c1")
    second = await view.connect("asset-asset-2", "contract-c1")

    assert first.id == second.id == "user-edge-asset-asset-2-contract-c1"
    page = await view.render()
    assert len(page.graph.edges) == 6

    with pytest.raises(ValueError):
        await view.connect("asset-asset-2", "policy-unknown")


@pytest.mark.anyio
async def test_load_errors_are_reported(view, connector):
    connector.on("POST", connector.consumer("/contractnegotiations/request"), status=500, json={"message": "boom"})

    page = await view.render()

    assert page.errors == ["boom"]
    assert len(page.graph.edges) == 4
