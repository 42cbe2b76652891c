import asyncio
import time

import httpx
import pytest

from app.services.edc_client import EdcClient
from app.util.edc_helpers import EDC_VOCAB, ODRL_CONTEXT, PROVIDER


@pytest.fixture
def client(settings, transport):
    return EdcClient(settings, transport=transport)


@pytest.mark.anyio
async def test_list_query_is_framed_with_context(client, connector):
    connector.on("POST", connector.provider("/assets/request"), json=[])

    await client.get_assets()

    [request] = connector.calls("POST", connector.provider("/assets/request"))
    assert connector.body(request) == {"@context": {"@vocab": EDC_VOCAB}, "@type": "QuerySpec"}
    assert request.headers["content-type"] == "application/json"


@pytest.mark.anyio
async def test_response_is_returned_unmodified(client, connector, asset_doc):
    raw = [dict(asset_doc, customField={"nested": [1, 2]})]
    connector.on("POST", connector.provider("/assets/request"), json=raw)

    assert await client.get_assets() == raw


@pytest.mark.anyio
async def test_create_asset_generates_missing_id(client, connector):
    connector.on("POST", connector.provider("/assets"), json={"@id": "generated"})

    await client.create_asset({"properties": {"name": "Orders"}, "dataAddress": {"type": "HttpData"}})

    [request] = connector.calls("POST", connector.provider("/assets"))
    body = connector.body(request)
    assert body["@id"]
    assert body["properties"] == {"name": "Orders"}
    assert body["@context"] == {"@vocab": EDC_VOCAB}


@pytest.mark.anyio
async def test_negotiation_uses_extended_context(client, connector, settings):
    url = connector.consumer("/contractnegotiations")
    connector.on("POST", url, json={"@id": "neg-1"})
    policy = {"@context": ODRL_CONTEXT, "@id": "offer-1", "@type": "Offer", "assigner": "provider", "target": "asset-1"}

    response = await client.negotiate_contract(settings.provider_protocol_url, settings.dsp_protocol, policy)

    assert response == {"@id": "neg-1"}
    body = connector.body(connector.calls("POST", url)[0])
    assert body["@type"] == "ContractRequest"
    assert body["counterPartyAddress"] == "http://localhost:19194/protocol"
    assert body["protocol"] == "dataspace-protocol-http"
    assert body["policy"] == policy
    assert body["@context"]["odrl"] == "http://www.w3.org/ns/odrl/2/"


@pytest.mark.anyio
async def test_single_lookup_uses_get(client, connector):
    connector.on("GET", connector.consumer("/transferprocesses/tp-1"), json={"@id": "tp-1", "state": "STARTED"})

    assert await client.get_transfer_process("tp-1") == {"@id": "tp-1", "state": "STARTED"}


@pytest.mark.anyio
async def test_single_negotiation_lookup(client, connector):
    connector.on("GET", connector.consumer("/contractnegotiations/neg-1"), json={"@id": "neg-1", "state": "AGREED"})

    negotiation = await client.get_contract_negotiation("neg-1")

    assert negotiation["state"] == "AGREED"
    assert connector.requests[0].content == b""


@pytest.mark.anyio
async def test_empty_body_is_returned_as_none(client, connector):
    connector.on("POST", connector.consumer("/transferprocesses"), status=204)

    assert await client.start_transfer({"contractId": "agreement-1"}) is None


@pytest.mark.anyio
async def test_remote_error_is_propagated(client, connector):
    connector.on("POST", connector.provider("/policydefinitions"), status=409, json=[{"message": "Policy already exists"}])

    with pytest.raises(httpx.HTTPStatusError) as exc_info:
        await client.create_policy({"@id": "policy-1", "policy": {}})

    assert exc_info.value.response.status_code == 409


@pytest.mark.anyio
async def test_transport_error_is_propagated(client, connector):
    connector.on("POST", connector.provider("/contractdefinitions/request"), error=httpx.ConnectError)

    with pytest.raises(httpx.RequestError):
        await client.get_contract_definitions()


@pytest.mark.anyio
@pytest.mark.parametrize("status,healthy", [(200, True), (503, False)])
async def test_health_reflects_status(client, connector, settings, status, healthy):
    connector.on("GET", settings.provider_health_url, status=status, json={"isSystemHealthy": healthy})

    result = await client.check_provider_health()

    assert result.is_healthy is healthy


@pytest.mark.anyio
async def test_health_is_false_when_unreachable(client, connector, settings):
    connector.on("GET", settings.consumer_health_url, error=httpx.ConnectError)

    result = await client.check_consumer_health()

    assert result.is_healthy is False


@pytest.mark.anyio
async def test_health_is_false_after_timeout(client, connector, settings):
    async def hang(request):
        await asyncio.sleep(10)
        return httpx.Response(200)

    connector.on("GET", settings.provider_health_url, handler=hang)

    started = time.monotonic()
    result = await client.check_provider_health()

    assert result.is_healthy is False
    assert time.monotonic() - started < 5


@pytest.mark.anyio
@pytest.mark.parametrize("status,reachable", [(200, True), (400, True), (500, False), (404, False)])
async def test_management_check(client, connector, status, reachable):
    connector.on("POST", connector.provider("/assets/request"), status=status, json=[])

    assert await client.check_management(PROVIDER, "/assets/request") is reachable


@pytest.mark.anyio
async def test_management_check_unreachable(client, connector):
    connector.on("POST", connector.provider("/assets/request"), error=httpx.ConnectTimeout)

    assert await client.check_management(PROVIDER, "/assets/request") is False
