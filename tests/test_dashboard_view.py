import httpx
import pytest


@pytest.fixture
def view(session):
    return session.dashboard


@pytest.mark.anyio
async def test_health_cards(view, connector, settings):
    connector.on("GET", settings.provider_health_url, json={"isSystemHealthy": True})
    connector.on("GET", settings.consumer_health_url, error=httpx.ConnectError)

    page = await view.render()

    provider, consumer = page.status_cards
    assert provider.title == "Provider Connector"
    assert provider.healthy is True
    assert consumer.healthy is False
    assert [step.step for step in page.quick_start] == [1, 2, 3]


@pytest.mark.anyio
async def test_health_is_cached_between_renders(view, connector, settings):
    connector.on("GET", settings.provider_health_url, json={})
    connector.on("GET", settings.consumer_health_url, json={})

    await view.render()
    await view.render()

    assert len(connector.calls("GET", settings.provider_health_url)) == 1
    assert len(connector.calls("GET", settings.consumer_health_url)) == 1


@pytest.mark.anyio
async def test_connectivity_all_online(view, connector):
    connector.on("POST", connector.provider("/assets/request"), status=400, json=[{"message": "Invalid query"}])
    connector.on("POST", connector.consumer("/contractnegotiations/request"), json=[])

    report = await view.test_connectivity()

    assert report.provider_management is True
    assert report.consumer_management is True
    assert report.provider_protocol is True
    assert report.consumer_protocol is True
    assert report.setup_instructions == []


@pytest.mark.anyio
async def test_connectivity_offline_shows_instructions(view, connector):
    connector.on("POST", connector.provider("/assets/request"), json=[])
    connector.on("POST", connector.consumer("/contractnegotiations/request"), error=httpx.ConnectError)

    report = await view.test_connectivity()

    assert report.provider_management is True
    assert report.consumer_management is False
    assert report.consumer_protocol is False
    assert report.setup_instructions
    assert report.setup_instructions[0].startswith("Build connector")


@pytest.mark.anyio
async def test_last_report_is_rendered(view, connector, settings):
    connector.on("GET", settings.provider_health_url, json={})
    connector.on("GET", settings.consumer_health_url, json={})

    page = await view.render()
    assert page.connector_status.provider_management is None

    connector.on("POST", connector.provider("/assets/request"), json=[])
    connector.on("POST", connector.consumer("/contractnegotiations/request"), json=[])
    await view.test_connectivity()

    page = await view.render()
    assert page.connector_status.consumer_management is True
    assert page.connector_status.testing is False
