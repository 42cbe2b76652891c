"""
Shared pytest fixtures.

`FakeConnector` stands in for both EDC connectors: tests register canned
responses per (method, URL) and inspect the requests the console sent.
Every request goes through an `httpx.MockTransport`, so no network is used.
"""

import json

import httpx
import pytest

from app.core.config import Settings
from app.db.client import create_session


@pytest.fixture
def anyio_backend():
    return "asyncio"


class FakeConnector:
    def __init__(self, settings: Settings):
        self.settings = settings
        self.routes = {}
        self.requests = []

    def provider(self, path: str) -> str:
        return f"{self.settings.provider_management_url}{path}"

    def consumer(self, path: str) -> str:
        return f"{self.settings.consumer_management_url}{path}"

    def on(self, method: str, url: str, status: int = 200, json=None, error=None, handler=None):
        """Registers the answer to `method url`: a JSON body, an httpx error class, or a custom handler."""

        self.routes[(method, url)] = (status, json, error, handler)

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, str(request.url)))
        if route is None:
            return httpx.Response(404, json=[{"message": f"No route for {request.url}", "type": "ObjectNotFound"}])

        status, body, error, handler = route
        if handler is not None:
            return await handler(request)
        if error is not None:
            raise error("simulated failure", request=request)
        return httpx.Response(status, json=body)

    def calls(self, method: str, url: str) -> list:
        return [r for r in self.requests if r.method == method and str(r.url) == url]

    @staticmethod
    def body(request: httpx.Request):
        return json.loads(request.content)


@pytest.fixture
def settings():
    return Settings(health_timeout=0.2)


@pytest.fixture
def connector(settings):
    return FakeConnector(settings)


@pytest.fixture
def transport(connector):
    return httpx.MockTransport(connector.handle)


@pytest.fixture
def session(settings, transport):
    return create_session(settings, transport=transport)


@pytest.fixture
def asset_doc():
    return {
        "@id": "asset-1",
        "@type": "Asset",
        "properties": {"name": "Orders", "contenttype": "application/json", "description": "Daily orders"},
        "dataAddress": {"@type": "DataAddress", "type": "HttpData", "baseUrl": "https://example.com/orders"},
    }


@pytest.fixture
def policy_docs():
    return [
        {"@id": "policy-a", "policy": {"@type": "odrl:Set", "odrl:permission": [], "odrl:prohibition": [], "odrl:obligation": []}},
        {"@id": "policy-b", "policy": {"@type": "Set", "permission": [{"action": "use"}]}},
    ]


@pytest.fixture
def catalog_doc():
    return {
        "@id": "catalog-1",
        "@type": "dcat:Catalog",
        "dcat:dataset": {
            "@id": "asset-42",
            "@type": "dcat:Dataset",
            "name": "Sensor readings",
            "contenttype": "application/json",
            "odrl:hasPolicy": {"@id": "offer-42", "@type": "odrl:Offer"},
            "dcat:distribution": [{"@type": "dcat:Distribution", "dct:format": {"@id": "HttpData"}}],
        },
    }
