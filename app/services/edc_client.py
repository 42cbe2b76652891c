"""
EDC client.

This module wraps the two EDC Management APIs the console talks to (the
provider's and the consumer's) and the two health endpoints. There is one
method per remote operation: list/create for assets, policies and
contract definitions, list/get for negotiations and transfers, catalog
request, contract negotiation and transfer start.

Every request body is framed with the connector's JSON-LD `@context` and
every response body is returned as the connector sent it. Errors raised
by `httpx` (`HTTPStatusError`, `RequestError`) reach the caller
unchanged; only the health and connectivity checks reduce failures to a
boolean.
"""

import asyncio
import logging
from typing import Any, Optional

import httpx

from app.core.config import Settings
from app.schemas.dashboard import HealthStatus
from app.util.edc_helpers import (
    CONSUMER,
    NEGOTIATION_CONTEXT,
    PROVIDER,
    get_base_url,
    new_asset_id,
    with_context,
)

logger = logging.getLogger(__name__)

QUERY_SPEC = {"@type": "QuerySpec"}


class EdcClient:
    """
    Client of the provider and consumer Management APIs.

    Args:
        settings (Settings): Console configuration (base URLs, timeouts).
        transport (httpx.AsyncBaseTransport, optional): Transport used by
            every request; tests pass an `httpx.MockTransport`.

    Example:
        >>> client = EdcClient(Settings())
        >>> assets = await client.get_assets()
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self._transport = transport

    def _client(self, **kwargs) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=self._transport,
            headers={"Content-Type": "application/json"},
            **kwargs,
        )

    async def _post(self, side: str, path: str, payload: dict, context: Any = None) -> Any:
        url = get_base_url(self.settings, side, path)
        body = with_context(payload, context)
        logger.debug("POST %s %s", url, body)

        async with self._client() as client:
            response = await client.post(url, json=body)
            return self._read(response)

    async def _get(self, side: str, path: str) -> Any:
        url = get_base_url(self.settings, side, path)
        logger.debug("GET %s", url)

        async with self._client() as client:
            response = await client.get(url)
            return self._read(response)

    @staticmethod
    def _read(response: httpx.Response) -> Any:
        if response.is_error:
            logger.warning(
                "EDC error %s on %s %s: %s",
                response.status_code, response.request.method, response.request.url, response.text,
            )
        response.raise_for_status()
        if not response.content:
            return None
        return response.json()

    # --------------------------------------------------------------------------
    # Health checks
    # --------------------------------------------------------------------------

    async def check_provider_health(self) -> HealthStatus:
        return await self._check_health(self.settings.provider_health_url)

    async def check_consumer_health(self) -> HealthStatus:
        return await self._check_health(self.settings.consumer_health_url)

    async def _check_health(self, url: str) -> HealthStatus:
        """
        Checks a health endpoint within the configured timeout.

        Any HTTP answer is reduced to its success flag; a timeout or a
        connection failure yields an unhealthy status instead of raising.

        Args:
            url (str): Health endpoint to call.

        Returns:
            HealthStatus: Whether the endpoint answered with a 2xx status.
        """

        timeout = self.settings.health_timeout
        try:
            async with self._client(timeout=timeout) as client:
                response = await asyncio.wait_for(client.get(url), timeout)
            return HealthStatus(is_healthy=response.is_success)
        except (httpx.RequestError, asyncio.TimeoutError) as e:
            logger.info("Health check on %s failed: %r", url, e)
            return HealthStatus(is_healthy=False)

    async def check_management(self, side: str, path: str) -> bool:
        """
        Tests that a Management API answers a query.

        A 2xx or a 400 (the API is up but rejects the query body) counts as
        reachable; any other status, a timeout or a connection failure does not.

        Args:
            side (str): `provider` or `consumer`.
            path (str): Query endpoint to call (e.g., "/assets/request").

        Returns:
            bool: Whether the API is reachable.
        """

        url = get_base_url(self.settings, side, path)
        timeout = self.settings.health_timeout
        try:
            async with self._client(timeout=timeout) as client:
                response = await asyncio.wait_for(client.post(url, json=with_context({})), timeout)
        except (httpx.RequestError, asyncio.TimeoutError) as e:
            logger.warning("%s management API failed: %r", side.capitalize(), e)
            return False

        if response.is_success or response.status_code == 400:
            return True
        logger.warning("%s management API failed with status %s", side.capitalize(), response.status_code)
        return False

    # --------------------------------------------------------------------------
    # Provider APIs
    # --------------------------------------------------------------------------

    async def create_asset(self, asset: dict) -> Any:
        """
        Registers an asset in the provider connector.

        Args:
            asset (dict): Asset document with `properties` and `dataAddress`;
                a missing `@id` is replaced by a random UUID.

        Returns:
            Any: Connector response (the id response), unmodified.
        """

        return await self._post(PROVIDER, "/assets", {
            "@id": asset.get("@id") or new_asset_id(),
            "properties": asset.get("properties", {}),
            "dataAddress": asset.get("dataAddress", {}),
        })

    async def get_assets(self) -> Any:
        return await self._post(PROVIDER, "/assets/request", QUERY_SPEC)

    async def create_policy(self, policy: dict) -> Any:
        """
        Registers a policy definition in the provider connector.

        Args:
            policy (dict): Document with an optional `@id` and the ODRL `policy` body.

        Returns:
            Any: Connector response, unmodified.
        """

        return await self._post(PROVIDER, "/policydefinitions", {
            "@id": policy.get("@id") or new_asset_id(),
            "policy": policy.get("policy", {}),
        })

    async def get_policies(self) -> Any:
        return await self._post(PROVIDER, "/policydefinitions/request", QUERY_SPEC)

    async def create_contract_definition(self, contract: dict) -> Any:
        """
        Registers a contract definition in the provider connector.

        Args:
            contract (dict): Document with `accessPolicyId`, `contractPolicyId`
                and `assetsSelector`; a missing `@id` is generated.

        Returns:
            Any: Connector response, unmodified.
        """

        return await self._post(PROVIDER, "/contractdefinitions", {
            "@id": contract.get("@id") or new_asset_id(),
            "accessPolicyId": contract.get("accessPolicyId"),
            "contractPolicyId": contract.get("contractPolicyId"),
            "assetsSelector": contract.get("assetsSelector", []),
        })

    async def get_contract_definitions(self) -> Any:
        return await self._post(PROVIDER, "/contractdefinitions/request", QUERY_SPEC)

    # --------------------------------------------------------------------------
    # Consumer APIs
    # --------------------------------------------------------------------------

    async def request_catalog(self, counter_party_address: str, protocol: str) -> Any:
        """
        Asks the consumer connector for the catalog of a counterparty.

        Args:
            counter_party_address (str): Protocol endpoint of the provider.
            protocol (str): Dataspace protocol identifier.

        Returns:
            Any: Catalog document, unmodified.
        """

        return await self._post(CONSUMER, "/catalog/request", {
            "counterPartyAddress": counter_party_address,
            "protocol": protocol,
        })

    async def negotiate_contract(self, counter_party_address: str, protocol: str, policy: dict) -> Any:
        """
        Starts a contract negotiation from the consumer connector.

        Args:
            counter_party_address (str): Protocol endpoint of the provider.
            protocol (str): Dataspace protocol identifier.
            policy (dict): ODRL offer being requested (`@id`, `assigner`, `target`).

        Returns:
            Any: Connector response (the negotiation id), unmodified.
        """

        payload = {
            "@type": "ContractRequest",
            "counterPartyAddress": counter_party_address,
            "protocol": protocol,
            "policy": policy,
        }
        logger.debug("Contract negotiation payload: %s", payload)
        return await self._post(CONSUMER, "/contractnegotiations", payload, context=dict(NEGOTIATION_CONTEXT))

    async def get_contract_negotiation(self, negotiation_id: str) -> Any:
        return await self._get(CONSUMER, f"/contractnegotiations/{negotiation_id}")

    async def get_contract_negotiations(self) -> Any:
        return await self._post(CONSUMER, "/contractnegotiations/request", QUERY_SPEC)

    async def start_transfer(self, transfer: dict) -> Any:
        """
        Starts a transfer process from the consumer connector.

        Args:
            transfer (dict): Transfer request (`counterPartyAddress`, `protocol`,
                `contractId`, `assetId`, `dataDestination`...), sent as is.

        Returns:
            Any: Connector response (the transfer process id), unmodified.
        """

        return await self._post(CONSUMER, "/transferprocesses", transfer)

    async def get_transfer_process(self, transfer_id: str) -> Any:
        return await self._get(CONSUMER, f"/transferprocesses/{transfer_id}")

    async def get_transfer_processes(self) -> Any:
        return await self._post(CONSUMER, "/transferprocesses/request", QUERY_SPEC)
