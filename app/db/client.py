"""
Console session initialization and access utilities.

The console holds no durable state. Everything it keeps (the query cache
and the state of each page) lives in one in-memory session created at
application startup and exposed to the routes through `get_session`.
Restarting the application starts a fresh session.

Usage example:
    >>> from app.db.client import init_session, get_session
    >>> init_session(load_settings())
    >>> session = get_session()
    >>> page = await session.provider.render()
"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from app.core.config import Settings
from app.db.cache import QueryCache
from app.services.edc_client import EdcClient
from app.views.consumer import ConsumerView
from app.views.dashboard import DashboardView
from app.views.provider import ProviderView
from app.views.visualization import VisualizationView

logger = logging.getLogger(__name__)


@dataclass
class ConsoleSession:
    """Client, cache and page states of one running console."""

    settings: Settings
    client: EdcClient
    cache: QueryCache
    dashboard: DashboardView
    provider: ProviderView
    consumer: ConsumerView
    visualization: VisualizationView


_session: Optional[ConsoleSession] = None

# ------------------------------------------------------------------------------
# Initialization
# ------------------------------------------------------------------------------


def create_session(settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> ConsoleSession:
    """
    Builds a session whose pages share one client and one cache.

    Args:
        settings (Settings): Console configuration.
        transport (httpx.AsyncBaseTransport, optional): Transport of the EDC client.

    Returns:
        ConsoleSession: A fresh session with empty cache and default page states.
    """

    client = EdcClient(settings, transport=transport)
    cache = QueryCache()
    return ConsoleSession(
        settings=settings,
        client=client,
        cache=cache,
        dashboard=DashboardView(client, cache, settings),
        provider=ProviderView(client, cache, settings),
        consumer=ConsumerView(client, cache, settings),
        visualization=VisualizationView(client, cache, settings),
    )


def init_session(settings: Settings) -> ConsoleSession:
    """
    Initialize the global console session.

    Should be called once during application startup (e.g., in `main.py`).
    """

    global _session
    _session = create_session(settings)
    logger.info(
        "Console session ready (provider: %s, consumer: %s)",
        settings.provider_management_url,
        settings.consumer_management_url,
    )
    return _session

# ------------------------------------------------------------------------------
# Session Access
# ------------------------------------------------------------------------------


def get_session() -> ConsoleSession:
    """
    Retrieve the initialized console session.

    Raises:
        RuntimeError: If `init_session()` has not been called yet.
    """

    if _session is None:
        raise RuntimeError("Console session was not initialized. Call init_session() first.")
    return _session
