"""
Dashboard page.

Shows the health of both connectors (checked through the cache and
refreshed every 30 seconds), the on-demand connectivity test of the
management and protocol APIs, and the quick start guide.
"""

import asyncio
import logging

from app.db.cache import CONSUMER_HEALTH, PROVIDER_HEALTH
from app.schemas.dashboard import ConnectorStatusReport, DashboardResponse, QuickStartStep, StatusCard
from app.util.edc_helpers import CONSUMER, PROVIDER
from app.views.base import BaseView

logger = logging.getLogger(__name__)

QUICK_START = [
    QuickStartStep(
        step=1,
        title="Set up Provider",
        description="Go to the Provider tab to upload data files, create assets, and define access policies.",
    ),
    QuickStartStep(
        step=2,
        title="Browse as Consumer",
        description="Use the Consumer tab to discover available datasets, negotiate contracts, and access data.",
    ),
    QuickStartStep(
        step=3,
        title="Visualize Interactions",
        description="Monitor the data exchange flow and connector interactions in the Visualization tab.",
    ),
]

SETUP_INSTRUCTIONS = [
    "Build connector: ./gradlew transfer:transfer-00-prerequisites:connector:build",
    "Start provider: java -Dedc.fs.config=transfer/transfer-00-prerequisites/resources/configuration/"
    "provider-configuration.properties -jar transfer/transfer-00-prerequisites/connector/build/libs/connector.jar",
    "Start consumer: java -Dedc.fs.config=transfer/transfer-00-prerequisites/resources/configuration/"
    "consumer-configuration.properties -jar transfer/transfer-00-prerequisites/connector/build/libs/connector.jar",
]


class DashboardView(BaseView):
    """Dashboard page state: the last connectivity test report."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.connector_status = ConnectorStatusReport()

    async def render(self) -> DashboardResponse:
        interval = self.settings.health_refetch_interval
        provider, consumer = await asyncio.gather(
            self.cache.fetch(PROVIDER_HEALTH, self.client.check_provider_health, interval),
            self.cache.fetch(CONSUMER_HEALTH, self.client.check_consumer_health, interval),
        )

        return DashboardResponse(
            status_cards=[
                StatusCard(
                    title="Provider Connector",
                    description="Data provider connector status",
                    healthy=provider.is_healthy,
                ),
                StatusCard(
                    title="Consumer Connector",
                    description="Data consumer connector status",
                    healthy=consumer.is_healthy,
                ),
            ],
            connector_status=self.connector_status.model_copy(update={"testing": self.is_pending("test_connectivity")}),
            quick_start=QUICK_START,
        )

    async def test_connectivity(self) -> ConnectorStatusReport:
        """
        Checks the provider and consumer management APIs.

        Protocol API status is not checked on its own: it mirrors the
        management API of the same connector. A test already running is not
        started twice.

        Returns:
            ConnectorStatusReport: Result of the test.
        """

        if self.is_pending("test_connectivity"):
            return self.connector_status.model_copy(update={"testing": True})

        self._pending.add("test_connectivity")
        try:
            provider, consumer = await asyncio.gather(
                self.client.check_management(PROVIDER, "/assets/request"),
                self.client.check_management(CONSUMER, "/contractnegotiations/request"),
            )
        finally:
            self._pending.discard("test_connectivity")

        report = ConnectorStatusReport(
            provider_management=provider,
            consumer_management=consumer,
            provider_protocol=provider,
            consumer_protocol=consumer,
        )
        if not (provider and consumer):
            report.setup_instructions = list(SETUP_INSTRUCTIONS)
        self.connector_status = report
        logger.info("Connectivity test: provider=%s consumer=%s", provider, consumer)
        return report
