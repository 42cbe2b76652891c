"""
Consumer page.

Drives the data exchange workflow over three tabs:

    - catalog: fetch the provider's catalog, list its datasets and let the
      operator select one offer to negotiate.
    - negotiations: list the consumer's negotiations; a finalized
      negotiation with an agreement id offers the "start transfer" action.
    - transfers: list the transfer processes.
"""

import logging
from typing import Optional

from pydantic import ValidationError

from app.db.cache import CONTRACT_NEGOTIATIONS, TRANSFER_PROCESSES
from app.models.catalog import Catalog, Dataset
from app.models.parsing import parse_documents
from app.schemas.transfer import ConsumerViewResponse
from app.schemas.view import ActionResult, Card, Tab
from app.util.edc_helpers import ODRL_CONTEXT
from app.views.base import BaseView

logger = logging.getLogger(__name__)

# Sent as `assetId` when starting a transfer; the negotiation's own asset is not looked up.
TRANSFER_ASSET_PLACEHOLDER = "assetId"

OFFER_ASSIGNER = "provider"

TABS = {
    "catalog": ("Catalog Browser", "Browse available datasets from the provider connector."),
    "negotiations": ("Contract Negotiations", "Track the status of your contract negotiations with providers."),
    "transfers": ("Data Transfers", "Monitor active and completed data transfer processes."),
}

EMPTY_MESSAGES = {
    "catalog": 'Click "Fetch Catalog" to browse available datasets from the provider.',
    "negotiations": "Start by browsing the catalog and selecting a dataset to negotiate.",
    "transfers": "Transfer processes will appear here once you initiate data transfers.",
}


class ConsumerView(BaseView):
    """
    Consumer page state: active tab, last fetched catalog and selected offer.

    Example:
        >>> view = ConsumerView(client, cache, settings)
        >>> await view.fetch_catalog()
        >>> view.select_offer("asset-42")
        >>> result = await view.negotiate()
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.active_tab = "catalog"
        self.catalog: Optional[dict] = None
        self.selected_offer: Optional[Dataset] = None

    def select_tab(self, tab: str) -> None:
        if tab not in TABS:
            raise ValueError(f"Unknown consumer tab: {tab}")
        self.active_tab = tab

    def datasets(self) -> list:
        """Readable datasets of the last fetched catalog; unreadable ones are left out."""

        if not isinstance(self.catalog, dict):
            return []
        try:
            return Catalog.model_validate(self.catalog).datasets
        except ValidationError as e:
            logger.warning("Unreadable catalog: %s", e)
            return []

    def select_offer(self, dataset_id: str) -> Dataset:
        """
        Marks a dataset of the fetched catalog as the offer to negotiate.

        Raises:
            ValueError: If the catalog has no dataset with this id.
        """

        for dataset in self.datasets():
            if dataset.id == dataset_id:
                self.selected_offer = dataset
                return dataset
        raise ValueError(f"Dataset not found in catalog: {dataset_id}")

    def clear_selection(self) -> None:
        self.selected_offer = None

    # --------------------------------------------------------------------------
    # Actions
    # --------------------------------------------------------------------------

    async def fetch_catalog(self) -> ActionResult:
        result = await self._mutate(
            "request_catalog",
            lambda: self.client.request_catalog(self.settings.provider_protocol_url, self.settings.dsp_protocol),
            success="Catalog fetched successfully!",
            failure="Failed to fetch catalog",
        )
        if result.ok:
            self.catalog = result.data
        return result

    async def negotiate(self) -> ActionResult:
        """
        Starts a contract negotiation for the selected offer.

        The selected dataset must carry a policy reference; otherwise the
        request is rejected without any remote call.

        Returns:
            ActionResult: Outcome of the negotiation request.
        """

        if self.selected_offer is None:
            return self._reject("No offer selected")

        offer = self.selected_offer.offer
        if offer is None or not offer.id:
            return self._reject("No policy found in selected offer")

        policy = {
            "@context": ODRL_CONTEXT,
            "@id": offer.id,
            "@type": "Offer",
            "assigner": OFFER_ASSIGNER,
            "target": self.selected_offer.id,
        }

        result = await self._mutate(
            "negotiate_contract",
            lambda: self.client.negotiate_contract(
                self.settings.provider_protocol_url, self.settings.dsp_protocol, policy
            ),
            invalidate=[CONTRACT_NEGOTIATIONS],
            success="Contract negotiation initiated!",
            failure="Failed to initiate contract negotiation",
        )
        if result.ok:
            self.selected_offer = None
        return result

    async def start_transfer(self, contract_agreement_id: str, asset_id: str = TRANSFER_ASSET_PLACEHOLDER) -> ActionResult:
        """
        Starts a transfer on the basis of a finalized negotiation's agreement.

        Args:
            contract_agreement_id (str): Agreement id of a finalized negotiation.
            asset_id (str): Asset id sent with the request.

        Returns:
            ActionResult: Rejected with 400 when no finalized negotiation of
            the current list carries this agreement id.
        """

        # the negotiation may have been finalized since the last render
        negotiations, _ = await self._load(CONTRACT_NEGOTIATIONS, self.client.get_contract_negotiations, 0)
        agreements = {
            n.contract_agreement_id
            for n in parse_documents("negotiation", negotiations)
            if n.kind == "negotiation" and n.can_start_transfer
        }
        if contract_agreement_id not in agreements:
            return self._reject(f"No finalized negotiation with agreement {contract_agreement_id}")

        transfer = {
            "counterPartyAddress": self.settings.provider_protocol_url,
            "protocol": self.settings.dsp_protocol,
            "contractId": contract_agreement_id,
            "assetId": asset_id,
            "dataDestination": {"type": "HttpProxy"},
            "managedResources": False,
        }
        return await self._mutate(
            "start_transfer",
            lambda: self.client.start_transfer(transfer),
            invalidate=[TRANSFER_PROCESSES],
            success="Data transfer initiated!",
            failure="Failed to start transfer",
        )

    # --------------------------------------------------------------------------
    # Rendering
    # --------------------------------------------------------------------------

    async def render(self) -> ConsumerViewResponse:
        tab = self.active_tab
        error = None
        actions = []

        if tab == "catalog":
            cards = self._catalog_cards()
            empty = EMPTY_MESSAGES["catalog"] if self.catalog is None else None
            if not self.is_pending("request_catalog"):
                actions.append("fetch_catalog")
            if self.selected_offer is not None:
                actions.append("cancel_selection")
                if not self.is_pending("negotiate_contract"):
                    actions.append("negotiate")
        elif tab == "negotiations":
            negotiations, error = await self._load(CONTRACT_NEGOTIATIONS, self.client.get_contract_negotiations)
            cards = [self._negotiation_card(n) for n in parse_documents("negotiation", negotiations)]
            empty = EMPTY_MESSAGES["negotiations"] if not cards else None
        else:
            transfers, error = await self._load(TRANSFER_PROCESSES, self.client.get_transfer_processes)
            cards = [self._transfer_card(t) for t in parse_documents("transfer", transfers)]
            empty = EMPTY_MESSAGES["transfers"] if not cards else None

        return ConsumerViewResponse(
            active_tab=tab,
            tabs=[Tab(id=tab_id, name=name, active=tab_id == tab) for tab_id, (name, _) in TABS.items()],
            description=TABS[tab][1],
            cards=cards,
            empty_message=empty,
            error=error,
            selected_offer=self.selected_offer.label if self.selected_offer is not None else None,
            actions=actions,
            pending=sorted(self._pending),
            notification=self.take_notification(),
        )

    def _catalog_cards(self) -> list:
        selected_id = self.selected_offer.id if self.selected_offer is not None else None
        return [
            Card(
                id=dataset.id or "",
                title=dataset.label,
                subtitle=dataset.contenttype,
                description=dataset.description,
                badges=dataset.formats,
                selected=dataset.id == selected_id,
                actions=["select"],
            )
            for dataset in self.datasets()
        ]

    def _negotiation_card(self, negotiation) -> Card:
        if negotiation.kind != "negotiation":
            return self._unknown_card(negotiation)

        if negotiation.is_finalized:
            status = "green"
        elif negotiation.is_terminated:
            status = "red"
        else:
            status = "yellow"

        actions = []
        if negotiation.can_start_transfer and not self.is_pending("start_transfer"):
            actions.append("start_transfer")
        return Card(
            id=negotiation.id or "",
            title=negotiation.id or "",
            subtitle=f"{negotiation.type} • {negotiation.protocol}",
            description=(
                f"Contract Agreement: {negotiation.contract_agreement_id}"
                if negotiation.contract_agreement_id else None
            ),
            badges=[negotiation.state] if negotiation.state else [],
            status=status,
            actions=actions,
        )

    def _transfer_card(self, transfer) -> Card:
        if transfer.kind != "transfer":
            return self._unknown_card(transfer)
        return Card(
            id=transfer.id or "",
            title=transfer.id or "",
            subtitle=transfer.transfer_type,
            description=f"Contract: {transfer.contract_id}" if transfer.contract_id else None,
            badges=[transfer.state] if transfer.state else [],
        )
