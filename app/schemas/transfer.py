"""
Consumer page schemas.

This module defines the schemas of the consumer page, which drives the
data exchange workflow: catalog browsing, contract negotiation and
transfer start.

Schemas:
    - OfferSelection: Request body to select a catalog dataset.
    - StartTransfer: Request body to start a transfer from an agreement.
    - ConsumerViewResponse: Rendered consumer page.
"""

from typing import List, Literal, Optional
from pydantic import BaseModel, Field

from app.schemas.view import Card, Notification, Tab

ConsumerTab = Literal["catalog", "negotiations", "transfers"]


class OfferSelection(BaseModel):
    """
    Selection of a dataset of the fetched catalog.

    Example:
        >>> OfferSelection(dataset_id="asset-42").dataset_id
        'asset-42'
    """

    dataset_id: str
    """`@id` of the dataset to select."""


class StartTransfer(BaseModel):
    """
    Information required to start a transfer process.

    Example:
        >>> start = StartTransfer(contract_agreement_id="agreement-001")
        >>> start.asset_id
        'assetId'
    """

    contract_agreement_id: str
    """Identifier of the finalized contract agreement."""

    asset_id: str = "assetId"
    """Asset identifier sent with the request; the console sends a fixed placeholder."""


class ConsumerViewResponse(BaseModel):
    """
    Rendered consumer page.

    The catalog tab lists the datasets of the last fetched catalog, the
    negotiations tab lists the consumer's negotiations with a
    `start_transfer` action on every finalized one, and the transfers tab
    lists transfer processes.
    """

    active_tab: ConsumerTab
    """Tab currently shown."""

    tabs: List[Tab]
    """Tab bar of the page."""

    description: str
    """Caption of the active tab."""

    cards: List[Card] = Field(default_factory=list)
    """Items of the active tab."""

    empty_message: Optional[str] = None
    """Text shown when the active tab has nothing to list."""

    error: Optional[str] = None
    """Message of the last failed fetch of the active collection."""

    selected_offer: Optional[str] = None
    """Label of the selected dataset, if any."""

    actions: List[str] = Field(default_factory=list)
    """Page-level actions currently enabled (`fetch_catalog`, `negotiate`...)."""

    pending: List[str] = Field(default_factory=list)
    """Actions with a call in flight."""

    notification: Optional[Notification] = None
    """Notification of the last user action."""
