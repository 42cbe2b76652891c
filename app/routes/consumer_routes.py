"""
Consumer routes.

This module defines the API endpoints of the consumer page, which drives
the data exchange with the provider: catalog retrieval, offer selection,
contract negotiation and transfer start.

All endpoints act on the consumer view of the console session
(`app.views.consumer`); remote calls go through the consumer connector's
Management API.
"""

from fastapi import APIRouter, Depends, HTTPException

from app.db.client import ConsoleSession, get_session
from app.schemas.transfer import ConsumerViewResponse, OfferSelection, StartTransfer
from app.schemas.view import ActionResult, TabSelection
from app.util.edc_helpers import raise_for_result

router = APIRouter()


@router.get("", response_model=ConsumerViewResponse)
async def get_consumer_page(session: ConsoleSession = Depends(get_session)):
    """
    Render the consumer page.

    Returns:
        ConsumerViewResponse: Cards of the active tab, enabled actions and
        the pending notification.
    """

    return await session.consumer.render()


@router.post("/tab", response_model=ConsumerViewResponse)
async def select_tab(data: TabSelection, session: ConsoleSession = Depends(get_session)):
    """
    Switch the active tab (`catalog`, `negotiations` or `transfers`).

    Raises:
        HTTPException: 404 if the tab does not exist.
    """

    try:
        session.consumer.select_tab(data.tab)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return await session.consumer.render()


@router.post("/catalog_request", response_model=ActionResult)
async def catalog_request(session: ConsoleSession = Depends(get_session)):
    """
    Request the data catalog of the provider connector.

    Returns:
        ActionResult: The catalog document, as returned by the connector.

    Raises:
        HTTPException:
            - 502: If the consumer connector cannot be reached.
            - Connector status: If the catalog request fails.
    """

    return raise_for_result(await session.consumer.fetch_catalog())


@router.post("/selection", response_model=ConsumerViewResponse)
async def select_offer(data: OfferSelection, session: ConsoleSession = Depends(get_session)):
    """
    Select a dataset of the fetched catalog.

    Raises:
        HTTPException: 404 if the catalog has no such dataset.

    Example:
        >>> POST /consumer/selection
        {"dataset_id": "asset-42"}
    """

    try:
        session.consumer.select_offer(data.dataset_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return await session.consumer.render()


@router.delete("/selection", status_code=204)
async def clear_selection(session: ConsoleSession = Depends(get_session)):
    session.consumer.clear_selection()


@router.post("/negotiate_contract", response_model=ActionResult)
async def negotiate_contract(session: ConsoleSession = Depends(get_session)):
    """
    Negotiate a contract for the selected offer.

    Returns:
        ActionResult: Contract negotiation response from the consumer connector.

    Raises:
        HTTPException:
            - 400: If no offer is selected or the offer carries no policy.
            - 409: If a negotiation request is still in progress.
            - Connector status: If the connector rejects the request; the
              connector's message is used as detail when it has one.
    """

    return raise_for_result(await session.consumer.negotiate())


@router.post("/start_transfer", response_model=ActionResult)
async def start_transfer(data: StartTransfer, session: ConsoleSession = Depends(get_session)):
    """
    Start a data transfer from a finalized negotiation's agreement.

    Raises:
        HTTPException:
            - 400: If no finalized negotiation carries the agreement id.
            - 409: If a transfer start is still in progress.

    Example:
        >>> POST /consumer/start_transfer
        {"contract_agreement_id": "agreement-001"}
    """

    return raise_for_result(await session.consumer.start_transfer(data.contract_agreement_id, data.asset_id))
