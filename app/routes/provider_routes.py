"""
Provider routes.

This module defines the API endpoints of the provider page: rendering the
page, switching tabs, opening and closing the inline forms, and creating
assets, policies and contract definitions in the provider connector.

All endpoints act on the provider view of the console session
(`app.views.provider`).
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException

from app.db.client import ConsoleSession, get_session
from app.schemas.contract import ContractDefinitionForm
from app.schemas.provider import ProviderViewResponse
from app.schemas.view import ActionResult, TabSelection
from app.util.edc_helpers import raise_for_result

router = APIRouter()


@router.get("", response_model=ProviderViewResponse)
async def get_provider_page(session: ConsoleSession = Depends(get_session)):
    """
    Render the provider page.

    Returns:
        ProviderViewResponse: Tabs with collection counts, cards of the active
        tab, state of its form and the pending notification.
    """

    return await session.provider.render()


@router.post("/tab", response_model=ProviderViewResponse)
async def select_tab(data: TabSelection, session: ConsoleSession = Depends(get_session)):
    """
    Switch the active tab (`assets`, `policies` or `contracts`).

    Raises:
        HTTPException: 404 if the tab does not exist.
    """

    try:
        session.provider.select_tab(data.tab)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return await session.provider.render()


@router.post("/forms/{tab}/open", status_code=204)
async def open_form(tab: str, session: ConsoleSession = Depends(get_session)):
    try:
        session.provider.open_form(tab)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/forms/{tab}/close", status_code=204)
async def close_form(tab: str, session: ConsoleSession = Depends(get_session)):
    try:
        session.provider.close_form(tab)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/assets", response_model=ActionResult)
async def create_asset(data: dict = Body(...), session: ConsoleSession = Depends(get_session)):
    """
    Create an asset from the asset form.

    Args:
        data (dict): Form values (`id`, `name`, `description`, `content_type`,
            `data_type`, `base_url`).

    Returns:
        ActionResult: Success notification and the connector's response.

    Raises:
        HTTPException:
            - 400: If the name or base URL is missing.
            - 409: If a previous creation is still in progress.
            - 502: If the connector cannot be reached.
            - Connector status: If the connector rejects the asset.

    Example:
        >>> POST /provider/assets
        {
            "name": "Product description",
            "base_url": "https://example.com/data/product.json"
        }
    """

    return raise_for_result(await session.provider.submit_asset(data))


@router.post("/policies", response_model=ActionResult)
async def create_policy(data: Optional[dict] = Body(default=None), session: ConsoleSession = Depends(get_session)):
    """
    Create an open access policy.

    Example:
        >>> POST /provider/policies
        {"policy_type": "open"}
    """

    return raise_for_result(await session.provider.submit_policy(data))


@router.patch("/contract_definitions/form", response_model=ContractDefinitionForm)
async def update_contract_form(data: ContractDefinitionForm, session: ConsoleSession = Depends(get_session)):
    """
    Update the draft of the contract definition form.

    Only the fields present in the body are changed; a field sent as null
    clears the chosen policy.

    Example:
        >>> PATCH /provider/contract_definitions/form
        {"access_policy_id": null}
    """

    return session.provider.update_contract_form(**data.model_dump(exclude_unset=True))


@router.post("/contract_definitions", response_model=ActionResult)
async def create_contract_definition(data: Optional[dict] = Body(default=None), session: ConsoleSession = Depends(get_session)):
    """
    Create a contract definition from the given form, or from the draft.

    Raises:
        HTTPException:
            - 400: If either policy id is not part of the current policy list.
            - 409: If a previous creation is still in progress.

    Example:
        >>> POST /provider/contract_definitions
        {
            "access_policy_id": "policy-1718000000000",
            "contract_policy_id": "policy-1718000000000"
        }
    """

    return raise_for_result(await session.provider.submit_contract_definition(data))
