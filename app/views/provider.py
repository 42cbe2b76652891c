"""
Provider page.

Three tabs (Assets, Policies, Contract Definitions) following the same
pattern: list the cached collection, open an inline creation form, submit
it to the provider connector, close the form and invalidate the
collection on success, or surface a notification on failure.
"""

import asyncio
import logging
from typing import Union

from pydantic import ValidationError

from app.db.cache import ASSETS, CONTRACT_DEFINITIONS, POLICIES
from app.models.parsing import parse_documents
from app.schemas.asset import CONTENT_TYPES, DATA_ADDRESS_TYPES, AssetForm
from app.schemas.contract import ContractDefinitionForm
from app.schemas.policy import PolicyForm
from app.schemas.provider import FormState, ProviderViewResponse
from app.schemas.view import ActionResult, Card, Tab
from app.views.base import BaseView

logger = logging.getLogger(__name__)

TABS = {
    "assets": ("Assets", "Data assets that can be shared through the dataspace."),
    "policies": ("Policies", "Define access rules and constraints for your assets."),
    "contracts": ("Contract Definitions", "Link policies to assets to create contract offers."),
}

CREATE_ACTIONS = {
    "assets": "create_asset",
    "policies": "create_policy",
    "contracts": "create_contract_definition",
}


class ProviderView(BaseView):
    """
    Provider page state: active tab, open forms and the contract definition draft.

    Example:
        >>> view = ProviderView(client, cache, settings)
        >>> result = await view.submit_asset({"name": "Orders", "base_url": "https://example.com/orders"})
        >>> result.notification.message
        'Asset created successfully!'
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.active_tab = "assets"
        self.open_forms: set = set()
        self.contract_form = ContractDefinitionForm()

    # --------------------------------------------------------------------------
    # Local state
    # --------------------------------------------------------------------------

    def select_tab(self, tab: str) -> None:
        if tab not in TABS:
            raise ValueError(f"Unknown provider tab: {tab}")
        self.active_tab = tab

    def open_form(self, tab: str) -> None:
        if tab not in TABS:
            raise ValueError(f"Unknown provider tab: {tab}")
        self.open_forms.add(tab)

    def close_form(self, tab: str) -> None:
        if tab not in TABS:
            raise ValueError(f"Unknown provider tab: {tab}")
        self.open_forms.discard(tab)
        if tab == "contracts":
            self.contract_form = ContractDefinitionForm()

    def update_contract_form(self, **changes) -> ContractDefinitionForm:
        """
        Updates the fields of the contract definition draft that are given.

        A field given as None is cleared; fields not given are left unchanged.
        """

        self.contract_form = ContractDefinitionForm.model_validate({**self.contract_form.model_dump(), **changes})
        return self.contract_form

    # --------------------------------------------------------------------------
    # Actions
    # --------------------------------------------------------------------------

    async def submit_asset(self, data: Union[AssetForm, dict]) -> ActionResult:
        """
        Creates an asset from the asset form.

        An empty name or base URL is rejected without any remote call.
        """

        try:
            form = data if isinstance(data, AssetForm) else AssetForm.model_validate(data)
        except ValidationError as e:
            return self._reject_invalid(e)

        result = await self._mutate(
            "create_asset",
            lambda: self.client.create_asset(form.to_payload()),
            invalidate=[ASSETS],
            success="Asset created successfully!",
            failure="Failed to create asset",
        )
        if result.ok:
            self.open_forms.discard("assets")
        return result

    async def submit_policy(self, data: Union[PolicyForm, dict, None] = None) -> ActionResult:
        try:
            form = data if isinstance(data, PolicyForm) else PolicyForm.model_validate(data or {})
        except ValidationError as e:
            return self._reject_invalid(e)

        result = await self._mutate(
            "create_policy",
            lambda: self.client.create_policy(form.to_payload()),
            invalidate=[POLICIES],
            success="Policy created successfully!",
            failure="Failed to create policy",
        )
        if result.ok:
            self.open_forms.discard("policies")
        return result

    async def submit_contract_definition(self, data: Union[ContractDefinitionForm, dict, None] = None) -> ActionResult:
        """
        Creates a contract definition linking two policies of the current list.

        Args:
            data: Form to submit; the view's draft is used when omitted.

        Returns:
            ActionResult: Rejected with 400, without remote call, unless both
            policy ids belong to the current policy list.
        """

        try:
            if data is None:
                form = self.contract_form
            elif isinstance(data, ContractDefinitionForm):
                form = data
            else:
                form = ContractDefinitionForm.model_validate(data)
        except ValidationError as e:
            return self._reject_invalid(e)

        if form.missing_fields(await self._policy_ids()):
            return self._reject("Select an access policy and a contract policy")

        result = await self._mutate(
            "create_contract_definition",
            lambda: self.client.create_contract_definition(form.to_payload()),
            invalidate=[CONTRACT_DEFINITIONS],
            success="Contract definition created successfully!",
            failure="Failed to create contract definition",
        )
        if result.ok:
            self.close_form("contracts")
        return result

    async def _policy_ids(self) -> list:
        policies, _ = await self._load(POLICIES, self.client.get_policies)
        return [p.id for p in parse_documents("policy", policies) if p.id]

    # --------------------------------------------------------------------------
    # Rendering
    # --------------------------------------------------------------------------

    async def render(self) -> ProviderViewResponse:
        (assets, assets_error), (policies, policies_error), (contracts, contracts_error) = await asyncio.gather(
            self._load(ASSETS, self.client.get_assets),
            self._load(POLICIES, self.client.get_policies),
            self._load(CONTRACT_DEFINITIONS, self.client.get_contract_definitions),
        )

        documents = {
            "assets": (parse_documents("asset", assets), assets_error, assets),
            "policies": (parse_documents("policy", policies), policies_error, policies),
            "contracts": (parse_documents("contract", contracts), contracts_error, contracts),
        }

        tabs = [
            Tab(id=tab_id, name=name, active=tab_id == self.active_tab, count=len(documents[tab_id][0]))
            for tab_id, (name, _) in TABS.items()
        ]

        items, error, raw = documents[self.active_tab]
        policy_ids = [p.id for p in documents["policies"][0] if p.id]

        return ProviderViewResponse(
            active_tab=self.active_tab,
            tabs=tabs,
            description=TABS[self.active_tab][1],
            loading=raw is None and error is None,
            error=error,
            cards=[self._card(item) for item in items],
            form=self._form_state(policy_ids),
            notification=self.take_notification(),
        )

    def _card(self, item) -> Card:
        if item.kind == "asset":
            return Card(
                id=item.id or "",
                title=item.label,
                subtitle=f"ID: {item.id}",
                description=item.properties.description or None,
                badges=[item.properties.contenttype] if item.properties.contenttype else [],
            )
        if item.kind == "policy":
            return Card(
                id=item.id or "",
                title=item.id or "",
                subtitle=f"ID: {item.id}",
                badges=["Open Access Policy" if item.policy.is_open else "Custom Policy"],
            )
        if item.kind == "contract":
            return Card(
                id=item.id or "",
                title=item.id or "",
                subtitle=f"ID: {item.id}",
                description=f"Access policy: {item.access_policy_id} / Contract policy: {item.contract_policy_id}",
                badges=["Contract Definition"],
            )
        return self._unknown_card(item)

    def _form_state(self, policy_ids: list) -> FormState:
        tab = self.active_tab
        submitting = self.is_pending(CREATE_ACTIONS[tab])
        state = FormState(open=tab in self.open_forms, submitting=submitting, submit_enabled=not submitting)

        if tab == "assets":
            state.options = {"content_type": CONTENT_TYPES, "data_type": DATA_ADDRESS_TYPES}
        elif tab == "policies":
            state.options = {"policy_type": ["open", "custom"]}
        else:
            state.options = {"access_policy_id": policy_ids, "contract_policy_id": policy_ids}
            state.values = self.contract_form.model_dump()
            state.submit_enabled = not submitting and not self.contract_form.missing_fields(policy_ids)
        return state
