"""
Contract definition model.

This module defines the `ContractDefinition` document, which binds an
access policy and a contract policy to a set of assets in the provider
connector. An empty assets selector selects every asset.
"""

from typing import Any, ClassVar, List
from pydantic import Field, field_validator

from app.models.document import JsonLdDocument, Text
from app.util.edc_helpers import normalize_list


class ContractDefinition(JsonLdDocument):
    """
    Represents a contract definition in the provider connector.

    Example:
        >>> contract = ContractDefinition.model_validate({
        ...     "@id": "contract-def-1",
        ...     "accessPolicyId": "policy-access-001",
        ...     "contractPolicyId": "policy-contract-001",
        ...     "assetsSelector": [],
        ... })
        >>> contract.selects_all_assets
        True
    """

    kind: ClassVar[str] = "contract"

    access_policy_id: Text = Field(default=None, alias="accessPolicyId")
    """Identifier of the access policy that regulates data access."""

    contract_policy_id: Text = Field(default=None, alias="contractPolicyId")
    """Identifier of the contract policy that defines usage conditions."""

    assets_selector: List[Any] = Field(default_factory=list, alias="assetsSelector")
    """Criteria selecting the assets covered by this definition."""

    @field_validator("assets_selector", mode="before")
    @classmethod
    def as_list(cls, v):
        return normalize_list(v)

    @property
    def selects_all_assets(self) -> bool:
        return not self.assets_selector
