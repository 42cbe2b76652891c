"""
Contract definition form schema.

The form is only submittable once both an access policy and a contract
policy have been picked from the provider's current policy list.
"""

from typing import Iterable, Optional
from pydantic import BaseModel

from app.util.edc_helpers import timestamped_id


class ContractDefinitionForm(BaseModel):
    """
    Contract definition creation form.

    Example:
        >>> form = ContractDefinitionForm(access_policy_id="p1", contract_policy_id="p2")
        >>> form.missing_fields(["p1", "p2"])
        []
    """

    access_policy_id: Optional[str] = None
    """Identifier of the policy regulating who can see the offer."""

    contract_policy_id: Optional[str] = None
    """Identifier of the policy governing the usage of the data."""

    def missing_fields(self, policy_ids: Iterable[str]) -> list[str]:
        """
        Lists the form fields that do not reference a known policy.

        Args:
            policy_ids (Iterable[str]): Ids of the policies currently listed.

        Returns:
            list[str]: Names of the fields blocking submission.
        """

        known = set(policy_ids)
        missing = []
        if not self.access_policy_id or self.access_policy_id not in known:
            missing.append("access_policy_id")
        if not self.contract_policy_id or self.contract_policy_id not in known:
            missing.append("contract_policy_id")
        return missing

    def to_payload(self) -> dict:
        return {
            "@id": timestamped_id("contract-def"),
            "accessPolicyId": self.access_policy_id,
            "contractPolicyId": self.contract_policy_id,
            # an empty selector covers every asset
            "assetsSelector": [],
        }
