"""
Policy model definition.

This module defines the documents that represent policy definitions in
the Eclipse Dataspace Connector (EDC). Policies follow the ODRL (Open
Digital Rights Language) model and describe permissions, prohibitions,
and obligations that regulate how data can be used.

The connector returns the rule lists either unprefixed (`permission`) or
with the ODRL prefix (`odrl:permission`), and either as a single object
or as a list; both spellings and both shapes are accepted.
"""

from typing import Any, ClassVar, List
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from app.models.document import JsonLdDocument
from app.util.edc_helpers import ODRL_CONTEXT, as_text, normalize_list


class PolicyBody(BaseModel):
    """
    Defines the ODRL policy held by a policy definition.

    Example:
        >>> body = PolicyBody.model_validate({"@type": "odrl:Set", "odrl:permission": {"odrl:action": "use"}})
        >>> body.type, len(body.permission)
        ('Set', 1)
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: str = Field(default="Set", alias="@type")
    """Type of policy according to ODRL ('Set' by default)."""

    permission: List[Any] = Field(
        default_factory=list,
        validation_alias=AliasChoices("permission", "odrl:permission"),
    )
    """List of allowed actions under this policy."""

    prohibition: List[Any] = Field(
        default_factory=list,
        validation_alias=AliasChoices("prohibition", "odrl:prohibition"),
    )
    """List of forbidden actions under this policy."""

    obligation: List[Any] = Field(
        default_factory=list,
        validation_alias=AliasChoices("obligation", "odrl:obligation"),
    )
    """List of required actions under this policy."""

    @field_validator("type", mode="before")
    @classmethod
    def strip_prefix(cls, v):
        v = as_text(v)
        return v.replace("odrl:", "") if v else "Set"

    @field_validator("permission", "prohibition", "obligation", mode="before")
    @classmethod
    def as_list(cls, v):
        return normalize_list(v)

    @property
    def is_open(self) -> bool:
        """True when the policy carries no rule at all."""

        return not (self.permission or self.prohibition or self.obligation)


class Policy(JsonLdDocument):
    """
    Represents a policy definition registered in the provider connector.

    Example:
        >>> policy = Policy.model_validate({"@id": "policy-001", "policy": {"@type": "Set"}})
        >>> policy.policy.is_open
        True
    """

    kind: ClassVar[str] = "policy"

    policy: PolicyBody = Field(default_factory=PolicyBody)


def open_access_policy() -> dict:
    """
    Body of the open access policy: an ODRL `Set` without any rule.

    Returns:
        dict: Policy body ready to be wrapped in a policy definition.
    """

    return {
        "@context": ODRL_CONTEXT,
        "@type": "Set",
        "permission": [],
        "prohibition": [],
        "obligation": [],
    }
