"""
Contract negotiation model.

A contract negotiation is the stateful exchange between consumer and
provider that ends with a contract agreement. The state names are owned
by the connector; `FINALIZED` is the only state in which an agreement
exists and a transfer can be started.
"""

from enum import Enum
from typing import ClassVar
from pydantic import Field

from app.models.document import JsonLdDocument, Text


class NegotiationState(str, Enum):
    INITIAL = "INITIAL"
    REQUESTING = "REQUESTING"
    REQUESTED = "REQUESTED"
    OFFERING = "OFFERING"
    OFFERED = "OFFERED"
    ACCEPTING = "ACCEPTING"
    ACCEPTED = "ACCEPTED"
    AGREEING = "AGREEING"
    AGREED = "AGREED"
    VERIFYING = "VERIFYING"
    VERIFIED = "VERIFIED"
    FINALIZING = "FINALIZING"
    FINALIZED = "FINALIZED"
    TERMINATING = "TERMINATING"
    TERMINATED = "TERMINATED"


class ContractNegotiation(JsonLdDocument):
    """
    Represents a contract negotiation as reported by the consumer connector.

    Example:
        >>> negotiation = ContractNegotiation.model_validate({
        ...     "@id": "neg-1",
        ...     "state": "FINALIZED",
        ...     "contractAgreementId": "agreement-1",
        ... })
        >>> negotiation.is_finalized
        True
    """

    kind: ClassVar[str] = "negotiation"

    state: Text = None
    """Current state name, as reported by the connector."""

    type: Text = None
    """Side of the negotiation (`CONSUMER` or `PROVIDER`)."""

    protocol: Text = None
    counter_party_address: Text = Field(default=None, alias="counterPartyAddress")

    contract_agreement_id: Text = Field(default=None, alias="contractAgreementId")
    """Agreement identifier, present once the negotiation is finalized."""

    @property
    def is_finalized(self) -> bool:
        return self.state == NegotiationState.FINALIZED.value

    @property
    def is_terminated(self) -> bool:
        return self.state == NegotiationState.TERMINATED.value

    @property
    def can_start_transfer(self) -> bool:
        return self.is_finalized and bool(self.contract_agreement_id)


def is_finalized(raw: dict) -> bool:
    """True when a raw negotiation document is in the terminal-success state."""

    return raw.get("state") == NegotiationState.FINALIZED.value
