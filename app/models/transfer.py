"""
Transfer process model.

This module defines the `TransferProcess` document that represents a data
transfer started by the consumer connector on the basis of a contract
agreement.
"""

from typing import ClassVar
from pydantic import Field

from app.models.document import JsonLdDocument, Text


class TransferProcess(JsonLdDocument):
    """
    Represents a transfer process in the consumer connector.

    Example:
        >>> transfer = TransferProcess.model_validate({"@id": "tp-1", "state": "STARTED"})
        >>> transfer.state
        'STARTED'
    """

    kind: ClassVar[str] = "transfer"

    state: Text = None
    type: Text = None
    contract_id: Text = Field(default=None, alias="contractId")
    asset_id: Text = Field(default=None, alias="assetId")
    transfer_type: Text = Field(default=None, alias="transferType")
