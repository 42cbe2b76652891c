"""
Asset form schema.

Fields of the provider's asset creation form and their client-side
validation. A blank asset id is replaced by a random UUID when the form
is turned into a connector payload.
"""

from typing import Literal, Optional
from pydantic import BaseModel, field_validator

from app.util.edc_helpers import new_asset_id

ContentType = Literal["application/json", "text/csv", "application/xml", "text/plain"]
DataAddressType = Literal["HttpData", "HttpProxy", "AzureStorage", "S3"]

CONTENT_TYPES = ["application/json", "text/csv", "application/xml", "text/plain"]
DATA_ADDRESS_TYPES = ["HttpData", "HttpProxy", "AzureStorage", "S3"]


class AssetForm(BaseModel):
    """
    Asset creation form.

    Example:
        >>> form = AssetForm(name="Product description", base_url="https://example.com/data/product.json")
        >>> form.to_payload()["dataAddress"]
        {'type': 'HttpData', 'baseUrl': 'https://example.com/data/product.json'}
    """

    id: Optional[str] = None
    """Asset identifier; left empty to auto-generate."""

    name: str
    description: str = ""
    content_type: ContentType = "application/json"
    data_type: DataAddressType = "HttpData"
    base_url: str

    @field_validator("name", "base_url")
    @classmethod
    def required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    def to_payload(self) -> dict:
        """Builds the asset document sent to the connector."""

        return {
            "@id": (self.id or "").strip() or new_asset_id(),
            "properties": {
                "name": self.name,
                "description": self.description,
                "contenttype": self.content_type,
            },
            "dataAddress": {
                "type": self.data_type,
                "baseUrl": self.base_url,
            },
        }
