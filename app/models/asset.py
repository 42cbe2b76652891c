"""
Asset model definition.

This module defines the `Asset` document used to represent assets
published by the provider connector. An asset is any data resource that
can be offered and transferred through the Eclipse Dataspace Connector
(EDC); its data address tells the connector where the bytes live.
"""

from typing import ClassVar
from pydantic import BaseModel, ConfigDict, Field

from app.models.document import JsonLdDocument, Text


class AssetProperties(BaseModel):
    """Descriptive properties of an asset."""

    model_config = ConfigDict(extra="allow")

    name: Text = None
    """Human-readable name of the asset."""

    description: Text = None

    contenttype: Text = None
    """MIME type of the asset (e.g., `application/json`)."""


class DataAddress(BaseModel):
    """Location of the asset's data."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: Text = None
    """Type of data address (e.g., `HttpData`, `S3`)."""

    base_url: Text = Field(default=None, alias="baseUrl")
    """Base URL where the asset is located."""


class Asset(JsonLdDocument):
    """
    Represents an asset registered in the provider connector.

    Example:
        >>> asset = Asset.model_validate({
        ...     "@id": "asset-001",
        ...     "properties": {"name": "Weather Dataset", "contenttype": "application/json"},
        ...     "dataAddress": {"type": "HttpData", "baseUrl": "https://data.server.com/weather"},
        ... })
        >>> asset.label
        'Weather Dataset'
    """

    kind: ClassVar[str] = "asset"

    properties: AssetProperties = Field(default_factory=AssetProperties)
    data_address: DataAddress = Field(default_factory=DataAddress, alias="dataAddress")

    @property
    def label(self) -> str:
        """Name of the asset, falling back to its id."""

        return self.properties.name or self.id or ""
