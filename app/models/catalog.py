"""
Catalog model definition.

A catalog is the DCAT document a provider connector publishes in answer
to a catalog request. It lists datasets; each dataset carries one or more
ODRL offers (`odrl:hasPolicy`) and the distributions the data can be
transferred through.

A dataset the console cannot read is left out of the catalog instead of
failing the whole document.
"""

import logging
from typing import Any, ClassVar, List, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from app.models.document import JsonLdDocument, Text
from app.util.edc_helpers import as_text, normalize_list

logger = logging.getLogger(__name__)


class Distribution(BaseModel):
    """A way a dataset can be transferred, e.g. `HttpData-PUSH`."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    format: Optional[Any] = Field(default=None, alias="dct:format")

    @property
    def format_id(self) -> Optional[str]:
        return as_text(self.format)


class ContractOffer(JsonLdDocument):
    """
    An offer attached to a dataset.

    Its `@id` is the policy reference the consumer negotiates against.
    """

    kind: ClassVar[str] = "offer"


class Dataset(JsonLdDocument):
    """
    Represents a dataset listed in a provider catalog.

    Example:
        >>> dataset = Dataset.model_validate({
        ...     "@id": "asset-42",
        ...     "name": "Orders",
        ...     "odrl:hasPolicy": {"@id": "offer-1", "@type": "odrl:Offer"},
        ...     "dcat:distribution": [{"dct:format": {"@id": "HttpData"}}],
        ... })
        >>> dataset.offer.id, dataset.formats
        ('offer-1', ['HttpData'])
    """

    kind: ClassVar[str] = "dataset"

    name: Text = None
    description: Text = None
    contenttype: Text = None

    has_policy: List[ContractOffer] = Field(default_factory=list, alias="odrl:hasPolicy")
    distribution: List[Distribution] = Field(default_factory=list, alias="dcat:distribution")

    @field_validator("has_policy", mode="before")
    @classmethod
    def as_offers(cls, v):
        # a bare string is a reference to the offer
        return [{"@id": item} if isinstance(item, str) else item for item in normalize_list(v)]

    @field_validator("distribution", mode="before")
    @classmethod
    def as_list(cls, v):
        return normalize_list(v)

    @property
    def label(self) -> str:
        return self.name or self.id or ""

    @property
    def offer(self) -> Optional[ContractOffer]:
        """First offer of the dataset, or None when the dataset carries no policy."""

        return self.has_policy[0] if self.has_policy else None

    @property
    def formats(self) -> List[str]:
        return [d.format_id for d in self.distribution if d.format_id]


class Catalog(JsonLdDocument):
    """
    Represents the catalog returned by a provider connector.

    Example:
        >>> catalog = Catalog.model_validate({"@id": "cat", "dcat:dataset": {"@id": "asset-42"}})
        >>> [d.id for d in catalog.datasets]
        ['asset-42']
    """

    kind: ClassVar[str] = "catalog"

    datasets: List[Dataset] = Field(default_factory=list, alias="dcat:dataset")

    @field_validator("datasets", mode="before")
    @classmethod
    def readable_datasets(cls, v):
        datasets = []
        for item in normalize_list(v):
            try:
                datasets.append(Dataset.model_validate(item))
            except ValidationError as e:
                logger.warning("Skipping unreadable catalog dataset: %s", e)
        return datasets
