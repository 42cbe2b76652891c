"""
Document parsing.

Maps a document kind to its model so that raw connector responses can be
turned into typed documents. Kinds without a model, and documents
that fail their model, fall back to the pass-through `UnknownDocument`.
"""

import logging

from pydantic import ValidationError

from app.models.asset import Asset
from app.models.catalog import Catalog, ContractOffer, Dataset
from app.models.contract import ContractDefinition
from app.models.document import JsonLdDocument, UnknownDocument
from app.models.negotiation import ContractNegotiation
from app.models.policy import Policy
from app.models.transfer import TransferProcess

logger = logging.getLogger(__name__)

DOCUMENT_MODELS = {
    model.kind: model
    for model in (Asset, Policy, ContractDefinition, Catalog, Dataset, ContractOffer,
                  ContractNegotiation, TransferProcess)
}


def parse_document(kind: str, raw: dict) -> JsonLdDocument:
    """
    Parses a raw connector document into the model of its kind.

    Args:
        kind (str): Document kind (`asset`, `policy`, `contract`, ...).
        raw (dict): Document as returned by the connector.

    Returns:
        JsonLdDocument: Typed model, or `UnknownDocument` for an unknown kind
        or a document its model rejects.
    """

    model = DOCUMENT_MODELS.get(kind, UnknownDocument)
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        logger.warning("Unreadable %s document %s: %s", kind, raw.get("@id"), e)
        return UnknownDocument.model_validate(raw)


def parse_documents(kind: str, raw) -> list:
    """Parses a connector list response; anything that is not a list yields no document."""

    if not isinstance(raw, list):
        return []
    return [parse_document(kind, item) for item in raw if isinstance(item, dict)]
