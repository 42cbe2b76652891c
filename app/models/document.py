"""
JSON-LD document base model.

The connector is the system of record and returns loosely-typed JSON-LD
documents (`@id`/`@type` shaped objects). Each known entity kind gets its
own model derived from `JsonLdDocument`; fields not modeled yet are kept
as extra attributes, so a document survives a parse/dump round trip
unchanged. Anything of an unknown kind, or a document its model rejects,
is parsed into `UnknownDocument`.

Literal fields are typed `Text`: whatever the connector sends (a number,
a value object, a list of labels) is reduced to display text instead of
failing validation.
"""

from typing import Annotated, Any, ClassVar, List, Optional, Union
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from app.util.edc_helpers import as_text

Text = Annotated[Optional[str], BeforeValidator(as_text)]


class JsonLdDocument(BaseModel):
    """
    Common shape of every document exchanged with the connector.

    Example:
        >>> doc = JsonLdDocument.model_validate({"@id": "x", "@type": ["Asset"], "foo": 1})
        >>> doc.id, doc.ld_type, doc.model_extra["foo"]
        ('x', ['Asset'], 1)
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    kind: ClassVar[str] = "unknown"
    """Tag of the document variant."""

    id: Text = Field(default=None, alias="@id")
    """Identifier of the document in the connector."""

    ld_type: Optional[Union[str, List[str]]] = Field(default=None, alias="@type")
    """JSON-LD type of the document, a single term or a list of terms."""

    context: Optional[Any] = Field(default=None, alias="@context")
    """JSON-LD context, when the connector echoes it."""

    def to_jsonld(self) -> dict:
        """Dumps the document back to its wire shape."""

        return self.model_dump(by_alias=True, exclude_none=True)


class UnknownDocument(JsonLdDocument):
    """Pass-through variant for documents the console does not model."""

    kind: ClassVar[str] = "unknown"

    ld_type: Optional[Any] = Field(default=None, alias="@type")
