"""
EDC helpers.

Utility functions shared by the remote client and the views to compose
Management API URLs, wrap payloads in the connector's JSON-LD context and
read the loosely-shaped documents the connector returns.

Responsibilities:
    - Compose management URLs for the provider and consumer sides.
    - Prefix request bodies with the fixed `@context` vocabulary.
    - Normalize single-object-or-list JSON-LD values and literals.
    - Extract a human-readable message from a remote error.
"""

import time
import uuid
from typing import Any, Optional

import httpx
from fastapi import HTTPException

from app.core.config import Settings

EDC_VOCAB = "https://w3id.org/edc/v0.0.1/ns/"
EDC_CONTEXT = {"@vocab": EDC_VOCAB}

NEGOTIATION_CONTEXT = {
    "@vocab": EDC_VOCAB,
    "dct": "https://purl.org/dc/terms/",
    "dcat": "https://www.w3.org/ns/dcat/",
    "odrl": "http://www.w3.org/ns/odrl/2/",
    "dspace": "https://w3id.org/dspace/v0.8/",
}

ODRL_CONTEXT = "http://www.w3.org/ns/odrl.jsonld"

PROVIDER = "provider"
CONSUMER = "consumer"


def get_base_url(settings: Settings, side: str, path: str) -> str:
    """
    Builds the Management API URL for one side of the dataspace.

    The browser-facing prefixes `/api/provider` and `/api/consumer` map to
    the configured management bases, so `get_base_url(settings, "provider",
    "/assets")` is the target of `/api/provider/assets`.

    Args:
        settings (Settings): Console configuration.
        side (str): Either `provider` or `consumer`.
        path (str): Path to append (e.g., "/assets/request").

    Raises:
        ValueError: If the side is unknown.

    Returns:
        str: Fully qualified URL to call the EDC Management API.
    """

    if side == PROVIDER:
        base = settings.provider_management_url
    elif side == CONSUMER:
        base = settings.consumer_management_url
    else:
        raise ValueError(f"Invalid connector side: {side}")
    return f"{base.rstrip('/')}{path}"


def with_context(payload: dict, context: Any = None) -> dict:
    """
    Returns a copy of `payload` with the JSON-LD `@context` placed first.

    Args:
        payload (dict): Request body without context.
        context (Any): Context to use instead of the default EDC vocabulary.

    Returns:
        dict: Body ready to be posted to the connector.
    """

    framed = {"@context": context if context is not None else dict(EDC_CONTEXT)}
    framed.update({key: value for key, value in payload.items() if key != "@context"})
    return framed


def new_asset_id() -> str:
    return str(uuid.uuid4())


def timestamped_id(prefix: str) -> str:
    """Builds `<prefix>-<epoch millis>`, the id scheme used for policies and contract definitions."""

    return f"{prefix}-{int(time.time() * 1000)}"


def normalize_list(value) -> list:
    """
    Ensures that a JSON-LD property is always returned as a list.

    Args:
        value (Any): Raw property (dict, list, or None).

    Returns:
        list: A normalized list of elements or an empty list.
    """

    if isinstance(value, list):
        return value
    if value is None:
        return []
    return [value]


def as_text(value) -> Optional[str]:
    """
    Reduces a JSON-LD literal to display text.

    Value objects (`{"@value": ...}`) and references (`{"@id": ...}`) are
    unwrapped, lists are joined with commas and any other scalar is turned
    into its string form.

    Args:
        value (Any): Raw literal as returned by the connector.

    Returns:
        Optional[str]: The text, or None for a missing or empty value.
    """

    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        if "@value" in value:
            return as_text(value["@value"])
        if "@id" in value:
            return as_text(value["@id"])
        return str(value)
    if isinstance(value, list):
        parts = [text for text in (as_text(item) for item in value) if text]
        return ", ".join(parts) if parts else None
    return str(value)


def extract_error_message(exc: httpx.HTTPStatusError, fallback: str) -> str:
    """
    Picks the message out of a connector error response.

    The connector answers errors either with an object carrying `message`
    or with a list of such objects.

    Args:
        exc (httpx.HTTPStatusError): Error raised by `raise_for_status()`.
        fallback (str): Text used when no message can be found.

    Returns:
        str: The remote message, verbatim, or the fallback.
    """

    try:
        body = exc.response.json()
    except ValueError:
        return fallback

    if isinstance(body, list) and body:
        body = body[0]
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
    return fallback


def raise_for_result(result):
    """
    Turns a failed action result into an `HTTPException`.

    Args:
        result (ActionResult): Outcome of a view action.

    Raises:
        HTTPException: With the result's status code and notification text
            as detail, if the action failed.

    Returns:
        ActionResult: The result itself, if the action succeeded.
    """

    if not result.ok:
        raise HTTPException(status_code=result.status_code, detail=result.notification.message)
    return result
