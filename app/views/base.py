"""
View base class.

Every page of the console is a view: an object owning its local UI state
(active tab, open forms, selection) and turning operator actions into
calls on the EDC client. This module holds what the pages share:

    - The mutation pattern: guard against a second submission while the
      same action is in flight, call the connector, invalidate the
      affected cache keys on success, and turn any failure into a
      notification instead of an exception.
    - Tolerant collection loading through the query cache.
"""

import logging
from typing import Any, Awaitable, Callable, Iterable, Optional, Tuple

import httpx
from pydantic import ValidationError

from app.core.config import Settings
from app.db.cache import QueryCache
from app.models.document import JsonLdDocument
from app.schemas.view import ActionResult, Card, Notification
from app.services.edc_client import EdcClient
from app.util.edc_helpers import extract_error_message

logger = logging.getLogger(__name__)


class BaseView:
    """
    State and helpers shared by the console pages.

    Args:
        client (EdcClient): Client of the connector APIs.
        cache (QueryCache): Cache shared by every page of the session.
        settings (Settings): Console configuration.
    """

    def __init__(self, client: EdcClient, cache: QueryCache, settings: Settings):
        self.client = client
        self.cache = cache
        self.settings = settings
        self.notification: Optional[Notification] = None
        self._pending: set = set()

    def is_pending(self, action: str) -> bool:
        return action in self._pending

    def take_notification(self) -> Optional[Notification]:
        """Returns the pending notification and clears it; notifications are shown once."""

        notification, self.notification = self.notification, None
        return notification

    @staticmethod
    def _unknown_card(document: JsonLdDocument) -> Card:
        """Card of a document the console cannot read: its id only."""

        return Card(id=document.id or "", title=document.id or "", subtitle=f"ID: {document.id}")

    def _reject(self, message: str, status_code: int = 400) -> ActionResult:
        result = ActionResult.failure(message, status_code)
        self.notification = result.notification
        return result

    def _reject_invalid(self, error: ValidationError) -> ActionResult:
        fields = sorted({str(err["loc"][0]) for err in error.errors() if err.get("loc")})
        return self._reject(f"Missing or invalid fields: {', '.join(fields)}")

    async def _mutate(
        self,
        action: str,
        call: Callable[[], Awaitable[Any]],
        *,
        invalidate: Iterable[str] = (),
        success: str,
        failure: str,
    ) -> ActionResult:
        """
        Runs a remote mutation on behalf of the operator.

        Args:
            action (str): Name of the action; at most one call per name is in flight.
            call (Callable): Coroutine function performing the remote call.
            invalidate (Iterable[str]): Cache keys to invalidate on success.
            success (str): Notification text on success.
            failure (str): Notification text when the connector gives no message.

        Returns:
            ActionResult: Outcome of the action. The remote status code is kept
            for connector errors; transport failures are reported as 502 and a
            duplicate submission as 409 without any remote call.
        """

        if action in self._pending:
            return ActionResult.ignored(f"{failure}: a previous request is still in progress")

        self._pending.add(action)
        try:
            data = await call()
        except httpx.HTTPStatusError as e:
            logger.warning("%s rejected by EDC (%s): %s", action, e.response.status_code, e.response.text)
            result = ActionResult.failure(extract_error_message(e, failure), e.response.status_code)
        except httpx.RequestError as e:
            logger.warning("%s failed: %r", action, e)
            result = ActionResult.failure(failure, 502)
        else:
            for key in invalidate:
                self.cache.invalidate(key)
            result = ActionResult.success(success, data)
        finally:
            self._pending.discard(action)

        self.notification = result.notification
        return result

    async def _load(
        self,
        key: str,
        fetcher: Callable[[], Awaitable[Any]],
        refetch_interval: Optional[float] = None,
    ) -> Tuple[Any, Optional[str]]:
        """
        Reads a collection through the cache without raising.

        Args:
            key (str): Collection key.
            fetcher (Callable): Coroutine function performing the remote read.
            refetch_interval (float, optional): Maximum age of the cached
                collection; defaults to the configured collection interval
                (0 by default: every render reads the connector again).

        Returns:
            tuple: The collection (the last known value when the read failed)
            and the error message of the failed read, or None.
        """

        if refetch_interval is None:
            refetch_interval = self.settings.collection_refetch_interval

        try:
            return await self.cache.fetch(key, fetcher, refetch_interval), None
        except httpx.HTTPStatusError as e:
            logger.warning("Loading %s failed (%s)", key, e.response.status_code)
            return self.cache.peek(key), extract_error_message(e, f"Failed to load {key}")
        except httpx.RequestError as e:
            logger.warning("Loading %s failed: %r", key, e)
            return self.cache.peek(key), f"Failed to load {key}"
