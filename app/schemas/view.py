"""
View schemas.

Building blocks of the view-models the console pages are rendered from:
tabs, cards, transient notifications and the result of a user action.

Schemas:
    - Notification: Transient message shown after a user action.
    - ActionResult: Outcome of a user action (create, negotiate, transfer...).
    - Tab: One entry of a page's tab bar.
    - Card: One item of a listed collection.
    - TabSelection: Request body to switch the active tab.
"""

from typing import Any, List, Literal, Optional
from pydantic import BaseModel, Field


class Notification(BaseModel):
    """
    A transient message, the equivalent of a toast.

    Example:
        >>> Notification(level="success", message="Asset created successfully!")
        Notification(level='success', message='Asset created successfully!')
    """

    level: Literal["success", "error", "info"]
    message: str


class ActionResult(BaseModel):
    """
    Outcome of a user action.

    Failed actions never raise out of a view; they come back as a result
    with `ok=False`, a notification and the status code describing the
    failure (400 validation, remote status, 502 transport, 409 duplicate).
    """

    ok: bool
    """Whether the action succeeded."""

    status_code: int = 200
    """HTTP-style status describing the outcome."""

    notification: Notification
    """Message to surface to the operator."""

    data: Optional[Any] = None
    """Raw connector response, for successful remote calls."""

    @classmethod
    def success(cls, message: str, data: Any = None) -> "ActionResult":
        return cls(ok=True, notification=Notification(level="success", message=message), data=data)

    @classmethod
    def failure(cls, message: str, status_code: int) -> "ActionResult":
        return cls(ok=False, status_code=status_code, notification=Notification(level="error", message=message))

    @classmethod
    def ignored(cls, message: str) -> "ActionResult":
        return cls(ok=False, status_code=409, notification=Notification(level="info", message=message))


class Tab(BaseModel):
    id: str
    name: str
    active: bool = False
    count: Optional[int] = None


class Card(BaseModel):
    """
    One item of a listed collection.

    Example:
        >>> Card(id="asset-42", title="Orders", badges=["HttpData"]).selected
        False
    """

    id: str
    title: str
    subtitle: Optional[str] = None
    description: Optional[str] = None
    badges: List[str] = Field(default_factory=list)
    status: Optional[str] = None
    """Badge colour of the card's state (`green`, `red`, `yellow`)."""

    selected: bool = False
    actions: List[str] = Field(default_factory=list)
    """Actions currently enabled on the card."""


class TabSelection(BaseModel):
    tab: str
