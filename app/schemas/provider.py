"""
Provider page schemas.

View-model of the provider page: the tab bar, the listing of the active
tab, and the state of the inline creation form.
"""

from typing import List, Literal, Optional
from pydantic import BaseModel, Field

from app.schemas.view import Card, Notification, Tab

ProviderTab = Literal["assets", "policies", "contracts"]


class FormState(BaseModel):
    """State of the creation form of the active tab."""

    open: bool = False
    submitting: bool = False
    submit_enabled: bool = True
    options: dict = Field(default_factory=dict)
    """Choices offered by the form's select fields."""

    values: dict = Field(default_factory=dict)
    """Current draft values, when the form keeps a draft."""


class ProviderViewResponse(BaseModel):
    """
    Rendered provider page.

    Example:
        >>> page = ProviderViewResponse(active_tab="assets", tabs=[], description="...")
        >>> page.cards
        []
    """

    active_tab: ProviderTab
    tabs: List[Tab]
    description: str
    """Caption of the active tab."""

    loading: bool = False
    error: Optional[str] = None
    """Message of the last failed fetch of the active collection."""

    cards: List[Card] = Field(default_factory=list)
    form: FormState = Field(default_factory=FormState)
    notification: Optional[Notification] = None
