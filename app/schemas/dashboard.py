from typing import List, Optional
from pydantic import BaseModel, Field


class HealthStatus(BaseModel):
    is_healthy: bool


class StatusCard(BaseModel):
    title: str
    description: str
    healthy: Optional[bool] = None
    """None until the first health check has answered."""


class ConnectorStatusReport(BaseModel):
    """
    Result of the on-demand connectivity test.

    Each flag is None until the test has been run once.
    """

    provider_management: Optional[bool] = None
    consumer_management: Optional[bool] = None
    provider_protocol: Optional[bool] = None
    consumer_protocol: Optional[bool] = None
    testing: bool = False
    setup_instructions: List[str] = Field(default_factory=list)
    """Filled when at least one API is offline."""


class QuickStartStep(BaseModel):
    step: int
    title: str
    description: str


class DashboardResponse(BaseModel):
    status_cards: List[StatusCard]
    connector_status: ConnectorStatusReport
    quick_start: List[QuickStartStep]
