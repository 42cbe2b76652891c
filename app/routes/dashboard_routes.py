"""
Dashboard routes.

Endpoints of the dashboard page: connector health and the on-demand
connectivity test of the management and protocol APIs.
"""

from fastapi import APIRouter, Depends

from app.db.client import ConsoleSession, get_session
from app.schemas.dashboard import ConnectorStatusReport, DashboardResponse

router = APIRouter()


@router.get("", response_model=DashboardResponse)
async def get_dashboard(session: ConsoleSession = Depends(get_session)):
    """
    Render the dashboard.

    Health results are cached for the configured refetch interval (30
    seconds by default); an unreachable connector is reported as unhealthy.

    Returns:
        DashboardResponse: Health cards, last connectivity report and quick start guide.
    """

    return await session.dashboard.render()


@router.post("/connector_status", response_model=ConnectorStatusReport)
async def test_connectivity(session: ConsoleSession = Depends(get_session)):
    """
    Test the connectivity of both connectors' APIs.

    Returns:
        ConnectorStatusReport: One flag per API, plus setup instructions when
        any API is offline.
    """

    return await session.dashboard.test_connectivity()
