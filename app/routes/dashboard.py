"""
Dashboard API Routes
Single endpoint producing the NPS dashboard payload for the web UI.
"""

import re

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from app.infrastructure.observability.logging import get_logger
from app.models.api.dashboard_response import DashboardErrorResponse, DashboardResponse
from app.services.helena.client import HelenaContactsClient
from app.services.nps.dashboard_service import generate_dashboard

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["dashboard"])

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def get_helena_client(request: Request) -> HelenaContactsClient:
    """Shared Helena client created in the application lifespan."""
    return request.app.state.helena_client


def parse_page(raw: str | None) -> int:
    """Leading integer of ``raw``; missing, unparsable or zero means page 1."""
    if not raw:
        return 1
    match = _LEADING_INT.match(raw)
    if not match:
        return 1
    return int(match.group(1)) or 1


@router.get(
    "/dashboard",
    response_model=DashboardResponse,
    responses={500: {"model": DashboardErrorResponse}},
)
async def get_dashboard(
    client: HelenaContactsClient = Depends(get_helena_client),
    start_date: str | None = Query(default=None, alias="startDate", description="First day (YYYY-MM-DD)"),
    end_date: str | None = Query(default=None, alias="endDate", description="Last day (YYYY-MM-DD)"),
    page: str | None = Query(default=None, description="Low-NPS page, defaults to 1"),
):
    """Aggregate Helena NPS contacts for the optional date window."""
    start_date = start_date or None
    end_date = end_date or None
    page_number = parse_page(page)

    try:
        return await generate_dashboard(client, start_date, end_date, page_number)
    except Exception as e:
        logger.error(
            "Dashboard error",
            start_date=start_date,
            end_date=end_date,
            page=page_number,
            message=str(e),
            error_type=type(e).__name__,
        )
        return JSONResponse(
            status_code=500,
            content=DashboardErrorResponse(message=str(e)).model_dump(),
        )
