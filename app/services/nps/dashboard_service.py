"""
Dashboard summary for Helena NPS data.

Everything is recomputed on every request: contacts are fetched for the
requested window, then reduced to the average score, a 1-5 histogram and
the low-score list paginated 20 at a time.
"""

import math
from collections.abc import Sequence

from app.infrastructure.observability.logging import get_logger
from app.models.api.dashboard_response import (
    DashboardResponse,
    LowNpsContactResponse,
    LowNpsPage,
    NpsScoreCount,
)
from app.models.domain.nps_domain import NPS_BUCKETS, NpsContact
from app.services.helena.client import HelenaContactsClient
from app.services.nps.aggregator import fetch_all_contacts

logger = get_logger(__name__)

LOW_NPS_PAGE_SIZE = 20


def average_nps(contacts: Sequence[NpsContact]) -> float | None:
    if not contacts:
        return None
    return sum(contact.nps_value or 0 for contact in contacts) / len(contacts)


def nps_histogram(contacts: Sequence[NpsContact]) -> list[NpsScoreCount]:
    """Count contacts per integer score; scores outside 1-5 are not counted."""
    counts = dict.fromkeys(NPS_BUCKETS, 0)
    for contact in contacts:
        score = contact.histogram_score()
        if score is not None:
            counts[score] += 1
    return [NpsScoreCount(score=score, count=count) for score, count in counts.items()]


def paginate(total_items: int, page: int, page_size: int = LOW_NPS_PAGE_SIZE) -> tuple[int, int, int]:
    """
    Clamp ``page`` and compute the slice bounds.

    Returns:
        (current_page, total_pages, start_index); total_pages is at least 1
    """
    total_pages = max(1, math.ceil(total_items / page_size))
    current_page = min(max(page, 1), total_pages)
    return current_page, total_pages, (current_page - 1) * page_size


def summarize_contacts(
    contacts: Sequence[NpsContact],
    page: int = 1,
    start_date: str | None = None,
    end_date: str | None = None,
) -> DashboardResponse:
    """Reduce aggregated contacts to the dashboard payload."""
    low_nps_items = [
        LowNpsContactResponse(**contact.to_low_nps_item()) for contact in contacts if contact.is_low_nps()
    ]

    current_page, total_pages, start_index = paginate(len(low_nps_items), page)
    page_items = low_nps_items[start_index : start_index + LOW_NPS_PAGE_SIZE]

    return DashboardResponse(
        average_nps=average_nps(contacts),
        total_contacts=len(contacts),
        start_date=start_date,
        end_date=end_date,
        nps_summary=nps_histogram(contacts),
        low_nps=LowNpsPage(
            page=current_page,
            page_size=LOW_NPS_PAGE_SIZE,
            total_items=len(low_nps_items),
            total_pages=total_pages,
            items=page_items,
        ),
        low_nps_all_items=low_nps_items,
    )


async def generate_dashboard(
    client: HelenaContactsClient,
    start_date: str | None = None,
    end_date: str | None = None,
    page: int = 1,
) -> DashboardResponse:
    """
    Build the dashboard payload for an optional date window.

    Errors from any bucket or page propagate unchanged; no partial payload
    is ever produced.
    """
    logger.info("Dashboard generation started", start_date=start_date, end_date=end_date, page=page)

    contacts = await fetch_all_contacts(client, start_date, end_date)
    dashboard = summarize_contacts(contacts, page, start_date, end_date)

    logger.info(
        "Dashboard result",
        start_date=start_date,
        end_date=end_date,
        total_contacts=dashboard.total_contacts,
        average_nps=dashboard.average_nps,
        total_low_nps=dashboard.low_nps.total_items,
        page=dashboard.low_nps.page,
        page_size=dashboard.low_nps.page_size,
        page_items=len(dashboard.low_nps.items),
        nps_summary=[entry.model_dump() for entry in dashboard.nps_summary],
    )
    return dashboard
