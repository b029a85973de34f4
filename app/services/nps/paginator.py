"""
Fetch every Helena contact in one NPS bucket.

Pages are pulled one at a time starting at page 1 and the loop stops as soon
as Helena reports no more pages. totalPages is logged but never trusted for
termination.
"""

from collections.abc import AsyncIterator
from typing import Any

from app.infrastructure.observability.logging import get_logger
from app.models.domain.nps_domain import PageEnvelope, contact_updated_at
from app.services.helena.client import HelenaAPIError, HelenaContactsClient
from app.services.nps.date_range import DateWindow
from app.services.nps.errors import ConfigurationError, UpstreamRequestError

logger = get_logger(__name__)


async def iter_bucket_pages(
    client: HelenaContactsClient,
    nps_value: int,
    start_date: str | None = None,
    end_date: str | None = None,
) -> AsyncIterator[tuple[int, PageEnvelope]]:
    """Yield ``(page_number, envelope)`` until Helena reports no more pages."""
    page_number = 1
    has_more_pages = True

    while has_more_pages:
        logger.info(
            "Helena request",
            nps_value=nps_value,
            page_number=page_number,
            page_size=client.page_size,
            start_date=start_date,
            end_date=end_date,
        )

        try:
            envelope = await client.fetch_page(nps_value, page_number)
        except HelenaAPIError as e:
            logger.error(
                "Helena request failed",
                nps_value=nps_value,
                page_number=page_number,
                message=str(e),
                status=e.status_code,
                data=e.response_data,
            )
            raise UpstreamRequestError(
                nps_value,
                page_number,
                status_code=e.status_code,
                response_body=e.response_data,
            ) from e

        logger.info(
            "Helena response",
            nps_value=nps_value,
            page_number=page_number,
            items_count=len(envelope.items),
            total_items=envelope.total_items,
            total_pages=envelope.total_pages,
            has_more_pages=envelope.has_more_pages,
        )

        yield page_number, envelope

        has_more_pages = envelope.has_more_pages
        page_number += 1


async def fetch_contacts_by_nps(
    client: HelenaContactsClient,
    nps_value: int,
    start_date: str | None = None,
    end_date: str | None = None,
) -> list[dict[str, Any]]:
    """
    Collect all contacts of one bucket whose update timestamp is in the window.

    Contacts without any update timestamp are always dropped. On failure the
    pages already collected for this bucket are discarded.

    Raises:
        ConfigurationError: If the client has no Helena credential
        UpstreamRequestError: If any page request fails
    """
    if not client.has_credentials:
        raise ConfigurationError("HELENA_API_TOKEN is not configured")

    window = DateWindow.from_strings(start_date, end_date)
    contacts: list[dict[str, Any]] = []

    async for _, envelope in iter_bucket_pages(client, nps_value, start_date, end_date):
        for item in envelope.items:
            updated_at = contact_updated_at(item)
            if updated_at and window.contains(updated_at):
                contacts.append(item)

    return contacts
