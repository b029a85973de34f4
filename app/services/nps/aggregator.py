"""
Cross-bucket aggregation of Helena contacts.

Buckets are fetched one after another so only one Helena request is ever in
flight per dashboard request. Output order is bucket 1..5, then the order
Helena returned the items in.
"""

from app.infrastructure.observability.logging import get_logger
from app.models.domain.nps_domain import NPS_BUCKETS, NpsContact
from app.services.helena.client import HelenaContactsClient
from app.services.nps.paginator import fetch_contacts_by_nps
from app.services.nps.scoring import resolve_nps_value

logger = get_logger(__name__)


async def fetch_all_contacts(
    client: HelenaContactsClient,
    start_date: str | None = None,
    end_date: str | None = None,
) -> list[NpsContact]:
    """Fetch and score the contacts of every bucket; any failure aborts the whole run."""
    all_contacts: list[NpsContact] = []

    for nps in NPS_BUCKETS:
        contacts = await fetch_contacts_by_nps(client, nps, start_date, end_date)

        logger.info(
            "Contacts per NPS bucket",
            nps=nps,
            count=len(contacts),
            start_date=start_date,
            end_date=end_date,
        )

        all_contacts.extend(NpsContact(contact, resolve_nps_value(contact, nps)) for contact in contacts)

    return all_contacts
