# app/models/domain/nps_domain.py
"""
NPS Domain Models
Domain models for Helena contact pages and NPS-tagged contacts.
Used by services for internal processing; routes only see the API models.
"""

from dataclasses import dataclass, field
from typing import Any

# Helena only supports equality filtering on the nps custom field,
# so each score is queried as its own bucket.
NPS_BUCKETS = (1, 2, 3, 4, 5)
LOW_NPS_THRESHOLD = 3


@dataclass(frozen=True)
class PageEnvelope:
    """One page of the Helena contact filter endpoint."""

    items: list[dict[str, Any]] = field(default_factory=list)
    has_more_pages: bool = False
    total_items: int | None = None
    total_pages: int | None = None

    @classmethod
    def from_api(cls, data: Any) -> "PageEnvelope":
        if not isinstance(data, dict):
            return cls()

        items = data.get("items")
        return cls(
            items=[item for item in items if isinstance(item, dict)] if isinstance(items, list) else [],
            has_more_pages=bool(data.get("hasMorePages")),
            total_items=data.get("totalItems"),
            total_pages=data.get("totalPages"),
        )


def contact_updated_at(contact: dict[str, Any]) -> Any:
    """Helena returns the update timestamp as either updatedAt or updatedat."""
    return contact.get("updatedAt") or contact.get("updatedat")


class NpsContact:
    """A Helena contact tagged with its resolved NPS value."""

    def __init__(self, data: dict[str, Any], nps_value: int | float):
        self.raw_data = data
        self.nps_value = nps_value

    @property
    def id(self) -> Any:
        return self.raw_data.get("id")

    @property
    def updated_at(self) -> Any:
        return contact_updated_at(self.raw_data)

    def is_low_nps(self) -> bool:
        return self.nps_value <= LOW_NPS_THRESHOLD

    def histogram_score(self) -> int | None:
        """Integer score 1-5 this contact counts towards, or None."""
        value = self.nps_value
        if isinstance(value, float) and not value.is_integer():
            return None
        score = int(value)
        return score if score in NPS_BUCKETS else None

    def to_low_nps_item(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.raw_data.get("name"),
            "phone_number": self.raw_data.get("phoneNumber"),
            "phone_number_formatted": self.raw_data.get("phoneNumberFormatted"),
            "email": self.raw_data.get("email"),
            "updated_at": self.updated_at,
            "nps": self.nps_value,
        }
