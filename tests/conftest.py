import pytest

from app.models.domain.nps_domain import PageEnvelope
from app.routes.dashboard import get_helena_client
from app.services.helena.client import HelenaAPIError


class FakeHelenaClient:
    """In-memory stand-in for HelenaContactsClient keyed by (nps_value, page_number)."""

    def __init__(self, api_token: str | None = "test-token", page_size: int = 100):
        self.api_token = api_token
        self.page_size = page_size
        self.pages: dict[tuple[int, int], PageEnvelope | Exception] = {}
        self.calls: list[tuple[int, int]] = []

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_token)

    def add_page(self, nps_value: int, page_number: int, items: list[dict], has_more_pages: bool = False):
        self.pages[(nps_value, page_number)] = PageEnvelope(
            items=items,
            has_more_pages=has_more_pages,
            total_items=len(items),
            total_pages=page_number + (1 if has_more_pages else 0),
        )

    def add_error(self, nps_value: int, page_number: int, status_code: int = 500, body=None):
        self.pages[(nps_value, page_number)] = HelenaAPIError(
            f"Helena API error (HTTP {status_code})",
            status_code=status_code,
            response_data=body,
        )

    async def fetch_page(self, nps_value: int, page_number: int) -> PageEnvelope:
        self.calls.append((nps_value, page_number))
        result = self.pages.get((nps_value, page_number), PageEnvelope())
        if isinstance(result, Exception):
            raise result
        return result


def make_contact(
    contact_id: str,
    nps=None,
    updated_at: str | None = "2024-03-10T12:00:00Z",
    **extra,
) -> dict:
    contact = {
        "id": contact_id,
        "name": f"Contact {contact_id}",
        "phoneNumber": "5511999990000",
        "phoneNumberFormatted": "+55 11 99999-0000",
        "email": f"{contact_id}@example.com",
        "customFields": {} if nps is None else {"nps": nps},
    }
    if updated_at is not None:
        contact["updatedAt"] = updated_at
    contact.update(extra)
    return contact


@pytest.fixture
def fake_helena():
    return FakeHelenaClient()


@pytest.fixture
def contact_factory():
    return make_contact


@pytest.fixture
def apply_helena_override():
    def _apply(app, client):
        app.dependency_overrides[get_helena_client] = lambda: client

    yield _apply

    from app.main import app

    app.dependency_overrides.clear()
