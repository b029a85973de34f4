"""
Helena CRM API client for the contact filter endpoint.
One call fetches one page; pagination is driven by the caller.
No retries: a failed page surfaces immediately as HelenaAPIError.
"""

from typing import Any

import httpx

from app.infrastructure.observability.logging import get_logger
from app.models.domain.nps_domain import PageEnvelope

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 100


class HelenaAPIError(Exception):
    """Transport failure or non-success response from the Helena API."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_data: Any = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data


class HelenaContactsClient:
    """
    Async client for ``POST /core/v1/contact/filter``.

    The credential is sent as-is in the Authorization header, without a
    scheme prefix, which is what Helena expects for API tokens.
    """

    def __init__(
        self,
        api_token: str | None,
        base_url: str,
        timeout: float = 30.0,
        page_size: int = DEFAULT_PAGE_SIZE,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_token = api_token
        self.base_url = base_url
        self.page_size = page_size
        self._client = httpx.AsyncClient(timeout=httpx.Timeout(timeout), transport=transport)

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_token)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    def _get_headers(self) -> dict:
        return {
            "Authorization": self.api_token or "",
            "Accept": "application/json",
            "Content-Type": "application/*+json",
        }

    def build_filter_body(self, nps_value: int, page_number: int) -> dict:
        """Request body filtering contacts by the nps custom field."""
        return {
            "includeDetails": ["CustomFields"],
            "customFields": {"nps": str(nps_value)},
            "pageNumber": page_number,
            "pageSize": self.page_size,
        }

    async def fetch_page(self, nps_value: int, page_number: int) -> PageEnvelope:
        """
        Fetch one page of contacts whose nps custom field equals ``nps_value``.

        Raises:
            HelenaAPIError: On network errors, non-2xx responses or a body
                that is not JSON
        """
        body = self.build_filter_body(nps_value, page_number)

        try:
            response = await self._client.post(self.base_url, json=body, headers=self._get_headers())
        except httpx.RequestError as e:
            logger.debug("Helena transport error", nps_value=nps_value, page_number=page_number, error=str(e))
            raise HelenaAPIError(f"Helena request failed: {e}") from e

        logger.debug(
            "Helena filter response",
            nps_value=nps_value,
            page_number=page_number,
            status_code=response.status_code,
            response_size=len(response.content),
        )

        if not response.is_success:
            raise HelenaAPIError(
                f"Helena API error (HTTP {response.status_code})",
                status_code=response.status_code,
                response_data=_response_data(response),
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.error("Failed to parse Helena filter response", status_code=response.status_code, error=str(e))
            raise HelenaAPIError(
                "Invalid response format from Helena API",
                status_code=response.status_code,
                response_data=response.text[:500],
            ) from e

        return PageEnvelope.from_api(data)


def _response_data(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text[:500]
