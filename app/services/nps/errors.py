"""
Errors raised by the NPS dashboard pipeline.

Unparsable scores and timestamps are not errors: they resolve through the
bucket fallback or are excluded by the date filter.
"""

import json
from typing import Any


class NpsDashboardError(Exception):
    """Base exception for dashboard generation failures."""


class ConfigurationError(NpsDashboardError):
    """Raised when the Helena credential is not configured."""


class UpstreamRequestError(NpsDashboardError):
    """A page fetch failed; carries the bucket and page that were in progress."""

    def __init__(
        self,
        nps_value: int,
        page_number: int,
        status_code: int | None = None,
        response_body: Any = None,
    ):
        self.nps_value = nps_value
        self.page_number = page_number
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(
            f"Failed to query NPS {nps_value} page {page_number}: "
            f"status={status_code} response={_dump_body(response_body)}"
        )


def _dump_body(body: Any) -> str:
    try:
        return json.dumps(body, ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(body)
