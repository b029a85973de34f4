# app/models/api/dashboard_response.py
"""
Dashboard API response models.
Fields are snake_case in Python and serialized in camelCase for the web UI.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NpsScoreCount(CamelModel):
    """Number of contacts with one integer score."""

    score: int = Field(..., ge=1, le=5, description="NPS score")
    count: int = Field(..., ge=0, description="Contacts with this score")


class LowNpsContactResponse(CamelModel):
    """Public view of an at-risk contact."""

    id: Any = Field(None, description="Helena contact ID")
    name: Any = Field(None, description="Contact name")
    phone_number: Any = Field(None, description="Raw phone number")
    phone_number_formatted: Any = Field(None, description="Formatted phone number")
    email: Any = Field(None, description="Contact email")
    updated_at: Any = Field(None, description="Last update timestamp from Helena")
    nps: int | float = Field(..., description="Resolved NPS value")


class LowNpsPage(CamelModel):
    """One page of low-score contacts."""

    page: int = Field(..., ge=1, description="Clamped page number")
    page_size: int = Field(..., description="Fixed page size")
    total_items: int = Field(..., description="Low-score contacts across all pages")
    total_pages: int = Field(..., ge=1, description="Total pages, at least 1")
    items: list[LowNpsContactResponse] = Field(default_factory=list)


class DashboardResponse(CamelModel):
    """Full dashboard payload."""

    average_nps: float | None = Field(None, description="Mean NPS, null when there are no contacts")
    total_contacts: int = Field(..., description="Contacts in the date window")
    start_date: str | None = Field(None, description="Requested start date, echoed")
    end_date: str | None = Field(None, description="Requested end date, echoed")
    nps_summary: list[NpsScoreCount] = Field(..., description="Counts for scores 1-5")
    low_nps: LowNpsPage
    low_nps_all_items: list[LowNpsContactResponse] = Field(
        default_factory=list, description="Every low-score contact, unpaginated"
    )


class DashboardErrorResponse(BaseModel):
    """Body returned when the dashboard cannot be generated."""

    error: bool = True
    message: str
