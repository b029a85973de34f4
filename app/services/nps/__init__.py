"""
NPS dashboard pipeline.

Fetches Helena contacts bucket by bucket (scores 1-5), filters them by
update date, resolves each contact's score and summarizes the result for
the web dashboard.
"""

from .aggregator import fetch_all_contacts
from .dashboard_service import generate_dashboard, summarize_contacts
from .errors import ConfigurationError, NpsDashboardError, UpstreamRequestError
from .paginator import fetch_contacts_by_nps

__all__ = [
    "ConfigurationError",
    "NpsDashboardError",
    "UpstreamRequestError",
    "fetch_all_contacts",
    "fetch_contacts_by_nps",
    "generate_dashboard",
    "summarize_contacts",
]
