"""
Inclusive day-granularity date window used to filter Helena contacts.

The Helena filter endpoint cannot express a date range, so the window is
applied client-side to each contact's update timestamp.
"""

import re
from dataclasses import dataclass
from datetime import UTC, date, datetime, time

from app.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)

_END_OF_DAY = time(23, 59, 59, 999000)
# .NET style timestamps carry 7 fractional digits; datetime accepts at most 6
_LONG_FRACTION = re.compile(r"(\.\d{6})\d+")


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp to an aware UTC datetime at millisecond precision."""
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(_LONG_FRACTION.sub(r"\1", value.strip()).replace("Z", "+00:00"))
    except ValueError:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    parsed = parsed.astimezone(UTC)
    return parsed.replace(microsecond=parsed.microsecond // 1000 * 1000)


def _parse_day(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        logger.warning("Ignoring invalid date bound", value=value)
        return None


def start_of_day(value: str | None) -> datetime | None:
    day = _parse_day(value)
    return datetime.combine(day, time.min, tzinfo=UTC) if day else None


def end_of_day(value: str | None) -> datetime | None:
    day = _parse_day(value)
    return datetime.combine(day, _END_OF_DAY, tzinfo=UTC) if day else None


@dataclass(frozen=True)
class DateWindow:
    """
    Date bounds of one dashboard request, parsed once.

    ``active`` is set when either bound was supplied, even if it turned out
    not to be a calendar date.
    """

    start: datetime | None = None
    end: datetime | None = None
    active: bool = False

    @classmethod
    def from_strings(cls, start_date: str | None, end_date: str | None) -> "DateWindow":
        if not start_date and not end_date:
            return cls()
        return cls(start=start_of_day(start_date), end=end_of_day(end_date), active=True)

    def contains(self, timestamp: str | None) -> bool:
        if not self.active:
            return True

        moment = parse_timestamp(timestamp)
        if moment is None:
            return False
        if self.start is not None and moment < self.start:
            return False
        if self.end is not None and moment > self.end:
            return False
        return True


def is_within_range(timestamp: str | None, start_date: str | None, end_date: str | None) -> bool:
    """
    Check whether ``timestamp`` lies in ``[start 00:00:00Z, end 23:59:59.999Z]``.

    With no bounds the timestamp is not inspected and the check passes.
    Once a bound is set, an unparsable timestamp fails the check.
    A bound that is not a calendar date leaves that side of the window open.
    """
    return DateWindow.from_strings(start_date, end_date).contains(timestamp)
