from datetime import UTC, datetime
from unittest.mock import MagicMock

from app.services.nps import date_range
from app.services.nps.date_range import DateWindow, end_of_day, is_within_range, parse_timestamp, start_of_day


def test_no_bounds_accepts_anything():
    assert is_within_range("2024-03-10T12:00:00Z", None, None) is True
    # No bound set: the timestamp is not even parsed
    assert is_within_range("not a date", None, None) is True


def test_unparsable_timestamp_rejected_once_a_bound_is_set():
    assert is_within_range("not a date", "2024-03-01", None) is False
    assert is_within_range(None, None, "2024-03-31") is False


def test_start_bound_is_inclusive_from_midnight():
    assert is_within_range("2024-03-01T00:00:00Z", "2024-03-01", None) is True
    assert is_within_range("2024-02-29T23:59:59.999Z", "2024-03-01", None) is False


def test_end_bound_is_inclusive_until_last_millisecond():
    assert is_within_range("2024-03-31T23:59:59.999Z", None, "2024-03-31") is True
    assert is_within_range("2024-04-01T00:00:00Z", None, "2024-03-31") is False


def test_window_with_both_bounds():
    assert is_within_range("2024-03-15T08:30:00Z", "2024-03-01", "2024-03-31") is True
    assert is_within_range("2024-04-15T08:30:00Z", "2024-03-01", "2024-03-31") is False
    assert is_within_range("2024-02-15T08:30:00Z", "2024-03-01", "2024-03-31") is False


def test_offsets_are_compared_in_utc():
    # 2024-03-31T22:00-03:00 is 2024-04-01T01:00Z
    assert is_within_range("2024-03-31T22:00:00-03:00", None, "2024-03-31") is False


def test_invalid_bound_leaves_that_side_open():
    assert is_within_range("2020-01-01T00:00:00Z", "garbage", None) is True
    assert is_within_range("2030-01-01T00:00:00Z", "2024-01-01", "garbage") is True


def test_parse_timestamp_variants():
    assert parse_timestamp("2024-03-10T12:00:00Z") == datetime(2024, 3, 10, 12, tzinfo=UTC)
    assert parse_timestamp("2024-03-10T12:00:00") == datetime(2024, 3, 10, 12, tzinfo=UTC)
    assert parse_timestamp("2024-03-10T12:00:00.1234567Z") == datetime(
        2024, 3, 10, 12, 0, 0, 123000, tzinfo=UTC
    )
    assert parse_timestamp("yesterday") is None
    assert parse_timestamp("") is None


def test_day_bounds():
    assert start_of_day("2024-03-01") == datetime(2024, 3, 1, tzinfo=UTC)
    assert end_of_day("2024-03-01") == datetime(2024, 3, 1, 23, 59, 59, 999000, tzinfo=UTC)
    assert start_of_day(None) is None


def test_window_without_bounds_is_inactive():
    window = DateWindow.from_strings(None, "")

    assert window.active is False
    assert window.contains(None) is True


def test_window_parses_bounds_once():
    window = DateWindow.from_strings("2024-03-01", "2024-03-31")

    assert window.start == datetime(2024, 3, 1, tzinfo=UTC)
    assert window.end == datetime(2024, 3, 31, 23, 59, 59, 999000, tzinfo=UTC)
    assert window.contains("2024-03-15T00:00:00Z") is True
    assert window.contains("2024-04-01T00:00:00Z") is False


def test_invalid_bound_is_warned_each_time(monkeypatch):
    mock_logger = MagicMock()
    monkeypatch.setattr(date_range, "logger", mock_logger)

    first = DateWindow.from_strings("garbage", None)
    second = DateWindow.from_strings("garbage", None)

    assert first == second
    assert first.active is True
    assert first.start is None
    assert mock_logger.warning.call_count == 2
