"""
Tests for date/time utilities
"""

import pytest
from datetime import date, datetime, timezone
from taskboard.config.settings import settings
from taskboard.utils.date_utils import (
    calculate_default_end_time,
    current_time_string,
    date_key,
    date_key_from_timestamp,
    duration_between,
    minutes_to_time,
    parse_date_key,
    reference_date,
    start_of_week,
    time_to_minutes,
)


def test_time_to_minutes():
    """Test parsing clock time"""
    assert time_to_minutes("09:30") == 570
    assert time_to_minutes("00:00") == 0
    assert time_to_minutes("23:59") == 1439


def test_time_to_minutes_missing_input_is_midnight():
    """Test that empty or missing time counts as zero"""
    assert time_to_minutes("") == 0
    assert time_to_minutes(None) == 0


def test_time_to_minutes_degrades_on_malformed_input():
    """Test that malformed parts contribute their numeric prefix or zero"""
    assert time_to_minutes("7:5") == 425
    assert time_to_minutes("9:xx") == 540
    assert time_to_minutes("10") == 600
    assert time_to_minutes("abc") == 0


def test_minutes_to_time_wraps_past_midnight():
    """Test overflow wraps to the next day"""
    assert minutes_to_time(1500) == "01:00"
    assert minutes_to_time(1440) == "00:00"
    assert minutes_to_time(570) == "09:30"
    assert minutes_to_time(-1) == "23:59"


def test_minutes_round_trip():
    """Test that converting back and forth is stable at minute granularity"""
    for minutes in range(0, 3 * 1440, 7):
        clock = minutes_to_time(minutes)
        assert minutes_to_time(time_to_minutes(clock)) == clock


def test_current_time_string_is_zero_padded():
    """Test wall-clock snapshot format"""
    assert current_time_string(datetime(2024, 1, 1, 7, 5)) == "07:05"
    assert len(current_time_string()) == 5


def test_date_key():
    """Test canonical date keys"""
    assert date_key(date(2024, 6, 1)) == "2024-06-01"
    assert date_key(datetime(2024, 6, 1, 23, 59)) == "2024-06-01"
    assert date_key("2024-06-10T10:00:00") == "2024-06-10"
    assert date_key("garbage") == "garbage"


def test_date_key_from_timestamp():
    """Test createdAt grouping key"""
    instant = datetime(2024, 6, 10, 12, tzinfo=timezone.utc)
    assert date_key_from_timestamp(int(instant.timestamp() * 1000), timezone.utc) == "2024-06-10"


def test_parse_date_key():
    """Test parsing valid and invalid date keys"""
    assert parse_date_key("2024-02-29") == date(2024, 2, 29)
    assert parse_date_key("2023-02-29") is None
    assert parse_date_key("not-a-date") is None
    assert parse_date_key("") is None


def test_reference_date():
    """Test that datetimes are reduced to their calendar day"""
    assert reference_date(datetime(2024, 6, 12, 23, 0)) == date(2024, 6, 12)
    assert reference_date(date(2024, 6, 12)) == date(2024, 6, 12)


def test_start_of_week_is_sunday():
    """Test Sunday-start weeks"""
    assert start_of_week(date(2024, 6, 12)) == date(2024, 6, 9)
    assert start_of_week(date(2024, 6, 9)) == date(2024, 6, 9)
    assert start_of_week(date(2024, 6, 15)) == date(2024, 6, 9)
    assert start_of_week(date(2025, 1, 1)) == date(2024, 12, 29)


def test_calculate_default_end_time():
    """Test default end time from start time"""
    assert calculate_default_end_time("09:00", 120) == "11:00"
    assert calculate_default_end_time("23:30", 120) == "01:30"
    assert calculate_default_end_time("", 120) == "10:00"


def test_calculate_default_end_time_uses_setting(monkeypatch):
    """Test that the default duration comes from settings"""
    monkeypatch.setattr(settings, "DEFAULT_TASK_DURATION_MINUTES", 60)
    assert calculate_default_end_time("09:00") == "10:00"


@pytest.mark.parametrize("start,end,expected", [
    ("09:00", "10:30", 90),
    ("22:00", "01:00", 180),
    ("09:00", "09:00", 60),
    ("09:00", "", 60),
])
def test_duration_between(start, end, expected):
    """Test overnight-aware durations"""
    assert duration_between(start, end) == expected


def test_parse_date_key_requires_canonical_form():
    """Test compact or unpadded dates are not treated as keys"""
    assert parse_date_key("20240610") is None
    assert parse_date_key("2024-6-1") is None
    assert parse_date_key("2024-06-10T00:00:00") is None
