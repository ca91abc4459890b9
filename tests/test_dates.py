"""Tests for relative time, durations and calendar boundaries."""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from friendlyfy import (
    DurationOptions,
    EnglishEngine,
    InvalidInput,
    end_of,
    format_date,
    format_date_with_timezone,
    format_duration,
    humanize_date,
    start_of,
    time_ago,
    time_ago_with_precision,
    time_from_now,
    time_from_now_with_precision,
)

# Wednesday
NOW = datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "offset,expected",
    [
        (timedelta(0), "now"),
        (timedelta(seconds=30), "30 seconds ago"),
        (timedelta(minutes=5), "5 minutes ago"),
        (timedelta(hours=3), "3 hours ago"),
        (timedelta(days=1), "yesterday"),
        (timedelta(days=3), "3 days ago"),
        (timedelta(weeks=1), "last week"),
        (timedelta(days=65), "2 months ago"),
        (timedelta(days=400), "last year"),
    ],
)
def test_time_ago(offset, expected):
    """Test that the first fitting unit is used for past instants."""
    assert time_ago(NOW - offset, now=NOW) == expected


@pytest.mark.parametrize(
    "offset,expected",
    [
        (timedelta(hours=2), "in 2 hours"),
        (timedelta(days=1), "tomorrow"),
        (timedelta(days=2), "in 2 days"),
        (timedelta(weeks=1), "next week"),
    ],
)
def test_time_from_now(offset, expected):
    """Test future phrasing."""
    assert time_from_now(NOW + offset, now=NOW) == expected


@pytest.mark.parametrize(
    "offset", [timedelta(hours=-5), timedelta(days=3), timedelta(0)]
)
def test_time_ago_and_time_from_now_agree(offset):
    """Test that both directions render any instant the same way."""
    instant = NOW + offset
    assert time_ago(instant, now=NOW) == time_from_now(instant, now=NOW)


def test_partial_seconds_are_truncated():
    """Test that sub-second differences count as zero."""
    assert time_ago(NOW - timedelta(milliseconds=900), now=NOW) == "now"


def test_time_ago_accepts_any_instant_form():
    """Test strings and Unix seconds as instants and reference times."""
    assert time_ago("2025-01-15T09:00:00Z", now=NOW) == "3 hours ago"
    assert time_ago(NOW.timestamp() - 120, now=NOW.timestamp()) == "2 minutes ago"


def test_time_ago_in_german():
    """Test that non-English locales go through Babel."""
    assert time_ago(NOW - timedelta(hours=3), "de-DE", now=NOW) == "vor 3 Stunden"


def test_precision_keeps_the_unit_in_german():
    """Test that a fixed unit is not re-bucketed outside English."""
    days = NOW - timedelta(days=90)
    minutes = NOW - timedelta(minutes=90)
    assert time_ago_with_precision(days, "days", "de-DE", now=NOW) == "vor 90 Tagen"
    result = time_ago_with_precision(minutes, "minutes", "de-DE", now=NOW)
    assert result == "vor 90 Minuten"
    later = NOW + timedelta(hours=36)
    result = time_from_now_with_precision(later, "hours", "fr-FR", now=NOW)
    assert result == "dans 36 heures"


@pytest.mark.parametrize(
    "locale,offset,expected",
    [
        ("de-DE", timedelta(0), "jetzt"),
        ("fr-FR", timedelta(0), "maintenant"),
        ("de-DE", timedelta(days=-1), "gestern"),
        ("de-DE", timedelta(days=1), "morgen"),
        ("fr-FR", timedelta(days=-1), "hier"),
        ("fr-FR", timedelta(days=1), "demain"),
    ],
)
def test_named_phrases_outside_english(locale, offset, expected):
    """Test that small offsets use the locale's named phrase, not a count."""
    instant = NOW + offset
    assert time_ago(instant, locale, now=NOW) == expected
    assert time_from_now(instant, locale, now=NOW) == expected


def test_injected_engine_overrides_locale():
    """Test that an explicit engine is used instead of the locale lookup."""

    class Shouty(EnglishEngine):
        def format_relative_time(self, count, unit):
            return super().format_relative_time(count, unit).upper()

    result = time_ago(NOW - timedelta(hours=3), "de-DE", now=NOW, engine=Shouty())
    assert result == "3 HOURS AGO"


def test_time_ago_rejects_bad_input():
    """Test invalid instants and locales."""
    with pytest.raises(InvalidInput):
        time_ago("yesterday-ish", now=NOW)
    with pytest.raises(InvalidInput):
        time_ago(NOW, "zz-ZZ", now=NOW)


def test_precision_forces_the_unit():
    """Test counting in a fixed unit."""
    instant = NOW - timedelta(minutes=90)
    assert time_ago_with_precision(instant, "minutes", now=NOW) == "90 minutes ago"
    assert time_ago_with_precision(instant, "hours", now=NOW) == "1 hour ago"
    assert time_ago_with_precision(instant, "auto", now=NOW) == "1 hour ago"


def test_precision_future_and_symmetry():
    """Test the future variant and its hand-off for past instants."""
    instant = NOW + timedelta(hours=36)
    assert time_from_now_with_precision(instant, "hours", now=NOW) == "in 36 hours"
    assert time_ago_with_precision(instant, "hours", now=NOW) == "in 36 hours"


def test_invalid_precision_raises():
    """Test that an unknown precision lists the valid ones."""
    with pytest.raises(InvalidInput, match="Valid: auto"):
        time_ago_with_precision(NOW - timedelta(hours=1), "fortnights", now=NOW)


def test_format_duration_defaults():
    """Test letter labels, the zero phrase and the term limit."""
    assert format_duration(0) == "0 seconds"
    assert format_duration(3661) == "1h 1m 1s"
    assert format_duration(90061) == "1d 1h 1m"
    assert format_duration(59.9) == "59s"


def test_format_duration_options():
    """Test max_units, unit exclusion, compact and spelled labels."""
    assert format_duration(3661, DurationOptions(max_units=2)) == "1h 1m"
    assert format_duration(3661, DurationOptions(include_hours=False)) == "61m 1s"
    assert format_duration(0, DurationOptions(compact=True)) == "0s"
    assert format_duration(7200, DurationOptions(spelled_units=True)) == "2hour"
    options = DurationOptions(spelled_units=True, compact=True)
    assert format_duration(7200, options) == "2h"


def test_format_duration_skips_zero_terms():
    """Test that zero-count units do not use up max_units."""
    assert format_duration(86401, DurationOptions(max_units=2)) == "1d 1s"


@pytest.mark.parametrize("value", [-1, float("inf"), "60", None, True])
def test_format_duration_rejects_invalid(value):
    """Test that negative, non-finite and non-numeric durations raise."""
    with pytest.raises(InvalidInput):
        format_duration(value)


def test_duration_options_validate_max_units():
    """Test that max_units must be a positive integer."""
    with pytest.raises(InvalidInput):
        DurationOptions(max_units=0)


def test_week_boundaries_are_monday_and_sunday():
    """Test start and end of week around a Wednesday."""
    assert start_of(NOW, "week") == datetime(2025, 1, 13, tzinfo=timezone.utc)
    assert end_of(NOW, "week") == datetime(
        2025, 1, 19, 23, 59, 59, 999000, tzinfo=timezone.utc
    )


def test_period_boundaries():
    """Test day, month and year boundaries."""
    assert start_of(NOW, "day") == datetime(2025, 1, 15, tzinfo=timezone.utc)
    assert end_of(NOW, "day") == datetime(
        2025, 1, 15, 23, 59, 59, 999000, tzinfo=timezone.utc
    )
    assert start_of(NOW, "month") == datetime(2025, 1, 1, tzinfo=timezone.utc)
    assert end_of("2024-02-10", "month").day == 29
    assert start_of(NOW, "year") == datetime(2025, 1, 1, tzinfo=timezone.utc)
    assert end_of(NOW, "year") == datetime(
        2025, 12, 31, 23, 59, 59, 999000, tzinfo=timezone.utc
    )


def test_boundaries_respect_timezone():
    """Test that boundaries are computed in the requested zone."""
    pacific = ZoneInfo("US/Pacific")
    # 12:00 UTC is 04:00 in Los Angeles
    result = start_of(NOW, "day", tz="US/Pacific")
    assert result == datetime(2025, 1, 15, tzinfo=pacific)
    assert result.utcoffset() == timedelta(hours=-8)


def test_invalid_period_raises():
    """Test that an unknown period raises InvalidInput."""
    with pytest.raises(InvalidInput, match="Valid periods"):
        start_of(NOW, "decade")


def test_format_date_tokens():
    """Test the YYYY/MM/DD/HH/mm/ss tokens."""
    assert format_date("2025-01-06T09:05:03Z") == "2025-01-06"
    formatted = format_date("2025-01-06T09:05:03Z", "DD/MM/YYYY HH:mm:ss")
    assert formatted == "06/01/2025 09:05:03"
    assert format_date("2025-01-06T09:05:03Z", "HH:mm", tz="Asia/Tokyo") == "18:05"


def test_humanize_date_english():
    """Test the long English date with a short time."""
    result = humanize_date("2025-01-06T09:05:00Z")
    assert "January 6, 2025" in result
    assert "9:05" in result


def test_humanize_date_rejects_unknown_style():
    """Test that an unknown style raises InvalidInput."""
    with pytest.raises(InvalidInput, match="Valid styles"):
        humanize_date(NOW, date_style="tiny")


def test_format_date_with_timezone_shifts_the_clock():
    """Test that the time is rendered in the requested zone."""
    result = format_date_with_timezone("2025-01-06T09:05:00Z", "Asia/Tokyo")
    assert "6:05:00" in result
