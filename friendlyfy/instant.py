"""Coercion of user-supplied date values to UTC instants."""

import math
from datetime import date, datetime, time, timezone
from typing import Any, TypeAlias
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil import parser

from friendlyfy.errors import InvalidInput

InstantLike: TypeAlias = datetime | date | int | float | str


def to_instant(value: Any) -> datetime:
    """Convert a date-like value to a timezone-aware UTC datetime.

    Accepts:
    - datetime: aware values are converted to UTC, naive values are read as UTC
    - date: midnight UTC of that day
    - int/float: Unix timestamp in seconds
    - str: anything dateutil can parse (ISO 8601, RFC 2822, "Jan 5 2025", ...)

    Raises:
        InvalidInput: If the value is of another type or cannot be parsed
    """
    if isinstance(value, bool):
        raise InvalidInput(f"Invalid date provided: {value!r}")
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            raise InvalidInput(f"Invalid date provided: {value!r}")
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise InvalidInput(f"Invalid date provided: {value!r}") from e
    if isinstance(value, str):
        try:
            parsed = parser.parse(value)
        except (parser.ParserError, OverflowError, ValueError) as e:
            raise InvalidInput(f"Invalid date provided: {value!r}") from e
        return to_instant(parsed)
    raise InvalidInput(
        f"Invalid date provided.\n"
        f"Got {type(value).__name__!r}: {value!r}\n"
        f"Expected datetime, date, Unix seconds (int/float) or a date string"
    )


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def get_zone(tz: str) -> ZoneInfo:
    """Look up an IANA timezone, raising InvalidInput for unknown names."""
    if not isinstance(tz, str):
        raise InvalidInput(f"Timezone must be a string, got {type(tz).__name__!r}")
    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise InvalidInput(
            f"Unknown timezone: {tz!r}\n"
            f"Hint: Use an IANA name such as 'UTC' or 'US/Pacific'"
        ) from e
