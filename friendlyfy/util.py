"""Utility constants and lookup tables for friendlyfy.

Time unit constants represent durations in seconds. Years and months are
fixed approximations (365 and 30 days), not calendar-aware.
"""

from typing import Literal, TypeAlias

# Time unit constants (all values in seconds)
SECOND = 1
MINUTE = 60
HOUR = 3600
DAY = 86400
WEEK = 604800
MONTH = 2592000
YEAR = 31536000

Unit: TypeAlias = Literal["year", "month", "week", "day", "hour", "minute", "second"]

# Strictly descending by size
TIME_UNITS: tuple[tuple[Unit, int], ...] = (
    ("year", YEAR),
    ("month", MONTH),
    ("week", WEEK),
    ("day", DAY),
    ("hour", HOUR),
    ("minute", MINUTE),
    ("second", SECOND),
)

# Strictly descending powers of 1000
MAGNITUDE_SUFFIXES: tuple[tuple[float, str], ...] = (
    (1e12, "T"),
    (1e9, "B"),
    (1e6, "M"),
    (1e3, "K"),
)
