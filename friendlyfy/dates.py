"""Human-readable date and duration formatting.

Relative phrases ("3 hours ago") bucket a signed difference into the first
unit of ``TIME_UNITS`` that fits. Durations decompose greedily over the same
table. Calendar boundaries (start/end of day, week, month, year) are computed
in an IANA timezone; weeks start on Monday.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Literal, TypeAlias

from dateutil.relativedelta import relativedelta

from friendlyfy.errors import InvalidInput
from friendlyfy.i18n import LocaleEngine, resolve_engine
from friendlyfy.instant import get_zone, to_instant, utc_now
from friendlyfy.util import DAY, HOUR, MINUTE, MONTH, SECOND, TIME_UNITS, WEEK, YEAR

Period: TypeAlias = Literal["day", "week", "month", "year"]

# Precision names accepted by the *_with_precision helpers
_PRECISIONS = {
    "seconds": ("second", SECOND),
    "minutes": ("minute", MINUTE),
    "hours": ("hour", HOUR),
    "days": ("day", DAY),
    "weeks": ("week", WEEK),
    "months": ("month", MONTH),
    "years": ("year", YEAR),
}

_PERIODS = ("day", "week", "month", "year")


def _seconds_between(earlier: datetime, later: datetime) -> int:
    """Whole seconds from ``earlier`` to ``later``, truncated toward zero."""
    return int((later - earlier).total_seconds())


def _resolve_now(now: Any) -> datetime:
    return utc_now() if now is None else to_instant(now)


def time_ago(
    instant: Any,
    locale: str = "en-US",
    *,
    now: Any = None,
    engine: LocaleEngine | None = None,
) -> str:
    """Describe how long ago ``instant`` was ("3 hours ago", "yesterday").

    Future instants are handed to ``time_from_now`` so both functions agree
    for any input.

    Args:
        instant: Anything accepted by ``to_instant``
        locale: Locale tag used to pick the formatting engine
        now: Reference time (defaults to the current UTC time)
        engine: Explicit formatting engine, overriding ``locale``

    Raises:
        InvalidInput: If the instant, reference time or locale is invalid
    """
    target = to_instant(instant)
    reference = _resolve_now(now)
    diff = _seconds_between(target, reference)

    if diff < 0:
        return time_from_now(target, locale, now=reference, engine=engine)

    fmt = resolve_engine(locale, engine)
    for unit, size in TIME_UNITS:
        count = diff // size
        if count >= 1:
            return fmt.format_relative_time(-count, unit)

    return fmt.format_relative_time(0, "second")


def time_from_now(
    instant: Any,
    locale: str = "en-US",
    *,
    now: Any = None,
    engine: LocaleEngine | None = None,
) -> str:
    """Describe how far in the future ``instant`` is ("in 3 hours", "tomorrow").

    Past instants are handed to ``time_ago``.
    """
    target = to_instant(instant)
    reference = _resolve_now(now)
    diff = _seconds_between(reference, target)

    if diff < 0:
        return time_ago(target, locale, now=reference, engine=engine)

    fmt = resolve_engine(locale, engine)
    for unit, size in TIME_UNITS:
        count = diff // size
        if count >= 1:
            return fmt.format_relative_time(count, unit)

    return fmt.format_relative_time(0, "second")


def _precision_unit(precision: str) -> tuple[str, int]:
    if precision not in _PRECISIONS:
        valid = ", ".join(["auto", *_PRECISIONS])
        raise InvalidInput(f"Invalid precision '{precision}'. Valid: {valid}")
    return _PRECISIONS[precision]


def time_ago_with_precision(
    instant: Any,
    precision: str = "auto",
    locale: str = "en-US",
    *,
    now: Any = None,
    engine: LocaleEngine | None = None,
) -> str:
    """Like ``time_ago`` but always counts in the given unit ("90 minutes ago")."""
    target = to_instant(instant)
    reference = _resolve_now(now)
    diff = _seconds_between(target, reference)

    if diff < 0:
        return time_from_now_with_precision(
            target, precision, locale, now=reference, engine=engine
        )
    if precision == "auto":
        return time_ago(target, locale, now=reference, engine=engine)

    unit, size = _precision_unit(precision)
    return resolve_engine(locale, engine).format_relative_time(-(diff // size), unit)


def time_from_now_with_precision(
    instant: Any,
    precision: str = "auto",
    locale: str = "en-US",
    *,
    now: Any = None,
    engine: LocaleEngine | None = None,
) -> str:
    """Like ``time_from_now`` but always counts in the given unit."""
    target = to_instant(instant)
    reference = _resolve_now(now)
    diff = _seconds_between(reference, target)

    if diff < 0:
        return time_ago_with_precision(
            target, precision, locale, now=reference, engine=engine
        )
    if precision == "auto":
        return time_from_now(target, locale, now=reference, engine=engine)

    unit, size = _precision_unit(precision)
    return resolve_engine(locale, engine).format_relative_time(diff // size, unit)


@dataclass(frozen=True, kw_only=True)
class DurationOptions:
    """Which units ``format_duration`` may use and how terms are labelled.

    Attributes:
        include_years..include_seconds: Enable each unit (all on by default)
        max_units: Maximum number of non-zero terms to emit
        compact: Use "0s" for an empty duration instead of "0 seconds"
        spelled_units: Label terms with the singular unit name ("2hour")
            instead of its initial; ignored when compact
    """

    include_years: bool = True
    include_months: bool = True
    include_weeks: bool = True
    include_days: bool = True
    include_hours: bool = True
    include_minutes: bool = True
    include_seconds: bool = True
    max_units: int = 3
    compact: bool = False
    spelled_units: bool = False

    def __post_init__(self) -> None:
        if (
            isinstance(self.max_units, bool)
            or not isinstance(self.max_units, int)
            or self.max_units < 1
        ):
            raise InvalidInput(
                f"max_units must be a positive integer, got {self.max_units!r}"
            )

    def enabled(self, unit: str) -> bool:
        return bool(getattr(self, f"include_{unit}s"))


def format_duration(seconds: float, options: DurationOptions | None = None) -> str:
    """Format a duration in seconds as unit terms ("1h 1m 1s").

    Zero-count units are skipped and do not count toward ``max_units``.

    Example:
        >>> format_duration(3661)
        '1h 1m 1s'
        >>> format_duration(3661, DurationOptions(max_units=2))
        '1h 1m'
    """
    if (
        isinstance(seconds, bool)
        or not isinstance(seconds, (int, float))
        or not math.isfinite(seconds)
        or seconds < 0
    ):
        raise InvalidInput(f"Invalid duration provided: {seconds!r}")

    opts = options if options is not None else DurationOptions()
    remaining = math.floor(seconds)
    terms: list[str] = []

    for unit, size in TIME_UNITS:
        if not opts.enabled(unit) or remaining < size:
            continue

        count, remaining = divmod(remaining, size)
        label = unit if opts.spelled_units and not opts.compact else unit[0]
        terms.append(f"{count}{label}")

        if len(terms) >= opts.max_units:
            break

    if not terms:
        return "0s" if opts.compact else "0 seconds"

    return " ".join(terms)


def _local(instant: Any, tz: str) -> datetime:
    return to_instant(instant).astimezone(get_zone(tz))


def _check_period(period: str) -> None:
    if period not in _PERIODS:
        valid = ", ".join(_PERIODS)
        raise InvalidInput(f"Invalid period '{period}'. Valid periods: {valid}")


def start_of(instant: Any, period: Period, tz: str = "UTC") -> datetime:
    """Return the first moment of the day/week/month/year containing ``instant``.

    Weeks start on Monday. The result is an aware datetime in ``tz``.
    """
    _check_period(period)
    current = _local(instant, tz)
    midnight = current.replace(hour=0, minute=0, second=0, microsecond=0)

    if period == "day":
        return midnight
    if period == "week":
        return midnight - timedelta(days=midnight.weekday())
    if period == "month":
        return midnight.replace(day=1)
    return midnight.replace(month=1, day=1)


def end_of(instant: Any, period: Period, tz: str = "UTC") -> datetime:
    """Return 23:59:59.999 on the last day of the period containing ``instant``.

    Weeks end on Sunday. The result is an aware datetime in ``tz``.
    """
    _check_period(period)
    current = _local(instant, tz)
    last_moment = current.replace(hour=23, minute=59, second=59, microsecond=999000)

    if period == "day":
        return last_moment
    if period == "week":
        return last_moment + timedelta(days=6 - last_moment.weekday())
    if period == "month":
        # day=31 clamps to the month's last day
        return last_moment + relativedelta(day=31)
    return last_moment.replace(month=12, day=31)


_FORMAT_TOKENS = ("YYYY", "MM", "DD", "HH", "mm", "ss")


def format_date(instant: Any, pattern: str = "YYYY-MM-DD", tz: str = "UTC") -> str:
    """Format with the tokens YYYY, MM, DD, HH, mm and ss.

    Example:
        >>> format_date("2025-01-06T09:05:03Z", "DD/MM/YYYY HH:mm:ss")
        '06/01/2025 09:05:03'
    """
    if not isinstance(pattern, str):
        raise InvalidInput(f"Format must be a string, got {type(pattern).__name__!r}")
    current = _local(instant, tz)
    values = {
        "YYYY": str(current.year),
        "MM": f"{current.month:02d}",
        "DD": f"{current.day:02d}",
        "HH": f"{current.hour:02d}",
        "mm": f"{current.minute:02d}",
        "ss": f"{current.second:02d}",
    }

    result = pattern
    for token in _FORMAT_TOKENS:
        result = result.replace(token, values[token])
    return result


def humanize_date(
    instant: Any,
    locale: str = "en-US",
    *,
    date_style: str = "long",
    time_style: str = "short",
    tz: str = "UTC",
    engine: LocaleEngine | None = None,
) -> str:
    """Locale-aware date and time ("January 6, 2025 at 9:05 AM")."""
    current = _local(instant, tz)
    fmt = resolve_engine(locale, engine)
    return fmt.format_datetime(current, date_style, time_style)


def format_date_with_timezone(
    instant: Any,
    timezone: str = "UTC",
    locale: str = "en-US",
    *,
    date_style: str = "short",
    time_style: str = "medium",
    engine: LocaleEngine | None = None,
) -> str:
    """Locale-aware numeric date and time rendered in ``timezone``."""
    current = _local(instant, timezone)
    fmt = resolve_engine(locale, engine)
    return fmt.format_datetime(current, date_style, time_style)
