"""Locale-aware formatting engines backed by Babel.

Every locale-sensitive helper in friendlyfy goes through a ``LocaleEngine``.
Number and date rendering is shared and delegated to Babel's CLDR data;
relative-time phrasing and ordinals are left to subclasses so that English
can keep the short "yesterday" / "next week" wording.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from functools import lru_cache

from babel import Locale, UnknownLocaleError
from babel import dates as babel_dates
from babel import numbers as babel_numbers
from typing_extensions import override

from friendlyfy.errors import InvalidInput
from friendlyfy.util import TIME_UNITS, Unit

logger = logging.getLogger(__name__)

_UNIT_SECONDS: dict[str, int] = dict(TIME_UNITS)

_DATE_STYLES = ("full", "long", "medium", "short")


def parse_locale(tag: str) -> Locale:
    """Parse a BCP 47 ("en-US") or POSIX ("en_US") tag into a Babel Locale."""
    if not isinstance(tag, str) or not tag:
        raise InvalidInput(f"Locale must be a non-empty string, got {tag!r}")
    try:
        return Locale.parse(tag.replace("_", "-"), sep="-")
    except (UnknownLocaleError, ValueError) as e:
        raise InvalidInput(f"Unknown locale: {tag!r}") from e


def _check_unit(unit: str) -> None:
    if unit not in _UNIT_SECONDS:
        valid = ", ".join(_UNIT_SECONDS)
        raise InvalidInput(f"Invalid unit '{unit}'. Valid units: {valid}")


def _check_style(style: str, kind: str) -> None:
    if style not in _DATE_STYLES:
        valid = ", ".join(_DATE_STYLES)
        raise InvalidInput(f"Invalid {kind} style '{style}'. Valid styles: {valid}")


def _fraction_pattern(digits: int, suffix: str = "") -> str:
    if digits <= 0:
        return f"#,##0{suffix}"
    return f"#,##0.{'0' * digits}{suffix}"


class LocaleEngine(ABC):
    """Formatting capability bound to a single locale."""

    def __init__(self, tag: str = "en-US"):
        self.tag: str = tag
        self.locale: Locale = parse_locale(tag)

    @abstractmethod
    def format_relative_time(self, count: int, unit: Unit) -> str:
        """Render a signed offset from now ("3 hours ago", "in 2 days")."""
        pass

    @abstractmethod
    def format_ordinal(self, value: int) -> str:
        pass

    def format_number(self, value: float | Decimal, pattern: str | None = None) -> str:
        return babel_numbers.format_decimal(value, format=pattern, locale=self.locale)

    def format_currency(self, value: float, currency: str) -> str:
        if not (
            isinstance(currency, str)
            and len(currency) == 3
            and currency.isascii()
            and currency.isalpha()
        ):
            raise InvalidInput(f"Invalid currency code: {currency!r}")
        return babel_numbers.format_currency(
            value, currency.upper(), locale=self.locale
        )

    def format_percent(self, value: float, decimals: int) -> str:
        return babel_numbers.format_percent(
            value, format=_fraction_pattern(decimals, "%"), locale=self.locale
        )

    def format_compact(self, value: float) -> str:
        return babel_numbers.format_compact_decimal(
            value, format_type="short", fraction_digits=1, locale=self.locale
        )

    def format_scientific(self, value: float, precision: int) -> str:
        pattern = "0E0" if precision <= 0 else f"0.{'0' * precision}E0"
        return babel_numbers.format_scientific(
            value, format=pattern, locale=self.locale
        )

    def format_significant(self, value: float, digits: int) -> str:
        """Render exactly ``digits`` significant digits, ties away from zero."""
        number = Decimal(repr(float(value)))
        if number.is_zero():
            return self.format_number(Decimal(0), _fraction_pattern(digits - 1))

        exponent = number.adjusted() - digits + 1
        rounded = number.quantize(Decimal(1).scaleb(exponent), rounding=ROUND_HALF_UP)
        return self.format_number(rounded, _fraction_pattern(-exponent))

    def format_datetime(
        self,
        value: datetime,
        date_style: str = "long",
        time_style: str = "short",
    ) -> str:
        """Render an aware datetime in its own timezone."""
        _check_style(date_style, "date")
        _check_style(time_style, "time")
        date_part = babel_dates.format_date(
            value, format=date_style, locale=self.locale
        )
        time_part = babel_dates.format_time(
            value, format=time_style, tzinfo=value.tzinfo, locale=self.locale
        )
        combined = babel_dates.get_datetime_format(date_style, locale=self.locale)
        pattern = str(combined).replace("'", "")
        return pattern.replace("{0}", time_part).replace("{1}", date_part)

    def plural_category(self, count: float) -> str:
        """Return the CLDR plural category ("one", "few", "other", ...)."""
        return self.locale.plural_form(count)


# CLDR phrases used instead of a count for small offsets, keyed by language.
# Babel's locale data carries only the counted patterns.
_NAMED_RELATIVE: dict[str, dict[tuple[str, int], str]] = {
    "de": {
        ("second", 0): "jetzt",
        ("minute", 0): "in dieser Minute",
        ("hour", 0): "in dieser Stunde",
        ("day", -2): "vorgestern",
        ("day", -1): "gestern",
        ("day", 0): "heute",
        ("day", 1): "morgen",
        ("day", 2): "übermorgen",
        ("week", -1): "letzte Woche",
        ("week", 0): "diese Woche",
        ("week", 1): "nächste Woche",
        ("month", -1): "letzten Monat",
        ("month", 0): "diesen Monat",
        ("month", 1): "nächsten Monat",
        ("year", -1): "letztes Jahr",
        ("year", 0): "dieses Jahr",
        ("year", 1): "nächstes Jahr",
    },
    "fr": {
        ("second", 0): "maintenant",
        ("minute", 0): "cette minute-ci",
        ("hour", 0): "cette heure-ci",
        ("day", -2): "avant-hier",
        ("day", -1): "hier",
        ("day", 0): "aujourd’hui",
        ("day", 1): "demain",
        ("day", 2): "après-demain",
        ("week", -1): "la semaine dernière",
        ("week", 0): "cette semaine",
        ("week", 1): "la semaine prochaine",
        ("month", -1): "le mois dernier",
        ("month", 0): "ce mois-ci",
        ("month", 1): "le mois prochain",
        ("year", -1): "l’année dernière",
        ("year", 0): "cette année",
        ("year", 1): "l’année prochaine",
    },
    "es": {
        ("second", 0): "ahora",
        ("minute", 0): "este minuto",
        ("hour", 0): "esta hora",
        ("day", -2): "anteayer",
        ("day", -1): "ayer",
        ("day", 0): "hoy",
        ("day", 1): "mañana",
        ("day", 2): "pasado mañana",
        ("week", -1): "la semana pasada",
        ("week", 0): "esta semana",
        ("week", 1): "la próxima semana",
        ("month", -1): "el mes pasado",
        ("month", 0): "este mes",
        ("month", 1): "el próximo mes",
        ("year", -1): "el año pasado",
        ("year", 0): "este año",
        ("year", 1): "el próximo año",
    },
    "it": {
        ("second", 0): "ora",
        ("day", -1): "ieri",
        ("day", 0): "oggi",
        ("day", 1): "domani",
    },
    "pt": {
        ("second", 0): "agora",
        ("day", -1): "ontem",
        ("day", 0): "hoje",
        ("day", 1): "amanhã",
    },
    "nl": {
        ("second", 0): "nu",
        ("day", -1): "gisteren",
        ("day", 0): "vandaag",
        ("day", 1): "morgen",
    },
    "ru": {
        ("second", 0): "сейчас",
        ("day", -1): "вчера",
        ("day", 0): "сегодня",
        ("day", 1): "завтра",
    },
    "ja": {
        ("second", 0): "今",
        ("day", -1): "昨日",
        ("day", 0): "今日",
        ("day", 1): "明日",
    },
}


class BabelEngine(LocaleEngine):
    """Engine rendering relative time from CLDR's per-unit patterns.

    The unit is never re-bucketed: ``(-90, "day")`` is always "90 days ago"
    in the locale's words. Small offsets with a CLDR name ("gestern",
    "maintenant") use the name instead of a count.
    """

    @override
    def format_relative_time(self, count: int, unit: Unit) -> str:
        _check_unit(unit)
        named = _NAMED_RELATIVE.get(self.locale.language, {}).get((unit, count))
        if named is not None:
            return named

        direction = "past" if count < 0 else "future"
        patterns = self.locale._data["date_fields"][unit][direction]
        amount = abs(count)
        pattern = patterns.get(self.plural_category(amount), patterns["other"])
        return pattern.replace("{0}", self.format_number(amount))

    @override
    def format_ordinal(self, value: int) -> str:
        # CLDR has no ordinal number pattern outside rule-based formats
        return str(value)


# Phrases for the offsets English spells out instead of counting
_ENGLISH_NAMED: dict[tuple[str, int], str] = {
    ("second", 0): "now",
    ("minute", 0): "this minute",
    ("hour", 0): "this hour",
    ("day", -1): "yesterday",
    ("day", 0): "today",
    ("day", 1): "tomorrow",
    ("week", -1): "last week",
    ("week", 0): "this week",
    ("week", 1): "next week",
    ("month", -1): "last month",
    ("month", 0): "this month",
    ("month", 1): "next month",
    ("year", -1): "last year",
    ("year", 0): "this year",
    ("year", 1): "next year",
}


class EnglishEngine(BabelEngine):
    """English engine with hard-coded relative phrases and ordinal suffixes."""

    @override
    def format_relative_time(self, count: int, unit: Unit) -> str:
        _check_unit(unit)
        named = _ENGLISH_NAMED.get((unit, count))
        if named is not None:
            return named

        amount = abs(count)
        label = unit if amount == 1 else f"{unit}s"
        if count < 0:
            return f"{amount:,} {label} ago"
        return f"in {amount:,} {label}"

    @override
    def format_ordinal(self, value: int) -> str:
        last_two = abs(value) % 100
        if 11 <= last_two <= 13:
            return f"{value}th"
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(abs(value) % 10, "th")
        return f"{value}{suffix}"


@lru_cache(maxsize=64)
def _cached_engine(tag: str) -> LocaleEngine:
    engine_class = EnglishEngine if tag.lower().startswith("en") else BabelEngine
    logger.debug("Creating %s for locale %r", engine_class.__name__, tag)
    return engine_class(tag)


def engine_for(tag: str) -> LocaleEngine:
    """Return the shared engine for a locale tag.

    English locales get ``EnglishEngine``; all others use ``BabelEngine``.

    Raises:
        InvalidInput: If the tag is not a string or names an unknown locale
    """
    if not isinstance(tag, str):
        raise InvalidInput(f"Locale must be a string, got {type(tag).__name__!r}")
    return _cached_engine(tag)


def resolve_engine(tag: str, engine: LocaleEngine | None) -> LocaleEngine:
    """Prefer an explicitly injected engine over the locale lookup."""
    return engine if engine is not None else engine_for(tag)
