"""Human-readable number formatting.

``shorten_number`` is table driven: the first tier of ``MAGNITUDE_SUFFIXES``
whose threshold the magnitude reaches wins, so exact multiples such as 1e9
always take the larger suffix. Locale-sensitive helpers delegate to a
``LocaleEngine``.
"""

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

from friendlyfy.errors import InvalidInput
from friendlyfy.i18n import LocaleEngine, resolve_engine
from friendlyfy.util import MAGNITUDE_SUFFIXES

_DECIMAL_SIZES = ("Bytes", "KB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB")
_BINARY_SIZES = ("Bytes", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB", "ZiB", "YiB")


def _is_real(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _require_number(value: Any, message: str = "Invalid number provided") -> None:
    if not _is_real(value) or not math.isfinite(value):
        raise InvalidInput(f"{message}: {value!r}")


def _require_count(value: Any, name: str, minimum: int = 0) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise InvalidInput(f"Invalid {name} provided: {value!r}")


def plain_number(value: float) -> str:
    """Render a number the way JavaScript's ``Number#toString`` does.

    Shortest round-trip digits, in plain notation for magnitudes from 1e-6
    up to 1e21 and exponential otherwise ("1e-7", "1e+21"). Integral floats
    drop ".0".
    """
    if not isinstance(value, float):
        return str(value)
    if not math.isfinite(value):
        return repr(value)
    if value == 0:
        return "0"

    negative, digits, exponent = Decimal(repr(value)).normalize().as_tuple()
    text = "".join(map(str, digits))
    size = len(text)
    point = exponent + size  # position of the decimal point in ``text``

    if size <= point <= 21:
        body = text + "0" * (point - size)
    elif 0 < point <= 21:
        body = f"{text[:point]}.{text[point:]}"
    elif -6 < point <= 0:
        body = "0." + "0" * -point + text
    else:
        power = point - 1
        mantissa = text[0] + (f".{text[1:]}" if size > 1 else "")
        body = f"{mantissa}e{'+' if power > 0 else '-'}{abs(power)}"
    return f"-{body}" if negative else body


def to_fixed(value: float, decimals: int) -> str:
    """Fixed-point rendering with ties rounded away from zero."""
    with localcontext() as ctx:
        ctx.prec = 1000
        quantized = Decimal(value).quantize(
            Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP
        )
    return format(quantized, "f")


def _strip_zeros(text: str) -> str:
    if "." not in text:
        return text
    return text.rstrip("0").rstrip(".")


def shorten_number(value: float, decimals: int = 1) -> str:
    """Shorten a number with a K/M/B/T suffix.

    Example:
        >>> shorten_number(12543)
        '12.5K'
        >>> shorten_number(1_000_000_000)
        '1B'
        >>> shorten_number(999)
        '999'

    Raises:
        InvalidInput: If value is not a finite real number
    """
    _require_number(value)
    _require_count(decimals, "decimals")

    magnitude = abs(value)
    if magnitude < 1000:
        return plain_number(value)

    sign = "-" if value < 0 else ""
    for threshold, suffix in MAGNITUDE_SUFFIXES:
        if magnitude >= threshold:
            scaled = _strip_zeros(to_fixed(magnitude / threshold, decimals))
            return f"{sign}{scaled}{suffix}"

    return plain_number(value)  # unreachable: the K tier covers >= 1000


def humanize_number(value: float, decimals: int = 1) -> str:
    """Alias of ``shorten_number``."""
    return shorten_number(value, decimals)


def round_number(value: float, decimals: int = 2) -> float:
    """Round to ``decimals`` places, ties toward positive infinity."""
    _require_number(value)
    _require_count(decimals, "decimals")
    factor = 10**decimals
    return math.floor(value * factor + 0.5) / factor


def format_with_commas(
    value: float, locale: str = "en-US", *, engine: LocaleEngine | None = None
) -> str:
    _require_number(value)
    return resolve_engine(locale, engine).format_number(value)


def format_currency(
    value: float,
    currency: str = "USD",
    locale: str = "en-US",
    *,
    engine: LocaleEngine | None = None,
) -> str:
    _require_number(value)
    return resolve_engine(locale, engine).format_currency(value, currency)


def format_percentage(
    value: float,
    decimals: int = 1,
    locale: str = "en-US",
    *,
    engine: LocaleEngine | None = None,
) -> str:
    """Format a ratio as a percentage (0.256 -> "25.6%")."""
    _require_number(value)
    _require_count(decimals, "decimals")
    return resolve_engine(locale, engine).format_percent(value, decimals)


def format_compact(
    value: float, locale: str = "en-US", *, engine: LocaleEngine | None = None
) -> str:
    """Locale-aware compact notation ("1.5M", "1,5 Mio.")."""
    _require_number(value)
    return resolve_engine(locale, engine).format_compact(value)


def format_file_size(
    size: float,
    *,
    precision: int = 2,
    binary: bool = False,
    unit: str = "auto",
) -> str:
    """Format a byte count ("1.50 MB", "1.00 KiB").

    Raises:
        InvalidInput: If size is negative or unit is not in the selected table
    """
    _require_number(size, "Invalid file size provided")
    _require_count(precision, "precision")
    if size < 0:
        raise InvalidInput(f"Invalid file size provided: {size!r}")

    if size == 0:
        return "0 Bytes"

    base = 1024 if binary else 1000
    sizes = _BINARY_SIZES if binary else _DECIMAL_SIZES

    if unit != "auto":
        if unit not in sizes:
            valid = ", ".join(sizes)
            raise InvalidInput(f"Invalid unit '{unit}'. Valid units: {valid}")
        index = sizes.index(unit)
    else:
        index = 0
        while index < len(sizes) - 1 and size >= base ** (index + 1):
            index += 1

    return f"{to_fixed(size / base**index, precision)} {sizes[index]}"


def format_ordinal(
    value: int, locale: str = "en-US", *, engine: LocaleEngine | None = None
) -> str:
    """Format an ordinal ("1st", "12th", "23rd" in English)."""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput(f"Invalid number provided: {value!r}")
    return resolve_engine(locale, engine).format_ordinal(value)


def format_range(
    start: float,
    end: float,
    *,
    separator: str = "-",
    include_start: bool = True,
    include_end: bool = True,
    format_numbers: bool = True,
    locale: str = "en-US",
    engine: LocaleEngine | None = None,
) -> str:
    """Format a numeric range ("1,000-5,000").

    Raises:
        InvalidInput: If start > end or both ends are excluded
    """
    _require_number(start, "Invalid range provided")
    _require_number(end, "Invalid range provided")
    if start > end:
        raise InvalidInput("Start value cannot be greater than end value")
    if not include_start and not include_end:
        raise InvalidInput("At least one of start or end must be included")

    def render(number: float) -> str:
        if format_numbers:
            return format_with_commas(number, locale, engine=engine)
        return plain_number(number)

    start_text = render(start) if include_start else ""
    end_text = render(end) if include_end else ""

    if start == end:
        return start_text

    return f"{start_text}{separator}{end_text}"


def pluralize(
    count: float,
    singular: str,
    plural: str | None = None,
    locale: str = "en-US",
    *,
    engine: LocaleEngine | None = None,
) -> str:
    """Pick the singular or plural form for ``count`` ("1 item", "3 items")."""
    _require_number(count, "Invalid count provided")
    if not isinstance(singular, str):
        raise InvalidInput("Invalid singular form provided")

    plural_form = plural or f"{singular}s"
    category = resolve_engine(locale, engine).plural_category(count)
    word = singular if category == "one" else plural_form
    return f"{plain_number(count)} {word}"


def format_ratio(
    numerator: float,
    denominator: float,
    *,
    precision: int = 2,
    show_percentage: bool = False,
    show_fraction: bool = False,
    locale: str = "en-US",
    engine: LocaleEngine | None = None,
) -> str:
    """Format a ratio as a decimal, a percentage or a literal fraction."""
    _require_number(numerator, "Invalid ratio provided")
    _require_number(denominator, "Invalid ratio provided")
    _require_count(precision, "precision")
    if denominator == 0:
        raise InvalidInput("Denominator cannot be zero")

    if show_fraction:
        return f"{plain_number(numerator)}/{plain_number(denominator)}"

    ratio = numerator / denominator
    if show_percentage:
        return format_percentage(ratio, precision, locale, engine=engine)

    return to_fixed(ratio, precision)


def format_significant(
    value: float,
    digits: int = 3,
    locale: str = "en-US",
    *,
    engine: LocaleEngine | None = None,
) -> str:
    """Render exactly ``digits`` significant digits (1234.5678 -> "1,230")."""
    _require_number(value)
    _require_count(digits, "digits", minimum=1)
    return resolve_engine(locale, engine).format_significant(value, digits)


def format_engineering(
    value: float,
    precision: int = 2,
    locale: str = "en-US",
    *,
    engine: LocaleEngine | None = None,
) -> str:
    """Scientific notation with fixed fraction digits (1234567 -> "1.23E6")."""
    _require_number(value)
    _require_count(precision, "precision")
    return resolve_engine(locale, engine).format_scientific(value, precision)


def is_valid_number(value: Any) -> bool:
    return _is_real(value) and math.isfinite(value)


def is_valid_integer(value: Any) -> bool:
    if not is_valid_number(value):
        return False
    return isinstance(value, int) or float(value).is_integer()


def clamp_number(value: float, minimum: float, maximum: float) -> float:
    """Clamp ``value`` into [minimum, maximum]."""
    if not all(is_valid_number(v) for v in (value, minimum, maximum)):
        raise InvalidInput("Invalid number provided")
    if minimum > maximum:
        raise InvalidInput("Min value cannot be greater than max value")
    return min(max(value, minimum), maximum)
