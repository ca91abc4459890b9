"""Validators for common data shapes.

Checksum validators (Luhn, ISBN) strip formatting characters, check the
digit count and then run the checksum. Structural validators are regular
expression or parser based. Validators report mismatches through their
return value; they never raise because a value does not match.
"""

import json
import re
from dataclasses import dataclass, field
from typing import Any, Literal, TypeAlias
from urllib.parse import urlsplit

from dateutil import parser

CardType: TypeAlias = Literal["visa", "mastercard", "amex", "discover", "diners", "jcb"]
IsbnKind: TypeAlias = Literal["ISBN-10", "ISBN-13"]

_NON_DIGITS = re.compile(r"\D")


@dataclass(frozen=True)
class CardCheck:
    """Result of a credit card check.

    Attributes:
        valid: True if the number passes the Luhn checksum
        card_type: Network detected from the prefix, independent of validity
    """

    valid: bool
    card_type: CardType | None


@dataclass(frozen=True)
class IsbnCheck:
    valid: bool
    kind: IsbnKind | None


# First match wins
_CARD_PREFIXES: tuple[tuple[CardType, re.Pattern[str]], ...] = (
    ("visa", re.compile(r"4")),
    ("mastercard", re.compile(r"5[1-5]")),
    ("amex", re.compile(r"3[47]")),
    ("discover", re.compile(r"6(?:011|5)")),
    ("diners", re.compile(r"3[0689]")),
    ("jcb", re.compile(r"35")),
)


def luhn_checksum_ok(digits: str) -> bool:
    """Return True if a digit string passes the Luhn mod-10 check."""
    total = 0
    for position, char in enumerate(reversed(digits)):
        digit = int(char)
        if position % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


def detect_card_type(digits: str) -> CardType | None:
    for card_type, prefix in _CARD_PREFIXES:
        if prefix.match(digits):
            return card_type
    return None


def is_valid_credit_card(number: Any) -> CardCheck:
    """Validate a card number with the Luhn checksum and detect its network.

    Example:
        >>> is_valid_credit_card("4111 1111 1111 1111")
        CardCheck(valid=True, card_type='visa')
    """
    if not isinstance(number, str):
        return CardCheck(valid=False, card_type=None)

    digits = _NON_DIGITS.sub("", number)
    if not 13 <= len(digits) <= 19:
        return CardCheck(valid=False, card_type=None)

    return CardCheck(valid=luhn_checksum_ok(digits), card_type=detect_card_type(digits))


def _isbn10_ok(chars: str) -> bool:
    body, check = chars[:9], chars[9]
    if not (body.isascii() and body.isdigit()):
        return False
    if check == "X":
        check_value = 10
    elif check.isascii() and check.isdigit():
        check_value = int(check)
    else:
        return False
    total = sum(int(d) * (10 - i) for i, d in enumerate(body))
    return (total + check_value) % 11 == 0


def _isbn13_ok(chars: str) -> bool:
    if not (chars.isascii() and chars.isdigit()):
        return False
    total = sum(int(d) * (1 if i % 2 == 0 else 3) for i, d in enumerate(chars[:12]))
    return (10 - total % 10) % 10 == int(chars[12])


def is_valid_isbn(isbn: Any) -> IsbnCheck:
    """Validate an ISBN-10 or ISBN-13, ignoring hyphens and spaces."""
    if not isinstance(isbn, str):
        return IsbnCheck(valid=False, kind=None)

    cleaned = re.sub(r"[-\s]", "", isbn)
    if len(cleaned) == 10:
        return IsbnCheck(valid=_isbn10_ok(cleaned), kind="ISBN-10")
    if len(cleaned) == 13:
        return IsbnCheck(valid=_isbn13_ok(cleaned), kind="ISBN-13")
    return IsbnCheck(valid=False, kind=None)


_SSN_REJECTS = (
    re.compile(r"000"),  # area 000
    re.compile(r"666"),  # area 666
    re.compile(r"9"),  # area 900-999
    re.compile(r".{3}00"),  # group 00
    re.compile(r".{5}0000"),  # serial 0000
)


def is_valid_ssn(ssn: Any) -> bool:
    """Validate a US social security number's structure."""
    if not isinstance(ssn, str):
        return False
    digits = _NON_DIGITS.sub("", ssn)
    if len(digits) != 9:
        return False
    return not any(pattern.match(digits) for pattern in _SSN_REJECTS)


_EMAIL = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def is_valid_email(email: Any) -> bool:
    return isinstance(email, str) and _EMAIL.fullmatch(email) is not None


# Schemes that are meaningless without a host
_HOST_SCHEMES = {"http", "https", "ftp", "ws", "wss"}


def is_valid_url(
    url: Any,
    *,
    protocols: tuple[str, ...] = ("http:", "https:"),
    require_protocol: bool = False,
) -> bool:
    """Check that ``url`` is absolute and uses one of ``protocols``.

    Protocols are written with their trailing colon ("https:").
    ``require_protocol`` is kept for call compatibility; a scheme is always
    required.
    """
    if not isinstance(url, str) or any(c.isspace() for c in url.strip()):
        return False
    try:
        parts = urlsplit(url.strip())
        # Accessing port validates it
        parts.port
    except ValueError:
        return False

    if not parts.scheme:
        return False
    if parts.scheme in _HOST_SCHEMES and not parts.hostname:
        return False
    return f"{parts.scheme}:" in protocols


# Matched against the number with every non-digit removed
_PHONE_PATTERNS: dict[str, re.Pattern[str]] = {
    "US": re.compile(r"1?[2-9]\d{2}[2-9]\d{2}\d{4}"),
    "UK": re.compile(r"(?:44|0)[1-9]\d{8,9}"),
    "IN": re.compile(r"(?:91|0)?[6-9]\d{9}"),
    "CA": re.compile(r"1?[2-9]\d{2}[2-9]\d{2}\d{4}"),
    "AU": re.compile(r"(?:61|0)[2-478]\d{8}"),
    "DE": re.compile(r"(?:49|0)[1-9]\d{1,4}\d{1,4}\d{1,4}"),
    "FR": re.compile(r"(?:33|0)[1-9]\d{8}"),
    "JP": re.compile(r"(?:81|0)[789]0\d{8}"),
    "CN": re.compile(r"(?:86|0)?1[3-9]\d{9}"),
    "BR": re.compile(r"(?:55|0)?[1-9]{2}[2-9]\d{8}"),
}


def is_valid_phone(phone: Any, country: str | None = None) -> bool:
    """Validate a phone number, optionally against a country's numbering plan.

    Without a country any 7-15 digit number passes. Unknown countries fail.
    """
    if not isinstance(phone, str):
        return False
    digits = _NON_DIGITS.sub("", phone)

    if country is None:
        return re.fullmatch(r"\d{7,15}", digits) is not None

    pattern = _PHONE_PATTERNS.get(str(country).upper())
    return pattern is not None and pattern.fullmatch(digits) is not None


@dataclass(frozen=True, kw_only=True)
class PasswordPolicy:
    min_length: int = 8
    max_length: int = 128
    require_uppercase: bool = True
    require_lowercase: bool = True
    require_numbers: bool = True
    require_symbols: bool = False


@dataclass(frozen=True)
class PasswordReport:
    """Outcome of ``validate_password``.

    Attributes:
        valid: True when no feedback was produced
        score: Number of checks passed (higher is stronger)
        strength: "weak" (<= 2), "medium" (<= 4) or "strong"
        feedback: Human-readable reasons the password falls short
    """

    valid: bool
    score: int
    strength: Literal["weak", "medium", "strong"]
    feedback: tuple[str, ...] = field(default=())


_SYMBOLS = re.compile(r"""[!@#$%^&*()_+\-=\[\]{};':"\\|,.<>/?]""")


def validate_password(
    password: Any, policy: PasswordPolicy | None = None
) -> PasswordReport:
    """Score a password against a policy and explain what is missing."""
    if not isinstance(password, str):
        return PasswordReport(False, 0, "weak", ("Password must be a string",))

    rules = policy if policy is not None else PasswordPolicy()
    feedback: list[str] = []
    score = 0

    if len(password) < rules.min_length:
        feedback.append(f"Password must be at least {rules.min_length} characters long")
    else:
        score += 1

    if len(password) > rules.max_length:
        feedback.append(
            f"Password must be no more than {rules.max_length} characters long"
        )

    checks = (
        (rules.require_uppercase, r"[A-Z]", "one uppercase letter"),
        (rules.require_lowercase, r"[a-z]", "one lowercase letter"),
        (rules.require_numbers, r"\d", "one number"),
    )
    for required, pattern, what in checks:
        if not required:
            continue
        if re.search(pattern, password):
            score += 1
        else:
            feedback.append(f"Password must contain at least {what}")

    if rules.require_symbols:
        if _SYMBOLS.search(password):
            score += 1
        else:
            feedback.append("Password must contain at least one special character")

    if len(password) >= 12:
        score += 1
    if re.search(r"(.)\1{2,}", password):
        feedback.append("Password should not contain repeated characters")
    else:
        score += 1

    strength = "weak" if score <= 2 else "medium" if score <= 4 else "strong"
    return PasswordReport(not feedback, score, strength, tuple(feedback))


_IPV4 = re.compile(
    r"(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}"
    r"(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)"
)
_IPV6 = re.compile(r"(?:[0-9a-fA-F]{1,4}:){7}[0-9a-fA-F]{1,4}")


def is_valid_ip(ip: Any, version: str = "v4") -> bool:
    """Validate a dotted IPv4 or full (uncompressed) IPv6 address."""
    if not isinstance(ip, str):
        return False
    if version == "v4":
        return _IPV4.fullmatch(ip) is not None
    if version == "v6":
        return _IPV6.fullmatch(ip) is not None
    return False


_DATE_SHAPES = {
    "YYYY-MM-DD": re.compile(r"\d{4}-\d{2}-\d{2}"),
    "MM/DD/YYYY": re.compile(r"\d{2}/\d{2}/\d{4}"),
    "DD/MM/YYYY": re.compile(r"\d{2}/\d{2}/\d{4}"),
    "YYYY/MM/DD": re.compile(r"\d{4}/\d{2}/\d{2}"),
}


def is_valid_date(text: Any, fmt: str | None = None) -> bool:
    """Check that ``text`` parses as a date, optionally with a fixed shape."""
    if not isinstance(text, str):
        return False
    try:
        parser.parse(text, dayfirst=fmt == "DD/MM/YYYY")
    except (parser.ParserError, OverflowError, ValueError):
        return False

    shape = _DATE_SHAPES.get(fmt) if fmt else None
    return shape is None or shape.fullmatch(text) is not None


def is_valid_json(text: Any) -> bool:
    if not isinstance(text, str):
        return False
    try:
        json.loads(text)
    except json.JSONDecodeError:
        return False
    return True


_UUID = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}",
    re.IGNORECASE,
)


def is_valid_uuid(value: Any, version: int | str | None = None) -> bool:
    """Validate an RFC 4122 UUID (versions 1-5), optionally of one version."""
    if not isinstance(value, str) or _UUID.fullmatch(value) is None:
        return False
    if version:
        return value[14] == str(version)
    return True


_HEX_COLOR = re.compile(r"#(?:[A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})")


def is_valid_hex_color(color: Any) -> bool:
    return isinstance(color, str) and _HEX_COLOR.fullmatch(color) is not None


_POSTAL_PATTERNS: dict[str, re.Pattern[str]] = {
    "US": re.compile(r"\d{5}(?:-\d{4})?"),
    "CA": re.compile(r"[A-Za-z]\d[A-Za-z] \d[A-Za-z]\d"),
    "UK": re.compile(r"[A-Z]{1,2}\d[A-Z\d]? \d[A-Z]{2}"),
    "DE": re.compile(r"\d{5}"),
    "FR": re.compile(r"\d{5}"),
    "JP": re.compile(r"\d{3}-\d{4}"),
    "IN": re.compile(r"\d{6}"),
    "AU": re.compile(r"\d{4}"),
    "BR": re.compile(r"\d{5}-?\d{3}"),
}


def is_valid_postal_code(code: Any, country: str = "US") -> bool:
    """Validate a postal code for a country. Unknown countries fail."""
    if not isinstance(code, str) or not isinstance(country, str):
        return False
    pattern = _POSTAL_PATTERNS.get(country.upper())
    return pattern is not None and pattern.fullmatch(code) is not None
