"""String transforms: slugs, case conversion, HTML escaping and masking."""

import re
import secrets
import string
from typing import Any

from friendlyfy.errors import InvalidInput

_HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
}
_HTML_UNESCAPES = {entity: char for char, entity in _HTML_ESCAPES.items()}

_SYMBOL_CHARS = "!@#$%^&*()_+-=[]{}|;:,.<>?"


def _require_str(value: Any) -> None:
    if not isinstance(value, str):
        raise InvalidInput(f"Invalid string provided: {type(value).__name__!r}")


def _require_length(length: Any) -> None:
    if isinstance(length, bool) or not isinstance(length, int) or length < 0:
        raise InvalidInput(f"Invalid length provided: {length!r}")


def slugify(
    text: str, *, separator: str = "-", lower: bool = True, strict: bool = False
) -> str:
    """Convert text to a URL-friendly slug.

    Characters other than ASCII letters, digits, underscores, whitespace and
    hyphens are replaced by ``separator`` (or dropped when ``strict``). Runs
    of whitespace, underscores and hyphens collapse to one separator, and
    separators at either end are removed.

    Example:
        >>> slugify("Hello, World!")
        'hello-world'
    """
    _require_str(text)
    result = text.lower() if lower else text
    result = re.sub(r"[^\w\s-]", "" if strict else separator, result, flags=re.ASCII)
    result = re.sub(r"[\s_-]+", separator, result)
    if separator:
        edge = re.escape(separator)
        result = re.sub(rf"^(?:{edge})+|(?:{edge})+$", "", result)
    return result


def truncate(
    text: str, length: int, *, suffix: str = "...", word_boundary: bool = False
) -> str:
    """Cut ``text`` to ``length`` characters and append ``suffix``.

    With ``word_boundary`` the cut moves back to the last space, if any.
    """
    _require_str(text)
    _require_length(length)
    if len(text) <= length:
        return text

    cut = text[:length]
    if word_boundary:
        last_space = cut.rfind(" ")
        if last_space > 0:
            cut = cut[:last_space]
    return cut + suffix


def capitalize(text: str, lower_rest: bool = False) -> str:
    _require_str(text)
    if not text:
        return text
    rest = text[1:].lower() if lower_rest else text[1:]
    return text[0].upper() + rest


def to_title_case(text: str) -> str:
    """Capitalize each word and lowercase the remainder of it."""
    _require_str(text)
    return re.sub(r"\w\S*", lambda m: m[0][0].upper() + m[0][1:].lower(), text)


def camel_to_kebab(text: str) -> str:
    _require_str(text)
    return re.sub(r"([a-z0-9])([A-Z])", r"\1-\2", text).lower()


def kebab_to_camel(text: str) -> str:
    _require_str(text)
    return re.sub(r"-([a-z])", lambda m: m[1].upper(), text)


def snake_to_camel(text: str) -> str:
    _require_str(text)
    return re.sub(r"_([a-z])", lambda m: m[1].upper(), text)


def camel_to_snake(text: str) -> str:
    _require_str(text)
    return re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", text).lower()


def strip_html(text: str) -> str:
    """Remove anything that looks like a tag. Not a sanitizer."""
    _require_str(text)
    return re.sub(r"<[^>]*>", "", text)


def escape_html(text: str) -> str:
    _require_str(text)
    return re.sub(r"[&<>\"']", lambda m: _HTML_ESCAPES[m[0]], text)


def unescape_html(text: str) -> str:
    """Reverse ``escape_html``; other entities are left untouched."""
    _require_str(text)
    return re.sub(r"&(?:amp|lt|gt|quot|#39);", lambda m: _HTML_UNESCAPES[m[0]], text)


def random_string(
    length: int = 10,
    *,
    include_numbers: bool = True,
    include_uppercase: bool = True,
    include_lowercase: bool = True,
    include_symbols: bool = False,
    custom_chars: str = "",
) -> str:
    """Random string drawn from the selected character classes.

    Raises:
        InvalidInput: If length is negative or no character class is selected
    """
    _require_length(length)
    alphabet = "".join(
        chars
        for enabled, chars in (
            (include_lowercase, string.ascii_lowercase),
            (include_uppercase, string.ascii_uppercase),
            (include_numbers, string.digits),
            (include_symbols, _SYMBOL_CHARS),
            (bool(custom_chars), custom_chars),
        )
        if enabled
    )
    if not alphabet:
        raise InvalidInput("No character set specified")
    return "".join(secrets.choice(alphabet) for _ in range(length))


def mask_string(
    text: str,
    *,
    mask_char: str = "*",
    visible_start: int = 2,
    visible_end: int = 2,
    mask_all: bool = False,
) -> str:
    """Mask the middle of a sensitive string ("4111111111" -> "41******11")."""
    _require_str(text)
    _require_length(visible_start)
    _require_length(visible_end)
    if mask_all or len(text) <= visible_start + visible_end:
        return mask_char * len(text)

    hidden = len(text) - visible_start - visible_end
    tail = text[len(text) - visible_end :]
    return text[:visible_start] + mask_char * hidden + tail


def is_empty(value: Any) -> bool:
    """True for non-strings and for strings that are empty or whitespace."""
    if not isinstance(value, str):
        return True
    return not value.strip()


def word_count(text: str) -> int:
    _require_str(text)
    return len(text.split())


def reverse(text: str) -> str:
    _require_str(text)
    return text[::-1]


def is_palindrome(
    text: str,
    *,
    case_sensitive: bool = False,
    ignore_spaces: bool = True,
    ignore_punctuation: bool = True,
) -> bool:
    """Check whether ``text`` reads the same backwards.

    Example:
        >>> is_palindrome("A man, a plan, a canal: Panama")
        True
    """
    _require_str(text)
    processed = text if case_sensitive else text.lower()
    if ignore_spaces:
        processed = re.sub(r"\s", "", processed)
    if ignore_punctuation:
        processed = re.sub(r"[^\w]", "", processed)
    return processed == processed[::-1]
