"""Hashes, tokens, identifiers and password hashing.

All randomness comes from ``secrets``. Password hashing uses scrypt and
runs in a worker thread so callers on an event loop are not blocked.
"""

import asyncio
import base64
import hashlib
import hmac
import logging
import math
import re
import secrets
import string
import time
import uuid
from dataclasses import dataclass
from typing import Any, Literal, TypeAlias

from friendlyfy.errors import InvalidInput, OperationFailed

logger = logging.getLogger(__name__)

Encoding: TypeAlias = Literal["hex", "base64", "base64url"]

_SIMILAR_FREE = {
    "lower": "abcdefghjkmnpqrstuvwxyz",
    "upper": "ABCDEFGHJKMNPQRSTUVWXYZ",
    "digits": "23456789",
}
_SYMBOL_CHARS = "!@#$%^&*()_+-=[]{}|;:,.<>?"
_BASE36 = string.digits + string.ascii_lowercase

# Number of time windows a CSRF token stays valid for
CSRF_WINDOWS = 10


def _require_str(*values: Any, message: str) -> None:
    if not all(isinstance(v, str) for v in values):
        raise InvalidInput(message)


def _require_positive(value: Any, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidInput(f"{name} must be a positive integer, got {value!r}")


def _encode(raw: bytes, encoding: str) -> str:
    if encoding == "hex":
        return raw.hex()
    if encoding == "base64":
        return base64.b64encode(raw).decode("ascii")
    if encoding == "base64url":
        return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")
    raise InvalidInput(
        f"Invalid encoding '{encoding}'. Valid encodings: hex, base64, base64url"
    )


def _digest_name(algorithm: str) -> str:
    name = algorithm.lower().replace("-", "") if isinstance(algorithm, str) else ""
    if name not in hashlib.algorithms_available:
        raise InvalidInput(f"Unsupported hash algorithm: {algorithm!r}")
    return name


def hash_string(
    data: str, algorithm: str = "sha256", encoding: Encoding = "hex"
) -> str:
    """Digest a UTF-8 string.

    Example:
        >>> hash_string("hello")[:16]
        '2cf24dba5fb0a30e'
    """
    _require_str(data, message="Data must be a string")
    digest = hashlib.new(_digest_name(algorithm), data.encode("utf-8")).digest()
    return _encode(digest, encoding)


def hmac_string(
    data: str, secret: str, algorithm: str = "sha256", encoding: Encoding = "hex"
) -> str:
    _require_str(data, secret, message="Data and secret must be strings")
    digest = _digest_name(algorithm)
    mac = hmac.new(secret.encode("utf-8"), data.encode("utf-8"), digest)
    return _encode(mac.digest(), encoding)


def random_string(length: int = 32, encoding: Encoding = "hex") -> str:
    """Random text of exactly ``length`` characters in the given encoding."""
    _require_positive(length, "Length")
    # Any encoding yields at least one character per byte
    return _encode(secrets.token_bytes(length), encoding)[:length]


def generate_random_bytes(size: int = 32) -> bytes:
    _require_positive(size, "Size")
    return secrets.token_bytes(size)


def generate_uuid() -> str:
    """Random (version 4) UUID in canonical hyphenated form."""
    return str(uuid.UUID(bytes=secrets.token_bytes(16), version=4))


def generate_token(
    length: int = 32,
    *,
    include_uppercase: bool = True,
    include_lowercase: bool = True,
    include_numbers: bool = True,
    include_symbols: bool = False,
    exclude_similar: bool = True,
) -> str:
    """Token over a chosen alphabet; ``exclude_similar`` drops i, l, o, 0 and 1."""
    _require_positive(length, "Length")
    parts = []
    lower, upper, digits = (
        (_SIMILAR_FREE["lower"], _SIMILAR_FREE["upper"], _SIMILAR_FREE["digits"])
        if exclude_similar
        else (string.ascii_lowercase, string.ascii_uppercase, string.digits)
    )
    if include_lowercase:
        parts.append(lower)
    if include_uppercase:
        parts.append(upper)
    if include_numbers:
        parts.append(digits)
    if include_symbols:
        parts.append(_SYMBOL_CHARS)

    alphabet = "".join(parts)
    if not alphabet:
        raise InvalidInput("No character set specified")
    return "".join(secrets.choice(alphabet) for _ in range(length))


@dataclass(frozen=True, kw_only=True)
class ScryptParams:
    """scrypt settings shared by ``hash_password`` and ``verify_password``.

    Attributes:
        salt_length: Bytes of random salt
        key_length: Bytes of derived key
        cost: CPU/memory cost N (a power of two)
        block_size: Block size r
        parallelization: Parallelization p
    """

    salt_length: int = 32
    key_length: int = 64
    cost: int = 16384
    block_size: int = 8
    parallelization: int = 1

    def __post_init__(self) -> None:
        if self.cost < 2 or self.cost & (self.cost - 1):
            raise InvalidInput(
                f"scrypt cost must be a power of two greater than 1, got {self.cost}"
            )

    def maxmem(self) -> int:
        # scrypt needs 128 * N * r bytes plus headroom
        return 128 * self.cost * self.block_size * 2 + 1024 * 1024


def _derive(password: str, salt: bytes, params: ScryptParams) -> bytes:
    try:
        return hashlib.scrypt(
            password.encode("utf-8"),
            salt=salt,
            n=params.cost,
            r=params.block_size,
            p=params.parallelization,
            maxmem=params.maxmem(),
            dklen=params.key_length,
        )
    except (ValueError, MemoryError) as e:
        logger.warning("scrypt key derivation failed: %s", e)
        raise OperationFailed("derive key", str(e)) from e


async def hash_password(password: str, params: ScryptParams | None = None) -> str:
    """Hash a password with scrypt, returning "salt_hex:key_hex"."""
    _require_str(password, message="Password must be a string")
    settings = params if params is not None else ScryptParams()
    salt = secrets.token_bytes(settings.salt_length)
    logger.debug("Hashing password with scrypt N=%d", settings.cost)
    key = await asyncio.to_thread(_derive, password, salt, settings)
    return f"{salt.hex()}:{key.hex()}"


async def verify_password(
    password: str, stored: str, params: ScryptParams | None = None
) -> bool:
    """Check a password against a "salt_hex:key_hex" hash in constant time.

    Raises:
        InvalidInput: If the stored hash is malformed
    """
    _require_str(password, stored, message="Password and hash must be strings")
    salt_hex, _, key_hex = stored.partition(":")
    try:
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(key_hex)
    except ValueError as e:
        raise InvalidInput("Invalid hash format") from e
    if not salt or not expected:
        raise InvalidInput("Invalid hash format")

    settings = params if params is not None else ScryptParams()
    if settings.key_length != len(expected):
        settings = ScryptParams(
            salt_length=settings.salt_length,
            key_length=len(expected),
            cost=settings.cost,
            block_size=settings.block_size,
            parallelization=settings.parallelization,
        )
    key = await asyncio.to_thread(_derive, password, salt, settings)
    return hmac.compare_digest(key, expected)


def _xor(data: bytes, key: bytes) -> bytes:
    return bytes(b ^ key[i % len(key)] for i, b in enumerate(data))


def xor_encrypt(data: str, key: str) -> str:
    """XOR the UTF-8 bytes of ``data`` with ``key`` and base64 encode.

    Obfuscation only; this is not encryption in any meaningful sense.
    """
    _require_str(data, key, message="Data and key must be strings")
    if not key:
        raise InvalidInput("Key cannot be empty")
    mixed = _xor(data.encode("utf-8"), key.encode("utf-8"))
    return base64.b64encode(mixed).decode("ascii")


def xor_decrypt(encrypted: str, key: str) -> str:
    _require_str(encrypted, key, message="Encrypted data and key must be strings")
    if not key:
        raise InvalidInput("Key cannot be empty")
    try:
        mixed = base64.b64decode(encrypted, validate=True)
        return _xor(mixed, key.encode("utf-8")).decode("utf-8")
    except ValueError as e:
        raise InvalidInput(f"Cannot decrypt data: {e}") from e


def _to_base36(value: int) -> str:
    digits = []
    while True:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
        if value == 0:
            return "".join(reversed(digits))


def _alnum(length: int) -> str:
    """Lowercase alphanumerics of exactly ``length`` characters."""
    result = ""
    while len(result) < length:
        chunk = _encode(secrets.token_bytes(length), "base64")
        result += re.sub(r"[+/=]", "", chunk).lower()
    return result[:length]


def generate_api_key(
    *, prefix: str = "ak", length: int = 32, include_timestamp: bool = False
) -> str:
    """API key such as "ak_3k9x..." or, with a timestamp, "ak_lq2w8c1a_3k9x..."."""
    _require_positive(length, "Length")
    random_part = _alnum(length)
    if include_timestamp:
        stamp = _to_base36(time.time_ns() // 1_000_000)
        return f"{prefix}_{stamp}_{random_part}"
    return f"{prefix}_{random_part}"


def generate_session_id(length: int = 24) -> str:
    _require_positive(length, "Length")
    return _alnum(length)


def _csrf_window(max_age: float, now: float | None) -> int:
    is_number = isinstance(max_age, (int, float)) and not isinstance(max_age, bool)
    if not is_number or max_age <= 0:
        raise InvalidInput(
            f"max_age must be a positive number of seconds, got {max_age!r}"
        )
    current = time.time() if now is None else now
    return math.floor(current / (max_age / CSRF_WINDOWS))


def generate_csrf_token(
    secret: str, session_id: str, *, max_age: float = 3600, now: float | None = None
) -> str:
    """HMAC token bound to a session and the current time window.

    The token is valid for ``max_age`` seconds when verified with the same
    ``max_age``.
    """
    _require_str(secret, session_id, message="Secret and session ID must be strings")
    window = _csrf_window(max_age, now)
    return hmac_string(f"{session_id}:{window}", secret)


def verify_csrf_token(
    token: Any,
    secret: Any,
    session_id: Any,
    *,
    max_age: float = 3600,
    now: float | None = None,
) -> bool:
    """Accept a token issued within the last ``max_age`` seconds."""
    if not all(isinstance(v, str) for v in (token, secret, session_id)):
        return False
    current = _csrf_window(max_age, now)
    for window in range(current, current - CSRF_WINDOWS, -1):
        expected = hmac_string(f"{session_id}:{window}", secret)
        if hmac.compare_digest(token.encode("utf-8"), expected.encode("ascii")):
            return True
    return False


def secure_random_int(minimum: int, maximum: int) -> int:
    """Uniform integer in [minimum, maximum]."""
    for value in (minimum, maximum):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidInput("Min and max must be integers")
    if minimum >= maximum:
        raise InvalidInput("Min must be less than max")
    return minimum + secrets.randbelow(maximum - minimum + 1)


def generate_password_reset_token(length: int = 32) -> str:
    _require_positive(length, "Length")
    return _alnum(length)


def generate_email_verification_token(
    email: str, secret: str, *, now: float | None = None
) -> str:
    """HMAC of the email and the issue time in milliseconds."""
    _require_str(email, secret, message="Email and secret must be strings")
    issued = time.time_ns() // 1_000_000 if now is None else int(now * 1000)
    return hmac_string(f"{email}:{issued}", secret)
