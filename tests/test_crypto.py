"""Tests for hashes, tokens and password hashing."""

import base64
import hashlib
import hmac
import re
import string

import pytest

from friendlyfy import (
    InvalidInput,
    ScryptParams,
    generate_api_key,
    generate_csrf_token,
    generate_email_verification_token,
    generate_password_reset_token,
    generate_random_bytes,
    generate_session_id,
    generate_token,
    generate_uuid,
    hash_password,
    hash_string,
    hmac_string,
    secure_random_int,
    secure_random_string,
    verify_csrf_token,
    verify_password,
    xor_decrypt,
    xor_encrypt,
)

# Small cost keeps the suite fast
FAST = ScryptParams(cost=1024, salt_length=16, key_length=32)

UUID_V4 = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-"
    r"4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}"
)


def test_hash_string():
    """Test known digests and encodings."""
    assert hash_string("hello") == (
        "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
    )
    assert hash_string("hello", "md5") == "5d41402abc4b2a76b9719d911017c592"
    assert len(base64.b64decode(hash_string("hello", encoding="base64"))) == 32
    assert "=" not in hash_string("hello", encoding="base64url")


def test_hash_string_rejects_bad_arguments():
    """Test unknown algorithms, encodings and non-string data."""
    with pytest.raises(InvalidInput, match="algorithm"):
        hash_string("x", "sha999")
    with pytest.raises(InvalidInput, match="encoding"):
        hash_string("x", encoding="octal")
    with pytest.raises(InvalidInput):
        hash_string(b"x")


def test_hmac_string_matches_stdlib():
    """Test HMAC output against a direct computation."""
    expected = hmac.new(b"key", b"data", hashlib.sha256).hexdigest()
    assert hmac_string("data", "key") == expected
    assert hmac_string("data", "key", "SHA-256") == expected


def test_random_values():
    """Test lengths and alphabets of random helpers."""
    value = secure_random_string(10)
    assert len(value) == 10
    assert set(value) <= set(string.hexdigits.lower())
    assert len(secure_random_string(7, "base64url")) == 7
    assert len(generate_random_bytes(16)) == 16
    with pytest.raises(InvalidInput):
        generate_random_bytes(0)


def test_generate_uuid_is_version_4():
    """Test the version nibble and variant bits."""
    values = {generate_uuid() for _ in range(50)}
    assert len(values) == 50
    assert all(UUID_V4.fullmatch(v) for v in values)


def test_generate_token_excludes_similar_characters():
    """Test the alphabet options of generate_token."""
    token = generate_token(200)
    assert len(token) == 200
    assert not set(token) & set("ilo01ILO")
    digits_only = generate_token(50, include_uppercase=False, include_lowercase=False)
    assert set(digits_only) <= set("23456789")
    with pytest.raises(InvalidInput):
        generate_token(
            8, include_uppercase=False, include_lowercase=False, include_numbers=False
        )


@pytest.mark.asyncio
async def test_password_round_trip():
    """Test that a hashed password verifies and a wrong one does not."""
    stored = await hash_password("correct horse", FAST)
    salt_hex, key_hex = stored.split(":")
    assert len(bytes.fromhex(salt_hex)) == 16
    assert len(bytes.fromhex(key_hex)) == 32
    assert await verify_password("correct horse", stored, FAST)
    assert not await verify_password("wrong horse", stored, FAST)


@pytest.mark.asyncio
async def test_password_hashes_are_salted():
    """Test that the same password hashes differently each time."""
    assert await hash_password("pw", FAST) != await hash_password("pw", FAST)


@pytest.mark.asyncio
async def test_verify_password_rejects_malformed_hash():
    """Test that a malformed stored hash raises InvalidInput."""
    with pytest.raises(InvalidInput, match="Invalid hash format"):
        await verify_password("pw", "not-a-hash", FAST)
    with pytest.raises(InvalidInput):
        await verify_password("pw", "zz:yy", FAST)


def test_scrypt_cost_must_be_power_of_two():
    """Test ScryptParams validation."""
    with pytest.raises(InvalidInput):
        ScryptParams(cost=1000)


def test_xor_round_trip():
    """Test XOR obfuscation with non-ASCII text."""
    secret = xor_encrypt("héllo wörld ✓", "key")
    assert secret != "héllo wörld ✓"
    assert xor_decrypt(secret, "key") == "héllo wörld ✓"
    with pytest.raises(InvalidInput):
        xor_encrypt("data", "")
    with pytest.raises(InvalidInput):
        xor_decrypt("!!!not base64", "key")


def test_api_keys_and_session_ids():
    """Test prefixes, timestamps and lengths."""
    key = generate_api_key()
    assert re.fullmatch(r"ak_[a-z0-9]{32}", key)
    stamped = generate_api_key(prefix="sk", length=16, include_timestamp=True)
    assert re.fullmatch(r"sk_[a-z0-9]+_[a-z0-9]{16}", stamped)
    assert re.fullmatch(r"[a-z0-9]{24}", generate_session_id())
    assert len(generate_password_reset_token(40)) == 40


def test_csrf_token_window():
    """Test that tokens verify within max_age and expire after it."""
    issued = 1_000_000
    token = generate_csrf_token("secret", "session", now=issued)
    assert verify_csrf_token(token, "secret", "session", now=issued)
    assert verify_csrf_token(token, "secret", "session", now=issued + 3000)
    assert not verify_csrf_token(token, "secret", "session", now=issued + 4000)
    assert not verify_csrf_token(token, "secret", "other", now=issued)
    assert not verify_csrf_token(token, "wrong", "session", now=issued)
    assert not verify_csrf_token(None, "secret", "session", now=issued)


def test_secure_random_int_bounds():
    """Test inclusive bounds and argument checks."""
    values = {secure_random_int(1, 3) for _ in range(300)}
    assert values == {1, 2, 3}
    with pytest.raises(InvalidInput):
        secure_random_int(5, 5)
    with pytest.raises(InvalidInput):
        secure_random_int(1.5, 3)


def test_email_verification_token_is_deterministic_for_a_time():
    """Test that the token depends on email, secret and issue time."""
    first = generate_email_verification_token("a@b.com", "s", now=1000)
    assert first == generate_email_verification_token("a@b.com", "s", now=1000)
    assert first != generate_email_verification_token("a@b.com", "s", now=1001)
    assert len(first) == 64
