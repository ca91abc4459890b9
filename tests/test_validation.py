"""Tests for checksum and structural validators."""

import pytest

from friendlyfy import (
    CardCheck,
    IsbnCheck,
    PasswordPolicy,
    generate_uuid,
    is_valid_credit_card,
    is_valid_date,
    is_valid_email,
    is_valid_hex_color,
    is_valid_ip,
    is_valid_isbn,
    is_valid_json,
    is_valid_phone,
    is_valid_postal_code,
    is_valid_ssn,
    is_valid_url,
    is_valid_uuid,
    validate_password,
)
from friendlyfy.validation import luhn_checksum_ok


@pytest.mark.parametrize(
    "number,expected",
    [
        ("4111111111111111", CardCheck(True, "visa")),
        ("4111 1111 1111 1111", CardCheck(True, "visa")),
        ("4111111111111112", CardCheck(False, "visa")),
        ("5500-0000-0000-0004", CardCheck(True, "mastercard")),
        ("378282246310005", CardCheck(True, "amex")),
        ("6011111111111117", CardCheck(True, "discover")),
        ("30569309025904", CardCheck(True, "diners")),
        ("3530111333300000", CardCheck(True, "jcb")),
        ("123", CardCheck(False, None)),
        (4111111111111111, CardCheck(False, None)),
    ],
)
def test_credit_cards(number, expected):
    """Test Luhn validity and network detection."""
    assert is_valid_credit_card(number) == expected


def test_card_type_is_reported_for_invalid_numbers():
    """Test that detection does not depend on the checksum."""
    result = is_valid_credit_card("5500000000000005")
    assert not result.valid
    assert result.card_type == "mastercard"


def test_luhn_checksum():
    """Test the raw checksum helper."""
    assert luhn_checksum_ok("79927398713")
    assert not luhn_checksum_ok("79927398710")


@pytest.mark.parametrize(
    "isbn,expected",
    [
        ("0-306-40615-2", IsbnCheck(True, "ISBN-10")),
        ("0-306-40615-3", IsbnCheck(False, "ISBN-10")),
        ("080442957X", IsbnCheck(True, "ISBN-10")),
        ("978-0-306-40615-7", IsbnCheck(True, "ISBN-13")),
        ("978-0-306-40615-8", IsbnCheck(False, "ISBN-13")),
        ("978 0 306 40615 7", IsbnCheck(True, "ISBN-13")),
        ("12345", IsbnCheck(False, None)),
        ("X306406152", IsbnCheck(False, "ISBN-10")),
        (None, IsbnCheck(False, None)),
    ],
)
def test_isbn(isbn, expected):
    """Test ISBN-10 and ISBN-13 checksums."""
    assert is_valid_isbn(isbn) == expected


@pytest.mark.parametrize(
    "ssn,expected",
    [
        ("123-45-6789", True),
        ("123456789", True),
        ("000-12-3456", False),
        ("666-12-3456", False),
        ("900-12-3456", False),
        ("123-00-4567", False),
        ("123-45-0000", False),
        ("12-345-678", False),
        (123456789, False),
    ],
)
def test_ssn(ssn, expected):
    """Test SSN area, group and serial rules."""
    assert is_valid_ssn(ssn) is expected


def test_email():
    """Test the email shape check."""
    assert is_valid_email("user@example.com")
    assert is_valid_email("first.last+tag@mail.example.co.uk")
    assert not is_valid_email("user@")
    assert not is_valid_email("user example@test.com")
    assert not is_valid_email(None)


def test_url():
    """Test scheme allow-listing and host requirements."""
    assert is_valid_url("https://example.com/path?q=1")
    assert is_valid_url("http://localhost:8080")
    assert not is_valid_url("ftp://example.com")
    assert is_valid_url("ftp://example.com", protocols=("ftp:",))
    assert not is_valid_url("example.com")
    assert not is_valid_url("http://")
    assert not is_valid_url("https://exa mple.com")
    assert not is_valid_url("https://example.com:99999")
    assert not is_valid_url(42)


def test_phone():
    """Test generic and per-country phone checks."""
    assert is_valid_phone("+1 (555) 234-5678")
    assert not is_valid_phone("12345")
    assert is_valid_phone("(555) 234-5678", "US")
    assert not is_valid_phone("(555) 123-4567", "US")
    assert is_valid_phone("+44 20 7946 0958", "uk")
    assert is_valid_phone("98765 43210", "IN")
    assert not is_valid_phone("5552345678", "XX")


def test_ip():
    """Test dotted IPv4 and full IPv6."""
    assert is_valid_ip("192.168.1.1")
    assert is_valid_ip("0.0.0.0")
    assert not is_valid_ip("256.1.1.1")
    assert not is_valid_ip("1.2.3")
    assert is_valid_ip("2001:0db8:85a3:0000:0000:8a2e:0370:7334", "v6")
    assert not is_valid_ip("::1", "v6")
    assert not is_valid_ip("192.168.1.1", "v5")


def test_date():
    """Test parseability and fixed shapes."""
    assert is_valid_date("2025-01-15")
    assert is_valid_date("January 15, 2025")
    assert is_valid_date("2025-01-15", "YYYY-MM-DD")
    assert not is_valid_date("01/15/2025", "YYYY-MM-DD")
    assert is_valid_date("15/01/2025", "DD/MM/YYYY")
    assert not is_valid_date("2025-02-30")
    assert not is_valid_date("not a date")


def test_json():
    """Test JSON parseability."""
    assert is_valid_json('{"a": [1, 2, null]}')
    assert is_valid_json("42")
    assert not is_valid_json("{a: 1}")
    assert not is_valid_json({"a": 1})


def test_uuid():
    """Test UUID shape and version filter."""
    value = generate_uuid()
    assert is_valid_uuid(value)
    assert is_valid_uuid(value, 4)
    assert not is_valid_uuid(value, 1)
    assert is_valid_uuid("123E4567-E89B-12D3-A456-426614174000")
    assert not is_valid_uuid("123e4567-e89b-62d3-a456-426614174000")
    assert not is_valid_uuid("not-a-uuid")


def test_hex_color():
    """Test three and six digit hex colors."""
    assert is_valid_hex_color("#fff")
    assert is_valid_hex_color("#A0B1C2")
    assert not is_valid_hex_color("fff")
    assert not is_valid_hex_color("#ffff")


def test_postal_code():
    """Test per-country postal code patterns."""
    assert is_valid_postal_code("12345")
    assert is_valid_postal_code("12345-6789", "US")
    assert is_valid_postal_code("K1A 0B1", "CA")
    assert is_valid_postal_code("SW1A 1AA", "UK")
    assert is_valid_postal_code("100-0001", "JP")
    assert not is_valid_postal_code("1234", "US")
    assert not is_valid_postal_code("12345", "XX")


def test_password_strength():
    """Test scoring and feedback with the default policy."""
    strong = validate_password("Passw0rd")
    assert strong.valid
    assert strong.score == 5
    assert strong.strength == "strong"
    assert strong.feedback == ()

    weak = validate_password("abc")
    assert not weak.valid
    assert weak.strength == "weak"
    assert "Password must be at least 8 characters long" in weak.feedback


def test_password_repetition_and_policy():
    """Test the repetition rule and a custom policy."""
    repeated = validate_password("aaaBBB111xyz")
    assert not repeated.valid
    assert "Password should not contain repeated characters" in repeated.feedback

    policy = PasswordPolicy(require_symbols=True, min_length=6)
    assert not validate_password("Passw0rd", policy).valid
    assert validate_password("Passw0rd!", policy).valid


def test_password_rejects_non_string():
    """Test that a non-string password is reported, not raised."""
    report = validate_password(None)
    assert not report.valid
    assert report.score == 0
