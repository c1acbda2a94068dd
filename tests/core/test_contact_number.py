"""Contact Number Normalization - observable contract of the number format."""

import pytest

from teamsignup.core.contact_number import normalize_whatsapp_number


@pytest.mark.parametrize("raw, expected", [
    ("+201234567890", "+201234567890"),
    ("201234567890", "+201234567890"),
    ("1234567890", "+201234567890"),
    ("+20 123 456 7890", "+201234567890"),
    ("123-456-7890", "+201234567890"),
])
def test_normalizes_to_canonical_form(raw, expected):
    assert normalize_whatsapp_number(raw) == expected


@pytest.mark.parametrize("raw", [
    "",
    "12345",
    "123456789",
    "+1 555 123 4567 8",
    "2012345678901",
    "01234567890",
])
def test_rejects_invalid_numbers(raw):
    with pytest.raises(ValueError):
        normalize_whatsapp_number(raw)


def test_normalization_is_idempotent():
    once = normalize_whatsapp_number("1234567890")
    assert normalize_whatsapp_number(once) == once
