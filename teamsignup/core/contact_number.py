"""Contact Number Normalization - canonical +20XXXXXXXXXX WhatsApp numbers.

Invariants:
    - Pure: no IO
    - Output always matches CANONICAL_PATTERN or ValueError is raised
    - Normalization is idempotent: normalize(normalize(x)) == normalize(x)
"""

import re

COUNTRY_CODE = "20"
CANONICAL_PATTERN = re.compile(r"^\+20\d{10}$")
_NON_DIGITS = re.compile(r"\D")


def normalize_whatsapp_number(value: str) -> str:
    """Strip formatting and add the Egyptian country code when missing."""
    digits = _NON_DIGITS.sub("", value)
    if digits.startswith(COUNTRY_CODE) and len(digits) >= 11:
        normalized = f"+{digits}"
    elif len(digits) == 10:
        normalized = f"+{COUNTRY_CODE}{digits}"
    else:
        raise ValueError("Invalid phone number format")
    if not CANONICAL_PATTERN.match(normalized):
        raise ValueError("Must be a valid Egyptian phone number")
    return normalized
