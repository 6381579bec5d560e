"""Phone number helpers for comparing owner contact phones."""
from __future__ import annotations

import re
from typing import Optional

import phonenumbers
from phonenumbers import NumberParseException

from core.logging_config import get_logger

LOGGER = get_logger(__name__)

NON_DIGIT = re.compile(r"\D")


def normalize_phone_e164(value: Optional[str], default_region: str = "US") -> Optional[str]:
    """
    Normalize a phone number to E.164 format.

    Uses `is_possible_number` rather than full validation: agency records
    carry plenty of placeholder exchanges that are still worth comparing.

    Args:
        value: Raw phone number string.
        default_region: Default region for parsing (ISO 3166-1 alpha-2).

    Returns:
        E.164 formatted phone number if parseable, otherwise None.
    """
    if not value:
        return None

    cleaned = re.sub(r"[^\d+]", "", value.strip())
    if not cleaned:
        return None

    try:
        parsed = phonenumbers.parse(value, default_region)
    except NumberParseException:
        return None

    if not phonenumbers.is_possible_number(parsed):
        return None
    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)


def phone_match_key(value: str, default_region: str = "US") -> str:
    """
    Key used to decide whether two phone strings are the same number.

    "(212) 555-0100" and "212-555-0100" share a key. Values that do not
    parse fall back to their digits, and values without digits to their
    stripped text.
    """
    e164 = normalize_phone_e164(value, default_region)
    if e164:
        return e164
    digits = NON_DIGIT.sub("", value)
    if digits:
        LOGGER.debug("Phone %r not parseable, comparing on digits", value)
        return digits
    return value.strip()


__all__ = ["normalize_phone_e164", "phone_match_key"]
