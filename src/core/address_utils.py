"""
Address Normalization Utilities

Single source of truth for comparing owner mailing addresses.

Owner contact addresses arrive from several municipal sources (DOF
assessment roll, ACRIS parties, HPD registrations, DOB filings), each with
its own spelling habits: "123 MAIN STREET", "123 Main St.", "123 MAIN ST,
NEW YORK, NY 10001". Comparison happens on a normalized form; the display
form is never rewritten.
"""
from __future__ import annotations

import re
from typing import Optional

from rapidfuzz import fuzz

# Street suffix spellings -> USPS abbreviation
STREET_SUFFIXES = {
    "STREET": "ST", "STR": "ST",
    "AVENUE": "AVE", "AV": "AVE", "AVN": "AVE",
    "ROAD": "RD",
    "BOULEVARD": "BLVD", "BLV": "BLVD",
    "DRIVE": "DR",
    "LANE": "LN",
    "PLACE": "PL",
    "COURT": "CT",
    "PARKWAY": "PKWY", "PKY": "PKWY",
    "HIGHWAY": "HWY",
    "TERRACE": "TER",
    "PLAZA": "PLZ",
    "SQUARE": "SQ",
    "CIRCLE": "CIR",
    "EXPRESSWAY": "EXPY",
    "TURNPIKE": "TPKE",
    "CONCOURSE": "CONC",
}

DIRECTIONALS = {
    "NORTH": "N", "SOUTH": "S", "EAST": "E", "WEST": "W",
    "NORTHEAST": "NE", "NORTHWEST": "NW", "SOUTHEAST": "SE", "SOUTHWEST": "SW",
}

UNIT_DESIGNATORS = {
    "APARTMENT": "APT",
    "SUITE": "STE",
    "FLOOR": "FL",
    "ROOM": "RM",
    "BUILDING": "BLDG",
    "DEPARTMENT": "DEPT",
}

ADDRESS_ABBREVIATIONS = {**STREET_SUFFIXES, **DIRECTIONALS, **UNIT_DESIGNATORS}

NON_ADDRESS_CHARS = re.compile(r"[^A-Z0-9 ]")
HAS_DIGIT = re.compile(r"\d")


def normalize_address(raw: Optional[str]) -> str:
    """
    Return the comparison form of an address.

    Uppercases, strips punctuation and abbreviates street suffixes,
    directionals and unit designators token by token.

    Args:
        raw: Address as displayed.

    Returns:
        Normalized address, or "" when nothing comparable remains.
    """
    if not raw:
        return ""
    upper = NON_ADDRESS_CHARS.sub(" ", raw.upper())
    tokens = [ADDRESS_ABBREVIATIONS.get(token, token) for token in upper.split()]
    return " ".join(tokens)


def _house_number(normalized: str) -> Optional[str]:
    first = normalized.split(" ", 1)[0]
    return first if HAS_DIGIT.search(first) else None


def addresses_match(left: str, right: str, cutoff: float = 90.0) -> bool:
    """
    Check whether two normalized addresses are near-exact matches.

    Equal strings always match. Otherwise the rapidfuzz ratio must reach
    `cutoff`, and house numbers must agree when both addresses have one,
    so "123 MAIN ST" never matches "124 MAIN ST".

    Args:
        left: Normalized address.
        right: Normalized address.
        cutoff: Minimum fuzz.ratio score (0-100).

    Returns:
        True if the addresses refer to the same place.
    """
    if not left or not right:
        return False
    if left == right:
        return True

    left_number = _house_number(left)
    right_number = _house_number(right)
    if left_number and right_number and left_number != right_number:
        return False

    return fuzz.ratio(left, right) >= cutoff


__all__ = [
    "STREET_SUFFIXES",
    "DIRECTIONALS",
    "UNIT_DESIGNATORS",
    "normalize_address",
    "addresses_match",
]
