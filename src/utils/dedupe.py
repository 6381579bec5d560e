"""Utilities for comparing owner names."""
from __future__ import annotations

import re
from typing import AbstractSet, FrozenSet, Optional

QUOTES = re.compile(r"[\"'`‘’“”]")
NON_NAME_CHARS = re.compile(r"[^A-Z0-9& ]")
WHITESPACE = re.compile(r"\s+")

# Entity suffixes that survive punctuation stripping as single letters
SPLIT_SUFFIXES = {
    ("L", "L", "C"): "LLC",
    ("L", "L", "P"): "LLP",
    ("L", "P"): "LP",
}

BUSINESS_SUFFIXES = {
    "INCORPORATED": "INC",
    "CORPORATION": "CORP",
    "COMPANY": "CO",
    "LIMITED": "LTD",
    "ASSOCIATES": "ASSOC",
    "ASSOCIATION": "ASSOC",
    "MGMT": "MANAGEMENT",
    "MGT": "MANAGEMENT",
    "PROP": "PROPERTIES",
    "PROPS": "PROPERTIES",
    "RLTY": "REALTY",
    "HLDG": "HOLDING",
    "HLDGS": "HOLDINGS",
    "GRP": "GROUP",
    "INTL": "INTERNATIONAL",
    "DEPT": "DEPARTMENT",
    "CTR": "CENTER",
    "BLDG": "BUILDING",
    "SVC": "SERVICE",
    "SVCS": "SERVICES",
    "DEV": "DEVELOPMENT",
    "&": "AND",
}

NUMBER_WORDS = {
    "ONE": "1", "TWO": "2", "THREE": "3", "FOUR": "4", "FIVE": "5",
    "SIX": "6", "SEVEN": "7", "EIGHT": "8", "NINE": "9", "TEN": "10",
    "FIRST": "1ST", "SECOND": "2ND", "THIRD": "3RD", "FOURTH": "4TH",
}

NAME_REPLACEMENTS = {**BUSINESS_SUFFIXES, **NUMBER_WORDS}


def _join_split_suffixes(tokens: list[str]) -> list[str]:
    joined: list[str] = []
    i = 0
    while i < len(tokens):
        for pattern, replacement in SPLIT_SUFFIXES.items():
            if tuple(tokens[i:i + len(pattern)]) == pattern:
                joined.append(replacement)
                i += len(pattern)
                break
        else:
            joined.append(tokens[i])
            i += 1
    return joined


def normalize_owner_name(raw_name: Optional[str]) -> str:
    """
    Return the comparison form of an owner or business name.

    Quotes are dropped, other punctuation becomes whitespace, and entity
    suffix and number spellings are unified ("L.L.C." -> "LLC",
    "INCORPORATED" -> "INC", "FIRST" -> "1ST").

    Args:
        raw_name: Raw name string.

    Returns:
        Uppercased, whitespace-collapsed name.
    """
    if not raw_name:
        return ""
    cleaned = QUOTES.sub("", raw_name.upper())
    cleaned = NON_NAME_CHARS.sub(" ", cleaned)
    tokens = _join_split_suffixes(cleaned.split())
    return " ".join(NAME_REPLACEMENTS.get(token, token) for token in tokens)


def name_tokens(raw_name: Optional[str]) -> FrozenSet[str]:
    """Word tokens of the normalized name."""
    return frozenset(normalize_owner_name(raw_name).split())


def jaccard(left: AbstractSet[str], right: AbstractSet[str]) -> float:
    """
    Jaccard similarity of two token sets.

    Returns 0.0 when both sets are empty so that missing names never count
    as agreement.
    """
    union = left | right
    if not union:
        return 0.0
    return len(left & right) / len(union)


def fold_key(value: str) -> str:
    """Case-insensitive, whitespace-collapsed key for list de-duplication."""
    return WHITESPACE.sub(" ", value.strip()).casefold()


__all__ = [
    "BUSINESS_SUFFIXES",
    "NUMBER_WORDS",
    "normalize_owner_name",
    "name_tokens",
    "jaccard",
    "fold_key",
]
