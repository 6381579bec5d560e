"""Utility helpers for normalization and deduplication."""
from .bbl import BBL, parse_bbl
from .dedupe import (
    fold_key,
    jaccard,
    name_tokens,
    normalize_owner_name,
)
from .phone import normalize_phone_e164, phone_match_key

__all__ = [
    "BBL",
    "parse_bbl",
    "fold_key",
    "jaccard",
    "name_tokens",
    "normalize_owner_name",
    "normalize_phone_e164",
    "phone_match_key",
]
