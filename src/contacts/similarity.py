"""Pairwise similarity between formatted owner contacts.

The score blends two components:

* name: Jaccard overlap of normalized word tokens of the contact's name key
  (master name, else first business name, else first full name);
* address: share of the smaller address set that has a near-exact match in
  the other set.

A component only counts when both contacts carry data for it, and the
weights of the counted components are renormalized. Contacts with nothing
comparable score 0.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple

from contacts.models import FormattedContact
from core.address_utils import addresses_match, normalize_address
from core.exceptions import ValidationError
from utils.dedupe import jaccard, name_tokens

DEFAULT_NAME_WEIGHT = 0.6
DEFAULT_ADDRESS_WEIGHT = 0.4
DEFAULT_ADDRESS_CUTOFF = 90.0


@dataclass(frozen=True, slots=True)
class ContactProfile:
    """Pre-normalized comparison data for one contact."""

    name_tokens: FrozenSet[str]
    addresses: Tuple[str, ...]

    @property
    def is_empty(self) -> bool:
        return not self.name_tokens and not self.addresses


@dataclass(frozen=True, slots=True)
class SimilarityBreakdown:
    """Combined score plus the component scores that went into it."""

    score: float
    name: Optional[float]
    address: Optional[float]


def name_key(contact: FormattedContact) -> Optional[str]:
    """
    The name a contact is compared on, or None if it has none.

    Master name, then first business name, then first full name; a
    candidate with no name tokens (punctuation only, say) is skipped.
    """
    candidates = [
        contact.owner_master_full_name,
        contact.owner_business_name[0] if contact.owner_business_name else None,
        contact.owner_full_name[0] if contact.owner_full_name else None,
    ]
    for candidate in candidates:
        if isinstance(candidate, str) and name_tokens(candidate):
            return candidate
    return None


def build_profile(contact: FormattedContact) -> ContactProfile:
    """Normalize a contact's name key and addresses once for repeated comparison."""
    normalized = []
    for address in contact.owner_full_address:
        norm = normalize_address(address)
        if norm and norm not in normalized:
            normalized.append(norm)
    return ContactProfile(
        name_tokens=name_tokens(name_key(contact)),
        addresses=tuple(normalized),
    )


def _validate_weights(name_weight: float, address_weight: float) -> None:
    if name_weight < 0 or address_weight < 0:
        raise ValidationError("Similarity weights must be non-negative")
    if name_weight + address_weight <= 0:
        raise ValidationError("At least one similarity weight must be positive")


def _name_score(left: ContactProfile, right: ContactProfile) -> Optional[float]:
    if not left.name_tokens or not right.name_tokens:
        return None
    return jaccard(left.name_tokens, right.name_tokens)


def _address_score(
    left: ContactProfile, right: ContactProfile, cutoff: float
) -> Optional[float]:
    if not left.addresses or not right.addresses:
        return None
    smaller, larger = left.addresses, right.addresses
    if len(larger) < len(smaller):
        smaller, larger = larger, smaller
    matched = sum(
        1 for address in smaller
        if any(addresses_match(address, other, cutoff) for other in larger)
    )
    return matched / len(smaller)


def compare_profiles(
    left: ContactProfile,
    right: ContactProfile,
    name_weight: float = DEFAULT_NAME_WEIGHT,
    address_weight: float = DEFAULT_ADDRESS_WEIGHT,
    address_cutoff: float = DEFAULT_ADDRESS_CUTOFF,
) -> SimilarityBreakdown:
    """Score two pre-built profiles. See module docstring for the rules."""
    _validate_weights(name_weight, address_weight)
    if left.is_empty or right.is_empty:
        return SimilarityBreakdown(score=0.0, name=None, address=None)

    name = _name_score(left, right)
    address = _address_score(left, right, address_cutoff)

    weighted = 0.0
    total_weight = 0.0
    if name is not None:
        weighted += name * name_weight
        total_weight += name_weight
    if address is not None:
        weighted += address * address_weight
        total_weight += address_weight

    score = weighted / total_weight if total_weight > 0 else 0.0
    return SimilarityBreakdown(score=min(1.0, max(0.0, score)), name=name, address=address)


def name_similarity(a: FormattedContact, b: FormattedContact) -> float:
    """Token Jaccard of the two name keys; 0.0 if either has no name."""
    return _name_score(build_profile(a), build_profile(b)) or 0.0


def address_similarity(
    a: FormattedContact, b: FormattedContact, cutoff: float = DEFAULT_ADDRESS_CUTOFF
) -> float:
    """Matched share of the smaller address set; 0.0 if either has no address."""
    return _address_score(build_profile(a), build_profile(b), cutoff) or 0.0


def similarity(
    a: FormattedContact,
    b: FormattedContact,
    name_weight: float = DEFAULT_NAME_WEIGHT,
    address_weight: float = DEFAULT_ADDRESS_WEIGHT,
    address_cutoff: float = DEFAULT_ADDRESS_CUTOFF,
) -> float:
    """
    Similarity of two formatted contacts in [0, 1].

    Args:
        a: First contact.
        b: Second contact.
        name_weight: Weight of the name component.
        address_weight: Weight of the address component.
        address_cutoff: rapidfuzz ratio for near-exact address matches.

    Returns:
        Combined score; 1.0 for a contact compared with itself.

    Raises:
        ValidationError: If the weights are negative or both zero.
    """
    return compare_profiles(
        build_profile(a),
        build_profile(b),
        name_weight=name_weight,
        address_weight=address_weight,
        address_cutoff=address_cutoff,
    ).score


__all__ = [
    "DEFAULT_NAME_WEIGHT",
    "DEFAULT_ADDRESS_WEIGHT",
    "DEFAULT_ADDRESS_CUTOFF",
    "ContactProfile",
    "SimilarityBreakdown",
    "name_key",
    "build_profile",
    "compare_profiles",
    "name_similarity",
    "address_similarity",
    "similarity",
]
