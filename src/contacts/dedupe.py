"""Cluster and merge owner contacts that describe the same owner."""
from __future__ import annotations

import math
from datetime import date, datetime, time, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence

from contacts.models import FormattedContact
from contacts.similarity import (
    DEFAULT_ADDRESS_CUTOFF,
    DEFAULT_ADDRESS_WEIGHT,
    DEFAULT_NAME_WEIGHT,
    build_profile,
    compare_profiles,
)
from core.address_utils import addresses_match, normalize_address
from core.exceptions import InvalidThresholdError
from core.logging_config import get_logger
from utils.dedupe import fold_key
from utils.phone import phone_match_key

LOGGER = get_logger(__name__)

DEFAULT_THRESHOLD = 0.65

# Agencies whose records are grouped by agency alone when source groups are respected
AGENCY_ONLY_GROUPS = frozenset({"dob"})


def validate_threshold(threshold: Any) -> float:
    """
    Ensure a similarity threshold is a number in [0, 1].

    Raises:
        InvalidThresholdError: If it is not.
    """
    if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
        raise InvalidThresholdError(f"Threshold must be a number, got {threshold!r}")
    if math.isnan(threshold) or not 0.0 <= threshold <= 1.0:
        raise InvalidThresholdError(f"Threshold must be between 0 and 1, got {threshold}")
    return float(threshold)


def source_group(contact: FormattedContact) -> str:
    """
    Key of the agency/source group a contact belongs to.

    DOB reports owners on many filing datasets, so its records form one
    group regardless of source.
    """
    agency = _group_part(contact.agency)
    if agency in AGENCY_ONLY_GROUPS:
        return agency
    return f"{agency}|{_group_part(contact.source)}"


def _group_part(value: Any) -> str:
    return value.strip().lower() if isinstance(value, str) else ""


def find_duplicate_clusters(
    contacts: Sequence[FormattedContact],
    threshold: float = DEFAULT_THRESHOLD,
    *,
    name_weight: float = DEFAULT_NAME_WEIGHT,
    address_weight: float = DEFAULT_ADDRESS_WEIGHT,
    address_cutoff: float = DEFAULT_ADDRESS_CUTOFF,
    respect_source_groups: bool = False,
) -> List[List[int]]:
    """
    Group contact positions into clusters of duplicates.

    Every pair is compared (contact counts per parcel are in the tens) and
    pairs scoring at or above `threshold` are unioned. A pair scoring 0 is
    never unioned, even at threshold 0.

    Returns:
        Clusters of input indices, each sorted ascending, ordered by their
        lowest index. Singletons are included.
    """
    threshold = validate_threshold(threshold)
    count = len(contacts)
    parent = list(range(count))

    def find(index: int) -> int:
        root = index
        while parent[root] != root:
            root = parent[root]
        while parent[index] != root:
            parent[index], index = root, parent[index]
        return root

    def union(left: int, right: int) -> None:
        left_root, right_root = find(left), find(right)
        if left_root != right_root:
            # Lowest index stays the root so cluster order follows first appearance
            low, high = sorted((left_root, right_root))
            parent[high] = low

    profiles = [build_profile(contact) for contact in contacts]
    groups = [source_group(contact) for contact in contacts] if respect_source_groups else None

    for i in range(count):
        for j in range(i + 1, count):
            if groups is not None and groups[i] != groups[j]:
                continue
            if find(i) == find(j):
                continue
            result = compare_profiles(
                profiles[i],
                profiles[j],
                name_weight=name_weight,
                address_weight=address_weight,
                address_cutoff=address_cutoff,
            )
            if result.score > 0 and result.score >= threshold:
                LOGGER.debug(
                    f"Contacts {i} and {j} match (score={result.score:.3f}, "
                    f"name={result.name}, address={result.address})"
                )
                union(i, j)

    clusters: Dict[int, List[int]] = {}
    for index in range(count):
        clusters.setdefault(find(index), []).append(index)
    return list(clusters.values())


def _to_datetime(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time())
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            LOGGER.debug(f"Ignoring unparseable contact date {value!r}")
            return None
    else:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _union(values: List[List[str]], key: Callable[[str], str]) -> List[str]:
    merged: List[str] = []
    seen = set()
    for items in values:
        for item in items:
            item_key = key(item)
            if item_key in seen:
                continue
            seen.add(item_key)
            merged.append(item)
    return merged


def _union_addresses(values: List[List[str]], cutoff: float) -> List[str]:
    merged: List[str] = []
    kept: List[str] = []
    folded = set()
    for items in values:
        for item in items:
            normalized = normalize_address(item)
            if not normalized:
                if fold_key(item) not in folded:
                    folded.add(fold_key(item))
                    merged.append(item)
                continue
            if any(addresses_match(normalized, other, cutoff) for other in kept):
                continue
            kept.append(normalized)
            merged.append(item)
    return merged


def _first_present(values: List[Any]) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


def merge_cluster(
    members: Sequence[FormattedContact],
    phone_region: str = "US",
    address_cutoff: float = DEFAULT_ADDRESS_CUTOFF,
) -> FormattedContact:
    """
    Merge the members of one cluster into a single contact.

    Members must be in input order. A single member is returned as is.

    - List fields: union in member order; names and titles compared
      case-insensitively, phones by number.
    - Addresses: an address is dropped when it near-matches one already
      kept (see `addresses_match`); the first-seen spelling wins.
    - Scalars: first non-null value.
    - merged_count: sum over members.
    - date: most recent parseable date; ties keep the earliest member's value.
    """
    if not members:
        raise ValueError("Cannot merge an empty cluster")
    if len(members) == 1:
        return members[0]

    latest_value: Any = None
    latest: Optional[datetime] = None
    for member in members:
        parsed = _to_datetime(member.date)
        if parsed is not None and (latest is None or parsed > latest):
            latest, latest_value = parsed, member.date
    if latest is None:
        latest_value = _first_present([m.date for m in members])

    master_name = None
    for member in members:
        if isinstance(member.owner_master_full_name, str) and member.owner_master_full_name.strip():
            master_name = member.owner_master_full_name
            break

    return FormattedContact(
        bbl=_first_present([m.bbl for m in members]),
        bucket_name=_first_present([m.bucket_name for m in members]),
        status=_first_present([m.status for m in members]),
        owner_business_name=_union([m.owner_business_name for m in members], fold_key),
        owner_full_address=_union_addresses(
            [m.owner_full_address for m in members], address_cutoff
        ),
        owner_title=_union([m.owner_title for m in members], fold_key),
        owner_phone=_union(
            [m.owner_phone for m in members],
            lambda phone: phone_match_key(phone, phone_region),
        ),
        owner_full_name=_union([m.owner_full_name for m in members], fold_key),
        owner_master_full_name=master_name,
        date=latest_value,
        source=_first_present([m.source for m in members]),
        agency=_first_present([m.agency for m in members]),
        merged_count=sum(m.merged_count for m in members),
    )


def deduplicate_contacts(
    contacts: Sequence[FormattedContact],
    threshold: float = DEFAULT_THRESHOLD,
    *,
    name_weight: float = DEFAULT_NAME_WEIGHT,
    address_weight: float = DEFAULT_ADDRESS_WEIGHT,
    address_cutoff: float = DEFAULT_ADDRESS_CUTOFF,
    respect_source_groups: bool = False,
    phone_region: str = "US",
) -> List[FormattedContact]:
    """
    Collapse duplicate contacts into merged cards.

    Args:
        contacts: Formatted contacts in display order.
        threshold: Minimum similarity for two contacts to merge, in [0, 1].
        name_weight: Weight of the name component.
        address_weight: Weight of the address component.
        address_cutoff: rapidfuzz ratio for near-exact address matches.
        respect_source_groups: Only merge contacts from the same agency/source group.
        phone_region: Default region for parsing phone numbers.

    Returns:
        One contact per cluster, ordered by the cluster's first member.

    Raises:
        InvalidThresholdError: If threshold is outside [0, 1].
    """
    clusters = find_duplicate_clusters(
        contacts,
        threshold,
        name_weight=name_weight,
        address_weight=address_weight,
        address_cutoff=address_cutoff,
        respect_source_groups=respect_source_groups,
    )
    return [
        merge_cluster([contacts[index] for index in cluster], phone_region, address_cutoff)
        for cluster in clusters
    ]


__all__ = [
    "DEFAULT_THRESHOLD",
    "validate_threshold",
    "source_group",
    "find_duplicate_clusters",
    "merge_cluster",
    "deduplicate_contacts",
]
