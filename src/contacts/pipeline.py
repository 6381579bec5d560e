"""Format, deduplicate and categorize the owner contacts of one parcel."""
from __future__ import annotations

import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from contacts.categories import CATEGORY_ORDER, CategorizedContact, categorize_contacts
from contacts.dedupe import find_duplicate_clusters, merge_cluster
from contacts.formatter import ContactInput, format_contacts
from core.config import Settings, get_settings
from core.logging_config import get_context_logger
from utils.bbl import parse_bbl


@dataclass(slots=True)
class PipelineResult:
    """Contact cards for one parcel plus run statistics."""

    contacts: List[CategorizedContact]
    input_count: int
    clusters: List[List[int]] = field(default_factory=list)
    threshold: float = 0.0

    @property
    def output_count(self) -> int:
        return len(self.contacts)

    @property
    def merged_clusters(self) -> int:
        """Clusters that merged two or more records."""
        return sum(1 for cluster in self.clusters if len(cluster) > 1)

    @property
    def category_counts(self) -> Dict[str, int]:
        """Cards per category, in display order, omitting empty categories."""
        counts = Counter(item.category for item in self.contacts)
        return {tag.value: counts[tag] for tag in CATEGORY_ORDER if counts[tag]}

    def stats(self) -> Dict[str, Any]:
        return {
            "input_count": self.input_count,
            "output_count": self.output_count,
            "merged_clusters": self.merged_clusters,
            "threshold": self.threshold,
            "category_counts": self.category_counts,
        }

    def to_dict(self, include_clusters: bool = False) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "contacts": [item.to_dict() for item in self.contacts],
            "stats": self.stats(),
        }
        if include_clusters:
            data["clusters"] = [list(cluster) for cluster in self.clusters]
        return data


def process_contacts(
    raw_contacts: Optional[Iterable[ContactInput]],
    threshold: Optional[float] = None,
    *,
    bbl: Optional[str] = None,
    respect_source_groups: Optional[bool] = None,
    settings: Optional[Settings] = None,
    request_id: Optional[str] = None,
) -> PipelineResult:
    """
    Run format -> deduplicate -> categorize over one parcel's contacts.

    Args:
        raw_contacts: Records from the data layer, in display order.
        threshold: Merge threshold; defaults to the configured value.
        bbl: Parcel the contacts belong to. Validated and used as log context.
        respect_source_groups: Overrides the configured setting when given.
        settings: Settings to use instead of the cached global ones.
        request_id: Correlation id added to log records.

    Returns:
        PipelineResult with one categorized card per cluster.

    Raises:
        InvalidThresholdError: If threshold is outside [0, 1].
        InvalidBBLError: If bbl is given and malformed.
    """
    settings = settings or get_settings()
    if threshold is None:
        threshold = settings.dedup_threshold
    if respect_source_groups is None:
        respect_source_groups = settings.respect_source_groups

    context: Dict[str, Any] = {}
    if bbl is not None:
        context["bbl"] = parse_bbl(bbl).dashed
    if request_id is not None:
        context["request_id"] = request_id
    logger = get_context_logger(__name__, **context)

    started = time.perf_counter()
    formatted = format_contacts(raw_contacts)
    clusters = find_duplicate_clusters(
        formatted,
        threshold,
        name_weight=settings.name_weight,
        address_weight=settings.address_weight,
        address_cutoff=settings.address_match_cutoff,
        respect_source_groups=respect_source_groups,
    )
    merged = [
        merge_cluster(
            [formatted[index] for index in cluster],
            settings.phone_default_region,
            settings.address_match_cutoff,
        )
        for cluster in clusters
    ]
    result = PipelineResult(
        contacts=categorize_contacts(merged),
        input_count=len(formatted),
        clusters=clusters,
        threshold=float(threshold),
    )
    duration_ms = (time.perf_counter() - started) * 1000

    logger.info(
        f"Processed {result.input_count} contacts into {result.output_count} cards "
        f"in {duration_ms:.2f}ms",
        extra={"extra_data": {**result.stats(), "duration_ms": round(duration_ms, 2)}},
    )
    return result


__all__ = ["PipelineResult", "process_contacts"]
