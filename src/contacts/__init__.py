"""Owner contact normalization, deduplication and categorization."""
from contacts.categories import (
    CATEGORY_METADATA,
    CATEGORY_ORDER,
    CategorizedContact,
    CategoryMetadata,
    CategoryTag,
    categorize,
    categorize_contacts,
    category_metadata,
    default_visible_categories,
)
from contacts.dedupe import (
    DEFAULT_THRESHOLD,
    deduplicate_contacts,
    find_duplicate_clusters,
    merge_cluster,
)
from contacts.formatter import format_contact, format_contacts
from contacts.models import FormattedContact, RawContact
from contacts.pipeline import PipelineResult, process_contacts
from contacts.similarity import (
    address_similarity,
    name_similarity,
    similarity,
)

__all__ = [
    # Models
    "RawContact",
    "FormattedContact",
    # Formatter
    "format_contact",
    "format_contacts",
    # Similarity
    "similarity",
    "name_similarity",
    "address_similarity",
    # Deduplication
    "DEFAULT_THRESHOLD",
    "deduplicate_contacts",
    "find_duplicate_clusters",
    "merge_cluster",
    # Categories
    "CategoryTag",
    "CategoryMetadata",
    "CATEGORY_METADATA",
    "CATEGORY_ORDER",
    "CategorizedContact",
    "categorize",
    "categorize_contacts",
    "category_metadata",
    "default_visible_categories",
    # Pipeline
    "PipelineResult",
    "process_contacts",
]
