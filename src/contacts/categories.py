"""Source categories for owner contacts.

Each contact is tagged from its reporting agency and source dataset:

- Assessment Roll: DOF property valuations (tax assessor records)
- HPD Registration: Housing Preservation & Development registrations
- Permits: every Department of Buildings record
- Sale / Mortgage: most recent ACRIS deed or mortgage, via DOF
- Prior Sale / Prior Mortgage: older ACRIS documents, hidden by default
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple

from contacts.models import FormattedContact
from core.logging_config import get_logger

LOGGER = get_logger(__name__)


class CategoryTag(str, Enum):
    """Closed set of contact categories."""

    ASSESSMENT_ROLL = "assessment-roll"
    HPD_REGISTRATION = "hpd-registration"
    PERMITS = "permits"
    SALE = "sale"
    MORTGAGE = "mortgage"
    PRIOR_SALE = "prior-sale"
    PRIOR_MORTGAGE = "prior-mortgage"


DEFAULT_CATEGORY = CategoryTag.ASSESSMENT_ROLL

# (agency, source or None for any source, category); first match wins
CATEGORY_RULES: Tuple[Tuple[str, Optional[str], CategoryTag], ...] = (
    ("dof", "property_valuation", CategoryTag.ASSESSMENT_ROLL),
    ("hpd", "multiple_dwelling_registrations", CategoryTag.HPD_REGISTRATION),
    ("dob", None, CategoryTag.PERMITS),
    ("dof", "latest_sale", CategoryTag.SALE),
    ("dof", "latest_mortgage", CategoryTag.MORTGAGE),
    ("dof", "prior_sale", CategoryTag.PRIOR_SALE),
    ("dof", "prior_mortgage", CategoryTag.PRIOR_MORTGAGE),
)


@dataclass(frozen=True, slots=True)
class CategoryMetadata:
    """Display metadata for a category."""

    key: CategoryTag
    label: str
    abbreviation: str
    default_visible: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key.value,
            "label": self.label,
            "abbreviation": self.abbreviation,
            "defaultVisible": self.default_visible,
        }


CATEGORY_METADATA: Dict[CategoryTag, CategoryMetadata] = {
    CategoryTag.ASSESSMENT_ROLL: CategoryMetadata(CategoryTag.ASSESSMENT_ROLL, "Assessment Roll", "AR", True),
    CategoryTag.HPD_REGISTRATION: CategoryMetadata(CategoryTag.HPD_REGISTRATION, "HPD Registration", "HPD", True),
    CategoryTag.PERMITS: CategoryMetadata(CategoryTag.PERMITS, "Permit", "P", True),
    CategoryTag.SALE: CategoryMetadata(CategoryTag.SALE, "Sale", "S", True),
    CategoryTag.MORTGAGE: CategoryMetadata(CategoryTag.MORTGAGE, "Mortgage", "M", True),
    CategoryTag.PRIOR_SALE: CategoryMetadata(CategoryTag.PRIOR_SALE, "Prior Sale", "PS", False),
    CategoryTag.PRIOR_MORTGAGE: CategoryMetadata(CategoryTag.PRIOR_MORTGAGE, "Prior Mortgage", "PM", False),
}

CATEGORY_ORDER: Tuple[CategoryTag, ...] = tuple(CategoryTag)


def _field(contact: Any, name: str) -> Optional[str]:
    if isinstance(contact, Mapping):
        value = contact.get(name)
    else:
        value = getattr(contact, name, None)
    return value if isinstance(value, str) else None


def categorize(contact: Any) -> CategoryTag:
    """
    Get the category of a contact from its agency and source.

    Args:
        contact: Anything with `agency` and `source` attributes or keys.

    Returns:
        The first matching category; assessment-roll (with a warning) when
        the pair is not in the table.
    """
    agency_raw = _field(contact, "agency")
    source_raw = _field(contact, "source")
    agency = (agency_raw or "").strip().lower()
    source = (source_raw or "").strip().lower()

    for rule_agency, rule_source, category in CATEGORY_RULES:
        if agency == rule_agency and (rule_source is None or source == rule_source):
            return category

    LOGGER.warning(
        f'No category match for contact: agency="{agency_raw}", source="{source_raw}". '
        f"Defaulting to {DEFAULT_CATEGORY.value}."
    )
    return DEFAULT_CATEGORY


def category_metadata(category: CategoryTag) -> CategoryMetadata:
    """Metadata for a category."""
    return CATEGORY_METADATA[CategoryTag(category)]


def default_visible_categories() -> Set[CategoryTag]:
    """Categories shown without the user enabling them (all but the prior-* ones)."""
    return {tag for tag, meta in CATEGORY_METADATA.items() if meta.default_visible}


@dataclass(slots=True)
class CategorizedContact:
    """A formatted contact with its category tag."""

    contact: FormattedContact
    category: CategoryTag

    def to_dict(self) -> Dict[str, Any]:
        data = self.contact.to_dict()
        data["category"] = self.category.value
        return data


def categorize_contacts(contacts: Iterable[FormattedContact]) -> List[CategorizedContact]:
    """Tag each contact with its category, preserving order."""
    return [CategorizedContact(contact=contact, category=categorize(contact)) for contact in contacts]


__all__ = [
    "CategoryTag",
    "DEFAULT_CATEGORY",
    "CATEGORY_RULES",
    "CategoryMetadata",
    "CATEGORY_METADATA",
    "CATEGORY_ORDER",
    "categorize",
    "category_metadata",
    "default_visible_categories",
    "CategorizedContact",
    "categorize_contacts",
]
