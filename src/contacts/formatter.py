"""Normalize raw owner contact observations into FormattedContact records."""
from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Union

from contacts.models import LIST_FIELDS, FormattedContact, RawContact
from core.logging_config import get_logger

LOGGER = get_logger(__name__)

ContactInput = Union[RawContact, FormattedContact, Mapping[str, Any]]

NA_VALUES = frozenset({
    "n/a",
    "na",
    "n.a.",
    "n.a",
    "n a",
    "not available",
    "not applicable",
})

QUOTE_PAIRS = (('"', '"'), ("'", "'"))


def is_na_value(value: str) -> bool:
    """Check if a value is an "N/A" style placeholder."""
    return value.strip().lower() in NA_VALUES


def _unquote(value: str) -> str:
    for opening, closing in QUOTE_PAIRS:
        if len(value) >= 2 and value.startswith(opening) and value.endswith(closing):
            return value[1:-1].strip()
    return value


def reformat_name(name: str) -> str:
    """
    Reorder "LASTNAME, FIRSTNAME" into "FIRSTNAME LASTNAME".

    Examples:
        "KEONG, LUCIAN" -> "LUCIAN KEONG"
        "DOE, JANE MARIE" -> "JANE MARIE DOE"
        '"KEONG, LUCIAN   "' -> "LUCIAN KEONG"

    Names with no comma, or with more than two comma-separated parts, are
    returned trimmed and unquoted but otherwise untouched.
    """
    current = name.strip()
    while True:
        previous = current
        current = _unquote(current)
        if current != previous:
            continue
        if "," in current:
            parts = [part.strip() for part in current.split(",") if part.strip()]
            if len(parts) == 2:
                current = f"{parts[1]} {parts[0]}"
        if current == previous:
            return current


def normalize_list_field(value: Any, field_name: str = "", reorder_names: bool = False) -> List[str]:
    """
    Coerce a list-or-scalar value into a clean list of strings.

    Args:
        value: A string, a list/tuple of strings, or None.
        field_name: Used only for diagnostics.
        reorder_names: Apply `reformat_name` to each element.

    Returns:
        Trimmed, non-blank, non-placeholder strings in first-seen order,
        exact duplicates removed.
    """
    if value is None:
        return []
    if isinstance(value, str):
        items: Iterable[Any] = [value]
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        LOGGER.debug(f"Malformed {field_name or 'list'} field of type {type(value).__name__}; using []")
        return []

    cleaned: List[str] = []
    seen = set()
    for item in items:
        if not isinstance(item, str):
            LOGGER.debug(f"Dropping non-string element {item!r} from {field_name or 'list'} field")
            continue
        text = reformat_name(item) if reorder_names else item.strip()
        if not text or is_na_value(text):
            continue
        if text in seen:
            continue
        seen.add(text)
        cleaned.append(text)
    return cleaned


def _merged_count(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool) and value >= 1:
        return value
    if value is not None:
        LOGGER.debug(f"Malformed mergedCount {value!r}; using 1")
    return 1


def _scalar_text(value: Any, field_name: str) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    LOGGER.debug(f"Malformed {field_name} {value!r}; using None")
    return None


def _as_raw(contact: ContactInput) -> RawContact:
    if isinstance(contact, RawContact):
        return contact
    if isinstance(contact, FormattedContact):
        return RawContact(**contact.as_fields())
    if isinstance(contact, Mapping):
        return RawContact.from_dict(contact)
    LOGGER.debug(f"Unsupported contact of type {type(contact).__name__}; treating as empty")
    return RawContact()


def format_contact(contact: ContactInput) -> FormattedContact:
    """
    Normalize one contact.

    Never raises: malformed list fields degrade to empty lists and
    non-string text fields to None.
    """
    raw = _as_raw(contact)
    lists = {
        name: normalize_list_field(
            getattr(raw, name),
            field_name=name,
            reorder_names=(name == "owner_full_name"),
        )
        for name in LIST_FIELDS
    }
    return FormattedContact(
        bbl=_scalar_text(raw.bbl, "bbl"),
        bucket_name=_scalar_text(raw.bucket_name, "bucketName"),
        status=_scalar_text(raw.status, "status"),
        owner_master_full_name=_scalar_text(raw.owner_master_full_name, "ownerMasterFullName"),
        date=raw.date,
        source=_scalar_text(raw.source, "source"),
        agency=_scalar_text(raw.agency, "agency"),
        merged_count=_merged_count(raw.merged_count),
        **lists,
    )


def format_contacts(contacts: Optional[Iterable[ContactInput]]) -> List[FormattedContact]:
    """
    Normalize a batch of contacts, preserving order.

    Accepts raw records, already formatted records (formatting is
    idempotent) or plain mappings straight from the data layer.
    """
    if not contacts:
        return []
    return [format_contact(contact) for contact in contacts]


__all__ = [
    "ContactInput",
    "is_na_value",
    "reformat_name",
    "normalize_list_field",
    "format_contact",
    "format_contacts",
]
