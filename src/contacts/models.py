"""Owner contact record types."""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional

# Fields that may arrive as a string, a list of strings, or null
LIST_FIELDS = (
    "owner_business_name",
    "owner_full_address",
    "owner_title",
    "owner_phone",
    "owner_full_name",
)

# Attribute name -> key used by the upstream data layer
WIRE_NAMES = {
    "bbl": "bbl",
    "bucket_name": "bucketName",
    "status": "status",
    "owner_business_name": "ownerBusinessName",
    "owner_full_address": "ownerFullAddress",
    "owner_title": "ownerTitle",
    "owner_phone": "ownerPhone",
    "owner_full_name": "ownerFullName",
    "owner_master_full_name": "ownerMasterFullName",
    "date": "date",
    "source": "source",
    "agency": "agency",
    "merged_count": "mergedCount",
}


def _read_fields(data: Mapping[str, Any]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for attr, wire_name in WIRE_NAMES.items():
        if wire_name in data:
            values[attr] = data[wire_name]
        elif attr in data:
            values[attr] = data[attr]
    return values


def _wire_value(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, list):
        return list(value)
    return value


@dataclass(slots=True)
class RawContact:
    """
    One observation of a property owner from one data source.

    List-or-scalar fields hold whatever the data layer delivered: a
    string, a list of strings, None, or occasionally something malformed.
    """

    bbl: Optional[str] = None
    bucket_name: Optional[str] = None
    status: Optional[str] = None
    owner_business_name: Any = None
    owner_full_address: Any = None
    owner_title: Any = None
    owner_phone: Any = None
    owner_full_name: Any = None
    owner_master_full_name: Optional[str] = None
    date: Any = None
    source: Optional[str] = None
    agency: Optional[str] = None
    merged_count: Any = 1

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RawContact":
        """Build from camelCase wire keys or snake_case keys; unknown keys are ignored."""
        return cls(**_read_fields(data))


@dataclass(slots=True)
class FormattedContact:
    """A contact whose list-or-scalar fields are clean lists of strings."""

    bbl: Optional[str] = None
    bucket_name: Optional[str] = None
    status: Optional[str] = None
    owner_business_name: List[str] = field(default_factory=list)
    owner_full_address: List[str] = field(default_factory=list)
    owner_title: List[str] = field(default_factory=list)
    owner_phone: List[str] = field(default_factory=list)
    owner_full_name: List[str] = field(default_factory=list)
    owner_master_full_name: Optional[str] = None
    date: Any = None
    source: Optional[str] = None
    agency: Optional[str] = None
    merged_count: int = 1

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FormattedContact":
        """Rebuild a contact previously rendered with `to_dict`."""
        return cls(**_read_fields(data))

    def as_fields(self) -> Dict[str, Any]:
        """Attribute name -> value, lists copied."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        for name in LIST_FIELDS:
            values[name] = list(values[name])
        return values

    def to_dict(self) -> Dict[str, Any]:
        """Render with the camelCase keys used by the upstream data layer."""
        return {WIRE_NAMES[attr]: _wire_value(getattr(self, attr)) for attr in WIRE_NAMES}


__all__ = [
    "LIST_FIELDS",
    "WIRE_NAMES",
    "RawContact",
    "FormattedContact",
]
