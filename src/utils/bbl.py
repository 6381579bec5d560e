"""Borough-Block-Lot (BBL) parcel identifier helpers."""
from __future__ import annotations

import re
from dataclasses import dataclass

from core.exceptions import InvalidBBLError

BOROUGHS = {
    1: "Manhattan",
    2: "Bronx",
    3: "Brooklyn",
    4: "Queens",
    5: "Staten Island",
}

PADDED_BBL = re.compile(r"^(\d)(\d{5})(\d{4})$", re.ASCII)


@dataclass(frozen=True, slots=True)
class BBL:
    """A parsed parcel identifier."""

    borough: int
    block: int
    lot: int

    @property
    def dashed(self) -> str:
        """URL form, e.g. "1-13-1"."""
        return f"{self.borough}-{self.block}-{self.lot}"

    @property
    def padded(self) -> str:
        """Ten-digit form, e.g. "1000130001"."""
        return f"{self.borough}{self.block:05d}{self.lot:04d}"

    @property
    def borough_name(self) -> str:
        return BOROUGHS[self.borough]

    def __str__(self) -> str:
        return self.dashed


def parse_bbl(raw: str) -> BBL:
    """
    Parse a BBL in dashed ("1-13-1", "1-00013-0001") or ten-digit form.

    Args:
        raw: Identifier as typed or as stored.

    Returns:
        Parsed BBL.

    Raises:
        InvalidBBLError: If the value is not a BBL or the borough is not 1-5.
    """
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidBBLError(f"Invalid BBL format: {raw!r}")

    value = raw.strip()
    if "-" in value:
        parts = value.split("-")
        if len(parts) != 3 or not all(part.isascii() and part.isdigit() for part in parts):
            raise InvalidBBLError(f"Invalid BBL format: {raw!r}")
        borough, block, lot = (int(part) for part in parts)
        if block > 99999 or lot > 9999:
            raise InvalidBBLError(f"Invalid BBL format: {raw!r}")
    else:
        match = PADDED_BBL.match(value)
        if not match:
            raise InvalidBBLError(f"Invalid BBL format: {raw!r}")
        borough, block, lot = (int(group) for group in match.groups())

    if borough not in BOROUGHS:
        raise InvalidBBLError(f"Invalid borough code in BBL {raw!r}: must be 1-5")
    return BBL(borough=borough, block=block, lot=lot)


__all__ = ["BBL", "BOROUGHS", "parse_bbl"]
