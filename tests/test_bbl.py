"""Test BBL parsing."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Add src to path
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from core.exceptions import InvalidBBLError, ValidationError
from utils.bbl import BBL, parse_bbl


def test_parse_dashed():
    """Test the short dashed form."""
    bbl = parse_bbl("1-13-1")
    assert bbl == BBL(borough=1, block=13, lot=1)
    assert bbl.dashed == "1-13-1"
    assert bbl.padded == "1000130001"
    assert bbl.borough_name == "Manhattan"
    assert str(bbl) == "1-13-1"


def test_parse_padded_forms():
    """Test zero-padded dashed and ten-digit forms."""
    assert parse_bbl("3-00456-0078") == BBL(3, 456, 78)
    assert parse_bbl(" 5012340056 ") == BBL(5, 1234, 56)
    assert parse_bbl("5012340056").borough_name == "Staten Island"


@pytest.mark.parametrize(
    "raw",
    ["", "   ", "abc", "1-13", "1-13-1-2", "1-a-1", "6-13-1", "0-13-1", "1-100000-1", "1-13-10000", "123", "6000130001", "1-²-1", "1-١٣-1", "²000130001", "１000130001"],
)
def test_parse_invalid(raw):
    """Test malformed identifiers are rejected."""
    with pytest.raises(InvalidBBLError):
        parse_bbl(raw)


def test_invalid_bbl_is_validation_error():
    """Test the error can be caught as a validation error."""
    with pytest.raises(ValidationError):
        parse_bbl(None)
