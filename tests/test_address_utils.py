"""Test address normalization and matching."""
from __future__ import annotations

import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from core.address_utils import addresses_match, normalize_address


def test_normalize_address_suffixes():
    """Test street suffix spellings are abbreviated."""
    assert normalize_address("123 Main Street") == "123 MAIN ST"
    assert normalize_address("45 PARK AVENUE") == "45 PARK AVE"
    assert normalize_address("9 Ocean Pkwy.") == "9 OCEAN PKWY"


def test_normalize_address_directionals_and_units():
    """Test directionals and unit designators are abbreviated."""
    assert normalize_address("10 West 57th Street, Suite 400") == "10 W 57TH ST STE 400"
    assert normalize_address("1 North Broadway Apartment 2B") == "1 N BROADWAY APT 2B"


def test_normalize_address_punctuation():
    """Test punctuation becomes whitespace and whitespace collapses."""
    assert normalize_address("123  MAIN ST.,  NEW YORK, NY 10001") == "123 MAIN ST NEW YORK NY 10001"
    assert normalize_address("") == ""
    assert normalize_address(None) == ""
    assert normalize_address(" ,. ") == ""


def test_addresses_match_exact():
    """Test equal normalized addresses match."""
    assert addresses_match("123 MAIN ST", "123 MAIN ST")
    assert not addresses_match("", "")
    assert not addresses_match("123 MAIN ST", "")


def test_addresses_match_near_exact():
    """Test small spelling differences still match."""
    assert addresses_match("123 MAIN ST NEW YORK NY 10001", "123 MAIN ST NEW YORK NY 10002")


def test_addresses_match_house_numbers_must_agree():
    """Test different house numbers never match."""
    assert not addresses_match("123 MAIN ST", "124 MAIN ST")
    assert not addresses_match("123 MAIN ST NEW YORK NY", "456 OAK AVE NEW YORK NY")


def test_addresses_match_cutoff():
    """Test the fuzzy cutoff is respected."""
    left = "PO BOX 123 NEW YORK NY"
    right = "PO BOX 123 BROOKLYN NY"
    assert not addresses_match(left, right, cutoff=95.0)
    assert addresses_match(left, right, cutoff=0.0)
