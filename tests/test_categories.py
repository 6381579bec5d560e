"""Test contact categorization."""
from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

# Add src to path
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from contacts.categories import (
    CATEGORY_ORDER,
    CategoryTag,
    categorize,
    categorize_contacts,
    category_metadata,
    default_visible_categories,
)
from contacts.models import FormattedContact


@pytest.mark.parametrize(
    "agency,source,expected",
    [
        ("DOF", "property_valuation", CategoryTag.ASSESSMENT_ROLL),
        ("HPD", "multiple_dwelling_registrations", CategoryTag.HPD_REGISTRATION),
        ("DOB", "dob_permit_issuance", CategoryTag.PERMITS),
        ("DOB", "anything_at_all", CategoryTag.PERMITS),
        ("DOB", None, CategoryTag.PERMITS),
        ("DOF", "latest_sale", CategoryTag.SALE),
        ("DOF", "latest_mortgage", CategoryTag.MORTGAGE),
        ("DOF", "prior_sale", CategoryTag.PRIOR_SALE),
        ("DOF", "prior_mortgage", CategoryTag.PRIOR_MORTGAGE),
    ],
)
def test_categorize_table(agency, source, expected):
    """Test each agency/source pair maps to its category."""
    assert categorize({"agency": agency, "source": source}) == expected


def test_categorize_is_case_insensitive():
    """Test agency and source are compared lowercased and trimmed."""
    assert categorize({"agency": " dof ", "source": "LATEST_SALE"}) == CategoryTag.SALE
    assert categorize({"agency": "Dob", "source": "x"}) == CategoryTag.PERMITS


def test_categorize_unknown_defaults_with_warning(caplog):
    """Test unmatched pairs fall back to assessment-roll and warn."""
    with caplog.at_level(logging.WARNING, logger="contacts.categories"):
        assert categorize({"agency": "HPD", "source": "latest_sale"}) == CategoryTag.ASSESSMENT_ROLL
        assert categorize({"agency": None, "source": None}) == CategoryTag.ASSESSMENT_ROLL
        assert categorize({}) == CategoryTag.ASSESSMENT_ROLL
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 3
    assert 'agency="HPD", source="latest_sale"' in warnings[0].getMessage()


def test_categorize_accepts_objects():
    """Test attribute access works for contact records."""
    contact = FormattedContact(agency="HPD", source="multiple_dwelling_registrations")
    assert categorize(contact) == CategoryTag.HPD_REGISTRATION


def test_categorize_non_string_fields():
    """Test non-string agency values are treated as missing."""
    assert categorize({"agency": 5, "source": ["latest_sale"]}) == CategoryTag.ASSESSMENT_ROLL


def test_category_values():
    """Test the closed set of category keys."""
    assert [tag.value for tag in CATEGORY_ORDER] == [
        "assessment-roll",
        "hpd-registration",
        "permits",
        "sale",
        "mortgage",
        "prior-sale",
        "prior-mortgage",
    ]


def test_category_metadata():
    """Test labels, abbreviations and default visibility."""
    sale = category_metadata(CategoryTag.SALE)
    assert sale.label == "Sale"
    assert sale.abbreviation == "S"
    assert sale.to_dict() == {
        "key": "sale",
        "label": "Sale",
        "abbreviation": "S",
        "defaultVisible": True,
    }
    assert category_metadata("prior-sale").default_visible is False


def test_default_visible_categories():
    """Test prior-* categories are hidden by default."""
    visible = default_visible_categories()
    assert CategoryTag.PRIOR_SALE not in visible
    assert CategoryTag.PRIOR_MORTGAGE not in visible
    assert len(visible) == 5


def test_categorize_contacts_preserves_order():
    """Test tags line up with their contacts."""
    contacts = [
        FormattedContact(agency="DOB", source="dob_jobs"),
        FormattedContact(agency="DOF", source="latest_mortgage"),
    ]
    tagged = categorize_contacts(contacts)
    assert [t.category for t in tagged] == [CategoryTag.PERMITS, CategoryTag.MORTGAGE]
    assert tagged[0].contact is contacts[0]
    assert tagged[1].to_dict()["category"] == "mortgage"
