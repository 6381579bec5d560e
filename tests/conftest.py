"""Pytest configuration and fixtures."""
from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

# Set test environment
os.environ.setdefault("ENVIRONMENT", "test")

from core.config import get_settings, reload_settings


def make_raw(**overrides: Any) -> Dict[str, Any]:
    """A raw contact in the camelCase shape the data layer delivers."""
    contact: Dict[str, Any] = {
        "bbl": "1-13-1",
        "bucketName": "owners",
        "status": "active",
        "ownerBusinessName": None,
        "ownerFullAddress": None,
        "ownerTitle": None,
        "ownerPhone": None,
        "ownerFullName": None,
        "ownerMasterFullName": None,
        "date": None,
        "source": "latest_sale",
        "agency": "DOF",
        "mergedCount": 1,
    }
    contact.update(overrides)
    return contact


@pytest.fixture
def raw_contact():
    """Builder for raw contact dicts."""
    return make_raw


@pytest.fixture
def john_smith_pair():
    """Two reports of the same owner with differently spelled addresses."""
    return [
        make_raw(ownerMasterFullName="JOHN SMITH", ownerFullAddress=["123 MAIN STREET"]),
        make_raw(ownerMasterFullName="JOHN SMITH", ownerFullAddress=["123 MAIN ST"]),
    ]


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Drop deduplication env overrides and the settings cache around each test."""
    for name in (
        "DEDUP_THRESHOLD",
        "NAME_WEIGHT",
        "ADDRESS_WEIGHT",
        "ADDRESS_MATCH_CUTOFF",
        "RESPECT_SOURCE_GROUPS",
        "PHONE_DEFAULT_REGION",
        "LOG_LEVEL",
        "LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    reload_settings()
    yield
    get_settings.cache_clear()
