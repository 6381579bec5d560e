"""CLI tests using typer's CliRunner."""
from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

# Add src to path
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from cli import app
from conftest import make_raw

runner = CliRunner()


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch, fresh_settings):
    """Keep log lines out of the JSON printed on stdout."""
    from core.config import reload_settings

    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    reload_settings()


@pytest.fixture
def contacts_file(tmp_path):
    path = tmp_path / "contacts.json"
    path.write_text(json.dumps([
        make_raw(ownerMasterFullName="JOHN SMITH", ownerFullAddress=["123 MAIN STREET"]),
        make_raw(ownerMasterFullName="JOHN SMITH", ownerFullAddress=["123 MAIN ST"]),
        make_raw(ownerFullName="DOE, JANE", agency="DOB", source="dob_permit_issuance"),
    ]))
    return path


def test_dedupe(contacts_file):
    """Test deduplicating a contacts file prints merged JSON."""
    result = runner.invoke(app, ["contacts", "dedupe", str(contacts_file)])
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert [c["category"] for c in data["contacts"]] == ["sale", "permits"]
    assert data["contacts"][0]["mergedCount"] == 2
    assert data["contacts"][1]["ownerFullName"] == ["JANE DOE"]
    assert "clusters" not in data


def test_dedupe_explain_and_threshold(contacts_file):
    """Test --explain shows clusters and --threshold is applied."""
    result = runner.invoke(
        app, ["contacts", "dedupe", str(contacts_file), "--threshold", "1.0", "--explain"]
    )
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["clusters"] == [[0, 1], [2]]
    assert data["stats"]["threshold"] == 1.0


def test_dedupe_object_payload(tmp_path):
    """Test an object with bbl and contacts keys is accepted."""
    path = tmp_path / "parcel.json"
    path.write_text(json.dumps({"bbl": "1000130001", "contacts": [make_raw(ownerFullName="A")]}))
    result = runner.invoke(app, ["contacts", "dedupe", str(path)])
    assert result.exit_code == 0, result.output
    assert len(json.loads(result.stdout)["contacts"]) == 1


def test_dedupe_missing_file(tmp_path):
    """Test a missing file exits with an error."""
    result = runner.invoke(app, ["contacts", "dedupe", str(tmp_path / "nope.json")])
    assert result.exit_code == 1


def test_dedupe_bad_json(tmp_path):
    """Test non-JSON input exits with an error."""
    path = tmp_path / "bad.json"
    path.write_text("{not json")
    assert runner.invoke(app, ["contacts", "dedupe", str(path)]).exit_code == 1

    path.write_text(json.dumps({"contacts": "nope"}))
    assert runner.invoke(app, ["contacts", "dedupe", str(path)]).exit_code == 1


def test_dedupe_bad_threshold(contacts_file):
    """Test an out-of-range threshold exits with an error."""
    result = runner.invoke(app, ["contacts", "dedupe", str(contacts_file), "--threshold", "2"])
    assert result.exit_code == 1


def test_categorize():
    """Test the categorize command."""
    result = runner.invoke(app, ["contacts", "categorize", "DOF", "latest_mortgage"])
    assert result.exit_code == 0
    assert "mortgage (Mortgage, M)" in result.stdout


def test_categories():
    """Test the categories listing."""
    result = runner.invoke(app, ["contacts", "categories"])
    assert result.exit_code == 0
    assert "prior-sale" in result.stdout
    assert "hidden by default" in result.stdout


def test_info():
    """Test the info command prints settings."""
    result = runner.invoke(app, ["info"])
    assert result.exit_code == 0
    assert "dedup_threshold: 0.65" in result.stdout


def test_dedupe_source_group_flags(tmp_path, monkeypatch):
    """Test source grouping can be switched on or off against the configured default."""
    from core.config import reload_settings

    path = tmp_path / "contacts.json"
    path.write_text(json.dumps([
        make_raw(ownerMasterFullName="JOHN SMITH", source="latest_sale"),
        make_raw(ownerMasterFullName="JOHN SMITH", source="latest_mortgage"),
    ]))

    def card_count(*flags):
        result = runner.invoke(app, ["contacts", "dedupe", str(path), *flags])
        assert result.exit_code == 0, result.output
        return len(json.loads(result.stdout)["contacts"])

    assert card_count() == 1
    assert card_count("--respect-source-groups") == 2

    monkeypatch.setenv("RESPECT_SOURCE_GROUPS", "true")
    reload_settings()
    assert card_count() == 2
    assert card_count("--ignore-source-groups") == 1
