"""Test owner name normalization."""
from __future__ import annotations

import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from utils.dedupe import fold_key, jaccard, name_tokens, normalize_owner_name


def test_normalize_owner_name():
    """Test case, punctuation and whitespace are unified."""
    assert normalize_owner_name("  John   Doe  ") == "JOHN DOE"
    assert normalize_owner_name("O'Brien, Pat") == "OBRIEN PAT"
    assert normalize_owner_name("") == ""
    assert normalize_owner_name(None) == ""


def test_normalize_owner_name_entity_suffixes():
    """Test entity suffix spellings collapse together."""
    assert normalize_owner_name("Acme Realty, L.L.C.") == "ACME REALTY LLC"
    assert normalize_owner_name("ACME HOLDING CORPORATION") == "ACME HOLDING CORP"
    assert normalize_owner_name("Smith & Sons Co") == "SMITH AND SONS CO"
    assert normalize_owner_name("FIRST AVENUE ASSOCIATES L.P.") == "1ST AVENUE ASSOC LP"


def test_name_tokens():
    """Test tokens are a set of normalized words."""
    assert name_tokens("John Smith") == frozenset({"JOHN", "SMITH"})
    assert name_tokens("SMITH, JOHN") == name_tokens("john smith")
    assert name_tokens(None) == frozenset()


def test_jaccard():
    """Test Jaccard overlap including the empty case."""
    assert jaccard({"A", "B"}, {"A", "B"}) == 1.0
    assert jaccard({"A", "B"}, {"B", "C"}) == 1 / 3
    assert jaccard(set(), set()) == 0.0
    assert jaccard({"A"}, set()) == 0.0


def test_fold_key():
    """Test case and whitespace differences share a key."""
    assert fold_key("  123 Main   St ") == fold_key("123 MAIN ST")
    assert fold_key("A") != fold_key("B")
