"""Core utility functions."""
from __future__ import annotations

import uuid
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Get current UTC datetime with timezone info. Always use this instead of datetime.now()."""
    return datetime.now(timezone.utc)


def generate_unique_key() -> str:
    """Generate a unique random key."""
    return uuid.uuid4().hex


__all__ = ["utcnow", "generate_unique_key"]
