"""API route modules."""
from __future__ import annotations

from . import contacts, health

__all__ = [
    "contacts",
    "health",
]
