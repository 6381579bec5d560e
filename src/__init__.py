"""Top-level package for the NYC property contacts service."""
from __future__ import annotations

__version__ = "1.0.0"

__all__ = [
    "api",
    "contacts",
    "core",
    "utils",
]
