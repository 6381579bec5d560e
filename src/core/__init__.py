"""Core module exports."""
from __future__ import annotations

from core.config import Settings, get_settings, reload_settings
from core.exceptions import (
    # Base
    ContactsError,
    # Configuration
    ConfigurationError,
    # Validation
    ValidationError,
    InvalidThresholdError,
    InvalidBBLError,
    # Input
    InputFileError,
)
from core.logging_config import (
    setup_logging,
    configure_logging,
    get_logger,
    get_context_logger,
    JSONFormatter,
    ContextLogger,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "reload_settings",
    # Exceptions - Base
    "ContactsError",
    # Exceptions - Config
    "ConfigurationError",
    # Exceptions - Validation
    "ValidationError",
    "InvalidThresholdError",
    "InvalidBBLError",
    # Exceptions - Input
    "InputFileError",
    # Logging
    "setup_logging",
    "configure_logging",
    "get_logger",
    "get_context_logger",
    "JSONFormatter",
    "ContextLogger",
]
