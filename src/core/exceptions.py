"""Custom exceptions for the nyc_property_contacts application."""
from __future__ import annotations


class ContactsError(Exception):
    """Base exception for all application errors."""

    pass


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(ContactsError):
    """Raised when required configuration is missing or invalid."""

    pass


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(ContactsError):
    """Raised when a caller passes an argument outside its allowed domain."""

    pass


class InvalidThresholdError(ValidationError):
    """Raised when a similarity threshold falls outside [0, 1]."""

    pass


class InvalidBBLError(ValidationError):
    """Raised when a Borough-Block-Lot identifier cannot be parsed."""

    pass


# =============================================================================
# Input Errors
# =============================================================================


class InputFileError(ContactsError):
    """Raised when a contacts file is missing or is not a JSON list of records."""

    pass


__all__ = [
    # Base
    "ContactsError",
    # Configuration
    "ConfigurationError",
    # Validation
    "ValidationError",
    "InvalidThresholdError",
    "InvalidBBLError",
    # Input
    "InputFileError",
]
