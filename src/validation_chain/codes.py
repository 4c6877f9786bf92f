"""Standard validation error codes.

Codes are plain strings carried on ValidationError records. Concrete rules
may use any of these or layer their own domain-specific codes on top.
"""

from __future__ import annotations

__all__ = ["ErrorCode", "VALIDATION_FAILED"]

VALIDATION_FAILED = "VALIDATION_FAILED"
"""Generic code used when a failure carries no more specific code."""


class ErrorCode:
    """Namespace of standard error code constants."""

    # Core validation failures
    REQUIRED = "VALIDATION_REQUIRED"
    FORMAT = "VALIDATION_FORMAT"
    LENGTH = "VALIDATION_LENGTH"
    RANGE = "VALIDATION_RANGE"
    TYPE = "VALIDATION_TYPE"
    PATTERN = "VALIDATION_PATTERN"
    CUSTOM = "VALIDATION_CUSTOM"

    # Specific formats
    EMAIL = "VALIDATION_EMAIL"
    URL = "VALIDATION_URL"
    PHONE = "VALIDATION_PHONE"
    PASSWORD = "VALIDATION_PASSWORD"
    NUMERIC = "VALIDATION_NUMERIC"
    DATE = "VALIDATION_DATE"
    TIME = "VALIDATION_TIME"
    JSON = "VALIDATION_JSON"
    XML = "VALIDATION_XML"

    # Files and paths
    PATH = "VALIDATION_PATH"
    FILE_EXISTS = "VALIDATION_FILE_EXISTS"
    FILE_TYPE = "VALIDATION_FILE_TYPE"
    PERMISSION = "VALIDATION_PERMISSION"

    # Locale
    LOCALE = "VALIDATION_LOCALE"
    LANGUAGE = "VALIDATION_LANGUAGE"
    COUNTRY = "VALIDATION_COUNTRY"
    CURRENCY = "VALIDATION_CURRENCY"

    @classmethod
    def all(cls) -> frozenset[str]:
        """Return every standard code defined on this namespace."""
        return frozenset(
            value
            for key, value in vars(cls).items()
            if key.isupper() and isinstance(value, str)
        )
