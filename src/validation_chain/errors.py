"""Exception raised by callers that collapse a result into a single error."""

from __future__ import annotations

from typing import Any

__all__ = ["ValidationFailedError"]


class ValidationFailedError(Exception):
    """A validation result collapsed into one raisable error.

    Produced by ValidationResult.to_error(). The first recorded error
    becomes the primary code and message; everything else is carried in
    ``details``.

    Attributes:
        code: Error code of the primary error.
        message: Message of the primary error.
        details: Auxiliary data (field, value, expected, totalErrors,
            allMessages, plus the primary error's own context).

    Example:
        error = result.to_error()
        if error is not None:
            raise error
    """

    def __init__(
        self,
        message: str,
        code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details: dict[str, Any] = details or {}
        # Alias used by context-rich exception handlers
        self.context = self.details

    def __repr__(self) -> str:
        return (
            f"ValidationFailedError(code={self.code!r}, message={self.message!r}, "
            f"details={self.details!r})"
        )
