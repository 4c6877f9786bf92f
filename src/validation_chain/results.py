"""Validation result containers.

Structured result and error records plus ``combine``, the aggregation
function every composite validator uses to merge per-step results.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from validation_chain.codes import VALIDATION_FAILED
from validation_chain.errors import ValidationFailedError

__all__ = ["ValidationError", "ValidationResult", "combine"]


@dataclass(frozen=True)
class ValidationError:
    """A single validation error.

    Hashing uses code, message and field only, since value and context
    may hold unhashable objects. Equal errors still hash equal.
    """

    code: str
    message: str
    field: str | None = None
    value: Any = None
    expected: Any = None
    context: dict[str, Any] = dataclasses.field(default_factory=dict)

    def __hash__(self) -> int:
        return hash((self.code, self.message, self.field))

    def __str__(self) -> str:
        parts: list[str] = []
        if self.field:
            parts.append(f"field:{self.field}")
        parts.append(f"code:{self.code}")
        parts.append(f"message:{self.message}")
        if self.value is not None:
            parts.append(f"value:{self.value}")
        if self.expected is not None:
            parts.append(f"expected:{self.expected}")
        return f"ValidationError{{{', '.join(parts)}}}"


@dataclass
class ValidationResult:
    """Result of validation with error aggregation.

    Validity is derived from the error list and is never stored, so a
    result is valid exactly when it records no errors.

    Example:
        result = ValidationResult.success()
        if not item.email:
            result.add_error(ErrorCode.REQUIRED, "Email is required", field="email")
        result.is_valid  # False
    """

    errors: list[ValidationError] = field(default_factory=list)
    context: dict[str, Any] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        """True when no errors are recorded."""
        return not self.errors

    def __bool__(self) -> bool:
        return self.is_valid

    @classmethod
    def success(cls, **context: Any) -> ValidationResult:
        """Create a successful result, optionally carrying context entries."""
        return cls(context=dict(context))

    @classmethod
    def failure(
        cls,
        code: str,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        expected: Any = None,
        context: dict[str, Any] | None = None,
    ) -> ValidationResult:
        """Create a failed result holding a single error."""
        return cls().add_error(
            code, message, field=field, value=value, expected=expected, context=context
        )

    def add_error(
        self,
        code: str,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        expected: Any = None,
        context: dict[str, Any] | None = None,
    ) -> ValidationResult:
        """Add a validation error.

        Returns:
            Self, for method chaining.
        """
        self.errors.append(
            ValidationError(
                code=code,
                message=message,
                field=field,
                value=value,
                expected=expected,
                context=dict(context or {}),
            )
        )
        return self

    def with_context(self, key: str, value: Any) -> ValidationResult:
        """Set a context entry, overwriting any previous value for ``key``.

        Returns:
            Self, for method chaining.
        """
        self.context[key] = value
        return self

    def merge(self, other: ValidationResult) -> ValidationResult:
        """Merge another validation result into this one.

        This method mutates the current instance in-place. Errors from an
        invalid ``other`` are appended after the existing ones, and its
        context entries overwrite existing keys.

        Args:
            other: Another ValidationResult to merge into this one.

        Returns:
            Self, for method chaining (e.g., result.merge(a).merge(b)).
        """
        if not other.is_valid:
            self.errors.extend(other.errors)
        self.context.update(other.context)
        return self

    def tagged(self, entries: Mapping[str, Any]) -> ValidationResult:
        """Return a copy of this result with extra context entries.

        The copy shares the (immutable) error records but owns its own
        list and context dict, so the original is left untouched.
        """
        return ValidationResult(
            errors=list(self.errors),
            context={**self.context, **entries},
        )

    @property
    def first_error(self) -> ValidationError | None:
        """The first recorded error, or None if validation passed."""
        return self.errors[0] if self.errors else None

    def error_messages(self) -> list[str]:
        """Return all error messages in order."""
        return [error.message for error in self.errors]

    def error_codes(self) -> list[str]:
        """Return all error codes in order."""
        return [error.code for error in self.errors]

    def has_error(self, code: str) -> bool:
        """Check whether any recorded error carries ``code``."""
        return any(error.code == code for error in self.errors)

    def to_error(self) -> ValidationFailedError | None:
        """Collapse this result into a single exception value.

        The first error becomes the primary code and message. Its field,
        value, expected and context entries are attached as details; when
        more than one error is recorded, ``totalErrors`` and ``allMessages``
        are attached as well.

        Returns:
            None if the result is valid, otherwise a ValidationFailedError.
        """
        first = self.first_error
        if first is None:
            return None

        details: dict[str, Any] = {}
        if first.field:
            details["field"] = first.field
        if first.value is not None:
            details["value"] = first.value
        if first.expected is not None:
            details["expected"] = first.expected
        details.update(first.context)

        if len(self.errors) > 1:
            details["totalErrors"] = len(self.errors)
            details["allMessages"] = self.error_messages()

        return ValidationFailedError(
            first.message,
            code=first.code or VALIDATION_FAILED,
            details=details,
        )

    def __str__(self) -> str:
        if self.is_valid:
            return "ValidationResult{valid: true}"
        first = self.errors[0]
        parts = [
            "ValidationResult{valid: false",
            f"errors: {len(self.errors)}",
            f"first: {first.message}",
        ]
        if first.field:
            parts.append(f"field: {first.field}")
        return ", ".join(parts) + "}"


def combine(*results: ValidationResult) -> ValidationResult:
    """Merge any number of results into one fresh result.

    Errors of every invalid input are concatenated in input order and
    context entries are folded left to right (last key wins). The inputs
    are not modified. With no inputs the result is valid with an empty
    context.
    """
    combined = ValidationResult()
    for result in results:
        combined.merge(result)
    return combined
