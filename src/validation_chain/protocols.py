"""Validation protocols for type checking.

Generic validator protocol that can be used for type hints.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from validation_chain.context import ValidationContext
    from validation_chain.results import ValidationResult

T = TypeVar("T", contravariant=True)


@runtime_checkable
class ValidatorProtocol(Protocol[T]):
    """Protocol for validation implementations.

    Use this for type hints when accepting any validator, leaf rule or
    composite alike. Generic over T, the type of value being validated.
    Calling ``validate`` without a context is the same as passing an
    empty one.
    """

    def validate(
        self, value: T, context: ValidationContext | None = None
    ) -> ValidationResult:
        """Validate a value."""
        ...

    @property
    def name(self) -> str:
        """Name of this validator."""
        ...
