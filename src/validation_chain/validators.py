"""Abstract base validator and the function adapter.

Provides the base class concrete rules subclass, plus FunctionValidator,
which lets a plain ``(value) -> ValidationResult`` function take part in
any composite.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, Generic, TypeVar, overload

from validation_chain.context import REQUEST_ID, USER_ID, ValidationContext
from validation_chain.results import ValidationResult

__all__ = ["BaseValidator", "FunctionValidator", "as_validator", "validator"]

T = TypeVar("T")

ValidatorFunc = Callable[[Any], ValidationResult]

# Keys a bare function validator copies from the context into its result
_PROPAGATED_KEYS = (REQUEST_ID, USER_ID)


class BaseValidator(ABC, Generic[T]):
    """Abstract base class for validators.

    Generic over T, the type of value being validated.
    Subclass this to create concrete rules.

    Example:
        from validation_chain import BaseValidator, ErrorCode, ValidationResult

        class EmailValidator(BaseValidator[str]):
            @property
            def name(self) -> str:
                return "email"

            def validate(self, value, context=None) -> ValidationResult:
                result = ValidationResult.success()
                if "@" not in value:
                    result.add_error(ErrorCode.EMAIL, "Invalid email", value=value)
                return result
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of this validator for error reporting and identification."""
        ...

    @abstractmethod
    def validate(
        self, value: T, context: ValidationContext | None = None
    ) -> ValidationResult:
        """Validate a value.

        Args:
            value: Value to validate.
            context: Request-scoped metadata. None means an empty context.

        Returns:
            ValidationResult containing validation status and any errors.
        """
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class FunctionValidator(BaseValidator[Any]):
    """Adapt a plain validation function into a validator.

    When called with a context, the request and user identifiers it
    carries are copied into the returned result's context. Nothing else
    from the context reaches the result.
    """

    def __init__(self, func: ValidatorFunc, name: str | None = None) -> None:
        if not callable(func):
            raise TypeError(f"validator function must be callable, got {type(func).__name__}")
        self._func = func
        self._name = name if name is not None else getattr(func, "__name__", "function")

    @property
    def name(self) -> str:
        return self._name

    @property
    def func(self) -> ValidatorFunc:
        """The wrapped function."""
        return self._func

    def validate(
        self, value: Any, context: ValidationContext | None = None
    ) -> ValidationResult:
        result = self._func(value)
        if context is None:
            return result

        propagated = {
            key: context.get(key) for key in _PROPAGATED_KEYS if context.get(key) is not None
        }
        return result.tagged(propagated)

    def __call__(self, value: Any) -> ValidationResult:
        return self._func(value)


def as_validator(candidate: BaseValidator[Any] | ValidatorFunc) -> BaseValidator[Any]:
    """Return ``candidate`` as a validator, wrapping bare functions.

    Raises:
        TypeError: If ``candidate`` is neither a validator nor callable.
    """
    if callable(getattr(candidate, "validate", None)):
        return candidate  # type: ignore[return-value]
    if callable(candidate):
        return FunctionValidator(candidate)
    raise TypeError(f"expected a validator or a callable, got {type(candidate).__name__}")


@overload
def validator(func: ValidatorFunc, /) -> FunctionValidator: ...


@overload
def validator(*, name: str | None = None) -> Callable[[ValidatorFunc], FunctionValidator]: ...


def validator(
    func: ValidatorFunc | None = None,
    /,
    *,
    name: str | None = None,
) -> FunctionValidator | Callable[[ValidatorFunc], FunctionValidator]:
    """Decorator turning a validation function into a FunctionValidator.

    Example:
        @validator
        def not_blank(value):
            if not str(value).strip():
                return ValidationResult.failure(ErrorCode.REQUIRED, "Value is blank")
            return ValidationResult.success()

        @validator(name="positive")
        def check_positive(value): ...
    """
    if func is not None:
        return FunctionValidator(func, name=name)

    def decorate(f: ValidatorFunc) -> FunctionValidator:
        return FunctionValidator(f, name=name)

    return decorate
