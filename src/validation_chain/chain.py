"""Sequential validator chain.

ChainBuilder collects validators and options; ``build()`` freezes them
into a ValidatorChain that runs its members in declaration order.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Generic, TypeVar

from validation_chain.context import (
    EXECUTED_VALIDATORS,
    TOTAL_VALIDATORS,
    VALIDATOR_CHAIN,
    VALIDATOR_INDEX,
    ValidationContext,
)
from validation_chain.events import (
    EventEmitter,
    ValidationEventType,
    ValidationObserver,
)
from validation_chain.results import ValidationResult, combine
from validation_chain.validators import BaseValidator, ValidatorFunc, as_validator

__all__ = ["ChainBuilder", "ValidatorChain"]

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ValidatorChain(BaseValidator[T], Generic[T]):
    """Validator that runs its members one after another.

    Errors in the combined result follow declaration order. With
    ``stop_on_first_error`` the chain stops after the first invalid step
    and the remaining validators are never called. Exceptions raised by a
    member propagate to the caller untouched.

    Instances are immutable; use ChainBuilder to create them.

    Example:
        chain = (
            ChainBuilder[str]("signup")
            .add(RequiredValidator())
            .add(EmailValidator())
            .stop_on_first_error()
            .build()
        )
        result = chain.validate("user@example.com")
        result.context["executedValidators"]  # 2
    """

    def __init__(
        self,
        validators: tuple[BaseValidator[T], ...] = (),
        *,
        name: str = "",
        stop_on_first_error: bool = False,
        extra_context: Mapping[str, Any] | None = None,
        events: EventEmitter | None = None,
    ) -> None:
        self._validators = tuple(validators)
        self._name = name
        self._stop_on_first_error = stop_on_first_error
        self._extra_context: Mapping[str, Any] = MappingProxyType(dict(extra_context or {}))
        # Raises pydantic.ValidationError for ill-typed requestId/userId entries
        ValidationContext.from_mapping(self._extra_context)
        self._events = events if events is not None else EventEmitter()

    @property
    def name(self) -> str:
        """Display name of the chain; empty when unnamed."""
        return self._name

    @property
    def stop_on_first_error(self) -> bool:
        return self._stop_on_first_error

    @property
    def extra_context(self) -> Mapping[str, Any]:
        """Read-only entries added to every nested invocation's context."""
        return self._extra_context

    @property
    def validators(self) -> tuple[BaseValidator[T], ...]:
        return self._validators

    @property
    def validator_names(self) -> list[str]:
        """Get list of validator names in order."""
        return [v.name for v in self._validators]

    @property
    def length(self) -> int:
        return len(self._validators)

    def __len__(self) -> int:
        return len(self._validators)

    def validate(
        self, value: T, context: ValidationContext | None = None
    ) -> ValidationResult:
        """Run every validator in order and combine their results.

        Args:
            value: Value to validate.
            context: Caller-supplied metadata. The chain's extra entries and
                its name are layered on top before it is passed down.

        Returns:
            Combined result tagged with totalValidators and
            executedValidators (plus validatorChain when named).
        """
        start_time = time.perf_counter()
        chain_ctx = (context or ValidationContext.empty()).with_values(
            self._extra_context, **{VALIDATOR_CHAIN: self._name}
        )

        logger.debug(
            "Running chain %r with %d validators", self._name, len(self._validators)
        )
        self._events.emit(
            ValidationEventType.VALIDATION_STARTED,
            self,
            validator_name=self._name,
            validator_count=len(self._validators),
        )

        step_results: list[ValidationResult] = []
        for index, validator in enumerate(self._validators):
            step_tags: dict[str, Any] = {VALIDATOR_INDEX: index}
            if self._name:
                step_tags = {VALIDATOR_CHAIN: self._name, **step_tags}
            step = validator.validate(value, chain_ctx).tagged(step_tags)
            step_results.append(step)

            self._events.emit(
                ValidationEventType.STEP_COMPLETED,
                self,
                validator_name=validator.name,
                index=index,
                is_valid=step.is_valid,
                error_count=len(step.errors),
            )

            if self._stop_on_first_error and not step.is_valid:
                logger.debug(
                    "Chain %r stopped at step %d (%s)", self._name, index, validator.name
                )
                self._events.emit(
                    ValidationEventType.SHORT_CIRCUITED,
                    self,
                    validator_name=validator.name,
                    index=index,
                    skipped=len(self._validators) - index - 1,
                )
                break

        result = combine(*step_results)
        if self._name:
            result.with_context(VALIDATOR_CHAIN, self._name)
        result.with_context(TOTAL_VALIDATORS, len(self._validators))
        result.with_context(EXECUTED_VALIDATORS, len(step_results))

        self._events.emit(
            ValidationEventType.VALIDATION_COMPLETED,
            self,
            validator_name=self._name,
            is_valid=result.is_valid,
            error_count=len(result.errors),
            executed=len(step_results),
            duration_ms=(time.perf_counter() - start_time) * 1000,
        )
        return result

    def __repr__(self) -> str:
        return (
            f"ValidatorChain(name={self._name or 'unnamed'!r}, "
            f"validators={len(self._validators)}, "
            f"stop_on_first_error={self._stop_on_first_error})"
        )


class ChainBuilder(Generic[T]):
    """Fluent builder for validator chains.

    Configuration happens here; ``build()`` returns an immutable
    ValidatorChain. The builder may keep being modified afterwards without
    affecting chains it already built.

    Example:
        from validation_chain import ChainBuilder

        chain = (
            ChainBuilder[Contact]("contact")
            .add(EmailValidator())
            .add_func(check_phone)
            .with_context("source", "import")
            .stop_on_first_error()
            .build()
        )
    """

    def __init__(self, name: str = "") -> None:
        """Initialize the builder.

        Args:
            name: Display name for the resulting chain.
        """
        self._validators: list[BaseValidator[T]] = []
        self._name = name
        self._stop_on_first_error = False
        self._context: dict[str, Any] = {}
        self._observers: list[ValidationObserver] = []

    @property
    def name(self) -> str:
        return self._name

    def __len__(self) -> int:
        return len(self._validators)

    def add(self, validator: BaseValidator[T] | ValidatorFunc) -> ChainBuilder[T]:
        """Append a validator (or a bare validation function).

        Returns:
            Self for method chaining.
        """
        self._validators.append(as_validator(validator))
        return self

    def add_func(self, func: ValidatorFunc) -> ChainBuilder[T]:
        """Append a plain ``(value) -> ValidationResult`` function."""
        return self.add(func)

    def stop_on_first_error(self, enabled: bool = True) -> ChainBuilder[T]:
        """Stop at the first invalid step instead of running every step.

        By default chains collect errors from all validators.
        """
        self._stop_on_first_error = enabled
        return self

    def with_context(self, key: str, value: Any) -> ChainBuilder[T]:
        """Add an entry passed to every validator in the chain.

        Raises:
            pydantic.ValidationError: If ``key`` is ``requestId`` or
                ``userId`` and ``value`` is not a string.
        """
        ValidationContext.from_mapping({key: value})
        self._context[key] = value
        return self

    def with_name(self, name: str) -> ChainBuilder[T]:
        """Set the name for the resulting chain."""
        self._name = name
        return self

    def observe(self, observer: ValidationObserver) -> ChainBuilder[T]:
        """Register an observer for the chain's events."""
        if observer not in self._observers:
            self._observers.append(observer)
        return self

    def build(self) -> ValidatorChain[T]:
        """Freeze the current configuration into a ValidatorChain."""
        return ValidatorChain(
            tuple(self._validators),
            name=self._name,
            stop_on_first_error=self._stop_on_first_error,
            extra_context=dict(self._context),
            events=EventEmitter(self._observers),
        )

    def __repr__(self) -> str:
        return (
            f"ChainBuilder(name={self._name!r}, "
            f"validators={len(self._validators)}, "
            f"stop_on_first_error={self._stop_on_first_error})"
        )
