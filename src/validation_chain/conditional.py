"""Conditional validator gate."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Generic, TypeVar

from validation_chain.context import CONDITION_MET, CONDITIONAL_VALIDATOR, ValidationContext
from validation_chain.events import EventEmitter, ValidationEventType, ValidationObserver
from validation_chain.results import ValidationResult
from validation_chain.validators import BaseValidator, ValidatorFunc, as_validator

__all__ = ["ConditionalValidator", "when"]

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ConditionalValidator(BaseValidator[T], Generic[T]):
    """Run a wrapped validator only when a predicate holds for the value.

    When the predicate is false the gate returns a fresh successful result
    and the wrapped validator is never called. The gate itself never adds
    an error; it only suppresses or passes through the wrapped outcome.

    Example:
        vat_check = ConditionalValidator(
            lambda order: order.country in EU_COUNTRIES,
            VatNumberValidator(),
            name="eu-vat",
        )
    """

    def __init__(
        self,
        condition: Callable[[T], bool],
        validator: BaseValidator[T] | ValidatorFunc,
        name: str = "",
        *,
        observers: Iterable[ValidationObserver] = (),
    ) -> None:
        """Initialize the gate.

        Args:
            condition: Predicate evaluated against each value.
            validator: Validator (or bare function) to run when it holds.
            name: Display name reported under ``conditionalValidator``.
            observers: Observers notified after each predicate evaluation.

        Raises:
            TypeError: If ``condition`` is not callable.
        """
        if not callable(condition):
            raise TypeError("condition must be a callable predicate")
        self._condition = condition
        self._validator = as_validator(validator)
        self._name = name
        self._events = EventEmitter(observers)

    @property
    def name(self) -> str:
        return self._name

    @property
    def validator(self) -> BaseValidator[T]:
        """The wrapped validator."""
        return self._validator

    def validate(
        self, value: T, context: ValidationContext | None = None
    ) -> ValidationResult:
        condition_met = bool(self._condition(value))
        self._events.emit(
            ValidationEventType.CONDITION_EVALUATED,
            self,
            validator_name=self._name,
            condition_met=condition_met,
        )

        if not condition_met:
            logger.debug("Condition for %r not met, skipping %s", self._name, self._validator.name)
            return ValidationResult.success(
                **{CONDITIONAL_VALIDATOR: self._name, CONDITION_MET: False}
            )

        result = self._validator.validate(value, context)
        return result.tagged({CONDITIONAL_VALIDATOR: self._name, CONDITION_MET: True})

    def __repr__(self) -> str:
        return (
            f"ConditionalValidator(name={self._name or 'unnamed'!r}, "
            f"validator={self._validator.name!r})"
        )


def when(
    condition: Callable[[T], bool],
    validator: BaseValidator[T] | ValidatorFunc,
    name: str = "",
    *,
    observers: Iterable[ValidationObserver] = (),
) -> ConditionalValidator[T]:
    """Shorthand for ConditionalValidator.

    Example:
        chain = (
            ChainBuilder("profile")
            .add(when(lambda p: p.has_phone, PhoneValidator(), "phone-if-present"))
            .build()
        )
    """
    return ConditionalValidator(condition, validator, name, observers=observers)
