"""Parallel validator group.

Runs every member validator on its own worker thread and joins on all of
them before combining. Results are combined in completion order, so when
several branches fail the order of their errors in the final result is
not deterministic; each branch result carries its ``validatorIndex``.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Generic, TypeVar

from validation_chain.context import (
    PARALLEL_EXECUTION,
    PARALLEL_VALIDATOR,
    TOTAL_VALIDATORS,
    VALIDATOR_INDEX,
    ValidationContext,
)
from validation_chain.events import EventEmitter, ValidationEventType, ValidationObserver
from validation_chain.results import ValidationResult, combine
from validation_chain.validators import BaseValidator, ValidatorFunc, as_validator

__all__ = ["ParallelBuilder", "ParallelValidator"]

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ParallelValidator(BaseValidator[T], Generic[T]):
    """Validator that runs its members concurrently.

    Each call gets its own thread pool sized to the number of members, so
    every branch starts immediately and no state is shared between calls.
    If a branch raises, the exception is re-raised to the caller once the
    pool has shut down; the call never waits on a branch that can no
    longer deliver a result.

    There is no timeout or cancellation: the context is passed through to
    every branch unchanged and nothing observes a deadline.

    Instances are immutable; use ParallelBuilder to create them.

    Example:
        group = (
            ParallelBuilder[Order]("order-checks")
            .add(StockValidator())
            .add(FraudValidator())
            .build()
        )
        result = group.validate(order)
        result.context["parallelExecution"]  # True
    """

    def __init__(
        self,
        validators: tuple[BaseValidator[T], ...] = (),
        *,
        name: str = "",
        events: EventEmitter | None = None,
    ) -> None:
        self._validators = tuple(validators)
        self._name = name
        self._events = events if events is not None else EventEmitter()

    @property
    def name(self) -> str:
        return self._name

    @property
    def validators(self) -> tuple[BaseValidator[T], ...]:
        return self._validators

    @property
    def validator_names(self) -> list[str]:
        """Get list of validator names in declaration order."""
        return [v.name for v in self._validators]

    @property
    def length(self) -> int:
        return len(self._validators)

    def __len__(self) -> int:
        return len(self._validators)

    def validate(
        self, value: T, context: ValidationContext | None = None
    ) -> ValidationResult:
        """Run all validators concurrently and combine their results.

        Args:
            value: Value to validate, shared read-only by every branch.
            context: Metadata passed unchanged to every branch.

        Returns:
            Combined result tagged with parallelExecution and
            totalValidators (plus parallelValidator when named).

        Raises:
            Exception: Whatever the first failing branch raised.
        """
        if not self._validators:
            return ValidationResult.success()

        start_time = time.perf_counter()
        total = len(self._validators)
        logger.debug("Running parallel group %r with %d validators", self._name, total)
        self._events.emit(
            ValidationEventType.VALIDATION_STARTED,
            self,
            validator_name=self._name,
            validator_count=total,
        )

        collected: list[ValidationResult] = []
        with ThreadPoolExecutor(
            max_workers=total,
            thread_name_prefix=f"validation-{self._name or 'parallel'}",
        ) as executor:
            pending: dict[Future[ValidationResult], int] = {
                executor.submit(self._run_branch, index, validator, value, context): index
                for index, validator in enumerate(self._validators)
            }

            for future in as_completed(pending):
                index = pending[future]
                try:
                    branch = future.result()
                except Exception:
                    logger.error(
                        "Branch %d (%s) of parallel group %r raised",
                        index,
                        self._validators[index].name,
                        self._name,
                        exc_info=True,
                    )
                    raise
                collected.append(branch)

                self._events.emit(
                    ValidationEventType.STEP_COMPLETED,
                    self,
                    validator_name=self._validators[index].name,
                    index=index,
                    is_valid=branch.is_valid,
                    error_count=len(branch.errors),
                )

        result = combine(*collected)
        if self._name:
            result.with_context(PARALLEL_VALIDATOR, self._name)
        result.with_context(PARALLEL_EXECUTION, True)
        result.with_context(TOTAL_VALIDATORS, total)

        self._events.emit(
            ValidationEventType.VALIDATION_COMPLETED,
            self,
            validator_name=self._name,
            is_valid=result.is_valid,
            error_count=len(result.errors),
            executed=len(collected),
            duration_ms=(time.perf_counter() - start_time) * 1000,
        )
        return result

    def _run_branch(
        self,
        index: int,
        validator: BaseValidator[T],
        value: T,
        context: ValidationContext | None,
    ) -> ValidationResult:
        """Validate one branch (called by worker threads)."""
        return validator.validate(value, context).tagged(
            {PARALLEL_VALIDATOR: self._name, VALIDATOR_INDEX: index}
        )

    def __repr__(self) -> str:
        return (
            f"ParallelValidator(name={self._name or 'unnamed'!r}, "
            f"validators={len(self._validators)})"
        )


class ParallelBuilder(Generic[T]):
    """Fluent builder for parallel validator groups.

    Example:
        group = (
            ParallelBuilder("lookups")
            .add(DomainExistsValidator())
            .add_func(check_blocklist)
            .build()
        )
    """

    def __init__(self, name: str = "") -> None:
        self._validators: list[BaseValidator[T]] = []
        self._name = name
        self._observers: list[ValidationObserver] = []

    @property
    def name(self) -> str:
        return self._name

    def __len__(self) -> int:
        return len(self._validators)

    def add(self, validator: BaseValidator[T] | ValidatorFunc) -> ParallelBuilder[T]:
        """Add a validator (or bare function) to the group."""
        self._validators.append(as_validator(validator))
        return self

    def add_func(self, func: ValidatorFunc) -> ParallelBuilder[T]:
        """Add a plain ``(value) -> ValidationResult`` function."""
        return self.add(func)

    def with_name(self, name: str) -> ParallelBuilder[T]:
        self._name = name
        return self

    def observe(self, observer: ValidationObserver) -> ParallelBuilder[T]:
        """Register an observer for the group's events.

        Events are emitted from the calling thread, never from workers.
        """
        if observer not in self._observers:
            self._observers.append(observer)
        return self

    def build(self) -> ParallelValidator[T]:
        """Freeze the current configuration into a ParallelValidator."""
        return ParallelValidator(
            tuple(self._validators),
            name=self._name,
            events=EventEmitter(self._observers),
        )

    def __repr__(self) -> str:
        return f"ParallelBuilder(name={self._name!r}, validators={len(self._validators)})"
