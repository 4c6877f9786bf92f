"""Shared fixtures, test validators and Hypothesis strategies."""

from __future__ import annotations

import threading
from typing import Any

import pytest
from hypothesis import strategies as st

from validation_chain.context import ValidationContext
from validation_chain.events import ValidationEvent, ValidationEventType
from validation_chain.results import ValidationError, ValidationResult
from validation_chain.validators import BaseValidator

# -----------------------------------------------------------------------------
# Hypothesis Strategies
# -----------------------------------------------------------------------------

codes = st.text(
    min_size=1,
    max_size=20,
    alphabet=st.characters(whitelist_categories=("Lu", "N")),
)

messages = st.text(min_size=1, max_size=100)

field_names = st.one_of(
    st.none(),
    st.text(min_size=1, max_size=30, alphabet=st.characters(whitelist_categories=("L", "N"))),
)

context_dicts = st.dictionaries(
    keys=st.text(
        min_size=1,
        max_size=20,
        alphabet=st.characters(
            whitelist_categories=("L",)  # type: ignore[arg-type]
        ),
    ),
    values=st.one_of(st.integers(), st.text(max_size=50), st.booleans()),
    max_size=5,
)

validation_errors = st.builds(
    ValidationError,
    code=codes,
    message=messages,
    field=field_names,
)

validation_results = st.builds(
    ValidationResult,
    errors=st.lists(validation_errors, max_size=4),
    context=context_dicts,
)


# -----------------------------------------------------------------------------
# Test Validator Classes
# -----------------------------------------------------------------------------


class AlwaysValid(BaseValidator[Any]):
    """Validator that always passes."""

    def __init__(self, name: str = "always_valid") -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def validate(
        self, value: Any, context: ValidationContext | None = None
    ) -> ValidationResult:
        return ValidationResult.success()


class AlwaysInvalid(BaseValidator[Any]):
    """Validator that always fails with a configurable code."""

    def __init__(
        self, code: str = "E", name: str | None = None, message: str | None = None
    ) -> None:
        self._code = code
        self._name = name or f"always_invalid_{code}"
        self._message = message or f"failed with {code}"

    @property
    def name(self) -> str:
        return self._name

    def validate(
        self, value: Any, context: ValidationContext | None = None
    ) -> ValidationResult:
        return ValidationResult.failure(self._code, self._message, value=value)


class SpyValidator(BaseValidator[Any]):
    """Wraps another validator and records every call it receives."""

    def __init__(self, inner: BaseValidator[Any], name: str | None = None) -> None:
        self._inner = inner
        self._name = name or f"spy_{inner.name}"
        self._lock = threading.Lock()
        self.calls: list[tuple[Any, ValidationContext | None]] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def validate(
        self, value: Any, context: ValidationContext | None = None
    ) -> ValidationResult:
        with self._lock:
            self.calls.append((value, context))
        return self._inner.validate(value, context)


class RaisingValidator(BaseValidator[Any]):
    """Validator whose rule logic is broken."""

    def __init__(self, exc: Exception | None = None, name: str = "raising") -> None:
        self._exc = exc or RuntimeError("rule exploded")
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def validate(
        self, value: Any, context: ValidationContext | None = None
    ) -> ValidationResult:
        raise self._exc


class ContextEchoValidator(BaseValidator[Any]):
    """Copies the context it receives into its result."""

    def __init__(self, name: str = "echo") -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def validate(
        self, value: Any, context: ValidationContext | None = None
    ) -> ValidationResult:
        return ValidationResult(context=context.as_dict() if context else {})


class ExtrasMutator(BaseValidator[Any]):
    """Tries to overwrite a context entry and records whether it was refused."""

    def __init__(self, name: str = "mutator") -> None:
        self._name = name
        self.rejected = False

    @property
    def name(self) -> str:
        return self._name

    def validate(
        self, value: Any, context: ValidationContext | None = None
    ) -> ValidationResult:
        try:
            context.extras["tenant"] = "hijacked"  # type: ignore[index, union-attr]
        except TypeError:
            self.rejected = True
        return ValidationResult.success()


class RecordingObserver:
    """Observer that records all events for testing."""

    def __init__(self) -> None:
        self.events: list[ValidationEvent] = []

    def on_event(self, event: ValidationEvent) -> None:
        self.events.append(event)

    @property
    def event_types(self) -> list[ValidationEventType]:
        return [e.event_type for e in self.events]

    def of_type(self, event_type: ValidationEventType) -> list[ValidationEvent]:
        return [e for e in self.events if e.event_type == event_type]


# -----------------------------------------------------------------------------
# Pytest Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def always_valid() -> AlwaysValid:
    return AlwaysValid()


@pytest.fixture
def recording_observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def request_context() -> ValidationContext:
    """Context carrying both well-known identifiers and one extra."""
    return ValidationContext(request_id="req-1", user_id="user-7", extras={"tenant": "acme"})
