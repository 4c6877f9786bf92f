"""Tests for ConditionalValidator and when()."""

from __future__ import annotations

from typing import Any

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from validation_chain.chain import ChainBuilder
from validation_chain.conditional import ConditionalValidator, when
from validation_chain.context import ValidationContext
from validation_chain.events import ValidationEventType
from validation_chain.results import ValidationResult

from .conftest import (
    AlwaysInvalid,
    AlwaysValid,
    ContextEchoValidator,
    RecordingObserver,
    SpyValidator,
)


class TestConditionalValidatorUnit:
    """Unit tests for the conditional gate."""

    def test_condition_false_skips_validator(self) -> None:
        spy = SpyValidator(AlwaysInvalid("EX"))
        gate = ConditionalValidator(lambda v: False, spy, "skip")

        result = gate.validate("x")

        assert result.is_valid
        assert result.errors == []
        assert result.context == {"conditionalValidator": "skip", "conditionMet": False}
        assert spy.call_count == 0

    def test_condition_true_passes_through_errors(self) -> None:
        gate = ConditionalValidator(lambda v: True, AlwaysInvalid("EX"), "run")

        result = gate.validate("x")

        assert not result.is_valid
        assert result.error_codes() == ["EX"]
        assert result.context["conditionMet"] is True
        assert result.context["conditionalValidator"] == "run"

    def test_condition_true_valid(self) -> None:
        gate = ConditionalValidator(lambda v: True, AlwaysValid())

        result = gate.validate("x")

        assert result.is_valid
        assert result.context["conditionMet"] is True
        assert result.context["conditionalValidator"] == ""

    def test_predicate_receives_value(self) -> None:
        seen: list[Any] = []

        def predicate(value: Any) -> bool:
            seen.append(value)
            return False

        ConditionalValidator(predicate, AlwaysValid()).validate({"a": 1})

        assert seen == [{"a": 1}]

    def test_context_passed_to_wrapped(self, request_context: ValidationContext) -> None:
        gate = ConditionalValidator(lambda v: True, ContextEchoValidator(), "ctx")

        result = gate.validate("x", request_context)

        assert result.context["requestId"] == "req-1"
        assert result.context["tenant"] == "acme"

    def test_preserves_wrapped_context(self) -> None:
        inner = ChainBuilder[Any]("inner").add(AlwaysValid()).build()
        gate = ConditionalValidator(lambda v: True, inner, "gate")

        result = gate.validate("x")

        assert result.context["validatorChain"] == "inner"
        assert result.context["totalValidators"] == 1
        assert result.context["conditionalValidator"] == "gate"

    def test_does_not_mutate_wrapped_result(self) -> None:
        shared = ValidationResult.success()
        gate = ConditionalValidator(lambda v: True, lambda v: shared, "g")

        gate.validate("x")

        assert shared.context == {}

    def test_missing_condition_is_programmer_error(self) -> None:
        with pytest.raises(TypeError):
            ConditionalValidator(None, AlwaysValid())  # type: ignore[arg-type]

    def test_predicate_exception_propagates(self) -> None:
        def predicate(value: Any) -> bool:
            raise KeyError("missing attribute")

        gate = ConditionalValidator(predicate, AlwaysValid())

        with pytest.raises(KeyError):
            gate.validate("x")

    def test_accepts_bare_function(self) -> None:
        gate = ConditionalValidator(
            lambda v: v > 10, lambda v: ValidationResult.failure("BIG", "too big")
        )

        assert gate.validate(5).is_valid
        assert gate.validate(50).error_codes() == ["BIG"]

    def test_inside_chain(self) -> None:
        chain = (
            ChainBuilder[int]("numbers")
            .add(when(lambda v: v < 0, AlwaysInvalid("NEG"), "negatives"))
            .add(AlwaysValid())
            .build()
        )

        assert chain.validate(5).is_valid
        assert chain.validate(-5).error_codes() == ["NEG"]

    def test_repr_and_name(self) -> None:
        gate = when(lambda v: True, AlwaysValid("inner"), "gate")

        assert gate.name == "gate"
        assert gate.validator.name == "inner"
        assert "gate" in repr(gate)
        assert "unnamed" in repr(when(lambda v: True, AlwaysValid()))

    def test_emits_condition_event(self, recording_observer: RecordingObserver) -> None:
        gate = ConditionalValidator(
            lambda v: False, AlwaysValid(), "g", observers=[recording_observer]
        )

        gate.validate("x")

        assert recording_observer.event_types == [ValidationEventType.CONDITION_EVALUATED]
        assert recording_observer.events[0].data["condition_met"] is False


class TestConditionalValidatorProperties:
    """Property-based tests for the conditional gate."""

    @given(value=st.integers(), threshold=st.integers())
    @settings(max_examples=100)
    def test_outcome_follows_predicate(self, value: int, threshold: int) -> None:
        spy = SpyValidator(AlwaysInvalid("EX"))
        gate = ConditionalValidator(lambda v: v > threshold, spy, "threshold")

        result = gate.validate(value)

        applies = value > threshold
        assert result.is_valid == (not applies)
        assert result.context["conditionMet"] is applies
        assert spy.call_count == (1 if applies else 0)
