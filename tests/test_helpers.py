"""Tests for value helpers and error codes."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from validation_chain.codes import VALIDATION_FAILED, ErrorCode
from validation_chain.helpers import is_nil_or_empty, to_float, value_length


class TestValueLength:
    """Tests for value_length."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("hello", 5),
            ("", 0),
            ("héllo", 5),
            ([1, 2, 3], 3),
            ((), 0),
            ({"a": 1, "b": 2}, 2),
            ({1, 2}, 2),
            (None, 0),
        ],
    )
    def test_supported_values(self, value: Any, expected: int) -> None:
        assert value_length(value) == expected

    @pytest.mark.parametrize("value", [123, 1.5, object()])
    def test_unsupported_values_raise(self, value: Any) -> None:
        with pytest.raises(TypeError):
            value_length(value)

    @given(text=st.text())
    @settings(max_examples=50)
    def test_string_length_in_code_points(self, text: str) -> None:
        assert value_length(text) == len(text)


class TestToFloat:
    """Tests for to_float."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (123.45, 123.45),
            (42, 42.0),
            ("99.9", 99.9),
            (" 7 ", 7.0),
            (Decimal("1.25"), 1.25),
        ],
    )
    def test_numeric_values(self, value: Any, expected: float) -> None:
        assert to_float(value) == expected

    def test_invalid_string_raises_value_error(self) -> None:
        with pytest.raises(ValueError):
            to_float("abc")

    @pytest.mark.parametrize("value", [[1, 2], None, True, {"a": 1}])
    def test_invalid_type_raises_type_error(self, value: Any) -> None:
        with pytest.raises(TypeError):
            to_float(value)

    @given(number=st.integers(min_value=-(10**9), max_value=10**9))
    @settings(max_examples=50)
    def test_integer_strings(self, number: int) -> None:
        assert to_float(str(number)) == float(number)


class TestIsNilOrEmpty:
    """Tests for is_nil_or_empty."""

    @pytest.mark.parametrize("value", [None, "", [], {}, (), set()])
    def test_empty_values(self, value: Any) -> None:
        assert is_nil_or_empty(value)

    @pytest.mark.parametrize("value", ["x", [0], {"a": None}, 0, False, 1.0])
    def test_non_empty_values(self, value: Any) -> None:
        assert not is_nil_or_empty(value)


class TestErrorCodes:
    """Tests for the standard code vocabulary."""

    def test_core_codes(self) -> None:
        assert ErrorCode.REQUIRED == "VALIDATION_REQUIRED"
        assert ErrorCode.FORMAT == "VALIDATION_FORMAT"
        assert ErrorCode.LENGTH == "VALIDATION_LENGTH"
        assert ErrorCode.RANGE == "VALIDATION_RANGE"
        assert ErrorCode.TYPE == "VALIDATION_TYPE"
        assert ErrorCode.PATTERN == "VALIDATION_PATTERN"
        assert ErrorCode.CUSTOM == "VALIDATION_CUSTOM"

    def test_all_codes_unique_and_prefixed(self) -> None:
        codes = ErrorCode.all()

        assert len(codes) == 24
        assert all(code.startswith("VALIDATION_") for code in codes)
        assert VALIDATION_FAILED not in codes
