"""Value helpers shared by concrete rules.

Unsupported inputs raise instead of returning a sentinel.
"""

from __future__ import annotations

from collections.abc import Sized
from decimal import Decimal
from typing import Any

__all__ = ["is_nil_or_empty", "to_float", "value_length"]


def value_length(value: Any) -> int:
    """Return the length of a string or collection.

    Strings are measured in code points. None has length 0.

    Raises:
        TypeError: If the value has no length.
    """
    if value is None:
        return 0
    if isinstance(value, Sized):
        return len(value)
    raise TypeError(f"cannot take the length of {type(value).__name__}")


def to_float(value: Any) -> float:
    """Convert a numeric value or numeric string to float.

    Raises:
        TypeError: If the value is not numeric (booleans included).
        ValueError: If a string does not parse as a number.
    """
    if isinstance(value, bool):
        raise TypeError("cannot convert bool to float")
    if isinstance(value, (int, float, Decimal)):
        return float(value)
    if isinstance(value, str):
        return float(value.strip())
    raise TypeError(f"cannot convert {type(value).__name__} to float")


def is_nil_or_empty(value: Any) -> bool:
    """Check whether a value is None or an empty string/collection."""
    if value is None:
        return True
    if isinstance(value, Sized):
        return len(value) == 0
    return False
