"""Request-scoped metadata carried through validate calls.

ValidationContext is a passive, read-only record. It threads identifiers
such as the request id and user id into rule logic without global state.
It carries no deadline or cancellation signal, and no validator in this
package gates execution on it.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

__all__ = [
    "ValidationContext",
    "REQUEST_ID",
    "USER_ID",
    "VALIDATOR_CHAIN",
    "VALIDATOR_INDEX",
    "TOTAL_VALIDATORS",
    "EXECUTED_VALIDATORS",
    "CONDITIONAL_VALIDATOR",
    "CONDITION_MET",
    "PARALLEL_VALIDATOR",
    "PARALLEL_EXECUTION",
    "RESERVED_KEYS",
]

# Well-known metadata keys copied into results by FunctionValidator
REQUEST_ID = "requestId"
USER_ID = "userId"

# Bookkeeping keys written by composite validators
VALIDATOR_CHAIN = "validatorChain"
VALIDATOR_INDEX = "validatorIndex"
TOTAL_VALIDATORS = "totalValidators"
EXECUTED_VALIDATORS = "executedValidators"
CONDITIONAL_VALIDATOR = "conditionalValidator"
CONDITION_MET = "conditionMet"
PARALLEL_VALIDATOR = "parallelValidator"
PARALLEL_EXECUTION = "parallelExecution"

RESERVED_KEYS = frozenset(
    {
        REQUEST_ID,
        USER_ID,
        VALIDATOR_CHAIN,
        VALIDATOR_INDEX,
        TOTAL_VALIDATORS,
        EXECUTED_VALIDATORS,
        CONDITIONAL_VALIDATOR,
        CONDITION_MET,
        PARALLEL_VALIDATOR,
        PARALLEL_EXECUTION,
    }
)

_WELL_KNOWN_FIELDS = {
    REQUEST_ID: "request_id",
    USER_ID: "user_id",
    "request_id": "request_id",
    "user_id": "user_id",
}

_MISSING = object()


class ValidationContext(BaseModel):
    """Immutable key/value carrier for validate calls.

    The well-known identifiers are typed fields; anything else lives in
    ``extras``. Lookup by string key works for both, so rules can ask for
    ``ctx.get("requestId")`` or ``ctx.get("tenant")`` alike.

    Attributes:
        request_id: Trace/request identifier (key ``"requestId"``).
        user_id: Calling user identifier (key ``"userId"``).
        extras: Read-only bag for any other metadata. The caller's mapping
            is copied, so neither side can change what the other sees.

    Example:
        ctx = ValidationContext(request_id="req-1", user_id="u-42")
        ctx = ctx.with_values(tenant="acme")
        ctx.get("requestId")  # "req-1"
        ctx["tenant"]         # "acme"
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    request_id: str | None = Field(default=None, alias=REQUEST_ID)
    user_id: str | None = Field(default=None, alias=USER_ID)
    extras: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)

    @field_validator("extras", mode="after")
    @classmethod
    def _freeze_extras(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))

    @field_serializer("extras")
    def _serialize_extras(self, value: Mapping[str, Any]) -> dict[str, Any]:
        return dict(value)

    @classmethod
    def empty(cls) -> ValidationContext:
        """Context used when a caller supplies none."""
        return cls()

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> ValidationContext:
        """Build a context from a flat mapping.

        Well-known keys (``requestId``/``userId`` or their snake_case
        forms) populate the typed fields; every other key goes to extras.
        """
        return cls.empty().with_values(values)

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a value by string key."""
        attr = _WELL_KNOWN_FIELDS.get(key)
        if attr is not None:
            value = getattr(self, attr)
            return default if value is None else value
        return self.extras.get(key, default)

    def __getitem__(self, key: str) -> Any:
        value = self.get(key, _MISSING)
        if value is _MISSING:
            raise KeyError(key)
        return value

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key, _MISSING) is not _MISSING

    def with_values(
        self, values: Mapping[str, Any] | None = None, /, **entries: Any
    ) -> ValidationContext:
        """Return a new context with additional entries.

        Later entries win over earlier ones and over values already held.
        The current context is not modified.
        """
        data: dict[str, Any] = {
            "request_id": self.request_id,
            "user_id": self.user_id,
        }
        extras = dict(self.extras)
        for key, value in {**(values or {}), **entries}.items():
            attr = _WELL_KNOWN_FIELDS.get(key)
            if attr is not None:
                data[attr] = value
            else:
                extras[key] = value
        data["extras"] = extras
        return ValidationContext(**data)

    def as_dict(self) -> dict[str, Any]:
        """Flatten into a plain dict keyed the way ``get`` looks keys up."""
        flat: dict[str, Any] = {}
        if self.request_id is not None:
            flat[REQUEST_ID] = self.request_id
        if self.user_id is not None:
            flat[USER_ID] = self.user_id
        flat.update(self.extras)
        return flat
