"""Observer pattern implementation for validation events.

Provides event types, the observer protocol, an immutable emitter owned
by each built composite, and an observer that forwards events to logging.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Protocol, runtime_checkable

__all__ = [
    "ValidationEventType",
    "ValidationEvent",
    "ValidationObserver",
    "EventEmitter",
    "LoggingObserver",
]


class ValidationEventType(Enum):
    """Types of validation events that can be observed."""

    VALIDATION_STARTED = auto()
    """Emitted when a composite begins validating a value."""

    VALIDATION_COMPLETED = auto()
    """Emitted when a composite has produced its combined result."""

    STEP_COMPLETED = auto()
    """Emitted after one chain step or one parallel branch is collected."""

    SHORT_CIRCUITED = auto()
    """Emitted when a chain stops early on its first invalid step."""

    CONDITION_EVALUATED = auto()
    """Emitted when a conditional gate has evaluated its predicate."""


@dataclass
class ValidationEvent:
    """A validation event that can be observed.

    Attributes:
        event_type: The type of event that occurred.
        source: The validator that emitted the event.
        data: Event-specific data dictionary.

    Example:
        event = ValidationEvent(
            event_type=ValidationEventType.STEP_COMPLETED,
            source=chain,
            data={"validator_name": "email", "index": 0, "is_valid": False},
        )
    """

    event_type: ValidationEventType
    source: object
    data: dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class ValidationObserver(Protocol):
    """Protocol for validation event observers.

    Implement this protocol to receive validation events. Observers
    can be used for logging, metrics collection, alerting, etc.

    Example:
        class MetricsObserver:
            def on_event(self, event: ValidationEvent) -> None:
                if event.event_type == ValidationEventType.VALIDATION_COMPLETED:
                    metrics.timing("validation.ms", event.data["duration_ms"])
    """

    def on_event(self, event: ValidationEvent) -> None:
        """Handle a validation event.

        Args:
            event: The validation event to handle.
        """
        ...


class EventEmitter:
    """Fixed set of observers notified by a built composite.

    The observer tuple is captured once at build time; there is no way to
    add or remove observers afterwards, so a composite can be shared
    across threads without guarding its observer list.
    """

    __slots__ = ("_observers",)

    def __init__(self, observers: Iterable[ValidationObserver] = ()) -> None:
        self._observers: tuple[ValidationObserver, ...] = tuple(observers)

    @property
    def observers(self) -> tuple[ValidationObserver, ...]:
        """The registered observers, in registration order."""
        return self._observers

    def __bool__(self) -> bool:
        return bool(self._observers)

    def notify(self, event: ValidationEvent) -> None:
        """Notify all observers of a validation event.

        Args:
            event: The validation event to broadcast to observers.
        """
        for observer in self._observers:
            observer.on_event(event)

    def emit(
        self,
        event_type: ValidationEventType,
        source: object,
        **data: Any,
    ) -> None:
        """Build and broadcast an event; a no-op without observers."""
        if self._observers:
            self.notify(ValidationEvent(event_type=event_type, source=source, data=data))


class LoggingObserver:
    """Observer that writes every event to a logger.

    Example:
        chain = (
            ChainBuilder("signup")
            .add(EmailValidator())
            .observe(LoggingObserver(level=logging.DEBUG))
            .build()
        )
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        level: int = logging.INFO,
    ) -> None:
        self._logger = logger or logging.getLogger("validation_chain.events")
        self._level = level

    def on_event(self, event: ValidationEvent) -> None:
        source_name = getattr(event.source, "name", None) or type(event.source).__name__
        self._logger.log(
            self._level,
            "%s from %s: %s",
            event.event_type.name,
            source_name,
            event.data,
        )
