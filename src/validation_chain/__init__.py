"""Composable validation: sequential chains, conditional gates and parallel groups."""

from validation_chain.chain import ChainBuilder, ValidatorChain
from validation_chain.codes import VALIDATION_FAILED, ErrorCode
from validation_chain.conditional import ConditionalValidator, when
from validation_chain.context import ValidationContext
from validation_chain.errors import ValidationFailedError
from validation_chain.events import (
    EventEmitter,
    LoggingObserver,
    ValidationEvent,
    ValidationEventType,
    ValidationObserver,
)
from validation_chain.helpers import is_nil_or_empty, to_float, value_length
from validation_chain.parallel import ParallelBuilder, ParallelValidator
from validation_chain.protocols import ValidatorProtocol
from validation_chain.results import ValidationError, ValidationResult, combine
from validation_chain.validators import (
    BaseValidator,
    FunctionValidator,
    as_validator,
    validator,
)

# Lazy imports for optional dependencies (rich)
_RICH_NAMES = frozenset({"RichEventObserver", "render_result", "build_result_display"})


def __getattr__(name: str) -> object:
    """Lazy import for optional dependencies.

    This function enables lazy loading of rich components, which require
    the optional 'rich' package. The components are only loaded when
    first accessed, avoiding import errors when rich is not installed.

    Args:
        name: The attribute name being accessed.

    Returns:
        The requested object from the rich_observers module.

    Raises:
        ImportError: If rich is not installed and a rich component is requested.
        AttributeError: If the requested attribute doesn't exist.
    """
    if name in _RICH_NAMES:
        try:
            from validation_chain import rich_observers

            # rich_observers imports rich lazily
            import rich  # noqa: F401
        except ImportError as e:
            raise ImportError(
                f"{name} requires rich. Install with: pip install validation-chain[rich]"
            ) from e
        return getattr(rich_observers, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    # Results
    "ValidationResult",
    "ValidationError",
    "combine",
    "ValidationFailedError",
    # Error codes
    "ErrorCode",
    "VALIDATION_FAILED",
    # Context
    "ValidationContext",
    # Validator abstractions
    "BaseValidator",
    "FunctionValidator",
    "ValidatorProtocol",
    "as_validator",
    "validator",
    # Composites
    "ChainBuilder",
    "ValidatorChain",
    "ConditionalValidator",
    "when",
    "ParallelBuilder",
    "ParallelValidator",
    # Observer pattern
    "EventEmitter",
    "LoggingObserver",
    "ValidationEvent",
    "ValidationEventType",
    "ValidationObserver",
    # Helpers
    "is_nil_or_empty",
    "to_float",
    "value_length",
    # Rich rendering (lazy-loaded, requires rich optional dependency)
    "RichEventObserver",
    "render_result",
    "build_result_display",
]

__version__ = "0.1.0"
