"""
Custom exception classes for the utilkit library.

Provides a single base exception so callers can catch everything raised by
utilkit itself, with narrower classes for tuple conversion, invoker misuse
and settings loading.
"""

from typing import Any, Dict, Optional, Sequence


class UtilkitException(Exception):
    """Base exception class for all utilkit exceptions."""

    pass


class HeterogeneousTupleError(UtilkitException, TypeError):
    """
    Raised when a tuple whose fields differ in runtime type is converted to a list.

    List conversion is only defined for homogeneous tuples. The error carries the
    observed field types so the offending call site is easy to spot.

    Example:
        >>> raise HeterogeneousTupleError(
        ...     kind="MutablePair",
        ...     field_types=[int, str],
        ... )
    """

    def __init__(self, kind: str, field_types: Sequence[type]):
        self.kind = kind
        self.field_types = list(field_types)
        names = ", ".join(t.__name__ for t in self.field_types)
        super().__init__(f"{kind} is not homogeneous - field types: ({names})")


class InvokerError(UtilkitException):
    """Raised when the invoker is handed something it cannot execute."""

    pass


class SettingsError(UtilkitException):
    """Raised when utilkit settings cannot be built from the given values."""

    def __init__(self, reason: str, details: Optional[Dict[str, Any]] = None):
        self.reason = reason
        self.details = details or {}
        message = f"{reason}"
        if self.details:
            message += f" - {self.details}"
        super().__init__(message)


class EventBusError(UtilkitException):
    """Raised on event bus misuse: wrong thread, late configuration or unknown handler."""

    pass
