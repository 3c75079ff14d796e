"""
Structured error types for chronicle.

Every failure the versioning core reports on its own behalf is a
ChronicleError. Errors carry a category, an ErrorContext with structured
metadata and an optional chained cause, so callers can log them with
``to_dict()`` instead of parsing messages.

Manifesto:
    - **Typed Error Hierarchy:** One subclass per failure the core detects
    - **Rich Context:** Errors carry the history lengths and indexes involved
    - **Error Chaining:** Original exceptions are preserved as ``cause``
    - **Host errors untouched:** An exception raised inside a transformation
      body is the host's, and reaches the caller exactly as raised

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                      ChronicleError                          │
        │          (category, retryable, context, cause)               │
        ├─────────────────────────────────────────────────────────────┤
        │                                                              │
        │  EmptyHistoryError     NonPrefixDiffError                    │
        │  (HISTORY)             (DIFF)                                │
        │                                                              │
        │  FrozenValueError      InvalidTransformationError            │
        │  (MUTABILITY)          (VALIDATION)                          │
        └─────────────────────────────────────────────────────────────┘

Examples:
    >>> err = EmptyHistoryError(requested=1, available=0)
    >>> err.category
    <ErrorCategory.HISTORY: 'HISTORY'>
    >>> err.with_context(value_type="Person").context.value_type
    'Person'

Tags:
    error-handling, exception-hierarchy, error-context, chronicle
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Categories used to classify chronicle errors for logging and routing."""

    HISTORY = "HISTORY"           # Rollback past the start of history
    DIFF = "DIFF"                 # Histories that do not share a prefix
    MUTABILITY = "MUTABILITY"     # Writes to frozen values
    VALIDATION = "VALIDATION"     # Bad input offered to the core

    INTERNAL = "INTERNAL"         # Bugs, unexpected state
    UNKNOWN = "UNKNOWN"           # Uncategorized errors


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Attributes:
        value_type: Name of the host state type involved
        operation: Versioning operation that failed (transform, rollback, ...)
        version: History length of the value the operation ran on
        metadata: Additional key-value pairs
    """

    value_type: str | None = None
    operation: str | None = None
    version: int | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["value_type", "operation", "version"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class ChronicleError(Exception):
    """
    Base exception for all chronicle errors.

    Subclasses set ``default_category`` to classify themselves. None of the
    errors raised by the core are retryable: repeating a rollback on an empty
    history or a diff between unrelated histories fails the same way.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> ChronicleError:
        """
        Add context to this error (fluent API).

        Usage:
            raise EmptyHistoryError(requested=1, available=0).with_context(
                operation="rollback",
                value_type="Person",
            )
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# HISTORY ERRORS
# =============================================================================


class EmptyHistoryError(ChronicleError):
    """
    Rollback requested more transformations than the history holds.

    A value built straight from its construction arguments has nothing to
    roll back to.
    """

    default_category = ErrorCategory.HISTORY

    def __init__(self, requested: int = 1, available: int = 0, message: str | None = None, **kwargs: Any):
        self.requested = requested
        self.available = available
        if message is None:
            if available == 0:
                message = "Cannot roll back: history is empty"
            else:
                message = (
                    f"Cannot roll back {requested} transformation(s): "
                    f"history holds only {available}"
                )
        super().__init__(message, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["requested"] = self.requested
        result["available"] = self.available
        return result


# =============================================================================
# DIFF ERRORS
# =============================================================================


class NonPrefixDiffError(ChronicleError):
    """The shorter history is not a prefix of the longer one."""

    default_category = ErrorCategory.DIFF

    def __init__(
        self,
        shorter_length: int,
        longer_length: int,
        mismatch_index: int,
        message: str | None = None,
        **kwargs: Any,
    ):
        self.shorter_length = shorter_length
        self.longer_length = longer_length
        self.mismatch_index = mismatch_index
        super().__init__(
            message
            or (
                f"Histories diverge at index {mismatch_index}: the shorter history "
                f"({shorter_length}) is not a prefix of the longer ({longer_length})"
            ),
            **kwargs,
        )

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["shorter_length"] = self.shorter_length
        result["longer_length"] = self.longer_length
        result["mismatch_index"] = self.mismatch_index
        return result


# =============================================================================
# MUTABILITY / VALIDATION ERRORS
# =============================================================================


class FrozenValueError(ChronicleError, AttributeError):
    """Attempted to assign to an immutable VersionedValue."""

    default_category = ErrorCategory.MUTABILITY

    def __init__(self, attribute: str, message: str | None = None, **kwargs: Any):
        self.attribute = attribute
        super().__init__(
            message
            or (
                f"Cannot set {attribute!r} on an immutable value; "
                "use transform() or work on mutable()"
            ),
            **kwargs,
        )


class InvalidTransformationError(ChronicleError, TypeError):
    """An object offered as a transformation is neither callable nor has apply()."""

    default_category = ErrorCategory.VALIDATION

    def __init__(self, candidate: Any, message: str | None = None, **kwargs: Any):
        self.candidate = candidate
        super().__init__(
            message or f"{type(candidate).__name__} is not a transformation: expected a callable or an object with apply()",
            **kwargs,
        )


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def categorize_error(error: Exception) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, ChronicleError):
        return error.category
    if isinstance(error, (TypeError, ValueError)):
        return ErrorCategory.VALIDATION
    return ErrorCategory.UNKNOWN


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "ChronicleError",
    "EmptyHistoryError",
    "NonPrefixDiffError",
    "FrozenValueError",
    "InvalidTransformationError",
    "categorize_error",
]
