"""
Chronicle core - ambient primitives shared by the versioning engines.

- errors: typed ChronicleError hierarchy
- logging: structlog configuration
- settings: pydantic-settings backed configuration
"""

from chronicle.core.errors import (
    ChronicleError,
    EmptyHistoryError,
    ErrorCategory,
    ErrorContext,
    FrozenValueError,
    InvalidTransformationError,
    NonPrefixDiffError,
    categorize_error,
)
from chronicle.core.logging import (
    LogContext,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    logging_configured,
    unbind_context,
)
from chronicle.core.settings import ChronicleSettings, configure_from_settings, get_settings

__all__ = [
    # Errors
    "ChronicleError",
    "EmptyHistoryError",
    "ErrorCategory",
    "ErrorContext",
    "FrozenValueError",
    "InvalidTransformationError",
    "NonPrefixDiffError",
    "categorize_error",
    # Logging
    "LogContext",
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
    "logging_configured",
    "unbind_context",
    # Settings
    "ChronicleSettings",
    "configure_from_settings",
    "get_settings",
]
