"""Core framework components for pgrec."""

from pgrec.core.exceptions import (
    PGRecError,
    ConfigurationError,
    ValidationError,
    NotFoundError,
    InvalidHardwareError,
)

from pgrec.core.context import ExecutionContext, create_context
from pgrec.core.output import console, Console, Verbosity
from pgrec.core.config import AppConfig, RecConfig
from pgrec.core.validation import parse_memory, validate_core_count, format_bytes

__all__ = [
    # Exceptions
    "PGRecError",
    "ConfigurationError",
    "ValidationError",
    "NotFoundError",
    "InvalidHardwareError",
    # Context
    "ExecutionContext",
    "create_context",
    # Output
    "console",
    "Console",
    "Verbosity",
    # Config
    "AppConfig",
    "RecConfig",
    # Validation
    "parse_memory",
    "validate_core_count",
    "format_bytes",
]
