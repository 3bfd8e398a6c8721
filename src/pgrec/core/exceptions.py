"""Custom exceptions for pgrec.

All exceptions provide:
- Clear error messages
- Optional hints for resolution
- Optional details for debugging
- Exit codes for proper shell integration
"""

from typing import Optional


class PGRecError(Exception):
    """Base exception for all pgrec errors.

    Attributes:
        message: Human-readable error description
        hint: Suggested action to resolve the error
        details: Additional context for debugging
        exit_code: Shell exit code (1-127)
    """

    exit_code: int = 1

    def __init__(
        self,
        message: str,
        *,
        hint: Optional[str] = None,
        details: Optional[list[str]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint
        self.details = details or []

    def __str__(self) -> str:
        return self.message


class ConfigurationError(PGRecError):
    """Configuration file or settings errors.

    Raised when:
    - Config file not found or unreadable
    - Invalid YAML syntax
    - Invalid configuration values
    - Duplicate entries in a parameter catalog
    """
    exit_code = 2


class ValidationError(PGRecError):
    """Input validation errors.

    Raised when:
    - Memory size string cannot be parsed
    - Core count is not an integer
    """
    exit_code = 3


# Domain-specific exceptions

class NotFoundError(PGRecError):
    """Unknown parameter name requested from the catalog."""
    exit_code = 20

    def __init__(
        self,
        message: str,
        *,
        name: Optional[str] = None,
        hint: Optional[str] = None,
        details: Optional[list[str]] = None,
    ) -> None:
        super().__init__(message, hint=hint, details=details)
        self.name = name


class InvalidHardwareError(PGRecError):
    """Hardware profile cannot drive recommendations.

    Raised when:
    - total_memory_bytes is not a positive integer
    - core_count is not a positive integer
    """
    exit_code = 21

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: object = None,
        hint: Optional[str] = None,
        details: Optional[list[str]] = None,
    ) -> None:
        if not details:
            details = []
        if field is not None:
            details.append(f"{field}: {value!r}")
        super().__init__(message, hint=hint, details=details)
        self.field = field
        self.value = value
