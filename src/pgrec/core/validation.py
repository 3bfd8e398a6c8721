"""Input validation utilities.

Provides validation for:
- Memory sizes ("16GB", "512 MB", "1.5TB", plain byte counts)
- Core counts

All validators return the validated value or raise ValidationError.
"""

import re
from typing import Union

from pgrec.core.exceptions import ValidationError


KIB = 1024
MIB = 1024 * KIB
GIB = 1024 * MIB
TIB = 1024 * GIB

# PostgreSQL memory units are powers of 1024
_UNIT_MULTIPLIERS = {
    "": 1,
    "b": 1,
    "kb": KIB,
    "mb": MIB,
    "gb": GIB,
    "tb": TIB,
}

# Pre-compiled regex for memory strings: number, optional whitespace, optional unit
_MEMORY_PATTERN = re.compile(r"^(\d+(?:\.\d+)?)\s*(b|kb|mb|gb|tb)?$", re.IGNORECASE)

# Largest first, used when formatting
_FORMAT_UNITS = (("TB", TIB), ("GB", GIB), ("MB", MIB), ("kB", KIB))


def parse_memory(value: Union[str, int]) -> int:
    """Parse a memory size into bytes.

    Accepts:
    - Plain integers (bytes)
    - Strings with B, kB, MB, GB or TB suffix (case-insensitive, 1024-based)

    Args:
        value: Size to parse

    Returns:
        Size in bytes

    Raises:
        ValidationError: If value cannot be parsed or is negative
    """
    if isinstance(value, bool):
        raise ValidationError(f"Invalid memory size: {value!r}")

    if isinstance(value, int):
        size = value
    else:
        match = _MEMORY_PATTERN.match(str(value).strip())
        if not match:
            raise ValidationError(
                f"Invalid memory size: {value!r}",
                hint="Use a byte count or a size like 16GB, 512MB, 1.5TB",
            )
        number = float(match.group(1))
        unit = (match.group(2) or "").lower()
        size = int(number * _UNIT_MULTIPLIERS[unit])

    if size < 0:
        raise ValidationError(f"Memory size cannot be negative: {value!r}")
    return size


def validate_core_count(value: Union[str, int]) -> int:
    """Validate a CPU core count.

    Args:
        value: Core count as int or numeric string

    Returns:
        Validated core count

    Raises:
        ValidationError: If not a positive integer
    """
    if isinstance(value, bool):
        raise ValidationError(f"Invalid core count: {value!r}")
    try:
        cores = int(str(value).strip())
    except ValueError:
        raise ValidationError(
            f"Invalid core count: {value!r}",
            hint="Core count must be a whole number, e.g. --cores 8",
        ) from None

    if cores <= 0:
        raise ValidationError(f"Core count must be positive: {cores}")
    return cores


def format_bytes(size: int) -> str:
    """Format a byte count using the largest unit that represents it exactly.

    Returns PostgreSQL-compatible literals (e.g. "64GB", "768MB", "8kB").
    Values that are not a whole number of kB are returned as plain bytes.
    """
    for suffix, multiplier in _FORMAT_UNITS:
        if size >= multiplier and size % multiplier == 0:
            return f"{size // multiplier}{suffix}"
    return f"{size}B"
