"""Unit tests for the validation module."""

import pytest

from pgrec.core.validation import (
    GIB,
    KIB,
    MIB,
    TIB,
    format_bytes,
    parse_memory,
    validate_core_count,
)
from pgrec.core.exceptions import ValidationError


class TestParseMemory:
    """Tests for memory size parsing."""

    def test_plain_integer_is_bytes(self):
        """Integers should be taken as bytes."""
        assert parse_memory(1048576) == MIB

    def test_numeric_string_is_bytes(self):
        """Numeric strings without unit should be bytes."""
        assert parse_memory("4096") == 4096

    @pytest.mark.parametrize("value,expected", [
        ("8kB", 8 * KIB),
        ("512MB", 512 * MIB),
        ("16GB", 16 * GIB),
        ("2TB", 2 * TIB),
        ("100B", 100),
    ])
    def test_units(self, value, expected):
        """Units should be 1024-based."""
        assert parse_memory(value) == expected

    def test_case_insensitive_and_whitespace(self):
        """Units are case-insensitive and may be separated by spaces."""
        assert parse_memory("16 gb") == 16 * GIB
        assert parse_memory("  256GB  ") == 256 * GIB

    def test_decimal_values(self):
        """Decimal sizes should be accepted."""
        assert parse_memory("1.5GB") == int(1.5 * GIB)

    def test_zero_is_allowed(self):
        """Zero parses; positivity is checked by the engine."""
        assert parse_memory("0GB") == 0

    @pytest.mark.parametrize("value", ["", "lots", "16 GiB", "GB", "-4GB", "16PB"])
    def test_invalid_strings(self, value):
        """Unparseable strings should fail."""
        with pytest.raises(ValidationError) as exc:
            parse_memory(value)
        assert "Invalid memory size" in str(exc.value)

    def test_negative_integer(self):
        """Negative byte counts should fail."""
        with pytest.raises(ValidationError):
            parse_memory(-1)

    def test_bool_rejected(self):
        """Booleans are not sizes."""
        with pytest.raises(ValidationError):
            parse_memory(True)


class TestValidateCoreCount:
    """Tests for core count validation."""

    def test_valid_int(self):
        assert validate_core_count(8) == 8

    def test_valid_string(self):
        assert validate_core_count(" 16 ") == 16

    @pytest.mark.parametrize("value", [0, -2, "0"])
    def test_non_positive(self, value):
        """Zero and negative core counts should fail."""
        with pytest.raises(ValidationError) as exc:
            validate_core_count(value)
        assert "must be positive" in str(exc.value)

    @pytest.mark.parametrize("value", ["eight", "2.5", ""])
    def test_not_a_number(self, value):
        """Non-integer strings should fail with a hint."""
        with pytest.raises(ValidationError) as exc:
            validate_core_count(value)
        assert exc.value.hint is not None


class TestFormatBytes:
    """Tests for PostgreSQL memory literal formatting."""

    @pytest.mark.parametrize("size,expected", [
        (64 * GIB, "64GB"),
        (768 * MIB, "768MB"),
        (1536 * MIB, "1536MB"),
        (8 * KIB, "8kB"),
        (TIB, "1TB"),
        (1000, "1000B"),
    ])
    def test_largest_exact_unit(self, size, expected):
        """The largest unit that divides the value exactly should be used."""
        assert format_bytes(size) == expected
