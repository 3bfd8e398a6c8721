"""Unit tests for hardware detection."""

from unittest.mock import patch

import pytest

from pgrec.core.validation import GIB
from pgrec.services.hardware import (
    FALLBACK_CORE_COUNT,
    FALLBACK_MEMORY_BYTES,
    HardwareInspector,
)


@pytest.fixture
def meminfo(tmp_path):
    """Write a fake /proc/meminfo and return its path."""
    path = tmp_path / "meminfo"
    path.write_text(
        "MemTotal:       16384000 kB\n"
        "MemFree:         1234567 kB\n"
        "MemAvailable:    8765432 kB\n"
    )
    return path


class TestHardwareInspector:
    """Tests for HardwareInspector."""

    def test_memory_from_meminfo(self, meminfo):
        """Should parse MemTotal (kB) into bytes."""
        inspector = HardwareInspector(meminfo_path=str(meminfo))
        assert inspector._get_memory_bytes() == 16384000 * 1024

    def test_memory_fallback_on_missing_file(self, tmp_path):
        """Should fall back to 4GB when meminfo is unreadable."""
        inspector = HardwareInspector(meminfo_path=str(tmp_path / "missing"))
        assert inspector._get_memory_bytes() == FALLBACK_MEMORY_BYTES == 4 * GIB

    def test_memory_fallback_on_garbage(self, tmp_path):
        path = tmp_path / "meminfo"
        path.write_text("MemTotal: lots kB\n")
        inspector = HardwareInspector(meminfo_path=str(path))
        assert inspector._get_memory_bytes() == FALLBACK_MEMORY_BYTES

    def test_cpu_count(self):
        """Should return os.cpu_count()."""
        with patch("pgrec.services.hardware.os.cpu_count", return_value=16):
            assert HardwareInspector()._get_cpu_count() == 16

    def test_cpu_count_fallback(self):
        """Should return 4 if cpu_count() returns None."""
        with patch("pgrec.services.hardware.os.cpu_count", return_value=None):
            assert HardwareInspector()._get_cpu_count() == FALLBACK_CORE_COUNT

    def test_detect_uses_host(self, meminfo):
        with patch("pgrec.services.hardware.os.cpu_count", return_value=12):
            hardware = HardwareInspector(meminfo_path=str(meminfo)).detect()
        assert hardware.total_memory_bytes == 16384000 * 1024
        assert hardware.core_count == 12

    def test_detect_overrides_win(self, tmp_path):
        """Explicit values should skip detection entirely."""
        inspector = HardwareInspector(meminfo_path=str(tmp_path / "missing"))
        with patch("pgrec.services.hardware.os.cpu_count") as cpu_count:
            hardware = inspector.detect(total_memory_bytes=64 * GIB, core_count=16)
        cpu_count.assert_not_called()
        assert hardware.total_memory_bytes == 64 * GIB
        assert hardware.core_count == 16

    def test_detect_partial_override(self, meminfo):
        with patch("pgrec.services.hardware.os.cpu_count", return_value=2):
            hardware = HardwareInspector(meminfo_path=str(meminfo)).detect(core_count=32)
        assert hardware.core_count == 32
        assert hardware.total_memory_bytes == 16384000 * 1024
