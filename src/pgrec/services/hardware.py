"""Hardware detection.

Reads total memory and CPU core count from the host and merges them with
explicit overrides into a HardwareProfile.
"""

import os
from typing import Optional

from pgrec.core.output import console
from pgrec.core.validation import GIB
from pgrec.services.catalog import HardwareProfile


FALLBACK_MEMORY_BYTES = 4 * GIB
FALLBACK_CORE_COUNT = 4

MEMINFO_PATH = "/proc/meminfo"


class HardwareInspector:
    """Detects system resources for recommendation input."""

    def __init__(self, meminfo_path: str = MEMINFO_PATH) -> None:
        self.meminfo_path = meminfo_path

    def detect(
        self,
        total_memory_bytes: Optional[int] = None,
        core_count: Optional[int] = None,
    ) -> HardwareProfile:
        """Build a HardwareProfile, detecting any value not given explicitly.

        Args:
            total_memory_bytes: Memory override in bytes
            core_count: Core count override

        Returns:
            HardwareProfile for the host (or the overrides)
        """
        if total_memory_bytes is None:
            total_memory_bytes = self._get_memory_bytes()
        else:
            console.verbose(f"Using memory override: {total_memory_bytes} bytes")

        if core_count is None:
            core_count = self._get_cpu_count()
        else:
            console.verbose(f"Using core count override: {core_count}")

        return HardwareProfile(
            total_memory_bytes=total_memory_bytes,
            core_count=core_count,
        )

    def _get_memory_bytes(self) -> int:
        """Get total system memory in bytes from /proc/meminfo."""
        try:
            with open(self.meminfo_path) as f:
                for line in f:
                    if line.startswith("MemTotal:"):
                        # Format: "MemTotal:     16384000 kB"
                        parts = line.split()
                        return int(parts[1]) * 1024
        except (OSError, ValueError, IndexError) as e:
            console.debug(f"Memory detection failed: {e}")

        console.warn(
            f"Could not detect total memory, assuming {FALLBACK_MEMORY_BYTES // GIB}GB"
        )
        return FALLBACK_MEMORY_BYTES

    def _get_cpu_count(self) -> int:
        """Get number of CPU cores."""
        count = os.cpu_count()
        if count and count > 0:
            return count

        console.warn(f"Could not detect CPU count, assuming {FALLBACK_CORE_COUNT}")
        return FALLBACK_CORE_COUNT
