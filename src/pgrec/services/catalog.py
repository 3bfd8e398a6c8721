"""PostgreSQL parameter catalog.

Provides:
- ParameterSpec: one tunable with its default, unit and recommendation rule
- HardwareProfile: the facts every rule is a function of
- ParameterCatalog: ordered, immutable lookup table of ParameterSpecs
- DEFAULT_CATALOG: the memory, parallelism, JIT and connection settings
"""

import difflib
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, Union

from pgrec.core.exceptions import ConfigurationError, NotFoundError
from pgrec.core.validation import GIB, KIB, MIB


Value = Union[int, bool]

# Smallest values PostgreSQL accepts (16 and 1 8kB pages)
SHARED_BUFFERS_MIN = 128 * KIB
EFFECTIVE_CACHE_SIZE_MIN = 8 * KIB


class Unit(Enum):
    """Unit of a parameter value."""

    BYTES = "bytes"
    MILLISECONDS = "milliseconds"
    COUNT = "count"
    BOOLEAN = "boolean"


class Category(Enum):
    """Tuning domain a parameter belongs to."""

    MEMORY = "memory"
    PARALLELISM = "parallelism"
    JIT = "jit"
    CONNECTIONS = "connections"

    @property
    def title(self) -> str:
        """Section title used in generated config files."""
        titles = {
            "memory": "Memory Settings",
            "parallelism": "Parallel Query Settings",
            "jit": "JIT Compilation Settings",
            "connections": "Connection Settings",
        }
        return titles[self.value]


@dataclass(frozen=True)
class HardwareProfile:
    """Hardware facts that drive recommendation formulas."""

    total_memory_bytes: int
    core_count: int


Rule = Callable[[HardwareProfile], Value]


@dataclass(frozen=True)
class ParameterSpec:
    """A single tunable parameter with its recommendation rule."""

    name: str
    default: Value
    unit: Unit
    recommendation_rule: Rule
    category: Category
    description: str = ""
    requires_restart: bool = False

    def recommend(self, hardware: HardwareProfile) -> Value:
        """Evaluate the recommendation rule for the given hardware."""
        return self.recommendation_rule(hardware)


def floor_mib(size: float) -> int:
    """Floor a byte count to a whole number of MiB."""
    return int(size // MIB) * MIB


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.floor(value + 0.5))


def _connections(hw: HardwareProfile) -> int:
    # Three connections per core, doubled for headroom
    return hw.core_count * 3 * 2


class ParameterCatalog:
    """Ordered, read-only table of tunable parameters.

    Iteration and names() follow declaration order, which is also the
    order recommendations are computed and rendered in.
    """

    def __init__(self, specs: list[ParameterSpec]) -> None:
        by_name: dict[str, ParameterSpec] = {}
        for spec in specs:
            if spec.name in by_name:
                raise ConfigurationError(
                    f"Duplicate parameter in catalog: {spec.name}",
                )
            by_name[spec.name] = spec
        self._specs = tuple(specs)
        self._by_name = by_name
        self._index = {spec.name: i for i, spec in enumerate(self._specs)}

    def lookup(self, name: str) -> ParameterSpec:
        """Get a parameter spec by name.

        Args:
            name: PostgreSQL parameter name

        Returns:
            Matching ParameterSpec

        Raises:
            NotFoundError: If name is not in the catalog
        """
        key = name.strip()
        spec = self._by_name.get(key)
        if spec is None:
            matches = difflib.get_close_matches(key, self._by_name.keys(), n=1)
            hint = f"Did you mean: {matches[0]}?" if matches else "Run: pgrec params list"
            raise NotFoundError(
                f"Unknown parameter: {name}",
                name=name,
                hint=hint,
            )
        return spec

    def index_of(self, name: str) -> int:
        """Declaration position of a parameter."""
        self.lookup(name)
        return self._index[name.strip()]

    def names(self) -> list[str]:
        """All parameter names in declaration order."""
        return [spec.name for spec in self._specs]

    def by_category(self, category: Category) -> list[ParameterSpec]:
        """Parameters belonging to one tuning domain."""
        return [spec for spec in self._specs if spec.category == category]

    def __iter__(self) -> Iterator[ParameterSpec]:
        return iter(self._specs)

    def __len__(self) -> int:
        return len(self._specs)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip() in self._by_name


# =============================================================================
# Default catalog
# =============================================================================

_SPECS = [
    # === Memory ===
    ParameterSpec(
        name="shared_buffers",
        default=128 * MIB,
        unit=Unit.BYTES,
        recommendation_rule=lambda hw: max(
            SHARED_BUFFERS_MIN, floor_mib(hw.total_memory_bytes * 0.25)
        ),
        category=Category.MEMORY,
        description="25% of RAM (lower bound of the 25-40% range)",
        requires_restart=True,
    ),
    ParameterSpec(
        name="effective_cache_size",
        default=4 * GIB,
        unit=Unit.BYTES,
        recommendation_rule=lambda hw: max(
            EFFECTIVE_CACHE_SIZE_MIN, floor_mib(hw.total_memory_bytes * 0.75)
        ),
        category=Category.MEMORY,
        description="75% of RAM - OS file system cache estimate",
    ),
    ParameterSpec(
        name="work_mem",
        default=4 * MIB,
        unit=Unit.BYTES,
        recommendation_rule=lambda hw: max(
            4 * MIB, floor_mib(hw.total_memory_bytes * 0.25 / _connections(hw))
        ),
        category=Category.MEMORY,
        description="25% of RAM split across max_connections (min 4MB)",
    ),
    ParameterSpec(
        name="maintenance_work_mem",
        default=64 * MIB,
        unit=Unit.BYTES,
        recommendation_rule=lambda hw: max(
            64 * MIB, min(2 * GIB, floor_mib(hw.total_memory_bytes * 0.05))
        ),
        category=Category.MEMORY,
        description="5% of RAM for VACUUM and CREATE INDEX (64MB-2GB)",
    ),
    # === Parallel query ===
    ParameterSpec(
        name="max_worker_processes",
        default=8,
        unit=Unit.COUNT,
        recommendation_rule=lambda hw: max(8, hw.core_count),
        category=Category.PARALLELISM,
        description="One background worker per core (min 8)",
        requires_restart=True,
    ),
    ParameterSpec(
        name="max_parallel_workers",
        default=8,
        unit=Unit.COUNT,
        recommendation_rule=lambda hw: max(1, round_half_up(hw.core_count * 0.75)),
        category=Category.PARALLELISM,
        description="75% of cores",
    ),
    ParameterSpec(
        name="max_parallel_workers_per_gather",
        default=2,
        unit=Unit.COUNT,
        recommendation_rule=lambda hw: max(1, min(4, hw.core_count // 2)),
        category=Category.PARALLELISM,
        description="Half the cores per query (1-4)",
    ),
    ParameterSpec(
        name="max_parallel_maintenance_workers",
        default=2,
        unit=Unit.COUNT,
        recommendation_rule=lambda hw: max(1, min(4, hw.core_count // 2)),
        category=Category.PARALLELISM,
        description="Half the cores for index builds (1-4)",
    ),
    # === JIT ===
    ParameterSpec(
        name="jit",
        default=True,
        unit=Unit.BOOLEAN,
        recommendation_rule=lambda hw: hw.core_count >= 4,
        category=Category.JIT,
        description="Enable JIT only with 4+ cores",
    ),
    ParameterSpec(
        name="jit_above_cost",
        default=100000,
        unit=Unit.COUNT,
        recommendation_rule=lambda hw: 500000,
        category=Category.JIT,
        description="Compile only expensive queries",
    ),
    ParameterSpec(
        name="jit_inline_above_cost",
        default=500000,
        unit=Unit.COUNT,
        recommendation_rule=lambda hw: 2500000,
        category=Category.JIT,
        description="Inline functions only for very expensive queries",
    ),
    ParameterSpec(
        name="jit_optimize_above_cost",
        default=500000,
        unit=Unit.COUNT,
        recommendation_rule=lambda hw: 2500000,
        category=Category.JIT,
        description="Optimize only for very expensive queries",
    ),
    # === Connections ===
    ParameterSpec(
        name="max_connections",
        default=100,
        unit=Unit.COUNT,
        recommendation_rule=_connections,
        category=Category.CONNECTIONS,
        description="cores x 3 x 2",
        requires_restart=True,
    ),
    ParameterSpec(
        name="superuser_reserved_connections",
        default=3,
        unit=Unit.COUNT,
        recommendation_rule=lambda hw: 3,
        category=Category.CONNECTIONS,
        description="Slots kept for superuser access",
        requires_restart=True,
    ),
    ParameterSpec(
        name="idle_in_transaction_session_timeout",
        default=0,
        unit=Unit.MILLISECONDS,
        recommendation_rule=lambda hw: 60000,
        category=Category.CONNECTIONS,
        description="End sessions idle in a transaction after 1 minute",
    ),
]

DEFAULT_CATALOG = ParameterCatalog(_SPECS)
