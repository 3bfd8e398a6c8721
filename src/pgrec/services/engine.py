"""Recommendation engine.

Evaluates every catalog rule against a HardwareProfile. The engine holds
no mutable state, so one instance can be shared between callers.
"""

from dataclasses import dataclass
from typing import Optional

from pgrec.core.exceptions import InvalidHardwareError
from pgrec.core.output import console
from pgrec.core.validation import format_bytes
from pgrec.services.catalog import (
    DEFAULT_CATALOG,
    HardwareProfile,
    ParameterCatalog,
    ParameterSpec,
    Unit,
    Value,
)


def format_value(value: Value, unit: Unit) -> str:
    """Render a value as a PostgreSQL setting literal (unquoted)."""
    if unit == Unit.BOOLEAN:
        return "on" if value else "off"
    if unit == Unit.BYTES:
        return format_bytes(int(value))
    if unit == Unit.MILLISECONDS:
        ms = int(value)
        if ms and ms % 60000 == 0:
            return f"{ms // 60000}min"
        if ms and ms % 1000 == 0:
            return f"{ms // 1000}s"
        return f"{ms}ms"
    return str(int(value))


@dataclass(frozen=True)
class Recommendation:
    """Computed value for one catalog parameter."""

    parameter: ParameterSpec
    computed_value: Value

    @property
    def name(self) -> str:
        return self.parameter.name

    @property
    def formatted_value(self) -> str:
        """Value as a PostgreSQL literal, e.g. "64GB" or "on"."""
        return format_value(self.computed_value, self.parameter.unit)

    @property
    def changed(self) -> bool:
        """True when the recommendation differs from the PostgreSQL default."""
        return self.computed_value != self.parameter.default


def validate_hardware(hardware: HardwareProfile) -> None:
    """Check that a hardware profile can drive the recommendation rules.

    Raises:
        InvalidHardwareError: If memory or core count is not a positive integer
    """
    for field_name in ("total_memory_bytes", "core_count"):
        value = getattr(hardware, field_name)
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidHardwareError(
                f"{field_name} must be an integer",
                field=field_name,
                value=value,
            )
        if value <= 0:
            raise InvalidHardwareError(
                f"{field_name} must be positive",
                field=field_name,
                value=value,
                hint="Pass --memory and --cores explicitly if detection failed",
            )


class RecommendationEngine:
    """Computes one Recommendation per catalog entry."""

    def __init__(self, catalog: Optional[ParameterCatalog] = None) -> None:
        self.catalog = catalog or DEFAULT_CATALOG

    def compute(self, hardware: HardwareProfile) -> tuple[Recommendation, ...]:
        """Compute recommendations for every parameter in the catalog.

        Args:
            hardware: Memory and core-count facts

        Returns:
            Recommendations in catalog declaration order

        Raises:
            InvalidHardwareError: If hardware values are not positive integers
        """
        validate_hardware(hardware)

        recommendations = []
        for spec in self.catalog:
            rec = Recommendation(parameter=spec, computed_value=spec.recommend(hardware))
            console.debug(f"{rec.name} = {rec.formatted_value}")
            recommendations.append(rec)
        return tuple(recommendations)

    def compute_one(self, hardware: HardwareProfile, name: str) -> Recommendation:
        """Compute the recommendation for a single parameter.

        Raises:
            InvalidHardwareError: If hardware values are not positive integers
            NotFoundError: If name is not in the catalog
        """
        validate_hardware(hardware)
        spec = self.catalog.lookup(name)
        return Recommendation(parameter=spec, computed_value=spec.recommend(hardware))
