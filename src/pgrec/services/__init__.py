"""Recommendation services: catalog, engine, emitter and hardware detection."""

from pgrec.services.catalog import (
    DEFAULT_CATALOG,
    Category,
    HardwareProfile,
    ParameterCatalog,
    ParameterSpec,
    Unit,
)
from pgrec.services.engine import Recommendation, RecommendationEngine
from pgrec.services.emitter import ScriptEmitter, parse_names, parse_settings
from pgrec.services.hardware import HardwareInspector

__all__ = [
    "DEFAULT_CATALOG",
    "Category",
    "HardwareProfile",
    "ParameterCatalog",
    "ParameterSpec",
    "Unit",
    "Recommendation",
    "RecommendationEngine",
    "ScriptEmitter",
    "parse_names",
    "parse_settings",
    "HardwareInspector",
]
