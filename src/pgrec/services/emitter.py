"""Script emitter.

Renders recommendations as executable configuration text:
- ALTER SYSTEM statements (default)
- postgresql.conf fragments grouped by tuning domain
- The pg_settings query that verifies applied values
"""

import re
from typing import Iterable, Optional

from jinja2 import Environment, PackageLoader

from pgrec.core.validation import format_bytes
from pgrec.services.catalog import (
    DEFAULT_CATALOG,
    Category,
    HardwareProfile,
    ParameterCatalog,
)
from pgrec.services.engine import Recommendation


STYLE_ALTER_SYSTEM = "alter-system"
STYLE_CONF = "conf"
STYLES = (STYLE_ALTER_SYSTEM, STYLE_CONF)

RELOAD_STATEMENT = "SELECT pg_reload_conf();"

_ALTER_SYSTEM_PATTERN = re.compile(
    r"^\s*ALTER\s+SYSTEM\s+SET\s+([a-z_][a-z0-9_]*)\s*(?:=|TO)\s*(.+?)\s*;\s*$",
    re.IGNORECASE,
)
_CONF_PATTERN = re.compile(r"^\s*([a-z_][a-z0-9_]*)\s*=\s*(\S.*?)\s*$", re.IGNORECASE)
_PLAIN_LITERAL = re.compile(r"^(-?\d+|on|off)$")


def _sql_literal(value: str) -> str:
    """Quote a value for ALTER SYSTEM unless it is a bare number or on/off."""
    if _PLAIN_LITERAL.match(value):
        return value
    return "'" + value.replace("'", "''") + "'"


class ScriptEmitter:
    """Formats recommendations as configuration text.

    Output always follows catalog declaration order, whatever order the
    recommendations are passed in.
    """

    def __init__(self, catalog: Optional[ParameterCatalog] = None) -> None:
        self.catalog = catalog or DEFAULT_CATALOG
        self._jinja_env = Environment(
            loader=PackageLoader("pgrec", "templates"),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            autoescape=False,
        )

    def _ordered(self, recommendations: Iterable[Recommendation]) -> list[Recommendation]:
        return sorted(recommendations, key=lambda r: self.catalog.index_of(r.name))

    def statement(self, rec: Recommendation) -> str:
        """ALTER SYSTEM statement for a single recommendation."""
        return f"ALTER SYSTEM SET {rec.name} = {_sql_literal(rec.formatted_value)};"

    def render(
        self,
        recommendations: Iterable[Recommendation],
        style: str = STYLE_ALTER_SYSTEM,
        include_reload: bool = False,
        hardware: Optional[HardwareProfile] = None,
    ) -> str:
        """Render recommendations as configuration text.

        Args:
            recommendations: Computed recommendations
            style: "alter-system" for SQL statements, "conf" for a
                postgresql.conf fragment
            include_reload: Append SELECT pg_reload_conf(); (alter-system only)
            hardware: Hardware the values were computed for, shown in the
                conf header

        Returns:
            Script text with one setting per line
        """
        ordered = self._ordered(recommendations)

        if style == STYLE_CONF:
            return self._render_conf(ordered, hardware)
        if style != STYLE_ALTER_SYSTEM:
            raise ValueError(f"Unknown output style: {style}")

        lines = [self.statement(rec) for rec in ordered]
        if include_reload:
            lines.append(RELOAD_STATEMENT)
        return "\n".join(lines) + "\n"

    def _render_conf(
        self,
        ordered: list[Recommendation],
        hardware: Optional[HardwareProfile],
    ) -> str:
        sections = []
        for category in Category:
            items = [rec for rec in ordered if rec.parameter.category == category]
            if items:
                sections.append((category.title, items))

        template = self._jinja_env.get_template("postgresql.conf.j2")
        return template.render(
            sections=sections,
            hardware=hardware,
            memory=format_bytes(hardware.total_memory_bytes) if hardware else None,
            rule="=" * 74,
        )

    def render_verification(self, recommendations: Iterable[Recommendation]) -> str:
        """Query that shows the live values of the recommended parameters."""
        names = ", ".join(f"'{rec.name}'" for rec in self._ordered(recommendations))
        return (
            "SELECT name, setting, unit, pending_restart\n"
            "FROM pg_settings\n"
            f"WHERE name IN ({names})\n"
            "ORDER BY name;\n"
        )


def parse_settings(text: str) -> dict[str, str]:
    """Parse emitted text back into {name: literal}.

    Understands both ALTER SYSTEM statements and postgresql.conf lines.
    Comments, blank lines and other SQL are ignored.
    """
    settings: dict[str, str] = {}
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or stripped.startswith("--"):
            continue
        match = _ALTER_SYSTEM_PATTERN.match(stripped)
        if match:
            settings[match.group(1).lower()] = match.group(2).strip("'")
            continue
        if stripped.upper().startswith(("SELECT", "FROM", "WHERE", "ORDER")):
            continue
        match = _CONF_PATTERN.match(stripped)
        if match:
            settings[match.group(1).lower()] = match.group(2).strip("'")
    return settings


def parse_names(text: str) -> list[str]:
    """Parameter names set by emitted text, in order of appearance."""
    return list(parse_settings(text))
