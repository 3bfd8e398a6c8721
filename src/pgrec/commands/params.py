"""Parameter catalog commands.

Commands:
- pgrec params list [--category CAT]
- pgrec params show NAME [--memory SIZE --cores N]
"""

from enum import Enum
from typing import Annotated, Optional

import typer
from rich import box
from rich.table import Table

from pgrec.commands.options import NoColorOption, handle_error
from pgrec.core import PGRecError, console, create_context, parse_memory
from pgrec.services.catalog import DEFAULT_CATALOG, Category, HardwareProfile
from pgrec.services.engine import RecommendationEngine, format_value


class CategoryChoice(str, Enum):
    """CLI category choices."""

    MEMORY = "memory"
    PARALLELISM = "parallelism"
    JIT = "jit"
    CONNECTIONS = "connections"


app = typer.Typer(
    name="params",
    help="Inspect the tunable parameter catalog.",
    no_args_is_help=True,
)


@app.command("list")
def list_cmd(
    category: Annotated[
        Optional[CategoryChoice],
        typer.Option(
            "--category",
            help="Only show one tuning domain.",
            case_sensitive=False,
        ),
    ] = None,
    no_color: NoColorOption = False,
) -> None:
    """List all tunable parameters with defaults and rules."""
    create_context(no_color=no_color)

    if category:
        specs = DEFAULT_CATALOG.by_category(Category(category.value))
    else:
        specs = list(DEFAULT_CATALOG)

    table = Table(title="Tunable Parameters", box=box.ROUNDED, header_style="bold")
    table.add_column("Parameter", style="cyan", no_wrap=True)
    table.add_column("Category")
    table.add_column("Unit")
    table.add_column("Default", style="yellow")
    table.add_column("Restart", justify="center")
    table.add_column("Rule", style="dim")

    for spec in specs:
        table.add_row(
            spec.name,
            spec.category.value,
            spec.unit.value,
            format_value(spec.default, spec.unit),
            "*" if spec.requires_restart else "",
            spec.description,
        )

    console.print(table)


@app.command("show")
def show_cmd(
    name: Annotated[str, typer.Argument(help="PostgreSQL parameter name.")],
    memory: Annotated[
        Optional[str],
        typer.Option("--memory", "-m", help="Compute for this much RAM, e.g. 64GB."),
    ] = None,
    cores: Annotated[
        Optional[int],
        typer.Option("--cores", "-n", help="Compute for this many cores."),
    ] = None,
    no_color: NoColorOption = False,
) -> None:
    """Show details for one parameter.

    With --memory and --cores, also shows the recommended value.
    """
    create_context(no_color=no_color)

    try:
        spec = DEFAULT_CATALOG.lookup(name)

        items = {
            "Category": spec.category.value,
            "Unit": spec.unit.value,
            "Default": format_value(spec.default, spec.unit),
            "Rule": spec.description,
            "Requires restart": spec.requires_restart,
        }

        if memory is not None and cores is not None:
            hardware = HardwareProfile(
                total_memory_bytes=parse_memory(memory),
                core_count=cores,
            )
            rec = RecommendationEngine().compute_one(hardware, spec.name)
            items["Recommended"] = rec.formatted_value
        elif memory is not None or cores is not None:
            console.warn("Pass both --memory and --cores to compute a recommended value")

        console.summary(spec.name, items)

    except PGRecError as e:
        handle_error(e)
