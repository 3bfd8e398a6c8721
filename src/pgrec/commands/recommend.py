"""PostgreSQL parameter recommendation command.

Detects (or accepts) hardware facts, computes recommendations for every
catalog parameter and prints them as an executable script.

Commands:
- pgrec recommend (print ALTER SYSTEM script)
- pgrec recommend --format conf (print postgresql.conf fragment)
"""

from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich import box
from rich.table import Table

from pgrec.commands.options import (
    ConfigOption,
    NoColorOption,
    QuietOption,
    VerboseOption,
    handle_error,
)
from pgrec.core import (
    PGRecError,
    console,
    create_context,
    format_bytes,
    parse_memory,
)
from pgrec.services.catalog import HardwareProfile
from pgrec.services.emitter import ScriptEmitter
from pgrec.services.engine import Recommendation, RecommendationEngine, format_value
from pgrec.services.hardware import HardwareInspector


class FormatChoice(str, Enum):
    """CLI output format choices."""

    ALTER_SYSTEM = "alter-system"
    CONF = "conf"


app = typer.Typer(
    name="recommend",
    help="Compute PostgreSQL parameter recommendations.",
    no_args_is_help=False,  # Allow running without args
)


def _display_system_info(hardware: HardwareProfile) -> None:
    """Display the hardware the recommendations are based on."""
    console.print()
    console.print("[bold]Hardware Profile[/bold]")
    console.print(f"  RAM:           {format_bytes(hardware.total_memory_bytes)}")
    console.print(f"  CPU Cores:     {hardware.core_count}")


def _display_recommendations(recommendations: tuple[Recommendation, ...]) -> None:
    """Display recommendation table against PostgreSQL defaults."""
    console.print()

    table = Table(
        title="Recommendations",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold",
    )
    table.add_column("Parameter", style="cyan", no_wrap=True)
    table.add_column("Default", style="yellow")
    table.add_column("Recommended", style="green")
    table.add_column("Rule", style="dim")
    table.add_column("", width=1, justify="center")  # Restart indicator

    for rec in recommendations:
        spec = rec.parameter
        restart_marker = "*" if spec.requires_restart else ""
        style = "bold" if rec.changed else "dim"
        table.add_row(
            rec.name,
            format_value(spec.default, spec.unit),
            rec.formatted_value,
            spec.description,
            restart_marker,
            style=style,
        )

    console.print(table)

    if any(rec.parameter.requires_restart and rec.changed for rec in recommendations):
        console.print()
        console.print("[dim]* = Requires PostgreSQL restart to take effect[/dim]")

    changed_count = sum(1 for rec in recommendations if rec.changed)
    console.print()
    console.info(f"{changed_count} of {len(recommendations)} parameter(s) differ from defaults.")


@app.callback(invoke_without_command=True)
def recommend(
    memory: Optional[str] = typer.Option(
        None,
        "--memory", "-m",
        help="Total RAM, e.g. 64GB (default: detected)",
    ),
    cores: Optional[int] = typer.Option(
        None,
        "--cores", "-n",
        help="CPU core count (default: detected)",
    ),
    fmt: Optional[FormatChoice] = typer.Option(
        None,
        "--format",
        help="Output format: alter-system (SQL) or conf (postgresql.conf)",
        case_sensitive=False,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output", "-o",
        help="Write the script to a file instead of stdout",
        dir_okay=False,
    ),
    reload: bool = typer.Option(
        False,
        "--reload",
        help="Append SELECT pg_reload_conf(); to the script",
    ),
    verify: bool = typer.Option(
        False,
        "--verify",
        help="Append a pg_settings query that shows the applied values",
    ),
    show_table: bool = typer.Option(
        False,
        "--table",
        help="Show a comparison table against PostgreSQL defaults",
    ),
    config: ConfigOption = None,
    verbose: VerboseOption = 0,
    quiet: QuietOption = False,
    no_color: NoColorOption = False,
) -> None:
    """Compute recommended PostgreSQL settings for this machine.

    Memory, parallel query, JIT and connection settings are derived from
    total RAM and CPU core count. Values not passed on the command line
    come from PGREC_TOTAL_MEMORY / PGREC_CORE_COUNT, the config file, or
    detection, in that order.

    Examples:

        # Script for the current host
        pgrec recommend

        # Script for a 256GB, 48-core server
        pgrec recommend --memory 256GB --cores 48

        # postgresql.conf fragment written to a file
        pgrec recommend --format conf -o 99-tuning.conf

        # Include reload and verification query
        pgrec recommend --reload --verify
    """
    ctx = create_context(verbose=verbose, quiet=quiet, no_color=no_color, config=config)

    try:
        app_config = ctx.config

        memory_bytes = parse_memory(memory) if memory else app_config.total_memory_bytes
        core_count = cores if cores is not None else app_config.core_count

        console.step("Detecting system resources...")
        hardware = HardwareInspector().detect(memory_bytes, core_count)

        console.step("Calculating recommendations...")
        engine = RecommendationEngine()
        recommendations = engine.compute(hardware)

        if show_table:
            _display_system_info(hardware)
            _display_recommendations(recommendations)
            console.print()

        style = fmt.value if fmt else app_config.output.format
        emitter = ScriptEmitter(engine.catalog)
        script = emitter.render(
            recommendations,
            style=style,
            include_reload=reload or app_config.output.include_reload,
            hardware=hardware,
        )
        if verify or app_config.output.include_verification:
            if style == FormatChoice.CONF.value:
                console.warn("Verification query is only emitted with --format alter-system")
            else:
                script += "\n" + emitter.render_verification(recommendations)

        if output:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(script)
            console.success(f"Script written to: {output}")
        else:
            console.script(script.rstrip("\n"))

    except PGRecError as e:
        handle_error(e)
