"""Main CLI entry point using Typer.

This module defines the root CLI application and registers the command
groups from submodules.
"""

from typing import Annotated

import typer
from rich.console import Console

from pgrec import __version__
from pgrec.commands import params_app, recommend_app
from pgrec.commands.options import (
    ConfigOption,
    ForceOption,
    NoColorOption,
    VerboseOption,
    handle_error,
)
from pgrec.core.config import (
    AppConfig,
    RecConfig,
    get_example_config,
    init_config,
)
from pgrec.core.context import create_context
from pgrec.core.exceptions import PGRecError


# Create the main Typer app
app = typer.Typer(
    name="pgrec",
    help="PostgreSQL server-parameter recommendation calculator.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=True,
    pretty_exceptions_show_locals=False,
)

config_app = typer.Typer(
    name="config",
    help="Configuration management.",
    no_args_is_help=True,
)

# Register command groups
app.add_typer(recommend_app, name="recommend")
app.add_typer(params_app, name="params")
app.add_typer(config_app, name="config")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console = Console()
        console.print(f"pgrec version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
) -> None:
    """PostgreSQL server-parameter recommendation calculator.

    Computes memory, parallel query, JIT and connection settings from
    total RAM and CPU core count, and prints them as ALTER SYSTEM
    statements or a postgresql.conf fragment.

    [bold]Examples:[/bold]
        pgrec recommend
        pgrec recommend --memory 256GB --cores 48 --table
        pgrec params list --category memory
        pgrec params show work_mem --memory 64GB --cores 16
        pgrec config show
    """
    pass


# ============================================================================
# Config commands
# ============================================================================

@config_app.command("show")
def config_show(
    config: ConfigOption = None,
    verbose: VerboseOption = 0,
    no_color: NoColorOption = False,
) -> None:
    """Show current configuration.

    Displays the loaded configuration and active environment overrides.
    """
    ctx = create_context(verbose=verbose, no_color=no_color, config=config)

    try:
        app_config = ctx.config

        ctx.console.print()
        ctx.console.print(f"[bold]Configuration file:[/bold] {ctx.config_path}")
        ctx.console.print(f"[bold]File exists:[/bold] {ctx.config_path.exists()}")
        ctx.console.print()

        ctx.console.yaml(app_config.config.to_yaml(), title="Configuration")

        ctx.console.summary("Environment overrides", {
            "PGREC_TOTAL_MEMORY": app_config.env.total_memory or "Not set",
            "PGREC_CORE_COUNT": app_config.env.core_count or "Not set",
        })

    except PGRecError as e:
        handle_error(e)


@config_app.command("init")
def config_init(
    config: ConfigOption = None,
    force: ForceOption = False,
    no_color: NoColorOption = False,
) -> None:
    """Initialize a new configuration file.

    Creates a configuration file with defaults and comments.
    """
    ctx = create_context(no_color=no_color, config=config)
    config_path = ctx.config_path

    try:
        init_config(config_path, force=force)
        ctx.console.success(f"Configuration file created: {config_path}")
        ctx.console.info("Set hardware values to override detection.")

    except PGRecError as e:
        handle_error(e)


@config_app.command("validate")
def config_validate(
    config: ConfigOption = None,
    verbose: VerboseOption = 0,
    no_color: NoColorOption = False,
) -> None:
    """Validate configuration file.

    Checks that the configuration file exists, is valid YAML, all values
    pass validation, and environment overrides parse.
    """
    ctx = create_context(verbose=verbose, no_color=no_color, config=config)

    try:
        # Raises ConfigurationError if missing or invalid
        app_config = AppConfig(
            config_path=ctx.config_path,
            config=RecConfig.load(ctx.config_path),
        )
        memory_bytes = app_config.total_memory_bytes
        core_count = app_config.core_count

        ctx.console.success(f"Configuration is valid: {ctx.config_path}")
        ctx.console.verbose(
            f"Hardware overrides: memory={memory_bytes or 'detect'}, "
            f"cores={core_count or 'detect'}"
        )

        if ctx.is_verbose:
            ctx.console.yaml(app_config.config.to_yaml())

    except PGRecError as e:
        handle_error(e)


@config_app.command("example")
def config_example(no_color: NoColorOption = False) -> None:
    """Print example configuration file."""
    ctx = create_context(no_color=no_color)
    ctx.console.script(get_example_config())
