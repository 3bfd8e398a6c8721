"""Shared CLI options and error handling for pgrec commands."""

from pathlib import Path
from typing import Annotated, NoReturn, Optional

import typer
from rich.markup import escape

from pgrec.core.config import DEFAULT_CONFIG_PATH
from pgrec.core.exceptions import PGRecError
from pgrec.core.output import console


VerboseOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase output verbosity. Can be repeated (-v, -vv).",
    ),
]

QuietOption = Annotated[
    bool,
    typer.Option(
        "--quiet",
        "-q",
        help="Suppress non-essential output. Only show errors and the script.",
        is_flag=True,
    ),
]

NoColorOption = Annotated[
    bool,
    typer.Option(
        "--no-color",
        help="Disable colored output.",
        is_flag=True,
    ),
]

ConfigOption = Annotated[
    Optional[Path],
    typer.Option(
        "--config",
        "-c",
        help=f"Path to configuration file. Default: {DEFAULT_CONFIG_PATH}",
        exists=False,
        file_okay=True,
        dir_okay=False,
    ),
]

ForceOption = Annotated[
    bool,
    typer.Option(
        "--force",
        "-f",
        help="Overwrite existing files.",
        is_flag=True,
    ),
]


def handle_error(error: PGRecError) -> NoReturn:
    """Print a PGRecError with its details and hint, then exit with its code."""
    console.error(escape(error.message))

    if error.details:
        for detail in error.details:
            console.detail(escape(detail))

    if error.hint:
        console.hint(escape(error.hint))

    raise typer.Exit(error.exit_code)
