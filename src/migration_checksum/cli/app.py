# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands and shared services."""

from __future__ import annotations

from typing import Annotated

import typer

from .. import __version__
from .checksum import checksum_command
from .generate import generate_command

app = typer.Typer(
    name="migration-checksum",
    help="Generate Flyway-compatible checksum enums for Java-based migrations.",
    no_args_is_help=True,
    add_completion=False,
)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"migration-checksum {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_print_version,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = False,
) -> None:
    """Generate Flyway-compatible checksum enums for Java-based migrations."""


app.command("generate")(generate_command)
app.command("checksum")(checksum_command)

__all__ = ["app"]
