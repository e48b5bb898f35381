# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command printing the checksum of individual migration files."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ..checksum import checksum_file
from ..errors import SourceReadError
from .shared import EXIT_OK, CLIError, build_cli_logger

PATHS_ARGUMENT = Annotated[
    list[Path],
    typer.Argument(help="Migration source files to checksum.", dir_okay=False),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output."),
]


def checksum_command(paths: PATHS_ARGUMENT, emoji: EMOJI_OPTION = True) -> None:
    """Print the Flyway-compatible checksum of each file, one per line."""

    logger = build_cli_logger(emoji=emoji)
    for path in paths:
        try:
            value = checksum_file(path)
        except OSError as exc:
            error = CLIError.from_error(SourceReadError(path.absolute(), exc.strerror or str(exc)))
            logger.fail(str(error))
            raise typer.Exit(code=error.exit_code) from exc
        logger.echo(f"{value}\t{path}")
    raise typer.Exit(code=EXIT_OK)


__all__ = ["checksum_command"]
