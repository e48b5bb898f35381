# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command generating the migration checksum enum."""

from __future__ import annotations

from pathlib import Path

import typer

from ..errors import MigrationChecksumError
from ._generate_cli_models import (
    CLASS_NAME_OPTION,
    DEBUG_OPTION,
    DESTINATION_OPTION,
    DRY_RUN_OPTION,
    EMOJI_OPTION,
    EXCLUDE_OPTION,
    INCLUDE_OPTION,
    NO_DEFAULT_EXCLUDES_OPTION,
    ROOT_OPTION,
    SOURCE_OPTION,
    build_generate_options,
)
from ._generate_cli_services import run_generate
from .shared import EXIT_OK, CLIError, build_cli_logger


def generate_command(
    root: ROOT_OPTION = Path("."),
    source: SOURCE_OPTION = None,
    include: INCLUDE_OPTION = None,
    exclude: EXCLUDE_OPTION = None,
    destination: DESTINATION_OPTION = None,
    enum_class_name: CLASS_NAME_OPTION = None,
    no_default_excludes: NO_DEFAULT_EXCLUDES_OPTION = False,
    dry_run: DRY_RUN_OPTION = False,
    emoji: EMOJI_OPTION = True,
    debug: DEBUG_OPTION = False,
) -> None:
    """Generate a Java enum holding the checksum of every migration source."""

    options = build_generate_options(
        root=root,
        source=source,
        include=include,
        exclude=exclude,
        destination=destination,
        enum_class_name=enum_class_name,
        no_default_excludes=no_default_excludes,
        dry_run=dry_run,
        emoji=emoji,
        debug=debug,
    )
    logger = build_cli_logger(emoji=options.emoji, debug=options.debug)
    try:
        run_generate(options, logger=logger)
    except MigrationChecksumError as exc:
        error = CLIError.from_error(exc)
        logger.fail(str(error))
        raise typer.Exit(code=error.exit_code) from exc
    raise typer.Exit(code=EXIT_OK)


__all__ = ["generate_command"]
