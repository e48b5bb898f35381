# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (logging, errors, exit codes)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

import typer
from rich.console import Console
from rich.text import Text

from ..console import get_console
from ..errors import ConfigurationError, MigrationChecksumError, NoInputError, RenderError, SourceReadError
from ..logging import log
from ..logging import section as log_section

EXIT_OK: Final[int] = 0
EXIT_CONFIGURATION: Final[int] = 1
EXIT_NO_INPUT: Final[int] = 2
EXIT_SOURCE_READ: Final[int] = 3
EXIT_RENDER: Final[int] = 4


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code

    @classmethod
    def from_error(cls, error: MigrationChecksumError) -> CLIError:
        """Return a CLI error carrying the exit code assigned to ``error``."""

        return cls(str(error), exit_code=exit_code_for(error))


def exit_code_for(error: MigrationChecksumError) -> int:
    """Return the process exit status for a generation failure."""

    if isinstance(error, ConfigurationError):
        return EXIT_CONFIGURATION
    if isinstance(error, NoInputError):
        return EXIT_NO_INPUT
    if isinstance(error, SourceReadError):
        return EXIT_SOURCE_READ
    if isinstance(error, RenderError):
        return EXIT_RENDER
    return EXIT_CONFIGURATION


@dataclass(slots=True)
class CLILogger:
    """Output channel for a single CLI invocation.

    Status lines go through :mod:`migration_checksum.logging`; ``trace``
    records are only printed when ``--debug`` is active.
    """

    console: Console
    use_emoji: bool
    debug_enabled: bool = False

    def fail(self, message: str) -> None:
        log("fail", message, use_emoji=self.use_emoji)

    def ok(self, message: str) -> None:
        log("ok", message, use_emoji=self.use_emoji)

    def section(self, title: str) -> None:
        log_section(title)

    def echo(self, message: str) -> None:
        """Write ``message`` to stdout without styling."""

        typer.echo(message)

    def trace(self, event: str, **fields: object) -> None:
        """Print a debug record such as ``migration path=db/V1.sql id=V1``.

        Args:
            event: Short name of what happened.
            **fields: Values rendered as highlighted ``key=value`` pairs in
                keyword order.
        """

        if not self.debug_enabled:
            return
        text = Text("[debug] ", style="bold cyan")
        text.append(event, style="dim")
        for key, value in fields.items():
            text.append(" ")
            text.append(key, style="bold magenta")
            text.append("=", style="dim")
            text.append(str(value), style="bold green")
        self.console.print(text)


def build_cli_logger(*, emoji: bool, debug: bool = False) -> CLILogger:
    """Return a :class:`CLILogger` writing to the shared console."""

    return CLILogger(console=get_console(emoji=emoji), use_emoji=emoji, debug_enabled=debug)


__all__ = [
    "CLIError",
    "CLILogger",
    "EXIT_CONFIGURATION",
    "EXIT_NO_INPUT",
    "EXIT_OK",
    "EXIT_RENDER",
    "EXIT_SOURCE_READ",
    "build_cli_logger",
    "exit_code_for",
]
