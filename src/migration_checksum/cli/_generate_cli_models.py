# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared data structures for the generate CLI command."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Any

import typer

ROOT_OPTION = Annotated[
    Path,
    typer.Option("--root", "-r", help="Project root holding pyproject.toml.", file_okay=False),
]
SOURCE_OPTION = Annotated[
    list[Path] | None,
    typer.Option(
        "--source",
        "-s",
        help="Migration source file or directory, relative to the root (repeatable).",
    ),
]
INCLUDE_OPTION = Annotated[
    list[str] | None,
    typer.Option("--include", "-i", help="Ant-style include pattern (repeatable)."),
]
EXCLUDE_OPTION = Annotated[
    list[str] | None,
    typer.Option("--exclude", "-x", help="Ant-style exclude pattern (repeatable)."),
]
DESTINATION_OPTION = Annotated[
    Path | None,
    typer.Option("--destination", "-d", help="Directory receiving the generated enum."),
]
CLASS_NAME_OPTION = Annotated[
    str | None,
    typer.Option("--enum-class-name", "-n", help="Fully qualified name of the generated enum."),
]
NO_DEFAULT_EXCLUDES_OPTION = Annotated[
    bool,
    typer.Option(
        "--no-default-excludes",
        help="Also consider VCS metadata and editor backup files.",
    ),
]
DRY_RUN_OPTION = Annotated[
    bool,
    typer.Option("--dry-run", help="Print the checksum table without writing the enum."),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output."),
]
DEBUG_OPTION = Annotated[
    bool,
    typer.Option("--debug", help="Print resolved migration paths."),
]


def normalize_cli_values(values: Sequence[str] | None) -> tuple[str, ...] | None:
    """Return sanitized CLI values preserving order, or ``None`` when unset."""

    if values is None:
        return None
    cleaned_values: list[str] = []
    for entry in values:
        stripped = entry.strip()
        if stripped:
            cleaned_values.append(stripped)
    return tuple(cleaned_values)


@dataclass(slots=True)
class GenerateCLIOptions:
    """Capture CLI overrides supplied to the generate command."""

    root: Path
    sources: tuple[Path, ...] | None
    includes: tuple[str, ...] | None
    excludes: tuple[str, ...] | None
    destination: Path | None
    enum_class_name: str | None
    use_default_excludes: bool | None
    dry_run: bool
    emoji: bool
    debug: bool

    def overrides(self) -> dict[str, Any]:
        """Return configuration overrides; unset options map to ``None``."""

        return {
            "sources": self.sources,
            "includes": self.includes,
            "excludes": self.excludes,
            "destination": self.destination,
            "enum_class_name": self.enum_class_name,
            "use_default_excludes": self.use_default_excludes,
        }


def build_generate_options(
    *,
    root: Path,
    source: Sequence[Path] | None,
    include: Sequence[str] | None,
    exclude: Sequence[str] | None,
    destination: Path | None,
    enum_class_name: str | None,
    no_default_excludes: bool,
    dry_run: bool,
    emoji: bool,
    debug: bool,
) -> GenerateCLIOptions:
    """Construct ``GenerateCLIOptions`` from Typer command parameters."""

    return GenerateCLIOptions(
        root=root.resolve(),
        sources=tuple(source) if source else None,
        includes=normalize_cli_values(include) or None,
        excludes=normalize_cli_values(exclude) or None,
        destination=destination,
        enum_class_name=enum_class_name.strip() if enum_class_name is not None else None,
        use_default_excludes=False if no_default_excludes else None,
        dry_run=dry_run,
        emoji=emoji,
        debug=debug,
    )


__all__ = [
    "CLASS_NAME_OPTION",
    "DEBUG_OPTION",
    "DESTINATION_OPTION",
    "DRY_RUN_OPTION",
    "EMOJI_OPTION",
    "EXCLUDE_OPTION",
    "GenerateCLIOptions",
    "INCLUDE_OPTION",
    "NO_DEFAULT_EXCLUDES_OPTION",
    "ROOT_OPTION",
    "SOURCE_OPTION",
    "build_generate_options",
    "normalize_cli_values",
]
