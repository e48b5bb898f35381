# SPDX-License-Identifier: MIT
"""Helper services for the generate CLI command."""

from __future__ import annotations

from collections.abc import Sequence

from rich import box
from rich.table import Table

from ..config import ChecksumConfig, load_config
from ..generator import ChecksumTableGenerator
from ..models import ChecksumEntry, GeneratedArtifact, MigrationSourceFile, OutputTarget
from ..resolver import MigrationSetResolver
from ._generate_cli_models import GenerateCLIOptions
from .shared import CLILogger


def load_generate_config(options: GenerateCLIOptions) -> ChecksumConfig:
    """Return the effective configuration for ``options``.

    Args:
        options: Parsed CLI options including the project root.

    Returns:
        ChecksumConfig: ``pyproject.toml`` settings with CLI overrides applied.
    """

    return load_config(options.root, options.overrides())


def resolve_migrations(
    config: ChecksumConfig,
    options: GenerateCLIOptions,
    *,
    logger: CLILogger,
) -> list[MigrationSourceFile]:
    """Resolve the migration sources selected by ``config``."""

    resolver = MigrationSetResolver(use_emoji=options.emoji)
    files = resolver.resolve(config.source_paths(options.root), config.filter_spec())
    for source in files:
        logger.trace("migration", path=source.relative_path, id=source.identifier)
    return files


def run_generate(options: GenerateCLIOptions, *, logger: CLILogger) -> GeneratedArtifact | None:
    """Execute the generate command, returning the written artifact.

    The output target is validated before any source is resolved. During a
    dry run the checksum table is printed instead of written and ``None`` is
    returned.
    """

    config = load_generate_config(options)
    target = config.output_target(options.root)
    logger.trace("target", cls=target.class_name, path=target.output_path)
    files = resolve_migrations(config, options, logger=logger)
    generator = ChecksumTableGenerator(use_emoji=options.emoji)
    if options.dry_run:
        entries = generator.compute(files)
        emit_checksum_table(target, entries, logger=logger)
        logger.ok(f"Dry run complete; {len(entries)} checksum(s) would be written to {target.output_path}")
        return None
    return generator.generate(files, target)


def emit_checksum_table(target: OutputTarget, entries: Sequence[ChecksumEntry], *, logger: CLILogger) -> None:
    """Print ``entries`` under a section header naming the target class."""

    logger.section(f"Checksums for {target.class_name}")
    table = Table(box=box.SIMPLE_HEAVY)
    table.add_column("Migration", style="bold")
    table.add_column("Checksum", justify="right")
    for entry in entries:
        table.add_row(entry.identifier, str(entry.checksum))
    logger.console.print(table)


__all__ = ["emit_checksum_table", "load_generate_config", "resolve_migrations", "run_generate"]
