# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Generate the checksum enum for a resolved set of migration sources."""

from __future__ import annotations

import os
import tempfile
from collections import defaultdict
from collections.abc import Sequence
from pathlib import Path
from typing import Final

from .checksum import calculate_checksum
from .config import ChecksumConfig
from .errors import DuplicateIdentifierError, InvalidIdentifierError, RenderError, SourceReadError
from .logging import info, ok
from .models import ChecksumEntry, GeneratedArtifact, MigrationSourceFile, OutputTarget, validate_class_name
from .rendering import ChecksumRenderer, TemplateRenderer
from .resolver import MigrationSetResolver

ARTIFACT_MODE: Final[int] = 0o644


class ChecksumTableGenerator:
    """Compute checksums for resolved migrations and write the rendered table.

    The generator keeps no state between runs. Entries are assembled in the
    order the files are supplied and the artifact is rendered completely in
    memory before anything is written.
    """

    def __init__(self, renderer: ChecksumRenderer | None = None, *, use_emoji: bool = True) -> None:
        """Create a generator bound to ``renderer``.

        Args:
            renderer: Renderer producing the artifact text. Defaults to the
                packaged Java enum template.
            use_emoji: Whether progress messages include emoji.
        """

        self.renderer = renderer if renderer is not None else TemplateRenderer()
        self.use_emoji = use_emoji

    def compute(self, files: Sequence[MigrationSourceFile]) -> list[ChecksumEntry]:
        """Return checksum entries for ``files`` in the order given.

        Args:
            files: Resolved migration sources.

        Returns:
            list[ChecksumEntry]: One entry per source file.

        Raises:
            InvalidIdentifierError: If a file name yields an empty or
                non UTF-8 identifier.
            DuplicateIdentifierError: If two files derive the same identifier.
            SourceReadError: If any file cannot be read.
        """

        ensure_valid_identifiers(files)
        ensure_unique_identifiers(files)
        entries: list[ChecksumEntry] = []
        for source in files:
            try:
                with source.open() as handle:
                    checksum = calculate_checksum(handle)
            except OSError as exc:
                raise SourceReadError(source.path, exc.strerror or str(exc)) from exc
            entries.append(ChecksumEntry(checksum=checksum, identifier=source.identifier))
        return entries

    def generate(self, files: Sequence[MigrationSourceFile], target: OutputTarget) -> GeneratedArtifact:
        """Write the checksum table for ``files`` to ``target``.

        Args:
            files: Resolved migration sources in emission order.
            target: Name and location of the generated enum.

        Returns:
            GeneratedArtifact: Path and entries of the written artifact.

        Raises:
            ConfigurationError: If the target class name is invalid or an
                identifier is empty, undecodable or duplicated.
            SourceReadError: If any source file cannot be read.
            RenderError: If rendering or writing the artifact fails.
        """

        validate_class_name(target.class_name, extension=target.extension)
        info(f"Calculating checksums for {len(files)} migration source file(s)", use_emoji=self.use_emoji)
        entries = tuple(self.compute(files))
        output_path = target.output_path
        try:
            text = self.renderer.render(target.package, target.simple_name, entries)
        except (KeyError, ValueError) as exc:
            raise RenderError(output_path, f"template rendering failed ({exc})") from exc
        write_artifact(output_path, text)
        ok(f"Wrote {len(entries)} migration checksum(s) to {output_path}", use_emoji=self.use_emoji)
        return GeneratedArtifact(path=output_path, target=target, entries=entries)


def ensure_valid_identifiers(files: Sequence[MigrationSourceFile]) -> None:
    """Raise when a file name cannot be written out as a migration identifier.

    Raises:
        InvalidIdentifierError: Naming the first offending file.
    """

    for source in files:
        identifier = source.identifier
        if not identifier:
            raise InvalidIdentifierError(source.path, "file name has nothing before its extension")
        try:
            identifier.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise InvalidIdentifierError(source.path, "file name is not valid UTF-8") from exc


def ensure_unique_identifiers(files: Sequence[MigrationSourceFile]) -> None:
    """Raise when more than one file in ``files`` derives the same identifier.

    Raises:
        DuplicateIdentifierError: Listing every colliding identifier and path.
    """

    by_identifier: defaultdict[str, list[Path]] = defaultdict(list)
    for source in files:
        by_identifier[source.identifier].append(source.path)
    collisions = {identifier: paths for identifier, paths in by_identifier.items() if len(paths) > 1}
    if collisions:
        raise DuplicateIdentifierError(collisions)


def write_artifact(path: Path, text: str) -> None:
    """Replace the file at ``path`` with ``text`` in a single step.

    The content goes to a temporary sibling first and is moved into place once
    fully written, so an interrupted write never leaves a truncated artifact.

    Raises:
        RenderError: If the directory cannot be created or the file written.
    """

    temp_path: Path | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            newline="\n",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            temp_path = Path(handle.name)
            handle.write(text)
        temp_path.chmod(ARTIFACT_MODE)
        os.replace(temp_path, path)
        temp_path = None
    except OSError as exc:
        raise RenderError(path, exc.strerror or str(exc)) from exc
    except UnicodeEncodeError as exc:
        raise RenderError(path, f"artifact text cannot be encoded as UTF-8 ({exc.reason})") from exc
    finally:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)


def generate_checksum_table(
    config: ChecksumConfig,
    root: Path,
    *,
    renderer: ChecksumRenderer | None = None,
    resolver: MigrationSetResolver | None = None,
    use_emoji: bool = True,
) -> GeneratedArtifact:
    """Resolve, checksum and write the migration checksum enum for ``config``.

    The output target is validated before any source is discovered or read.

    Args:
        config: Validated generator configuration.
        root: Project root against which relative paths resolve.
        renderer: Optional renderer override.
        resolver: Optional resolver override.
        use_emoji: Whether progress messages include emoji.

    Returns:
        GeneratedArtifact: Path and entries of the written artifact.
    """

    target = config.output_target(root)
    active_resolver = resolver or MigrationSetResolver(use_emoji=use_emoji)
    files = active_resolver.resolve(config.source_paths(root), config.filter_spec())
    generator = ChecksumTableGenerator(renderer, use_emoji=use_emoji)
    return generator.generate(files, target)


__all__ = [
    "ChecksumTableGenerator",
    "ensure_unique_identifiers",
    "ensure_valid_identifiers",
    "generate_checksum_table",
    "write_artifact",
]
