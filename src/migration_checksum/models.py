# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Value objects shared by the resolver, generator and renderer."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Final

from .errors import ConfigurationError
from .patterns import DEFAULT_EXCLUDES, AntPattern, compile_patterns, matches_any

NAMESPACE_SEPARATOR: Final[str] = "."
DEFAULT_EXTENSION: Final[str] = "java"


def derive_identifier(file_name: str) -> str:
    """Return ``file_name`` without its final extension segment.

    Args:
        file_name: Base name of a migration source file.

    Returns:
        str: Migration identifier, e.g. ``V1__init`` for ``V1__init.sql``.
    """

    head, separator, _extension = file_name.rpartition(".")
    return head if separator else file_name


@dataclass(frozen=True, slots=True)
class MigrationSourceFile:
    """Candidate migration file discovered beneath a configured source."""

    path: Path
    relative_path: str
    root: Path

    @property
    def name(self) -> str:
        """Return the base name of the source file."""

        return self.path.name

    @property
    def identifier(self) -> str:
        """Return the migration identifier derived from the file name."""

        return derive_identifier(self.path.name)

    def open(self) -> BinaryIO:
        """Open the source file for binary reading."""

        return self.path.open("rb")

    def read_bytes(self) -> bytes:
        """Return the raw content of the source file."""

        return self.path.read_bytes()


@dataclass(frozen=True, slots=True)
class FilterSpec:
    """Ordered include and exclude patterns narrowing a candidate file set."""

    includes: tuple[str, ...] = ()
    excludes: tuple[str, ...] = ()
    use_default_excludes: bool = True
    _include_patterns: tuple[AntPattern, ...] = field(init=False, repr=False, compare=False)
    _exclude_patterns: tuple[AntPattern, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        excludes = self.excludes + DEFAULT_EXCLUDES if self.use_default_excludes else self.excludes
        object.__setattr__(self, "_include_patterns", compile_patterns(self.includes))
        object.__setattr__(self, "_exclude_patterns", compile_patterns(excludes))

    def accepts(self, relative_path: str) -> bool:
        """Return whether a file at ``relative_path`` survives the filters.

        Args:
            relative_path: POSIX-style path relative to its source root.

        Returns:
            bool: ``True`` when included (or no includes exist) and not excluded.
        """

        if self._include_patterns and not matches_any(self._include_patterns, relative_path):
            return False
        return not matches_any(self._exclude_patterns, relative_path)

    def prunes(self, relative_directory: str) -> bool:
        """Return whether the walk should skip ``relative_directory`` entirely.

        A directory is skipped when it matches an exclude pattern itself or when
        an exclude pattern covers every path below it.
        """

        if matches_any(self._exclude_patterns, relative_directory):
            return True
        return any(pattern.matches_tree(relative_directory) for pattern in self._exclude_patterns)


@dataclass(frozen=True, slots=True)
class ChecksumEntry:
    """Checksum computed for a single migration."""

    checksum: int
    identifier: str


@dataclass(frozen=True, slots=True)
class OutputTarget:
    """Fully qualified name and location of the generated checksum enum."""

    class_name: str
    destination: Path
    extension: str = DEFAULT_EXTENSION

    def __post_init__(self) -> None:
        validate_class_name(self.class_name, extension=self.extension)

    @property
    def package(self) -> str:
        """Return the namespace portion of the class name."""

        return self.class_name.rpartition(NAMESPACE_SEPARATOR)[0]

    @property
    def simple_name(self) -> str:
        """Return the unqualified type name."""

        return self.class_name.rpartition(NAMESPACE_SEPARATOR)[2]

    @property
    def output_path(self) -> Path:
        """Return ``destination/<package path>/<SimpleName>.<extension>``."""

        relative = Path(*self.package.split(NAMESPACE_SEPARATOR))
        return self.destination / relative / f"{self.simple_name}.{self.extension}"


@dataclass(frozen=True, slots=True)
class GeneratedArtifact:
    """Checksum table written during a generation run."""

    path: Path
    target: OutputTarget
    entries: tuple[ChecksumEntry, ...]


def validate_class_name(class_name: str, *, extension: str = DEFAULT_EXTENSION) -> str:
    """Return ``class_name`` after checking it names a packaged type.

    Args:
        class_name: Fully qualified type name such as ``db.migration.Checksums``.
        extension: Source file extension the name must not carry.

    Returns:
        str: The validated class name.

    Raises:
        ConfigurationError: If the name lacks a package, has an empty segment
            or ends with the source file extension.
    """

    segments = class_name.split(NAMESPACE_SEPARATOR)
    invalid = (
        len(segments) < 2
        or any(not segment.strip() for segment in segments)
        or class_name.endswith(f"{NAMESPACE_SEPARATOR}{extension}")
    )
    if invalid:
        raise ConfigurationError(
            f"Given checksum enum class name of {class_name} is invalid - class name must include "
            f"a non-default package and not end with a .{extension} file extension"
        )
    return class_name


__all__ = [
    "ChecksumEntry",
    "DEFAULT_EXTENSION",
    "FilterSpec",
    "GeneratedArtifact",
    "MigrationSourceFile",
    "OutputTarget",
    "derive_identifier",
    "validate_class_name",
]
