# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Custom exceptions raised while generating migration checksum tables."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path


class MigrationChecksumError(RuntimeError):
    """Base class for every failure that aborts a checksum generation run."""


class ConfigurationError(MigrationChecksumError):
    """Raised when user-supplied configuration is invalid."""


class DuplicateIdentifierError(ConfigurationError):
    """Raised when two resolved migration files derive the same identifier."""

    def __init__(self, collisions: Mapping[str, Sequence[Path]]) -> None:
        """Create the error from a mapping of identifier to colliding paths.

        Args:
            collisions: Identifiers mapped to every source path deriving them.
        """

        self.collisions = {identifier: tuple(paths) for identifier, paths in collisions.items()}
        details = "; ".join(
            f"{identifier} <- {', '.join(str(path) for path in paths)}"
            for identifier, paths in self.collisions.items()
        )
        super().__init__(f"Duplicate migration identifiers detected: {details}")


class InvalidIdentifierError(ConfigurationError):
    """Raised when a migration file name cannot become an enum constant."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        shown = str(path).encode("utf-8", "backslashreplace").decode("utf-8")
        super().__init__(f"Cannot derive a migration identifier from {shown}: {reason}")


class NoInputError(MigrationChecksumError):
    """Raised when no migration source files remain after filtering."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "No migration source files matched the configured sources and filters")


class SourceReadError(MigrationChecksumError):
    """Raised when a migration source file cannot be read."""

    def __init__(self, path: Path, reason: str | None = None) -> None:
        """Create the error for ``path`` with an optional ``reason``.

        Args:
            path: Absolute path of the source file that failed to read.
            reason: Optional detail describing the underlying failure.
        """

        self.path = path
        message = f"Could not read source file {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class RenderError(MigrationChecksumError):
    """Raised when the checksum table cannot be rendered or written."""

    def __init__(self, path: Path, reason: str | None = None) -> None:
        """Create the error for the artifact at ``path``.

        Args:
            path: Destination path of the artifact being generated.
            reason: Optional detail describing the underlying failure.
        """

        self.path = path
        message = f"Could not write migration checksum enum at {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


__all__ = (
    "ConfigurationError",
    "DuplicateIdentifierError",
    "InvalidIdentifierError",
    "MigrationChecksumError",
    "NoInputError",
    "RenderError",
    "SourceReadError",
)
