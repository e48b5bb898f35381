# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration model for migration checksum generation."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Final, TypeVar

from pydantic import BaseModel, ConfigDict, field_validator

from ..errors import ConfigurationError
from ..models import FilterSpec, OutputTarget, validate_class_name

DEFAULT_DESTINATION_DIR: Final[str] = "build/generated/migration-checksum"
DEFAULT_ENUM_CLASS_NAME: Final[str] = "db.migration.JavaMigrationChecksum"

ValueT = TypeVar("ValueT")


class ChecksumConfig(BaseModel):
    """Immutable options controlling a checksum generation run.

    Relative ``sources`` and ``destination`` entries are interpreted relative
    to the project root handed to :meth:`source_paths` and :meth:`output_target`.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    sources: tuple[Path, ...] = ()
    includes: tuple[str, ...] = ()
    excludes: tuple[str, ...] = ()
    use_default_excludes: bool = True
    destination: Path = Path(DEFAULT_DESTINATION_DIR)
    enum_class_name: str = DEFAULT_ENUM_CLASS_NAME

    @field_validator("sources", "includes", "excludes", mode="before")
    @classmethod
    def _coerce_sequence(cls, value: object) -> object:
        """Return scalar values wrapped in a tuple and ``None`` as empty."""

        if value is None:
            return ()
        if isinstance(value, (str, Path)):
            return (value,)
        return value

    @field_validator("includes", "excludes")
    @classmethod
    def _strip_patterns(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        """Return ``value`` with blank entries removed and whitespace trimmed."""

        return tuple(_unique(entry.strip() for entry in value if entry.strip()))

    @field_validator("sources")
    @classmethod
    def _dedupe_sources(cls, value: tuple[Path, ...]) -> tuple[Path, ...]:
        return tuple(_unique(value))

    @field_validator("enum_class_name")
    @classmethod
    def _check_class_name(cls, value: str) -> str:
        """Reject class names without a package or with a ``.java`` suffix."""

        try:
            return validate_class_name(value.strip())
        except ConfigurationError as exc:
            raise ValueError(str(exc)) from exc

    def filter_spec(self) -> FilterSpec:
        """Return the include/exclude rules described by this configuration."""

        return FilterSpec(
            includes=self.includes,
            excludes=self.excludes,
            use_default_excludes=self.use_default_excludes,
        )

    def source_paths(self, root: Path) -> list[Path]:
        """Return configured sources resolved against ``root`` in order."""

        return [_anchor(source, root) for source in self.sources]

    def output_target(self, root: Path) -> OutputTarget:
        """Return the validated output target anchored at ``root``."""

        return OutputTarget(class_name=self.enum_class_name, destination=_anchor(self.destination, root))


def _anchor(path: Path, root: Path) -> Path:
    expanded = path.expanduser()
    return expanded if expanded.is_absolute() else root / expanded


def _unique(values: Iterable[ValueT]) -> list[ValueT]:
    seen: set[ValueT] = set()
    ordered: list[ValueT] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        ordered.append(value)
    return ordered


__all__ = ["ChecksumConfig", "DEFAULT_DESTINATION_DIR", "DEFAULT_ENUM_CLASS_NAME"]
