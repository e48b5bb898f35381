# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Load generator configuration from ``pyproject.toml`` and CLI overrides."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import ValidationError

from ..errors import ConfigurationError
from .models import ChecksumConfig

PYPROJECT_FILE: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "migration-checksum"


class PyProjectConfigSource:
    """Read configuration from ``[tool.migration-checksum]`` within ``pyproject.toml``."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.name = str(path)

    def load(self) -> Mapping[str, Any]:
        """Return the normalised tool section, or an empty mapping when absent.

        Raises:
            ConfigurationError: If the document cannot be parsed or the
                section is not a table.
        """

        if not self.path.is_file():
            return {}
        try:
            with self.path.open("rb") as handle:
                data = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigurationError(f"Could not parse {self.path}: {exc}") from exc
        tool_section = data.get(PYPROJECT_TOOL_KEY)
        if not isinstance(tool_section, Mapping):
            return {}
        section = tool_section.get(PYPROJECT_SECTION_KEY)
        if section is None:
            return {}
        if not isinstance(section, Mapping):
            raise ConfigurationError(f"[{PYPROJECT_TOOL_KEY}.{PYPROJECT_SECTION_KEY}] in {self.path} must be a table")
        return normalise_keys(section)

    def describe(self) -> str:
        return f"pyproject.toml ({self.name})"


def normalise_keys(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``payload`` with dashed keys converted to field names."""

    return {str(key).replace("-", "_"): value for key, value in payload.items()}


def load_config(
    root: Path,
    overrides: Mapping[str, Any] | None = None,
    *,
    pyproject: Path | None = None,
) -> ChecksumConfig:
    """Return the effective configuration for the project at ``root``.

    Values from ``overrides`` replace those read from ``pyproject.toml``;
    ``None`` overrides are ignored so unset CLI options keep file values.

    Args:
        root: Project root holding ``pyproject.toml``.
        overrides: Optional field values supplied by the caller.
        pyproject: Optional explicit path of the TOML document to read.

    Returns:
        ChecksumConfig: Validated configuration.

    Raises:
        ConfigurationError: If the document is malformed or any value is invalid.
    """

    source = PyProjectConfigSource(pyproject or root / PYPROJECT_FILE)
    payload: dict[str, Any] = dict(source.load())
    for key, value in normalise_keys(overrides or {}).items():
        if value is not None:
            payload[key] = value
    try:
        return ChecksumConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration from {source.describe()}:\n{exc}") from exc


__all__ = ["PYPROJECT_SECTION_KEY", "PyProjectConfigSource", "load_config", "normalise_keys"]
