# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from migration_checksum.config import ChecksumConfig, load_config
from migration_checksum.errors import ConfigurationError


def _write_pyproject(root: Path, body: str) -> None:
    (root / "pyproject.toml").write_text(body, encoding="utf-8")


def test_defaults_match_generator_conventions(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config.sources == ()
    assert config.includes == ()
    assert config.excludes == ()
    assert config.use_default_excludes is True
    assert config.enum_class_name == "db.migration.JavaMigrationChecksum"
    target = config.output_target(tmp_path)
    assert target.destination == tmp_path / "build" / "generated" / "migration-checksum"


def test_reads_tool_section_from_pyproject(tmp_path: Path) -> None:
    _write_pyproject(
        tmp_path,
        """
[tool.migration-checksum]
sources = ["src/main/java/db/migration"]
includes = ["**/V*.java"]
excludes = ["**/V0__*.java"]
destination = "generated"
enum-class-name = "com.example.db.MigrationChecksum"
use-default-excludes = false
""",
    )

    config = load_config(tmp_path)

    assert config.source_paths(tmp_path) == [tmp_path / "src" / "main" / "java" / "db" / "migration"]
    assert config.includes == ("**/V*.java",)
    assert config.excludes == ("**/V0__*.java",)
    assert config.use_default_excludes is False
    assert config.output_target(tmp_path).output_path == (
        tmp_path / "generated" / "com" / "example" / "db" / "MigrationChecksum.java"
    )


def test_overrides_replace_file_values(tmp_path: Path) -> None:
    _write_pyproject(tmp_path, '[tool.migration-checksum]\nincludes = ["*.sql"]\nenum-class-name = "a.B"\n')

    config = load_config(tmp_path, {"includes": ("*.java",), "enum_class_name": None})

    assert config.includes == ("*.java",)
    assert config.enum_class_name == "a.B"


def test_scalar_patterns_are_coerced(tmp_path: Path) -> None:
    _write_pyproject(tmp_path, '[tool.migration-checksum]\nincludes = "*.sql"\nsources = "db"\n')

    config = load_config(tmp_path)

    assert config.includes == ("*.sql",)
    assert config.sources == (Path("db"),)


def test_blank_and_duplicate_patterns_are_dropped() -> None:
    config = ChecksumConfig(includes=("*.sql", " ", " *.sql "))
    assert config.includes == ("*.sql",)


def test_invalid_class_name_is_a_configuration_error(tmp_path: Path) -> None:
    _write_pyproject(tmp_path, '[tool.migration-checksum]\nenum-class-name = "JavaMigrationChecksum"\n')

    with pytest.raises(ConfigurationError, match="JavaMigrationChecksum"):
        load_config(tmp_path)


def test_class_name_with_java_suffix_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        load_config(tmp_path, {"enum_class_name": "db.migration.JavaMigrationChecksum.java"})


def test_unknown_keys_are_rejected(tmp_path: Path) -> None:
    _write_pyproject(tmp_path, '[tool.migration-checksum]\nsource-sets = ["main"]\n')

    with pytest.raises(ConfigurationError, match="source_sets"):
        load_config(tmp_path)


def test_malformed_toml_is_reported(tmp_path: Path) -> None:
    _write_pyproject(tmp_path, "[tool.migration-checksum\n")

    with pytest.raises(ConfigurationError, match="Could not parse"):
        load_config(tmp_path)


def test_section_must_be_a_table(tmp_path: Path) -> None:
    _write_pyproject(tmp_path, '[tool]\nmigration-checksum = "yes"\n')

    with pytest.raises(ConfigurationError, match="must be a table"):
        load_config(tmp_path)


def test_config_is_immutable() -> None:
    config = ChecksumConfig()
    with pytest.raises(ValidationError):
        config.includes = ("*.sql",)  # type: ignore[misc]


def test_absolute_destination_is_kept(tmp_path: Path) -> None:
    config = ChecksumConfig(destination=tmp_path / "elsewhere")
    assert config.output_target(Path("/unused")).destination == tmp_path / "elsewhere"
