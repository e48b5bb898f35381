# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the migration-checksum command line."""

from __future__ import annotations

import zlib
from pathlib import Path

from typer.testing import CliRunner

from migration_checksum.cli.app import app
from migration_checksum.cli.shared import EXIT_CONFIGURATION, EXIT_NO_INPUT, EXIT_SOURCE_READ


def _signed_crc(text: str) -> int:
    value = zlib.crc32(text.encode("utf-8"))
    return value - (1 << 32) if value >= (1 << 31) else value


def test_generate_writes_enum(tmp_path: Path, migration_dir: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["generate", "--root", str(tmp_path), "--source", "db/migration", "--no-emoji"],
    )

    assert result.exit_code == 0, result.stdout
    output = tmp_path / "build" / "generated" / "migration-checksum" / "db" / "migration" / "JavaMigrationChecksum.java"
    text = output.read_text(encoding="utf-8")
    assert f"    V1__init({_signed_crc('CREATE TABLE t;')})," in text
    assert f"    V2__seed({_signed_crc('INSERT INTO t VALUES (1);')});" in text
    assert "Wrote 2 migration checksum(s)" in result.stdout


def test_generate_uses_pyproject_settings(tmp_path: Path, migration_dir: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        '[tool.migration-checksum]\nsources = ["db/migration"]\nincludes = ["V1__*.sql"]\n'
        'enum-class-name = "com.example.Checksums"\ndestination = "gen"\n',
        encoding="utf-8",
    )

    result = CliRunner().invoke(app, ["generate", "--root", str(tmp_path), "--no-emoji"])

    assert result.exit_code == 0, result.stdout
    text = (tmp_path / "gen" / "com" / "example" / "Checksums.java").read_text(encoding="utf-8")
    assert "V1__init(" in text
    assert "V2__seed" not in text


def test_generate_dry_run_prints_table_without_writing(tmp_path: Path, migration_dir: Path) -> None:
    result = CliRunner().invoke(
        app,
        ["generate", "--root", str(tmp_path), "--source", "db/migration", "--dry-run", "--no-emoji"],
    )

    assert result.exit_code == 0, result.stdout
    assert "V1__init" in result.stdout
    assert str(_signed_crc("CREATE TABLE t;")) in result.stdout
    assert "--- Checksums for db.migration.JavaMigrationChecksum ---" in result.stdout
    assert "Dry run complete" in result.stdout
    assert not (tmp_path / "build").exists()


def test_generate_debug_lists_resolved_paths(tmp_path: Path, migration_dir: Path) -> None:
    result = CliRunner().invoke(
        app,
        ["generate", "--root", str(tmp_path), "-s", "db/migration", "--dry-run", "--debug", "--no-emoji"],
    )

    assert result.exit_code == 0, result.stdout
    assert "migration path=V1__init.sql id=V1__init" in result.stdout
    assert "target cls=db.migration.JavaMigrationChecksum" in result.stdout


def test_generate_rejects_class_name_without_package(tmp_path: Path, migration_dir: Path) -> None:
    result = CliRunner().invoke(
        app,
        [
            "generate",
            "--root",
            str(tmp_path),
            "--source",
            "db/migration",
            "--enum-class-name",
            "JavaMigrationChecksum",
            "--no-emoji",
        ],
    )

    assert result.exit_code == EXIT_CONFIGURATION
    assert "JavaMigrationChecksum" in result.stdout
    assert not (tmp_path / "build").exists()


def test_generate_without_matches_reports_no_input(tmp_path: Path, migration_dir: Path) -> None:
    result = CliRunner().invoke(
        app,
        ["generate", "--root", str(tmp_path), "--source", "db/migration", "--exclude", "*.sql", "--no-emoji"],
    )

    assert result.exit_code == EXIT_NO_INPUT
    assert "No migration source files matched" in result.stdout


def test_checksum_command_prints_values(migration_dir: Path) -> None:
    path = migration_dir / "V1__init.sql"

    result = CliRunner().invoke(app, ["checksum", str(path), "--no-emoji"])

    assert result.exit_code == 0
    assert result.stdout.strip() == f"{_signed_crc('CREATE TABLE t;')}\t{path}"


def test_checksum_command_reports_missing_file(tmp_path: Path) -> None:
    result = CliRunner().invoke(app, ["checksum", str(tmp_path / "missing.sql"), "--no-emoji"])

    assert result.exit_code == EXIT_SOURCE_READ
    assert "Could not read source file" in result.stdout


def test_version_option() -> None:
    result = CliRunner().invoke(app, ["--version"])

    assert result.exit_code == 0
    assert result.stdout.startswith("migration-checksum ")


def test_generate_excluded_directory_is_not_emitted(tmp_path: Path, migration_dir: Path) -> None:
    archived = migration_dir / "archive" / "V0__legacy.sql"
    archived.parent.mkdir()
    archived.write_text("DROP TABLE legacy;\n", encoding="utf-8")

    result = CliRunner().invoke(
        app,
        ["generate", "-r", str(tmp_path), "-s", "db/migration", "-x", "archive", "--dry-run", "--no-emoji"],
    )

    assert result.exit_code == 0, result.stdout
    assert "V0__legacy" not in result.stdout
    assert "V2__seed" in result.stdout
