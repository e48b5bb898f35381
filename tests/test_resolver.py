# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for deterministic migration discovery."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from migration_checksum.errors import NoInputError, SourceReadError
from migration_checksum.models import FilterSpec
from migration_checksum.resolver import MigrationSetResolver, relative_paths, resolve_sources


def _touch(path: Path, content: str = "select 1;\n") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def test_include_and_exclude_filters(tmp_path: Path) -> None:
    for name in ("A.txt", "B.sql", "A.sql"):
        _touch(tmp_path / name)

    included = resolve_sources([tmp_path], FilterSpec(includes=("*.sql",)))
    assert relative_paths(included) == ["A.sql", "B.sql"]

    narrowed = resolve_sources([tmp_path], FilterSpec(includes=("*.sql",), excludes=("A.sql",)))
    assert relative_paths(narrowed) == ["B.sql"]


def test_files_are_ordered_by_path_segments(tmp_path: Path) -> None:
    for relative in ("b/V3.sql", "a-b.sql", "a/z.sql", "V2.sql", "V10.sql", "a/y/x.sql"):
        _touch(tmp_path / relative)

    files = resolve_sources([tmp_path], FilterSpec())

    assert relative_paths(files) == ["V10.sql", "V2.sql", "a/y/x.sql", "a/z.sql", "a-b.sql", "b/V3.sql"]


def test_resolution_is_repeatable(tmp_path: Path) -> None:
    for index in range(20):
        _touch(tmp_path / f"dir{index % 3}" / f"V{index}__m.sql")

    first = resolve_sources([tmp_path], FilterSpec())
    second = resolve_sources([tmp_path], FilterSpec())

    assert [source.path for source in first] == [source.path for source in second]


def test_candidates_keep_order_and_duplicates_are_dropped(tmp_path: Path) -> None:
    late = _touch(tmp_path / "late" / "V2__late.sql")
    early = _touch(tmp_path / "early" / "V1__early.sql")

    files = resolve_sources([tmp_path / "late", tmp_path / "early", late], FilterSpec())

    assert [source.path for source in files] == [late, early]


def test_file_candidates_match_on_file_name(tmp_path: Path) -> None:
    sql = _touch(tmp_path / "nested" / "V1__init.sql")
    txt = _touch(tmp_path / "nested" / "notes.txt")

    files = resolve_sources([sql, txt], FilterSpec(includes=("*.sql",)))

    assert len(files) == 1
    assert files[0].relative_path == "V1__init.sql"
    assert files[0].root == sql.parent


def test_nested_include_pattern(tmp_path: Path) -> None:
    _touch(tmp_path / "db" / "migration" / "V1__init.java")
    _touch(tmp_path / "db" / "migration" / "Helper.java")
    _touch(tmp_path / "db" / "V0__root.java")

    files = resolve_sources([tmp_path], FilterSpec(includes=("**/migration/V*.java",)))

    assert relative_paths(files) == ["db/migration/V1__init.java"]


def test_default_excludes_skip_vcs_metadata(tmp_path: Path) -> None:
    _touch(tmp_path / "V1__init.sql")
    _touch(tmp_path / ".git" / "HEAD")
    _touch(tmp_path / "V1__init.sql~")

    assert relative_paths(resolve_sources([tmp_path], FilterSpec())) == ["V1__init.sql"]
    assert relative_paths(resolve_sources([tmp_path], FilterSpec(use_default_excludes=False))) == [
        ".git/HEAD",
        "V1__init.sql",
        "V1__init.sql~",
    ]


def test_missing_candidates_are_skipped(tmp_path: Path) -> None:
    _touch(tmp_path / "present" / "V1__init.sql")

    files = MigrationSetResolver(use_emoji=False).resolve(
        [tmp_path / "absent", tmp_path / "present"],
        FilterSpec(),
    )

    assert relative_paths(files) == ["V1__init.sql"]


def test_empty_resolution_raises_no_input(tmp_path: Path) -> None:
    _touch(tmp_path / "notes.txt")

    with pytest.raises(NoInputError):
        resolve_sources([tmp_path], FilterSpec(includes=("*.sql",)))


def test_no_candidates_raises_no_input() -> None:
    with pytest.raises(NoInputError):
        MigrationSetResolver()([], FilterSpec())


def test_excluded_directory_drops_its_whole_subtree(tmp_path: Path) -> None:
    _touch(tmp_path / "V1__new.sql")
    _touch(tmp_path / "archive" / "V0__old.sql")
    _touch(tmp_path / "archive" / "nested" / "V0_1__older.sql")

    files = resolve_sources([tmp_path], FilterSpec(excludes=("archive",)))

    assert relative_paths(files) == ["V1__new.sql"]


def test_unlistable_subdirectory_aborts_resolution(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _touch(tmp_path / "V1__init.sql")
    locked = tmp_path / "locked"
    _touch(locked / "V2__hidden.sql")
    real_scandir = os.scandir

    def scandir(path: str | os.PathLike[str] = ".") -> object:
        if Path(path) == locked:
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", scandir)

    with pytest.raises(SourceReadError) as excinfo:
        resolve_sources([tmp_path], FilterSpec())

    assert excinfo.value.path == locked
    assert "Permission denied" in str(excinfo.value)


def test_unstatable_candidate_raises_source_read_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    candidate = tmp_path / "restricted" / "V1__init.sql"

    def is_file(self: Path) -> bool:
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(Path, "is_file", is_file)

    with pytest.raises(SourceReadError) as excinfo:
        MigrationSetResolver(use_emoji=False).resolve([candidate], FilterSpec())

    assert excinfo.value.path == candidate
