# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def migration_dir(tmp_path: Path) -> Path:
    """Return a directory holding two single-line SQL migrations."""

    directory = tmp_path / "db" / "migration"
    directory.mkdir(parents=True)
    (directory / "V1__init.sql").write_bytes(b"CREATE TABLE t;\n")
    (directory / "V2__seed.sql").write_bytes(b"INSERT INTO t VALUES (1);\n")
    return directory
