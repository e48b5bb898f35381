# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and loaders."""

from __future__ import annotations

from .loader import PYPROJECT_SECTION_KEY, PyProjectConfigSource, load_config
from .models import DEFAULT_DESTINATION_DIR, DEFAULT_ENUM_CLASS_NAME, ChecksumConfig

__all__ = [
    "ChecksumConfig",
    "DEFAULT_DESTINATION_DIR",
    "DEFAULT_ENUM_CLASS_NAME",
    "PYPROJECT_SECTION_KEY",
    "PyProjectConfigSource",
    "load_config",
]
