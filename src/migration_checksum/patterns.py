# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Ant-style path patterns used to filter migration source trees."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from functools import lru_cache
from typing import Final

_DEFAULT_CACHE_SIZE: Final[int] = 256
_ANY_DIRECTORIES: Final[str] = "**"

# Matches the VCS and editor leftovers build tools skip in file trees by default.
DEFAULT_EXCLUDES: Final[tuple[str, ...]] = (
    "**/%*%",
    "**/.#*",
    "**/._*",
    "**/#*#",
    "**/*~",
    "**/.DS_Store",
    "**/CVS",
    "**/CVS/**",
    "**/.cvsignore",
    "**/SCCS",
    "**/SCCS/**",
    "**/.bzr",
    "**/.bzr/**",
    "**/.bzrignore",
    "**/vssver.scc",
    "**/.svn",
    "**/.svn/**",
    "**/.git",
    "**/.git/**",
    "**/.gitattributes",
    "**/.gitignore",
    "**/.gitmodules",
    "**/.hg",
    "**/.hg/**",
    "**/.hgignore",
    "**/.hgsub",
    "**/.hgsubstate",
    "**/.hgtags",
)


@dataclass(frozen=True, slots=True)
class AntPattern:
    """Compiled Ant-style pattern matched against ``/`` separated relative paths.

    ``*`` and ``?`` match within a single path segment while a ``**`` segment
    matches zero or more whole segments. A trailing ``/`` is shorthand for a
    trailing ``**``.
    """

    source: str
    steps: tuple[re.Pattern[str] | None, ...]

    def matches(self, relative_path: str) -> bool:
        """Return whether ``relative_path`` matches the whole pattern.

        Args:
            relative_path: POSIX-style path relative to the tree root.

        Returns:
            bool: ``True`` when every segment is consumed by the pattern.
        """

        return _match_steps(self.steps, split_path(relative_path))

    def matches_tree(self, relative_directory: str) -> bool:
        """Return whether every path below ``relative_directory`` matches.

        Only patterns ending in ``**`` can match a whole tree.

        Args:
            relative_directory: POSIX-style directory path relative to the tree root.

        Returns:
            bool: ``True`` when the directory and all its contents match.
        """

        if not self.steps or self.steps[-1] is not None:
            return False
        return _match_steps(self.steps[:-1], split_path(relative_directory))


def split_path(path: str) -> tuple[str, ...]:
    """Return the non-empty segments of a ``/`` or ``\\`` separated path."""

    return tuple(part for part in path.replace("\\", "/").split("/") if part)


@lru_cache(maxsize=_DEFAULT_CACHE_SIZE)
def compile_pattern(pattern: str) -> AntPattern:
    """Compile ``pattern`` into an :class:`AntPattern`.

    Args:
        pattern: Ant-style pattern such as ``**/V*.sql`` or ``archive/``.

    Returns:
        AntPattern: Compiled pattern ready for matching.
    """

    normalised = pattern.strip().replace("\\", "/")
    if normalised.endswith("/"):
        normalised += _ANY_DIRECTORIES
    steps: list[re.Pattern[str] | None] = []
    for segment in split_path(normalised):
        if segment == _ANY_DIRECTORIES:
            if steps and steps[-1] is None:
                continue
            steps.append(None)
        else:
            steps.append(_compile_segment(segment))
    return AntPattern(source=pattern, steps=tuple(steps))


def compile_patterns(patterns: Iterable[str]) -> tuple[AntPattern, ...]:
    """Compile every non-blank entry of ``patterns`` preserving order."""

    return tuple(compile_pattern(pattern) for pattern in patterns if pattern.strip())


def matches_any(patterns: Sequence[AntPattern], relative_path: str) -> bool:
    """Return whether any of ``patterns`` matches ``relative_path``."""

    return any(pattern.matches(relative_path) for pattern in patterns)


def _compile_segment(segment: str) -> re.Pattern[str]:
    """Translate a single pattern segment into an anchored regular expression."""

    translated: list[str] = []
    for char in segment:
        if char == "*":
            translated.append("[^/]*")
        elif char == "?":
            translated.append("[^/]")
        else:
            translated.append(re.escape(char))
    return re.compile("".join(translated) + r"\Z", re.DOTALL)


def _match_steps(steps: Sequence[re.Pattern[str] | None], parts: Sequence[str]) -> bool:
    """Return whether ``parts`` is fully consumed by ``steps``."""

    @lru_cache(maxsize=None)
    def _match_from(step_index: int, part_index: int) -> bool:
        if step_index == len(steps):
            return part_index == len(parts)
        step = steps[step_index]
        if step is None:
            return any(_match_from(step_index + 1, index) for index in range(part_index, len(parts) + 1))
        if part_index == len(parts):
            return False
        return step.match(parts[part_index]) is not None and _match_from(step_index + 1, part_index + 1)

    return _match_from(0, 0)


__all__ = [
    "AntPattern",
    "DEFAULT_EXCLUDES",
    "compile_pattern",
    "compile_patterns",
    "matches_any",
    "split_path",
]
