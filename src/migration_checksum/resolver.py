# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Deterministic discovery of migration source files."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path

from .errors import NoInputError, SourceReadError
from .logging import warn
from .models import FilterSpec, MigrationSourceFile
from .patterns import split_path


@dataclass(frozen=True, slots=True)
class WalkContext:
    """Parameters required to walk a single source directory."""

    base: Path
    filters: FilterSpec
    follow_symlinks: bool


class MigrationSetResolver:
    """Resolve configured sources into an ordered list of migration files.

    Sources are visited in the order given. Files beneath a directory source
    are ordered by their relative path segments so the result does not depend
    on the order in which the operating system lists directory entries.
    """

    def __init__(self, *, follow_symlinks: bool = False, use_emoji: bool = True) -> None:
        """Create a resolver.

        Args:
            follow_symlinks: When ``True`` descend into symlinked directories.
            use_emoji: Whether warnings about missing sources include emoji.
        """

        self.follow_symlinks = follow_symlinks
        self.use_emoji = use_emoji

    def resolve(self, candidates: Iterable[Path], filters: FilterSpec) -> list[MigrationSourceFile]:
        """Return the filtered, de-duplicated migration files for ``candidates``.

        Args:
            candidates: Files or directories holding migration sources.
            filters: Include and exclude rules applied to every candidate.

        Returns:
            list[MigrationSourceFile]: Files in deterministic traversal order.

        Raises:
            NoInputError: If no file survives filtering.
        """

        results: list[MigrationSourceFile] = []
        seen: set[Path] = set()
        for candidate in candidates:
            for source in self._discover(candidate, filters):
                resolved = source.path.resolve()
                if resolved in seen:
                    continue
                seen.add(resolved)
                results.append(source)
        if not results:
            raise NoInputError()
        return results

    def _discover(self, candidate: Path, filters: FilterSpec) -> Iterator[MigrationSourceFile]:
        """Yield accepted files for a single candidate path."""

        try:
            is_file = candidate.is_file()
            is_dir = not is_file and candidate.is_dir()
        except OSError as exc:
            raise SourceReadError(candidate.absolute(), exc.strerror or str(exc)) from exc
        if is_file:
            absolute = candidate.absolute()
            if filters.accepts(absolute.name):
                yield MigrationSourceFile(path=absolute, relative_path=absolute.name, root=absolute.parent)
            return
        if not is_dir:
            warn(f"Migration source {candidate} does not exist; skipping", use_emoji=self.use_emoji)
            return
        context = WalkContext(base=candidate.absolute(), filters=filters, follow_symlinks=self.follow_symlinks)
        yield from _walk(context)

    def __call__(self, candidates: Iterable[Path], filters: FilterSpec) -> list[MigrationSourceFile]:
        """Delegate to :meth:`resolve` enabling callable semantics."""

        return self.resolve(candidates, filters)


def resolve_sources(
    candidates: Iterable[Path],
    filters: FilterSpec,
    *,
    follow_symlinks: bool = False,
) -> list[MigrationSourceFile]:
    """Resolve ``candidates`` with a default :class:`MigrationSetResolver`."""

    return MigrationSetResolver(follow_symlinks=follow_symlinks).resolve(candidates, filters)


def _walk(context: WalkContext) -> Iterator[MigrationSourceFile]:
    """Yield accepted files beneath ``context.base`` in path-segment order."""

    accepted: list[tuple[tuple[str, ...], MigrationSourceFile]] = []
    walker = os.walk(context.base, onerror=_raise_walk_error, followlinks=context.follow_symlinks)
    for dirpath, dirnames, filenames in walker:
        directory = Path(dirpath)
        relative_dir = directory.relative_to(context.base).as_posix()
        if relative_dir == ".":
            relative_dir = ""
        dirnames[:] = [name for name in dirnames if not context.filters.prunes(_join(relative_dir, name))]
        for filename in filenames:
            relative = _join(relative_dir, filename)
            if not context.filters.accepts(relative):
                continue
            source = MigrationSourceFile(path=directory / filename, relative_path=relative, root=context.base)
            accepted.append((split_path(relative), source))
    accepted.sort(key=_sort_key)
    for _key, source in accepted:
        yield source


def _raise_walk_error(error: OSError) -> None:
    path = Path(error.filename) if error.filename else Path()
    raise SourceReadError(path, error.strerror or str(error)) from error


def _join(relative_dir: str, name: str) -> str:
    return f"{relative_dir}/{name}" if relative_dir else name


def _sort_key(item: tuple[tuple[str, ...], MigrationSourceFile]) -> tuple[str, ...]:
    return item[0]


def relative_paths(sources: Sequence[MigrationSourceFile]) -> list[str]:
    """Return the relative paths of ``sources`` preserving order."""

    return [source.relative_path for source in sources]


__all__ = ["MigrationSetResolver", "WalkContext", "relative_paths", "resolve_sources"]
