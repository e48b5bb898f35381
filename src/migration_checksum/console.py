# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared Rich consoles for progress and report output."""

from __future__ import annotations

import sys
from functools import lru_cache

from rich.console import Console


def detect_tty() -> bool:
    """Return ``True`` when stdout is attached to a terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


def get_console(*, color: bool | None = None, emoji: bool = True) -> Console:
    """Return the console matching the requested output style.

    Colour is only ever enabled on a terminal, so redirected output and test
    runners always receive plain text.

    Args:
        color: Explicit colour preference. ``None`` follows TTY detection.
        emoji: Whether Rich may substitute ``:name:`` emoji codes.

    Returns:
        Console: A console shared by every caller asking for the same style.
    """

    tty = detect_tty()
    wants_color = tty if color is None else color
    return _console_for(wants_color and tty, emoji, tty)


@lru_cache(maxsize=8)
def _console_for(color: bool, emoji: bool, tty: bool) -> Console:
    return Console(
        color_system="auto" if color else None,
        force_terminal=tty,
        no_color=not color,
        emoji=emoji,
        soft_wrap=True,
        highlight=False,
    )


__all__ = ["detect_tty", "get_console"]
