# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Progress messages printed while resolving and generating checksums."""

from __future__ import annotations

from typing import Final, Literal

from rich.rule import Rule
from rich.text import Text

from .console import get_console

Level = Literal["info", "ok", "warn", "fail"]

# Level -> (emoji prefix, colour style)
_LEVELS: Final[dict[Level, tuple[str, str]]] = {
    "info": ("ℹ️ ", "cyan"),
    "ok": ("✅ ", "green"),
    "warn": ("⚠️ ", "yellow"),
    "fail": ("❌ ", "red"),
}


def emoji(symbol: str, enable: bool) -> str:
    """Return ``symbol`` when emoji output is enabled, otherwise blank."""

    return symbol if enable else ""


def log(level: Level, msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Print ``msg`` with the prefix and colour assigned to ``level``.

    Args:
        level: Message severity.
        msg: Message text.
        use_emoji: Whether to prefix the message with the level's emoji.
        use_color: Optional explicit colour flag overriding TTY detection.
    """

    symbol, style = _LEVELS[level]
    console = get_console(color=use_color, emoji=use_emoji)
    text = Text(f"{emoji(symbol, use_emoji)}{msg}")
    if console.color_system is not None:
        text.stylize(style)
    console.print(text)


def section(title: str, *, use_color: bool | None = None) -> None:
    """Print a header separating one block of run output from the next.

    A coloured terminal gets a horizontal rule; plain output gets a
    ``--- title ---`` line that stays readable in logs.
    """

    console = get_console(color=use_color)
    console.print()
    if console.color_system is not None:
        console.print(Rule(title, style="cyan"))
    else:
        console.print(f"--- {title} ---", markup=False)


def info(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    log("info", msg, use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    log("ok", msg, use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    log("warn", msg, use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    log("fail", msg, use_emoji=use_emoji, use_color=use_color)


__all__ = ["Level", "emoji", "fail", "info", "log", "ok", "section", "warn"]
