# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Render checksum tables into Java enum source text."""

from __future__ import annotations

from collections.abc import Sequence
from importlib import resources
from string import Template
from typing import Final, Protocol, runtime_checkable

from .models import ChecksumEntry

TEMPLATE_PACKAGE: Final[str] = "migration_checksum.templates"
DEFAULT_TEMPLATE: Final[str] = "java_migration_checksum_enum.java.tmpl"
_INDENT: Final[str] = "    "


@runtime_checkable
class ChecksumRenderer(Protocol):
    """Protocol implemented by components turning checksum entries into text."""

    def render(self, package: str, class_name: str, entries: Sequence[ChecksumEntry]) -> str:
        """Return the artifact text for ``entries``."""
        ...


class TemplateRenderer:
    """Render checksum entries through a packaged ``string.Template``.

    The template text is read on first use and kept on the instance, so a
    renderer can be reused across runs without re-reading the resource.
    """

    def __init__(self, template_name: str = DEFAULT_TEMPLATE, *, template_text: str | None = None) -> None:
        """Create a renderer for the named packaged template.

        Args:
            template_name: Resource name inside :data:`TEMPLATE_PACKAGE`.
            template_text: Optional template source overriding the packaged resource.
        """

        self.template_name = template_name
        self._template: Template | None = Template(template_text) if template_text is not None else None

    @property
    def template(self) -> Template:
        """Return the loaded template, reading the resource when necessary."""

        if self._template is None:
            source = resources.files(TEMPLATE_PACKAGE).joinpath(self.template_name).read_text(encoding="utf-8")
            self._template = Template(source)
        return self._template

    def render(self, package: str, class_name: str, entries: Sequence[ChecksumEntry]) -> str:
        """Return Java source declaring an enum constant per checksum entry.

        Args:
            package: Package of the generated enum.
            class_name: Simple name of the generated enum.
            entries: Checksum entries in emission order.

        Returns:
            str: Rendered artifact text.

        Raises:
            KeyError: If the template references an unknown placeholder.
        """

        return self.template.substitute(
            package=package,
            class_name=class_name,
            constants=format_constants(entries),
        )


def format_constants(entries: Sequence[ChecksumEntry]) -> str:
    """Return the enum constant block for ``entries``."""

    if not entries:
        return f"{_INDENT};"
    lines = [f"{_INDENT}{entry.identifier}({entry.checksum})" for entry in entries]
    return ",\n".join(lines) + ";"


__all__ = ["ChecksumRenderer", "DEFAULT_TEMPLATE", "TemplateRenderer", "format_constants"]
