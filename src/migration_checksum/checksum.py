# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Flyway-compatible checksum calculation for migration source files.

The algorithm mirrors the checksum Flyway records for SQL migrations: the
leading byte-order mark is dropped, the text is read line by line, line
terminators are removed and the UTF-8 bytes of every line are fed into a
single running CRC-32. The unsigned CRC is finally reinterpreted as a signed
32-bit integer.
"""

from __future__ import annotations

import re
import zlib
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Final

DEFAULT_ENCODING: Final[str] = "utf-8"
_LINE_BREAK: Final[re.Pattern[str]] = re.compile(r"\r\n|\r|\n")
_TRAILING_BREAKS: Final[str] = "\r\n"
_SIGNED_LIMIT: Final[int] = 1 << 31
_UNSIGNED_RANGE: Final[int] = 1 << 32


@dataclass(frozen=True, slots=True)
class ByteOrderMark:
    """Describe a recognised byte-order mark and the encoding it announces."""

    name: str
    signature: bytes
    encoding: str


# UTF-32 signatures come first because the UTF-32-LE mark starts with the UTF-16-LE mark.
SUPPORTED_BOMS: Final[tuple[ByteOrderMark, ...]] = (
    ByteOrderMark("UTF-32BE", b"\x00\x00\xfe\xff", "utf-32-be"),
    ByteOrderMark("UTF-32LE", b"\xff\xfe\x00\x00", "utf-32-le"),
    ByteOrderMark("UTF-8", b"\xef\xbb\xbf", "utf-8"),
    ByteOrderMark("UTF-16BE", b"\xfe\xff", "utf-16-be"),
    ByteOrderMark("UTF-16LE", b"\xff\xfe", "utf-16-le"),
)


def detect_bom(data: bytes) -> ByteOrderMark | None:
    """Return the byte-order mark that prefixes ``data``, if any.

    Args:
        data: Raw file content.

    Returns:
        ByteOrderMark | None: Matching mark, or ``None`` when the content has no BOM.
    """

    for bom in SUPPORTED_BOMS:
        if data.startswith(bom.signature):
            return bom
    return None


def decode_source(data: bytes) -> str:
    """Strip any byte-order mark from ``data`` and decode the remainder.

    Content without a BOM is decoded as UTF-8. Undecodable sequences are
    replaced rather than rejected.

    Args:
        data: Raw file content.

    Returns:
        str: Decoded text without the byte-order mark.
    """

    bom = detect_bom(data)
    if bom is None:
        return data.decode(DEFAULT_ENCODING, errors="replace")
    return data[len(bom.signature) :].decode(bom.encoding, errors="replace")


def iter_lines(text: str) -> Iterator[str]:
    """Yield the lines of ``text`` split on ``\\n``, ``\\r\\n`` and ``\\r``.

    A terminator at the very end of ``text`` does not produce a trailing empty
    line, and empty text yields nothing.

    Args:
        text: Decoded source text.

    Yields:
        str: Each line without its terminator.
    """

    if not text:
        return
    lines = _LINE_BREAK.split(text)
    if lines[-1] == "":
        lines.pop()
    yield from lines


def to_signed_int32(value: int) -> int:
    """Reinterpret an unsigned 32-bit value as a signed 32-bit integer."""

    value &= _UNSIGNED_RANGE - 1
    return value - _UNSIGNED_RANGE if value >= _SIGNED_LIMIT else value


def checksum_text(text: str) -> int:
    """Return the signed CRC-32 checksum of already decoded ``text``."""

    crc = 0
    for line in iter_lines(text):
        crc = zlib.crc32(line.rstrip(_TRAILING_BREAKS).encode(DEFAULT_ENCODING), crc)
    return to_signed_int32(crc)


def checksum_bytes(data: bytes) -> int:
    """Return the signed CRC-32 checksum of raw migration content.

    Args:
        data: Raw file content, optionally prefixed by a byte-order mark.

    Returns:
        int: Checksum in the signed 32-bit range.
    """

    return checksum_text(decode_source(data))


def calculate_checksum(stream: BinaryIO) -> int:
    """Read ``stream`` to completion and return its migration checksum.

    Args:
        stream: Binary stream positioned at the start of the migration source.

    Returns:
        int: Checksum in the signed 32-bit range.

    Raises:
        OSError: If the stream cannot be fully read.
    """

    return checksum_bytes(stream.read())


def checksum_file(path: Path) -> int:
    """Return the migration checksum of the file at ``path``."""

    with path.open("rb") as handle:
        return calculate_checksum(handle)


__all__ = [
    "ByteOrderMark",
    "SUPPORTED_BOMS",
    "calculate_checksum",
    "checksum_bytes",
    "checksum_file",
    "checksum_text",
    "decode_source",
    "detect_bom",
    "iter_lines",
    "to_signed_int32",
]
