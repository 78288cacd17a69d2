# Kontrolleur — WebAssembly Import Capability Inspector
# Copyright (C) 2026 Kontrolleur Project Contributors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.

"""WebAssembly import table decoder.

Walks the section stream by its generic (id, byte-length) framing and
only interprets the import section. Every other section, custom ones
included, is skipped by length without looking at its contents.

Layout handled:
  header        magic "\\0asm" + u32 LE version 1
  section       id:u8  size:varuint32  body[size]
  import body   count:varuint32  entry*
  entry         module:name  field:name  kind:u8  payload
  payload       0 function  type_index:varuint32
                1 table     elem_type:u8 limits
                2 memory    limits
                3 global    value_type:u8 mutability:u8
  limits        flags:u8 min:varuint32 [max:varuint32 if flags & 1]
"""

from __future__ import annotations

import logging
from enum import IntEnum

from kontrolleur.models.imports import ImportKind, ImportRecord
from kontrolleur.scanner.byte_cursor import ByteCursor
from kontrolleur.scanner.errors import (
    BadHeader,
    SectionLengthMismatch,
    TruncatedSection,
    UnexpectedEndOfInput,
    UnknownImportKind,
)

logger = logging.getLogger(__name__)

WASM_MAGIC = b"\x00asm"
WASM_VERSION = 1
HEADER_SIZE = 8

LIMITS_HAS_MAX = 0x01


class WasmSectionId(IntEnum):
    """WebAssembly section IDs."""

    CUSTOM = 0
    TYPE = 1
    IMPORT = 2
    FUNCTION = 3
    TABLE = 4
    MEMORY = 5
    GLOBAL = 6
    EXPORT = 7
    START = 8
    ELEMENT = 9
    CODE = 10
    DATA = 11
    DATA_COUNT = 12


def _read_header(cursor: ByteCursor) -> None:
    if cursor.remaining < HEADER_SIZE:
        raise BadHeader(f"expected {HEADER_SIZE}-byte header, got {cursor.remaining}", 0)

    magic = cursor.read_bytes(4)
    if magic != WASM_MAGIC:
        raise BadHeader(f"invalid magic {magic.hex()}", 0)

    version = cursor.read_uint32_le()
    if version != WASM_VERSION:
        raise BadHeader(f"unsupported version {version}", 4)


def _skip_limits(cursor: ByteCursor) -> None:
    flags = cursor.read_byte()
    cursor.read_varuint32()  # minimum
    if flags & LIMITS_HAS_MAX:
        cursor.read_varuint32()  # maximum


def _skip_import_payload(cursor: ByteCursor, kind: ImportKind) -> None:
    """Advance past a descriptor payload without keeping it."""
    if kind == ImportKind.FUNCTION:
        cursor.read_varuint32()  # type index
    elif kind == ImportKind.TABLE:
        cursor.read_byte()  # element type
        _skip_limits(cursor)
    elif kind == ImportKind.MEMORY:
        _skip_limits(cursor)
    elif kind == ImportKind.GLOBAL:
        cursor.read_byte()  # value type
        cursor.read_byte()  # mutability


def _read_import_entry(cursor: ByteCursor) -> ImportRecord:
    offset = cursor.position
    namespace = cursor.read_name()
    symbol = cursor.read_name()

    tag_offset = cursor.position
    tag = cursor.read_byte()
    try:
        kind = ImportKind(tag)
    except ValueError:
        raise UnknownImportKind(
            f"import {namespace}.{symbol} has kind tag 0x{tag:02x}", tag_offset
        ) from None

    _skip_import_payload(cursor, kind)
    return ImportRecord(namespace=namespace, symbol=symbol, kind=kind, offset=offset)


def _read_import_section(body: ByteCursor, buffer_end: int) -> list[ImportRecord]:
    """Decode an import section body that must be consumed exactly.

    `body` is bounded to the declared section size, so entries never read
    into the next section. Running out inside a section that is followed
    by more data is a length mismatch; running out at the end of the
    buffer is a plain end of input.
    """
    records: list[ImportRecord] = []
    try:
        count = body.read_varuint32()
        logger.debug("Import section declares %d entries", count)
        # No preallocation: a bogus count fails on the first short read.
        for _ in range(count):
            records.append(_read_import_entry(body))
    except UnexpectedEndOfInput as exc:
        if body.end < buffer_end:
            raise SectionLengthMismatch(
                f"import entries run past the section end at {body.end}", exc.offset
            ) from exc
        raise

    if not body.at_end():
        raise SectionLengthMismatch(
            f"import section should end at {body.end}, decoding stopped at {body.position}",
            body.position,
        )
    return records


def decode_imports(data: bytes) -> list[ImportRecord]:
    """Decode the import records of a WebAssembly binary.

    Args:
        data: Raw module bytes. Treated as untrusted.

    Returns:
        Import records in file order. A module without an import
        section yields an empty list.

    Raises:
        DecodeError: Any malformed framing or import entry. No partial
            result is returned.
    """
    cursor = ByteCursor(data)
    _read_header(cursor)

    records: list[ImportRecord] = []
    while not cursor.at_end():
        section_offset = cursor.position
        section_id = cursor.read_byte()
        size = cursor.read_varuint32()

        if size > cursor.remaining:
            raise TruncatedSection(
                f"section {section_id} declares {size} bytes, {cursor.remaining} left",
                section_offset,
            )

        if section_id == WasmSectionId.IMPORT:
            records.extend(_read_import_section(cursor.bounded(size), len(cursor)))
        else:
            logger.debug(
                "Skipping section %d (%d bytes) at offset %d", section_id, size, section_offset
            )
            cursor.skip(size)

    return records
