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

"""Bounds-checked reader over an untrusted byte buffer.

Every primitive checks the remaining length before it moves the offset,
so a malformed module fails with a DecodeError instead of reading past
the end or allocating on the strength of a bogus length field.
"""

from __future__ import annotations

from kontrolleur.scanner.errors import (
    InvalidText,
    UnexpectedEndOfInput,
    VarIntTooLong,
)

# ceil(32 / 7): every u32 in the binary format fits in 5 LEB128 bytes
MAX_VARUINT32_BYTES = 5


class ByteCursor:
    """Read-only view of a buffer plus a forward-moving offset.

    `end` caps how far reads may go. Offsets stay relative to the start
    of the whole buffer, so errors raised from a bounded cursor still
    point into the file.
    """

    def __init__(self, data: bytes, position: int = 0, end: int | None = None) -> None:
        self._data = data if isinstance(data, memoryview) else memoryview(bytes(data))
        self.position = position
        self.end = len(self._data) if end is None else end

    def __len__(self) -> int:
        return self.end

    @property
    def remaining(self) -> int:
        return self.end - self.position

    def at_end(self) -> bool:
        return self.position >= self.end

    def _require(self, count: int) -> None:
        if count < 0 or count > self.remaining:
            raise UnexpectedEndOfInput(
                f"needed {count} byte(s), {self.remaining} left", self.position
            )

    def bounded(self, size: int) -> ByteCursor:
        """Split off the next `size` bytes as their own cursor and step past them."""
        self._require(size)
        sub = ByteCursor(self._data, self.position, self.position + size)
        self.position += size
        return sub

    def read_byte(self) -> int:
        self._require(1)
        value = self._data[self.position]
        self.position += 1
        return value

    def read_bytes(self, count: int) -> bytes:
        self._require(count)
        start = self.position
        self.position += count
        return self._data[start:self.position].tobytes()

    def read_uint32_le(self) -> int:
        return int.from_bytes(self.read_bytes(4), "little")

    def skip(self, count: int) -> None:
        self._require(count)
        self.position += count

    def read_varuint32(self) -> int:
        """Read unsigned LEB128. Non-minimal encodings are accepted."""
        start = self.position
        result = 0
        shift = 0
        for _ in range(MAX_VARUINT32_BYTES):
            byte = self.read_byte()
            # the 5th byte only has room for the top 4 bits of a u32
            if shift == 28 and byte & 0x70:
                raise VarIntTooLong("LEB128 value does not fit in 32 bits", start)
            result |= (byte & 0x7F) << shift
            if (byte & 0x80) == 0:
                return result
            shift += 7
        raise VarIntTooLong(
            f"LEB128 integer longer than {MAX_VARUINT32_BYTES} bytes", start
        )

    def read_name(self) -> str:
        """Read a length-prefixed UTF-8 string."""
        length = self.read_varuint32()
        start = self.position
        raw = self.read_bytes(length)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidText(f"name is not valid UTF-8 ({exc.reason})", start) from exc
