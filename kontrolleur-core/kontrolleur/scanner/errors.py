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

"""Decode failures.

Malformed input is deterministic, so none of these are retried. Any of
them aborts the whole inspection: no partial summary is ever built.
"""

from __future__ import annotations


class DecodeError(ValueError):
    """Base class for every way a module can fail to decode."""

    kind = "DecodeError"

    def __init__(self, message: str, offset: int = 0) -> None:
        super().__init__(message)
        self.message = message
        self.offset = offset

    def __str__(self) -> str:
        return f"{self.kind} at offset {self.offset}: {self.message}"


class BadHeader(DecodeError):
    """Magic or version mismatch, or fewer than 8 bytes."""

    kind = "BadHeader"


class UnexpectedEndOfInput(DecodeError):
    """A read needed more bytes than remain in the buffer."""

    kind = "UnexpectedEndOfInput"


class TruncatedSection(DecodeError):
    """A section declares more bytes than remain in the buffer."""

    kind = "TruncatedSection"


class SectionLengthMismatch(DecodeError):
    """The import section body did not end exactly on its declared boundary."""

    kind = "SectionLengthMismatch"


class InvalidText(DecodeError):
    """A name field is not valid UTF-8."""

    kind = "InvalidText"


class UnknownImportKind(DecodeError):
    """An import descriptor tag outside 0..3."""

    kind = "UnknownImportKind"


class VarIntTooLong(DecodeError):
    """A LEB128 integer ran past 5 bytes or does not fit in a u32."""

    kind = "VarIntTooLong"
