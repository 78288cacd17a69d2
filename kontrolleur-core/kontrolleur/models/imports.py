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

"""Pydantic models for decoded import table entries."""

from __future__ import annotations

from enum import IntEnum

from pydantic import BaseModel, ConfigDict


class ImportKind(IntEnum):
    """Import descriptor tags as they appear on the wire."""

    FUNCTION = 0
    TABLE = 1
    MEMORY = 2
    GLOBAL = 3


class ImportRecord(BaseModel):
    """One entry of a module's import section, in file order.

    namespace and symbol hold the exact decoded UTF-8 text; nothing is
    trimmed or normalized. The kind-specific payload (type index, limits,
    value type) is consumed by the decoder but not kept.
    """

    model_config = ConfigDict(frozen=True)

    namespace: str  # e.g. "wasi_unstable", "env"
    symbol: str  # e.g. "fd_write"
    kind: ImportKind
    offset: int = 0  # byte offset of the entry within the module

    @property
    def qualified_name(self) -> str:
        """Return 'namespace.symbol', e.g. 'env.custom_log'."""
        return f"{self.namespace}.{self.symbol}"
