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

"""Pydantic models for the capability taxonomy and the per-module summary."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class CapabilityBucket(str, Enum):
    """Capability buckets. Every import lands in exactly one."""

    FILE_SYSTEM = "file_system"
    ENVIRONMENT = "environment"
    PROCESS = "process"
    NETWORK = "network"
    UNKNOWN_WASI_SYMBOL = "unknown_wasi_symbol"
    UNKNOWN_NAMESPACE = "unknown_namespace"


# Buckets a taxonomy table may assign a symbol to. The two unknown
# buckets are fallbacks only.
WASI_CAPABILITY_BUCKETS: tuple[CapabilityBucket, ...] = (
    CapabilityBucket.FILE_SYSTEM,
    CapabilityBucket.ENVIRONMENT,
    CapabilityBucket.PROCESS,
    CapabilityBucket.NETWORK,
)

BUCKET_DISPLAY: dict[str, str] = {
    "file_system": "file system",
    "environment": "environment",
    "process": "process",
    "network": "network",
    "unknown_wasi_symbol": "unknown wasi",
    "unknown_namespace": "unknown import",
}


class CapabilityTaxonomy(BaseModel):
    """The symbol -> bucket table for one system-interface namespace."""

    model_config = ConfigDict(frozen=True)

    namespace: str = "wasi_unstable"
    symbols: dict[str, CapabilityBucket] = Field(default_factory=dict)
    source: str = "bundled"  # file the table was loaded from

    def lookup(self, symbol: str) -> CapabilityBucket:
        """Bucket for a symbol under this namespace, UNKNOWN_WASI_SYMBOL if unlisted."""
        return self.symbols.get(symbol, CapabilityBucket.UNKNOWN_WASI_SYMBOL)

    def members(self, bucket: CapabilityBucket) -> list[str]:
        """Symbols assigned to a bucket, in table order."""
        return [name for name, b in self.symbols.items() if b == bucket]


class CapabilitySummary(BaseModel):
    """Imports grouped by capability bucket.

    Each bucket keeps file order. WASI entries are stored as the bare
    symbol; unknown-namespace entries as "namespace.symbol" so the
    namespace is not lost in the report.
    """

    model_config = ConfigDict(frozen=True)

    file_system: tuple[str, ...] = ()
    environment: tuple[str, ...] = ()
    process: tuple[str, ...] = ()
    network: tuple[str, ...] = ()
    unknown_wasi_symbol: tuple[str, ...] = ()
    unknown_namespace: tuple[str, ...] = ()
    foreign_namespaces: tuple[str, ...] = ()  # distinct, first-seen order

    def bucket(self, bucket: CapabilityBucket) -> tuple[str, ...]:
        return getattr(self, bucket.value)

    @property
    def total(self) -> int:
        """Number of imports across all buckets."""
        return sum(len(self.bucket(b)) for b in CapabilityBucket)

    @property
    def wasi_count(self) -> int:
        """Number of imports under the system-interface namespace, known or not."""
        return self.total - len(self.unknown_namespace)

    def resource_types(self) -> list[CapabilityBucket]:
        """Non-empty capability buckets, in taxonomy order."""
        return [b for b in WASI_CAPABILITY_BUCKETS if self.bucket(b)]

