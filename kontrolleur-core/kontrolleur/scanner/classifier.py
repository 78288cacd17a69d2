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

"""Capability classification of decoded imports.

Total and exclusive: every record goes to exactly one bucket. Only the
namespace and symbol name matter, never the import kind.
"""

from __future__ import annotations

from typing import Iterable

from kontrolleur.models.capabilities import (
    CapabilityBucket,
    CapabilitySummary,
    CapabilityTaxonomy,
)
from kontrolleur.models.imports import ImportRecord
from kontrolleur.scanner.taxonomy import get_default_taxonomy


def bucket_for(record: ImportRecord, taxonomy: CapabilityTaxonomy) -> CapabilityBucket:
    """Pick the single bucket for one import."""
    if record.namespace != taxonomy.namespace:
        return CapabilityBucket.UNKNOWN_NAMESPACE
    return taxonomy.lookup(record.symbol)


def classify(
    records: Iterable[ImportRecord],
    taxonomy: CapabilityTaxonomy | None = None,
) -> CapabilitySummary:
    """Group import records into capability buckets, keeping file order.

    Args:
        records: Decoded imports in file order.
        taxonomy: Lookup table (default: bundled WASI table).

    Returns:
        An immutable CapabilitySummary with one entry per record.
    """
    if taxonomy is None:
        taxonomy = get_default_taxonomy()

    buckets: dict[CapabilityBucket, list[str]] = {b: [] for b in CapabilityBucket}
    foreign: list[str] = []

    for record in records:
        bucket = bucket_for(record, taxonomy)
        if bucket == CapabilityBucket.UNKNOWN_NAMESPACE:
            buckets[bucket].append(record.qualified_name)
            if record.namespace not in foreign:
                foreign.append(record.namespace)
        else:
            buckets[bucket].append(record.symbol)

    return CapabilitySummary(
        **{b.value: tuple(entries) for b, entries in buckets.items()},
        foreign_namespaces=tuple(foreign),
    )
