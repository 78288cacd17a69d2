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

"""Capability taxonomy loading.

The symbol -> bucket table lives in rules/wasi_capabilities.yaml, not in
code. A user-supplied file with the same shape can replace it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from kontrolleur.models.capabilities import (
    WASI_CAPABILITY_BUCKETS,
    CapabilityBucket,
    CapabilityTaxonomy,
)

logger = logging.getLogger(__name__)

DEFAULT_TAXONOMY_PATH = Path(__file__).parent.parent / "rules" / "wasi_capabilities.yaml"


class TaxonomyError(ValueError):
    """A taxonomy file that cannot be turned into a lookup table."""


def build_taxonomy(data: dict[str, Any], source: str = "bundled") -> CapabilityTaxonomy:
    """Validate parsed YAML and flatten it into a symbol -> bucket table.

    Raises:
        TaxonomyError: Wrong value types, an unknown bucket name, or a
            symbol listed under more than one bucket.
    """
    if not isinstance(data, dict):
        raise TaxonomyError(f"{source}: expected a mapping at top level")

    namespace = data.get("namespace", "wasi_unstable")
    if not isinstance(namespace, str):
        raise TaxonomyError(f"{source}: 'namespace' must be a string")

    buckets = data.get("buckets") or {}
    if not isinstance(buckets, dict):
        raise TaxonomyError(f"{source}: 'buckets' must be a mapping")

    allowed = {b.value: b for b in WASI_CAPABILITY_BUCKETS}
    symbols: dict[str, CapabilityBucket] = {}

    for bucket_name, members in buckets.items():
        bucket = allowed.get(bucket_name)
        if bucket is None:
            raise TaxonomyError(
                f"{source}: unknown bucket '{bucket_name}' "
                f"(expected one of {', '.join(sorted(allowed))})"
            )
        if not isinstance(members, list):
            raise TaxonomyError(f"{source}: bucket '{bucket_name}' must be a list")

        for symbol in members:
            symbol = str(symbol)
            previous = symbols.get(symbol)
            if previous is not None and previous != bucket:
                raise TaxonomyError(
                    f"{source}: '{symbol}' listed under both "
                    f"'{previous.value}' and '{bucket_name}'"
                )
            symbols[symbol] = bucket

    return CapabilityTaxonomy(
        namespace=namespace,
        symbols=symbols,
        source=source,
    )


def _load_taxonomy_file(path: Path, source: str) -> CapabilityTaxonomy:
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise TaxonomyError(f"{source}: invalid YAML ({exc})") from exc

    taxonomy = build_taxonomy(data or {}, source=source)
    logger.debug(
        "Loaded %d symbols for namespace %s from %s",
        len(taxonomy.symbols),
        taxonomy.namespace,
        source,
    )
    return taxonomy


def _load_default_taxonomy() -> CapabilityTaxonomy:
    """Load the bundled table. A missing file degrades to an empty table."""
    try:
        return _load_taxonomy_file(DEFAULT_TAXONOMY_PATH, "bundled")
    except FileNotFoundError:
        logger.warning("Capability taxonomy not found at %s", DEFAULT_TAXONOMY_PATH)
        return CapabilityTaxonomy(source="bundled")


# Module-level cache
_default_taxonomy: CapabilityTaxonomy | None = None


def get_default_taxonomy() -> CapabilityTaxonomy:
    """Get the cached bundled taxonomy."""
    global _default_taxonomy
    if _default_taxonomy is None:
        _default_taxonomy = _load_default_taxonomy()
    return _default_taxonomy


def load_taxonomy(path: Path | str | None = None) -> CapabilityTaxonomy:
    """Return the taxonomy at `path`, or the bundled one when None.

    Raises:
        FileNotFoundError: `path` was given and does not exist.
        TaxonomyError: The file is not a valid taxonomy.
    """
    if path is None:
        return get_default_taxonomy()
    path = Path(path)
    return _load_taxonomy_file(path, str(path))
