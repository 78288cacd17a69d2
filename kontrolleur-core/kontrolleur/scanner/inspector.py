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

"""Decode -> classify pipeline.

Raw bytes go through the decoder once; the records are classified and
then dropped. Only the summary (wrapped in a report) leaves this module.
"""

from __future__ import annotations

import logging
from pathlib import Path

from kontrolleur.crypto.hasher import hash_content
from kontrolleur.models.capabilities import CapabilitySummary, CapabilityTaxonomy
from kontrolleur.models.report import InspectionReport
from kontrolleur.scanner.classifier import classify
from kontrolleur.scanner.module_decoder import decode_imports
from kontrolleur.scanner.taxonomy import get_default_taxonomy

logger = logging.getLogger(__name__)


def summarize(data: bytes, taxonomy: CapabilityTaxonomy | None = None) -> CapabilitySummary:
    """Decode a module and classify its imports.

    Raises:
        DecodeError: The module is malformed. Nothing is classified.
    """
    return classify(decode_imports(data), taxonomy)


def inspect_bytes(
    data: bytes,
    module_path: str = "",
    taxonomy: CapabilityTaxonomy | None = None,
) -> InspectionReport:
    """Build a full report for in-memory module bytes."""
    if taxonomy is None:
        taxonomy = get_default_taxonomy()

    summary = summarize(data, taxonomy)
    logger.debug("Classified %d imports from %s", summary.total, module_path or "<bytes>")

    return InspectionReport(
        module_path=module_path,
        module_size=len(data),
        module_hash=hash_content(data),
        taxonomy_source=taxonomy.source,
        summary=summary,
        import_count=summary.total,
    )


def inspect_file(path: Path, taxonomy: CapabilityTaxonomy | None = None) -> InspectionReport:
    """Read a module from disk and build its report.

    Raises:
        OSError: The file cannot be read.
        DecodeError: The module is malformed.
    """
    data = path.read_bytes()
    return inspect_bytes(data, module_path=str(path), taxonomy=taxonomy)
