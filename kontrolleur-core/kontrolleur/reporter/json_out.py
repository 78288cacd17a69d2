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

"""Canonical JSON output for inspection reports.

Produces deterministic JSON output:
- Sorted keys
- 2-space indentation
- LF line endings
- Trailing newline

Bucket lists keep file order; only object keys are sorted.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from kontrolleur.models.report import InspectionReport

logger = logging.getLogger(__name__)


def report_to_dict(report: InspectionReport) -> dict[str, Any]:
    """Dump a report, adding the derived summary counts."""
    data = report.model_dump(mode="json")
    summary = report.summary
    data["summary"]["total"] = summary.total
    data["summary"]["wasi_count"] = summary.wasi_count
    data["summary"]["resource_types"] = [b.value for b in summary.resource_types()]
    return data


def to_canonical_json(data: dict[str, Any] | Any) -> str:
    """Convert data to canonical JSON string.

    Canonical JSON: sorted keys, 2-space indent, ensure LF, trailing newline.
    """
    if isinstance(data, InspectionReport):
        data = report_to_dict(data)
    elif hasattr(data, "model_dump"):
        data = data.model_dump(mode="json")

    result = json.dumps(data, sort_keys=True, indent=2, ensure_ascii=False)
    # Ensure LF line endings
    result = result.replace("\r\n", "\n").replace("\r", "\n")
    # Ensure trailing newline
    if not result.endswith("\n"):
        result += "\n"
    return result


def write_report(report: InspectionReport, output_path: Path) -> None:
    """Write inspection report as canonical JSON to file."""
    content = to_canonical_json(report)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content, encoding="utf-8", newline="\n")
    logger.info("Wrote report to %s", output_path)
