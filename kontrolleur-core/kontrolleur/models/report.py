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

"""Pydantic model for the inspection report (kontrolleur_report.json)."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field

from kontrolleur import __version__
from kontrolleur.models.capabilities import CapabilitySummary


class InspectionReport(BaseModel):
    """Everything handed to the reporters for one module."""

    kontrolleur_version: str = __version__
    module_path: str = ""
    module_size: int = 0
    module_hash: str = ""  # "sha256:xxxx..."
    scan_timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    taxonomy_source: str = "bundled"
    summary: CapabilitySummary = Field(default_factory=CapabilitySummary)
    import_count: int = 0
