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

"""SHA-256 digests identifying the module a report was produced from.

Module bytes are hashed as-is. Binary content is never line-ending
normalized.
"""

from __future__ import annotations

import hashlib


def hash_content(content: bytes) -> str:
    """SHA-256 hash of raw content. Returns 'sha256:hex...'."""
    digest = hashlib.sha256(content).hexdigest()
    return f"sha256:{digest}"
