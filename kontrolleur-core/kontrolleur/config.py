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

"""User configuration from ~/.kontrolleur/config.yaml.

Recognised keys:
  taxonomy: path to a custom capability taxonomy YAML
  verbose:  default for the console report's --verbose
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".kontrolleur"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

TAXONOMY_ENV_VAR = "KONTROLLEUR_TAXONOMY"


def load_config(config_file: Optional[Path] = None) -> dict:
    """Load config from ~/.kontrolleur/config.yaml.

    Returns an empty dict if no config file exists or the file is invalid.
    """
    path = config_file or CONFIG_FILE
    if not path.exists():
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        logger.debug("Could not load config from %s", path)
        return {}
    if not isinstance(data, dict):
        logger.debug("Ignoring config at %s: not a mapping", path)
        return {}
    return data


def resolve_taxonomy_path(
    cli_value: Optional[str] = None,
    config: Optional[dict] = None,
) -> Optional[Path]:
    """Pick the taxonomy file to use.

    Priority order:
    1. --taxonomy on the command line
    2. KONTROLLEUR_TAXONOMY (env var)
    3. `taxonomy` in the config file
    4. None (bundled table)
    """
    if cli_value:
        return Path(cli_value).expanduser()

    env_value = os.environ.get(TAXONOMY_ENV_VAR)
    if env_value:
        return Path(env_value).expanduser()

    if config is None:
        config = load_config()
    config_value = config.get("taxonomy")
    if config_value:
        return Path(str(config_value)).expanduser()

    return None


def default_verbose(config: Optional[dict] = None) -> bool:
    """Config-file default for verbose output."""
    if config is None:
        config = load_config()
    value = config.get("verbose", False)
    if not isinstance(value, bool):
        logger.warning("Ignoring non-boolean verbose setting: %r", value)
        return False
    return value
