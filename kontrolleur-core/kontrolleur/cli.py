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

"""Kontrolleur CLI: Typer entry point.

Commands:
- kontrolleur inspect <file> : Decode imports and report expected host capabilities
- kontrolleur taxonomy : Show the active capability table
- kontrolleur version : Show the version
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from kontrolleur import __version__
from kontrolleur.config import default_verbose, load_config, resolve_taxonomy_path
from kontrolleur.models.capabilities import CapabilityTaxonomy
from kontrolleur.reporter.console_out import (
    console,
    print_error,
    print_full_report,
    print_taxonomy,
)
from kontrolleur.reporter.json_out import to_canonical_json, write_report
from kontrolleur.scanner.errors import DecodeError
from kontrolleur.scanner.inspector import inspect_file
from kontrolleur.scanner.taxonomy import TaxonomyError, load_taxonomy

app = typer.Typer(
    name="kontrolleur",
    help=(
        "Kontrolleur: inspect what a WebAssembly binary assumes about its environment. "
        "Run 'kontrolleur <command> --help' for flags."
    ),
    add_completion=False,
)

logger = logging.getLogger("kontrolleur")


def _configure_logging(*, quiet: bool, verbose: bool) -> None:
    if quiet:
        logging.basicConfig(level=logging.ERROR)
    elif verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)


def _load_active_taxonomy(cli_value: Optional[str], config: dict) -> CapabilityTaxonomy:
    """Resolve and load the taxonomy, exiting on a missing or broken file."""
    path = resolve_taxonomy_path(cli_value, config)
    try:
        return load_taxonomy(path)
    except FileNotFoundError:
        print_error(f"Taxonomy file not found: {path}")
        raise typer.Exit(code=1)
    except TaxonomyError as exc:
        print_error(f"Invalid taxonomy: {exc}")
        raise typer.Exit(code=1)


@app.command()
def inspect(
    file: str = typer.Argument(..., help="WebAssembly module to inspect"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="List the calls in every capability bucket"
    ),
    output_json: bool = typer.Option(False, "--json", help="Output the report as JSON to stdout"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress all output except errors"),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Also write the JSON report to this path"
    ),
    taxonomy: Optional[str] = typer.Option(
        None, "--taxonomy", help="Custom capability taxonomy YAML (default: bundled WASI table)"
    ),
) -> None:
    """Report which host capabilities a module imports.

    Decodes the module's import section and sorts every import into file
    system, environment, process, network or unknown. A malformed module
    is a hard failure (exit code 1).
    """
    config = load_config()
    verbose = verbose or default_verbose(config)
    _configure_logging(quiet=quiet, verbose=verbose)

    active_taxonomy = _load_active_taxonomy(taxonomy, config)

    module_path = Path(file)
    try:
        report = inspect_file(module_path, taxonomy=active_taxonomy)
    except OSError as exc:
        logger.debug("Reading %s failed: %s", module_path, exc)
        print_error(f"cannot read input: {module_path}")
        raise typer.Exit(code=1)
    except DecodeError as exc:
        print_error(f"malformed module: {exc}")
        raise typer.Exit(code=1)

    if output:
        try:
            write_report(report, Path(output))
        except OSError as exc:
            logger.debug("Writing %s failed: %s", output, exc)
            print_error(f"cannot write report: {output}")
            raise typer.Exit(code=1)

    if output_json:
        print(to_canonical_json(report), end="")
    elif not quiet:
        print_full_report(report, verbose=verbose)


@app.command(name="taxonomy")
def show_taxonomy(
    taxonomy: Optional[str] = typer.Option(
        None, "--taxonomy", help="Custom capability taxonomy YAML (default: bundled WASI table)"
    ),
    output_json: bool = typer.Option(False, "--json", help="Output the table as JSON"),
) -> None:
    """Show the capability table imports are classified against."""
    active_taxonomy = _load_active_taxonomy(taxonomy, load_config())
    if output_json:
        print(to_canonical_json(active_taxonomy), end="")
    else:
        print_taxonomy(active_taxonomy)


@app.command()
def version() -> None:
    """Show the Kontrolleur version."""
    console.print(f"Kontrolleur v{__version__}")


if __name__ == "__main__":
    app()
