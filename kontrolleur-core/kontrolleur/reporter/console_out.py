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

"""Rich terminal output for inspection results.

Reads like a short briefing: how many imports, whether a WASI runtime is
expected, which resource types that implies, and what could not be
recognised. --verbose adds the member calls of every bucket.

Import names come from an untrusted module, so every one of them is
markup-escaped before it reaches the console.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from kontrolleur.models.capabilities import (
    BUCKET_DISPLAY,
    WASI_CAPABILITY_BUCKETS,
    CapabilityTaxonomy,
)
from kontrolleur.models.report import InspectionReport

INDENT = "    "


def _make_console() -> Console:
    """Console with soft wrap. Width follows the live terminal size."""
    return Console(soft_wrap=True, highlight=False, emoji=False)


console = _make_console()


def _be_form(count: int) -> str:
    return "is" if count == 1 else "are"


def _plural(count: int) -> str:
    return "" if count == 1 else "s"


def print_scan_header(report: InspectionReport) -> None:
    """Print which module was inspected."""
    console.print(f"[bold]Module:[/bold] {escape(report.module_path or '<bytes>')}")
    console.print(
        f"[dim]{report.module_size} bytes | {report.module_hash} | "
        f"taxonomy: {escape(report.taxonomy_source)}[/dim]"
    )
    console.print()


def print_summary(report: InspectionReport, verbose: bool = False) -> None:
    """Print the capability summary of one module."""
    summary = report.summary
    total = summary.total
    console.print(
        f"There {_be_form(total)} [bold]{total}[/bold] total external API call{_plural(total)}."
    )

    wasi_count = summary.wasi_count
    if wasi_count > 0:
        console.print("This binary is expecting a [cyan]WASI[/cyan] compliant runtime.")
        console.print(f"{INDENT}The binary uses {wasi_count} WASI call{_plural(wasi_count)}")

        resource_types = summary.resource_types()
        if resource_types:
            console.print(f"{INDENT}The following system resource types are used:")
            names = ", ".join(BUCKET_DISPLAY[b.value] for b in resource_types)
            console.print(f"{INDENT * 2}[yellow]{names}[/yellow]")

        if verbose:
            for bucket in WASI_CAPABILITY_BUCKETS:
                calls = summary.bucket(bucket)
                if not calls:
                    continue
                label = BUCKET_DISPLAY[bucket.value].capitalize()
                console.print(f"{INDENT}{label} calls:")
                for call in calls:
                    console.print(f"{INDENT * 2}{escape(call)}")

        unknown = summary.unknown_wasi_symbol
        if unknown:
            count = len(unknown)
            console.print(
                f"[yellow]There {_be_form(count)} {count} unknown wasi sys call{_plural(count)}:[/yellow]"
            )
            for call in unknown:
                console.print(f"{INDENT}{escape(call)}")

    if summary.unknown_namespace:
        console.print("[yellow]Unknown imports:[/yellow]")
        for entry in summary.unknown_namespace:
            console.print(f"{INDENT}{escape(entry)}")


def print_full_report(report: InspectionReport, verbose: bool = False) -> None:
    print_scan_header(report)
    print_summary(report, verbose=verbose)


def print_taxonomy(taxonomy: CapabilityTaxonomy) -> None:
    """Print the active symbol table as one row per bucket."""
    table = Table(
        title=f"Capability taxonomy for '{escape(taxonomy.namespace)}'",
        caption=f"source: {escape(taxonomy.source)}",
        show_lines=True,
    )
    table.add_column("Bucket", style="bold")
    table.add_column("Symbols")
    for bucket in WASI_CAPABILITY_BUCKETS:
        members = taxonomy.members(bucket)
        table.add_row(BUCKET_DISPLAY[bucket.value], escape(", ".join(members)) or "[dim]-[/dim]")
    table.add_row(BUCKET_DISPLAY["unknown_wasi_symbol"], "[dim]any other symbol[/dim]")
    console.print(table)


def print_error(message: str) -> None:
    console.print(f"[red]Error: {escape(message)}[/red]")
