from __future__ import annotations

from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from gif_sync.pipeline.abstract import SyncReport


def build_report_table(report: SyncReport) -> Table:
    """
    Render a sync report as a two-column rich table.
    """
    status = report.get("status", "unknown")
    style = "bold green" if status == "success" else "bold red"
    title = "Exercise GIF Sync"
    if report.get("dry_run"):
        title = f"{title} [dim](dry run)[/dim]"

    table = Table(title=title, box=box.ROUNDED, show_header=False)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", justify="right")

    table.add_row("Status", f"[{style}]{status}[/{style}]")
    table.add_row("Table", str(report.get("table", "")))
    table.add_row("Batches", f"{report.get('batches', 0):,}")
    table.add_row("Fetched", f"{report.get('fetched', 0):,}")
    table.add_row("Unique ids", f"{report.get('unique', 0):,}")
    table.add_row("Upserted", f"{report.get('upserted', 0):,}")
    table.add_row("Duration (s)", f"{report.get('duration_seconds', 0.0):.2f}")

    if report.get("error"):
        table.add_row("Error", f"[red]{report.get('error_type')}: {report['error']}[/red]")
    return table


def print_report(report: SyncReport, console: Optional[Console] = None) -> None:
    console = console or Console()
    console.print(build_report_table(report))
