from __future__ import annotations

import sys
from typing import Optional

import typer

from gif_sync.config import get_settings
from gif_sync.orchestrator import STATUS_SUCCESS, run_sync
from gif_sync.reporter import print_report
from gif_sync.utils.logging import configure_logging

app = typer.Typer(help="Sync ExerciseDB gif URLs into Postgres.")


def _mask(secret: str) -> str:
    if not secret:
        return "<unset>"
    return f"{secret[:4]}…" if len(secret) > 8 else "****"


@app.command()
def info() -> None:
    """
    Show effective configuration values (secrets masked).
    """
    settings = get_settings()
    config = settings.sync_config()
    target = (
        "DATABASE_URL"
        if settings.database_url
        else f"{settings.db_user}@{settings.db_host}:{settings.db_port}/{settings.db_name}"
    )
    typer.echo(
        f"API={config.api_base_url} key={_mask(config.credentials.api_key)} | "
        f"DB={target} table={config.destination_table} | "
        f"limit={config.limit} total={config.total_estimate} "
        f"delay={config.delay_ms}ms retries={config.max_retries} "
        f"backoff={config.retry_delay_ms}ms"
    )


@app.command()
def run(
    total: Optional[int] = typer.Option(
        None,
        "--total",
        "-t",
        help="Override the total record estimate (default from settings).",
    ),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-l",
        help="Override the page size (default from settings).",
    ),
    table: Optional[str] = typer.Option(
        None,
        "--table",
        help="Override the destination table (e.g., exercises_gifUrls).",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Fetch and transform only; skip the upsert.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Emit JSON log lines (also enabled by LOG_JSON).",
    ),
) -> None:
    """
    Run one sync: fetch every batch, then upsert everything in one write.
    """
    settings = get_settings()
    configure_logging(
        level=settings.log_level,
        json_logs=settings.log_json or json_logs,
    )
    config = settings.sync_config(limit=limit, total_estimate=total, destination_table=table)

    report = run_sync(config, dry_run=dry_run)
    print_report(report)
    if report["status"] != STATUS_SUCCESS:
        raise typer.Exit(code=1)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
