"""
Orchestrator for a single sync run.

Wires the ExerciseDB client, the batch fetcher, the sequencer and the upsert
sink together, and is the run boundary for error handling: every failure is
logged here and turned into a failed `SyncReport` instead of propagating.

Usage (example from CLI):
    from gif_sync.config import get_settings
    from gif_sync.orchestrator import run_sync

    report = run_sync(get_settings().sync_config())
    print(report["status"], report["upserted"])
"""

from __future__ import annotations

import time
from datetime import datetime
from typing import Callable, Optional

from gif_sync.config import SyncConfig
from gif_sync.infrastructure.exercisedb_client import ExerciseDBClient
from gif_sync.pipeline.abstract import PageSource, RecordSink, SyncReport
from gif_sync.pipeline.fetcher import BatchFetcher
from gif_sync.pipeline.retry import RetryPolicy
from gif_sync.pipeline.sequencer import BatchSequencer
from gif_sync.pipeline.sink import PostgresUpsertSink, collapse_duplicates
from gif_sync.pipeline.transformer import utcnow
from gif_sync.utils.logging import get_logger

log = get_logger(__name__)

STATUS_SUCCESS = "success"
STATUS_FAILED = "failed"


def _failed(report: SyncReport, exc: BaseException) -> SyncReport:
    report["status"] = STATUS_FAILED
    report["error"] = str(exc)
    report["error_type"] = type(exc).__name__
    return report


def run_sync(
    config: SyncConfig,
    *,
    source: Optional[PageSource] = None,
    sink: Optional[RecordSink] = None,
    sleep: Callable[[float], None] = time.sleep,
    now: Callable[[], datetime] = utcnow,
    dry_run: bool = False,
) -> SyncReport:
    """
    Execute one sync run end to end.

    Parameters
    ----------
    config : SyncConfig
        Explicit run configuration.
    source : PageSource | None
        Page source; defaults to an `ExerciseDBClient` built from `config`
        (closed when the run ends).
    sink : RecordSink | None
        Destination; defaults to a `PostgresUpsertSink` on the configured table.
    sleep : callable
        Used for both the retry backoff and the inter-batch delay.
    now : callable
        Clock used to stamp `updated_at`.
    dry_run : bool
        Fetch and transform only; skip the upsert.

    Returns
    -------
    SyncReport
        Counts, duration and, on failure, the error message and type.
    """
    table = sink.table if sink is not None else config.destination_table
    report = SyncReport(
        status=STATUS_SUCCESS,
        table=table,
        batches=0,
        fetched=0,
        unique=0,
        upserted=0,
        duration_seconds=0.0,
        dry_run=dry_run,
        error=None,
        error_type=None,
    )

    owned_client: Optional[ExerciseDBClient] = None
    if source is None:
        owned_client = ExerciseDBClient.from_config(config)
        source = owned_client

    fetcher = BatchFetcher(source, policy=RetryPolicy.from_config(config), sleep=sleep)
    sequencer = BatchSequencer.from_config(config, fetcher, sleep=sleep, now=now)
    report["batches"] = len(sequencer.plan())

    log.info(
        f"[SYNC START] {report['batches']} batches of {config.limit} -> {table}",
        extra={
            "batches": report["batches"],
            "limit": config.limit,
            "total_estimate": config.total_estimate,
            "table": table,
        },
    )
    start = time.perf_counter()
    try:
        try:
            accumulated = sequencer.run()
        finally:
            if owned_client is not None:
                owned_client.close()
        report["fetched"] = len(accumulated)
        report["unique"] = len(collapse_duplicates(accumulated))

        if dry_run:
            log.info(
                f"[SYNC DRY RUN] Skipping upsert of {report['unique']} records",
                extra={"table": table, "records": report["unique"]},
            )
        else:
            if sink is None:
                sink = PostgresUpsertSink(table, dsn=config.credentials.database_dsn)
            report["upserted"] = sink.upsert(accumulated)
    except Exception as exc:  # noqa: BLE001 - run boundary, every failure is reported
        log.exception(
            f"[SYNC FAILED] {type(exc).__name__}: {exc}",
            extra={"table": table, "error_type": type(exc).__name__},
        )
        _failed(report, exc)
    finally:
        report["duration_seconds"] = round(time.perf_counter() - start, 2)

    if report["status"] == STATUS_SUCCESS:
        log.info(
            f"[SYNC COMPLETE] Upserted {report['upserted']} records",
            extra={
                "table": table,
                "fetched": report["fetched"],
                "upserted": report["upserted"],
                "duration": report["duration_seconds"],
            },
        )
    return report


__all__ = ["STATUS_FAILED", "STATUS_SUCCESS", "run_sync"]
