"""
PostgreSQL upsert sink.

Writes the whole accumulated run in one transaction with
`INSERT ... ON CONFLICT (id) DO UPDATE`, so existing rows are overwritten and
new ones inserted. PostgreSQL rejects a command that touches the same key
twice, so duplicate ids are collapsed (last occurrence wins) first.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence

import psycopg
from psycopg import Connection, sql

from gif_sync.domain.models import COLUMNS, SyncRecord
from gif_sync.exceptions import SinkError
from gif_sync.infrastructure.db_factory import get_sync_connection
from gif_sync.utils.logging import get_logger

log = get_logger(__name__)

CONFLICT_KEY = "id"


def collapse_duplicates(records: Sequence[SyncRecord]) -> List[SyncRecord]:
    """Keep one record per id: the last one seen."""
    latest: Dict[str, SyncRecord] = {}
    for record in records:
        latest[record.id] = record
    return list(latest.values())


def build_upsert_query(
    table: str, columns: Sequence[str] = COLUMNS, conflict_key: str = CONFLICT_KEY
) -> sql.Composed:
    """
    Compose the upsert statement. `table` may be schema-qualified ("public.t").
    """
    updates = sql.SQL(", ").join(
        sql.SQL("{col} = EXCLUDED.{col}").format(col=sql.Identifier(column))
        for column in columns
        if column != conflict_key
    )
    return sql.SQL(
        "INSERT INTO {table} ({columns}) VALUES ({values}) "
        "ON CONFLICT ({key}) DO UPDATE SET {updates}"
    ).format(
        table=sql.Identifier(*table.split(".")),
        columns=sql.SQL(", ").join(sql.Identifier(column) for column in columns),
        values=sql.SQL(", ").join([sql.Placeholder()] * len(columns)),
        key=sql.Identifier(conflict_key),
        updates=updates,
    )


class PostgresUpsertSink:
    """
    Bulk upsert into a PostgreSQL table (e.g. a Supabase-hosted database).
    """

    def __init__(
        self,
        table: str,
        dsn: Optional[str] = None,
        connect: Callable[[Optional[str]], Connection] = get_sync_connection,
    ) -> None:
        self.table = table
        self._dsn = dsn
        self._connect = connect

    def upsert(self, records: Sequence[SyncRecord]) -> int:
        rows = collapse_duplicates(records)
        if len(rows) < len(records):
            log.warning(
                f"[UPSERT] Collapsed {len(records) - len(rows)} duplicate id(s)",
                extra={"table": self.table, "received": len(records), "unique": len(rows)},
            )
        if not rows:
            log.info("[UPSERT] Nothing to write", extra={"table": self.table})
            return 0

        log.info(
            f"[UPSERT] Upserting {len(rows)} gif URLs into {self.table}",
            extra={"table": self.table, "rows": len(rows)},
        )
        query = build_upsert_query(self.table)
        try:
            with self._connect(self._dsn) as conn:
                with conn.cursor() as cur:
                    cur.executemany(query, [row.as_row() for row in rows])
                    affected = cur.rowcount if cur.rowcount >= 0 else len(rows)
                conn.commit()
        except psycopg.Error as exc:
            raise SinkError(self.table, str(exc)) from exc

        log.info(
            f"[UPSERT] Upserted {affected} records",
            extra={"table": self.table, "rows_affected": affected},
        )
        return affected


__all__ = ["CONFLICT_KEY", "PostgresUpsertSink", "build_upsert_query", "collapse_duplicates"]
