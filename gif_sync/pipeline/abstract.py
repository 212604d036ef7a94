"""
Interfaces between the sync pipeline stages.

The fetcher depends on a `PageSource` rather than on the HTTP client directly,
and the orchestrator depends on a `RecordSink` rather than on PostgreSQL, so
each stage can be exercised with in-memory fakes.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, Sequence, TypedDict, runtime_checkable

from gif_sync.domain.models import SourceRecord, SyncRecord


@runtime_checkable
class PageSource(Protocol):
    """Anything that can return one page of source records."""

    def fetch_page(self, offset: int, limit: int) -> List[SourceRecord]:
        """
        Fetch the records in `[offset, offset + limit)`.

        Raises
        ------
        TransientFetchError
            On any failure of this single request.
        """
        ...


@runtime_checkable
class RecordSink(Protocol):
    """
    Destination for the accumulated records of one run.

    Attributes
    ----------
    table : str
        Name of the destination table (used in logs and reports).
    """

    table: str

    def upsert(self, records: Sequence[SyncRecord]) -> int:
        """
        Insert-or-update all records keyed by `id`; return the affected row count.

        Raises
        ------
        SinkError
            If the bulk write fails.
        """
        ...


class SyncReport(TypedDict, total=False):
    """
    Outcome of one run, as returned by the orchestrator and rendered by the reporter.
    """

    status: str
    table: str
    batches: int
    fetched: int
    unique: int
    upserted: int
    duration_seconds: float
    dry_run: bool
    error: Optional[str]
    error_type: Optional[str]


__all__ = [
    "PageSource",
    "RecordSink",
    "SyncReport",
]
