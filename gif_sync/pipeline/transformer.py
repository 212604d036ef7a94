"""
Page transformer: SourceRecord -> SyncRecord.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Iterable, List

from gif_sync.domain.models import SourceRecord, SyncRecord


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def transform(record: SourceRecord, now: Callable[[], datetime] = utcnow) -> SyncRecord:
    # Records without a gifUrl are kept; the column is nullable.
    return SyncRecord(id=record.id, gif_url=record.gif_url, updated_at=now())


def transform_page(
    records: Iterable[SourceRecord], now: Callable[[], datetime] = utcnow
) -> List[SyncRecord]:
    return [transform(record, now) for record in records]


__all__ = ["transform", "transform_page", "utcnow"]
