"""
Batch sequencer: drives fetch -> transform -> accumulate across the planned range.

Batches run strictly in order. Batch `i + 1` is not requested until batch `i`
has been transformed and appended, and a fixed delay separates consecutive
batches to stay under the source's rate limit. The number of batches comes
from the configured total estimate; short or empty pages do not end the loop.
"""

from __future__ import annotations

import time
from datetime import datetime
from typing import Callable, List

from gif_sync.config import SyncConfig
from gif_sync.domain.models import Batch, SyncRecord
from gif_sync.pipeline.fetcher import BatchFetcher
from gif_sync.pipeline.transformer import transform_page, utcnow
from gif_sync.utils.logging import get_logger

log = get_logger(__name__)


def batch_count(total: int, limit: int) -> int:
    """Number of pages needed to cover `total` records, i.e. ceil(total / limit)."""
    if limit <= 0:
        raise ValueError(f"limit must be positive, got {limit}")
    if total <= 0:
        return 0
    return -(-total // limit)


def plan_batches(total: int, limit: int) -> List[Batch]:
    return [Batch(index=i, offset=i * limit, limit=limit) for i in range(batch_count(total, limit))]


class BatchSequencer:
    def __init__(
        self,
        fetcher: BatchFetcher,
        limit: int,
        total_estimate: int,
        delay_ms: int,
        sleep: Callable[[float], None] = time.sleep,
        now: Callable[[], datetime] = utcnow,
    ) -> None:
        self._fetcher = fetcher
        self.limit = limit
        self.total_estimate = total_estimate
        self.delay_seconds = delay_ms / 1000.0
        self._sleep = sleep
        self._now = now

    @classmethod
    def from_config(
        cls,
        config: SyncConfig,
        fetcher: BatchFetcher,
        sleep: Callable[[float], None] = time.sleep,
        now: Callable[[], datetime] = utcnow,
    ) -> "BatchSequencer":
        return cls(
            fetcher,
            limit=config.limit,
            total_estimate=config.total_estimate,
            delay_ms=config.delay_ms,
            sleep=sleep,
            now=now,
        )

    def plan(self) -> List[Batch]:
        return plan_batches(self.total_estimate, self.limit)

    def run(self) -> List[SyncRecord]:
        """
        Fetch every planned batch and return the accumulated records.

        `FetchExhausted` from any batch propagates immediately.
        """
        batches = self.plan()
        total = len(batches)
        accumulator: List[SyncRecord] = []

        for batch in batches:
            page = self._fetcher.fetch(batch)
            accumulator.extend(transform_page(page, now=self._now))
            log.info(
                f"[BATCH {batch.index + 1}/{total}] Fetched {len(page)} exercises",
                extra={
                    "batch": batch.index + 1,
                    "total_batches": total,
                    "offset": batch.offset,
                    "records": len(page),
                    "accumulated": len(accumulator),
                },
            )

            is_last = batch.index == total - 1
            if len(page) < batch.limit and not is_last:
                log.warning(
                    f"[BATCH {batch.index + 1}/{total}] Short page before the final batch; "
                    "the total estimate may be too high",
                    extra={"offset": batch.offset, "records": len(page), "limit": batch.limit},
                )
            if not is_last:
                self._sleep(self.delay_seconds)

        return accumulator


__all__ = ["BatchSequencer", "batch_count", "plan_batches"]
