"""
Batch fetcher: one page per call, retried according to a `RetryPolicy`.
"""

from __future__ import annotations

import time
from typing import Callable, List, Optional

from tenacity import RetryCallState

from gif_sync.domain.models import Batch, SourceRecord
from gif_sync.exceptions import FetchExhausted, TransientFetchError
from gif_sync.pipeline.abstract import PageSource
from gif_sync.pipeline.retry import RetryPolicy
from gif_sync.utils.logging import get_logger

log = get_logger(__name__)


class BatchFetcher:
    """
    Fetch a batch from a `PageSource`, retrying transient failures.

    Every attempt is logged at INFO and every failure at WARNING. When the
    policy gives up, `FetchExhausted` is raised with the offset and the number
    of attempts made.
    """

    def __init__(
        self,
        source: PageSource,
        policy: Optional[RetryPolicy] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._source = source
        self.policy = policy or RetryPolicy()
        self._sleep = sleep

    def _log_backoff(self, retry_state: RetryCallState) -> None:
        delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
        log.info(
            f"[FETCH] Backing off {delay:.1f}s before attempt {retry_state.attempt_number + 1}",
            extra={"attempt": retry_state.attempt_number, "delay_seconds": delay},
        )

    def fetch(self, batch: Batch) -> List[SourceRecord]:
        attempts = 0
        page: List[SourceRecord] = []
        retrying = self.policy.retrying(sleep=self._sleep, before_sleep=self._log_backoff)
        try:
            for attempt in retrying:
                with attempt:
                    attempts = attempt.retry_state.attempt_number
                    log.info(
                        f"[FETCH] offset={batch.offset} attempt {attempts}/{self.policy.max_attempts}",
                        extra={"offset": batch.offset, "limit": batch.limit, "attempt": attempts},
                    )
                    try:
                        page = self._source.fetch_page(batch.offset, batch.limit)
                    except TransientFetchError as exc:
                        log.warning(
                            f"[FETCH] Failed at offset {batch.offset} (attempt {attempts}): {exc}",
                            extra={
                                "offset": batch.offset,
                                "attempt": attempts,
                                "status_code": exc.status_code,
                            },
                        )
                        raise
        except TransientFetchError as exc:
            raise FetchExhausted(batch.offset, attempts, last_error=exc) from exc
        return page


__all__ = ["BatchFetcher"]
