"""
Page-level retry policy.

`RetryPolicy.next_action` is a pure decision function (attempt number and
error in, next action out). `RetryPolicy.retrying` adapts it to a bounded
tenacity loop, so the fetcher never recurses and the policy can be tested on
its own.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, NamedTuple, Optional

from tenacity import RetryCallState, Retrying, retry_if_exception_type

from gif_sync.config import SyncConfig
from gif_sync.exceptions import TransientFetchError


class RetryAction(NamedTuple):
    retry: bool
    delay_seconds: float


GIVE_UP = RetryAction(retry=False, delay_seconds=0.0)


@dataclass(frozen=True)
class RetryPolicy:
    """
    Fixed-backoff policy: at most `max_attempts` attempts per page, waiting
    `backoff_seconds` between consecutive attempts.
    """

    max_attempts: int = 3
    backoff_seconds: float = 2.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.backoff_seconds < 0:
            raise ValueError(f"backoff_seconds must be >= 0, got {self.backoff_seconds}")

    @classmethod
    def from_config(cls, config: SyncConfig) -> "RetryPolicy":
        return cls(max_attempts=config.max_retries, backoff_seconds=config.retry_delay_ms / 1000.0)

    def next_action(self, attempt: int, error: BaseException) -> RetryAction:
        """
        Decide what to do after `attempt` (1-based) failed with `error`.

        Only `TransientFetchError` is retried; anything else gives up at once.
        """
        if not isinstance(error, TransientFetchError):
            return GIVE_UP
        if attempt >= self.max_attempts:
            return GIVE_UP
        return RetryAction(retry=True, delay_seconds=self.backoff_seconds)

    def _action_for(self, retry_state: RetryCallState) -> RetryAction:
        outcome = retry_state.outcome
        if outcome is None or not outcome.failed:
            return GIVE_UP
        error = outcome.exception()
        if error is None:
            return GIVE_UP
        return self.next_action(retry_state.attempt_number, error)

    def retrying(
        self,
        sleep: Callable[[float], None] = time.sleep,
        before_sleep: Optional[Callable[[RetryCallState], None]] = None,
    ) -> Retrying:
        """
        Build a tenacity controller driven by `next_action`.

        The last error is re-raised once the policy gives up.
        """
        return Retrying(
            stop=lambda state: not self._action_for(state).retry,
            wait=lambda state: self._action_for(state).delay_seconds,
            retry=retry_if_exception_type(TransientFetchError),
            sleep=sleep,
            before_sleep=before_sleep,
            reraise=True,
        )


__all__ = ["GIVE_UP", "RetryAction", "RetryPolicy"]
