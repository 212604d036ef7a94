"""
Error hierarchy for the exercise GIF sync.

Only `TransientFetchError` is recovered locally (by retrying the page).
`FetchExhausted` and `SinkError` end the run and are reported at the run
boundary by the orchestrator.
"""

from __future__ import annotations

from typing import Optional


class SyncError(Exception):
    """Base class for all sync failures."""


class TransientFetchError(SyncError):
    """A single page request failed (network error, bad status, bad payload)."""

    def __init__(self, offset: int, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.offset = offset
        self.status_code = status_code


class FetchExhausted(SyncError):
    """All attempts for a page failed; fatal to the run."""

    def __init__(self, offset: int, attempts: int, last_error: Optional[BaseException] = None) -> None:
        super().__init__(f"Failed to fetch batch at offset {offset} after {attempts} attempts.")
        self.offset = offset
        self.attempts = attempts
        self.last_error = last_error


class SinkError(SyncError):
    """The bulk upsert into the destination table failed."""

    def __init__(self, table: str, message: str) -> None:
        super().__init__(f"Upsert into '{table}' failed: {message}")
        self.table = table


__all__ = ["FetchExhausted", "SinkError", "SyncError", "TransientFetchError"]
