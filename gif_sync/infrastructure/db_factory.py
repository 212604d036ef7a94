"""
Database connection factory for the exercise GIF sync.

The sync writes once per run, so a dedicated connection is enough; there is no
pool. Connection acquisition retries transient failures using tenacity; the
upsert statement itself is never retried.
"""

from __future__ import annotations

from typing import Optional

import psycopg
from psycopg import Connection
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from gif_sync.config import get_settings


def build_dsn(dsn_override: Optional[str] = None) -> str:
    """Compose a DSN string from settings unless an override is given."""
    if dsn_override:
        return dsn_override
    return get_settings().dsn()


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((psycopg.OperationalError, psycopg.InterfaceError)),
    reraise=True,
)
def get_sync_connection(dsn: Optional[str] = None) -> Connection:
    """
    Acquire a dedicated synchronous connection with automatic retry.

    Retries up to 3 times with exponential backoff for transient connection errors.

    Parameters
    ----------
    dsn : str | None
        Connection string; defaults to the one derived from settings.

    Returns
    -------
    Connection
        A new psycopg connection instance.

    Raises
    ------
    psycopg.OperationalError
        If connection fails after all retry attempts.
    """
    return psycopg.connect(build_dsn(dsn))


__all__ = [
    "build_dsn",
    "get_sync_connection",
]
