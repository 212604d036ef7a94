"""
Exercise GIF sync - copy ExerciseDB gif URLs into a PostgreSQL table.

The job pages through the ExerciseDB API with a bounded per-page retry,
normalizes each exercise to `{id, gifUrl, updated_at}`, accumulates the whole
run in memory, and finishes with a single bulk upsert keyed by `id`. Nothing
is written unless every page was fetched.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from gif_sync.config import Credentials, Settings, SyncConfig, get_settings
from gif_sync.exceptions import FetchExhausted, SinkError, SyncError, TransientFetchError
from gif_sync.orchestrator import run_sync
from gif_sync.pipeline.abstract import PageSource, RecordSink, SyncReport
from gif_sync.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Credentials",
    "Settings",
    "SyncConfig",
    "get_settings",
    # Errors
    "FetchExhausted",
    "SinkError",
    "SyncError",
    "TransientFetchError",
    # Orchestration
    "run_sync",
    # Stage interfaces
    "PageSource",
    "RecordSink",
    "SyncReport",
    # Logging
    "configure_logging",
    "get_logger",
]
