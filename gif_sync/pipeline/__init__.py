"""
Pipeline package for the exercise GIF sync.

Re-exports the stage interfaces and implementations so downstream code can
import from `gif_sync.pipeline` directly.
"""

from gif_sync.pipeline.abstract import PageSource, RecordSink, SyncReport
from gif_sync.pipeline.fetcher import BatchFetcher
from gif_sync.pipeline.retry import RetryAction, RetryPolicy
from gif_sync.pipeline.sequencer import BatchSequencer, batch_count, plan_batches
from gif_sync.pipeline.sink import PostgresUpsertSink, build_upsert_query, collapse_duplicates
from gif_sync.pipeline.transformer import transform, transform_page

__all__ = [
    # Interfaces
    "PageSource",
    "RecordSink",
    "SyncReport",
    # Stages
    "BatchFetcher",
    "BatchSequencer",
    "PostgresUpsertSink",
    "RetryAction",
    "RetryPolicy",
    # Helpers
    "batch_count",
    "build_upsert_query",
    "collapse_duplicates",
    "plan_batches",
    "transform",
    "transform_page",
]
