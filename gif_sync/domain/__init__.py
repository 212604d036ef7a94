"""
Domain package for the exercise GIF sync.

Exports the record shapes shared by the HTTP client, the pipeline stages and
the destination sink. Keep this package focused on data definitions.
"""

from gif_sync.domain.models import COLUMNS, Batch, SourceRecord, SyncRecord

__all__ = [
    "Batch",
    "COLUMNS",
    "SourceRecord",
    "SyncRecord",
]
