"""
Infrastructure package for the exercise GIF sync.

Centralizes I/O concerns: the ExerciseDB HTTP client and destination database
connectivity. Keep this layer focused on transport and resource management,
decoupled from pipeline/orchestrator logic.
"""

from gif_sync.infrastructure.db_factory import build_dsn, get_sync_connection
from gif_sync.infrastructure.exercisedb_client import ExerciseDBClient

__all__ = [
    "ExerciseDBClient",
    "build_dsn",
    "get_sync_connection",
]
