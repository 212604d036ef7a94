"""
Utilities package for the exercise GIF sync.

Exports shared helpers for cross-cutting concerns. Keep this package
lightweight and free of domain-specific logic.
"""

from gif_sync.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
