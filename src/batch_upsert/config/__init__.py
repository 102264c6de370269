"""Configuration management for batch-upsert.

Usage:
    >>> from batch_upsert.config import get_settings
    >>> settings = get_settings()
    >>> settings.batch_size
    1000
"""

from batch_upsert.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
