"""
Constants related to stored usage history.
"""

from typing import Final

from .timers import timers

class DataConstants:
    """Defines table names and bucket sizing for persisted history."""
    DB_FILENAME: Final[str] = "usage_history.db"
    BUCKET_TABLE: Final[str] = "usage_buckets"
    DB_TIMEOUT_SECONDS: Final[float] = 10.0

    DEFAULT_BUCKET_DURATION_MS: Final[int] = timers.HOUR_MS
    MIN_BUCKET_DURATION_MS: Final[int] = timers.MINUTE_MS
    MAX_BUCKET_DURATION_MS: Final[int] = timers.DAY_MS
    MAX_RETENTION_DAYS: Final[int] = 365

    def __init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if not self.BUCKET_TABLE.isidentifier():
            raise ValueError("BUCKET_TABLE must be a valid SQL identifier")
        if not (self.MIN_BUCKET_DURATION_MS <= self.DEFAULT_BUCKET_DURATION_MS <= self.MAX_BUCKET_DURATION_MS):
            raise ValueError("DEFAULT_BUCKET_DURATION_MS must lie within the allowed range")
        if self.MAX_RETENTION_DAYS <= 0:
            raise ValueError("MAX_RETENTION_DAYS must be positive")

# Singleton instance for easy access
data = DataConstants()
