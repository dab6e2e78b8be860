"""
Constants for timer intervals and time unit conversions.
"""

from typing import Final

class TimerConstants:
    """Defines time units (in milliseconds) and update timer limits."""
    SECOND_MS: Final[int] = 1000
    MINUTE_MS: Final[int] = 60 * SECOND_MS
    HOUR_MS: Final[int] = 60 * MINUTE_MS
    DAY_MS: Final[int] = 24 * HOUR_MS
    WEEK_MS: Final[int] = 7 * DAY_MS

    MINIMUM_INTERVAL_MS: Final[int] = 100
    MAXIMUM_UPDATE_RATE_SECONDS: Final[float] = 60.0
    PERSIST_INTERVAL_MS: Final[int] = 60_000

    def __init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate the timer constants to ensure they are positive."""
        for attr_name in dir(self):
            if attr_name.endswith("_MS") or attr_name.endswith("_SECONDS"):
                value = getattr(self, attr_name)
                if not isinstance(value, (int, float)) or value <= 0:
                    raise ValueError(f"{attr_name} must be a positive number.")
        if self.WEEK_MS != 7 * self.DAY_MS:
            raise ValueError("WEEK_MS must equal seven days")
        if self.MAXIMUM_UPDATE_RATE_SECONDS * 1000 < self.MINIMUM_INTERVAL_MS:
            raise ValueError("MAXIMUM_UPDATE_RATE_SECONDS must allow intervals >= MINIMUM_INTERVAL_MS")

# Singleton instance for easy access
timers = TimerConstants()
