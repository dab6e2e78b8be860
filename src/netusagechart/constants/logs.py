"""
Logging constants: log file location, record layout and per-handler levels.
"""
import logging
from typing import Final, Tuple

class LogConstants:
    """Defines the file name, format, levels and rotation policy of the application log."""
    LOG_FILENAME: Final[str] = "NetUsageChart_Log.log"
    LOG_FORMAT: Final[str] = "%(asctime)s [%(levelname)s] %(name)s (%(module)s:%(lineno)d): %(message)s"
    LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

    # Levels per handler; production mode clamps everything to PRODUCTION_LOG_LEVEL
    FILE_LOG_LEVEL: Final[int] = logging.DEBUG
    CONSOLE_LOG_LEVEL: Final[int] = logging.INFO
    PRODUCTION_LOG_LEVEL: Final[int] = logging.WARNING

    # Rotation: five files of 5 MiB
    MAX_LOG_SIZE: Final[int] = 5 * 1024 * 1024
    LOG_BACKUP_COUNT: Final[int] = 4

    _VALID_LEVELS: Final[Tuple[int, ...]] = (
        logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL,
    )

    def __init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if not self.LOG_FILENAME.endswith(".log"):
            raise ValueError("LOG_FILENAME must be a .log file")
        if self.MAX_LOG_SIZE <= 0 or self.LOG_BACKUP_COUNT < 0:
            raise ValueError("Log rotation needs a positive size and a non-negative backup count")
        for name in ("FILE_LOG_LEVEL", "CONSOLE_LOG_LEVEL", "PRODUCTION_LOG_LEVEL"):
            if getattr(self, name) not in self._VALID_LEVELS:
                raise ValueError(f"Invalid {name}: {getattr(self, name)}")

# Singleton instance for easy access
logs = LogConstants()
