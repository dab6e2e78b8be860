"""
Helper utilities for NetUsageChart.

This module provides foundational functions for directory management, logging setup,
and data formatting used across the application.
"""

import os
import sys
import logging
import threading
from logging.handlers import RotatingFileHandler
from typing import Optional, Tuple
from pathlib import Path

from netusagechart import constants

# Thread lock for logging setup
_logging_lock: threading.Lock = threading.Lock()


def get_app_data_path() -> Path:
    """
    Retrieve the application data directory path, creating it if needed.

    Uses %APPDATA% when set and the user's home directory otherwise.

    Raises:
        PermissionError: If the directory cannot be written.
        OSError: If the directory cannot be created.
    """
    logger: logging.Logger = logging.getLogger("NetUsageChart.Helpers")
    appdata: Optional[str] = os.getenv("APPDATA")
    if not appdata:
        appdata = os.path.expanduser("~")
        logger.debug("APPDATA environment variable not set, using home directory: %s", appdata)
    path: Path = Path(appdata) / constants.app.APP_NAME
    try:
        path.mkdir(parents=True, exist_ok=True)
        test_file = path / f".nuc_write_test_{os.getpid()}"
        with open(test_file, 'w') as f:
            f.write("test")
        test_file.unlink()
        return path
    except PermissionError as e:
        logger.error("Permission denied creating/writing to app data directory %s: %s", path, e)
        raise PermissionError(f"Cannot access app data directory: {path}. Please check permissions.") from e
    except OSError as e:
        logger.error("Failed to create or verify app data directory %s: %s", path, e)
        raise OSError(f"Error with app data directory: {path}. Check disk space or path validity.") from e


def setup_logging(log_dir: Optional[Path] = None) -> logging.Logger:
    """
    Configure logging with both a rotating file handler and a console handler in a thread-safe manner.

    Calling it again is a no-op once handlers are installed.

    Args:
        log_dir: Directory for the log file; defaults to the app data directory.
    """
    logger: logging.Logger = logging.getLogger(constants.app.APP_NAME)
    with _logging_lock:
        if logger.handlers:
            return logger

        is_production = os.environ.get(constants.app.ENV_VAR_PROD_MODE, "").lower() == "true"
        root_log_level = constants.logs.PRODUCTION_LOG_LEVEL if is_production else logging.DEBUG
        logger.setLevel(root_log_level)

        log_formatter = logging.Formatter(
            fmt=constants.logs.LOG_FORMAT, datefmt=constants.logs.LOG_DATE_FORMAT
        )

        file_log_level = constants.logs.PRODUCTION_LOG_LEVEL if is_production else constants.logs.FILE_LOG_LEVEL
        log_file_path: Optional[Path] = None
        try:
            log_file_path = (log_dir or get_app_data_path()) / constants.logs.LOG_FILENAME
            file_handler: RotatingFileHandler = RotatingFileHandler(
                log_file_path,
                maxBytes=constants.logs.MAX_LOG_SIZE,
                backupCount=constants.logs.LOG_BACKUP_COUNT,
                encoding='utf-8',
                delay=True  # Delays opening the file until the first log message
            )
            file_handler.setFormatter(log_formatter)
            file_handler.setLevel(file_log_level)
            logger.addHandler(file_handler)
        except (PermissionError, OSError) as e:
            print(f"CRITICAL: Failed to set up file logging at {log_file_path}: {e}. File logging will be disabled.",
                  file=sys.stderr)

        console_handler: logging.StreamHandler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(log_formatter)
        console_handler.setLevel(constants.logs.PRODUCTION_LOG_LEVEL if is_production else constants.logs.CONSOLE_LOG_LEVEL)
        logger.addHandler(console_handler)

        if any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
            logger.info("File logging target: %s, Level: %s", log_file_path, logging.getLevelName(file_log_level))
        else:
            logger.warning("File logging is NOT active due to previous errors.")
        logger.info("Application logging initialized. Production mode: %s. Root Log Level: %s.",
                    is_production, logging.getLevelName(root_log_level))

    return logger


def format_data_size(data_bytes: int | float, precision: int = 2) -> Tuple[float, str]:
    """
    Formats a byte count into a value and unit (B, KB, MB, GB, ...), base 1024.

    Negative counts are treated as zero.

    Raises:
        TypeError: If `data_bytes` is not a number.
    """
    if isinstance(data_bytes, bool) or not isinstance(data_bytes, (int, float)):
        raise TypeError(f"Data_bytes must be a number (int or float), got {type(data_bytes)}")

    units = constants.network.units.DATA_SIZE_UNITS
    base = constants.network.units.BASE_DATA_SIZE

    if data_bytes <= 0:
        return 0.0, units[0]

    unit_index = 0
    value = float(data_bytes)
    while value >= base and unit_index < len(units) - 1:
        value /= base
        unit_index += 1

    return round(value, precision), units[unit_index]
