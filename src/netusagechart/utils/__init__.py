"""
Utilities submodule for NetUsageChart.

Provides helper functions, configuration management and persistence.
"""

from .config import ConfigManager, ConfigError
from .helpers import setup_logging, get_app_data_path, format_data_size

__all__ = ["ConfigManager", "ConfigError", "setup_logging", "get_app_data_path", "format_data_size"]
