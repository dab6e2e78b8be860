"""
Constants for application configuration defaults and constraints.
"""
from typing import Final, Dict, Any

from .color import color
from .chart import chart
from .data import data
from .network import network
from .timers import timers

class ConfigMessages:
    """Log message templates for configuration validation."""
    INVALID_NUMERIC: Final[str] = "Invalid {key} '{value}', resetting to default '{default}'"
    INVALID_BOOLEAN: Final[str] = "Invalid {key} '{value}', resetting to boolean default '{default}'"
    INVALID_COLOR: Final[str] = "Invalid color '{value}' for {key}, resetting to default '{default}'"
    INVALID_CHOICE: Final[str] = "Invalid {key} '{value}', resetting to default '{default}'. Valid choices: {choices}"
    INVALID_INTERFACES: Final[str] = "Invalid selected_interfaces value '{value}', resetting to default []"

    def __init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        for attr_name in dir(self):
            if not attr_name.startswith('_') and attr_name.isupper():
                value = getattr(self, attr_name)
                if not isinstance(value, str) or not value:
                    raise ValueError(f"ConfigMessages.{attr_name} must be a non-empty string.")


class ConfigConstants:
    """Defines default values and constraints for all application settings."""
    DEFAULT_UPDATE_RATE: Final[float] = 1.0
    MINIMUM_UPDATE_RATE: Final[float] = timers.MINIMUM_INTERVAL_MS / 1000.0
    DEFAULT_BUCKET_DURATION_MINUTES: Final[int] = data.DEFAULT_BUCKET_DURATION_MS // timers.MINUTE_MS
    DEFAULT_VISIBLE_DAYS: Final[int] = 30
    MAXIMUM_VISIBLE_DAYS: Final[int] = 365
    DEFAULT_RETENTION_DAYS: Final[int] = 90
    DEFAULT_ESTIMATE_VISIBLE: Final[bool] = True
    DEFAULT_INTERFACE_MODE: Final[str] = network.interface.DEFAULT_MODE
    DEFAULT_STROKE_WIDTH: Final[float] = chart.render.STROKE_WIDTH
    MAXIMUM_STROKE_WIDTH: Final[float] = 10.0

    CONFIG_FILENAME: Final[str] = "NetUsageChart_Config.json"

    DEFAULT_CONFIG: Final[Dict[str, Any]] = {
        "update_rate": DEFAULT_UPDATE_RATE,
        "bucket_duration_minutes": DEFAULT_BUCKET_DURATION_MINUTES,
        "visible_days": DEFAULT_VISIBLE_DAYS,
        "retention_days": DEFAULT_RETENTION_DAYS,
        "estimate_visible": DEFAULT_ESTIMATE_VISIBLE,
        "interface_mode": DEFAULT_INTERFACE_MODE,
        "selected_interfaces": [],
        "stroke_color": color.STROKE_COLOR,
        "fill_color": color.FILL_COLOR,
        "fill_color_secondary": color.FILL_COLOR_SECONDARY,
        "estimate_color": color.ESTIMATE_COLOR,
        "stroke_width": DEFAULT_STROKE_WIDTH,
    }

    def __init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if not self.CONFIG_FILENAME.endswith(".json"):
            raise ValueError("CONFIG_FILENAME must be a .json file")
        if not (0 < self.DEFAULT_VISIBLE_DAYS <= self.MAXIMUM_VISIBLE_DAYS):
            raise ValueError("DEFAULT_VISIBLE_DAYS must be within (0, MAXIMUM_VISIBLE_DAYS]")
        if self.DEFAULT_RETENTION_DAYS > data.MAX_RETENTION_DAYS:
            raise ValueError("DEFAULT_RETENTION_DAYS exceeds MAX_RETENTION_DAYS")
        if self.DEFAULT_INTERFACE_MODE not in network.interface.VALID_INTERFACE_MODES:
            raise ValueError("DEFAULT_INTERFACE_MODE must be a valid interface mode")


class ConfigurationConstants:
    """Container for configuration-related constant groups."""
    def __init__(self) -> None:
        self.defaults = ConfigConstants()
        self.messages = ConfigMessages()

# Singleton instance for easy access
config = ConfigurationConstants()
