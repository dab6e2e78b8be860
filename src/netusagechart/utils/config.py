"""
Configuration management for NetUsageChart.

This module provides a ConfigManager for loading, validating, and saving chart
settings to a JSON file. It guards against corrupted or invalid configuration
through atomic writes, default value merging, and per-key validation.
"""

import json
import logging
import re
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .helpers import get_app_data_path
from netusagechart import constants


class ConfigError(Exception):
    """Custom exception for configuration-related errors, such as I/O or permission issues."""


class ConfigManager:
    """
    Manages loading, saving, and validation of NetUsageChart's configuration.
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None) -> None:
        self.config_path = Path(config_path or get_app_data_path() / constants.config.defaults.CONFIG_FILENAME)
        self.logger = logging.getLogger("NetUsageChart.Config")
        self._last_config: Optional[Dict[str, Any]] = None


    def _validate_numeric(self, key: str, value: Any, default: Any, min_v: float, max_v: float) -> Union[int, float]:
        """Validates a numeric value is within a given range."""
        try:
            if isinstance(value, bool):
                raise ValueError("Booleans are not numbers here")
            num_value = float(value)
            if not (min_v <= num_value <= max_v):
                raise ValueError("Value out of range")
            return int(num_value) if isinstance(default, int) else num_value
        except (TypeError, ValueError):
            self.logger.warning(constants.config.messages.INVALID_NUMERIC.format(key=key, value=value, default=default))
            return default


    def _validate_boolean(self, key: str, value: Any, default: bool) -> bool:
        """Validates a value is a boolean."""
        if isinstance(value, bool):
            return value
        self.logger.warning(constants.config.messages.INVALID_BOOLEAN.format(key=key, value=value, default=default))
        return default


    def _validate_color_hex(self, key: str, value: Any, default: str) -> str:
        """Validates a value is a valid 6-digit hex color string."""
        if isinstance(value, str) and re.fullmatch(r"#[0-9a-fA-F]{6}", value):
            return value
        self.logger.warning(constants.config.messages.INVALID_COLOR.format(key=key, value=value, default=default))
        return default


    def _validate_choice(self, key: str, value: Any, default: str, choices: List[str]) -> str:
        """Validates a value is one of the allowed choices (case-insensitive)."""
        if isinstance(value, str):
            for choice in choices:
                if choice.lower() == value.lower():
                    return choice
        self.logger.warning(constants.config.messages.INVALID_CHOICE.format(key=key, value=value, default=default, choices=choices))
        return default


    def _validate_config(self, loaded_config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validates the configuration, merges it with defaults for missing keys,
        and sanitizes all values.
        """
        defaults = constants.config.defaults
        default_ref = defaults.DEFAULT_CONFIG
        validated = default_ref.copy()
        validated.update(loaded_config)

        unknown_keys = set(loaded_config.keys()) - set(default_ref.keys())
        if unknown_keys:
            self.logger.warning("Ignoring unknown config fields: %s", ", ".join(sorted(unknown_keys)))

        validated["estimate_visible"] = self._validate_boolean("estimate_visible", validated.get("estimate_visible"), default_ref["estimate_visible"])

        validated["update_rate"] = self._validate_numeric("update_rate", validated.get("update_rate"), default_ref["update_rate"], defaults.MINIMUM_UPDATE_RATE, constants.timers.MAXIMUM_UPDATE_RATE_SECONDS)
        validated["bucket_duration_minutes"] = self._validate_numeric(
            "bucket_duration_minutes", validated.get("bucket_duration_minutes"), default_ref["bucket_duration_minutes"],
            constants.data.MIN_BUCKET_DURATION_MS // constants.timers.MINUTE_MS,
            constants.data.MAX_BUCKET_DURATION_MS // constants.timers.MINUTE_MS,
        )
        validated["visible_days"] = self._validate_numeric("visible_days", validated.get("visible_days"), default_ref["visible_days"], 1, defaults.MAXIMUM_VISIBLE_DAYS)
        validated["retention_days"] = self._validate_numeric("retention_days", validated.get("retention_days"), default_ref["retention_days"], 1, constants.data.MAX_RETENTION_DAYS)
        validated["stroke_width"] = self._validate_numeric("stroke_width", validated.get("stroke_width"), default_ref["stroke_width"], 0.5, defaults.MAXIMUM_STROKE_WIDTH)

        for key in ["stroke_color", "fill_color", "fill_color_secondary", "estimate_color"]:
            validated[key] = self._validate_color_hex(key, validated.get(key), default_ref[key])

        validated["interface_mode"] = self._validate_choice("interface_mode", validated.get("interface_mode"), default_ref["interface_mode"], sorted(constants.network.interface.VALID_INTERFACE_MODES))

        selected = validated.get("selected_interfaces")
        if not isinstance(selected, list) or not all(isinstance(i, str) for i in selected):
            self.logger.warning(constants.config.messages.INVALID_INTERFACES.format(value=selected))
            validated["selected_interfaces"] = []
        else:
            validated["selected_interfaces"] = list(selected)

        return {key: validated[key] for key in default_ref}


    def load(self) -> Dict[str, Any]:
        """Loads and validates the configuration from the file."""
        if not self.config_path.exists():
            self.logger.info("Configuration file not found. Creating with default settings.")
            return self.reset_to_defaults()
        try:
            with self.config_path.open("r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError:
            self.logger.error("Configuration file is corrupt. Backing it up and using defaults.")
            try:
                corrupt_path = self.config_path.with_name(f"{self.config_path.name}.corrupt")
                shutil.move(self.config_path, corrupt_path)
            except OSError:
                self.logger.exception("Failed to back up corrupt config file.")
            return self.reset_to_defaults()
        except OSError as e:
            msg = f"OS error reading config file {self.config_path}: {e}"
            self.logger.critical(msg)
            raise ConfigError(msg) from e

        if not isinstance(config, dict):
            self.logger.error("Configuration root is not an object. Using defaults.")
            return self.reset_to_defaults()

        validated_config = self._validate_config(config)
        self._last_config = validated_config.copy()
        return validated_config


    def save(self, config: Dict[str, Any]) -> None:
        """Atomically saves the provided configuration to the file."""
        validated_config = self._validate_config(config)

        if self._last_config == validated_config:
            self.logger.debug("Skipping save, configuration is unchanged.")
            return

        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", delete=False, dir=self.config_path.parent, encoding="utf-8"
            ) as temp_f:
                json.dump(validated_config, temp_f, indent=4)
                temp_path = temp_f.name
            shutil.move(temp_path, self.config_path)
            self._last_config = validated_config.copy()
            self.logger.debug("Configuration saved successfully to %s", self.config_path)
        except OSError as e:
            msg = f"Failed to save configuration to {self.config_path}: {e}"
            self.logger.error(msg)
            raise ConfigError(msg) from e


    def reset_to_defaults(self) -> Dict[str, Any]:
        """Resets the configuration to factory defaults and saves it."""
        self.logger.info("Resetting configuration to default values.")
        defaults = constants.config.defaults.DEFAULT_CONFIG.copy()
        defaults["selected_interfaces"] = []
        self.save(defaults)
        return defaults
