"""
Provides centralized, immutable constants for the NetUsageChart application.

This package exposes singleton instances of constant groups, ensuring they
are validated on import and easily accessible from a single namespace.

Usage:
    from netusagechart import constants

    # Forecast blend weights
    constants.chart.forecast.LONG_WEIGHT

    # A default configuration value
    constants.config.defaults.DEFAULT_CONFIG["visible_days"]

    # A time unit in milliseconds
    constants.timers.WEEK_MS
"""

from .app import app
from .chart import chart
from .color import color
from .config import config
from .data import data
from .logs import logs
from .network import network
from .timers import timers

__all__ = [
    "app",
    "chart",
    "color",
    "config",
    "data",
    "logs",
    "network",
    "timers",
]
