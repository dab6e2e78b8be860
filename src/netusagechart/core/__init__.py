"""
Core submodule for NetUsageChart.

Contains the usage history, the axis mappers, the series/forecast builders and
the controller that ties them to a viewport.
"""

from netusagechart.core.chart_controller import ChartController
from netusagechart.core.history import Bucket, NetworkStatsHistory
from netusagechart.core.series import Curves, NetworkSeries, SeriesState, Viewport, generate_curves

__all__ = [
    "Bucket",
    "ChartController",
    "Curves",
    "NetworkSeries",
    "NetworkStatsHistory",
    "SeriesState",
    "Viewport",
    "generate_curves",
]
