"""
Constants for series generation, forecasting, axis scaling and chart rendering.
"""
from typing import Final

from .app import app
from .timers import timers

class ForecastConstants:
    """Defines the windows and blend weights of the usage estimate."""
    LONG_WINDOW_MS: Final[int] = 2 * timers.WEEK_MS
    SHORT_WINDOW_MS: Final[int] = timers.DAY_MS
    SEASON_MS: Final[int] = timers.WEEK_MS

    # delta = (LONG * 7 + SHORT * 3) / 10
    LONG_WEIGHT: Final[int] = 7
    SHORT_WEIGHT: Final[int] = 3
    WEIGHT_DIVISOR: Final[int] = 10

    # Upper bound on projected points per generation pass
    MAX_FORECAST_STEPS: Final[int] = 10_000

    def __init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if self.LONG_WEIGHT + self.SHORT_WEIGHT != self.WEIGHT_DIVISOR:
            raise ValueError("Forecast weights must sum to WEIGHT_DIVISOR")
        if self.LONG_WINDOW_MS <= 0 or self.SHORT_WINDOW_MS <= 0 or self.SEASON_MS <= 0:
            raise ValueError("Forecast windows must be positive")
        if self.MAX_FORECAST_STEPS <= 0:
            raise ValueError("MAX_FORECAST_STEPS must be positive")

class AxisConstants:
    """Defines how the vertical (bytes) axis is rescaled between passes."""
    MIN_VERT_AXIS_BYTES: Final[int] = 50 * 1024 * 1024
    HEADROOM_NUMERATOR: Final[int] = 11
    HEADROOM_DENOMINATOR: Final[int] = 10

    def __init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if self.MIN_VERT_AXIS_BYTES <= 0:
            raise ValueError("MIN_VERT_AXIS_BYTES must be positive")
        if self.HEADROOM_NUMERATOR < self.HEADROOM_DENOMINATOR:
            raise ValueError("Headroom must not shrink the axis")

class RenderConstants:
    """Defines stroke widths and dash patterns for the chart renderer."""
    STROKE_WIDTH: Final[float] = 2.0
    ESTIMATE_WIDTH: Final[float] = 1.5
    ESTIMATE_DASHES: Final[tuple] = (4, 4)
    FIGURE_DPI: Final[int] = 100

    WINDOW_WIDTH: Final[int] = 800
    WINDOW_HEIGHT: Final[int] = 400
    WINDOW_TITLE: Final[str] = f"{app.APP_NAME} - Data Usage"

    def __init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if self.STROKE_WIDTH <= 0 or self.ESTIMATE_WIDTH <= 0:
            raise ValueError("Line widths must be positive")
        if len(self.ESTIMATE_DASHES) % 2:
            raise ValueError("ESTIMATE_DASHES must have an even number of entries")
        if self.WINDOW_WIDTH <= 0 or self.WINDOW_HEIGHT <= 0:
            raise ValueError("Window size must be positive")

class ChartConstants:
    """Container for chart-related constant groups."""
    def __init__(self) -> None:
        self.forecast = ForecastConstants()
        self.axis = AxisConstants()
        self.render = RenderConstants()

# Singleton instance for easy access
chart = ChartConstants()
