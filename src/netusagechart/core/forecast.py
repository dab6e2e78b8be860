"""
Forward projection of cumulative usage past the last known sample.

The estimate is a seasonal-naive forecast: every projected step adds a blend of
the long-run rate (two weeks of history ending at the last sample) and a
short-run rate (the day ending at the same time of week, one week earlier),
weighted 70/30 in favor of the long-run trend. Rates are normalized to bytes
per nominal bucket so each step advances the running total by one bucket's
worth of expected usage.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from netusagechart import constants
from netusagechart.core.axis import ChartAxis
from netusagechart.core.history import NetworkStatsHistory

logger = logging.getLogger("NetUsageChart.Forecast")

Point = Tuple[float, float]


@dataclass(frozen=True, slots=True)
class Estimate:
    """Projected points (starting at the last real point) and the final projected total."""
    points: Tuple[Point, ...]
    max_estimate_total: int


def window_rate(history: NetworkStatsHistory, window_end: int, window_length: int,
                bucket_duration: int, now: Optional[int]) -> int:
    """
    Average usage per nominal bucket over the window ending at `window_end`.

    A window with no overlapping data yields a rate of zero.
    """
    entry = history.aggregate(window_end - window_length, window_end, now)
    return entry.total_bytes * bucket_duration // entry.duration


def blend_rates(long_rate: int, short_rate: int) -> int:
    """Combines the long-run and seasonal rates into a single per-step delta."""
    weights = constants.chart.forecast
    return (long_rate * weights.LONG_WEIGHT + short_rate * weights.SHORT_WEIGHT) // weights.WEIGHT_DIVISOR


def build_estimate_path(history: NetworkStatsHistory, horiz: ChartAxis, vert: ChartAxis, width: float,
                        last_x: float, last_y: float, last_time: int, total: int,
                        now: Optional[int] = None, max_steps: Optional[int] = None) -> Estimate:
    """
    Projects usage forward one nominal bucket at a time until the estimate
    reaches the right edge of the viewport.

    Args:
        history: Source history; provides the nominal bucket duration and the
            windowed aggregates.
        horiz: Time axis mapper.
        vert: Cumulative-bytes axis mapper.
        width: Viewport width in screen units. Must be finite.
        last_x: Screen x of the last real point.
        last_y: Screen y of the last real point.
        last_time: Timestamp of the last processed real bucket end.
        total: Running total after the real-data walk.
        now: Reference instant for the aggregate queries.
        max_steps: Iteration cap; defaults to `MAX_FORECAST_STEPS`.

    Returns:
        The projected `Estimate`.

    Raises:
        ValueError: If the nominal bucket duration is not positive or the width
            is not finite.
    """
    forecast = constants.chart.forecast
    bucket_duration = history.get_bucket_duration()
    if bucket_duration <= 0:
        raise ValueError(f"Nominal bucket duration must be positive, got {bucket_duration}")
    if not math.isfinite(width):
        raise ValueError(f"Viewport width must be finite, got {width}")
    if max_steps is None:
        max_steps = forecast.MAX_FORECAST_STEPS

    points = [(last_x, last_y)]

    long_rate = window_rate(history, last_time, forecast.LONG_WINDOW_MS, bucket_duration, now)

    future_time = 0
    steps = 0
    while last_x < width:
        if steps >= max_steps:
            logger.warning("Estimate stopped after %d steps at x=%.1f (width %.1f)", steps, last_x, width)
            break
        future_time += bucket_duration

        last_week_time = last_time - forecast.SEASON_MS + (future_time % forecast.SEASON_MS)
        short_rate = window_rate(history, last_week_time, forecast.SHORT_WINDOW_MS, bucket_duration, now)

        total += blend_rates(long_rate, short_rate)

        last_x = float(horiz.convert_to_point(last_time + future_time))
        last_y = float(vert.convert_to_point(total))
        points.append((last_x, last_y))
        steps += 1

    logger.debug("Estimate built: %d steps, long_rate=%d, total=%d", steps, long_rate, total)
    return Estimate(points=tuple(points), max_estimate_total=total)
