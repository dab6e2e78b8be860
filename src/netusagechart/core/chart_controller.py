"""
Coordinates a usage series with its axes and viewport.

The vertical axis has to be scaled to the series' maxima, but the maxima only
exist after the curves have been generated against some vertical axis. The
controller resolves this with an explicit two-pass protocol in `refresh`:
generate with the current axis, read the visible maximum, rescale the axis,
and generate again if the bounds changed.
"""

import logging
import time
from typing import Optional

from netusagechart import constants
from netusagechart.core.axis import DataAxis, TimeAxis
from netusagechart.core.history import NetworkStatsHistory
from netusagechart.core.series import Curves, NetworkSeries, Viewport


class ChartController:
    """Owns the time axis, the data axis, the series and the viewport."""

    def __init__(self, horiz: Optional[TimeAxis] = None, vert: Optional[DataAxis] = None) -> None:
        self.logger = logging.getLogger(f"NetUsageChart.{self.__class__.__name__}")
        self.horiz = horiz or TimeAxis()
        self.vert = vert or DataAxis(0, constants.chart.axis.MIN_VERT_AXIS_BYTES)
        self.series = NetworkSeries(self.horiz, self.vert)
        self.viewport = Viewport(0, 0)

    def bind_network_stats(self, history: NetworkStatsHistory) -> None:
        self.series.bind_network_stats(history)

    def set_visible_range(self, start: int, end: int) -> None:
        """Shows `[start, end]` on the time axis; the whole range becomes the primary range."""
        self.horiz.set_bounds(start, end)
        self.series.set_primary_range(start, end)
        self.logger.debug("Visible range set to [%d, %d]", start, end)

    def set_primary_range(self, left: int, right: int) -> None:
        self.series.set_primary_range(left, right)

    def set_end_time(self, end_time: Optional[int]) -> None:
        """Extends the real outline flat up to `end_time`, typically "now"."""
        self.series.set_end_time(end_time)

    def set_estimate_visible(self, estimate_visible: bool) -> None:
        self.series.set_estimate_visible(estimate_visible)

    def set_viewport(self, width: float, height: float) -> None:
        self.viewport = Viewport(width, height)
        self.horiz.set_size(width)
        self.vert.set_size(height)

    @staticmethod
    def compute_vert_max(max_visible: int) -> int:
        """Axis maximum for a visible total: at least the floor, plus headroom."""
        axis = constants.chart.axis
        return max(max_visible, axis.MIN_VERT_AXIS_BYTES) * axis.HEADROOM_NUMERATOR // axis.HEADROOM_DENOMINATOR

    def refresh(self, now: Optional[int] = None) -> Curves:
        """
        Regenerates the series, rescaling the vertical axis in between.

        Returns:
            The curves of the final pass.
        """
        if now is None:
            now = int(time.time() * 1000)

        curves = self.series.generate_path(self.viewport.width, self.viewport.height, now)

        new_max = self.compute_vert_max(self.series.get_max_visible())
        if self.vert.set_bounds(0, new_max):
            self.logger.debug("Vertical axis rescaled to %d bytes; regenerating", new_max)
            curves = self.series.generate_path(self.viewport.width, self.viewport.height, now)

        return curves
