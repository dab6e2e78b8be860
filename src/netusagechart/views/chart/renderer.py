import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
from matplotlib.figure import Figure
from matplotlib.patches import PathPatch, Rectangle
from matplotlib.path import Path

from netusagechart import constants
from netusagechart.core.series import NetworkSeries, Viewport


class ChartRenderer:
    """
    Draws a `NetworkSeries` onto a matplotlib Figure.

    The single Axes fills the whole figure and uses screen coordinates, so the
    series' points are plotted as-is: x in [0, width], y in [height, 0].
    Owns the Figure; the hosting view wraps it in a canvas.
    """

    def __init__(self, config: Dict[str, Any], figure: Optional[Figure] = None, logger=None):
        self.logger = logger or logging.getLogger(f"NetUsageChart.{self.__class__.__name__}")
        self.config = config
        self.figure = figure or Figure(dpi=constants.chart.render.FIGURE_DPI)
        self.ax = self.figure.add_axes((0, 0, 1, 1))
        self.ax.set_axis_off()
        self._artists: List[Any] = []

    def clear_plot(self):
        """Remove every artist from the previous render."""
        for artist in self._artists:
            artist.remove()
        self._artists = []

    @staticmethod
    def _clip_rect(left: float, right: float, viewport: Viewport) -> Tuple[float, float]:
        """Clamp a horizontal span to the viewport, returning (x, width)."""
        left = min(max(left, 0.0), viewport.width)
        right = min(max(right, left), viewport.width)
        return left, right - left

    def _clipped(self, artist, left: float, right: float, viewport: Viewport):
        x, width = self._clip_rect(left, right, viewport)
        clip = Rectangle((x, 0), width, viewport.height, transform=self.ax.transData)
        artist.set_clip_path(clip)
        return artist

    @staticmethod
    def _fill_path(points: Sequence[Tuple[float, float]]) -> Path:
        verts = np.asarray(points, dtype=float)
        codes = [Path.MOVETO] + [Path.LINETO] * (len(verts) - 1)
        return Path(verts, codes)

    def render(self, series: NetworkSeries, viewport: Viewport) -> List[Any]:
        """
        Draws the series' current curves.

        The fill is drawn three times: the parts left and right of the primary
        range with the secondary color, the primary range itself with the
        primary color. The stroke is only drawn inside the primary range and
        the dashed estimate only when the estimate is visible.

        Returns:
            The artists added by this render.
        """
        self.clear_plot()

        self.ax.set_xlim(0, viewport.width)
        self.ax.set_ylim(viewport.height, 0)

        curves = series.curves
        state = series.state
        if curves.is_empty:
            self.logger.debug("Nothing to render")
            return []

        primary_left = series.horiz.convert_to_point(state.primary_range_left)
        primary_right = series.horiz.convert_to_point(state.primary_range_right)

        if state.estimate_visible and len(curves.estimate) > 1:
            xs, ys = np.asarray(curves.estimate, dtype=float).T
            line, = self.ax.plot(
                xs, ys,
                color=self.config["estimate_color"],
                linewidth=constants.chart.render.ESTIMATE_WIDTH,
                dashes=constants.chart.render.ESTIMATE_DASHES,
                zorder=3,
            )
            self._artists.append(self._clipped(line, 0, viewport.width, viewport))

        if len(curves.fill) > 1:
            path = self._fill_path(curves.fill)
            spans = [
                (0, primary_left, self.config["fill_color_secondary"]),
                (primary_right, viewport.width, self.config["fill_color_secondary"]),
                (primary_left, primary_right, self.config["fill_color"]),
            ]
            for left, right, color in spans:
                patch = PathPatch(path, facecolor=color, edgecolor="none", zorder=1)
                self.ax.add_patch(patch)
                self._artists.append(self._clipped(patch, left, right, viewport))

        if len(curves.stroke) > 1:
            xs, ys = np.asarray(curves.stroke, dtype=float).T
            line, = self.ax.plot(
                xs, ys,
                color=self.config["stroke_color"],
                linewidth=self.config["stroke_width"],
                zorder=2,
            )
            self._artists.append(self._clipped(line, primary_left, primary_right, viewport))

        self.logger.debug("Rendered %d artists", len(self._artists))
        return list(self._artists)
