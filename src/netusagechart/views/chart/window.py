"""
Window hosting the usage chart.

`ChartWindow` embeds the matplotlib canvas of a `ChartRenderer` and regenerates
the series whenever its size changes, mirroring how a view rebuilds its
outline on layout.
"""

import logging
from typing import Any, Dict, Optional

from PyQt6.QtWidgets import QSizePolicy, QVBoxLayout, QWidget
from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg as FigureCanvas

from netusagechart import constants
from netusagechart.core.chart_controller import ChartController
from netusagechart.core.series import Curves
from netusagechart.utils.helpers import format_data_size
from netusagechart.views.chart.renderer import ChartRenderer


class ChartWindow(QWidget):
    """Top-level widget showing one cumulative usage series and its estimate."""

    def __init__(self, controller: ChartController, config: Dict[str, Any],
                 parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.logger = logging.getLogger(f"NetUsageChart.{self.__class__.__name__}")
        self.controller = controller
        self.config = config

        self.renderer = ChartRenderer(config, logger=self.logger)
        self.canvas = FigureCanvas(self.renderer.figure)
        self.canvas.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.canvas)

        self.setWindowTitle(constants.chart.render.WINDOW_TITLE)
        self.resize(constants.chart.render.WINDOW_WIDTH, constants.chart.render.WINDOW_HEIGHT)

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        self.refresh()

    def refresh(self, now: Optional[int] = None) -> Optional[Curves]:
        """
        Regenerates the curves for the current canvas size and redraws.

        Returns:
            The new curves, or None while the canvas has no area.
        """
        width = self.canvas.width()
        height = self.canvas.height()
        if width <= 0 or height <= 0:
            return None

        self.controller.set_viewport(width, height)
        curves = self.controller.refresh(now)
        self.renderer.render(self.controller.series, self.controller.viewport)
        self.canvas.draw_idle()

        value, unit = format_data_size(curves.max_real_total)
        self.setWindowTitle(f"{constants.chart.render.WINDOW_TITLE} ({value:.2f} {unit})")
        return curves
