"""
Cumulative usage series: turns a bound history into renderable outlines.

`generate_curves` is the pure entry point. It walks the history, accumulating
rx+tx into a running total and mapping every bucket end through the axis
mappers, to build a stroke outline and a fill polygon closed down to the
baseline. It then hands the end state to the forecast to build the estimate
outline.

`NetworkSeries` wraps that function with the view state a host needs: the bound
history, the primary range, the end time, estimate visibility and the maxima
of the last generation pass.
"""

import logging
import math
import time
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple

from netusagechart.core.axis import ChartAxis
from netusagechart.core.forecast import Point, build_estimate_path
from netusagechart.core.history import NetworkStatsHistory

logger = logging.getLogger("NetUsageChart.Series")


@dataclass(frozen=True, slots=True)
class Viewport:
    """Screen extent the axes map into."""
    width: float
    height: float

    def __post_init__(self):
        if not math.isfinite(self.width) or not math.isfinite(self.height):
            raise ValueError(f"Viewport must be finite, got {self.width}x{self.height}")
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Viewport must be non-negative, got {self.width}x{self.height}")


@dataclass(frozen=True, slots=True)
class SeriesState:
    """
    View state of a series.

    Attributes:
        primary_range_left: Start of the highlighted time range.
        primary_range_right: End of the highlighted time range.
        end_time: The outline is extended flat up to this timestamp, or None.
        estimate_visible: Whether the estimate counts towards the visible max.
        max_real_total: Running total after the last real-data walk.
        max_estimate_total: Running total after the last forecast.
    """
    primary_range_left: int = 0
    primary_range_right: int = 0
    end_time: Optional[int] = None
    estimate_visible: bool = False
    max_real_total: int = 0
    max_estimate_total: int = 0


@dataclass(frozen=True, slots=True)
class Curves:
    """Output outlines in screen coordinates plus the totals behind them."""
    stroke: Tuple[Point, ...] = ()
    fill: Tuple[Point, ...] = ()
    estimate: Tuple[Point, ...] = ()
    max_real_total: int = 0
    max_estimate_total: int = 0
    last_real_x: float = 0.0
    last_real_y: float = 0.0
    last_real_time: Optional[int] = None

    @classmethod
    def empty(cls) -> "Curves":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not (self.stroke or self.fill or self.estimate)


@dataclass(slots=True)
class RealPath:
    """End state of the real-data walk."""
    stroke: List[Point] = field(default_factory=list)
    fill: List[Point] = field(default_factory=list)
    total: int = 0
    first_x: float = 0.0
    last_x: float = 0.0
    last_y: float = 0.0
    last_time: Optional[int] = None
    started: bool = False


def build_real_path(history: NetworkStatsHistory, horiz: ChartAxis, vert: ChartAxis,
                    viewport: Viewport, end_time: Optional[int] = None) -> RealPath:
    """
    Walks the real buckets and builds the stroke and fill outlines.

    Drawing starts at the first bucket (after the first) whose end maps to a
    positive x; the outline opens at the previous bucket's point. From then on
    each bucket emits its point using the total accumulated *before* it, and
    only afterwards adds its own rx+tx. Buckets before the start are not
    counted and a bucket straddling the left edge is not prorated.
    """
    path = RealPath()
    if history.size() < 2:
        return path

    total = 0
    last_x = 0.0
    last_y = 0.0
    last_time = None

    for index, bucket in enumerate(history):
        last_time = bucket.end
        x = float(horiz.convert_to_point(last_time))
        y = float(vert.convert_to_point(total))

        # skip until the first bucket on screen
        if index > 0 and not path.started and x > 0:
            path.stroke.append((last_x, last_y))
            path.fill.append((last_x, last_y))
            path.started = True
            path.first_x = last_x

        if path.started:
            path.stroke.append((x, y))
            path.fill.append((x, y))
            total += bucket.total_bytes

        if x > viewport.width:
            break

        last_x = x
        last_y = y

    # data falls short of the requested end time: hold flat
    if end_time is not None and last_time < end_time:
        last_x = float(horiz.convert_to_point(end_time))
        if path.started:
            path.stroke.append((last_x, last_y))
            path.fill.append((last_x, last_y))

    if path.started:
        path.fill.append((last_x, float(viewport.height)))
        path.fill.append((path.first_x, float(viewport.height)))

    path.total = total
    path.last_x = last_x
    path.last_y = last_y
    path.last_time = last_time
    return path


def generate_curves(state: SeriesState, history: Optional[NetworkStatsHistory], horiz: ChartAxis,
                    vert: ChartAxis, viewport: Viewport, now: Optional[int] = None) -> Curves:
    """
    Builds the stroke, fill and estimate outlines for `history`.

    Fewer than two buckets is a valid no-render condition and yields
    `Curves.empty()`.

    Args:
        state: Current series state; only `end_time` is read.
        history: Bound history, or None when unbound.
        horiz: Time axis mapper.
        vert: Cumulative-bytes axis mapper.
        viewport: Screen extent.
        now: Reference instant for the forecast's aggregate queries.

    Raises:
        ValueError: If the history's nominal bucket duration is not positive.
    """
    if history is None or history.size() < 2:
        logger.debug("Not enough buckets to render (%d)", 0 if history is None else history.size())
        return Curves.empty()

    real = build_real_path(history, horiz, vert, viewport, state.end_time)
    estimate = build_estimate_path(
        history, horiz, vert, viewport.width,
        last_x=real.last_x, last_y=real.last_y, last_time=real.last_time,
        total=real.total, now=now,
    )

    logger.debug(
        "Generated curves: stroke=%d fill=%d estimate=%d points, real_total=%d, estimate_total=%d",
        len(real.stroke), len(real.fill), len(estimate.points), real.total, estimate.max_estimate_total,
    )
    return Curves(
        stroke=tuple(real.stroke),
        fill=tuple(real.fill),
        estimate=estimate.points,
        max_real_total=real.total,
        max_estimate_total=estimate.max_estimate_total,
        last_real_x=real.last_x,
        last_real_y=real.last_y,
        last_real_time=real.last_time,
    )


class NetworkSeries:
    """
    A `NetworkStatsHistory` series, mapped into screen coordinates through a
    horizontal and a vertical `ChartAxis`.

    The series is Unbound until `bind_network_stats` is called. Every call to
    `generate_path` replaces the curves in full; nothing is updated in place.
    """

    def __init__(self, horiz: ChartAxis, vert: ChartAxis) -> None:
        """
        Raises:
            ValueError: If either axis is missing.
        """
        if horiz is None:
            raise ValueError("missing horiz")
        if vert is None:
            raise ValueError("missing vert")
        self.logger = logging.getLogger(f"NetUsageChart.{self.__class__.__name__}")
        self._horiz = horiz
        self._vert = vert
        self._history: Optional[NetworkStatsHistory] = None
        self._state = SeriesState()
        self._curves = Curves.empty()

    @property
    def horiz(self) -> ChartAxis:
        return self._horiz

    @property
    def vert(self) -> ChartAxis:
        return self._vert

    @property
    def state(self) -> SeriesState:
        return self._state

    @property
    def curves(self) -> Curves:
        return self._curves

    @property
    def history(self) -> Optional[NetworkStatsHistory]:
        return self._history

    @property
    def is_bound(self) -> bool:
        return self._history is not None

    def bind_network_stats(self, history: NetworkStatsHistory) -> None:
        """Binds new history, discarding the curves and maxima of the previous one."""
        self._history = history
        self._curves = Curves.empty()
        self._state = replace(self._state, max_real_total=0, max_estimate_total=0)
        self.logger.debug("Bound history with %d buckets", history.size() if history is not None else 0)

    def set_primary_range(self, left: int, right: int) -> None:
        """Sets the time range painted with the primary fill; the rest uses the secondary fill."""
        self._state = replace(self._state, primary_range_left=left, primary_range_right=right)

    def set_end_time(self, end_time: Optional[int]) -> None:
        self._state = replace(self._state, end_time=end_time)

    def set_estimate_visible(self, estimate_visible: bool) -> None:
        self._state = replace(self._state, estimate_visible=bool(estimate_visible))

    def generate_path(self, width: float, height: float, now: Optional[int] = None) -> Curves:
        """
        Regenerates all curves from the bound history.

        Args:
            width: Viewport width in screen units.
            height: Viewport height in screen units.
            now: Reference instant in ms; defaults to the current time.

        Returns:
            The new `Curves`, also available through `curves`.
        """
        if now is None:
            now = int(time.time() * 1000)
        self._curves = generate_curves(self._state, self._history, self._horiz, self._vert,
                                       Viewport(width, height), now)
        self._state = replace(
            self._state,
            max_real_total=self._curves.max_real_total,
            max_estimate_total=self._curves.max_estimate_total,
        )
        return self._curves

    def get_max_real(self) -> int:
        return self._state.max_real_total

    def get_max_estimate(self) -> int:
        return self._state.max_estimate_total

    def get_max_visible(self) -> int:
        """Largest total the renderer will show: the estimate's when visible, otherwise the real data's."""
        return self._state.max_estimate_total if self._state.estimate_visible else self._state.max_real_total
