"""
Axis mappers that convert chart values into 1-D screen coordinates.

The series only depends on the `ChartAxis` protocol. `TimeAxis` and `DataAxis`
are the stock linear implementations used by `ChartController`; hosts may
supply their own as long as `convert_to_point` is monotonic over the queried
domain.
"""

import logging
from typing import Protocol, Tuple, runtime_checkable


@runtime_checkable
class ChartAxis(Protocol):
    """Maps a timestamp or a cumulative byte count onto a screen coordinate."""

    def convert_to_point(self, value: float) -> float:
        ...


class _LinearAxis:
    """Shared bounds/size bookkeeping for the linear axes."""

    def __init__(self, min_value: int = 0, max_value: int = 0, size: float = 0.0) -> None:
        self.logger = logging.getLogger(f"NetUsageChart.{self.__class__.__name__}")
        self._min = min_value
        self._max = max_value
        self._size = float(size)

    def set_bounds(self, min_value: int, max_value: int) -> bool:
        """
        Updates the value range.

        Returns:
            True if the bounds changed.

        Raises:
            ValueError: If `max_value < min_value`.
        """
        if max_value < min_value:
            raise ValueError(f"Axis max ({max_value}) must not be below min ({min_value})")
        if (min_value, max_value) == (self._min, self._max):
            return False
        self._min = min_value
        self._max = max_value
        self.logger.debug("Bounds set to [%d, %d]", min_value, max_value)
        return True

    def set_size(self, size: float) -> bool:
        """Updates the screen extent of the axis. Returns True if it changed."""
        if size < 0:
            raise ValueError(f"Axis size must be non-negative, got {size}")
        if float(size) == self._size:
            return False
        self._size = float(size)
        return True

    def get_bounds(self) -> Tuple[int, int]:
        return self._min, self._max

    @property
    def min_value(self) -> int:
        return self._min

    @property
    def max_value(self) -> int:
        return self._max

    @property
    def size(self) -> float:
        return self._size

    def _fraction(self, value: float) -> float:
        value_range = self._max - self._min
        if value_range <= 0:
            return 0.0
        return (value - self._min) / value_range


class TimeAxis(_LinearAxis):
    """Horizontal axis: `[min, max]` timestamps map linearly onto `[0, size]`."""

    def convert_to_point(self, value: float) -> float:
        return self._size * self._fraction(value)


class DataAxis(_LinearAxis):
    """
    Vertical axis: `[min, max]` bytes map linearly onto `[size, 0]`.

    Screen y grows downward, so zero usage sits on the bottom edge and the
    axis maximum on the top edge.
    """

    def convert_to_point(self, value: float) -> float:
        return self._size - self._size * self._fraction(value)
