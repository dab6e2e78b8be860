import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from unittest.mock import MagicMock
from PyQt6.QtWidgets import QApplication

from netusagechart.core.history import Bucket, NetworkStatsHistory


@pytest.fixture(scope="session")
def q_app():
    """Provides a QApplication instance for the test session."""
    return QApplication.instance() or QApplication([])


@pytest.fixture
def make_axis():
    """Builds an axis mock whose convert_to_point applies the given function."""
    def _make(func):
        axis = MagicMock()
        axis.convert_to_point.side_effect = func
        return axis
    return _make


@pytest.fixture
def two_bucket_history() -> NetworkStatsHistory:
    """Two adjacent 1-second buckets of 100 and 200 received bytes."""
    return NetworkStatsHistory.from_buckets(
        [Bucket(0, 1000, 100, 0), Bucket(1000, 1000, 200, 0)], 1000
    )
