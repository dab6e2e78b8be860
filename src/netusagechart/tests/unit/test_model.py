"""
Unit tests for the UsageRecorder class in the NetUsageChart application.
"""
import pytest
from unittest.mock import MagicMock, patch
from typing import Iterator
import psutil

from netusagechart.core.history import NetworkStatsHistory
from netusagechart.core.model import UsageRecorder


class MockNetIO:
    """A simple mock object to simulate psutil's snetio counter objects."""
    def __init__(self, bytes_sent, bytes_recv):
        self.bytes_sent = bytes_sent
        self.bytes_recv = bytes_recv


class FakeClock:
    """Wall clock that only moves when told to."""
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def history() -> NetworkStatsHistory:
    return NetworkStatsHistory(1000)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def recorder(history: NetworkStatsHistory, clock: FakeClock) -> UsageRecorder:
    """Provides a fresh UsageRecorder, patching its interface detection."""
    with patch.object(UsageRecorder, '_get_available_interfaces', return_value=["eth0", "lo", "wlan0"]):
        return UsageRecorder(history, clock=clock)


@pytest.fixture
def mock_psutil() -> Iterator[MagicMock]:
    """Mocks the psutil.net_io_counters function for the duration of a test."""
    with patch("netusagechart.core.model.psutil.net_io_counters") as mock:
        yield mock


def test_first_sample_only_primes(recorder: UsageRecorder, mock_psutil: MagicMock, history):
    mock_psutil.return_value = {"eth0": MockNetIO(bytes_sent=1000, bytes_recv=2000)}
    assert recorder.sample() == (0, 0)
    assert history.size() == 0
    assert recorder.last_sample_ms == 1_000_000


def test_sample_records_delta_into_history(recorder: UsageRecorder, mock_psutil: MagicMock,
                                           history, clock: FakeClock):
    mock_psutil.return_value = {"eth0": MockNetIO(bytes_sent=1000, bytes_recv=2000)}
    recorder.sample()

    clock.now = 1002.0
    mock_psutil.return_value = {"eth0": MockNetIO(bytes_sent=3000, bytes_recv=5000)}
    rx, tx = recorder.sample()

    assert (rx, tx) == (3000, 2000)
    # two seconds of usage spread over two 1 s buckets
    assert [b.start for b in history] == [1_000_000, 1_001_000]
    assert [b.rx_bytes for b in history] == [1500, 1500]
    assert [b.tx_bytes for b in history] == [1000, 1000]


def test_sample_sums_monitored_interfaces_and_skips_loopback(recorder: UsageRecorder, mock_psutil: MagicMock,
                                                             clock: FakeClock):
    mock_psutil.return_value = {
        "eth0": MockNetIO(0, 0), "wlan0": MockNetIO(0, 0), "lo": MockNetIO(0, 0),
    }
    recorder.sample()

    clock.now = 1001.0
    mock_psutil.return_value = {
        "eth0": MockNetIO(10, 100), "wlan0": MockNetIO(20, 200), "lo": MockNetIO(9999, 9999),
    }
    assert recorder.sample() == (300, 30)


def test_counter_reset_counts_as_zero(recorder: UsageRecorder, mock_psutil: MagicMock, clock: FakeClock):
    mock_psutil.return_value = {"eth0": MockNetIO(5000, 5000)}
    recorder.sample()

    clock.now = 1001.0
    mock_psutil.return_value = {"eth0": MockNetIO(100, 200)}
    assert recorder.sample() == (0, 0)

    clock.now = 1002.0
    mock_psutil.return_value = {"eth0": MockNetIO(150, 300)}
    assert recorder.sample() == (100, 50)


def test_new_interface_is_primed_first(recorder: UsageRecorder, mock_psutil: MagicMock, clock: FakeClock):
    mock_psutil.return_value = {"eth0": MockNetIO(0, 0)}
    recorder.sample()

    clock.now = 1001.0
    mock_psutil.return_value = {"eth0": MockNetIO(0, 10), "wlan0": MockNetIO(5000, 5000)}
    assert recorder.sample() == (10, 0)


def test_clock_moving_backwards_skips_sample(recorder: UsageRecorder, mock_psutil: MagicMock,
                                             history, clock: FakeClock):
    mock_psutil.return_value = {"eth0": MockNetIO(0, 0)}
    recorder.sample()

    clock.now = 900.0
    mock_psutil.return_value = {"eth0": MockNetIO(10, 10)}
    with patch.object(recorder.logger, 'warning') as mock_warning:
        assert recorder.sample() == (0, 0)
        mock_warning.assert_called_once()
    assert history.size() == 0


def test_exception_during_sample_raises_runtime_error(recorder: UsageRecorder, mock_psutil: MagicMock):
    """
    Tests that a psutil error is caught and re-raised as a controlled RuntimeError.
    """
    mock_psutil.side_effect = psutil.AccessDenied()

    with pytest.raises(RuntimeError, match="Failed to sample usage"):
        recorder.sample()


def test_selected_mode_only_counts_selected(recorder: UsageRecorder, mock_psutil: MagicMock, clock: FakeClock):
    recorder.set_interfaces("selected", ["wlan0"])
    mock_psutil.return_value = {"eth0": MockNetIO(0, 0), "wlan0": MockNetIO(0, 0)}
    recorder.sample()

    clock.now = 1001.0
    mock_psutil.return_value = {"eth0": MockNetIO(100, 100), "wlan0": MockNetIO(7, 8)}
    assert recorder.sample() == (8, 7)


def test_set_interfaces_validation(recorder: UsageRecorder):
    with pytest.raises(ValueError, match="Invalid interface mode"):
        recorder.set_interfaces("some", [])
    with pytest.raises(ValueError, match="cannot be empty"):
        recorder.set_interfaces("selected", [])
    with pytest.raises(ValueError, match="Invalid interfaces"):
        recorder.set_interfaces("selected", ["eth9"])


def test_reset_requires_new_priming(recorder: UsageRecorder, mock_psutil: MagicMock, history, clock: FakeClock):
    mock_psutil.return_value = {"eth0": MockNetIO(0, 0)}
    recorder.sample()
    recorder.reset()

    clock.now = 1001.0
    mock_psutil.return_value = {"eth0": MockNetIO(10, 10)}
    assert recorder.sample() == (0, 0)
    assert history.size() == 0


def test_interface_lookup_failure_propagates(history):
    with patch("netusagechart.core.model.psutil.net_io_counters", side_effect=psutil.AccessDenied()):
        with pytest.raises(psutil.Error):
            UsageRecorder(history)
