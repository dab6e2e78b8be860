"""
Unit tests for the application entry point helpers.
"""
from netusagechart import constants
from netusagechart.core.chart_controller import ChartController
from netusagechart.core.history import Bucket, NetworkStatsHistory
from monitor import follow_now, prune_history, visible_range


DAY = constants.timers.DAY_MS
HOUR = constants.timers.HOUR_MS


def _hourly(start_day: int, end_day: int) -> NetworkStatsHistory:
    return NetworkStatsHistory.from_buckets(
        [Bucket(t, HOUR, 3600, 0) for t in range(start_day * DAY, end_day * DAY, HOUR)], HOUR
    )


def test_visible_range_leaves_room_for_estimate():
    start, end = visible_range(100 * DAY, 28)
    assert start == 72 * DAY
    assert end == 107 * DAY


def test_follow_now_slides_the_time_axis():
    controller = ChartController()
    follow_now(controller, 100 * DAY, 28)
    assert controller.horiz.get_bounds() == (72 * DAY, 107 * DAY)
    assert controller.series.state.end_time == 100 * DAY

    follow_now(controller, 108 * DAY, 28)
    assert controller.horiz.get_bounds() == (80 * DAY, 115 * DAY)
    assert controller.series.state.primary_range_right == 115 * DAY
    assert controller.series.state.end_time == 108 * DAY


def test_estimate_survives_running_past_the_initial_window():
    controller = ChartController()
    controller.bind_network_stats(_hourly(99, 108))
    controller.set_viewport(400, 100)
    follow_now(controller, 100 * DAY, 28)

    # a week later the data runs past the startup window
    follow_now(controller, 108 * DAY, 28)
    curves = controller.refresh(now=108 * DAY)

    assert curves.last_real_x < 400
    assert len(curves.estimate) > 1
    assert curves.estimate[-1][0] >= 400


def test_prune_history_drops_buckets_past_retention():
    history = _hourly(0, 10)

    assert prune_history(history, 10 * DAY, retention_days=3) == 7 * 24
    assert history.get_start() == 7 * DAY
    assert history.get_end() == 10 * DAY

    assert prune_history(history, 10 * DAY, retention_days=3) == 0
