"""
Application entry point and lifecycle management for NetUsageChart.
"""

import logging
import signal
import sys
import threading
import time
from typing import Tuple

from PyQt6.QtCore import QTimer
from PyQt6.QtWidgets import QApplication, QMessageBox

from netusagechart import constants
from netusagechart.core.chart_controller import ChartController
from netusagechart.core.history import NetworkStatsHistory
from netusagechart.core.model import UsageRecorder
from netusagechart.utils import db_utils
from netusagechart.utils.config import ConfigManager
from netusagechart.utils.helpers import format_data_size, get_app_data_path, setup_logging
from netusagechart.views.chart.window import ChartWindow


def visible_range(now: int, visible_days: int) -> Tuple[int, int]:
    """Time axis bounds: `visible_days` of history plus a quarter of that ahead for the estimate."""
    span = visible_days * constants.timers.DAY_MS
    return now - span, now + span // 4


def follow_now(controller: ChartController, now: int, visible_days: int) -> None:
    """Slides the time axis so that `now` keeps its place and extends the outline up to it."""
    controller.set_visible_range(*visible_range(now, visible_days))
    controller.set_end_time(now)


def prune_history(history: NetworkStatsHistory, now: int, retention_days: int) -> int:
    """Drops in-memory buckets older than the retention period, returning how many were removed."""
    return history.remove_buckets_before(now - retention_days * constants.timers.DAY_MS)


def main() -> int:
    """
    Main entry point for the NetUsageChart application.

    Orchestrates the application's startup sequence:
    1. Sets up logging.
    2. Loads configuration.
    3. Opens the usage database and loads the retained history.
    4. Starts sampling network counters into the history.
    5. Shows the chart window and runs the event loop, persisting on exit.

    Returns:
        An integer exit code.
    """
    setup_logging()
    logger = logging.getLogger("NetUsageChart.Main")
    logger.info("Starting %s v%s", constants.app.APP_NAME, constants.app.VERSION)

    app = QApplication(sys.argv)

    try:
        config = ConfigManager().load()

        db_path = get_app_data_path() / constants.data.DB_FILENAME
        db_lock = threading.Lock()
        db_utils.init_database(db_path)

        now = int(time.time() * 1000)
        bucket_duration = config["bucket_duration_minutes"] * constants.timers.MINUTE_MS
        retention_start = now - config["retention_days"] * constants.timers.DAY_MS
        db_utils.prune_before(db_path, retention_start, db_lock)
        history = db_utils.load_history(db_path, bucket_duration, start=retention_start, db_lock=db_lock)
        value, unit = format_data_size(history.get_total_bytes())
        logger.info("Loaded %d buckets of usage history (%s to %s, %.2f %s)",
                    history.size(), history.get_start(), history.get_end(), value, unit)

        recorder = UsageRecorder(history)
        if config["interface_mode"] == "selected" and config["selected_interfaces"]:
            recorder.set_interfaces("selected", config["selected_interfaces"])
        recorder.sample()

        controller = ChartController()
        controller.bind_network_stats(history)
        follow_now(controller, now, config["visible_days"])
        controller.set_estimate_visible(config["estimate_visible"])

        window = ChartWindow(controller, config)

        def on_sample() -> None:
            try:
                recorder.sample()
            except RuntimeError as e:
                logger.error("Sampling failed: %s", e)
                return
            follow_now(controller, int(time.time() * 1000), config["visible_days"])
            window.refresh()

        def on_persist() -> None:
            now_ms = int(time.time() * 1000)
            if prune_history(history, now_ms, config["retention_days"]):
                db_utils.prune_before(db_path, now_ms - config["retention_days"] * constants.timers.DAY_MS, db_lock)
            db_utils.persist_history(db_path, history, constants.network.interface.ALL_INTERFACES_KEY, db_lock)

        sample_timer = QTimer()
        sample_timer.timeout.connect(on_sample)
        sample_timer.start(int(config["update_rate"] * 1000))

        persist_timer = QTimer()
        persist_timer.timeout.connect(on_persist)
        persist_timer.start(constants.timers.PERSIST_INTERVAL_MS)

        app.aboutToQuit.connect(on_persist)

        signal.signal(signal.SIGINT, lambda s, f: QApplication.instance().quit())
        signal.signal(signal.SIGTERM, lambda s, f: QApplication.instance().quit())

        window.show()
        return app.exec()

    except Exception as e:
        logger.critical("A critical error occurred during startup: %s", e, exc_info=True)
        QMessageBox.critical(None, "Application Error", f"A critical error occurred and NetUsageChart must close:\n\n{e}")
        return 1

if __name__ == "__main__":
    sys.exit(main())
