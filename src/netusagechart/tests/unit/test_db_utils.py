"""
Unit tests for the SQLite persistence helpers.
"""
import sqlite3
import threading

import pytest

from netusagechart import constants
from netusagechart.core.history import Bucket, NetworkStatsHistory
from netusagechart.utils import db_utils


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "test_usage_history.db"
    db_utils.init_database(path)
    return path


def _history(*buckets: Bucket) -> NetworkStatsHistory:
    return NetworkStatsHistory.from_buckets(buckets, 1000)


def test_init_database_creates_table(db_path):
    with sqlite3.connect(db_path) as conn:
        tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")}
    assert constants.data.BUCKET_TABLE in tables


def test_init_database_is_idempotent(db_path):
    db_utils.init_database(db_path)


def test_persist_and_load_round_trip(db_path):
    history = _history(Bucket(0, 1000, 10, 1), Bucket(1000, 1000, 20, 2))
    assert db_utils.persist_history(db_path, history, "eth0") == 2

    loaded = db_utils.load_history(db_path, 1000)
    assert loaded.buckets == history.buckets
    assert loaded.get_bucket_duration() == 1000


def test_persist_replaces_existing_rows(db_path):
    db_utils.persist_history(db_path, _history(Bucket(0, 1000, 10, 1)), "eth0")
    db_utils.persist_history(db_path, _history(Bucket(0, 1000, 15, 3)), "eth0")

    assert db_utils.load_history(db_path, 1000).buckets == (Bucket(0, 1000, 15, 3),)


def test_persist_empty_history_writes_nothing(db_path):
    assert db_utils.persist_history(db_path, NetworkStatsHistory(1000), "eth0") == 0


def test_load_sums_interfaces_unless_one_is_requested(db_path):
    db_utils.persist_history(db_path, _history(Bucket(0, 1000, 10, 1)), "eth0")
    db_utils.persist_history(db_path, _history(Bucket(0, 1000, 5, 5)), "wlan0")

    assert db_utils.load_history(db_path, 1000).buckets == (Bucket(0, 1000, 15, 6),)
    assert db_utils.load_history(db_path, 1000, interface="wlan0").buckets == (Bucket(0, 1000, 5, 5),)


def test_load_time_window(db_path):
    lock = threading.Lock()
    history = _history(*(Bucket(i * 1000, 1000, i, 0) for i in range(5)))
    db_utils.persist_history(db_path, history, "eth0", lock)

    loaded = db_utils.load_history(db_path, 1000, start=1500, end=3500, db_lock=lock)
    assert [b.start for b in loaded] == [1000, 2000, 3000]


def test_prune_before(db_path):
    history = _history(*(Bucket(i * 1000, 1000, 1, 1) for i in range(4)))
    db_utils.persist_history(db_path, history, "eth0")

    assert db_utils.prune_before(db_path, 2000) == 2
    assert [b.start for b in db_utils.load_history(db_path, 1000)] == [2000, 3000]


def test_sqlite_errors_propagate(tmp_path):
    missing_table_db = tmp_path / "empty.db"
    with pytest.raises(sqlite3.Error):
        db_utils.load_history(missing_table_db, 1000)
