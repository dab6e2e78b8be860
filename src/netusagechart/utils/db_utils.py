"""
Database utility functions for NetUsageChart.

This module provides functions to:
- Initialize the SQLite database (`usage_history.db`) holding bucketed usage.
- Persist a `NetworkStatsHistory` for one interface.
- Load history back, summed across interfaces, for charting.
- Prune buckets older than the retention period.

The database schema:
- `usage_buckets`: (bucket_start, bucket_duration, rx_bytes, tx_bytes, interface),
  keyed by (bucket_start, interface).

Write and read operations are serialised with a caller-provided lock.
"""

import logging
import sqlite3
import threading
from contextlib import nullcontext
from pathlib import Path
from typing import List, Optional, Union

from netusagechart import constants
from netusagechart.core.history import Bucket, NetworkStatsHistory


def init_database(db_path: Union[str, Path]) -> None:
    """
    Initialize the SQLite database with the bucket table and its index.
    """
    logger = logging.getLogger("NetUsageChart.db_utils")
    logger.debug("Initializing database at %s", db_path)
    table = constants.data.BUCKET_TABLE
    try:
        with sqlite3.connect(db_path, timeout=constants.data.DB_TIMEOUT_SECONDS) as conn:
            cursor = conn.cursor()
            cursor.execute(f"""
                CREATE TABLE IF NOT EXISTS {table} (
                    bucket_start INTEGER NOT NULL, bucket_duration INTEGER NOT NULL,
                    rx_bytes INTEGER NOT NULL, tx_bytes INTEGER NOT NULL, interface TEXT NOT NULL,
                    PRIMARY KEY (bucket_start, interface)
                )
            """)
            cursor.execute(f"CREATE INDEX IF NOT EXISTS idx_{table}_start ON {table}(bucket_start)")
            conn.commit()
            logger.debug("Database initialized successfully")
    except sqlite3.Error as e:
        logger.error("Failed to initialize database: %s", e)
        raise


def persist_history(db_path: Union[str, Path], history: NetworkStatsHistory, interface: str,
                    db_lock: Optional[threading.Lock] = None) -> int:
    """
    Upserts every bucket of `history` under the given interface name.

    Returns:
        The number of buckets written.
    """
    logger = logging.getLogger("NetUsageChart.db_utils")
    batch = [(b.start, b.duration, b.rx_bytes, b.tx_bytes, interface) for b in history]
    if not batch:
        return 0
    try:
        with db_lock or nullcontext(), sqlite3.connect(db_path, timeout=constants.data.DB_TIMEOUT_SECONDS) as conn:
            cursor = conn.cursor()
            cursor.executemany(
                f"INSERT OR REPLACE INTO {constants.data.BUCKET_TABLE} "
                "(bucket_start, bucket_duration, rx_bytes, tx_bytes, interface) VALUES (?, ?, ?, ?, ?)",
                batch
            )
            conn.commit()
            logger.debug("Persisted %d buckets for interface %s", len(batch), interface)
    except sqlite3.Error as e:
        logger.error("Failed to persist history: %s", e)
        raise
    return len(batch)


def load_history(db_path: Union[str, Path], bucket_duration: int, start: Optional[int] = None,
                 end: Optional[int] = None, interface: Optional[str] = None,
                 db_lock: Optional[threading.Lock] = None) -> NetworkStatsHistory:
    """
    Loads stored buckets into a `NetworkStatsHistory`.

    Rows sharing a bucket start are summed across interfaces unless a single
    interface is requested.

    Args:
        db_path: Path to the SQLite database file.
        bucket_duration: Nominal bucket duration of the returned history (ms).
        start: Only load buckets ending after this timestamp.
        end: Only load buckets starting before this timestamp.
        interface: Restrict to one interface; None sums all.
        db_lock: Lock serialising database access.
    """
    logger = logging.getLogger("NetUsageChart.db_utils")
    query_parts = [
        "SELECT bucket_start, MAX(bucket_duration), SUM(rx_bytes), SUM(tx_bytes)",
        f"FROM {constants.data.BUCKET_TABLE} WHERE 1 = 1",
    ]
    params: List[Union[int, str]] = []
    if start is not None:
        query_parts.append("AND bucket_start + bucket_duration > ?")
        params.append(start)
    if end is not None:
        query_parts.append("AND bucket_start < ?")
        params.append(end)
    if interface:
        query_parts.append("AND interface = ?")
        params.append(interface)
    query_parts.append("GROUP BY bucket_start ORDER BY bucket_start ASC")

    try:
        with db_lock or nullcontext(), sqlite3.connect(db_path, timeout=constants.data.DB_TIMEOUT_SECONDS) as conn:
            cursor = conn.cursor()
            cursor.execute(" ".join(query_parts), params)
            rows = cursor.fetchall()
    except sqlite3.Error as e:
        logger.error("Failed to load history: %s", e, exc_info=True)
        raise

    buckets = [Bucket(start=row[0], duration=row[1], rx_bytes=row[2], tx_bytes=row[3]) for row in rows]
    logger.debug("Loaded %d buckets from %s", len(buckets), db_path)
    return NetworkStatsHistory.from_buckets(buckets, bucket_duration)


def prune_before(db_path: Union[str, Path], cutoff: int, db_lock: Optional[threading.Lock] = None) -> int:
    """
    Deletes buckets ending at or before `cutoff`.

    Returns:
        The number of rows deleted.
    """
    logger = logging.getLogger("NetUsageChart.db_utils")
    try:
        with db_lock or nullcontext(), sqlite3.connect(db_path, timeout=constants.data.DB_TIMEOUT_SECONDS) as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"DELETE FROM {constants.data.BUCKET_TABLE} WHERE bucket_start + bucket_duration <= ?",
                (cutoff,)
            )
            conn.commit()
            deleted = cursor.rowcount
    except sqlite3.Error as e:
        logger.error("Failed to prune history: %s", e)
        raise
    logger.info("Pruned %d buckets ending before %d", deleted, cutoff)
    return deleted
