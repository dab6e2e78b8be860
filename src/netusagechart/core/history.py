"""
Time-bucketed network usage history for the usage chart.

This module defines the immutable `Bucket` record and `NetworkStatsHistory`, an
ordered collection of buckets with a nominal bucket duration. Besides plain
enumeration, the history answers windowed aggregate queries: given an arbitrary
`[start, end)` window it returns a synthetic bucket whose byte counts are the
prorated sum of every stored bucket overlapping that window. The forecast uses
these queries because its windows rarely line up with stored bucket boundaries.

All timestamps and durations are integer milliseconds.
"""

import bisect
import logging
from dataclasses import dataclass, replace
from typing import Iterable, Iterator, List, Optional, Tuple


logger = logging.getLogger("NetUsageChart.History")


@dataclass(frozen=True, slots=True)
class Bucket:
    """
    Usage transferred during a single time window.

    Attributes:
        start: Start of the window (ms since epoch).
        duration: Length of the window in ms.
        rx_bytes: Bytes received during the window.
        tx_bytes: Bytes transmitted during the window.
    """
    start: int
    duration: int
    rx_bytes: int = 0
    tx_bytes: int = 0

    @property
    def end(self) -> int:
        return self.start + self.duration

    @property
    def total_bytes(self) -> int:
        return self.rx_bytes + self.tx_bytes


class NetworkStatsHistory:
    """
    Ordered, non-overlapping sequence of `Bucket` records.

    Buckets are kept sorted by start time. The nominal bucket duration is used
    when new data is recorded and when the forecast steps forward in time;
    buckets supplied directly through `from_buckets` may have any duration.
    """

    def __init__(self, bucket_duration: int) -> None:
        """
        Args:
            bucket_duration: Nominal bucket length in ms. Must be positive.

        Raises:
            ValueError: If `bucket_duration` is not a positive integer.
        """
        if not isinstance(bucket_duration, int) or isinstance(bucket_duration, bool) or bucket_duration <= 0:
            raise ValueError(f"bucket_duration must be a positive integer, got {bucket_duration!r}")
        self._bucket_duration = bucket_duration
        self._buckets: List[Bucket] = []
        self._starts: List[int] = []

    @classmethod
    def from_buckets(cls, buckets: Iterable[Bucket], bucket_duration: int) -> "NetworkStatsHistory":
        """
        Builds a history from already-bucketed data.

        Raises:
            ValueError: If buckets are out of order, overlap, have a non-positive
                duration or carry negative byte counts.
        """
        history = cls(bucket_duration)
        for bucket in buckets:
            history._append(bucket)
        logger.debug("Built history with %d buckets (nominal duration %d ms)", len(history), bucket_duration)
        return history

    def _append(self, bucket: Bucket) -> None:
        if bucket.duration <= 0:
            raise ValueError(f"Bucket duration must be positive, got {bucket.duration} at {bucket.start}")
        if bucket.rx_bytes < 0 or bucket.tx_bytes < 0:
            raise ValueError(f"Bucket byte counts must be non-negative at {bucket.start}")
        if self._buckets and bucket.start < self._buckets[-1].end:
            raise ValueError(
                f"Buckets must be ordered and non-overlapping: {bucket.start} < {self._buckets[-1].end}"
            )
        self._buckets.append(bucket)
        self._starts.append(bucket.start)

    # --- Enumeration ---

    def __len__(self) -> int:
        return len(self._buckets)

    def __iter__(self) -> Iterator[Bucket]:
        return iter(tuple(self._buckets))

    def size(self) -> int:
        return len(self._buckets)

    def get_values(self, index: int) -> Bucket:
        return self._buckets[index]

    @property
    def buckets(self) -> Tuple[Bucket, ...]:
        return tuple(self._buckets)

    @property
    def bucket_duration(self) -> int:
        return self._bucket_duration

    def get_bucket_duration(self) -> int:
        return self._bucket_duration

    def get_start(self) -> Optional[int]:
        return self._buckets[0].start if self._buckets else None

    def get_end(self) -> Optional[int]:
        return self._buckets[-1].end if self._buckets else None

    def get_total_bytes(self) -> int:
        return sum(bucket.total_bytes for bucket in self._buckets)

    # --- Binary search helpers ---

    def get_index_before(self, timestamp: int) -> int:
        """Index of the last bucket starting strictly before `timestamp`, clamped to the valid range."""
        index = bisect.bisect_left(self._starts, timestamp) - 1
        return max(0, min(len(self._buckets) - 1, index))

    def get_index_after(self, timestamp: int) -> int:
        """Index of the first bucket starting strictly after `timestamp`, clamped to the valid range."""
        index = bisect.bisect_right(self._starts, timestamp)
        return max(0, min(len(self._buckets) - 1, index))

    # --- Queries ---

    def aggregate(self, start: int, end: int, now: Optional[int] = None) -> Bucket:
        """
        Sums usage over the window `[start, end)`.

        Each overlapping bucket contributes its bytes prorated by the fraction of
        the bucket that overlaps the window. A bucket containing `now` is still
        filling up, so it is counted in full regardless of overlap.

        Args:
            start: Window start (ms).
            end: Window end (ms), exclusive.
            now: Reference instant used to detect the active bucket.

        Returns:
            A synthetic `Bucket` spanning the window. Byte counts are zero when
            no stored bucket overlaps it.

        Raises:
            ValueError: If `end <= start`.
        """
        if end <= start:
            raise ValueError(f"Aggregate window must have positive length, got [{start}, {end})")

        rx_bytes = 0
        tx_bytes = 0
        if self._buckets:
            for index in range(self.get_index_after(end), -1, -1):
                bucket = self._buckets[index]
                if bucket.end <= start:
                    break
                if bucket.start >= end:
                    continue

                active = now is not None and bucket.start < now < bucket.end
                if active:
                    overlap = bucket.duration
                else:
                    overlap = min(bucket.end, end) - max(bucket.start, start)
                if overlap <= 0:
                    continue

                rx_bytes += bucket.rx_bytes * overlap // bucket.duration
                tx_bytes += bucket.tx_bytes * overlap // bucket.duration

        return Bucket(start=start, duration=end - start, rx_bytes=rx_bytes, tx_bytes=tx_bytes)

    # --- Mutation ---

    def record_data(self, start: int, end: int, rx_bytes: int, tx_bytes: int) -> None:
        """
        Records usage observed over `[start, end)`, spreading it over the
        nominal buckets the interval touches in proportion to overlap.

        Missing buckets are created aligned to multiples of the nominal bucket
        duration. Integer remainders are carried forward so that the recorded
        bytes add up exactly to `rx_bytes` and `tx_bytes`.

        Raises:
            ValueError: If `end < start` or either byte count is negative.
        """
        if end < start:
            raise ValueError(f"end ({end}) must not precede start ({start})")
        if rx_bytes < 0 or tx_bytes < 0:
            raise ValueError("Recorded byte counts must be non-negative")
        if rx_bytes == 0 and tx_bytes == 0:
            return

        if end == start:
            end = start + 1
        self._ensure_buckets(start, end)

        duration = end - start
        for index in range(self.get_index_after(end), -1, -1):
            bucket = self._buckets[index]
            if bucket.end <= start:
                break
            if bucket.start >= end:
                continue

            overlap = min(bucket.end, end) - max(bucket.start, start)
            if overlap <= 0:
                continue

            frac_rx = rx_bytes * overlap // duration
            frac_tx = tx_bytes * overlap // duration
            rx_bytes -= frac_rx
            tx_bytes -= frac_tx
            duration -= overlap

            self._buckets[index] = replace(
                bucket,
                rx_bytes=bucket.rx_bytes + frac_rx,
                tx_bytes=bucket.tx_bytes + frac_tx,
            )

    def _ensure_buckets(self, start: int, end: int) -> None:
        """Inserts empty nominal buckets so that `[start, end)` is fully covered."""
        duration = self._bucket_duration
        aligned_start = start - (start % duration)
        aligned_end = end + (duration - (end % duration)) % duration

        for bucket_start in range(aligned_start, aligned_end, duration):
            index = bisect.bisect_left(self._starts, bucket_start)
            bucket_end = bucket_start + duration
            if index > 0 and self._buckets[index - 1].end > bucket_start:
                continue
            if index < len(self._buckets) and self._buckets[index].start < bucket_end:
                continue
            self._buckets.insert(index, Bucket(start=bucket_start, duration=duration))
            self._starts.insert(index, bucket_start)

    def remove_buckets_before(self, cutoff: int) -> int:
        """
        Drops every bucket that ends at or before `cutoff`.

        Returns:
            The number of buckets removed.
        """
        if not self._buckets:
            return 0
        # every bucket before the last one starting before cutoff also ends before it
        index = self.get_index_before(cutoff)
        keep_from = index + 1 if self._buckets[index].end <= cutoff else index
        if keep_from:
            del self._buckets[:keep_from]
            del self._starts[:keep_from]
            logger.debug("Removed %d buckets ending before %d", keep_from, cutoff)
        return keep_from

    def __repr__(self) -> str:
        return (
            f"NetworkStatsHistory(bucket_duration={self._bucket_duration}, "
            f"size={len(self._buckets)}, start={self.get_start()}, end={self.get_end()})"
        )
