"""
Model module for NetUsageChart.

This module defines the `UsageRecorder` class, which samples the system's network
counters through `psutil` and records the bytes transferred between samples into
a `NetworkStatsHistory`. It handles interface selection, counter priming and
error conditions so the controller only has to call `sample()` periodically.
"""

from __future__ import annotations
import logging
import time
import psutil
from typing import Callable, Dict, List, Optional, Set, Tuple

from netusagechart import constants
from netusagechart.core.history import NetworkStatsHistory


class UsageRecorder:
    """
    Records network usage deltas into a history.

    Attributes:
        logger: Logger instance for tracking recorder operations and errors.
        history: The history receiving recorded usage.
        last_sample_ms: Wall-clock time of the previous sample (ms), or None before priming.
        last_stats: Map of interface names to last (sent, received) byte counts.
        selected_interfaces: List of interfaces to monitor in "selected" mode.
        interface_mode: Mode for interface selection ("all" or "selected").
        available_interfaces: Cached list of available network interfaces.
    """
    def __init__(self, history: NetworkStatsHistory, clock: Optional[Callable[[], float]] = None) -> None:
        """
        Args:
            history: History that receives the recorded usage.
            clock: Wall-clock source in seconds; defaults to `time.time`.
        """
        self.logger = logging.getLogger(f"NetUsageChart.{self.__class__.__name__}")
        self.history = history
        self._clock = clock or time.time
        self.last_sample_ms: Optional[int] = None
        self.last_stats: Dict[str, Tuple[int, int]] = {}
        self.selected_interfaces: List[str] = []
        self.interface_mode: str = constants.network.interface.DEFAULT_MODE
        self.available_interfaces: List[str] = self._get_available_interfaces()
        self._interfaces_to_monitor: Set[str] = set()
        self._update_interfaces_to_monitor()
        self.logger.info("UsageRecorder initialized with %d available interfaces",
                         len(self.available_interfaces))

    def _get_available_interfaces(self) -> List[str]:
        """
        Retrieve the list of available network interfaces from the system.

        Raises:
            psutil.Error: If psutil cannot read the interface list.
            RuntimeError: If retrieving interfaces fails for any other reason.
        """
        try:
            interfaces = list(psutil.net_io_counters(pernic=True).keys())
            self.logger.debug("Retrieved %d available interfaces: %s", len(interfaces), interfaces)
            return interfaces
        except psutil.Error as e:
            self.logger.error("Failed to retrieve interfaces due to psutil error: %s", e)
            raise
        except Exception as e:
            self.logger.exception("Unexpected error retrieving interfaces: %s", e)
            raise RuntimeError(f"Cannot retrieve interfaces: {e}")

    def _update_interfaces_to_monitor(self) -> None:
        if self.interface_mode == "all":
            excluded = constants.network.interface.EXCLUDED_INTERFACE_KEYWORDS
            self._interfaces_to_monitor = {
                iface for iface in self.available_interfaces
                if not any(keyword in iface.lower() for keyword in excluded)
            }
        else:
            self._interfaces_to_monitor = set(self.selected_interfaces)

    def set_interfaces(self, interface_mode: str, selected_interfaces: List[str]) -> None:
        """
        Configure the network interfaces to monitor.

        Raises:
            ValueError: If `interface_mode` is invalid, or if `selected_interfaces`
                is empty or unknown in "selected" mode.
        """
        valid_modes = constants.network.interface.VALID_INTERFACE_MODES
        if interface_mode not in valid_modes:
            self.logger.error("Invalid interface mode: %s, expected one of %s", interface_mode, valid_modes)
            raise ValueError(f"Invalid interface mode: {interface_mode}. Must be one of {valid_modes}")

        if interface_mode == "selected":
            if not selected_interfaces:
                raise ValueError("Selected interfaces list cannot be empty in 'selected' mode")
            invalid_interfaces = [iface for iface in selected_interfaces if iface not in self.available_interfaces]
            if invalid_interfaces:
                self.logger.error("Invalid interfaces provided: %s", invalid_interfaces)
                raise ValueError(f"Invalid interfaces: {invalid_interfaces}. Available: {self.available_interfaces}")

        self.interface_mode = interface_mode
        self.selected_interfaces = list(selected_interfaces)
        self._update_interfaces_to_monitor()
        self.last_stats = {iface: stats for iface, stats in self.last_stats.items()
                           if iface in self._interfaces_to_monitor}
        self.logger.info("Interfaces configured: mode=%s, selected=%s", self.interface_mode, self.selected_interfaces)

    def sample(self) -> Tuple[int, int]:
        """
        Reads the counters and records the usage since the previous sample.

        The first call only primes the counters and records nothing. Counter
        resets (a value lower than the previous one) count as zero usage.

        Returns:
            The (rx, tx) bytes recorded by this call.

        Raises:
            RuntimeError: If the counters cannot be read.
        """
        try:
            now_ms = int(self._clock() * 1000)
            net_stats = psutil.net_io_counters(pernic=True)
        except Exception as e:
            self.logger.exception("Unexpected error reading network counters: %s", e)
            raise RuntimeError(f"Failed to sample usage: {e}")

        total_rx = 0
        total_tx = 0
        for iface in self._interfaces_to_monitor:
            stats = net_stats.get(iface)
            if stats is None:
                continue
            if iface in self.last_stats:
                last_tx, last_rx = self.last_stats[iface]
                total_tx += max(0, stats.bytes_sent - last_tx)
                total_rx += max(0, stats.bytes_recv - last_rx)
            self.last_stats[iface] = (stats.bytes_sent, stats.bytes_recv)

        previous_ms = self.last_sample_ms
        self.last_sample_ms = now_ms
        if previous_ms is None:
            self.logger.debug("First sample, counters primed")
            return 0, 0
        if now_ms < previous_ms:
            self.logger.warning("Clock moved backwards (%d -> %d), skipping sample", previous_ms, now_ms)
            return 0, 0

        self.history.record_data(previous_ms, now_ms, total_rx, total_tx)
        return total_rx, total_tx

    def reset(self) -> None:
        """Forget primed counters so the next sample starts a fresh interval."""
        self.logger.info("Resetting recorder state")
        self.last_sample_ms = None
        self.last_stats.clear()
