"""Base contract for pluggable measurement aggregators."""

import threading
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Tuple


def config_option(config: Any, key: str, default: Any = None) -> Any:
    """Read an option from a MeasurementsConfig, a plain mapping, or None."""
    if config is None:
        return default
    if isinstance(config, Mapping):
        return config.get(key, default)
    value = getattr(config, key, None)
    return default if value is None else value


class OneMeasurement(ABC):
    """A single statistic accumulated for one label/operation pair.

    Instances are created by the Measurements registry with the composite key
    (e.g. ``HISTOGRAM_READ``) as their name and the full configuration object.
    Subclasses must tolerate concurrent ``measure`` and ``report_return_code``
    calls from many worker threads; ``self._lock`` is provided for that.
    """

    def __init__(self, name: str, config: Any = None):
        """Initialize the aggregator.

        Args:
            name: Composite key this aggregator is registered under
            config: Measurements configuration (MeasurementsConfig, dict or None)
        """
        self.name = name
        self.config = config
        self.return_codes: Dict[int, int] = {}
        self._lock = threading.Lock()

    @abstractmethod
    def measure(self, latency: int) -> None:
        """Record a single latency sample (microseconds)."""

    def report_return_code(self, code: int) -> None:
        """Count one occurrence of a result code."""
        with self._lock:
            self.return_codes[code] = self.return_codes.get(code, 0) + 1

    @abstractmethod
    def export_measurements(self, exporter: Any) -> None:
        """Write the accumulated state to an exporter."""

    @abstractmethod
    def get_summary(self) -> str:
        """Return a one-line human-readable summary."""

    def _return_code_snapshot(self) -> List[Tuple[int, int]]:
        # Caller must hold self._lock
        return sorted(self.return_codes.items())

    def _export_return_codes(self, exporter: Any, codes: List[Tuple[int, int]]) -> None:
        for code, count in codes:
            exporter.write(self.name, f"Return={code}", count)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class LatencyStats:
    """Running latency totals shared by the built-in aggregators."""

    def __init__(self) -> None:
        self.operations = 0
        self.total_latency = 0
        self.window_operations = 0
        self.window_total_latency = 0
        self.min_latency: Optional[int] = None
        self.max_latency: Optional[int] = None

    def add(self, latency: int) -> None:
        self.operations += 1
        self.total_latency += latency
        self.window_operations += 1
        self.window_total_latency += latency
        if self.min_latency is None or latency < self.min_latency:
            self.min_latency = latency
        if self.max_latency is None or latency > self.max_latency:
            self.max_latency = latency

    @property
    def average_latency(self) -> float:
        if self.operations == 0:
            return 0.0
        return self.total_latency / self.operations

    def take_window_average(self) -> Optional[float]:
        """Return the average since the last call and start a new window."""
        if self.window_operations == 0:
            return None
        average = self.window_total_latency / self.window_operations
        self.window_operations = 0
        self.window_total_latency = 0
        return average

    def export_fields(self) -> List[Tuple[str, Any]]:
        return [
            ("Operations", self.operations),
            ("AverageLatency(us)", self.average_latency),
            ("MinLatency(us)", self.min_latency if self.min_latency is not None else 0),
            ("MaxLatency(us)", self.max_latency if self.max_latency is not None else 0),
        ]
