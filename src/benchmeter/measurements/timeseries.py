"""Time-series aggregator: average latency per fixed time unit."""

import time
from typing import Any, Callable, List, Tuple

from .aggregator import LatencyStats, OneMeasurement, config_option

GRANULARITY = "timeseries_granularity"
GRANULARITY_DEFAULT = 1000


class TimeSeriesAggregator(OneMeasurement):
    """Groups latency samples into time units of ``granularity`` milliseconds.

    Unit start times are relative to aggregator construction. Each unit that
    received samples contributes one ``(unit_start_ms, average_latency)`` point.
    """

    def __init__(self, name: str, config: Any = None, clock: Callable[[], float] = time.monotonic):
        """Initialize the aggregator.

        Args:
            name: Composite key this aggregator is registered under
            config: Measurements configuration
            clock: Monotonic clock returning seconds; injectable for tests
        """
        super().__init__(name, config)
        self.granularity = int(config_option(config, GRANULARITY, GRANULARITY_DEFAULT))
        if self.granularity <= 0:
            raise ValueError(f"{GRANULARITY} must be positive, got {self.granularity}")

        self._clock = clock
        self.start_ms = self._now_ms()
        self.current_unit = 0
        self.unit_count = 0
        self.unit_sum = 0
        self.series: List[Tuple[int, float]] = []
        self.stats = LatencyStats()

    @property
    def operations(self) -> int:
        return self.stats.operations

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def _roll_unit(self) -> None:
        # Caller must hold self._lock
        elapsed = self._now_ms() - self.start_ms
        unit = (elapsed // self.granularity) * self.granularity
        if unit > self.current_unit:
            if self.unit_count > 0:
                self.series.append((self.current_unit, self.unit_sum / self.unit_count))
            self.current_unit = unit
            self.unit_count = 0
            self.unit_sum = 0

    def measure(self, latency: int) -> None:
        with self._lock:
            self._roll_unit()
            self.unit_count += 1
            self.unit_sum += latency
            self.stats.add(latency)

    def points(self) -> List[Tuple[int, float]]:
        """Closed units plus the in-progress unit, if it has samples."""
        with self._lock:
            return self._points()

    def _points(self) -> List[Tuple[int, float]]:
        self._roll_unit()
        points = list(self.series)
        if self.unit_count > 0:
            points.append((self.current_unit, self.unit_sum / self.unit_count))
        return points

    def export_measurements(self, exporter: Any) -> None:
        with self._lock:
            points = self._points()
            fields = self.stats.export_fields()
            codes = self._return_code_snapshot()

        for measurement, value in fields:
            exporter.write(self.name, measurement, value)
        self._export_return_codes(exporter, codes)
        for unit_start, average in points:
            exporter.write(self.name, str(unit_start), average)

    def get_summary(self) -> str:
        with self._lock:
            average = self.stats.take_window_average()
        if average is None:
            return ""
        return f"[{self.name} AverageLatency(us)={average:.2f}]"
