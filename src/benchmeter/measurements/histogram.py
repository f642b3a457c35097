"""Histogram aggregator with fixed one-millisecond buckets."""

from typing import Any, List, Tuple

import numpy as np

from .aggregator import LatencyStats, OneMeasurement, config_option

BUCKETS = "histogram_buckets"
BUCKETS_DEFAULT = 1000


class HistogramAggregator(OneMeasurement):
    """Buckets latency samples by millisecond.

    Latencies are recorded in microseconds; sample ``latency`` falls into
    bucket ``latency // 1000``. Anything at or beyond the configured number of
    buckets is counted in a single overflow counter.
    """

    def __init__(self, name: str, config: Any = None):
        super().__init__(name, config)
        self.buckets = int(config_option(config, BUCKETS, BUCKETS_DEFAULT))
        if self.buckets <= 0:
            raise ValueError(f"{BUCKETS} must be positive, got {self.buckets}")

        self.histogram = np.zeros(self.buckets, dtype=np.int64)
        self.histogram_overflow = 0
        self.stats = LatencyStats()

    @property
    def operations(self) -> int:
        return self.stats.operations

    def measure(self, latency: int) -> None:
        bucket = max(latency, 0) // 1000
        with self._lock:
            if bucket >= self.buckets:
                self.histogram_overflow += 1
            else:
                self.histogram[bucket] += 1
            self.stats.add(latency)

    def percentile_ms(self, fraction: float) -> int:
        """First bucket at which the cumulative count reaches ``fraction`` of all operations."""
        with self._lock:
            return self._percentile_ms(self.histogram, self.stats.operations, fraction)

    def _percentile_ms(self, histogram: np.ndarray, operations: int, fraction: float) -> int:
        if operations == 0:
            return 0
        cumulative = np.cumsum(histogram)
        index = int(np.searchsorted(cumulative, operations * fraction, side="left"))
        # Falls through to the overflow counter
        return min(index, self.buckets)

    def export_measurements(self, exporter: Any) -> None:
        with self._lock:
            histogram = self.histogram.copy()
            overflow = self.histogram_overflow
            fields = self.stats.export_fields()
            operations = self.stats.operations
            codes = self._return_code_snapshot()

        for measurement, value in fields:
            exporter.write(self.name, measurement, value)
        exporter.write(self.name, "95thPercentileLatency(ms)",
                       self._percentile_ms(histogram, operations, 0.95))
        exporter.write(self.name, "99thPercentileLatency(ms)",
                       self._percentile_ms(histogram, operations, 0.99))
        self._export_return_codes(exporter, codes)

        for index, count in enumerate(histogram.tolist()):
            exporter.write(self.name, str(index), count)
        exporter.write(self.name, f">{self.buckets}", overflow)

    def get_summary(self) -> str:
        with self._lock:
            average = self.stats.take_window_average()
        if average is None:
            return ""
        return f"[{self.name} AverageLatency(us)={average:.2f}]"

    def bucket_counts(self) -> List[Tuple[int, int]]:
        """Non-empty buckets as (bucket_ms, count) pairs."""
        with self._lock:
            nonzero = np.flatnonzero(self.histogram)
            return [(int(i), int(self.histogram[i])) for i in nonzero]
