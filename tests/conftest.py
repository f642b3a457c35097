"""Shared fixtures and test aggregator types."""

import threading

import pytest

from benchmeter.measurements import (
    OneMeasurement,
    register_aggregator_type,
    reset_measurements,
    unregister_aggregator_type,
)


class RecordingAggregator(OneMeasurement):
    """Keeps every latency it receives, in arrival order."""

    def __init__(self, name, config=None):
        super().__init__(name, config)
        self.latencies = []

    def measure(self, latency):
        with self._lock:
            self.latencies.append(latency)

    def export_measurements(self, exporter):
        exporter.write(self.name, "Operations", len(self.latencies))

    def get_summary(self):
        return f"[{self.name} samples={len(self.latencies)}]"


class ThreeArgumentAggregator(RecordingAggregator):
    """Cannot be built from (name, config)."""

    def __init__(self, name, config, extra):
        super().__init__(name, config)
        self.extra = extra


@pytest.fixture(autouse=True)
def isolated_measurements():
    """Each test starts without a process-wide registry."""
    reset_measurements()
    yield
    reset_measurements()


@pytest.fixture
def recording_type():
    """Register the ``recording`` aggregator type; yields the created instances."""
    created = []
    lock = threading.Lock()

    def factory(name, config):
        aggregator = RecordingAggregator(name, config)
        with lock:
            created.append(aggregator)
        return aggregator

    register_aggregator_type("recording", factory)
    yield created
    unregister_aggregator_type("recording")


@pytest.fixture
def broken_types():
    """Register aggregator types that always fail to construct."""
    attempts = []

    def failing_factory(name, config):
        attempts.append(name)
        raise RuntimeError("aggregator unavailable")

    register_aggregator_type("broken", failing_factory)
    register_aggregator_type("threeargs", ThreeArgumentAggregator)
    yield attempts
    unregister_aggregator_type("broken")
    unregister_aggregator_type("threeargs")
