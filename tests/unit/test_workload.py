"""
Unit tests for the distribution sampler and workload runner.
"""

import pytest

from benchmeter.exporters import DataFrameMeasurementsExporter
from benchmeter.measurements import Measurements
from benchmeter.workload import DistributionSampler, WorkloadRunner


class TestDistributionSampler:
    """Test sampling from configured distributions."""

    def test_constant(self):
        sampler = DistributionSampler(seed=1)
        assert sampler.sample({"type": "Constant", "value": 250}) == 250

    def test_uniform_range(self):
        sampler = DistributionSampler(seed=1)
        values = [sampler.sample({"type": "Uniform", "low": 100, "high": 200}) for _ in range(200)]
        assert all(100 <= v <= 200 for v in values)

    def test_is_int(self):
        sampler = DistributionSampler(seed=1)
        value = sampler.sample({"type": "LogNormal", "mean": 6.0, "sigma": 0.5, "is_int": True})
        assert isinstance(value, int)
        assert value >= 0

    def test_normal_not_negative(self):
        sampler = DistributionSampler(seed=3)
        values = [sampler.sample({"type": "Normal", "mean": 0, "std": 10}) for _ in range(100)]
        assert min(values) >= 0

    def test_reproducible(self):
        dist = {"type": "Exponential", "rate": 0.001}
        first = [DistributionSampler(seed=7).sample(dist) for _ in range(3)]
        second = [DistributionSampler(seed=7).sample(dist) for _ in range(3)]
        assert first == second

    def test_unknown_type(self):
        assert DistributionSampler().sample({"type": "Zipf"}) == 1.0

    def test_choose_respects_weights(self):
        sampler = DistributionSampler(seed=5)
        picks = {sampler.choose({"READ": 1.0, "UPDATE": 0.0}) for _ in range(50)}
        assert picks == {"READ"}

    def test_chance(self):
        sampler = DistributionSampler(seed=5)
        assert sampler.chance(1.0) is True
        assert sampler.chance(0.0) is False


class TestWorkloadRunner:
    """Test the threaded workload driver."""

    def test_records_every_operation(self):
        measurements = Measurements({"measurementtype": "HISTOGRAM:histogram"})
        runner = WorkloadRunner(measurements, {
            "threads": 4,
            "operation_count": 250,
            "operations": {"READ": 1.0},
            "latency_us_dist_config": {"type": "Constant", "value": 1500, "is_int": True},
            "random_seed": 11,
        })

        report = runner.run()

        exporter = DataFrameMeasurementsExporter()
        measurements.export_measurements(exporter)
        assert report["operations"] == 1000
        assert report["failures"] == 0
        assert exporter.value("HISTOGRAM_READ", "Operations") == 1000
        assert exporter.value("HISTOGRAM_READ", "Return=0") == 1000
        assert exporter.value("HISTOGRAM_READ", "1") == 1000

    def test_failures_reported(self):
        measurements = Measurements({"measurementtype": "HISTOGRAM:histogram"})
        runner = WorkloadRunner(measurements, {
            "threads": 2,
            "operation_count": 10,
            "operations": {"UPDATE": 1.0},
            "failure_probability": 1.0,
        })

        report = runner.run()

        exporter = DataFrameMeasurementsExporter()
        measurements.export_measurements(exporter)
        assert report["failures"] == 20
        assert exporter.value("HISTOGRAM_UPDATE", "Return=-1") == 20

    def test_invalid_threads(self):
        with pytest.raises(ValueError):
            WorkloadRunner(Measurements(), {"threads": 0})
