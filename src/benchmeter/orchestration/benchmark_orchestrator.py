"""Benchmark orchestrator: wires configuration, registry, workload and export."""

import json
import logging
import sys
from typing import Any, Dict, Optional

import yaml

from ..exporters import MeasurementsExporter, create_exporter
from ..measurements import Measurements
from ..utils.config_validator import (
    ConfigurationError,
    ExperimentConfigValidator,
    MeasurementsConfigValidator,
)
from ..workload import WorkloadRunner

logger = logging.getLogger(__name__)


class BenchmarkOrchestrator:
    """Main entry point to set up and run a synthetic benchmark."""

    def __init__(self, config_data: Dict[str, Any], measurements: Optional[Measurements] = None):
        """Initialize the orchestrator with benchmark configuration.

        Args:
            config_data: Configuration with ``workload`` and optional
                ``measurements`` and ``export`` sections
            measurements: Registry to record into; a new one built from the
                ``measurements`` section when None
        """
        self.config = config_data
        self._validate_config()

        self.measurements = measurements
        self.workload_runner: Optional[WorkloadRunner] = None

        logger.info("BenchmarkOrchestrator initialized")

    def _validate_config(self) -> None:
        # Bad measurementtype descriptors are skipped by the registry, not fatal
        is_valid, errors = ExperimentConfigValidator.validate(self.config, check_measurement_types=False)
        if not is_valid:
            raise ConfigurationError("; ".join(errors))

        spec = (self.config.get("measurements") or {}).get("measurementtype")
        if isinstance(spec, str):
            for problem in MeasurementsConfigValidator.measurement_type_problems(spec):
                logger.warning(f"measurementtype: {problem}")
        logger.info("Configuration validated successfully")

    def setup(self) -> None:
        """Create the registry (if none was injected) and the workload runner."""
        if self.measurements is None:
            self.measurements = Measurements(self.config.get("measurements") or {})
        self.workload_runner = WorkloadRunner(self.measurements, self.config["workload"])

    def create_exporter(self) -> MeasurementsExporter:
        export_config = self.config.get("export") or {}
        name = export_config.get("exporter", "text")
        output = export_config.get("output") or sys.stdout
        return create_exporter(name, output)

    def run(self) -> Dict[str, Any]:
        """Run the workload, then export all measurements.

        Returns:
            Report with workload totals, the one-line summary and the labels
            that recorded data
        """
        if self.workload_runner is None:
            self.setup()

        logger.info("=" * 60)
        logger.info("STARTING BENCHMARK")
        logger.info("=" * 60)

        workload_report = self.workload_runner.run()
        summary = self.measurements.get_summary()
        logger.info(f"Summary: {summary}")

        with self.create_exporter() as exporter:
            self.measurements.export_measurements(exporter)

        logger.info("=" * 60)
        logger.info("BENCHMARK COMPLETED")
        logger.info("=" * 60)

        return {
            "workload": workload_report,
            "summary": summary,
            "labels": self.measurements.labels,
            "aggregators": self.measurements.keys(),
        }

    @classmethod
    def from_yaml_file(cls, config_path: str, measurements: Optional[Measurements] = None) -> "BenchmarkOrchestrator":
        """Create an orchestrator from a YAML configuration file."""
        with open(config_path, "r") as f:
            config_data = yaml.safe_load(f)

        return cls(config_data, measurements)

    @classmethod
    def from_json_file(cls, config_path: str, measurements: Optional[Measurements] = None) -> "BenchmarkOrchestrator":
        """Create an orchestrator from a JSON configuration file."""
        with open(config_path, "r") as f:
            config_data = json.load(f)

        return cls(config_data, measurements)
