"""
Configuration validation for benchmark configuration files.

This module provides validation for:
- Measurement configurations
- Workload configurations
- Export configurations
- Complete benchmark configurations
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

SUPPORTED_DISTRIBUTIONS = {"Constant", "Uniform", "Normal", "Exponential", "LogNormal"}
SUPPORTED_EXPORTERS = {"text", "json", "csv"}


class ConfigurationError(Exception):
    """Raised when configuration validation fails."""
    pass


class MeasurementsConfigValidator:
    """Validates the measurements section."""

    POSITIVE_INT_FIELDS = ("histogram_buckets", "timeseries_granularity")

    @classmethod
    def validate(cls, config: Dict[str, Any], check_measurement_types: bool = True) -> List[str]:
        """Validate measurement settings.

        Args:
            config: The measurements section
            check_measurement_types: Also report malformed or unknown
                ``measurementtype`` descriptors. The registry itself skips
                such descriptors, so callers about to run may leave them out.
        """
        errors = []

        spec = config.get("measurementtype")
        if spec is not None:
            if not isinstance(spec, str):
                errors.append(f"measurementtype must be a string, got {type(spec).__name__}")
            elif check_measurement_types:
                errors.extend(cls.measurement_type_problems(spec))

        for field in cls.POSITIVE_INT_FIELDS:
            value = config.get(field)
            if value is None:
                continue
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                errors.append(f"Invalid {field}: {value} (must be a positive integer)")

        return errors

    @classmethod
    def measurement_type_problems(cls, spec: str) -> List[str]:
        """Descriptor problems in a measurement type string, checked against the registered types."""
        from ..measurements.type_table import available_aggregator_types

        available = available_aggregator_types()
        errors = []
        labels = set()

        for descriptor in spec.split(","):
            descriptor = descriptor.strip()
            if not descriptor:
                continue
            parts = [p.strip() for p in descriptor.split(":")]
            if len(parts) < 2 or not parts[0] or not parts[1]:
                errors.append(f"Invalid measurement type '{descriptor}' (use LABEL:typeidentifier)")
                continue
            label, identifier = parts[0], parts[1]
            if identifier not in available:
                errors.append(
                    f"Unknown aggregator type '{identifier}' for label {label} "
                    f"(available: {', '.join(sorted(available))})"
                )
            if label in labels:
                errors.append(f"Duplicate measurement label: {label}")
            labels.add(label)

        if not labels:
            errors.append("measurementtype enables no aggregators")

        return errors


class WorkloadConfigValidator:
    """Validates the workload section."""

    @classmethod
    def validate(cls, workload: Dict[str, Any]) -> List[str]:
        errors = []

        threads = workload.get("threads", 1)
        if not isinstance(threads, int) or threads <= 0:
            errors.append(f"Invalid workload threads: {threads}")

        op_count = workload.get("operation_count", 1000)
        if not isinstance(op_count, int) or op_count < 0:
            errors.append(f"Invalid workload operation_count: {op_count}")

        operations = workload.get("operations")
        if operations is not None:
            if not isinstance(operations, dict) or not operations:
                errors.append("Workload operations must be a non-empty mapping of name to weight")
            else:
                for name, weight in operations.items():
                    if not isinstance(weight, (int, float)) or weight < 0:
                        errors.append(f"Invalid weight for operation {name}: {weight}")
                if all(isinstance(w, (int, float)) and w == 0 for w in operations.values()):
                    errors.append("Workload operation weights sum to zero")

        failure_probability = workload.get("failure_probability", 0.0)
        if not isinstance(failure_probability, (int, float)) or not 0 <= failure_probability <= 1:
            errors.append(f"Invalid failure_probability: {failure_probability} (must be 0-1)")

        dist = workload.get("latency_us_dist_config")
        if dist is not None:
            if not isinstance(dist, dict) or "type" not in dist:
                errors.append("latency_us_dist_config missing type")
            elif dist["type"] not in SUPPORTED_DISTRIBUTIONS:
                errors.append(f"Unsupported latency distribution: {dist['type']}")

        return errors


class ExportConfigValidator:
    """Validates the export section."""

    @classmethod
    def validate(cls, export: Dict[str, Any]) -> List[str]:
        errors = []

        exporter = export.get("exporter", "text")
        if exporter not in SUPPORTED_EXPORTERS:
            errors.append(
                f"Unknown exporter '{exporter}' (must be one of {', '.join(sorted(SUPPORTED_EXPORTERS))})"
            )
        if exporter == "csv" and not export.get("output"):
            errors.append("csv exporter requires an output path")

        return errors


class ExperimentConfigValidator:
    """Validates complete benchmark configurations."""

    @classmethod
    def validate(cls, config: Dict[str, Any], check_measurement_types: bool = True) -> Tuple[bool, List[str]]:
        """Validate entire benchmark configuration."""
        all_errors = []

        if not isinstance(config, dict):
            return False, ["Configuration must be a mapping"]

        if "workload" not in config:
            all_errors.append("Missing required configuration section: workload")

        for section, validator in (
            ("measurements", MeasurementsConfigValidator),
            ("workload", WorkloadConfigValidator),
            ("export", ExportConfigValidator),
        ):
            value = config.get(section)
            if value is None:
                continue
            if not isinstance(value, dict):
                all_errors.append(f"Section {section} must be a mapping")
                continue
            if validator is MeasurementsConfigValidator:
                all_errors.extend(validator.validate(value, check_measurement_types))
            else:
                all_errors.extend(validator.validate(value))

        return len(all_errors) == 0, all_errors


def load_config_file(config_path: str) -> Dict[str, Any]:
    """Load a YAML or JSON configuration file based on its suffix."""
    import json
    import yaml
    from pathlib import Path

    config_file = Path(config_path)

    with open(config_path) as f:
        if config_file.suffix in [".yaml", ".yml"]:
            config = yaml.safe_load(f)
        else:
            config = json.load(f)

    return config if config is not None else {}


def validate_and_fix_config(config_path: str) -> Tuple[bool, List[str], Optional[Dict[str, Any]]]:
    """
    Load, validate, and attempt to fix a configuration file.

    Missing optional sections are filled with defaults before validation.

    Returns:
        (is_valid, errors, fixed_config)
    """
    config = load_config_file(config_path)

    if isinstance(config, dict):
        if "measurements" not in config:
            config["measurements"] = {}
            logger.warning("Added missing measurements section (defaults)")
        if "export" not in config:
            config["export"] = {"exporter": "text"}
            logger.warning("Added missing export section (text to stdout)")

    is_valid, errors = ExperimentConfigValidator.validate(config)

    if not is_valid:
        logger.warning(f"Configuration has {len(errors)} validation errors")
        for error in errors[:10]:  # Show first 10 errors
            logger.warning(f"  - {error}")
        if len(errors) > 10:
            logger.warning(f"  ... and {len(errors) - 10} more errors")

    return is_valid, errors, config
