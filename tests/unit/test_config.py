"""
Unit tests for MeasurementsConfig.
"""

import json

import pytest
import yaml

from benchmeter.measurements import MEASUREMENT_TYPE_DEFAULT, MeasurementsConfig
from benchmeter.measurements.aggregator import config_option
from benchmeter.utils.config_validator import ConfigurationError


class TestMeasurementsConfig:
    """Test defaults, coercion and file loading."""

    def test_defaults(self):
        config = MeasurementsConfig.coerce(None)
        assert config.measurementtype == MEASUREMENT_TYPE_DEFAULT
        assert config.histogram_buckets == 1000
        assert config.timeseries_granularity == 1000

    def test_coerce_existing_instance(self):
        config = MeasurementsConfig(histogram_buckets=50)
        assert MeasurementsConfig.coerce(config) is config

    def test_extra_keys_preserved(self):
        config = MeasurementsConfig.coerce({"my_plugin_window": 30})
        assert config.get("my_plugin_window") == 30
        assert config.get("missing", "fallback") == "fallback"
        assert config_option(config, "my_plugin_window") == 30

    def test_config_option_sources(self):
        assert config_option(None, "histogram_buckets", 1000) == 1000
        assert config_option({"histogram_buckets": 5}, "histogram_buckets", 1000) == 5
        assert config_option(MeasurementsConfig(), "histogram_buckets", 5) == 1000

    def test_null_values_use_defaults(self):
        """Keys present with a null value fall back to the defaults."""
        config = MeasurementsConfig.coerce({"measurementtype": None, "histogram_buckets": None})
        assert config.measurementtype == MEASUREMENT_TYPE_DEFAULT
        assert config.histogram_buckets == 1000

    def test_invalid_value(self):
        with pytest.raises(ConfigurationError):
            MeasurementsConfig.coerce({"histogram_buckets": "many"})

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            MeasurementsConfig.coerce(["HISTOGRAM:histogram"])

    def test_from_yaml_file(self, tmp_path):
        path = tmp_path / "bench.yaml"
        path.write_text(yaml.dump({
            "measurements": {"measurementtype": "HISTOGRAM:histogram", "histogram_buckets": 20},
            "workload": {"threads": 1},
        }))

        config = MeasurementsConfig.from_yaml_file(str(path))
        assert config.measurementtype == "HISTOGRAM:histogram"
        assert config.histogram_buckets == 20

    def test_from_json_file_without_section(self, tmp_path):
        path = tmp_path / "measurements.json"
        path.write_text(json.dumps({"timeseries_granularity": 250}))

        config = MeasurementsConfig.from_json_file(str(path), section=None)
        assert config.timeseries_granularity == 250

    def test_missing_section_uses_defaults(self, tmp_path):
        path = tmp_path / "bench.yaml"
        path.write_text("workload:\n  threads: 2\n")
        assert MeasurementsConfig.from_yaml_file(str(path)).measurementtype == MEASUREMENT_TYPE_DEFAULT

    def test_non_mapping_document(self, tmp_path):
        path = tmp_path / "bench.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigurationError):
            MeasurementsConfig.from_yaml_file(str(path))
