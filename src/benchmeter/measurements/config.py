"""Configuration object handed to the registry and every aggregator."""

import json
import logging
from collections.abc import Mapping
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from ..utils.config_validator import ConfigurationError
from .histogram import BUCKETS_DEFAULT
from .timeseries import GRANULARITY_DEFAULT
from .type_table import MEASUREMENT_TYPE_DEFAULT

logger = logging.getLogger(__name__)


class MeasurementsConfig(BaseModel):
    """Measurement settings.

    Unknown keys are kept so that third-party aggregator types can read their
    own options from the same object.
    """

    model_config = ConfigDict(extra="allow")

    measurementtype: str = MEASUREMENT_TYPE_DEFAULT
    histogram_buckets: int = BUCKETS_DEFAULT
    timeseries_granularity: int = GRANULARITY_DEFAULT

    def get(self, key: str, default: Any = None) -> Any:
        value = getattr(self, key, None)
        return default if value is None else value

    @classmethod
    def coerce(cls, config: Any) -> "MeasurementsConfig":
        """Accept None, a mapping, or an existing MeasurementsConfig."""
        if config is None:
            return cls()
        if isinstance(config, cls):
            return config
        if isinstance(config, Mapping):
            # Null values mean "not set"
            data = {k: v for k, v in config.items() if v is not None}
            try:
                return cls.model_validate(data)
            except ValidationError as e:
                raise ConfigurationError(f"Invalid measurements configuration: {e}") from e
        raise TypeError(f"Unsupported configuration type: {type(config).__name__}")

    @classmethod
    def from_yaml_file(cls, config_path: str, section: Optional[str] = "measurements") -> "MeasurementsConfig":
        """Load from a YAML file, optionally from a named top-level section."""
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
        return cls._from_document(data, section, config_path)

    @classmethod
    def from_json_file(cls, config_path: str, section: Optional[str] = "measurements") -> "MeasurementsConfig":
        """Load from a JSON file, optionally from a named top-level section."""
        with open(config_path, "r") as f:
            data = json.load(f)
        return cls._from_document(data, section, config_path)

    @classmethod
    def _from_document(cls, data: Any, section: Optional[str], source: str) -> "MeasurementsConfig":
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"{source}: expected a mapping at top level")
        if section is not None:
            data = data.get(section) or {}
        logger.debug(f"Loaded measurements configuration from {source}")
        return cls.coerce(data)
