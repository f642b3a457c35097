"""Measurement registry and aggregator plugins."""

from .aggregator import OneMeasurement
from .config import MeasurementsConfig
from .histogram import HistogramAggregator
from .models import AggregatorSpecEntry
from .registry import Measurements, configure_measurements, get_measurements, reset_measurements
from .timeseries import TimeSeriesAggregator
from .type_table import (
    MEASUREMENT_TYPE_DEFAULT,
    available_aggregator_types,
    build_type_table,
    parse_measurement_types,
    register_aggregator_type,
    unregister_aggregator_type,
)

__all__ = [
    "Measurements",
    "MeasurementsConfig",
    "OneMeasurement",
    "HistogramAggregator",
    "TimeSeriesAggregator",
    "AggregatorSpecEntry",
    "MEASUREMENT_TYPE_DEFAULT",
    "configure_measurements",
    "get_measurements",
    "reset_measurements",
    "register_aggregator_type",
    "unregister_aggregator_type",
    "available_aggregator_types",
    "build_type_table",
    "parse_measurement_types",
]
