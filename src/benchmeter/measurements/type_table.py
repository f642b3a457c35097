"""Aggregator type registration and measurement type string parsing."""

import logging
import threading
from typing import Any, Callable, Dict, List, Optional

from .aggregator import OneMeasurement
from .histogram import HistogramAggregator
from .models import AggregatorSpecEntry
from .timeseries import TimeSeriesAggregator

logger = logging.getLogger(__name__)

MEASUREMENT_TYPE = "measurementtype"
MEASUREMENT_TYPE_DEFAULT = "HISTOGRAM:histogram,TIMESERIES:timeseries"

# Factories take (composite_key, config) and return an aggregator
AggregatorFactory = Callable[[str, Any], OneMeasurement]

# Aggregator type mapping
AGGREGATOR_CLASS_MAP: Dict[str, AggregatorFactory] = {
    "histogram": HistogramAggregator,
    "timeseries": TimeSeriesAggregator,
}

_registration_lock = threading.Lock()


def register_aggregator_type(identifier: str, factory: AggregatorFactory) -> None:
    """Make an aggregator type available under ``identifier``.

    Args:
        identifier: Name used on the right-hand side of ``LABEL:identifier``
        factory: Callable taking (composite_key, config)
    """
    with _registration_lock:
        if identifier in AGGREGATOR_CLASS_MAP:
            logger.debug(f"Replacing aggregator type '{identifier}'")
        AGGREGATOR_CLASS_MAP[identifier] = factory


def unregister_aggregator_type(identifier: str) -> bool:
    """Remove a registered aggregator type. Returns False if it was not registered."""
    with _registration_lock:
        return AGGREGATOR_CLASS_MAP.pop(identifier, None) is not None


def available_aggregator_types() -> Dict[str, AggregatorFactory]:
    """Snapshot of the registered aggregator types."""
    with _registration_lock:
        return dict(AGGREGATOR_CLASS_MAP)


def parse_measurement_types(spec: Optional[str]) -> List[AggregatorSpecEntry]:
    """Split ``LABEL:typeidentifier,...`` into descriptors.

    Malformed descriptors are logged and skipped; this never raises.
    """
    if spec is None:
        spec = MEASUREMENT_TYPE_DEFAULT

    entries = []
    for descriptor in spec.split(","):
        descriptor = descriptor.strip()
        if not descriptor:
            continue
        parts = [part.strip() for part in descriptor.split(":")]
        if len(parts) < 2 or not parts[0] or not parts[1]:
            logger.warning(
                f"Invalid measurement type '{descriptor}', use LABEL:typeidentifier"
            )
            continue
        entries.append(AggregatorSpecEntry(label=parts[0], type_identifier=parts[1]))
    return entries


def build_type_table(
    spec: Optional[str],
    available: Optional[Dict[str, AggregatorFactory]] = None,
) -> Dict[str, AggregatorFactory]:
    """Resolve a measurement type string to an ordered ``"LABEL_"`` -> factory table.

    Args:
        spec: Measurement type string; the default two-label string when None
        available: Identifier -> factory mapping; the registered types when None

    Returns:
        Mapping from composite-key prefix to aggregator factory
    """
    if available is None:
        available = available_aggregator_types()

    table: Dict[str, AggregatorFactory] = {}
    for entry in parse_measurement_types(spec):
        factory = available.get(entry.type_identifier)
        if factory is None:
            logger.warning(
                f"Didn't find aggregator type '{entry.type_identifier}' for label {entry.label}"
            )
            continue
        table[entry.key_prefix] = factory
    return table
