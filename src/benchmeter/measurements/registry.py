"""Measurements registry: routes latency and return-code events to aggregators."""

import logging
import threading
from typing import Any, Dict, Iterator, List, Optional

from .aggregator import OneMeasurement
from .config import MeasurementsConfig
from .type_table import AggregatorFactory, build_type_table

logger = logging.getLogger(__name__)


class Measurements:
    """Collects latency measurements and reports them when requested.

    One aggregator is created lazily for every (label, operation) pair and is
    stored under the composite key ``LABEL_OPERATION``. Lookups of existing
    aggregators take no lock; creation and label removal happen under a single
    registry lock, so concurrent first use of a key constructs exactly one
    aggregator.

    A label whose aggregator fails to construct is removed from the type table
    for the lifetime of the registry. Events for other labels are unaffected.
    """

    def __init__(self, config: Any = None):
        """Initialize the registry.

        Args:
            config: MeasurementsConfig, a plain dict of the same keys, or None
                for the defaults
        """
        self.config = MeasurementsConfig.coerce(config)
        self._lock = threading.Lock()
        self._data: Dict[str, OneMeasurement] = {}
        # Replaced, never mutated in place, so readers can iterate without the lock
        self._types: Dict[str, AggregatorFactory] = build_type_table(self.config.measurementtype)

        if not self._types:
            logger.warning("No usable measurement types configured; events will be dropped")
        logger.info(f"Measurements initialized with labels: {', '.join(self.labels) or '(none)'}")

    @property
    def labels(self) -> List[str]:
        """Currently enabled labels, in configuration order."""
        return [prefix[:-1] for prefix in self._types]

    def keys(self) -> List[str]:
        """Composite keys of every aggregator created so far."""
        return list(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def _ensure_aggregator(self, prefix: str, key: str) -> Optional[OneMeasurement]:
        measurement = self._data.get(key)
        if measurement is not None:
            return measurement

        with self._lock:
            measurement = self._data.get(key)
            if measurement is not None:
                return measurement

            factory = self._types.get(prefix)
            if factory is None:
                # Poisoned by another thread since the caller took its snapshot
                return None

            try:
                measurement = factory(key, self.config)
            except Exception as e:
                logger.warning(
                    f"Ignoring measurement type {prefix[:-1]}: "
                    f"failed to create aggregator {key} ({type(e).__name__}: {e})"
                )
                types = dict(self._types)
                del types[prefix]
                self._types = types
                return None

            self._data[key] = measurement
            logger.debug(f"Created {type(measurement).__name__} for {key}")
            return measurement

    def _aggregators_for(self, operation: str) -> Iterator[OneMeasurement]:
        for prefix in list(self._types):
            measurement = self._ensure_aggregator(prefix, prefix + operation)
            if measurement is not None:
                yield measurement

    def measure(self, operation: str, latency: int) -> None:
        """Report a single latency value for an operation, e.g. ("READ", 1200)."""
        for measurement in self._aggregators_for(operation):
            measurement.measure(latency)

    def report_return_code(self, operation: str, code: int) -> None:
        """Report the return code of a single operation."""
        for measurement in self._aggregators_for(operation):
            measurement.report_return_code(code)

    def export_measurements(self, exporter: Any) -> None:
        """Export every aggregator to ``exporter``.

        Errors raised by the exporter propagate to the caller; aggregator state
        is left as it was and the export can be retried.

        Args:
            exporter: Object with a ``write(metric, measurement, value)`` method
        """
        for measurement in list(self._data.values()):
            measurement.export_measurements(exporter)

    def get_summary(self) -> str:
        """Return a one-line summary of every aggregator."""
        summaries = (m.get_summary() for m in list(self._data.values()))
        return " ".join(s for s in summaries if s)


_measurements: Optional[Measurements] = None
_measurements_config: Any = None
_singleton_lock = threading.Lock()


def configure_measurements(config: Any) -> None:
    """Set the configuration used when the process-wide registry is created.

    Has no effect once ``get_measurements`` has created the registry.
    """
    global _measurements_config
    with _singleton_lock:
        if _measurements is not None:
            logger.warning("Measurements already created; new configuration ignored")
            return
        _measurements_config = config


def get_measurements() -> Measurements:
    """Return the process-wide registry, creating it on first use."""
    global _measurements
    measurements = _measurements
    if measurements is not None:
        return measurements

    with _singleton_lock:
        if _measurements is None:
            _measurements = Measurements(_measurements_config)
        return _measurements


def reset_measurements() -> None:
    """Drop the process-wide registry and stored configuration. Used for testing."""
    global _measurements, _measurements_config
    with _singleton_lock:
        _measurements = None
        _measurements_config = None
