"""Export sink contract for measurement aggregates."""

from abc import ABC, abstractmethod
from typing import Union

Number = Union[int, float]


class MeasurementsExporter(ABC):
    """Receives one ``(metric, measurement, value)`` triple per exported field.

    ``metric`` is the aggregator's composite key (e.g. ``HISTOGRAM_READ``) and
    ``measurement`` the field name (e.g. ``AverageLatency(us)``). Write errors
    propagate to the caller of ``Measurements.export_measurements``.
    """

    @abstractmethod
    def write(self, metric: str, measurement: str, value: Number) -> None:
        """Write a single measurement."""

    def close(self) -> None:
        """Flush and release any underlying resources."""

    def __enter__(self) -> "MeasurementsExporter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
