"""Plain-text exporter: one ``[METRIC], measurement, value`` line per field."""

import logging
from pathlib import Path
from typing import IO, Union

from .base import MeasurementsExporter, Number

logger = logging.getLogger(__name__)


class TextMeasurementsExporter(MeasurementsExporter):
    """Writes measurements as human-readable text lines."""

    def __init__(self, output: Union[str, Path, IO[str]]):
        """Initialize the exporter.

        Args:
            output: File path to create, or an already open text stream. Streams
                passed in are flushed but not closed.
        """
        if isinstance(output, (str, Path)):
            path = Path(output)
            path.parent.mkdir(parents=True, exist_ok=True)
            self._stream = open(path, "w")
            self._owns_stream = True
            self.path = path
        else:
            self._stream = output
            self._owns_stream = False
            self.path = None

    def write(self, metric: str, measurement: str, value: Number) -> None:
        self._stream.write(f"[{metric}], {measurement}, {value}\n")

    def close(self) -> None:
        self._stream.flush()
        if self._owns_stream:
            self._stream.close()
            logger.info(f"Saved measurements to {self.path}")
