"""JSON exporter."""

import json
import logging
from pathlib import Path
from typing import IO, Any, Dict, List, Union

from .base import MeasurementsExporter, Number

logger = logging.getLogger(__name__)


class JSONMeasurementsExporter(MeasurementsExporter):
    """Writes ``{"metric", "measurement", "value"}`` objects.

    By default one object is written per line as soon as it arrives. With
    ``pretty=True`` the objects are buffered and written as one indented array
    on close.
    """

    def __init__(self, output: Union[str, Path, IO[str]], pretty: bool = False):
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
        self.pretty = pretty
        self._buffer: List[Dict[str, Any]] = []

    def write(self, metric: str, measurement: str, value: Number) -> None:
        record = {"metric": metric, "measurement": measurement, "value": value}
        if self.pretty:
            self._buffer.append(record)
        else:
            self._stream.write(json.dumps(record) + "\n")

    def close(self) -> None:
        if self.pretty:
            json.dump(self._buffer, self._stream, indent=2)
            self._stream.write("\n")
            self._buffer = []
        self._stream.flush()
        if self._owns_stream:
            self._stream.close()
            logger.info(f"Saved measurements to {self.path}")
