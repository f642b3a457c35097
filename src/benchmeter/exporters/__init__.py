"""Export sinks for accumulated measurements."""

from pathlib import Path
from typing import IO, Union

from .base import MeasurementsExporter
from .dataframe import DataFrameMeasurementsExporter
from .json_exporter import JSONMeasurementsExporter
from .text import TextMeasurementsExporter

EXPORTER_NAMES = ("text", "json", "csv")


def create_exporter(name: str, output: Union[str, Path, IO[str]]) -> MeasurementsExporter:
    """Build an exporter by name ("text", "json" or "csv")."""
    if name == "text":
        return TextMeasurementsExporter(output)
    if name == "json":
        return JSONMeasurementsExporter(output)
    if name == "csv":
        if not isinstance(output, (str, Path)):
            raise ValueError("csv exporter requires a file path")
        return DataFrameMeasurementsExporter(output)
    raise ValueError(f"Unknown exporter: {name}")


__all__ = [
    "MeasurementsExporter",
    "TextMeasurementsExporter",
    "JSONMeasurementsExporter",
    "DataFrameMeasurementsExporter",
    "EXPORTER_NAMES",
    "create_exporter",
]
