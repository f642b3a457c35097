"""pandas exporter for tabular analysis and CSV output."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd

from .base import MeasurementsExporter, Number

logger = logging.getLogger(__name__)

COLUMNS = ["metric", "measurement", "value"]


class DataFrameMeasurementsExporter(MeasurementsExporter):
    """Collects measurements into a pandas DataFrame.

    If ``csv_path`` is given, the frame is written there on close.
    """

    def __init__(self, csv_path: Optional[Union[str, Path]] = None):
        self.csv_path = Path(csv_path) if csv_path is not None else None
        self.rows: List[Dict[str, Any]] = []

    def write(self, metric: str, measurement: str, value: Number) -> None:
        self.rows.append({"metric": metric, "measurement": measurement, "value": value})

    def to_dataframe(self) -> pd.DataFrame:
        """All rows written so far."""
        if not self.rows:
            return pd.DataFrame(columns=COLUMNS)
        return pd.DataFrame(self.rows, columns=COLUMNS)

    def value(self, metric: str, measurement: str) -> Any:
        """Last value written for ``(metric, measurement)``; KeyError if absent."""
        for row in reversed(self.rows):
            if row["metric"] == metric and row["measurement"] == measurement:
                return row["value"]
        raise KeyError((metric, measurement))

    def pivot(self) -> pd.DataFrame:
        """Summary fields as a metric x measurement table (last value wins)."""
        df = self.to_dataframe()
        if df.empty:
            return df
        return df.pivot_table(index="metric", columns="measurement", values="value", aggfunc="last")

    def close(self) -> None:
        if self.csv_path is None:
            return
        self.csv_path.parent.mkdir(parents=True, exist_ok=True)
        self.to_dataframe().to_csv(self.csv_path, index=False)
        logger.info(f"Saved measurements to {self.csv_path}")
