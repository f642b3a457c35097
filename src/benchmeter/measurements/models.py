"""Data models for measurement type configuration."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AggregatorSpecEntry:
    """One ``LABEL:typeidentifier`` descriptor from the measurement type string."""

    label: str
    type_identifier: str

    @property
    def key_prefix(self) -> str:
        """Prefix of every composite key built for this label, e.g. ``HISTOGRAM_``."""
        return f"{self.label}_"
