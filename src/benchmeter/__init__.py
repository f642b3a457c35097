"""benchmeter: runtime latency and return-code measurements for benchmark clients."""

from .measurements import Measurements, MeasurementsConfig, get_measurements

__version__ = "0.1.0"

__all__ = ["Measurements", "MeasurementsConfig", "get_measurements", "__version__"]
