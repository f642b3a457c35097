"""Multi-threaded synthetic workload that drives a Measurements registry."""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict

from ..measurements import Measurements
from .sampler import DistributionSampler

logger = logging.getLogger(__name__)

RETURN_OK = 0
RETURN_ERROR = -1

DEFAULT_LATENCY_DIST = {"type": "LogNormal", "mean": 6.5, "sigma": 0.6, "is_int": True}


class WorkloadRunner:
    """Runs ``threads`` workers, each issuing ``operation_count`` operations.

    Every operation records one latency sample and one return code for an
    operation name drawn from the weighted ``operations`` mix.
    """

    def __init__(self, measurements: Measurements, config: Dict[str, Any]):
        """Initialize the runner.

        Args:
            measurements: Registry that receives the events
            config: Workload configuration containing:
                - threads: Number of worker threads
                - operation_count: Operations per worker
                - operations: Mapping of operation name to weight
                - latency_us_dist_config: Latency distribution (microseconds)
                - failure_probability (optional): Chance of a non-zero return code
                - random_seed (optional): Base seed; worker i uses seed + i
        """
        self.measurements = measurements
        self.config = config

        self.threads = int(config.get("threads", 1))
        self.operation_count = int(config.get("operation_count", 1000))
        self.operations: Dict[str, float] = dict(config.get("operations") or {"READ": 1.0})
        self.latency_dist = config.get("latency_us_dist_config", DEFAULT_LATENCY_DIST)
        self.failure_probability = float(config.get("failure_probability", 0.0))
        self.random_seed = config.get("random_seed")

        if self.threads <= 0:
            raise ValueError(f"threads must be positive, got {self.threads}")
        if self.operation_count < 0:
            raise ValueError(f"operation_count must be non-negative, got {self.operation_count}")

    def _worker(self, worker_id: int) -> Dict[str, int]:
        seed = None if self.random_seed is None else self.random_seed + worker_id
        sampler = DistributionSampler(seed)
        failures = 0

        for _ in range(self.operation_count):
            operation = sampler.choose(self.operations)
            latency = int(sampler.sample(self.latency_dist))
            code = RETURN_ERROR if sampler.chance(self.failure_probability) else RETURN_OK
            if code != RETURN_OK:
                failures += 1
            self.measurements.measure(operation, latency)
            self.measurements.report_return_code(operation, code)

        logger.debug(f"Worker {worker_id} finished {self.operation_count} operations")
        return {"operations": self.operation_count, "failures": failures}

    def run(self) -> Dict[str, Any]:
        """Run all workers to completion.

        Returns:
            Totals: operations, failures, duration_s and operations_per_second
        """
        logger.info(
            f"Starting workload: {self.threads} threads x {self.operation_count} operations"
        )
        start = time.perf_counter()

        with ThreadPoolExecutor(max_workers=self.threads, thread_name_prefix="worker") as pool:
            futures = [pool.submit(self._worker, i) for i in range(self.threads)]
            results = [f.result() for f in futures]

        duration = time.perf_counter() - start
        operations = sum(r["operations"] for r in results)
        report = {
            "threads": self.threads,
            "operations": operations,
            "failures": sum(r["failures"] for r in results),
            "duration_s": duration,
            "operations_per_second": operations / duration if duration > 0 else 0.0,
        }
        logger.info(
            f"Workload completed: {operations} operations in {duration:.3f}s "
            f"({report['operations_per_second']:.1f} ops/s)"
        )
        return report
