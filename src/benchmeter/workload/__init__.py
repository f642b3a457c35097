"""Synthetic workload generation."""

from .runner import WorkloadRunner
from .sampler import DistributionSampler

__all__ = ["WorkloadRunner", "DistributionSampler"]
