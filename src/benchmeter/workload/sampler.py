"""Statistical distribution sampler for synthetic latencies."""

import logging
from typing import Any, Dict, Optional, Union

import numpy as np

logger = logging.getLogger(__name__)


class DistributionSampler:
    """Samples values from configured statistical distributions.

    Each sampler owns its own random generator, so one sampler per worker
    thread gives reproducible, independent streams.
    """

    def __init__(self, seed: Optional[int] = None):
        """Initialize the sampler with optional random seed.

        Args:
            seed: Random seed for reproducibility
        """
        self.rng = np.random.default_rng(seed)

    def sample(self, distribution_config: Dict[str, Any]) -> Union[float, int]:
        """Sample a value from the specified distribution.

        Args:
            distribution_config: Configuration dict with 'type' and distribution parameters.
                Examples:
                - {'type': 'Exponential', 'rate': 0.001}
                - {'type': 'LogNormal', 'mean': 6.5, 'sigma': 0.5, 'is_int': True}
                - {'type': 'Uniform', 'low': 100, 'high': 5000, 'is_int': True}

        Returns:
            Sampled value (float or int based on 'is_int' parameter)
        """
        dist_type = distribution_config.get("type", "Constant")
        is_int = distribution_config.get("is_int", False)

        if dist_type == "Constant":
            value = distribution_config.get("value", 1.0)

        elif dist_type == "Uniform":
            low = distribution_config.get("low", 0.0)
            high = distribution_config.get("high", 1.0)
            value = self.rng.uniform(low, high)

        elif dist_type == "Normal":
            mean = distribution_config.get("mean", 0.0)
            # Support both 'std' and 'sigma' parameter names
            std = distribution_config.get("std", distribution_config.get("sigma", 1.0))
            value = max(0.0, self.rng.normal(mean, std))

        elif dist_type == "Exponential":
            rate = distribution_config.get("rate", 1.0)
            value = self.rng.exponential(1.0 / rate)

        elif dist_type == "LogNormal":
            # Parameters of the underlying normal distribution
            mean = distribution_config.get("mean", 0.0)
            sigma = distribution_config.get("sigma", 1.0)
            value = self.rng.lognormal(mean, sigma)

        else:
            logger.warning(f"Unknown distribution type: {dist_type}, using constant value 1.0")
            value = 1.0

        if is_int:
            value = max(0, int(round(value)))

        return value

    def choose(self, weights: Dict[str, float]) -> str:
        """Pick a key of ``weights`` with probability proportional to its weight."""
        names = list(weights)
        p = np.array([weights[n] for n in names], dtype=float)
        p = p / p.sum()
        return names[int(self.rng.choice(len(names), p=p))]

    def chance(self, probability: float) -> bool:
        return bool(self.rng.random() < probability)
