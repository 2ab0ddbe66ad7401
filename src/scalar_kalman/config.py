# src/scalar_kalman/config.py
"""
Configuration constants for the scalar filter and its driving loop.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from scalar_kalman.gaussian import Gaussian

logger = logging.getLogger(__name__)

# =============================================================================
# PRIORS
# =============================================================================

# Named "flat prior" returned by Gaussian.unspecified()
DEFAULT_PRIOR_MEAN = 0.0
DEFAULT_PRIOR_VARIANCE = 1.0

# Starting belief of the driving loop, deliberately very uncertain
INITIAL_MEAN = 0.0
INITIAL_VARIANCE = 1000.0

# =============================================================================
# MOTION MODEL
# =============================================================================

MOTION_MEAN = 0.0
MOTION_VARIANCE = 1.0

# =============================================================================
# NUMERICS
# =============================================================================

FLOAT_TOLERANCE = 1e-5

# Below this the initial belief is informative enough to bias the first steps
UNINFORMATIVE_VARIANCE = 100.0


@dataclass
class FilterSettings:
    """Settings for a single run of the driving loop."""

    initial_mean: float = field(default=INITIAL_MEAN)
    initial_variance: float = field(default=INITIAL_VARIANCE)
    motion_mean: float = field(default=MOTION_MEAN)
    motion_variance: float = field(default=MOTION_VARIANCE)

    def __post_init__(self):
        if 0 < self.initial_variance < UNINFORMATIVE_VARIANCE:
            logger.warning(
                f"Initial variance {self.initial_variance} is small; the first "
                "measurements will be pulled towards the initial mean."
            )

    def initial_belief(self) -> Gaussian:
        return Gaussian(self.initial_mean, self.initial_variance)

    def motion_model(self) -> Gaussian:
        return Gaussian(self.motion_mean, self.motion_variance)
