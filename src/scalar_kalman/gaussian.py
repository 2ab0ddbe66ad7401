from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any

LOGGER = logging.getLogger(__name__)


class InvalidDistribution(ValueError):
    """Raised when a Gaussian is built from, or fed, a non-positive or non-finite variance."""

    def __init__(self, variance: Any, context: str | None = None):
        self.variance = variance
        self.context = context
        where = f" in {context}" if context else ""
        super().__init__(
            f"Invalid Gaussian{where}: variance must be finite and strictly positive, got {variance!r}"
        )


def _is_valid_variance(variance: float) -> bool:
    return math.isfinite(variance) and variance > 0


@dataclass(frozen=True)
class Gaussian:
    """
    Belief about a scalar quantity, held as the mean and variance of a normal
    distribution.

    Instances are immutable and compare field-wise with exact equality.
    Every transformation of a belief returns a new ``Gaussian``.

    Use :meth:`unspecified` for the conventional mean 0 / variance 1 prior.
    Callers that want a genuinely uninformative start should pass a large
    variance explicitly instead.
    """

    mean: float
    variance: float

    def __post_init__(self):
        mean = float(self.mean)
        try:
            variance = float(self.variance)
        except (TypeError, ValueError) as exc:
            raise InvalidDistribution(self.variance, "Gaussian()") from exc
        if not _is_valid_variance(variance):
            raise InvalidDistribution(variance, "Gaussian()")
        # frozen dataclass: normalise the stored types through object.__setattr__
        object.__setattr__(self, "mean", mean)
        object.__setattr__(self, "variance", variance)

    @classmethod
    def unspecified(cls) -> Gaussian:
        """Return the conventional flat prior (mean 0, variance 1)."""
        from scalar_kalman.config import DEFAULT_PRIOR_MEAN, DEFAULT_PRIOR_VARIANCE

        return cls(DEFAULT_PRIOR_MEAN, DEFAULT_PRIOR_VARIANCE)

    default_prior = unspecified

    @property
    def std(self) -> float:
        """Standard deviation of the belief."""
        return math.sqrt(self.variance)


def check_distribution(belief: Gaussian, context: str) -> Gaussian:
    """
    Re-validate a belief on entry to an operation.

    Args:
        belief: Any object exposing ``mean`` and ``variance``.
        context: Name of the operation, used in the error message.

    Returns:
        The belief unchanged.

    Raises:
        InvalidDistribution: If the variance is not strictly positive.
    """
    variance = getattr(belief, "variance", None)
    try:
        valid = variance is not None and _is_valid_variance(float(variance))
    except (TypeError, ValueError):
        valid = False
    if not valid:
        LOGGER.debug(f"Rejecting belief {belief!r} in {context}")
        raise InvalidDistribution(variance, context)
    return belief
