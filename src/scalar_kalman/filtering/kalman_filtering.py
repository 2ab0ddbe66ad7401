"""
One-dimensional Kalman filter over Gaussian beliefs.

The filter is two pure transitions:

- :func:`update_measurement` fuses a prior with an independent measurement by
  inverse-variance weighting (the product of two Gaussians).
- :func:`predict_state` pushes a belief through an independent Gaussian motion
  model (the sum of two Gaussians).

:func:`run_filter` chains them, Update then Predict, over a stream of
measurements. Only the current belief is carried between steps.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from scalar_kalman.config import INITIAL_MEAN, INITIAL_VARIANCE
from scalar_kalman.gaussian import Gaussian, check_distribution

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilterStep:
    """The beliefs reported for one Update-then-Predict cycle."""

    step: int
    measurement: Gaussian
    initial: Gaussian
    updated: Gaussian
    predicted: Gaussian


def update_measurement(prior: Gaussian, measurement: Gaussian) -> Gaussian:
    """
    Fuse a prior belief with a new measurement of the same quantity.

    Args:
        prior: Current belief.
        measurement: Independent noisy observation, as a Gaussian.

    Returns:
        The posterior belief. Its mean lies between the two input means and its
        variance is below both input variances. The result does not depend on
        the order of the arguments.

    Raises:
        InvalidDistribution: If either input has a non-positive variance.
    """
    check_distribution(prior, "update_measurement")
    check_distribution(measurement, "update_measurement")

    mean1, var1 = prior.mean, prior.variance
    mean2, var2 = measurement.mean, measurement.variance
    # same as 1/(1/var1 + 1/var2) without overflowing for tiny variances
    small, large = min(var1, var2), max(var1, var2)

    posterior = Gaussian(
        (var2 * mean1 + var1 * mean2) / (var1 + var2),
        small / (1.0 + small / large),
    )
    LOGGER.debug(f"Update: {prior} + {measurement} -> {posterior}")
    return posterior


def predict_state(belief: Gaussian, motion: Gaussian) -> Gaussian:
    """
    Advance a belief through an independent Gaussian motion model.

    Args:
        belief: Current belief.
        motion: Expected displacement and its uncertainty.

    Returns:
        The predicted belief: means and variances added.

    Raises:
        InvalidDistribution: If either input has a non-positive variance, or the
            summed variance overflows.
    """
    check_distribution(belief, "predict_state")
    check_distribution(motion, "predict_state")

    predicted = Gaussian(
        belief.mean + motion.mean,
        belief.variance + motion.variance,
    )
    LOGGER.debug(f"Predict: {belief} + {motion} -> {predicted}")
    return predicted


def filter_step(
    belief: Gaussian, measurement: Gaussian, motion: Gaussian, step: int = 0
) -> FilterStep:
    """Run a single Update-then-Predict cycle from ``belief``."""
    updated = update_measurement(belief, measurement)
    predicted = predict_state(updated, motion)
    return FilterStep(
        step=step,
        measurement=measurement,
        initial=belief,
        updated=updated,
        predicted=predicted,
    )


def run_filter(
    measurements: Iterable[Gaussian],
    motion: Gaussian,
    initial: Gaussian | None = None,
) -> Iterator[FilterStep]:
    """
    Filter a stream of measurements lazily.

    Each step's predicted belief becomes the next step's initial belief. The
    generator runs for as long as ``measurements`` yields values.

    Args:
        measurements: Iterable of measurement beliefs.
        motion: Motion model applied after every update.
        initial: Starting belief. Defaults to a very uncertain belief
            (mean 0, variance 1000).

    Yields:
        One :class:`FilterStep` per measurement.
    """
    check_distribution(motion, "run_filter")
    state = initial if initial is not None else Gaussian(INITIAL_MEAN, INITIAL_VARIANCE)
    check_distribution(state, "run_filter")

    LOGGER.info(f"Running scalar Kalman filter from {state} with motion {motion}")
    n_steps = 0
    for step, measurement in enumerate(measurements):
        result = filter_step(state, measurement, motion, step=step)
        state = result.predicted
        n_steps += 1
        yield result
    LOGGER.info(f"Kalman filter complete after {n_steps} steps, final belief {state}")
