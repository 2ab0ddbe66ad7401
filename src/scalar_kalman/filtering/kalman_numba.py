"""
Batch scalar Kalman filter over measurement arrays.

Same recursion as :func:`scalar_kalman.filtering.kalman_filtering.run_filter`,
compiled with numba for long measurement series. Inputs are validated in
Python before the compiled kernel runs, so the kernel itself never sees a
non-positive variance.
"""

from __future__ import annotations

import logging

import numpy as np
from numba import njit

from scalar_kalman.config import INITIAL_MEAN, INITIAL_VARIANCE
from scalar_kalman.gaussian import Gaussian, InvalidDistribution, check_distribution

LOGGER = logging.getLogger(__name__)


def filter_arrays(
    meas_means: np.ndarray,
    meas_vars: np.ndarray,
    motion: Gaussian,
    initial: Gaussian | None = None,
) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Run Update-then-Predict over arrays of measurements.

    Args:
        meas_means: Measurement means, shape (N,).
        meas_vars: Measurement variances, shape (N,), all strictly positive.
        motion: Motion model applied after each update.
        initial: Starting belief, defaults to mean 0 and variance 1000.

    Returns:
        ``(updated_means, updated_vars, predicted_means, predicted_vars)``,
        each of shape (N,).

    Raises:
        ValueError: If the arrays are not 1-D or differ in length.
        InvalidDistribution: If any variance is not finite and strictly positive,
            or a predicted variance overflows.
    """
    means = np.asarray(meas_means, dtype=np.float64)
    variances = np.asarray(meas_vars, dtype=np.float64)
    if means.ndim != 1 or variances.ndim != 1:
        raise ValueError(
            f"Measurement arrays must be 1-D, got shapes {means.shape} and {variances.shape}"
        )
    if means.shape != variances.shape:
        raise ValueError(
            f"Measurement means and variances differ in length: {means.size} != {variances.size}"
        )

    bad = np.flatnonzero(~(np.isfinite(variances) & (variances > 0)))
    if bad.size:
        idx = int(bad[0])
        raise InvalidDistribution(variances[idx], f"filter_arrays (measurement {idx})")

    check_distribution(motion, "filter_arrays")
    state = initial if initial is not None else Gaussian(INITIAL_MEAN, INITIAL_VARIANCE)
    check_distribution(state, "filter_arrays")

    LOGGER.debug(f"Batch filtering {means.size} measurements")
    upd_mean, upd_var, pred_mean, pred_var = _filter_flat_jit(
        means,
        variances,
        state.mean,
        state.variance,
        motion.mean,
        motion.variance,
    )

    # prediction adds variances and can overflow to inf
    overflow = np.flatnonzero(~np.isfinite(pred_var))
    if overflow.size:
        idx = int(overflow[0])
        raise InvalidDistribution(pred_var[idx], f"filter_arrays (prediction {idx})")
    return upd_mean, upd_var, pred_mean, pred_var


@njit(cache=True, nogil=True)
def _filter_flat_jit(
    meas_means, meas_vars, mean0, var0, motion_mean, motion_var
):
    n = meas_means.shape[0]
    upd_mean = np.empty(n)
    upd_var = np.empty(n)
    pred_mean = np.empty(n)
    pred_var = np.empty(n)

    mean_prev = mean0
    var_prev = var0
    for k in range(n):
        # Update
        m2 = meas_means[k]
        v2 = meas_vars[k]
        mean_up = (v2 * mean_prev + var_prev * m2) / (var_prev + v2)
        small = min(var_prev, v2)
        large = max(var_prev, v2)
        var_up = small / (1.0 + small / large)
        upd_mean[k] = mean_up
        upd_var[k] = var_up

        # Predict
        mean_prev = mean_up + motion_mean
        var_prev = var_up + motion_var
        pred_mean[k] = mean_prev
        pred_var[k] = var_prev

    return upd_mean, upd_var, pred_mean, pred_var
