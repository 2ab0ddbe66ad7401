"""
Example script for tracking a drifting scalar with the batch filter.

A quantity moves by roughly one unit per step and is observed with noise of
varying quality. The script filters the noisy readings and compares the error
of the raw measurements with the error of the filtered estimate.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from scalar_kalman.filtering.kalman_filtering import run_filter
from scalar_kalman.filtering.kalman_numba import filter_arrays
from scalar_kalman.gaussian import Gaussian
from scalar_kalman.io.utils import save_steps

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


def main() -> None:
    """Simulate, filter and summarise a noisy drifting value."""
    rng = np.random.default_rng(2024)
    n_steps = 500
    motion = Gaussian(1.0, 0.5)

    truth = np.cumsum(rng.normal(motion.mean, motion.std, n_steps))
    meas_vars = rng.uniform(1.0, 25.0, n_steps)
    meas_means = truth + rng.normal(0.0, np.sqrt(meas_vars))

    upd_means, upd_vars, _, _ = filter_arrays(meas_means, meas_vars, motion)

    raw_rmse = np.sqrt(np.mean((meas_means - truth) ** 2))
    filt_rmse = np.sqrt(np.mean((upd_means - truth) ** 2))
    logger.info(f"Raw measurement RMSE: {raw_rmse:.3f}")
    logger.info(f"Filtered RMSE:        {filt_rmse:.3f}")
    logger.info(f"Final variance:       {upd_vars[-1]:.3f}")

    output_dir = Path("output")
    output_dir.mkdir(exist_ok=True)
    steps = run_filter(
        (Gaussian(m, v) for m, v in zip(meas_means, meas_vars)), motion
    )
    save_steps(steps, output_dir / "drifting_value_steps.tsv")


if __name__ == "__main__":
    main()
