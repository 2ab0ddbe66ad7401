"""
Tests for scalar_kalman.filtering.kalman_numba module.
"""

from __future__ import annotations

import numpy as np
import pytest

from scalar_kalman.config import FLOAT_TOLERANCE
from scalar_kalman.filtering.kalman_filtering import run_filter
from scalar_kalman.filtering.kalman_numba import filter_arrays
from scalar_kalman.gaussian import Gaussian, InvalidDistribution


@pytest.fixture
def noisy_series() -> tuple[np.ndarray, np.ndarray]:
    """A drifting quantity observed with varying noise."""
    rng = np.random.default_rng(42)
    n = 200
    truth = np.cumsum(rng.normal(1.0, np.sqrt(2.0), n))
    variances = rng.uniform(0.5, 10.0, n)
    means = truth + rng.normal(0.0, np.sqrt(variances))
    return means, variances


class TestFilterArrays:
    """Tests for filter_arrays function."""

    def test_matches_scalar_recursion(self, noisy_series, motion):
        means, variances = noisy_series
        upd_m, upd_v, pred_m, pred_v = filter_arrays(means, variances, motion)

        steps = list(
            run_filter((Gaussian(m, v) for m, v in zip(means, variances)), motion)
        )
        assert np.allclose(upd_m, [s.updated.mean for s in steps], rtol=1e-12, atol=0)
        assert np.allclose(upd_v, [s.updated.variance for s in steps], rtol=1e-12, atol=0)
        assert np.allclose(pred_m, [s.predicted.mean for s in steps], rtol=1e-12, atol=0)
        assert np.allclose(pred_v, [s.predicted.variance for s in steps], rtol=1e-12, atol=0)

    def test_end_to_end_values(self, motion):
        upd_m, upd_v, pred_m, pred_v = filter_arrays(
            np.array([5.0]), np.array([4.0]), motion, initial=Gaussian(0.0, 1000.0)
        )
        assert np.isclose(upd_m[0], 4.9800797, atol=FLOAT_TOLERANCE)
        assert np.isclose(upd_v[0], 3.9840637, atol=FLOAT_TOLERANCE)
        assert np.isclose(pred_m[0], 5.9800797, atol=FLOAT_TOLERANCE)
        assert np.isclose(pred_v[0], 5.9840637, atol=FLOAT_TOLERANCE)

    def test_output_shapes(self, noisy_series, motion):
        means, variances = noisy_series
        for out in filter_arrays(means, variances, motion):
            assert out.shape == means.shape

    def test_accepts_lists(self, motion):
        upd_m, *_ = filter_arrays([5.0, 6.0], [4.0, 4.0], motion)
        assert upd_m.shape == (2,)

    def test_empty_input(self, motion):
        for out in filter_arrays(np.array([]), np.array([]), motion):
            assert out.size == 0

    def test_variances_reduced_then_grown(self, noisy_series, motion):
        means, variances = noisy_series
        _, upd_v, _, pred_v = filter_arrays(means, variances, motion)
        assert np.all(upd_v < variances)
        assert np.allclose(pred_v - upd_v, motion.variance)

    def test_subnormal_variances(self):
        tiny = Gaussian(0.0, 1e-310)
        upd_m, upd_v, _, _ = filter_arrays([1.0], [1e-310], tiny, initial=tiny)
        assert np.isclose(upd_m[0], 0.5, rtol=1e-6)
        assert 0 < upd_v[0] < 1e-310

    def test_overflowing_prediction_names_index(self):
        with pytest.raises(InvalidDistribution, match="prediction 0"):
            filter_arrays(
                [0.0, 0.0],
                [1e308, 1e308],
                Gaussian(0.0, 1.7e308),
                initial=Gaussian(0.0, 1e308),
            )

    def test_length_mismatch(self, motion):
        with pytest.raises(ValueError, match="differ in length"):
            filter_arrays(np.ones(3), np.ones(4), motion)

    def test_not_one_dimensional(self, motion):
        with pytest.raises(ValueError, match="1-D"):
            filter_arrays(np.ones((2, 2)), np.ones((2, 2)), motion)

    @pytest.mark.parametrize("bad", [0.0, -1.0, np.nan, np.inf])
    def test_invalid_variance_names_index(self, motion, bad: float):
        variances = np.array([1.0, 2.0, bad, 3.0])
        with pytest.raises(InvalidDistribution, match="measurement 2"):
            filter_arrays(np.zeros(4), variances, motion)

    def test_invalid_motion(self):
        motion = Gaussian(0.0, 1.0)
        object.__setattr__(motion, "variance", 0.0)
        with pytest.raises(InvalidDistribution, match="filter_arrays"):
            filter_arrays(np.zeros(2), np.ones(2), motion)
