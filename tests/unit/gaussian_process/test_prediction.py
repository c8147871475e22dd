from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from functools import partial

import numpy as np
import pytest

from pysatl_refdist.gaussian_process.kernels import ard_exp_quad, exp_quad
from pysatl_refdist.gaussian_process.prediction import (
    PosteriorPredictive,
    posterior_predictive,
    posterior_predictive_rng,
)

X1 = np.array([-1.5, -0.4, 0.3, 1.1, 2.0])
Y1 = np.array([0.2, -0.5, 0.1, 0.9, 0.4])
X2 = np.array([-1.0, 0.0, 0.5, 3.0])
KERNEL = partial(exp_quad, alpha=1.1, rho=0.8)
SIGMA = 0.25
DELTA = 1e-9


def dense_posterior(x1, y1, x2, sigma, delta):
    """Posterior by explicit matrix inversion."""
    k11 = KERNEL(x1) + sigma**2 * np.eye(len(x1))
    k21 = KERNEL(x2, x1)
    inverse = np.linalg.inv(k11)
    mean = k21 @ inverse @ y1
    cov = KERNEL(x2) - k21 @ inverse @ k21.T + delta * np.eye(len(x2))
    return mean, cov


class TestPosteriorPredictive:
    def test_matches_dense_formula(self) -> None:
        predictive = posterior_predictive(X1, Y1, X2, KERNEL, SIGMA, DELTA)
        mean, cov = dense_posterior(X1, Y1, X2, SIGMA, DELTA)

        assert isinstance(predictive, PosteriorPredictive)
        np.testing.assert_allclose(predictive.mean, mean, rtol=1e-9, atol=1e-12)
        np.testing.assert_allclose(predictive.covariance, cov, rtol=1e-9, atol=1e-12)

    def test_covariance_is_symmetric(self) -> None:
        cov = posterior_predictive(X1, Y1, X2, KERNEL, SIGMA).covariance
        np.testing.assert_allclose(cov, cov.T, atol=1e-12)

    def test_far_from_data_reverts_to_prior(self) -> None:
        predictive = posterior_predictive(X1, Y1, np.array([50.0]), KERNEL, SIGMA)

        assert predictive.mean[0] == pytest.approx(0.0, abs=1e-12)
        assert predictive.std[0] == pytest.approx(1.1, rel=1e-6)

    def test_low_noise_interpolates(self) -> None:
        predictive = posterior_predictive(X1, Y1, X1, KERNEL, sigma=1e-4, delta=1e-12)
        np.testing.assert_allclose(predictive.mean, Y1, atol=1e-5)
        assert np.all(predictive.std < 1e-3)

    def test_multidimensional_inputs(self) -> None:
        kernel = partial(ard_exp_quad, alpha=1.0, rho=[0.5, 2.0])
        x1 = np.array([[0.0, 0.0], [1.0, 0.5], [0.5, -1.0]])
        x2 = np.array([[0.2, 0.1]])

        predictive = posterior_predictive(x1, np.array([1.0, -1.0, 0.5]), x2, kernel, 0.1)

        assert predictive.mean.shape == (1,)
        assert predictive.covariance.shape == (1, 1)

    def test_observation_length_is_checked(self) -> None:
        with pytest.raises(ValueError):
            posterior_predictive(X1, Y1[:3], X2, KERNEL, SIGMA)

    def test_noise_free_duplicate_inputs_fail(self) -> None:
        x1 = np.array([0.0, 0.0])
        with pytest.raises(np.linalg.LinAlgError):
            posterior_predictive(x1, np.array([1.0, 1.0]), X2, KERNEL, 0.0)


class TestPosteriorPredictiveSampling:
    def test_shapes(self) -> None:
        rng = np.random.default_rng(0)

        single = posterior_predictive_rng(X1, Y1, X2, KERNEL, SIGMA, rng=rng)
        many = posterior_predictive_rng(X1, Y1, X2, KERNEL, SIGMA, size=7, rng=rng)

        assert single.shape == (4,)
        assert many.shape == (7, 4)

    def test_draws_match_predictive_moments(self) -> None:
        predictive = posterior_predictive(X1, Y1, X2, KERNEL, SIGMA, delta=1e-6)
        draws = predictive.sample(size=40_000, rng=np.random.default_rng(21))

        np.testing.assert_allclose(draws.mean(axis=0), predictive.mean, atol=0.03)
        np.testing.assert_allclose(np.cov(draws, rowvar=False), predictive.covariance, atol=0.05)
