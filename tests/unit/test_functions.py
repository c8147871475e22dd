from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy.special import expit
from scipy.stats import bernoulli, lomax, pareto

from pysatl_refdist import functions as F

Y_PARETO = np.array([1.2, 2.0, 3.5, 10.0])


class TestParetoFunctions:
    def test_lpdf_sums_over_observations(self) -> None:
        expected = float(np.sum(pareto.logpdf(Y_PARETO, b=2.5, scale=1.0)))
        assert F.pareto_lpdf(Y_PARETO, 1.0, 2.5) == pytest.approx(expected, rel=1e-12)

    def test_scalar_observation(self) -> None:
        assert F.pareto_lpdf(2.0, 1.0, 2.5) == pytest.approx(
            pareto.logpdf(2.0, b=2.5), rel=1e-12
        )

    def test_cdf_is_product(self) -> None:
        expected = float(np.prod(pareto.cdf(Y_PARETO, b=2.5)))
        assert F.pareto_cdf(Y_PARETO, 1.0, 2.5) == pytest.approx(expected, rel=1e-12)

    def test_lcdf_and_lccdf_are_sums(self) -> None:
        assert F.pareto_lcdf(Y_PARETO, 1.0, 2.5) == pytest.approx(
            float(np.sum(pareto.logcdf(Y_PARETO, b=2.5))), rel=1e-12
        )
        assert F.pareto_lccdf(Y_PARETO, 1.0, 2.5) == pytest.approx(
            float(np.sum(pareto.logsf(Y_PARETO, b=2.5))), rel=1e-12
        )

    def test_lpdf_below_support(self) -> None:
        assert F.pareto_lpdf([0.5, 2.0], 1.0, 2.5) == -math.inf

    def test_invalid_parameters(self) -> None:
        with pytest.raises(ValueError, match="y_min > 0"):
            F.pareto_lpdf(2.0, 0.0, 1.0)

    def test_rng(self) -> None:
        single = F.pareto_rng(1.0, 2.5, rng=np.random.default_rng(0))
        many = F.pareto_rng(1.0, 2.5, size=50, rng=np.random.default_rng(0))

        assert isinstance(single, float)
        assert single >= 1.0
        assert many.shape == (50,)
        assert np.all(many >= 1.0)
        assert many[0] == single


class TestParetoType2Functions:
    def test_lpdf(self) -> None:
        y = np.array([0.0, 0.5, 4.0])
        expected = float(np.sum(lomax.logpdf(y, c=3.0, loc=-0.5, scale=2.0)))
        assert F.pareto_type_2_lpdf(y, -0.5, 2.0, 3.0) == pytest.approx(expected, rel=1e-12)

    def test_cdf_family(self) -> None:
        y = np.array([0.0, 0.5, 4.0])
        kwargs = {"c": 3.0, "loc": -0.5, "scale": 2.0}

        assert F.pareto_type_2_cdf(y, -0.5, 2.0, 3.0) == pytest.approx(
            float(np.prod(lomax.cdf(y, **kwargs))), rel=1e-12
        )
        assert F.pareto_type_2_lcdf(y, -0.5, 2.0, 3.0) == pytest.approx(
            float(np.sum(lomax.logcdf(y, **kwargs))), rel=1e-12
        )
        assert F.pareto_type_2_lccdf(y, -0.5, 2.0, 3.0) == pytest.approx(
            float(np.sum(lomax.logsf(y, **kwargs))), rel=1e-12
        )

    def test_rng(self) -> None:
        draws = F.pareto_type_2_rng(-0.5, 2.0, 3.0, size=100, rng=np.random.default_rng(1))
        assert draws.shape == (100,)
        assert np.all(draws >= -0.5)


class TestBernoulliFunctions:
    Y = np.array([1, 0, 0, 1, 1])

    def test_lpmf(self) -> None:
        expected = float(np.sum(bernoulli.logpmf(self.Y, 0.3)))
        assert F.bernoulli_lpmf(self.Y, 0.3) == pytest.approx(expected, rel=1e-12)

    def test_cdf_family(self) -> None:
        assert F.bernoulli_cdf(self.Y, 0.3) == pytest.approx(0.7**2, rel=1e-12)
        assert F.bernoulli_lcdf(self.Y, 0.3) == pytest.approx(2 * math.log(0.7), rel=1e-12)
        assert F.bernoulli_lccdf([0, 0], 0.3) == pytest.approx(2 * math.log(0.3), rel=1e-12)
        assert F.bernoulli_lccdf(self.Y, 0.3) == -math.inf

    def test_rng(self) -> None:
        single = F.bernoulli_rng(0.5, rng=np.random.default_rng(2))
        many = F.bernoulli_rng(0.5, size=20, rng=np.random.default_rng(2))

        assert isinstance(single, int)
        assert many.dtype == np.int64
        assert set(np.unique(many)) <= {0, 1}

    def test_logit_lpmf_matches_probability_form(self) -> None:
        assert F.bernoulli_logit_lpmf(self.Y, 0.8) == pytest.approx(
            F.bernoulli_lpmf(self.Y, float(expit(0.8))), rel=1e-12
        )

    def test_logit_lpmf_is_stable(self) -> None:
        assert F.bernoulli_logit_lpmf([0, 0], 900.0) == pytest.approx(-1800.0, rel=1e-12)

    def test_logit_rng(self) -> None:
        draws = F.bernoulli_logit_rng(2.0, size=20_000, rng=np.random.default_rng(4))
        assert float(np.mean(draws)) == pytest.approx(float(expit(2.0)), abs=0.02)


class TestBernoulliLogitGLMFunctions:
    X = np.array([[0.5, -1.0], [1.5, 0.25], [-0.3, 2.0]])
    BETA = np.array([1.2, -0.7])
    Y = np.array([1, 0, 1])

    def test_lpmf(self) -> None:
        theta = expit(0.1 + self.X @ self.BETA)
        expected = float(np.sum(bernoulli.logpmf(self.Y, theta)))
        assert F.bernoulli_logit_glm_lpmf(self.Y, self.X, 0.1, self.BETA) == pytest.approx(
            expected, rel=1e-12
        )

    def test_single_row_is_shared_by_all_outcomes(self) -> None:
        x = np.array([0.5, -1.0])
        theta = float(expit(0.1 + x @ self.BETA))
        expected = float(np.sum(bernoulli.logpmf(self.Y, theta)))
        assert F.bernoulli_logit_glm_lpmf(self.Y, x, 0.1, self.BETA) == pytest.approx(
            expected, rel=1e-12
        )

    def test_lpmf_shape_mismatch(self) -> None:
        with pytest.raises(ValueError):
            F.bernoulli_logit_glm_lpmf([1, 0], self.X, 0.1, self.BETA)
        with pytest.raises(ValueError):
            F.bernoulli_logit_glm_lpmf(self.Y, self.X, 0.1, [1.0, 2.0, 3.0])

    def test_rng(self) -> None:
        single = F.bernoulli_logit_glm_rng(self.X, 0.1, self.BETA, rng=np.random.default_rng(0))
        many = F.bernoulli_logit_glm_rng(
            self.X, 0.1, self.BETA, size=5, rng=np.random.default_rng(0)
        )

        assert single.shape == (3,)
        assert many.shape == (5, 3)
        assert many.dtype == np.int64
        np.testing.assert_array_equal(many[0], single)
