"""
Tests for Bernoulli-Logit GLM Distribution Family

This module tests the logistic-regression family over vectors of binary
outcomes: parameter validation, the joint log mass, derived characteristics
and the independent-Bernoulli sampler.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import numpy as np
import pytest
from scipy.special import expit
from scipy.stats import bernoulli

from pysatl_refdist.distributions.characteristics import COV, LOG_PMF, MEAN, PMF, VAR
from pysatl_refdist.distributions.sampling import ArraySample
from pysatl_refdist.distributions.support import BinaryVectorSupport
from pysatl_refdist.families.builtins.discrete.bernoulli_logit_glm import linear_predictor
from pysatl_refdist.families.configuration import configure_families_register
from pysatl_refdist.types import FamilyName, Kind

from ..continuous.base import BaseDistributionTest

X = np.array(
    [
        [0.5, -1.0],
        [1.5, 0.25],
        [-0.3, 2.0],
        [0.0, 0.0],
    ]
)
ALPHA = 0.2
BETA = np.array([1.2, -0.7])
Y = np.array([1.0, 0.0, 0.0, 1.0])


def reference_log_pmf(y, x, alpha, beta) -> float:
    theta = expit(alpha + x @ beta)
    return float(np.sum(bernoulli.logpmf(y, theta)))


class TestBernoulliLogitGLMFamily(BaseDistributionTest):
    """Test suite for Bernoulli-Logit GLM distribution family."""

    def setup_method(self):
        """Setup before each test method."""
        registry = configure_families_register()
        self.glm_family = registry.get(FamilyName.BERNOULLI_LOGIT_GLM)
        self.glm_dist_example = self.glm_family(x=X, alpha=ALPHA, beta=BETA)

    def test_family_properties(self):
        assert self.glm_family.name == FamilyName.BERNOULLI_LOGIT_GLM
        assert self.glm_family.parametrization_names == ["regression"]

    def test_distribution_type_follows_number_of_observations(self):
        distribution_type = self.glm_dist_example.distribution_type

        assert distribution_type.kind == Kind.DISCRETE
        assert distribution_type.dimension == 4

    def test_support_is_binary_vectors(self):
        support = self.glm_dist_example.support

        assert isinstance(support, BinaryVectorSupport)
        assert support.dimension == 4
        assert support.contains(Y) is True
        assert support.contains(np.array([1.0, 2.0, 0.0, 0.0])) is False

    def test_parameters_are_coerced_to_arrays(self):
        dist = self.glm_family(x=[1.0, 2.0], alpha=0.0, beta=[0.5, 0.5])
        params = dist.parametrization

        assert params.x.shape == (1, 2)
        assert params.beta.shape == (2,)
        assert params.alpha.shape == ()

    @pytest.mark.parametrize(
        "params, message",
        [
            ({"x": np.ones((2, 2, 2)), "alpha": 0.0, "beta": [1.0, 1.0]}, "x is a matrix"),
            ({"x": X, "alpha": 0.0, "beta": [1.0, 1.0, 1.0]}, "beta has one coefficient"),
            ({"x": X, "alpha": [0.0, 1.0], "beta": BETA}, "alpha is a scalar"),
            ({"x": X, "alpha": np.inf, "beta": BETA}, "finite"),
            ({"x": X, "alpha": 0.0, "beta": [np.nan, 1.0]}, "finite"),
        ],
    )
    def test_parametrization_constraints(self, params, message):
        with pytest.raises(ValueError, match=message):
            self.glm_family(**params)

    def test_linear_predictor(self):
        eta = linear_predictor(X, np.asarray(ALPHA), BETA)
        np.testing.assert_allclose(eta, ALPHA + X @ BETA)

    def test_log_pmf_matches_reference(self):
        value = LOG_PMF(self.glm_dist_example, Y)
        assert value == pytest.approx(reference_log_pmf(Y, X, ALPHA, BETA), rel=1e-12)

    def test_log_pmf_with_intercept_per_observation(self):
        alpha = np.array([0.1, -0.2, 0.3, 0.0])
        dist = self.glm_family(x=X, alpha=alpha, beta=BETA)

        assert LOG_PMF(dist, Y) == pytest.approx(reference_log_pmf(Y, X, alpha, BETA), rel=1e-12)

    def test_single_row_broadcasts_against_intercept_vector(self):
        alpha = np.array([0.0, 1.0, -1.0])
        dist = self.glm_family(x=[0.5, 0.5], alpha=alpha, beta=[1.0, -2.0])

        assert dist.distribution_type.dimension == 3
        y = np.array([1.0, 1.0, 0.0])
        expected = reference_log_pmf(y, np.array([[0.5, 0.5]]), alpha, np.array([1.0, -2.0]))
        assert LOG_PMF(dist, y) == pytest.approx(expected, rel=1e-12)

    def test_log_pmf_rows(self):
        rows = np.array([Y, 1.0 - Y])
        values = LOG_PMF(self.glm_dist_example, rows)

        assert values.shape == (2,)
        assert values[1] == pytest.approx(reference_log_pmf(1.0 - Y, X, ALPHA, BETA))

    def test_log_pmf_outside_support(self):
        assert LOG_PMF(self.glm_dist_example, np.array([1.0, 0.5, 0.0, 1.0])) == -np.inf

    def test_log_pmf_rejects_wrong_length(self):
        with pytest.raises(ValueError):
            LOG_PMF(self.glm_dist_example, np.array([1.0, 0.0]))

    def test_log_pmf_is_stable_for_extreme_predictors(self):
        dist = self.glm_family(x=[[1.0]], alpha=0.0, beta=[1000.0])
        assert LOG_PMF(dist, np.array([0.0])) == pytest.approx(-1000.0, rel=1e-12)

    def test_pmf_is_derived_from_log_pmf(self):
        pmf_value = PMF(self.glm_dist_example, Y)
        assert pmf_value == pytest.approx(np.exp(reference_log_pmf(Y, X, ALPHA, BETA)))

    def test_moments(self):
        theta = expit(ALPHA + X @ BETA)

        self.assert_arrays_almost_equal(MEAN(self.glm_dist_example, None), theta)
        self.assert_arrays_almost_equal(VAR(self.glm_dist_example, None), theta * (1 - theta))
        self.assert_arrays_almost_equal(
            COV(self.glm_dist_example, None), np.diag(theta * (1 - theta))
        )

    def test_log_likelihood_sums_rows(self):
        rows = np.array([Y, Y, 1.0 - Y])
        expected = 2 * reference_log_pmf(Y, X, ALPHA, BETA) + reference_log_pmf(
            1.0 - Y, X, ALPHA, BETA
        )
        value = self.glm_dist_example.log_likelihood(ArraySample(rows))
        assert value == pytest.approx(expected, rel=1e-12)

    def test_single_observation_scores_own_samples(self):
        x = np.array([[0.5, 1.0]])
        beta = np.array([1.0, -0.5])
        dist = self.glm_family(x=x, alpha=0.2, beta=beta)
        sample = dist.sample(5, seed=0)

        assert dist.distribution_type.dimension == 1
        assert sample.shape == (5, 1)
        expected = sum(reference_log_pmf(row, x, 0.2, beta) for row in sample.array)
        assert dist.log_likelihood(sample) == pytest.approx(expected, rel=1e-12)
        assert float(LOG_PMF(dist, 1.0)) == pytest.approx(
            reference_log_pmf(np.array([1.0]), x, 0.2, beta), rel=1e-12
        )

    def test_sampling(self):
        sample = self.glm_dist_example.sample(20_000, seed=3)

        assert sample.shape == (20_000, 4)
        assert set(np.unique(sample.array)) <= {0.0, 1.0}
        np.testing.assert_allclose(sample.mean(), expit(ALPHA + X @ BETA), atol=0.02)

    def test_sampling_is_reproducible(self):
        first = self.glm_dist_example.sample(10, rng=np.random.default_rng(1)).array
        second = self.glm_dist_example.sample(10, rng=np.random.default_rng(1)).array
        np.testing.assert_array_equal(first, second)
