"""
Tests for Pareto Distribution Family

This module tests the functionality of the Pareto distribution family,
including its parametrization, characteristics, and sampling.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import math

import numpy as np
import pytest
from scipy.stats import pareto

from pysatl_refdist.distributions.support import ContinuousSupport
from pysatl_refdist.families.configuration import configure_families_register
from pysatl_refdist.types import (
    CharacteristicName,
    ContinuousSupportShape1D,
    FamilyName,
    UnivariateContinuous,
)

from .base import BaseDistributionTest


class TestParetoFamily(BaseDistributionTest):
    """Test suite for Pareto distribution family."""

    def setup_method(self):
        """Setup before each test method."""
        registry = configure_families_register()
        self.pareto_family = registry.get(FamilyName.PARETO)
        self.pareto_dist_example = self.pareto_family(y_min=1.5, alpha=3.0)

    def test_family_properties(self):
        """Test basic properties of Pareto family."""
        assert self.pareto_family.name == FamilyName.PARETO
        assert self.pareto_family.parametrization_names == ["scale_shape"]
        assert self.pareto_family.base_parametrization_name == "scale_shape"

    def test_parametrization_creation(self):
        """Test creation of distribution with the scale-shape parametrization."""
        dist = self.pareto_family(y_min=2.0, alpha=0.5)

        assert dist.family_name == FamilyName.PARETO
        assert dist.distribution_type == UnivariateContinuous
        assert dist.parameters == {"y_min": 2.0, "alpha": 0.5}
        assert dist.parametrization_name == "scale_shape"

    @pytest.mark.parametrize(
        "params, message",
        [
            ({"y_min": 0.0, "alpha": 1.0}, "y_min > 0"),
            ({"y_min": -1.0, "alpha": 1.0}, "y_min > 0"),
            ({"y_min": 1.0, "alpha": 0.0}, "alpha > 0"),
            ({"y_min": 1.0, "alpha": -2.0}, "alpha > 0"),
        ],
    )
    def test_parametrization_constraints(self, params, message):
        """Test parameter constraints validation."""
        with pytest.raises(ValueError, match=message):
            self.pareto_family(**params)

    def test_analytical_computations_availability(self):
        """Test that analytical computations are available for Pareto distribution."""
        comp = self.pareto_dist_example.analytical_computations

        expected_chars = {
            CharacteristicName.PDF,
            CharacteristicName.LOG_PDF,
            CharacteristicName.CDF,
            CharacteristicName.LOG_CDF,
            CharacteristicName.LOG_CCDF,
            CharacteristicName.PPF,
            CharacteristicName.MEAN,
            CharacteristicName.VAR,
        }
        assert set(comp.keys()) == expected_chars

    @pytest.mark.parametrize(
        "char_name, test_data, scipy_func",
        [
            (CharacteristicName.PDF, [0.5, 1.5, 2.0, 3.0, 10.0], pareto.pdf),
            (CharacteristicName.LOG_PDF, [1.5, 2.0, 3.0, 10.0, 1e4], pareto.logpdf),
            (CharacteristicName.CDF, [0.5, 1.5, 2.0, 3.0, 10.0], pareto.cdf),
            (CharacteristicName.LOG_CDF, [1.6, 2.0, 3.0, 10.0, 1e4], pareto.logcdf),
            (CharacteristicName.LOG_CCDF, [1.5, 2.0, 3.0, 10.0, 1e4], pareto.logsf),
            (CharacteristicName.PPF, [0.0, 0.01, 0.25, 0.5, 0.75, 0.999], pareto.ppf),
        ],
    )
    def test_array_input_for_characteristics(self, char_name, test_data, scipy_func):
        """Test characteristics against scipy on array inputs."""
        char_func = self.pareto_dist_example.query_method(char_name)

        input_array = np.array(test_data)
        result_array = char_func(input_array)

        assert result_array.shape == input_array.shape

        expected_array = scipy_func(input_array, b=3.0, scale=1.5)
        np.testing.assert_allclose(result_array, expected_array, rtol=1e-10, atol=1e-12)

    def test_log_densities_below_support(self):
        """Log density and log CDF are ``-inf`` below ``y_min``; log CCDF is zero."""
        dist = self.pareto_dist_example
        x = np.array([-1.0, 0.0, 1.0])

        assert np.all(dist.query_method(CharacteristicName.LOG_PDF)(x) == -np.inf)
        assert np.all(dist.query_method(CharacteristicName.LOG_CDF)(x) == -np.inf)
        assert np.all(dist.query_method(CharacteristicName.LOG_CCDF)(x) == 0.0)

    def test_pdf_integrates_to_one(self):
        total = self.integrate_pdf(self.pareto_dist_example, 1.5)
        assert total == pytest.approx(1.0, abs=1e-8)

    def test_cdf_is_monotone(self):
        cdf = self.pareto_dist_example.query_method(CharacteristicName.CDF)
        values = cdf(np.linspace(0.0, 50.0, 501))
        assert np.all(np.diff(values) >= 0.0)
        assert values[0] == 0.0 and values[-1] < 1.0

    def test_log_cdf_complements_log_ccdf(self):
        self.assert_log_cdf_complements(self.pareto_dist_example, [1.5, 1.6, 2.0, 5.0, 100.0])

    def test_log_ccdf_is_accurate_in_the_tail(self):
        """Far in the tail the log CCDF keeps full precision."""
        log_ccdf = self.pareto_dist_example.query_method(CharacteristicName.LOG_CCDF)
        x = 1.5e100
        assert log_ccdf(x) == pytest.approx(-3.0 * math.log(1e100), rel=1e-12)

    def test_moments(self):
        """Test moment calculations."""
        mean_func = self.pareto_dist_example.query_method(CharacteristicName.MEAN)
        assert mean_func(None) == pytest.approx(pareto.mean(b=3.0, scale=1.5), rel=1e-12)

        var_func = self.pareto_dist_example.query_method(CharacteristicName.VAR)
        assert var_func(None) == pytest.approx(pareto.var(b=3.0, scale=1.5), rel=1e-12)

    @pytest.mark.parametrize(
        "alpha, mean_is_finite, var_is_finite",
        [(0.5, False, False), (1.0, False, False), (1.5, True, False), (2.0, True, False)],
    )
    def test_heavy_tail_moments_are_infinite(self, alpha, mean_is_finite, var_is_finite):
        dist = self.pareto_family(y_min=1.0, alpha=alpha)
        mean = dist.query_method(CharacteristicName.MEAN)(None)
        var = dist.query_method(CharacteristicName.VAR)(None)

        assert math.isfinite(mean) is mean_is_finite
        assert math.isfinite(var) is var_is_finite

    def test_pareto_support(self):
        """Test that Pareto distribution has support [y_min, inf)."""
        support = self.pareto_dist_example.support

        assert isinstance(support, ContinuousSupport)
        assert support.left == 1.5
        assert support.right == float("inf")
        assert support.contains(1.5) is True
        assert support.contains(1.0) is False
        assert support.shape == ContinuousSupportShape1D.RAY_RIGHT

    def test_sampling_matches_moments(self):
        """Sample moments of a light-tailed Pareto match the analytical ones."""
        dist = self.pareto_family(y_min=2.0, alpha=6.0)
        sample = dist.sample(20_000, seed=123)

        assert sample.shape == (20_000, 1)
        assert np.all(sample.array >= 2.0)

        expected_mean = pareto.mean(b=6.0, scale=2.0)
        expected_std = pareto.std(b=6.0, scale=2.0)
        assert float(sample.mean()[0]) == pytest.approx(expected_mean, abs=5 * expected_std / 141)


class TestParetoFamilyEdgeCases(BaseDistributionTest):
    """Test edge cases and error conditions for Pareto distribution."""

    def setup_method(self):
        """Setup before each test method."""
        registry = configure_families_register()
        self.pareto_family = registry.get(FamilyName.PARETO)

    def test_missing_parameters(self):
        """Test error for missing required parameters."""
        with pytest.raises(TypeError):
            self.pareto_family.distribution(y_min=1.0)

    def test_invalid_probability_ppf(self):
        """Test PPF with invalid probability values."""
        ppf = self.pareto_family(y_min=1.0, alpha=2.0).query_method(CharacteristicName.PPF)

        assert ppf(0.0) == 1.0
        assert ppf(1.0) == float("inf")

        with pytest.raises(ValueError):
            ppf(-0.1)
        with pytest.raises(ValueError):
            ppf(1.1)
