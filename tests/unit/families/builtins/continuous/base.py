"""
Common fixtures and utilities for built-in family tests.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import math
from typing import Any

import numpy as np
from scipy.integrate import quad

from pysatl_refdist.distributions.distribution import Distribution
from pysatl_refdist.types import CharacteristicName


class BaseDistributionTest:
    """Base class for all distribution families' tests"""

    # Precision for floating point comparisons
    CALCULATION_PRECISION = 1e-10

    @staticmethod
    def assert_arrays_almost_equal(
        actual: np.ndarray[Any, Any], expected: np.ndarray[Any, Any], precision: float | None = None
    ) -> None:
        """Helper method to assert arrays are almost equal."""
        if precision is None:
            precision = BaseDistributionTest.CALCULATION_PRECISION

        np.testing.assert_array_almost_equal(actual, expected, decimal=int(-math.log10(precision)))

    @staticmethod
    def integrate_pdf(distribution: Distribution, left: float, right: float = math.inf) -> float:
        """Integral of the analytical density over ``[left, right]``."""
        pdf = distribution.query_method(CharacteristicName.PDF)
        value, _ = quad(lambda x: float(pdf(x)), left, right, limit=200)
        return value

    def assert_log_cdf_complements(self, distribution: Distribution, points: Any) -> None:
        """``log_cdf`` and ``log_ccdf`` must add up to probability one."""
        log_cdf = distribution.query_method(CharacteristicName.LOG_CDF)
        log_ccdf = distribution.query_method(CharacteristicName.LOG_CCDF)

        x = np.asarray(points, dtype=float)
        total = np.logaddexp(log_cdf(x), log_ccdf(x))
        self.assert_arrays_almost_equal(total, np.zeros_like(x))
