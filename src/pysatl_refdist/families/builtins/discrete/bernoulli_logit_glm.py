"""
Bernoulli-Logit GLM distribution family implementation.

Contains the logistic-regression likelihood over a vector of ``n`` binary
outcomes together with its independent-Bernoulli sampling strategy.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy.special import expit

from pysatl_refdist.distributions.sampling import ArraySample
from pysatl_refdist.distributions.strategies import SamplingStrategy, rng_from_options
from pysatl_refdist.distributions.support import BinaryVectorSupport
from pysatl_refdist.families.parametric_family import ParametricFamily
from pysatl_refdist.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_refdist.families.registry import ParametricFamilyRegister
from pysatl_refdist.types import (
    CharacteristicName,
    EuclideanDistributionType,
    FamilyName,
    FloatArray,
    Kind,
    NumericArray,
)

if TYPE_CHECKING:
    from typing import Any

    from pysatl_refdist.distributions.distribution import Distribution


class IndependentBernoulliSamplingStrategy(SamplingStrategy):
    """
    Sampler for vectors of independent binary outcomes.

    Resolves the distribution's ``mean`` (the vector of success
    probabilities) and draws every component independently.

    Returns
    -------
    ArraySample
        A 2D sample of shape ``(n, dimension)`` with entries in ``{0, 1}``.
    """

    def sample(self, n: int, distr: Distribution, **options: Any) -> ArraySample:
        rng = rng_from_options(options)
        probabilities = np.atleast_1d(
            np.asarray(distr.query_method(CharacteristicName.MEAN, **options)(None), dtype=float)
        )
        draws = rng.random((n, probabilities.shape[0])) < probabilities
        return ArraySample(draws.astype(np.float64))


def linear_predictor(x: FloatArray, alpha: FloatArray, beta: FloatArray) -> FloatArray:
    """
    Log-odds ``alpha + x @ beta`` of every observation.

    A single row of ``x`` broadcasts against a vector ``alpha``.
    """
    return np.atleast_1d(alpha + x @ beta)


def configure_bernoulli_logit_glm_family() -> None:
    """
    Configure and register the Bernoulli-Logit GLM distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.BERNOULLI_LOGIT_GLM):
        return

    BERNOULLI_LOGIT_GLM_DOC = """
    Bernoulli-Logit generalized linear model (logistic regression).

    For an (n, K) predictor matrix ``x``, intercept ``alpha`` (scalar or
    length n) and coefficients ``beta`` (length K):
        P(y | x, alpha, beta) = prod_i Bernoulli(y_i | logit^-1(alpha_i + x_i . beta))

    The outcome is the whole vector ``y`` in ``{0, 1}^n``.
    """

    def _eta(parameters: Parametrization) -> FloatArray:
        parameters = cast(_Regression, parameters)
        return linear_predictor(parameters.x, parameters.alpha, parameters.beta)

    def log_pmf(parameters: Parametrization, y: NumericArray) -> NumericArray:
        """
        Joint log mass of an outcome vector.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - x: (n, K) predictor matrix
            - alpha: scalar or length-n intercept
            - beta: length-K coefficients
        y : NumericArray
            Outcome vector of length n, or a 2D array with one vector per row

        Returns
        -------
        NumericArray
            Joint log mass (one value per row for 2D input); ``-inf`` for
            vectors with entries outside ``{0, 1}``

        Raises
        ------
        ValueError
            If the outcome length does not match the number of observations
        """
        eta = _eta(parameters)
        y = np.asarray(y, dtype=np.float64)
        if y.ndim == 0 and eta.shape[0] == 1:
            # a single observation arrives as a scalar from univariate paths
            y = np.atleast_1d(y)
        if y.ndim == 0 or y.shape[-1] != eta.shape[0]:
            raise ValueError(
                f"Outcome vector must have length {eta.shape[0]}, got shape {y.shape}."
            )

        binary = (y == 0.0) | (y == 1.0)
        terms = np.where(binary, -np.logaddexp(0.0, -(2.0 * y - 1.0) * eta), -np.inf)
        return np.sum(terms, axis=-1)

    def mean_func(parameters: Parametrization, _: Any) -> FloatArray:
        """Vector of success probabilities."""
        return expit(_eta(parameters))

    def var_func(parameters: Parametrization, _: Any) -> FloatArray:
        """Vector of per-observation variances."""
        p = expit(_eta(parameters))
        return p * (1.0 - p)

    def covariance_func(parameters: Parametrization, _: Any) -> FloatArray:
        """Diagonal covariance of independent outcomes."""
        return np.diag(var_func(parameters, None))

    def _distr_type(parameters: Parametrization) -> EuclideanDistributionType:
        return EuclideanDistributionType(kind=Kind.DISCRETE, dimension=_eta(parameters).shape[0])

    def _support(parameters: Parametrization) -> BinaryVectorSupport:
        """Support of Bernoulli-Logit GLM distribution"""
        return BinaryVectorSupport(_eta(parameters).shape[0])

    BernoulliLogitGLM = ParametricFamily(
        name=FamilyName.BERNOULLI_LOGIT_GLM,
        distr_type=_distr_type,
        distr_parametrizations=["regression"],
        distr_characteristics={
            CharacteristicName.LOG_PMF: log_pmf,
            CharacteristicName.MEAN: mean_func,
            CharacteristicName.VAR: var_func,
            CharacteristicName.COV: covariance_func,
        },
        sampling_strategy=IndependentBernoulliSamplingStrategy(),
        support_by_parametrization=_support,
    )
    BernoulliLogitGLM.__doc__ = BERNOULLI_LOGIT_GLM_DOC

    @parametrization(family=BernoulliLogitGLM, name="regression")
    @dataclass(slots=True, frozen=True, eq=False)
    class _Regression(Parametrization):
        """
        Regression parametrization of Bernoulli-Logit GLM distribution.

        Parameters
        ----------
        x : FloatArray
            Predictor matrix of shape (n, K); a vector is one row
        alpha : float or FloatArray
            Intercept, scalar or one per observation
        beta : FloatArray
            Coefficients, one per predictor column
        """

        x: FloatArray
        alpha: FloatArray
        beta: FloatArray

        def __post_init__(self) -> None:
            object.__setattr__(self, "x", np.atleast_2d(np.asarray(self.x, dtype=np.float64)))
            object.__setattr__(self, "alpha", np.asarray(self.alpha, dtype=np.float64))
            object.__setattr__(
                self, "beta", np.atleast_1d(np.asarray(self.beta, dtype=np.float64))
            )

        @constraint(description="x is a matrix")
        def check_x_is_matrix(self) -> bool:
            return self.x.ndim == 2

        @constraint(description="beta has one coefficient per column of x")
        def check_beta_matches_x(self) -> bool:
            return self.beta.ndim == 1 and self.beta.shape[0] == self.x.shape[1]

        @constraint(description="alpha is a scalar or has one entry per row of x")
        def check_alpha_matches_x(self) -> bool:
            if self.alpha.ndim == 0:
                return True
            return self.alpha.ndim == 1 and self.x.shape[0] in (1, self.alpha.shape[0])

        @constraint(description="x, alpha and beta are finite")
        def check_finite(self) -> bool:
            return bool(
                np.all(np.isfinite(self.x))
                and np.all(np.isfinite(self.alpha))
                and np.all(np.isfinite(self.beta))
            )

    ParametricFamilyRegister.register(BernoulliLogitGLM)
