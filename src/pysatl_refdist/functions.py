"""
Function API
============

Free functions evaluating the built-in families the way a probabilistic
modelling language exposes them: ``<family>_lpdf`` / ``_lpmf``, ``_cdf``,
``_lcdf``, ``_lccdf`` and ``_rng``.

Notes
-----
- ``y`` may be a scalar or an array of independent observations. Log
  densities, ``_lcdf`` and ``_lccdf`` return the sum over ``y``; ``_cdf``
  returns the product of the CDFs.
- Parameters are scalars, except for the GLM predictors and coefficients.
- ``_rng`` functions take ``size`` (``None`` for a single draw) and ``rng``
  (a :class:`numpy.random.Generator`).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Any

import numpy as np

from pysatl_refdist.distributions.characteristics import (
    CDF,
    LOG_CCDF,
    LOG_CDF,
    LOG_PDF,
    LOG_PMF,
)
from pysatl_refdist.families.configuration import configure_families_register
from pysatl_refdist.types import FamilyName

if TYPE_CHECKING:
    from pysatl_refdist.families.distribution import ParametricFamilyDistribution
    from pysatl_refdist.types import FloatArray, NumericArray


def _distribution(
    family_name: str, parametrization_name: str | None = None, **parameters: Any
) -> ParametricFamilyDistribution:
    family = configure_families_register().get(family_name)
    return family.distribution(parametrization_name, **parameters)


def _total(values: Any) -> float:
    return float(np.sum(values))


def _draw(
    distribution: ParametricFamilyDistribution,
    size: int | None,
    rng: np.random.Generator | None,
) -> Any:
    sample = distribution.sample(1 if size is None else size, rng=rng)
    values = sample.array[:, 0]
    return float(values[0]) if size is None else values


def _draw_binary(
    distribution: ParametricFamilyDistribution,
    size: int | None,
    rng: np.random.Generator | None,
) -> Any:
    values = _draw(distribution, size, rng)
    return int(values) if size is None else values.astype(np.int64)


# --- Pareto ----------------------------------------------------------------------


def _pareto(y_min: float, alpha: float) -> ParametricFamilyDistribution:
    return _distribution(FamilyName.PARETO, y_min=y_min, alpha=alpha)


def pareto_lpdf(y: NumericArray, y_min: float, alpha: float) -> float:
    """Log of the Pareto density of ``y`` summed over observations."""
    return _total(LOG_PDF(_pareto(y_min, alpha), y))


def pareto_cdf(y: NumericArray, y_min: float, alpha: float) -> float:
    return float(np.prod(CDF(_pareto(y_min, alpha), y)))


def pareto_lcdf(y: NumericArray, y_min: float, alpha: float) -> float:
    return _total(LOG_CDF(_pareto(y_min, alpha), y))


def pareto_lccdf(y: NumericArray, y_min: float, alpha: float) -> float:
    return _total(LOG_CCDF(_pareto(y_min, alpha), y))


def pareto_rng(
    y_min: float,
    alpha: float,
    size: int | None = None,
    rng: np.random.Generator | None = None,
) -> float | FloatArray:
    """Pareto variates by inverse transform sampling."""
    return _draw(_pareto(y_min, alpha), size, rng)


# --- Pareto Type 2 -----------------------------------------------------------------


def _pareto_type_2(mu: float, lambda_: float, alpha: float) -> ParametricFamilyDistribution:
    return _distribution(FamilyName.PARETO_TYPE_2, mu=mu, lambda_=lambda_, alpha=alpha)


def pareto_type_2_lpdf(y: NumericArray, mu: float, lambda_: float, alpha: float) -> float:
    """Log of the Pareto Type 2 density of ``y`` summed over observations."""
    return _total(LOG_PDF(_pareto_type_2(mu, lambda_, alpha), y))


def pareto_type_2_cdf(y: NumericArray, mu: float, lambda_: float, alpha: float) -> float:
    return float(np.prod(CDF(_pareto_type_2(mu, lambda_, alpha), y)))


def pareto_type_2_lcdf(y: NumericArray, mu: float, lambda_: float, alpha: float) -> float:
    return _total(LOG_CDF(_pareto_type_2(mu, lambda_, alpha), y))


def pareto_type_2_lccdf(y: NumericArray, mu: float, lambda_: float, alpha: float) -> float:
    return _total(LOG_CCDF(_pareto_type_2(mu, lambda_, alpha), y))


def pareto_type_2_rng(
    mu: float,
    lambda_: float,
    alpha: float,
    size: int | None = None,
    rng: np.random.Generator | None = None,
) -> float | FloatArray:
    return _draw(_pareto_type_2(mu, lambda_, alpha), size, rng)


# --- Bernoulli ---------------------------------------------------------------------


def _bernoulli(theta: float) -> ParametricFamilyDistribution:
    return _distribution(FamilyName.BERNOULLI, theta=theta)


def bernoulli_lpmf(y: NumericArray, theta: float) -> float:
    """Log Bernoulli mass of ``y`` summed over observations."""
    return _total(LOG_PMF(_bernoulli(theta), y))


def bernoulli_cdf(y: NumericArray, theta: float) -> float:
    return float(np.prod(CDF(_bernoulli(theta), y)))


def bernoulli_lcdf(y: NumericArray, theta: float) -> float:
    return _total(LOG_CDF(_bernoulli(theta), y))


def bernoulli_lccdf(y: NumericArray, theta: float) -> float:
    return _total(LOG_CCDF(_bernoulli(theta), y))


def bernoulli_rng(
    theta: float,
    size: int | None = None,
    rng: np.random.Generator | None = None,
) -> int | NumericArray:
    return _draw_binary(_bernoulli(theta), size, rng)


# --- Bernoulli-Logit ---------------------------------------------------------------


def _bernoulli_logit(alpha: float) -> ParametricFamilyDistribution:
    return _distribution(FamilyName.BERNOULLI, "logit", alpha=alpha)


def bernoulli_logit_lpmf(y: NumericArray, alpha: float) -> float:
    """Log Bernoulli mass of ``y`` with chance of success ``logit^-1(alpha)``."""
    return _total(LOG_PMF(_bernoulli_logit(alpha), y))


def bernoulli_logit_rng(
    alpha: float,
    size: int | None = None,
    rng: np.random.Generator | None = None,
) -> int | NumericArray:
    return _draw_binary(_bernoulli_logit(alpha), size, rng)


# --- Bernoulli-Logit GLM -----------------------------------------------------------


def _bernoulli_logit_glm(
    x: NumericArray, alpha: float | NumericArray, beta: NumericArray, n: int | None = None
) -> ParametricFamilyDistribution:
    predictors = np.atleast_2d(np.asarray(x, dtype=np.float64))
    if n is not None and predictors.shape[0] == 1 and np.ndim(alpha) == 0:
        predictors = np.repeat(predictors, n, axis=0)
    return _distribution(FamilyName.BERNOULLI_LOGIT_GLM, x=predictors, alpha=alpha, beta=beta)


def bernoulli_logit_glm_lpmf(
    y: NumericArray, x: NumericArray, alpha: float | NumericArray, beta: NumericArray
) -> float:
    """
    Log mass of the outcome vector ``y`` under logistic regression.

    A single row of ``x`` with a scalar ``alpha`` is shared by every outcome.

    Raises
    ------
    ValueError
        If shapes of ``y``, ``x``, ``alpha`` and ``beta`` do not conform.
    """
    outcomes = np.atleast_1d(np.asarray(y, dtype=np.float64))
    distribution = _bernoulli_logit_glm(x, alpha, beta, n=outcomes.shape[0])
    return _total(LOG_PMF(distribution, outcomes))


def bernoulli_logit_glm_rng(
    x: NumericArray,
    alpha: float | NumericArray,
    beta: NumericArray,
    size: int | None = None,
    rng: np.random.Generator | None = None,
) -> NumericArray:
    """Outcome vectors of shape ``(n,)`` or ``(size, n)``."""
    sample = _bernoulli_logit_glm(x, alpha, beta).sample(1 if size is None else size, rng=rng)
    values = sample.array.astype(np.int64)
    return values[0] if size is None else values


__all__ = [
    "pareto_lpdf",
    "pareto_cdf",
    "pareto_lcdf",
    "pareto_lccdf",
    "pareto_rng",
    "pareto_type_2_lpdf",
    "pareto_type_2_cdf",
    "pareto_type_2_lcdf",
    "pareto_type_2_lccdf",
    "pareto_type_2_rng",
    "bernoulli_lpmf",
    "bernoulli_cdf",
    "bernoulli_lcdf",
    "bernoulli_lccdf",
    "bernoulli_rng",
    "bernoulli_logit_lpmf",
    "bernoulli_logit_rng",
    "bernoulli_logit_glm_lpmf",
    "bernoulli_logit_glm_rng",
]
