"""
Analytic posterior predictive distribution of a GP with Gaussian noise.

Given observations ``y1`` at inputs ``x1`` the predictive distribution of
the latent function at new inputs ``x2`` is multivariate normal with

    mean = K21 (K11 + sigma^2 I)^-1 y1
    cov  = K22 - K21 (K11 + sigma^2 I)^-1 K12 + delta I
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from pysatl_refdist.gaussian_process.kernels import as_inputs
from pysatl_refdist.gaussian_process.linalg import (
    DEFAULT_JITTER,
    add_diagonal,
    cholesky_solve,
    forward_solve,
    jittered_cholesky,
)
from pysatl_refdist.gaussian_process.prior import marginal_covariance

if TYPE_CHECKING:
    from pysatl_refdist.gaussian_process.kernels import Kernel
    from pysatl_refdist.types import FloatArray, NumericArray


@dataclass(frozen=True, slots=True, eq=False)
class PosteriorPredictive:
    """
    Multivariate normal predictive distribution at new inputs.

    Attributes
    ----------
    mean : FloatArray
        Predictive mean, shape ``(N2,)``.
    covariance : FloatArray
        Predictive covariance, shape ``(N2, N2)`` (jitter included).
    """

    mean: FloatArray
    covariance: FloatArray

    @property
    def std(self) -> FloatArray:
        return np.sqrt(np.clip(np.diag(self.covariance), 0.0, None))

    def sample(
        self, size: int | None = None, rng: np.random.Generator | None = None
    ) -> FloatArray:
        """Draw ``(N2,)`` or ``(size, N2)`` predictive function values."""
        rng = np.random.default_rng() if rng is None else rng
        lower = jittered_cholesky(self.covariance, 0.0)
        n = lower.shape[0]
        if size is None:
            return self.mean + lower @ rng.standard_normal(n)
        return self.mean + rng.standard_normal((size, n)) @ lower.T


def posterior_predictive(
    x1: NumericArray,
    y1: NumericArray,
    x2: NumericArray,
    kernel: Kernel,
    sigma: float,
    delta: float = DEFAULT_JITTER,
) -> PosteriorPredictive:
    """
    Posterior predictive distribution of GP values at ``x2``.

    Parameters
    ----------
    x1 : NumericArray
        Observed inputs, ``(N1, D)``.
    y1 : NumericArray
        Observations, length ``N1``.
    x2 : NumericArray
        Prediction inputs, ``(N2, D)``.
    kernel : Kernel
        Covariance function.
    sigma : float
        Observation noise scale.
    delta : float, default DEFAULT_JITTER
        Jitter added to the predictive covariance.

    Raises
    ------
    ValueError
        If ``y1`` does not have one entry per observed input.
    numpy.linalg.LinAlgError
        If ``K11 + sigma^2 I`` is not positive definite.
    """
    a = as_inputs(x1)
    b = as_inputs(x2)
    y = np.asarray(y1, dtype=np.float64)
    if y.shape != (a.shape[0],):
        raise ValueError(f"y1 must have length {a.shape[0]}, got shape {y.shape}.")

    lower = jittered_cholesky(marginal_covariance(a, kernel, sigma), 0.0)
    k21 = kernel(b, a)

    mean = k21 @ cholesky_solve(lower, y)
    v = forward_solve(lower, k21.T)
    covariance = add_diagonal(kernel(b, b) - v.T @ v, delta)
    return PosteriorPredictive(mean=mean, covariance=covariance)


def posterior_predictive_rng(
    x1: NumericArray,
    y1: NumericArray,
    x2: NumericArray,
    kernel: Kernel,
    sigma: float,
    delta: float = DEFAULT_JITTER,
    size: int | None = None,
    rng: np.random.Generator | None = None,
) -> FloatArray:
    """Draw latent GP values at ``x2`` from the posterior predictive."""
    predictive = posterior_predictive(x1, y1, x2, kernel, sigma, delta)
    return predictive.sample(size=size, rng=rng)


__all__ = [
    "PosteriorPredictive",
    "posterior_predictive",
    "posterior_predictive_rng",
]
