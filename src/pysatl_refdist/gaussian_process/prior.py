"""
Gaussian Process Priors
=======================

Simulation from a GP prior, the non-centered (latent) construction of GP
values, the marginal likelihood of a GP with Gaussian noise, and the
multi-output GP draw.

All routines factor the covariance with :func:`jittered_cholesky`, so
``delta`` is added to the diagonal before factorization.

Notes
-----
``mean`` is a scalar or a vector with one entry per input; ``kernel`` is any
callable ``kernel(x1, x2) -> (N1, N2)`` array, usually a function from
:mod:`.kernels` with hyperparameters bound by :func:`functools.partial`.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING

import numpy as np

from pysatl_refdist.gaussian_process.kernels import as_inputs
from pysatl_refdist.gaussian_process.linalg import (
    DEFAULT_JITTER,
    add_diagonal,
    jittered_cholesky,
    mvn_log_density,
)

if TYPE_CHECKING:
    from pysatl_refdist.gaussian_process.kernels import Kernel
    from pysatl_refdist.types import FloatArray, NumericArray


def _mean_vector(mean: float | NumericArray, n: int) -> FloatArray:
    mu = np.asarray(mean, dtype=np.float64)
    if mu.ndim == 0:
        return np.full(n, float(mu))
    if mu.shape != (n,):
        raise ValueError(f"mean must be a scalar or have length {n}, got shape {mu.shape}.")
    return mu


def prior_cholesky(x: NumericArray, kernel: Kernel, delta: float = DEFAULT_JITTER) -> FloatArray:
    """Cholesky factor ``L_K`` of ``kernel(x, x) + delta * I``."""
    inputs = as_inputs(x)
    return jittered_cholesky(kernel(inputs, inputs), delta)


def simulate(
    x: NumericArray,
    kernel: Kernel,
    mean: float | NumericArray = 0.0,
    delta: float = DEFAULT_JITTER,
    size: int | None = None,
    rng: np.random.Generator | None = None,
) -> FloatArray:
    """
    Draw GP function values at the inputs ``x``.

    ``f = mu + L_K eta`` with ``eta ~ N(0, I)`` and ``L_K`` the Cholesky factor
    of ``K + delta * I``.

    Parameters
    ----------
    x : NumericArray
        Inputs of shape ``(N, D)`` (or ``(N,)``).
    kernel : Kernel
        Covariance function.
    mean : float or NumericArray, default 0.0
        Mean function values.
    delta : float, default DEFAULT_JITTER
        Diagonal jitter.
    size : int, optional
        Number of draws; without it a single length-``N`` vector is returned.
    rng : numpy.random.Generator, optional
        Random source.

    Returns
    -------
    FloatArray
        Shape ``(N,)`` or ``(size, N)``.
    """
    rng = np.random.default_rng() if rng is None else rng
    lower = prior_cholesky(x, kernel, delta)
    n = lower.shape[0]
    mu = _mean_vector(mean, n)

    if size is None:
        return mu + lower @ rng.standard_normal(n)
    return mu + rng.standard_normal((size, n)) @ lower.T


def latent_values(
    x: NumericArray,
    eta: NumericArray,
    kernel: Kernel,
    mean: float | NumericArray = 0.0,
    delta: float = DEFAULT_JITTER,
) -> FloatArray:
    """
    Non-centered GP values ``f = mu + L_K eta`` for given standard normals.

    Raises
    ------
    ValueError
        If ``eta`` does not have one entry per input.
    """
    lower = prior_cholesky(x, kernel, delta)
    n = lower.shape[0]
    eta_arr = np.asarray(eta, dtype=np.float64)
    if eta_arr.shape != (n,):
        raise ValueError(f"eta must have length {n}, got shape {eta_arr.shape}.")
    return _mean_vector(mean, n) + lower @ eta_arr


def marginal_covariance(
    x: NumericArray, kernel: Kernel, sigma: float = 0.0
) -> FloatArray:
    """Covariance ``K + sigma^2 I`` of noisy observations of a GP."""
    if sigma < 0:
        raise ValueError("sigma must be non-negative.")
    inputs = as_inputs(x)
    return add_diagonal(kernel(inputs, inputs), sigma**2)


def marginal_log_likelihood(
    y: NumericArray,
    x: NumericArray,
    kernel: Kernel,
    sigma: float = 0.0,
    mean: float | NumericArray = 0.0,
    delta: float = DEFAULT_JITTER,
) -> float | FloatArray:
    """
    Log density of observations ``y ~ MultiNormal(mu, K + sigma^2 I)``.

    Parameters
    ----------
    y : NumericArray
        Observation vector of length ``N`` or a 2D array of such vectors.
    x : NumericArray
        Inputs of shape ``(N, D)``.
    kernel : Kernel
        Covariance function.
    sigma : float, default 0.0
        Observation noise scale.
    mean : float or NumericArray, default 0.0
        Mean function values.
    delta : float, default DEFAULT_JITTER
        Diagonal jitter.

    Returns
    -------
    float or FloatArray
        Log likelihood; one value per row for 2D ``y``.
    """
    lower = jittered_cholesky(marginal_covariance(x, kernel, sigma), delta)
    values = mvn_log_density(y, _mean_vector(mean, lower.shape[0]), lower)
    return float(values) if np.ndim(values) == 0 else values


def multi_output_simulate(
    x: NumericArray,
    kernel: Kernel,
    alpha: NumericArray,
    L_Omega: NumericArray,
    delta: float = DEFAULT_JITTER,
    rng: np.random.Generator | None = None,
) -> FloatArray:
    """
    Draw ``M`` correlated GP outputs at ``N`` inputs.

    ``f = L_K eta (diag(alpha) L_Omega)^T`` where ``eta`` is an ``(N, M)``
    matrix of standard normals, ``L_K`` the Cholesky factor of the input
    covariance, ``alpha`` the per-output scales and ``L_Omega`` the Cholesky
    factor of the ``(M, M)`` output correlation matrix.

    Returns
    -------
    FloatArray
        Shape ``(N, M)``.

    Raises
    ------
    ValueError
        If ``alpha`` and ``L_Omega`` are inconsistent or ``alpha`` is not
        positive.
    """
    rng = np.random.default_rng() if rng is None else rng
    alpha_arr = np.atleast_1d(np.asarray(alpha, dtype=np.float64))
    omega = np.asarray(L_Omega, dtype=np.float64)
    m = alpha_arr.shape[0]
    if alpha_arr.ndim != 1 or omega.shape != (m, m):
        raise ValueError(
            f"L_Omega must be ({m}, {m}) to match alpha, got shape {omega.shape}."
        )
    if not np.all(alpha_arr > 0):
        raise ValueError("alpha must be positive.")

    lower = prior_cholesky(x, kernel, delta)
    eta = rng.standard_normal((lower.shape[0], m))
    return lower @ eta @ (alpha_arr[:, np.newaxis] * omega).T


__all__ = [
    "prior_cholesky",
    "simulate",
    "latent_values",
    "marginal_covariance",
    "marginal_log_likelihood",
    "multi_output_simulate",
]
