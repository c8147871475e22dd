"""
Covariance Functions
====================

Stationary and non-stationary covariance functions (kernels) for Gaussian
processes. Every kernel maps two sets of inputs ``x1`` of shape ``(N1, D)``
and ``x2`` of shape ``(N2, D)`` to an ``(N1, N2)`` covariance matrix; with
``x2`` omitted the kernel is evaluated between ``x1`` and itself.

One-dimensional inputs are treated as column vectors (``D = 1``).

Notes
-----
Hyperparameters are keyword arguments, so a kernel with fixed
hyperparameters is obtained with :func:`functools.partial`, e.g.
``partial(exp_quad, alpha=1.0, rho=0.5)``.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable

import numpy as np
from scipy.spatial.distance import cdist

from pysatl_refdist.types import FloatArray, NumericArray

type Kernel = Callable[[FloatArray, FloatArray], FloatArray]


def as_inputs(x: NumericArray) -> FloatArray:
    """
    Coerce GP inputs to a 2D float array of shape ``(N, D)``.

    Raises
    ------
    ValueError
        If ``x`` has more than two dimensions.
    """
    arr = np.asarray(x, dtype=np.float64)
    if arr.ndim == 0:
        arr = arr.reshape(1, 1)
    elif arr.ndim == 1:
        arr = arr[:, np.newaxis]
    elif arr.ndim != 2:
        raise ValueError(f"GP inputs must be 1D or 2D, got {arr.ndim} dimensions.")
    return arr


def _pair(x1: NumericArray, x2: NumericArray | None) -> tuple[FloatArray, FloatArray]:
    a = as_inputs(x1)
    b = a if x2 is None else as_inputs(x2)
    if a.shape[1] != b.shape[1]:
        raise ValueError(f"Input dimensions differ: {a.shape[1]} and {b.shape[1]}.")
    return a, b


def _require_positive(name: str, value: float | FloatArray) -> None:
    if not np.all(np.asarray(value) > 0):
        raise ValueError(f"{name} must be positive.")


def exp_quad(
    x1: NumericArray,
    x2: NumericArray | None = None,
    *,
    alpha: float = 1.0,
    rho: float = 1.0,
) -> FloatArray:
    """
    Exponentiated quadratic (squared exponential) kernel.

    ``k(x, x') = alpha^2 * exp(-|x - x'|^2 / (2 rho^2))``

    Parameters
    ----------
    x1, x2 : NumericArray
        Inputs of shape ``(N1, D)`` and ``(N2, D)``.
    alpha : float
        Marginal standard deviation.
    rho : float
        Length-scale.

    Raises
    ------
    ValueError
        If ``alpha`` or ``rho`` is not positive.
    """
    _require_positive("alpha", alpha)
    _require_positive("rho", rho)
    a, b = _pair(x1, x2)
    sq = cdist(a, b, "sqeuclidean")
    return alpha**2 * np.exp(-0.5 * sq / rho**2)


def ard_exp_quad(
    x1: NumericArray,
    x2: NumericArray | None = None,
    *,
    alpha: float = 1.0,
    rho: NumericArray,
) -> FloatArray:
    """
    Exponentiated quadratic kernel with automatic relevance determination.

    ``k(x, x') = alpha^2 * exp(-1/2 * sum_d ((x_d - x'_d) / rho_d)^2)``

    ``rho`` holds one length-scale per input dimension.
    """
    _require_positive("alpha", alpha)
    rho_arr = np.atleast_1d(np.asarray(rho, dtype=np.float64))
    _require_positive("rho", rho_arr)
    a, b = _pair(x1, x2)
    if rho_arr.shape != (a.shape[1],):
        raise ValueError(f"rho must have one length-scale per dimension ({a.shape[1]}).")
    sq = cdist(a / rho_arr, b / rho_arr, "sqeuclidean")
    return alpha**2 * np.exp(-0.5 * sq)


def dot_prod(
    x1: NumericArray,
    x2: NumericArray | None = None,
    *,
    sigma: float = 0.0,
) -> FloatArray:
    """
    Dot product kernel ``k(x, x') = sigma^2 + x . x'``.

    Non-stationary; ``sigma`` may be zero (homogeneous linear kernel).
    """
    if sigma < 0:
        raise ValueError("sigma must be non-negative.")
    a, b = _pair(x1, x2)
    return sigma**2 + a @ b.T


def exponential(
    x1: NumericArray,
    x2: NumericArray | None = None,
    *,
    alpha: float = 1.0,
    rho: float = 1.0,
) -> FloatArray:
    """Exponential (Matern 1/2) kernel ``alpha^2 * exp(-|x - x'| / rho)``."""
    _require_positive("alpha", alpha)
    _require_positive("rho", rho)
    a, b = _pair(x1, x2)
    d = cdist(a, b, "euclidean")
    return alpha**2 * np.exp(-d / rho)


def matern32(
    x1: NumericArray,
    x2: NumericArray | None = None,
    *,
    alpha: float = 1.0,
    rho: float = 1.0,
) -> FloatArray:
    """Matern 3/2 kernel ``alpha^2 (1 + sqrt(3) d / rho) exp(-sqrt(3) d / rho)``."""
    _require_positive("alpha", alpha)
    _require_positive("rho", rho)
    a, b = _pair(x1, x2)
    r = np.sqrt(3.0) * cdist(a, b, "euclidean") / rho
    return alpha**2 * (1.0 + r) * np.exp(-r)


def matern52(
    x1: NumericArray,
    x2: NumericArray | None = None,
    *,
    alpha: float = 1.0,
    rho: float = 1.0,
) -> FloatArray:
    """
    Matern 5/2 kernel.

    ``alpha^2 (1 + sqrt(5) d / rho + 5 d^2 / (3 rho^2)) exp(-sqrt(5) d / rho)``
    """
    _require_positive("alpha", alpha)
    _require_positive("rho", rho)
    a, b = _pair(x1, x2)
    r = np.sqrt(5.0) * cdist(a, b, "euclidean") / rho
    return alpha**2 * (1.0 + r + r**2 / 3.0) * np.exp(-r)


def periodic(
    x1: NumericArray,
    x2: NumericArray | None = None,
    *,
    alpha: float = 1.0,
    rho: float = 1.0,
    period: float = 1.0,
) -> FloatArray:
    """
    Periodic kernel.

    ``k(x, x') = alpha^2 * exp(-2 sin^2(pi |x - x'| / period) / rho^2)``
    """
    _require_positive("alpha", alpha)
    _require_positive("rho", rho)
    _require_positive("period", period)
    a, b = _pair(x1, x2)
    d = cdist(a, b, "euclidean")
    return alpha**2 * np.exp(-2.0 * np.sin(np.pi * d / period) ** 2 / rho**2)


__all__ = [
    "Kernel",
    "as_inputs",
    "exp_quad",
    "ard_exp_quad",
    "dot_prod",
    "exponential",
    "matern32",
    "matern52",
    "periodic",
]
