"""
Linear algebra helpers for Gaussian processes.

Covariance matrices are factorized once with a lower Cholesky factor; every
solve, determinant and draw goes through that factor.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import numpy as np
from scipy.linalg import cho_solve, solve_triangular

from pysatl_refdist.types import FloatArray, NumericArray

DEFAULT_JITTER = 1e-9
"""Diagonal term added before factorizing a GP covariance matrix."""


def _square(matrix: NumericArray, name: str = "matrix") -> FloatArray:
    arr = np.asarray(matrix, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
        raise ValueError(f"{name} must be square, got shape {arr.shape}.")
    return arr


def add_diagonal(matrix: NumericArray, value: float | NumericArray) -> FloatArray:
    """Return ``matrix + diag(value)`` without modifying the input."""
    arr = _square(matrix).copy()
    arr[np.diag_indices_from(arr)] += value
    return arr


def jittered_cholesky(matrix: NumericArray, delta: float = DEFAULT_JITTER) -> FloatArray:
    """
    Lower Cholesky factor of ``matrix + delta * I``.

    Parameters
    ----------
    matrix : NumericArray
        Symmetric covariance matrix.
    delta : float, default DEFAULT_JITTER
        Non-negative jitter added to the diagonal.

    Returns
    -------
    FloatArray
        Lower-triangular ``L`` with ``L @ L.T == matrix + delta * I``.

    Raises
    ------
    ValueError
        If ``matrix`` is not square or ``delta`` is negative.
    numpy.linalg.LinAlgError
        If the jittered matrix is not positive definite.
    """
    if delta < 0:
        raise ValueError("delta must be non-negative.")
    return np.linalg.cholesky(add_diagonal(matrix, delta))


def cholesky_solve(lower: FloatArray, rhs: NumericArray) -> FloatArray:
    """Solve ``(L L^T) z = rhs`` given the lower factor ``L``."""
    return cho_solve((lower, True), np.asarray(rhs, dtype=np.float64))


def forward_solve(lower: FloatArray, rhs: NumericArray) -> FloatArray:
    """Solve ``L z = rhs`` for lower-triangular ``L``."""
    return solve_triangular(lower, np.asarray(rhs, dtype=np.float64), lower=True)


def log_det_from_cholesky(lower: FloatArray) -> float:
    """``log det(L L^T)``."""
    return float(2.0 * np.sum(np.log(np.diag(lower))))


def mvn_log_density(y: NumericArray, mean: NumericArray, lower: FloatArray) -> FloatArray:
    """
    Multivariate normal log density given the Cholesky factor of the covariance.

    Parameters
    ----------
    y : NumericArray
        One vector of length ``N`` or a 2D array with one vector per row.
    mean : NumericArray
        Mean vector (or scalar).
    lower : FloatArray
        Lower Cholesky factor of the ``(N, N)`` covariance.

    Returns
    -------
    FloatArray
        Log density; one value per row for 2D ``y``.

    Raises
    ------
    ValueError
        If the vector length does not match the covariance.
    """
    n = lower.shape[0]
    residual = np.asarray(y, dtype=np.float64) - mean
    if residual.ndim == 0 and n == 1:
        residual = np.atleast_1d(residual)
    if residual.ndim == 0 or residual.shape[-1] != n:
        raise ValueError(f"Expected vectors of length {n}, got shape {residual.shape}.")

    z = forward_solve(lower, residual.T)
    quad = np.sum(z**2, axis=0)
    return -0.5 * (quad + n * np.log(2.0 * np.pi)) - 0.5 * log_det_from_cholesky(lower)


__all__ = [
    "DEFAULT_JITTER",
    "add_diagonal",
    "jittered_cholesky",
    "cholesky_solve",
    "forward_solve",
    "log_det_from_cholesky",
    "mvn_log_density",
]
