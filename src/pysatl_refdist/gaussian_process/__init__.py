"""
Gaussian process toolkit.

Covariance functions (:mod:`.kernels`), Cholesky helpers (:mod:`.linalg`),
prior simulation and marginal likelihood (:mod:`.prior`) and the analytic
posterior predictive distribution (:mod:`.prediction`).
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .kernels import (
    Kernel,
    ard_exp_quad,
    as_inputs,
    dot_prod,
    exp_quad,
    exponential,
    matern32,
    matern52,
    periodic,
)
from .linalg import DEFAULT_JITTER, jittered_cholesky
from .prediction import PosteriorPredictive, posterior_predictive, posterior_predictive_rng
from .prior import (
    latent_values,
    marginal_covariance,
    marginal_log_likelihood,
    multi_output_simulate,
    prior_cholesky,
    simulate,
)

__all__ = [
    # kernels
    "Kernel",
    "as_inputs",
    "exp_quad",
    "ard_exp_quad",
    "dot_prod",
    "exponential",
    "matern32",
    "matern52",
    "periodic",
    # linalg
    "DEFAULT_JITTER",
    "jittered_cholesky",
    # prior
    "prior_cholesky",
    "simulate",
    "latent_values",
    "marginal_covariance",
    "marginal_log_likelihood",
    "multi_output_simulate",
    # prediction
    "PosteriorPredictive",
    "posterior_predictive",
    "posterior_predictive_rng",
]
