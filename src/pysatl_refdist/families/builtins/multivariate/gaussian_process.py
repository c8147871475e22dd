"""
Gaussian process distribution family implementation.

Contains the marginal distribution of noisy GP observations at fixed inputs,
with an ARD and an isotropic squared-exponential parametrization, and the
Cholesky sampling strategy for multivariate normal families.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, cast

import numpy as np

from pysatl_refdist.distributions.sampling import ArraySample
from pysatl_refdist.distributions.strategies import SamplingStrategy, rng_from_options
from pysatl_refdist.families.parametric_family import ParametricFamily
from pysatl_refdist.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_refdist.families.registry import ParametricFamilyRegister
from pysatl_refdist.gaussian_process.kernels import ard_exp_quad, as_inputs
from pysatl_refdist.gaussian_process.linalg import jittered_cholesky, mvn_log_density
from pysatl_refdist.gaussian_process.prior import marginal_covariance
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


class CholeskySamplingStrategy(SamplingStrategy):
    """
    Sampler for multivariate normal distributions.

    Resolves ``mean`` and ``covariance``, factorizes the covariance once and
    returns ``mean + z @ L.T`` for standard normal ``z``.

    Returns
    -------
    ArraySample
        A 2D sample of shape ``(n, dimension)``.
    """

    def sample(self, n: int, distr: Distribution, **options: Any) -> ArraySample:
        rng = rng_from_options(options)
        mean = np.asarray(distr.query_method(CharacteristicName.MEAN, **options)(None))
        cov = np.asarray(distr.query_method(CharacteristicName.COV, **options)(None))
        lower = jittered_cholesky(cov, 0.0)
        draws = mean + rng.standard_normal((n, lower.shape[0])) @ lower.T
        return ArraySample(draws)


def configure_gaussian_process_family() -> None:
    """
    Configure and register the Gaussian process distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.GAUSSIAN_PROCESS):
        return

    GAUSSIAN_PROCESS_DOC = """
    Gaussian process marginal distribution.

    Observations ``y`` at inputs ``x`` (shape (N, D)) of a zero-mean GP with
    an exponentiated quadratic kernel and Gaussian noise:
        y ~ MultiNormal(0, K(x | alpha, rho) + (sigma^2 + delta) I)

    ``rho`` holds one length-scale per input dimension (``ard``) or a single
    shared one (``isotropic``); ``delta`` is the jitter that keeps the
    covariance numerically positive definite.
    """

    def covariance_func(parameters: Parametrization, _: Any) -> FloatArray:
        """
        Covariance of the observations.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - x: (N, D) inputs
            - alpha: float (marginal standard deviation)
            - rho: (D,) length-scales
            - sigma: float (noise scale)
            - delta: float (jitter)

        Returns
        -------
        FloatArray
            ``K + (sigma^2 + delta) I`` of shape (N, N)
        """
        parameters = cast(_ARD, parameters)
        kernel = partial(ard_exp_quad, alpha=parameters.alpha, rho=parameters.rho)
        cov = marginal_covariance(parameters.x, kernel, parameters.sigma)
        cov[np.diag_indices_from(cov)] += parameters.delta
        return cov

    def log_pdf(parameters: Parametrization, y: NumericArray) -> NumericArray:
        """Marginal log likelihood of one observation vector (or of each row)."""
        lower = jittered_cholesky(covariance_func(parameters, None), 0.0)
        return mvn_log_density(y, 0.0, lower)

    def mean_func(parameters: Parametrization, _: Any) -> FloatArray:
        """Zero mean vector."""
        parameters = cast(_ARD, parameters)
        return np.zeros(parameters.x.shape[0])

    def var_func(parameters: Parametrization, _: Any) -> FloatArray:
        """Marginal variances of the observations."""
        return np.diag(covariance_func(parameters, None)).copy()

    def _distr_type(parameters: Parametrization) -> EuclideanDistributionType:
        parameters = cast(_ARD, parameters)
        return EuclideanDistributionType(kind=Kind.CONTINUOUS, dimension=parameters.x.shape[0])

    GaussianProcess = ParametricFamily(
        name=FamilyName.GAUSSIAN_PROCESS,
        distr_type=_distr_type,
        distr_parametrizations=["ard", "isotropic"],
        distr_characteristics={
            CharacteristicName.LOG_PDF: log_pdf,
            CharacteristicName.MEAN: mean_func,
            CharacteristicName.VAR: var_func,
            CharacteristicName.COV: covariance_func,
        },
        sampling_strategy=CholeskySamplingStrategy(),
    )
    GaussianProcess.__doc__ = GAUSSIAN_PROCESS_DOC

    @parametrization(family=GaussianProcess, name="ard")
    @dataclass(slots=True, frozen=True, eq=False)
    class _ARD(Parametrization):
        """
        Automatic relevance determination parametrization.

        Parameters
        ----------
        x : FloatArray
            Inputs of shape (N, D); a vector is N one-dimensional inputs
        alpha : float
            Marginal standard deviation of the latent function
        rho : FloatArray
            Length-scale for every input dimension
        sigma : float
            Observation noise scale
        delta : float
            Diagonal jitter
        """

        x: FloatArray
        alpha: float
        rho: FloatArray
        sigma: float = 0.0
        delta: float = 1e-9

        def __post_init__(self) -> None:
            object.__setattr__(self, "x", as_inputs(self.x))
            object.__setattr__(self, "rho", np.atleast_1d(np.asarray(self.rho, dtype=np.float64)))

        @constraint(description="alpha > 0")
        def check_alpha_positive(self) -> bool:
            return self.alpha > 0

        @constraint(description="rho has one positive length-scale per input dimension")
        def check_rho(self) -> bool:
            return self.rho.shape == (self.x.shape[1],) and bool(np.all(self.rho > 0))

        @constraint(description="sigma >= 0")
        def check_sigma_non_negative(self) -> bool:
            return self.sigma >= 0

        @constraint(description="delta > 0")
        def check_delta_positive(self) -> bool:
            return self.delta > 0

        @constraint(description="x is finite")
        def check_x_finite(self) -> bool:
            return bool(np.all(np.isfinite(self.x)))

    @parametrization(family=GaussianProcess, name="isotropic")
    @dataclass(slots=True, frozen=True, eq=False)
    class _Isotropic(Parametrization):
        """
        Isotropic parametrization with one length-scale shared by all inputs.

        Parameters
        ----------
        x : FloatArray
            Inputs of shape (N, D)
        alpha : float
            Marginal standard deviation of the latent function
        rho : float
            Shared length-scale
        sigma : float
            Observation noise scale
        delta : float
            Diagonal jitter
        """

        x: FloatArray
        alpha: float
        rho: float
        sigma: float = 0.0
        delta: float = 1e-9

        def __post_init__(self) -> None:
            object.__setattr__(self, "x", as_inputs(self.x))

        @constraint(description="alpha > 0")
        def check_alpha_positive(self) -> bool:
            return self.alpha > 0

        @constraint(description="rho > 0")
        def check_rho_positive(self) -> bool:
            return self.rho > 0

        @constraint(description="sigma >= 0")
        def check_sigma_non_negative(self) -> bool:
            return self.sigma >= 0

        @constraint(description="delta > 0")
        def check_delta_positive(self) -> bool:
            return self.delta > 0

        @constraint(description="x is finite")
        def check_x_finite(self) -> bool:
            return bool(np.all(np.isfinite(self.x)))

        def transform_to_base_parametrization(self) -> Parametrization:
            """
            Transform to ARD parametrization.

            Returns
            -------
            Parametrization
                ARD parametrization with ``rho`` repeated for every dimension
            """
            return _ARD(
                x=self.x,
                alpha=self.alpha,
                rho=np.full(self.x.shape[1], float(self.rho)),
                sigma=self.sigma,
                delta=self.delta,
            )

    ParametricFamilyRegister.register(GaussianProcess)
