"""
Pareto Type 2 distribution family implementation.

Contains the Pareto Type 2 (Lomax with location) family.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, cast

import numpy as np

from pysatl_refdist.distributions.support import ContinuousSupport
from pysatl_refdist.families.parametric_family import ParametricFamily
from pysatl_refdist.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_refdist.families.registry import ParametricFamilyRegister
from pysatl_refdist.types import (
    CharacteristicName,
    FamilyName,
    NumericArray,
    UnivariateContinuous,
)

if TYPE_CHECKING:
    from typing import Any


def configure_pareto_type_2_family() -> None:
    """
    Configure and register the Pareto Type 2 distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.PARETO_TYPE_2):
        return

    PARETO_TYPE_2_DOC = """
    Pareto Type 2 distribution.

    Location ``mu``, scale ``lambda_ > 0`` and shape ``alpha > 0``; for
    ``mu = 0`` this is the Lomax distribution.

    Probability density function:
        f(y) = alpha / lambda * (1 + (y - mu) / lambda)^-(alpha + 1) for y >= mu
    """

    def _z(parameters: _LocationScaleShape, x: NumericArray) -> NumericArray:
        """Standardized excess ``(x - mu) / lambda``."""
        return (np.asarray(x, dtype=np.float64) - parameters.mu) / parameters.lambda_

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability density function for Pareto Type 2 distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - mu: float (location)
            - lambda_: float (scale)
            - alpha: float (shape)
        x : NumericArray
            Points at which to evaluate the probability density function

        Returns
        -------
        NumericArray
            Density values at points x (zero below ``mu``)
        """
        parameters = cast(_LocationScaleShape, parameters)
        z = _z(parameters, x)
        alpha, lambda_ = parameters.alpha, parameters.lambda_

        with np.errstate(invalid="ignore", divide="ignore"):
            values = alpha / lambda_ * np.exp(-(alpha + 1.0) * np.log1p(z))
        return np.where(z >= 0, values, 0.0)

    def log_pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_LocationScaleShape, parameters)
        z = _z(parameters, x)
        alpha, lambda_ = parameters.alpha, parameters.lambda_

        with np.errstate(invalid="ignore", divide="ignore"):
            values = np.log(alpha) - np.log(lambda_) - (alpha + 1.0) * np.log1p(z)
        return np.where(z >= 0, values, -np.inf)

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Cumulative distribution function ``1 - (1 + z)^-alpha``."""
        parameters = cast(_LocationScaleShape, parameters)
        z = _z(parameters, x)

        with np.errstate(invalid="ignore", divide="ignore"):
            values = -np.expm1(-parameters.alpha * np.log1p(z))
        return np.where(z >= 0, values, 0.0)

    def log_cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_LocationScaleShape, parameters)
        z = _z(parameters, x)

        with np.errstate(invalid="ignore", divide="ignore"):
            values = np.log(-np.expm1(-parameters.alpha * np.log1p(z)))
        return np.where(z >= 0, values, -np.inf)

    def log_ccdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_LocationScaleShape, parameters)
        z = _z(parameters, x)

        with np.errstate(invalid="ignore", divide="ignore"):
            values = -parameters.alpha * np.log1p(z)
        return np.where(z >= 0, values, 0.0)

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Percent point function (inverse CDF) for Pareto Type 2 distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object
        p : NumericArray
            Probability from [0, 1]

        Returns
        -------
        NumericArray
            ``mu + lambda * ((1 - p)^(-1/alpha) - 1)``

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        p = np.asarray(p, dtype=np.float64)
        if np.any((p < 0) | (p > 1)):
            raise ValueError("Probability must be in [0, 1]")

        parameters = cast(_LocationScaleShape, parameters)
        with np.errstate(divide="ignore"):
            excess = np.expm1(-np.log1p(-p) / parameters.alpha)
        return parameters.mu + parameters.lambda_ * excess

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean of Pareto Type 2 distribution (infinite for alpha <= 1)."""
        parameters = cast(_LocationScaleShape, parameters)
        if parameters.alpha <= 1.0:
            return float("inf")
        return parameters.mu + parameters.lambda_ / (parameters.alpha - 1.0)

    def var_func(parameters: Parametrization, _: Any) -> float:
        """Variance of Pareto Type 2 distribution (infinite for alpha <= 2)."""
        parameters = cast(_LocationScaleShape, parameters)
        alpha = parameters.alpha
        if alpha <= 2.0:
            return float("inf")
        return parameters.lambda_**2 * alpha / ((alpha - 1.0) ** 2 * (alpha - 2.0))

    def _support(parameters: Parametrization) -> ContinuousSupport:
        """Support of Pareto Type 2 distribution"""
        parameters = cast(_LocationScaleShape, parameters)
        return ContinuousSupport(left=parameters.mu)

    ParetoType2 = ParametricFamily(
        name=FamilyName.PARETO_TYPE_2,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["location_scale_shape"],
        distr_characteristics={
            CharacteristicName.PDF: pdf,
            CharacteristicName.LOG_PDF: log_pdf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.LOG_CDF: log_cdf,
            CharacteristicName.LOG_CCDF: log_ccdf,
            CharacteristicName.PPF: ppf,
            CharacteristicName.MEAN: mean_func,
            CharacteristicName.VAR: var_func,
        },
        support_by_parametrization=_support,
    )
    ParetoType2.__doc__ = PARETO_TYPE_2_DOC

    @parametrization(family=ParetoType2, name="location_scale_shape")
    class _LocationScaleShape(Parametrization):
        """
        Location-scale-shape parametrization of Pareto Type 2 distribution.

        Parameters
        ----------
        mu : float
            Location, the lower bound of the support
        lambda_ : float
            Scale
        alpha : float
            Shape
        """

        mu: float
        lambda_: float
        alpha: float

        @constraint(description="mu is finite")
        def check_mu_finite(self) -> bool:
            return np.isfinite(self.mu)

        @constraint(description="lambda_ > 0")
        def check_lambda_positive(self) -> bool:
            return self.lambda_ > 0

        @constraint(description="alpha > 0")
        def check_alpha_positive(self) -> bool:
            return self.alpha > 0

    ParametricFamilyRegister.register(ParetoType2)
