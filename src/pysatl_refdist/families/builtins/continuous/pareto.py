"""
Pareto distribution family implementation.

Contains the Pareto (Type I) family in the scale-shape parametrization.
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


def configure_pareto_family() -> None:
    """
    Configure and register the Pareto distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.PARETO):
        return

    PARETO_DOC = """
    Pareto distribution.

    A power-law distribution on ``[y_min, inf)`` with scale ``y_min > 0`` and
    shape ``alpha > 0``.

    Probability density function:
        f(y) = alpha * y_min^alpha / y^(alpha + 1) for y >= y_min

    Moments of order ``k`` exist only for ``alpha > k``; the mean and variance
    are infinite otherwise.
    """

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability density function for Pareto distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - y_min: float (scale, lower bound of the support)
            - alpha: float (shape)
        x : NumericArray
            Points at which to evaluate the probability density function

        Returns
        -------
        NumericArray
            Density values at points x (zero below ``y_min``)
        """
        parameters = cast(_ScaleShape, parameters)
        y_min, alpha = parameters.y_min, parameters.alpha
        x = np.asarray(x, dtype=np.float64)

        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            values = alpha * y_min**alpha / x ** (alpha + 1.0)
        return np.where(x >= y_min, values, 0.0)

    def log_pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Log density, ``-inf`` below ``y_min``."""
        parameters = cast(_ScaleShape, parameters)
        y_min, alpha = parameters.y_min, parameters.alpha
        x = np.asarray(x, dtype=np.float64)

        with np.errstate(divide="ignore", invalid="ignore"):
            values = np.log(alpha) + alpha * np.log(y_min) - (alpha + 1.0) * np.log(x)
        return np.where(x >= y_min, values, -np.inf)

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Cumulative distribution function for Pareto distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - y_min: float (scale)
            - alpha: float (shape)
        x : NumericArray
            Points at which to evaluate the cumulative distribution function

        Returns
        -------
        NumericArray
            Probabilities P(Y <= x) for each point x
        """
        parameters = cast(_ScaleShape, parameters)
        y_min, alpha = parameters.y_min, parameters.alpha
        x = np.asarray(x, dtype=np.float64)

        with np.errstate(divide="ignore", invalid="ignore"):
            values = -np.expm1(alpha * np.log(y_min / x))
        return np.where(x >= y_min, values, 0.0)

    def log_cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_ScaleShape, parameters)
        y_min, alpha = parameters.y_min, parameters.alpha
        x = np.asarray(x, dtype=np.float64)

        with np.errstate(divide="ignore", invalid="ignore"):
            values = np.log1p(-((y_min / x) ** alpha))
        return np.where(x >= y_min, values, -np.inf)

    def log_ccdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_ScaleShape, parameters)
        y_min, alpha = parameters.y_min, parameters.alpha
        x = np.asarray(x, dtype=np.float64)

        with np.errstate(divide="ignore", invalid="ignore"):
            values = alpha * np.log(y_min / x)
        return np.where(x >= y_min, values, 0.0)

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Percent point function (inverse CDF) for Pareto distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - y_min: float (scale)
            - alpha: float (shape)
        p : NumericArray
            Probability from [0, 1]

        Returns
        -------
        NumericArray
            ``y_min * (1 - p)^(-1/alpha)``; ``y_min`` for p = 0 and inf for p = 1

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        p = np.asarray(p, dtype=np.float64)
        if np.any((p < 0) | (p > 1)):
            raise ValueError("Probability must be in [0, 1]")

        parameters = cast(_ScaleShape, parameters)
        with np.errstate(divide="ignore"):
            return parameters.y_min * (1.0 - p) ** (-1.0 / parameters.alpha)

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean of Pareto distribution (infinite for alpha <= 1)."""
        parameters = cast(_ScaleShape, parameters)
        alpha = parameters.alpha
        if alpha <= 1.0:
            return float("inf")
        return alpha * parameters.y_min / (alpha - 1.0)

    def var_func(parameters: Parametrization, _: Any) -> float:
        """Variance of Pareto distribution (infinite for alpha <= 2)."""
        parameters = cast(_ScaleShape, parameters)
        alpha = parameters.alpha
        if alpha <= 2.0:
            return float("inf")
        return parameters.y_min**2 * alpha / ((alpha - 1.0) ** 2 * (alpha - 2.0))

    def _support(parameters: Parametrization) -> ContinuousSupport:
        """Support of Pareto distribution"""
        parameters = cast(_ScaleShape, parameters)
        return ContinuousSupport(left=parameters.y_min)

    Pareto = ParametricFamily(
        name=FamilyName.PARETO,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["scale_shape"],
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
    Pareto.__doc__ = PARETO_DOC

    @parametrization(family=Pareto, name="scale_shape")
    class _ScaleShape(Parametrization):
        """
        Scale-shape parametrization of Pareto distribution.

        Parameters
        ----------
        y_min : float
            Scale, the lower bound of the support
        alpha : float
            Shape (tail index)
        """

        y_min: float
        alpha: float

        @constraint(description="y_min > 0")
        def check_y_min_positive(self) -> bool:
            return self.y_min > 0

        @constraint(description="alpha > 0")
        def check_alpha_positive(self) -> bool:
            return self.alpha > 0

    ParametricFamilyRegister.register(Pareto)
