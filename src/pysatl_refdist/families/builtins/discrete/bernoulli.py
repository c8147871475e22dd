"""
Bernoulli distribution family implementation.

Contains the Bernoulli family with the chance-of-success (``probability``)
and log-odds (``logit``) parametrizations.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, cast

import numpy as np
from scipy.special import expit

from pysatl_refdist.distributions.support import ExplicitTableDiscreteSupport
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
    UnivariateDiscrete,
)

if TYPE_CHECKING:
    from typing import Any


def configure_bernoulli_family() -> None:
    """
    Configure and register the Bernoulli distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.BERNOULLI):
        return

    BERNOULLI_DOC = """
    Bernoulli distribution.

    A binary outcome ``y`` in ``{0, 1}`` with chance of success ``theta``:
        P(y = 1) = theta, P(y = 0) = 1 - theta

    The ``logit`` parametrization takes an unconstrained log-odds ``alpha``,
    ``theta = logit^-1(alpha)``; its log mass is evaluated without forming
    ``theta``, which keeps it accurate for large ``|alpha|``.
    """

    def _as_outcomes(y: NumericArray) -> tuple[NumericArray, NumericArray, NumericArray]:
        y = np.asarray(y, dtype=np.float64)
        return y, y == 1.0, y == 0.0

    def pmf(parameters: Parametrization, y: NumericArray) -> NumericArray:
        """
        Probability mass function for Bernoulli distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - theta: float (chance of success)
        y : NumericArray
            Outcomes at which to evaluate the mass

        Returns
        -------
        NumericArray
            ``theta`` at 1, ``1 - theta`` at 0, zero elsewhere
        """
        parameters = cast(_Probability, parameters)
        theta = parameters.theta
        _, is_one, is_zero = _as_outcomes(y)
        return np.where(is_one, theta, np.where(is_zero, 1.0 - theta, 0.0))

    def log_pmf(parameters: Parametrization, y: NumericArray) -> NumericArray:
        parameters = cast(_Probability, parameters)
        theta = parameters.theta
        _, is_one, is_zero = _as_outcomes(y)

        with np.errstate(divide="ignore"):
            return np.where(
                is_one, np.log(theta), np.where(is_zero, np.log1p(-theta), -np.inf)
            )

    def logit_log_pmf(parameters: Parametrization, y: NumericArray) -> NumericArray:
        """Log mass ``-log1p(exp(-(2y - 1) * alpha))`` on ``{0, 1}``."""
        parameters = cast(_Logit, parameters)
        y, is_one, is_zero = _as_outcomes(y)
        values = -np.logaddexp(0.0, -(2.0 * y - 1.0) * parameters.alpha)
        return np.where(is_one | is_zero, values, -np.inf)

    def cdf(parameters: Parametrization, y: NumericArray) -> NumericArray:
        """
        Cumulative distribution function for Bernoulli distribution.

        Returns 0 below 0, ``1 - theta`` on ``[0, 1)`` and 1 from 1 on.
        """
        parameters = cast(_Probability, parameters)
        y = np.asarray(y, dtype=np.float64)
        return np.where(y < 0.0, 0.0, np.where(y < 1.0, 1.0 - parameters.theta, 1.0))

    def log_cdf(parameters: Parametrization, y: NumericArray) -> NumericArray:
        parameters = cast(_Probability, parameters)
        y = np.asarray(y, dtype=np.float64)

        with np.errstate(divide="ignore"):
            return np.where(
                y < 0.0, -np.inf, np.where(y < 1.0, np.log1p(-parameters.theta), 0.0)
            )

    def log_ccdf(parameters: Parametrization, y: NumericArray) -> NumericArray:
        parameters = cast(_Probability, parameters)
        y = np.asarray(y, dtype=np.float64)

        with np.errstate(divide="ignore"):
            return np.where(
                y < 0.0, 0.0, np.where(y < 1.0, np.log(parameters.theta), -np.inf)
            )

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Percent point function (inverse CDF) for Bernoulli distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - theta: float (chance of success)
        p : NumericArray
            Probability from [0, 1]

        Returns
        -------
        NumericArray
            0 where ``p <= 1 - theta``, 1 otherwise

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        p = np.asarray(p, dtype=np.float64)
        if np.any((p < 0) | (p > 1)):
            raise ValueError("Probability must be in [0, 1]")

        parameters = cast(_Probability, parameters)
        return np.where(p <= 1.0 - parameters.theta, 0.0, 1.0)

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean of Bernoulli distribution."""
        parameters = cast(_Probability, parameters)
        return parameters.theta

    def var_func(parameters: Parametrization, _: Any) -> float:
        """Variance of Bernoulli distribution."""
        parameters = cast(_Probability, parameters)
        return parameters.theta * (1.0 - parameters.theta)

    def _support(_: Parametrization) -> ExplicitTableDiscreteSupport:
        """Support of Bernoulli distribution"""
        return ExplicitTableDiscreteSupport([0, 1], assume_sorted=True)

    Bernoulli = ParametricFamily(
        name=FamilyName.BERNOULLI,
        distr_type=UnivariateDiscrete,
        distr_parametrizations=["probability", "logit"],
        distr_characteristics={
            CharacteristicName.PMF: pmf,
            CharacteristicName.LOG_PMF: {
                "probability": log_pmf,
                "logit": logit_log_pmf,
            },
            CharacteristicName.CDF: cdf,
            CharacteristicName.LOG_CDF: log_cdf,
            CharacteristicName.LOG_CCDF: log_ccdf,
            CharacteristicName.PPF: ppf,
            CharacteristicName.MEAN: mean_func,
            CharacteristicName.VAR: var_func,
        },
        support_by_parametrization=_support,
    )
    Bernoulli.__doc__ = BERNOULLI_DOC

    @parametrization(family=Bernoulli, name="probability")
    class _Probability(Parametrization):
        """
        Chance-of-success parametrization of Bernoulli distribution.

        Parameters
        ----------
        theta : float
            Probability of outcome 1
        """

        theta: float

        @constraint(description="0 <= theta <= 1")
        def check_theta_in_unit_interval(self) -> bool:
            return 0.0 <= self.theta <= 1.0

    @parametrization(family=Bernoulli, name="logit")
    class _Logit(Parametrization):
        """
        Log-odds parametrization of Bernoulli distribution.

        Parameters
        ----------
        alpha : float
            Log-odds of outcome 1, ``theta = logit^-1(alpha)``
        """

        alpha: float

        @constraint(description="alpha is not NaN")
        def check_alpha_not_nan(self) -> bool:
            return not np.isnan(self.alpha)

        def transform_to_base_parametrization(self) -> Parametrization:
            """
            Transform to Probability parametrization.

            Returns
            -------
            Parametrization
                Probability parametrization instance
            """
            return _Probability(theta=float(expit(self.alpha)))

    ParametricFamilyRegister.register(Bernoulli)
