from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, cast

from mypy_extensions import KwArg

from pysatl_refdist.distributions.computation import (
    AnalyticalComputation,
    ComputationMethod,
    FittedComputationMethod,
)
from pysatl_refdist.distributions.support import (
    ContinuousSupport,
    ExplicitTableDiscreteSupport,
)
from pysatl_refdist.types import CharacteristicName, Kind
from tests.utils.mocks import StandaloneEuclideanUnivariateDistribution

if TYPE_CHECKING:
    from collections.abc import Sequence


class DistributionTestBase:
    PDF = CharacteristicName.PDF
    CDF = CharacteristicName.CDF
    PPF = CharacteristicName.PPF
    PMF = CharacteristicName.PMF
    SF = CharacteristicName.SF
    LOG_PDF = CharacteristicName.LOG_PDF
    LOG_PMF = CharacteristicName.LOG_PMF
    LOG_CDF = CharacteristicName.LOG_CDF
    LOG_CCDF = CharacteristicName.LOG_CCDF

    @staticmethod
    def _analytical(target: str, func: Callable[..., float]) -> AnalyticalComputation[Any, Any]:
        return AnalyticalComputation[float, float](
            target=target, func=cast(Callable[[float, KwArg(Any)], float], func)
        )

    def make_uniform_ppf_distribution(
        self,
    ) -> StandaloneEuclideanUnivariateDistribution:
        return StandaloneEuclideanUnivariateDistribution(
            kind=Kind.CONTINUOUS,
            analytical_computations=[self._analytical(self.PPF, lambda q, **kwargs: q)],
            support=ContinuousSupport(0, 1),
        )

    def make_logistic_cdf_distribution(
        self,
    ) -> StandaloneEuclideanUnivariateDistribution:
        def logistic_cdf(x: float, **_: Any) -> float:
            return 1.0 / (1.0 + math.exp(-x))

        return StandaloneEuclideanUnivariateDistribution(
            kind=Kind.CONTINUOUS,
            analytical_computations=[self._analytical(self.CDF, logistic_cdf)],
            support=ContinuousSupport(),
        )

    def make_uniform_pdf_distribution(
        self,
    ) -> StandaloneEuclideanUnivariateDistribution:
        def uniform_pdf(x: float, **_: Any) -> float:
            return 1.0 if 0.0 <= x <= 1.0 else 0.0

        return StandaloneEuclideanUnivariateDistribution(
            kind=Kind.CONTINUOUS,
            analytical_computations=[self._analytical(self.PDF, uniform_pdf)],
            support=ContinuousSupport(0, 1),
        )

    def make_exponential_log_pdf_distribution(
        self, rate: float = 2.0
    ) -> StandaloneEuclideanUnivariateDistribution:
        def log_pdf(x: float, **_: Any) -> float:
            return math.log(rate) - rate * x if x >= 0.0 else float("-inf")

        return StandaloneEuclideanUnivariateDistribution(
            kind=Kind.CONTINUOUS,
            analytical_computations=[self._analytical(self.LOG_PDF, log_pdf)],
            support=ContinuousSupport(left=0.0),
        )

    def make_plateau_cdf_distribution(
        self,
    ) -> StandaloneEuclideanUnivariateDistribution:
        """CDF equal to 0.5 on the whole of [0, 1]."""

        def plateau_cdf(x: float, **_: Any) -> float:
            if x < 0.0:
                return 0.5 * math.exp(x)
            if x <= 1.0:
                return 0.5
            return 1.0 - 0.5 * math.exp(-(x - 1.0))

        return StandaloneEuclideanUnivariateDistribution(
            kind=Kind.CONTINUOUS,
            analytical_computations=[self._analytical(self.CDF, plateau_cdf)],
        )

    def make_discrete_point_pmf_distribution(
        self, is_with_support: bool = True
    ) -> StandaloneEuclideanUnivariateDistribution:
        masses = {0.0: 0.2, 1.0: 0.5, 2.0: 0.3}

        def pmf(x: float, **_: Any) -> float:
            return masses.get(float(x), 0.0)

        support = ExplicitTableDiscreteSupport([0, 1, 2]) if is_with_support else None

        return StandaloneEuclideanUnivariateDistribution(
            kind=Kind.DISCRETE,
            analytical_computations=[self._analytical(self.PMF, pmf)],
            support=support,
        )

    @staticmethod
    def make_fictitious_computation_method(
        target: str, sources: Sequence[str]
    ) -> ComputationMethod[Any, Any]:
        def _fitted_const(val: Any) -> FittedComputationMethod[Any, Any]:
            return FittedComputationMethod[Any, Any](
                target=target, sources=sources, func=lambda *_a, **_k: val
            )

        return ComputationMethod(
            target=target, sources=sources, fitter=lambda *_a, **_k: _fitted_const(None)
        )
