"""
Distribution Interface
======================

This module defines the public :class:`Distribution` protocol used by the
strategies, fitters and the characteristic graph.

Notes
-----
- Log-likelihood sums ``log_pdf`` (continuous) or ``log_pmf`` (discrete)
  over the rows of a sample. The log forms are resolved through the
  computation strategy, so a family that only provides ``pdf`` still works.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np

from pysatl_refdist.types import CharacteristicName, Kind

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Any

    from pysatl_refdist.distributions.computation import AnalyticalComputation
    from pysatl_refdist.distributions.sampling import Sample
    from pysatl_refdist.distributions.strategies import (
        ComputationStrategy,
        Method,
        SamplingStrategy,
    )
    from pysatl_refdist.distributions.support import Support
    from pysatl_refdist.types import (
        DistributionType,
        GenericCharacteristicName,
    )


@runtime_checkable
class Distribution(Protocol):
    """Public distribution interface used by strategies and fitters."""

    @property
    def distribution_type(self) -> DistributionType: ...

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, AnalyticalComputation[Any, Any]]: ...

    @property
    def sampling_strategy(self) -> SamplingStrategy: ...
    @property
    def computation_strategy(self) -> ComputationStrategy[Any, Any]: ...

    @property
    def support(self) -> Support | None: ...

    def query_method(
        self, characteristic_name: GenericCharacteristicName, **options: Any
    ) -> Method[Any, Any]:
        return self.computation_strategy.query_method(characteristic_name, self, **options)

    def calculate_characteristic(
        self, characteristic_name: GenericCharacteristicName, value: Any, **options: Any
    ) -> Any:
        return self.query_method(characteristic_name, **options)(value)

    def sample(self, n: int, **options: Any) -> Sample:
        return self.sampling_strategy.sample(n, distr=self, **options)

    def log_likelihood(self, sample: Sample, **options: Any) -> float:
        """
        Joint log-likelihood of i.i.d. observations.

        Parameters
        ----------
        sample : Sample
            Observations, one per row. Univariate samples have shape ``(n, 1)``;
            multivariate samples have shape ``(n, d)``.

        Returns
        -------
        float
            Sum of the per-row log densities (``-inf`` if any row falls
            outside the support).
        """
        kind = self.distribution_type.registry_features.get("kind")
        name = CharacteristicName.LOG_PMF if kind == Kind.DISCRETE else CharacteristicName.LOG_PDF
        log_density = self.query_method(name, **options)

        arr = sample.array
        if self.distribution_type.registry_features.get("dimension", 1) == 1:
            values = [float(log_density(float(x))) for x in arr[:, 0]]
        else:
            values = [float(np.sum(log_density(row))) for row in arr]
        return float(np.sum(values))
