"""
Concrete distribution instances with specific parameter values.

A :class:`ParametricFamilyDistribution` is what a family returns when it is
called with parameter values; it binds the family's analytical plan to those
values and delegates computation and sampling to the family's strategies.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pysatl_refdist.distributions.distribution import Distribution
from pysatl_refdist.families.registry import ParametricFamilyRegister

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Any

    from pysatl_refdist.distributions.computation import AnalyticalComputation
    from pysatl_refdist.distributions.sampling import Sample
    from pysatl_refdist.distributions.strategies import ComputationStrategy, SamplingStrategy
    from pysatl_refdist.distributions.support import Support
    from pysatl_refdist.families.parametric_family import ParametricFamily
    from pysatl_refdist.families.parametrizations import Parametrization
    from pysatl_refdist.types import (
        DistributionType,
        GenericCharacteristicName,
    )


@dataclass(slots=True)
class ParametricFamilyDistribution(Distribution):
    """
    A specific distribution instance from a parametric family.

    Parameters
    ----------
    family_name : str
        Name of the distribution family.
    _distribution_type : DistributionType
        Type of this distribution.
    parametrization : Parametrization
        Parameter values, in the parametrization they were given in.
    _support : Support or None
        Support of this distribution.
    """

    family_name: str
    _distribution_type: DistributionType
    parametrization: Parametrization
    _support: Support | None
    _analytical_cache_key: tuple[int, str] | None = field(default=None, repr=False, compare=False)
    _analytical_cache_val: (
        Mapping[GenericCharacteristicName, AnalyticalComputation[Any, Any]] | None
    ) = field(default=None, repr=False, compare=False)

    @property
    def distribution_type(self) -> DistributionType:
        return self._distribution_type

    @property
    def family(self) -> ParametricFamily:
        """The parametric family this distribution belongs to."""
        return ParametricFamilyRegister.get(self.family_name)

    @property
    def parametrization_name(self) -> str:
        return self.parametrization.name

    @property
    def parameters(self) -> dict[str, Any]:
        """Parameter values as a dictionary (field name -> value)."""
        return self.parametrization.parameters

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, AnalyticalComputation[Any, Any]]:
        """
        Analytical computations bound to this distribution's parameters.

        Lazily computed and cached per instance. The cache is invalidated
        when the parametrization object is replaced.
        """
        key = (id(self.parametrization), self.parametrization.name)
        if self._analytical_cache_key != key or self._analytical_cache_val is None:
            self._analytical_cache_val = self.family._build_analytical_computations(
                self.parametrization
            )
            self._analytical_cache_key = key
        return self._analytical_cache_val

    @property
    def sampling_strategy(self) -> SamplingStrategy:
        return self.family.sampling_strategy

    @property
    def computation_strategy(self) -> ComputationStrategy[Any, Any]:
        return self.family.computation_strategy

    @property
    def support(self) -> Support | None:
        return self._support

    def sample(self, n: int, **options: Any) -> Sample:
        """
        Draw ``n`` observations.

        Parameters
        ----------
        n : int
            Number of observations.
        **options : Any
            Sampling options, e.g. ``rng`` or ``seed``.

        Returns
        -------
        Sample
            A 2D sample with one observation per row.
        """
        return self.sampling_strategy.sample(n, distr=self, **options)
