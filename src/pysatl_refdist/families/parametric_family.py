"""
Parametric family definitions.

A :class:`ParametricFamily` groups the parametrizations of one distribution
(e.g. Bernoulli with ``probability`` and ``logit``), its analytical
characteristics, sampling and computation strategies, and the support
resolver, and acts as the factory of concrete distributions.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov, Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from functools import partial
from typing import TYPE_CHECKING, dataclass_transform

from pysatl_refdist.distributions.computation import AnalyticalComputation
from pysatl_refdist.distributions.strategies import (
    DefaultComputationStrategy,
    DefaultSamplingUnivariateStrategy,
)
from pysatl_refdist.families.distribution import ParametricFamilyDistribution
from pysatl_refdist.types import DistributionType

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any

    from pysatl_refdist.distributions.strategies import ComputationStrategy, SamplingStrategy
    from pysatl_refdist.distributions.support import Support
    from pysatl_refdist.families.parametrizations import Parametrization
    from pysatl_refdist.types import (
        GenericCharacteristicName,
        ParametrizationName,
    )

    type ParametrizedFunction = Callable[[Parametrization, Any], Any]
    type SupportArg = Callable[[Parametrization], Support | None] | None
    type SupportResolver = Callable[[Parametrization], Support | None]


class ParametricFamily:
    """
    A family of distributions with multiple parametrizations.

    Parameters
    ----------
    name : str
        Name of the distribution family.
    distr_type : DistributionType or Callable[[Parametrization], DistributionType]
        Distribution type, or a function inferring it from base parameters
        (families over vectors of outcomes derive the dimension this way).
    distr_parametrizations : list[ParametrizationName]
        Parametrization names; the first one is the base parametrization.
    distr_characteristics : dict[str, dict[str, Callable] or Callable]
        Characteristic name -> implementation. A bare callable is defined for
        the base parametrization; a dict maps parametrization names to
        implementations specialised for them.
    sampling_strategy : SamplingStrategy, optional
        Defaults to inverse transform sampling through ``ppf``.
    computation_strategy : ComputationStrategy, optional
        Defaults to :class:`DefaultComputationStrategy`.
    support_by_parametrization : Callable or None, optional
        Function returning the support for given (base) parameters.
    """

    def __init__(
        self,
        name: str,
        distr_type: DistributionType | Callable[[Parametrization], DistributionType],
        distr_parametrizations: list[ParametrizationName],
        distr_characteristics: dict[
            GenericCharacteristicName,
            dict[ParametrizationName, ParametrizedFunction] | ParametrizedFunction,
        ],
        sampling_strategy: SamplingStrategy | None = None,
        computation_strategy: ComputationStrategy[Any, Any] | None = None,
        support_by_parametrization: SupportArg = None,
    ):
        self._name = name
        self._distr_type: Callable[[Parametrization], DistributionType] = (
            (lambda params: distr_type) if isinstance(distr_type, DistributionType) else distr_type
        )

        self.computation_strategy = (
            DefaultComputationStrategy() if computation_strategy is None else computation_strategy
        )
        self.sampling_strategy = (
            DefaultSamplingUnivariateStrategy() if sampling_strategy is None else sampling_strategy
        )

        self._support_resolver: SupportResolver = (
            support_by_parametrization
            if support_by_parametrization is not None
            else (lambda _params: None)
        )

        self.parametrization_names: list[ParametrizationName] = distr_parametrizations
        self.base_parametrization_name: ParametrizationName = self.parametrization_names[0]

        self._parametrizations: dict[ParametrizationName, type[Parametrization]] = {}

        base_name = self.base_parametrization_name
        self.distr_characteristics: dict[
            GenericCharacteristicName, dict[ParametrizationName, ParametrizedFunction]
        ] = {
            key: (val if isinstance(val, dict) else {base_name: val})
            for key, val in distr_characteristics.items()
        }

        # For every parametrization: characteristic -> parametrization whose form is used
        self._analytical_plan: dict[
            ParametrizationName, dict[GenericCharacteristicName, ParametrizationName]
        ] = {}
        for pname in self.parametrization_names:
            plan_for_p: dict[GenericCharacteristicName, ParametrizationName] = {}
            for characteristic, forms in self.distr_characteristics.items():
                if pname in forms:
                    plan_for_p[characteristic] = pname
                elif base_name in forms:
                    plan_for_p[characteristic] = base_name
            self._analytical_plan[pname] = plan_for_p

    @property
    def name(self) -> str:
        return self._name

    @property
    def parametrizations(self) -> dict[ParametrizationName, type[Parametrization]]:
        """Mapping from parametrization names to classes."""
        return self._parametrizations

    @property
    def base(self) -> type[Parametrization]:
        """
        The base parametrization class.

        Raises
        ------
        ValueError
            If the base parametrization is not registered.
        """
        try:
            return self._parametrizations[self.base_parametrization_name]
        except KeyError as exc:
            raise ValueError(
                f"Base parametrization '{self.base_parametrization_name}' is not registered."
            ) from exc

    @property
    def support_resolver(self) -> SupportResolver:
        return self._support_resolver

    def register_parametrization(
        self,
        name: ParametrizationName,
        parametrization_class: type[Parametrization],
    ) -> None:
        """
        Register a parametrization class.

        Raises
        ------
        ValueError
            If the name is unknown to the family or already registered.
        """
        if name not in self.parametrization_names:
            raise ValueError(f"Parametrization '{name}' is not declared by family '{self.name}'.")
        if name in self._parametrizations:
            raise ValueError(f"Parametrization '{name}' is already registered.")
        self._parametrizations[name] = parametrization_class

    def get_parametrization(self, name: ParametrizationName) -> type[Parametrization]:
        """
        Fetch a parametrization class by name.

        Raises
        ------
        KeyError
            If name is not registered.
        """
        return self._parametrizations[name]

    def to_base(self, parameters: Parametrization) -> Parametrization:
        """Convert parameters to the base parametrization."""
        if parameters.name == self.base_parametrization_name:
            return parameters
        return parameters.transform_to_base_parametrization()

    def _build_analytical_computations(
        self, parameters: Parametrization
    ) -> dict[GenericCharacteristicName, AnalyticalComputation[Any, Any]]:
        """
        Bind the analytical plan of ``parameters.name`` to concrete values.

        Forms specialised for the given parametrization get ``parameters``
        directly; the rest get the (lazily computed) base parameters.
        """
        plan = self._analytical_plan.get(parameters.name, {})
        result: dict[GenericCharacteristicName, AnalyticalComputation[Any, Any]] = {}
        base_params: Parametrization | None = None

        for characteristic, provider_name in plan.items():
            if provider_name == parameters.name:
                params_obj = parameters
            else:
                if base_params is None:
                    base_params = self.to_base(parameters)
                params_obj = base_params

            func_factory = self.distr_characteristics[characteristic][provider_name]
            result[characteristic] = AnalyticalComputation(
                target=characteristic,
                func=partial(func_factory, params_obj),
            )

        return result

    def distribution(
        self,
        parametrization_name: str | None = None,
        **parameters_values: Any,
    ) -> ParametricFamilyDistribution:
        """
        Create a distribution with the given parameter values.

        Parameters
        ----------
        parametrization_name : str, optional
            Parametrization to use (defaults to the base one).
        **parameters_values
            Parameter values.

        Raises
        ------
        KeyError
            If the parametrization is not registered.
        TypeError
            If parameters are missing or unknown.
        ValueError
            If parameters violate a constraint.
        """
        if parametrization_name is None:
            parametrization_class = self.base
        else:
            parametrization_class = self._parametrizations[parametrization_name]

        parameters = parametrization_class(**parameters_values)
        parameters.validate()
        base_parameters = self.to_base(parameters)
        return ParametricFamilyDistribution(
            self.name,
            self._distr_type(base_parameters),
            parameters,
            self.support_resolver(base_parameters),
        )

    @dataclass_transform()
    def parametrization(
        self, *, name: str
    ) -> Callable[[type[Parametrization]], type[Parametrization]]:
        """
        Class decorator registering a parametrization of this family.

        Mypy cannot apply ``dataclass_transform`` to a method decorator, so
        mark the class as a dataclass explicitly if type checking matters.
        """
        from pysatl_refdist.families.parametrizations import parametrization as _param_deco

        return _param_deco(family=self, name=name)

    __call__ = distribution
