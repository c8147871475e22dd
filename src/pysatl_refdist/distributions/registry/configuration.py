"""
Default configuration and cached accessor for the global characteristic registry.

- The registry constructor does not configure anything.
- ``characteristic_registry()`` is ``lru_cache``d: it builds the singleton
  and seeds it with the default nodes and edges exactly once per process.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from functools import lru_cache

from pysatl_refdist.distributions.computation import ComputationMethod
from pysatl_refdist.distributions.fitters import (
    fit_cdf_to_log_cdf,
    fit_cdf_to_pdf_1C,
    fit_cdf_to_pmf_1D,
    fit_cdf_to_ppf_1C,
    fit_cdf_to_ppf_1D,
    fit_cdf_to_sf,
    fit_log_ccdf_to_sf,
    fit_log_cdf_to_cdf,
    fit_log_pdf_to_pdf,
    fit_log_pmf_to_pmf,
    fit_pdf_to_cdf_1C,
    fit_pdf_to_log_pdf,
    fit_pmf_to_cdf_1D,
    fit_pmf_to_log_pmf,
    fit_ppf_to_cdf_1C,
    fit_ppf_to_cdf_1D,
    fit_sf_to_cdf,
    fit_sf_to_log_ccdf,
)
from pysatl_refdist.distributions.registry.constraint import (
    GraphPrimitiveConstraint,
    NonNullConstraint,
    NumericConstraint,
    SetConstraint,
)
from pysatl_refdist.distributions.registry.graph import CharacteristicRegistry
from pysatl_refdist.types import CharacteristicName, Kind

PDF = CharacteristicName.PDF
PMF = CharacteristicName.PMF
CDF = CharacteristicName.CDF
PPF = CharacteristicName.PPF
SF = CharacteristicName.SF
LOG_PDF = CharacteristicName.LOG_PDF
LOG_PMF = CharacteristicName.LOG_PMF
LOG_CDF = CharacteristicName.LOG_CDF
LOG_CCDF = CharacteristicName.LOG_CCDF


def _edge(target: str, source: str, fitter: object) -> ComputationMethod[float, float]:
    return ComputationMethod[float, float](target=target, sources=[source], fitter=fitter)  # type: ignore[arg-type]


def _configure(reg: CharacteristicRegistry) -> None:
    """Default configuration of the characteristic registry."""
    dim1 = NumericConstraint(allowed=frozenset({1}))
    kind_continuous = SetConstraint(allowed=frozenset({Kind.CONTINUOUS}))
    kind_discrete = SetConstraint(allowed=frozenset({Kind.DISCRETE}))

    continuous = GraphPrimitiveConstraint(
        distribution_type_feature_constraints={"kind": kind_continuous}
    )
    discrete = GraphPrimitiveConstraint(
        distribution_type_feature_constraints={"kind": kind_discrete}
    )
    univariate = GraphPrimitiveConstraint(
        distribution_type_feature_constraints={"dimension": dim1}
    )
    continuous_1d = GraphPrimitiveConstraint(
        distribution_type_feature_constraints={"kind": kind_continuous, "dimension": dim1},
    )
    discrete_1d = GraphPrimitiveConstraint(
        distribution_type_feature_constraints={"kind": kind_discrete, "dimension": dim1},
        distribution_instance_feature_constraints={"support": NonNullConstraint()},
    )

    # Densities exist for every dimension of their kind.
    for name in (PDF, LOG_PDF):
        reg.add_characteristic(name=name, is_definitive=True, presence_constraint=continuous)
    for name in (PMF, LOG_PMF):
        reg.add_characteristic(name=name, is_definitive=True, presence_constraint=discrete)

    # Distribution functions are univariate only.
    for name in (CDF, PPF, SF, LOG_CDF, LOG_CCDF):
        reg.add_characteristic(name=name, is_definitive=True, presence_constraint=univariate)

    reg.add_computation(_edge(LOG_PDF, PDF, fit_pdf_to_log_pdf), constraint=continuous)
    reg.add_computation(_edge(PDF, LOG_PDF, fit_log_pdf_to_pdf), constraint=continuous)
    reg.add_computation(_edge(LOG_PMF, PMF, fit_pmf_to_log_pmf), constraint=discrete)
    reg.add_computation(_edge(PMF, LOG_PMF, fit_log_pmf_to_pmf), constraint=discrete)

    reg.add_computation(_edge(CDF, PDF, fit_pdf_to_cdf_1C), constraint=continuous_1d)
    reg.add_computation(_edge(PDF, CDF, fit_cdf_to_pdf_1C), constraint=continuous_1d)
    reg.add_computation(_edge(PPF, CDF, fit_cdf_to_ppf_1C), constraint=continuous_1d)
    reg.add_computation(_edge(CDF, PPF, fit_ppf_to_cdf_1C), constraint=continuous_1d)

    reg.add_computation(_edge(CDF, PMF, fit_pmf_to_cdf_1D), constraint=discrete_1d)
    reg.add_computation(_edge(PMF, CDF, fit_cdf_to_pmf_1D), constraint=discrete_1d)
    reg.add_computation(_edge(PPF, CDF, fit_cdf_to_ppf_1D), constraint=discrete_1d)
    reg.add_computation(_edge(CDF, PPF, fit_ppf_to_cdf_1D), constraint=discrete_1d)

    reg.add_computation(_edge(SF, CDF, fit_cdf_to_sf), constraint=univariate)
    reg.add_computation(_edge(CDF, SF, fit_sf_to_cdf), constraint=univariate)
    reg.add_computation(_edge(LOG_CDF, CDF, fit_cdf_to_log_cdf), constraint=univariate)
    reg.add_computation(_edge(CDF, LOG_CDF, fit_log_cdf_to_cdf), constraint=univariate)
    reg.add_computation(_edge(LOG_CCDF, SF, fit_sf_to_log_ccdf), constraint=univariate)
    reg.add_computation(_edge(SF, LOG_CCDF, fit_log_ccdf_to_sf), constraint=univariate)


@lru_cache(maxsize=1)
def characteristic_registry() -> CharacteristicRegistry:
    """
    Return the cached, configured characteristic registry.

    Notes
    -----
    Users may build a separate, unconfigured registry by resetting the
    singleton and instantiating ``CharacteristicRegistry()`` directly.
    """
    reg = CharacteristicRegistry()
    _configure(reg)
    return reg


def reset_characteristic_registry() -> None:
    """
    Reset the cached characteristic registry.
    """
    characteristic_registry.cache_clear()
    CharacteristicRegistry._reset()
