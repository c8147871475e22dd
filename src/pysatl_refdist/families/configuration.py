"""
Distribution Families Configuration
===================================

Registers the built-in parametric families in the global
:class:`ParametricFamilyRegister`:

- :func:`Pareto <pysatl_refdist.families.builtins.configure_pareto_family>` and
  :func:`Pareto Type 2 <pysatl_refdist.families.builtins.configure_pareto_type_2_family>`;
- :func:`Bernoulli <pysatl_refdist.families.builtins.configure_bernoulli_family>`
  with its probability and logit parametrizations;
- :func:`Bernoulli-Logit GLM
  <pysatl_refdist.families.builtins.configure_bernoulli_logit_glm_family>`;
- :func:`Gaussian process <pysatl_refdist.families.builtins.configure_gaussian_process_family>`.

Notes
-----
Configuration is lazy and cached; :func:`reset_families_register` drops both
the cache and the register.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from functools import lru_cache

from pysatl_refdist.families.builtins import (
    configure_bernoulli_family,
    configure_bernoulli_logit_glm_family,
    configure_gaussian_process_family,
    configure_pareto_family,
    configure_pareto_type_2_family,
)
from pysatl_refdist.families.registry import ParametricFamilyRegister


@lru_cache(maxsize=1)
def configure_families_register() -> ParametricFamilyRegister:
    """
    Configure and register all built-in distribution families.

    Returns
    -------
    ParametricFamilyRegister
        The global registry of parametric families.
    """
    configure_pareto_family()
    configure_pareto_type_2_family()
    configure_bernoulli_family()
    configure_bernoulli_logit_glm_family()
    configure_gaussian_process_family()
    return ParametricFamilyRegister()


def reset_families_register() -> None:
    """
    Reset the cached families registry.
    """
    configure_families_register.cache_clear()
    ParametricFamilyRegister._reset()
