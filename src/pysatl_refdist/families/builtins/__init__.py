"""
Built-in distribution families.

This package contains the parametric families available by default:
continuous Pareto families, discrete Bernoulli families and the
multivariate Gaussian process family.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_refdist.families.builtins.continuous import (
    configure_pareto_family,
    configure_pareto_type_2_family,
)
from pysatl_refdist.families.builtins.discrete import (
    configure_bernoulli_family,
    configure_bernoulli_logit_glm_family,
)
from pysatl_refdist.families.builtins.multivariate import configure_gaussian_process_family

__all__ = [
    "configure_pareto_family",
    "configure_pareto_type_2_family",
    "configure_bernoulli_family",
    "configure_bernoulli_logit_glm_family",
    "configure_gaussian_process_family",
]
