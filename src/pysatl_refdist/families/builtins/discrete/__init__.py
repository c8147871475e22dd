"""
Built-in discrete distribution families.

This module contains implementations of discrete parametric families.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_refdist.families.builtins.discrete.bernoulli import configure_bernoulli_family
from pysatl_refdist.families.builtins.discrete.bernoulli_logit_glm import (
    IndependentBernoulliSamplingStrategy,
    configure_bernoulli_logit_glm_family,
)

__all__ = [
    "configure_bernoulli_family",
    "configure_bernoulli_logit_glm_family",
    "IndependentBernoulliSamplingStrategy",
]
