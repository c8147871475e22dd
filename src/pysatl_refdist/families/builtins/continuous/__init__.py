"""
Built-in continuous distribution families.

This module contains implementations of continuous parametric families.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_refdist.families.builtins.continuous.pareto import configure_pareto_family
from pysatl_refdist.families.builtins.continuous.pareto_type_2 import (
    configure_pareto_type_2_family,
)

__all__ = [
    "configure_pareto_family",
    "configure_pareto_type_2_family",
]
