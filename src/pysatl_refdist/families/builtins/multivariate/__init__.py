"""
Built-in multivariate distribution families.

This module contains families whose outcome is a vector.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_refdist.families.builtins.multivariate.gaussian_process import (
    CholeskySamplingStrategy,
    configure_gaussian_process_family,
)

__all__ = [
    "configure_gaussian_process_family",
    "CholeskySamplingStrategy",
]
