"""
PySATL RefDist
==============

Reference implementations of Pareto, Pareto Type 2, Bernoulli,
Bernoulli-Logit and Bernoulli-Logit GLM distributions and of Gaussian
process models, built on a framework of parametric families and
characteristic computation graphs.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from importlib.metadata import version

from . import functions, gaussian_process
from .distributions import *
from .distributions import __all__ as _distr_all
from .families import *
from .families import __all__ as _family_all
from .types import *
from .types import __all__ as _types_all

__version__ = version("pysatl-refdist")
__all__ = [
    "__version__",
    "functions",
    "gaussian_process",
    *_distr_all,
    *_family_all,
    *_types_all,
]

del _distr_all
del _family_all
del _types_all
