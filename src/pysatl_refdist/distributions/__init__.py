"""
Distributions subpackage

Interfaces and default implementations for probability distributions:

- distribution protocol (:mod:`.distribution`);
- characteristic descriptors (:mod:`.characteristics`);
- numerical and elementwise fitters (:mod:`.fitters`);
- characteristic graph registry (:mod:`.registry`);
- sampling protocol and array-backed samples (:mod:`.sampling`);
- pluggable strategies (:mod:`.strategies`);
- supports (:mod:`.support`).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"
from .characteristics import GenericCharacteristic
from .computation import (
    AnalyticalComputation,
    ComputationMethod,
    FittedComputationMethod,
)
from .distribution import Distribution
from .registry import DEFAULT_COMPUTATION_KEY
from .sampling import ArraySample, Sample
from .strategies import (
    ComputationStrategy,
    DefaultComputationStrategy,
    DefaultSamplingUnivariateStrategy,
    SamplingStrategy,
)
from .support import (
    BinaryVectorSupport,
    ContinuousSupport,
    ExplicitTableDiscreteSupport,
)

__all__ = [
    # computation primitives
    "AnalyticalComputation",
    "ComputationMethod",
    "FittedComputationMethod",
    "GenericCharacteristic",
    # distribution
    "Distribution",
    # sampling
    "Sample",
    "ArraySample",
    # strategies
    "ComputationStrategy",
    "DefaultComputationStrategy",
    "SamplingStrategy",
    "DefaultSamplingUnivariateStrategy",
    # supports
    "ContinuousSupport",
    "ExplicitTableDiscreteSupport",
    "BinaryVectorSupport",
    # registry
    "DEFAULT_COMPUTATION_KEY",
]
