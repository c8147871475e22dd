"""
Characteristic Registry package.

Exports
-------
DEFAULT_COMPUTATION_KEY
Constraint, SetConstraint, NumericConstraint, NonNullConstraint, GraphPrimitiveConstraint
EdgeMeta, GraphInvariantError
CharacteristicRegistry, RegistryView
characteristic_registry, reset_characteristic_registry
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .configuration import (
    characteristic_registry,
    reset_characteristic_registry,
)
from .constraint import (
    Constraint,
    GraphPrimitiveConstraint,
    NonNullConstraint,
    NumericConstraint,
    SetConstraint,
)
from .graph import (
    CharacteristicRegistry,
    RegistryView,
)
from .graph_primitives import (
    DEFAULT_COMPUTATION_KEY,
    EdgeMeta,
    GraphInvariantError,
)

__all__ = [
    # constants & primitives
    "DEFAULT_COMPUTATION_KEY",
    "EdgeMeta",
    "GraphInvariantError",
    # constraints
    "Constraint",
    "SetConstraint",
    "NumericConstraint",
    "NonNullConstraint",
    "GraphPrimitiveConstraint",
    # graph
    "CharacteristicRegistry",
    "RegistryView",
    # accessors
    "characteristic_registry",
    "reset_characteristic_registry",
]
