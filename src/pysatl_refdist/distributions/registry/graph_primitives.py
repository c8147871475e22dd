"""
Edge metadata and graph error definitions.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pysatl_refdist.distributions.registry.constraint import GraphPrimitiveConstraint

if TYPE_CHECKING:
    from typing import Any

    from pysatl_refdist.distributions.computation import ComputationMethod

DEFAULT_COMPUTATION_KEY: str = "PySATL_default_computation"
"""Label of computation edges registered without an explicit label."""


@dataclass(frozen=True, slots=True)
class EdgeMeta:
    """
    A computation edge of the characteristic graph.

    Parameters
    ----------
    method : ComputationMethod
        Conversion method carried by the edge.
    constraint : GraphPrimitiveConstraint
        Decides for which distributions the edge exists.
    """

    method: ComputationMethod[Any, Any]
    constraint: GraphPrimitiveConstraint = field(default_factory=GraphPrimitiveConstraint)


class GraphInvariantError(RuntimeError):
    """
    Raised when a per-distribution view of the graph violates its invariants
    (definitive subgraph not strongly connected, unreachable or escaping
    indefinitive characteristics).
    """
