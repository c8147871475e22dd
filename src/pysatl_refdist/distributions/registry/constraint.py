"""
Applicability constraints for the characteristic graph.

A constraint decides whether a node or an edge of the graph applies to a
given distribution, judging by distribution-type features (``kind``,
``dimension``) and by instance attributes (``support``).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Any

    from pysatl_refdist.distributions.distribution import Distribution


class Constraint(Protocol):
    """Protocol for value-level constraints."""

    def allows(self, value: Any) -> bool:
        """Check if the constraint allows the given value."""
        ...


@dataclass(frozen=True, slots=True)
class NonNullConstraint:
    """Constraint that rejects None values."""

    def allows(self, value: Any) -> bool:
        return value is not None


@dataclass(frozen=True, slots=True)
class SetConstraint:
    """
    Membership in a finite set.

    Parameters
    ----------
    allowed : frozenset[Any] | None
        The set of allowed values. If None, all values are allowed.
    """

    allowed: frozenset[Any] | None = None

    def allows(self, value: Any) -> bool:
        return True if self.allowed is None else (value in self.allowed)


@dataclass(frozen=True, slots=True)
class NumericConstraint:
    """
    Integer value with optional allowed set and inclusive bounds.

    Parameters
    ----------
    allowed : frozenset[int] | None
        Specific allowed integer values.
    ge : int | None
        Minimum allowed value (inclusive).
    le : int | None
        Maximum allowed value (inclusive).

    Notes
    -----
    All conditions are combined with AND. ``allowed=frozenset({1})`` restricts
    to univariate distributions; ``ge=1`` admits any dimension.
    """

    allowed: frozenset[int] | None = None
    ge: int | None = None
    le: int | None = None

    def allows(self, value: Any) -> bool:
        try:
            v = int(value)
        except (TypeError, ValueError):
            return False
        if self.allowed is not None and v not in self.allowed:
            return False
        if self.ge is not None and v < self.ge:
            return False
        return not (self.le is not None and v > self.le)


@dataclass(frozen=True, slots=True)
class GraphPrimitiveConstraint:
    """
    Constraint on distribution features at type and instance levels.

    Parameters
    ----------
    distribution_type_feature_constraints : Mapping[str, Constraint]
        Constraints on ``distr.distribution_type.registry_features``
        (e.g., kind, dimension).
    distribution_instance_feature_constraints : Mapping[str, Constraint]
        Constraints on attributes of the distribution itself (e.g., support).

    Notes
    -----
    An empty constraint allows every distribution.
    """

    distribution_type_feature_constraints: Mapping[str, Constraint] = field(
        default_factory=lambda: MappingProxyType({})
    )

    distribution_instance_feature_constraints: Mapping[str, Constraint] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        """Freeze provided mappings into read-only proxies."""
        for name in (
            "distribution_type_feature_constraints",
            "distribution_instance_feature_constraints",
        ):
            value = getattr(self, name)
            if not isinstance(value, MappingProxyType):
                object.__setattr__(self, name, MappingProxyType(dict(value)))

    def allows(self, distr: Distribution) -> bool:
        """Check if the distribution satisfies all constraints."""
        features = distr.distribution_type.registry_features

        for name, cons in self.distribution_type_feature_constraints.items():
            if not cons.allows(features.get(name, None)):
                return False

        for name, cons in self.distribution_instance_feature_constraints.items():
            if not cons.allows(getattr(distr, name, None)):
                return False

        return True
