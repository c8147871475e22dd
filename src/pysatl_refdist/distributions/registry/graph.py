"""
Characteristic Graph (global) + View (per distribution)
=======================================================

A single global directed graph over characteristic names (``pdf``,
``log_cdf`` ...) and the filtered **view** a concrete distribution sees.

Nodes carry two rules, both expressed as :class:`GraphPrimitiveConstraint`:

(A) presence - whether the node exists for a distribution at all
    (``log_cdf`` only exists for univariate distributions);
(B) definitiveness - whether the node can ground every other one.

Edges are unary conversions, each guarded by its own constraint. Several
edges may connect the same pair under different labels.

Invariants (per view)
---------------------
1. The subgraph induced by definitive characteristics is strongly connected.
2. Every non-definitive characteristic is reachable from a definitive one.
3. No path leads from a non-definitive characteristic back to a definitive one.

The registry is a singleton; invariants are validated when a view is built,
never while the registry is being configured.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import warnings
from collections import deque
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar, Self

from pysatl_refdist.distributions.registry.constraint import GraphPrimitiveConstraint
from pysatl_refdist.distributions.registry.graph_primitives import (
    DEFAULT_COMPUTATION_KEY,
    EdgeMeta,
    GraphInvariantError,
)

if TYPE_CHECKING:
    from pysatl_refdist.distributions.computation import ComputationMethod
    from pysatl_refdist.distributions.distribution import Distribution
    from pysatl_refdist.types import GenericCharacteristicName

    type Adjacency = dict[
        GenericCharacteristicName, dict[GenericCharacteristicName, dict[str, EdgeMeta]]
    ]


class CharacteristicRegistry:
    """
    Global characteristic graph with constraint-guarded nodes and edges.

    Public API
    ----------
    add_characteristic(name, is_definitive, presence_constraint=None, definitive_constraint=None)
        Declare a node.
    add_computation(method, *, label=DEFAULT_COMPUTATION_KEY, constraint=None)
        Add a unary conversion edge between declared nodes.
    view(distr)
        Filtered, validated view for one distribution.
    """

    _instance: ClassVar[Self | None] = None

    def __new__(cls) -> Self:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if getattr(self, "_initialized", False):
            return
        # src -> dst -> label -> candidate edges (first applicable wins)
        self._adj: dict[
            GenericCharacteristicName,
            dict[GenericCharacteristicName, dict[str, list[EdgeMeta]]],
        ] = {}
        self._presence_rules: dict[GenericCharacteristicName, GraphPrimitiveConstraint] = {}
        self._def_rules: dict[GenericCharacteristicName, GraphPrimitiveConstraint] = {}
        self._initialized = True

    def __copy__(self) -> Self:
        return self

    def __deepcopy__(self, memo: dict[Any, Any]) -> Self:
        return self

    def __reduce__(self) -> tuple[type[Self], tuple[()]]:
        return self.__class__, ()

    @classmethod
    def _reset(cls) -> None:
        """Drop the singleton (test helper)."""
        cls._instance = None

    @property
    def characteristics(self) -> set[GenericCharacteristicName]:
        """All declared characteristic names."""
        return set(self._presence_rules)

    def add_characteristic(
        self,
        name: GenericCharacteristicName,
        is_definitive: bool,
        *,
        presence_constraint: GraphPrimitiveConstraint | None = None,
        definitive_constraint: GraphPrimitiveConstraint | None = None,
    ) -> None:
        """
        Declare a characteristic node.

        Parameters
        ----------
        name
            Characteristic name.
        is_definitive
            Whether to attach a definitiveness rule.
        presence_constraint
            When the node exists; ``None`` means always.
        definitive_constraint
            When the node is definitive; ``None`` means whenever present.

        Notes
        -----
        Re-declaring a node keeps the first rules and warns. A definitive
        constraint passed together with ``is_definitive=False`` is ignored
        with a warning.
        """
        if name in self._presence_rules:
            warnings.warn(
                f"Node {name} have been already added. Constraint will not be taken into account",
                UserWarning,
                stacklevel=2,
            )
            return

        self._adj.setdefault(name, {})
        self._presence_rules[name] = presence_constraint or GraphPrimitiveConstraint()

        if is_definitive:
            self._def_rules[name] = definitive_constraint or GraphPrimitiveConstraint()
        elif definitive_constraint is not None:
            warnings.warn(
                f"Node {name} have been added as indefinitive but definitive constraint is "
                f"provided. Constraint will not be taken into account",
                UserWarning,
                stacklevel=2,
            )

    def add_computation(
        self,
        method: ComputationMethod[Any, Any],
        *,
        label: str = DEFAULT_COMPUTATION_KEY,
        constraint: GraphPrimitiveConstraint | None = None,
    ) -> None:
        """
        Add a labeled unary conversion edge.

        Raises
        ------
        ValueError
            If the method is not unary or an endpoint is undeclared.
        """
        if len(method.sources) != 1:
            raise ValueError("Only unary computations are supported (1 source -> 1 target).")

        src = method.sources[0]
        dst = method.target
        if src not in self._presence_rules or dst not in self._presence_rules:
            raise ValueError("Source characteristic or destination characteristic is invalid.")

        candidates = self._adj[src].setdefault(dst, {}).setdefault(label, [])
        candidates.append(EdgeMeta(method=method, constraint=constraint or GraphPrimitiveConstraint()))

    def view(self, distr: Distribution) -> RegistryView:
        """
        Build the validated view of the graph for ``distr``.

        Raises
        ------
        GraphInvariantError
            If the filtered graph violates an invariant.
        """
        present = {n for n, rule in self._presence_rules.items() if rule.allows(distr)}
        definitive = {n for n, rule in self._def_rules.items() if rule.allows(distr)} & present

        adj: Adjacency = {n: {} for n in present}
        for src, by_dst in self._adj.items():
            if src not in present:
                continue
            for dst, by_label in by_dst.items():
                if dst not in present:
                    continue
                kept: dict[str, EdgeMeta] = {}
                for label, candidates in by_label.items():
                    edge = next((e for e in candidates if e.constraint.allows(distr)), None)
                    if edge is not None:
                        kept[label] = edge
                if kept:
                    adj[src][dst] = kept

        return RegistryView(adj, definitive, present)


class RegistryView:
    """
    Filtered graph for a single distribution.

    Parameters
    ----------
    adj : Mapping[src, Mapping[dst, Mapping[label, EdgeMeta]]]
        Edges with label variants.
    definitive_nodes : set of GenericCharacteristicName
        Definitive characteristics.
    present_nodes : set of GenericCharacteristicName
        All characteristics present in the view.
    """

    def __init__(
        self,
        adj: Mapping[
            GenericCharacteristicName,
            Mapping[GenericCharacteristicName, Mapping[str, EdgeMeta]],
        ],
        definitive_nodes: set[GenericCharacteristicName],
        present_nodes: set[GenericCharacteristicName],
    ) -> None:
        self._adj: Adjacency = {
            s: {t: dict(variants) for t, variants in d.items()} for s, d in adj.items()
        }
        self.definitive_characteristics: set[GenericCharacteristicName] = set(definitive_nodes)
        self.all_characteristics: set[GenericCharacteristicName] = set(present_nodes)
        self._validate_invariants()

    @property
    def indefinitive_characteristics(self) -> set[GenericCharacteristicName]:
        return self.all_characteristics - self.definitive_characteristics

    def successors_nodes(self, v: GenericCharacteristicName) -> set[GenericCharacteristicName]:
        return set(self._adj.get(v, {}))

    def predecessors(self, v: GenericCharacteristicName) -> set[GenericCharacteristicName]:
        return {s for s, d in self._adj.items() if d.get(v)}

    def variants(
        self, src: GenericCharacteristicName, dst: GenericCharacteristicName
    ) -> Mapping[str, EdgeMeta]:
        """Label -> edge mapping for the pair ``(src, dst)``."""
        return self._adj.get(src, {}).get(dst, {})

    def find_path(
        self,
        src: GenericCharacteristicName,
        dst: GenericCharacteristicName,
        *,
        prefer_label: str | None = None,
    ) -> list[ComputationMethod[Any, Any]] | None:
        """
        Shortest conversion chain ``src -> ... -> dst`` (BFS).

        Per hop the method is taken from ``prefer_label`` if present, else
        from :data:`DEFAULT_COMPUTATION_KEY`, else from the smallest label.

        Returns
        -------
        list of ComputationMethod or None
            Methods in application order; ``[]`` if ``src == dst``; ``None``
            if ``dst`` is unreachable.
        """
        if src == dst:
            return []

        parent: dict[GenericCharacteristicName, tuple[GenericCharacteristicName, Any]] = {}
        visited = {src}
        queue = deque([src])

        while queue:
            v = queue.popleft()
            for w, by_label in self._adj.get(v, {}).items():
                if w in visited or not by_label:
                    continue
                visited.add(w)
                parent[w] = (v, self._pick_method(by_label, prefer_label))
                if w == dst:
                    path: list[ComputationMethod[Any, Any]] = []
                    cur = dst
                    while cur != src:
                        prev, method = parent[cur]
                        path.append(method)
                        cur = prev
                    path.reverse()
                    return path
                queue.append(w)
        return None

    def _validate_invariants(self) -> None:
        if not self._definitive_strongly_connected():
            raise GraphInvariantError("Definitive subgraph must be strongly connected.")
        if not self._all_indefinitives_reachable_from_definitives():
            raise GraphInvariantError(
                "Every indefinitive characteristic must be reachable from some definitive."
            )
        defs = self.definitive_characteristics
        if any(self._reachable_from(i) & defs for i in self.indefinitive_characteristics):
            raise GraphInvariantError(
                "No path from any indefinitive characteristic back to a definitive is allowed."
            )

    def _definitive_strongly_connected(self) -> bool:
        defs = self.definitive_characteristics
        if len(defs) <= 1:
            return True
        start = next(iter(defs))
        if self._reachable_from(start, allowed=defs) != defs - {start}:
            return False

        seen = {start}
        stack = [start]
        while stack:
            v = stack.pop()
            for w in self.predecessors(v) & defs:
                if w not in seen:
                    seen.add(w)
                    stack.append(w)
        return seen == defs

    def _all_indefinitives_reachable_from_definitives(self) -> bool:
        indefs = self.indefinitive_characteristics
        if not indefs:
            return True
        reachable: set[GenericCharacteristicName] = set()
        for d in self.definitive_characteristics:
            reachable |= self._reachable_from(d)
        return indefs <= reachable

    def _reachable_from(
        self,
        src: GenericCharacteristicName,
        *,
        allowed: set[GenericCharacteristicName] | None = None,
    ) -> set[GenericCharacteristicName]:
        """Nodes reachable from ``src`` (``src`` itself excluded)."""
        visited: set[GenericCharacteristicName] = set()
        stack = [src]
        while stack:
            v = stack.pop()
            if v in visited:
                continue
            visited.add(v)
            for w in self.successors_nodes(v):
                if (allowed is None or w in allowed) and w not in visited:
                    stack.append(w)
        visited.discard(src)
        return visited

    @staticmethod
    def _pick_method(variants: Mapping[str, EdgeMeta], prefer_label: str | None) -> Any:
        if prefer_label and prefer_label in variants:
            return variants[prefer_label].method
        if DEFAULT_COMPUTATION_KEY in variants:
            return variants[DEFAULT_COMPUTATION_KEY].method
        return variants[min(variants)].method
