"""
Computation and Sampling Strategies
===================================

Pluggable strategy interfaces and default implementations:

- :class:`ComputationStrategy` - resolves characteristic methods.
- :class:`DefaultComputationStrategy` - resolves analyticals, optionally
  caches fitted conversions, and walks the characteristic graph on demand.
- :class:`SamplingStrategy` - draws samples from a distribution.
- :class:`DefaultSamplingUnivariateStrategy` - draws ``(n, 1)`` samples by
  inverse transform through ``ppf``.

Notes
-----
Samplers take the random source from the ``rng`` option (a
:class:`numpy.random.Generator`) or build one from the ``seed`` option.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Any, Protocol

import numpy as np

from pysatl_refdist.distributions.computation import (
    AnalyticalComputation,
    FittedComputationMethod,
)
from pysatl_refdist.types import CharacteristicName, GenericCharacteristicName

from .registry import characteristic_registry
from .sampling import ArraySample, Sample

if TYPE_CHECKING:
    from .distribution import Distribution

type Method[In, Out] = AnalyticalComputation[In, Out] | FittedComputationMethod[In, Out]


def rng_from_options(options: dict[str, Any]) -> np.random.Generator:
    """
    Pop the random source out of sampling options.

    ``rng`` wins over ``seed``; without either a fresh generator is created.
    """
    rng = options.pop("rng", None)
    seed = options.pop("seed", None)
    if rng is not None:
        return rng
    return np.random.default_rng(seed)


class ComputationStrategy[In, Out](Protocol):
    """Protocol for characteristic resolution strategies."""

    enable_caching: bool

    def query_method(
        self, state: GenericCharacteristicName, distr: "Distribution", **options: Any
    ) -> Method[In, Out]: ...


class DefaultComputationStrategy[In, Out]:
    """
    Default characteristic resolver.

    Resolution order
    ----------------
    1. If the distribution provides an analytical implementation, return it.
    2. Else, if caching is enabled and the method is cached, return it.
    3. Else build the graph view for the distribution, find a path from one
       of its analytical characteristics to the target and fit every edge
       along it (fitters may recursively resolve their sources through the
       strategy).

    Parameters
    ----------
    enable_caching : bool, default False
        If ``True``, cache fitted conversions per distribution and target.

    Raises
    ------
    RuntimeError
        If the distribution has no analytical base, no conversion path exists,
        or a cycle is detected during resolution.
    """

    def __init__(self, enable_caching: bool = False) -> None:
        self.enable_caching = enable_caching
        self._cache: dict[
            tuple[int, GenericCharacteristicName], FittedComputationMethod[In, Out]
        ] = {}
        self._resolving: dict[int, set[GenericCharacteristicName]] = {}

    def _push_guard(self, distr: "Distribution", state: GenericCharacteristicName) -> None:
        seen = self._resolving.setdefault(id(distr), set())
        if state in seen:
            raise RuntimeError(
                f"Cycle detected while resolving '{state}'. "
                "Provide at least one analytical base characteristic in the distribution."
            )
        seen.add(state)

    def _pop_guard(self, distr: "Distribution", state: GenericCharacteristicName) -> None:
        seen = self._resolving.get(id(distr))
        if seen is not None:
            seen.discard(state)
            if not seen:
                self._resolving.pop(id(distr), None)

    def query_method(
        self, state: GenericCharacteristicName, distr: "Distribution", **options: Any
    ) -> Method[In, Out]:
        """
        Resolve an analytical or fitted method for ``state``.

        Parameters
        ----------
        state : str
            Target characteristic name to resolve.
        distr : Distribution
            The distribution providing the analytical base and type.
        **options
            Passed to the fitter(s) when conversions are required.

        Returns
        -------
        Method
            Analytical or fitted callable implementing ``state``.
        """
        analytical = distr.analytical_computations
        if state in analytical:
            return analytical[state]

        cache_key = (id(distr), state)
        if self.enable_caching and cache_key in self._cache:
            return self._cache[cache_key]

        if not analytical:
            raise RuntimeError(
                "Distribution provides no analytical computations to ground conversions."
            )

        view = characteristic_registry().view(distr)

        self._push_guard(distr, state)
        try:
            for src in analytical:
                if src not in view.all_characteristics:
                    continue
                path = view.find_path(src, state)
                if not path:
                    continue

                fitted: FittedComputationMethod[In, Out] | None = None
                for edge in path:
                    fitted = edge.fit(distr, **options)
                    if self.enable_caching:
                        self._cache[(id(distr), edge.target)] = fitted

                if fitted is None:
                    raise RuntimeError(f"Empty path when resolving '{state}' from '{src}'.")
                return fitted

            raise RuntimeError(
                f"No conversion path from any analytical characteristic to '{state}'."
            )
        finally:
            self._pop_guard(distr, state)


class SamplingStrategy(Protocol):
    """Protocol for sampling strategies (return a :class:`Sample`)."""

    def sample(self, n: int, distr: "Distribution", **options: Any) -> Sample: ...


class DefaultSamplingUnivariateStrategy(SamplingStrategy):
    """
    Default univariate sampler using inverse transform sampling.

    The strategy resolves the distribution's ``ppf`` and applies it to i.i.d.
    uniforms ``U ~ U(0, 1)``.

    Returns
    -------
    ArraySample
        A 2D sample of shape ``(n, 1)``.
    """

    def sample(self, n: int, distr: "Distribution", **options: Any) -> ArraySample:
        rng = rng_from_options(options)
        ppf = distr.query_method(CharacteristicName.PPF, **options)
        U = rng.random(n)
        vals = np.array([ppf(Ui) for Ui in U], dtype=np.float64).reshape(n, 1)
        return ArraySample(vals)
