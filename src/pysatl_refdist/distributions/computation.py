"""
Computation Primitives
======================

Building blocks used to evaluate distribution characteristics:

- :class:`AnalyticalComputation` - closed-form callable provided by a family
  (e.g. the Pareto ``log_pdf``).
- :class:`FittedComputationMethod` - a conversion already bound to a
  distribution (e.g. ``exp`` of a resolved ``log_pmf``).
- :class:`ComputationMethod` - a factory that *fits* a conversion for a given
  distribution; these are the edges of the characteristic graph.

Notes
-----
- Analytical callables of the built-in families are vectorized over NumPy
  arrays. Fitted numerical conversions (quadrature, root finding) are scalar;
  the elementwise ``log``/``exp`` conversions keep whatever shape they get.
- ``**options`` are free-form: tolerances, ``most_left`` and similar flags.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from mypy_extensions import KwArg

from pysatl_refdist.types import GenericCharacteristicName

if TYPE_CHECKING:
    from pysatl_refdist.distributions.distribution import Distribution


@dataclass(frozen=True, slots=True)
class AnalyticalComputation[In, Out]:
    """Analytical computation provided directly by the distribution.

    Parameters
    ----------
    target : str
        Characteristic name (e.g., ``"log_pdf"``).
    func : Callable[[In, KwArg(Any)], Out]
        Analytical callable.
    """

    target: GenericCharacteristicName
    func: Callable[[In, KwArg(Any)], Out]

    def __call__(self, data: In, **options: Any) -> Out:
        """Evaluate the analytical function."""
        return self.func(data, **options)


@dataclass(frozen=True, slots=True)
class FittedComputationMethod[In, Out]:
    """Fitted conversion method (ready-to-use).

    Parameters
    ----------
    target : str
        Destination characteristic name.
    sources : Sequence[str]
        Source characteristic names (unary conversions use length 1).
    func : Callable[[In, KwArg(Any)], Out]
        Callable implementing the fitted conversion.
    """

    target: GenericCharacteristicName
    sources: Sequence[GenericCharacteristicName]
    func: Callable[[In, KwArg(Any)], Out]

    def __call__(self, data: In, **options: Any) -> Out:
        """Evaluate the fitted conversion."""
        return self.func(data, **options)


@dataclass(frozen=True, slots=True)
class ComputationMethod[In, Out]:
    """Conversion method factory (to be fitted).

    Parameters
    ----------
    target : str
        Destination characteristic name.
    sources : Sequence[str]
        Source characteristic names (unary for current graph edges).
    fitter : Callable[[Distribution, KwArg(Any)], FittedComputationMethod]
        Fitter that prepares a callable conversion for the given distribution.
    """

    target: GenericCharacteristicName
    sources: Sequence[GenericCharacteristicName]
    fitter: Callable[["Distribution", KwArg(Any)], FittedComputationMethod[In, Out]]

    def fit(self, distribution: "Distribution", **options: Any) -> FittedComputationMethod[In, Out]:
        """Fit and return a :class:`FittedComputationMethod`."""
        return self.fitter(distribution, **options)
