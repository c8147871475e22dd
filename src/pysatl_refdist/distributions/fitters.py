"""
Conversion Fitters
==================

Fitters turn one resolvable characteristic of a distribution into another.
Each returns a :class:`FittedComputationMethod` and is wrapped into a
:class:`ComputationMethod` edge by the registry configuration.

Numerical (scalar) conversions:

- continuous 1D: ``pdf <-> cdf``, ``cdf <-> ppf``;
- discrete 1D on an explicit support: ``pmf <-> cdf``, ``cdf <-> ppf``.

Elementwise conversions (keep the input shape):

- ``cdf <-> sf``, ``cdf <-> log_cdf``, ``sf <-> log_ccdf``;
- ``pdf <-> log_pdf``, ``pmf <-> log_pmf`` (any dimension).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable
from math import isfinite
from typing import TYPE_CHECKING, Any, cast

import numpy as np
from mypy_extensions import KwArg
from scipy import (
    integrate as _sp_integrate,
    optimize as _sp_optimize,
)

from pysatl_refdist.distributions.computation import FittedComputationMethod
from pysatl_refdist.distributions.support import DiscreteSupport
from pysatl_refdist.types import CharacteristicName

if TYPE_CHECKING:
    from pysatl_refdist.distributions.distribution import Distribution
    from pysatl_refdist.distributions.strategies import Method
    from pysatl_refdist.types import GenericCharacteristicName, ScalarFunc


def _resolve(distribution: Distribution, name: GenericCharacteristicName) -> ScalarFunc:
    """
    Resolve a scalar characteristic from the distribution.

    Raises
    ------
    RuntimeError
        If the distribution does not provide a computation strategy.
    """
    fn = _resolve_method(distribution, name)

    def _wrap(x: float, **kwargs: Any) -> float:
        return float(fn(x, **kwargs))

    return _wrap


def _resolve_method(distribution: Distribution, name: GenericCharacteristicName) -> Method[Any, Any]:
    """Resolve a characteristic without forcing scalar output."""
    try:
        return distribution.query_method(name)
    except AttributeError as e:
        raise RuntimeError(
            "Distribution must provide computation_strategy.query_method(name, distribution)."
        ) from e


def _ppf_brentq_from_cdf(
    cdf: ScalarFunc,
    *,
    most_left: bool = False,
    x0: float = 0.0,
    init_step: float = 1.0,
    expand_factor: float = 2.0,
    max_expand: int = 60,
    x_tol: float = 1e-12,
    y_tol: float = 0.0,
    max_iter: int = 200,
) -> ScalarFunc:
    """
    Build a scalar ``ppf`` from a scalar ``cdf`` using bracket expansion
    and bisection.

    Parameters
    ----------
    cdf : Callable[[float], float]
        Monotone CDF.
    most_left : bool, default False
        If ``True``, return the leftmost quantile on flat CDF plateaus.
    x0 : float, default 0.0
        Initial bracket center.
    init_step : float, default 1.0
        Initial half-width for the bracket.
    expand_factor : float, default 2.0
        Multiplicative factor for bracket growth.
    max_expand : int, default 60
        Maximum expansions while searching for a valid bracket.
    x_tol : float, default 1e-12
        Relative tolerance in ``x`` for stopping.
    y_tol : float, default 0.0
        Optional tolerance in CDF values to stop early on flat brackets.
    max_iter : int, default 200
        Maximum bisection iterations.

    Returns
    -------
    Callable[[float], float]
        Scalar ``ppf`` such that ``cdf(ppf(q)) ≈ q``; ``q <= 0`` maps to
        ``-inf`` and ``q >= 1`` maps to ``+inf``.
    """

    def covers(q: float, FL: float, FR: float) -> bool:
        if most_left:
            return (q > FL) and (q <= FR)
        return (q >= FL) and (q < FR)

    def _expand_bracket(q: float) -> tuple[float, float, float, float]:
        step = init_step
        L = x0 - step
        R = x0 + step
        FL = float(cdf(L))
        FR = float(cdf(R))

        for _ in range(max_expand):
            if covers(q, FL, FR):
                break
            grow_left = not ((q > FL) if most_left else (q >= FL))
            grow_right = not ((q <= FR) if most_left else (q < FR))

            if grow_left:
                step *= expand_factor
                L -= step
                FL = float(cdf(L))
            if grow_right:
                step *= expand_factor
                R += step
                FR = float(cdf(R))

        return L, R, FL, FR

    def _ppf(q: float, **kwargs: Any) -> float:
        if q <= 0.0:
            return float("-inf")
        if q >= 1.0:
            return float("inf")

        L, R, FL, FR = _expand_bracket(q)

        it = 0
        while it < max_iter and x_tol * (1.0 + max(abs(L), abs(R))) < (R - L):
            M = 0.5 * (L + R)
            FM = float(cdf(M))

            go_left = (q <= FM) if most_left else (q < FM)
            if go_left:
                R, FR = M, FM
            else:
                L, FL = M, FM

            if y_tol > 0.0 and abs(FR - FL) <= y_tol:
                break
            it += 1

        return R if most_left else L

    return _ppf


def _num_derivative(f: ScalarFunc, x: float, h: float = 1e-5) -> float:
    """5-point central numerical derivative used for ``cdf -> pdf``."""
    if not isfinite(x):
        return float("nan")
    f1 = float(f(x + h))
    f_1 = float(f(x - h))
    f2 = float(f(x + 2 * h))
    f_2 = float(f(x - 2 * h))
    return float((-f2 + 8 * f1 - 8 * f_1 + f_2) / (12.0 * h))


def _fitted(
    target: GenericCharacteristicName,
    source: GenericCharacteristicName,
    func: Callable[..., Any],
) -> FittedComputationMethod[Any, Any]:
    return FittedComputationMethod[Any, Any](
        target=target,
        sources=[source],
        func=cast(Callable[[Any, KwArg(Any)], Any], func),
    )


# --- Continuous (1D): pdf <-> cdf <-> ppf -------------------------------------


def fit_pdf_to_cdf_1C(
    distribution: Distribution, /, **kwargs: Any
) -> FittedComputationMethod[float, float]:
    """
    Fit ``cdf`` from a resolvable ``pdf`` via numerical integration.

    Integration starts at the left end of the support when the distribution
    exposes a bounded-below :class:`ContinuousSupport`, otherwise at ``-inf``.
    """
    pdf_func = _resolve(distribution, CharacteristicName.PDF)
    support = distribution.support
    lower = float(getattr(support, "left", float("-inf")))

    def _cdf(x: float, **options: Any) -> float:
        if x <= lower:
            return 0.0
        val, _ = _sp_integrate.quad(lambda t: float(pdf_func(t, **options)), lower, x, limit=200)
        return float(np.clip(val, 0.0, 1.0))

    return _fitted(CharacteristicName.CDF, CharacteristicName.PDF, _cdf)


def fit_cdf_to_pdf_1C(
    distribution: Distribution, /, **kwargs: Any
) -> FittedComputationMethod[float, float]:
    """Fit ``pdf`` as a clipped numerical derivative of ``cdf``."""
    cdf_func = _resolve(distribution, CharacteristicName.CDF)

    def _pdf(x: float, **options: Any) -> float:
        def wrapped_cdf(t: float) -> float:
            return cdf_func(t, **options)

        return float(max(_num_derivative(wrapped_cdf, x, h=1e-5), 0.0))

    return _fitted(CharacteristicName.PDF, CharacteristicName.CDF, _pdf)


def fit_cdf_to_ppf_1C(
    distribution: Distribution, /, **options: Any
) -> FittedComputationMethod[float, float]:
    """
    Fit ``ppf`` from a resolvable ``cdf`` using a bracketing procedure.

    Bracketing options (``most_left``, ``x0``, ``x_tol``...) are taken from
    ``options``; see :func:`_ppf_brentq_from_cdf`.
    """
    cdf_func = _resolve(distribution, CharacteristicName.CDF)
    bracket_keys = (
        "most_left",
        "x0",
        "init_step",
        "expand_factor",
        "max_expand",
        "x_tol",
        "y_tol",
        "max_iter",
    )
    bracket_options = {k: v for k, v in options.items() if k in bracket_keys}
    ppf_func = _ppf_brentq_from_cdf(cdf_func, **bracket_options)

    def _ppf(q: float, **kwargs: Any) -> float:
        return ppf_func(q)

    return _fitted(CharacteristicName.PPF, CharacteristicName.CDF, _ppf)


def fit_ppf_to_cdf_1C(
    distribution: Distribution, /, **_: Any
) -> FittedComputationMethod[float, float]:
    """Fit ``cdf`` by numerically inverting a resolvable ``ppf`` with Brent's method."""
    ppf_func = _resolve(distribution, CharacteristicName.PPF)

    def _cdf(x: float, **options: Any) -> float:
        if not isfinite(x):
            return 0.0 if x == float("-inf") else 1.0

        def f(q: float) -> float:
            return float(ppf_func(q, **options) - x)

        lo, hi = 1e-12, 1.0 - 1e-12
        if f(lo) > 0.0:
            return 0.0
        if f(hi) < 0.0:
            return 1.0
        q = float(_sp_optimize.brentq(f, lo, hi, maxiter=256))
        return float(np.clip(q, 0.0, 1.0))

    return _fitted(CharacteristicName.CDF, CharacteristicName.PPF, _cdf)


# --- Discrete (1D): pmf <-> cdf <-> ppf ---------------------------------------


def _discrete_support(distribution: Distribution, conversion: str) -> DiscreteSupport:
    support = distribution.support
    if support is None or not isinstance(support, DiscreteSupport):
        raise RuntimeError(f"Discrete support is required for {conversion}.")
    return support


def fit_pmf_to_cdf_1D(
    distribution: Distribution, /, **_: Any
) -> FittedComputationMethod[float, float]:
    """Build ``cdf`` from ``pmf`` by summation over support points ``k <= x``."""
    support = _discrete_support(distribution, "pmf->cdf")
    pmf_func = _resolve(distribution, CharacteristicName.PMF)

    def _cdf(x: float, **kwargs: Any) -> float:
        s = 0.0
        for k in support.iter_leq(x):
            s += float(pmf_func(float(k), **kwargs))
        return float(np.clip(s, 0.0, 1.0))

    return _fitted(CharacteristicName.CDF, CharacteristicName.PMF, _cdf)


def fit_cdf_to_pmf_1D(
    distribution: Distribution, /, **_: Any
) -> FittedComputationMethod[float, float]:
    """
    Extract ``pmf`` from ``cdf`` as jump sizes on the support.

    Notes
    -----
    ``pmf(x) = cdf(x) - cdf(prev(x))`` for support points, where ``prev(x)``
    is the predecessor on the support (``cdf(prev) := 0`` without one).
    Points outside the support have zero mass.
    """
    support = _discrete_support(distribution, "cdf->pmf")
    cdf_func = _resolve(distribution, CharacteristicName.CDF)

    def _pmf(x: float, **kwargs: Any) -> float:
        if not support.contains(x):
            return 0.0
        p = support.prev(x)
        left = 0.0 if p is None else float(cdf_func(float(p), **kwargs))
        right = float(cdf_func(x, **kwargs))
        return float(np.clip(right - left, 0.0, 1.0))

    return _fitted(CharacteristicName.PMF, CharacteristicName.CDF, _pmf)


def _collect_support_values(support: DiscreteSupport) -> np.ndarray:
    """Sorted float array of all points of a finite discrete support."""
    return np.asarray(sorted(float(v) for v in support.iter_points()), dtype=float)


def fit_cdf_to_ppf_1D(
    distribution: Distribution, /, **options: Any
) -> FittedComputationMethod[float, float]:
    """
    Fit a discrete step quantile from ``cdf`` and a finite support.

    For ``q`` in ``(0, 1)`` returns the leftmost support point ``x`` with
    ``cdf(x) >= q``; ``q <= 0`` maps to the first and ``q >= 1`` to the last
    support point.
    """
    support = _discrete_support(distribution, "cdf->ppf")
    cdf_func = _resolve(distribution, CharacteristicName.CDF)

    xs = _collect_support_values(support)
    # Monotone envelope guards against floating point noise in cdf.
    cdf_vals = np.asarray([cdf_func(float(x)) for x in xs], dtype=float)
    cdf_vals = np.clip(np.maximum.accumulate(cdf_vals), 0.0, 1.0)

    def _ppf(q: float, **kwargs: Any) -> float:
        if not isfinite(q):
            return float("nan")
        if q <= 0.0:
            return float(xs[0])
        if q >= 1.0:
            return float(xs[-1])
        idx = min(int(np.searchsorted(cdf_vals, q, side="left")), xs.size - 1)
        return float(xs[idx])

    return _fitted(CharacteristicName.PPF, CharacteristicName.CDF, _ppf)


def fit_ppf_to_cdf_1D(
    distribution: Distribution, /, **options: Any
) -> FittedComputationMethod[float, float]:
    """
    Fit a discrete ``cdf`` from ``ppf`` via bisection on ``q``.

    ``cdf(x) = sup { q : ppf(q) <= x }``. Options ``q_tol`` (default 1e-12)
    and ``max_iter`` (default 100) tune the search.
    """
    ppf_func = _resolve(distribution, CharacteristicName.PPF)
    q_tol = float(options.get("q_tol", 1e-12))
    max_iter = int(options.get("max_iter", 100))

    p0 = ppf_func(0.0)
    p1 = ppf_func(1.0 - 1e-15)

    def _cdf(x: float, **kwargs: Any) -> float:
        if not isfinite(x):
            return 0.0 if x == float("-inf") else 1.0
        if x < p0:
            return 0.0
        if x >= p1:
            return 1.0

        lo, hi = 0.0, 1.0
        it = 0
        while hi - lo > q_tol and it < max_iter:
            it += 1
            mid = 0.5 * (lo + hi)
            if ppf_func(mid, **kwargs) <= x:
                lo = mid
            else:
                hi = mid
        return float(np.clip(lo, 0.0, 1.0))

    return _fitted(CharacteristicName.CDF, CharacteristicName.PPF, _cdf)


# --- Elementwise conversions ---------------------------------------------------


def _elementwise_fitter(
    source: GenericCharacteristicName,
    target: GenericCharacteristicName,
    transform: Callable[[Any], Any],
) -> Callable[..., FittedComputationMethod[Any, Any]]:
    """Build a fitter applying ``transform`` to the resolved ``source`` values."""

    def fitter(distribution: Distribution, /, **_: Any) -> FittedComputationMethod[Any, Any]:
        source_func = _resolve_method(distribution, source)

        def _apply(x: Any, **kwargs: Any) -> Any:
            with np.errstate(divide="ignore"):
                result = transform(np.asarray(source_func(x, **kwargs), dtype=float))
            return float(result) if np.ndim(result) == 0 else result

        return _fitted(target, source, _apply)

    fitter.__name__ = f"fit_{source}_to_{target}"
    fitter.__doc__ = f"Fit ``{target}`` elementwise from a resolvable ``{source}``."
    return fitter


def _one_minus(values: Any) -> Any:
    return 1.0 - values


fit_pdf_to_log_pdf = _elementwise_fitter(
    CharacteristicName.PDF, CharacteristicName.LOG_PDF, np.log
)
fit_log_pdf_to_pdf = _elementwise_fitter(
    CharacteristicName.LOG_PDF, CharacteristicName.PDF, np.exp
)
fit_pmf_to_log_pmf = _elementwise_fitter(
    CharacteristicName.PMF, CharacteristicName.LOG_PMF, np.log
)
fit_log_pmf_to_pmf = _elementwise_fitter(
    CharacteristicName.LOG_PMF, CharacteristicName.PMF, np.exp
)
fit_cdf_to_log_cdf = _elementwise_fitter(
    CharacteristicName.CDF, CharacteristicName.LOG_CDF, np.log
)
fit_log_cdf_to_cdf = _elementwise_fitter(
    CharacteristicName.LOG_CDF, CharacteristicName.CDF, np.exp
)
fit_sf_to_log_ccdf = _elementwise_fitter(
    CharacteristicName.SF, CharacteristicName.LOG_CCDF, np.log
)
fit_log_ccdf_to_sf = _elementwise_fitter(
    CharacteristicName.LOG_CCDF, CharacteristicName.SF, np.exp
)
fit_cdf_to_sf = _elementwise_fitter(CharacteristicName.CDF, CharacteristicName.SF, _one_minus)
fit_sf_to_cdf = _elementwise_fitter(CharacteristicName.SF, CharacteristicName.CDF, _one_minus)
