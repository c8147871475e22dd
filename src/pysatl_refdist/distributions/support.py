from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, cast, overload, runtime_checkable

import numpy as np

from pysatl_refdist.types import BoolArray, Interval1D, Number, NumericArray

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


@runtime_checkable
class Support(Protocol):
    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...


class ContinuousSupport(Interval1D, Support): ...


@runtime_checkable
class DiscreteSupport(Support, Protocol):
    def iter_points(self) -> Iterator[Number]: ...

    def iter_leq(self, x: Number) -> Iterator[Number]: ...

    def prev(self, x: Number) -> Number | None: ...


class ExplicitTableDiscreteSupport(DiscreteSupport):
    """Finite, sorted, duplicate-free set of support points."""

    __slots__ = ("_points",)

    def __init__(self, points: Iterable[Number], assume_sorted: bool = False) -> None:
        arr = np.array(points)

        if arr.size == 0:
            raise ValueError("Points must be non-empty")

        if not assume_sorted:
            arr.sort()

        unique_mask = np.empty(arr.size, dtype=bool)
        unique_mask[0] = True
        unique_mask[1:] = arr[1:] != arr[:-1]

        self._points = arr[unique_mask]

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        arr = np.asarray(x)
        idx = np.searchsorted(self._points, arr, side="left")

        size = self._points.size
        in_bounds = idx < size

        idx_clipped = np.minimum(idx, size - 1)
        result = in_bounds & (self._points[idx_clipped] == arr)

        if np.ndim(arr) == 0:
            return bool(result)
        return cast(BoolArray, result)

    def __contains__(self, x: object) -> bool:
        return bool(self.contains(cast(Number, x)))

    def iter_points(self) -> Iterator[Number]:
        return iter(self._points)

    def iter_leq(self, x: Number) -> Iterator[Number]:
        return iter(self._points[: np.searchsorted(self._points, x, side="right")])

    def prev(self, x: Number) -> Number | None:
        idx = np.searchsorted(self._points, x, side="left")
        if idx == 0:
            return None
        return cast(Number, self._points[idx - 1])

    def first(self) -> Number:
        return cast(Number, self._points[0])

    def next(self, current: Number) -> Number | None:
        idx = np.searchsorted(self._points, current, side="right")
        if idx == self._points.size:
            return None
        return cast(Number, self._points[idx])

    @property
    def points(self) -> NumericArray:
        return cast(NumericArray, self._points.copy())

    __iter__ = iter_points


@dataclass(frozen=True, slots=True)
class BinaryVectorSupport(Support):
    """
    Support ``{0, 1}^dimension`` of a vector of binary outcomes.

    ``contains`` accepts a single vector of length ``dimension`` (returns a
    bool) or a 2D array of such vectors, one per row (returns a bool array).
    """

    dimension: int

    def __post_init__(self) -> None:
        if self.dimension <= 0:
            raise ValueError("dimension must be a positive integer.")

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        arr = np.asarray(x, dtype=float)
        if arr.shape[-1:] != (self.dimension,):
            if arr.ndim <= 1:
                return False
            return np.zeros(arr.shape[:-1], dtype=bool)

        is_binary = (arr == 0.0) | (arr == 1.0)
        result = np.all(is_binary, axis=-1)

        if arr.ndim == 1:
            return bool(result)
        return cast(BoolArray, result)

    def __contains__(self, x: object) -> bool:
        return bool(self.contains(cast(NumericArray, x)))


__all__ = [
    "Support",
    "ContinuousSupport",
    "DiscreteSupport",
    "ExplicitTableDiscreteSupport",
    "BinaryVectorSupport",
]
