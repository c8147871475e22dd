"""
Sampling Interfaces
===================

Protocol and array-backed container for draws produced by sampling
strategies.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Protocol

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Iterator
    from typing import Any

    import numpy.typing as npt


class Sample(Protocol):
    """
    Protocol for sample containers.

    Attributes
    ----------
    array : numpy.ndarray
        Array representation of the samples.
    shape : tuple[int, ...]
        Shape of the sample array.
    """

    def __len__(self) -> int: ...
    @property
    def array(self) -> npt.NDArray[np.floating[Any]]: ...
    @property
    def shape(self) -> tuple[int, ...]: ...


class ArraySample:
    """
    Array-backed sample container.

    Stores draws as a 2D array of shape ``(n_draws, dimension)``. Univariate
    distributions produce ``(n, 1)``; a Bernoulli-logit GLM over ``N``
    observations or a Gaussian process at ``N`` inputs produces ``(n, N)``.

    Parameters
    ----------
    data : numpy.ndarray
        2D array of shape (n, d).

    Raises
    ------
    ValueError
        If data is not 2D.
    """

    dimension: int
    data: npt.NDArray[np.floating[Any]]

    def __init__(self, data: npt.NDArray[np.floating[Any]]) -> None:
        data = np.asarray(data, dtype=np.float64)
        if data.ndim != 2:
            raise ValueError("ArraySample expects 2D array of shape (n, d).")
        self.data = data
        self.dimension = int(data.shape[1])

    def __len__(self) -> int:
        """Return the number of draws (n)."""
        return int(self.data.shape[0])

    def __iter__(self) -> Iterator[npt.NDArray[np.floating[Any]]]:
        """Iterate over draws (rows of the array)."""
        yield from self.data

    @property
    def array(self) -> npt.NDArray[np.floating[Any]]:
        """Return the backing array."""
        return self.data

    @property
    def shape(self) -> tuple[int, ...]:
        """Return the shape of the sample array (n, d)."""
        n, d = self.data.shape
        return int(n), int(d)

    def mean(self) -> npt.NDArray[np.floating[Any]]:
        """Empirical mean of each coordinate."""
        return np.asarray(self.data.mean(axis=0))

    def var(self) -> npt.NDArray[np.floating[Any]]:
        """Unbiased empirical variance of each coordinate."""
        return np.asarray(self.data.var(axis=0, ddof=1))
