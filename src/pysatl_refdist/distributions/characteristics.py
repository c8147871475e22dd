"""
Characteristics API
===================

Callable descriptors for distribution characteristics (``log_pdf``,
``log_cdf``, ``log_ccdf`` ...) resolved by the distribution's computation
strategy, plus ready-made descriptors for every standard name.

Notes
-----
- The characteristic name controls *what* to compute.
- ``**options`` control *how* to compute it (numeric parameters for fitters).
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, cast

from pysatl_refdist.distributions.strategies import Method
from pysatl_refdist.types import CharacteristicName, GenericCharacteristicName

if TYPE_CHECKING:
    from pysatl_refdist.distributions.distribution import Distribution


@dataclass(slots=True, frozen=True)
class GenericCharacteristic[In, Out]:
    """
    Callable characteristic descriptor.

    Parameters
    ----------
    name : str
        Characteristic identifier (e.g., ``"log_pdf"``).

    Notes
    -----
    This object does not implement the characteristic itself. It resolves and
    calls either an analytical function or a fitted method via the
    active :class:`~pysatl_refdist.distributions.strategies.ComputationStrategy`.

    Examples
    --------
    >>> from pysatl_refdist.distributions.characteristics import LOG_CCDF
    >>> # LOG_CCDF(pareto, 3.0) evaluates alpha * log(y_min / 3.0)
    """

    name: GenericCharacteristicName

    def __call__(self, distribution: "Distribution", data: In, **options: Any) -> Out:
        """
        Evaluate the characteristic on the given data.

        Parameters
        ----------
        distribution : Distribution
            Distribution instance providing the computation strategy.
        data : Any
            Input value(s) for the characteristic.
        **options
            Strategy- and fitter-specific options.

        Returns
        -------
        Any
            Characteristic value at ``data``.
        """
        method = cast(
            Method[In, Out],
            distribution.computation_strategy.query_method(self.name, distribution, **options),
        )
        return method(data)


PDF = GenericCharacteristic[Any, Any](CharacteristicName.PDF)
PMF = GenericCharacteristic[Any, Any](CharacteristicName.PMF)
CDF = GenericCharacteristic[Any, Any](CharacteristicName.CDF)
PPF = GenericCharacteristic[Any, Any](CharacteristicName.PPF)
SF = GenericCharacteristic[Any, Any](CharacteristicName.SF)
LOG_PDF = GenericCharacteristic[Any, Any](CharacteristicName.LOG_PDF)
LOG_PMF = GenericCharacteristic[Any, Any](CharacteristicName.LOG_PMF)
LOG_CDF = GenericCharacteristic[Any, Any](CharacteristicName.LOG_CDF)
LOG_CCDF = GenericCharacteristic[Any, Any](CharacteristicName.LOG_CCDF)
MEAN = GenericCharacteristic[Any, Any](CharacteristicName.MEAN)
VAR = GenericCharacteristic[Any, Any](CharacteristicName.VAR)
COV = GenericCharacteristic[Any, Any](CharacteristicName.COV)

__all__ = [
    "GenericCharacteristic",
    "PDF",
    "PMF",
    "CDF",
    "PPF",
    "SF",
    "LOG_PDF",
    "LOG_PMF",
    "LOG_CDF",
    "LOG_CCDF",
    "MEAN",
    "VAR",
    "COV",
]
