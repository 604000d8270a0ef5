"""
Analytical computations.

An :class:`AnalyticalComputation` is a characteristic (``pdf``, ``ppf``,
``curve_density``...) bound to concrete parameter values. It accepts a scalar
or a NumPy array and forwards keyword options to the underlying function,
e.g. ``excess=True`` for kurtosis.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from mypy_extensions import KwArg

from pysatl_histfit.types import GenericCharacteristicName


@runtime_checkable
class Computation[In, Out](Protocol):
    """Callable evaluating the characteristic named by ``target``."""

    @property
    def target(self) -> GenericCharacteristicName: ...
    def __call__(self, data: In, **options: Any) -> Out: ...


@dataclass(frozen=True, slots=True)
class AnalyticalComputation[In, Out]:
    """
    Closed-form characteristic.

    Parameters
    ----------
    target : str
        Characteristic name.
    func : Callable[[In, KwArg(Any)], Out]
        Function with the parameters already bound.
    """

    target: GenericCharacteristicName
    func: Callable[[In, KwArg(Any)], Out]

    def __call__(self, data: In, **options: Any) -> Out:
        return self.func(data, **options)
