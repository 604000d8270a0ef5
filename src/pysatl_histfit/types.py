"""
Core Type Definitions
=====================

Enumerations, numeric aliases and small value types shared by the
distribution families, the histogram, the curve generator and the session.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Mapping
from dataclasses import dataclass, fields
from enum import StrEnum
from math import inf
from typing import Any, cast, overload

import numpy as np
from numpy.typing import NDArray


class Kind(StrEnum):
    """Whether a distribution is discrete or continuous."""

    DISCRETE = "discrete"
    CONTINUOUS = "continuous"


class DistributionType:
    """Base of distribution type descriptors (frozen dataclasses)."""

    __slots__ = ()

    @property
    def features(self) -> Mapping[str, Any]:
        """Descriptor fields as a ``{name: value}`` mapping."""
        return {f.name: getattr(self, f.name) for f in fields(self)}  # type: ignore[arg-type]


@dataclass(frozen=True, slots=True)
class EuclideanDistributionType(DistributionType):
    """
    Distribution on ``R^dimension``.

    Parameters
    ----------
    kind : Kind
    dimension : int
    """

    kind: Kind
    dimension: int


UnivariateContinuous = EuclideanDistributionType(kind=Kind.CONTINUOUS, dimension=1)
"""Type of every family the engine draws."""

NumPyNumber = np.floating[Any] | np.integer[Any]
Number = NumPyNumber | int | float
NumericArray = NDArray[NumPyNumber]
FloatArray = NDArray[np.float64]
"""float64 arrays produced by the engine (histogram, curves, samples)."""
BoolArray = NDArray[np.bool_]


@dataclass(frozen=True, slots=True)
class Interval1D:
    """
    Interval of the real line.

    Parameters
    ----------
    left, right : float
        Endpoints, infinite by default.
    left_closed, right_closed : bool
        Whether the finite endpoints belong to the interval. Infinite
        endpoints are always open.
    """

    left: float = -inf
    right: float = inf
    left_closed: bool = True
    right_closed: bool = True

    def __post_init__(self) -> None:
        if self.left == -inf:
            object.__setattr__(self, "left_closed", False)
        if self.right == inf:
            object.__setattr__(self, "right_closed", False)

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        """Element-wise membership; a scalar argument gives a plain ``bool``."""
        arr = np.asarray(x, dtype=np.float64)
        above = arr >= self.left if self.left_closed else arr > self.left
        below = arr <= self.right if self.right_closed else arr < self.right
        inside = np.logical_and(above, below)
        if inside.ndim == 0:
            return bool(inside)
        return cast(BoolArray, inside)

    def __contains__(self, x: object) -> bool:
        return bool(self.contains(cast(Number, x)))

    def clip(self, left: float, right: float) -> tuple[float, float]:
        """``[left, right]`` intersected with the endpoints (may come out empty)."""
        return max(left, self.left), min(right, self.right)


type GenericCharacteristicName = str
type ParametrizationName = str


class CharacteristicName(StrEnum):
    """
    Characteristics provided by the built-in families.

    ``CURVE_DENSITY`` is the function drawn over the histogram. It matches
    ``PDF`` for the Exponential family but not for the Normal family.
    """

    PDF = "pdf"
    CDF = "cdf"
    PPF = "ppf"
    MEAN = "mean"
    VAR = "var"
    SKEW = "skewness"
    KURT = "kurtosis"
    CURVE_DENSITY = "curve_density"


class FamilyName(StrEnum):
    NORMAL = "Normal"
    EXPONENTIAL = "Exponential"


class DistributionKind(StrEnum):
    """Theoretical distribution selectable for display."""

    NORMAL = "normal"
    EXPONENTIAL = "exponential"

    @property
    def family_name(self) -> FamilyName:
        return FamilyName.NORMAL if self is DistributionKind.NORMAL else FamilyName.EXPONENTIAL


class Direction(StrEnum):
    INCREASE = "increase"
    DECREASE = "decrease"

    @property
    def sign(self) -> int:
        return 1 if self is Direction.INCREASE else -1


class Axis(StrEnum):
    """Which shape parameter a nudge targets: location (mean) or spread."""

    LOCATION = "location"
    SPREAD = "spread"


__all__ = [
    "Kind",
    "DistributionType",
    "EuclideanDistributionType",
    "UnivariateContinuous",
    "NumPyNumber",
    "Number",
    "NumericArray",
    "FloatArray",
    "BoolArray",
    "Interval1D",
    "GenericCharacteristicName",
    "ParametrizationName",
    "CharacteristicName",
    "FamilyName",
    "DistributionKind",
    "Direction",
    "Axis",
]
