"""
Dataset container
=================

Immutable one-dimensional sample with summary statistics computed once at
construction.

All moments are population moments (divisor ``N``):

- ``variance = Σ(x−mean)²/N``
- ``skewness = Σ(x−mean)³/N / variance^1.5``
- ``kurtosis = Σ(x−mean)⁴/N / variance²`` (raw, no ``−3``)
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from pysatl_histfit.errors import DegenerateDataset, MalformedInput

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pysatl_histfit.types import FloatArray


@dataclass(frozen=True, slots=True, eq=False)
class Dataset:
    """
    Immutable univariate dataset.

    Parameters
    ----------
    samples : FloatArray
        Sample values; copied into a read-only float64 array.
    source : str, default "<memory>"
        Identifier of the origin (file name or dataset name).

    Raises
    ------
    MalformedInput
        If there are no samples, the array is not 1D, or a value is not finite.
    """

    samples: FloatArray
    source: str = "<memory>"
    minimum: float = field(init=False)
    maximum: float = field(init=False)
    mean: float = field(init=False)
    variance: float = field(init=False)
    _third: float = field(init=False, repr=False)
    _fourth: float = field(init=False, repr=False)
    _standardizable: bool = field(init=False, repr=False)

    def __post_init__(self) -> None:
        arr = np.array(self.samples, dtype=np.float64)
        if arr.ndim != 1:
            raise MalformedInput(f"Dataset expects a 1D sequence, got shape {arr.shape}")
        if arr.size == 0:
            raise MalformedInput("Dataset must contain at least one sample")
        if not np.isfinite(arr).all():
            bad = int(np.flatnonzero(~np.isfinite(arr))[0])
            raise MalformedInput(f"Sample #{bad} is not a finite number: {arr[bad]!r}")
        arr.flags.writeable = False

        minimum, maximum = float(arr.min()), float(arr.max())
        # overflow and underflow surface as non-finite or zero scales below
        with np.errstate(over="ignore", under="ignore", invalid="ignore"):
            # constant data keeps its moments exactly zero
            mean = minimum if minimum == maximum else float(arr.mean())
            if not np.isfinite(mean):
                mean = float((arr / arr.size).sum())
            deviations = arr - mean
            squared = deviations**2
            variance = float(squared.mean())
            third = float((squared * deviations).mean())
            fourth = float((squared * squared).mean())
            scales = np.float64(variance) ** np.array([1.5, 2.0])
        moments = np.array([variance, third, fourth, *scales])
        standardizable = (
            minimum != maximum and bool(np.isfinite(moments).all()) and bool((scales > 0).all())
        )

        set_ = object.__setattr__
        set_(self, "samples", arr)
        set_(self, "minimum", minimum)
        set_(self, "maximum", maximum)
        set_(self, "mean", mean)
        set_(self, "variance", variance)
        set_(self, "_third", third)
        set_(self, "_fourth", fourth)
        set_(self, "_standardizable", standardizable)

    @classmethod
    def from_values(cls, values: Iterable[float], source: str = "<memory>") -> Dataset:
        """Build a dataset from any iterable of numbers."""
        try:
            arr = np.fromiter((float(v) for v in values), dtype=np.float64)
        except (TypeError, ValueError) as exc:
            raise MalformedInput(f"Dataset values must be numbers: {exc}") from exc
        return cls(arr, source)

    def __len__(self) -> int:
        return int(self.samples.size)

    @property
    def size(self) -> int:
        """Number of samples ``N``."""
        return int(self.samples.size)

    @property
    def range(self) -> float:
        """``maximum − minimum``."""
        return self.maximum - self.minimum

    @property
    def is_degenerate(self) -> bool:
        """
        True when skewness and kurtosis are undefined.

        That is the case when every sample is equal, and also when the spread
        is too small or too large for ``variance^1.5`` and ``variance²`` to be
        finite non-zero float64 values (e.g. ``[0, 1e-160]`` or
        ``[-1e200, 1e200]``).
        """
        return not self._standardizable

    @property
    def std_dev(self) -> float:
        """Population standard deviation."""
        return float(np.sqrt(self.variance))

    @property
    def skewness(self) -> float:
        """
        Third standardized moment.

        Raises
        ------
        DegenerateDataset
            If the dataset :attr:`is_degenerate`.
        """
        self._require_spread("skewness")
        return self._third / self.variance**1.5

    @property
    def kurtosis(self) -> float:
        """
        Fourth standardized moment (3 for a normal distribution).

        Raises
        ------
        DegenerateDataset
            If the dataset :attr:`is_degenerate`.
        """
        self._require_spread("kurtosis")
        return self._fourth / self.variance**2

    def _require_spread(self, statistic: str) -> None:
        if not self.is_degenerate:
            return
        if self.minimum == self.maximum:
            reason = f"all samples equal {self.minimum}"
        else:
            reason = f"variance {self.variance:g} is out of float64 range for standardizing"
        raise DegenerateDataset(f"{statistic} is undefined for '{self.source}': {reason}")
