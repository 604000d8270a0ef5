"""
Histogram Builder
=================

Probability-density histogram over ``[minimum, maximum]`` of a dataset.

Binning uses right edges and half-open-right intervals: a sample ``s``
belongs to bin ``i`` when ``lower(i) < s ≤ boundaries[i]``, with the first
bin closed on the left (``lower(0) = minimum`` inclusive). Every sample is
counted exactly once. The density of a bin is ``count / N / width`` so the
histogram integrates to one over the data range.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from pysatl_histfit.errors import InvalidBinCount

if TYPE_CHECKING:
    from pysatl_histfit.data.dataset import Dataset
    from pysatl_histfit.types import FloatArray

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, eq=False)
class Histogram:
    """
    Density histogram.

    Parameters
    ----------
    minimum : float
        Left edge of the first bin.
    boundaries : FloatArray
        Right edge of every bin, strictly increasing, last equals the maximum.
    counts : NDArray[int64]
        Samples per bin.
    densities : FloatArray
        ``counts / N / bin_width``.
    bin_width : float
        Common width of the bins, ``0.0`` for the degenerate fallback.
    requested_bin_count : int
        Bin count asked for by the caller.
    is_degenerate : bool
        True when the data range is zero and the single-bin fallback is used.
    """

    minimum: float
    boundaries: FloatArray
    counts: np.ndarray
    densities: FloatArray
    bin_width: float
    requested_bin_count: int
    is_degenerate: bool = False

    @property
    def bin_count(self) -> int:
        """Number of bins actually built."""
        return int(self.boundaries.size)

    @property
    def sample_count(self) -> int:
        return int(self.counts.sum())

    @property
    def bin_edges(self) -> FloatArray:
        """All ``bin_count + 1`` edges, starting with ``minimum``."""
        return np.concatenate(([self.minimum], self.boundaries))

    @property
    def max_density(self) -> float:
        return float(self.densities.max())

    @property
    def min_density(self) -> float:
        return float(self.densities.min())

    @property
    def total_probability(self) -> float:
        """``Σ density · width``; the degenerate single bin holds probability one."""
        if self.is_degenerate:
            return float(self.densities.sum())
        return float(self.densities.sum() * self.bin_width)


def _freeze(arr: np.ndarray) -> np.ndarray:
    arr.flags.writeable = False
    return arr


def validate_bin_count(bin_count: object) -> int:
    """
    Return ``bin_count`` if it is a positive integer.

    Raises
    ------
    InvalidBinCount
        For non-integers (including ``bool``) and values ``≤ 0``.
    """
    if isinstance(bin_count, bool) or not isinstance(bin_count, (int, np.integer)):
        raise InvalidBinCount(f"Bin count must be an integer, got {bin_count!r}")
    if bin_count <= 0:
        raise InvalidBinCount(f"Bin count must be positive, got {bin_count}")
    return int(bin_count)


def build_histogram(dataset: Dataset, bin_count: int) -> Histogram:
    """
    Build the density histogram of ``dataset`` with ``bin_count`` bins.

    Parameters
    ----------
    dataset : Dataset
        Source samples.
    bin_count : int
        Positive number of equal-width bins.

    Returns
    -------
    Histogram
        Fresh histogram; nothing is shared with previously built ones.

    Raises
    ------
    InvalidBinCount
        If ``bin_count`` is not a positive integer, or if the bins are too
        narrow for float64: the edges would not strictly increase (e.g. 30
        bins over ``[1e16, 1e16 + 2]``) or a density would overflow. A single
        bin always works.

    Notes
    -----
    When all samples are equal the range is zero and no bin width exists.
    The result is then a single bin with right edge ``minimum`` holding
    probability one (``density = 1.0``, ``bin_width = 0.0``).

    A range wider than the largest float64 (e.g. ``[-1e308, 1e308]``) is
    binned by interpolating the edges between ``minimum`` and ``maximum``.
    """
    bin_count = validate_bin_count(bin_count)
    samples = dataset.samples
    n = samples.size
    minimum, maximum = dataset.minimum, dataset.maximum
    data_range = maximum - minimum

    if data_range == 0.0:
        logger.warning(
            "%s: all %d samples equal %g, using a single-bin histogram", dataset.source, n, minimum
        )
        return Histogram(
            minimum=minimum,
            boundaries=_freeze(np.array([minimum])),
            counts=_freeze(np.array([n], dtype=np.int64)),
            densities=_freeze(np.array([1.0])),
            bin_width=0.0,
            requested_bin_count=bin_count,
            is_degenerate=True,
        )

    steps = np.arange(1, bin_count + 1, dtype=np.float64)
    if math.isfinite(data_range):
        width = data_range / bin_count
        boundaries = minimum + width * steps
    else:
        # the range itself overflows float64; interpolate between the extremes
        width = maximum / bin_count - minimum / bin_count
        fractions = steps / bin_count
        boundaries = minimum * (1.0 - fractions) + maximum * fractions
    # rounding may leave the last edge just below the maximum
    boundaries[-1] = maximum

    edges = np.concatenate(([minimum], boundaries))
    if not np.all(edges[1:] > edges[:-1]):
        raise InvalidBinCount(
            f"{bin_count} bins of width {width:g} are finer than float64 resolves "
            f"around {minimum:g}; use fewer bins"
        )

    # side="left" yields i with boundaries[i-1] < s <= boundaries[i]; the
    # minimum lands in bin 0 because boundaries[0] > minimum
    indices = np.searchsorted(boundaries, samples, side="left")
    np.clip(indices, 0, bin_count - 1, out=indices)
    counts = np.bincount(indices, minlength=bin_count).astype(np.int64)
    with np.errstate(over="ignore"):
        densities = counts / n / width
    if not np.isfinite(densities).all():
        raise InvalidBinCount(
            f"{bin_count} bins of width {width:g} give densities beyond float64 range; "
            "use fewer bins"
        )

    logger.debug(
        "%s: histogram with %d bins of width %g (max density %g)",
        dataset.source,
        bin_count,
        width,
        densities.max(),
    )
    return Histogram(
        minimum=minimum,
        boundaries=_freeze(boundaries),
        counts=_freeze(counts),
        densities=_freeze(densities),
        bin_width=width,
        requested_bin_count=bin_count,
    )
