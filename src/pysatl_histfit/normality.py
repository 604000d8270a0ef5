"""
Normality Tester
================

Moment-based classification of a dataset as normal or not.

The Jarque-Bera statistic is

    JB = (N / 6) · (S² + (K − 3)² / 4)

with ``S`` the population skewness and ``K`` the raw population kurtosis of
the dataset. A dataset is classified as normal when ``JB < 3.0``.

Notes
-----
The flat ``3.0`` threshold is a simplification kept for compatibility with
existing results: the textbook test compares JB against a chi-square
distribution with two degrees of freedom (critical value ≈ 5.991 at the 5%
level). The chi-square p-value is reported alongside the verdict for
reference only and never changes the classification.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from scipy.stats import chi2

if TYPE_CHECKING:
    from pysatl_histfit.data.dataset import Dataset

logger = logging.getLogger(__name__)

DEFAULT_NORMALITY_THRESHOLD = 3.0


@dataclass(frozen=True, slots=True)
class NormalityVerdict:
    """
    Outcome of the Jarque-Bera classification.

    Parameters
    ----------
    is_normal : bool
        ``statistic < threshold``; always False for a degenerate dataset.
    statistic : float or None
        Jarque-Bera statistic, ``None`` for a degenerate dataset.
    threshold : float
        Threshold the statistic was compared against.
    p_value : float or None
        Chi-square(2) survival function of the statistic (informational).
    degenerate : bool
        True when the dataset has no usable variance (see ``Dataset.is_degenerate``).
    """

    is_normal: bool
    statistic: float | None
    threshold: float
    p_value: float | None = None
    degenerate: bool = False

    @property
    def label(self) -> str:
        return "normal" if self.is_normal else "not normal"


def jarque_bera_statistic(dataset: Dataset) -> float:
    """
    Jarque-Bera statistic of ``dataset``.

    Raises
    ------
    DegenerateDataset
        If the dataset is degenerate.
    """
    skewness = dataset.skewness
    kurtosis = dataset.kurtosis
    return dataset.size / 6.0 * (skewness**2 + 0.25 * (kurtosis - 3.0) ** 2)


def jarque_bera_test(
    dataset: Dataset, threshold: float = DEFAULT_NORMALITY_THRESHOLD
) -> NormalityVerdict:
    """
    Classify ``dataset`` with the Jarque-Bera statistic.

    A dataset whose samples are all equal is a point mass: the verdict is
    ``is_normal=False`` with ``degenerate=True`` and no statistic. The same
    verdict is given when the spread is too small or too large to standardize
    in float64, so neither NaN nor a division by zero reaches the result.
    """
    if dataset.is_degenerate:
        logger.warning(
            "%s: degenerate spread (variance %g), classified as not normal",
            dataset.source,
            dataset.variance,
        )
        return NormalityVerdict(
            is_normal=False, statistic=None, threshold=threshold, degenerate=True
        )

    statistic = jarque_bera_statistic(dataset)
    verdict = NormalityVerdict(
        is_normal=statistic < threshold,
        statistic=statistic,
        threshold=threshold,
        p_value=float(chi2.sf(statistic, df=2)),
    )
    logger.debug(
        "%s: JB=%.6g (threshold %g) -> %s", dataset.source, statistic, threshold, verdict.label
    )
    return verdict


def test_normality(dataset: Dataset, threshold: float = DEFAULT_NORMALITY_THRESHOLD) -> bool:
    """Return True when ``dataset`` is classified as normal."""
    return jarque_bera_test(dataset, threshold).is_normal
