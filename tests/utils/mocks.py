"""Test doubles for the distribution protocols."""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from pysatl_histfit.distributions import (
    AnalyticalComputation,
    ArraySample,
    ComputationStrategy,
    ContinuousSupport,
    DefaultComputationStrategy,
    DefaultSamplingUnivariateStrategy,
    Distribution,
    Sample,
    SamplingStrategy,
)
from pysatl_histfit.types import (
    EuclideanDistributionType,
    GenericCharacteristicName,
    UnivariateContinuous,
)

type _Computations = Mapping[GenericCharacteristicName, AnalyticalComputation[Any, Any]]


class MockSamplingStrategy(SamplingStrategy):
    """Uniform noise on ``[0, 1)`` regardless of the distribution."""

    def sample(self, n: int, distr: Distribution, **options: Any) -> Sample:
        rng = options.get("rng") or np.random.default_rng()
        return ArraySample(rng.random((n, 1)))


def _by_target(
    computations: Iterable[AnalyticalComputation[Any, Any]] | _Computations,
) -> dict[GenericCharacteristicName, AnalyticalComputation[Any, Any]]:
    if isinstance(computations, Mapping):
        return dict(computations)
    return {c.target: c for c in computations}


@dataclass(slots=True)
class StandaloneUnivariateDistribution(Distribution):
    """
    Univariate continuous distribution built from bare computations.

    Uses the default computation and inverse-transform sampling strategies,
    so a ``ppf`` computation is enough to draw from it.
    """

    computations: Iterable[AnalyticalComputation[Any, Any]] | _Computations = ()
    bounds: ContinuousSupport | None = None
    _by_name: dict[GenericCharacteristicName, AnalyticalComputation[Any, Any]] = field(
        init=False, repr=False
    )

    def __post_init__(self) -> None:
        self._by_name = _by_target(self.computations)

    @property
    def distribution_type(self) -> EuclideanDistributionType:
        return UnivariateContinuous

    @property
    def analytical_computations(self) -> _Computations:
        return self._by_name

    @property
    def sampling_strategy(self) -> SamplingStrategy:
        return DefaultSamplingUnivariateStrategy()

    @property
    def computation_strategy(self) -> ComputationStrategy[Any, Any]:
        return DefaultComputationStrategy()

    @property
    def support(self) -> ContinuousSupport | None:
        return self.bounds
