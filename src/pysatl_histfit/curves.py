"""
Distribution Curve Generator
============================

Produces the (x, y) points of the theoretical Normal and Exponential curves
drawn over a density histogram.

``y`` is the family's ``curve_density`` characteristic evaluated at ``x``.
The x-coordinates come from a pluggable :class:`CurveStrategy`:

- :class:`SampledCurveStrategy` (default) draws ``point_count`` values from
  the distribution itself and sorts them, so points concentrate where the
  distribution has most of its mass.
- :class:`GridCurveStrategy` steps uniformly over a fixed domain clipped to
  the distribution support.

Both strategies take an injectable :class:`numpy.random.Generator`, which
makes sampled curves reproducible under a fixed seed.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Protocol

import numpy as np

from pysatl_histfit.distributions.support import ContinuousSupport
from pysatl_histfit.errors import InvalidParameter
from pysatl_histfit.families.configuration import configure_families_register
from pysatl_histfit.types import CharacteristicName, DistributionKind

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Any

    from pysatl_histfit.config import EngineConfig
    from pysatl_histfit.distributions.distribution import Distribution
    from pysatl_histfit.types import FloatArray

logger = logging.getLogger(__name__)

DEFAULT_CURVE_POINT_COUNT = 100


@dataclass(frozen=True, slots=True, eq=False)
class CurvePoints:
    """
    Points of one theoretical curve.

    Parameters
    ----------
    kind : DistributionKind
        Distribution the curve belongs to.
    parameters : Mapping[str, float]
        Shape parameters the curve was computed with.
    x : FloatArray
        Ascending x-coordinates.
    y : FloatArray
        Curve density at each ``x``.
    """

    kind: DistributionKind
    parameters: Mapping[str, float]
    x: FloatArray
    y: FloatArray

    def __len__(self) -> int:
        return int(self.x.size)

    @property
    def max_y(self) -> float:
        return float(self.y.max())

    def points(self) -> list[tuple[float, float]]:
        """Pairs ``(x, y)`` as plain floats, e.g. for a polyline."""
        return list(zip(self.x.tolist(), self.y.tolist(), strict=True))


class CurveStrategy(Protocol):
    """Protocol for producing the x-coordinates of a curve."""

    def abscissae(
        self, distr: Distribution, n: int, rng: np.random.Generator | None = None
    ) -> FloatArray: ...


class SampledCurveStrategy:
    """Sort ``n`` values drawn from the distribution."""

    def abscissae(
        self, distr: Distribution, n: int, rng: np.random.Generator | None = None
    ) -> FloatArray:
        return np.asarray(distr.sample(n, rng=rng).sorted().values, dtype=np.float64)


@dataclass(frozen=True, slots=True)
class GridCurveStrategy:
    """
    Uniform steps over ``[start, stop]`` intersected with the support.

    Parameters
    ----------
    start, stop : float
        Domain stepped over; exponential curves start at zero at the lowest.
    """

    start: float = -5.0
    stop: float = 5.0

    def __post_init__(self) -> None:
        if not self.start < self.stop:
            raise ValueError(f"Grid domain must be increasing, got [{self.start}, {self.stop}]")

    def abscissae(
        self, distr: Distribution, n: int, rng: np.random.Generator | None = None
    ) -> FloatArray:
        start, stop = self.start, self.stop
        if isinstance(distr.support, ContinuousSupport):
            start, stop = distr.support.clip(start, stop)
        if not start < stop:
            raise ValueError(
                f"Grid domain [{self.start}, {self.stop}] does not intersect the support"
            )
        return np.linspace(start, stop, n)


def make_curve_strategy(config: EngineConfig) -> CurveStrategy:
    """Strategy named by ``config.curve_strategy``."""
    if config.curve_strategy == "grid":
        return GridCurveStrategy(*config.grid_domain)
    return SampledCurveStrategy()


def _validate_point_count(point_count: int) -> int:
    if isinstance(point_count, bool) or not isinstance(point_count, (int, np.integer)):
        raise ValueError(f"Curve point count must be an integer, got {point_count!r}")
    if point_count <= 0:
        raise ValueError(f"Curve point count must be positive, got {point_count}")
    return int(point_count)


def compute_curve(
    kind: DistributionKind,
    parameters: Mapping[str, Any],
    *,
    point_count: int = DEFAULT_CURVE_POINT_COUNT,
    strategy: CurveStrategy | None = None,
    rng: np.random.Generator | None = None,
) -> CurvePoints:
    """
    Compute the curve of ``kind`` for base-parametrization ``parameters``.

    Raises
    ------
    InvalidParameter
        If the parameters violate the family constraints.
    """
    point_count = _validate_point_count(point_count)
    if strategy is None:
        strategy = SampledCurveStrategy()

    family = configure_families_register().get(kind.family_name)
    distr = family(**parameters)

    x = np.asarray(strategy.abscissae(distr, point_count, rng), dtype=np.float64)
    y = np.asarray(
        distr.calculate_characteristic(CharacteristicName.CURVE_DENSITY, x), dtype=np.float64
    )
    x.flags.writeable = False
    y.flags.writeable = False

    logger.debug("Computed %s curve with %d points for %s", kind, point_count, dict(parameters))
    return CurvePoints(kind, MappingProxyType(dict(parameters)), x, y)


def compute_normal_curve(
    mean: float,
    std_dev: float,
    *,
    point_count: int = DEFAULT_CURVE_POINT_COUNT,
    strategy: CurveStrategy | None = None,
    rng: np.random.Generator | None = None,
) -> CurvePoints:
    """
    Normal curve ``y = exp(−(x−mean)²/(2·std_dev)) / √(2π)``.

    Raises
    ------
    InvalidParameter
        If ``std_dev`` is not a finite positive number or ``mean`` is not finite.
    """
    if not std_dev > 0:
        raise InvalidParameter(f"Standard deviation must be positive, got {std_dev}")
    return compute_curve(
        DistributionKind.NORMAL,
        {"mu": float(mean), "sigma": float(std_dev)},
        point_count=point_count,
        strategy=strategy,
        rng=rng,
    )


def compute_exponential_curve(
    rate: float,
    *,
    point_count: int = DEFAULT_CURVE_POINT_COUNT,
    strategy: CurveStrategy | None = None,
    rng: np.random.Generator | None = None,
) -> CurvePoints:
    """
    Exponential curve ``y = rate · exp(−x·rate)`` for ``x ≥ 0``.

    Raises
    ------
    InvalidParameter
        If ``rate`` is not a finite positive number.
    """
    if not rate > 0:
        raise InvalidParameter(f"Rate must be positive, got {rate}")
    return compute_curve(
        DistributionKind.EXPONENTIAL,
        {"lambda_": float(rate)},
        point_count=point_count,
        strategy=strategy,
        rng=rng,
    )
