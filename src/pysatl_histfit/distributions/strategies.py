"""
Computation and Sampling Strategies
===================================

Distributions delegate two concerns to pluggable strategies:

- resolving a characteristic to a callable (:class:`ComputationStrategy`,
  default :class:`DefaultComputationStrategy`);
- drawing samples (:class:`SamplingStrategy`, default
  :class:`DefaultSamplingUnivariateStrategy`).

Strategies hold no state. Randomness comes from the ``rng`` sampling option.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Any, Protocol

import numpy as np

from pysatl_histfit.distributions.computation import AnalyticalComputation
from pysatl_histfit.types import CharacteristicName, GenericCharacteristicName

from .sampling import ArraySample, Sample

if TYPE_CHECKING:
    from .distribution import Distribution

type Method[In, Out] = AnalyticalComputation[In, Out]


class ComputationStrategy[In, Out](Protocol):
    def query_method(
        self, state: GenericCharacteristicName, distr: "Distribution", **options: Any
    ) -> Method[In, Out]: ...


class DefaultComputationStrategy[In, Out]:
    """Look the characteristic up among the distribution's analytical forms."""

    def query_method(
        self, state: GenericCharacteristicName, distr: "Distribution", **options: Any
    ) -> Method[In, Out]:
        """
        Analytical callable for ``state``.

        Raises
        ------
        KeyError
            If ``distr`` has no analytical form for ``state``.
        """
        computations = distr.analytical_computations
        try:
            return computations[state]
        except KeyError:
            available = ", ".join(sorted(computations))
            raise KeyError(
                f"Characteristic '{state}' is not provided analytically (available: {available})."
            ) from None


class SamplingStrategy(Protocol):
    def sample(self, n: int, distr: "Distribution", **options: Any) -> Sample: ...


class DefaultSamplingUnivariateStrategy(SamplingStrategy):
    """
    Inverse-transform sampling: ``ppf(U)`` with ``U`` uniform on ``(0, 1)``.

    Options
    -------
    rng : numpy.random.Generator, optional
        Source of the uniforms; a fresh unseeded generator when omitted.
        Other options are passed to the ``ppf`` lookup.

    Returns an :class:`ArraySample` of shape ``(n, 1)``.
    """

    def sample(self, n: int, distr: "Distribution", **options: Any) -> ArraySample:
        if n < 0:
            raise ValueError(f"Sample size must be non-negative, got {n}.")
        rng: np.random.Generator = options.pop("rng", None) or np.random.default_rng()
        ppf = distr.query_method(CharacteristicName.PPF, **options)
        # the open lower bound keeps ppf(U) finite for unbounded supports
        uniforms = rng.uniform(np.finfo(np.float64).tiny, 1.0, size=n)
        return ArraySample(np.asarray(ppf(uniforms), dtype=np.float64).reshape(n, 1))
