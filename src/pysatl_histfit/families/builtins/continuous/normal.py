"""
Normal family.

Parametrizations ``meanStd`` (``mu``, ``sigma``; base) and ``meanPrec``
(``mu``, ``tau = 1/sigma²``).
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy.special import erf, erfinv

from pysatl_histfit.distributions.support import ContinuousSupport
from pysatl_histfit.families.parametric_family import ParametricFamily
from pysatl_histfit.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_histfit.families.registry import ParametricFamilyRegister
from pysatl_histfit.types import (
    CharacteristicName,
    FamilyName,
    NumericArray,
    UnivariateContinuous,
)

if TYPE_CHECKING:
    from typing import Any

_SQRT_2 = math.sqrt(2.0)
_SQRT_2PI = math.sqrt(2.0 * math.pi)


def configure_normal_family() -> None:
    """Register the Normal family unless it is already registered."""

    if ParametricFamilyRegister.contains(FamilyName.NORMAL):
        return

    NORMAL_DOC = """
    Normal (Gaussian) distribution N(μ, σ²).

    pdf:            f(x) = exp(-(x-μ)² / (2σ²)) / (σ√(2π))
    curve_density:  g(x) = exp(-(x-μ)² / (2σ))  / √(2π)

    ``g`` is what the engine draws over histograms. It divides by σ rather
    than σ² and omits the 1/σ factor, so it equals ``f`` only at σ = 1.
    """

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Textbook density."""
        p = cast(_MeanStd, parameters)
        z = (np.asarray(x, dtype=np.float64) - p.mu) / p.sigma
        return cast(NumericArray, np.exp(-0.5 * z * z) / (p.sigma * _SQRT_2PI))

    def curve_density(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Density drawn over histograms, see the family docstring."""
        p = cast(_MeanStd, parameters)
        d = np.asarray(x, dtype=np.float64) - p.mu
        return cast(NumericArray, np.exp(-(d * d) / (2.0 * p.sigma)) / _SQRT_2PI)

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        p = cast(_MeanStd, parameters)
        z = (np.asarray(x, dtype=np.float64) - p.mu) / (p.sigma * _SQRT_2)
        return cast(NumericArray, 0.5 * (1.0 + erf(z)))

    def ppf(parameters: Parametrization, q: NumericArray) -> NumericArray:
        """
        Quantile function.

        ``q = 0`` and ``q = 1`` map to ``-inf`` and ``inf``.

        Raises
        ------
        ValueError
            If any ``q`` lies outside ``[0, 1]``.
        """
        q = np.asarray(q, dtype=np.float64)
        if np.any((q < 0.0) | (q > 1.0)):
            raise ValueError("Probability must be in [0, 1]")
        p = cast(_MeanStd, parameters)
        return cast(NumericArray, p.mu + p.sigma * _SQRT_2 * erfinv(2.0 * q - 1.0))

    def mean(parameters: Parametrization, _: Any) -> float:
        return cast(_MeanStd, parameters).mu

    def var(parameters: Parametrization, _: Any) -> float:
        return cast(_MeanStd, parameters).sigma ** 2

    def skewness(_parameters: Parametrization, _: Any) -> float:
        return 0.0

    def kurtosis(_parameters: Parametrization, _: Any, excess: bool = False) -> float:
        """Raw kurtosis 3, or excess kurtosis 0 with ``excess=True``."""
        return 0.0 if excess else 3.0

    Normal = ParametricFamily(
        name=FamilyName.NORMAL,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["meanStd", "meanPrec"],
        distr_characteristics={
            CharacteristicName.PDF: pdf,
            CharacteristicName.CURVE_DENSITY: curve_density,
            CharacteristicName.CDF: cdf,
            CharacteristicName.PPF: ppf,
            CharacteristicName.MEAN: mean,
            CharacteristicName.VAR: var,
            CharacteristicName.SKEW: skewness,
            CharacteristicName.KURT: kurtosis,
        },
        support_by_parametrization=lambda _parameters: ContinuousSupport(),
    )
    Normal.__doc__ = NORMAL_DOC

    @parametrization(family=Normal, name="meanStd")
    class _MeanStd(Parametrization):
        """Mean ``mu`` and standard deviation ``sigma``."""

        mu: float
        sigma: float

        @constraint(description="mu is finite")
        def check_mu_finite(self) -> bool:
            return math.isfinite(self.mu)

        @constraint(description="sigma > 0")
        def check_sigma_positive(self) -> bool:
            return math.isfinite(self.sigma) and self.sigma > 0

    @parametrization(family=Normal, name="meanPrec")
    class _MeanPrec(Parametrization):
        """Mean ``mu`` and precision ``tau = 1 / sigma²``."""

        mu: float
        tau: float

        @constraint(description="mu is finite")
        def check_mu_finite(self) -> bool:
            return math.isfinite(self.mu)

        @constraint(description="tau > 0")
        def check_tau_positive(self) -> bool:
            return math.isfinite(self.tau) and self.tau > 0

        def transform_to_base_parametrization(self) -> Parametrization:
            return _MeanStd(mu=self.mu, sigma=1.0 / math.sqrt(self.tau))  # type: ignore[call-arg]

    ParametricFamilyRegister.register(Normal)
