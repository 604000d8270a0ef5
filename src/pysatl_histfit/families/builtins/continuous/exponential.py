"""
Exponential family.

Parametrizations ``rate`` (``lambda_``; base) and ``scale``
(``beta = 1/lambda_``). Support is ``[0, inf)``.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, cast

import numpy as np

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


def configure_exponential_family() -> None:
    """Register the Exponential family unless it is already registered."""

    if ParametricFamilyRegister.contains(FamilyName.EXPONENTIAL):
        return

    EXPONENTIAL_DOC = """
    Exponential distribution with rate λ (scale β = 1/λ).

    pdf = curve_density:  f(x) = λ exp(-λx) for x ≥ 0, 0 for x < 0
    cdf:                  F(x) = 1 - exp(-λx) for x ≥ 0
    """

    def _nonnegative(x: NumericArray) -> tuple[np.ndarray, np.ndarray]:
        # negative x is masked out; clipping keeps exp() from overflowing there
        arr = np.asarray(x, dtype=np.float64)
        return arr >= 0.0, np.clip(arr, 0.0, None)

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        lambda_ = cast(_Rate, parameters).lambda_
        inside, xs = _nonnegative(x)
        return cast(NumericArray, np.where(inside, lambda_ * np.exp(-lambda_ * xs), 0.0))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        lambda_ = cast(_Rate, parameters).lambda_
        inside, xs = _nonnegative(x)
        return cast(NumericArray, np.where(inside, -np.expm1(-lambda_ * xs), 0.0))

    def ppf(parameters: Parametrization, q: NumericArray) -> NumericArray:
        """
        Quantile function ``-log(1 - q) / λ``; ``q = 1`` maps to ``inf``.

        Raises
        ------
        ValueError
            If any ``q`` lies outside ``[0, 1]``.
        """
        q = np.asarray(q, dtype=np.float64)
        if np.any((q < 0.0) | (q > 1.0)):
            raise ValueError("Probability must be in [0, 1]")
        lambda_ = cast(_Rate, parameters).lambda_
        with np.errstate(divide="ignore"):
            return cast(NumericArray, np.where(q < 1.0, -np.log1p(-q) / lambda_, np.inf))

    def mean(parameters: Parametrization, _: Any) -> float:
        return 1.0 / cast(_Rate, parameters).lambda_

    def var(parameters: Parametrization, _: Any) -> float:
        return 1.0 / cast(_Rate, parameters).lambda_ ** 2

    def skewness(_parameters: Parametrization, _: Any) -> float:
        return 2.0

    def kurtosis(_parameters: Parametrization, _: Any, excess: bool = False) -> float:
        """Raw kurtosis 9, or excess kurtosis 6 with ``excess=True``."""
        return 6.0 if excess else 9.0

    Exponential = ParametricFamily(
        name=FamilyName.EXPONENTIAL,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["rate", "scale"],
        distr_characteristics={
            CharacteristicName.PDF: pdf,
            CharacteristicName.CURVE_DENSITY: pdf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.PPF: ppf,
            CharacteristicName.MEAN: mean,
            CharacteristicName.VAR: var,
            CharacteristicName.SKEW: skewness,
            CharacteristicName.KURT: kurtosis,
        },
        support_by_parametrization=lambda _parameters: ContinuousSupport(left=0.0),
    )
    Exponential.__doc__ = EXPONENTIAL_DOC

    @parametrization(family=Exponential, name="rate")
    class _Rate(Parametrization):
        """Rate ``lambda_``."""

        lambda_: float

        @constraint(description="lambda_ > 0")
        def check_lambda_positive(self) -> bool:
            return math.isfinite(self.lambda_) and self.lambda_ > 0

    @parametrization(family=Exponential, name="scale")
    class _Scale(Parametrization):
        """Scale ``beta``, the mean of the distribution."""

        beta: float

        @constraint(description="beta > 0")
        def check_beta_positive(self) -> bool:
            return math.isfinite(self.beta) and self.beta > 0

        def transform_to_base_parametrization(self) -> Parametrization:
            return _Rate(lambda_=1.0 / self.beta)  # type: ignore[call-arg]

    ParametricFamilyRegister.register(Exponential)
