"""
Distributions
=============

Protocols and default implementations behind the theoretical curves: the
:class:`Distribution` interface, analytical computations, array samples,
computation and sampling strategies, and interval supports.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .computation import AnalyticalComputation, Computation
from .distribution import Distribution
from .sampling import ArraySample, Sample
from .strategies import (
    ComputationStrategy,
    DefaultComputationStrategy,
    DefaultSamplingUnivariateStrategy,
    SamplingStrategy,
)
from .support import ContinuousSupport, Support

__all__ = [
    "AnalyticalComputation",
    "Computation",
    "Distribution",
    "Sample",
    "ArraySample",
    "ComputationStrategy",
    "DefaultComputationStrategy",
    "SamplingStrategy",
    "DefaultSamplingUnivariateStrategy",
    "Support",
    "ContinuousSupport",
]
