"""
PySATL HistFit
==============

Histogram and distribution-fit engine: dataset ingestion with summary
statistics, density histograms, theoretical Normal and Exponential curves,
a Jarque-Bera normality verdict, and the interactive session tying them
together.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from importlib.metadata import version

from .config import EngineConfig
from .curves import (
    CurvePoints,
    CurveStrategy,
    GridCurveStrategy,
    SampledCurveStrategy,
    compute_curve,
    compute_exponential_curve,
    compute_normal_curve,
)
from .data import Dataset, parse_dataset, read_dataset
from .distributions import *
from .distributions import __all__ as _distr_all
from .errors import *
from .errors import __all__ as _errors_all
from .families import *
from .families import __all__ as _family_all
from .histogram import Histogram, build_histogram
from .normality import NormalityVerdict, jarque_bera_statistic, jarque_bera_test, test_normality
from .session import (
    AxisLimits,
    DatasetSummary,
    Session,
    SessionState,
    SessionView,
    ShapeParameters,
)
from .types import *
from .types import __all__ as _types_all

__version__ = version("pysatl-histfit")
__all__ = [
    "__version__",
    "EngineConfig",
    "Dataset",
    "parse_dataset",
    "read_dataset",
    "Histogram",
    "build_histogram",
    "CurvePoints",
    "CurveStrategy",
    "SampledCurveStrategy",
    "GridCurveStrategy",
    "compute_curve",
    "compute_normal_curve",
    "compute_exponential_curve",
    "NormalityVerdict",
    "jarque_bera_statistic",
    "jarque_bera_test",
    "test_normality",
    "Session",
    "SessionState",
    "SessionView",
    "ShapeParameters",
    "DatasetSummary",
    "AxisLimits",
    *_distr_all,
    *_errors_all,
    *_family_all,
    *_types_all,
]

del _distr_all
del _errors_all
del _family_all
del _types_all
