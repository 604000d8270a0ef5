"""
Engine error definitions.

Every failure of the engine is reported through one of the classes below.
Each class also derives from the closest builtin exception so callers that
only know the builtin hierarchy still catch it.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


class HistFitError(Exception):
    """Base class for all engine errors."""


class FileUnavailable(HistFitError, OSError):
    """
    Raised when a dataset source cannot be opened or read.

    The session keeps its previous state when a load fails with this error.
    """


class MalformedInput(HistFitError, ValueError):
    """
    Raised when a dataset source does not match the expected format.

    The format is a leading integer count ``N`` followed by at least ``N``
    whitespace-separated finite floating-point tokens.
    """


class InvalidBinCount(HistFitError, ValueError):
    """Raised when a histogram bin count is not a positive integer."""


class InvalidParameter(HistFitError, ValueError):
    """
    Raised when a shape parameter or a parameter step is out of range.

    Scale parameters (standard deviation, rate) must be strictly positive.
    They are never clamped.
    """


class DegenerateDataset(HistFitError, ArithmeticError):
    """Raised when a statistic is undefined because the dataset has no usable variance."""


class NotReady(HistFitError, RuntimeError):
    """Raised when a session operation is invoked before any successful load."""


__all__ = [
    "HistFitError",
    "FileUnavailable",
    "MalformedInput",
    "InvalidBinCount",
    "InvalidParameter",
    "DegenerateDataset",
    "NotReady",
]
