"""
Data subpackage

Dataset container with summary statistics and the reader for the
``count followed by values`` text format.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .dataset import Dataset
from .reader import parse_dataset, read_dataset

__all__ = [
    "Dataset",
    "parse_dataset",
    "read_dataset",
]
