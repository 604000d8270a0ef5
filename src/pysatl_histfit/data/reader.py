"""
Dataset ingestion.

Input format: plain text, a leading integer sample count ``N`` followed by
at least ``N`` whitespace-separated floating-point tokens. Only the first
``N`` values are read.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import math
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

from pysatl_histfit.data.dataset import Dataset
from pysatl_histfit.errors import FileUnavailable, MalformedInput

if TYPE_CHECKING:
    from os import PathLike

logger = logging.getLogger(__name__)


def _parse_count(token: str) -> int:
    try:
        count = int(token)
    except ValueError as exc:
        raise MalformedInput(f"Sample count must be an integer, got {token!r}") from exc
    if count <= 0:
        raise MalformedInput(f"Sample count must be positive, got {count}")
    return count


def parse_dataset(text: str, source: str = "<memory>") -> Dataset:
    """
    Parse the textual dataset format.

    Parameters
    ----------
    text : str
        Whole content of the source.
    source : str
        Identifier stored on the resulting :class:`Dataset`.

    Returns
    -------
    Dataset
        Dataset holding exactly ``N`` samples.

    Raises
    ------
    MalformedInput
        If the count is missing, not a positive integer, fewer than ``N``
        values follow, or one of the first ``N`` values is not a finite float.
    """
    tokens = text.split()
    if not tokens:
        raise MalformedInput(f"{source}: empty input, expected a sample count")

    count = _parse_count(tokens[0])
    value_tokens = tokens[1 : count + 1]
    if len(value_tokens) < count:
        raise MalformedInput(
            f"{source}: declared {count} samples but only {len(value_tokens)} values present"
        )

    values = np.empty(count, dtype=np.float64)
    for i, token in enumerate(value_tokens):
        try:
            value = float(token)
        except ValueError as exc:
            raise MalformedInput(f"{source}: value #{i} is not a number: {token!r}") from exc
        if not math.isfinite(value):
            raise MalformedInput(f"{source}: value #{i} is not finite: {token!r}")
        values[i] = value

    surplus = len(tokens) - 1 - count
    if surplus > 0:
        logger.debug("%s: ignoring %d tokens after the declared %d samples", source, surplus, count)

    return Dataset(values, source)


def read_dataset(path: str | PathLike[str]) -> Dataset:
    """
    Read a dataset file.

    Raises
    ------
    FileUnavailable
        If the file cannot be opened or read.
    MalformedInput
        If the content does not follow the dataset format.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise FileUnavailable(f"{path} couldn't be opened: {exc}") from exc

    dataset = parse_dataset(text, source=path.name)
    logger.info(
        "Loaded %d samples from %s (min=%g, max=%g)",
        dataset.size,
        path,
        dataset.minimum,
        dataset.maximum,
    )
    return dataset
