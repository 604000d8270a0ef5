"""
Samples drawn from distributions.

Univariate samples are stored as ``(n, 1)`` float arrays so a sample keeps
the same shape whatever produced it.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Protocol

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Iterator
    from typing import Any

    import numpy.typing as npt


class Sample(Protocol):
    """Read access to drawn values: ``array`` of shape ``shape``, flat ``values``."""

    def __len__(self) -> int: ...
    @property
    def array(self) -> npt.NDArray[np.floating[Any]]: ...
    @property
    def shape(self) -> tuple[int, ...]: ...
    @property
    def values(self) -> npt.NDArray[np.floating[Any]]: ...
    def sorted(self) -> Sample: ...


class ArraySample:
    """
    Univariate sample backed by a single-column array.

    Parameters
    ----------
    data : numpy.ndarray
        Values of shape ``(n,)`` or ``(n, 1)``.

    Raises
    ------
    ValueError
        For any other shape.
    """

    __slots__ = ("data",)

    data: npt.NDArray[np.floating[Any]]

    def __init__(self, data: npt.NDArray[np.floating[Any]]) -> None:
        column = data.reshape(-1, 1) if data.ndim == 1 else data
        if column.ndim != 2 or column.shape[1] != 1:
            raise ValueError(
                f"ArraySample expects array of shape (n,) or (n, 1), got {data.shape}."
            )
        self.data = column

    def __len__(self) -> int:
        return int(self.data.shape[0])

    def __iter__(self) -> Iterator[np.floating[Any]]:
        return iter(self.data[:, 0])

    @property
    def array(self) -> npt.NDArray[np.floating[Any]]:
        return self.data

    @property
    def values(self) -> npt.NDArray[np.floating[Any]]:
        """Flat view of the values."""
        return self.data[:, 0]

    @property
    def shape(self) -> tuple[int, ...]:
        return tuple(int(d) for d in self.data.shape)

    def sorted(self) -> ArraySample:
        """New sample with the values in ascending order."""
        return ArraySample(np.sort(self.values))
