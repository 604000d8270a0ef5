from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable, Generator, Iterable
from pathlib import Path
from typing import Any

import numpy as np
import pytest

from pysatl_histfit.families.configuration import reset_families_register


@pytest.fixture(autouse=True)
def _fresh_registries() -> Generator[None, Any, None]:
    reset_families_register()
    yield


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(20240917)


@pytest.fixture
def write_dataset(tmp_path: Path) -> Callable[..., Path]:
    """Write ``values`` in the ``count followed by values`` format."""

    def _write(values: Iterable[float], name: str = "data.txt", count: int | None = None) -> Path:
        values = list(values)
        declared = len(values) if count is None else count
        path = tmp_path / name
        path.write_text(f"{declared}\n" + "\n".join(repr(float(v)) for v in values) + "\n")
        return path

    return _write
