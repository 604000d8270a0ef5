"""
Engine Configuration
====================

Defaults for the histogram, the theoretical curves and the session.

:class:`EngineConfig` is an immutable value object; a session receives one at
construction time and never mutates it. Menu choices (bin counts, parameter
steps) are advisory: any positive bin count and any positive step are
accepted by the session.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from dataclasses import dataclass, field, fields
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Any

type CurveStrategyName = Literal["sampled", "grid"]

DEFAULT_BIN_COUNT_CHOICES: tuple[int, ...] = (30, 40, 50)
DEFAULT_PARAMETER_STEP_CHOICES: tuple[float, ...] = (0.05, 0.02, 0.01)


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """
    Immutable engine settings.

    Parameters
    ----------
    bin_count : int, default 30
        Histogram bin count used after construction and on every load.
    bin_count_choices : tuple[int, ...]
        Bin counts offered to the user.
    curve_point_count : int, default 100
        Number of (x, y) points of each theoretical curve.
    parameter_step : float, default 0.05
        Initial step for parameter nudges.
    parameter_step_choices : tuple[float, ...]
        Steps offered to the user.
    default_mean, default_std_dev, default_rate : float
        Shape parameters restored on every load.
    normality_threshold : float, default 3.0
        Jarque-Bera statistics strictly below this value classify as normal.
    seed : int or None
        Seed of the session random generator; ``None`` draws fresh entropy.
    curve_strategy : {"sampled", "grid"}
        How curve x-coordinates are produced.
    grid_domain : tuple[float, float]
        Domain stepped over by the ``"grid"`` strategy.
    datasets : Mapping[str, Path]
        Known dataset names accepted by ``Session.load``.
    """

    bin_count: int = 30
    bin_count_choices: tuple[int, ...] = DEFAULT_BIN_COUNT_CHOICES
    curve_point_count: int = 100
    parameter_step: float = 0.05
    parameter_step_choices: tuple[float, ...] = DEFAULT_PARAMETER_STEP_CHOICES
    default_mean: float = 0.0
    default_std_dev: float = 1.0
    default_rate: float = 1.0
    normality_threshold: float = 3.0
    seed: int | None = None
    curve_strategy: CurveStrategyName = "sampled"
    grid_domain: tuple[float, float] = (-5.0, 5.0)
    datasets: Mapping[str, Path] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.bin_count, bool) or not isinstance(self.bin_count, int):
            raise ValueError(f"bin_count must be an int, got {self.bin_count!r}")
        if self.bin_count <= 0:
            raise ValueError(f"bin_count must be positive, got {self.bin_count}")
        if any(n <= 0 for n in self.bin_count_choices):
            raise ValueError("bin_count_choices must be positive")
        if self.curve_point_count <= 0:
            raise ValueError("curve_point_count must be positive")
        for name in ("parameter_step", "default_std_dev", "default_rate"):
            value = getattr(self, name)
            if not (math.isfinite(value) and value > 0):
                raise ValueError(f"{name} must be a finite positive number, got {value!r}")
        if any(not (math.isfinite(s) and s > 0) for s in self.parameter_step_choices):
            raise ValueError("parameter_step_choices must be finite and positive")
        if not math.isfinite(self.default_mean):
            raise ValueError("default_mean must be finite")
        if self.curve_strategy not in ("sampled", "grid"):
            raise ValueError(f"Unknown curve strategy {self.curve_strategy!r}")
        start, stop = self.grid_domain
        if not start < stop:
            raise ValueError(f"grid_domain must be increasing, got {self.grid_domain}")

        datasets = {str(k): Path(v) for k, v in self.datasets.items()}
        object.__setattr__(self, "datasets", MappingProxyType(datasets))

    @classmethod
    def from_mapping(
        cls, mapping: Mapping[str, Any], base_dir: str | Path | None = None
    ) -> EngineConfig:
        """
        Build a configuration from a plain mapping (e.g. parsed TOML/JSON).

        Unknown keys raise ``ValueError``. Relative dataset paths are resolved
        against ``base_dir`` when given.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(mapping) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

        values = dict(mapping)
        for key in ("bin_count_choices", "parameter_step_choices", "grid_domain"):
            if key in values:
                values[key] = tuple(values[key])
        if "datasets" in values:
            root = Path(base_dir) if base_dir is not None else None
            values["datasets"] = {
                name: (root / path if root is not None and not Path(path).is_absolute() else path)
                for name, path in values["datasets"].items()
            }
        return cls(**values)
