"""
Session / Parameter State
=========================

Orchestrates ingestion, histogram, curves and the normality test for one
interactive user.

A :class:`Session` owns a single immutable :class:`SessionState` snapshot.
Every mutating operation computes all of its results first and then swaps
the snapshot in one assignment, so readers never observe a histogram built
for a different dataset, and a failing operation leaves the previous
snapshot untouched.

State machine: ``Uninitialized --load--> Loaded --(any operation)--> Loaded``.
All operations other than :meth:`Session.load` / :meth:`Session.load_dataset`
raise :class:`~pysatl_histfit.errors.NotReady` until the first successful load.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import math
from dataclasses import dataclass, replace
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

from pysatl_histfit.config import EngineConfig
from pysatl_histfit.curves import (
    CurvePoints,
    compute_exponential_curve,
    compute_normal_curve,
    make_curve_strategy,
)
from pysatl_histfit.data.reader import read_dataset
from pysatl_histfit.errors import InvalidParameter, NotReady
from pysatl_histfit.histogram import Histogram, build_histogram
from pysatl_histfit.normality import NormalityVerdict, jarque_bera_test
from pysatl_histfit.types import Axis, Direction, DistributionKind

if TYPE_CHECKING:
    from os import PathLike

    from pysatl_histfit.data.dataset import Dataset

logger = logging.getLogger(__name__)


def _coerce[E: StrEnum](enum_cls: type[E], value: E | str) -> E:
    try:
        return enum_cls(value)
    except ValueError as exc:
        choices = ", ".join(member.value for member in enum_cls)
        raise InvalidParameter(
            f"Unknown {enum_cls.__name__} {value!r}, expected one of: {choices}"
        ) from exc


@dataclass(frozen=True, slots=True)
class ShapeParameters:
    """Current parameters of both theoretical distributions."""

    mean: float = 0.0
    std_dev: float = 1.0
    rate: float = 1.0

    @classmethod
    def defaults(cls, config: EngineConfig) -> ShapeParameters:
        return cls(config.default_mean, config.default_std_dev, config.default_rate)


@dataclass(frozen=True, slots=True, eq=False)
class SessionState:
    """Immutable snapshot of everything a renderer needs."""

    dataset: Dataset
    histogram: Histogram
    parameters: ShapeParameters
    kind: DistributionKind
    parameter_step: float
    normal_curve: CurvePoints
    exponential_curve: CurvePoints
    verdict: NormalityVerdict

    @property
    def bin_count(self) -> int:
        return self.histogram.requested_bin_count

    @property
    def active_curve(self) -> CurvePoints:
        if self.kind is DistributionKind.NORMAL:
            return self.normal_curve
        return self.exponential_curve


@dataclass(frozen=True, slots=True)
class AxisLimits:
    x_min: float
    x_max: float
    y_min: float
    y_max: float


@dataclass(frozen=True, slots=True)
class DatasetSummary:
    source: str
    size: int
    minimum: float
    maximum: float
    mean: float
    variance: float


@dataclass(frozen=True, slots=True, eq=False)
class SessionView:
    """
    Read-only outputs for the presentation layer.

    Holds references to the arrays of the snapshot it was taken from; they
    are never mutated, so a renderer may keep the view between refreshes.
    """

    summary: DatasetSummary
    histogram: Histogram
    active_curve: CurvePoints
    normal_curve: CurvePoints
    exponential_curve: CurvePoints
    parameters: ShapeParameters
    kind: DistributionKind
    bin_count: int
    parameter_step: float
    verdict: NormalityVerdict

    @property
    def is_normal(self) -> bool:
        return self.verdict.is_normal

    def axis_limits(self) -> AxisLimits:
        """World extents covering the histogram and the active curve."""
        x_min = min(self.summary.minimum, float(self.active_curve.x.min()))
        x_max = max(self.summary.maximum, float(self.active_curve.x.max()))
        if x_min == x_max:
            x_min, x_max = x_min - 0.5, x_max + 0.5
        y_max = max(self.histogram.max_density, self.active_curve.max_y)
        return AxisLimits(x_min, x_max, 0.0, y_max)

    def annotation_lines(self) -> list[str]:
        """Text overlay: file, range, intervals, parameters and verdict."""
        if self.kind is DistributionKind.NORMAL:
            params = f"Mean: {self.parameters.mean:.2f}, Std Dev: {self.parameters.std_dev:.2f}"
        else:
            params = f"Rate: {self.parameters.rate:.2f}"
        return [
            f"File Name: {self.summary.source}",
            f"Minimum: {self.summary.minimum:.4f}",
            f"Maximum: {self.summary.maximum:.4f}",
            f"Number of Intervals: {self.bin_count}",
            f"Distribution: {self.kind.value.capitalize()} ({params})",
            f"Parameter Step: {self.parameter_step:g}",
            f"Data is {self.verdict.label}",
        ]


class Session:
    """
    Interactive engine state.

    Parameters
    ----------
    config : EngineConfig, optional
        Engine defaults; :class:`EngineConfig` defaults when omitted.
    rng : numpy.random.Generator, optional
        Generator used for sampled curves. Seeded from ``config.seed`` when
        omitted.
    """

    def __init__(
        self, config: EngineConfig | None = None, rng: np.random.Generator | None = None
    ) -> None:
        self._config = EngineConfig() if config is None else config
        self._rng = np.random.default_rng(self._config.seed) if rng is None else rng
        self._curve_strategy = make_curve_strategy(self._config)
        self._state: SessionState | None = None

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def is_loaded(self) -> bool:
        return self._state is not None

    @property
    def state(self) -> SessionState:
        """
        Current snapshot.

        Raises
        ------
        NotReady
            Before the first successful load.
        """
        return self._require_state("read the session state")

    def _require_state(self, operation: str) -> SessionState:
        if self._state is None:
            raise NotReady(f"Cannot {operation}: no dataset has been loaded yet")
        return self._state

    def _normal_curve(self, parameters: ShapeParameters) -> CurvePoints:
        return compute_normal_curve(
            parameters.mean,
            parameters.std_dev,
            point_count=self._config.curve_point_count,
            strategy=self._curve_strategy,
            rng=self._rng,
        )

    def _exponential_curve(self, parameters: ShapeParameters) -> CurvePoints:
        return compute_exponential_curve(
            parameters.rate,
            point_count=self._config.curve_point_count,
            strategy=self._curve_strategy,
            rng=self._rng,
        )

    def _test(self, dataset: Dataset) -> NormalityVerdict:
        return jarque_bera_test(dataset, self._config.normality_threshold)

    def resolve_source(self, source: str | PathLike[str]) -> Path:
        """Path of a known dataset name, or ``source`` itself as a path."""
        if isinstance(source, str) and source in self._config.datasets:
            return self._config.datasets[source]
        return Path(source)

    def load(self, source: str | PathLike[str]) -> SessionState:
        """
        Load a dataset by known name or path and recompute everything.

        Raises
        ------
        FileUnavailable
            If the source cannot be read; the previous state is kept.
        MalformedInput
            If the source is not in the dataset format; the previous state is kept.
        """
        return self.load_dataset(read_dataset(self.resolve_source(source)))

    def load_dataset(self, dataset: Dataset) -> SessionState:
        """
        Install ``dataset`` and recompute histogram, curves and verdict.

        Shape parameters are reset to their defaults. The selected
        distribution, bin count and parameter step survive a reload.
        """
        previous = self._state
        if previous is None:
            bin_count = self._config.bin_count
            kind = DistributionKind.NORMAL
            step = self._config.parameter_step
        else:
            bin_count, kind, step = previous.bin_count, previous.kind, previous.parameter_step

        parameters = ShapeParameters.defaults(self._config)
        state = SessionState(
            dataset=dataset,
            histogram=build_histogram(dataset, bin_count),
            parameters=parameters,
            kind=kind,
            parameter_step=step,
            normal_curve=self._normal_curve(parameters),
            exponential_curve=self._exponential_curve(parameters),
            verdict=self._test(dataset),
        )
        self._state = state
        logger.info(
            "Session loaded %s: %d samples, %d bins, %s",
            dataset.source,
            dataset.size,
            bin_count,
            state.verdict.label,
        )
        return state

    def set_bin_count(self, bin_count: int) -> SessionState:
        """
        Rebuild the histogram with ``bin_count`` bins.

        Raises
        ------
        InvalidBinCount
            If ``bin_count`` is not a positive integer.
        """
        state = self._require_state("set the bin count")
        histogram = build_histogram(state.dataset, bin_count)
        self._state = replace(state, histogram=histogram)
        return self._state

    def adjust_parameter(
        self, direction: Direction | str, axis: Axis | str = Axis.LOCATION
    ) -> SessionState:
        """
        Nudge a shape parameter of the active distribution by one step.

        Normal: ``location`` moves the mean, ``spread`` the standard
        deviation. Exponential has a single parameter, so both axes move the
        rate. Only the active curve is regenerated; the normality test is
        rerun.

        Raises
        ------
        InvalidParameter
            If the nudge would make the standard deviation or rate
            non-positive; the state is left unchanged.
        """
        state = self._require_state("adjust a parameter")
        direction = _coerce(Direction, direction)
        axis = _coerce(Axis, axis)
        delta = direction.sign * state.parameter_step
        params = state.parameters

        if state.kind is DistributionKind.NORMAL:
            if axis is Axis.LOCATION:
                params = replace(params, mean=params.mean + delta)
            else:
                params = replace(params, std_dev=self._positive("std_dev", params.std_dev + delta))
            new_state = replace(state, parameters=params, normal_curve=self._normal_curve(params))
        else:
            params = replace(params, rate=self._positive("rate", params.rate + delta))
            new_state = replace(
                state, parameters=params, exponential_curve=self._exponential_curve(params)
            )

        self._state = replace(new_state, verdict=self._test(state.dataset))
        logger.debug("Adjusted %s %s by %+g: %s", state.kind, axis, delta, params)
        return self._state

    @staticmethod
    def _positive(name: str, value: float) -> float:
        if not value > 0.0:
            raise InvalidParameter(f"{name} must stay positive, step would make it {value:g}")
        return value

    def set_distribution_type(self, kind: DistributionKind | str) -> SessionState:
        """Select which precomputed curve is active; nothing is recomputed."""
        state = self._require_state("set the distribution type")
        self._state = replace(state, kind=_coerce(DistributionKind, kind))
        return self._state

    def set_parameter_step(self, step: float) -> SessionState:
        """
        Set the step used by :meth:`adjust_parameter`.

        Raises
        ------
        InvalidParameter
            If ``step`` is not a finite positive number.
        """
        state = self._require_state("set the parameter step")
        if isinstance(step, bool) or not isinstance(step, (int, float)):
            raise InvalidParameter(f"Parameter step must be a number, got {step!r}")
        if not (math.isfinite(step) and step > 0):
            raise InvalidParameter(f"Parameter step must be finite and positive, got {step}")
        self._state = replace(state, parameter_step=float(step))
        return self._state

    def view(self) -> SessionView:
        """
        Outputs for the presentation layer.

        Raises
        ------
        NotReady
            Before the first successful load.
        """
        state = self._require_state("render")
        dataset = state.dataset
        return SessionView(
            summary=DatasetSummary(
                source=dataset.source,
                size=dataset.size,
                minimum=dataset.minimum,
                maximum=dataset.maximum,
                mean=dataset.mean,
                variance=dataset.variance,
            ),
            histogram=state.histogram,
            active_curve=state.active_curve,
            normal_curve=state.normal_curve,
            exponential_curve=state.exponential_curve,
            parameters=state.parameters,
            kind=state.kind,
            bin_count=state.bin_count,
            parameter_step=state.parameter_step,
            verdict=state.verdict,
        )
