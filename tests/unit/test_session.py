from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest

from pysatl_histfit.config import EngineConfig
from pysatl_histfit.data import Dataset
from pysatl_histfit.errors import (
    FileUnavailable,
    InvalidBinCount,
    InvalidParameter,
    MalformedInput,
    NotReady,
)
from pysatl_histfit.session import Session, ShapeParameters
from pysatl_histfit.types import Axis, Direction, DistributionKind


@pytest.fixture
def session() -> Session:
    return Session(EngineConfig(seed=1234))


@pytest.fixture
def loaded(session: Session, write_dataset) -> Session:
    session.load(write_dataset([1.0, 2.0, 3.0, 4.0]))
    return session


class TestUninitialized:
    @pytest.mark.parametrize(
        "operation",
        [
            lambda s: s.state,
            lambda s: s.view(),
            lambda s: s.set_bin_count(40),
            lambda s: s.adjust_parameter(Direction.INCREASE),
            lambda s: s.set_distribution_type(DistributionKind.EXPONENTIAL),
            lambda s: s.set_parameter_step(0.01),
        ],
        ids=["state", "view", "bins", "adjust", "kind", "step"],
    )
    def test_operations_need_a_dataset(self, session: Session, operation) -> None:
        assert not session.is_loaded
        with pytest.raises(NotReady, match="no dataset has been loaded"):
            operation(session)

    def test_failed_first_load_stays_uninitialized(self, session: Session, tmp_path) -> None:
        with pytest.raises(FileUnavailable):
            session.load(tmp_path / "missing.txt")

        assert not session.is_loaded


class TestLoad:
    def test_load_by_path(self, session: Session, write_dataset) -> None:
        state = session.load(write_dataset([1.0, 2.0, 3.0, 4.0], name="four.txt"))

        assert session.is_loaded
        assert session.state is state
        assert state.dataset.source == "four.txt"
        assert state.bin_count == 30
        assert state.histogram.sample_count == 4
        assert state.kind is DistributionKind.NORMAL
        assert state.parameter_step == 0.05
        assert state.parameters == ShapeParameters(0.0, 1.0, 1.0)
        assert len(state.normal_curve) == len(state.exponential_curve) == 100
        assert state.verdict.is_normal

    def test_load_by_known_name(self, write_dataset) -> None:
        path = write_dataset([0.5, 1.5, 2.5], name="small.txt")
        session = Session(EngineConfig(datasets={"small": path}, seed=0))

        assert session.resolve_source("small") == path
        assert session.load("small").dataset.source == "small.txt"

    def test_unknown_name_is_treated_as_a_path(self, session: Session, tmp_path) -> None:
        with pytest.raises(FileUnavailable, match="couldn't be opened"):
            session.load(str(tmp_path / "nope"))

    def test_failed_reload_keeps_previous_state(self, loaded: Session, tmp_path) -> None:
        before = loaded.state
        bad = tmp_path / "bad.txt"
        bad.write_text("3\n1.0 oops 2.0\n")

        with pytest.raises(MalformedInput):
            loaded.load(bad)
        with pytest.raises(FileUnavailable):
            loaded.load(tmp_path / "missing.txt")

        assert loaded.state is before

    def test_reload_keeps_settings_and_resets_parameters(
        self, loaded: Session, write_dataset
    ) -> None:
        loaded.set_bin_count(7)
        loaded.set_distribution_type("exponential")
        loaded.set_parameter_step(0.02)
        loaded.adjust_parameter("increase")

        state = loaded.load(write_dataset([5.0, 6.0, 9.0], name="other.txt"))

        assert state.dataset.source == "other.txt"
        assert state.bin_count == 7
        assert state.histogram.bin_count == 7
        assert state.kind is DistributionKind.EXPONENTIAL
        assert state.parameter_step == 0.02
        assert state.parameters == ShapeParameters(0.0, 1.0, 1.0)

    def test_load_dataset_directly(self, session: Session) -> None:
        state = session.load_dataset(Dataset.from_values([3.0, 3.0, 3.0], source="flat"))

        assert state.histogram.is_degenerate
        assert state.verdict.degenerate
        assert not state.verdict.is_normal

    def test_same_seed_same_curves(self, write_dataset) -> None:
        path = write_dataset([1.0, 2.0, 3.0, 4.0])
        first = Session(EngineConfig(seed=99)).load(path)
        second = Session(EngineConfig(seed=99)).load(path)

        np.testing.assert_array_equal(first.normal_curve.x, second.normal_curve.x)
        np.testing.assert_array_equal(first.exponential_curve.x, second.exponential_curve.x)


class TestBinCount:
    def test_only_the_histogram_changes(self, loaded: Session) -> None:
        before = loaded.state

        after = loaded.set_bin_count(3)

        assert after.bin_count == 3
        assert after.histogram.bin_count == 3
        assert after.histogram is not before.histogram
        assert after.dataset is before.dataset
        assert after.normal_curve is before.normal_curve
        assert after.exponential_curve is before.exponential_curve
        assert after.verdict is before.verdict

    @pytest.mark.parametrize("bin_count", [0, -5, 2.5, True])
    def test_invalid_bin_count_keeps_state(self, loaded: Session, bin_count) -> None:
        before = loaded.state

        with pytest.raises(InvalidBinCount):
            loaded.set_bin_count(bin_count)

        assert loaded.state is before


class TestAdjustParameter:
    def test_location_moves_the_mean(self, loaded: Session) -> None:
        before = loaded.state

        after = loaded.adjust_parameter(Direction.INCREASE, Axis.LOCATION)

        assert after.parameters.mean == pytest.approx(0.05)
        assert after.parameters.std_dev == 1.0
        assert after.normal_curve is not before.normal_curve
        assert after.normal_curve.parameters["mu"] == pytest.approx(0.05)
        assert after.exponential_curve is before.exponential_curve

    def test_increase_then_decrease_restores_parameters(self, loaded: Session) -> None:
        loaded.adjust_parameter("increase", "spread")
        assert loaded.state.parameters.std_dev == pytest.approx(1.05)

        loaded.adjust_parameter("decrease", "spread")
        assert loaded.state.parameters.std_dev == pytest.approx(1.0)
        assert loaded.state.normal_curve.parameters["sigma"] == pytest.approx(1.0)

    def test_exponential_adjusts_the_rate_on_either_axis(self, loaded: Session) -> None:
        loaded.set_distribution_type(DistributionKind.EXPONENTIAL)
        normal_curve = loaded.state.normal_curve

        loaded.adjust_parameter(Direction.INCREASE, Axis.SPREAD)
        loaded.adjust_parameter(Direction.INCREASE, Axis.LOCATION)

        state = loaded.state
        assert state.parameters.rate == pytest.approx(1.10)
        assert state.parameters.mean == 0.0
        assert state.parameters.std_dev == 1.0
        assert state.exponential_curve.parameters["lambda_"] == pytest.approx(1.10)
        assert state.normal_curve is normal_curve

    def test_non_positive_spread_is_rejected(self, loaded: Session) -> None:
        loaded.set_parameter_step(1.0)
        before = loaded.state

        with pytest.raises(InvalidParameter, match="std_dev must stay positive"):
            loaded.adjust_parameter(Direction.DECREASE, Axis.SPREAD)

        assert loaded.state is before

    def test_tiny_positive_spread_is_accepted(self, loaded: Session) -> None:
        loaded.set_parameter_step(1.0 - 1e-13)

        state = loaded.adjust_parameter(Direction.DECREASE, Axis.SPREAD)

        assert 0.0 < state.parameters.std_dev < 1e-12
        assert state.normal_curve.parameters["sigma"] == state.parameters.std_dev

    def test_non_positive_rate_is_rejected(self, loaded: Session) -> None:
        loaded.set_distribution_type("exponential")
        loaded.set_parameter_step(2.0)

        with pytest.raises(InvalidParameter, match="rate must stay positive"):
            loaded.adjust_parameter("decrease")

        assert loaded.state.parameters.rate == 1.0

    def test_mean_may_become_negative(self, loaded: Session) -> None:
        loaded.set_parameter_step(3.0)

        assert loaded.adjust_parameter("decrease").parameters.mean == pytest.approx(-3.0)

    @pytest.mark.parametrize(
        "direction, axis", [("up", "location"), ("increase", "scale")], ids=["direction", "axis"]
    )
    def test_unknown_choices_are_rejected(self, loaded: Session, direction, axis) -> None:
        with pytest.raises(InvalidParameter, match="expected one of"):
            loaded.adjust_parameter(direction, axis)

    def test_verdict_is_kept_consistent_with_the_dataset(self, loaded: Session) -> None:
        before = loaded.state.verdict

        after = loaded.adjust_parameter(Direction.INCREASE).verdict

        assert after.is_normal == before.is_normal
        assert after.statistic == before.statistic


class TestDistributionTypeAndStep:
    def test_switching_kind_recomputes_nothing(self, loaded: Session) -> None:
        before = loaded.state

        after = loaded.set_distribution_type("exponential")

        assert after.kind is DistributionKind.EXPONENTIAL
        assert after.active_curve is before.exponential_curve
        assert after.normal_curve is before.normal_curve
        assert after.histogram is before.histogram

    def test_unknown_kind_is_rejected(self, loaded: Session) -> None:
        with pytest.raises(InvalidParameter, match="Unknown DistributionKind"):
            loaded.set_distribution_type("gamma")

    @pytest.mark.parametrize("step", [0.05, 0.02, 0.01, 0.5, 3])
    def test_any_positive_step_is_accepted(self, loaded: Session, step) -> None:
        assert loaded.set_parameter_step(step).parameter_step == float(step)

    @pytest.mark.parametrize("step", [0.0, -0.01, math.nan, math.inf, True, "0.1"])
    def test_invalid_step_is_rejected(self, loaded: Session, step) -> None:
        before = loaded.state

        with pytest.raises(InvalidParameter, match="Parameter step"):
            loaded.set_parameter_step(step)

        assert loaded.state is before


class TestView:
    def test_annotation_lines_for_normal(self, loaded: Session) -> None:
        assert loaded.view().annotation_lines() == [
            "File Name: data.txt",
            "Minimum: 1.0000",
            "Maximum: 4.0000",
            "Number of Intervals: 30",
            "Distribution: Normal (Mean: 0.00, Std Dev: 1.00)",
            "Parameter Step: 0.05",
            "Data is normal",
        ]

    def test_annotation_lines_for_exponential(self, loaded: Session) -> None:
        loaded.set_distribution_type("exponential")
        loaded.adjust_parameter("decrease")

        lines = loaded.view().annotation_lines()

        assert lines[4] == "Distribution: Exponential (Rate: 0.95)"

    def test_annotation_lines_for_degenerate_data(self, session: Session) -> None:
        session.load_dataset(Dataset.from_values([2.0] * 5, source="flat.txt"))

        view = session.view()

        assert not view.is_normal
        assert view.annotation_lines()[-1] == "Data is not normal"

    def test_view_reflects_the_state(self, loaded: Session) -> None:
        state = loaded.state
        view = loaded.view()

        assert view.summary.source == "data.txt"
        assert view.summary.size == 4
        assert view.summary.mean == pytest.approx(2.5)
        assert view.summary.variance == pytest.approx(1.25)
        assert view.histogram is state.histogram
        assert view.active_curve is state.normal_curve
        assert view.bin_count == 30
        assert view.is_normal

    def test_axis_limits_cover_histogram_and_active_curve(self, loaded: Session) -> None:
        view = loaded.view()
        limits = view.axis_limits()

        assert limits.x_min <= min(1.0, float(view.active_curve.x.min()))
        assert limits.x_max >= max(4.0, float(view.active_curve.x.max()))
        assert limits.y_min == 0.0
        assert limits.y_max >= view.histogram.max_density
        assert limits.y_max >= view.active_curve.max_y

    def test_axis_limits_widen_a_single_point(self) -> None:
        session = Session(
            EngineConfig(curve_point_count=1, curve_strategy="grid", grid_domain=(0.0, 1.0))
        )
        session.load_dataset(Dataset.from_values([0.0]))

        limits = session.view().axis_limits()

        # histogram and curve both sit at x = 0
        assert (limits.x_min, limits.x_max) == (-0.5, 0.5)

    def test_grid_strategy(self, write_dataset) -> None:
        session = Session(EngineConfig(curve_strategy="grid", grid_domain=(-2.0, 2.0)))
        state = session.load(write_dataset([1.0, 2.0]))

        np.testing.assert_allclose(state.normal_curve.x, np.linspace(-2.0, 2.0, 100))
        np.testing.assert_allclose(state.exponential_curve.x, np.linspace(0.0, 2.0, 100))
