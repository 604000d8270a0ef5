"""
Tests for Normal Distribution Family

This module tests the normal family: parameterizations, characteristics,
the curve density drawn over histograms and sampling.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import math

import numpy as np
import pytest
from scipy.stats import norm

from pysatl_histfit.distributions.support import ContinuousSupport
from pysatl_histfit.errors import InvalidParameter
from pysatl_histfit.families.configuration import configure_families_register
from pysatl_histfit.types import (
    CharacteristicName,
    FamilyName,
    UnivariateContinuous,
)
from tests.unit.base import BaseDistributionTest


class TestNormalFamily(BaseDistributionTest):
    """Normal family against scipy.stats.norm."""

    def setup_method(self):
        """Fresh register for every test."""
        registry = configure_families_register()
        self.normal_family = registry.get(FamilyName.NORMAL)
        self.normal_dist_example = self.normal_family(mu=2.0, sigma=1.5)

    def test_family_properties(self):
        """Name, parametrizations and base."""
        assert self.normal_family.name == FamilyName.NORMAL
        assert self.normal_family.parametrization_names == ["meanStd", "meanPrec"]
        assert self.normal_family.base_parametrization_name == "meanStd"

    def test_mean_std_parametrization_creation(self):
        """Base (meanStd) parametrization."""
        dist = self.normal_family(mu=2.0, sigma=1.5)

        assert dist.family_name == FamilyName.NORMAL
        assert dist.distribution_type == UnivariateContinuous
        assert dist.parameter_values == {"mu": 2.0, "sigma": 1.5}
        assert dist.distribution_type.features == {"kind": "continuous", "dimension": 1}
        assert dist.parametrization_name == "meanStd"

    def test_mean_prec_parametrization_creation(self):
        """meanPrec converts to sigma = 1/sqrt(tau)."""
        dist = self.normal_family(mu=1.0, tau=0.25, parametrization_name="meanPrec")

        assert dist.parameter_values == {"mu": 1.0, "tau": 0.25}
        base = self.normal_family.to_base(dist.parameters)
        assert base.parameters["sigma"] == pytest.approx(2.0)
        assert dist.calculate_characteristic(CharacteristicName.VAR, None) == pytest.approx(4.0)

    @pytest.mark.parametrize(
        "params, message",
        [
            ({"mu": 0.0, "sigma": 0.0}, "sigma > 0"),
            ({"mu": 0.0, "sigma": -1.0}, "sigma > 0"),
            ({"mu": math.inf, "sigma": 1.0}, "mu is finite"),
            ({"mu": 0.0, "sigma": math.nan}, "sigma > 0"),
        ],
    )
    def test_parametrization_constraints(self, params, message):
        """Non-positive rate or scale is rejected."""
        with pytest.raises(InvalidParameter, match=message):
            self.normal_family(**params)

    def test_moments(self):
        """Closed-form moments for λ = 0.5."""
        dist = self.normal_dist_example

        assert dist.calculate_characteristic(CharacteristicName.MEAN, None) == pytest.approx(2.0)
        assert dist.calculate_characteristic(CharacteristicName.VAR, None) == pytest.approx(2.25)
        assert dist.calculate_characteristic(CharacteristicName.SKEW, None) == 0.0

        kurt_func = dist.query_method(CharacteristicName.KURT)
        assert kurt_func(None) == pytest.approx(3.0)
        assert kurt_func(None, excess=True) == pytest.approx(0.0)

    @pytest.mark.parametrize(
        "char_name, test_data, scipy_func",
        [
            (CharacteristicName.PDF, [-3.0, 0.0, 1.0, 2.0, 3.5, 8.0], norm.pdf),
            (CharacteristicName.CDF, [-3.0, 0.0, 1.0, 2.0, 3.5, 8.0], norm.cdf),
            (CharacteristicName.PPF, [0.001, 0.1, 0.25, 0.5, 0.75, 0.9, 0.999], norm.ppf),
        ],
    )
    def test_array_input_for_characteristics(self, char_name, test_data, scipy_func):
        """Vectorized characteristics agree with scipy.stats.expon."""
        char_func = self.normal_dist_example.query_method(char_name)

        input_array = np.array(test_data)
        result_array = char_func(input_array)

        assert result_array.shape == input_array.shape
        self.assert_arrays_almost_equal(
            result_array, scipy_func(input_array, loc=2.0, scale=1.5), precision=1e-8
        )

    def test_curve_density_divides_by_sigma_not_sigma_squared(self):
        """The drawn curve is exp(-(x-μ)²/(2σ))/√(2π), without a 1/σ factor."""
        dist = self.normal_family(mu=1.0, sigma=4.0)
        x = np.array([-3.0, 1.0, 5.0])

        result = dist.calculate_characteristic(CharacteristicName.CURVE_DENSITY, x)
        expected = np.exp(-((x - 1.0) ** 2) / 8.0) / np.sqrt(2 * np.pi)

        self.assert_arrays_almost_equal(result, expected, precision=1e-12)
        assert result[1] == pytest.approx(0.3989422804, rel=1e-9)

    def test_curve_density_matches_pdf_for_unit_sigma(self):
        """With σ = 1 the drawn curve and the textbook density coincide."""
        dist = self.normal_family(mu=-0.5, sigma=1.0)
        x = np.linspace(-4.0, 4.0, 17)

        self.assert_arrays_almost_equal(
            dist.calculate_characteristic(CharacteristicName.CURVE_DENSITY, x),
            dist.calculate_characteristic(CharacteristicName.PDF, x),
            precision=1e-12,
        )

    def test_normal_support(self):
        """Normal support is the whole real line."""
        support = self.normal_dist_example.support

        assert isinstance(support, ContinuousSupport)
        assert support.left == -np.inf
        assert support.right == np.inf
        assert -1e300 in support

    def test_ppf_bounds(self):
        """PPF maps 0 and 1 to the infinite endpoints and rejects the rest."""
        ppf = self.normal_dist_example.query_method(CharacteristicName.PPF)

        assert ppf(0.0) == -np.inf
        assert ppf(1.0) == np.inf
        with pytest.raises(ValueError, match="Probability must be in"):
            ppf(np.array([0.5, 1.5]))

    def test_sampling_is_reproducible(self):
        """Equal generators give equal samples."""
        first = self.normal_dist_example.sample(50, rng=np.random.default_rng(3))
        second = self.normal_dist_example.sample(50, rng=np.random.default_rng(3))

        np.testing.assert_array_equal(first.array, second.array)

    def test_sampling_moments(self):
        """Inverse-transform samples follow the distribution."""
        sample = self.normal_dist_example.sample(5000, rng=np.random.default_rng(7))
        values = sample.array[:, 0]

        assert np.all(np.isfinite(values))
        assert float(values.mean()) == pytest.approx(2.0, abs=0.1)
        assert float(values.std()) == pytest.approx(1.5, rel=0.05)
