"""
Members of parametric families.

A :class:`ParametricFamilyDistribution` is the value the curve generator
samples from and evaluates: a family name, validated parameters and the
support derived from them.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pysatl_histfit.distributions.distribution import Distribution
from pysatl_histfit.families.registry import ParametricFamilyRegister

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Any

    from pysatl_histfit.distributions.computation import AnalyticalComputation
    from pysatl_histfit.distributions.sampling import Sample
    from pysatl_histfit.distributions.strategies import ComputationStrategy, SamplingStrategy
    from pysatl_histfit.distributions.support import Support
    from pysatl_histfit.families.parametric_family import ParametricFamily
    from pysatl_histfit.families.parametrizations import Parametrization
    from pysatl_histfit.types import (
        DistributionType,
        GenericCharacteristicName,
    )


@dataclass(frozen=True, slots=True)
class ParametricFamilyDistribution(Distribution):
    """
    Immutable member of a registered family.

    Changing a parameter means building a new instance, e.g. with
    :func:`dataclasses.replace`; the analytical computations are bound lazily
    and cached per instance.

    Parameters
    ----------
    family_name : str
        Key of the family in :class:`ParametricFamilyRegister`.
    _distribution_type : DistributionType
        Type of the family.
    parameters : Parametrization
        Validated parameters in any registered parametrization.
    _support : Support or None
        Support resolved from the base parameters.
    """

    family_name: str
    _distribution_type: DistributionType
    parameters: Parametrization
    _support: Support | None
    _computations: dict[GenericCharacteristicName, AnalyticalComputation[Any, Any]] | None = (
        field(default=None, init=False, repr=False, compare=False)
    )

    @property
    def distribution_type(self) -> DistributionType:
        return self._distribution_type

    @property
    def family(self) -> ParametricFamily:
        return ParametricFamilyRegister.get(self.family_name)

    @property
    def parametrization_name(self) -> str:
        return self.parameters.name

    @property
    def parameter_values(self) -> dict[str, Any]:
        """Parameter values keyed by field name."""
        return self.parameters.parameters

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, AnalyticalComputation[Any, Any]]:
        if self._computations is None:
            # frozen: the cache slot is filled once, behind the dataclass guard
            object.__setattr__(
                self, "_computations", self.family.build_analytical_computations(self.parameters)
            )
        assert self._computations is not None
        return self._computations

    @property
    def sampling_strategy(self) -> SamplingStrategy:
        return self.family.sampling_strategy

    @property
    def computation_strategy(self) -> ComputationStrategy[Any, Any]:
        return self.family.computation_strategy

    @property
    def support(self) -> Support | None:
        return self._support

    def sample(self, n: int, **options: Any) -> Sample:
        """
        Draw ``n`` values with the family's sampling strategy.

        Options such as ``rng`` are passed through to the strategy.
        """
        return self.sampling_strategy.sample(n, distr=self, **options)
