"""
Parametric families.

A :class:`ParametricFamily` bundles the parametrizations of one distribution
family with the analytical characteristics written against them and acts as
the factory of :class:`ParametricFamilyDistribution` instances.

Characteristics may be written against any parametrization. When a
parametrization has no form of its own for a characteristic, the base form is
evaluated on the converted parameters. Which parametrization serves which
characteristic is resolved once, when the family is created.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov, Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from functools import partial
from typing import TYPE_CHECKING, dataclass_transform

from pysatl_histfit.distributions.computation import AnalyticalComputation
from pysatl_histfit.distributions.strategies import (
    DefaultComputationStrategy,
    DefaultSamplingUnivariateStrategy,
)
from pysatl_histfit.errors import InvalidParameter
from pysatl_histfit.families.distribution import ParametricFamilyDistribution
from pysatl_histfit.families.parametrizations import parametrization as _register_parametrization

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from typing import Any

    from pysatl_histfit.distributions.strategies import ComputationStrategy, SamplingStrategy
    from pysatl_histfit.distributions.support import Support
    from pysatl_histfit.families.parametrizations import Parametrization
    from pysatl_histfit.types import (
        DistributionType,
        GenericCharacteristicName,
        ParametrizationName,
    )

    type CharacteristicForm = Callable[..., Any]
    type CharacteristicForms = dict[ParametrizationName, CharacteristicForm]
    type SupportResolver = Callable[[Parametrization], Support | None]


def _no_support(_parameters: Parametrization) -> None:
    return None


class ParametricFamily:
    """
    Distribution family with one or more parametrizations.

    Parameters
    ----------
    name : str
        Family name, the key in :class:`ParametricFamilyRegister`.
    distr_type : DistributionType
        Type shared by every member of the family.
    distr_parametrizations : list[str]
        Declared parametrization names; the first one is the base.
    distr_characteristics : Mapping
        Characteristic name to either a single function (written against the
        base parametrization) or a ``{parametrization name: function}`` dict.
        Functions are called as ``func(parameters, value, **options)``.
    sampling_strategy : SamplingStrategy, optional
        Defaults to inverse-transform sampling through ``ppf``.
    computation_strategy : ComputationStrategy, optional
        Defaults to analytical lookup.
    support_by_parametrization : Callable, optional
        Support of a member given its base parameters.
    """

    def __init__(
        self,
        name: str,
        distr_type: DistributionType,
        distr_parametrizations: list[ParametrizationName],
        distr_characteristics: Mapping[
            GenericCharacteristicName, CharacteristicForms | CharacteristicForm
        ],
        sampling_strategy: SamplingStrategy | None = None,
        computation_strategy: ComputationStrategy[Any, Any] | None = None,
        support_by_parametrization: SupportResolver | None = None,
    ):
        if not distr_parametrizations:
            raise ValueError(f"Family {name} must declare at least one parametrization.")

        self._name = name
        self.distr_type = distr_type
        self.parametrization_names: list[ParametrizationName] = list(distr_parametrizations)
        self.base_parametrization_name: ParametrizationName = self.parametrization_names[0]
        self.sampling_strategy = sampling_strategy or DefaultSamplingUnivariateStrategy()
        self.computation_strategy = computation_strategy or DefaultComputationStrategy()
        self._support_resolver: SupportResolver = support_by_parametrization or _no_support
        self._parametrizations: dict[ParametrizationName, type[Parametrization]] = {}

        base = self.base_parametrization_name
        self.distr_characteristics: dict[GenericCharacteristicName, CharacteristicForms] = {
            characteristic: forms if isinstance(forms, dict) else {base: forms}
            for characteristic, forms in distr_characteristics.items()
        }

        # parametrization -> characteristic -> parametrization whose form is used
        self._analytical_plan: dict[
            ParametrizationName, dict[GenericCharacteristicName, ParametrizationName]
        ] = {
            pname: {
                characteristic: pname if pname in forms else base
                for characteristic, forms in self.distr_characteristics.items()
                if pname in forms or base in forms
            }
            for pname in self.parametrization_names
        }

    @property
    def name(self) -> str:
        return self._name

    @property
    def parametrizations(self) -> dict[ParametrizationName, type[Parametrization]]:
        """Registered parametrization classes by name."""
        return self._parametrizations

    @property
    def base(self) -> type[Parametrization]:
        """
        Base parametrization class.

        Raises
        ------
        ValueError
            If the base parametrization has not been registered yet.
        """
        if self.base_parametrization_name not in self._parametrizations:
            raise ValueError(
                f"Base parametrization '{self.base_parametrization_name}' of {self.name} "
                "is not registered."
            )
        return self._parametrizations[self.base_parametrization_name]

    @property
    def support_resolver(self) -> SupportResolver:
        return self._support_resolver

    def register_parametrization(
        self, name: ParametrizationName, parametrization_class: type[Parametrization]
    ) -> None:
        """
        Attach ``parametrization_class`` under ``name``.

        Raises
        ------
        ValueError
            If ``name`` is not declared by the family or is already taken.
        """
        if name not in self.parametrization_names:
            raise ValueError(f"Parametrization '{name}' is not declared by family {self.name}.")
        if name in self._parametrizations:
            raise ValueError(f"Parametrization '{name}' is already registered.")
        self._parametrizations[name] = parametrization_class

    def get_parametrization(self, name: ParametrizationName) -> type[Parametrization]:
        """Registered class for ``name``; ``KeyError`` if unknown."""
        return self._parametrizations[name]

    def to_base(self, parameters: Parametrization) -> Parametrization:
        if parameters.name == self.base_parametrization_name:
            return parameters
        return parameters.transform_to_base_parametrization()

    def build_analytical_computations(
        self, parameters: Parametrization
    ) -> dict[GenericCharacteristicName, AnalyticalComputation[Any, Any]]:
        """Bind every characteristic available for ``parameters``."""
        converted: Parametrization | None = None
        bound: dict[GenericCharacteristicName, AnalyticalComputation[Any, Any]] = {}

        for characteristic, provider in self._analytical_plan.get(parameters.name, {}).items():
            if provider == parameters.name:
                arguments = parameters
            else:
                if converted is None:
                    converted = self.to_base(parameters)
                arguments = converted
            form = self.distr_characteristics[characteristic][provider]
            bound[characteristic] = AnalyticalComputation(
                target=characteristic, func=partial(form, arguments)
            )
        return bound

    def distribution(
        self, parametrization_name: ParametrizationName | None = None, **parameters_values: Any
    ) -> ParametricFamilyDistribution:
        """
        Create a validated member of the family.

        Parameters
        ----------
        parametrization_name : str, optional
            Parametrization of ``parameters_values``; the base one by default.
        **parameters_values
            Field values of the parametrization.

        Raises
        ------
        KeyError
            If ``parametrization_name`` is not registered.
        InvalidParameter
            If fields are missing or unexpected, or a constraint fails.
        """
        cls = (
            self.base
            if parametrization_name is None
            else self._parametrizations[parametrization_name]
        )
        try:
            parameters = cls(**parameters_values)
        except TypeError as exc:
            raise InvalidParameter(
                f"Bad parameters for {self.name}/{cls.__param_name__}: {exc}"
            ) from exc
        parameters.validate()

        support = self._support_resolver(self.to_base(parameters))
        return ParametricFamilyDistribution(self.name, self.distr_type, parameters, support)

    __call__ = distribution

    @dataclass_transform()
    def parametrization(
        self, *, name: ParametrizationName
    ) -> Callable[[type[Parametrization]], type[Parametrization]]:
        """Class decorator registering a parametrization of this family."""
        return _register_parametrization(family=self, name=name)
