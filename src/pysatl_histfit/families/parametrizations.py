"""
Parametrizations of distribution families.

A parametrization is a frozen dataclass naming the shape parameters of one
way to describe a family (``meanStd`` with ``mu`` and ``sigma``, ``rate``
with ``lambda_``...). Methods decorated with :func:`constraint` are checked
by :meth:`Parametrization.validate`; non-base parametrizations convert
themselves with :meth:`Parametrization.transform_to_base_parametrization`.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from abc import ABC
from dataclasses import dataclass, fields, is_dataclass
from inspect import isfunction
from typing import TYPE_CHECKING

from pysatl_histfit.errors import InvalidParameter

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any, ClassVar

    from pysatl_histfit.families.parametric_family import ParametricFamily
    from pysatl_histfit.types import ParametrizationName

_CONSTRAINT_ATTR = "_constraint_description"


@dataclass(slots=True, frozen=True)
class ParametrizationConstraint:
    """
    Named predicate over parameter values.

    Parameters
    ----------
    description : str
        Text shown when the predicate fails, e.g. ``"sigma > 0"``.
    check : Callable[[Any], bool]
        Called with the parametrization instance.
    """

    description: str
    check: Callable[[Any], bool]


class Parametrization(ABC):
    """
    Base class of all parametrizations.

    Subclasses are turned into frozen slotted dataclasses by
    :func:`parametrization`, which also attaches the owning family, the
    parametrization name and the collected constraints.
    """

    __family__: ClassVar[ParametricFamily]
    __param_name__: ClassVar[ParametrizationName]

    _constraints: ClassVar[tuple[ParametrizationConstraint, ...]] = ()

    @property
    def name(self) -> ParametrizationName:
        """Name the class was registered under."""
        return type(self).__param_name__

    @property
    def parameters(self) -> dict[str, Any]:
        """Field values keyed by field name, in declaration order."""
        return {f.name: getattr(self, f.name) for f in fields(self)}  # type: ignore[arg-type]

    @property
    def constraints(self) -> tuple[ParametrizationConstraint, ...]:
        return self._constraints

    def validate(self) -> None:
        """
        Check every constraint.

        Raises
        ------
        InvalidParameter
            Naming all violated constraints.
        """
        failed = [c.description for c in self._constraints if not c.check(self)]
        if failed:
            violated = ", ".join(f'"{d}"' for d in failed)
            raise InvalidParameter(
                f"{self.name}{self.parameters}: constraint {violated} does not hold"
            )

    def transform_to_base_parametrization(self) -> Parametrization:
        """Equivalent parameters in the base parametrization (identity by default)."""
        return self


def constraint[F: Callable[..., bool]](description: str) -> Callable[[F], F]:
    """
    Mark an instance method as a constraint described by ``description``.

    The method itself is returned unchanged.
    """

    def mark(func: F) -> F:
        setattr(func, _CONSTRAINT_ATTR, description)
        return func

    return mark


def _collect_constraints(cls: type) -> tuple[ParametrizationConstraint, ...]:
    collected: list[ParametrizationConstraint] = []
    for attr_name, attr in vars(cls).items():
        if isinstance(attr, (staticmethod, classmethod)):
            if hasattr(attr.__func__, _CONSTRAINT_ATTR):
                raise TypeError(f"@constraint '{attr_name}' must be an instance method")
        elif isfunction(attr) and hasattr(attr, _CONSTRAINT_ATTR):
            collected.append(ParametrizationConstraint(getattr(attr, _CONSTRAINT_ATTR), attr))
    return tuple(collected)


def parametrization(
    *,
    family: ParametricFamily,
    name: ParametrizationName,
) -> Callable[[type[Parametrization]], type[Parametrization]]:
    """
    Class decorator registering a parametrization with ``family``.

    Parameters
    ----------
    family : ParametricFamily
        Owner of the parametrization.
    name : str
        Name declared by ``family``.

    Raises
    ------
    TypeError
        If a static or class method is marked with :func:`constraint`.
    ValueError
        If ``family`` does not declare ``name`` or already has it registered.
    """

    def register(cls: type[Parametrization]) -> type[Parametrization]:
        constraints = _collect_constraints(cls)
        if not is_dataclass(cls):
            cls = dataclass(slots=True, frozen=True)(cls)
        cls.__family__ = family
        cls.__param_name__ = name
        cls._constraints = constraints
        family.register_parametrization(name, cls)
        return cls

    return register
