"""
Process-wide register of parametric families.

The curve generator resolves families by name through
:class:`ParametricFamilyRegister`; the built-in ones are added by
:func:`~pysatl_histfit.families.configuration.configure_families_register`.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import ClassVar

    from pysatl_histfit.families.parametric_family import ParametricFamily


class ParametricFamilyRegister:
    """Singleton mapping of family names to :class:`ParametricFamily` objects."""

    _instance: ClassVar[ParametricFamilyRegister | None] = None
    _registered_families: dict[str, ParametricFamily]

    def __new__(cls) -> ParametricFamilyRegister:
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._registered_families = {}
            cls._instance = instance
        return cls._instance

    @classmethod
    def contains(cls, name: str) -> bool:
        return name in cls()._registered_families

    @classmethod
    def get(cls, name: str) -> ParametricFamily:
        """
        Family registered as ``name``.

        Raises
        ------
        ValueError
            If nothing is registered under ``name``.
        """
        families = cls()._registered_families
        if name not in families:
            known = ", ".join(cls.names()) or "none"
            raise ValueError(f"No family {name} found in register (known: {known})")
        return families[name]

    @classmethod
    def register(cls, family: ParametricFamily) -> None:
        """
        Add ``family`` under its name.

        Raises
        ------
        ValueError
            If the name is taken.
        """
        families = cls()._registered_families
        if family.name in families:
            raise ValueError(f"Family {family.name} already found in register")
        families[family.name] = family

    @classmethod
    def names(cls) -> list[str]:
        """Registered names in registration order."""
        return list(cls()._registered_families)

    @classmethod
    def _reset(cls) -> None:
        cls._instance = None
