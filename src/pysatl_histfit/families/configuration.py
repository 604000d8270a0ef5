"""
Built-in family registration.

:func:`configure_families_register` adds the Normal and Exponential families
to :class:`ParametricFamilyRegister` on first use and returns the register.
The call is cached; :func:`reset_families_register` drops both the cache and
the register so the next call starts from scratch.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from functools import lru_cache

from pysatl_histfit.families.builtins import (
    configure_exponential_family,
    configure_normal_family,
)
from pysatl_histfit.families.registry import ParametricFamilyRegister


@lru_cache(maxsize=1)
def configure_families_register() -> ParametricFamilyRegister:
    """Register the built-in families once and return the register."""
    configure_normal_family()
    configure_exponential_family()
    return ParametricFamilyRegister()


def reset_families_register() -> None:
    configure_families_register.cache_clear()
    ParametricFamilyRegister._reset()
