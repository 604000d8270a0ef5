"""
Built-in distribution families.

Families available by default for theoretical curves.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_histfit.families.builtins.continuous import (
    configure_exponential_family,
    configure_normal_family,
)

__all__ = [
    "configure_normal_family",
    "configure_exponential_family",
]
