"""Constants module for simple_query_builder.

This module contains the constant values and enumerations used throughout
the package. As Layer 0 in the architecture, it has no dependencies on
other simple_query_builder modules.
"""

from simple_query_builder.constants.sql import Connective, JoinType

__all__ = [
    "Connective",
    "JoinType",
]
