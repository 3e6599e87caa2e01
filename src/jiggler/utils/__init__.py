"""Shared utility functions.

This module provides common utilities used across the codebase,
with no dependencies on business logic to prevent circular imports.
"""

from .random_utils import create_rng, random_point
from .math_utils import clamp, distance

__all__ = [
    "create_rng",
    "random_point",
    "clamp",
    "distance",
]
