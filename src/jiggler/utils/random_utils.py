"""Random number generator utilities."""

from typing import Optional

import numpy as np


def create_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create a numpy random number generator.

    Centralizes RNG creation so every component can be handed the same
    seeded generator.

    Args:
        seed: Optional seed for reproducible random numbers

    Returns:
        NumPy Generator instance
    """
    return np.random.default_rng(seed)


def random_point(rng: np.random.Generator, width: int, height: int) -> tuple[int, int]:
    """Pick a uniformly random pixel in [0, width) x [0, height).

    Args:
        rng: NumPy random generator
        width: Screen width in pixels
        height: Screen height in pixels

    Returns:
        (x, y) tuple
    """
    return int(rng.integers(0, width)), int(rng.integers(0, height))
